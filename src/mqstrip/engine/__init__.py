"""Run orchestration: the Stripper and its result types."""

from mqstrip.engine.report import CombinedResult, FileResult, Phase, RunReport
from mqstrip.engine.stripper import Stripper

__all__ = ["CombinedResult", "FileResult", "Phase", "RunReport", "Stripper"]
