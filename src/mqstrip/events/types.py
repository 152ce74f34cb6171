"""Event types emitted during a run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mqstrip.engine.report import RunReport


@dataclass(frozen=True)
class RunStarted:
    files: tuple[str, ...]
    dest: str


@dataclass(frozen=True)
class RunCompleted:
    report: RunReport


@dataclass(frozen=True)
class PhaseStarted:
    phase: str


@dataclass(frozen=True)
class PhaseCompleted:
    phase: str


@dataclass(frozen=True)
class PhaseFailed:
    phase: str
    error: str


@dataclass(frozen=True)
class FileClassified:
    phase: str
    path: str
    rule_count: int


@dataclass(frozen=True)
class FileWritten:
    phase: str
    path: str


@dataclass(frozen=True)
class FileFailed:
    phase: str
    path: str
    error: str
