"""Run results: what each phase produced."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Phase(Enum):
    """The two phases of a run, in execution order."""

    EXTRACT = "extract"
    STRIP = "strip"


@dataclass(frozen=True)
class CombinedResult:
    """Outcome of the combined-extract phase.

    ``rule_counts`` maps each source file to the number of media blocks it
    contributed, in configured file order.
    """

    dest: str
    rule_counts: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.rule_counts.values())


@dataclass(frozen=True)
class FileResult:
    """A stripped file written during the stripped-files phase."""

    source: str
    output: str
    rule_count: int


@dataclass(frozen=True)
class RunReport:
    combined: CombinedResult
    stripped: list[FileResult] = field(default_factory=list)

    @property
    def outputs(self) -> list[str]:
        """Every path written during the run."""
        return [self.combined.dest] + [r.output for r in self.stripped]
