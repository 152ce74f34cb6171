"""Error hierarchy for mqstrip."""

from __future__ import annotations

from dataclasses import dataclass


class StripperError(Exception):
    """Base error for all mqstrip errors."""


class ConfigError(StripperError):
    """Raised when run options are missing or invalid.

    Always raised before any file is read or written.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Missing required option: {field}")


@dataclass(frozen=True)
class FileFailure:
    """A single failed unit of work: the path involved and what went wrong."""

    path: str
    error: BaseException

    def __str__(self) -> str:
        return f"{self.path}: {self.error}"


class PhaseError(StripperError):
    """Raised when a run phase could not complete.

    ``failures`` holds every per-file failure in configured file order.
    """

    def __init__(self, phase: str, failures: list[FileFailure]) -> None:
        self.phase = phase
        self.failures = failures
        details = "; ".join(str(f) for f in failures)
        super().__init__(
            f"{phase} phase failed for {len(failures)} file(s): {details}"
        )

    @property
    def first(self) -> FileFailure | None:
        return self.failures[0] if self.failures else None
