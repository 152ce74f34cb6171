"""Stripper orchestrator: drives the combined-extract and stripped-files phases."""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any, Callable, Mapping, NoReturn, TypeVar

from mqstrip.cache import ParseCache
from mqstrip.classify import matching_media, stripped_content
from mqstrip.config import RunConfiguration, resolve_configuration
from mqstrip.errors import FileFailure, PhaseError
from mqstrip.events import types as events
from mqstrip.events.bus import EventBus
from mqstrip.engine.report import CombinedResult, FileResult, Phase, RunReport
from mqstrip.files import stripped_path
from mqstrip.model.node import count_rules
from mqstrip.stylesheet import serialize_nodes

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Stripper:
    """Splits breakpoint media queries out of a set of CSS files.

    A run has two phases. The combined-extract phase collects every media
    block matching the configured widths from all sources and writes them to
    ``config.dest``. The stripped-files phase then writes each source with
    those blocks removed, reusing the parses cached during the first phase.
    Per-file work in both phases runs concurrently on a thread pool.
    """

    def __init__(
        self,
        config: RunConfiguration,
        *,
        cache: ParseCache | None = None,
        event_bus: EventBus | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.config = config
        self.cache = cache if cache is not None else ParseCache(encoding=config.encoding)
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self._max_workers = max_workers

    @classmethod
    def from_options(cls, options: Mapping[str, Any], **kwargs: Any) -> Stripper:
        """Resolve raw options into a configuration and build a Stripper.

        Raises :class:`~mqstrip.errors.ConfigError` before touching any file.
        """
        return cls(resolve_configuration(options), **kwargs)

    # --- run -----------------------------------------------------------------

    def run(self) -> RunReport:
        """Run both phases in order and return what was written."""
        self.event_bus.emit(
            events.RunStarted(files=self.config.files, dest=self.config.dest)
        )
        combined = self.extract_media_queries()
        stripped = self.write_stripped_files()
        report = RunReport(combined=combined, stripped=stripped)
        self.event_bus.emit(events.RunCompleted(report=report))
        return report

    # --- phase 1 -------------------------------------------------------------

    def extract_media_queries(self) -> CombinedResult:
        """Write every matching media block from all sources to ``config.dest``.

        Blocks are joined in configured file order. Any read, parse or write
        failure aborts the phase with :class:`PhaseError`.
        """
        phase = Phase.EXTRACT.value
        self.event_bus.emit(events.PhaseStarted(phase=phase))

        results = self._fan_out(phase, self._extract_file)
        combined_css = "\n".join(css for css, _ in results.values())

        try:
            self._write(self.config.dest, combined_css)
        except (OSError, UnicodeError) as exc:
            logger.error("Cannot write %s: %s", self.config.dest, exc)
            self.event_bus.emit(
                events.FileFailed(phase=phase, path=self.config.dest, error=str(exc))
            )
            self._fail(phase, [FileFailure(path=self.config.dest, error=exc)])

        self.event_bus.emit(events.FileWritten(phase=phase, path=self.config.dest))
        self.event_bus.emit(events.PhaseCompleted(phase=phase))
        return CombinedResult(
            dest=self.config.dest,
            rule_counts={path: count for path, (_, count) in results.items()},
        )

    def _extract_file(self, path: str) -> tuple[str, int]:
        stylesheet = self.cache.get(path)
        nodes = matching_media(self.config.widths, stylesheet.nodes)
        count = count_rules(nodes)
        logger.info("%d media rule(s) found in %s for the combined file", count, path)
        self.event_bus.emit(
            events.FileClassified(phase=Phase.EXTRACT.value, path=path, rule_count=count)
        )
        return serialize_nodes(nodes), count

    # --- phase 2 -------------------------------------------------------------

    def write_stripped_files(self) -> list[FileResult]:
        """Write the stripped version of every source file.

        Every file is attempted even when others fail. Failures are logged
        and raised together as a single :class:`PhaseError` at the end.
        """
        phase = Phase.STRIP.value
        self.event_bus.emit(events.PhaseStarted(phase=phase))
        results = self._fan_out(phase, self._strip_file)
        self.event_bus.emit(events.PhaseCompleted(phase=phase))
        return list(results.values())

    def _strip_file(self, path: str) -> FileResult:
        stylesheet = self.cache.get(path)
        nodes = stripped_content(self.config.widths, self.config.extract, stylesheet.nodes)
        count = count_rules(nodes)
        logger.info("%d rule(s) kept in %s", count, path)
        self.event_bus.emit(
            events.FileClassified(phase=Phase.STRIP.value, path=path, rule_count=count)
        )

        output = self.output_path(path)
        self._write(output, serialize_nodes(nodes))
        self.event_bus.emit(events.FileWritten(phase=Phase.STRIP.value, path=output))
        return FileResult(source=path, output=output, rule_count=count)

    def output_path(self, path: str) -> str:
        """Where the stripped version of *path* is written."""
        if self.config.override_original:
            return path
        return stripped_path(path, self.config.stripped_suffix)

    # --- helpers -------------------------------------------------------------

    def _fan_out(self, phase: str, work: Callable[[str], T]) -> dict[str, T]:
        """Run *work* for every source file concurrently.

        Returns results keyed by path in configured file order. Waits for all
        tasks before raising :class:`PhaseError` with every failure.
        """
        files = self.config.files
        workers = self._max_workers or max(len(files), 1)
        results: dict[str, T] = {}
        errors: dict[str, BaseException] = {}

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures: dict[Future[T], str] = {pool.submit(work, path): path for path in files}
            for future in as_completed(futures):
                path = futures[future]
                try:
                    results[path] = future.result()
                except Exception as exc:
                    logger.error("Failed to process %s: %s", path, exc)
                    self.event_bus.emit(
                        events.FileFailed(phase=phase, path=path, error=str(exc))
                    )
                    errors[path] = exc

        if errors:
            self._fail(
                phase,
                [FileFailure(path=p, error=errors[p]) for p in files if p in errors],
            )
        return {path: results[path] for path in files}

    def _fail(self, phase: str, failures: list[FileFailure]) -> NoReturn:
        error = PhaseError(phase, failures)
        self.event_bus.emit(events.PhaseFailed(phase=phase, error=str(error)))
        raise error from failures[0].error

    def _write(self, path: str, text: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding=self.config.encoding, newline="") as fh:
            fh.write(text)
