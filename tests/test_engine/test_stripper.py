"""Tests for the Stripper orchestrator."""

from __future__ import annotations

import time
from pathlib import Path

import pytest

from mqstrip.cache import ParseCache
from mqstrip.config import RunConfiguration
from mqstrip.engine import Phase, RunReport, Stripper
from mqstrip.errors import ConfigError, PhaseError
from mqstrip.events import types as events
from mqstrip.events.bus import EventBus
from mqstrip.stylesheet import parse_stylesheet

SCENARIO = ".x{color:red} @media (min-width:1200px){.y{color:blue}}"

EXTRACT_SOURCE = """.base{color:red}
@media (min-width: 300px){.one{color:blue}.two{color:green}}
@media (min-width: 1200px){.wide{color:black}}
"""


def _config(files, dest, **overrides) -> RunConfiguration:
    values = {
        "files": tuple(str(f) for f in files),
        "dest": str(dest),
        "widths": frozenset({"1200"}),
    }
    values.update(overrides)
    return RunConfiguration(**values)


def _read(path) -> str:
    return Path(path).read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Basic run
# ---------------------------------------------------------------------------


class TestRun:
    def test_concrete_scenario(self, write_css, tmp_path):
        source = write_css("a.css", SCENARIO)
        dest = tmp_path / "out.css"

        report = Stripper(_config([source], dest)).run()

        assert _read(dest) == "@media (min-width:1200px){.y{color:blue}}"
        assert _read(tmp_path / "a.stripped.css").strip() == ".x{color:red}"
        assert isinstance(report, RunReport)
        assert report.combined.rule_counts == {str(source): 1}
        assert report.stripped[0].output == str(tmp_path / "a.stripped.css")
        assert report.stripped[0].rule_count == 1

    def test_source_untouched_by_default(self, write_css, tmp_path):
        source = write_css("a.css", SCENARIO)
        Stripper(_config([source], tmp_path / "out.css")).run()
        assert _read(source) == SCENARIO

    def test_override_original(self, write_css, tmp_path):
        source = write_css("a.css", SCENARIO)
        report = Stripper(
            _config([source], tmp_path / "out.css", override_original=True)
        ).run()
        assert _read(source).strip() == ".x{color:red}"
        assert not (tmp_path / "a.stripped.css").exists()
        assert report.stripped[0].output == str(source)

    def test_custom_suffix(self, write_css, tmp_path):
        source = write_css("a.css", SCENARIO)
        Stripper(_config([source], tmp_path / "out.css", stripped_suffix="base")).run()
        assert (tmp_path / "a.base.css").exists()

    def test_dest_directory_created(self, write_css, tmp_path):
        source = write_css("a.css", SCENARIO)
        dest = tmp_path / "build" / "media" / "out.css"
        Stripper(_config([source], dest)).run()
        assert dest.exists()

    def test_report_outputs(self, write_css, tmp_path):
        source = write_css("a.css", SCENARIO)
        dest = tmp_path / "out.css"
        report = Stripper(_config([source], dest)).run()
        assert report.outputs == [str(dest), str(tmp_path / "a.stripped.css")]

    def test_empty_widths_round_trip(self, write_css, tmp_path):
        source = write_css("a.css", EXTRACT_SOURCE)
        Stripper(_config([source], tmp_path / "out.css", widths=frozenset())).run()
        assert _read(tmp_path / "a.stripped.css") == EXTRACT_SOURCE
        assert _read(tmp_path / "out.css") == ""

    def test_stripping_is_idempotent(self, write_css, tmp_path):
        source = write_css("a.css", EXTRACT_SOURCE)
        Stripper(_config([source], tmp_path / "out.css")).run()
        first = _read(tmp_path / "a.stripped.css")

        again = write_css("again.css", first)
        Stripper(_config([again], tmp_path / "out2.css")).run()
        assert _read(tmp_path / "again.stripped.css") == first
        assert _read(tmp_path / "out2.css") == ""


# ---------------------------------------------------------------------------
# Extract unwrap
# ---------------------------------------------------------------------------


class TestExtract:
    def test_children_promoted(self, write_css, tmp_path):
        source = write_css("a.css", EXTRACT_SOURCE)
        Stripper(
            _config([source], tmp_path / "out.css", extract=frozenset({"300"}))
        ).run()

        stripped = _read(tmp_path / "a.stripped.css")
        sheet = parse_stylesheet(stripped)
        assert sheet.media_blocks == []
        assert ".one{color:blue}" in stripped
        assert ".two{color:green}" in stripped
        assert "300px" not in stripped
        assert ".wide" not in stripped
        assert stripped.index(".base") < stripped.index(".one") < stripped.index(".two")

    def test_combined_file_unaffected(self, write_css, tmp_path):
        source = write_css("a.css", EXTRACT_SOURCE)
        Stripper(_config([source], tmp_path / "plain.css")).run()
        Stripper(
            _config([source], tmp_path / "extract.css", extract=frozenset({"300"}))
        ).run()
        assert _read(tmp_path / "plain.css") == _read(tmp_path / "extract.css")
        assert _read(tmp_path / "plain.css") == "@media (min-width: 1200px){.wide{color:black}}"


# ---------------------------------------------------------------------------
# Multiple files
# ---------------------------------------------------------------------------


class SlowFirstParser:
    """Parses the first configured file slowly so it completes last."""

    def __init__(self, slow_path: str) -> None:
        self.slow_path = slow_path

    def __call__(self, source: str, path: str):
        if path == self.slow_path:
            time.sleep(0.1)
        return parse_stylesheet(source, path)


class TestMultipleFiles:
    def test_injected_collaborators_are_used(self, write_css, tmp_path):
        source = write_css("a.css", SCENARIO)
        cache = ParseCache()
        bus = EventBus()
        stripper = Stripper(_config([source], tmp_path / "out.css"), cache=cache, event_bus=bus)
        assert stripper.cache is cache
        assert stripper.event_bus is bus

        stripper.run()

        assert str(source) in cache
        assert cache.parse_count == 1

    def test_combined_follows_file_order(self, write_css, tmp_path):
        b = write_css("b.css", "@media (max-width: 1200px){.b{color:red}}")
        a = write_css("a.css", "@media (max-width: 1200px){.a{color:red}}")
        dest = tmp_path / "out.css"
        cache = ParseCache(parser=SlowFirstParser(str(b)))

        Stripper(_config([b, a], dest), cache=cache).run()

        assert cache.parse_count == 2
        assert _read(dest) == (
            "@media (max-width: 1200px){.b{color:red}}\n"
            "@media (max-width: 1200px){.a{color:red}}"
        )

    def test_each_file_parsed_once(self, write_css, tmp_path):
        files = [write_css(f"{n}.css", SCENARIO) for n in "abc"]
        cache = ParseCache()
        Stripper(_config(files, tmp_path / "out.css"), cache=cache).run()
        assert cache.parse_count == 3

    def test_max_workers(self, write_css, tmp_path):
        files = [write_css(f"{n}.css", SCENARIO) for n in "abcd"]
        report = Stripper(_config(files, tmp_path / "out.css"), max_workers=1).run()
        assert [r.source for r in report.stripped] == [str(f) for f in files]


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    def test_from_options_rejects_missing_dest(self):
        with pytest.raises(ConfigError) as exc_info:
            Stripper.from_options({"widths": "1200", "src": "*.css"})
        assert exc_info.value.field == "dest"

    def test_from_options(self, write_css, tmp_path):
        write_css("a.css", SCENARIO)
        stripper = Stripper.from_options(
            {"src": str(tmp_path / "*.css"), "dest": str(tmp_path / "out.css"), "widths": 1200}
        )
        assert stripper.config.files == (str(tmp_path / "a.css"),)

    def test_missing_source_aborts_run(self, write_css, tmp_path):
        good = write_css("a.css", SCENARIO)
        dest = tmp_path / "out.css"
        with pytest.raises(PhaseError) as exc_info:
            Stripper(_config([good, tmp_path / "missing.css"], dest)).run()
        assert exc_info.value.phase == Phase.EXTRACT.value
        assert exc_info.value.first.path == str(tmp_path / "missing.css")
        assert not dest.exists()
        assert not (tmp_path / "a.stripped.css").exists()

    def test_combined_write_failure_aborts_run(self, write_css, tmp_path):
        source = write_css("a.css", SCENARIO)
        dest = tmp_path / "out.css"
        dest.mkdir()
        with pytest.raises(PhaseError) as exc_info:
            Stripper(_config([source], dest)).run()
        assert exc_info.value.phase == Phase.EXTRACT.value
        assert exc_info.value.first.path == str(dest)
        assert not (tmp_path / "a.stripped.css").exists()

    def test_stripped_write_failure_spares_siblings(self, write_css, tmp_path):
        a = write_css("a.css", SCENARIO)
        b = write_css("b.css", SCENARIO)
        (tmp_path / "a.stripped.css").mkdir()

        with pytest.raises(PhaseError) as exc_info:
            Stripper(_config([a, b], tmp_path / "out.css")).run()

        error = exc_info.value
        assert error.phase == Phase.STRIP.value
        assert [f.path for f in error.failures] == [str(a)]
        assert isinstance(error.__cause__, OSError)
        assert (tmp_path / "b.stripped.css").exists()
        assert (tmp_path / "out.css").exists()

    def test_combined_encode_failure_aborts_run(self, write_css, tmp_path):
        source = write_css("a.css", "@media (min-width: 1200px){.y::after{content:\"\u00e9\"}}")
        dest = tmp_path / "out.css"
        config = _config([source], dest, encoding="ascii")

        with pytest.raises(PhaseError) as exc_info:
            Stripper(config, cache=ParseCache(encoding="utf-8")).run()

        assert exc_info.value.phase == Phase.EXTRACT.value
        assert exc_info.value.first.path == str(dest)
        assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)
        assert not (tmp_path / "a.stripped.css").exists()

    def test_parse_error_reported(self, write_css, tmp_path):
        broken = write_css("broken.css", ".orphan")
        with pytest.raises(PhaseError, match="broken.css"):
            Stripper(_config([broken], tmp_path / "out.css")).run()


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class TestEvents:
    def test_lifecycle_order(self, write_css, tmp_path):
        source = write_css("a.css", SCENARIO)
        bus = EventBus()
        seen: list = []
        bus.on_all(seen.append)

        Stripper(_config([source], tmp_path / "out.css"), event_bus=bus).run()

        assert isinstance(seen[0], events.RunStarted)
        assert isinstance(seen[-1], events.RunCompleted)
        phases = [e.phase for e in seen if isinstance(e, events.PhaseStarted)]
        assert phases == ["extract", "strip"]

    def test_rule_counts_reported(self, write_css, tmp_path):
        source = write_css("a.css", SCENARIO)
        bus = EventBus()
        classified: list[events.FileClassified] = []
        bus.subscribe(events.FileClassified, classified.append)

        Stripper(_config([source], tmp_path / "out.css"), event_bus=bus).run()

        counts = {(e.phase, e.path): e.rule_count for e in classified}
        assert counts == {("extract", str(source)): 1, ("strip", str(source)): 1}

    def test_failure_events(self, write_css, tmp_path):
        a = write_css("a.css", SCENARIO)
        (tmp_path / "a.stripped.css").mkdir()
        bus = EventBus()
        seen: list = []
        bus.on_all(seen.append)

        with pytest.raises(PhaseError):
            Stripper(_config([a], tmp_path / "out.css"), event_bus=bus).run()

        failed = [e for e in seen if isinstance(e, events.FileFailed)]
        assert [e.path for e in failed] == [str(a)]
        assert any(isinstance(e, events.PhaseFailed) and e.phase == "strip" for e in seen)
        assert not any(isinstance(e, events.RunCompleted) for e in seen)
