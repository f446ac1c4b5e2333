"""Interaction state machine tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import FakeClock, FakeRunner

from vidlens.catalogue import FilterField, FilterPredicate
from vidlens.config import VidlensConfig
from vidlens.extraction import MetadataExtractor, ProbeInvocationFailure
from vidlens.session import (
    NO_SELECTION,
    AddingFile,
    Browsing,
    InspectorSession,
    ViewingHelp,
    ViewingRawOutput,
)


def _add(session: InspectorSession, path: Path | str) -> None:
    session.handle_key("a")
    session.submit_path(str(path))


def _loaded(session: InspectorSession, media_file: Path, count: int) -> InspectorSession:
    for _ in range(count):
        _add(session, media_file)
    return session


def test_initial_state(session: InspectorSession) -> None:
    assert isinstance(session.mode, Browsing)
    assert session.cursor == 0
    assert session.tab == 0
    assert len(session.catalogue) == 0
    assert session.status() == "Ready - Press 'h' for help"
    assert session.exit_requested is False


def test_quit_only_from_browsing(session: InspectorSession) -> None:
    session.handle_key("h")
    session.handle_key("q")
    assert session.exit_requested is False

    session.handle_key("escape")
    session.handle_key("q")
    assert session.exit_requested is True


def test_add_file_success_appends_and_reports_duration(
    media_file: Path, clock: FakeClock
) -> None:
    runner = FakeRunner(on_run=lambda: clock.advance(1.234))
    session = InspectorSession(MetadataExtractor(runner), clock=clock)

    _add(session, media_file)

    assert isinstance(session.mode, Browsing)
    assert len(session.catalogue) == 1
    assert session.catalogue[0].codec == "H.264"
    assert session.status() == "File analyzed in 1.23s"
    assert runner.calls == [str(media_file)]


def test_add_missing_file_notifies_and_keeps_catalogue(
    session: InspectorSession, tmp_path: Path, runner: FakeRunner
) -> None:
    _add(session, tmp_path / "nope.mp4")

    assert isinstance(session.mode, Browsing)
    assert len(session.catalogue) == 0
    assert session.status() == "File does not exist"
    assert runner.calls == []


def test_add_file_probe_failure_becomes_notification(
    media_file: Path, clock: FakeClock
) -> None:
    class BrokenRunner:
        def run(self, path: str) -> str:
            raise ProbeInvocationFailure("Could not run ffprobe: not found")

    session = InspectorSession(MetadataExtractor(BrokenRunner()), clock=clock)

    _add(session, media_file)

    assert len(session.catalogue) == 0
    assert session.status() == "Error analyzing file: Could not run ffprobe: not found"


def test_submitting_empty_path_returns_to_browsing(
    session: InspectorSession, runner: FakeRunner
) -> None:
    session.handle_key("a")
    session.submit_path("")

    assert isinstance(session.mode, Browsing)
    assert runner.calls == []
    assert session.notification is None


def test_escape_cancels_prompt(session: InspectorSession, runner: FakeRunner) -> None:
    session.handle_key("a")
    assert isinstance(session.mode, AddingFile)

    session.handle_key("escape")

    assert isinstance(session.mode, Browsing)
    assert session.submit_path("/tmp/x.mp4") is None
    assert runner.calls == []


def test_command_keys_are_inert_while_prompting(session: InspectorSession) -> None:
    session.handle_key("a")
    for key in ("q", "c", "tab", "j", "enter", "r"):
        session.handle_key(key)

    assert isinstance(session.mode, AddingFile)
    assert session.exit_requested is False
    assert session.tab == 0


def test_selection_wraps_around(session: InspectorSession, media_file: Path) -> None:
    _loaded(session, media_file, 3)

    session.handle_key("k")
    assert session.cursor == 2
    session.handle_key("j")
    assert session.cursor == 0
    session.handle_key("down")
    session.handle_key("down")
    assert session.cursor == 2
    session.handle_key("down")
    assert session.cursor == 0
    session.handle_key("up")
    assert session.cursor == 2


def test_selection_noop_on_empty_view(session: InspectorSession) -> None:
    session.handle_key("j")
    session.handle_key("k")

    assert session.cursor == 0
    assert session.snapshot().selected is None


def test_selection_uses_filtered_view_length(
    session: InspectorSession, media_file: Path, tmp_path: Path, runner: FakeRunner
) -> None:
    _loaded(session, media_file, 2)
    other = tmp_path / "other.mkv"
    other.write_bytes(b"")
    runner.output = '"codec_name": "vp9"'
    _add(session, other)
    session.catalogue.filters.add(FilterPredicate(field=FilterField.CODEC, value="H.264"))

    session.handle_key("j")
    assert session.cursor == 1
    session.handle_key("j")
    assert session.cursor == 0


def test_clear_resets_everything(session: InspectorSession, media_file: Path) -> None:
    _loaded(session, media_file, 3)
    session.handle_key("j")
    session.handle_key("j")
    session.catalogue.filters.add(FilterPredicate(field=FilterField.CONTAINER, value="mp4"))

    session.handle_key("c")

    assert isinstance(session.mode, Browsing)
    assert session.view() == []
    assert len(session.catalogue.filters) == 0
    assert session.cursor == 0
    assert session.status() == "All files cleared"


def test_tab_cycles_modulo_three(session: InspectorSession) -> None:
    for expected in (1, 2, 0, 1):
        session.handle_key("tab")
        assert session.tab == expected


def test_raw_output_scrolling(session: InspectorSession, media_file: Path) -> None:
    _add(session, media_file)
    session.handle_key("r")
    assert isinstance(session.mode, ViewingRawOutput)
    assert session.mode.scroll == 0

    session.handle_key("up")
    assert session.mode.scroll == 0
    for _ in range(50):
        session.handle_key("down")
    assert session.mode.scroll == 50
    session.handle_key("up")
    assert session.mode.scroll == 49

    session.handle_key("j")
    assert session.cursor == 0

    session.handle_key("escape")
    assert isinstance(session.mode, Browsing)
    session.handle_key("r")
    assert isinstance(session.mode, ViewingRawOutput)
    assert session.mode.scroll == 0


def test_help_ignores_everything_but_escape(session: InspectorSession) -> None:
    session.handle_key("h")
    for key in ("a", "c", "tab", "enter", "j"):
        session.handle_key(key)
        assert isinstance(session.mode, ViewingHelp)
    assert session.tab == 0
    assert session.status() == "Help - Press Esc to return"

    session.handle_key("escape")
    assert isinstance(session.mode, Browsing)


def test_mode_default_status_messages(session: InspectorSession) -> None:
    session.handle_key("a")
    assert session.status() == "Enter file path..."
    session.handle_key("escape")
    session.handle_key("r")
    assert session.status() == "Viewing raw output - Press Esc to return"


def test_notification_expires_after_lifetime(session: InspectorSession, clock: FakeClock) -> None:
    session.notify("hello")

    clock.advance(3.0 - 0.01)
    assert session.status() == "hello"

    clock.advance(0.02)
    assert session.status() == "Ready - Press 'h' for help"
    assert session.notification is None


def test_snapshot_exposes_selected_raw_output(
    session: InspectorSession, media_file: Path, runner: FakeRunner
) -> None:
    assert session.snapshot().raw_output == NO_SELECTION

    _add(session, media_file)
    runner.output = "second report"
    _add(session, media_file)
    session.handle_key("j")
    session.handle_key("r")
    for _ in range(4):
        session.handle_key("down")

    snapshot = session.snapshot()

    assert snapshot.catalogue_size == 2
    assert len(snapshot.view) == 2
    assert snapshot.cursor == 1
    assert snapshot.raw_output == "second report"
    assert snapshot.scroll == 4


def test_filter_cursor_and_toggle(session: InspectorSession, media_file: Path) -> None:
    session.filter_options = [
        FilterPredicate(field=FilterField.CODEC, value="VP9"),
        FilterPredicate(field=FilterField.CODEC, value="H.264"),
    ]
    _loaded(session, media_file, 2)
    session.handle_key("j")

    session.handle_key("f")
    assert session.view() == []
    assert session.cursor == 0
    assert session.status() == "Filter added: Codec ~ VP9"

    session.handle_key("f")
    assert len(session.view()) == 2
    assert session.status() == "Filter removed: Codec ~ VP9"

    session.handle_key("[")
    assert session.filter_cursor == 1
    session.handle_key(" ")
    assert len(session.view()) == 2
    session.handle_key("]")
    assert session.filter_cursor == 0

    session.handle_key("x")
    assert len(session.catalogue.filters) == 0
    assert len(session.catalogue) == 2
    assert session.status() == "Filters cleared"


def test_toggle_without_options_is_noop(session: InspectorSession) -> None:
    session.handle_key("f")
    session.handle_key("]")

    assert session.notification is None
    assert session.filter_cursor == 0


def test_from_config_wires_presets_and_lifetime(clock: FakeClock) -> None:
    config = VidlensConfig.model_validate(
        {"ui": {"notification_seconds": 1.5}, "probe": {"binary": "/usr/local/bin/ffprobe"}}
    )

    session = InspectorSession.from_config(config, clock=clock)
    session.notify("short")
    clock.advance(1.6)

    assert session.status() == "Ready - Press 'h' for help"
    assert session.filter_options[0] == FilterPredicate(field=FilterField.CONTAINER, value="mp4")
    assert session.extractor.runner.binary == "/usr/local/bin/ffprobe"  # type: ignore[attr-defined]


@pytest.mark.parametrize("key", ["z", "enter", "escape", "left"])
def test_unbound_browsing_keys_are_ignored(session: InspectorSession, key: str) -> None:
    session.handle_key(key)

    assert isinstance(session.mode, Browsing)
    assert session.notification is None
