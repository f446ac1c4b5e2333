"""Shared fixtures for the vidlens test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from vidlens.extraction import MetadataExtractor
from vidlens.session import InspectorSession

SAMPLE_REPORT = "\n".join(
    [
        "{",
        '    "streams": [',
        "        {",
        '            "codec_name": "h264",',
        '            "width":1920,"height":1080,',
        '            "r_frame_rate": "25/1",',
        '            bit_rate: "8000000",',
        '            "max_bit_rate": "9000000",',
        "        }",
        "    ]",
        "}",
    ]
)


class FakeClock:
    """Manually advanced stand-in for ``time.monotonic``."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRunner:
    """Probe runner returning canned output and recording requested paths."""

    def __init__(self, output: str = SAMPLE_REPORT, on_run: Callable[[], None] | None = None):
        self.output = output
        self.on_run = on_run
        self.calls: list[str] = []

    def run(self, path: str) -> str:
        self.calls.append(path)
        if self.on_run is not None:
            self.on_run()
        return self.output


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def media_file(tmp_path: Path) -> Path:
    path = tmp_path / "holiday.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


@pytest.fixture
def session(runner: FakeRunner, clock: FakeClock) -> InspectorSession:
    return InspectorSession(MetadataExtractor(runner), notification_seconds=3.0, clock=clock)

