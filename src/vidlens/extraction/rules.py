"""Ordered substring rules that map probe output to closed vocabularies.

Each table is a list of ``(predicate, label)`` pairs evaluated in order; the
first predicate that accepts the text decides the label. The heuristics are
deliberately loose: they look for tokens in the raw text rather than parsing
the probe's structured output.
"""

from __future__ import annotations

import math
import re
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .models import UNKNOWN

Predicate = Callable[[str], bool]
Rule = Tuple[Predicate, str]

_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def any_of(*tokens: str) -> Predicate:
    """Return a predicate accepting text that contains at least one token."""

    def _predicate(text: str) -> bool:
        return any(token in text for token in tokens)

    return _predicate


def all_of(*tokens: str) -> Predicate:
    """Return a predicate accepting text that contains every token."""

    def _predicate(text: str) -> bool:
        return all(token in text for token in tokens)

    return _predicate


CODEC_RULES: List[Rule] = [
    (any_of("h264"), "H.264"),
    (any_of("hevc", "h265"), "H.265"),
    (any_of("vp9"), "VP9"),
    (any_of("av01"), "AV1"),
    (any_of("hap"), "Hap"),
    (any_of("mjpeg"), "MJPEG"),
]

# Applied per line, and only to lines that pass RESOLUTION_LINE_FILTER.
RESOLUTION_LINE_FILTER: Predicate = all_of("width", "height")
RESOLUTION_RULES: List[Rule] = [
    (all_of("1920", "1080"), "1920x1080"),
    (all_of("1280", "720"), "1280x720"),
    (all_of("3840", "2160"), "3840x2160"),
]

FRAME_RATE_RULES: List[Rule] = [
    (any_of("25/1", '"25"'), "25"),
    (any_of("30/1", '"30"'), "30"),
    (any_of("24/1", '"24"'), "24"),
    (any_of("60/1", '"60"'), "60"),
]


def split_lines(output: str) -> List[str]:
    """Split on newlines only, dropping a trailing carriage return per line.

    Other Unicode line separators can appear inside tag values and are not
    line breaks in the probe report.
    """
    return [line[:-1] if line.endswith("\r") else line for line in output.split("\n")]


def first_match(rules: Sequence[Rule], text: str) -> Optional[str]:
    """Return the label of the first rule accepting ``text``, if any."""
    for predicate, label in rules:
        if predicate(text):
            return label
    return None


def extract_codec(output: str) -> str:
    """Return the codec label for the raw probe output."""
    return first_match(CODEC_RULES, output) or UNKNOWN


def extract_resolution(output: str) -> str:
    """Return the resolution label, looking only at single candidate lines.

    A line is a candidate when it mentions both ``width`` and ``height``.
    Dimensions split across lines never match.
    """
    for line in split_lines(output):
        if not RESOLUTION_LINE_FILTER(line):
            continue
        label = first_match(RESOLUTION_RULES, line)
        if label is not None:
            return label
    return UNKNOWN


def extract_frame_rate(output: str) -> str:
    """Return the frame rate label searching the whole output."""
    return first_match(FRAME_RATE_RULES, output) or UNKNOWN


def _bitrate_lines(lines: Iterable[str]) -> Iterable[str]:
    for line in lines:
        if "bit_rate" in line and "max_bit_rate" not in line:
            yield line


def parse_bitrate_line(line: str) -> str:
    """Return the Mbps label for a single ``bit_rate`` line.

    The value is the text between the first colon and the next comma, with
    quotes and surrounding whitespace removed.
    """
    colon = line.find(":")
    if colon < 0:
        return UNKNOWN
    comma = line.find(",", colon + 1)
    if comma < 0:
        return UNKNOWN

    candidate = line[colon + 1 : comma].replace('"', "").strip()
    if not _DECIMAL.fullmatch(candidate):
        return UNKNOWN
    bits_per_second = float(candidate)
    if not math.isfinite(bits_per_second):
        return UNKNOWN
    return f"{bits_per_second / 1_000_000:.1f}"


def extract_bitrate(output: str) -> str:
    """Return the bitrate label from the first qualifying ``bit_rate`` line."""
    for line in _bitrate_lines(split_lines(output)):
        return parse_bitrate_line(line)
    return UNKNOWN


__all__ = [
    "Rule",
    "any_of",
    "all_of",
    "CODEC_RULES",
    "RESOLUTION_LINE_FILTER",
    "RESOLUTION_RULES",
    "FRAME_RATE_RULES",
    "split_lines",
    "first_match",
    "extract_codec",
    "extract_resolution",
    "extract_frame_rate",
    "parse_bitrate_line",
    "extract_bitrate",
]
