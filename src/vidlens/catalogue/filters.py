"""Substring filters over media records."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, List, Sequence

from pydantic import BaseModel, ConfigDict

from vidlens.config.models import FilterPresets
from vidlens.extraction.models import MediaRecord


class FilterField(str, Enum):
    """Record fields that can be filtered on."""

    CONTAINER = "container"
    CODEC = "codec"
    RESOLUTION = "resolution"
    FRAME_RATE = "frame_rate"
    BITRATE = "bitrate"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    FilterField.CONTAINER: "Container",
    FilterField.CODEC: "Codec",
    FilterField.RESOLUTION: "Resolution",
    FilterField.FRAME_RATE: "FPS",
    FilterField.BITRATE: "Bitrate",
}


class FilterPredicate(BaseModel):
    """A single constraint: ``field`` must contain ``value``.

    Matching is by substring, so ``192`` matches ``1920x1080``.
    """

    model_config = ConfigDict(frozen=True)

    field: FilterField
    value: str

    def matches(self, record: MediaRecord) -> bool:
        return self.value in getattr(record, self.field.value)

    def describe(self) -> str:
        return f"{self.field.label} ~ {self.value}"


def view(
    records: Sequence[MediaRecord], predicates: Sequence[FilterPredicate]
) -> List[MediaRecord]:
    """Return the records satisfying every predicate, in catalogue order."""
    if not predicates:
        return list(records)
    return [record for record in records if all(p.matches(record) for p in predicates)]


class FilterSet:
    """Ordered, AND-combined set of active predicates."""

    def __init__(self, predicates: Iterable[FilterPredicate] = ()) -> None:
        self._predicates: List[FilterPredicate] = list(predicates)

    def __iter__(self) -> Iterator[FilterPredicate]:
        return iter(self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)

    def __contains__(self, predicate: object) -> bool:
        return predicate in self._predicates

    @property
    def predicates(self) -> tuple[FilterPredicate, ...]:
        return tuple(self._predicates)

    def add(self, predicate: FilterPredicate) -> None:
        self._predicates.append(predicate)

    def remove(self, predicate: FilterPredicate) -> bool:
        """Remove ``predicate`` if present; return whether anything changed."""
        try:
            self._predicates.remove(predicate)
        except ValueError:
            return False
        return True

    def toggle(self, predicate: FilterPredicate) -> bool:
        """Add ``predicate`` or remove it when already active.

        Returns:
            bool: True when the predicate is active afterwards.
        """
        if self.remove(predicate):
            return False
        self.add(predicate)
        return True

    def clear(self) -> None:
        self._predicates.clear()

    def apply(self, records: Sequence[MediaRecord]) -> List[MediaRecord]:
        return view(records, self._predicates)


def preset_options(presets: FilterPresets) -> List[FilterPredicate]:
    """Flatten preset values into predicates, grouped by field."""
    sources = (
        (FilterField.CONTAINER, presets.containers),
        (FilterField.CODEC, presets.codecs),
        (FilterField.RESOLUTION, presets.resolutions),
        (FilterField.FRAME_RATE, presets.frame_rates),
        (FilterField.BITRATE, presets.bitrates),
    )
    return [FilterPredicate(field=field, value=value) for field, values in sources for value in values]


__all__ = ["FilterField", "FilterPredicate", "FilterSet", "view", "preset_options"]
