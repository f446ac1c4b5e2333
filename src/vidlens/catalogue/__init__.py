"""In-memory catalogue of analyzed media files."""

from __future__ import annotations

import logging
from typing import Iterator, List, overload

from vidlens.extraction.models import MediaRecord

from .filters import FilterField, FilterPredicate, FilterSet, preset_options, view
from .stats import CatalogueStats, summarize

LOGGER = logging.getLogger(__name__)


class Catalogue:
    """Append-only, insertion-ordered collection of records.

    The active filter set lives with the catalogue so that clearing one
    always clears the other.
    """

    def __init__(self) -> None:
        self._records: List[MediaRecord] = []
        self.filters = FilterSet()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MediaRecord]:
        return iter(self._records)

    @overload
    def __getitem__(self, index: int) -> MediaRecord: ...

    @overload
    def __getitem__(self, index: slice) -> List[MediaRecord]: ...

    def __getitem__(self, index):
        return self._records[index]

    def append(self, record: MediaRecord) -> None:
        """Add ``record`` at the end; duplicates are kept."""
        self._records.append(record)

    def clear(self) -> None:
        """Drop every record together with the active filters."""
        LOGGER.info("Clearing %d record(s) and %d filter(s)", len(self._records), len(self.filters))
        self._records.clear()
        self.filters.clear()

    def view(self) -> List[MediaRecord]:
        """Return the records passing the active filters."""
        return self.filters.apply(self._records)


__all__ = [
    "Catalogue",
    "CatalogueStats",
    "FilterField",
    "FilterPredicate",
    "FilterSet",
    "preset_options",
    "summarize",
    "view",
]
