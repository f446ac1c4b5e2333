"""Aggregate counts for the Stats tab."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Sequence

from pydantic import BaseModel, Field

from vidlens.extraction.models import MediaRecord

SUMMARY_FIELDS = ("codec", "resolution", "frame_rate", "container")


class CatalogueStats(BaseModel):
    """Value counts per field for a set of records."""

    total: int = 0
    counts: Dict[str, Dict[str, int]] = Field(default_factory=dict)


def summarize(records: Sequence[MediaRecord]) -> CatalogueStats:
    """Count distinct values of the summary fields, most common first."""
    counts: Dict[str, Dict[str, int]] = {}
    for field in SUMMARY_FIELDS:
        counter = Counter(getattr(record, field) for record in records)
        counts[field] = dict(counter.most_common())
    return CatalogueStats(total=len(records), counts=counts)


__all__ = ["CatalogueStats", "summarize", "SUMMARY_FIELDS"]
