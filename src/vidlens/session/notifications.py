"""Transient status-bar notifications."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LIFETIME = 3.0


@dataclass(frozen=True)
class Notification:
    """A message shown for ``lifetime`` seconds after ``created_at``.

    Times are readings of the same monotonic clock.
    """

    message: str
    created_at: float
    lifetime: float = DEFAULT_LIFETIME

    def is_expired(self, now: float) -> bool:
        return now - self.created_at >= self.lifetime


__all__ = ["Notification", "DEFAULT_LIFETIME"]
