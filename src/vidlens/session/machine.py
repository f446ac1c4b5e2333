"""Key routing for an inspector session.

:class:`InspectorSession` owns the catalogue, the selection cursor, the
current mode and the notification. The presentation layer feeds it key names
through :meth:`InspectorSession.handle_key`, hands over prompt input through
:meth:`InspectorSession.submit_path` and reads a :class:`Snapshot`
per render; it never mutates session state directly.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Tuple

from vidlens.catalogue import Catalogue, FilterPredicate, preset_options
from vidlens.config.models import VidlensConfig
from vidlens.extraction import (
    ExtractionError,
    FFprobeRunner,
    MediaRecord,
    MetadataExtractor,
    PathNotFound,
)

from .modes import AddingFile, Browsing, Mode, ViewingHelp, ViewingRawOutput
from .notifications import DEFAULT_LIFETIME, Notification

LOGGER = logging.getLogger(__name__)

TAB_TITLES = ("Files", "Filters", "Stats")
NO_SELECTION = "No file selected"

QUIT_KEYS = {"q"}
ADD_KEYS = {"a"}
RAW_KEYS = {"r"}
HELP_KEYS = {"h"}
CLEAR_KEYS = {"c"}
NEXT_KEYS = {"down", "j"}
PREVIOUS_KEYS = {"up", "k"}
TAB_KEYS = {"tab"}
FILTER_NEXT_KEYS = {"]"}
FILTER_PREVIOUS_KEYS = {"["}
FILTER_TOGGLE_KEYS = {"f", " ", "space"}
FILTER_CLEAR_KEYS = {"x"}
CANCEL_KEYS = {"escape"}
SCROLL_UP_KEYS = {"up"}
SCROLL_DOWN_KEYS = {"down"}


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the session handed to the renderer."""

    mode: Mode
    catalogue_size: int
    view: Tuple[MediaRecord, ...]
    cursor: int
    status: str
    tab: int
    predicates: Tuple[FilterPredicate, ...]
    filter_options: Tuple[FilterPredicate, ...]
    filter_cursor: int

    @property
    def selected(self) -> Optional[MediaRecord]:
        if 0 <= self.cursor < len(self.view):
            return self.view[self.cursor]
        return None

    @property
    def raw_output(self) -> str:
        record = self.selected
        return record.raw_output if record is not None else NO_SELECTION

    @property
    def scroll(self) -> int:
        return self.mode.scroll if isinstance(self.mode, ViewingRawOutput) else 0


class InspectorSession:
    """Interaction state machine for the inspector."""

    def __init__(
        self,
        extractor: MetadataExtractor,
        *,
        notification_seconds: float = DEFAULT_LIFETIME,
        filter_options: Iterable[FilterPredicate] = (),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.extractor = extractor
        self.catalogue = Catalogue()
        self.mode: Mode = Browsing()
        self.cursor = 0
        self.tab = 0
        self.filter_options: List[FilterPredicate] = list(filter_options)
        self.filter_cursor = 0
        self.notification: Optional[Notification] = None
        self.exit_requested = False
        self._notification_seconds = notification_seconds
        self._clock = clock

    @classmethod
    def from_config(
        cls, config: VidlensConfig, *, clock: Callable[[], float] = time.monotonic
    ) -> "InspectorSession":
        """Build a session wired to ffprobe according to ``config``."""
        runner = FFprobeRunner(config.probe.binary, config.probe.extra_args)
        return cls(
            MetadataExtractor(runner),
            notification_seconds=config.ui.notification_seconds,
            filter_options=preset_options(config.filters),
            clock=clock,
        )

    # Read side --------------------------------------------------------

    def view(self) -> List[MediaRecord]:
        return self.catalogue.view()

    def status(self) -> str:
        """Return the status line, discarding the notification once expired."""
        if self.notification is not None:
            if self.notification.is_expired(self._clock()):
                self.notification = None
            else:
                return self.notification.message
        return self.mode.status

    def snapshot(self) -> Snapshot:
        return Snapshot(
            mode=self.mode,
            catalogue_size=len(self.catalogue),
            view=tuple(self.view()),
            cursor=self.cursor,
            status=self.status(),
            tab=self.tab,
            predicates=self.catalogue.filters.predicates,
            filter_options=tuple(self.filter_options),
            filter_cursor=self.filter_cursor,
        )

    # Transitions ------------------------------------------------------

    def notify(self, message: str) -> None:
        self.notification = Notification(message, self._clock(), self._notification_seconds)

    def handle_key(self, key: str) -> None:
        """Route ``key`` to the handler of the current mode."""
        if isinstance(self.mode, Browsing):
            self._handle_browsing(key)
        elif isinstance(self.mode, AddingFile):
            if key in CANCEL_KEYS:
                self.mode = Browsing()
        elif isinstance(self.mode, ViewingRawOutput):
            self._handle_raw_output(self.mode, key)
        elif isinstance(self.mode, ViewingHelp):
            if key in CANCEL_KEYS:
                self.mode = Browsing()

    def _handle_browsing(self, key: str) -> None:
        if key in QUIT_KEYS:
            self.exit_requested = True
        elif key in ADD_KEYS:
            self.mode = AddingFile()
        elif key in RAW_KEYS:
            self.mode = ViewingRawOutput()
        elif key in HELP_KEYS:
            self.mode = ViewingHelp()
        elif key in CLEAR_KEYS:
            self.clear_all()
        elif key in NEXT_KEYS:
            self.select_next()
        elif key in PREVIOUS_KEYS:
            self.select_previous()
        elif key in TAB_KEYS:
            self.tab = (self.tab + 1) % len(TAB_TITLES)
        elif key in FILTER_NEXT_KEYS:
            self.move_filter_cursor(1)
        elif key in FILTER_PREVIOUS_KEYS:
            self.move_filter_cursor(-1)
        elif key in FILTER_TOGGLE_KEYS:
            self.toggle_filter()
        elif key in FILTER_CLEAR_KEYS:
            self.clear_filters()

    def _handle_raw_output(self, mode: ViewingRawOutput, key: str) -> None:
        if key in CANCEL_KEYS:
            self.mode = Browsing()
        elif key in SCROLL_UP_KEYS:
            self.mode = replace(mode, scroll=max(0, mode.scroll - 1))
        elif key in SCROLL_DOWN_KEYS:
            self.mode = replace(mode, scroll=mode.scroll + 1)

    # Operations -------------------------------------------------------

    def submit_path(self, path: str) -> Optional[MediaRecord]:
        """Finish the add-file prompt with ``path``; an empty path just closes it."""
        if not isinstance(self.mode, AddingFile):
            return None
        self.mode = Browsing()
        if not path:
            return None
        return self.add_file(path)

    def add_file(self, path: str) -> Optional[MediaRecord]:
        """Analyze ``path`` and append the result; failures become notifications."""
        started = self._clock()
        try:
            record = self.extractor.analyze(path)
        except PathNotFound:
            LOGGER.info("Rejected missing path %s", path)
            self.notify("File does not exist")
            return None
        except ExtractionError as exc:
            LOGGER.info("Analysis of %s failed: %s", path, exc)
            self.notify(f"Error analyzing file: {exc}")
            return None

        self.catalogue.append(record)
        elapsed = self._clock() - started
        self.notify(f"File analyzed in {elapsed:.2f}s")
        return record

    def clear_all(self) -> None:
        self.catalogue.clear()
        self.cursor = 0
        self.notify("All files cleared")

    def select_next(self) -> None:
        size = len(self.view())
        if size == 0:
            return
        self.cursor = 0 if self.cursor >= size - 1 else self.cursor + 1

    def select_previous(self) -> None:
        size = len(self.view())
        if size == 0:
            return
        self.cursor = (min(self.cursor, size) - 1) % size

    def move_filter_cursor(self, step: int) -> None:
        if not self.filter_options:
            return
        self.filter_cursor = (self.filter_cursor + step) % len(self.filter_options)

    def toggle_filter(self) -> None:
        """Activate or deactivate the preset option under the filter cursor."""
        if not self.filter_options:
            return
        predicate = self.filter_options[self.filter_cursor]
        active = self.catalogue.filters.toggle(predicate)
        self.cursor = 0
        verb = "added" if active else "removed"
        self.notify(f"Filter {verb}: {predicate.describe()}")

    def clear_filters(self) -> None:
        self.catalogue.filters.clear()
        self.cursor = 0
        self.notify("Filters cleared")


__all__ = ["InspectorSession", "Snapshot", "TAB_TITLES", "NO_SELECTION"]
