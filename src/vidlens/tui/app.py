"""Textual application hosting an inspector session."""

from __future__ import annotations

from textual import events
from textual.app import App, ComposeResult
from textual.screen import Screen
from textual.widgets import Input, Static

from vidlens.session import AddingFile, InspectorSession

from .render import render_body, render_status, render_tabs, render_title

# Render cadence; only lets expired notifications disappear without a key press.
REFRESH_SECONDS = 0.25
PATH_PLACEHOLDER = "/path/to/video.mp4"


def key_name(event: events.Key) -> str:
    """Return the session key for a Textual key event.

    Printable keys map to their character so ``[`` stays ``[``; everything
    else keeps Textual's name (``enter``, ``escape``, ``up``...).
    """
    if event.is_printable and event.character:
        return event.character
    return event.key


class InspectorScreen(Screen, inherit_bindings=False):
    """Single screen forwarding key presses to the session.

    While the add-file prompt is open the path input owns the keyboard,
    including pastes, and only Escape reaches the session.
    """

    AUTO_FOCUS = None

    def __init__(self, session: InspectorSession, heading: str) -> None:
        super().__init__()
        self.session = session
        self.heading = heading

    def compose(self) -> ComposeResult:
        yield Static(render_title(self.heading), id="title")
        yield Static(id="tabs")
        yield Static(id="body")
        yield Input(placeholder=PATH_PLACEHOLDER, id="path", classes="hidden")
        yield Static(id="status")

    def on_mount(self) -> None:
        self.refresh_view()
        self.set_interval(REFRESH_SECONDS, self.refresh_view)

    def on_key(self, event: events.Key) -> None:
        if self.query_one("#path", Input).has_focus:
            if event.key == "escape":
                event.stop()
                self.session.handle_key("escape")
                self.refresh_view()
            return
        event.stop()
        event.prevent_default()
        self.session.handle_key(key_name(event))
        if self.session.exit_requested:
            self.app.exit()
            return
        self.refresh_view()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.session.submit_path(event.value)
        self.refresh_view()

    def refresh_view(self) -> None:
        snapshot = self.session.snapshot()
        self._sync_path_input(isinstance(snapshot.mode, AddingFile))
        self.query_one("#tabs", Static).update(render_tabs(snapshot.tab))
        self.query_one("#body", Static).update(render_body(snapshot))
        self.query_one("#status", Static).update(render_status(snapshot.status))

    def _sync_path_input(self, prompting: bool) -> None:
        path_input = self.query_one("#path", Input)
        hidden = path_input.has_class("hidden")
        if prompting and hidden:
            path_input.value = ""
            path_input.remove_class("hidden")
            path_input.focus()
        elif not prompting and not hidden:
            path_input.add_class("hidden")
            path_input.value = ""
            self.set_focus(None)


class VidlensApp(App):
    """Terminal inspector for media files."""

    CSS = """
    #title, #tabs, #status {
        height: auto;
    }
    #body {
        height: 1fr;
        overflow: hidden;
    }
    #path {
        border: round yellow;
    }
    .hidden {
        display: none;
    }
    """
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, session: InspectorSession, *, heading: str = "Video Analyzer") -> None:
        super().__init__()
        self.session = session
        self.heading = heading

    def on_mount(self) -> None:
        self.push_screen(InspectorScreen(self.session, self.heading))


__all__ = ["VidlensApp", "InspectorScreen", "key_name", "REFRESH_SECONDS"]
