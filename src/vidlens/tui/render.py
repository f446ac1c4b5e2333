"""Rich renderables built from a session snapshot.

Everything here is a pure function of the :class:`Snapshot`, so a render
pass never changes session state.
"""

from __future__ import annotations

from typing import List

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from vidlens.catalogue import summarize
from vidlens.session import (
    TAB_TITLES,
    AddingFile,
    Snapshot,
    ViewingHelp,
    ViewingRawOutput,
)

EMPTY_MESSAGE = "No files loaded. Press 'a' to add files, 'h' for help"
COLUMNS = ("Name", "Container", "Codec", "Resolution", "FPS", "Bitrate(Mbps)")

HELP_BINDINGS = (
    ("q", "Quit application"),
    ("a", "Add file"),
    ("r", "Show raw FFprobe output"),
    ("c", "Clear all files"),
    ("h", "Show this help"),
    ("↑/k", "Previous file"),
    ("↓/j", "Next file"),
    ("Tab", "Switch tabs"),
    ("[ / ]", "Previous / next filter option"),
    ("f / Space", "Toggle the highlighted filter"),
    ("x", "Clear active filters"),
    ("Esc", "Return to the file list"),
)

ADD_FILE_HINTS = (
    "Enter the full path to a video or image file",
    "Press Enter to analyze, Esc to cancel",
    "",
    "Examples:",
    "  /path/to/video.mp4",
    "  /path/to/image.jpg",
)


def render_title(heading: str) -> RenderableType:
    return Panel(Text(heading, style="bold cyan", justify="center"))


def render_tabs(selected: int) -> RenderableType:
    text = Text()
    for index, title in enumerate(TAB_TITLES):
        if index:
            text.append(" │ ")
        text.append(title, style="bold yellow" if index == selected else "white")
    return Panel(text)


def render_status(status: str) -> RenderableType:
    return Panel(Text(status, style="white"))


def render_body(snapshot: Snapshot) -> RenderableType:
    """Return the main area for the current mode (and tab while browsing)."""
    mode = snapshot.mode
    if isinstance(mode, AddingFile):
        return render_add_file()
    if isinstance(mode, ViewingRawOutput):
        return render_raw_output(snapshot)
    if isinstance(mode, ViewingHelp):
        return render_help()
    if snapshot.tab == 1:
        return render_filters(snapshot)
    if snapshot.tab == 2:
        return render_stats(snapshot)
    return render_files(snapshot)


def render_files(snapshot: Snapshot) -> RenderableType:
    if not snapshot.view:
        return Panel(Text(EMPTY_MESSAGE, style="grey62", justify="center"), title="Files")

    table = Table(
        title=f"Files ({len(snapshot.view)}/{snapshot.catalogue_size})",
        header_style="bold yellow",
        expand=True,
    )
    for column in COLUMNS:
        table.add_column(column)
    for index, record in enumerate(snapshot.view):
        selected = index == snapshot.cursor
        name = f">> {record.display_name}" if selected else record.display_name
        table.add_row(
            name,
            record.container,
            record.codec,
            record.resolution,
            record.frame_rate,
            record.bitrate,
            style="on grey23" if selected else None,
        )
    return table


def render_filters(snapshot: Snapshot) -> RenderableType:
    options = Text()
    for index, option in enumerate(snapshot.filter_options):
        marker = "[x]" if option in snapshot.predicates else "[ ]"
        line = f"{marker} {option.describe()}\n"
        options.append(line, style="reverse" if index == snapshot.filter_cursor else None)
    if not snapshot.filter_options:
        options.append("No filter presets configured.", style="grey62")

    if snapshot.predicates:
        active = Text("\n".join(p.describe() for p in snapshot.predicates), style="green")
    else:
        active = Text("None", style="grey62")

    summary = Text(f"Matching files: {len(snapshot.view)}/{snapshot.catalogue_size}")
    return Panel(
        Group(options, Text(""), Text("Active filters:", style="bold yellow"), active, summary),
        title="Filters",
    )


def render_stats(snapshot: Snapshot) -> RenderableType:
    stats = summarize(snapshot.view)
    table = Table(title=f"Stats ({stats.total} files)", header_style="bold yellow", expand=True)
    table.add_column("Field")
    table.add_column("Value")
    table.add_column("Count", justify="right")
    for field, counts in stats.counts.items():
        for value, count in counts.items():
            table.add_row(field, value, str(count))
    return table


def render_add_file() -> RenderableType:
    # The path itself is typed into the input widget docked above the status line.
    return Panel(Text("\n".join(ADD_FILE_HINTS), style="grey62"), title="Add File")


def render_raw_output(snapshot: Snapshot) -> RenderableType:
    lines: List[str] = snapshot.raw_output.splitlines()[snapshot.scroll :]
    return Panel(Text("\n".join(lines), style="green"), title="Raw FFprobe Output")


def render_help() -> RenderableType:
    text = Text("Key Bindings:\n\n", style="bold yellow")
    for key, description in HELP_BINDINGS:
        text.append(f"  {key} - {description}\n", style="white")
    return Panel(text, title="Help")


__all__ = [
    "render_title",
    "render_tabs",
    "render_status",
    "render_body",
    "render_files",
    "render_filters",
    "render_stats",
    "render_add_file",
    "render_raw_output",
    "render_help",
]
