"""Command line interface for vidlens."""

from __future__ import annotations

import json
import logging
from typing import Any, NoReturn

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from vidlens.config import ConfigError, ConfigManager, VidlensConfig
from vidlens.extraction import (
    ExtractionError,
    FFprobeRunner,
    MediaRecord,
    MetadataExtractor,
    PathNotFound,
)
from vidlens.logs import configure_logging
from vidlens.session import InspectorSession
from vidlens.tui import VidlensApp

LOGGER = logging.getLogger(__name__)

console = Console()


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool = False,
    details: Any | None = None,
) -> NoReturn:
    """Print a standardized error to standard output and exit with status 1.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.

    Raises:
        SystemExit: Always, with status 1.
    """
    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        click.echo(json.dumps(payload))
    else:
        console.print(Text(message, style="red"))
    raise SystemExit(1)


def _startup(*, json_output: bool = False) -> VidlensConfig:
    """Load the configuration and attach the log file, or exit with status 1."""
    try:
        config = ConfigManager().load()
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output)
    try:
        configure_logging(config.logging)
    except (OSError, ValueError) as exc:
        _handle_cli_error(
            f"Unable to open log file {config.logging.file}: {exc}",
            code="logging_error",
            json_output=json_output,
        )
    return config


def _record_payload(record: MediaRecord) -> dict[str, Any]:
    return record.model_dump(mode="json", exclude={"raw_output"})


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(package_name="vidlens")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Vidlens inspects media files with ffprobe in an interactive terminal table.

    Run without a command to open the inspector.
    """
    if ctx.invoked_subcommand is None:
        run_inspector()


def run_inspector() -> None:
    """Start the interactive inspector and block until the user quits.

    Raises:
        SystemExit: With a non-zero status when startup or the terminal session fails.
    """
    config = _startup()
    session = InspectorSession.from_config(config)
    app = VidlensApp(session, heading=config.ui.title)
    try:
        app.run()
    except Exception as exc:
        LOGGER.exception("Terminal session failed")
        _handle_cli_error(f"Terminal session failed: {exc}", code="terminal_error")
    if app.return_code:
        raise SystemExit(app.return_code)


@cli.command()
@click.argument("paths", nargs=-1, required=True)
@click.option("--json", "json_output", is_flag=True, help="Emit one JSON object per line.")
@click.option("--raw", is_flag=True, help="Print the full probe output of each file.")
def probe(paths: tuple[str, ...], json_output: bool, raw: bool) -> None:
    """Analyze PATHS once and print the extracted attributes.

    With --json every path yields one line, in argument order: the record
    without its raw report, or ``{"path": ..., "error": {...}}``.

    Args:
        paths: Files to analyze, in order.
        json_output: Emit JSON lines instead of a table.
        raw: Also print each file's raw probe output (table mode only).
    """
    config = _startup(json_output=json_output)
    extractor = MetadataExtractor(FFprobeRunner(config.probe.binary, config.probe.extra_args))

    records: list[MediaRecord] = []
    errors: list[dict[str, str]] = []
    for path in paths:
        try:
            record = extractor.analyze(path)
        except PathNotFound as exc:
            error = {"path": path, "code": "path_not_found", "message": str(exc)}
        except ExtractionError as exc:
            error = {"path": path, "code": "probe_failed", "message": str(exc)}
        else:
            records.append(record)
            if json_output:
                click.echo(json.dumps(_record_payload(record)))
            continue
        errors.append(error)
        if json_output:
            click.echo(
                json.dumps(
                    {"path": path, "error": {"code": error["code"], "message": error["message"]}}
                )
            )

    if not json_output:
        if records:
            table = Table(header_style="bold yellow")
            for column in ("Name", "Container", "Codec", "Resolution", "FPS", "Bitrate(Mbps)"):
                table.add_column(column)
            for record in records:
                table.add_row(
                    record.display_name,
                    record.container,
                    record.codec,
                    record.resolution,
                    record.frame_rate,
                    record.bitrate,
                )
            console.print(table)
        if raw:
            for record in records:
                console.rule(record.path)
                console.print(record.raw_output, markup=False, highlight=False)
        for error in errors:
            console.print(Text(f"{error['path']}: {error['message']}", style="red"))

    if errors:
        raise SystemExit(1)


@cli.group()
def config() -> None:
    """Show or change vidlens settings."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore VIDLENS__ environment overrides.")
def config_view(no_env: bool) -> None:
    """Print the effective configuration as YAML.

    Raises:
        click.ClickException: If the configuration is invalid.
    """
    manager = ConfigManager()
    try:
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(Text(f"# {manager.config_path}", style="grey62"))
    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="New value; lists take 'a, b' or YAML '[a, b]'.")
def config_set(key: str, value: str) -> None:
    """Store one setting, addressed as SECTION.NAME, in the config file.

    Raises:
        click.ClickException: If KEY is unknown or VALUE is invalid for it.
    """
    manager = ConfigManager()
    try:
        previous, current = manager.set_value(key.strip(), value)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if previous == current:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return
    console.print(
        Text.assemble(
            ("Updated ", "green"),
            (key.strip(), "bold"),
            f": {json.dumps(previous)} -> {json.dumps(current)}",
        )
    )


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
