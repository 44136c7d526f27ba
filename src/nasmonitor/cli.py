"""NAS Monitor settings CLI.

This module provides the command-line front end for editing the
nas-monitor config file: showing and changing settings, managing the
list of network shares, and restarting the monitor service.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Optional

import typer
import yaml
from pydantic import ValidationError

from nasmonitor.constants import FORM_LIMITS
from nasmonitor.controller import EDITABLE_FIELDS, SettingsEditor
from nasmonitor.errors import UnknownFieldError
from nasmonitor.settings.application import AppPaths
from nasmonitor.settings.store import load_settings, render_settings
from nasmonitor.settings.user import MonitorSettings

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="NAS Monitor configuration editor", add_completion=False)
devices_app = typer.Typer(help="Manage NAS devices (host/share)")
app.add_typer(devices_app, name="devices")

logger: Final = logging.getLogger(__name__)  # Will be "nasmonitor.cli"

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    dir_okay=False,
    help="Config file (default: ~/.config/nas-monitor/config.conf)",
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
FORMAT_OPTION = typer.Option("text", "--format", "-f", help="Output format [text|yaml]")
RESTART_OPTION = typer.Option(False, "--restart", "-r", help="Restart the service after saving")


@dataclass
class CliState:
    """Global options; the editor is built on first use."""

    config: Optional[Path] = None
    editor: Optional[SettingsEditor] = None


def _editor(ctx: typer.Context) -> SettingsEditor:
    state: CliState = ctx.obj
    if state.editor is None:
        path = state.config or AppPaths.default().config_file
        state.editor = SettingsEditor(path)
    return state.editor


def _finish(editor: SettingsEditor, ok: bool) -> None:
    """Report the editor's status line; exit 1 if the action failed."""
    if ok:
        typer.secho(editor.status, fg=typer.colors.GREEN)
        return
    typer.secho(editor.status, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Edit the nas-monitor configuration."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    ctx.obj = CliState(config=config)


@app.command()
def show(ctx: typer.Context, fmt: str = FORMAT_OPTION) -> None:
    """Print the current settings."""
    editor = _editor(ctx)
    if fmt == "yaml":
        typer.echo(yaml.safe_dump(editor.settings.model_dump(), sort_keys=False), nl=False)
    elif fmt == "text":
        typer.echo(render_settings(editor.settings), nl=False)
    else:
        typer.secho(f"Unknown format: {fmt}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the config file location."""
    editor = _editor(ctx)
    suffix = "" if editor.found else " (not created yet)"
    typer.echo(f"{editor.config_path}{suffix}")


@app.command("set")
def set_value(ctx: typer.Context, field: str, value: str) -> None:
    """Change one setting and save."""
    editor = _editor(ctx)
    try:
        editor.update(**{field: value})
    except UnknownFieldError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        typer.echo(f"Editable settings: {', '.join(EDITABLE_FIELDS)}", err=True)
        raise typer.Exit(code=1) from exc
    except ValidationError as err:
        for e in err.errors():
            typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from err
    _finish(editor, editor.save())


@app.command()
def edit(ctx: typer.Context, restart: bool = RESTART_OPTION) -> None:
    """Interactive form: press Enter to keep the current value."""
    editor = _editor(ctx)
    current = editor.settings
    typer.echo(f"Editing {editor.config_path}")

    while True:
        fields = {
            "home_networks": typer.prompt(
                "Home networks (comma-separated)", default=current.home_networks
            ),
        }
        for name in FORM_LIMITS:
            low, high = FORM_LIMITS[name]
            label = name.replace("_", " ").capitalize()
            fields[name] = typer.prompt(
                f"{label} [{low}-{high}]", default=getattr(current, name), type=int
            )
        fields["enable_notifications"] = typer.confirm(
            "Enable notifications", default=current.enable_notifications
        )
        try:
            editor.update(**fields)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nSettings error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    _devices_prompt(editor)

    if not editor.save():
        _finish(editor, False)
    typer.secho(editor.status, fg=typer.colors.GREEN)
    if restart:
        _finish(editor, editor.restart_service())


def _devices_prompt(editor: SettingsEditor) -> None:
    """Offer to add shares until the user enters a blank line."""
    while not editor.settings.devices_full:
        device = typer.prompt("Add NAS device (host/share, blank to finish)", default="")
        if not device:
            return
        if not editor.add_device(device):
            typer.secho(editor.status, fg=typer.colors.YELLOW, err=True)


@app.command()
def restart(ctx: typer.Context) -> None:
    """Restart the nas-monitor service."""
    editor = _editor(ctx)
    _finish(editor, editor.restart_service())


@app.command()
def validate(file: Path) -> None:
    """Check a config file and report what the monitor will read from it."""
    if not file.is_file():
        typer.secho(f"No such file: {file}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    result = load_settings(file)
    settings: MonitorSettings = result.settings
    for key in result.unknown_keys:
        typer.secho(f"Ignored unknown key: {key}", fg=typer.colors.YELLOW)
    if not settings.nas_devices:
        typer.secho("Warning: no NAS devices configured", fg=typer.colors.YELLOW)
    typer.echo(
        f"✅ {len(settings.network_names)} home network(s), "
        f"{settings.device_count} NAS device(s)"
    )


# ───────────────────────── device sub-commands ───────────────────────────────
@devices_app.command("list")
def list_devices(ctx: typer.Context) -> None:
    """List configured devices with their positions."""
    editor = _editor(ctx)
    if not editor.settings.nas_devices:
        typer.echo("No NAS devices configured")
        return
    for index, device in enumerate(editor.settings.nas_devices):
        typer.echo(f"{index}: {device}")


@devices_app.command("add")
def add_device(ctx: typer.Context, device: str) -> None:
    """Append a device and save."""
    editor = _editor(ctx)
    if not editor.add_device(device):
        _finish(editor, False)
    _finish(editor, editor.save())


@devices_app.command("remove")
def remove_device(ctx: typer.Context, index: int) -> None:
    """Remove the device at INDEX (see `devices list`) and save."""
    editor = _editor(ctx)
    if not editor.remove_device(index):
        _finish(editor, False)
    _finish(editor, editor.save())


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
