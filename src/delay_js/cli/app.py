"""CLI entrypoint for :mod:`delay_js`.

Exposes the delay JS lifecycle flows for local inspection:

- `events`  - list the registered callbacks in dispatch order.
- `install` - print the first-install option bag.
- `upgrade` - run the upgrade migration against a settings bag.
- `save`    - run a settings submission and print the stored bag and notices.
- `version` - print the package version.
"""

from __future__ import annotations

from typing import Optional

import typer

from delay_js import __version__
from delay_js.cli.common import (
    DEBUG_OPTION,
    LOG_FORMAT_OPTION,
    LOG_LEVEL_OPTION,
    LogFormat,
    echo_json,
    parse_json_object,
    resolve_logging,
)
from delay_js.exceptions import DelayJsError
from delay_js.host.notices import SettingsErrors
from delay_js.host.options import InMemoryOptionStore
from delay_js.infrastructure.observability.logging import setup_logging
from delay_js.infrastructure.settings import RuntimeSettings
from delay_js.models.events import EventName
from delay_js.models.options import AUTOPTIMIZE_JS_AGGREGATE
from delay_js.plugin import DelayJsPlugin

app = typer.Typer(
    help=(
        "Delay JavaScript Execution: settings lifecycle CLI.\n\n"
        "Runs the install, upgrade and settings-save flows against an in-memory option store.\n\n"
        "```bash\n"
        "delay-js save --old '{\"delay_js\": 0}' --new '{\"delay_js\": 1}' --aggregate-js on\n"
        "```\n"
    ),
    no_args_is_help=True,
    rich_markup_mode="markdown",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Print the version and exit."
    ),
    log_format: Optional[LogFormat] = LOG_FORMAT_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    settings = RuntimeSettings()
    effective_format, effective_level = resolve_logging(
        log_format=log_format, log_level=log_level, debug=debug, settings=settings
    )
    setup_logging(log_format=effective_format, log_level=effective_level)
    ctx.obj = settings


def _plugin(ctx: typer.Context, store: InMemoryOptionStore | None = None) -> DelayJsPlugin:
    settings = ctx.obj if isinstance(ctx.obj, RuntimeSettings) else RuntimeSettings()
    return DelayJsPlugin(settings, options=store, notices=SettingsErrors())


@app.command("events")
def events_command(ctx: typer.Context) -> None:
    """List registered callbacks per event, in the order they run."""
    plugin = _plugin(ctx)
    for event in EventName:
        for item in plugin.events.callbacks(event):
            typer.echo(f"{event.value}\t{item.priority}\t{item.accepted_args}\t{item.qualname}")


@app.command("install")
def install_command(ctx: typer.Context) -> None:
    """Print the options stored on first install."""
    echo_json(_plugin(ctx).install())


@app.command("upgrade")
def upgrade_command(
    ctx: typer.Context,
    new_version: str = typer.Argument(..., help="Version being installed."),
    old_version: str = typer.Argument(..., help="Previously installed version."),
    current: Optional[str] = typer.Option(None, "--current", help="Current settings bag as a JSON object."),
) -> None:
    """Run the upgrade action and print the resulting settings bag."""
    settings = ctx.obj if isinstance(ctx.obj, RuntimeSettings) else RuntimeSettings()
    store = InMemoryOptionStore({settings.settings_option_name: parse_json_object(current, param_hint="current")})
    plugin = _plugin(ctx, store)
    plugin.upgrade(new_version, old_version)
    echo_json(plugin.current_settings())


@app.command("save")
def save_command(
    ctx: typer.Context,
    old: Optional[str] = typer.Option(None, "--old", help="Stored settings bag as a JSON object."),
    new: Optional[str] = typer.Option(None, "--new", help="Submitted form values as a JSON object."),
    aggregate_js: Optional[str] = typer.Option(
        None, "--aggregate-js", help="Value of Autoptimize's JS aggregation option (e.g. 'on')."
    ),
) -> None:
    """Submit settings and print the stored bag with any notices raised."""
    settings = ctx.obj if isinstance(ctx.obj, RuntimeSettings) else RuntimeSettings()
    initial = {settings.settings_option_name: parse_json_object(old, param_hint="old")}
    if aggregate_js is not None:
        initial[AUTOPTIMIZE_JS_AGGREGATE] = aggregate_js
    plugin = _plugin(ctx, InMemoryOptionStore(initial))

    try:
        stored = plugin.save_settings(parse_json_object(new, param_hint="new"))
    except DelayJsError as exc:
        raise typer.BadParameter(str(exc), param_hint="new") from exc
    echo_json(
        {
            "settings": stored,
            "notices": [notice.as_dict() for notice in plugin.notices.get_settings_errors()],
        }
    )


@app.command("version")
def version_command() -> None:
    """Print the package version."""
    typer.echo(__version__)


def main() -> None:
    """Entrypoint used by console scripts and `python -m delay_js`."""
    app()


__all__ = ["app", "main"]
