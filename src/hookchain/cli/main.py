"""CLI entry point for hookchain."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler

from hookchain.cli.output import print_chain_result, print_json
from hookchain.errors import ConfigLoadError, UnknownEventError
from hookchain.hooks.events import HookContext

EXIT_BLOCKED = 1
EXIT_ERROR = 2


def _configure_logging(verbose: bool, level: str = "WARNING") -> None:
    logging.basicConfig(
        level="DEBUG" if verbose else level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_data(raw: str | None) -> Any:
    if raw is None:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--data") from e


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Debug logging on stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """hookchain -- run hook chains for assistant lifecycle events.

    \b
    Usage:
      hookchain events
      hookchain trigger OnSessionStart --session abc123 --project .
      hookchain test-condition "event == 'OnFileChange'" --event OnFileChange
      hookchain hooks list --project .
      hookchain templates apply "Session Logging" --project .
    """
    from hookchain.core.config import load_engine_config

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    try:
        level = load_engine_config(os.getcwd()).log_level
    except ConfigLoadError:
        # reported by the subcommand that needs the config
        level = "WARNING"
    _configure_logging(verbose, level)


@cli.command("trigger")
@click.argument("event")
@click.option("--session", "-s", default="", help="Session ID")
@click.option("--project", default=None, help="Project path (default: current directory)")
@click.option("--data", default=None, help="Event payload as JSON")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def trigger_cmd(
    click_ctx: click.Context,
    event: str, session: str, project: str | None, data: str | None, as_json: bool,
) -> None:
    """Run the hooks configured for EVENT.

    Exits 1 when the chain blocks the gated operation, 2 on errors.
    """
    from hookchain.core.engine import HookService, init_observability
    from hookchain.observability import shutdown

    project_path = os.path.abspath(project or os.getcwd())
    ctx = HookContext(
        event=event, session_id=session, project_path=project_path, data=_parse_data(data),
    )
    try:
        service = HookService.from_config(project_path)
        _configure_logging(click_ctx.obj.get("verbose", False), service.config.log_level)
        init_observability(project_path)
        result = asyncio.run(service.trigger_hook_event(event, ctx))
    except (UnknownEventError, ConfigLoadError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(EXIT_ERROR)
    finally:
        shutdown()

    if as_json:
        print_json(result.to_dict())
    else:
        print_chain_result(result)
    if not result.should_continue:
        raise SystemExit(EXIT_BLOCKED)


@cli.command("test-condition")
@click.argument("condition")
@click.option("--event", "-e", default="", help="Context event name")
@click.option("--session", "-s", default="", help="Context session ID")
@click.option("--project", default="", help="Context project path")
def test_condition_cmd(condition: str, event: str, session: str, project: str) -> None:
    """Evaluate CONDITION against a context and print true/false."""
    from hookchain.core import engine

    ctx = HookContext(event=event, session_id=session, project_path=project)
    click.echo("true" if engine.test_hook_condition(condition, ctx) else "false")


def _register_subcommands() -> None:
    """Register CLI subcommands."""
    from hookchain.cli.commands import config_cmd, events_cmd, hooks_cmd, templates_cmd

    cli.add_command(events_cmd, "events")
    cli.add_command(hooks_cmd, "hooks")
    cli.add_command(templates_cmd, "templates")
    cli.add_command(config_cmd, "config")


_register_subcommands()


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
