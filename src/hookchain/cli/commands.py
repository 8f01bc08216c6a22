"""CLI subcommands for hookchain (events, hooks, templates, config)."""

from __future__ import annotations

import os

import click

from hookchain.errors import ConfigLoadError

_SCOPE = click.Choice(["user", "project", "local"])


@click.command()
def events_cmd() -> None:
    """List the events hooks can be bound to."""
    from hookchain.types.hooks import EVENT_DESCRIPTIONS

    click.echo(f"{'Event':<18} Description")
    click.echo("-" * 80)
    for event, description in EVENT_DESCRIPTIONS.items():
        click.echo(f"{event.value:<18} {description}")


@click.group()
def hooks_cmd() -> None:
    """Inspect configured hooks."""


@hooks_cmd.command("list")
@click.option("--scope", type=_SCOPE, default="project", help="Settings scope")
@click.option("--project", default=None, help="Project path (default: current directory)")
def hooks_list(scope: str, project: str | None) -> None:
    """Show the hooks configured in a settings scope."""
    from hookchain.core.config import load_engine_config
    from hookchain.core.store import SettingsHookStore, parse_event_hooks

    project_path = os.path.abspath(project or os.getcwd())
    try:
        store = SettingsHookStore(settings_dir=load_engine_config(project_path).settings_dir)
        config = store.load(scope, project_path)
    except ConfigLoadError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)

    if not config:
        click.echo("No hooks configured.")
        return

    for event_name in sorted(config):
        hooks = parse_event_hooks(config, event_name)
        click.echo(f"{event_name} ({len(hooks)})")
        for hook in hooks:
            extras = []
            if hook.timeout is not None:
                extras.append(f"timeout={hook.timeout}s")
            if hook.retry:
                extras.append(f"retry={hook.retry}")
            if hook.condition is not None and hook.condition.enabled:
                extras.append(f"if {hook.condition.condition}")
            suffix = f"  [{', '.join(extras)}]" if extras else ""
            click.echo(f"  $ {hook.command}{suffix}")


@click.group()
def templates_cmd() -> None:
    """Built-in hook templates."""


@templates_cmd.command("list")
def templates_list() -> None:
    """List built-in templates."""
    from hookchain.core.templates import TEMPLATES

    for template in TEMPLATES:
        events = ", ".join(e.value for e in template.events)
        click.echo(f"{template.name:<26} {events}")
        click.echo(f"{'':<26} {template.description}")


@templates_cmd.command("apply")
@click.argument("name")
@click.option("--scope", type=_SCOPE, default="project", help="Settings scope")
@click.option("--project", default=None, help="Project path (default: current directory)")
def templates_apply(name: str, scope: str, project: str | None) -> None:
    """Add the hooks of template NAME to a settings scope."""
    from hookchain.core.config import load_engine_config
    from hookchain.core.store import SettingsHookStore
    from hookchain.core.templates import apply_template, get_template

    try:
        template = get_template(name)
    except KeyError as e:
        click.echo(f"Error: {e.args[0]}", err=True)
        raise SystemExit(1)

    project_path = os.path.abspath(project or os.getcwd())
    try:
        store = SettingsHookStore(settings_dir=load_engine_config(project_path).settings_dir)
        config = apply_template(store.load(scope, project_path), template)
        path = store.save(scope, project_path, config)
    except ConfigLoadError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)

    events = ", ".join(e.value for e in template.events)
    click.echo(f"Applied '{template.name}' to {events} in {path}")


@click.command()
@click.option("--project", default=None, help="Project path (default: current directory)")
def config_cmd(project: str | None) -> None:
    """Show the effective engine configuration."""
    from dataclasses import asdict

    from hookchain.core.config import find_config_file, load_engine_config

    project_path = os.path.abspath(project or os.getcwd())
    try:
        config = load_engine_config(project_path)
    except ConfigLoadError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)

    path = find_config_file(project_path)
    click.echo(f"Config file: {path if path else '(none)'}")
    for key, value in asdict(config).items():
        click.echo(f"  {key}: {value}")
