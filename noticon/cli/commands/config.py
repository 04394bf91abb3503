"""Config commands for managing configuration."""

from collections import defaultdict
from typing import Any

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from noticon.config.config import Config
from noticon.config.loader import ConfigLoader
from noticon.config.utils import (
    get_all_config_keys,
    get_config_value,
    parse_config_key,
    set_config_value,
    validate_config_key,
)
from noticon.domain.exceptions import ConfigError


def _loader(ctx: click.Context) -> ConfigLoader:
    return ConfigLoader(config_file=ctx.obj.get("config_file"))


def _load(ctx: click.Context, loader: ConfigLoader) -> Config:
    console: Console = ctx.obj["console"]
    try:
        return loader.load()
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e


def _require_valid_key(console: Console, key: str) -> None:
    if not validate_config_key(key):
        console.print(f"[red]Error: Invalid config key: '{key}'[/red]")
        console.print()
        console.print("Run 'noticon config list --all' to see all available keys")
        raise click.Abort()


@click.group(name="config")
def config_group() -> None:
    """Manage noticon configuration."""
    pass


@config_group.command(name="show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration."""
    console: Console = ctx.obj["console"]

    loader = _loader(ctx)
    config = _load(ctx, loader)
    config_dict = ConfigLoader.config_to_dict(config)

    yaml_str = yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False)
    syntax = Syntax(yaml_str, "yaml", theme="monokai", line_numbers=False)

    console.print(Panel("[bold cyan]Current Configuration[/bold cyan]", expand=False))
    console.print()
    console.print(syntax)


@config_group.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
@click.option(
    "--skip-interactive", is_flag=True, help="Skip interactive prompts, create empty config"
)
@click.pass_context
def config_init(ctx: click.Context, force: bool, skip_interactive: bool) -> None:
    """Initialize configuration file interactively.

    Only settings that differ from the defaults are saved to the config file.
    """
    console: Console = ctx.obj["console"]
    loader = _loader(ctx)

    if loader.exists() and not force:
        console.print(
            "[yellow]Configuration file already exists. Use --force to overwrite.[/yellow]"
        )
        return

    loader.create_default()
    console.print(f"[green]✓ Configuration file created: {loader.config_file}[/green]")

    if skip_interactive:
        console.print(
            "[cyan]Empty configuration created. Use 'noticon config set' to add settings.[/cyan]"
        )
        return

    console.print()
    console.print("[bold cyan]Interactive Configuration Setup[/bold cyan]")
    console.print("Press Enter to accept defaults (shown in brackets)\n")

    defaults = Config.default()
    config_updates: dict[str, dict[str, Any]] = {}

    console.print("[bold]Icon Search Path[/bold]")
    console.print("Colon-separated directories searched for <name>.svg, .png and .xpm")
    icon_path = click.prompt("Icon path", type=str, default=defaults.icon.icon_path)
    if icon_path != defaults.icon.icon_path:
        config_updates.setdefault("icon", {})["icon_path"] = icon_path

    console.print()
    console.print("[bold]Maximum Icon Size[/bold]")
    console.print("Larger icons are scaled down to fit; 0 disables scaling")
    max_icon_size = click.prompt(
        "Max icon size (px)",
        type=click.IntRange(min=0),
        default=defaults.icon.max_icon_size,
        show_default=True,
    )
    if max_icon_size != defaults.icon.max_icon_size:
        config_updates.setdefault("icon", {})["max_icon_size"] = max_icon_size

    if config_updates:
        console.print()
        console.print("[yellow]Saving your custom configuration...[/yellow]")
        loader.repo.save(config_updates)
        console.print("[green]✓ Configuration saved![/green]")
    else:
        console.print()
        console.print("[cyan]No custom settings (all defaults selected)[/cyan]")

    console.print()
    console.print("[bold]Configuration Summary:[/bold]")
    console.print(f"  Icon path: {icon_path}")
    console.print(f"  Max icon size: {max_icon_size or 'unlimited'}")


@config_group.command(name="path")
@click.pass_context
def config_path(ctx: click.Context) -> None:
    """Show path to configuration file."""
    console: Console = ctx.obj["console"]
    loader = _loader(ctx)

    console.print(f"Configuration file: {loader.config_file}")
    if loader.exists():
        console.print("[green]✓ File exists[/green]")
    else:
        console.print("[yellow]⚠ File does not exist (using defaults)[/yellow]")
        console.print("Run 'noticon config init' to create it")


@config_group.command(name="set")
@click.argument("key", type=str)
@click.argument("value", type=str)
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set a configuration value.

    KEY: Configuration key in dot notation (e.g., icon.max_icon_size)

    VALUE: Value to set (will be coerced to appropriate type)

    Examples:
      noticon config set icon.max_icon_size 48
      noticon config set icon.icon_path /usr/share/icons/hicolor/48x48/apps
      noticon config set surface.conversion direct
    """
    console: Console = ctx.obj["console"]
    _require_valid_key(console, key)

    loader = _loader(ctx)
    if not loader.exists():
        console.print("[yellow]Config file doesn't exist, creating...[/yellow]")
        loader.create_default()

    config = _load(ctx, loader)

    update_dict: dict[str, Any] = {}
    try:
        set_config_value(update_dict, key, value)
        merged = loader.merge(config, update_dict)
        merged.validate()
        loader.save(merged, minimal=True)
    except (ValueError, ConfigError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e

    console.print(f"[green]✓ Configuration updated: {key} = {value}[/green]")


@config_group.command(name="get")
@click.argument("key", type=str)
@click.pass_context
def config_get(ctx: click.Context, key: str) -> None:
    """Get a configuration value.

    KEY: Configuration key in dot notation (e.g., icon.icon_path)
    """
    console: Console = ctx.obj["console"]
    _require_valid_key(console, key)

    config = _load(ctx, _loader(ctx))
    try:
        value = get_config_value(config, key)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e
    console.print(f"{key}: [cyan]{value}[/cyan]")


@config_group.command(name="unset")
@click.argument("key", type=str)
@click.pass_context
def config_unset(ctx: click.Context, key: str) -> None:
    """Remove a configuration value (revert to default).

    KEY: Configuration key in dot notation (e.g., icon.max_icon_size)
    """
    console: Console = ctx.obj["console"]
    _require_valid_key(console, key)

    loader = _loader(ctx)
    if not loader.exists():
        console.print("[yellow]Config file doesn't exist, nothing to unset[/yellow]")
        return

    try:
        config_dict = loader.repo.load()
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e

    section, field = parse_config_key(key)
    if section in config_dict and field in config_dict[section]:
        del config_dict[section][field]
        if not config_dict[section]:
            del config_dict[section]

        loader.repo.save(config_dict)
        console.print(f"[green]✓ Removed config key: {key} (reverted to default)[/green]")
    else:
        console.print(
            f"[yellow]Key '{key}' not found in config file (already using default)[/yellow]"
        )


@config_group.command(name="list")
@click.option("--all", "-a", "show_all", is_flag=True, help="Show all keys including defaults")
@click.pass_context
def config_list(ctx: click.Context, show_all: bool) -> None:
    """List configuration keys and their values.

    By default, shows only non-default values.
    Use --all to show all available configuration keys.
    """
    console: Console = ctx.obj["console"]

    config = _load(ctx, _loader(ctx))
    defaults = Config.default()

    sections: dict[str, list[tuple[str, str, str]]] = defaultdict(list)

    for key in get_all_config_keys():
        section = key.split(".")[0]
        value = get_config_value(config, key)
        default_value = get_config_value(defaults, key)

        if value != default_value:
            source = "[custom]" if show_all else ""
        else:
            if not show_all:
                continue
            source = "[default]"

        if value is None:
            value_str = "null"
        elif isinstance(value, bool):
            value_str = str(value).lower()
        else:
            value_str = str(value)

        sections[section].append((key, value_str, source))

    if not sections:
        console.print("[yellow]No custom configuration set (all defaults)[/yellow]")
        console.print("Use 'noticon config list --all' to see all available keys")
        return

    for section in sorted(sections.keys()):
        console.print(f"\n[bold]{section}:[/bold]")
        for key, value, source in sections[section]:
            field = key.split(".", 1)[1]
            if source:
                console.print(f"  {field}: [cyan]{value}[/cyan] [dim]{source}[/dim]")
            else:
                console.print(f"  {field}: [cyan]{value}[/cyan]")


@config_group.command(name="reset")
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def config_reset(ctx: click.Context, force: bool) -> None:
    """Reset configuration to defaults.

    This will delete the configuration file, reverting all settings to defaults.
    """
    console: Console = ctx.obj["console"]
    loader = _loader(ctx)

    if not loader.exists():
        console.print("[yellow]Config file doesn't exist, nothing to reset[/yellow]")
        return

    if not force:
        console.print(
            "[yellow]This will delete your configuration file and reset all settings to defaults.[/yellow]"
        )
        if not click.confirm("Are you sure you want to continue?"):
            console.print("[yellow]Reset cancelled[/yellow]")
            return

    loader.config_file.unlink()
    console.print("[green]✓ Configuration reset to defaults[/green]")
    console.print(f"Config file removed: {loader.config_file}")
