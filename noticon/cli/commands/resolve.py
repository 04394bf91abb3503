"""Commands for resolving icons and inspecting the icon search."""

from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from noticon.application.use_cases import ResolveIcon, SearchIcon
from noticon.config.config import Config
from noticon.config.loader import ConfigLoader
from noticon.domain.exceptions import ConfigError


def _load_config(ctx: click.Context, overrides: dict[str, Any]) -> Config:
    console: Console = ctx.obj["console"]
    loader = ConfigLoader(config_file=ctx.obj.get("config_file"))
    try:
        return loader.load(cli_overrides=overrides)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e


def _icon_overrides(icon_path: Optional[str], max_size: Optional[int]) -> dict[str, Any]:
    icon: dict[str, Any] = {}
    if icon_path is not None:
        icon["icon_path"] = icon_path
    if max_size is not None:
        icon["max_icon_size"] = max_size
    return {"icon": icon} if icon else {}


@click.command()
@click.argument("icon", type=str)
@click.option("--icon-path", "-p", type=str, default=None, help="Colon-separated search path")
@click.option(
    "--max-size",
    "-s",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum icon side (0 = unlimited)",
)
@click.option(
    "--conversion",
    type=click.Choice(["png", "direct"]),
    default=None,
    help="Surface conversion route",
)
@click.option(
    "--output", "-o", type=click.Path(path_type=Path), default=None, help="Save the surface as PNG"
)
@click.pass_context
def resolve(
    ctx: click.Context,
    icon: str,
    icon_path: Optional[str],
    max_size: Optional[int],
    conversion: Optional[str],
    output: Optional[Path],
) -> None:
    """Resolve ICON (path, file:// URI or icon name) to a surface."""
    console: Console = ctx.obj["console"]

    overrides = _icon_overrides(icon_path, max_size)
    if conversion is not None:
        overrides["surface"] = {"conversion": conversion}
    config = _load_config(ctx, overrides)

    results = ResolveIcon(config).execute(icon)

    if not results["found"]:
        console.print(f"[red]✗ No icon could be resolved for '{icon}'[/red]")
        ctx.exit(1)

    console.print(f"[green]✓ Resolved {results['kind']} '{icon}'[/green]")
    console.print()

    table = Table(show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Size", f"{results['width']}x{results['height']}")
    table.add_row("Format", results["format"])
    table.add_row("Stride", str(results["stride"]))
    table.add_row("Max Icon Size", str(config.icon.max_icon_size or "unlimited"))
    table.add_row("Conversion", config.surface.conversion)
    console.print(table)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        results["surface"].write_to_png(str(output))
        console.print()
        console.print(f"[green]✓ Surface written to {output}[/green]")


@click.command()
@click.argument("name", type=str)
@click.option("--icon-path", "-p", type=str, default=None, help="Colon-separated search path")
@click.pass_context
def search(ctx: click.Context, name: str, icon_path: Optional[str]) -> None:
    """Show where the icon NAME is looked for, in order."""
    console: Console = ctx.obj["console"]

    config = _load_config(ctx, _icon_overrides(icon_path, None))
    candidates = SearchIcon(config).execute(name)

    console.print(Panel(f"[bold cyan]Icon search for '{name}'[/bold cyan]", expand=False))
    console.print()

    table = Table(show_header=True)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Candidate", style="white")
    table.add_column("Readable")
    for index, candidate in enumerate(candidates, start=1):
        readable = "[green]yes[/green]" if candidate["readable"] else "[dim]no[/dim]"
        table.add_row(str(index), candidate["path"], readable)
    console.print(table)

    first = next((c["path"] for c in candidates if c["readable"]), None)
    console.print()
    if first:
        console.print(f"First readable candidate: [cyan]{first}[/cyan]")
    else:
        console.print(f"[yellow]No readable candidate for '{name}'[/yellow]")
