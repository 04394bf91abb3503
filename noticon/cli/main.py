"""Main CLI entry point for noticon."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from noticon.config.config import SystemConfig
from noticon.config.loader import ConfigLoader
from noticon.domain.exceptions import ConfigError

# Create console for rich output
console = Console()


def setup_logging(log_level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Set up logging configuration.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Add console handler (always enabled)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


@click.group()
@click.version_option(version="1.0.0", prog_name="noticon")
@click.option(
    "--config-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress output")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Set logging level",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write logs to this file (rotated at 10MB)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Optional[Path],
    verbose: bool,
    quiet: bool,
    log_level: Optional[str],
    log_file: Optional[Path],
) -> None:
    """noticon - resolve notification icons into cairo surfaces.

    Icons can be given as file paths, file:// URIs or bare names that are
    searched for in the configured icon path.
    """
    ctx.ensure_object(dict)

    ctx.obj["config_file"] = config_file
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = console
    ctx.obj["log_level"] = log_level

    # Flags win; system.log_level and system.log_file fill in what they leave unset
    system = _system_config(config_file)
    if verbose:
        effective_log_level = "DEBUG"
    elif quiet:
        effective_log_level = "ERROR"
    else:
        effective_log_level = log_level or system.log_level

    setup_logging(log_level=effective_log_level, log_file=log_file or system.log_file)


def _system_config(config_file: Optional[Path]) -> SystemConfig:
    try:
        return ConfigLoader(config_file).load().system
    except ConfigError as e:
        # The command itself loads the config again and reports the error
        logging.getLogger(__name__).debug("Using default logging settings: %s", e)
        return SystemConfig()


# Import and register commands
from noticon.cli.commands.config import config_group  # noqa: E402
from noticon.cli.commands.resolve import resolve, search  # noqa: E402

cli.add_command(resolve)
cli.add_command(search)
cli.add_command(config_group)


if __name__ == "__main__":
    cli()
