"""Allow running noticon as ``python -m noticon``."""

from noticon.cli.main import cli

if __name__ == "__main__":
    cli()
