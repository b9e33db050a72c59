"""
CLI main entry point for methodhooks
"""

from pathlib import Path

import typer
from dotenv import load_dotenv

from methodhooks.cli.commands import hooks
from methodhooks.core.utils.logger import get_logger

logger = get_logger(__name__)


def _load_env_file():
    """
    Load .env from the working directory, without overriding the environment

    Picks up METHODHOOKS_* settings for the modules imported by commands.
    """
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)
        logger.debug(f"Loaded environment from {env_path}")


# Create Typer app
app = typer.Typer(
    name="methodhooks",
    help="Inspect method hooks registered on classes and objects",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def cli_callback(ctx: typer.Context):
    _load_env_file()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


app.add_typer(hooks.app, name="hooks", help="Inspect registered hooks")


@app.command()
def version():
    """Show version information."""
    from methodhooks import __version__
    typer.echo(f"methodhooks version {__version__}")


if __name__ == "__main__":
    app()
