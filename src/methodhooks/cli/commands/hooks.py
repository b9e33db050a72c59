"""
Hooks command for inspecting registered hooks
"""
import json
import sys
from pathlib import Path
from typing import Any, List

import typer
from rich.console import Console
from rich.table import Table

from methodhooks.core.inspection import HookInfo, describe_hooks, wrapped_operations
from methodhooks.core.utils.helpers import import_object
from methodhooks.core.utils.logger import get_logger

logger = get_logger(__name__)

app = typer.Typer(name="hooks", help="Inspect registered hooks")
console = Console()


def _load_target(reference: str, path: Path) -> Any:
    """
    Import the object named by reference, with path importable

    Importing runs the module, so hooks registered at import time are visible.
    """
    search_path = str(path.resolve())
    if search_path not in sys.path:
        sys.path.insert(0, search_path)
    target = import_object(reference)
    logger.debug(f"Loaded {reference}: {target!r}")
    return target


def _render_table(reference: str, infos: List[HookInfo]) -> None:
    table = Table(title=f"Hooks for {reference}")
    table.add_column("Operation", style="cyan")
    table.add_column("Stage", style="magenta")
    table.add_column("Scope")
    table.add_column("Owner")
    table.add_column("#", justify="right")
    table.add_column("Hook", style="green")

    for info in infos:
        table.add_row(
            info.operation,
            info.stage,
            info.scope,
            info.owner,
            str(info.position),
            info.hook_name,
        )
    console.print(table)


@app.command("list")
def list_hooks(
    reference: str = typer.Argument(..., help="Class or object to inspect, as package.module:attribute"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format: json or table"),
    path: Path = typer.Option(Path("."), "--path", "-p", help="Directory to add to the import path"),
):
    """
    List hooks that apply to a class or object, in dispatch order

    Examples:
        methodhooks hooks list myapp.system:System
        methodhooks hooks list myapp.system:default_system -f table
    """
    if output_format not in ("json", "table"):
        typer.echo(f"Error: unknown format '{output_format}', expected json or table", err=True)
        raise typer.Exit(1)

    try:
        target = _load_target(reference, path)
        infos = describe_hooks(target)
    except Exception as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(1)

    if output_format == "table":
        if not infos:
            console.print(f"No hooks registered for {reference}")
            return
        _render_table(reference, infos)
    else:
        typer.echo(json.dumps([info.to_dict() for info in infos], indent=2))


@app.command("wrapped")
def wrapped(
    reference: str = typer.Argument(..., help="Class to inspect, as package.module:attribute"),
    path: Path = typer.Option(Path("."), "--path", "-p", help="Directory to add to the import path"),
):
    """
    List operations with a hook wrapper installed on a class

    Example:
        methodhooks hooks wrapped myapp.system:System
    """
    try:
        target = _load_target(reference, path)
        if not isinstance(target, type):
            target = type(target)
        operations = wrapped_operations(target)
    except Exception as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps(operations, indent=2))
