# src/dotstream/cli.py
"""
dotstream 的命令列介面 (Typer + Rich)。

標準輸出可能承載渲染結果，因此所有提示訊息都寫到標準錯誤。
"""

# 1. 標準庫導入
import logging
import shutil
import subprocess
from pathlib import Path

# 2. 第三方庫導入
import typer
import yaml
from rich.console import Console
from rich.table import Table

# 3. 本專案導入
from dotstream.builders.graph_builder import load_graph_document
from dotstream.core.config_loader import DEFAULT_SESSION_PROFILE, ProfileLoader
from dotstream.core.enums import GraphKind, OutputFormat, Program
from dotstream.core.exceptions import DotStreamError
from dotstream.core.session import DotSession
from dotstream.renderers.stream_renderer import stream_graph
from dotstream.utils.logging_utils import logging_sink, setup_console_logging

app = typer.Typer(no_args_is_help=True)
console = Console(stderr=True)


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show lifecycle logs"),
) -> None:
    """Stream graphs into a Graphviz renderer process."""
    setup_console_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def render(
    graph_file: Path = typer.Argument(..., help="YAML graph document"),
    output_format: OutputFormat = typer.Option(None, "--format", "-T", help="Renderer output format"),
    program: Program = typer.Option(None, "--program", "-K", help="Layout program to run"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file path"),
    auto_name: bool = typer.Option(False, "--auto-name", help="Let the renderer pick the output file name"),
    to_stdout: bool = typer.Option(False, "--stdout", help="Relay renderer output to stdout"),
    profile: Path = typer.Option(None, "--profile", "-p", help="YAML session profile"),
    debug: bool = typer.Option(False, "--debug", help="Echo every DOT line to stderr"),
) -> None:
    """
    Render a YAML graph document.

    Examples:
        dotstream render graph.yaml -T svg -o graph.svg
        dotstream render graph.yaml -T dot --stdout
        dotstream render graph.yaml --profile neato.yaml
    """
    if to_stdout and (output is not None or auto_name):
        raise typer.BadParameter("--stdout cannot be combined with --output or --auto-name")

    try:
        G = load_graph_document(graph_file)
        overrides = {
            "output_format": output_format,
            "program": program,
            "graph_kind": GraphKind.DIRECTED if G.is_directed() else GraphKind.UNDIRECTED,
            "strict": G.graph.get("strict"),
            "debug": True if debug else None,
            "diagnostics": logging_sink(logging.DEBUG),
        }
        if profile is not None:
            kwargs = ProfileLoader(profile).session_kwargs()
        else:
            kwargs = dict(DEFAULT_SESSION_PROFILE["session"])
        kwargs.update({key: value for key, value in overrides.items() if value is not None})

        if to_stdout:
            kwargs["write_to_file"] = False
            kwargs["filename"] = None
        elif output is not None or auto_name:
            kwargs["write_to_file"] = True
            kwargs["filename"] = str(output) if output is not None else None

        with DotSession(**kwargs) as session:
            stats = stream_graph(session, G)
    except (DotStreamError, OSError, subprocess.SubprocessError) as e:
        console.print(f"[bold red]Render failed:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    console.print(
        f"[green]Rendered[/green] {stats['nodes']} nodes, {stats['edges']} edges, "
        f"{stats['clusters']} clusters with [bold]{' '.join(session.args)}[/bold]"
    )


@app.command("profile")
def update_profile(
    profile_path: Path = typer.Argument(..., help="YAML session profile to create or update"),
    assignments: list[str] = typer.Argument(..., help="KEY=VALUE pairs, e.g. program=neato"),
) -> None:
    """Create or update a session profile, keeping its comments."""
    updates = {}
    for assignment in assignments:
        key, sep, raw_value = assignment.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {assignment!r}")
        if "." not in key:
            key = f"session.{key}"
        updates[key] = yaml.safe_load(raw_value) if raw_value else None

    ProfileLoader.update_profile(profile_path, updates)
    console.print(f"[green]Updated[/green] {profile_path} ({', '.join(updates)})")


@app.command()
def programs() -> None:
    """List layout programs and whether they are on PATH."""
    table = Table(title="Graphviz layout programs")
    table.add_column("program")
    table.add_column("path")
    for prog in Program:
        path = shutil.which(prog.value)
        table.add_row(prog.value, path or "[red]not found[/red]")
    console.print(table)


if __name__ == "__main__":
    app()
