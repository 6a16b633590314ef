"""
tsproject.cli - Typer CLI entry point.

Renders virtual project files and recovers cut marks from saved ones without
a mounted filesystem, for checking what the editor sees and sends back.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from tsproject import __version__
from tsproject.config import (
    CONFIG_FILENAME,
    TsProjectConfig,
    create_default_config,
    load_config,
    write_config,
)
from tsproject.exceptions import ConfigError
from tsproject.extract import extract_cutmarks
from tsproject.logging import configure_logging
from tsproject.models import CutMarks, TrimContext
from tsproject.project import ProjectFile

app = typer.Typer(
    name="tsproject",
    help="Virtual Kdenlive project files for trimming captured streams.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"tsproject {__version__}")
        raise typer.Exit()


def resolve_config(config_path: str | None) -> TsProjectConfig:
    """Load the given config file, or tsproject.yaml from the cwd if present."""
    if config_path is None:
        default = Path.cwd() / CONFIG_FILENAME
        if not default.exists():
            return TsProjectConfig()
        config_path = str(default)
    try:
        return load_config(Path(config_path))
    except (FileNotFoundError, ConfigError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """tsproject - virtual Kdenlive project files."""
    configure_logging(verbose)


@app.command("init-config")
def init_config(
    path: str = typer.Argument(CONFIG_FILENAME, help="Where to write the config"),
    mount: str = typer.Option("/mnt", "--mount", "-m", help="Mount root of the capture"),
) -> None:
    """Write a default configuration file."""
    config_path = Path(path)
    if config_path.exists():
        console.print(f"[red]Error: already exists: {config_path}[/red]")
        raise typer.Exit(1)

    write_config(create_default_config(mount), config_path)
    console.print(f"[green]✓[/green] Wrote {config_path}")


@app.command("render")
def render(
    frames: int = typer.Option(..., "--frames", "-n", help="Total frames of the media"),
    in_frame: int = typer.Option(0, "--in", "-i", help="Trim-in frame"),
    out_frame: int = typer.Option(-1, "--out", "-o", help="Trim-out frame, -1 for the end"),
    blank: int = typer.Option(0, "--blank", "-b", help="Leading blank in frames"),
    size: int = typer.Option(0, "--size", "-s", help="Media file size in bytes"),
    config_path: str | None = typer.Option(None, "--config", "-c", help="Config file"),
    output: str | None = typer.Option(None, "--output", "-O", help="Write to file"),
) -> None:
    """Render the project file the editor would read for a trim."""
    config = resolve_config(config_path)
    ctx = TrimContext(
        in_frame=in_frame,
        out_frame=out_frame,
        total_frames=frames,
        frame_count=frames,
        blank_length=blank,
        file_size=size,
        movie_path=config.movie_path,
        mount_root=config.mount_root,
    )
    project = ProjectFile.from_config(config)
    content = project.read(ctx, 0, project.content_size(ctx))

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(content)
        console.print(f"[green]✓[/green] Wrote {output_path} ({len(content)} bytes)")
    else:
        typer.echo(content.decode("utf-8"))


@app.command("extract")
def extract(
    project_file: str = typer.Argument(..., help="Project file saved by the editor"),
    config_path: str | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Recover the cut marks from a saved project file."""
    path = Path(project_file)
    if not path.exists():
        console.print(f"[red]Error: not found: {path}[/red]")
        raise typer.Exit(1)

    config = resolve_config(config_path)
    result = extract_cutmarks(path.read_bytes(), max_blank=config.max_blank_frames)
    if not isinstance(result, CutMarks):
        console.print(f"[red]Error: {result.kind.code}[/red] [dim]{result.detail}[/dim]")
        raise typer.Exit(1)

    table = Table(title="Cut Marks")
    table.add_column("In", style="cyan")
    table.add_column("Out", style="cyan")
    table.add_column("Blank", style="green")
    table.add_row(str(result.in_frame), str(result.out_frame), str(result.blank_length))
    console.print(table)
