"""Command-line interface for focuspoint."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from . import __version__
from .config import FocusOptions
from .errors import FocuspointError
from .formats import HEADER_LENGTH, SUPPORTED_FORMATS, sniff_format
from .geometry import Size
from .pipeline import focus_crop_directory, focus_crop_file

app = typer.Typer(
    name="focuspoint",
    help="Crop and resize images around a focus point",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)

console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit if --version flag is provided."""
    if value:
        typer.echo(f"focuspoint version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def parse_sizes(values: list[str] | None) -> list[Size]:
    """Parse --size values, exiting with an error message on bad input."""
    sizes = []
    for value in values or []:
        try:
            sizes.append(Size.parse(value))
        except FocuspointError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            console.print("Expected format: 'WIDTHxHEIGHT' (e.g., '800x600')")
            raise typer.Exit(1) from None
    return sizes


def build_options(**values) -> FocusOptions:
    """Build options from settings and CLI overrides, exiting on invalid values."""
    try:
        return FocusOptions.from_settings(**values)
    except ValueError as e:
        console.print(f"[red]Error:[/red] Invalid options: {escape(str(e))}")
        raise typer.Exit(1) from None


@app.command()
def crop(
    image_path: Path = typer.Argument(
        ...,
        help="Path to a JPEG or PNG image",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
    output_dir: Path = typer.Argument(
        ...,
        help="Output directory for cropped images",
    ),
    size: list[str] | None = typer.Option(
        None,
        "--size",
        "-s",
        help="Output size as 'WIDTHxHEIGHT'; repeat for several sizes (default: image size)",
    ),
    focus_x: float | None = typer.Option(
        None,
        "--focus-x",
        "-x",
        help="Horizontal focus in percent of the image width [0-100]",
    ),
    focus_y: float | None = typer.Option(
        None,
        "--focus-y",
        "-y",
        help="Vertical focus in percent of the image height [0-100]",
    ),
    quality: int | None = typer.Option(
        None,
        "--quality",
        "-q",
        min=0,
        max=3,
        help="Resampling quality [0-3]",
    ),
    alpha: bool | None = typer.Option(
        None,
        "--alpha/--no-alpha",
        help="Keep the alpha channel when resampling",
    ),
    unsharp_amount: float | None = typer.Option(
        None,
        "--unsharp-amount",
        help="Unsharp mask strength [0-500]",
    ),
    unsharp_threshold: float | None = typer.Option(
        None,
        "--unsharp-threshold",
        help="Unsharp mask threshold [0-100]",
    ),
    prefix: str | None = typer.Option(
        None,
        "--prefix",
        help="Prefix for output file names",
    ),
    suffix: str | None = typer.Option(
        None,
        "--suffix",
        help="Suffix for output file names; the size placeholder is replaced by WIDTHxHEIGHT",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Do not log timings",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Crop an image around a focus point to one or more sizes.

    The image is scaled to cover each size without distortion, then cropped so
    the focus point is as close to the center as the image allows.

    \b
    Example:
        focuspoint crop photo.jpg ./out --size 800x600 --size 300x300 -x 75 -y 40
    """
    configure_logging(verbose)
    sizes = parse_sizes(size)
    options = build_options(
        focus_x=focus_x,
        focus_y=focus_y,
        quality=quality,
        alpha=alpha,
        unsharp_amount=unsharp_amount,
        unsharp_threshold=unsharp_threshold,
        prefix=prefix,
        suffix=suffix,
        quiet=quiet or None,
    )

    if not options.quiet:
        console.print("[bold cyan]Focus Crop[/bold cyan]")
        console.print(f"Image: {image_path}")
        console.print(f"Output: {output_dir}")
        console.print(f"Sizes: {', '.join(str(s) for s in sizes) or 'original'}")
        console.print(f"Focus: {options.focus_x}%, {options.focus_y}%")
        console.print()

    try:
        written = focus_crop_file(image_path, output_dir, sizes, options)
    except (FocuspointError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    for path in written:
        console.print(f"[green]✓[/green] Wrote {path}")


@app.command()
def crop_directory(
    input_dir: Path = typer.Argument(
        ...,
        help="Directory containing images to crop",
        exists=True,
        file_okay=False,
        resolve_path=True,
    ),
    output_dir: Path = typer.Argument(
        ...,
        help="Output directory for cropped images",
    ),
    size: list[str] = typer.Option(
        ...,
        "--size",
        "-s",
        help="Output size as 'WIDTHxHEIGHT'; repeat for several sizes",
    ),
    pattern: str = typer.Option(
        "*",
        "--pattern",
        "-p",
        help="Glob pattern for input files",
    ),
    focus_x: float | None = typer.Option(
        None,
        "--focus-x",
        "-x",
        help="Horizontal focus in percent of the image width [0-100]",
    ),
    focus_y: float | None = typer.Option(
        None,
        "--focus-y",
        "-y",
        help="Vertical focus in percent of the image height [0-100]",
    ),
    quality: int | None = typer.Option(
        None,
        "--quality",
        "-q",
        min=0,
        max=3,
        help="Resampling quality [0-3]",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Crop every JPEG and PNG image in a directory around the same focus point.

    \b
    Example:
        focuspoint crop-directory ./photos ./thumbs -s 300x300 -s 1200x630
    """
    configure_logging(verbose)
    sizes = parse_sizes(size)
    # Per-image timings would interleave with the progress bar
    options = build_options(focus_x=focus_x, focus_y=focus_y, quality=quality, quiet=True)

    console.print("[bold cyan]Focus Crop Directory[/bold cyan]")
    console.print(f"Input: {input_dir}")
    console.print(f"Output: {output_dir}")
    console.print(f"Sizes: {', '.join(str(s) for s in sizes)}")
    console.print()

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Cropping images...", total=None)

            def update_progress(current: int, total: int) -> None:
                progress.update(task, completed=current, total=total)

            written = focus_crop_directory(
                input_dir=input_dir,
                output_dir=output_dir,
                sizes=sizes,
                options=options,
                pattern=pattern,
                progress_callback=update_progress,
            )
    except (FocuspointError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    console.print(f"[green]✓[/green] Wrote {len(written)} images to {output_dir}")


@app.command()
def sniff(
    file_path: Path = typer.Argument(
        ...,
        help="File to inspect",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
) -> None:
    """Detect an image's format from its leading bytes."""
    with file_path.open("rb") as f:
        image_format = sniff_format(f.read(HEADER_LENGTH))

    supported = image_format in SUPPORTED_FORMATS
    typer.echo(f"{image_format.value}\t{image_format.mimetype or '-'}\t{'supported' if supported else 'unsupported'}")
    if not supported:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
