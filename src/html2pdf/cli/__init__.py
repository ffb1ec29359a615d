from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..config import AppConfig, load_config
from ..core import ConversionService
from ..errors import ConfigError
from ..models import ConversionOptions

console = Console(soft_wrap=True)
error_console = Console(stderr=True, soft_wrap=True)

app = typer.Typer(help="Convert HTML and XHTML documents to PDF", no_args_is_help=True)


def _load_config(path: Path | None) -> AppConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        error_console.print(f"[red]Conversion failed[/red]: {exc.code} - {escape(str(exc))}")
        raise typer.Exit(1) from exc


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"html2pdf {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Print version information and exit",
    ),
) -> None:
    pass


@app.command()
def convert(
    input_path: Path = typer.Option(..., "--input", "-i", help="The html input file", metavar="<input>"),
    output_path: Path = typer.Option(..., "--output", "-o", help="The PDF output file", metavar="<output>"),
    fonts: list[str] | None = typer.Option(
        None,
        "--font",
        "-f",
        help="Load truetype font",
        metavar="<name>,<weight>,<filename>",
    ),
    base: str | None = typer.Option(None, "--base", help="The base path (base uri) for resources", metavar="<path>"),
    xhtml: bool = typer.Option(
        False,
        "--xhtml",
        "-x",
        help="The input file is valid XHTML (skip the HTML to XHTML step)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet logging (ignored with --verbose)"),
    block: bool = typer.Option(False, "--block", "-b", help="Block linked resources (CSS, images, fonts)"),
    accessible: bool = typer.Option(False, "--accessible", "-a", help="Force PDF/UA and PDF/A-3u conformance"),
    config: Path | None = typer.Option(None, "--config", help="Path to html2pdf.toml"),
) -> None:
    """Converts a single html file into a PDF."""

    cfg = _load_config(config)
    options = ConversionOptions(
        input_path=input_path,
        output_path=output_path,
        base_path=base,
        xhtml=xhtml,
        block=block,
        accessible=accessible,
        verbose=verbose,
        quiet=quiet,
        fonts=tuple(fonts or ()),
    )
    service = ConversionService(cfg, console=console, error_console=error_console)
    result = service.convert(options)
    if not result.success:
        raise typer.Exit(result.exit_code)


if __name__ == "__main__":
    app()
