"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import Settings, load_config
from mdsite.core.load import load_document
from mdsite.core.pipeline import FORMAT_EXTENSIONS, render_document, resolve_content_root, run_build
from mdsite.core.route import route
from mdsite.errors import MdsiteError
from mdsite.logs import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging from it."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def build_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to build (default: content_dir)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="Output format: html or text")] = None,
    default_permalink: Annotated[Optional[bool], typer.Option(
        "--default-permalink/--no-default-permalink",
        help="Derive URLs from source paths when permalink is missing")] = None,
    wrap_page: Annotated[Optional[bool], typer.Option("--wrap-page/--no-wrap-page", help="Wrap HTML in a page")] = None,
    sidecar: Annotated[Optional[bool], typer.Option("--sidecar/--no-sidecar", help="Write metadata JSON sidecars")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each published document")] = False,
    ):
    """Render every markdown file under PATH and write it at its permalink."""
    settings = _settings(overrides={
        "output_dir": out, "output_format": fmt, "default_permalink": default_permalink,
        "wrap_page": wrap_page, "write_sidecar": sidecar, "log_level": "INFO" if verbose else None,
    })
    source = Path(path or settings.content_dir)
    try:
        report = run_build(source, settings)
    except MdsiteError as e:
        _fail("Build failed", e)

    for result in report.published:
        typer.echo(f"  {result.status}: {result.source} -> {result.output}")
    for src, error in report.failed:
        typer.echo(f"  failed: {src}: {error}", err=True)

    counts = report.counts
    typer.echo(
        f"Build complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged, "
        f"{counts['failed']} failed"
    )
    if not report.ok:
        raise typer.Exit(1)


def render_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to render")],
    fmt: Annotated[Optional[str], typer.Option("--format", help="Output format: html or text")] = None,
    wrap_page: Annotated[Optional[bool], typer.Option("--wrap-page/--no-wrap-page", help="Wrap HTML in a page")] = None,
    ):
    """Render a single file to stdout."""
    settings = _settings(overrides={"output_format": fmt, "wrap_page": wrap_page})
    try:
        document = load_document(Path(path))
        output = render_document(document, settings.output_format, settings.wrap_page)
    except MdsiteError as e:
        _fail("Render failed", e)
    typer.echo(output, nl=False)


def route_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to route")],
    default_permalink: Annotated[Optional[bool], typer.Option(
        "--default-permalink/--no-default-permalink",
        help="Derive the URL from the source path when permalink is missing")] = None,
    ):
    """Print the URL and output path a file would be published at."""
    settings = _settings(overrides={"default_permalink": default_permalink})
    try:
        document = load_document(Path(path))
        target = route(
            document,
            default=settings.default_permalink,
            content_root=resolve_content_root(document.source, settings, Path(path).parent),
            extension=FORMAT_EXTENSIONS[settings.output_format],
        )
    except MdsiteError as e:
        _fail("Route failed", e)
    typer.echo(target.url)
    typer.echo(Path(settings.output_dir) / Path(*target.path.parts))
