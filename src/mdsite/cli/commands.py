"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import Settings, load_config
from mdsite.core.pipeline import BuildReport, list_documents, run_build, run_check
from mdsite.errors import AssemblyError, ParseError


InputArg = Annotated[Path, typer.Argument(exists=True, readable=True, help="Directory (or single file) of Markdown posts")]
DraftsOpt = Annotated[Optional[bool], typer.Option("--drafts/--no-drafts", help="Include posts marked draft: true")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _echo_errors(errors: list[ParseError]) -> None:
    for err in errors:
        typer.echo(f"  error: {err}", err=True)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _finish(report: BuildReport, summary: str) -> None:
    """Report parse errors and exit non-zero when any document was skipped."""
    _echo_errors(report.errors)
    if report.skipped_drafts:
        typer.echo(f"Skipped {len(report.skipped_drafts)} draft(s): {', '.join(report.skipped_drafts)}")
    typer.echo(summary)
    if not report.ok:
        raise typer.Exit(1)


def build_cmd(
    path: InputArg,
    out: Annotated[Optional[str], typer.Option("--out-dir", "-o", help="Output directory")] = None,
    stylesheet: Annotated[Optional[str], typer.Option("--stylesheet", help="YAML style rules merged over the defaults")] = None,
    drafts: DraftsOpt = None,
    inline_styles: Annotated[Optional[bool], typer.Option("--inline-styles/--no-inline-styles", help="Write resolved styles as style attributes")] = None,
    jobs: Annotated[Optional[int], typer.Option("--jobs", "-j", help="Render worker threads")] = None,
    ):
    """Render every post to HTML, plus index.html, the stylesheet and index.json."""
    settings = _settings(overrides={
        "output_dir": out, "stylesheet": stylesheet, "include_drafts": drafts,
        "inline_styles": inline_styles, "jobs": jobs,
    })
    output_dir = Path(settings.output_dir)
    try:
        report = run_build(path, output_dir, settings)
    except AssemblyError as e:
        _fail("Assembly failed, nothing written", e)
    except (ValueError, OSError) as e:
        _fail("Build failed", e)

    for page in report.index:
        typer.echo(f"  {page.document.slug} -> {output_dir / page.filename}")
    _finish(report, f"Rendered {len(report.pages)} page(s) to {output_dir}/")


def check_cmd(path: InputArg, drafts: DraftsOpt = None):
    """Parse and assemble every post without writing output."""
    settings = _settings(overrides={"include_drafts": drafts})
    try:
        report = run_check(path, settings)
    except AssemblyError as e:
        _fail("Assembly failed", e)
    except (ValueError, OSError) as e:
        _fail("Check failed", e)
    _finish(report, f"Checked {len(report.pages) + len(report.errors)} document(s), {len(report.errors)} error(s)")


def list_cmd(path: InputArg, drafts: DraftsOpt = None):
    """List posts newest-first as: date, identifier, title."""
    settings = _settings(overrides={"include_drafts": drafts})
    documents, errors = list_documents(path, settings)
    if not documents and not errors:
        typer.echo("No Markdown posts found.")
        raise typer.Exit(1)
    for doc in documents:
        flag = " (draft)" if doc.draft else ""
        typer.echo(f"{doc.date.isoformat()}  {doc.slug}  {doc.title}{flag}")
    _echo_errors(errors)
    if errors:
        raise typer.Exit(1)
