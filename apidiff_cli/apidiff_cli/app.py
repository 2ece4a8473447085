"""javaapidiff CLI application -- Typer-based entry point.

Compares two compiled Java API surfaces and reports added, removed and
changed packages, classes and methods.  The report goes to *stdout*
(Rich text, or JSON lines with ``--json``); errors, logs and the closing
summary go to *stderr* so that the report can be redirected cleanly.

Exit codes: 0 on success, 1 when ``--fail-on-diff`` is set and a
difference was reported, 2 on a usage error, 3 when an archive cannot
be loaded.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from apidiff_cli.display import ConsoleReportSink, JsonReportSink, display_diff_summary
from apidiff_core.config import Settings, load_settings

# ---------------------------------------------------------------------------
# App & consoles
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="javaapidiff",
    help="Compare two compiled Java API surfaces (jar, zip or class directory).",
    add_completion=False,
)
console = Console(stderr=True)
report_console = Console()

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _configure_logging(settings: Settings, verbose: bool) -> None:
    """Send log records to stderr; DEBUG with --verbose or APIDIFF_DEBUG."""
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(level=level, format=settings.log_format, stream=sys.stderr)
    logging.getLogger("apidiff_core").setLevel(level)


# ---------------------------------------------------------------------------
# Diff command
# ---------------------------------------------------------------------------


@app.command()
def diff(
    base: Path = typer.Argument(
        ...,
        help="Base (old) archive: a jar/zip file or a directory of .class files.",
    ),
    target: Path = typer.Argument(
        ...,
        help="Target (new) archive: a jar/zip file or a directory of .class files.",
    ),
    no_changed: bool = typer.Option(
        False,
        "--no-changed",
        help="Skip method-body change detection; only report added/removed items.",
    ),
    json_mode: bool = typer.Option(
        False,
        "--json",
        help="Emit one JSON object per report entry on stdout.",
    ),
    fail_on_diff: bool = typer.Option(
        False,
        "--fail-on-diff",
        help="Exit with code 1 when any difference is reported.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging on stderr.",
    ),
) -> None:
    """Report packages, classes and methods added, removed or changed between two archives.

    Examples::

        javaapidiff old.jar new.jar
        javaapidiff --no-changed old.jar new.jar
        javaapidiff --json --fail-on-diff build/classes-1.0 build/classes-1.1
    """
    from apidiff_core.diff import compare_api_models
    from apidiff_core.loader import ArchiveLoadError, load_archive

    settings = load_settings()
    _configure_logging(settings, verbose)

    detect_changes = settings.detect_changes and not no_changed
    fail_on_diff = fail_on_diff or settings.fail_on_diff

    try:
        left = load_archive(base)
        right = load_archive(target)
    except ArchiveLoadError as exc:
        console.print(f"[red]Failed to load archive: {escape(str(exc))}[/red]")
        raise typer.Exit(code=3) from exc

    if json_mode:
        summary = compare_api_models(
            left,
            right,
            JsonReportSink(sys.stdout),
            detect_changes=detect_changes,
        )
        sys.stdout.write(json.dumps({"summary": summary.model_dump()}, sort_keys=True) + "\n")
    else:
        summary = compare_api_models(
            left,
            right,
            ConsoleReportSink(report_console),
            detect_changes=detect_changes,
        )
        display_diff_summary(console, summary, left, right)

    logger.debug("Diff finished with %d report entries", summary.entries)

    if fail_on_diff and summary.has_differences:
        raise typer.Exit(code=1)
