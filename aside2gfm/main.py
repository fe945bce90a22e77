"""
aside2gfm — CLI entrypoint.

Usage:
    aside2gfm docs/
    python -m aside2gfm docs/ --dry-run --json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from aside2gfm import __version__
from aside2gfm.core.observability.logging_config import setup_cli_logging


@click.command()
@click.version_option(version=__version__, prog_name="aside2gfm")
@click.argument(
    "path",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Max files processed at once (default: no limit).",
)
@click.option("--dry-run", is_flag=True, help="Transform but don't write any file.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    path: Path,
    workers: int | None,
    dry_run: bool,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Convert starlight-style asides (:::note) to GFM alerts ([!NOTE]).

    Rewrites every .md file under PATH in place. No backups are kept.
    """
    setup_cli_logging(debug=debug, verbose=verbose, quiet=quiet)

    from aside2gfm.core.services.batch_rewrite import rewrite_tree

    report = rewrite_tree(path, max_workers=workers, dry_run=dry_run)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        for result in report.results:
            if result.failed:
                click.secho(
                    f"❌ {result.path}: {result.failed_at or 'rewrite'} failed — {result.error}",
                    fg="red",
                    err=True,
                )
            elif dry_run and result.changed and not quiet:
                click.echo(f"   would rewrite {result.path} ({result.asides} aside(s))")

        if not quiet:
            verb = "would change" if dry_run else "changed"
            color = "green" if report.all_ok else "yellow"
            click.secho(
                f"{report.total} file(s) processed, {report.changed} {verb}, "
                f"{report.failed} failed",
                fg=color,
            )

    if not report.all_ok:
        sys.exit(1)


if __name__ == "__main__":
    cli()
