"""
Batch rewrite — apply the aside → GFM transform across a directory tree.

Every ``.md`` file below the root is an independent unit of work:

    discovered → read + transform (ready) → write (done)

Any unit may fail instead, keeping the last stage it reached. A failed
unit never affects its siblings: the batch waits for every unit to
settle before reporting.

Files are overwritten in place. There is no backup — a write that fails
after a successful read leaves that file in whatever state the OS left it.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from aside2gfm.core.models.rewrite import FileResult
from aside2gfm.core.services.md_transforms import asides_to_gfm, count_asides

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


class RewriteError(Exception):
    """Base for per-file rewrite failures."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")


class ReadError(RewriteError):
    """Raised when a markdown file cannot be read or decoded."""


class WriteError(RewriteError):
    """Raised when a transformed file cannot be written back."""


@dataclass
class BatchReport:
    """Result of rewriting every markdown file under a root."""

    root: str = ""
    dry_run: bool = False
    results: list[FileResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.failed)

    @property
    def changed(self) -> int:
        return sum(1 for r in self.results if r.changed)

    @property
    def all_ok(self) -> bool:
        return self.failed == 0

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def to_dict(self) -> dict:
        return {
            "root": self.root,
            "dry_run": self.dry_run,
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "changed": self.changed,
            "files": [r.model_dump(mode="json") for r in self.results],
        }


# ── Discovery ───────────────────────────────────────────────────────


def discover_markdown_files(root: Path) -> list[Path]:
    """Find every regular ``.md`` file below ``root``, sorted.

    Directories are never returned, even when their name ends in ``.md``.
    A root that is itself a markdown file yields just that file.
    """
    if root.is_file():
        return [root] if root.name.endswith(MARKDOWN_SUFFIX) else []

    files = sorted(
        p for p in root.rglob(f"*{MARKDOWN_SUFFIX}")
        if p.is_file()
    )
    logger.debug("Discovered %d markdown file(s) under %s", len(files), root)
    return files


# ── Per-file pipeline ───────────────────────────────────────────────


def _read(path: Path) -> str:
    # Raw bytes keep \r\n and friends exactly as they were on disk.
    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(path, exc) from exc


def _write(path: Path, text: str) -> None:
    try:
        path.write_bytes(text.encode("utf-8"))
    except OSError as exc:
        raise WriteError(path, exc) from exc


def rewrite_file(path: Path, *, dry_run: bool = False) -> FileResult:
    """Read, transform and write back one markdown file.

    Never raises for I/O problems — they come back as a failed
    FileResult naming the step that broke.

    Args:
        path: Markdown file to rewrite in place.
        dry_run: If True, transform but don't write.

    Returns:
        FileResult describing the outcome.
    """
    start = time.monotonic()
    started_at = datetime.now(UTC).isoformat()
    name = str(path)

    def _elapsed() -> int:
        return int((time.monotonic() - start) * 1000)

    try:
        original = _read(path)
    except ReadError as exc:
        return FileResult.failure(
            name,
            "read",
            str(exc.cause),
            started_at=started_at,
            duration_ms=_elapsed(),
        )

    rewritten = asides_to_gfm(original)
    asides = count_asides(original)
    changed = rewritten != original

    if dry_run:
        return FileResult(
            path=name,
            stage="ready",
            asides=asides,
            changed=changed,
            started_at=started_at,
            duration_ms=_elapsed(),
        )

    try:
        _write(path, rewritten)
    except WriteError as exc:
        return FileResult.failure(
            name,
            "write",
            str(exc.cause),
            asides=asides,
            changed=changed,
            started_at=started_at,
            duration_ms=_elapsed(),
        )

    return FileResult.success(
        name,
        asides=asides,
        changed=changed,
        written=True,
        started_at=started_at,
        duration_ms=_elapsed(),
    )


# ── Batch ───────────────────────────────────────────────────────────


def rewrite_tree(
    root: Path,
    *,
    max_workers: int | None = None,
    dry_run: bool = False,
) -> BatchReport:
    """Rewrite every markdown file under ``root`` concurrently.

    One unit of work per file. All units settle before this returns;
    a failing file is recorded in the report and never stops the others.

    Args:
        root: Directory (or single ``.md`` file) to process.
        max_workers: Cap on concurrent files. None runs every file at once.
        dry_run: If True, transform but don't write anything.

    Returns:
        BatchReport with one FileResult per discovered file, sorted by path.
    """
    report = BatchReport(root=str(root), dry_run=dry_run)
    files = discover_markdown_files(root)
    if not files:
        logger.info("No markdown files under %s", root)
        return report

    workers = len(files) if max_workers is None else max(1, min(max_workers, len(files)))
    logger.debug("Rewriting %d file(s) with %d worker(s)", len(files), workers)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {
            pool.submit(rewrite_file, path, dry_run=dry_run): path
            for path in files
        }
        for future in as_completed(futures):
            path = futures[future]
            try:
                result = future.result()
            except Exception as exc:
                # Anything rewrite_file didn't anticipate still stays per-file.
                logger.exception("Unexpected failure rewriting %s", path)
                result = FileResult.failure(str(path), None, str(exc))

            report.results.append(result)

            status_marker = "✓" if result.ok else "✗"
            if result.ok:
                logger.info(
                    "%s %s → %d aside(s)%s",
                    status_marker,
                    result.path,
                    result.asides,
                    "" if result.changed else " (unchanged)",
                )
            else:
                # Failures reach the user through the report
                logger.info(
                    "%s %s → %s failed: %s",
                    status_marker,
                    result.path,
                    result.failed_at or "rewrite",
                    result.error,
                )

    report.results.sort(key=lambda r: r.path)
    return report
