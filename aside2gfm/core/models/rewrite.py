"""
FileResult model — the per-file rewrite contract.

A FileResult is what the batch driver hands back for each file it
touched. The driver NEVER raises for a single file — failures are captured here.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


# Per-file pipeline stages: discovered → (read + transform) ready → done.
# A failed file keeps the last stage it reached.
Stage = Literal["discovered", "ready", "done"]

# Stage a file had reached when the named step failed
_STAGE_BEFORE = {"read": "discovered", "write": "ready", None: "discovered"}


class FileResult(BaseModel):
    """Outcome of rewriting one markdown file.

    ``stage`` is the last stage the file reached. ``failed_at`` names the
    I/O step that broke the pipeline, when one did. ``started_at`` is
    passed in by the caller when the file is picked up.
    """

    path: str
    status: Literal["ok", "failed"] = "ok"
    stage: Stage = "discovered"
    failed_at: Literal["read", "write"] | None = None

    asides: int = 0                 # occurrences converted
    changed: bool = False           # output differs from input
    written: bool = False           # bytes were written back to disk

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the file was processed without error."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the file failed to read or write."""
        return self.status == "failed"

    @classmethod
    def success(cls, path: str, **kwargs: Any) -> FileResult:
        """Create a success result."""
        return cls(path=path, status="ok", stage="done", **kwargs)

    @classmethod
    def failure(
        cls,
        path: str,
        failed_at: Literal["read", "write"] | None,
        error: str,
        **kwargs: Any,
    ) -> FileResult:
        """Create a failure result."""
        return cls(
            path=path,
            status="failed",
            stage=_STAGE_BEFORE[failed_at],
            failed_at=failed_at,
            error=error,
            **kwargs,
        )
