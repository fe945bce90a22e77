"""
Domain models for the batch rewriter.

    from aside2gfm.core.models import FileResult
"""

from aside2gfm.core.models.rewrite import FileResult, Stage

__all__ = [
    "FileResult",
    "Stage",
]
