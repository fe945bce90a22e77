"""
aside2gfm — convert theme asides (:::note) to GitHub-flavored markdown alerts.

The transform itself lives in ``aside2gfm.core.services.md_transforms`` and
can be imported without pulling in the CLI.
"""

__version__ = "0.1.0"
