"""
Shared test fixtures and configuration.
"""

import logging
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def golden_input(fixtures_dir: Path) -> str:
    """Caution + note document in aside syntax."""
    return (fixtures_dir / "asides.md").read_text(encoding="utf-8")


@pytest.fixture
def golden_expected(fixtures_dir: Path) -> str:
    """The same document rendered as GFM alerts."""
    return (fixtures_dir / "asides.expected.md").read_text(encoding="utf-8")


@pytest.fixture
def docs_tree(tmp_path: Path, golden_input: str) -> Path:
    """A small docs tree: nested markdown, a non-markdown file, an .md dir."""
    root = tmp_path / "docs"
    (root / "guides" / "deep").mkdir(parents=True)
    (root / "assets.md").mkdir()  # directory, never a candidate

    (root / "index.md").write_text(golden_input, encoding="utf-8")
    (root / "guides" / "plain.md").write_text("# Plain\n\nNo asides here.\n", encoding="utf-8")
    (root / "guides" / "deep" / "tip.md").write_text(
        textwrap.dedent("""\
            # Tip

            :::tip
            Use the cache.
            :::
        """),
        encoding="utf-8",
    )
    (root / "notes.txt").write_text(":::note\nnot markdown\n:::\n", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI runs reconfigure the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
