"""
Markdown transform utilities — aside → GFM alert conversion.

Converts theme-style asides:

    :::note
    Content here
    :::

into GitHub-flavored markdown alerts:

    > [!NOTE]
    > Content here

Everything here is pure text-in/text-out. No filesystem, no CLI — the
batch driver in ``batch_rewrite`` wraps these for whole directory trees.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass


# ── Aside Matching ──────────────────────────────────────────────────

# :::type, line break(s), shortest content, line break(s), closing :::
# No nesting — the first ::: that starts a line closes the block.
# A leading byte-order mark counts as start of line and stays outside the
# match. Content never spans \r or the Unicode line/paragraph separators.
_ASIDE_RE = re.compile(
    r"(?:^|(?<=\A\ufeff))"
    r":::([A-Za-z0-9_]+)\n+"
    r"((?:[^\r\n\u2028\u2029]|\n)+?)"
    r"\n+:::",
    re.MULTILINE,
)


@dataclass(frozen=True)
class AsideOccurrence:
    """One ``:::type`` … ``:::`` block found in a document.

    ``content`` runs from just after the opening line breaks to just
    before the line breaks preceding the closing ``:::``. ``start`` and
    ``end`` delimit the whole matched span in the source text.
    """

    type: str
    content: str
    start: int
    end: int


def find_asides(text: str) -> Iterator[AsideOccurrence]:
    """Yield every aside block in ``text``, in document order."""
    for m in _ASIDE_RE.finditer(text):
        yield AsideOccurrence(
            type=m.group(1),
            content=m.group(2),
            start=m.start(),
            end=m.end(),
        )


def count_asides(text: str) -> int:
    """Number of aside blocks ``asides_to_gfm`` would convert."""
    return sum(1 for _ in find_asides(text))


# ── Alert Formatting ────────────────────────────────────────────────


def format_alert(kind: str, content: str) -> str:
    """Render one aside as a GFM alert blockquote.

    The content block is stripped as a whole, so blank lines next to the
    delimiters vanish. Each remaining line gets a ``> `` prefix and then
    loses its trailing whitespace — a blank line becomes a bare ``>``.

    :::caution

    First paragraph.

    Second paragraph.

    :::

    becomes:

    > [!CAUTION]
    > First paragraph.
    >
    > Second paragraph.
    """
    lines = [f"> {line}".rstrip() for line in content.strip().split("\n")]
    return "\n".join([f"> [!{kind.upper()}]", *lines])


# ── Document Rewrite ────────────────────────────────────────────────


def asides_to_gfm(text: str) -> str:
    """Replace every aside block in ``text`` with its GFM alert.

    Text outside matched blocks is copied through unchanged. A document
    without asides is returned as-is.
    """
    parts: list[str] = []
    pos = 0
    for aside in find_asides(text):
        parts.append(text[pos:aside.start])
        parts.append(format_alert(aside.type, aside.content))
        pos = aside.end

    if not parts:
        return text

    parts.append(text[pos:])
    return "".join(parts)
