"""Image references and the text that describes them.

Images are indexed by the prose around them: either a fixed window of
characters or the whole heading section the reference appears in.
Positions are UTF-8 byte offsets, matching :mod:`notes_index.ingestion.chunker`.
"""

from __future__ import annotations

import re

from notes_index.ingestion.chunker import parse_heading
from notes_index.ingestion.models import Heading, ImageLink, ImageSyntax

# Patterns run over the encoded text so match offsets are byte offsets.
_EMBED_RE = re.compile(rb"!\[\[([^\]]+)\]\]")
_INLINE_RE = re.compile(rb"!\[([^\]]*)\]\(([^)]+)\)")


def extract_image_links(text: str) -> list[ImageLink]:
    """Return every ``![[path]]`` and ``![alt](path)`` reference, by position.

    The two syntaxes are scanned independently; overlapping matches are
    all reported.
    """
    data = text.encode("utf-8")
    links = [
        ImageLink(path=m.group(1).decode("utf-8"), position=m.start(), syntax_kind=ImageSyntax.EMBED)
        for m in _EMBED_RE.finditer(data)
    ]
    links.extend(
        ImageLink(path=m.group(2).decode("utf-8"), position=m.start(), syntax_kind=ImageSyntax.INLINE)
        for m in _INLINE_RE.finditer(data)
    )
    links.sort(key=lambda link: link.position)
    return links


def _char_index(text: str, byte_offset: int) -> int:
    """Index of the first character at or after *byte_offset*."""
    consumed = 0
    for index, char in enumerate(text):
        if consumed >= byte_offset:
            return index
        consumed += len(char.encode("utf-8"))
    return len(text)


def extract_context(text: str, byte_offset: int, context_chars: int) -> str:
    """Return up to *context_chars* characters on each side of *byte_offset*.

    The window is measured in characters and clamped to the document, so
    it never cuts a multi-byte character.
    """
    center = _char_index(text, byte_offset)
    start = max(center - context_chars, 0)
    end = min(center + context_chars, len(text))
    return text[start:end]


def _section_headings(text: str) -> list[Heading]:
    """Headings with exact line-start byte offsets, ``\\r\\n`` included."""
    headings: list[Heading] = []
    position = 0
    for raw in text.split("\n"):
        parsed = parse_heading(raw[:-1] if raw.endswith("\r") else raw)
        if parsed is not None:
            level, label = parsed
            headings.append(Heading(level=level, text=label, position=position))
        position += len(raw.encode("utf-8")) + 1
    return headings


def extract_section_context(text: str, byte_offset: int) -> str:
    """Return the heading section that encloses *byte_offset*.

    The section starts at the closest heading at or before the offset and
    ends at the next heading of the same or a shallower level; deeper
    headings stay inside it.  Without an enclosing heading the whole
    document is returned.
    """
    headings = _section_headings(text)
    current = None
    for index, heading in enumerate(headings):
        if heading.position > byte_offset:
            break
        current = index
    if current is None:
        return text

    owner = headings[current]
    data = text.encode("utf-8")
    end = len(data)
    for heading in headings[current + 1 :]:
        if heading.level <= owner.level:
            end = heading.position
            break
    return data[owner.position : end].decode("utf-8", errors="ignore")


def resolve_image_contexts(
    text: str,
    *,
    mode: str = "section",
    context_chars: int = 200,
) -> list[ImageLink]:
    """Find image links and attach their context.

    *mode* is ``"section"`` (enclosing heading section) or ``"window"``
    (*context_chars* characters on each side).
    """
    links = extract_image_links(text)
    if mode == "window":
        return [link.with_context(extract_context(text, link.position, context_chars)) for link in links]
    if mode != "section":
        raise ValueError(f"Unsupported image context mode: {mode!r}")
    return [link.with_context(extract_section_context(text, link.position)) for link in links]
