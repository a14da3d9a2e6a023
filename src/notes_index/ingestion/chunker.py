"""Heading-aware Markdown chunking.

Notes are split at every heading line into sections that carry the full
ancestor breadcrumb (``["# Trip", "## Paris"]``).  Sections that are too
large are re-split on line boundaries, and lines that are still too large
are cut between characters, so no chunk ever ends in the middle of a
multi-byte UTF-8 sequence.

All sizes and positions are measured in UTF-8 bytes.
"""

from __future__ import annotations

from collections.abc import Iterator

from notes_index.ingestion.models import Chunk, Heading

# Target maximum size of a part produced by :func:`recursive_split`.
MAX_CHUNK_BYTES = 800
# Heading sections up to this size are kept whole.
SECTION_SPLIT_THRESHOLD_BYTES = 850

HEADING_MARKER = "#"


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _decode(data: bytes) -> str:
    # Offsets can drift on CRLF input and land inside a character.
    return data.decode("utf-8", errors="ignore")


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of *text* without their terminators.

    Lines are split on ``\\n``; a ``\\r`` directly before it is dropped and a
    final terminator does not open an extra empty line.
    """
    if not text:
        return
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    for line in lines:
        yield line[:-1] if line.endswith("\r") else line


def parse_heading(line: str) -> tuple[int, str] | None:
    """Return ``(level, label)`` when *line* is a heading, else ``None``."""
    stripped = line.lstrip()
    if not stripped.startswith(HEADING_MARKER):
        return None
    level = len(stripped) - len(stripped.lstrip(HEADING_MARKER))
    label = stripped[level:].strip()
    if not label:
        return None
    return level, label


# ── Header scanner ─────────────────────────────────────────────────────


def scan_headings(text: str) -> list[Heading]:
    """Find every heading line in *text*, in document order.

    Each preceding line counts as its byte length plus one terminator
    byte, so positions are exact for ``\\n`` line endings and drift by one
    byte per line for ``\\r\\n``.
    """
    headings: list[Heading] = []
    position = 0
    for line in iter_lines(text):
        parsed = parse_heading(line)
        if parsed is not None:
            level, label = parsed
            headings.append(Heading(level=level, text=label, position=position))
        position += _byte_len(line) + 1
    return headings


# ── Heading-path builder ───────────────────────────────────────────────


def build_heading_paths(headings: list[Heading]) -> list[list[str]]:
    """Return the breadcrumb (root first) of every heading.

    A heading closes every open heading at the same or a deeper level.
    """
    stack: list[tuple[int, str]] = []
    paths: list[list[str]] = []
    for heading in headings:
        while stack and stack[-1][0] >= heading.level:
            stack.pop()
        stack.append((heading.level, heading.label))
        paths.append([label for _, label in stack])
    return paths


# ── Section splitter ───────────────────────────────────────────────────


def split_sections(text: str, headings: list[Heading] | None = None) -> list[Chunk]:
    """Cut *text* into one raw segment per heading.

    A segment runs from its heading to the next heading of any level, so
    subheadings are never duplicated into their parent.  Text before the
    first heading is not part of any segment.  Without headings the whole
    document is returned as a single segment with an empty path.
    """
    if headings is None:
        headings = scan_headings(text)
    data = text.encode("utf-8")
    if not headings:
        return [Chunk(content=text, header_path=[], start_pos=0, end_pos=len(data))] if text else []

    paths = build_heading_paths(headings)
    segments: list[Chunk] = []
    for i, heading in enumerate(headings):
        end = headings[i + 1].position if i + 1 < len(headings) else len(data)
        segments.append(
            Chunk(
                content=_decode(data[heading.position : end]),
                header_path=paths[i],
                start_pos=heading.position,
                end_pos=end,
            )
        )
    return segments


# ── Bounded recursive splitter ─────────────────────────────────────────


def _split_characters(line: str, max_bytes: int) -> list[str]:
    """Greedily pack whole characters into parts of at most *max_bytes*."""
    parts: list[str] = []
    current: list[str] = []
    size = 0
    for char in line:
        width = _byte_len(char)
        if current and size + width > max_bytes:
            parts.append("".join(current))
            current, size = [], 0
        current.append(char)
        size += width
        if size > max_bytes:
            # A single character wider than the limit stands alone.
            parts.append("".join(current))
            current, size = [], 0
    if current:
        parts.append("".join(current))
    return parts


def recursive_split(text: str, max_bytes: int = MAX_CHUNK_BYTES) -> list[str]:
    """Split *text* into parts of at most *max_bytes* UTF-8 bytes.

    Lines are packed into parts whole; a flushed part loses its trailing
    whitespace.  A line longer than *max_bytes* by itself is cut between
    characters, and that path never trims, so single-line input is
    reproduced exactly by ``"".join(parts)``.
    """
    if _byte_len(text) <= max_bytes:
        return [text]

    parts: list[str] = []
    buffer = ""
    buffer_size = 0
    for line in iter_lines(text):
        line_with_newline = line + "\n"
        line_size = _byte_len(line_with_newline)

        if buffer_size + line_size <= max_bytes:
            buffer += line_with_newline
            buffer_size += line_size
            continue

        if buffer:
            parts.append(buffer.rstrip())
            buffer, buffer_size = "", 0

        if line_size - 1 > max_bytes:
            parts.extend(_split_characters(line, max_bytes))
        else:
            buffer, buffer_size = line_with_newline, line_size

    if buffer:
        parts.append(buffer.rstrip())
    return parts


def _subdivide(segment: Chunk, max_bytes: int, limit: int) -> list[Chunk]:
    """Re-split *segment* into parts that inherit its heading path."""
    chunks: list[Chunk] = []
    pos = segment.start_pos
    for part in recursive_split(segment.content, max_bytes):
        end = min(pos + _byte_len(part), limit)
        chunks.append(
            Chunk(content=part, header_path=list(segment.header_path), start_pos=pos, end_pos=end)
        )
        pos = end
    return chunks


# ── Entry point ────────────────────────────────────────────────────────


def chunk_markdown(
    text: str,
    *,
    max_bytes: int = MAX_CHUNK_BYTES,
    split_threshold: int = SECTION_SPLIT_THRESHOLD_BYTES,
) -> list[Chunk]:
    """Split a Markdown note into heading-annotated chunks.

    Parameters
    ----------
    text:
        Raw note content.
    max_bytes:
        Maximum UTF-8 size of a part produced by re-splitting.  Notes
        without headings are kept whole only up to this size.
    split_threshold:
        Heading sections up to this size are emitted unchanged; larger
        ones are re-split into parts of at most *max_bytes*.

    Returns
    -------
    list[Chunk]
        Chunks in document order; empty for empty input.
    """
    if not text:
        return []

    headings = scan_headings(text)
    segments = split_sections(text, headings)
    limit = _byte_len(text)
    threshold = split_threshold if headings else max_bytes

    chunks: list[Chunk] = []
    for segment in segments:
        if _byte_len(segment.content) <= threshold:
            chunks.append(segment)
        else:
            chunks.extend(_subdivide(segment, max_bytes, limit))
    return chunks
