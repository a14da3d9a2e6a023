"""Unit tests for image-link scanning and context resolution."""

from __future__ import annotations

import pytest

from notes_index.ingestion.image_context import (
    extract_context,
    extract_image_links,
    extract_section_context,
    resolve_image_contexts,
)
from notes_index.ingestion.models import ImageSyntax

TRAVEL_NOTE = """# 旅行日记

## 巴黎之旅

2024年春天，我去了巴黎。
埃菲尔铁塔非常壮观。

![[paris/eiffel.jpg]]

这是铁塔的照片。

## 伦敦之旅

伦敦的大本钟也很漂亮。
"""


def _offset(text: str, needle: str) -> int:
    return text.encode("utf-8").index(needle.encode("utf-8"))


# ── extract_image_links ───────────────────────────────────────────────


class TestExtractImageLinks:
    def test_embed_syntax(self) -> None:
        links = extract_image_links("![[a.png]] text")
        assert len(links) == 1
        assert links[0].syntax_kind is ImageSyntax.EMBED
        assert links[0].path == "a.png"
        assert links[0].position == 0
        assert links[0].context == ""

    def test_inline_syntax(self) -> None:
        links = extract_image_links("text ![alt](b.jpg)")
        assert len(links) == 1
        assert links[0].syntax_kind is ImageSyntax.INLINE
        assert links[0].path == "b.jpg"
        assert links[0].position == 5

    def test_mixed_syntaxes_sorted_by_position(self) -> None:
        markdown = "\n![[image1.png]]\n\nsome text\n\n![描述](image2.jpg)\n\nmore\n\n![[image3.png]]\n"
        links = extract_image_links(markdown)
        assert [(l.path, l.syntax_kind) for l in links] == [
            ("image1.png", ImageSyntax.EMBED),
            ("image2.jpg", ImageSyntax.INLINE),
            ("image3.png", ImageSyntax.EMBED),
        ]
        assert [l.position for l in links] == sorted(l.position for l in links)

    def test_positions_are_byte_offsets(self) -> None:
        links = extract_image_links("前面![[x.png]]")
        assert links[0].position == 6

    def test_overlapping_matches_are_all_reported(self) -> None:
        links = extract_image_links("![x](![[y.png]])")
        assert [(l.syntax_kind, l.position) for l in links] == [
            (ImageSyntax.INLINE, 0),
            (ImageSyntax.EMBED, 5),
        ]

    def test_empty_alt_text(self) -> None:
        links = extract_image_links("![](photos/cat.webp)")
        assert links[0].path == "photos/cat.webp"

    def test_no_images(self) -> None:
        assert extract_image_links("plain text\n[link](page.md)\n") == []

    def test_with_context_returns_new_link(self) -> None:
        link = extract_image_links("![[a.png]]")[0]
        described = link.with_context("caption")
        assert described.context == "caption"
        assert link.context == ""


# ── extract_context ───────────────────────────────────────────────────


class TestExtractContext:
    def test_window_spans_both_sides(self) -> None:
        content = "前面的文字内容。![[image.png]]后面的文字内容。"
        context = extract_context(content, _offset(content, "![["), 20)
        assert "前面的文字" in context
        assert "后面的文字" in context

    def test_window_is_clamped(self) -> None:
        assert extract_context("abcdef", 3, 2) == "bcde"
        assert extract_context("abcdef", 0, 10) == "abcdef"

    def test_offset_past_end(self) -> None:
        assert extract_context("abcdef", 100, 2) == "ef"

    def test_offset_inside_multibyte_character(self) -> None:
        assert extract_context("éabc", 1, 1) == "éa"

    def test_empty_text(self) -> None:
        assert extract_context("", 0, 5) == ""


# ── extract_section_context ───────────────────────────────────────────


class TestExtractSectionContext:
    def test_section_excludes_siblings(self) -> None:
        text = "# A\n\nx\n\n## B\n\ny\n\n## C\n\nz\n"
        context = extract_section_context(text, _offset(text, "y"))
        assert context == "## B\n\ny\n\n"
        assert "## C" not in context
        assert "z" not in context

    def test_deeper_headings_stay_in_section(self) -> None:
        text = "# A\n## B\nimg\n### C\nmore\n## D\nafter\n"
        context = extract_section_context(text, _offset(text, "img"))
        assert context == "## B\nimg\n### C\nmore\n"

    def test_section_runs_to_end_of_text(self) -> None:
        text = "# A\n## B\nlast image here"
        assert extract_section_context(text, _offset(text, "image")) == "## B\nlast image here"

    def test_no_enclosing_heading_returns_document(self) -> None:
        text = "intro ![[a.png]]\n# H\nbody\n"
        assert extract_section_context(text, _offset(text, "![[")) == text

    def test_travel_note(self) -> None:
        context = extract_section_context(TRAVEL_NOTE, _offset(TRAVEL_NOTE, "![["))
        assert "巴黎之旅" in context
        assert "埃菲尔铁塔" in context
        assert "伦敦" not in context

    def test_offset_at_heading_start(self) -> None:
        text = "# A\n## B\nx\n"
        assert extract_section_context(text, _offset(text, "## B")) == "## B\nx\n"

    def test_crlf_sections_use_exact_offsets(self) -> None:
        text = "# A\r\n\r\nx\r\n\r\n## B\r\n\r\ny ![[i.png]]\r\n\r\n## C\r\n\r\nz\r\n"
        link = extract_image_links(text)[0]
        context = extract_section_context(text, link.position)
        assert context == "## B\r\n\r\ny ![[i.png]]\r\n\r\n"

    def test_crlf_section_context_via_resolver(self) -> None:
        text = "# Trip\r\n## Paris\r\n![[paris.jpg]]\r\n## London\r\nrain\r\n"
        links = resolve_image_contexts(text)
        assert links[0].context == "## Paris\r\n![[paris.jpg]]\r\n"

    def test_empty_label_lines_are_not_boundaries(self) -> None:
        text = "## B\nimage\n#\nstill B\n"
        assert extract_section_context(text, _offset(text, "image")) == text


# ── resolve_image_contexts ────────────────────────────────────────────


class TestResolveImageContexts:
    def test_section_mode(self) -> None:
        links = resolve_image_contexts(TRAVEL_NOTE)
        assert len(links) == 1
        assert links[0].context.startswith("## 巴黎之旅")

    def test_window_mode(self) -> None:
        links = resolve_image_contexts("abc ![[x.png]] def", mode="window", context_chars=4)
        assert links[0].context == "abc ![[x"

    def test_unknown_mode_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported image context mode"):
            resolve_image_contexts("![[x.png]]", mode="paragraph")
