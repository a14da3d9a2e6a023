"""Immutable value objects produced by the segmentation core."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Heading(BaseModel):
    """A Markdown heading line.

    Attributes
    ----------
    level:
        Number of leading ``#`` characters.
    text:
        Trimmed label with the markers removed (never empty).
    position:
        Byte offset of the heading's line start in the UTF-8 source.
    """

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1)
    text: str
    position: int = Field(ge=0)

    @property
    def label(self) -> str:
        """Breadcrumb form, e.g. ``"## Setup"``."""
        return f"{'#' * self.level} {self.text}"


class Chunk(BaseModel):
    """A bounded span of a note annotated with its heading breadcrumb.

    ``start_pos`` / ``end_pos`` are UTF-8 byte offsets into the source
    document.  For sub-parts of a re-split section they are accumulated
    from part lengths and may drift where trailing whitespace was trimmed.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    header_path: list[str] = Field(default_factory=list)
    start_pos: int = 0
    end_pos: int = 0


class ImageSyntax(str, Enum):
    """The two supported image-reference syntaxes."""

    EMBED = "embed"  # ![[path]]
    INLINE = "inline"  # ![alt](path)


class ImageLink(BaseModel):
    """An image reference found in a note."""

    model_config = ConfigDict(frozen=True)

    path: str
    position: int
    syntax_kind: ImageSyntax
    context: str = ""

    def with_context(self, context: str) -> ImageLink:
        """Return a copy carrying *context*."""
        return self.model_copy(update={"context": context})
