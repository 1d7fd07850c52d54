from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

from vision_ocr.dto.geometry import BoundingBox

_NODE_CONFIG = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Symbol(BaseModel):
    """Single recognized character."""

    model_config = _NODE_CONFIG

    bounding_box: BoundingBox = Field(..., alias="boundingBox")
    confidence: float = Field(..., strict=True, description="Recognition confidence as reported, not validated.")
    text: str = Field(..., strict=True)


class Word(BaseModel):
    model_config = _NODE_CONFIG

    bounding_box: BoundingBox = Field(..., alias="boundingBox")
    confidence: float = Field(..., strict=True)
    symbols: tuple[Symbol, ...]

    @property
    def text(self) -> str:
        return "".join(symbol.text for symbol in self.symbols)


class Paragraph(BaseModel):
    model_config = _NODE_CONFIG

    bounding_box: BoundingBox = Field(..., alias="boundingBox")
    confidence: float = Field(..., strict=True)
    words: tuple[Word, ...]

    @property
    def text(self) -> str:
        """Words joined by a single space."""
        return " ".join(word.text for word in self.words)


class Block(BaseModel):
    """Region of the page holding one or more paragraphs."""

    model_config = _NODE_CONFIG

    bounding_box: BoundingBox = Field(..., alias="boundingBox")
    block_type: str = Field(..., alias="blockType", strict=True, description="Open enumeration, e.g. TEXT; kept as given.")
    confidence: float = Field(..., strict=True)
    paragraphs: tuple[Paragraph, ...]

    @property
    def text(self) -> str:
        """Paragraphs joined by a newline."""
        return "\n".join(paragraph.text for paragraph in self.paragraphs)


class Page(BaseModel):
    model_config = _NODE_CONFIG

    blocks: tuple[Block, ...]
    width: int | None = Field(default=None, strict=True, description="Page width in pixels, if reported.")
    height: int | None = Field(default=None, strict=True, description="Page height in pixels, if reported.")
    confidence: float | None = Field(default=None, strict=True)


class FullTextAnnotation(BaseModel):
    """Hierarchical result from ``responses[0].fullTextAnnotation``.

    The tree reads page -> block -> paragraph -> word -> symbol; every node
    owns its children and is immutable once decoded. The ``iter_*`` helpers
    walk it depth-first in document order.
    """

    model_config = _NODE_CONFIG

    pages: tuple[Page, ...]
    text: str | None = Field(default=None, strict=True, description="Whole document text as assembled by the service.")

    def iter_blocks(self) -> Iterator[Block]:
        for page in self.pages:
            yield from page.blocks

    def iter_paragraphs(self) -> Iterator[Paragraph]:
        for block in self.iter_blocks():
            yield from block.paragraphs

    def iter_words(self) -> Iterator[Word]:
        for paragraph in self.iter_paragraphs():
            yield from paragraph.words

    def iter_symbols(self) -> Iterator[Symbol]:
        for word in self.iter_words():
            yield from word.symbols
