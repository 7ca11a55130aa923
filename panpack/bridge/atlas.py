"""Geometry of the procedural glyph atlas embedded in generated bridges."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GlyphAtlasLayout:
    """Monospace atlas of filled boxes, one cell per printable ASCII glyph.

    The generated bridge rasterizes this layout at runtime, so no font file
    ships with the application.
    """

    cell: int = 8
    columns: int = 16
    rows: int = 6
    first_char: int = 32
    glyph_count: int = 96
    inset: int = 1

    def __post_init__(self) -> None:
        if self.cell <= 0 or self.columns <= 0 or self.rows <= 0:
            raise ValueError("atlas cell size and grid must be positive")
        if self.glyph_count > self.columns * self.rows:
            raise ValueError("atlas grid too small for the requested glyph count")
        if not 0 <= self.inset < self.cell // 2:
            raise ValueError("glyph inset must leave a visible box inside each cell")

    @property
    def width(self) -> int:
        return self.cell * self.columns

    @property
    def height(self) -> int:
        return self.cell * self.rows

    @property
    def last_char(self) -> int:
        return self.first_char + self.glyph_count - 1


DEFAULT_ATLAS = GlyphAtlasLayout()

__all__ = ["DEFAULT_ATLAS", "GlyphAtlasLayout"]
