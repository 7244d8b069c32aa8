"""Rectangular tiles over an image and an iterator that walks them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Slice:
    """A half-open interval ``[start, stop)`` that is never empty."""

    start: int
    stop: int

    def __post_init__(self) -> None:
        if not self.start < self.stop:
            raise ValueError("start must be smaller than stop")

    def get_sub(self, sub_start: int, sub_stop: int) -> "Slice":
        """Shrink the slice by ``sub_start`` at the front and ``-sub_stop`` at the back."""
        if sub_start < 0 or sub_stop > 0:
            raise ValueError(
                "sub_start must be geq than 0 and sub_stop leq than 0"
            )
        return Slice(self.start + sub_start, self.stop + sub_stop)


Tile = Tuple[Slice, Slice]


@dataclass(frozen=True)
class TileIterator:
    """Iterates row by row over overlapping tiles that cover an image.

    Tiles start at ``-overlap_border`` in both directions and advance by
    ``tile size - 2 * overlap_tile`` until the image extent is passed.
    """

    max_height: int
    max_width: int
    tile_height: int
    tile_width: int
    overlap_border: int = 0
    overlap_tile: int = 0

    def __post_init__(self) -> None:
        if self.tile_height - 2 * self.overlap_tile <= 0:
            raise ValueError("tile height must exceed twice the tile overlap")
        if self.tile_width - 2 * self.overlap_tile <= 0:
            raise ValueError("tile width must exceed twice the tile overlap")

    @classmethod
    def square(
        cls,
        max_height: int,
        max_width: int,
        tile_size: int,
        overlap_border: int = 0,
        overlap_tile: int = 0,
    ) -> "TileIterator":
        """Build an iterator over square tiles of side ``tile_size``."""
        return cls(
            max_height, max_width, tile_size, tile_size, overlap_border, overlap_tile
        )

    def __iter__(self) -> Iterator[Tile]:
        step_h = self.tile_height - 2 * self.overlap_tile
        step_w = self.tile_width - 2 * self.overlap_tile
        h_low = -self.overlap_border
        w_low = -self.overlap_border
        while h_low < self.max_height:
            yield (
                Slice(h_low, h_low + self.tile_height),
                Slice(w_low, w_low + self.tile_width),
            )
            w_low += step_w
            if w_low >= self.max_width:
                w_low = -self.overlap_border
                h_low += step_h