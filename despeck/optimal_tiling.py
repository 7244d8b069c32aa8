"""Choosing tile shapes that cover an image with little waste."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

TileDim = Tuple[int, int]


def value_range(n: int, step: int) -> List[int]:
    """Return the first ``n`` positive multiples of ``step``."""
    return [(i + 1) * step for i in range(n)]


def all_pairs(values: Sequence[int]) -> List[TileDim]:
    """Return every ordered pair of ``values``, first element varying slowest."""
    return [(a, b) for a in values for b in values]


@dataclass(frozen=True)
class NmTiles:
    """Counts the tiles needed in each direction to cover an image."""

    img_height: int
    img_width: int
    overlap: int

    def __call__(self, tile_dim: TileDim) -> TileDim:
        tile_h, tile_w = tile_dim
        n_height = math.ceil(
            (self.img_height + 2 * self.overlap) / float(tile_h - 2 * self.overlap)
        )
        n_width = math.ceil(
            (self.img_width + 2 * self.overlap) / float(tile_w - 2 * self.overlap)
        )
        return n_height, n_width


def tiled_img_npixels(tile_dim: TileDim, nm_tiles: TileDim, overlap: int) -> int:
    """Number of useful pixels covered by ``nm_tiles`` tiles of ``tile_dim``."""
    n_tiles = nm_tiles[0] * nm_tiles[1]
    per_tile = (tile_dim[0] - 2 * overlap) * (tile_dim[1] - 2 * overlap)
    return n_tiles * per_tile


def retain_small_offcut_tiles(
    tiles: Iterable[TileDim],
    img_height: int,
    img_width: int,
    overlap: int,
    offcut: float = 1.1,
) -> List[TileDim]:
    """Keep tile shapes whose covered area is at most ``offcut`` times the image."""
    count = NmTiles(img_height, img_width, overlap)
    limit = offcut * img_height * img_width
    return [t for t in tiles if tiled_img_npixels(t, count(t), overlap) <= limit]


def sort_by_offcut(
    tiles: Iterable[TileDim], img_height: int, img_width: int, overlap: int
) -> List[TileDim]:
    """Sort tile shapes by covered area, largest first."""
    count = NmTiles(img_height, img_width, overlap)
    return sorted(
        tiles,
        key=lambda t: tiled_img_npixels(t, count(t), overlap),
        reverse=True,
    )


def biggest_tile(tiles: Iterable[TileDim]) -> TileDim:
    """Return the first tile shape with the largest area."""
    return max(tiles, key=lambda t: t[0] * t[1])


def scale_factor(p: TileDim) -> float:
    """Ratio of a tile's area to its perimeter."""
    h, w = p
    return (h * w) / (2 * h + 2 * w)