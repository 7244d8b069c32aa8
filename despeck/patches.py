"""Patches of covariance data and their pairwise dissimilarities."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .data import CovmatData, tileget
from .sim_measures import pixel_similarity_2x2, pixel_similarity_3x3
from .tile import TileIterator

_NLOOKS = 1

# Channels of (el_00, el_01real, el_01imag, el_11) in a 2x2 covariance stack.
_CHANNELS_2X2 = (0, 2, 3, 6)

# Channels of (a_00, a_11, a_22, a_01_real, a_01_imag, a_02_real, a_02_imag,
# a_12_real, a_12_imag) in a 3x3 covariance stack.
_CHANNELS_3X3 = (0, 8, 16, 2, 3, 4, 5, 10, 11)


def get_all_patches(training_data: CovmatData, patch_size: int) -> List[CovmatData]:
    """Cut the data into square patches, row by row, edges clamped."""
    tiles = TileIterator.square(
        training_data.height, training_data.width, patch_size, 0, 0
    )
    return [tileget(training_data, tile) for tile in tiles]


def _pick(pixels, channels: Sequence[int], name: str) -> np.ndarray:
    arr = np.asarray(pixels, dtype=np.float32)
    if arr.ndim == 0 or arr.shape[0] <= max(channels):
        raise ValueError(f"{name} holds too few channels")
    return arr[list(channels)]


def dissimilarity_2x2(first_pix, second_pix):
    """Dissimilarity of 2x2 covariance pixels given as channel vectors.

    Each argument holds the channels of one pixel along its first axis, or of
    many pixels as further axes; the result has the shape of those axes.
    """
    return pixel_similarity_2x2(
        _pick(first_pix, _CHANNELS_2X2, "first_pix"),
        _pick(second_pix, _CHANNELS_2X2, "second_pix"),
        _NLOOKS,
    )


def dissimilarity_3x3(first_pix, second_pix):
    """Dissimilarity of 3x3 covariance pixels given as channel vectors."""
    return pixel_similarity_3x3(
        _pick(first_pix, _CHANNELS_3X3, "first_pix"),
        _pick(second_pix, _CHANNELS_3X3, "second_pix"),
        _NLOOKS,
    )


def dissimilarity(first: CovmatData, second: CovmatData) -> float:
    """Sum of the pixel dissimilarities of two patches of the same shape."""
    if (
        first.height != second.height
        or first.width != second.width
        or first.dim != second.dim
    ):
        raise ValueError(
            "patch dimensions do not match: "
            f"heights {first.height}, {second.height}; "
            f"widths {first.width}, {second.width}; "
            f"dims {first.dim}, {second.dim}"
        )
    if first.dim == 2:
        measure = dissimilarity_2x2
    elif first.dim == 3:
        measure = dissimilarity_3x3
    else:
        raise ValueError("currently only 2x2 or 3x3 covariance matrices are supported")

    n_pixels = first.height * first.width
    first_pixels = first.data.reshape(first.size, n_pixels)
    second_pixels = second.data.reshape(second.size, n_pixels)
    sims = np.atleast_1d(measure(first_pixels, second_pixels))
    return float(np.sum(sims, dtype=np.float32))


def all_dissim_combs(patches: Sequence[CovmatData]) -> List[float]:
    """Dissimilarities of every pair of patches.

    The last patch is compared with all earlier ones in order, then the one
    before it, and so on down to the second.
    """
    result: List[float] = []
    for head_index in range(len(patches) - 1, 0, -1):
        head = patches[head_index]
        result.extend(dissimilarity(head, other) for other in patches[:head_index])
    return result