"""Cutting sub-images out of channel stacks and writing them back.

Images are arrays of shape ``(channels, height, width)``. Coordinates that
fall outside the image are clamped to the nearest edge pixel.
"""

from __future__ import annotations

import numpy as np


def _as_stack(image: np.ndarray, name: str) -> np.ndarray:
    arr = np.asarray(image)
    if arr.ndim != 3:
        raise ValueError(f"{name} must have shape (channels, height, width)")
    if arr.shape[1] == 0 or arr.shape[2] == 0:
        raise ValueError(f"{name} must not be empty")
    return arr


def _clamped(low: int, count: int, limit: int) -> np.ndarray:
    return np.clip(np.arange(low, low + count), 0, limit - 1)


def _last_writes(dst: np.ndarray, src: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """For repeated destinations keep only the source that is written last."""
    targets, first_in_reversed = np.unique(dst[::-1], return_index=True)
    return targets, src[::-1][first_in_reversed]


def get_sub_image(
    image: np.ndarray,
    h_low: int,
    w_low: int,
    sub_img_height: int,
    sub_img_width: int,
) -> np.ndarray:
    """Return a copy of the block starting at ``(h_low, w_low)``, edges clamped."""
    image = _as_stack(image, "image")
    if sub_img_height < 0 or sub_img_width < 0:
        raise ValueError("sub-image dimensions must not be negative")
    _, height, width = image.shape
    rows = _clamped(h_low, sub_img_height, height)
    cols = _clamped(w_low, sub_img_width, width)
    return image[:, rows[:, None], cols[None, :]]


def write_sub_image(
    image: np.ndarray,
    sub_image: np.ndarray,
    h_low: int,
    w_low: int,
    overlap: int = 0,
) -> None:
    """Write ``sub_image`` into ``image`` in place at ``(h_low, w_low)``.

    A border of ``overlap`` pixels of the sub-image is left out. Positions
    outside the image are clamped to the edge; later writes win.
    """
    if not isinstance(image, np.ndarray):
        raise TypeError("image must be a numpy array to be written in place")
    image = _as_stack(image, "image")
    sub_image = _as_stack(sub_image, "sub_image")
    if sub_image.shape[0] != image.shape[0]:
        raise ValueError("image and sub_image must have the same number of channels")
    _, height, width = image.shape
    _, sub_height, sub_width = sub_image.shape

    rows_src = np.arange(overlap, sub_height - overlap)
    cols_src = np.arange(overlap, sub_width - overlap)
    if rows_src.size == 0 or cols_src.size == 0:
        return

    rows_dst, rows_src = _last_writes(
        np.clip(rows_src + h_low, 0, height - 1), rows_src
    )
    cols_dst, cols_src = _last_writes(
        np.clip(cols_src + w_low, 0, width - 1), cols_src
    )
    image[:, rows_dst[:, None], cols_dst[None, :]] = sub_image[
        :, rows_src[:, None], cols_src[None, :]
    ]