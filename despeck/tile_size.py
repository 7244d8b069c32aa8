"""Device buffer sizes of the NL-SAR filter and the choice of a tile size."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .log_setup import LOGGER_NAME, VERBOSE
from .optimal_tiling import all_pairs, scale_factor, sort_by_offcut, value_range

FLOAT_BYTES = 4
INT_BYTES = 4

THREADS_PER_DEVICE = 2
SAFETY_FACTOR = 0.75
TILE_STEP = 16
TILE_COUNT = 128

_log = logging.getLogger(LOGGER_NAME)


def _non_negative(value: int, name: str) -> int:
    if value < 0:
        raise ValueError(f"{name} is negative: the tile is too small")
    return value


@dataclass(frozen=True)
class BufferSizes:
    """Bytes taken by each buffer when filtering one tile."""

    data_height: int
    data_width: int
    data_dimensions: int
    search_window_size: int
    patch_sizes: Sequence[int]
    scale_sizes: Sequence[int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "patch_sizes", tuple(self.patch_sizes))
        object.__setattr__(self, "scale_sizes", tuple(self.scale_sizes))
        if not self.patch_sizes or not self.scale_sizes:
            raise ValueError("patch_sizes and scale_sizes must not be empty")

    @property
    def _patch_size_max(self) -> int:
        return max(self.patch_sizes)

    @property
    def _scale_size_max(self) -> int:
        return max(self.scale_sizes)

    @property
    def _wsh(self) -> int:
        return (self.search_window_size - 1) // 2

    def _height_overlap(self) -> int:
        return _non_negative(
            self.data_height - self._scale_size_max + 1, "height_overlap"
        )

    def _width_overlap(self) -> int:
        return _non_negative(self.data_width - self._scale_size_max + 1, "width_overlap")

    def _height_pixel_sim_symm(self) -> int:
        return _non_negative(self._height_overlap() - self._wsh, "height_pixel_sim_symm")

    def _width_pixel_sim_symm(self) -> int:
        return self._width_overlap()

    def _height_patch_sim_symm(self) -> int:
        return _non_negative(
            self._height_pixel_sim_symm() - self._patch_size_max + 1,
            "height_patch_sim_symm",
        )

    def _width_patch_sim_symm(self) -> int:
        return _non_negative(
            self._width_pixel_sim_symm() - self._patch_size_max + 1,
            "width_patch_sim_symm",
        )

    def _height_ori(self) -> int:
        return _non_negative(
            self._height_overlap() - self._patch_size_max - self.search_window_size + 2,
            "height_ori",
        )

    def _width_ori(self) -> int:
        return _non_negative(
            self._width_overlap() - self._patch_size_max - self.search_window_size + 2,
            "width_ori",
        )

    def _n_ori(self) -> int:
        return self._height_ori() * self._width_ori()

    def io_data(self) -> int:
        return self.data_height * self.data_width * FLOAT_BYTES

    def io_data_all(self) -> int:
        """Three input and three output images."""
        return 6 * self.io_data()

    def io_covmat(self) -> int:
        """A complex ``dim x dim`` matrix per pixel."""
        return 2 * self.data_dimensions * self.data_dimensions * self.io_data()

    def io_covmat_all(self) -> int:
        """Input, rescaled and output covariance matrices."""
        return 3 * self.io_covmat()

    def work_covmat(self) -> int:
        smax = self._scale_size_max
        return (
            2
            * self.data_dimensions
            * self.data_dimensions
            * (self.data_height - smax + 1)
            * (self.data_width + smax + 1)
            * FLOAT_BYTES
        )

    def best_idxs(self) -> int:
        return self._n_ori() * INT_BYTES

    def weights(self) -> int:
        return self.search_window_size * self.search_window_size * self._n_ori() * FLOAT_BYTES

    def weights_all(self) -> int:
        return len(self.patch_sizes) * len(self.scale_sizes) * self.weights()

    def alphas(self) -> int:
        return self._n_ori() * FLOAT_BYTES

    def pixel_similarities(self) -> int:
        wsh = self._wsh
        return (
            (wsh + self.search_window_size * wsh)
            * self._height_pixel_sim_symm()
            * self._width_pixel_sim_symm()
            * FLOAT_BYTES
        )

    def patch_similarities(self) -> int:
        wsh = self._wsh
        return (
            (self.search_window_size * wsh + wsh)
            * self._height_patch_sim_symm()
            * self._width_patch_sim_symm()
            * FLOAT_BYTES
        )

    def equivalent_number_of_looks(self) -> int:
        return self._n_ori() * FLOAT_BYTES

    def intensities_nl(self) -> int:
        return self.data_dimensions * self._n_ori() * FLOAT_BYTES

    def variances_nl(self) -> int:
        return self.data_dimensions * self._n_ori() * FLOAT_BYTES

    def weight_sums(self) -> int:
        return self._n_ori() * FLOAT_BYTES

    def all(self) -> int:
        """Total bytes of all buffers."""
        return (
            self.io_data_all()
            + self.io_covmat_all()
            + self.work_covmat()
            + self.best_idxs()
            + self.pixel_similarities()
            + self.patch_similarities()
            + self.weights()
            + self.weights_all()
            + self.alphas()
            + self.equivalent_number_of_looks()
            + self.intensities_nl()
            + self.variances_nl()
            + self.weight_sums()
        )


def _scale_factor32(p: Tuple[int, int]) -> float:
    h, w = p
    return float(np.float32(h * w) / np.float32(2 * h + 2 * w))


def tile_size(
    global_mem_size: int,
    max_mem_alloc_size: int,
    img_height: int,
    img_width: int,
    dimensions: int,
    search_window_size: int,
    patch_sizes: Sequence[int],
    scale_sizes: Sequence[int],
) -> Tuple[int, int]:
    """Pick the ``(height, width)`` of the tiles the filter should work on.

    Candidate sides are multiples of 16 up to 2048. Only tiles whose buffers
    fit into three quarters of the device memory are kept; among them the one
    with the largest area to perimeter ratio wins, ties going to the one that
    covers more pixels of the image.
    """
    if not patch_sizes or not scale_sizes:
        raise ValueError("patch_sizes and scale_sizes must not be empty")
    overlap = (
        (max(patch_sizes) - 1) // 2
        + (search_window_size - 1) // 2
        + (max(scale_sizes) - 1) // 2
    )
    _log.log(VERBOSE, "global memory size = %d", global_mem_size)
    _log.log(VERBOSE, "maximum memory allocation size = %d", max_mem_alloc_size)
    _log.log(VERBOSE, "number of threads = %d", THREADS_PER_DEVICE)

    alloc_budget = np.float32(SAFETY_FACTOR) * np.float32(max_mem_alloc_size)
    global_budget = np.float32(SAFETY_FACTOR) * np.float32(
        global_mem_size // THREADS_PER_DEVICE
    )

    fitting = []
    for pair in all_pairs(value_range(TILE_COUNT, TILE_STEP)):
        tile_height, tile_width = pair
        if tile_height <= 2 * overlap or tile_width <= 2 * overlap:
            continue
        try:
            required = BufferSizes(
                tile_height,
                tile_width,
                dimensions,
                search_window_size,
                patch_sizes,
                scale_sizes,
            ).all()
        except ValueError:
            continue
        required32 = np.float32(required)
        if required32 > alloc_budget or required32 > global_budget:
            continue
        fitting.append(pair)

    if not fitting:
        raise ValueError("no tile size fits into the device memory")

    candidates = sort_by_offcut(fitting, img_height, img_width, overlap)
    candidates.sort(key=_scale_factor32, reverse=True)
    return candidates[0]


__all__ = ["BufferSizes", "tile_size", "scale_factor"]