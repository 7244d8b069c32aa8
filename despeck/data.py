"""Containers for SAR image stacks: interferometric, amplitude and covariance data."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TypeVar

import numpy as np

from .sub_images import get_sub_image, write_sub_image
from .tile import Tile


def _planes(*arrays: np.ndarray) -> list[np.ndarray]:
    planes = [np.asarray(a, dtype=np.float32) for a in arrays]
    shape = planes[0].shape
    if len(shape) != 2:
        raise ValueError("each input must be a two-dimensional image")
    if any(p.shape != shape for p in planes):
        raise ValueError("all inputs must have the same shape")
    return planes


@dataclass(eq=False)
class _SarData:
    """A float32 stack of shape ``(channels, height, width)``."""

    data: np.ndarray

    _CHANNELS = 0

    def _expected_channels(self) -> int:
        return self._CHANNELS

    def __post_init__(self) -> None:
        arr = np.asarray(self.data, dtype=np.float32)
        if arr.ndim != 3:
            raise ValueError("data must have shape (channels, height, width)")
        if arr.shape[0] != self._expected_channels():
            raise ValueError(
                f"expected {self._expected_channels()} channels, got {arr.shape[0]}"
            )
        self.data = arr

    @property
    def height(self) -> int:
        return self.data.shape[1]

    @property
    def width(self) -> int:
        return self.data.shape[2]

    @property
    def size(self) -> int:
        """Number of channels in the stack."""
        return self.data.shape[0]


@dataclass(eq=False)
class InsarData(_SarData):
    """Master and slave amplitudes, phase and the three filtered outputs."""

    _CHANNELS = 6

    @classmethod
    def from_arrays(
        cls, ampl_master, ampl_slave, phase, ref_filt, phase_filt, coh_filt
    ) -> "InsarData":
        return cls(
            np.stack(
                _planes(ampl_master, ampl_slave, phase, ref_filt, phase_filt, coh_filt)
            )
        )

    @property
    def dim(self) -> int:
        return 2

    @property
    def ampl_master(self) -> np.ndarray:
        return self.data[0]

    @property
    def ampl_slave(self) -> np.ndarray:
        return self.data[1]

    @property
    def phase(self) -> np.ndarray:
        return self.data[2]

    @property
    def ref_filt(self) -> np.ndarray:
        return self.data[3]

    @property
    def phase_filt(self) -> np.ndarray:
        return self.data[4]

    @property
    def coh_filt(self) -> np.ndarray:
        return self.data[5]


@dataclass(eq=False)
class AmplData(_SarData):
    """An amplitude image and its filtered reflectivity."""

    _CHANNELS = 2

    @classmethod
    def from_arrays(cls, ampl, ref_filt) -> "AmplData":
        return cls(np.stack(_planes(ampl, ref_filt)))

    @property
    def ampl(self) -> np.ndarray:
        return self.data[0]

    @property
    def ref_filt(self) -> np.ndarray:
        return self.data[1]


@dataclass(eq=False)
class CovmatData(_SarData):
    """Raw and filtered ``dim x dim`` complex covariance matrices per pixel.

    Each matrix takes ``2 * dim * dim`` channels: element ``(i, j)`` has its
    real part at ``2 * (i * dim + j)`` and its imaginary part right after.
    """

    dim: int

    def _expected_channels(self) -> int:
        return 4 * self.dim * self.dim

    def __post_init__(self) -> None:
        if self.dim < 1:
            raise ValueError("dim must be positive")
        super().__post_init__()

    @classmethod
    def from_arrays(cls, covmat_raw, covmat_filt, dim: int) -> "CovmatData":
        raw = np.asarray(covmat_raw, dtype=np.float32)
        filt = np.asarray(covmat_filt, dtype=np.float32)
        expected = 2 * dim * dim
        for arr in (raw, filt):
            if arr.ndim != 3 or arr.shape[0] != expected:
                raise ValueError(
                    f"covariance inputs must have shape ({expected}, height, width)"
                )
        if raw.shape != filt.shape:
            raise ValueError("raw and filtered covariance must have the same shape")
        return cls(np.concatenate([raw, filt]), dim)

    @classmethod
    def from_insar(cls, data: InsarData) -> "CovmatData":
        """Build the 2x2 covariance matrix of an interferometric pair."""
        dim = data.dim
        stack = np.zeros((4 * dim * dim, data.height, data.width), dtype=np.float32)
        master = data.ampl_master
        slave = data.ampl_slave
        product = master * slave
        real = product * np.cos(data.phase)
        imag = product * np.sin(data.phase)
        stack[0] = master * master
        stack[2] = real
        stack[3] = imag
        stack[4] = real
        stack[5] = -imag
        stack[6] = slave * slave
        return cls(stack, dim)

    @property
    def covmat_raw(self) -> np.ndarray:
        return self.data[: 2 * self.dim * self.dim]

    @property
    def covmat_filt(self) -> np.ndarray:
        return self.data[2 * self.dim * self.dim :]


SarData = TypeVar("SarData", InsarData, AmplData, CovmatData)


def _extent(sub: Tile) -> tuple[int, int]:
    rows, cols = sub
    return rows.stop - rows.start, cols.stop - cols.start


def tileget(img_data: SarData, sub: Tile) -> SarData:
    """Cut the tile ``sub`` out of ``img_data``, clamping at the edges."""
    rows, cols = sub
    height, width = _extent(sub)
    block = get_sub_image(img_data.data, rows.start, cols.start, height, width)
    return replace(img_data, data=block)


def tilecpy(img_data: SarData, img_tile: SarData, sub: Tile) -> None:
    """Copy ``img_tile`` into ``img_data`` at the place given by ``sub``."""
    if img_tile.data.shape[1:] != _extent(sub):
        raise ValueError("tile data does not match the extent of sub")
    rows, cols = sub
    write_sub_image(img_data.data, img_tile.data, rows.start, cols.start, 0)