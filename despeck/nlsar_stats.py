"""Dissimilarity statistics used to weight NL-SAR patches, and their storage."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Union

import numpy as np
from scipy.stats import chi2

CHI2_DEGREES_OF_FREEDOM = 49
CHI2_CDF_INV_LAST = 100000.0

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True, order=True)
class Params:
    """A patch size and scale size pair; orders by patch size, then scale size."""

    patch_size: int
    scale_size: int


class Stats:
    """Look-up tables built from a sample of patch dissimilarities.

    ``quantilles[i]`` is the fraction of dissimilarities below
    ``dissims_min + i * (dissims_max - dissims_min) / lut_size``, and
    ``chi2cdf_inv`` holds the inverse chi-square distribution function with
    49 degrees of freedom on an even grid over ``[0, 1)``.
    """

    def __init__(self, dissims: Sequence[float], lut_size: int) -> None:
        if lut_size < 1:
            raise ValueError("lut_size must be positive")
        values = np.sort(np.asarray(dissims, dtype=np.float32).ravel())
        values = values[np.isfinite(values)]
        if values.size == 0:
            raise ValueError("no finite dissimilarities to build statistics from")

        self.lut_size = int(lut_size)
        self.dissims_min = float(values[0])
        self.dissims_max = float(values[-1])
        self.quantilles = self._quantilles(values)
        self.chi2cdf_inv = self._chi2cdf_inv()

    @classmethod
    def _restore(
        cls,
        lut_size: int,
        dissims_min: float,
        dissims_max: float,
        quantilles: Sequence[float],
        chi2cdf_inv: Sequence[float],
    ) -> "Stats":
        obj = cls.__new__(cls)
        obj.lut_size = int(lut_size)
        obj.dissims_min = float(dissims_min)
        obj.dissims_max = float(dissims_max)
        obj.quantilles = np.asarray(quantilles, dtype=np.float32)
        obj.chi2cdf_inv = np.asarray(chi2cdf_inv, dtype=np.float32)
        return obj

    def _quantilles(self, sorted_dissims: np.ndarray) -> np.ndarray:
        lo = np.float32(self.dissims_min)
        hi = np.float32(self.dissims_max)
        step = (hi - lo) / np.float32(self.lut_size)
        grid = lo + np.arange(self.lut_size, dtype=np.float32) * step
        below = np.searchsorted(sorted_dissims, grid, side="left")
        return (below.astype(np.float32) / np.float32(sorted_dissims.size)).astype(
            np.float32
        )

    def _chi2cdf_inv(self) -> np.ndarray:
        step = np.float32(1.0) / np.float32(self.lut_size)
        probs = np.arange(self.lut_size - 1, dtype=np.float32) * step
        inv = chi2.ppf(probs.astype(np.float64), CHI2_DEGREES_OF_FREEDOM)
        return np.append(inv, CHI2_CDF_INV_LAST).astype(np.float32)

    def max_quantilles_error(self) -> float:
        """Largest jump between neighbouring entries of the quantile table."""
        if self.quantilles.size < 2:
            raise ValueError("at least two quantiles are needed")
        return float(np.max(np.diff(self.quantilles)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stats):
            return NotImplemented
        return (
            self.lut_size == other.lut_size
            and self.dissims_min == other.dissims_min
            and self.dissims_max == other.dissims_max
            and np.array_equal(self.quantilles, other.quantilles)
            and np.array_equal(self.chi2cdf_inv, other.chi2cdf_inv)
        )

    def __repr__(self) -> str:
        return (
            f"Stats(lut_size={self.lut_size}, dissims_min={self.dissims_min}, "
            f"dissims_max={self.dissims_max})"
        )


StatsCollection = Dict[Params, Stats]


def store_stats_collection(collection: Mapping[Params, Stats], filename: PathLike) -> None:
    """Write a collection of statistics to ``filename`` as JSON."""
    entries = [
        {
            "patch_size": params.patch_size,
            "scale_size": params.scale_size,
            "lut_size": stats.lut_size,
            "dissims_min": stats.dissims_min,
            "dissims_max": stats.dissims_max,
            "quantilles": [float(q) for q in stats.quantilles],
            "chi2cdf_inv": [float(c) for c in stats.chi2cdf_inv],
        }
        for params, stats in sorted(collection.items())
    ]
    with open(filename, "w", encoding="utf-8") as stream:
        json.dump(entries, stream)


def load_stats_collection(filename: PathLike) -> StatsCollection:
    """Read a collection written by :func:`store_stats_collection`."""
    with open(filename, encoding="utf-8") as stream:
        entries = json.load(stream)
    if not isinstance(entries, list):
        raise ValueError("statistics file must hold a list of entries")
    collection: StatsCollection = {}
    for entry in entries:
        try:
            params = Params(int(entry["patch_size"]), int(entry["scale_size"]))
            collection[params] = Stats._restore(
                entry["lut_size"],
                entry["dissims_min"],
                entry["dissims_max"],
                entry["quantilles"],
                entry["chi2cdf_inv"],
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed statistics entry: {entry!r}") from exc
    return collection