"""Determinants of Hermitian covariance matrices and pixel similarities.

The similarity functions accept scalars or numpy arrays for every matrix
element and compute in single precision. Results that are not a number are
reported as zero.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

Number = Union[float, np.ndarray]


def abs2(real: Number, imag: Number) -> Number:
    """Squared magnitude of a complex number."""
    return real * real + imag * imag


def det_covmat_2x2(el_00: Number, el_01real: Number, el_01imag: Number, el_11: Number) -> Number:
    """Determinant of a 2x2 Hermitian matrix."""
    return el_00 * el_11 - (el_01real * el_01real + el_01imag * el_01imag)


def det_covmat_3x3(
    a_00: Number,
    a_11: Number,
    a_22: Number,
    a_01_real: Number,
    a_01_imag: Number,
    a_02_real: Number,
    a_02_imag: Number,
    a_12_real: Number,
    a_12_imag: Number,
) -> Number:
    """Determinant of a 3x3 Hermitian matrix by the Leibniz formula."""
    return (
        a_00 * a_11 * a_22
        - a_00 * abs2(a_12_real, a_12_imag)
        - a_11 * abs2(a_02_real, a_02_imag)
        - a_22 * abs2(a_01_real, a_01_imag)
        + 2
        * (
            a_01_real * a_12_real * a_02_real
            - a_01_imag * a_12_imag * a_02_real
            + a_01_real * a_12_imag * a_02_imag
            + a_01_imag * a_12_real * a_02_imag
        )
    )


def _elements(pixel: Sequence, count: int, name: str) -> np.ndarray:
    arr = np.asarray(pixel, dtype=np.float32)
    if arr.ndim == 0 or arr.shape[0] != count:
        raise ValueError(f"{name} must hold {count} matrix elements")
    return arr


def _similarity(nom1, nom2, det, dimensions: int, nlooks: int) -> Number:
    with np.errstate(all="ignore"):
        sim = -np.float32(nlooks) * (
            np.float32(2 * dimensions) * np.log(np.float32(2.0))
            + np.log(nom1)
            + np.log(nom2)
            - np.float32(2) * np.log(det)
        )
    sim = np.where(np.isnan(sim), np.float32(0), sim).astype(np.float32)
    return float(sim) if sim.ndim == 0 else sim


def pixel_similarity_2x2(first: Sequence, second: Sequence, nlooks: int) -> Number:
    """Similarity of two 2x2 covariance matrices.

    Each pixel is ``(el_00, el_01real, el_01imag, el_11)``.
    """
    p1 = _elements(first, 4, "first")
    p2 = _elements(second, 4, "second")
    nom1 = det_covmat_2x2(*p1)
    nom2 = det_covmat_2x2(*p2)
    det = det_covmat_2x2(*(p1 + p2))
    return _similarity(nom1, nom2, det, 2, nlooks)


def pixel_similarity_3x3(first: Sequence, second: Sequence, nlooks: int) -> Number:
    """Similarity of two 3x3 covariance matrices.

    Each pixel is ``(a_00, a_11, a_22, a_01_real, a_01_imag, a_02_real,
    a_02_imag, a_12_real, a_12_imag)``.
    """
    p1 = _elements(first, 9, "first")
    p2 = _elements(second, 9, "second")
    nom1 = det_covmat_3x3(*p1)
    nom2 = det_covmat_3x3(*p2)
    det = det_covmat_3x3(*(p1 + p2))
    return _similarity(nom1, nom2, det, 3, nlooks)