import numpy as np
import pytest

from despeck.data import CovmatData
from despeck.patches import (
    all_dissim_combs,
    dissimilarity,
    dissimilarity_2x2,
    dissimilarity_3x3,
    get_all_patches,
)


def _random_covmat(seed, dim, height, width):
    rng = np.random.default_rng(seed)
    m = rng.normal(size=(height, width, dim, dim)) + 1j * rng.normal(
        size=(height, width, dim, dim)
    )
    c = m @ np.conj(m).swapaxes(-1, -2) + np.eye(dim)
    flat = c.reshape(height, width, dim * dim)
    raw = (
        np.stack([flat.real, flat.imag], axis=-1)
        .reshape(height, width, 2 * dim * dim)
        .transpose(2, 0, 1)
    )
    return CovmatData.from_arrays(raw, raw, dim)


def test_all_patches_count_and_content():
    data = _random_covmat(0, 2, 4, 6)
    patches = get_all_patches(data, 2)
    assert len(patches) == 6
    assert all(p.height == 2 and p.width == 2 and p.dim == 2 for p in patches)
    np.testing.assert_array_equal(patches[0].data, data.data[:, 0:2, 0:2])
    np.testing.assert_array_equal(patches[1].data, data.data[:, 0:2, 2:4])
    np.testing.assert_array_equal(patches[3].data, data.data[:, 2:4, 0:2])
    np.testing.assert_array_equal(patches[-1].data, data.data[:, 2:4, 4:6])


def test_all_patches_clamp_at_edges():
    data = _random_covmat(1, 2, 3, 3)
    patches = get_all_patches(data, 2)
    assert len(patches) == 4
    last = patches[-1]
    np.testing.assert_array_equal(last.data[:, 0, 0], data.data[:, 2, 2])
    np.testing.assert_array_equal(last.data[:, 1, 1], data.data[:, 2, 2])


@pytest.mark.parametrize("dim", [2, 3])
def test_self_dissimilarity_is_zero(dim):
    patch = _random_covmat(2, dim, 3, 3)
    assert dissimilarity(patch, patch) == pytest.approx(0.0, abs=1e-2)


@pytest.mark.parametrize("dim", [2, 3])
def test_dissimilarity_symmetric_and_non_negative(dim):
    a = _random_covmat(3, dim, 3, 3)
    b = _random_covmat(4, dim, 3, 3)
    d_ab = dissimilarity(a, b)
    d_ba = dissimilarity(b, a)
    assert d_ab == pytest.approx(d_ba, rel=1e-4)
    assert d_ab > 0.0


def test_pixel_dissimilarity_2x2_identical_pixel():
    data = _random_covmat(5, 2, 1, 1)
    pixel = data.data[:, 0, 0]
    assert dissimilarity_2x2(pixel, pixel) == pytest.approx(0.0, abs=1e-3)


def test_pixel_dissimilarity_3x3_matches_patch_sum():
    a = _random_covmat(6, 3, 1, 2)
    b = _random_covmat(7, 3, 1, 2)
    per_pixel = [
        dissimilarity_3x3(a.data[:, 0, i], b.data[:, 0, i]) for i in range(2)
    ]
    assert dissimilarity(a, b) == pytest.approx(sum(per_pixel), rel=1e-4)


def test_pixel_dissimilarity_too_few_channels():
    with pytest.raises(ValueError):
        dissimilarity_3x3(np.ones(8), np.ones(8))


def test_dissimilarity_shape_mismatch():
    a = _random_covmat(8, 2, 2, 2)
    b = _random_covmat(9, 2, 3, 2)
    with pytest.raises(ValueError):
        dissimilarity(a, b)


def test_dissimilarity_dim_mismatch():
    a = _random_covmat(10, 2, 2, 2)
    b = _random_covmat(11, 3, 2, 2)
    with pytest.raises(ValueError):
        dissimilarity(a, b)


def test_dissimilarity_unsupported_dim():
    a = _random_covmat(12, 4, 2, 2)
    with pytest.raises(ValueError):
        dissimilarity(a, a)


def test_all_dissim_combs_order():
    p0, p1, p2 = (_random_covmat(s, 2, 2, 2) for s in (13, 14, 15))
    combs = all_dissim_combs([p0, p1, p2])
    expected = [dissimilarity(p2, p0), dissimilarity(p2, p1), dissimilarity(p1, p0)]
    assert combs == pytest.approx(expected)


def test_all_dissim_combs_count():
    patches = get_all_patches(_random_covmat(16, 2, 4, 4), 2)
    n = len(patches)
    assert len(all_dissim_combs(patches)) == n * (n - 1) // 2


def test_all_dissim_combs_single_patch():
    assert all_dissim_combs([_random_covmat(17, 2, 2, 2)]) == []