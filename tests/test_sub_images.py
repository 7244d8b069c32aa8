import numpy as np
import pytest

from despeck.sub_images import get_sub_image, write_sub_image


@pytest.fixture
def image():
    return np.arange(2 * 3 * 4, dtype=np.float32).reshape(2, 3, 4)


def test_full_extraction_is_identity(image):
    sub = get_sub_image(image, 0, 0, 3, 4)
    np.testing.assert_array_equal(sub, image)


def test_extraction_is_a_copy(image):
    sub = get_sub_image(image, 0, 0, 3, 4)
    sub[:] = -1
    assert image.min() >= 0


def test_inner_block(image):
    sub = get_sub_image(image, 1, 1, 2, 2)
    assert sub.shape == (2, 2, 2)
    np.testing.assert_array_equal(sub, image[:, 1:3, 1:3])


def test_top_edge_is_clamped(image):
    sub = get_sub_image(image, -2, 0, 3, 4)
    for row in range(3):
        np.testing.assert_array_equal(sub[:, row], image[:, 0])


def test_right_edge_is_clamped(image):
    sub = get_sub_image(image, 0, 3, 3, 3)
    for col in range(3):
        np.testing.assert_array_equal(sub[:, :, col], image[:, :, 3])


def test_write_then_read_round_trip(image):
    target = np.zeros_like(image)
    block = get_sub_image(image, 1, 0, 2, 3)
    write_sub_image(target, block, 1, 0)
    np.testing.assert_array_equal(get_sub_image(target, 1, 0, 2, 3), block)
    np.testing.assert_array_equal(target[:, 0], np.zeros((2, 4)))


def test_overlap_border_is_not_written():
    target = np.zeros((1, 3, 4), dtype=np.float32)
    write_sub_image(target, np.ones((1, 3, 4), dtype=np.float32), 0, 0, overlap=1)
    assert target.sum() == 2
    np.testing.assert_array_equal(target[0, 1, 1:3], [1, 1])


def test_overlap_larger_than_tile_writes_nothing(image):
    target = np.zeros_like(image)
    write_sub_image(target, image, 0, 0, overlap=2)
    assert not target.any()


def test_clamped_writes_keep_last(image):
    target = np.zeros((2, 3, 4), dtype=np.float32)
    sub = image[:, :2, :]
    write_sub_image(target, sub, -1, 0)
    np.testing.assert_array_equal(target[:, 0], image[:, 1])


def test_get_rejects_flat_image():
    with pytest.raises(ValueError):
        get_sub_image(np.zeros((3, 4)), 0, 0, 1, 1)


def test_write_rejects_channel_mismatch(image):
    with pytest.raises(ValueError):
        write_sub_image(image, np.zeros((1, 2, 2), dtype=np.float32), 0, 0)


def test_write_requires_array_target(image):
    with pytest.raises(TypeError):
        write_sub_image(image.tolist(), image, 0, 0)