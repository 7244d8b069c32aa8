import pytest

from despeck.tile import Slice, TileIterator


def test_slice_valid_construction():
    s = Slice(2, 4)
    assert (s.start, s.stop) == (2, 4)


def test_slice_reversed_raises():
    with pytest.raises(ValueError):
        Slice(4, 2)


def test_slice_empty_raises():
    with pytest.raises(ValueError):
        Slice(3, 3)


def test_get_sub_valid():
    s1 = Slice(2, 6)
    sub = s1.get_sub(1, -1)
    assert (sub.start, sub.stop) == (3, 5)


@pytest.mark.parametrize("sub_start,sub_stop", [(1, 1), (-1, -1), (4, -4)])
def test_get_sub_invalid(sub_start, sub_stop):
    s1 = Slice(2, 6)
    with pytest.raises(ValueError):
        s1.get_sub(sub_start, sub_stop)


def test_slice_concatenation():
    s1 = Slice(0, 10)
    s2 = s1.get_sub(2, -2)
    assert s2.start == 2
    assert s2.stop == 8


def test_tile_iterator_no_overlap():
    tiles = list(TileIterator(4, 4, 2, 2))
    starts = [(h.start, w.start) for h, w in tiles]
    assert starts == [(0, 0), (0, 2), (2, 0), (2, 2)]
    assert all(h.stop - h.start == 2 and w.stop - w.start == 2 for h, w in tiles)


def test_tile_iterator_square_matches_general():
    assert list(TileIterator.square(6, 5, 3, 1, 0)) == list(
        TileIterator(6, 5, 3, 3, 1, 0)
    )


def test_tile_iterator_with_overlaps():
    tiles = list(TileIterator(5, 5, 4, 4, overlap_border=1, overlap_tile=1))
    rows = sorted({h.start for h, _ in tiles})
    cols = sorted({w.start for _, w in tiles})
    assert rows == [-1, 1, 3]
    assert cols == [-1, 1, 3]
    assert len(tiles) == 9


def test_tile_iterator_inner_regions_cover_image():
    height, width, overlap = 7, 9, 1
    covered = set()
    for h, w in TileIterator(height, width, 5, 5, overlap, overlap):
        inner_h = h.get_sub(overlap, -overlap)
        inner_w = w.get_sub(overlap, -overlap)
        covered.update(
            (r, c)
            for r in range(inner_h.start, inner_h.stop)
            for c in range(inner_w.start, inner_w.stop)
        )
    assert {(r, c) for r in range(height) for c in range(width)} <= covered


def test_tile_iterator_rejects_non_advancing_step():
    with pytest.raises(ValueError):
        TileIterator(4, 4, 2, 2, 0, 1)