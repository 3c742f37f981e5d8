"""Tests for Rect value semantics."""

from shimmertrace.geometry.rect import EMPTY_RECT, PointF, Rect


def test_from_size():
    r = Rect.from_size(10, 20, 30, 40)
    assert r == Rect(10, 20, 40, 60)
    assert (r.width, r.height) == (30, 40)
    assert r.center == PointF(25, 40)


def test_union_ignores_empty():
    r = Rect(0, 0, 10, 10)
    assert EMPTY_RECT.union(r) == r
    assert r.union(Rect(5, 5, 5, 20)) == r
    assert r.union(Rect(5, 5, 20, 20)) == Rect(0, 0, 20, 20)


def test_inset_offset_sorted():
    r = Rect(0, 0, 10, 10)
    assert r.inset(2.5, 2.5) == Rect(2.5, 2.5, 7.5, 7.5)
    assert r.offset(1, -1) == Rect(1, -1, 11, 9)
    assert Rect(10, 10, 0, 0).sorted() == r
    assert Rect(10, 10, 0, 0).is_empty


def test_contains_is_half_open():
    r = Rect(0, 0, 10, 10)
    assert r.contains(0, 0)
    assert not r.contains(10, 5)
