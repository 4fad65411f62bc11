"""Bounding box overlap tests."""

import pytest

from dinobus.game.entities import Entity, Obstacle, Player
from dinobus.game.geometry import bottom_edge, overlaps, right_edge


def box(x, y, w=40, h=40):
    return Entity(x=x, y=y, width=w, height=h)


def test_edges():
    b = box(10, 20, 30, 40)
    assert right_edge(b) == 40
    assert bottom_edge(b) == 60


def test_overlapping_boxes():
    assert overlaps(box(0, 0), box(20, 20))


def test_touching_edges_do_not_overlap():
    assert not overlaps(box(0, 0), box(40, 0))
    assert not overlaps(box(0, 0), box(0, 40))


def test_padding_shrinks_both_boxes():
    a, b = box(0, 0), box(25, 0)
    assert overlaps(a, b)
    # 15px of overlap disappears once each box loses 10px per side
    assert not overlaps(a, b, padding=10)


def test_overlap_is_symmetric():
    a, b = box(0, 0, 60, 40), box(35, 10, 30, 50)
    assert overlaps(a, b, 10) == overlaps(b, a, 10)


@pytest.mark.parametrize("w,h", [(0, 10), (10, 0), (-1, 5)])
def test_entities_need_positive_size(w, h):
    with pytest.raises(ValueError):
        Obstacle(x=0, y=0, width=w, height=h)


def test_deletion_flag_is_one_way():
    p = Player(x=0, y=0, width=10, height=10)
    assert not p.marked_for_deletion
    p.mark_for_deletion()
    p.mark_for_deletion()
    assert p.marked_for_deletion
