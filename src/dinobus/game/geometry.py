"""Axis-aligned bounding box helpers."""

from typing import Protocol


class Box(Protocol):
    """Anything with a top-left position and a size."""

    x: float
    y: float
    width: float
    height: float


def right_edge(box: Box) -> float:
    return box.x + box.width


def bottom_edge(box: Box) -> float:
    return box.y + box.height


def overlaps(a: Box, b: Box, padding: float = 0.0) -> bool:
    """Check whether two boxes overlap after shrinking both by ``padding``.

    Both boxes lose ``padding`` pixels on every side, so a positive padding
    makes hitboxes forgiving. Touching edges do not count as overlap.

    Args:
        a: First box
        b: Second box
        padding: Inward shrink applied to every side of both boxes

    Returns:
        True if the shrunken boxes intersect
    """
    return (
        a.x + padding < right_edge(b) - padding
        and right_edge(a) - padding > b.x + padding
        and a.y + padding < bottom_edge(b) - padding
        and bottom_edge(a) - padding > b.y + padding
    )
