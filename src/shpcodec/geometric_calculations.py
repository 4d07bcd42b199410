from __future__ import annotations

from collections.abc import Iterable

from .types import BBox, Point2D


def bbox_from_points(points: Iterable[Point2D]) -> BBox:
    """Calculates and returns the bounding box of a sequence of x, y pairs
    in a single pass. The first point seeds all four bounds. An empty
    sequence gives (0.0, 0.0, 0.0, 0.0)."""
    it = iter(points)
    try:
        x, y = next(it)
    except StopIteration:
        return 0.0, 0.0, 0.0, 0.0

    xmin = xmax = x
    ymin = ymax = y
    for x, y in it:
        if x < xmin:
            xmin = x
        elif x > xmax:
            xmax = x
        if y < ymin:
            ymin = y
        elif y > ymax:
            ymax = y
    return xmin, ymin, xmax, ymax


def bbox_overlap(bbox1: BBox, bbox2: BBox) -> bool:
    """Tests whether two bounding boxes overlap."""
    xmin1, ymin1, xmax1, ymax1 = bbox1
    xmin2, ymin2, xmax2, ymax2 = bbox2
    overlap = xmin1 <= xmax2 and xmin2 <= xmax1 and ymin1 <= ymax2 and ymin2 <= ymax1
    return overlap


def bbox_contains(bbox1: BBox, bbox2: BBox) -> bool:
    """Tests whether bbox1 contains bbox2, edges included."""
    xmin1, ymin1, xmax1, ymax1 = bbox1
    xmin2, ymin2, xmax2, ymax2 = bbox2
    contains = xmin1 <= xmin2 and xmax2 <= xmax1 and ymin1 <= ymin2 and ymax2 <= ymax1
    return contains


def bbox_union(bbox1: BBox, bbox2: BBox) -> BBox:
    """Returns the smallest bounding box covering both boxes."""
    xmin1, ymin1, xmax1, ymax1 = bbox1
    xmin2, ymin2, xmax2, ymax2 = bbox2
    return min(xmin1, xmin2), min(ymin1, ymin2), max(xmax1, xmax2), max(ymax1, ymax2)
