"""Common geometry helpers used by the ring builders.

Angles in ringforge are measured from a center point, clockwise from the
positive y axis ("north"), and normalised to ``[0, 2*pi)``. With this
convention the corners of an axis-aligned box are visited in the order
top-right, bottom-right, bottom-left, top-left as the angle grows.
"""

from typing import Iterable, List, Sequence, Tuple

import numpy as np
from shapely.geometry import Polygon

TWO_PI = 2.0 * np.pi

Position = Tuple[float, float]


def angle_to(center: Position, point: Position) -> float:
    """Angle of ``point`` as seen from ``center``.

    Args:
        center: Reference position (x, y)
        point: Target position (x, y)

    Returns:
        Angle in radians, clockwise from north, within ``[0, 2*pi)``

    Examples:
        >>> angle_to((0, 0), (0, 1))
        0.0
        >>> round(np.degrees(angle_to((0, 0), (1, 0))))
        90
    """
    return float(angles_from_center(center, [point])[0])


def angles_from_center(center: Position, points: Iterable[Position]) -> np.ndarray:
    """Vectorised :func:`angle_to` for many points."""
    coords = np.asarray(list(points), dtype=float).reshape(-1, 2)
    dx = coords[:, 0] - center[0]
    dy = coords[:, 1] - center[1]
    return np.mod(np.arctan2(dx, dy), TWO_PI)


def clockwise_sweep(start_angle: float, end_angle: float) -> float:
    """Angular distance travelled clockwise from ``start_angle`` to ``end_angle``."""
    return float(np.mod(end_angle - start_angle, TWO_PI))


def angles_within_sweep(
    start_angle: float,
    end_angle: float,
    candidates: Sequence[float],
) -> List[int]:
    """Indices of candidate angles passed on the clockwise sweep from start to end.

    Candidates exactly at either end of the sweep are excluded. The returned
    indices are ordered by their distance along the sweep.

    Examples:
        >>> corners = np.radians([45, 135, 225, 315])
        >>> angles_within_sweep(np.radians(100), np.radians(250), corners)
        [1, 2]
        >>> angles_within_sweep(np.radians(300), np.radians(10), corners)
        [3]
    """
    if len(candidates) == 0:
        return []
    sweep = clockwise_sweep(start_angle, end_angle)
    offsets = np.mod(np.asarray(candidates, dtype=float) - start_angle, TWO_PI)
    inside = np.flatnonzero((offsets > 0.0) & (offsets < sweep))
    return [int(i) for i in inside[np.argsort(offsets[inside], kind='stable')]]


def polygon_from_positions(positions: Sequence[Position]) -> Polygon:
    """Build a simple shapely polygon from a node loop.

    The loop may or may not repeat its first position at the end.

    Examples:
        >>> polygon_from_positions([(0, 0), (1, 0), (1, 1), (0, 0)]).area
        0.5
    """
    coords = list(positions)
    if len(coords) > 1 and coords[0] == coords[-1]:
        coords = coords[:-1]
    return Polygon(coords)


def polygon_contains(outer: Polygon, inner: Polygon) -> bool:
    """True if ``inner`` lies entirely within ``outer``.

    Degenerate input (overlapping or self-intersecting rings) gives whatever
    shapely's predicate answers; no attempt is made to repair it.
    """
    return bool(outer.contains(inner))


__all__ = [
    'TWO_PI',
    'Position',
    'angle_to',
    'angles_from_center',
    'clockwise_sweep',
    'angles_within_sweep',
    'polygon_from_positions',
    'polygon_contains',
]
