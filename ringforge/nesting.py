"""Ring nesting: grouping closed rings into outer boundaries and holes.

Each round picks an outermost ring, collects the rings directly inside it as
holes, emits one area and removes the used rings. Rings nested deeper (an
island inside a hole) survive the round and become outers of their own
areas later on.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .area import MapArea, TagSource
from .assembly import NodeRing
from .data import NodeRegistry

logger = logging.getLogger(__name__)


def _is_contained_in_other(
    ring: NodeRing,
    rings: Sequence[NodeRing],
    exclude: Sequence[NodeRing] = (),
) -> bool:
    for other in rings:
        if other is ring or any(other is excluded for excluded in exclude):
            continue
        if other.contains(ring):
            return True
    return False


def find_outer_ring(rings: Sequence[NodeRing]) -> Optional[NodeRing]:
    """First ring, in list order, that no other ring contains."""
    for candidate in rings:
        if not _is_contained_in_other(candidate, rings):
            return candidate
    return None


def find_inner_rings(outer: NodeRing, rings: Sequence[NodeRing]) -> List[NodeRing]:
    """Rings directly inside ``outer``.

    A ring inside ``outer`` that is also inside some further ring (other
    than ``outer``) is nested deeper and is not returned.
    """
    inner_rings = []
    for ring in rings:
        if ring is outer or not outer.contains(ring):
            continue
        if not _is_contained_in_other(ring, rings, exclude=(outer,)):
            inner_rings.append(ring)
    return inner_rings


def build_areas_from_rings(
    tag_source: TagSource,
    rings: Sequence[NodeRing],
    registry: Optional[NodeRegistry] = None,
) -> List[MapArea]:
    """Group closed rings into areas with holes.

    Args:
        tag_source: Element whose tags all resulting areas carry
        rings: Closed rings; the sequence itself is not modified
        registry: If given, every area is registered as adjacent to its nodes

    Returns:
        One area per outer ring, in the order the outer rings were resolved

    Examples:
        >>> # A contains B contains C
        >>> areas = build_areas_from_rings(relation, [ring_a, ring_b, ring_c])
        >>> [(len(area.holes)) for area in areas]
        [1, 0]
    """
    remaining = list(rings)
    areas: List[MapArea] = []

    while remaining:
        outer = find_outer_ring(remaining)
        if outer is None:
            # every ring contains another one; only possible for degenerate input
            outer = remaining[0]
            logger.debug("no uncontained ring among %d, using the first", len(remaining))

        inner_rings = find_inner_rings(outer, remaining)

        area = MapArea.from_node_loops(
            tag_source,
            outer.nodes,
            [inner.nodes for inner in inner_rings],
            outer_polygon=outer.polygon,
            hole_polygons=[inner.polygon for inner in inner_rings],
        )
        areas.append(area)
        if registry is not None:
            registry.register_area(area)

        used = [outer] + inner_rings
        remaining = [ring for ring in remaining if not any(ring is u for u in used)]

    return areas


def containment_forest(rings: Sequence[NodeRing]) -> Dict[int, Optional[int]]:
    """Direct parent of each ring, by index.

    The parent of a ring is the container that holds no other container of
    the ring. Top-level rings map to None.

    Examples:
        >>> containment_forest([ring_a, ring_b, ring_c])  # A > B > C
        {0: None, 1: 0, 2: 1}
    """
    containers = {
        i: [j for j, other in enumerate(rings) if j != i and other.contains(ring)]
        for i, ring in enumerate(rings)
    }
    parents: Dict[int, Optional[int]] = {}
    for i, candidates in containers.items():
        parent = None
        for j in candidates:
            # direct parent: no other container of ring i lies inside j
            if not any(k != j and j in containers[k] for k in candidates):
                parent = j
                break
        parents[i] = parent
    return parents


__all__ = [
    'find_outer_ring',
    'find_inner_rings',
    'build_areas_from_rings',
    'containment_forest',
]
