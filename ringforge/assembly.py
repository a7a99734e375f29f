"""Ring assembly: stitching unordered ways into rings.

Ways are joined greedily by shared end nodes (compared by identity). A ring
grows at either end until it closes or no remaining way fits; then a new ring
is started. The first fitting way in pool order wins, so results on ambiguous
input depend on the order of the input ways (but are deterministic for a
fixed order).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterator, List, Optional, Sequence

from shapely.geometry import Polygon

from .core.errors import RingAssemblyError
from .core.geometry_utils import polygon_contains, polygon_from_positions
from .data import MapNode, NodeRegistry, OSMNode, OSMWay

logger = logging.getLogger(__name__)


class NodeRing:
    """Ordered MapNode sequence of a ring, with a lazily built polygon.

    For closed rings the first node is repeated at the end.
    """

    def __init__(self, nodes: Sequence[MapNode] = ()):
        self.nodes: List[MapNode] = list(nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[MapNode]:
        return iter(self.nodes)

    def __getitem__(self, index):
        return self.nodes[index]

    @property
    def first_node(self) -> MapNode:
        return self.nodes[0]

    @property
    def last_node(self) -> MapNode:
        return self.nodes[-1]

    def is_closed(self) -> bool:
        return len(self.nodes) > 1 and self.nodes[0] is self.nodes[-1]

    @cached_property
    def polygon(self) -> Polygon:
        return polygon_from_positions([node.pos for node in self.nodes])

    def contains(self, other: 'NodeRing') -> bool:
        """True if ``other``'s polygon lies within this ring's polygon."""
        return polygon_contains(self.polygon, other.polygon)

    def __repr__(self) -> str:
        return f"NodeRing({[node.handle for node in self.nodes]})"


@dataclass(frozen=True)
class RingSegment:
    """A way inside a ring, with the direction it is traversed in."""
    way: OSMWay
    forward: bool = True

    @property
    def start_node(self) -> OSMNode:
        return self.way.nodes[0] if self.forward else self.way.nodes[-1]

    @property
    def end_node(self) -> OSMNode:
        return self.way.nodes[-1] if self.forward else self.way.nodes[0]

    def nodes(self) -> List[OSMNode]:
        """Way nodes in traversal order."""
        return list(self.way.nodes) if self.forward else list(reversed(self.way.nodes))

    def __repr__(self) -> str:
        return f"({self.way.id}{'f' if self.forward else 'b'})"


class WayRing:
    """A ring under construction, made of consecutive ring segments.

    Adjacent segments share an end node. Segments are only added while the
    ring is being assembled; afterwards the ring is treated as immutable.
    """

    def __init__(self, first_way: OSMWay, registry: NodeRegistry):
        self.registry = registry
        self.segments: List[RingSegment] = [RingSegment(first_way, True)]
        self._node_ring: Optional[NodeRing] = None

    @property
    def first_node(self) -> OSMNode:
        return self.segments[0].start_node

    @property
    def last_node(self) -> OSMNode:
        return self.segments[-1].end_node

    @property
    def ways(self) -> List[OSMWay]:
        return [segment.way for segment in self.segments]

    def is_closed(self) -> bool:
        return self.first_node is self.last_node

    def try_add_way(self, way: OSMWay) -> bool:
        """Attach ``way`` at either end of the ring if one of its end nodes fits.

        Returns:
            True if the way was attached
        """
        first_way_node = way.nodes[0]
        last_way_node = way.nodes[-1]

        if self.last_node is first_way_node:
            self.segments.append(RingSegment(way, True))
        elif self.last_node is last_way_node:
            self.segments.append(RingSegment(way, False))
        elif self.first_node is last_way_node:
            self.segments.insert(0, RingSegment(way, True))
        elif self.first_node is first_way_node:
            self.segments.insert(0, RingSegment(way, False))
        else:
            return False

        self._node_ring = None
        return True

    def osm_nodes(self) -> List[OSMNode]:
        """Source nodes of the ring, joint nodes appearing once."""
        nodes: List[OSMNode] = []
        for segment in self.segments:
            segment_nodes = segment.nodes()
            if nodes:
                # joint node is already the last one collected
                segment_nodes = segment_nodes[1:]
            nodes.extend(segment_nodes)
        return nodes

    def node_ring(self) -> NodeRing:
        """The ring's MapNodes; built on first use."""
        if self._node_ring is None:
            self._node_ring = NodeRing(self.registry.map_nodes(self.osm_nodes()))
        return self._node_ring

    def __repr__(self) -> str:
        return f"WayRing({self.segments!r})"


@dataclass
class AssemblyResult:
    """Rings found by :func:`assemble_rings`, split by closure."""
    closed: List[WayRing] = field(default_factory=list)
    unclosed: List[WayRing] = field(default_factory=list)

    @property
    def rings(self) -> List[WayRing]:
        return self.closed + self.unclosed

    def all_closed(self) -> bool:
        return not self.unclosed


def assemble_rings(ways: Sequence[OSMWay], registry: NodeRegistry) -> AssemblyResult:
    """Stitch ``ways`` into maximal rings.

    The pool of unassigned ways is consumed as follows: a new ring starts
    with the last way of the pool, then the pool is scanned from the front
    for a way attaching to either end of the ring. A ring is finished as soon
    as it closes, or when no remaining way attaches to it.

    Args:
        ways: Ways to stitch; not modified
        registry: Registry used to resolve ring nodes

    Returns:
        AssemblyResult with closed and unclosed rings, each in creation order
    """
    pool = list(ways)
    result = AssemblyResult()
    current: Optional[WayRing] = None

    while pool:
        if current is None:
            current = WayRing(pool.pop(), registry)
        else:
            for index, way in enumerate(pool):
                if current.try_add_way(way):
                    del pool[index]
                    break
            else:
                logger.debug("ring %r cannot be extended further", current)
                result.unclosed.append(current)
                current = None

        if current is not None and current.is_closed():
            result.closed.append(current)
            current = None

    if current is not None:
        result.unclosed.append(current)

    logger.debug(
        "assembled %d way(s) into %d closed and %d unclosed ring(s)",
        len(ways), len(result.closed), len(result.unclosed),
    )
    return result


def build_rings(
    ways: Sequence[OSMWay],
    registry: NodeRegistry,
    require_closed_rings: bool,
) -> Optional[List[WayRing]]:
    """Stitch ``ways`` into rings.

    Args:
        ways: Ways to stitch; not modified
        registry: Registry used to resolve ring nodes
        require_closed_rings: If True, fail unless every ring closes

    Returns:
        Closed rings followed by unclosed rings, or None if closure was
        required and at least one ring stayed open

    Examples:
        >>> rings = build_rings([way_a, way_b], registry, True)
        >>> [ring.is_closed() for ring in rings]
        [True]
    """
    result = assemble_rings(ways, registry)
    if result.unclosed and require_closed_rings:
        return None
    return result.rings


def build_closed_rings(
    ways: Sequence[OSMWay],
    registry: NodeRegistry,
    relation_id: Optional[int] = None,
) -> List[WayRing]:
    """Like ``build_rings(..., True)`` but raises instead of returning None.

    Raises:
        RingAssemblyError: if at least one ring cannot be closed
    """
    result = assemble_rings(ways, registry)
    if result.unclosed:
        where = f" in relation {relation_id}" if relation_id is not None else ""
        raise RingAssemblyError(
            f"{len(result.unclosed)} ring(s){where} could not be closed",
            unclosed_rings=result.unclosed,
            relation_id=relation_id,
        )
    return result.closed


__all__ = [
    'NodeRing',
    'RingSegment',
    'WayRing',
    'AssemblyResult',
    'assemble_rings',
    'build_rings',
    'build_closed_rings',
]
