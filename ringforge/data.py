"""Input and node data model.

The ``OSM*`` classes describe the source data as handed over by an external
loader (positions already projected to a planar x/y system). :class:`MapNode`
is the internal node type; every MapNode lives in a :class:`NodeRegistry`,
which also owns the node lookup and the index of areas bordering each node.

All element classes compare by identity: two distinct node objects at the
same position are different nodes.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .core.errors import MissingNodeError, ValidationError
from .core.geometry_utils import Position

if TYPE_CHECKING:
    from .area import MapArea


@dataclass(eq=False)
class OSMNode:
    """Source node (point)."""
    id: int
    x: float
    y: float
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass(eq=False)
class OSMWay:
    """Source way: an ordered, directed sequence of at least two nodes."""
    id: int
    nodes: List[OSMNode]
    tags: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if len(self.nodes) < 2:
            raise ValidationError(
                f"way {self.id} has {len(self.nodes)} node(s), at least 2 are required"
            )

    @property
    def first_node(self) -> OSMNode:
        return self.nodes[0]

    @property
    def last_node(self) -> OSMNode:
        return self.nodes[-1]

    def is_closed(self) -> bool:
        return self.nodes[0] is self.nodes[-1]


@dataclass(eq=False)
class OSMMember:
    """Relation member with its role."""
    role: str
    member: Union[OSMNode, OSMWay, 'OSMRelation']


@dataclass(eq=False)
class OSMRelation:
    """Source relation."""
    id: int
    members: List[OSMMember] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)

    def is_multipolygon(self) -> bool:
        return self.tags.get('type') == 'multipolygon'


@dataclass
class OSMData:
    """A complete source dataset."""
    nodes: List[OSMNode] = field(default_factory=list)
    ways: List[OSMWay] = field(default_factory=list)
    relations: List[OSMRelation] = field(default_factory=list)

    def highest_node_id(self) -> int:
        return max((node.id for node in self.nodes), default=0)

    def highest_relation_id(self) -> int:
        return max((relation.id for relation in self.relations), default=0)

    def multipolygon_relations(self) -> List[OSMRelation]:
        return [r for r in self.relations if r.is_multipolygon()]

    def coastline_ways(self, tags: Optional[Dict[str, str]] = None) -> List[OSMWay]:
        """Ways carrying every key/value pair of ``tags`` (default ``natural=coastline``)."""
        wanted = tags if tags is not None else {'natural': 'coastline'}
        return [
            way for way in self.ways
            if all(way.tags.get(key) == value for key, value in wanted.items())
        ]


@dataclass(eq=False, frozen=True)
class MapNode:
    """Internal node.

    Attributes:
        handle: Index of the node in its registry
        pos: Planar position (x, y)
        source: The OSMNode this node was created for
    """
    handle: int
    pos: Position
    source: Optional[OSMNode] = None

    def __repr__(self) -> str:
        source_id = self.source.id if self.source is not None else None
        return f"MapNode(handle={self.handle}, pos={self.pos}, source={source_id})"


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangular data boundary."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self):
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValidationError(f"degenerate bounding box {self!r}")

    @classmethod
    def from_points(cls, points: Iterable[Position]) -> Optional['BoundingBox']:
        """Smallest box around ``points``; None if there are none."""
        pts = list(points)
        if not pts:
            return None
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def center(self) -> Position:
        return ((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    @property
    def top_right(self) -> Position:
        return (self.max_x, self.max_y)

    @property
    def bottom_right(self) -> Position:
        return (self.max_x, self.min_y)

    @property
    def bottom_left(self) -> Position:
        return (self.min_x, self.min_y)

    @property
    def top_left(self) -> Position:
        return (self.min_x, self.max_y)

    def corners(self) -> Tuple[Position, Position, Position, Position]:
        """Corners in clockwise order starting at the top right."""
        return (self.top_right, self.bottom_right, self.bottom_left, self.top_left)


class NodeRegistry:
    """Owner of all MapNodes of a dataset.

    Holds the node arena (MapNodes indexed by handle), the lookup from source
    nodes to MapNodes, and the append-only index of areas bordering each node.
    Mutating methods take the registry lock, so one registry can be shared by
    builders running in different threads.

    Examples:
        >>> registry = NodeRegistry()
        >>> node = registry.add(OSMNode(1, 0.0, 0.0))
        >>> registry.lookup(node.source) is node
        True
    """

    def __init__(self):
        self._nodes: List[MapNode] = []
        self._lookup: Dict[OSMNode, MapNode] = {}
        self._adjacent_areas: Dict[int, List['MapArea']] = defaultdict(list)
        self._lock = threading.Lock()

    @classmethod
    def from_osm_data(cls, data: OSMData) -> 'NodeRegistry':
        """Registry with one MapNode per dataset node, positioned at its x/y."""
        registry = cls()
        for osm_node in data.nodes:
            registry.add(osm_node)
        return registry

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[MapNode]:
        return iter(list(self._nodes))

    def __contains__(self, osm_node: OSMNode) -> bool:
        return osm_node in self._lookup

    def add(self, osm_node: OSMNode, pos: Optional[Position] = None) -> MapNode:
        """Create the MapNode for ``osm_node``; reuses an existing one."""
        with self._lock:
            existing = self._lookup.get(osm_node)
            if existing is not None:
                return existing
            if pos is None:
                pos = (float(osm_node.x), float(osm_node.y))
            return self._append(pos, osm_node)

    def mint(self, pos: Position, osm_node: OSMNode) -> MapNode:
        """Create a synthetic MapNode at ``pos`` for a freshly created source node."""
        with self._lock:
            return self._append((float(pos[0]), float(pos[1])), osm_node)

    def _append(self, pos: Position, osm_node: OSMNode) -> MapNode:
        node = MapNode(len(self._nodes), pos, osm_node)
        self._nodes.append(node)
        self._lookup[osm_node] = node
        return node

    def lookup(self, osm_node: OSMNode) -> MapNode:
        """MapNode for ``osm_node``.

        Raises:
            MissingNodeError: if the node was never added
        """
        try:
            return self._lookup[osm_node]
        except KeyError:
            raise MissingNodeError(osm_node) from None

    def map_nodes(self, osm_nodes: Iterable[OSMNode]) -> List[MapNode]:
        return [self.lookup(node) for node in osm_nodes]

    def node(self, handle: int) -> MapNode:
        return self._nodes[handle]

    def register_area(self, area: 'MapArea') -> None:
        """Record ``area`` as adjacent to each distinct node of its rings."""
        with self._lock:
            seen = set()
            for node in area.all_nodes():
                if node.handle in seen:
                    continue
                seen.add(node.handle)
                self._adjacent_areas[node.handle].append(area)

    def adjacent_areas(self, node: MapNode) -> List['MapArea']:
        """Areas bordering ``node``, in registration order."""
        return list(self._adjacent_areas.get(node.handle, ()))


__all__ = [
    'OSMNode',
    'OSMWay',
    'OSMMember',
    'OSMRelation',
    'OSMData',
    'MapNode',
    'BoundingBox',
    'NodeRegistry',
]
