"""Finished areas produced by the builders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from shapely.geometry import Polygon

from .core.geometry_utils import polygon_from_positions
from .data import MapNode, OSMRelation, OSMWay

TagSource = Union[OSMRelation, OSMWay]


@dataclass(frozen=True, eq=False)
class MapArea:
    """A polygon-with-holes tagged with its source element.

    Attributes:
        tag_source: Relation (or sole outer way) whose tags describe the area
        outer_nodes: Outer boundary as a closed node loop
        holes: Hole boundaries, each a closed node loop
        polygon: Shapely polygon built from the node positions
    """
    tag_source: TagSource
    outer_nodes: Tuple[MapNode, ...]
    holes: Tuple[Tuple[MapNode, ...], ...]
    polygon: Polygon

    @classmethod
    def from_node_loops(
        cls,
        tag_source: TagSource,
        outer_nodes: Sequence[MapNode],
        holes: Sequence[Sequence[MapNode]] = (),
        outer_polygon: Optional[Polygon] = None,
        hole_polygons: Optional[Sequence[Polygon]] = None,
    ) -> 'MapArea':
        """Create an area, deriving its polygon from the node positions.

        Already computed ring polygons can be passed in to avoid rebuilding
        them.
        """
        if outer_polygon is None:
            outer_polygon = polygon_from_positions([n.pos for n in outer_nodes])
        if hole_polygons is None:
            hole_polygons = [polygon_from_positions([n.pos for n in hole]) for hole in holes]
        polygon = Polygon(
            outer_polygon.exterior.coords,
            [hole.exterior.coords for hole in hole_polygons],
        )
        return cls(
            tag_source=tag_source,
            outer_nodes=tuple(outer_nodes),
            holes=tuple(tuple(hole) for hole in holes),
            polygon=polygon,
        )

    @property
    def tags(self) -> Dict[str, str]:
        return self.tag_source.tags

    def all_nodes(self) -> Iterator[MapNode]:
        """Nodes of the outer ring followed by the nodes of every hole."""
        yield from self.outer_nodes
        for hole in self.holes:
            yield from hole

    def outer_positions(self) -> List[Tuple[float, float]]:
        return [node.pos for node in self.outer_nodes]

    def hole_positions(self) -> List[List[Tuple[float, float]]]:
        return [[node.pos for node in hole] for hole in self.holes]

    def __repr__(self) -> str:
        kind = type(self.tag_source).__name__
        return (
            f"MapArea(source={kind} {self.tag_source.id}, "
            f"outer={len(self.outer_nodes)} nodes, holes={len(self.holes)})"
        )


__all__ = [
    'MapArea',
    'TagSource',
]
