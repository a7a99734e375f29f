"""Areas from multipolygon relations, including relations with open member ways.

Known limitations:

* touching inner rings made of open ways cannot be reconstructed reliably;
* closed touching inner rings are kept as several touching holes.
"""

from __future__ import annotations

import logging
from typing import List

from .area import MapArea
from .assembly import build_rings
from .core.types import MemberRole
from .data import NodeRegistry, OSMRelation, OSMWay
from .nesting import build_areas_from_rings

logger = logging.getLogger(__name__)


def ring_member_ways(relation: OSMRelation) -> List[OSMWay]:
    return [
        member.member for member in relation.members
        if isinstance(member.member, OSMWay) and MemberRole.from_role(member.role) is not None
    ]


def is_simple_multipolygon(relation: OSMRelation) -> bool:
    """True if the relation has exactly one outer member, which is a way,
    and every outer/inner member way is closed.
    """
    outers = [m for m in relation.members if MemberRole.from_role(m.role) is MemberRole.OUTER]
    if len(outers) != 1 or not isinstance(outers[0].member, OSMWay):
        return False
    return all(way.is_closed() for way in ring_member_ways(relation))


def create_areas_for_simple_multipolygon(
    relation: OSMRelation,
    registry: NodeRegistry,
) -> List[MapArea]:
    """Single area straight from the member ways, without stitching or nesting.

    The relation must satisfy :func:`is_simple_multipolygon`. The area takes
    its tags from the relation if it carries more than one tag (i.e. more
    than ``type``), otherwise from the outer way.
    """
    outer_way = None
    holes = []

    for member in relation.members:
        if not isinstance(member.member, OSMWay):
            continue
        role = MemberRole.from_role(member.role)
        if role is MemberRole.INNER:
            holes.append(registry.map_nodes(member.member.nodes))
        elif role is MemberRole.OUTER:
            outer_way = member.member

    tag_source = relation if len(relation.tags) > 1 else outer_way
    area = MapArea.from_node_loops(tag_source, registry.map_nodes(outer_way.nodes), holes)
    registry.register_area(area)
    return [area]


def create_areas_for_advanced_multipolygon(
    relation: OSMRelation,
    registry: NodeRegistry,
) -> List[MapArea]:
    """Stitch all outer and inner ways into rings, then nest the rings.

    Returns:
        The areas, or an empty list if the ways cannot be closed into rings
    """
    way_rings = build_rings(ring_member_ways(relation), registry, True)
    if way_rings is None:
        logger.debug("relation %s: member ways do not form closed rings", relation.id)
        return []

    node_rings = [ring.node_ring() for ring in way_rings]
    return build_areas_from_rings(relation, node_rings, registry)


def create_areas_for_multipolygon(
    relation: OSMRelation,
    registry: NodeRegistry,
) -> List[MapArea]:
    """Create the areas of a multipolygon relation.

    Every created area is registered in ``registry`` as adjacent to its
    nodes.

    Args:
        relation: The multipolygon relation
        registry: Registry holding the MapNodes of the relation's ways

    Returns:
        One area per outer ring; empty for invalid multipolygons

    Raises:
        MissingNodeError: if a member way references a node not in the registry

    Examples:
        >>> areas = create_areas_for_multipolygon(relation, registry)
        >>> areas[0].polygon.area
        96.0
    """
    if is_simple_multipolygon(relation):
        return create_areas_for_simple_multipolygon(relation, registry)
    return create_areas_for_advanced_multipolygon(relation, registry)


__all__ = [
    'ring_member_ways',
    'is_simple_multipolygon',
    'create_areas_for_simple_multipolygon',
    'create_areas_for_advanced_multipolygon',
    'create_areas_for_multipolygon',
]
