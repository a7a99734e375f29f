"""Water areas from coastline ways.

Coastlines are not grouped by relations. All coastline ways of a dataset are
stitched into rings; rings that close on their own are islands or lakes,
and the open chains, which are assumed to end at the data boundary, are
joined into one outer ring. Chains are visited clockwise around the
boundary center; a gap between two chains is bridged along the boundary by
inserting the boundary corners passed on the way.

This relies on the fragments being ordered clockwise around the center by
their start nodes. Overlapping fragments in that order give unreliable
results, and two chains with no corner between them are joined by a straight
segment.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

import numpy as np

from .area import MapArea
from .assembly import NodeRing, WayRing, assemble_rings
from .config import AreaBuildConfig
from .core.geometry_utils import angle_to, angles_from_center, angles_within_sweep
from .data import BoundingBox, MapNode, NodeRegistry, OSMData, OSMNode, OSMRelation
from .nesting import build_areas_from_rings

logger = logging.getLogger(__name__)


class _CornerMinter:
    """Creates source and map nodes for boundary corners."""

    def __init__(self, data: OSMData, registry: NodeRegistry, tags):
        self.data = data
        self.registry = registry
        self.tags = tags
        self.next_id = data.highest_node_id() + 1

    def __call__(self, pos) -> MapNode:
        osm_node = OSMNode(self.next_id, math.nan, math.nan, dict(self.tags))
        self.next_id += 1
        self.data.nodes.append(osm_node)
        return self.registry.mint(pos, osm_node)


def sort_rings_by_angle(rings: List[WayRing], center) -> List[WayRing]:
    """Open rings ordered by the angle of their first node around ``center``."""
    if not rings:
        return []
    angles = angles_from_center(center, [ring.node_ring().first_node.pos for ring in rings])
    return [rings[i] for i in np.argsort(angles, kind='stable')]


def close_coastline_chains(
    chains: List[WayRing],
    boundary: BoundingBox,
    mint_node,
) -> NodeRing:
    """Join open chains into a single closed ring along the boundary.

    Args:
        chains: Open rings, already sorted with :func:`sort_rings_by_angle`
        boundary: Data boundary whose corners bridge the gaps
        mint_node: Callable creating a MapNode for a corner position

    Returns:
        The closed outer ring
    """
    center = boundary.center
    corners = boundary.corners()
    corner_angles = angles_from_center(center, corners)

    outer_nodes: List[MapNode] = []
    for i, chain in enumerate(chains):
        next_chain = chains[(i + 1) % len(chains)]
        chain_nodes = chain.node_ring().nodes
        outer_nodes.extend(chain_nodes)

        if chain.last_node is next_chain.first_node:
            outer_nodes.pop()
            continue

        end_angle = angle_to(center, chain_nodes[-1].pos)
        next_angle = angle_to(center, next_chain.node_ring().first_node.pos)
        corner_indices = angles_within_sweep(end_angle, next_angle, corner_angles)
        if not corner_indices:
            logger.debug("no boundary corner between %r and %r", chain, next_chain)
        for index in corner_indices:
            outer_nodes.append(mint_node(corners[index]))

    outer_nodes.append(outer_nodes[0])
    return NodeRing(outer_nodes)


def create_areas_for_coastlines(
    data: OSMData,
    registry: NodeRegistry,
    boundary: Optional[BoundingBox],
    config: Optional[AreaBuildConfig] = None,
) -> List[MapArea]:
    """Turn all coastline ways of ``data`` into water areas.

    Corner nodes created while bridging gaps are appended to ``data.nodes``
    and registered in ``registry``. Callers processing several batches
    against the same dataset concurrently must serialise these calls.

    Args:
        data: Dataset to take coastline ways from
        registry: Registry holding the MapNodes of the coastline ways
        boundary: Data boundary; without one nothing is built
        config: Tags used for coastlines, water and minted nodes

    Returns:
        Water areas tagged with a synthetic multipolygon relation, or an
        empty list if there are no coastlines or no boundary
    """
    config = config or AreaBuildConfig()
    coastline_ways = data.coastline_ways(config.coastline_tags)
    if not coastline_ways or boundary is None:
        return []

    relation = OSMRelation(data.highest_relation_id() + 1, tags=dict(config.water_tags))

    result = assemble_rings(coastline_ways, registry)
    node_rings = [ring.node_ring() for ring in result.closed]

    if result.unclosed:
        chains = sort_rings_by_angle(result.unclosed, boundary.center)
        minter = _CornerMinter(data, registry, config.fake_node_tags)
        node_rings.append(close_coastline_chains(chains, boundary, minter))

    logger.debug(
        "coastline: %d way(s), %d closed ring(s), %d open chain(s)",
        len(coastline_ways), len(result.closed), len(result.unclosed),
    )
    return build_areas_from_rings(relation, node_rings, registry)


__all__ = [
    'sort_rings_by_angle',
    'close_coastline_chains',
    'create_areas_for_coastlines',
]
