"""Dataset-level runner building every area of an OSM dataset."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import List, Optional

from .area import MapArea
from .assembly import build_closed_rings
from .coastline import create_areas_for_coastlines
from .config import AreaBuildConfig
from .core.errors import InvalidMultipolygonWarning, RingAssemblyError
from .data import BoundingBox, NodeRegistry, OSMData, OSMRelation
from .multipolygon import create_areas_for_multipolygon, ring_member_ways


@dataclass
class AreaBuildResult:
    """Outcome of :func:`create_areas`."""

    areas: List[MapArea]
    registry: NodeRegistry
    invalid_relations: List[OSMRelation] = field(default_factory=list)
    coastline_areas: List[MapArea] = field(default_factory=list)

    @property
    def all_areas(self) -> List[MapArea]:
        return self.areas + self.coastline_areas


def _report_invalid(relation: OSMRelation, registry: NodeRegistry, config: AreaBuildConfig) -> None:
    if config.raise_on_invalid:
        # raises with the open rings attached if stitching is the cause
        build_closed_rings(ring_member_ways(relation), registry, relation_id=relation.id)
        raise RingAssemblyError(
            f"multipolygon relation {relation.id} has no outer or inner ways",
            relation_id=relation.id,
        )
    if config.warn_on_invalid:
        warnings.warn(
            f"multipolygon relation {relation.id} could not be built into areas",
            InvalidMultipolygonWarning,
            stacklevel=3,
        )


def create_areas(
    data: OSMData,
    registry: Optional[NodeRegistry] = None,
    boundary: Optional[BoundingBox] = None,
    config: Optional[AreaBuildConfig] = None,
) -> AreaBuildResult:
    """Build the areas of all multipolygon relations and coastlines in ``data``.

    Relations are processed in dataset order, coastlines afterwards.

    Args:
        data: The dataset
        registry: Registry of the dataset's nodes; built from ``data`` if None
        boundary: Data boundary for coastline closing; defaults to the
            bounding box of the dataset's nodes
        config: Build settings

    Returns:
        AreaBuildResult with the areas and the relations that yielded none

    Raises:
        RingAssemblyError: for an invalid relation if ``config.raise_on_invalid``
        MissingNodeError: if a way references a node absent from ``registry``
    """
    config = config or AreaBuildConfig()
    if registry is None:
        registry = NodeRegistry.from_osm_data(data)

    result = AreaBuildResult(areas=[], registry=registry)

    for relation in data.multipolygon_relations():
        areas = create_areas_for_multipolygon(relation, registry)
        if not areas:
            result.invalid_relations.append(relation)
            _report_invalid(relation, registry, config)
        result.areas.extend(areas)

    if config.build_coastlines:
        if boundary is None:
            boundary = BoundingBox.from_points(node.pos for node in registry)
        result.coastline_areas = create_areas_for_coastlines(data, registry, boundary, config)

    return result


__all__ = [
    'AreaBuildResult',
    'create_areas',
]
