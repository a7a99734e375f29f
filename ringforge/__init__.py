"""Ringforge - polygon areas from fragmented map line data.

This library reconstructs polygons with holes from OSM-style multipolygon
relations and coastline ways, using Shapely for the polygon geometry.
"""


# Data model
from .data import (
    OSMNode,
    OSMWay,
    OSMMember,
    OSMRelation,
    OSMData,
    MapNode,
    BoundingBox,
    NodeRegistry,
)
from .area import MapArea

# Ring assembly and nesting
from .assembly import (
    NodeRing,
    RingSegment,
    WayRing,
    AssemblyResult,
    assemble_rings,
    build_rings,
    build_closed_rings,
)
from .nesting import build_areas_from_rings, containment_forest

# Area builders
from .multipolygon import create_areas_for_multipolygon, is_simple_multipolygon
from .coastline import create_areas_for_coastlines

# Dataset pipeline
from .config import AreaBuildConfig
from .pipeline import AreaBuildResult, create_areas

# Core types and exceptions
from .core import (
    MemberRole,
    RingforgeError,
    ValidationError,
    ConfigurationError,
    MissingNodeError,
    RingAssemblyError,
    InvalidMultipolygonWarning,
)

__all__ = [

    # Data model
    'OSMNode',
    'OSMWay',
    'OSMMember',
    'OSMRelation',
    'OSMData',
    'MapNode',
    'BoundingBox',
    'NodeRegistry',
    'MapArea',

    # Ring assembly and nesting
    'NodeRing',
    'RingSegment',
    'WayRing',
    'AssemblyResult',
    'assemble_rings',
    'build_rings',
    'build_closed_rings',
    'build_areas_from_rings',
    'containment_forest',

    # Area builders
    'create_areas_for_multipolygon',
    'is_simple_multipolygon',
    'create_areas_for_coastlines',

    # Pipeline
    'AreaBuildConfig',
    'AreaBuildResult',
    'create_areas',

    # Core types and exceptions
    'MemberRole',
    'RingforgeError',
    'ValidationError',
    'ConfigurationError',
    'MissingNodeError',
    'RingAssemblyError',
    'InvalidMultipolygonWarning',
]
