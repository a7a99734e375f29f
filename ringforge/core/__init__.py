"""Core types and utilities for ringforge.

This module provides enums, exceptions, and geometry helpers used throughout
the library.
"""

from .types import MemberRole

from .errors import (
    RingforgeError,
    ValidationError,
    ConfigurationError,
    MissingNodeError,
    RingAssemblyError,
    InvalidMultipolygonWarning,
)

from .geometry_utils import (
    angle_to,
    angles_from_center,
    angles_within_sweep,
    clockwise_sweep,
    polygon_contains,
    polygon_from_positions,
)

__all__ = [
    # Enums
    'MemberRole',

    # Exceptions
    'RingforgeError',
    'ValidationError',
    'ConfigurationError',
    'MissingNodeError',
    'RingAssemblyError',
    'InvalidMultipolygonWarning',

    # Geometry helpers
    'angle_to',
    'angles_from_center',
    'angles_within_sweep',
    'clockwise_sweep',
    'polygon_contains',
    'polygon_from_positions',
]
