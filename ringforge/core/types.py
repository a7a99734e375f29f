"""Type definitions for ringforge operations.

This module defines enums shared by the area builders.
"""

from enum import Enum


class MemberRole(Enum):
    """Role of a member way inside a multipolygon relation.

    Attributes:
        OUTER: Way is (part of) an outer boundary ring
        INNER: Way is (part of) a hole ring

    Examples:
        >>> from ringforge.core.types import MemberRole
        >>> MemberRole.from_role("outer")
        <MemberRole.OUTER: 'outer'>
        >>> MemberRole.from_role("label") is None
        True
    """
    OUTER = 'outer'
    INNER = 'inner'

    @classmethod
    def from_role(cls, role: str):
        """Return the matching role, or None for roles that do not form rings."""
        try:
            return cls(role)
        except ValueError:
            return None


__all__ = [
    'MemberRole',
]
