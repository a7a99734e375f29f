"""Exception and warning hierarchy for ringforge.

All exceptions raised by the library derive from :class:`RingforgeError` so
callers can catch them in one place.
"""

from typing import Optional, Sequence


class RingforgeError(Exception):
    """Base class for all ringforge exceptions."""


class ValidationError(RingforgeError):
    """Input object violates a structural requirement.

    Examples:
        >>> OSMWay(1, [node_a])
        Traceback (most recent call last):
        ...
        ValidationError: way 1 has 1 node(s), at least 2 are required
    """


class ConfigurationError(RingforgeError):
    """Invalid configuration value."""


class MissingNodeError(RingforgeError, KeyError):
    """A way references a node that is absent from the node lookup."""

    def __init__(self, node):
        self.node = node
        super().__init__(f"node {getattr(node, 'id', node)!r} is not in the node lookup")

    def __str__(self) -> str:
        return self.args[0]


class RingAssemblyError(RingforgeError):
    """Ways could not be stitched into closed rings.

    Attributes:
        unclosed_rings: The rings that remained open
        relation_id: Id of the relation being processed, if known
    """

    def __init__(
        self,
        message: str,
        unclosed_rings: Sequence = (),
        relation_id: Optional[int] = None,
    ):
        super().__init__(message)
        self.unclosed_rings = list(unclosed_rings)
        self.relation_id = relation_id


class InvalidMultipolygonWarning(UserWarning):
    """Emitted when a multipolygon relation yields no areas."""


__all__ = [
    'RingforgeError',
    'ValidationError',
    'ConfigurationError',
    'MissingNodeError',
    'RingAssemblyError',
    'InvalidMultipolygonWarning',
]
