"""Configuration for area building."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .core.errors import ConfigurationError


def _default_coastline_tags() -> Dict[str, str]:
    return {'natural': 'coastline'}


def _default_water_tags() -> Dict[str, str]:
    return {'type': 'multipolygon', 'natural': 'water'}


def _default_fake_node_tags() -> Dict[str, str]:
    return {'ringforge:note': 'fake node from coastline processing'}


@dataclass
class AreaBuildConfig:
    """Settings for :func:`ringforge.pipeline.create_areas`.

    Attributes:
        build_coastlines: Also turn coastline ways into water areas
        coastline_tags: Tags a way needs to count as coastline
        water_tags: Tags of the synthetic relation the water areas carry
        fake_node_tags: Tags of the source nodes minted for boundary corners
        warn_on_invalid: Emit an InvalidMultipolygonWarning per invalid relation
        raise_on_invalid: Raise RingAssemblyError on the first invalid relation

    Examples:
        >>> config = AreaBuildConfig(build_coastlines=False)
        >>> config.water_tags['natural']
        'water'
    """

    build_coastlines: bool = True
    coastline_tags: Dict[str, str] = field(default_factory=_default_coastline_tags)
    water_tags: Dict[str, str] = field(default_factory=_default_water_tags)
    fake_node_tags: Dict[str, str] = field(default_factory=_default_fake_node_tags)
    warn_on_invalid: bool = True
    raise_on_invalid: bool = False

    def __post_init__(self):
        if not self.coastline_tags:
            raise ConfigurationError("coastline_tags must name at least one tag")
        for name in ('coastline_tags', 'water_tags', 'fake_node_tags'):
            tags = getattr(self, name)
            if not all(isinstance(k, str) and isinstance(v, str) for k, v in tags.items()):
                raise ConfigurationError(f"{name} must map strings to strings")


__all__ = [
    'AreaBuildConfig',
]
