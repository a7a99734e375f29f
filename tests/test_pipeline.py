"""Tests for the dataset-level area pipeline."""

import warnings

import pytest

from ringforge.config import AreaBuildConfig
from ringforge.core.errors import InvalidMultipolygonWarning, RingAssemblyError
from ringforge.data import BoundingBox
from ringforge.pipeline import create_areas


def _dataset(builder):
    """One valid multipolygon, one broken one, one route and a coastline."""
    outer = builder.closed_way(builder.square(10, 10, 30))
    inner = builder.closed_way(builder.square(20, 20, 5))
    valid = builder.relation([('outer', outer), ('inner', inner)], type='multipolygon', landuse='farm')

    a, b, c = builder.nodes([(50, 50), (60, 50), (60, 60)])
    broken = builder.relation(
        [('outer', builder.way([a, b])), ('outer', builder.way([b, c]))],
        type='multipolygon',
    )
    builder.relation([('', builder.way([a, c]))], type='route')

    builder.way(builder.nodes([(60, 100), (80, 60), (100, 40)]), natural='coastline')
    builder.node(0, 0)
    builder.node(100, 100)
    return valid, broken


class TestCreateAreas:
    """Tests for create_areas()."""

    def test_builds_relations_and_coastlines(self, builder):
        valid, broken = _dataset(builder)

        with pytest.warns(InvalidMultipolygonWarning, match=str(broken.id)):
            result = create_areas(builder.data, builder.registry)

        assert len(result.areas) == 1
        assert result.areas[0].tag_source is valid
        assert result.invalid_relations == [broken]
        assert len(result.coastline_areas) == 1
        assert result.coastline_areas[0].tags['natural'] == 'water'
        assert result.all_areas == result.areas + result.coastline_areas
        assert result.registry is builder.registry

    def test_registry_built_from_data(self, builder):
        _dataset(builder)
        config = AreaBuildConfig(warn_on_invalid=False, build_coastlines=False)

        result = create_areas(builder.data, config=config)

        assert result.registry is not builder.registry
        assert len(result.registry) == len(builder.data.nodes)
        assert result.coastline_areas == []

    def test_default_boundary_from_nodes(self, builder):
        _dataset(builder)
        config = AreaBuildConfig(warn_on_invalid=False)

        default = create_areas(builder.data, builder.registry, config=config)

        # nodes span (0, 0) to (100, 100)
        corners = {node.pos for node in default.coastline_areas[0].outer_nodes}
        assert {(100.0, 0.0), (0.0, 0.0), (0.0, 100.0)} <= corners

    def test_explicit_boundary(self, builder):
        _dataset(builder)
        config = AreaBuildConfig(warn_on_invalid=False)

        result = create_areas(builder.data, builder.registry, BoundingBox(0, 0, 200, 200), config)

        # seen from (100, 100) only the bottom-left corner lies between the chain ends
        outer = result.coastline_areas[0].outer_positions()
        assert outer == [(60, 100), (80, 60), (100, 40), (0, 0), (60, 100)]

    def test_no_warning_when_disabled(self, builder):
        _dataset(builder)
        config = AreaBuildConfig(warn_on_invalid=False, build_coastlines=False)

        with warnings.catch_warnings():
            warnings.simplefilter('error')
            result = create_areas(builder.data, builder.registry, config=config)

        assert len(result.invalid_relations) == 1

    def test_raise_on_invalid(self, builder):
        _, broken = _dataset(builder)
        config = AreaBuildConfig(raise_on_invalid=True)

        with pytest.raises(RingAssemblyError) as excinfo:
            create_areas(builder.data, builder.registry, config=config)

        assert excinfo.value.relation_id == broken.id
        assert len(excinfo.value.unclosed_rings) == 1

    def test_raise_on_relation_without_ways(self, builder):
        empty = builder.relation([], type='multipolygon')
        config = AreaBuildConfig(raise_on_invalid=True)

        with pytest.raises(RingAssemblyError) as excinfo:
            create_areas(builder.data, builder.registry, config=config)

        assert excinfo.value.relation_id == empty.id
