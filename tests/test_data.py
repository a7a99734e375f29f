"""Tests for the data model, registry and geometry helpers."""

import math

import numpy as np
import pytest

from ringforge.area import MapArea
from ringforge.config import AreaBuildConfig
from ringforge.core.errors import ConfigurationError, MissingNodeError, ValidationError
from ringforge.core.geometry_utils import (
    angle_to,
    angles_from_center,
    angles_within_sweep,
    clockwise_sweep,
    polygon_from_positions,
)
from ringforge.core.types import MemberRole
from ringforge.data import BoundingBox, NodeRegistry, OSMData, OSMNode, OSMRelation, OSMWay


class TestOSMElements:
    """Tests for the source element classes."""

    def test_way_needs_two_nodes(self):
        with pytest.raises(ValidationError):
            OSMWay(1, [OSMNode(1, 0, 0)])

    def test_closed_way_uses_identity(self):
        a, b, c = OSMNode(1, 0, 0), OSMNode(2, 1, 0), OSMNode(3, 1, 1)
        a_copy = OSMNode(1, 0, 0)
        assert OSMWay(1, [a, b, c, a]).is_closed()
        assert not OSMWay(2, [a, b, c, a_copy]).is_closed()

    def test_dataset_queries(self):
        nodes = [OSMNode(5, 0, 0), OSMNode(9, 1, 0), OSMNode(3, 1, 1)]
        coast = OSMWay(1, nodes, {'natural': 'coastline'})
        road = OSMWay(2, nodes[:2], {'highway': 'residential'})
        mp = OSMRelation(4, tags={'type': 'multipolygon'})
        route = OSMRelation(8, tags={'type': 'route'})
        data = OSMData(nodes, [coast, road], [mp, route])

        assert data.highest_node_id() == 9
        assert data.highest_relation_id() == 8
        assert data.multipolygon_relations() == [mp]
        assert data.coastline_ways() == [coast]
        assert data.coastline_ways({'highway': 'residential'}) == [road]

    def test_empty_dataset_ids(self):
        data = OSMData()
        assert data.highest_node_id() == 0
        assert data.highest_relation_id() == 0

    def test_member_role(self):
        assert MemberRole.from_role('outer') is MemberRole.OUTER
        assert MemberRole.from_role('inner') is MemberRole.INNER
        assert MemberRole.from_role('') is None


class TestNodeRegistry:
    """Tests for NodeRegistry."""

    def test_add_and_lookup(self):
        registry = NodeRegistry()
        osm_node = OSMNode(1, 3.0, 4.0)

        node = registry.add(osm_node)

        assert node.pos == (3.0, 4.0)
        assert node.handle == 0
        assert registry.lookup(osm_node) is node
        assert registry.node(0) is node
        assert osm_node in registry

    def test_add_is_idempotent(self):
        registry = NodeRegistry()
        osm_node = OSMNode(1, 0, 0)
        assert registry.add(osm_node) is registry.add(osm_node)
        assert len(registry) == 1

    def test_explicit_position(self):
        registry = NodeRegistry()
        node = registry.add(OSMNode(1, 0, 0), pos=(7.0, 8.0))
        assert node.pos == (7.0, 8.0)

    def test_missing_node(self):
        registry = NodeRegistry()
        missing = OSMNode(42, 0, 0)
        with pytest.raises(MissingNodeError) as excinfo:
            registry.lookup(missing)
        assert "42" in str(excinfo.value)
        with pytest.raises(KeyError):
            registry.map_nodes([missing])

    def test_mint(self):
        registry = NodeRegistry()
        registry.add(OSMNode(1, 0, 0))
        fake = OSMNode(2, math.nan, math.nan)

        node = registry.mint((10, 20), fake)

        assert node.handle == 1
        assert node.pos == (10.0, 20.0)
        assert registry.lookup(fake) is node

    def test_from_osm_data(self):
        data = OSMData([OSMNode(1, 0, 0), OSMNode(2, 5, 5)])
        registry = NodeRegistry.from_osm_data(data)
        assert [node.pos for node in registry] == [(0.0, 0.0), (5.0, 5.0)]

    def test_register_area_indexes_each_node_once(self):
        registry = NodeRegistry()
        a, b, c = [registry.add(OSMNode(i, x, y)) for i, (x, y) in enumerate([(0, 0), (1, 0), (1, 1)])]
        area = MapArea.from_node_loops(OSMWay(9, [a.source, b.source]), [a, b, c, a])

        registry.register_area(area)

        assert registry.adjacent_areas(a) == [area]
        assert registry.adjacent_areas(c) == [area]


class TestBoundingBox:
    """Tests for BoundingBox."""

    def test_corners_and_center(self):
        box = BoundingBox(0, 0, 10, 20)
        assert box.center == (5.0, 10.0)
        assert box.corners() == ((10, 20), (10, 0), (0, 0), (0, 20))

    def test_from_points(self):
        box = BoundingBox.from_points([(3, 4), (-1, 8), (2, 0)])
        assert box == BoundingBox(-1, 0, 3, 8)
        assert BoundingBox.from_points([]) is None

    def test_invalid_box(self):
        with pytest.raises(ValidationError):
            BoundingBox(10, 0, 0, 10)


class TestGeometryUtils:
    """Tests for angle and polygon helpers."""

    def test_angle_is_clockwise_from_north(self):
        assert angle_to((0, 0), (0, 1)) == pytest.approx(0.0)
        assert angle_to((0, 0), (1, 0)) == pytest.approx(math.pi / 2)
        assert angle_to((0, 0), (0, -1)) == pytest.approx(math.pi)
        assert angle_to((0, 0), (-1, 0)) == pytest.approx(3 * math.pi / 2)

    def test_box_corner_angles(self):
        box = BoundingBox(0, 0, 100, 100)
        angles = np.degrees(angles_from_center(box.center, box.corners()))
        np.testing.assert_array_almost_equal(angles, [45, 135, 225, 315])

    def test_clockwise_sweep(self):
        assert clockwise_sweep(math.radians(300), math.radians(10)) == pytest.approx(math.radians(70))
        assert clockwise_sweep(1.0, 1.0) == 0.0

    def test_angles_within_sweep(self):
        corners = np.radians([45, 135, 225, 315])
        assert angles_within_sweep(math.radians(10), math.radians(200), corners) == [0, 1]
        assert angles_within_sweep(math.radians(100), math.radians(250), corners) == [1, 2]
        assert angles_within_sweep(math.radians(200), math.radians(100), corners) == [2, 3, 0]
        assert angles_within_sweep(math.radians(50), math.radians(60), corners) == []
        assert angles_within_sweep(0.0, 1.0, []) == []

    def test_polygon_from_closed_loop(self):
        open_poly = polygon_from_positions([(0, 0), (4, 0), (4, 4), (0, 4)])
        closed_poly = polygon_from_positions([(0, 0), (4, 0), (4, 4), (0, 4), (0, 0)])
        assert open_poly.equals(closed_poly)
        assert closed_poly.area == pytest.approx(16.0)


class TestAreaBuildConfig:
    """Tests for configuration validation."""

    def test_defaults(self):
        config = AreaBuildConfig()
        assert config.coastline_tags == {'natural': 'coastline'}
        assert config.build_coastlines

    def test_empty_coastline_tags(self):
        with pytest.raises(ConfigurationError):
            AreaBuildConfig(coastline_tags={})

    def test_non_string_tags(self):
        with pytest.raises(ConfigurationError):
            AreaBuildConfig(water_tags={'natural': 1})
