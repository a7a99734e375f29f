"""Shared helpers for building small OSM datasets in tests."""

import pytest

from ringforge.assembly import NodeRing
from ringforge.data import NodeRegistry, OSMData, OSMMember, OSMNode, OSMRelation, OSMWay


class MapBuilder:
    """Creates nodes, ways and relations registered in one dataset."""

    def __init__(self):
        self.data = OSMData()
        self.registry = NodeRegistry()
        self._next_id = 1

    def _id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def node(self, x, y) -> OSMNode:
        node = OSMNode(self._id(), float(x), float(y))
        self.data.nodes.append(node)
        self.registry.add(node)
        return node

    def nodes(self, coords):
        return [self.node(x, y) for x, y in coords]

    def way(self, nodes, **tags) -> OSMWay:
        way = OSMWay(self._id(), list(nodes), dict(tags))
        self.data.ways.append(way)
        return way

    def closed_way(self, coords, **tags) -> OSMWay:
        nodes = self.nodes(coords)
        return self.way(nodes + [nodes[0]], **tags)

    def relation(self, members, **tags) -> OSMRelation:
        relation = OSMRelation(
            self._id(),
            [OSMMember(role, member) for role, member in members],
            dict(tags),
        )
        self.data.relations.append(relation)
        return relation

    @staticmethod
    def square(x0, y0, size):
        return [(x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)]

    def ring(self, coords) -> NodeRing:
        nodes = self.registry.map_nodes(self.nodes(coords))
        return NodeRing(nodes + [nodes[0]])


@pytest.fixture
def builder():
    return MapBuilder()
