from slclient.model.geometry import Coordinate, Edge


def test_coordinate_arithmetic():
    a = Coordinate(1, 2, 3)
    assert a + Coordinate(-1, 1, 0) == Coordinate(0, 3, 3)
    assert a - Coordinate(1, 2, 3) == Coordinate(0, 0, 0)
    assert a.above() == Coordinate(1, 2, 4)
    assert a.below() == Coordinate(1, 2, 2)


def test_edge_equality_is_unordered():
    a, b = Coordinate(0, 0, 0), Coordinate(0, -1, 0)
    assert Edge(a, b) == Edge(b, a)
    assert hash(Edge(a, b)) == hash(Edge(b, a))
    assert len({Edge(a, b), Edge(b, a)}) == 1
    assert Edge(a, b) != Edge(a, Coordinate(1, 0, 0))


def test_edge_keeps_traversal_direction():
    a, b = Coordinate(0, 0, 0), Coordinate(0, 0, 1)
    edge = Edge(a, b)
    assert edge.start == a and edge.end == b
    assert Edge(b, a).start == b


def test_edge_layer_membership():
    flat = Edge(Coordinate(0, 0, 2), Coordinate(1, 0, 2))
    stairs = Edge(Coordinate(0, 0, 0), Coordinate(0, 0, 1))
    assert flat.lies_on_layer(2)
    assert not flat.lies_on_layer(0)
    assert not stairs.lies_on_layer(0)
    assert not stairs.lies_on_layer(1)
