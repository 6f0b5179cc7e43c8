import pytest

from floorgraph.graph_store import GraphStore
from floorgraph.hit_test import dist_point_to_segment, find_nearest, find_nearest_edge


@pytest.fixture
def store():
    s = GraphStore()
    s.create_node("A", (0, 0))
    s.create_node("B", (100, 0))
    return s


def test_exactly_radius_away_is_a_miss(store):
    assert find_nearest((20.0, 0.0), store.nodes, 20.0) is None


def test_just_inside_radius_is_a_hit(store):
    hit = find_nearest((19.999, 0.0), store.nodes, 20.0)
    assert hit is not None and hit.name == "A"


def test_default_radius_is_twenty(store):
    assert find_nearest((0, 19.5), store.nodes).name == "A"
    assert find_nearest((0, 20), store.nodes) is None


def test_picks_the_closest_candidate():
    s = GraphStore()
    s.create_node("far", (0, 0))
    s.create_node("near", (10, 0))
    assert find_nearest((8, 0), s.nodes).name == "near"


def test_tie_goes_to_first_in_order():
    s = GraphStore()
    s.create_node("left", (0, 0))
    s.create_node("right", (10, 0))
    assert find_nearest((5, 0), s.nodes).name == "left"


def test_no_nodes():
    assert find_nearest((1, 1), []) is None


def test_dist_point_to_segment():
    assert dist_point_to_segment(5, 3, 0, 0, 10, 0) == pytest.approx(3.0)
    # beyond the end clamps to the endpoint
    assert dist_point_to_segment(13, 4, 0, 0, 10, 0) == pytest.approx(5.0)
    # degenerate segment
    assert dist_point_to_segment(3, 4, 0, 0, 0, 0) == pytest.approx(5.0)


def test_find_nearest_edge(store):
    a, b = store.nodes
    e = store.create_edge(a.id, b.id)
    by_id = {n.id: n for n in store.nodes}
    assert find_nearest_edge((50, 5), store.edges, by_id) == e
    assert find_nearest_edge((50, 10), store.edges, by_id) is None
    assert find_nearest_edge((50, 5), store.edges, {}) is None
