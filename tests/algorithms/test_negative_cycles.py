"""Tests for Bellman-Ford negative-cycle detection."""

from graphkit.algorithms.negative_cycles import find_negative_cycles
from graphkit.graph.core import Graph


def test_single_triangle(negative_triangle):
    result = find_negative_cycles(negative_triangle)
    assert result.has_negative_cycles
    assert result.total_cycles == 1
    cycle = result.cycles[0]
    assert cycle.vertices == (1, 2, 3)
    assert cycle.edges == (1, 2, 3)
    assert cycle.total_weight == -2


def test_cycle_edges_chain_vertices(negative_triangle):
    cycle = find_negative_cycles(negative_triangle).cycles[0]
    for i, e_key in enumerate(cycle.edges):
        edge = negative_triangle.get_edge(e_key)
        assert edge.source == cycle.vertices[i]
        assert edge.destination == cycle.vertices[(i + 1) % len(cycle.vertices)]


def test_two_disjoint_cycles_reported_once_each():
    g = Graph.from_edges(
        [(1, 1, 2, -1), (2, 2, 1, -1), (3, 2, 3, 0), (4, 3, 4, -3), (5, 4, 3, 1)]
    )
    result = find_negative_cycles(g)
    assert {c.vertices for c in result.cycles} == {(1, 2), (3, 4)}
    assert all(c.total_weight == -2 for c in result.cycles)


def test_negative_self_loop():
    g = Graph.from_edges([(7, 1, 1, -1), (8, 1, 2, 5)])
    result = find_negative_cycles(g)
    assert [(c.vertices, c.edges) for c in result.cycles] == [((1,), (7,))]


def test_no_negative_cycle():
    g = Graph.from_edges([(1, 1, 2, -5), (2, 2, 3, 4), (3, 3, 1, 2)])
    result = find_negative_cycles(g)
    assert not result.has_negative_cycles
    assert result.message == "Found 0 negative cycle(s)"


def test_undirected_graph_not_searched():
    g = Graph.from_edges([(1, 1, 2, -3)], directed=False)
    result = find_negative_cycles(g)
    assert result.cycles == ()
    assert "directed" in result.message


def test_empty_graph(empty_graph):
    result = find_negative_cycles(empty_graph)
    assert result.cycles == ()
    assert result.message == "Graph is empty"
