"""Tests for Prim's minimum spanning tree."""

from itertools import combinations

import networkx as nx
import pytest

from graphkit.algorithms.connectivity import is_tree
from graphkit.algorithms.spanning_tree import minimum_spanning_tree
from graphkit.graph.convert import to_networkx
from graphkit.graph.core import Graph

SMALL_GRAPHS = [
    # Square with one diagonal
    [(1, 1, 2, 1), (2, 2, 3, 2), (3, 3, 4, 3), (4, 4, 1, 4), (5, 1, 3, 5)],
    # K4 with distinct weights
    [
        (1, 1, 2, 6),
        (2, 1, 3, 1),
        (3, 1, 4, 5),
        (4, 2, 3, 2),
        (5, 2, 4, 3),
        (6, 3, 4, 4),
    ],
    # Equal weights everywhere
    [(1, 1, 2, 1), (2, 2, 3, 1), (3, 3, 1, 1), (4, 3, 4, 1), (5, 4, 5, 1)],
    # Negative weights are fine for spanning trees
    [(1, 1, 2, -2), (2, 2, 3, 4), (3, 1, 3, -1), (4, 3, 4, 0), (5, 2, 4, 7)],
]


def _brute_force_weight(graph):
    """Smallest total weight over all (n-1)-edge subsets that form a tree."""
    keys = graph.node_keys()
    best = None
    for subset in combinations(list(graph.iter_edges()), len(keys) - 1):
        candidate = Graph.from_edges(
            [(e.key, e.source, e.destination, e.weight) for e in subset],
            nodes=keys,
            directed=False,
            allow_multi=True,
        )
        if is_tree(candidate):
            weight = sum(e.weight for e in subset)
            if best is None or weight < best:
                best = weight
    return best


def test_weighted_square(weighted_square):
    result = minimum_spanning_tree(weighted_square)
    assert result.is_possible
    assert result.total_weight == 6
    assert [e.key for e in result.edges] == [1, 2, 3]


@pytest.mark.parametrize("edges", SMALL_GRAPHS)
def test_weight_matches_brute_force(edges):
    g = Graph.from_edges(edges, directed=False)
    result = minimum_spanning_tree(g)
    assert result.is_possible
    assert len(result.edges) == g.node_count - 1
    assert result.total_weight == _brute_force_weight(g)


@pytest.mark.parametrize("edges", SMALL_GRAPHS)
def test_weight_matches_networkx(edges):
    g = Graph.from_edges(edges, directed=False)
    expected = nx.minimum_spanning_tree(to_networkx(g)).size(weight="weight")
    assert minimum_spanning_tree(g).total_weight == expected


def test_result_edges_form_a_tree(weighted_square):
    result = minimum_spanning_tree(weighted_square)
    tree = Graph.from_edges(
        [(e.key, e.source, e.destination, e.weight) for e in result.edges],
        nodes=weighted_square.node_keys(),
        directed=False,
    )
    assert is_tree(tree)


def test_ties_break_on_lowest_edge_key():
    g = Graph.from_edges([(5, 1, 2, 1), (3, 2, 3, 1), (4, 1, 3, 1)], directed=False)
    result = minimum_spanning_tree(g)
    assert [e.key for e in result.edges] == [4, 3]
    assert result.total_weight == 2


def test_directed_input_uses_undirected_view():
    g = Graph.from_edges([(1, 1, 2, 5), (2, 2, 1, 1), (3, 2, 3, 2)])
    result = minimum_spanning_tree(g)
    assert result.is_possible
    assert [e.key for e in result.edges] == [2, 3]
    assert result.total_weight == 3
    # The caller's graph keeps its options and edges
    assert g.directed
    assert g.edge_keys() == [1, 2, 3]


def test_disconnected_graph(two_components):
    result = minimum_spanning_tree(two_components)
    assert not result.is_possible
    assert result.edges == ()
    assert result.total_weight == 0
    assert "not connected" in result.message


def test_single_node_and_empty_graph(empty_graph):
    assert minimum_spanning_tree(empty_graph).is_possible
    single = Graph()
    single.add_node(1)
    result = minimum_spanning_tree(single)
    assert result.is_possible
    assert result.edges == ()
