"""Tests for degree queries and tree-shaping helpers."""

import pytest

from graphkit.algorithms.structure import (
    in_degree_less_than,
    incoming_neighbors,
    pendant_vertices,
    removable_vertices_for_tree,
    remove_pendant_vertices,
)
from graphkit.exceptions import NodeNotFoundError
from graphkit.graph.core import Graph


@pytest.fixture
def fan_in():
    # 1 ──► 2 ──► 3
    # └───────────┘
    return Graph.from_edges([(1, 1, 2), (2, 1, 3), (3, 2, 3)])


def test_in_degree_less_than(fan_in):
    assert in_degree_less_than(fan_in, 3) == [1, 2]
    assert in_degree_less_than(fan_in, 2) == [1]
    assert in_degree_less_than(fan_in, 1) == []


def test_in_degree_less_than_missing_node(fan_in):
    with pytest.raises(NodeNotFoundError):
        in_degree_less_than(fan_in, 9)


def test_incoming_neighbors(fan_in):
    assert incoming_neighbors(fan_in, 3) == [1, 2]
    assert incoming_neighbors(fan_in, 1) == []


def test_incoming_neighbors_undirected(path5):
    assert incoming_neighbors(path5, 3) == [2, 4]


def test_pendant_vertices(path5):
    assert pendant_vertices(path5) == [1, 5]


def test_remove_pendant_vertices_returns_copy(path5):
    trimmed = remove_pendant_vertices(path5)
    assert trimmed.node_keys() == [2, 3, 4]
    assert trimmed.edge_keys() == [2, 3]
    # Input is untouched
    assert path5.node_keys() == [1, 2, 3, 4, 5]
    assert path5.edge_count == 4


def test_remove_pendant_vertices_single_pass(path5):
    # 2 and 4 become pendant only after the first pass
    trimmed = remove_pendant_vertices(path5)
    assert pendant_vertices(trimmed) == [2, 4]


class TestRemovableVerticesForTree:
    def test_cycle_every_vertex_qualifies(self):
        g = Graph.from_edges(
            [(1, 1, 2), (2, 2, 3), (3, 3, 4), (4, 4, 1)], directed=False
        )
        result = removable_vertices_for_tree(g)
        assert result.found
        assert result.candidates == (1, 2, 3, 4)

    def test_path_only_ends_qualify(self, path5):
        result = removable_vertices_for_tree(path5)
        assert result.candidates == (1, 5)

    def test_no_candidate(self, two_components):
        result = removable_vertices_for_tree(two_components)
        assert not result.found
        assert result.candidates == ()
        assert result.message

    def test_input_not_modified(self, path5):
        removable_vertices_for_tree(path5)
        assert path5.node_count == 5
        assert path5.check_adjacency()
