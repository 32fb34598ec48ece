"""Degree queries and tree-shaping tasks.

These helpers never mutate the caller's graph; tasks that remove vertices
work on copies.
"""

from __future__ import annotations

from typing import List

from graphkit.algorithms.connectivity import is_tree
from graphkit.algorithms.types import TreeCandidatesResult
from graphkit.graph.core import Graph, NodeKey
from graphkit.logging import get_logger

logger = get_logger(__name__)


def in_degree_less_than(graph: Graph, key: NodeKey) -> List[NodeKey]:
    """Return nodes whose in-degree is strictly lower than that of ``key``.

    Raises:
        NodeNotFoundError: If ``key`` does not exist.
    """
    graph.check_initialized()
    threshold = graph.in_degree(key)
    return [k for k in graph.node_keys() if graph.in_degree(k) < threshold]


def incoming_neighbors(graph: Graph, key: NodeKey) -> List[NodeKey]:
    """Return nodes with an edge leading into ``key``, ascending.

    In an undirected graph every neighbor qualifies.
    """
    graph.check_initialized()
    return sorted({neighbor for neighbor, _edge in graph.in_arcs(key)})


def pendant_vertices(graph: Graph) -> List[NodeKey]:
    """Return nodes of degree one."""
    graph.check_initialized()
    return [k for k in graph.node_keys() if graph.degree(k) == 1]


def remove_pendant_vertices(graph: Graph) -> Graph:
    """Return a copy of ``graph`` without its pendant (degree-one) vertices.

    Only vertices pendant in the input are removed; vertices that become
    pendant as a result stay.
    """
    result = graph.copy()
    pendants = pendant_vertices(graph)
    for key in pendants:
        result.remove_node(key)
    logger.debug("Removed %d pendant vertices", len(pendants))
    return result


def removable_vertices_for_tree(graph: Graph) -> TreeCandidatesResult:
    """Find vertices whose removal leaves a tree.

    Each vertex is removed from a fresh copy and the remainder is tested with
    `is_tree`, so the check costs one copy and one tree test per vertex.
    """
    graph.check_initialized()
    candidates = []
    for key in graph.node_keys():
        trial = graph.copy()
        trial.remove_node(key)
        if is_tree(trial):
            candidates.append(key)

    if candidates:
        message = f"Removing any of {len(candidates)} vertex(es) leaves a tree"
    else:
        message = "No single vertex removal leaves a tree"
    return TreeCandidatesResult(candidates=tuple(candidates), message=message)
