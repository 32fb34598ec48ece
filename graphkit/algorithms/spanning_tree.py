"""Minimum spanning tree (Prim's algorithm).

The tree is grown over the undirected view of the graph. A directed input is
first copied and switched to undirected (keeping parallel edges, so the
lighter of two opposite arcs is still available); the caller's graph is
never modified.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import List, Set, Tuple

from graphkit.algorithms.base import Cost
from graphkit.algorithms.connectivity import is_connected
from graphkit.algorithms.types import SpanningTreeResult
from graphkit.graph.core import Edge, EdgeKey, Graph, NodeKey
from graphkit.logging import get_logger

logger = get_logger(__name__)

_IMPOSSIBLE = "Graph is not connected; no spanning tree exists"


def minimum_spanning_tree(graph: Graph) -> SpanningTreeResult:
    """Find a minimum-weight spanning tree.

    Starting from the smallest node key, repeatedly adds the lightest edge
    joining the tree to a vertex outside it. Ties go to the lowest edge key.
    A disconnected graph yields ``is_possible=False`` and no edges; a partial
    tree is never returned.

    Returns:
        SpanningTreeResult: Tree edges in the order they were added.

    Raises:
        UninitializedGraphError: If the graph stores are not allocated.
    """
    graph.check_initialized()
    if not is_connected(graph):
        logger.info(_IMPOSSIBLE)
        return SpanningTreeResult(
            total_weight=0, edges=(), is_possible=False, message=_IMPOSSIBLE
        )

    working = graph
    if graph.directed:
        working = graph.copy()
        working.update_options(directed=False, allow_multi=True)
    return _prim(working)


def _prim(graph: Graph) -> SpanningTreeResult:
    keys = graph.node_keys()
    if not keys:
        return SpanningTreeResult(
            total_weight=0, edges=(), is_possible=True, message="Graph is empty"
        )

    start = keys[0]
    in_tree: Set[NodeKey] = {start}
    # Heap entries: (weight, edge key, vertex the edge leads to, edge)
    candidates: List[Tuple[Cost, EdgeKey, NodeKey, Edge]] = []

    def push_frontier(node: NodeKey) -> None:
        for neighbor, edge in graph.incident_arcs(node):
            if neighbor not in in_tree:
                heappush(candidates, (edge.weight, edge.key, neighbor, edge))

    push_frontier(start)
    tree_edges: List[Edge] = []
    total: Cost = 0
    while candidates and len(in_tree) < len(keys):
        weight, _e_key, node, edge = heappop(candidates)
        if node in in_tree:
            continue
        in_tree.add(node)
        tree_edges.append(edge)
        total += weight
        push_frontier(node)

    if len(in_tree) < len(keys):
        logger.info(_IMPOSSIBLE)
        return SpanningTreeResult(
            total_weight=0, edges=(), is_possible=False, message=_IMPOSSIBLE
        )

    logger.debug("Spanning tree with %d edges, weight %s", len(tree_edges), total)
    return SpanningTreeResult(
        total_weight=total,
        edges=tuple(tree_edges),
        is_possible=True,
        message=f"Minimum spanning tree of weight {total} with {len(tree_edges)} edges",
    )
