"""Negative-cycle detection by Bellman-Ford predecessor tracing.

Bellman-Ford runs from every vertex, recording the predecessor vertex and
edge of each improved distance. After ``|V| - 1`` rounds, an edge that can
still be relaxed proves a reachable negative cycle. The cycle is recovered by
a tortoise-and-hare walk over the predecessor links, and duplicates found
from different start vertices are merged by rotating every cycle to begin at
its smallest vertex.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from graphkit.algorithms.base import INF, Cost
from graphkit.algorithms.types import NegativeCycle, NegativeCyclesResult
from graphkit.graph.core import Edge, EdgeKey, Graph, NodeKey
from graphkit.logging import get_logger

logger = get_logger(__name__)

PredVertex = Dict[NodeKey, Optional[NodeKey]]
PredEdge = Dict[NodeKey, Optional[EdgeKey]]


def find_negative_cycles(graph: Graph) -> NegativeCyclesResult:
    """Find every distinct negative cycle reachable by relaxation.

    Undirected graphs are not searched: any negative undirected edge would
    form a trivial back-and-forth cycle, so the result is empty with an
    explanatory message.

    Returns:
        NegativeCyclesResult: Unique cycles in discovery order.

    Raises:
        UninitializedGraphError: If the graph stores are not allocated.
    """
    graph.check_initialized()
    if graph.node_count == 0:
        return NegativeCyclesResult(cycles=(), message="Graph is empty")
    if not graph.directed:
        return NegativeCyclesResult(
            cycles=(),
            message="Negative cycle detection requires a directed graph",
        )

    keys = graph.node_keys()
    edges = list(graph.iter_edges())
    cycles: List[NegativeCycle] = []
    seen: Set[Tuple[NodeKey, ...]] = set()

    for start in keys:
        dist, pred, pred_edge = _bellman_ford(keys, edges, start)
        for edge in edges:
            u, v = edge.source, edge.destination
            if dist[u] == INF or dist[u] + edge.weight >= dist[v]:
                continue
            cycle = _trace_cycle(graph, edge, pred, pred_edge, len(keys))
            if cycle is None or cycle.total_weight >= 0:
                continue
            if cycle.vertices not in seen:
                seen.add(cycle.vertices)
                cycles.append(cycle)

    logger.debug("Negative cycle search found %d unique cycle(s)", len(cycles))
    return NegativeCyclesResult(
        cycles=tuple(cycles), message=f"Found {len(cycles)} negative cycle(s)"
    )


def _bellman_ford(
    keys: List[NodeKey], edges: List[Edge], start: NodeKey
) -> Tuple[Dict[NodeKey, Cost], PredVertex, PredEdge]:
    """Run ``|V| - 1`` relaxation rounds from ``start``, stopping early when stable."""
    dist: Dict[NodeKey, Cost] = {key: INF for key in keys}
    pred: PredVertex = {key: None for key in keys}
    pred_edge: PredEdge = {key: None for key in keys}
    dist[start] = 0

    for _ in range(len(keys) - 1):
        changed = False
        for edge in edges:
            u, v = edge.source, edge.destination
            if dist[u] != INF and dist[u] + edge.weight < dist[v]:
                dist[v] = dist[u] + edge.weight
                pred[v] = u
                pred_edge[v] = edge.key
                changed = True
        if not changed:
            break
    return dist, pred, pred_edge


def _trace_cycle(
    graph: Graph,
    relaxable: Edge,
    pred: PredVertex,
    pred_edge: PredEdge,
    node_count: int,
) -> Optional[NegativeCycle]:
    """Recover the cycle behind a still-relaxable edge, or None if the chain ends."""
    # Apply the pending relaxation on a private copy so the chain includes it
    pred = dict(pred)
    pred_edge = dict(pred_edge)
    pred[relaxable.destination] = relaxable.source
    pred_edge[relaxable.destination] = relaxable.key

    def step(node: Optional[NodeKey]) -> Optional[NodeKey]:
        return None if node is None else pred[node]

    # Tortoise and hare over predecessor links
    slow: Optional[NodeKey] = relaxable.destination
    fast: Optional[NodeKey] = relaxable.destination
    for _ in range(node_count + 1):
        slow = step(slow)
        fast = step(step(fast))
        if slow is None or fast is None:
            return None
        if slow == fast:
            break
    else:
        return None

    # Entry point: restart one pointer from the head; both advance one step
    entry: Optional[NodeKey] = relaxable.destination
    meet: Optional[NodeKey] = slow
    while entry != meet:
        entry = step(entry)
        meet = step(meet)
    if entry is None:
        return None

    # Walk the chain from the entry point back to itself
    backward: List[NodeKey] = [entry]
    node = pred[entry]
    while node != entry:
        if node is None or len(backward) > node_count:
            return None
        backward.append(node)
        node = pred[node]

    vertices = list(reversed(backward))
    edge_keys: List[EdgeKey] = []
    total: Cost = 0
    for i in range(len(vertices)):
        into = vertices[(i + 1) % len(vertices)]
        e_key = pred_edge[into]
        if e_key is None:
            return None
        edge_keys.append(e_key)
        total += graph.get_edge(e_key).weight

    return _normalize(vertices, edge_keys, total)


def _normalize(
    vertices: List[NodeKey], edge_keys: List[EdgeKey], total: Cost
) -> NegativeCycle:
    """Rotate the cycle so it starts at its smallest vertex."""
    pivot = vertices.index(min(vertices))
    return NegativeCycle(
        vertices=tuple(vertices[pivot:] + vertices[:pivot]),
        edges=tuple(edge_keys[pivot:] + edge_keys[:pivot]),
        total_weight=total,
    )
