"""Maximum flow and minimum cut (Edmonds-Karp).

Edge weights act as capacities; weights of zero or less take
``ALGORITHM_CONFIG.default_capacity``. Parallel edges between the same
ordered pair share one residual arc, and undirected edges give capacity in
both directions. Augmenting paths are found by breadth-first search over
arcs with positive residual capacity, so each augmentation uses a path with
the fewest edges.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Set

from graphkit.algorithms.base import Cost
from graphkit.algorithms.types import FlowEdge, MaxFlowResult
from graphkit.config import ALGORITHM_CONFIG, AlgorithmConfig
from graphkit.exceptions import InvalidFlowEndpointsError
from graphkit.graph.core import Edge, EdgeKey, Graph, NodeKey
from graphkit.logging import get_logger

logger = get_logger(__name__)

Residual = Dict[NodeKey, Dict[NodeKey, Cost]]


def calc_max_flow(
    graph: Graph,
    source: NodeKey,
    sink: NodeKey,
    config: Optional[AlgorithmConfig] = None,
) -> MaxFlowResult:
    """Compute the maximum flow from ``source`` to ``sink``.

    Args:
        graph: The flow network.
        source: Source node key.
        sink: Sink node key.
        config: Capacity defaults; ``ALGORITHM_CONFIG`` when omitted.

    Returns:
        MaxFlowResult: Flow value, per-edge flows and the induced minimum cut.
        When no augmenting path exists the flow is 0; that is a normal result.

    Raises:
        UninitializedGraphError: If the graph stores are not allocated.
        InvalidFlowEndpointsError: If either endpoint is missing or they are equal.

    Examples:
        >>> g = Graph.from_edges([(1, 1, 2, 10), (2, 2, 3, 5)])
        >>> calc_max_flow(g, 1, 3).max_flow
        5
    """
    graph.check_initialized()
    cfg = config if config is not None else ALGORITHM_CONFIG
    _validate_endpoints(graph, source, sink)

    capacity = _build_capacity(graph, cfg)
    residual: Residual = {u: dict(row) for u, row in capacity.items()}

    total: Cost = 0
    iterations = 0
    while True:
        parent = _bfs_augmenting_path(residual, source, sink)
        if parent is None:
            break

        # Bottleneck along the path
        bottleneck: Optional[Cost] = None
        v = sink
        while v != source:
            u = parent[v]
            if bottleneck is None or residual[u][v] < bottleneck:
                bottleneck = residual[u][v]
            v = u
        assert bottleneck is not None

        v = sink
        while v != source:
            u = parent[v]
            residual[u][v] -= bottleneck
            residual[v][u] += bottleneck
            v = u

        total += bottleneck
        iterations += 1

    logger.debug(
        "Max flow %s -> %s: %s after %d augmentation(s)",
        source,
        sink,
        total,
        iterations,
    )

    min_cut = _reachable(residual, source)
    cut_edges = _cut_edges(graph, min_cut)
    cut_capacity = sum(cfg.capacity_for(graph.get_edge(k).weight) for k in cut_edges)
    flow_edges = _edge_flows(graph, capacity, residual, cfg)

    if total == 0:
        message = f"No augmenting path from {source} to {sink}"
        logger.info(message)
    else:
        message = f"Maximum flow from {source} to {sink} is {total}"

    return MaxFlowResult(
        max_flow=total,
        source=source,
        sink=sink,
        flow_edges=tuple(flow_edges),
        min_cut=tuple(sorted(min_cut)),
        cut_edges=tuple(cut_edges),
        cut_capacity=cut_capacity,
        residual=residual,
        message=message,
    )


def _validate_endpoints(graph: Graph, source: NodeKey, sink: NodeKey) -> None:
    if not graph.has_node(source):
        raise InvalidFlowEndpointsError(
            f"Source node {source} does not exist", source, sink, missing=source
        )
    if not graph.has_node(sink):
        raise InvalidFlowEndpointsError(
            f"Sink node {sink} does not exist", source, sink, missing=sink
        )
    if source == sink:
        raise InvalidFlowEndpointsError(
            "Source and sink cannot be the same node", source, sink
        )


def _arcs_of(graph: Graph, edge: Edge) -> List[tuple]:
    if graph.directed or edge.is_self_loop():
        return [(edge.source, edge.destination)]
    return [(edge.source, edge.destination), (edge.destination, edge.source)]


def _build_capacity(graph: Graph, cfg: AlgorithmConfig) -> Residual:
    """Aggregate edge capacities per ordered node pair; reverse arcs start at 0."""
    capacity: Residual = {key: {} for key in graph.node_keys()}
    for edge in graph.iter_edges():
        if edge.is_self_loop():
            continue
        cap = cfg.capacity_for(edge.weight)
        for u, v in _arcs_of(graph, edge):
            capacity[u][v] = capacity[u].get(v, 0) + cap
            capacity[v].setdefault(u, 0)
    return capacity


def _bfs_augmenting_path(
    residual: Residual, source: NodeKey, sink: NodeKey
) -> Optional[Dict[NodeKey, NodeKey]]:
    """Breadth-first search for a path with positive residual capacity.

    Returns:
        Parent links from the sink back to the source, or None if unreachable.
    """
    parent: Dict[NodeKey, NodeKey] = {}
    visited = {source}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        for v, cap in residual[u].items():
            if cap > 0 and v not in visited:
                visited.add(v)
                parent[v] = u
                if v == sink:
                    return parent
                queue.append(v)
    return None


def _reachable(residual: Residual, source: NodeKey) -> Set[NodeKey]:
    visited = {source}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        for v, cap in residual[u].items():
            if cap > 0 and v not in visited:
                visited.add(v)
                queue.append(v)
    return visited


def _cut_edges(graph: Graph, side: Set[NodeKey]) -> List[EdgeKey]:
    """Original edges that cross from ``side`` to the rest of the graph."""
    crossing = []
    for edge in graph.iter_edges():
        for u, v in _arcs_of(graph, edge):
            if u in side and v not in side:
                crossing.append(edge.key)
                break
    return crossing


def _edge_flows(
    graph: Graph, capacity: Residual, residual: Residual, cfg: AlgorithmConfig
) -> List[FlowEdge]:
    """Split the net flow of each node pair across its original edges.

    The net flow on ``u -> v`` is ``capacity[u][v] - residual[u][v]``; flow
    pushed back along a reverse arc has already reduced it. Positive net flow
    is assigned to the pair's edges in ascending key order, each up to its
    own capacity.
    """
    remaining: Dict[tuple, Cost] = {}
    for u, row in capacity.items():
        for v, cap in row.items():
            if u < v or graph.directed:
                net = cap - residual[u][v]
                if net > 0:
                    remaining[(u, v)] = net
                elif net < 0:
                    remaining[(v, u)] = -net

    flows: List[FlowEdge] = []
    for edge in graph.iter_edges():
        if edge.is_self_loop():
            continue
        cap = cfg.capacity_for(edge.weight)
        for u, v in _arcs_of(graph, edge):
            left = remaining.get((u, v), 0)
            if left <= 0:
                continue
            amount = min(cap, left)
            remaining[(u, v)] = left - amount
            flows.append(
                FlowEdge(
                    edge_key=edge.key,
                    source=u,
                    destination=v,
                    capacity=cap,
                    flow=amount,
                )
            )
            break
    return flows
