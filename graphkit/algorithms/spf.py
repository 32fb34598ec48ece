"""Shortest-path-first (SPF) search and eccentricity analysis.

Implements Dijkstra's algorithm over non-negative edge weights. Negative
weights are rejected up front with `UnsupportedNegativeWeightError`; they are
never skipped silently.

Notes:
    When a destination node is given, SPF terminates once the destination's
    minimal distance is settled. The destination is not expanded, but nodes
    with equal distance are still processed so that equal-cost predecessors
    are captured.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import Dict, List, Optional, Tuple

from graphkit.algorithms.base import (
    INF,
    Cost,
    PathElement,
    PredMap,
    is_finite,
    require_non_negative_weights,
)
from graphkit.algorithms.types import EccentricityResult
from graphkit.graph.core import EdgeKey, Graph, NodeKey
from graphkit.logging import get_logger

logger = get_logger(__name__)


def _dijkstra(
    graph: Graph,
    src_node: NodeKey,
    multipath: bool,
    dst_node: Optional[NodeKey] = None,
) -> Tuple[Dict[NodeKey, Cost], PredMap]:
    """Dijkstra SPF without input validation.

    Args:
        graph: Graph with non-negative weights.
        src_node: Source node for SPF.
        multipath: Whether to record every equal-cost predecessor.
        dst_node: Optional destination for early termination.

    Returns:
        A tuple of (costs, pred):
          - costs: Maps each reachable node to the minimal cost from src_node.
          - pred: For each reachable node, a dict of predecessor -> list of edges
            from the predecessor to that node.
    """
    costs: Dict[NodeKey, Cost] = {src_node: 0}
    pred: PredMap = {src_node: {}}
    min_pq: List[Tuple[Cost, NodeKey]] = [(0, src_node)]
    settled = set()

    best_dst_cost: Optional[Cost] = None

    while min_pq:
        current_cost, node_id = heappop(min_pq)
        if node_id in settled or current_cost > costs[node_id]:
            continue
        settled.add(node_id)

        if dst_node is not None and node_id == dst_node and best_dst_cost is None:
            best_dst_cost = current_cost

        # Explore neighbors (skip expanding from destination itself)
        if not (dst_node is not None and node_id == dst_node):
            for neighbor_id, edge in graph.out_arcs(node_id):
                if neighbor_id == node_id:
                    continue
                new_cost = current_cost + edge.weight
                if neighbor_id not in costs or new_cost < costs[neighbor_id]:
                    costs[neighbor_id] = new_cost
                    pred[neighbor_id] = {node_id: [edge.key]}
                    heappush(min_pq, (new_cost, neighbor_id))
                elif (
                    multipath
                    and new_cost == costs[neighbor_id]
                    and neighbor_id not in settled
                ):
                    pred[neighbor_id].setdefault(node_id, []).append(edge.key)

        if best_dst_cost is not None:
            # Everything left in the heap is farther than the destination.
            if not min_pq or min_pq[0][0] > best_dst_cost:
                break

    return costs, pred


def spf(
    graph: Graph,
    src_node: NodeKey,
    multipath: bool = True,
    dst_node: Optional[NodeKey] = None,
) -> Tuple[Dict[NodeKey, Cost], PredMap]:
    """Compute shortest paths from a source node.

    Args:
        graph: The graph; directed or undirected.
        src_node: The source node from which to compute shortest paths.
        multipath: Whether to record multiple same-cost predecessors.
        dst_node: Optional destination node enabling early termination.

    Returns:
        tuple[dict[NodeKey, Cost], dict[NodeKey, dict[NodeKey, list[EdgeKey]]]]:
            Costs of reachable nodes and the predecessor mapping.

    Raises:
        UninitializedGraphError: If the graph stores are not allocated.
        NodeNotFoundError: If src_node (or dst_node) does not exist.
        UnsupportedNegativeWeightError: If any edge has a negative weight.
    """
    graph.check_initialized()
    graph.get_node(src_node)
    if dst_node is not None:
        graph.get_node(dst_node)
    require_non_negative_weights(graph)
    return _dijkstra(graph, src_node, multipath, dst_node)


def shortest_path_lengths(graph: Graph, src_node: NodeKey) -> Dict[NodeKey, Cost]:
    """Return the distance from ``src_node`` to every node, ``INF`` if unreachable."""
    costs, _ = spf(graph, src_node, multipath=False)
    return {key: costs.get(key, INF) for key in graph.node_keys()}


def resolve_path(
    src_node: NodeKey, dst_node: NodeKey, pred: PredMap
) -> Optional[List[PathElement]]:
    """Resolve one path from a predecessor map.

    Where several predecessors or parallel edges tie, the lowest key wins.

    Returns:
        ``[(node, edge_out), ..., (dst_node, None)]``, or None if ``dst_node``
        was not reached.
    """
    if dst_node not in pred:
        return None
    path: List[PathElement] = [(dst_node, None)]
    node = dst_node
    while node != src_node:
        prev_node = min(pred[node])
        edge_key: EdgeKey = min(pred[node][prev_node])
        path.append((prev_node, edge_key))
        node = prev_node
    path.reverse()
    return path


def eccentricity_summary(graph: Graph) -> EccentricityResult:
    """Compute eccentricities, radius, diameter, center and periphery.

    Runs Dijkstra from every vertex. A vertex's eccentricity is the largest
    distance to any other vertex, or ``INF`` when some vertex is unreachable
    from it. Radius and diameter are the minimum and maximum finite
    eccentricities, or None when no vertex has a finite one.

    Raises:
        UninitializedGraphError: If the graph stores are not allocated.
        UnsupportedNegativeWeightError: If any edge has a negative weight.
    """
    graph.check_initialized()
    keys = graph.node_keys()
    if not keys:
        return EccentricityResult(
            eccentricities={},
            radius=0,
            diameter=0,
            center=(),
            periphery=(),
            is_connected=True,
            message="Graph is empty",
        )

    require_non_negative_weights(graph)

    eccentricities: Dict[NodeKey, Cost] = {}
    for vertex in keys:
        costs, _ = _dijkstra(graph, vertex, multipath=False)
        if len(costs) < len(keys):
            eccentricities[vertex] = INF
        else:
            eccentricities[vertex] = max(costs.values())

    finite = [ecc for ecc in eccentricities.values() if is_finite(ecc)]
    if not finite:
        logger.info("No vertex reaches all others; radius and diameter undefined")
        return EccentricityResult(
            eccentricities=eccentricities,
            radius=None,
            diameter=None,
            center=(),
            periphery=(),
            is_connected=False,
            message="Graph is disconnected: radius and diameter are infinite",
        )

    radius = min(finite)
    diameter = max(finite)
    center = tuple(k for k in keys if eccentricities[k] == radius)
    periphery = tuple(k for k in keys if eccentricities[k] == diameter)
    connected = len(finite) == len(keys)
    logger.debug("Eccentricity: radius=%s diameter=%s", radius, diameter)
    return EccentricityResult(
        eccentricities=eccentricities,
        radius=radius,
        diameter=diameter,
        center=center,
        periphery=periphery,
        is_connected=connected,
        message=f"Found eccentricities for {len(keys)} vertices",
    )
