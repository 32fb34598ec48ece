"""All-pairs shortest paths (Floyd-Warshall).

Negative edge weights are allowed. A negative value on the diagonal after
relaxation means a negative cycle; the whole result is then reported invalid
instead of returning partial distances.
"""

from __future__ import annotations

from typing import Dict, Optional

from graphkit.algorithms.base import INF, Cost
from graphkit.algorithms.types import AllPairsResult
from graphkit.graph.core import Graph, NodeKey
from graphkit.logging import get_logger

logger = get_logger(__name__)


def all_pairs_shortest_paths(graph: Graph) -> AllPairsResult:
    """Compute shortest distances and next hops between every pair of vertices.

    The distance matrix starts at zero on the diagonal and ``INF`` elsewhere.
    Each edge seeds its pair (both directions when the graph is undirected),
    keeping the lighter of parallel edges. Every vertex, in ascending key
    order, is then tried as an intermediate for every ``(i, j)`` pair.

    Returns:
        AllPairsResult: Distances and next-hop matrix, or ``is_valid=False``
        when a negative cycle is present.

    Raises:
        UninitializedGraphError: If the graph stores are not allocated.
    """
    graph.check_initialized()
    keys = graph.node_keys()
    if not keys:
        return AllPairsResult(
            distances={}, next_hop={}, is_valid=True, message="Graph is empty"
        )

    dist: Dict[NodeKey, Dict[NodeKey, Cost]] = {
        i: {j: (0 if i == j else INF) for j in keys} for i in keys
    }
    next_hop: Dict[NodeKey, Dict[NodeKey, Optional[NodeKey]]] = {
        i: {j: None for j in keys} for i in keys
    }

    for edge in graph.iter_edges():
        arcs = [(edge.source, edge.destination)]
        if not graph.directed:
            arcs.append((edge.destination, edge.source))
        for u, v in arcs:
            if edge.weight < dist[u][v]:
                dist[u][v] = edge.weight
                next_hop[u][v] = v

    for k in keys:
        dist_k = dist[k]
        for i in keys:
            dist_ik = dist[i][k]
            if dist_ik == INF:
                continue
            dist_i = dist[i]
            next_i = next_hop[i]
            for j in keys:
                dist_kj = dist_k[j]
                if dist_kj == INF:
                    continue
                candidate = dist_ik + dist_kj
                if candidate < dist_i[j]:
                    dist_i[j] = candidate
                    next_i[j] = next_i[k]

    negative = [k for k in keys if dist[k][k] < 0]
    if negative:
        logger.info("Negative cycle through vertices %s; distances undefined", negative)
        return AllPairsResult(
            distances={},
            next_hop={},
            is_valid=False,
            message="Graph contains negative weight cycles",
        )

    logger.debug("Computed all-pairs shortest paths for %d vertices", len(keys))
    return AllPairsResult(
        distances=dist,
        next_hop=next_hop,
        is_valid=True,
        message=f"Computed shortest paths for {len(keys)} vertices",
    )
