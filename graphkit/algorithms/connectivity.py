"""Connectivity analysis: reachability, components, cycles and trees.

Connectivity and the undirected cycle test use the undirected view of the
graph (`Graph.incident_arcs`), so for directed graphs they describe weak
connectivity. `has_directed_cycle` follows edge direction.
"""

from __future__ import annotations

from collections import deque
from typing import List, Optional, Set, Tuple

from graphkit.algorithms.types import ComponentsResult
from graphkit.graph.core import EdgeKey, Graph, NodeKey
from graphkit.logging import get_logger

logger = get_logger(__name__)


def _bfs_component(
    graph: Graph, start: NodeKey, visited: Set[NodeKey]
) -> List[NodeKey]:
    """Breadth-first search over the undirected view, marking visited nodes."""
    visited.add(start)
    queue = deque([start])
    members = [start]
    while queue:
        node = queue.popleft()
        for neighbor, _edge in graph.incident_arcs(node):
            if neighbor not in visited:
                visited.add(neighbor)
                members.append(neighbor)
                queue.append(neighbor)
    return members


def reachable_from(
    graph: Graph, source: NodeKey, directed: Optional[bool] = None
) -> Set[NodeKey]:
    """Return the set of nodes reachable from ``source``, including itself.

    Args:
        graph: The graph to search.
        source: Start node.
        directed: Follow edge direction. Defaults to the graph's own setting.

    Raises:
        NodeNotFoundError: If ``source`` does not exist.
    """
    graph.check_initialized()
    graph.get_node(source)
    follow_direction = graph.directed if directed is None else directed

    visited = {source}
    queue = deque([source])
    while queue:
        node = queue.popleft()
        arcs = graph.out_arcs(node) if follow_direction else graph.incident_arcs(node)
        for neighbor, _edge in arcs:
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return visited


def is_connected(graph: Graph) -> bool:
    """Return True if a single search from any node visits every node.

    The empty graph is connected by convention.
    """
    graph.check_initialized()
    keys = graph.node_keys()
    if not keys:
        return True
    visited: Set[NodeKey] = set()
    _bfs_component(graph, keys[0], visited)
    return len(visited) == len(keys)


def connected_components(graph: Graph) -> ComponentsResult:
    """Count components and their sizes.

    Searches start from every unvisited node in ascending key order, so the
    discovery order of components is deterministic.

    Returns:
        ComponentsResult: Count, sizes and members in discovery order.
    """
    graph.check_initialized()
    visited: Set[NodeKey] = set()
    components = []
    for key in graph.node_keys():
        if key in visited:
            continue
        members = _bfs_component(graph, key, visited)
        components.append(tuple(sorted(members)))

    logger.debug("Found %d component(s) in %r", len(components), graph)
    return ComponentsResult(
        count=len(components),
        sizes=tuple(len(c) for c in components),
        components=tuple(components),
    )


def count_components(graph: Graph) -> int:
    return connected_components(graph).count


def has_cycle(graph: Graph) -> bool:
    """Return True if the undirected view of the graph contains a cycle.

    Depth-first search from each undiscovered node, remembering the edge used
    to reach every node. Reaching an already discovered node through any other
    edge closes a cycle; self-loops and parallel edges therefore count.
    """
    graph.check_initialized()
    discovered: Set[NodeKey] = set()
    for root in graph.node_keys():
        if root in discovered:
            continue
        discovered.add(root)
        # Stack holds (node, key of the edge it was reached through)
        stack: List[Tuple[NodeKey, Optional[EdgeKey]]] = [(root, None)]
        while stack:
            node, via_edge = stack.pop()
            for neighbor, edge in graph.incident_arcs(node):
                if edge.key == via_edge:
                    continue
                if edge.is_self_loop() or neighbor in discovered:
                    return True
                discovered.add(neighbor)
                stack.append((neighbor, edge.key))
    return False


def has_directed_cycle(graph: Graph) -> bool:
    """Return True if following edge direction can return to a node.

    For undirected graphs this is the same as `has_cycle`.
    """
    graph.check_initialized()
    if not graph.directed:
        return has_cycle(graph)

    white, grey, black = 0, 1, 2
    color = {key: white for key in graph.node_keys()}
    for root in graph.node_keys():
        if color[root] != white:
            continue
        color[root] = grey
        stack = [(root, iter(graph.out_arcs(root)))]
        while stack:
            node, arcs = stack[-1]
            advanced = False
            for neighbor, _edge in arcs:
                if color[neighbor] == grey:
                    return True
                if color[neighbor] == white:
                    color[neighbor] = grey
                    stack.append((neighbor, iter(graph.out_arcs(neighbor))))
                    advanced = True
                    break
            if not advanced:
                color[node] = black
                stack.pop()
    return False


def is_tree(graph: Graph) -> bool:
    """Return True if the graph is a tree.

    A tree has exactly ``node_count - 1`` edges, is connected and has no cycle.
    The empty graph is trivially a tree.
    """
    graph.check_initialized()
    if graph.node_count == 0:
        return True
    if graph.edge_count != graph.node_count - 1:
        return False
    return is_connected(graph) and not has_cycle(graph)
