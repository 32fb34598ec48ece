"""Graph conversion utilities between `Graph` and NetworkX graphs.

`to_networkx` picks the NetworkX class that matches the graph options and
keeps edge keys, weights and labels as edge data. `from_networkx` rebuilds a
`Graph`, assigning integer keys when the NetworkX node names are not ints.
"""

from __future__ import annotations

from typing import Dict, Hashable, Optional, Tuple, Union

import networkx as nx

from graphkit.config import GraphOptions
from graphkit.graph.core import Graph, NodeKey

NxGraph = Union[nx.Graph, nx.DiGraph, nx.MultiGraph, nx.MultiDiGraph]


def to_networkx(graph: Graph, weight_attr: str = "weight") -> NxGraph:
    """Convert a Graph to the matching NetworkX graph type.

    Directed graphs become ``DiGraph`` (``MultiDiGraph`` when multi-edges are
    allowed); undirected graphs become ``Graph`` (``MultiGraph``). Node labels
    are stored under ``label``; edges carry ``key``, ``label`` and the weight
    under ``weight_attr``.

    Args:
        graph: The graph to convert.
        weight_attr: Edge attribute name for the weight.

    Returns:
        A new NetworkX graph.
    """
    source = graph.nx_graph
    if graph.directed:
        nx_graph: NxGraph = nx.MultiDiGraph() if graph.allow_multi else nx.DiGraph()
    else:
        nx_graph = nx.MultiGraph() if graph.allow_multi else nx.Graph()

    for key in graph.node_keys():
        nx_graph.add_node(key, **source.nodes[key])

    for u, v, e_key, attrs in sorted(
        source.edges(keys=True, data=True), key=lambda item: item[2]
    ):
        data = {weight_attr: attrs["weight"], "key": e_key, "label": attrs["label"]}
        if graph.allow_multi:
            nx_graph.add_edge(u, v, key=e_key, **data)
        else:
            nx_graph.add_edge(u, v, **data)
    return nx_graph


def from_networkx(
    nx_graph: NxGraph,
    weight_attr: str = "weight",
    default_weight: int = 1,
    options: Optional[GraphOptions] = None,
) -> Tuple[Graph, Dict[Hashable, NodeKey]]:
    """Convert a NetworkX graph to a Graph.

    Integer node names are kept as keys. Any other name is replaced by a key
    counting up from 1 in NetworkX iteration order, and the original name is
    stored as the label. Edge keys come from a ``key`` edge attribute when it
    is an unused int; otherwise they are assigned counting up from 1.

    Args:
        nx_graph: Source NetworkX graph.
        weight_attr: Edge attribute holding the weight.
        default_weight: Weight for edges without ``weight_attr``.
        options: Graph options; inferred from the NetworkX class when omitted.

    Returns:
        Tuple of the new Graph and the mapping of NetworkX node name to key.
    """
    if options is None:
        options = GraphOptions(
            directed=nx_graph.is_directed(), allow_multi=nx_graph.is_multigraph()
        )
    graph = Graph(options)

    names = list(nx_graph.nodes)
    keep_names = all(isinstance(n, int) and not isinstance(n, bool) for n in names)
    node_map: Dict[Hashable, NodeKey] = {}
    for index, name in enumerate(names, start=1):
        key = name if keep_names else index
        label = nx_graph.nodes[name].get("label", "" if keep_names else str(name))
        graph.add_node(key, label=label)
        node_map[name] = key

    if nx_graph.is_multigraph():
        edge_iter = (
            (u, v, data) for u, v, _k, data in nx_graph.edges(keys=True, data=True)
        )
    else:
        edge_iter = nx_graph.edges(data=True)

    pending = []
    used = set()
    for u, v, data in edge_iter:
        key = data.get("key")
        if isinstance(key, int) and not isinstance(key, bool) and key not in used:
            used.add(key)
        else:
            key = None
        pending.append((key, u, v, data))

    next_key = 1
    for key, u, v, data in pending:
        if key is None:
            while next_key in used:
                next_key += 1
            key = next_key
            used.add(key)
        graph.add_edge(
            key,
            node_map[u],
            node_map[v],
            weight=data.get(weight_attr, default_weight),
            label=data.get("label", ""),
        )
    return graph, node_map
