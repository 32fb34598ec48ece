"""Keyed graph with validated mutation over a NetworkX adjacency.

`Graph` keeps its nodes and edges in two dictionaries keyed by integer ids;
those tables are the source of truth. Traversal structure lives in a
`networkx.MultiDiGraph` (directed) or `networkx.MultiGraph` (undirected)
derived from the tables, with each NetworkX edge keyed by its edge key.

Additions extend the NetworkX graph in place. Removals and option changes
rebuild it from the full edge table, so it cannot drift from the edges.

Undirected graphs store each connection once; directedness only changes how
edges are traversed.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from types import MappingProxyType
from typing import (
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

import networkx as nx

from graphkit.config import GraphOptions
from graphkit.exceptions import (
    DuplicateEdgeKeyError,
    DuplicateEdgeRejectedError,
    DuplicateNodeKeyError,
    EdgeNotFoundError,
    InvalidEdgeEndpointError,
    InvalidKeyTypeError,
    NodeNotFoundError,
    UninitializedGraphError,
)
from graphkit.logging import get_logger

NodeKey = int
EdgeKey = int
Weight = Union[int, float]
NxMultiGraph = Union[nx.MultiDiGraph, nx.MultiGraph]

logger = get_logger(__name__)


@dataclass(frozen=True)
class Node:
    """A graph vertex.

    Attributes:
        key: Unique, immutable node identifier.
        label: Optional display label.
    """

    key: NodeKey
    label: str = ""


@dataclass(frozen=True)
class Edge:
    """A stored connection from ``source`` to ``destination``.

    Attributes:
        key: Unique, immutable edge identifier.
        source: Key of the source node.
        destination: Key of the destination node.
        weight: Integer weight (cost, or capacity for max-flow).
        label: Optional display label.
    """

    key: EdgeKey
    source: NodeKey
    destination: NodeKey
    weight: Weight = 0
    label: str = ""

    def endpoints(self) -> Tuple[NodeKey, NodeKey]:
        return self.source, self.destination

    def is_self_loop(self) -> bool:
        return self.source == self.destination

    def other(self, key: NodeKey) -> NodeKey:
        """Return the endpoint opposite to ``key``.

        Raises:
            ValueError: If ``key`` is not an endpoint of this edge.
        """
        if key == self.source:
            return self.destination
        if key == self.destination:
            return self.source
        raise ValueError(f"Node '{key}' is not an endpoint of edge '{self.key}'.")


Arc = Tuple[NodeKey, Edge]


def _require_int_key(value: object, kind: str) -> None:
    # bool is an int subclass and would collide with keys 0 and 1
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidKeyTypeError(value, kind)


def _edge_index(g: NxMultiGraph) -> Dict[EdgeKey, object]:
    if g.is_directed():
        return {k: (u, v) for u, v, k in g.edges(keys=True)}
    return {k: frozenset((u, v)) for u, v, k in g.edges(keys=True)}


class Graph:
    """A graph of integer-keyed nodes and edges with strict validation.

    This class enforces:
      - Node and edge keys are ints (``bool`` is rejected).
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate node keys and no duplicate edge keys.
      - At most one edge per node pair unless ``allow_multi`` is set.
      - Removing or looking up missing nodes or edges raises.
      - Removing a node removes every incident edge.

    Node and edge stores may be left unallocated (``allocate=False``) for
    callers that fill them in bulk; any access in that state raises
    `UninitializedGraphError`, which is distinct from a missing key.
    """

    def __init__(
        self, options: Optional[GraphOptions] = None, *, allocate: bool = True
    ) -> None:
        """Initialize a Graph.

        Args:
            options: Graph-wide options. Defaults to ``GraphOptions()``.
            allocate: If False, leave the stores unallocated until
                ``allocate()`` is called.
        """
        self._options: GraphOptions = options if options is not None else GraphOptions()
        self._nodes: Optional[Dict[NodeKey, Node]] = None
        self._edges: Optional[Dict[EdgeKey, Edge]] = None
        self._nx: NxMultiGraph = self._new_nx_graph()
        if allocate:
            self.allocate()

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple],
        nodes: Iterable[Union[NodeKey, Tuple[NodeKey, str]]] = (),
        options: Optional[GraphOptions] = None,
        *,
        directed: Optional[bool] = None,
        allow_multi: Optional[bool] = None,
    ) -> Graph:
        """Build a graph from edge tuples.

        Each edge is ``(key, source, destination)``, optionally followed by a
        weight and a label. Endpoints not listed in ``nodes`` are created
        without a label.

        Args:
            edges: Edge tuples.
            nodes: Node keys, or ``(key, label)`` pairs, to create first.
            options: Graph options; ``directed``/``allow_multi`` override it.
            directed: Optional override of ``options.directed``.
            allow_multi: Optional override of ``options.allow_multi``.

        Returns:
            Graph: The populated graph.
        """
        base = options if options is not None else GraphOptions()
        graph = cls(
            GraphOptions(
                directed=base.directed if directed is None else directed,
                allow_multi=base.allow_multi if allow_multi is None else allow_multi,
            )
        )
        for item in nodes:
            if isinstance(item, tuple):
                graph.add_node(*item)
            else:
                graph.add_node(item)
        edge_list = list(edges)
        for edge in edge_list:
            for endpoint in edge[1:3]:
                if not graph.has_node(endpoint):
                    graph.add_node(endpoint)
        for edge in edge_list:
            graph.add_edge(*edge)
        return graph

    #
    # Storage state
    #
    def allocate(self) -> None:
        """Allocate empty node and edge stores if they are not allocated yet."""
        if self._nodes is None:
            self._nodes = {}
        if self._edges is None:
            self._edges = {}
        self._rebuild_adjacency()

    @property
    def is_initialized(self) -> bool:
        return self._nodes is not None and self._edges is not None

    def check_initialized(self) -> None:
        """Raise `UninitializedGraphError` unless both stores are allocated.

        Every algorithm calls this before reading the graph.
        """
        if self._nodes is None:
            raise UninitializedGraphError("nodes")
        if self._edges is None:
            raise UninitializedGraphError("edges")

    def _node_store(self) -> Dict[NodeKey, Node]:
        if self._nodes is None:
            raise UninitializedGraphError("nodes")
        return self._nodes

    def _edge_store(self) -> Dict[EdgeKey, Edge]:
        if self._edges is None:
            raise UninitializedGraphError("edges")
        return self._edges

    #
    # Options
    #
    @property
    def options(self) -> GraphOptions:
        return self._options

    @property
    def directed(self) -> bool:
        return self._options.directed

    @property
    def allow_multi(self) -> bool:
        return self._options.allow_multi

    def update_options(
        self, directed: Optional[bool] = None, allow_multi: Optional[bool] = None
    ) -> bool:
        """Change graph options in place.

        Nothing is rebuilt unless a value actually changes. When the new options
        forbid multi-edges, edges that duplicate a lower-keyed edge between the
        same nodes are dropped before the adjacency is rebuilt.

        Args:
            directed: New directedness, or None to keep the current one.
            allow_multi: New multi-edge policy, or None to keep the current one.

        Returns:
            bool: True if the options changed and the graph was rebuilt.
        """
        new_options = GraphOptions(
            directed=self.directed if directed is None else directed,
            allow_multi=self.allow_multi if allow_multi is None else allow_multi,
        )
        if new_options == self._options:
            return False

        self._options = new_options
        if self.is_initialized and not new_options.allow_multi:
            self._drop_parallel_edges()
        self._rebuild_adjacency()
        logger.debug(
            "Graph options updated: directed=%s allow_multi=%s",
            new_options.directed,
            new_options.allow_multi,
        )
        return True

    def _pair_of(self, source: NodeKey, destination: NodeKey) -> Tuple[NodeKey, ...]:
        if self.directed:
            return (source, destination)
        return tuple(sorted((source, destination)))

    def _drop_parallel_edges(self) -> None:
        edges = self._edge_store()
        seen: Dict[Tuple[NodeKey, ...], EdgeKey] = {}
        dropped: List[EdgeKey] = []
        for key in sorted(edges):
            edge = edges[key]
            pair = self._pair_of(edge.source, edge.destination)
            if pair in seen:
                dropped.append(key)
            else:
                seen[pair] = key
        for key in dropped:
            del edges[key]
        if dropped:
            logger.warning(
                "Dropped %d parallel edge(s) while disallowing multi-edges: %s",
                len(dropped),
                dropped,
            )

    #
    # Node management
    #
    def add_node(self, key: NodeKey, label: str = "") -> Node:
        """Add a single node, disallowing duplicates.

        Args:
            key: The node key.
            label: Optional display label.

        Returns:
            Node: The stored node.

        Raises:
            InvalidKeyTypeError: If the key is not an int.
            DuplicateNodeKeyError: If the key already exists in the graph.
        """
        nodes = self._node_store()
        _require_int_key(key, "node")
        if key in nodes:
            raise DuplicateNodeKeyError(key)
        node = Node(key=key, label=label)
        nodes[key] = node
        # A new node touches no edge; extending the adjacency is enough
        self._nx.add_node(key, label=label)
        return node

    def remove_node(self, key: NodeKey) -> None:
        """Remove a single node and all incident edges.

        Raises:
            NodeNotFoundError: If the node does not exist.
        """
        nodes = self._node_store()
        edges = self._edge_store()
        if key not in nodes:
            raise NodeNotFoundError(key)
        to_delete = [
            e_key
            for e_key, edge in edges.items()
            if edge.source == key or edge.destination == key
        ]
        for e_key in to_delete:
            del edges[e_key]
        del nodes[key]
        self._rebuild_adjacency()

    def get_node(self, key: NodeKey) -> Node:
        """Return the node with the given key.

        Raises:
            UninitializedGraphError: If the node store is not allocated.
            NodeNotFoundError: If no such node exists.
        """
        nodes = self._node_store()
        try:
            return nodes[key]
        except KeyError:
            raise NodeNotFoundError(key) from None

    def has_node(self, key: NodeKey) -> bool:
        return key in self._node_store()

    #
    # Edge management
    #
    def add_edge(
        self,
        key: EdgeKey,
        source: NodeKey,
        destination: NodeKey,
        weight: Weight = 0,
        label: str = "",
    ) -> Edge:
        """Add an edge from ``source`` to ``destination``.

        Nodes are never created implicitly; both endpoints must exist.

        Args:
            key: The unique edge key.
            source: The source node. Must exist in the graph.
            destination: The destination node. Must exist in the graph.
            weight: Edge weight.
            label: Optional display label.

        Returns:
            Edge: The stored edge.

        Raises:
            InvalidKeyTypeError: If the edge key or an endpoint is not an int.
            DuplicateEdgeKeyError: If the key is already in use.
            InvalidEdgeEndpointError: If either endpoint does not exist.
            DuplicateEdgeRejectedError: If multi-edges are disallowed and an edge
                already connects the same nodes.
        """
        nodes = self._node_store()
        edges = self._edge_store()
        _require_int_key(key, "edge")
        _require_int_key(source, "node")
        _require_int_key(destination, "node")
        if key in edges:
            raise DuplicateEdgeKeyError(key)
        if source not in nodes:
            raise InvalidEdgeEndpointError(key, source, "source")
        if destination not in nodes:
            raise InvalidEdgeEndpointError(key, destination, "destination")
        if not self.allow_multi:
            existing = self.edges_between(source, destination)
            if existing:
                raise DuplicateEdgeRejectedError(key, source, destination, existing[0])

        edge = Edge(
            key=key, source=source, destination=destination, weight=weight, label=label
        )
        edges[key] = edge
        self._nx.add_edge(source, destination, key=key, weight=weight, label=label)
        return edge

    def remove_edge(self, key: EdgeKey) -> None:
        """Remove an edge by its key.

        Raises:
            EdgeNotFoundError: If no edge with this key exists.
        """
        edges = self._edge_store()
        if key not in edges:
            raise EdgeNotFoundError(key)
        del edges[key]
        self._rebuild_adjacency()

    def get_edge(self, key: EdgeKey) -> Edge:
        """Return the edge with the given key.

        Raises:
            UninitializedGraphError: If the edge store is not allocated.
            EdgeNotFoundError: If no such edge exists.
        """
        edges = self._edge_store()
        try:
            return edges[key]
        except KeyError:
            raise EdgeNotFoundError(key) from None

    def has_edge(self, key: EdgeKey) -> bool:
        return key in self._edge_store()

    def edges_between(self, u: NodeKey, v: NodeKey) -> List[EdgeKey]:
        """List keys of edges that connect ``u`` to ``v``, ascending.

        In an undirected graph edges stored as ``v -> u`` are included.
        """
        self._edge_store()
        if not self._nx.has_edge(u, v):
            return []
        return sorted(self._nx[u][v])

    #
    # Derived adjacency
    #
    def _new_nx_graph(self) -> NxMultiGraph:
        return nx.MultiDiGraph() if self.directed else nx.MultiGraph()

    def _build_nx_graph(self) -> NxMultiGraph:
        g = self._new_nx_graph()
        nodes = self._nodes or {}
        edges = self._edges or {}
        for key in sorted(nodes):
            g.add_node(key, label=nodes[key].label)
        for e_key in sorted(edges):
            edge = edges[e_key]
            g.add_edge(
                edge.source,
                edge.destination,
                key=e_key,
                weight=edge.weight,
                label=edge.label,
            )
        return g

    def _rebuild_adjacency(self) -> None:
        self._nx = self._build_nx_graph()

    def check_adjacency(self) -> bool:
        """Return True if the NetworkX adjacency matches the node and edge tables."""
        self.check_initialized()
        fresh = self._build_nx_graph()
        return (
            self._nx.is_directed() == fresh.is_directed()
            and set(self._nx.nodes) == set(fresh.nodes)
            and _edge_index(self._nx) == _edge_index(fresh)
        )

    @property
    def nx_graph(self) -> NxMultiGraph:
        """Read-only view of the NetworkX multigraph behind the adjacency.

        Edges are keyed by edge key and carry ``weight`` and ``label``; nodes
        carry ``label``.
        """
        self.check_initialized()
        return self._nx.copy(as_view=True)

    def _arcs(self, pairs: Iterable[Tuple[NodeKey, EdgeKey]]) -> Tuple[Arc, ...]:
        edges = self._edge_store()
        arcs = [(nbr, edges[e_key]) for nbr, e_key in pairs]
        arcs.sort(key=lambda arc: arc[1].key)
        return tuple(arcs)

    @property
    def adjacency(self) -> Mapping[NodeKey, Tuple[NodeKey, ...]]:
        """Read-only mapping of node key to the neighbors reachable from it."""
        self.check_initialized()
        return MappingProxyType(
            {key: self.neighbors(key) for key in sorted(self._nx)}
        )

    def neighbors(self, key: NodeKey) -> Tuple[NodeKey, ...]:
        """Return neighbors reachable from ``key`` in one step.

        Each neighbor appears once, ordered by the lowest key of the edges
        leading to it.
        """
        # dict.fromkeys keeps first-seen order while removing repeats
        return tuple(dict.fromkeys(nbr for nbr, _ in self.out_arcs(key)))

    def out_arcs(self, key: NodeKey) -> Tuple[Arc, ...]:
        """Return ``(neighbor, edge)`` pairs traversable from ``key``.

        Undirected edges appear for both endpoints. Pairs are ordered by edge
        key.
        """
        self.get_node(key)
        if self.directed:
            pairs = ((v, k) for _, v, k in self._nx.out_edges(key, keys=True))
        else:
            pairs = ((v, k) for _, v, k in self._nx.edges(key, keys=True))
        return self._arcs(pairs)

    def in_arcs(self, key: NodeKey) -> Tuple[Arc, ...]:
        """Return ``(neighbor, edge)`` pairs that lead into ``key``."""
        self.get_node(key)
        if not self.directed:
            return self.out_arcs(key)
        return self._arcs((u, k) for u, _, k in self._nx.in_edges(key, keys=True))

    def incident_arcs(self, key: NodeKey) -> Tuple[Arc, ...]:
        """Return ``(neighbor, edge)`` pairs ignoring edge direction.

        A self-loop is listed once.
        """
        self.get_node(key)
        if not self.directed:
            return self.out_arcs(key)
        outgoing = [(v, k) for _, v, k in self._nx.out_edges(key, keys=True)]
        incoming = [
            (u, k) for u, _, k in self._nx.in_edges(key, keys=True) if u != key
        ]
        return self._arcs(outgoing + incoming)

    def in_degree(self, key: NodeKey) -> int:
        """Number of edges entering ``key``; equals `degree` when undirected."""
        self.get_node(key)
        if not self.directed:
            return self._nx.degree(key)
        return self._nx.in_degree(key)

    def out_degree(self, key: NodeKey) -> int:
        """Number of edges leaving ``key``; equals `degree` when undirected."""
        self.get_node(key)
        if not self.directed:
            return self._nx.degree(key)
        return self._nx.out_degree(key)

    def degree(self, key: NodeKey) -> int:
        """Number of edge ends at ``key``; a self-loop counts twice."""
        self.get_node(key)
        return self._nx.degree(key)

    #
    # Bulk accessors
    #
    @property
    def nodes(self) -> Mapping[NodeKey, Node]:
        return MappingProxyType(self._node_store())

    @property
    def edges(self) -> Mapping[EdgeKey, Edge]:
        return MappingProxyType(self._edge_store())

    def node_keys(self) -> List[NodeKey]:
        """Node keys in ascending order."""
        return sorted(self._node_store())

    def edge_keys(self) -> List[EdgeKey]:
        """Edge keys in ascending order."""
        return sorted(self._edge_store())

    def iter_edges(self) -> Iterator[Edge]:
        """Yield edges in ascending key order."""
        edges = self._edge_store()
        for key in sorted(edges):
            yield edges[key]

    @property
    def node_count(self) -> int:
        return len(self._node_store())

    @property
    def edge_count(self) -> int:
        return len(self._edge_store())

    def total_weight(self) -> Weight:
        return sum(edge.weight for edge in self._edge_store().values())

    def __len__(self) -> int:
        return self.node_count

    def __contains__(self, key: object) -> bool:
        return self._nodes is not None and key in self._nodes

    def __iter__(self) -> Iterator[NodeKey]:
        return iter(self.node_keys())

    def __repr__(self) -> str:
        if not self.is_initialized:
            return f"Graph(uninitialized, {self._options!r})"
        return (
            f"Graph(nodes={self.node_count}, edges={self.edge_count}, "
            f"directed={self.directed}, allow_multi={self.allow_multi})"
        )

    #
    # Copying
    #
    def copy(self) -> Graph:
        """Return a deep copy with independent stores and a rebuilt adjacency."""
        clone = Graph(self._options, allocate=False)
        if self._nodes is not None:
            clone._nodes = deepcopy(self._nodes)
        if self._edges is not None:
            clone._edges = deepcopy(self._edges)
        clone._rebuild_adjacency()
        return clone

    def __deepcopy__(self, memo: dict) -> Graph:
        return self.copy()
