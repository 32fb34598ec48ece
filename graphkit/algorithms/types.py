"""Types and data structures for algorithm results.

Every analysis returns one of these immutable records. Expected "no answer"
outcomes (a disconnected graph for a spanning tree, a negative cycle for
all-pairs paths) are reported through ``is_possible``/``is_valid`` and
``message`` rather than raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, TypeVar

from graphkit.algorithms.base import Cost, is_finite
from graphkit.graph.core import Edge, EdgeKey, NodeKey

V = TypeVar("V")


def _frozen_matrix(
    matrix: Mapping[NodeKey, Mapping[NodeKey, V]],
) -> Mapping[NodeKey, Mapping[NodeKey, V]]:
    """Read-only copy of a nested mapping; rows are frozen too."""
    return MappingProxyType(
        {key: MappingProxyType(dict(row)) for key, row in matrix.items()}
    )


@dataclass(frozen=True)
class ComponentsResult:
    """Connected components in discovery order.

    Attributes:
        count: Number of components.
        sizes: Component sizes, in the order components were discovered.
        components: Member keys of each component, sorted within a component.
    """

    count: int
    sizes: Tuple[int, ...]
    components: Tuple[Tuple[NodeKey, ...], ...]

    @property
    def is_connected(self) -> bool:
        return self.count <= 1

    @property
    def largest(self) -> int:
        return max(self.sizes, default=0)

    @property
    def smallest(self) -> int:
        return min(self.sizes, default=0)

    @property
    def isolated(self) -> int:
        """Number of single-vertex components."""
        return sum(1 for size in self.sizes if size == 1)


@dataclass(frozen=True)
class EccentricityResult:
    """Eccentricities with radius, diameter, center and periphery.

    Attributes:
        eccentricities: Per-vertex eccentricity; ``INF`` if some vertex is
            unreachable from it.
        radius: Minimum finite eccentricity, or None when none is finite.
        diameter: Maximum finite eccentricity, or None when none is finite.
        center: Vertices whose eccentricity equals the radius.
        periphery: Vertices whose eccentricity equals the diameter.
        is_connected: True when every eccentricity is finite.
        message: Human-readable status.
    """

    eccentricities: Mapping[NodeKey, Cost]
    radius: Optional[Cost]
    diameter: Optional[Cost]
    center: Tuple[NodeKey, ...]
    periphery: Tuple[NodeKey, ...]
    is_connected: bool
    message: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "eccentricities", MappingProxyType(dict(self.eccentricities))
        )


@dataclass(frozen=True)
class AllPairsResult:
    """All-pairs shortest path distances and next-hop matrix.

    When ``is_valid`` is False (a negative cycle was found) both matrices are
    empty and ``message`` explains why.
    """

    distances: Mapping[NodeKey, Mapping[NodeKey, Cost]]
    next_hop: Mapping[NodeKey, Mapping[NodeKey, Optional[NodeKey]]]
    is_valid: bool
    message: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "distances", _frozen_matrix(self.distances))
        object.__setattr__(self, "next_hop", _frozen_matrix(self.next_hop))

    @property
    def keys(self) -> List[NodeKey]:
        return sorted(self.distances)

    def distance(self, source: NodeKey, destination: NodeKey) -> Cost:
        return self.distances[source][destination]

    def path(self, source: NodeKey, destination: NodeKey) -> Optional[List[NodeKey]]:
        """Reconstruct the vertex sequence from ``source`` to ``destination``.

        Returns:
            The path including both endpoints, ``[source]`` when they are
            equal, or None when no path exists.
        """
        if not self.is_valid:
            return None
        if source == destination:
            return [source]
        hop = self.next_hop[source][destination]
        if hop is None:
            return None
        path = [source]
        current = source
        while current != destination:
            nxt = self.next_hop[current][destination]
            if nxt is None:
                return None
            current = nxt
            path.append(current)
        return path

    def reachable_pairs(self) -> int:
        """Number of ordered pairs of distinct vertices with a finite distance."""
        return sum(
            1
            for src, row in self.distances.items()
            for dst, dist in row.items()
            if src != dst and is_finite(dist)
        )


@dataclass(frozen=True)
class NegativeCycle:
    """A negative-weight cycle.

    ``vertices`` starts at the smallest key; ``edges[i]`` leads from
    ``vertices[i]`` to ``vertices[(i + 1) % len(vertices)]``.
    """

    vertices: Tuple[NodeKey, ...]
    edges: Tuple[EdgeKey, ...]
    total_weight: Cost


@dataclass(frozen=True)
class NegativeCyclesResult:
    """Unique negative cycles found by predecessor-chain tracing."""

    cycles: Tuple[NegativeCycle, ...]
    message: str = ""

    @property
    def has_negative_cycles(self) -> bool:
        return bool(self.cycles)

    @property
    def total_cycles(self) -> int:
        return len(self.cycles)


@dataclass(frozen=True)
class SpanningTreeResult:
    """Minimum spanning tree edges, or ``is_possible=False`` when disconnected."""

    total_weight: Cost
    edges: Tuple[Edge, ...]
    is_possible: bool
    message: str = ""


@dataclass(frozen=True)
class FlowEdge:
    """Flow carried by one original edge, in the direction it travels."""

    edge_key: EdgeKey
    source: NodeKey
    destination: NodeKey
    capacity: Cost
    flow: Cost

    @property
    def utilization(self) -> float:
        return self.flow / self.capacity if self.capacity else 0.0


@dataclass(frozen=True)
class MaxFlowResult:
    """Summary of a max-flow computation.

    Attributes:
        max_flow: Maximum flow value achieved.
        source: Source key.
        sink: Sink key.
        flow_edges: Edges carrying positive flow, ordered by edge key.
        min_cut: Vertices reachable from the source in the final residual graph.
        cut_edges: Original edges leaving the ``min_cut`` side.
        cut_capacity: Total capacity of ``cut_edges``.
        residual: Final residual capacity per ordered node pair.
        message: Human-readable status.
    """

    max_flow: Cost
    source: NodeKey
    sink: NodeKey
    flow_edges: Tuple[FlowEdge, ...]
    min_cut: Tuple[NodeKey, ...]
    cut_edges: Tuple[EdgeKey, ...]
    cut_capacity: Cost
    residual: Mapping[NodeKey, Mapping[NodeKey, Cost]] = field(default_factory=dict)
    message: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "residual", _frozen_matrix(self.residual))

    @property
    def has_flow(self) -> bool:
        return self.max_flow > 0

    def edge_flow(self) -> Dict[EdgeKey, Cost]:
        return {fe.edge_key: fe.flow for fe in self.flow_edges}


@dataclass(frozen=True)
class TreeCandidatesResult:
    """Vertices whose removal leaves a tree."""

    candidates: Tuple[NodeKey, ...]
    message: str = ""

    @property
    def found(self) -> bool:
        return bool(self.candidates)
