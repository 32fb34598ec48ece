"""Configuration classes for graphkit components."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GraphOptions:
    """Graph-wide options applied when a `Graph` is constructed.

    Attributes:
        directed: When False, every stored edge is traversable in both
            directions. Edges are still stored once.
        allow_multi: When False, at most one edge may connect an ordered
            pair of nodes (an unordered pair for undirected graphs).
    """

    directed: bool = True
    allow_multi: bool = False


@dataclass
class AlgorithmConfig:
    """Defaults shared by the analysis algorithms and the dispatcher."""

    # Capacity given to edges whose weight is zero or negative in max-flow
    default_capacity: int = 1

    # Worker threads used by AlgorithmRunner when none is requested
    max_workers: int = 2

    # Dispatched calls run on a deep copy of the graph
    snapshot_on_dispatch: bool = True

    def capacity_for(self, weight: int) -> int:
        """Return the flow capacity an edge of the given weight contributes."""
        return weight if weight > 0 else self.default_capacity


# Global configuration instance
ALGORITHM_CONFIG = AlgorithmConfig()
