"""graphkit: graph data type and classical graph analysis.

Provides a validated, integer-keyed graph (`Graph`) and algorithms over it:
connectivity and components, single-source and all-pairs shortest paths,
negative-cycle detection, minimum spanning trees and maximum flow.

Example:
    from graphkit import Graph, calc_max_flow

    g = Graph.from_edges([(1, 1, 2, 10), (2, 1, 3, 10), (3, 2, 4, 10), (4, 3, 4, 10)])
    result = calc_max_flow(g, 1, 4)
    assert result.max_flow == 20
"""

from __future__ import annotations

from graphkit import logging
from graphkit._version import __version__
from graphkit.algorithms import (
    all_pairs_shortest_paths,
    calc_max_flow,
    connected_components,
    eccentricity_summary,
    find_negative_cycles,
    has_cycle,
    is_connected,
    is_tree,
    minimum_spanning_tree,
)
from graphkit.config import ALGORITHM_CONFIG, AlgorithmConfig, GraphOptions
from graphkit.dispatch import AlgorithmRunner
from graphkit.exceptions import (
    DuplicateEdgeKeyError,
    DuplicateEdgeRejectedError,
    DuplicateNodeKeyError,
    EdgeNotFoundError,
    GraphError,
    InvalidEdgeEndpointError,
    InvalidFlowEndpointsError,
    InvalidKeyTypeError,
    NodeNotFoundError,
    UninitializedGraphError,
    UnsupportedNegativeWeightError,
)
from graphkit.graph import Edge, Graph, Node

__all__ = [
    # Version
    "__version__",
    # Model
    "Graph",
    "Node",
    "Edge",
    "GraphOptions",
    # Analysis
    "all_pairs_shortest_paths",
    "calc_max_flow",
    "connected_components",
    "eccentricity_summary",
    "find_negative_cycles",
    "has_cycle",
    "is_connected",
    "is_tree",
    "minimum_spanning_tree",
    # Execution
    "AlgorithmRunner",
    "AlgorithmConfig",
    "ALGORITHM_CONFIG",
    # Errors
    "GraphError",
    "UninitializedGraphError",
    "NodeNotFoundError",
    "EdgeNotFoundError",
    "DuplicateNodeKeyError",
    "DuplicateEdgeKeyError",
    "InvalidEdgeEndpointError",
    "DuplicateEdgeRejectedError",
    "UnsupportedNegativeWeightError",
    "InvalidFlowEndpointsError",
    "InvalidKeyTypeError",
    # Utilities
    "logging",
]
