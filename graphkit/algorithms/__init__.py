"""Graph analysis algorithms.

Every function takes a `Graph`, reads it without modification and returns an
immutable record from `graphkit.algorithms.types`.
"""

from graphkit.algorithms.apsp import all_pairs_shortest_paths
from graphkit.algorithms.connectivity import (
    connected_components,
    count_components,
    has_cycle,
    has_directed_cycle,
    is_connected,
    is_tree,
    reachable_from,
)
from graphkit.algorithms.max_flow import calc_max_flow
from graphkit.algorithms.negative_cycles import find_negative_cycles
from graphkit.algorithms.spanning_tree import minimum_spanning_tree
from graphkit.algorithms.spf import (
    eccentricity_summary,
    resolve_path,
    shortest_path_lengths,
    spf,
)
from graphkit.algorithms.structure import (
    in_degree_less_than,
    incoming_neighbors,
    pendant_vertices,
    removable_vertices_for_tree,
    remove_pendant_vertices,
)

__all__ = [
    "all_pairs_shortest_paths",
    "calc_max_flow",
    "connected_components",
    "count_components",
    "eccentricity_summary",
    "find_negative_cycles",
    "has_cycle",
    "has_directed_cycle",
    "in_degree_less_than",
    "incoming_neighbors",
    "is_connected",
    "is_tree",
    "minimum_spanning_tree",
    "pendant_vertices",
    "reachable_from",
    "removable_vertices_for_tree",
    "remove_pendant_vertices",
    "resolve_path",
    "shortest_path_lengths",
    "spf",
]
