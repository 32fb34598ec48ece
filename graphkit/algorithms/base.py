"""Shared aliases and small helpers for the analysis algorithms."""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple, Union

from graphkit.exceptions import UnsupportedNegativeWeightError
from graphkit.graph.core import EdgeKey, Graph, NodeKey

#: Numeric path cost. Edge weights are ints; unreachable distances are ``INF``.
Cost = Union[int, float]

#: Distance of an unreachable vertex.
INF: float = math.inf

#: Predecessor map of a single-source search: for each reached node, the
#: predecessor nodes and the edges from each predecessor that attain the
#: node's minimal cost. The source maps to an empty dict.
PredMap = Dict[NodeKey, Dict[NodeKey, List[EdgeKey]]]

#: ``(node, edge used to leave the node)`` pairs; the last element has ``None``.
PathElement = Tuple[NodeKey, Optional[EdgeKey]]


def require_non_negative_weights(graph: Graph) -> None:
    """Raise `UnsupportedNegativeWeightError` on the lowest-keyed negative edge."""
    for edge in graph.iter_edges():
        if edge.weight < 0:
            raise UnsupportedNegativeWeightError(edge.key, edge.weight)


def is_finite(value: Cost) -> bool:
    return value != INF
