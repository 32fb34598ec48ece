"""Graph primitives and helpers.

This package provides the keyed `Graph` type with its `Node` and `Edge`
records, and NetworkX conversion helpers (`convert`).
"""

from graphkit.graph.core import Arc, Edge, EdgeKey, Graph, Node, NodeKey, Weight

__all__ = ["Arc", "Edge", "EdgeKey", "Graph", "Node", "NodeKey", "Weight"]
