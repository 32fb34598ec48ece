"""Exception hierarchy for graph validation failures.

Every error derives from `GraphError` and from the builtin exception type
raised for the same condition elsewhere in the package (``KeyError`` for
missing keys, ``ValueError`` for rejected input), so either can be caught.
"""

from __future__ import annotations

from typing import Hashable, Optional


class GraphError(Exception):
    """Base exception for graph operations."""


class UninitializedGraphError(GraphError, RuntimeError):
    """Raised when the node or edge store has not been allocated."""

    def __init__(self, store: str = "nodes") -> None:
        self.store = store
        super().__init__(f"Graph {store} store is not initialized.")


class NodeNotFoundError(GraphError, KeyError):
    """Raised when a node key is not in the graph."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"Node '{key}' does not exist.")

    def __str__(self) -> str:
        # KeyError would otherwise quote the whole message
        return str(self.args[0])


class EdgeNotFoundError(GraphError, KeyError):
    """Raised when an edge key is not in the graph."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"Edge with id='{key}' not found.")

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateNodeKeyError(GraphError, ValueError):
    """Raised when adding a node whose key is already in use."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"Node '{key}' already exists in this graph.")


class DuplicateEdgeKeyError(GraphError, ValueError):
    """Raised when adding an edge whose key is already in use."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"Edge with id '{key}' already exists.")


class InvalidEdgeEndpointError(GraphError, ValueError):
    """Raised when an edge references a node that does not exist."""

    def __init__(self, key: Hashable, endpoint: Hashable, role: str) -> None:
        self.key = key
        self.endpoint = endpoint
        self.role = role
        super().__init__(
            f"{role.capitalize()} node '{endpoint}' of edge '{key}' does not exist."
        )


class DuplicateEdgeRejectedError(GraphError, ValueError):
    """Raised when a second edge between the same nodes violates allow_multi=False."""

    def __init__(
        self, key: Hashable, source: Hashable, destination: Hashable, existing: Hashable
    ) -> None:
        self.key = key
        self.source = source
        self.destination = destination
        self.existing = existing
        super().__init__(
            f"Edge '{key}' from {source} to {destination} duplicates edge "
            f"'{existing}' and multi-edges are not allowed."
        )


class UnsupportedNegativeWeightError(GraphError, ValueError):
    """Raised by algorithms that require non-negative edge weights."""

    def __init__(self, key: Hashable, weight: float) -> None:
        self.key = key
        self.weight = weight
        super().__init__(
            f"Negative weights are not supported. Edge {key} has weight {weight}."
        )


class InvalidFlowEndpointsError(GraphError, ValueError):
    """Raised when max-flow endpoints are missing or identical."""

    def __init__(
        self,
        message: str,
        source: Hashable,
        sink: Hashable,
        missing: Optional[Hashable] = None,
    ) -> None:
        self.source = source
        self.sink = sink
        self.missing = missing
        super().__init__(message)


class InvalidKeyTypeError(GraphError, TypeError):
    """Raised when a node or edge key is not an int (``bool`` included)."""

    def __init__(self, key: object, kind: str) -> None:
        self.key = key
        self.kind = kind
        super().__init__(
            f"{kind.capitalize()} key {key!r} must be an int, "
            f"not {type(key).__name__}."
        )
