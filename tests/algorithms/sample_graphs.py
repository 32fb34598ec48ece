"""Sample graphs shared by the algorithm tests.

Registered as a pytest plugin from `tests/conftest.py`.
"""

import pytest

from graphkit.config import GraphOptions
from graphkit.graph.core import Graph


@pytest.fixture
def diamond():
    # Capacity / weight:
    #        [10]   2   [10]
    #      ┌──────►●───────┐
    #      │               ▼
    #      1               4
    #      │               ▲
    #      └──────►●───────┘
    #        [10]   3   [10]
    return Graph.from_edges(
        [(1, 1, 2, 10), (2, 1, 3, 10), (3, 2, 4, 10), (4, 3, 4, 10)],
        nodes=[(1, "s"), (2, "a"), (3, "b"), (4, "t")],
    )


@pytest.fixture
def negative_triangle():
    # A ──[-5]──► B ──[2]──► C ──[1]──► A
    return Graph.from_edges(
        [(1, 1, 2, -5), (2, 2, 3, 2), (3, 3, 1, 1)],
        nodes=[(1, "A"), (2, "B"), (3, "C")],
    )


@pytest.fixture
def path5():
    # 1 ─[1]─ 2 ─[2]─ 3 ─[3]─ 4 ─[4]─ 5
    return Graph.from_edges(
        [(1, 1, 2, 1), (2, 2, 3, 2), (3, 3, 4, 3), (4, 4, 5, 4)],
        directed=False,
    )


@pytest.fixture
def two_components():
    # 1 ─ 2 ─ 3     4 ─ 5     6
    return Graph.from_edges(
        [(1, 1, 2, 1), (2, 2, 3, 1), (3, 4, 5, 1)],
        nodes=[6],
        directed=False,
    )


@pytest.fixture
def weighted_square():
    # 1 ─[1]─ 2
    # │ ╲     │
    # [4] [5] [2]
    # │     ╲ │
    # 4 ─[3]─ 3
    return Graph.from_edges(
        [(1, 1, 2, 1), (2, 2, 3, 2), (3, 3, 4, 3), (4, 4, 1, 4), (5, 1, 3, 5)],
        directed=False,
    )


@pytest.fixture
def clrs_network():
    # Flow network from Cormen et al.; s=1, t=6, maximum flow 23.
    return Graph.from_edges(
        [
            (1, 1, 2, 16),
            (2, 1, 3, 13),
            (3, 2, 3, 10),
            (4, 3, 2, 4),
            (5, 2, 4, 12),
            (6, 4, 3, 9),
            (7, 3, 5, 14),
            (8, 5, 4, 7),
            (9, 4, 6, 20),
            (10, 5, 6, 4),
        ]
    )


@pytest.fixture
def empty_graph():
    return Graph(GraphOptions(directed=False))
