"""Tests for `graphkit.config` defaults and capacity rules."""

import dataclasses

import pytest

from graphkit.config import ALGORITHM_CONFIG, AlgorithmConfig, GraphOptions


def test_graph_options_defaults() -> None:
    """Graphs are directed without multi-edges unless told otherwise."""
    options = GraphOptions()
    assert options.directed is True
    assert options.allow_multi is False


def test_graph_options_are_frozen() -> None:
    options = GraphOptions()
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.directed = False  # type: ignore[misc]


def test_capacity_for_positive_weight() -> None:
    assert AlgorithmConfig().capacity_for(7) == 7


@pytest.mark.parametrize("weight", [0, -1, -100])
def test_capacity_for_non_positive_weight(weight: int) -> None:
    """Non-positive weights fall back to the configured default capacity."""
    assert AlgorithmConfig().capacity_for(weight) == 1
    assert AlgorithmConfig(default_capacity=5).capacity_for(weight) == 5


def test_global_instance_uses_defaults() -> None:
    assert ALGORITHM_CONFIG.default_capacity == 1
    assert ALGORITHM_CONFIG.max_workers >= 1
    assert ALGORITHM_CONFIG.snapshot_on_dispatch is True
