"""Tests for running analyses on the background worker pool."""

import threading
import time

import pytest

from graphkit.algorithms.connectivity import count_components
from graphkit.algorithms.max_flow import calc_max_flow
from graphkit.dispatch import AlgorithmRunner
from graphkit.exceptions import InvalidFlowEndpointsError
from graphkit.graph.core import Graph


@pytest.fixture
def runner():
    with AlgorithmRunner(max_workers=1) as r:
        yield r


def _diamond():
    return Graph.from_edges(
        [(1, 1, 2, 10), (2, 1, 3, 10), (3, 2, 4, 10), (4, 3, 4, 10)]
    )


def test_submit_returns_result(runner):
    task = runner.submit(calc_max_flow, _diamond(), 1, 4)
    assert task.name == "calc_max_flow"
    assert task.result(timeout=5).max_flow == 20
    assert task.done()


def test_snapshot_isolates_later_mutation(runner):
    gate = threading.Event()

    def slow_count(graph):
        gate.wait(timeout=5)
        return count_components(graph)

    g = Graph.from_edges([(1, 1, 2)], directed=False)
    task = runner.submit(slow_count, g)
    g.add_node(3)
    gate.set()
    assert task.result(timeout=5) == 1


def test_without_snapshot_sees_live_graph():
    g = Graph.from_edges([(1, 1, 2)], directed=False)
    with AlgorithmRunner(max_workers=1, snapshot=False) as runner:
        task = runner.submit(lambda graph: graph, g)
        assert task.result(timeout=5) is g


def test_on_done_callback(runner):
    finished = threading.Event()
    seen = []

    def on_done(task):
        seen.append(task.result())
        finished.set()

    runner.submit(count_components, _diamond(), on_done=on_done)
    assert finished.wait(timeout=5)
    assert seen == [1]


def test_discard_pending_task(runner):
    gate = threading.Event()
    called = []
    blocker = runner.submit(lambda graph: gate.wait(timeout=5), _diamond())
    pending = runner.submit(
        count_components, _diamond(), on_done=lambda task: called.append(task)
    )

    assert pending.discard() is True
    gate.set()
    blocker.result(timeout=5)
    assert pending.result() is None
    assert called == []


def test_discard_running_task_drops_result(runner):
    started = threading.Event()
    gate = threading.Event()

    def slow(graph):
        started.set()
        gate.wait(timeout=5)
        return graph.node_count

    task = runner.submit(slow, _diamond())
    assert started.wait(timeout=5)
    assert task.discard() is False
    gate.set()
    while not task.done():
        time.sleep(0.01)
    assert task.result() is None


def test_errors_surface_on_result(runner):
    task = runner.submit(calc_max_flow, _diamond(), 1, 1)
    with pytest.raises(InvalidFlowEndpointsError):
        task.result(timeout=5)
