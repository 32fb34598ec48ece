"""Background execution of analysis calls on a worker pool.

An interactive front-end can hand a long analysis to `AlgorithmRunner` and
keep accepting input. The graph must not be mutated while a call that uses
it is running; with ``snapshot=True`` (the default) the call receives a deep
copy taken at submission time instead.

Cancellation is coarse: `AnalysisTask.discard` cancels a call that has not
started, and otherwise only drops its result. Algorithms are never aborted
midway.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Generic, Optional, TypeVar

from graphkit.config import ALGORITHM_CONFIG
from graphkit.graph.core import Graph
from graphkit.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class AnalysisTask(Generic[T]):
    """Handle for a submitted analysis call."""

    def __init__(self, name: str, future: Future) -> None:
        self.name = name
        self.future = future
        self.discarded = False

    def done(self) -> bool:
        return self.future.done()

    def result(self, timeout: Optional[float] = None) -> Optional[T]:
        """Wait for and return the result; None once the task was discarded."""
        if self.discarded:
            return None
        return self.future.result(timeout=timeout)

    def discard(self) -> bool:
        """Cancel the call if it has not started; otherwise ignore its result.

        Returns:
            bool: True if the call was cancelled before it started.
        """
        self.discarded = True
        cancelled = self.future.cancel()
        logger.debug("Task %s discarded (cancelled=%s)", self.name, cancelled)
        return cancelled


class AlgorithmRunner:
    """Run analysis functions on a thread pool.

    Example:
        >>> with AlgorithmRunner() as runner:
        ...     task = runner.submit(minimum_spanning_tree, graph)
        ...     mst = task.result()
    """

    def __init__(
        self, max_workers: Optional[int] = None, snapshot: Optional[bool] = None
    ) -> None:
        self.max_workers = max_workers or ALGORITHM_CONFIG.max_workers
        self.snapshot = (
            ALGORITHM_CONFIG.snapshot_on_dispatch if snapshot is None else snapshot
        )
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="graphkit"
        )

    def submit(
        self,
        func: Callable[..., T],
        graph: Graph,
        *args: Any,
        on_done: Optional[Callable[[AnalysisTask[T]], None]] = None,
        **kwargs: Any,
    ) -> AnalysisTask[T]:
        """Schedule ``func(graph, *args, **kwargs)`` on the pool.

        Args:
            func: Analysis function taking the graph as first argument.
            graph: Graph to analyse; copied first when snapshots are enabled.
            *args: Extra positional arguments for ``func``.
            on_done: Called with the task once it finishes, unless discarded.
                Runs on the worker thread.
            **kwargs: Extra keyword arguments for ``func``.

        Returns:
            AnalysisTask: Handle for the pending call.
        """
        target = graph.copy() if self.snapshot else graph
        name = getattr(func, "__name__", repr(func))
        future = self._executor.submit(func, target, *args, **kwargs)
        task: AnalysisTask[T] = AnalysisTask(name, future)
        logger.debug("Submitted %s (snapshot=%s)", name, self.snapshot)

        if on_done is not None:

            def _callback(_future: Future) -> None:
                if task.discarded or _future.cancelled():
                    return
                on_done(task)

            future.add_done_callback(_callback)
        return task

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> AlgorithmRunner:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown(wait=True)
