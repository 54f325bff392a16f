"""A thread pool with a shared task queue, plus synchronised printing and a stopwatch."""

from __future__ import annotations

import os
import sys
import threading
import time
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable, Deque, Optional, TextIO


def _default_thread_count() -> int:
    return os.cpu_count() or 1


class ThreadPool:
    """Worker threads that pop tasks from a FIFO queue and run them.

    While ``paused`` is true, workers stop taking new tasks from the queue;
    tasks already running continue until they finish.
    """

    def __init__(self, thread_count: int = 0) -> None:
        self._cond = threading.Condition()
        self._tasks: Deque[Callable[[], None]] = deque()
        self._total = 0
        self._running = True
        self._paused = False
        self._thread_count = thread_count or _default_thread_count()
        self._threads: list[threading.Thread] = []
        self._create_threads()

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, value: bool) -> None:
        with self._cond:
            self._paused = bool(value)
            self._cond.notify_all()

    def tasks_queued(self) -> int:
        """Number of tasks waiting in the queue."""
        with self._cond:
            return len(self._tasks)

    def tasks_running(self) -> int:
        """Number of tasks currently being executed."""
        with self._cond:
            return self._total - len(self._tasks)

    def tasks_total(self) -> int:
        """Number of unfinished tasks, queued or running."""
        with self._cond:
            return self._total

    def thread_count(self) -> int:
        return self._thread_count

    def push_task(self, task: Callable[..., Any], *args: Any) -> None:
        """Queue a call to ``task(*args)``; its result is discarded."""
        self._enqueue(lambda: task(*args))

    def submit(self, task: Callable[..., Any], *args: Any) -> Future:
        """Queue a call to ``task(*args)`` and return a future for its result."""
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = task(*args)
            except BaseException as exc:  # delivered to the caller through the future
                future.set_exception(exc)
            else:
                future.set_result(result)

        self._enqueue(run)
        return future

    def parallelize_loop(
        self,
        first_index: int,
        last_index: int,
        loop: Callable[[int], Any],
        num_tasks: int = 0,
    ) -> None:
        """Call ``loop(i)`` for every i from first_index to last_index inclusive, in blocks.

        Blocks until every block has finished; an exception in any block is re-raised.
        """
        if num_tasks == 0:
            num_tasks = self._thread_count
        if last_index < first_index:
            first_index, last_index = last_index, first_index
        total_size = last_index - first_index + 1
        block_size = total_size // num_tasks
        if block_size == 0:
            block_size = 1
            num_tasks = total_size if total_size > 1 else 1

        def run_block(start: int, end: int) -> None:
            for i in range(start, end + 1):
                loop(i)

        futures = []
        for t in range(num_tasks):
            start = t * block_size + first_index
            end = last_index if t == num_tasks - 1 else (t + 1) * block_size + first_index - 1
            futures.append(self.submit(run_block, start, end))
        for future in futures:
            future.result()

    def reset(self, thread_count: int = 0) -> None:
        """Wait for running tasks, then replace the workers with a new set.

        Queued tasks are kept and run by the new workers; the paused state is preserved.
        """
        was_paused = self._paused
        self.paused = True
        self.wait_for_tasks()
        self._stop_threads()
        self._thread_count = thread_count or _default_thread_count()
        with self._cond:
            self._paused = was_paused
            self._running = True
        self._create_threads()

    def wait_for_tasks(self) -> None:
        """Wait for all tasks, or only for running ones while the pool is paused."""
        with self._cond:
            self._cond.wait_for(self._idle)

    def shutdown(self) -> None:
        """Wait for tasks as wait_for_tasks does, then stop and join the workers."""
        self.wait_for_tasks()
        self._stop_threads()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()

    def _idle(self) -> bool:
        if self._paused:
            return self._total - len(self._tasks) == 0
        return self._total == 0

    def _enqueue(self, func: Callable[[], None]) -> None:
        with self._cond:
            self._total += 1
            self._tasks.append(func)
            self._cond.notify_all()

    def _create_threads(self) -> None:
        self._threads = [
            threading.Thread(target=self._worker, daemon=True) for _ in range(self._thread_count)
        ]
        for thread in self._threads:
            thread.start()

    def _stop_threads(self) -> None:
        with self._cond:
            self._running = False
            self._cond.notify_all()
        for thread in self._threads:
            thread.join()
        self._threads = []

    def _worker(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(
                    lambda: not self._running or (not self._paused and bool(self._tasks))
                )
                if not self._running:
                    return
                func = self._tasks.popleft()
            try:
                func()
            except Exception as exc:
                print(f"thread pool task failed: {exc!r}", file=sys.stderr)
            finally:
                with self._cond:
                    self._total -= 1
                    self._cond.notify_all()


class SyncedStream:
    """Serialises writes from several threads to one output stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._lock = threading.Lock()

    def print(self, *args: Any) -> None:
        """Write the items, concatenated without separators."""
        text = "".join(str(a) for a in args)
        with self._lock:
            self._stream.write(text)

    def println(self, *args: Any) -> None:
        """Write the items followed by a newline."""
        self.print(*args, "\n")


class Stopwatch:
    """Measures the time between start() and stop()."""

    def __init__(self) -> None:
        self._start_ns = time.monotonic_ns()
        self._elapsed_ns = 0

    def start(self) -> None:
        self._start_ns = time.monotonic_ns()

    def stop(self) -> None:
        self._elapsed_ns = time.monotonic_ns() - self._start_ns

    def ms(self) -> int:
        """Whole milliseconds between the last start() and stop()."""
        return self._elapsed_ns // 1_000_000