# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import contextvars
import json
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock, Semaphore
from typing import Any, Protocol

from pydantic import BaseModel, Field
from typing_extensions import Self

from personagen.engine.errors import ErrorTrap, PersonaGenRuntimeError

logger = logging.getLogger(__name__)


class ExecutorResults(BaseModel):
    failure_threshold: float = 0.0
    completed_count: int = 0
    success_count: int = 0
    early_shutdown: bool = False
    error_trap: ErrorTrap = Field(default_factory=ErrorTrap)

    @property
    def summary(self) -> dict:
        return self.model_dump()

    def get_error_rate(self, window: int) -> float:
        # Error rate tracking starts once the minimum window size is met.
        if self.completed_count < window:
            return 0.0
        return self.error_trap.error_count / max(1, self.completed_count)

    def is_error_rate_exceeded(self, window: int) -> bool:
        return self.get_error_rate(window) >= self.failure_threshold


class CallbackWithContext(Protocol):
    def __call__(self, result: Any, *, context: dict | None = None) -> Any: ...


class ErrorCallbackWithContext(Protocol):
    def __call__(self, exc: Exception, *, context: dict | None = None) -> Any: ...


class ConcurrentThreadExecutor:
    """Bounded thread pool for independent tasks with error rate monitoring.

    ``submit`` blocks while ``max_workers`` tasks are in flight, and leaving the context
    manager waits for every submitted task to finish. Each task's return value is passed to
    ``result_callback`` and each raised exception to ``error_callback``, together with the
    ``context`` given at submission. Exceptions never escape a worker.

    When early shutdown is enabled and the error rate exceeds ``shutdown_error_rate`` after
    ``shutdown_error_window`` completed tasks, the next submission (or the exit of the
    context manager) raises ``PersonaGenRuntimeError``.

    Args:
        max_workers: Maximum number of tasks running at once.
        task_name: Label used in log and error messages.
        result_callback: Called with each task's return value.
        error_callback: Called with each exception raised by a task.
        shutdown_error_rate: Error rate that triggers early shutdown.
        shutdown_error_window: Minimum number of completed tasks before the error rate is checked.
        disable_early_shutdown: If True, the error rate never stops the executor.
    """

    def __init__(
        self,
        *,
        max_workers: int,
        task_name: str,
        result_callback: CallbackWithContext | None = None,
        error_callback: ErrorCallbackWithContext | None = None,
        shutdown_error_rate: float = 0.50,
        shutdown_error_window: int = 10,
        disable_early_shutdown: bool = False,
    ):
        self._executor: ThreadPoolExecutor | None = None
        self._task_name = task_name
        self._max_workers = max_workers
        self._lock = Lock()
        self._semaphore = Semaphore(self._max_workers)
        self._result_callback = result_callback
        self._error_callback = error_callback
        self._shutdown_error_rate = shutdown_error_rate
        self._shutdown_window_size = shutdown_error_window
        self._disable_early_shutdown = disable_early_shutdown
        self._results = ExecutorResults(failure_threshold=shutdown_error_rate)

    @property
    def results(self) -> ExecutorResults:
        return self._results

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def __enter__(self) -> Self:
        self._executor = ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix="ConcurrentThreadExecutor",
            initializer=_set_worker_context,
            initargs=(contextvars.copy_context(),),
        )
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self._shutdown_executor()
        if not self._disable_early_shutdown and self._results.early_shutdown:
            self._raise_task_error()

    def submit(self, fn, *args, context: dict | None = None, **kwargs) -> None:
        if self._executor is None:
            raise RuntimeError("Executor is not initialized, this class should be used as a context manager.")

        if not self._disable_early_shutdown and self._results.early_shutdown:
            self._shutdown_executor()
            self._raise_task_error()

        def _handle_future(future: Future) -> None:
            try:
                result = future.result()
                if self._result_callback is not None:
                    self._result_callback(result, context=context)
                with self._lock:
                    self._results.completed_count += 1
                    self._results.success_count += 1
            except Exception as err:
                with self._lock:
                    self._results.completed_count += 1
                    self._results.error_trap.handle_error(err)
                    if not self._disable_early_shutdown and self._results.is_error_rate_exceeded(
                        self._shutdown_window_size
                    ):
                        # Shutdown is triggered on the next submission; doing it from this
                        # callback thread can deadlock the pool.
                        self._results.early_shutdown = True
                if self._error_callback is not None:
                    self._error_callback(err, context=context)
            finally:
                self._semaphore.release()

        try:
            self._semaphore.acquire()
            future = self._executor.submit(fn, *args, **kwargs)
            future.add_done_callback(_handle_future)
        except Exception as err:
            self._semaphore.release()
            is_shutdown_error = isinstance(err, RuntimeError) and (
                "after shutdown" in str(err) or "Pool shutdown" in str(err)
            )
            if not is_shutdown_error:
                raise err
            self._raise_task_error()

    def _shutdown_executor(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)

    def _raise_task_error(self) -> None:
        raise PersonaGenRuntimeError(
            "\n".join(
                [
                    f"  |-- {self._task_name.capitalize()} was terminated early due to error rate exceeding threshold.",
                    f"  |-- The summary of encountered errors is: \n{json.dumps(self._results.summary, indent=4)}",
                ]
            )
        )


def _set_worker_context(context: contextvars.Context) -> None:
    for var, value in context.items():
        var.set(value)
