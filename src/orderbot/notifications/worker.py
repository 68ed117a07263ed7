"""
Dispatch Worker

Decouples order creation from notification latency: callers submit jobs to a
bounded queue and return immediately; a single daemon thread runs them.

- A full queue drops the job (logged); submit() never blocks
- Job failures are logged; there is no retry queue
- stop() drains what is already queued before the thread exits
"""

import logging
import queue
import threading
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

Job = Tuple[Callable[..., Any], tuple, dict]


class DispatchWorker:
    def __init__(self, maxsize: int = 100, poll_interval: float = 0.2):
        self._queue: "queue.Queue[Job]" = queue.Queue(maxsize=maxsize)
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="dispatch-worker", daemon=True)
        self._thread.start()
        logger.info("Dispatch worker started")

    def stop(self, join: bool = True, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if join and self._thread is not None:
            self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def pending(self) -> int:
        return self._queue.qsize()

    def submit(self, fn: Callable[..., Any], *args, **kwargs) -> bool:
        """
        Queue a job without waiting for it.

        Returns:
            False if the queue is full and the job was dropped
        """
        try:
            self._queue.put_nowait((fn, args, kwargs))
        except queue.Full:
            logger.error(
                f"Dispatch queue full ({self._queue.maxsize}); dropping {getattr(fn, '__name__', fn)}"
            )
            return False
        return True

    def drain(self) -> int:
        """Run every queued job in the calling thread. Returns the number run."""
        count = 0
        while True:
            try:
                job = self._queue.get_nowait()
            except queue.Empty:
                return count
            self._execute(job)
            count += 1

    def _execute(self, job: Job) -> None:
        fn, args, kwargs = job
        try:
            fn(*args, **kwargs)
        except Exception as e:
            logger.error(f"Dispatch job {getattr(fn, '__name__', fn)} failed: {e}", exc_info=True)
        finally:
            self._queue.task_done()

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                job = self._queue.get(timeout=self._poll_interval)
            except queue.Empty:
                continue
            self._execute(job)
        drained = self.drain()
        if drained:
            logger.info(f"Dispatch worker drained {drained} job(s) on stop")
        logger.info("Dispatch worker stopped")
