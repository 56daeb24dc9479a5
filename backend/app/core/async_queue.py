# backend/app/core/async_queue.py

import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

OPTIMIZATION_QUEUE = "optimization"


class JobScheduler(ABC):
    """Hands a stored job id to whatever runs the pipeline."""

    @abstractmethod
    def schedule(self, job_id: str) -> None:
        ...


class CeleryJobScheduler(JobScheduler):
    """Async processing on Celery workers with queue routing."""

    def __init__(self, queue_name: str = OPTIMIZATION_QUEUE):
        self.queue_name = queue_name

    def schedule(self, job_id: str) -> None:
        from backend.app.core.tasks import process_optimization_job

        # Route to the selected queue via apply_async; use positional args
        async_result = process_optimization_job.apply_async(
            args=[job_id],
            queue=self.queue_name,
            routing_key=self.queue_name,
        )
        logger.info("Job %s sent to queue '%s' (task id %s)", job_id, self.queue_name, async_result.id)


class ThreadPoolJobScheduler(JobScheduler):
    """In-process worker pool, for a single API process with the in-memory store."""

    def __init__(self, handler: Callable[[str], object], max_workers: int = 4):
        self.handler = handler
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="optimization")
        self.futures: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def schedule(self, job_id: str) -> Future:
        future = self.executor.submit(self.handler, job_id)
        # registered before the callback so a fast task cannot be popped first
        with self._lock:
            self.futures[job_id] = future
        future.add_done_callback(lambda f: self._finish(job_id, f))
        return future

    def wait(self, job_id: str, timeout: Optional[float] = None):
        """Block until the job's task finishes. Returns the handler's result, or None if it already finished."""
        future = self.futures.get(job_id)
        if future is None:
            return None
        return future.result(timeout=timeout)

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)

    def _finish(self, job_id: str, future: Future) -> None:
        with self._lock:
            if self.futures.get(job_id) is future:
                del self.futures[job_id]
        exc = future.exception()
        if exc is not None:
            logger.error("Background task for job %s crashed: %s", job_id, exc, exc_info=exc)


class InlineJobScheduler(JobScheduler):
    """Runs the handler immediately on the calling thread. Used by tests."""

    def __init__(self, handler: Optional[Callable[[str], object]] = None):
        self.handler = handler
        self.scheduled = []

    def schedule(self, job_id: str) -> None:
        self.scheduled.append(job_id)
        if self.handler is not None:
            self.handler(job_id)
