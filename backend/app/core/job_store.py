# backend/app/core/job_store.py

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Optional

import redis

from backend.app.models.job_models import OptimizationJob

logger = logging.getLogger(__name__)


class JobStore(ABC):
    """Keyed storage for optimization jobs."""

    @abstractmethod
    def save(self, job: OptimizationJob) -> OptimizationJob:
        """Insert (assigning an id) or overwrite; returns the stored record."""

    @abstractmethod
    def find_by_id(self, job_id: str) -> Optional[OptimizationJob]:
        ...

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex


class InMemoryJobStore(JobStore):
    """Process-local store. Hands out copies so callers never share a record."""

    def __init__(self):
        self._jobs: Dict[str, OptimizationJob] = {}
        self._lock = threading.Lock()

    def save(self, job: OptimizationJob) -> OptimizationJob:
        stored = job.model_copy(deep=True)
        if stored.id is None:
            stored.id = self.new_id()
        with self._lock:
            self._jobs[stored.id] = stored
        return stored.model_copy(deep=True)

    def find_by_id(self, job_id: str) -> Optional[OptimizationJob]:
        with self._lock:
            job = self._jobs.get(job_id)
        return job.model_copy(deep=True) if job is not None else None

    def count(self) -> int:
        with self._lock:
            return len(self._jobs)


class RedisJobStore(JobStore):
    """Jobs as JSON strings under `optimization_job:<id>`; shared by the API and the workers."""

    KEY_PREFIX = "optimization_job:"

    def __init__(self, client: "redis.Redis"):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisJobStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def _key(self, job_id: str) -> str:
        return f"{self.KEY_PREFIX}{job_id}"

    def save(self, job: OptimizationJob) -> OptimizationJob:
        stored = job.model_copy(deep=True)
        if stored.id is None:
            stored.id = self.new_id()
        self.client.set(self._key(stored.id), stored.model_dump_json())
        logger.debug("Saved job %s status=%s", stored.id, stored.status.value)
        return stored

    def find_by_id(self, job_id: str) -> Optional[OptimizationJob]:
        raw = self.client.get(self._key(job_id))
        if raw is None:
            return None
        return OptimizationJob.model_validate_json(raw)


def build_job_store(backend: str, redis_url: str) -> JobStore:
    backend = (backend or "").strip().lower()
    if backend == "redis":
        return RedisJobStore.from_url(redis_url)
    if backend == "memory":
        return InMemoryJobStore()
    raise ValueError(f"Unsupported JOB_STORE_BACKEND: {backend!r} (expected 'redis' or 'memory')")
