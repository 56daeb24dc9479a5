# backend/app/dependencies.py

from functools import lru_cache

from backend.app.config import settings
from backend.app.core.async_queue import CeleryJobScheduler, JobScheduler, ThreadPoolJobScheduler
from backend.app.core.documents import DocumentParser, JobDescriptionFetcher
from backend.app.core.generation import build_content_generator
from backend.app.core.job_store import JobStore, build_job_store
from backend.app.core.optimization_service import ResumeOptimizationService


@lru_cache(maxsize=1)
def get_job_store() -> JobStore:
    return build_job_store(settings.JOB_STORE_BACKEND, settings.REDIS_URL)


@lru_cache(maxsize=1)
def get_optimization_service() -> ResumeOptimizationService:
    """Service shared by the API and the Celery task in this process."""
    service = ResumeOptimizationService(
        store=get_job_store(),
        scheduler=None,
        generator=build_content_generator(settings.generator_config()),
    )
    service.scheduler = _build_scheduler(service)
    return service


def _build_scheduler(service: ResumeOptimizationService) -> JobScheduler:
    kind = settings.JOB_SCHEDULER.strip().lower()
    if kind == "celery":
        return CeleryJobScheduler()
    if kind == "thread":
        return ThreadPoolJobScheduler(service.process, max_workers=settings.JOB_WORKER_THREADS)
    raise ValueError(f"Unsupported JOB_SCHEDULER: {kind!r} (expected 'celery' or 'thread')")


def get_document_parser() -> DocumentParser:
    return DocumentParser(max_bytes=settings.MAX_UPLOAD_BYTES)


def get_job_fetcher() -> JobDescriptionFetcher:
    return JobDescriptionFetcher(timeout=settings.JOB_FETCH_TIMEOUT)
