"""Shared fixtures for the MatchIQ test suite."""

import pytest

from backend.app.core.async_queue import InlineJobScheduler
from backend.app.core.generation import FallbackContentGenerator
from backend.app.core.job_store import InMemoryJobStore
from backend.app.core.optimization_service import ResumeOptimizationService


@pytest.fixture
def store():
    return InMemoryJobStore()


@pytest.fixture
def service(store):
    """Service whose scheduler runs processing synchronously inside submit()."""
    svc = ResumeOptimizationService(
        store=store,
        scheduler=None,
        generator=FallbackContentGenerator(),
    )
    svc.scheduler = InlineJobScheduler(svc.process)
    return svc
