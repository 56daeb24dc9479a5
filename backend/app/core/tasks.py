# backend/app/core/tasks.py

from celery.utils.log import get_task_logger
from backend.worker.worker import celery_app
from backend.app.config import settings
from backend.app.dependencies import get_optimization_service

logger = get_task_logger(__name__)

# No autoretry: a job runs to COMPLETED or FAILED exactly once
@celery_app.task(
    name="process_optimization_job",
    bind=False,
    soft_time_limit=settings.CELERY_SOFT_TIME_LIMIT,  #  600s
    time_limit=settings.CELERY_HARD_TIME_LIMIT,       #  660s
    acks_late=False,
)
def process_optimization_job(job_id: str):
    logger.info("Starting optimization job id=%s", job_id)
    job = get_optimization_service().process(job_id)
    logger.info("Finished optimization job id=%s status=%s", job_id, job.status.value)
    return {"job_id": job_id, "status": job.status.value}
