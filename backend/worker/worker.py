# backend/worker/worker.py

from celery import Celery
from celery.signals import after_setup_logger
from backend.app.config import settings
from backend.app.logging_config import configure_logging

# Create Celery app
celery_app = Celery("matchiq")
celery_app.config_from_object("backend.celeryconfig")

# Ensure tasks are imported on worker start
import backend.app.core.tasks       # noqa: F401

@after_setup_logger.connect
def _setup_logging(logger=None, **kwargs):
    """Apply LOG_LEVEL to the worker's loggers once Celery has set up its own handlers."""
    configure_logging(settings.LOG_LEVEL)
