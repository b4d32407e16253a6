# app/worker/celery_app.py
"""
Celery application configuration for the marketplace backend.
"""
from celery import Celery
from celery.signals import worker_ready
import logging
from app.core.config import settings

logger = logging.getLogger(__name__)

# Create Celery app
celery_app = Celery(
    "marketplace",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "app.worker.tasks.notifications",
    ],
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_time_limit=300,
    task_soft_time_limit=240,
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
    # Publishing happens inside request handlers; give up quickly on a dead broker
    broker_connection_timeout=settings.REDIS_SOCKET_TIMEOUT,
    task_publish_retry=True,
    task_publish_retry_policy={
        "max_retries": 2,
        "interval_start": 0,
        "interval_step": 0.5,
        "interval_max": 1,
    },
    task_routes={
        "notifications:*": {"queue": "notifications"},
    },
)


@worker_ready.connect
def at_worker_ready(sender, **kwargs):
    """Log when worker is ready."""
    logger.info("Celery worker is ready.")


if __name__ == "__main__":
    celery_app.start()
