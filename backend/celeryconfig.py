# backend/celeryconfig.py

import os
from kombu import Queue, Exchange

# redis is in another docker container
# if it's not the case for you,
# use : "redis://localhost:6379/0"

BROKER_URL = os.getenv("CELERY_BROKER_URL", os.getenv("REDIS_URL", "redis://host.docker.internal:6379/0"))
RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", BROKER_URL)

broker_url = BROKER_URL
result_backend = RESULT_BACKEND


task_serializer = "json"
result_serializer = "json"
accept_content = ["json"]
timezone = "UTC"
enable_utc = True

# One job at a time per worker process; jobs are long, LLM-bound calls
worker_prefetch_multiplier = 1

# -------- Queues & Routing --------
# Exchanges (direct for simple routing)

default_exchange = Exchange("default", type="direct")
optimization_exchange = Exchange("optimization", type="direct")

# Declare queues
task_queues = (
    Queue("default", exchange=default_exchange, routing_key="default"),
    Queue("optimization", exchange=optimization_exchange, routing_key="optimization"),
)

# Default routing if a task has no explicit route
task_default_queue = "default"
task_default_exchange = "default"
task_default_routing_key = "default"

task_routes = {
    "process_optimization_job": {"queue": "optimization", "routing_key": "optimization"},
}
