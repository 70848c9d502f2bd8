"""
Gunicorn configuration for the candidate review API
"""
import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
backlog = 2048

# Worker processes
workers = int(os.getenv("GUNICORN_WORKERS", 2))
worker_class = "uvicorn.workers.UvicornWorker"

# Worker lifecycle
max_requests = 1000  # Restart worker after 1000 requests
max_requests_jitter = 100

# Timeouts
# Inline AI reviews (POST .../ai?wait=true, ai-select) wait on the inference
# service, so the request timeout must exceed AI_REQUEST_TIMEOUT.
timeout = int(os.getenv("GUNICORN_TIMEOUT", 90))
keepalive = 5
graceful_timeout = 30

# Process naming
proc_name = "candidate_review_api"

# Logging
accesslog = "-"  # Log to stdout
errorlog = "-"   # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Candidate review API ready, spawning workers")


def worker_abort(worker):
    """Called when a worker is aborted (usually a request timeout)."""
    worker.log.warning("Worker aborted; a request exceeded the gunicorn timeout")
