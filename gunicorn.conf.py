"""
Gunicorn configuration for production deployment.
Uvicorn workers serve the async FastAPI app: bootcamp_api.main:app
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
timeout = int(os.getenv("GUNICORN_TIMEOUT", 30))
keepalive = 5
graceful_timeout = 30

# Process naming
proc_name = "bootcamp_api"

# Server mechanics
daemon = False  # Don't run as daemon (Docker handles this)
pidfile = None

# Logging (application logs are structured by bootcamp_api.core.logging)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s "%(r)s" %(s)s %(b)s %(D)s'


# Server hooks
def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Bootcamp API ready. Spawning workers")


def worker_abort(worker):
    """Called when a worker is aborted (usually a request timeout)."""
    worker.log.warning("Worker received SIGABRT signal")
