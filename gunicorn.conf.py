"""
Gunicorn Configuration

Uvicorn workers under Gunicorn for production deployment.
"""

import multiprocessing
import os

bind = os.getenv("BIND", "0.0.0.0:8000")

# The dashboard is light; a few workers are enough
workers = int(os.getenv("WORKERS", min(multiprocessing.cpu_count() + 1, 4)))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = 60
keepalive = 5
graceful_timeout = 30

proc_name = "shop-admin-api"

errorlog = "-"
accesslog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
