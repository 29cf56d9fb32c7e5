"""Gunicorn configuration for the SportSync API.

Runs a single uvicorn worker: sessions, rate-limit counters and the
in-memory storage backend all live in process memory, so a second worker
would see a different set of logged-in users.
"""

import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

workers = 1
worker_class = "uvicorn.workers.UvicornWorker"

# Timeouts
timeout = 30
graceful_timeout = 30
keepalive = 5

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

wsgi_app = "sportsync.api.main:app"
