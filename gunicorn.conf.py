"""Gunicorn config for container deployment."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async workers. The ledger lives in process memory, so every worker
# holds its own independent copy; keep one worker unless a shared store is added.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

# Spreadsheet imports and Excel exports are the slowest requests
timeout = 60

graceful_timeout = 30

# Keep-alive: must exceed the proxy keep-alive (default 60s)
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
