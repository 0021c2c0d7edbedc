import os

# Basic config
host = os.getenv("HOST", "0.0.0.0")
port = os.getenv("PORT", "5010")
bind = f"{host}:{port}"

# Services hold no shared state, so workers scale freely
workers = int(os.getenv("WEB_CONCURRENCY", "2"))
worker_class = "uvicorn.workers.UvicornWorker"
keepalive = 30
# Longer than the WorldTides request timeout
timeout = int(os.getenv("TIMEOUT", "30"))

# Logging
loglevel = os.getenv("LOG_LEVEL", "info")
errorlog = "-"  # stderr
accesslog = "-"  # stdout
