import os

# Bind to the port provided via the PORT environment variable, defaulting to
# 5000.
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"

# Each request is a short form submission, so plain sync workers suffice.
worker_class = "sync"
workers = int(os.getenv("WEB_CONCURRENCY", "2"))

# The invoice list cache lives in process memory; every worker keeps its own
# copy and only invalidates its own entries.
timeout = 30
