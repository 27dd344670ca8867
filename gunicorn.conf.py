# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

wsgi_app = 'app:app'

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Get PORT from environment or use default
port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# Requests are I/O bound (Bible API, Anthropic, Supabase)
cores = multiprocessing.cpu_count()
workers = min(cores * 2 + 1, 4)
threads = 4

# Log configuration on startup
def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers on port {port}")
    logger.info(f"Worker timeout set to {timeout} seconds")

timeout = 60  # must stay above BIBLE_API_TIMEOUT
keepalive = 5
worker_class = "gthread"

# Process naming
proc_name = "bible_reading"
default_proc_name = "bible_reading"

# Graceful server restart
graceful_timeout = 30
