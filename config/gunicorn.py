# -*- coding: utf-8 -*-

import multiprocessing
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"
accesslog = "-"
errorlog = "-"
access_log_format = (
    "%(h)s %(l)s %(u)s %(t)s '%(r)s' %(s)s %(b)s '%(f)s' '%(a)s' in %(D)sµs"  # noqa: E501
)

# Capture stdout/stderr from app workers and send it to Gunicorn's errorlog.
capture_output = True

loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Threaded workers so /io_task and /random_sleep don't block all capacity.
worker_class = os.getenv("WEB_WORKER_CLASS", "gthread")
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2))
threads = int(os.getenv("PYTHON_MAX_THREADS", 4))

reload = os.getenv("WEB_RELOAD", "false").lower() == "true"

timeout = int(os.getenv("WEB_TIMEOUT", 120))

wsgi_app = "alertlab.app:create_app()"
