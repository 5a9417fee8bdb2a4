# -*- coding: utf-8 -*-

import multiprocessing
import os

from config.settings import str_to_bool

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"
accesslog = "-"
errorlog = "-"
access_log_format = (
    "%(h)s %(l)s %(u)s %(t)s '%(r)s' %(s)s %(b)s '%(f)s' '%(a)s' in %(D)sµs"  # noqa: E501
)

capture_output = True

loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Threaded workers so /error/cpu only pins the thread serving it.
worker_class = os.getenv("WEB_WORKER_CLASS", "gthread")
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2))
threads = int(os.getenv("PYTHON_MAX_THREADS", 4))

reload = str_to_bool(os.getenv("WEB_RELOAD", "false"))

timeout = int(os.getenv("WEB_TIMEOUT", 120))

# Each worker process owns its own error rate and metrics; scrape a single
# worker (WEB_CONCURRENCY=1) when the numbers must add up.
wsgi_app = "pulse.app:create_app()"
