"""Gunicorn production configuration.

Run from the repository root: gunicorn -c gunicorn.conf.py
"""
import multiprocessing

wsgi_app = "app.main:app"
chdir = "backend"
bind = "0.0.0.0:8000"
workers = multiprocessing.cpu_count() + 1
worker_class = "uvicorn.workers.UvicornWorker"
timeout = 60
keepalive = 5
max_requests = 1000
max_requests_jitter = 100
accesslog = "-"
errorlog = "-"
loglevel = "info"
