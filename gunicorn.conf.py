# Campus Survey API gunicorn.conf
import os
import multiprocessing

# worker count
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))

# uvicorn workers for the ASGI app
worker_class = "uvicorn.workers.UvicornWorker"
wsgi_app = "campus_survey.main:app"

timeout = 60

# bind address and port
bind = f"{os.getenv('HOST', '0.0.0.0')}:{os.getenv('PORT', '5001')}"

# foreground inside Docker
daemon = False

# logs
accesslog = "-"
errorlog = "-"
capture_output = True
loglevel = os.getenv("LOG_LEVEL", "info").lower()
enable_stdio_inheritance = True
