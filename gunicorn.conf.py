import multiprocessing, os

# Sensible defaults for a small dyno/container; tune as needed
workers = int((multiprocessing.cpu_count() * 2) + 1)
threads = 2
worker_class = "gthread"
preload_app = True
bind = ":8000"
wsgi_app = "arshare:create_app()"
# Heroku/Render style proxy headers
forwarded_allow_ips = "*"
# Keep-alive tuning
timeout = 60
keepalive = 75
# Access logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
