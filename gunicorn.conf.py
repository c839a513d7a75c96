import os

wsgi_app = "app:server"
worker_class = "gthread"
workers = 1  # generated snapshots live per process; one worker keeps them shared
threads = 4
bind = f"0.0.0.0:{os.environ.get('PORT', '8050')}"
timeout = 60
graceful_timeout = 30
keepalive = 5
forwarded_allow_ips = "10.0.0.0/8,127.0.0.1"

# hygiene
max_requests = 2000
max_requests_jitter = 200

# security limits
limit_request_fields = 100
limit_request_field_size = 8190   # adjust prudently


def post_worker_init(worker):
    from analytics_demo.config import configure_logging

    configure_logging()
