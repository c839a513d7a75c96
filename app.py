# Thin entrypoint exposing Dash `app` and Flask `server`
from analytics_demo import app, server  # noqa: F401
from analytics_demo import config

if __name__ == "__main__":  # pragma: no cover
    config.configure_logging()
    # For production: use gunicorn, e.g.:
    # gunicorn app:server -c gunicorn.conf.py
    app.run(host="0.0.0.0", port=config.PORT, debug=config.DEBUG)
