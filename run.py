"""Entry point for the Series Tracker API.

Starts the HTTP server with settings taken from the environment
(``HOST``, ``PORT``, ``DATABASE_URL``, ``LOG_LEVEL`` ...).  See
``series_tracker_api/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
from series_tracker_api.app.server import main


if __name__ == "__main__":
    main()
