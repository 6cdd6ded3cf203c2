#!/usr/bin/env python3
"""
WSGI entry point for the Recovery Tracker API.
Served by gunicorn/uWSGI as `wsgi:application`.
"""

from app import create_app

application = create_app()

if __name__ == "__main__":
    application.run()
