"""WSGI entrypoint used by Gunicorn: ``gunicorn sports_scheduler.wsgi:app``."""
import os

from sports_scheduler.app import create_app

config_name = os.environ.get('FLASK_ENV', 'production')
app = create_app(config_name)
