"""
WSGI entry point of the DID version registry (served by gunicorn, see gunicorn.conf.py).
"""

import os

from django.core.wsgi import get_wsgi_application

from config.env import settings_module

os.environ.setdefault("DJANGO_SETTINGS_MODULE", settings_module(os.environ.get("DJANGO_ENV")))

application = get_wsgi_application()
