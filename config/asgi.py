"""
ASGI entry point of the DID version registry.
"""

import os

from django.core.asgi import get_asgi_application

from config.env import settings_module

os.environ.setdefault("DJANGO_SETTINGS_MODULE", settings_module(os.environ.get("DJANGO_ENV")))

application = get_asgi_application()
