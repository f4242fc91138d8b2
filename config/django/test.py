from .base import *  # noqa

DEBUG = False

SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

DID_DOMAIN_HOST = "registry.test"

IDENTITY_AGENT = {
    **IDENTITY_AGENT,
    "BACKEND": "local",
    "RESOLVE_TIMEOUT": 1.0,
}

LOGGING["root"]["level"] = "WARNING"
