import environ
from django.core.exceptions import ImproperlyConfigured
import logging
from functools import lru_cache

import hvac
from hvac.exceptions import VaultError

log = logging.getLogger(__name__)

env = environ.Env()

BASE_DIR = environ.Path(__file__) - 2
APPS_DIR = BASE_DIR.path("src")


def env_to_enum(enum_cls, value):
    for x in enum_cls:
        if x.value == value:
            return x

    raise ImproperlyConfigured(
        f"Env value {repr(value)} could not be found in {repr(enum_cls)}"
    )


# OpenBao holds the registry secrets (Django secret key, agent token) outside of .env
OPENBAO_ADDR = env("OPENBAO_ADDR", default="")
# Dev uses a static token; prod authenticates with AppRole
OPENBAO_TOKEN = env("OPENBAO_TOKEN", default="")
OPENBAO_ROLE_ID = env("OPENBAO_ROLE_ID", default="")
OPENBAO_SECRET_ID = env("OPENBAO_SECRET_ID", default="")
OPENBAO_KV_MOUNT = env("OPENBAO_KV_MOUNT", default="secret")
OPENBAO_KV_PATH = env("OPENBAO_KV_PATH", default="did-registry")


def _bao_client() -> hvac.Client:
    return hvac.Client(url=OPENBAO_ADDR, timeout=5)


def _bao_auth(c: hvac.Client) -> None:
    if OPENBAO_TOKEN:
        c.token = OPENBAO_TOKEN
        return
    if OPENBAO_ROLE_ID and OPENBAO_SECRET_ID:
        resp = c.auth.approle.login(role_id=OPENBAO_ROLE_ID, secret_id=OPENBAO_SECRET_ID)
        c.token = resp["auth"]["client_token"]


@lru_cache(maxsize=32)
def bao_read_kv(path=None) -> dict:
    """
    Read the KV v2 secret at {OPENBAO_KV_MOUNT}/{path or OPENBAO_KV_PATH}.
    Cached per process.
    """
    c = _bao_client()
    _bao_auth(c)
    target_path = path or OPENBAO_KV_PATH
    resp = c.secrets.kv.v2.read_secret_version(mount_point=OPENBAO_KV_MOUNT, path=target_path)
    return resp["data"]["data"] or {}


def env_get(name: str, default=None, *, kv_path=None, prefer_env: bool = True):
    """
    Resolve a setting in order:
      1) environment / .env (django-environ) when prefer_env
      2) OpenBao KV v2, if OPENBAO_ADDR is configured
      3) default
    """
    if prefer_env:
        val = env(name, default=None)
        if val is not None:
            return val
    if not OPENBAO_ADDR:
        return default
    try:
        data = bao_read_kv(kv_path)
    except (VaultError, OSError) as e:
        log.warning("env_get: OpenBao lookup failed for %s: %s (using default)", name, e)
        return default
    return data.get(name, default)


SETTINGS_BY_ENV = {
    "production": "config.django.production",
    "test": "config.django.test",
}


def settings_module(django_env: str | None = None) -> str:
    """Settings module for DJANGO_ENV (anything unknown runs the base settings)."""
    return SETTINGS_BY_ENV.get(django_env or "development", "config.django.base")
