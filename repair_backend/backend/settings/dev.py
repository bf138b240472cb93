"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS
SQLite + hub / store portals served from localhost.

Dev-only conveniences:
- Browsable API behind the admin session (JWT stays the primary scheme)
- No throttling (the hub board polls the order list)
- LOG_SQL=1 echoes ORM queries from the order repository
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, REST_FRAMEWORK, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

PORTAL_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=PORTAL_ORIGINS)
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=PORTAL_ORIGINS)

# -----------------------------------------
# REST FRAMEWORK (dev)
# -----------------------------------------
REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ),
    "DEFAULT_RENDERER_CLASSES": (
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ),
    "DEFAULT_THROTTLE_CLASSES": (),
}

# -----------------------------------------
# SQL ECHO (opt-in)
# -----------------------------------------
if env.bool("LOG_SQL", default=False):
    LOGGING["loggers"]["django.db.backends"] = {
        "handlers": ["console"],
        "level": "DEBUG",
        "propagate": False,
    }
    LOGGING["loggers"]["orders"]["level"] = "DEBUG"
