"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

CORS_ALLOW_CREDENTIALS = True
