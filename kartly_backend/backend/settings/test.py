"""
PATH: backend/settings/test.py

TEST SETTINGS
Fast, isolated: in-memory SQLite, fast password hashing, relaxed throttles.
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import REST_FRAMEWORK

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_RATES": {
        "anon": "10000/min",
        "user": "10000/min",
        "order_submit": "10000/min",
    },
}

LOYALTY_STRICT_SETTLEMENT = True
SECRET_KEY = "test-only-secret-key-for-kartly-storefront-suite"
