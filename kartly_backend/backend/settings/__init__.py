"""
PATH: backend/settings/__init__.py

Settings package entrypoint. Nothing is imported here; select a module with
DJANGO_SETTINGS_MODULE:
- backend.settings.dev   (local development, default for manage.py)
- backend.settings.test  (pytest / CI)
- backend.settings.prod  (production)
"""
