# backend/log_context.py

"""
Log record context shared by every console line.

Service and view loggers attach user_id / error_code through `extra=`.
Django's own records (and most of ours) carry neither, so the filter fills
them with "-" before the formatter references them.
"""

import logging

CONTEXT_FIELDS = ("user_id", "error_code")


class RequestContextFilter(logging.Filter):
    def filter(self, record):
        for field in CONTEXT_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, "-")
        return True
