"""
Lambda handlers package for AWS Lambda functions.
"""
from .summary import handler as summary_handler
from .calendar_month import handler as calendar_handler
from .history import handler as history_handler
from .settings import handler as settings_handler
from .entries import handler as entries_handler
from .partner import handler as partner_handler

__all__ = [
    "summary_handler",
    "calendar_handler",
    "history_handler",
    "settings_handler",
    "entries_handler",
    "partner_handler"
]
