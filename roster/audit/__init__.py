"""
Roster activity logging module.

Records account lifecycle events per user.
"""

from .logger import ActivityLogger
from .models import ActivityAction, ActivityEntry

__all__ = [
    "ActivityLogger",
    "ActivityEntry",
    "ActivityAction",
]
