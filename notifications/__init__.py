"""
Content notification system.

This module handles:
- Classifying content and comment lifecycle events
- Persisting one notification record per qualifying event
- Fanning records out to subscribers by email via Resend
- Keeping record publish state in line with the source content
"""

from .classifier import ChangeClassifier
from .dispatcher import FanOutDispatcher
from .listener import ContentNotificationListener, build_listener
from .status_sync import StatusSynchronizer

__all__ = [
    "ChangeClassifier",
    "FanOutDispatcher",
    "StatusSynchronizer",
    "ContentNotificationListener",
    "build_listener",
]
