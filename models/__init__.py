"""Pydantic models for data validation and type checking."""

from models.content import Comment, ContentEntity
from models.notification import (
    NotificationAction,
    NotificationRecord,
    RevisionPair,
    SubscribeOptions,
    SubscriptionTarget,
    TemplateKind,
    UserProfile,
    reference_field,
)

__all__ = [
    "ContentEntity",
    "Comment",
    "TemplateKind",
    "RevisionPair",
    "NotificationAction",
    "NotificationRecord",
    "SubscriptionTarget",
    "SubscribeOptions",
    "UserProfile",
    "reference_field",
]
