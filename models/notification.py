"""Pydantic models for notification system."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from models.content import ContentEntity
from models.types import EntityID, NotifierName, RecordID, RevisionID, UserID

# Source entity type -> record column holding the reference
REFERENCE_FIELDS: dict[str, str] = {
    "node": "node_id",
    "comment": "comment_id",
}


def reference_field(entity_type: str) -> str:
    """Record column that references entities of the given type."""
    try:
        return REFERENCE_FIELDS[entity_type]
    except KeyError:
        raise ValueError(f"No notification reference field for '{entity_type}'") from None


class TemplateKind(str, Enum):
    """Message template used for a notification record."""

    CREATE_CONTENT = "create_content"
    PUBLISH_CONTENT = "publish_content"
    UPDATE_CONTENT = "update_content"
    CREATE_COMMENT = "create_comment"


class RevisionPair(BaseModel):
    """Revisions to diff in the notification. No original means a create."""

    original_revision_id: RevisionID | None = None
    new_revision_id: RevisionID

    @property
    def is_create(self) -> bool:
        return self.original_revision_id is None

    @property
    def is_new_revision(self) -> bool:
        return self.original_revision_id != self.new_revision_id


class NotificationAction(BaseModel):
    """Outcome of classifying a lifecycle event that warrants a notification."""

    template: TemplateKind
    owner_id: UserID
    published: bool
    source_type: str
    source_id: EntityID
    revisions: RevisionPair | None = None
    context: ContentEntity


class NotificationRecord(BaseModel):
    """Persisted notification, one per qualifying lifecycle event."""

    id: RecordID | None = None
    template: TemplateKind
    owner_id: UserID
    published: bool
    node_id: EntityID | None = None
    comment_id: EntityID | None = None
    original_revision_id: RevisionID | None = None
    new_revision_id: RevisionID | None = None

    @classmethod
    def from_action(cls, action: NotificationAction) -> NotificationRecord:
        """Build an unsaved record, setting the revision pair only when present."""
        record = cls(
            template=action.template,
            owner_id=action.owner_id,
            published=action.published,
            **{reference_field(action.source_type): action.source_id},
        )
        if action.revisions is not None:
            record.original_revision_id = action.revisions.original_revision_id
            record.new_revision_id = action.revisions.new_revision_id
        return record

    def to_row(self) -> dict:
        """Row payload for the notification_records table."""
        return self.model_dump(mode="json", exclude_none=True)


class SubscriptionTarget(BaseModel):
    """Delivery target for a single recipient."""

    uid: UserID
    notifiers: set[NotifierName] = Field(default_factory=lambda: {"email"})
    suppress_self: bool = True


class SubscribeOptions(BaseModel):
    """Overrides for the delivery service's recipient computation."""

    uids: dict[UserID, SubscriptionTarget] = Field(default_factory=dict)
    notify_owner: bool = False


class UserProfile(BaseModel):
    """Subscriber directory entry."""

    id: UserID
    email: str = Field(..., pattern=r"^[^@]+@[^@]+\.[^@]+$")
    status: bool = True
