"""Pydantic models for content entities and comments."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from models.types import Bundle, EntityID, RevisionID, UserID


class ContentEntity(BaseModel):
    """Snapshot of a versioned content entity (node)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    entity_type: str = "node"
    id: EntityID
    bundle: Bundle = Field(..., min_length=1)
    published: bool = False
    owner_id: UserID
    revision_id: RevisionID
    default_revision: bool = True
    revision_translation_affected: bool | None = True
    title: str = ""
    path: str | None = None
    changed: datetime | None = None

    # Prior snapshot, set by the entity store on updates only
    original: ContentEntity | None = None

    @property
    def was_published(self) -> bool | None:
        """Published flag of the prior snapshot, None when there is none."""
        if self.original is None:
            return None
        return self.original.published


class Comment(BaseModel):
    """Comment attached to a content entity."""

    model_config = ConfigDict(str_strip_whitespace=True)

    entity_type: str = "comment"
    id: EntityID
    entity_id: EntityID
    owner_id: UserID
    published: bool = True
    subject: str = ""
    body: str = ""

    original: Comment | None = None
