"""
Supabase-backed adapters for the entity store and subscriber directory.

- ContentStore: loads content entities (nodes) by id
- NotificationRecordStore: persists and queries notification records
- SubscriberDirectory: resolves active, non-reserved recipients and their emails
"""

from typing import Any, Callable, cast

from pydantic import ValidationError

from config.notification_settings import RESERVED_USER_IDS
from models import ContentEntity, NotificationRecord, UserProfile
from models.types import EntityID, RecordID, UserID
from notifications.errors import EntityNotFoundError, RecordPersistenceError
from shared.db import (
    CONTENT_TABLE,
    NOTIFICATION_RECORDS_TABLE,
    USER_PROFILES_TABLE,
    get_supabase_client,
)

ClientFactory = Callable[[], Any]


class ContentStore:
    """Read access to content entities."""

    def __init__(self, client_factory: ClientFactory = get_supabase_client):
        self._client_factory = client_factory

    def load_entity(self, entity_id: EntityID) -> ContentEntity:
        """
        Load the current snapshot of a content entity.

        Raises:
            EntityNotFoundError: If no row exists for entity_id
        """
        response = (
            self._client_factory()
            .table(CONTENT_TABLE)
            .select(
                "id, bundle, published, owner_id, revision_id, title, path, changed"
            )
            .eq("id", entity_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            raise EntityNotFoundError("node", entity_id)

        return ContentEntity(**response.data[0])


class NotificationRecordStore:
    """Persistence for notification records."""

    def __init__(self, client_factory: ClientFactory = get_supabase_client):
        self._client_factory = client_factory

    def save(self, record: NotificationRecord) -> NotificationRecord:
        """
        Insert a new record and return it with its assigned id.

        Raises:
            RecordPersistenceError: If the insert fails or returns no row
        """
        try:
            response = (
                self._client_factory()
                .table(NOTIFICATION_RECORDS_TABLE)
                .insert(record.to_row())
                .execute()
            )
        except Exception as e:
            raise RecordPersistenceError(f"Could not save notification record: {e}") from e

        if not response.data:
            raise RecordPersistenceError("Insert returned no notification record")

        saved = record.model_copy()
        saved.id = cast(RecordID, response.data[0]["id"])
        return saved

    def find_by_reference(
        self, field: str, entity_id: EntityID
    ) -> list[NotificationRecord]:
        """All records whose reference column `field` points at entity_id."""
        response = (
            self._client_factory()
            .table(NOTIFICATION_RECORDS_TABLE)
            .select("*")
            .eq(field, entity_id)
            .execute()
        )
        if not response.data:
            return []

        return [NotificationRecord(**row) for row in response.data]

    def update_published(self, record_id: RecordID, published: bool) -> None:
        (
            self._client_factory()
            .table(NOTIFICATION_RECORDS_TABLE)
            .update({"published": published})
            .eq("id", record_id)
            .execute()
        )


class SubscriberDirectory:
    """Directory of users eligible to receive notifications."""

    def __init__(self, client_factory: ClientFactory = get_supabase_client):
        self._client_factory = client_factory

    def active_user_ids(self) -> list[UserID]:
        """
        Ids of all active users, excluding reserved accounts.

        Returns:
            User ids in ascending order
        """
        response = (
            self._client_factory()
            .table(USER_PROFILES_TABLE)
            .select("id")
            .eq("status", True)
            .order("id", desc=False)
            .execute()
        )
        if not response.data:
            return []

        return [
            cast(UserID, row["id"])
            for row in response.data
            if row["id"] not in RESERVED_USER_IDS
        ]

    def get_profile(self, user_id: UserID) -> UserProfile:
        """
        Load a user's profile.

        Raises:
            EntityNotFoundError: If the user has no valid profile
        """
        response = (
            self._client_factory()
            .table(USER_PROFILES_TABLE)
            .select("id, email, status")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            raise EntityNotFoundError("user", user_id)

        try:
            return UserProfile(**response.data[0])
        except ValidationError as e:
            raise EntityNotFoundError("user", user_id) from e
