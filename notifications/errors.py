"""Exceptions raised by the notification system."""


class NotificationError(Exception):
    """Base class for notification errors."""


class EntityNotFoundError(NotificationError, LookupError):
    """A referenced content entity or user profile could not be loaded."""

    def __init__(self, entity_type: str, entity_id: object):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} {entity_id} not found")


class RecordPersistenceError(NotificationError):
    """A notification record could not be written to the store."""
