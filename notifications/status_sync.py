"""
Keeps notification records' published flag in line with their source entity.
"""

from models import Comment, ContentEntity, reference_field
from notifications.stores import NotificationRecordStore


class StatusSynchronizer:
    """Propagates a source entity's publish state to its notification records."""

    def __init__(self, records: NotificationRecordStore):
        self._records = records

    def sync_status(self, entity: ContentEntity | Comment) -> int:
        """
        Copy the entity's published flag onto every record that references it.

        Nothing happens when the entity has no prior snapshot or its publish
        state did not change. Records already carrying the current state are
        not rewritten.

        Args:
            entity: Current snapshot of a node or comment

        Returns:
            Number of records written
        """
        original = entity.original
        if original is None or original.published == entity.published:
            return 0

        field = reference_field(entity.entity_type)
        records = self._records.find_by_reference(field, entity.id)

        written = 0
        for record in records:
            if record.published == entity.published:
                continue
            self._records.update_published(record.id, entity.published)
            written += 1

        if written:
            state = "published" if entity.published else "unpublished"
            print(
                f"  ✓ Marked {written} notification(s) for {entity.entity_type} "
                f"{entity.id} as {state}"
            )
        return written
