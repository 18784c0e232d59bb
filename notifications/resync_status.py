"""
CLI script for re-applying content publish state to notification records.

Record publish state is corrected whenever the source content is updated;
this repairs records whose content changed state outside that path.

Usage:
    # Resync records for one or more content entities
    uv run python -m notifications.resync_status --entity-id 42 --entity-id 43

    # Dry run (report mismatches without writing)
    uv run python -m notifications.resync_status --entity-id 42 --dry-run
"""

import argparse

from models import reference_field
from models.types import EntityID
from notifications.error_logger import log_notification_error
from notifications.errors import EntityNotFoundError
from notifications.stores import ContentStore, NotificationRecordStore
from shared.utils import print_summary


def resync_entities(
    entity_ids: list[EntityID],
    content_store: ContentStore,
    records: NotificationRecordStore,
    dry_run: bool = False,
) -> dict[str, int]:
    """
    Align every record referencing the given entities with their publish state.

    Args:
        entity_ids: Content entity ids to check
        content_store: Source of current entity snapshots
        records: Notification record store
        dry_run: If True, only report mismatches

    Returns:
        Dictionary with stats: checked, updated, missing
    """
    stats = {"checked": 0, "updated": 0, "missing": 0}

    for entity_id in entity_ids:
        try:
            entity = content_store.load_entity(entity_id)
        except EntityNotFoundError as e:
            print(f"  ⚠️  {e}, skipping")
            stats["missing"] += 1
            continue

        field = reference_field(entity.entity_type)
        for record in records.find_by_reference(field, entity.id):
            stats["checked"] += 1
            if record.published == entity.published:
                continue

            if dry_run:
                print(
                    f"  [DRY RUN] Would set notification {record.id} "
                    f"published={entity.published}"
                )
            else:
                try:
                    records.update_published(record.id, entity.published)
                except Exception as e:
                    error_file = log_notification_error(
                        error_type="sync",
                        error_message=str(e),
                        context={"record_id": record.id, "entity_id": entity.id},
                    )
                    print(f"  ✗ Could not update notification {record.id}: {error_file}")
                    continue
                print(f"  ✓ Notification {record.id} published={entity.published}")
            stats["updated"] += 1

    return stats


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Resync notification record publish state with content"
    )

    parser.add_argument(
        "--entity-id",
        type=int,
        action="append",
        required=True,
        help="Content entity id to resync (repeatable)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (report mismatches without writing)",
    )

    args = parser.parse_args()

    stats = resync_entities(
        args.entity_id, ContentStore(), NotificationRecordStore(), dry_run=args.dry_run
    )
    print_summary("Notification Status Resync Complete", stats)


if __name__ == "__main__":
    main()
