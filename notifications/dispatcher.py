"""
Fan-out of classified notification actions.

Persists one notification record per action, then hands it to the delivery
service once per eligible recipient so a failing recipient cannot affect the
others.
"""

from typing import Any, Protocol

from config.notification_settings import EMAIL_NOTIFIER
from models import (
    ContentEntity,
    NotificationAction,
    NotificationRecord,
    SubscribeOptions,
    SubscriptionTarget,
)
from notifications.error_logger import log_notification_error
from notifications.stores import NotificationRecordStore, SubscriberDirectory


class DeliveryService(Protocol):
    """Delivers a notification record to the targets in subscribe_options."""

    def send(
        self,
        context_entity: ContentEntity,
        notification: NotificationRecord,
        extra_options: dict[str, Any],
        subscribe_options: SubscribeOptions,
    ) -> None: ...


class FanOutDispatcher:
    """Creates notification records and delivers them recipient by recipient."""

    def __init__(
        self,
        records: NotificationRecordStore,
        directory: SubscriberDirectory,
        delivery: DeliveryService,
    ):
        self._records = records
        self._directory = directory
        self._delivery = delivery

    def dispatch(
        self, action: NotificationAction, context_entity: ContentEntity
    ) -> dict[str, Any]:
        """
        Persist a record for the action and deliver it to every recipient.

        Args:
            action: Classified notification action
            context_entity: Content the notification is about

        Returns:
            Dictionary with record_id, sent and failed counts

        Raises:
            RecordPersistenceError: If the record cannot be saved (nothing is sent)
        """
        record = self._records.save(NotificationRecord.from_action(action))
        stats: dict[str, Any] = {"record_id": record.id, "sent": 0, "failed": 0}

        for uid in self._directory.active_user_ids():
            # suppress_self off: the record owner is a recipient too
            target = SubscriptionTarget(
                uid=uid, notifiers={EMAIL_NOTIFIER}, suppress_self=False
            )
            options = SubscribeOptions(uids={uid: target}, notify_owner=True)

            try:
                self._delivery.send(context_entity, record, {}, options)
                stats["sent"] += 1
            except Exception as e:
                stats["failed"] += 1
                error_file = log_notification_error(
                    error_type="delivery",
                    error_message=str(e),
                    context={
                        "record_id": record.id,
                        "template": record.template.value,
                        "uid": uid,
                        "entity_id": context_entity.id,
                    },
                )
                print(
                    f"  ⚠️  Delivery to user {uid} failed. Details logged to: {error_file}"
                )

        print(
            f"  ✓ Notification {record.id} ({record.template.value}): "
            f"{stats['sent']} sent, {stats['failed']} failed"
        )
        return stats
