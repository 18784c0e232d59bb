"""
Entry points the CMS calls from its entity lifecycle hooks.
"""

from typing import Any, Optional

from config.notification_settings import EnvConfigProvider
from models import Comment, ContentEntity, NotificationAction
from notifications.classifier import ChangeClassifier
from notifications.dispatcher import DeliveryService, FanOutDispatcher
from notifications.email_sender import EmailDeliveryService
from notifications.status_sync import StatusSynchronizer
from notifications.stores import (
    ContentStore,
    NotificationRecordStore,
    SubscriberDirectory,
)


class ContentNotificationListener:
    """Routes content and comment lifecycle events to classification and fan-out."""

    def __init__(
        self,
        classifier: ChangeClassifier,
        dispatcher: FanOutDispatcher,
        synchronizer: StatusSynchronizer,
    ):
        self._classifier = classifier
        self._dispatcher = dispatcher
        self._synchronizer = synchronizer

    def on_entity_created(self, entity: ContentEntity) -> Optional[dict[str, Any]]:
        action = self._classifier.classify(entity, entity, is_insert=True)
        return self._dispatch(action)

    def on_entity_updated(self, entity: ContentEntity) -> Optional[dict[str, Any]]:
        action = self._classifier.classify(entity, entity.original or entity)
        return self._dispatch(action)

    def on_comment_created(self, comment: Comment) -> Optional[dict[str, Any]]:
        action = self._classifier.classify(comment, comment, is_comment=True)
        return self._dispatch(action)

    def on_comment_updated(self, comment: Comment) -> None:
        """Comment edits never notify; only their records' publish state follows."""
        self._synchronizer.sync_status(comment)

    def _dispatch(self, action: NotificationAction | None) -> Optional[dict[str, Any]]:
        if action is None:
            return None
        return self._dispatcher.dispatch(action, action.context)


def build_listener(
    config: Optional[Any] = None,
    delivery: Optional[DeliveryService] = None,
) -> ContentNotificationListener:
    """
    Wire a listener with the Supabase-backed stores and Resend delivery.

    Args:
        config: Configuration provider (defaults to environment variables)
        delivery: Delivery service override
    """
    config = config or EnvConfigProvider()
    records = NotificationRecordStore()
    directory = SubscriberDirectory()
    synchronizer = StatusSynchronizer(records)

    classifier = ChangeClassifier(config, ContentStore(), synchronizer)
    dispatcher = FanOutDispatcher(
        records, directory, delivery or EmailDeliveryService(directory, config)
    )
    return ContentNotificationListener(classifier, dispatcher, synchronizer)
