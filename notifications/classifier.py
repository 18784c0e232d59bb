"""
Change classification for content lifecycle events.

Decides whether a content insert/update or a new comment warrants a
notification, and which template it uses.
"""

from typing import Any

from models import (
    Comment,
    ContentEntity,
    NotificationAction,
    RevisionPair,
    TemplateKind,
)
from notifications.status_sync import StatusSynchronizer
from notifications.stores import ContentStore


class ChangeClassifier:
    """
    Classifies entity transitions into notification actions.

    Args:
        config: Provider exposing `tracked_content_types` and `skip_processing`
        content_store: Used to load a comment's parent entity
        synchronizer: Runs on content updates to correct record publish state
    """

    def __init__(
        self,
        config: Any,
        content_store: ContentStore,
        synchronizer: StatusSynchronizer,
    ):
        self._config = config
        self._content_store = content_store
        self._synchronizer = synchronizer

    def classify(
        self,
        entity: ContentEntity | Comment,
        original_or_self: ContentEntity | Comment,
        is_comment: bool = False,
        *,
        is_insert: bool = False,
    ) -> NotificationAction | None:
        """
        Classify a lifecycle transition.

        Args:
            entity: Current snapshot
            original_or_self: Prior snapshot, or the entity itself when none exists
            is_comment: True when entity is a comment
            is_insert: True for newly created entities

        Returns:
            NotificationAction, or None when no notification is warranted
        """
        if is_comment:
            return self.classify_comment(entity)
        if is_insert:
            return self.classify_insert(entity)
        return self._classify_update(entity, original_or_self)

    def classify_insert(self, entity: ContentEntity) -> NotificationAction | None:
        if not self._should_process(entity):
            return None
        if not entity.published:
            return None

        # No prior revision exists, so the diff is labelled as a create
        return self._action(
            TemplateKind.PUBLISH_CONTENT,
            entity,
            RevisionPair(new_revision_id=entity.revision_id),
        )

    def classify_update(self, entity: ContentEntity) -> NotificationAction | None:
        return self._classify_update(entity, entity.original or entity)

    def classify_comment(self, comment: Comment) -> NotificationAction | None:
        """
        Classify a newly created comment.

        Raises:
            EntityNotFoundError: If the commented-upon entity cannot be loaded
        """
        node = self._content_store.load_entity(comment.entity_id)
        if node.bundle not in self._config.tracked_content_types:
            return None

        return NotificationAction(
            template=TemplateKind.CREATE_COMMENT,
            owner_id=node.owner_id,
            published=comment.published,
            source_type=comment.entity_type,
            source_id=comment.id,
            context=node,
        )

    def _classify_update(
        self, entity: ContentEntity, original: ContentEntity
    ) -> NotificationAction | None:
        if not self._should_process(entity):
            return None
        if not entity.default_revision:
            return None

        self._synchronizer.sync_status(entity)
        if not entity.published:
            return None

        fresh_publish = not original.published
        template = (
            TemplateKind.PUBLISH_CONTENT if fresh_publish else TemplateKind.UPDATE_CONTENT
        )

        # Edits that did not touch the translation keep the same revision
        if entity.revision_translation_affected:
            revisions = RevisionPair(
                original_revision_id=original.revision_id,
                new_revision_id=entity.revision_id,
            )
        else:
            revisions = RevisionPair(
                original_revision_id=entity.revision_id,
                new_revision_id=entity.revision_id,
            )

        if not revisions.is_new_revision and not fresh_publish:
            return None

        return self._action(template, entity, revisions)

    def _should_process(self, entity: ContentEntity) -> bool:
        if entity.bundle not in self._config.tracked_content_types:
            return False
        return not self._config.skip_processing

    @staticmethod
    def _action(
        template: TemplateKind, entity: ContentEntity, revisions: RevisionPair
    ) -> NotificationAction:
        return NotificationAction(
            template=template,
            owner_id=entity.owner_id,
            published=entity.published,
            source_type=entity.entity_type,
            source_id=entity.id,
            revisions=revisions,
            context=entity,
        )
