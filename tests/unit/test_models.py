"""Unit tests for Pydantic models."""

import unittest

from pydantic import ValidationError

from models import (
    Comment,
    ContentEntity,
    NotificationAction,
    NotificationRecord,
    RevisionPair,
    SubscriptionTarget,
    TemplateKind,
    UserProfile,
    reference_field,
)
from tests.fixtures.content_factory import create_test_entity


class TestContentModels(unittest.TestCase):
    def test_entity_defaults(self):
        entity = ContentEntity(id=1, bundle="blog", owner_id=3, revision_id=10)

        self.assertEqual(entity.entity_type, "node")
        self.assertFalse(entity.published)
        self.assertTrue(entity.default_revision)
        self.assertTrue(entity.revision_translation_affected)
        self.assertIsNone(entity.original)
        self.assertIsNone(entity.was_published)

    def test_entity_with_original(self):
        entity = ContentEntity(
            id=1,
            bundle="blog",
            owner_id=3,
            revision_id=11,
            published=True,
            original={"id": 1, "bundle": "blog", "owner_id": 3, "revision_id": 10},
        )

        self.assertIsInstance(entity.original, ContentEntity)
        self.assertFalse(entity.was_published)

    def test_empty_bundle_rejected(self):
        with self.assertRaises(ValidationError):
            ContentEntity(id=1, bundle="  ", owner_id=3, revision_id=10)

    def test_comment_defaults(self):
        comment = Comment(id=5, entity_id=1, owner_id=9)

        self.assertEqual(comment.entity_type, "comment")
        self.assertTrue(comment.published)


class TestNotificationModels(unittest.TestCase):
    def test_reference_field(self):
        self.assertEqual(reference_field("node"), "node_id")
        self.assertEqual(reference_field("comment"), "comment_id")
        with self.assertRaises(ValueError):
            reference_field("user")

    def test_revision_pair(self):
        create = RevisionPair(new_revision_id=10)
        update = RevisionPair(original_revision_id=10, new_revision_id=11)
        same = RevisionPair(original_revision_id=10, new_revision_id=10)

        self.assertTrue(create.is_create)
        self.assertFalse(update.is_create)
        self.assertTrue(update.is_new_revision)
        self.assertFalse(same.is_new_revision)

    def test_record_from_action_with_revisions(self):
        entity = create_test_entity()
        action = NotificationAction(
            template=TemplateKind.UPDATE_CONTENT,
            owner_id=7,
            published=True,
            source_type="node",
            source_id=42,
            revisions=RevisionPair(original_revision_id=100, new_revision_id=101),
            context=entity,
        )

        record = NotificationRecord.from_action(action)

        self.assertIsNone(record.id)
        self.assertEqual(record.node_id, 42)
        self.assertEqual(record.original_revision_id, 100)
        self.assertEqual(record.new_revision_id, 101)

    def test_record_from_action_without_revisions(self):
        action = NotificationAction(
            template=TemplateKind.CREATE_COMMENT,
            owner_id=7,
            published=True,
            source_type="comment",
            source_id=900,
            context=create_test_entity(),
        )

        record = NotificationRecord.from_action(action)

        self.assertEqual(record.comment_id, 900)
        self.assertIsNone(record.node_id)
        self.assertEqual(
            record.to_row(),
            {
                "template": "create_comment",
                "owner_id": 7,
                "published": True,
                "comment_id": 900,
            },
        )

    def test_record_invalid_template(self):
        with self.assertRaises(ValidationError):
            NotificationRecord(template="digest", owner_id=1, published=True)

    def test_subscription_target_defaults(self):
        target = SubscriptionTarget(uid=3)

        self.assertEqual(target.notifiers, {"email"})
        self.assertTrue(target.suppress_self)

    def test_user_profile_email_validation(self):
        self.assertEqual(UserProfile(id=2, email="a@b.org").email, "a@b.org")
        with self.assertRaises(ValidationError):
            UserProfile(id=2, email="invalid")


if __name__ == "__main__":
    unittest.main()
