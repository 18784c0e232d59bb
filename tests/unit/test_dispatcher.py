"""
Unit tests for notifications/dispatcher.py

Tests record creation, per-recipient fan-out, subscription targets and
isolation of delivery failures.
"""

import unittest
from unittest.mock import Mock, patch

from models import NotificationAction, RevisionPair, TemplateKind
from notifications.dispatcher import FanOutDispatcher
from notifications.errors import RecordPersistenceError
from tests.fixtures.content_factory import create_test_comment, create_test_entity
from tests.fixtures.mock_helpers import FakeDirectory, InMemoryRecordStore


def make_action(template=TemplateKind.PUBLISH_CONTENT, revisions=None, **overrides):
    entity = create_test_entity()
    fields = {
        "template": template,
        "owner_id": entity.owner_id,
        "published": True,
        "source_type": "node",
        "source_id": entity.id,
        "revisions": revisions,
        "context": entity,
    }
    fields.update(overrides)
    return NotificationAction(**fields)


@patch("notifications.dispatcher.log_notification_error", return_value="/tmp/err.txt")
@patch("builtins.print")
class TestDispatch(unittest.TestCase):
    def setUp(self):
        self.records = InMemoryRecordStore()
        self.directory = FakeDirectory(uids=[2, 3, 4])
        self.delivery = Mock()
        self.dispatcher = FanOutDispatcher(self.records, self.directory, self.delivery)

    def test_creates_one_record_and_delivers_per_recipient(self, mock_print, mock_log):
        """One record, one delivery call per eligible recipient"""
        action = make_action()

        stats = self.dispatcher.dispatch(action, action.context)

        self.assertEqual(self.records.saves, 1)
        self.assertEqual(self.delivery.send.call_count, 3)
        self.assertEqual(stats, {"record_id": 1, "sent": 3, "failed": 0})

    def test_each_delivery_targets_exactly_one_recipient(self, mock_print, mock_log):
        action = make_action()

        self.dispatcher.dispatch(action, action.context)

        delivered = []
        for call in self.delivery.send.call_args_list:
            context_entity, record, extra_options, options = call.args
            self.assertEqual(context_entity, action.context)
            self.assertEqual(record.id, 1)
            self.assertEqual(extra_options, {})
            self.assertEqual(len(options.uids), 1)

            uid, target = next(iter(options.uids.items()))
            self.assertEqual(target.uid, uid)
            self.assertEqual(target.notifiers, {"email"})
            self.assertFalse(target.suppress_self)
            self.assertTrue(options.notify_owner)
            delivered.append(uid)

        self.assertEqual(delivered, [2, 3, 4])

    def test_owner_not_suppressed(self, mock_print, mock_log):
        """Record owner receives the notification when eligible"""
        self.directory.uids = [7, 8]
        action = make_action(owner_id=7)

        self.dispatcher.dispatch(action, action.context)

        uids = [list(c.args[3].uids)[0] for c in self.delivery.send.call_args_list]
        self.assertIn(7, uids)

    def test_record_carries_action_fields(self, mock_print, mock_log):
        action = make_action(
            template=TemplateKind.UPDATE_CONTENT,
            revisions=RevisionPair(original_revision_id=100, new_revision_id=101),
        )

        self.dispatcher.dispatch(action, action.context)

        record = self.records.records[1]
        self.assertEqual(record.template, TemplateKind.UPDATE_CONTENT)
        self.assertEqual(record.node_id, 42)
        self.assertIsNone(record.comment_id)
        self.assertEqual(record.owner_id, 7)
        self.assertTrue(record.published)
        self.assertEqual(record.original_revision_id, 100)
        self.assertEqual(record.new_revision_id, 101)

    def test_comment_record_references_comment(self, mock_print, mock_log):
        comment = create_test_comment(comment_id=900)
        action = make_action(
            template=TemplateKind.CREATE_COMMENT,
            source_type="comment",
            source_id=comment.id,
        )

        self.dispatcher.dispatch(action, action.context)

        record = self.records.records[1]
        self.assertEqual(record.comment_id, 900)
        self.assertIsNone(record.node_id)
        self.assertIsNone(record.original_revision_id)
        self.assertIsNone(record.new_revision_id)

    def test_delivery_failure_isolated(self, mock_print, mock_log):
        """A failing recipient does not stop the others"""
        self.delivery.send.side_effect = [None, RuntimeError("bounce"), None]
        action = make_action()

        stats = self.dispatcher.dispatch(action, action.context)

        self.assertEqual(self.delivery.send.call_count, 3)
        self.assertEqual(stats["sent"], 2)
        self.assertEqual(stats["failed"], 1)
        mock_log.assert_called_once()
        self.assertEqual(mock_log.call_args.kwargs["error_type"], "delivery")
        self.assertEqual(mock_log.call_args.kwargs["context"]["uid"], 3)

    def test_persistence_failure_prevents_fan_out(self, mock_print, mock_log):
        """No deliveries are attempted for an unsaved record"""
        self.records = InMemoryRecordStore(fail_on_save=RecordPersistenceError("db down"))
        dispatcher = FanOutDispatcher(self.records, self.directory, self.delivery)
        action = make_action()

        with self.assertRaises(RecordPersistenceError):
            dispatcher.dispatch(action, action.context)

        self.delivery.send.assert_not_called()

    def test_no_recipients_still_creates_record(self, mock_print, mock_log):
        self.directory.uids = []
        action = make_action()

        stats = self.dispatcher.dispatch(action, action.context)

        self.assertEqual(self.records.saves, 1)
        self.assertEqual(stats["sent"], 0)
        self.delivery.send.assert_not_called()


if __name__ == "__main__":
    unittest.main()
