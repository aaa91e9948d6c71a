# cli/test_push_event.py
import unittest
from unittest.mock import MagicMock
import json

from botocore.exceptions import ClientError

# tests cli/push_event.py
from cli.push_event import create_user_creation_event, send_event_to_bus


class TestUserCreationEventBuilder(unittest.TestCase):

    def test_event_structure_and_content(self):
        """
        This test checks if create_user_creation_event builds an event
        shaped like the ones the EventBridge rule matches.
        """
        event = create_user_creation_event("alice")

        self.assertEqual(event['source'], "aws.iam")
        self.assertEqual(event['detail-type'], "AWS API Call via CloudTrail")
        self.assertEqual(event['detail']['eventSource'], "iam.amazonaws.com")
        self.assertEqual(event['detail']['eventName'], "CreateUser")
        self.assertEqual(event['detail']['requestParameters'], {"userName": "alice"})
        self.assertIsInstance(event['id'], str)
        self.assertIsInstance(event['detail']['eventTime'], str)

    def test_event_without_user_name(self):
        event = create_user_creation_event(None)
        self.assertNotIn('requestParameters', event['detail'])


class TestSendEventToBus(unittest.TestCase):

    def test_put_events_called_with_detail(self):
        mock_events = MagicMock()
        mock_events.put_events.return_value = {"FailedEntryCount": 0, "Entries": [{"EventId": "abc-123"}]}
        event = create_user_creation_event("alice")

        event_id = send_event_to_bus(event, mock_events)

        self.assertEqual(event_id, "abc-123")
        entry = mock_events.put_events.call_args.kwargs['Entries'][0]
        self.assertEqual(entry['DetailType'], "AWS API Call via CloudTrail")
        self.assertEqual(json.loads(entry['Detail']), event['detail'])
        self.assertNotEqual(entry['Source'], "aws.iam")

    def test_rejected_entry_returns_none(self):
        mock_events = MagicMock()
        mock_events.put_events.return_value = {
            "FailedEntryCount": 1,
            "Entries": [{"ErrorCode": "InvalidArgument", "ErrorMessage": "bad source"}],
        }

        self.assertIsNone(send_event_to_bus(create_user_creation_event("alice"), mock_events))

    def test_client_error_returns_none(self):
        mock_events = MagicMock()
        mock_events.put_events.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "denied"}}, "PutEvents"
        )

        self.assertIsNone(send_event_to_bus(create_user_creation_event("alice"), mock_events))


# This allows the test to be run directly
if __name__ == '__main__':
    unittest.main()
