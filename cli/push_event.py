import os
import json
import uuid
from datetime import datetime, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

# Load environment variables from a .env file for local testing
load_dotenv()

# EventBridge rejects PutEvents with "aws.*" sources, so test events use a custom one
EVENT_SOURCE = os.environ.get("TEST_EVENT_SOURCE", "custom.iam-notifier-test")
EVENT_BUS_NAME = os.environ.get("EVENT_BUS_NAME", "default")
DETAIL_TYPE = "AWS API Call via CloudTrail"


def create_user_creation_event(user_name: str | None, source: str = "aws.iam") -> dict:
    """
    Creates a CloudTrail-shaped CreateUser event, as EventBridge delivers it to the notifier.
    Passing None for user_name leaves out requestParameters entirely.
    """
    detail = {
        "eventVersion": "1.08",
        "eventID": str(uuid.uuid4()),
        "eventTime": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "eventSource": "iam.amazonaws.com",
        "eventName": "CreateUser",
        "awsRegion": "us-east-1",
    }
    if user_name is not None:
        detail["requestParameters"] = {"userName": user_name}

    return {
        "version": "0",
        "id": str(uuid.uuid4()),
        "source": source,
        "detail-type": DETAIL_TYPE,
        "detail": detail,
    }


def send_event_to_bus(event: dict, events_client=None) -> str | None:
    """
    Publishes the event detail to EventBridge and returns the EventId on success.
    """
    events_client = events_client or boto3.client('events')

    print("--- Attempting to send event ---")
    print(json.dumps(event["detail"], indent=2))
    print("--------------------------------")

    try:
        response = events_client.put_events(
            Entries=[{
                'Source': EVENT_SOURCE,
                'DetailType': event["detail-type"],
                'Detail': json.dumps(event["detail"]),
                'EventBusName': EVENT_BUS_NAME,
            }]
        )
    except (BotoCoreError, ClientError) as e:
        print("\n❌ Failed to send event.")
        print(f"Error: {e}")
        return None

    if response.get("FailedEntryCount"):
        entry = response["Entries"][0]
        print(f"\n❌ Event rejected: {entry.get('ErrorCode')} {entry.get('ErrorMessage')}")
        return None

    event_id = response["Entries"][0].get("EventId")
    print(f"\n✅ Success! Event sent. EventId: {event_id}")
    return event_id


if __name__ == "__main__":
    print("--- IAM User Creation Notifier Test CLI ---")

    user_name = os.environ.get("TEST_USER_NAME", "alice")
    send_event_to_bus(create_user_creation_event(user_name))
