# run_live.py
"""
Invokes the notifier Lambda locally against live SSM.

The Lambda modules import their siblings directly, as they do inside the
deployed asset, so run with:

    PYTHONPATH=lambdas/user_creation_notifier python run_live.py alice
"""
import json
import logging
import sys

# Import the main handler function and settings
from lambdas.user_creation_notifier.app import handler
from models import settings

from cli.push_event import create_user_creation_event


def run_live(user_name: str):
    """Executes the notifier Lambda handler using your live AWS credentials."""
    print("--- Starting LIVE Run of user_creation_notifier Lambda ---")
    print(f"Looking up '{settings.email_parameter_prefix}/{user_name}/email' in region {settings.aws_region}")

    try:
        event = create_user_creation_event(user_name)
        print("\n--- Invoking Lambda handler (this will call AWS SSM) ---")
        result = handler(event, {})
        print("--- Lambda handler execution finished ---")

        print("\n--- Final Output from Lambda: ---")
        print(json.dumps(result, indent=2))
    except Exception as e:
        print(f"\n An unexpected error occurred during the run: {e}")


if __name__ == "__main__":
    # Show the handler's INFO records on the console
    logging.basicConfig(level=logging.INFO)
    run_live(sys.argv[1] if len(sys.argv) > 1 else "alice")
