# lambdas/user_creation_notifier/app.py
import json
import logging
from typing import Any, Dict

import boto3

# Import lambda-specific modules
from contact_store import get_contact_email
from models import EMAIL_NOT_FOUND, CreationEvent, ResultDescriptor, settings

logger = logging.getLogger()
logger.setLevel(settings.log_level)

# Initialize the SSM client in the global scope so warm invocations reuse it.
SSM_CLIENT = boto3.client('ssm', region_name=settings.aws_region)


def process_creation_event(event: Dict[str, Any], ssm_client, log: logging.Logger) -> ResultDescriptor:
    """
    Looks up the contact e-mail of a newly created IAM user and reports the outcome.

    A missing e-mail parameter is logged as a warning and does not fail the
    invocation. Every other error is logged with the full event and re-raised
    so EventBridge can retry the delivery.
    """
    try:
        creation_event = CreationEvent.from_event(event)
        user_name = creation_event.user_name

        log.info(creation_event.detail)

        email = get_contact_email(user_name, ssm_client, settings.email_parameter_prefix)
        if email is None:
            log.warning(f"No email parameter found for user: {user_name}")
            email = EMAIL_NOT_FOUND
        else:
            log.info(f"Found email for user {user_name}: {email}")
        log.debug(f"Contact for {user_name}: {email}")

        return ResultDescriptor(
            status_code=200,
            body=json.dumps(f"Processed user creation event for: {user_name}"),
        )
    except Exception as e:
        log.error(f"Error processing event: {str(e)}")
        log.error(f"Event: {json.dumps(event, default=str)}")
        raise


def handler(event, context):
    """
    Main Lambda handler, triggered by the EventBridge rule for IAM CreateUser calls.
    """
    return process_creation_event(event, SSM_CLIENT, logger).to_response()
