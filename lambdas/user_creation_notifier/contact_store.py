# lambdas/user_creation_notifier/contact_store.py
from typing import Optional

from botocore.exceptions import ClientError


def build_parameter_name(user_name: str, prefix: str) -> str:
    """Builds the SSM key holding a user's e-mail, e.g. /iam/users/alice/email."""
    return f"{prefix.rstrip('/')}/{user_name}/email"


def get_contact_email(user_name: str, ssm_client, prefix: str) -> Optional[str]:
    """
    Reads the e-mail parameter for a user from SSM Parameter Store.

    Args:
        user_name: The IAM user name taken from the creation event.
        ssm_client: A boto3 SSM client.
        prefix: The parameter path prefix.

    Returns:
        The parameter value, or None if the parameter does not exist.

    Raises:
        ClientError: For any SSM error other than ParameterNotFound.
        BotoCoreError: If the request could not be sent.
    """
    parameter_name = build_parameter_name(user_name, prefix)
    try:
        response = ssm_client.get_parameter(Name=parameter_name)
    except ClientError as e:
        # The modelled ssm.exceptions.ParameterNotFound is a ClientError subclass
        if e.response.get('Error', {}).get('Code') == 'ParameterNotFound':
            return None
        raise

    return response['Parameter']['Value']
