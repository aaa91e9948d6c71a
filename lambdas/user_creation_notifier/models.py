# lambdas/user_creation_notifier/models.py
"""
Plain-dataclass models and a simple settings class for the user creation notifier.
"""
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


class AppSettings:
    """
    Loads configuration settings directly from environment variables,
    providing sensible defaults for local testing.
    """
    def __init__(self):
        self.aws_region: str = os.getenv("AWS_REGION", "us-east-1")
        self.email_parameter_prefix: str = os.getenv("EMAIL_PARAMETER_PREFIX", "/iam/users")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")

# Create a single, shared instance to be imported by other modules.
settings = AppSettings()

UNKNOWN_USER = "unknown"
EMAIL_NOT_FOUND = "Not found in SSM"


def _as_mapping(value: Any, field_name: str) -> Dict[str, Any]:
    """Treats a missing or null field as empty; any other non-mapping is malformed."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"Malformed event: '{field_name}' must be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class CreationEvent:
    """
    Read-only view of a CloudTrail CreateUser event delivered by EventBridge.
    """
    source: Optional[str]
    detail_type: Optional[str]
    event_source: Optional[str]
    event_name: Optional[str]
    user_name: str
    detail: Dict[str, Any]

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "CreationEvent":
        """Parses the raw event, degrading missing fields instead of failing.

        Raises:
            TypeError: If detail or requestParameters is present but not an object.
        """
        detail = _as_mapping(event.get("detail"), "detail")
        request_parameters = _as_mapping(detail.get("requestParameters"), "requestParameters")
        return cls(
            source=event.get("source"),
            detail_type=event.get("detail-type"),
            event_source=detail.get("eventSource"),
            event_name=detail.get("eventName"),
            user_name=request_parameters.get("userName", UNKNOWN_USER),
            detail=detail,
        )


@dataclass(frozen=True)
class ResultDescriptor:
    """
    Status returned to the Lambda runtime. The body is a JSON-encoded string.
    """
    status_code: int
    body: str

    def to_response(self) -> Dict[str, Any]:
        return {"statusCode": self.status_code, "body": self.body}
