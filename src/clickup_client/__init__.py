"""clickup_client package exports."""

from .core import (
    BASE_URL,
    APITokenAuthenticator,
    Authenticator,
    ClickUpAPIError,
    ClickUpAuthError,
    ClickUpClient,
    ClickUpClientError,
    ClickUpHTTPError,
    ClickUpModelValidationError,
    ClickUpParseError,
    ClickUpRateLimitError,
    ClickUpResponseError,
    ClickUpValidationError,
    Paginator,
    UnsupportedMethodError,
    WebhookVerificationResult,
    create_client_from_env,
    setup_logging,
    verify_webhook_request,
    verify_webhook_signature,
)
from .utils.business_days import business_days_between, workday_duration

__all__ = [
    # Client
    "ClickUpClient",
    "BASE_URL",
    "Authenticator",
    "APITokenAuthenticator",
    "create_client_from_env",
    "setup_logging",
    "Paginator",
    # Exceptions
    "ClickUpClientError",
    "ClickUpValidationError",
    "UnsupportedMethodError",
    "ClickUpAuthError",
    "ClickUpParseError",
    "ClickUpModelValidationError",
    "ClickUpResponseError",
    "ClickUpRateLimitError",
    "ClickUpAPIError",
    "ClickUpHTTPError",
    # Webhooks
    "WebhookVerificationResult",
    "verify_webhook_signature",
    "verify_webhook_request",
    # Business days
    "business_days_between",
    "workday_duration",
]
