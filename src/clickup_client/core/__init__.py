"""Core of clickup-client: dispatch, auth, errors, chunking, webhooks (no resource wrappers)."""

from .auth import APITokenAuthenticator, Authenticator
from .chunking import (
    MAX_BULK_IDS,
    MIN_BULK_IDS,
    chunk_ids,
    merge_chunk_results,
    validate_bulk_size,
)
from .client import BASE_URL, DEFAULT_TIMEOUT_SECONDS, ClickUpClient
from .config import create_client_from_env, load_env_config, load_webhook_secret
from .logging import LogfmtFormatter, setup_logging
from .errors import (
    ClickUpAPIError,
    ClickUpAuthError,
    ClickUpClientError,
    ClickUpHTTPError,
    ClickUpModelValidationError,
    ClickUpParseError,
    ClickUpRateLimitError,
    ClickUpResponseError,
    ClickUpValidationError,
    UnsupportedMethodError,
    classify_response,
)
from .pagination import MAX_PAGE_SIZE, Paginator
from .webhooks import (
    SIGNATURE_HEADER,
    WebhookVerificationResult,
    compute_signature,
    verify_webhook_request,
    verify_webhook_signature,
)

__all__ = [
    # Client
    "ClickUpClient",
    "BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    # Auth
    "Authenticator",
    "APITokenAuthenticator",
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
    "classify_response",
    # Chunking / paging
    "MIN_BULK_IDS",
    "MAX_BULK_IDS",
    "MAX_PAGE_SIZE",
    "chunk_ids",
    "merge_chunk_results",
    "validate_bulk_size",
    "Paginator",
    # Webhooks
    "SIGNATURE_HEADER",
    "WebhookVerificationResult",
    "compute_signature",
    "verify_webhook_signature",
    "verify_webhook_request",
    # Logging
    "LogfmtFormatter",
    "setup_logging",
    # Config helpers
    "create_client_from_env",
    "load_env_config",
    "load_webhook_secret",
]
