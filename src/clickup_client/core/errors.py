from __future__ import annotations

from typing import Any, Optional, Tuple

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

RATE_LIMIT_LIMIT_HEADER = "X-RateLimit-Limit"
RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"
RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"


class ClickUpClientError(Exception):
    """Base error for client failures."""


class ClickUpValidationError(ClickUpClientError, ValueError):
    """Caller misuse detected before any network call."""


class UnsupportedMethodError(ClickUpValidationError):
    def __init__(self, method: str):
        super().__init__(f"unsupported http method: {method!r}")
        self.method = method


class ClickUpAuthError(ClickUpClientError):
    """The bound authenticator could not stamp the request."""


class ClickUpParseError(ClickUpClientError):
    pass


class ClickUpModelValidationError(ClickUpParseError):
    pass


class ClickUpResponseError(ClickUpClientError):
    """
    Server-reported failure, produced by classify_response().

    Subclasses are the closed set RateLimit / API / HTTP. Two errors compare
    equal when they have the same type and the same fields.
    """

    def _fields(self) -> Tuple[Any, ...]:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields() == other._fields()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._fields()))


class ClickUpRateLimitError(ClickUpResponseError):
    def __init__(self, *, limit: str, remaining: str, reset_at: str):
        super().__init__(
            f"rate limit exceeded: limit={limit} remaining={remaining} "
            f"reset={reset_at}"
        )
        self.limit = limit
        self.remaining = remaining
        self.reset_at = reset_at
        self.status_code = 429

    def _fields(self) -> Tuple[Any, ...]:
        return (self.limit, self.remaining, self.reset_at)


class ClickUpAPIError(ClickUpResponseError):
    def __init__(
        self,
        *,
        code: str,
        message: str,
        status_code: int,
        status_text: str,
    ):
        super().__init__(
            f"clickup response ECODE={code} err={message} "
            f"status={status_code} {status_text}"
        )
        self.code = code
        self.message = message
        self.status_code = status_code
        self.status_text = status_text

    def _fields(self) -> Tuple[Any, ...]:
        return (self.code, self.message, self.status_code, self.status_text)


class ClickUpHTTPError(ClickUpResponseError):
    def __init__(self, *, status_code: int, status_text: str, url: str):
        super().__init__(f"clickup response [{url}] {status_code} {status_text}")
        self.status_code = status_code
        self.status_text = status_text
        self.url = url

    def _fields(self) -> Tuple[Any, ...]:
        return (self.status_code, self.status_text, self.url)


class ErrorBody(BaseModel):
    # The service reports errors as {"ECODE": "...", "err": "..."}; either
    # key may be absent or null.
    code: Optional[str] = Field(default=None, alias="ECODE")
    message: Optional[str] = Field(default=None, alias="err")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _header(resp: httpx.Response, name: str) -> str:
    return resp.headers.get(name, "")


def _request_url(resp: httpx.Response) -> str:
    try:
        return str(resp.request.url)
    except RuntimeError:
        # Response built without a request (e.g. in tests).
        return ""


def classify_response(resp: httpx.Response) -> ClickUpResponseError:
    """
    Turn a non-OK response into one of the typed response errors.

    Evaluated top to bottom:
    - 429 -> ClickUpRateLimitError from the X-RateLimit-* headers; the body
      is not read.
    - body decodes as a JSON error object -> ClickUpAPIError.
    - anything else (empty, malformed, non-object) -> ClickUpHTTPError.
    """
    if resp.status_code == httpx.codes.TOO_MANY_REQUESTS:
        return ClickUpRateLimitError(
            limit=_header(resp, RATE_LIMIT_LIMIT_HEADER),
            remaining=_header(resp, RATE_LIMIT_REMAINING_HEADER),
            reset_at=_header(resp, RATE_LIMIT_RESET_HEADER),
        )

    try:
        body = ErrorBody.model_validate_json(resp.content)
    except ValidationError:
        return ClickUpHTTPError(
            status_code=resp.status_code,
            status_text=resp.reason_phrase,
            url=_request_url(resp),
        )

    return ClickUpAPIError(
        code=body.code or "",
        message=body.message or "",
        status_code=resp.status_code,
        status_text=resp.reason_phrase,
    )


__all__ = [
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
    "ErrorBody",
    "classify_response",
    "RATE_LIMIT_LIMIT_HEADER",
    "RATE_LIMIT_REMAINING_HEADER",
    "RATE_LIMIT_RESET_HEADER",
]
