from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx

from .errors import ClickUpAuthError

AUTHORIZATION_HEADER = "Authorization"


@runtime_checkable
class Authenticator(Protocol):
    """Stamps an outgoing request with credentials."""

    def authenticate(self, request: httpx.Request) -> None:
        """Mutate request in place; raise ClickUpAuthError if it cannot."""
        ...


class APITokenAuthenticator:
    """Personal API token sent verbatim in the Authorization header."""

    def __init__(self, api_token: str):
        self._api_token = (api_token or "").strip()

    def __repr__(self) -> str:
        # never echo the token
        return f"{type(self).__name__}(api_token=***)"

    def authenticate(self, request: httpx.Request) -> None:
        if not self._api_token:
            raise ClickUpAuthError("api token is not configured.")
        request.headers[AUTHORIZATION_HEADER] = self._api_token


__all__ = ["Authenticator", "APITokenAuthenticator", "AUTHORIZATION_HEADER"]
