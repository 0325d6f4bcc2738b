import json as jsonlib
import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .auth import APITokenAuthenticator, Authenticator
from .errors import (
    ClickUpModelValidationError,
    ClickUpParseError,
    UnsupportedMethodError,
    classify_response,
)
from .observability import elapsed_ms, log_event

BASE_URL = "https://api.clickup.com/api/v2"
DEFAULT_TIMEOUT_SECONDS = 20.0
SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})
BODY_METHODS = frozenset({"POST", "PUT"})

QueryParams = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]

# Sentinel so callers can pass timeout=None to disable the timeout for one call.
_DEFAULT = object()


class ClickUpClient:
    """
    Shared async HTTP client for the ClickUp v2 REST API.
    - Every resource call goes through call(): method check, auth, send,
      then decode on 200 or classify anything else
    - No retries, no caching; errors surface to the caller unchanged
    - Holds no per-call state, so one instance may serve concurrent tasks
    """

    def __init__(
        self,
        *,
        authenticator: Optional[Authenticator] = None,
        api_token: Optional[str] = None,
        base_url: str = BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        request_id: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        if authenticator is None and api_token is None:
            raise ValueError("authenticator or api_token must be provided.")
        if authenticator is not None and api_token is not None:
            raise ValueError("pass either authenticator or api_token, not both.")

        base_url = (base_url or "").rstrip("/")
        if not base_url:
            raise ValueError("base_url must be provided.")

        self.base_url = base_url
        self.authenticator: Authenticator = authenticator or APITokenAuthenticator(
            api_token or ""
        )
        self.timeout_seconds = timeout_seconds
        self.request_id = request_id
        # None routes call records to the shared observability logger
        self.log = logger

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            headers={"Accept": "application/json"},
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "ClickUpClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def url_for(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    async def call(
        self,
        method: str,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        json: Any = None,
        model: Any = None,
        timeout: Any = _DEFAULT,
        tool: Optional[str] = None,
    ) -> Any:
        """
        Issue one request against the API.

        - Raises UnsupportedMethodError for anything but GET/POST/PUT/DELETE
        - Raises ClickUpAuthError if the authenticator refuses; nothing is sent
        - httpx transport errors (connect, timeout, DNS) propagate unchanged
        - Status 200: returns the decoded body, validated against ``model``
          when given (ClickUpParseError / ClickUpModelValidationError)
        - Any other status: raises the result of classify_response()
        """
        method = (method or "").upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethodError(method)

        url = self.url_for(path)
        headers: Dict[str, str] = {}
        content: Optional[bytes] = None
        if method in BODY_METHODS:
            headers["Content-Type"] = "application/json"
            content = _encode_body(json)

        request = self.http.build_request(
            method,
            url,
            params=_query_params(params),
            content=content,
            headers=headers,
            timeout=self.timeout_seconds if timeout is _DEFAULT else timeout,
        )
        self.authenticator.authenticate(request)

        start = time.perf_counter()
        try:
            resp = await self.http.send(request)
        except httpx.HTTPError as exc:
            log_event(
                "clickup_call",
                self.log,
                request_id=self.request_id,
                tool=tool,
                method=method,
                endpoint=path,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=elapsed_ms(start),
            )
            raise

        log_event(
            "clickup_call",
            self.log,
            request_id=self.request_id,
            tool=tool,
            method=method,
            endpoint=path,
            status=resp.status_code,
            duration_ms=elapsed_ms(start),
        )

        if resp.status_code != httpx.codes.OK:
            raise classify_response(resp)

        payload = self._safe_json(resp)
        if model is None:
            return payload
        return _validate(model, payload)

    def _safe_json(self, resp: httpx.Response) -> Any:
        # Some endpoints (e.g. deletes) answer 200 with an empty body.
        if not resp.content:
            return {}

        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise ClickUpParseError(
                f"failed to parse response from {resp.request.method} "
                f"{resp.request.url}: {snippet!r}"
            ) from exc

    async def get(
        self,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        model: Any = None,
        tool: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        return await self.call(
            "GET", path, params=params, model=model, tool=tool, **kwargs
        )

    async def post(
        self,
        path: str,
        *,
        json: Any,
        model: Any = None,
        tool: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        return await self.call("POST", path, json=json, model=model, tool=tool, **kwargs)

    async def put(
        self,
        path: str,
        *,
        json: Any,
        model: Any = None,
        tool: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        return await self.call("PUT", path, json=json, model=model, tool=tool, **kwargs)

    async def delete(
        self, path: str, *, tool: Optional[str] = None, **kwargs: Any
    ) -> Any:
        return await self.call("DELETE", path, tool=tool, **kwargs)


def _encode_body(body: Any) -> bytes:
    if body is None:
        return b""
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True, exclude_none=True).encode()
    return jsonlib.dumps(body).encode()


def _query_params(params: Optional[QueryParams]) -> Optional[List[Tuple[str, Any]]]:
    # Normalise to a list of pairs so repeated keys (task_ids=a&task_ids=b)
    # survive; booleans go on the wire as "true"/"false".
    if params is None:
        return None
    items = params.items() if isinstance(params, Mapping) else params
    pairs: List[Tuple[str, Any]] = []
    for key, value in items:
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for v in values:
            pairs.append((key, str(v).lower() if isinstance(v, bool) else v))
    return pairs


def _validate(model: Any, payload: Any) -> Any:
    try:
        if isinstance(model, type) and issubclass(model, BaseModel):
            return model.model_validate(payload)
        return TypeAdapter(model).validate_python(payload)
    except ValidationError as exc:
        name = getattr(model, "__name__", repr(model))
        raise ClickUpModelValidationError(
            f"Response did not match model {name}: {exc}"
        ) from exc


__all__ = [
    "ClickUpClient",
    "BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "SUPPORTED_METHODS",
]
