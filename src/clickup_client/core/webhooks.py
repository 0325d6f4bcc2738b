"""
Webhook signature verification.

The service signs every webhook delivery with HMAC-SHA256 over the raw
request body, keyed by the secret returned when the webhook was created, and
sends the lowercase hex digest in the ``X-Signature`` header.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import BinaryIO, Union

import httpx

SIGNATURE_HEADER = "X-Signature"

WebhookBody = Union[bytes, bytearray, memoryview, str, BinaryIO]


@dataclass(frozen=True)
class WebhookVerificationResult:
    is_valid: bool
    received_signature: str
    computed_signature: str
    # Raw bytes that were signed; lets a caller holding a one-shot stream
    # decode the payload after verification.
    body: bytes = b""

    def __bool__(self) -> bool:
        return self.is_valid


def compute_signature(body: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def _read_body(body: WebhookBody) -> bytes:
    if isinstance(body, str):
        return body.encode()
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)

    # File-like: buffer it, then put the cursor back where we found it so the
    # next consumer reads the same bytes.
    position = body.tell() if body.seekable() else None
    data = body.read()
    if position is not None:
        body.seek(position)
    return data


def verify_webhook_signature(
    body: WebhookBody, received_signature: str, secret: str
) -> WebhookVerificationResult:
    """
    Check ``received_signature`` against the HMAC of ``body``.

    A mismatch is reported through ``is_valid``, never raised; only an I/O
    error while reading a stream propagates.
    """
    raw = _read_body(body)
    computed = compute_signature(raw, secret)
    received = received_signature or ""
    return WebhookVerificationResult(
        is_valid=hmac.compare_digest(received.strip().encode(), computed.encode()),
        received_signature=received,
        computed_signature=computed,
        body=raw,
    )


def verify_webhook_request(
    request: httpx.Request, secret: str
) -> WebhookVerificationResult:
    """Verify a delivery captured as an httpx.Request (content stays readable)."""
    raw = request.read()
    return verify_webhook_signature(
        raw, request.headers.get(SIGNATURE_HEADER, ""), secret
    )


__all__ = [
    "SIGNATURE_HEADER",
    "WebhookVerificationResult",
    "compute_signature",
    "verify_webhook_signature",
    "verify_webhook_request",
]
