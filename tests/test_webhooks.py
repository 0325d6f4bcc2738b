import io
import json

import httpx
import pytest
from clickup_client.core.webhooks import (
    SIGNATURE_HEADER,
    compute_signature,
    verify_webhook_request,
    verify_webhook_signature,
)

SECRET = "imiO3dJZfIlyykAG"
BODY = b'{"event":"taskUpdated"}'
SIGNATURE = "2831500d379c7e90a2c8b3ff55dec81a42889b8a91f6b97f8513d98ebb6b23bf"


def test_known_signature_is_valid():
    result = verify_webhook_signature(BODY, SIGNATURE, SECRET)

    assert result.is_valid
    assert result.received_signature == SIGNATURE
    assert result.computed_signature == SIGNATURE


def test_mismatch_is_reported_not_raised():
    result = verify_webhook_signature(BODY, "123456", SECRET)

    assert not result.is_valid
    assert result.received_signature == "123456"
    assert result.computed_signature == SIGNATURE


def test_received_signature_is_returned_verbatim():
    result = verify_webhook_signature(BODY, f" {SIGNATURE} \n", SECRET)

    assert result.is_valid
    assert result.received_signature == f" {SIGNATURE} \n"

    mismatch = verify_webhook_signature(b"x", " abc \n", "s")
    assert not mismatch.is_valid
    assert mismatch.received_signature == " abc \n"


def test_missing_signature_is_invalid():
    result = verify_webhook_signature(BODY, "", SECRET)

    assert not result.is_valid
    assert bool(result) is False


@pytest.mark.parametrize(
    "body,secret",
    [(b"", "s"), (b"\x00\xff binary", "k"), ('{"x": "é"}'.encode(), "")],
)
def test_round_trip_with_computed_signature(body, secret):
    computed = compute_signature(body, secret)
    result = verify_webhook_signature(body, computed, secret)

    assert result.is_valid
    assert result.computed_signature == computed
    assert verify_webhook_signature(body, computed, secret) == result


def test_signature_is_lowercase_hex():
    sig = compute_signature(BODY, SECRET)

    assert sig == sig.lower()
    assert len(sig) == 64
    int(sig, 16)


def test_str_body_is_treated_as_utf8():
    result = verify_webhook_signature(BODY.decode(), SIGNATURE, SECRET)

    assert result.is_valid


def test_stream_body_is_still_readable_after_verification():
    stream = io.BytesIO(BODY)

    result = verify_webhook_signature(stream, SIGNATURE, SECRET)

    assert result.is_valid
    assert stream.read() == BODY
    assert json.loads(result.body) == {"event": "taskUpdated"}


def test_stream_rewinds_to_original_position():
    stream = io.BytesIO(b"prefix:" + BODY)
    stream.seek(len(b"prefix:"))

    result = verify_webhook_signature(stream, SIGNATURE, SECRET)

    assert result.is_valid
    assert stream.read() == BODY


def test_non_seekable_stream_body_is_returned():
    class OneShot(io.RawIOBase):
        def __init__(self, data: bytes):
            self._data = data

        def readable(self) -> bool:
            return True

        def readinto(self, b) -> int:
            n = min(len(b), len(self._data))
            b[:n] = self._data[:n]
            self._data = self._data[n:]
            return n

    result = verify_webhook_signature(OneShot(BODY), SIGNATURE, SECRET)

    assert result.is_valid
    assert result.body == BODY


def test_verify_httpx_request_reads_header_and_keeps_body():
    request = httpx.Request(
        "POST",
        "https://hooks.example.com/clickup",
        content=BODY,
        headers={SIGNATURE_HEADER.lower(): SIGNATURE},
    )

    result = verify_webhook_request(request, SECRET)

    assert result.is_valid
    assert request.content == BODY
    assert json.loads(request.content)["event"] == "taskUpdated"


def test_verify_httpx_request_without_header():
    request = httpx.Request("POST", "https://hooks.example.com/clickup", content=BODY)

    result = verify_webhook_request(request, SECRET)

    assert not result.is_valid
    assert result.received_signature == ""
