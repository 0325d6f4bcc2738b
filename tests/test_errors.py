import httpx
import pytest
from clickup_client.core.errors import (
    ClickUpAPIError,
    ClickUpHTTPError,
    ClickUpRateLimitError,
    ClickUpResponseError,
    classify_response,
)

URL = "https://mock.clickup.test/api/v2/task/abc/"


def _response(status: int, **kwargs) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("GET", URL), **kwargs)


def test_rate_limit_from_headers_regardless_of_body():
    resp = _response(
        429,
        headers={
            "x-ratelimit-limit": "10000",
            "x-ratelimit-remaining": "9999",
            "x-ratelimit-reset": "1640818767",
        },
        content=b'{"ECODE": "APP_002", "err": "Rate limit reached"}',
    )

    err = classify_response(resp)

    assert isinstance(err, ClickUpRateLimitError)
    assert err.limit == "10000"
    assert err.remaining == "9999"
    assert err.reset_at == "1640818767"


def test_rate_limit_headers_are_case_insensitive_and_optional():
    resp = _response(429, headers={"X-RATELIMIT-RESET": "1"}, content=b"")

    err = classify_response(resp)

    assert isinstance(err, ClickUpRateLimitError)
    assert (err.limit, err.remaining, err.reset_at) == ("", "", "1")


def test_structured_error_body():
    resp = _response(422, content=b'{"ECODE":"fail","err":"error"}')

    err = classify_response(resp)

    assert isinstance(err, ClickUpAPIError)
    assert err.code == "fail"
    assert err.message == "error"
    assert err.status_code == 422
    assert err.status_text == "Unprocessable Entity"


@pytest.mark.parametrize(
    "body,code,message",
    [
        (b'{"ECODE":"X","err":null}', "X", ""),
        (b'{"ECODE":null,"err":"Team not found"}', "", "Team not found"),
        (b"{}", "", ""),
    ],
)
def test_null_or_missing_error_fields_are_empty(body, code, message):
    err = classify_response(_response(400, content=body))

    assert isinstance(err, ClickUpAPIError)
    assert err.code == code
    assert err.message == message
    assert err.status_code == 400


@pytest.mark.parametrize(
    "body",
    [b"{{{badJSON}}}", b"", b"<html>oops</html>", b'["not", "an", "object"]'],
)
def test_unparseable_body_falls_back_to_http_error(body):
    err = classify_response(_response(422, content=body))

    assert isinstance(err, ClickUpHTTPError)
    assert err.status_code == 422
    assert err.status_text == "Unprocessable Entity"
    assert err.url == URL


def test_http_error_without_request_has_empty_url():
    err = classify_response(httpx.Response(500, content=b"nope"))

    assert isinstance(err, ClickUpHTTPError)
    assert err.url == ""


@pytest.mark.parametrize(
    "status,kwargs",
    [
        (429, {"headers": {"x-ratelimit-reset": "42"}}),
        (401, {"content": b'{"ECODE":"OAUTH_025","err":"Token invalid"}'}),
        (500, {"content": b"{{{"}),
    ],
)
def test_classification_is_idempotent(status, kwargs):
    first = classify_response(_response(status, **kwargs))
    second = classify_response(_response(status, **kwargs))

    assert first == second
    assert hash(first) == hash(second)
    assert isinstance(first, ClickUpResponseError)


def test_different_errors_are_not_equal():
    a = ClickUpHTTPError(status_code=500, status_text="x", url=URL)
    b = ClickUpHTTPError(status_code=502, status_text="x", url=URL)
    c = ClickUpAPIError(code="", message="", status_code=500, status_text="x")

    assert a != b
    assert a != c
