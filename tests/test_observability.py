import logging

import httpx
import pytest
import respx
from clickup_client.core.client import ClickUpClient
from clickup_client.core.logging import LogfmtFormatter, setup_logging
from clickup_client.core.observability import log_event
from clickup_client.tools.tasks import bulk_task_time_in_status_chunked

API = "https://mock.clickup.test/api/v2"
EVENTS = "clickup_client.observability"


@pytest.mark.asyncio
@respx.mock
async def test_call_logs_success(caplog):
    caplog.set_level(logging.INFO, logger=EVENTS)
    respx.get(f"{API}/team").mock(return_value=httpx.Response(200, json={}))
    client = ClickUpClient(api_token="pk_secret", base_url=API, request_id="rid-ok")
    try:
        await client.get("/team", tool="teams")
    finally:
        await client.aclose()

    record = next(r for r in caplog.records if r.getMessage() == "clickup_call")
    assert record.request_id == "rid-ok"
    assert record.tool == "teams"
    assert record.method == "GET"
    assert record.status == 200
    assert record.endpoint == "/team"
    assert record.duration_ms >= 0
    assert "pk_secret" not in caplog.text


@pytest.mark.asyncio
@respx.mock
async def test_call_logs_transport_exception(caplog):
    caplog.set_level(logging.INFO, logger=EVENTS)
    respx.get(f"{API}/team").mock(side_effect=httpx.ConnectTimeout("boom"))
    client = ClickUpClient(api_token="pk_secret", base_url=API, request_id="rid-fail")
    with pytest.raises(httpx.ConnectTimeout):
        await client.get("/team", tool="teams")
    await client.aclose()

    record = next(r for r in caplog.records if r.getMessage() == "clickup_call")
    assert record.status == "exception"
    assert record.error_type == "ConnectTimeout"


@pytest.mark.asyncio
@respx.mock
async def test_chunked_lookup_logs_each_chunk(caplog):
    caplog.set_level(logging.INFO, logger=EVENTS)

    def responder(request):
        ids = request.url.params.get_list("task_ids")
        return httpx.Response(200, json={i: {} for i in ids})

    respx.get(f"{API}/task/bulk_time_in_status/task_ids/").mock(side_effect=responder)
    client = ClickUpClient(api_token="pk", base_url=API)
    async with client:
        await bulk_task_time_in_status_chunked(
            client, [f"t{i}" for i in range(120)]
        )

    chunks = [r for r in caplog.records if r.getMessage() == "bulk_chunk"]
    assert [(r.chunk, r.chunks, r.ids) for r in chunks] == [(1, 2, 100), (2, 2, 20)]


def test_log_event_drops_reserved_and_none_fields(caplog):
    caplog.set_level(logging.INFO, logger=EVENTS)

    log_event("custom", module="clash", status=None, tool="x")

    record = next(r for r in caplog.records if r.getMessage() == "custom")
    assert record.tool == "x"
    assert record.module != "clash"
    assert not hasattr(record, "status")


def test_logfmt_formatter_renders_extras():
    record = logging.LogRecord(
        "clickup_client.observability", logging.INFO, __file__, 1, "clickup_call",
        None, None,
    )
    record.method = "GET"
    record.endpoint = "/task/a b/"
    record.status = 429
    record.workspace = "ws1"

    line = LogfmtFormatter().format(record)

    assert line.startswith("level=info logger=clickup_client.observability")
    assert "event=clickup_call" in line
    assert 'endpoint="/task/a b/"' in line
    assert "status=429" in line
    assert line.endswith("workspace=ws1")


def test_setup_logging_replaces_package_handler():
    setup_logging("debug")
    setup_logging("warning")

    log = logging.getLogger("clickup_client")
    try:
        assert len(log.handlers) == 1
        assert isinstance(log.handlers[0].formatter, LogfmtFormatter)
        assert log.level == logging.WARNING
    finally:
        for h in list(log.handlers):
            log.removeHandler(h)
        log.setLevel(logging.NOTSET)


@pytest.mark.asyncio
@respx.mock
async def test_injected_logger_receives_call_records(caplog):
    caplog.set_level(logging.INFO, logger="app.clickup")
    respx.delete(f"{API}/webhook/w1").mock(return_value=httpx.Response(200))
    client = ClickUpClient(
        api_token="pk", base_url=API, logger=logging.getLogger("app.clickup")
    )
    async with client:
        await client.delete("/webhook/w1")

    record = next(r for r in caplog.records if r.getMessage() == "clickup_call")
    assert record.name == "app.clickup"
    assert record.method == "DELETE"
