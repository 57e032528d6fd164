"""Test the event-ingestion client."""

from __future__ import annotations

import json

import httpx
import pytest

from affiliate.errors import EventIngestionError
from affiliate.schemas.events import ClickEvent, LeadEvent
from affiliate.services.events_svc import (
    CLICK_EVENTS_DATASOURCE,
    LEAD_EVENTS_DATASOURCE,
    EventIngestionClient,
    to_ndjson,
)


def _click(n: int) -> ClickEvent:
    return ClickEvent(
        timestamp="2024-01-01T00:00:00.000Z",
        identity_hash=f"u{n}",
        click_id=f"click{n}",
        link_id="link_1",
        url="https://example.com",
    )


def test_to_ndjson_one_line_per_row():
    body = to_ndjson([_click(1), _click(2)])
    lines = body.split("\n")
    assert len(lines) == 2
    assert json.loads(lines[1])["identity_hash"] == "u2"


@pytest.mark.asyncio
async def test_record_clicks_posts_ndjson():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202, json={"successful_rows": 2, "quarantined_rows": 0})

    http = httpx.AsyncClient(base_url="https://tb.test", transport=httpx.MockTransport(handler))
    client = EventIngestionClient("https://tb.test", "secret", http=http)
    result = await client.record_clicks([_click(1), _click(2)])
    await http.aclose()

    assert result["successful_rows"] == 2
    request = seen[0]
    assert request.url.path == "/v0/events"
    assert request.url.params["name"] == CLICK_EVENTS_DATASOURCE
    assert request.url.params["wait"] == "true"
    assert request.headers["authorization"] == "Bearer secret"
    assert request.headers["content-type"] == "application/x-ndjson"
    assert len(request.content.decode().split("\n")) == 2


@pytest.mark.asyncio
async def test_record_leads_raises_on_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text="invalid token")

    http = httpx.AsyncClient(base_url="https://tb.test", transport=httpx.MockTransport(handler))
    client = EventIngestionClient("https://tb.test", "bad", http=http)
    lead = LeadEvent(**_click(1).model_dump(), event_id="e1", event_name="Signup", customer_id="cus_1")
    with pytest.raises(EventIngestionError) as exc_info:
        await client.record_leads([lead])
    await http.aclose()

    assert exc_info.value.datasource == LEAD_EVENTS_DATASOURCE
    assert exc_info.value.upstream_status == 403


@pytest.mark.asyncio
async def test_ingest_empty_batch_skips_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    http = httpx.AsyncClient(base_url="https://tb.test", transport=httpx.MockTransport(handler))
    client = EventIngestionClient("https://tb.test", "secret", http=http)
    result = await client.record_clicks([])
    await http.aclose()
    assert result["successful_rows"] == 0
