"""Client for the columnar event-ingestion API (Tinybird events endpoint)."""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

import httpx
from pydantic import BaseModel

from ..config import settings
from ..errors import EventIngestionError
from ..schemas.events import ClickEvent, LeadEvent, SaleEvent

logger = logging.getLogger(__name__)

CLICK_EVENTS_DATASOURCE = "dub_click_events"
LEAD_EVENTS_DATASOURCE = "dub_lead_events"
SALE_EVENTS_DATASOURCE = "dub_sale_events"


def to_ndjson(rows: Sequence[BaseModel | dict[str, Any]]) -> str:
    lines = []
    for row in rows:
        data = row.model_dump(mode="json") if isinstance(row, BaseModel) else row
        lines.append(json.dumps(data, separators=(",", ":")))
    return "\n".join(lines)


class EventIngestionClient:
    """Appends rows to datasources via ``POST /v0/events``."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout)
        self._api_key = api_key

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def ingest(self, datasource: str, rows: Sequence[BaseModel | dict[str, Any]]) -> dict[str, Any]:
        """Write ``rows`` as one NDJSON batch and wait for them to be committed."""
        if not rows:
            return {"successful_rows": 0, "quarantined_rows": 0}

        resp = await self._http.post(
            "/v0/events",
            params={"name": datasource, "wait": "true"},
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/x-ndjson",
            },
            content=to_ndjson(rows),
        )
        if resp.status_code >= 400:
            raise EventIngestionError(datasource, resp.status_code, resp.text)

        try:
            result = resp.json()
        except ValueError:
            result = {}
        if result.get("quarantined_rows"):
            logger.warning(
                "%d rows quarantined by %s", result["quarantined_rows"], datasource
            )
        logger.info("Ingested %d rows into %s", len(rows), datasource)
        return result

    async def record_clicks(self, events: Sequence[ClickEvent]) -> dict[str, Any]:
        return await self.ingest(CLICK_EVENTS_DATASOURCE, events)

    async def record_leads(self, events: Sequence[LeadEvent]) -> dict[str, Any]:
        return await self.ingest(LEAD_EVENTS_DATASOURCE, events)

    async def record_sales(self, events: Sequence[SaleEvent]) -> dict[str, Any]:
        return await self.ingest(SALE_EVENTS_DATASOURCE, events)


_client: EventIngestionClient | None = None


def get_event_client() -> EventIngestionClient:
    """FastAPI dependency returning the shared ingestion client."""
    global _client
    if _client is None:
        _client = EventIngestionClient(
            settings.tinybird_api_url,
            settings.tinybird_api_key,
            timeout=settings.tinybird_timeout_seconds,
        )
    return _client


async def close_event_client() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
