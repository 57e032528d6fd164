"""Analytics event rows sent to the event-ingestion API.

Lead and sale events carry the full click context of the visit that led to
them, so both extend :class:`ClickEvent`.
"""

from __future__ import annotations

from pydantic import BaseModel


class ClickEvent(BaseModel):
    timestamp: str
    identity_hash: str
    click_id: str
    link_id: str
    alias_link_id: str = ""
    url: str
    ip: str = ""
    continent: str = ""
    country: str = "Unknown"
    region: str = "Unknown"
    city: str = "Unknown"
    latitude: str = "Unknown"
    longitude: str = "Unknown"
    vercel_region: str = ""
    device: str = "Desktop"
    device_vendor: str = "Unknown"
    device_model: str = "Unknown"
    browser: str = "Unknown"
    browser_version: str = "Unknown"
    engine: str = "Unknown"
    engine_version: str = "Unknown"
    os: str = "Unknown"
    os_version: str = "Unknown"
    cpu_architecture: str = "Unknown"
    ua: str = "Unknown"
    bot: int = 0
    qr: int = 0
    referer: str = "(direct)"
    referer_url: str = "(direct)"


class LeadEvent(ClickEvent):
    event_id: str
    event_name: str
    customer_id: str
    metadata: str = ""


class SaleEvent(ClickEvent):
    event_id: str
    event_name: str
    customer_id: str
    payment_processor: str
    amount: int
    currency: str = "usd"
    invoice_id: str = ""
    metadata: str = ""
