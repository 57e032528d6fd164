"""Link preview metadata."""

from __future__ import annotations

from pydantic import BaseModel


class MetaTags(BaseModel):
    title: str | None = None
    description: str | None = None
    image: str | None = None
