"""Link preview metadata route."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from ..schemas.metatags import MetaTags
from ..services import metatags_svc
from ..utils.links import get_url_from_string, is_public_url

router = APIRouter(prefix="/api", tags=["metatags"])


@router.get("/metatags", response_model=MetaTags)
async def get_metatags(url: str = Query(..., min_length=1)):
    target = get_url_from_string(url)
    if not target:
        raise HTTPException(status_code=422, detail="Invalid URL")
    if not is_public_url(target):
        raise HTTPException(status_code=422, detail="URL host is not allowed")
    return await metatags_svc.get_meta_tags(target)
