"""Fetch title/description/image metadata for link previews."""

from __future__ import annotations

import html as html_lib
import logging
import re
from urllib.parse import urljoin

import httpx

from ..config import settings
from ..schemas.metatags import MetaTags
from ..utils.links import is_public_url

logger = logging.getLogger(__name__)

# Only the document head is needed
_MAX_BYTES = 512 * 1024

_META_TAG_RE = re.compile(r"<meta\b[^>]*>", re.IGNORECASE | re.DOTALL)
_ATTR_RE = re.compile(
    r"""(?P<name>[a-zA-Z:_-]+)\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<uq>[^\s>]+))""",
    re.DOTALL,
)
_TITLE_RE = re.compile(r"<title[^>]*>(?P<title>.*?)</title>", re.IGNORECASE | re.DOTALL)

_TITLE_KEYS = ("og:title", "twitter:title")
_DESCRIPTION_KEYS = ("og:description", "twitter:description", "description")
_IMAGE_KEYS = ("og:image", "og:image:url", "twitter:image", "twitter:image:src")


async def reject_private_hosts(request: httpx.Request) -> None:
    """Request hook that refuses redirects into loopback or private networks."""
    if not is_public_url(str(request.url)):
        raise httpx.RequestError(f"Refusing to fetch {request.url.host}", request=request)


def _parse_attrs(tag: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(tag):
        value = m.group("dq")
        if value is None:
            value = m.group("sq")
        if value is None:
            value = m.group("uq")
        attrs[m.group("name").lower()] = html_lib.unescape(value or "").strip()
    return attrs


def extract_meta_tags(body: str, base_url: str) -> MetaTags:
    """Pick the best title, description and image from an HTML document."""
    meta: dict[str, str] = {}
    for tag in _META_TAG_RE.findall(body):
        attrs = _parse_attrs(tag)
        key = (attrs.get("property") or attrs.get("name") or "").lower()
        content = attrs.get("content")
        if key and content and key not in meta:
            meta[key] = content

    def first(keys: tuple[str, ...]) -> str | None:
        for key in keys:
            if meta.get(key):
                return meta[key]
        return None

    title = first(_TITLE_KEYS)
    if not title:
        m = _TITLE_RE.search(body)
        if m:
            title = html_lib.unescape(m.group("title")).strip() or None

    image = first(_IMAGE_KEYS)
    if image:
        image = urljoin(base_url, image)

    return MetaTags(title=title, description=first(_DESCRIPTION_KEYS), image=image)


async def get_meta_tags(url: str, *, http: httpx.AsyncClient | None = None) -> MetaTags:
    """Fetch ``url`` and extract its preview metadata.

    Network and HTTP errors yield empty metadata rather than an exception.
    """
    owns_http = http is None
    if http is None:
        http = httpx.AsyncClient(
            timeout=settings.metatags_timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": settings.metatags_user_agent},
            event_hooks={"request": [reject_private_hosts]},
        )
    try:
        resp = await http.get(url)
        if resp.status_code >= 400:
            logger.info("Metatags fetch for %s returned HTTP %d", url, resp.status_code)
            return MetaTags()
        content_type = resp.headers.get("content-type", "")
        if content_type and "html" not in content_type.lower():
            return MetaTags()
        body = resp.content[:_MAX_BYTES].decode(resp.encoding or "utf-8", errors="replace")
        return extract_meta_tags(body, str(resp.url))
    except httpx.HTTPError as exc:
        logger.info("Metatags fetch for %s failed: %s", url, exc)
        return MetaTags()
    finally:
        if owns_http:
            await http.aclose()
