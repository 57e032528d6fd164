"""Short-link and URL helpers."""

from __future__ import annotations

import ipaddress
from urllib.parse import urlparse

_PRIVATE_SUFFIXES = (".localhost", ".local", ".internal", ".home.arpa")


def link_constructor_simple(domain: str, key: str) -> str:
    """Canonical short link for ``domain`` + ``key``.

    The root link of a domain uses the key ``_root`` and has no path.
    """
    if key == "_root":
        return f"https://{domain}"
    return f"https://{domain}/{key}"


def get_url_from_string(value: str) -> str | None:
    """Return ``value`` as an absolute http(s) URL, or None if it isn't one.

    Bare hostnames like ``example.com/page`` get an ``https://`` scheme.
    """
    value = value.strip()
    if not value or " " in value:
        return None
    parsed = urlparse(value)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return value
    if parsed.scheme:
        return None
    if "." not in value.split("/", 1)[0]:
        return None
    candidate = f"https://{value}"
    if urlparse(candidate).netloc:
        return candidate
    return None


def is_public_url(url: str) -> bool:
    """False for URLs that point at loopback, private or link-local hosts.

    Only the literal host is inspected; names are not resolved.
    """
    host = (urlparse(url).hostname or "").rstrip(".").lower()
    if not host:
        return False
    if host == "localhost" or host.endswith(_PRIVATE_SUFFIXES):
        return False
    try:
        addr = ipaddress.ip_address(host)
    except ValueError:
        return "." in host
    return addr.is_global
