"""
Security utilities for the Shareable render service.

Decides which URLs may be rendered, based on the ALLOWED_HOSTS allowlist.
An empty allowlist (or "*") allows every host; this is the intended default.

URLs are parsed with a WHATWG URL parser so the origin checked here is the
origin Chromium actually loads. Only URLs with a host can be rendered:
``file:``, ``data:`` and other host-less URLs are rejected even when every
host is allowed.
"""

from typing import List, Optional

import ada_url

from ..core.config import settings

WILDCARD = "*"


def get_allowed_hosts(raw: Optional[str] = None) -> List[str]:
    """
    Parse the configured allowlist.

    Args:
        raw: Comma-separated allowlist; defaults to ``settings.ALLOWED_HOSTS``
             which is re-read on every call

    Returns:
        Trimmed, non-empty entries, or an empty list when every host is allowed
    """
    if raw is None:
        raw = settings.ALLOWED_HOSTS
    if not raw or raw.strip() == WILDCARD:
        return []
    return [host.strip() for host in raw.split(",") if host.strip()]


def allowed_origins(raw: Optional[str] = None) -> List[str]:
    """Configured allowlist entries in order, without duplicates."""
    return list(dict.fromkeys(get_allowed_hosts(raw)))


def _parse(url: str) -> Optional[ada_url.URL]:
    try:
        parsed = ada_url.URL(url)
    except ValueError:
        return None
    if not parsed.hostname:
        return None
    return parsed


def normalize_url(url: str) -> Optional[str]:
    """
    Serialize a URL the way the browser will load it.

    Returns:
        Normalized href, or None if the URL is not a valid absolute URL with a host
    """
    parsed = _parse(url)
    return parsed.href if parsed is not None else None


def get_origin(url: str) -> Optional[str]:
    """
    Compute the origin (scheme + hostname + port) of an absolute URL.

    Default ports are omitted, as browsers do.

    Args:
        url: URL to inspect

    Returns:
        Origin string, or None if the URL is not a valid absolute URL
    """
    parsed = _parse(url)
    if parsed is None:
        return None

    origin = f"{parsed.protocol}//{parsed.hostname}"
    if parsed.port:
        origin = f"{origin}:{parsed.port}"
    return origin


def _matches(url_origin: str, hostname: str, allowed_host: str) -> bool:
    allowed_origin = get_origin(allowed_host)
    if allowed_origin is not None:
        return url_origin == allowed_origin
    # Bare domains fall back to a looser match
    return hostname == allowed_host or allowed_host in url_origin


def is_url_allowed(url: str, raw: Optional[str] = None) -> bool:
    """
    Check a URL against the allowlist.

    A URL that does not parse as absolute is never allowed, whatever the
    configuration says.

    Args:
        url: URL requested for rendering
        raw: Comma-separated allowlist; defaults to ``settings.ALLOWED_HOSTS``

    Returns:
        True if the URL may be rendered
    """
    parsed = _parse(url)
    if parsed is None:
        return False

    hosts = get_allowed_hosts(raw)
    if not hosts:
        return True

    url_origin = get_origin(url)
    return any(_matches(url_origin, parsed.hostname, allowed_host) for allowed_host in hosts)
