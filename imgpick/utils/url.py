from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin, urlparse, urlunparse


def normalize_url(url: str) -> str:
    parsed = urlparse(url)
    scheme = parsed.scheme or "http"
    netloc = parsed.netloc
    path = parsed.path or "/"
    return urlunparse((scheme, netloc, path, "", parsed.query, parsed.fragment))


def is_http_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def resolve_url(url: str, base_url: Optional[str] = None) -> str:
    url = url.strip()
    if not base_url or url.startswith("data:"):
        return url
    return urljoin(base_url, url)
