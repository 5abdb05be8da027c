from __future__ import annotations

import httpx
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from ..utils.logging import get_logger


DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/125.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


@dataclass
class FetchResult:
    url: str
    status_code: int
    headers: Dict[str, str]
    html: str


def _parse_pairs(items: Optional[Iterable[str]]) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for item in items or ():
        if "=" in item:
            k, v = item.split("=", 1)
            pairs[k.strip()] = v.strip()
    return pairs


def build_headers(extra_headers: Optional[Iterable[str]] = None) -> Dict[str, str]:
    headers = dict(DEFAULT_HEADERS)
    headers.update(_parse_pairs(extra_headers))
    return headers


def build_cookies(cookie_items: Optional[Iterable[str]] = None) -> Dict[str, str]:
    return _parse_pairs(cookie_items)


def fetch(
    url: str,
    timeout: float = 40.0,
    headers: Optional[Iterable[str]] = None,
    cookies: Optional[Iterable[str]] = None,
    retries: int = 1,
    transport: Optional[httpx.BaseTransport] = None,
) -> FetchResult:
    """GET ``url`` and return the decoded page, retrying transient failures.

    The last error is re-raised once ``retries`` extra attempts are used up.
    """
    logger = get_logger()
    hdrs = build_headers(headers)
    jar = build_cookies(cookies)
    for attempt in range(max(retries, 0) + 1):
        try:
            with httpx.Client(
                http2=True,
                timeout=timeout,
                follow_redirects=True,
                headers=hdrs,
                cookies=jar,
                transport=transport,
            ) as client:
                resp = client.get(url)
                resp.raise_for_status()
                return FetchResult(url=str(resp.url), status_code=resp.status_code, headers=dict(resp.headers), html=resp.text)
        except httpx.HTTPError as e:
            if attempt >= retries:
                raise
            logger.debug(f"Fetch attempt {attempt + 1} failed: {e}")
    raise AssertionError("unreachable")
