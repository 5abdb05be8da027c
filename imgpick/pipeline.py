from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .extract.images import document_base_url, image_urls, parse_html
from .fetchers import http_fetcher
from .report import format_result
from .utils.io import SourceError, read_html_file, write_text_file
from .utils.logging import get_logger
from .utils.metadata import extract_title
from .utils.url import is_http_url, normalize_url


@dataclass
class RunConfig:
    source: str
    output: Optional[Path] = None
    selector: Optional[str] = None  # None=every <img>
    strict: bool = False
    timeout: float = 40.0
    retries: int = 1
    headers: Optional[Iterable[str]] = None
    cookies: Optional[Iterable[str]] = None
    output_format: str = "text"


@dataclass
class PickResult:
    source: str
    title: Optional[str]
    urls: List[str] = field(default_factory=list)


def _load(cfg: RunConfig, logger) -> Tuple[str, Optional[str]]:
    """Return the page HTML and the URL relative links resolve against."""
    if is_http_url(cfg.source):
        page = normalize_url(cfg.source)
        logger.debug(f"Fetching via HTTP: {page}")
        res = http_fetcher.fetch(page, timeout=cfg.timeout, headers=cfg.headers, cookies=cfg.cookies, retries=cfg.retries)
        return res.html, res.url
    logger.debug(f"Reading file: {cfg.source}")
    return read_html_file(Path(cfg.source)), None


def pick(cfg: RunConfig) -> PickResult:
    logger = get_logger()
    html_text, page_url = _load(cfg, logger)
    if not html_text.strip():
        raise SourceError(f"Empty document: {cfg.source}")
    doc = parse_html(html_text)
    base_url = document_base_url(doc, page_url)
    urls = image_urls(doc, base_url=base_url, selector=cfg.selector, strict=cfg.strict)
    result = PickResult(source=page_url or cfg.source, title=extract_title(doc), urls=urls)
    logger.info(f"Found {len(urls)} image(s) on {result.source}")
    return result


def run(cfg: RunConfig) -> str:
    """Pick the images of ``cfg.source`` and render them in ``cfg.output_format``.

    When ``cfg.output`` is set the rendering is also written there.
    """
    logger = get_logger()
    result = pick(cfg)
    rendered = format_result(result, cfg.output_format)
    if cfg.output:
        written = write_text_file(cfg.output, rendered)
        logger.info(f"Saved: {written.path} ({written.bytes_written} bytes)")
    return rendered
