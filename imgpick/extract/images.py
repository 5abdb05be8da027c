from __future__ import annotations

import re
from typing import List, Optional

from lxml import html

from ..srcset.errors import SrcsetError
from ..srcset.parser import parse
from ..srcset.selector import pick_best
from ..utils.logging import get_logger
from ..utils.url import resolve_url


_selector_part_re = re.compile(r"^([^.#\s]+)((?:[.#][^.#\s]+)*)$")
_selector_token_re = re.compile(r"([.#])([^.#\s]+)")
_unsafe_name_re = re.compile(r"[.#>]")


def parse_html(html_text: str) -> html.HtmlElement:
    return html.document_fromstring(html_text)


def _tag(el) -> str:
    return el.tag.lower() if isinstance(el.tag, str) else ""


def document_base_url(doc: html.HtmlElement, page_url: Optional[str]) -> Optional[str]:
    hrefs = [h.strip() for h in doc.xpath("//base/@href") if h.strip()]
    if not hrefs:
        return page_url
    return resolve_url(hrefs[0], page_url)


def selector_for(element: html.HtmlElement) -> str:
    """Structural selector of ``element``, e.g. ``body > div.gallery > img.thumb``.

    One step per ancestor below the document root, carrying every class and
    id token, so images rendered by the same template share a selector.
    """
    parts = []
    el = element
    while el is not None and el.getparent() is not None:
        part = _tag(el)
        # names with selector punctuation cannot round-trip through selector_to_xpath
        for cls in (el.get("class") or "").split():
            if not _unsafe_name_re.search(cls):
                part += f".{cls}"
        for ident in (el.get("id") or "").split():
            if not _unsafe_name_re.search(ident):
                part += f"#{ident}"
        parts.insert(0, part)
        el = el.getparent()
    return " > ".join(parts)


def _xpath_literal(value: str) -> str:
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    pieces = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in pieces) + ")"


def selector_to_xpath(selector: str) -> str:
    steps = []
    for part in selector.split(">"):
        part = part.strip()
        m = _selector_part_re.match(part)
        if not m:
            raise ValueError(f"Unsupported selector step: {part!r}")
        step = m.group(1).lower()
        for marker, name in _selector_token_re.findall(m.group(2)):
            if marker == ".":
                step += f"[contains(concat(' ', normalize-space(@class), ' '), {_xpath_literal(' ' + name + ' ')})]"
            else:
                step += f"[@id={_xpath_literal(name)}]"
        steps.append(step)
    return "//" + "/".join(steps)


def find_images(doc: html.HtmlElement, selector: Optional[str] = None) -> List[html.HtmlElement]:
    if selector:
        nodes = doc.xpath(selector_to_xpath(selector))
    else:
        nodes = doc.xpath("//img")
    return [n for n in nodes if _tag(n) == "img"]


def similar_images(doc: html.HtmlElement, element: html.HtmlElement) -> List[html.HtmlElement]:
    return find_images(doc, selector_for(element))


def image_url(img: html.HtmlElement, base_url: Optional[str] = None, strict: bool = False) -> Optional[str]:
    """Best URL for an <img>: the largest srcset candidate, else its src."""
    if _tag(img) != "img":
        return None
    logger = get_logger()
    url = None
    srcset = (img.get("srcset") or "").strip()
    if srcset:
        try:
            url = pick_best(parse(srcset, strict=strict))
        except SrcsetError as e:
            logger.warning(f"Invalid srcset {srcset!r}: {e}")
        if url is None:
            logger.debug(f"No usable srcset candidate in {srcset!r}; using src")
    if url is None:
        url = (img.get("src") or "").strip() or None
    if url is None:
        return None
    return resolve_url(url, base_url)


def image_urls(
    doc: html.HtmlElement,
    base_url: Optional[str] = None,
    selector: Optional[str] = None,
    strict: bool = False,
) -> List[str]:
    images = find_images(doc, selector)
    urls = []
    for img in images:
        url = image_url(img, base_url=base_url, strict=strict)
        if url:
            urls.append(url)
    get_logger().debug(f"Images matched={len(images)} with url={len(urls)}")
    return urls
