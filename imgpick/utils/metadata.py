from __future__ import annotations

from typing import Optional

from lxml import html


def extract_title(doc: html.HtmlElement) -> Optional[str]:
    """Page title from <title>, then og:title, then the first non-empty <h1>."""

    def first(xpath: str) -> Optional[str]:
        for node in doc.xpath(xpath):
            text = node if isinstance(node, str) else node.text_content()
            text = " ".join(text.split())
            if text:
                return text
        return None

    return (
        first("//title/text()")
        or first("//meta[@property='og:title']/@content")
        or first("//h1[normalize-space(string())!='']")
    )
