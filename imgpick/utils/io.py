from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class SourceError(RuntimeError):
    pass


@dataclass
class WriteResult:
    path: Path
    bytes_written: int


def read_html_file(path: Path, encoding: str = "utf-8") -> str:
    if not path.is_file():
        raise SourceError(f"No such HTML file: {path}")
    # Scraped pages are not always valid in the declared encoding
    return path.read_bytes().decode(encoding, errors="replace")


def write_text_file(path: Path, content: str, encoding: str = "utf-8") -> WriteResult:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = content.encode(encoding)
    path.write_bytes(data)
    return WriteResult(path=path, bytes_written=len(data))
