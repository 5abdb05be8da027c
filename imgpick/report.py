from __future__ import annotations

import json
import math
from typing import TYPE_CHECKING, Sequence

from rich.table import Table

from .srcset.models import Candidate
from .srcset.parser import format_number

if TYPE_CHECKING:
    from .pipeline import PickResult


FORMATS = ("text", "json")


def format_result(result: "PickResult", fmt: str = "text") -> str:
    if fmt == "json":
        data = {"source": result.source, "title": result.title, "urls": result.urls}
        return json.dumps(data, ensure_ascii=False, indent=2) + "\n"
    if fmt != "text":
        raise ValueError(f"Unknown output format: {fmt} (expected one of {', '.join(FORMATS)})")
    return "".join(url + "\n" for url in result.urls)


def _json_value(value):
    # NaN and Infinity have no JSON spelling
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def candidates_to_json(candidates: Sequence[Candidate]) -> str:
    rows = [{k: _json_value(v) for k, v in c.to_dict().items()} for c in candidates]
    return json.dumps(rows, ensure_ascii=False, indent=2, allow_nan=False)


def candidates_table(candidates: Sequence[Candidate]) -> Table:
    table = Table("#", "url", "descriptor", "value")
    for i, cand in enumerate(candidates):
        if cand.descriptor is None:
            table.add_row(str(i), cand.url, "-", "-")
        else:
            d = cand.descriptor
            table.add_row(str(i), cand.url, d.kind.field, format_number(d.value))
    return table
