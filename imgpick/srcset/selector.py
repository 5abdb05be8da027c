from __future__ import annotations

from typing import Optional, Sequence

from .models import Candidate
from .parser import parse


def pick_best(candidates: Sequence[Candidate]) -> Optional[str]:
    """Return the URL with the largest descriptor value, or None.

    The dimension is taken from the first candidate; a list whose first entry
    has no descriptor cannot be ranked. Only values strictly greater than the
    running maximum (seeded at 0) win, so ties keep the earliest candidate.
    Candidates keyed on another dimension are skipped, not compared.
    """
    if not candidates or candidates[0].descriptor is None:
        return None
    kind = candidates[0].descriptor.kind

    best_value = 0
    best_url: Optional[str] = None
    for cand in candidates:
        if cand.descriptor is None or cand.descriptor.kind is not kind:
            continue
        # NaN never compares greater, so non-strict junk is ignored here
        if cand.descriptor.value > best_value:
            best_value = cand.descriptor.value
            best_url = cand.url
    return best_url


def pick_best_from_srcset(text: str, strict: bool = False) -> Optional[str]:
    return pick_best(parse(text, strict=strict))
