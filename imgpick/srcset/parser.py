from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

from .errors import (
    DuplicateDescriptorError,
    FallbackConflictError,
    InvalidDensityError,
    InvalidWidthError,
    MalformedCountError,
    NotANumberError,
    UnsupportedDescriptorError,
)
from .models import Candidate, Descriptor, DescriptorKind, Number


# Loose rule for an image candidate string:
#   optional whitespace, a URL that neither starts nor ends with ",",
#   an optional whitespace-led descriptor run, optional whitespace,
#   then "," or end of input.
# Anything the rule accepts is checked precisely by the validator below.
_candidate_re = re.compile(r"\s*([^\s,](?:\S*[^\s,])?(?:\s+[^\s,][^,]*)?)\s*(?:,|$)")

# Leading numeric prefix, the way JavaScript's parseFloat reads it.
_float_prefix_re = re.compile(r"[+-]?(?:Infinity|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")

_KINDS = {kind.value: kind for kind in DescriptorKind}


class RawCandidate(NamedTuple):
    url: str
    descriptors: Tuple[str, ...]


@dataclass
class ValidationLedger:
    """Descriptors already seen during one strict parse call."""

    seen: Dict[str, Dict[float, bool]] = field(default_factory=dict)
    fallback: bool = False


def tokenize(text: str) -> List[RawCandidate]:
    out: List[RawCandidate] = []
    for m in _candidate_re.finditer(text):
        url, *descriptors = m.group(1).split()
        out.append(RawCandidate(url=url, descriptors=tuple(descriptors)))
    return out


def parse_number(text: str) -> float:
    m = _float_prefix_re.match(text.lstrip())
    if not m:
        return math.nan
    return float(m.group(0).replace("Infinity", "inf"))


def decode_descriptor(token: str) -> Tuple[float, str]:
    return parse_number(token[:-1]), token[-1:]


def format_number(value: float) -> str:
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return str(value)


def _check_count(ledger: ValidationLedger, descriptors: Tuple[str, ...]) -> None:
    if not descriptors:
        if ledger.fallback:
            raise FallbackConflictError("Only one fallback image candidate is allowed")
        if ledger.seen.get(DescriptorKind.DENSITY.value, {}).get(1.0):
            raise FallbackConflictError(
                "A fallback image is equivalent to a 1x descriptor, providing both is invalid."
            )
        ledger.fallback = True
    elif len(descriptors) > 1:
        raise MalformedCountError(
            f"Image candidate may have no more than one descriptor, found {len(descriptors)}: {' '.join(descriptors)}"
        )


def _check_value(value: float, postfix: str, token: str) -> None:
    if math.isnan(value):
        raise NotANumberError(f"{token or value} is not a valid number")
    if postfix == "w":
        if value <= 0:
            raise InvalidWidthError("Width descriptor must be greater than zero")
        if not float(value).is_integer():
            raise InvalidWidthError("Width descriptor must be an integer")
    elif postfix == "x":
        if value <= 0:
            raise InvalidDensityError("Pixel density descriptor must be greater than zero")
    elif postfix == "h":
        raise UnsupportedDescriptorError("Height descriptor is no longer allowed")
    else:
        raise UnsupportedDescriptorError(f"Invalid srcset descriptor: {token}")


def _record(ledger: ValidationLedger, value: float, postfix: str) -> None:
    values = ledger.seen.setdefault(postfix, {})
    if values.get(value):
        raise DuplicateDescriptorError(
            f"No more than one image candidate is allowed for a given descriptor: {format_number(value)}{postfix}"
        )
    if postfix == DescriptorKind.DENSITY.value and value == 1 and ledger.fallback:
        raise FallbackConflictError(
            "A fallback image is equivalent to a 1x descriptor, providing both is invalid."
        )
    values[value] = True


def _as_descriptor(kind: DescriptorKind, value: float) -> Descriptor:
    number: Number = value
    if kind is DescriptorKind.WIDTH and math.isfinite(value) and value.is_integer():
        number = int(value)
    return Descriptor(kind=kind, value=number)


def _build(raw: RawCandidate, ledger: Optional[ValidationLedger]) -> Candidate:
    if ledger is not None:
        _check_count(ledger, raw.descriptors)

    # Later tokens of a kind overwrite earlier ones; width outranks height outranks density
    values: Dict[DescriptorKind, float] = {}
    for token in raw.descriptors:
        value, postfix = decode_descriptor(token)
        if ledger is not None:
            _check_value(value, postfix, token)
            _record(ledger, value, postfix)
        kind = _KINDS.get(postfix)
        if kind is not None:
            values[kind] = value
    for kind in DescriptorKind:
        if kind in values:
            return Candidate(url=raw.url, descriptor=_as_descriptor(kind, values[kind]))
    return Candidate(url=raw.url)


def parse(text: str, strict: bool = False) -> List[Candidate]:
    """Parse a srcset attribute value into candidates, in input order.

    With ``strict`` every rule of the srcset grammar is enforced and the first
    violation raises a :class:`~imgpick.srcset.errors.SrcsetError` subclass;
    nothing is returned partially. Without it, malformed descriptors are
    decoded best-effort (unparseable numbers become NaN, unknown kinds are
    dropped) and parsing never raises.
    """
    ledger = ValidationLedger() if strict else None
    return [_build(raw, ledger) for raw in tokenize(text)]
