from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

Number = Union[int, float]


class DescriptorKind(str, Enum):
    WIDTH = "w"
    HEIGHT = "h"
    DENSITY = "x"

    @property
    def field(self) -> str:
        return _FIELDS[self]


_FIELDS = {
    DescriptorKind.WIDTH: "width",
    DescriptorKind.HEIGHT: "height",
    DescriptorKind.DENSITY: "density",
}


@dataclass(frozen=True)
class Descriptor:
    kind: DescriptorKind
    value: Number


@dataclass(frozen=True)
class Candidate:
    """One entry of a srcset list: a URL and at most one descriptor."""

    url: str
    descriptor: Optional[Descriptor] = None

    def _value(self, kind: DescriptorKind) -> Optional[Number]:
        if self.descriptor is not None and self.descriptor.kind is kind:
            return self.descriptor.value
        return None

    @property
    def width(self) -> Optional[Number]:
        return self._value(DescriptorKind.WIDTH)

    @property
    def height(self) -> Optional[Number]:
        return self._value(DescriptorKind.HEIGHT)

    @property
    def density(self) -> Optional[Number]:
        return self._value(DescriptorKind.DENSITY)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"url": self.url}
        if self.descriptor is not None:
            data[self.descriptor.kind.field] = self.descriptor.value
        return data
