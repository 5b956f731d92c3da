"""Description of a tweakable shader parameter."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Tuple, Union

Color = Tuple[int, int, int, int]
Value = Union[float, int, Color]

FLOAT_KIND = 0
INT_KIND = 1
COLOR_KIND = 2

_INT_RE = re.compile(r"\s*[+-]?\d+\s*\Z")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


@dataclass(eq=False)
class ShaderParam:
    """A shader uniform variable with a default value and metadata.

    Two parameters are the same key when their names and value kinds match.
    """

    name: str = ""
    default_value: Value = 0.0
    kv_pairs: dict[str, str] = field(default_factory=dict)
    ordering: int = 0

    def ui_name(self) -> str:
        """Name to show in a user interface."""
        return self.kv_pairs.get("uiname", self.name)

    def get_double(self, name: str, default: float) -> float:
        """Metadata value ``name`` as a float, or ``default``."""
        text = self.kv_pairs.get(name)
        if text is None or "_" in text:
            return default
        try:
            return float(text)
        except ValueError:
            return default

    def get_int(self, name: str, default: int) -> int:
        """Metadata value ``name`` as a 32-bit integer, or ``default``."""
        text = self.kv_pairs.get(name)
        if text is None or not _INT_RE.match(text):
            return default
        value = int(text)
        if not _INT_MIN <= value <= _INT_MAX:
            return default
        return value

    def value_kind(self) -> int:
        """FLOAT_KIND, INT_KIND or COLOR_KIND, by the default value's type."""
        value = self.default_value
        if isinstance(value, float):
            return FLOAT_KIND
        if isinstance(value, int):
            return INT_KIND
        if isinstance(value, tuple) and len(value) == 4:
            return COLOR_KIND
        raise TypeError(f"unsupported shader parameter value {value!r}")

    def sort_key(self) -> tuple[str, int]:
        """Key used to order and look up parameters."""
        return (self.name, self.value_kind())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShaderParam):
            return NotImplemented
        return (
            self.name == other.name
            and self.value_kind() == other.value_kind()
            and self.kv_pairs == other.kv_pairs
            and self.ordering == other.ordering
        )

    def __lt__(self, other: ShaderParam) -> bool:
        if not isinstance(other, ShaderParam):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())