"""Type descriptions for per-point data fields."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GL_BYTE = 0x1400
GL_UNSIGNED_BYTE = 0x1401
GL_SHORT = 0x1402
GL_UNSIGNED_SHORT = 0x1403
GL_INT = 0x1404
GL_UNSIGNED_INT = 0x1405
GL_FLOAT = 0x1406
GL_DOUBLE = 0x140A
GL_HALF_FLOAT = 0x140B


class ElementType(Enum):
    """Numeric kind of a single element."""

    FLOAT = "float"
    INT = "int"
    UINT = "uint"
    UNKNOWN = "unknown"


class Semantics(Enum):
    """Interpretation of an aggregate of elements."""

    ARRAY = "array"
    VECTOR = "vector"
    COLOR = "color"


_GL_BASE_TYPES = {
    (ElementType.FLOAT, 2): GL_HALF_FLOAT,
    (ElementType.FLOAT, 4): GL_FLOAT,
    (ElementType.FLOAT, 8): GL_DOUBLE,
    (ElementType.INT, 1): GL_BYTE,
    (ElementType.INT, 2): GL_SHORT,
    (ElementType.INT, 4): GL_INT,
    (ElementType.UINT, 1): GL_UNSIGNED_BYTE,
    (ElementType.UINT, 2): GL_UNSIGNED_SHORT,
    (ElementType.UINT, 4): GL_UNSIGNED_INT,
}

_FLOAT_NAMES = {2: "half", 4: "float", 8: "double"}


@dataclass(frozen=True)
class TypeSpec:
    """Fixed-length array of simple numeric elements stored per point.

    ``fixed_point`` marks integer types that are scaled by the maximum value
    of the underlying integer type.
    """

    type: ElementType = ElementType.UNKNOWN
    elsize: int = 0
    count: int = 1
    semantics: Semantics = Semantics.ARRAY
    fixed_point: bool = True

    @classmethod
    def vec3float32(cls) -> TypeSpec:
        return cls(ElementType.FLOAT, 4, 3, Semantics.VECTOR)

    @classmethod
    def float32(cls) -> TypeSpec:
        return cls(ElementType.FLOAT, 4, 1)

    @classmethod
    def uint32_i(cls) -> TypeSpec:
        return cls(ElementType.UINT, 4, 1, Semantics.ARRAY, False)

    @classmethod
    def uint16_i(cls) -> TypeSpec:
        return cls(ElementType.UINT, 2, 1, Semantics.ARRAY, False)

    @classmethod
    def uint8_i(cls) -> TypeSpec:
        return cls(ElementType.UINT, 1, 1, Semantics.ARRAY, False)

    @classmethod
    def uint32(cls) -> TypeSpec:
        return cls(ElementType.UINT, 4, 1)

    @classmethod
    def uint16(cls) -> TypeSpec:
        return cls(ElementType.UINT, 2, 1)

    @classmethod
    def uint8(cls) -> TypeSpec:
        return cls(ElementType.UINT, 1, 1)

    def vector_size(self) -> int:
        """Number of vector elements in the aggregate."""
        return 1 if self.semantics is Semantics.ARRAY else self.count

    def array_size(self) -> int:
        """Number of array elements in the aggregate."""
        return self.count if self.semantics is Semantics.ARRAY else 1

    def is_array(self) -> bool:
        """True when the type is a nontrivial array."""
        return self.semantics is Semantics.ARRAY and self.count > 1

    def size(self) -> int:
        """Bytes needed to store the field for one point."""
        return self.elsize * self.count

    def __str__(self) -> str:
        if self.type is ElementType.FLOAT:
            base = _FLOAT_NAMES.get(self.elsize, "?")
            return f"{base}[{self.count}]"
        return f"{self.type.value}{8 * self.elsize}_t[{self.count}]"


def gl_base_type(spec: TypeSpec) -> int:
    """Return the OpenGL base type constant matching ``spec``."""
    try:
        return _GL_BASE_TYPES[(spec.type, spec.elsize)]
    except KeyError:
        raise ValueError(f"Unable to convert {spec} to a GL type") from None