"""OpenGL type metadata and shader attribute descriptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from cloudview.typespec import GL_DOUBLE, GL_FLOAT, GL_INT, GL_UNSIGNED_INT, ElementType

GL_FLOAT_VEC2 = 0x8B50
GL_FLOAT_VEC3 = 0x8B51
GL_FLOAT_VEC4 = 0x8B52
GL_INT_VEC2 = 0x8B53
GL_INT_VEC3 = 0x8B54
GL_INT_VEC4 = 0x8B55
GL_FLOAT_MAT2 = 0x8B5A
GL_FLOAT_MAT3 = 0x8B5B
GL_FLOAT_MAT4 = 0x8B5C
GL_FLOAT_MAT2x3 = 0x8B65
GL_FLOAT_MAT2x4 = 0x8B66
GL_FLOAT_MAT3x2 = 0x8B67
GL_FLOAT_MAT3x4 = 0x8B68
GL_FLOAT_MAT4x2 = 0x8B69
GL_FLOAT_MAT4x3 = 0x8B6A
GL_UNSIGNED_INT_VEC2 = 0x8DC6
GL_UNSIGNED_INT_VEC3 = 0x8DC7
GL_UNSIGNED_INT_VEC4 = 0x8DC8

GL_INVALID_ENUM = 0x0500
GL_INVALID_VALUE = 0x0501
GL_INVALID_OPERATION = 0x0502
GL_OUT_OF_MEMORY = 0x0505
GL_INVALID_FRAMEBUFFER_OPERATION = 0x0506

GL_FRAMEBUFFER_COMPLETE = 0x8CD5
GL_FRAMEBUFFER_UNDEFINED = 0x8219
GL_FRAMEBUFFER_INCOMPLETE_ATTACHMENT = 0x8CD6
GL_FRAMEBUFFER_INCOMPLETE_MISSING_ATTACHMENT = 0x8CD7
GL_FRAMEBUFFER_INCOMPLETE_DRAW_BUFFER = 0x8CDB
GL_FRAMEBUFFER_INCOMPLETE_READ_BUFFER = 0x8CDC
GL_FRAMEBUFFER_UNSUPPORTED = 0x8CDD
GL_FRAMEBUFFER_INCOMPLETE_MULTISAMPLE = 0x8D56
GL_FRAMEBUFFER_INCOMPLETE_LAYER_TARGETS = 0x8DA8


@dataclass(frozen=True)
class GlTypeInfo:
    """Name, shape and base element type of an OpenGL shader type."""

    name: str
    rows: int
    cols: int
    base_type: ElementType


@dataclass
class ShaderAttribute:
    """Metadata for an active shader input attribute."""

    name: str
    type: int
    count: int = 1
    rows: int = 1
    cols: int = 1
    location: int = -1
    base_type: ElementType = ElementType.UNKNOWN


def _info(name: str, rows: int, cols: int, base: ElementType) -> GlTypeInfo:
    return GlTypeInfo(name, rows, cols, base)


_F, _I, _U = ElementType.FLOAT, ElementType.INT, ElementType.UINT

_TYPE_INFO = {
    GL_FLOAT: _info("GL_FLOAT", 1, 1, _F),
    GL_FLOAT_VEC2: _info("GL_FLOAT_VEC2", 2, 1, _F),
    GL_FLOAT_VEC3: _info("GL_FLOAT_VEC3", 3, 1, _F),
    GL_FLOAT_VEC4: _info("GL_FLOAT_VEC4", 4, 1, _F),
    GL_FLOAT_MAT2: _info("GL_FLOAT_MAT2", 2, 2, _F),
    GL_FLOAT_MAT3: _info("GL_FLOAT_MAT3", 3, 3, _F),
    GL_FLOAT_MAT4: _info("GL_FLOAT_MAT4", 4, 4, _F),
    GL_FLOAT_MAT2x3: _info("GL_FLOAT_MAT2x3", 2, 3, _F),
    GL_FLOAT_MAT2x4: _info("GL_FLOAT_MAT2x4", 2, 4, _F),
    GL_FLOAT_MAT3x2: _info("GL_FLOAT_MAT3x2", 3, 2, _F),
    GL_FLOAT_MAT3x4: _info("GL_FLOAT_MAT3x4", 3, 4, _F),
    GL_FLOAT_MAT4x2: _info("GL_FLOAT_MAT4x2", 4, 2, _F),
    GL_FLOAT_MAT4x3: _info("GL_FLOAT_MAT4x3", 4, 3, _F),
    GL_INT: _info("GL_INT", 1, 1, _I),
    GL_INT_VEC2: _info("GL_INT_VEC2", 2, 1, _I),
    GL_INT_VEC3: _info("GL_INT_VEC3", 3, 1, _I),
    GL_INT_VEC4: _info("GL_INT_VEC4", 4, 1, _I),
    GL_UNSIGNED_INT: _info("GL_UNSIGNED_INT", 1, 1, _U),
    GL_UNSIGNED_INT_VEC2: _info("GL_UNSIGNED_INT_VEC2", 2, 1, _U),
    GL_UNSIGNED_INT_VEC3: _info("GL_UNSIGNED_INT_VEC3", 3, 1, _U),
    GL_UNSIGNED_INT_VEC4: _info("GL_UNSIGNED_INT_VEC4", 4, 1, _U),
    GL_DOUBLE: _info("GL_DOUBLE", 1, 1, _F),
}

_ERROR_NAMES = {
    GL_INVALID_OPERATION: "INVALID_OPERATION",
    GL_INVALID_ENUM: "INVALID_ENUM",
    GL_INVALID_VALUE: "INVALID_VALUE",
    GL_OUT_OF_MEMORY: "OUT_OF_MEMORY",
    GL_INVALID_FRAMEBUFFER_OPERATION: "INVALID_FRAMEBUFFER_OPERATION",
}

_FRAMEBUFFER_STATUS_NAMES = {
    GL_INVALID_ENUM: "?? (bad target)",
    GL_FRAMEBUFFER_UNDEFINED: "UNDEFINED",
    GL_FRAMEBUFFER_INCOMPLETE_ATTACHMENT: "INCOMPLETE_ATTACHMENT",
    GL_FRAMEBUFFER_INCOMPLETE_DRAW_BUFFER: "INCOMPLETE_DRAW_BUFFER",
    GL_FRAMEBUFFER_INCOMPLETE_READ_BUFFER: "INCOMPLETE_READ_BUFFER",
    GL_FRAMEBUFFER_INCOMPLETE_MULTISAMPLE: "INCOMPLETE_MULTISAMPLE",
    GL_FRAMEBUFFER_INCOMPLETE_LAYER_TARGETS: "INCOMPLETE_LAYER_TARGETS",
    GL_FRAMEBUFFER_INCOMPLETE_MISSING_ATTACHMENT: "INCOMPLETE_MISSING_ATTACHMENT",
    GL_FRAMEBUFFER_UNSUPPORTED: "UNSUPPORTED",
}


def gl_type_info(gl_type: int) -> GlTypeInfo | None:
    """Describe an OpenGL shader type, or return None if it is not known."""
    return _TYPE_INFO.get(gl_type)


def find_attr(name: str, attrs: Iterable[ShaderAttribute]) -> ShaderAttribute | None:
    """Return the first attribute called ``name``, or None."""
    return next((attr for attr in attrs if attr.name == name), None)


def gl_error_name(code: int) -> str:
    """Readable name of an OpenGL error code; empty when unrecognised."""
    return _ERROR_NAMES.get(code, "")


def framebuffer_status_name(code: int) -> str | None:
    """Readable name of a framebuffer status; None when the status is complete."""
    if code == GL_FRAMEBUFFER_COMPLETE:
        return None
    return _FRAMEBUFFER_STATUS_NAMES.get(code, "???")