"""Shader source handling: define injection, uniform parsing and GL enables."""

from __future__ import annotations

import logging
import math
import re
import sys
from dataclasses import dataclass
from enum import Enum

from cloudview.shader_param import ShaderParam

logger = logging.getLogger(__name__)

_UNIFORM_RE = re.compile(
    r"uniform +([a-zA-Z_][a-zA-Z_0-9]*) +([a-zA-Z_][a-zA-Z_0-9]*) +=(.+); *//# *(.*)"
)
_ENABLE_RE = re.compile(r"// gl(Enable|Disable)\(([A-Z0-9_]+)\)")
_INT_RE = re.compile(r"[+-]?\d+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class ShaderType(Enum):
    """Stage of the pipeline a shader is compiled for."""

    VERTEX = "vertex"
    FRAGMENT = "fragment"


_STAGE_DEFINES = {
    ShaderType.VERTEX: "#define VERTEX_SHADER\n",
    ShaderType.FRAGMENT: "#define FRAGMENT_SHADER\n",
}


def _to_double(text: str) -> float:
    text = text.strip()
    if "_" in text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) or text.lower().lstrip("+-") in ("inf", "nan") else 0.0


def _to_int(text: str) -> int:
    text = text.strip()
    if not _INT_RE.fullmatch(text):
        return 0
    value = int(text)
    return value if _INT_MIN <= value <= _INT_MAX else 0


def insert_defines(src: str, defines: str) -> str:
    """Add ``defines`` to ``src``, after a ``#version`` line if there is one."""
    version_pos = src.find("#version")
    if version_pos == -1:
        return defines + src
    newline = src.find("\n", version_pos)
    if newline == -1:
        return src + "\n" + defines
    return src[: newline + 1] + defines + src[newline + 1 :]


def blacklist_defines(vendor: str) -> str:
    """Defines disabling features known to be broken for a driver vendor.

    Only Intel drivers on Windows are affected: they render badly when
    gl_FragCoord is combined with gl_PointCoord.
    """
    if sys.platform == "win32" and "intel" in vendor.lower():
        return "#define BROKEN_GL_FRAG_COORD\n"
    return ""


def parse_uniforms(src: str) -> list[ShaderParam]:
    """Find uniforms annotated with ``//#`` metadata in shader source.

    Recognised types are ``float``, ``int`` and ``vec3`` (whose default is
    taken as 0.0); other lines are ignored.
    """
    params = []
    for line in src.split("\n"):
        match = _UNIFORM_RE.fullmatch(line)
        if not match:
            continue
        type_name, name, default_text, metadata = match.groups()
        if type_name == "float":
            default: float | int = _to_double(default_text)
        elif type_name == "int":
            default = _to_int(default_text)
        elif type_name == "vec3":
            default = 0.0
        else:
            continue
        param = ShaderParam(name, default)
        for pair in metadata.split(";"):
            key_and_value = pair.split("=")
            if len(key_and_value) != 2:
                logger.warning(
                    'Could not parse metadata "%s" for shader variable %s', pair, name
                )
                continue
            key, value = key_and_value
            param.kv_pairs[key.strip()] = value.strip()
        params.append(param)
    return params


class Shader:
    """A single shader stage with its parsed uniform parameters."""

    def __init__(self, shader_type: ShaderType):
        self.shader_type = shader_type
        self.uniforms: list[ShaderParam] = []
        self.source_code = ""
        self.compiled_source = ""

    def compile_source(self, src: str, vendor: str = "") -> str:
        """Prepare ``src`` for this stage and parse its uniforms.

        Returns the source with stage and blacklist defines added.
        """
        defines = _STAGE_DEFINES[self.shader_type] + blacklist_defines(vendor)
        self.compiled_source = insert_defines(src, defines)
        self.source_code = src
        self.uniforms = parse_uniforms(src)
        return self.compiled_source


_CAPABILITIES = {
    "GL_DEPTH_TEST": "depth_test",
    "GL_STENCIL_TEST": "stencil_test",
    "GL_BLEND": "blend",
    "GL_VERTEX_PROGRAM_POINT_SIZE": "vertex_program_point_size",
}


@dataclass
class EnableFlags:
    """OpenGL capabilities to enable (True), disable (False) or leave alone (None)."""

    depth_test: bool | None = True
    stencil_test: bool | None = False
    blend: bool | None = False
    vertex_program_point_size: bool | None = True

    def set(self, src: str) -> None:
        """Reset to defaults, then apply ``// glEnable(X)`` lines found in ``src``."""
        self.depth_test = True
        self.stencil_test = False
        self.blend = False
        self.vertex_program_point_size = True
        for line in src.split("\n"):
            match = _ENABLE_RE.fullmatch(line)
            if not match:
                continue
            action, name = match.groups()
            logger.debug("%s %s", name, action)
            attr = _CAPABILITIES.get(name)
            if attr is not None:
                setattr(self, attr, action == "Enable")

    def actions(self) -> list[tuple[str, bool]]:
        """``(capability, enable)`` pairs to apply, skipping unset ones."""
        result = []
        for cap, attr in _CAPABILITIES.items():
            value = getattr(self, attr)
            if value is not None:
                result.append((cap, value))
        return result