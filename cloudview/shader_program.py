"""Shader program holding user-tweakable uniform parameters."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable

from cloudview.shader_param import COLOR_KIND, FLOAT_KIND, INT_KIND, ShaderParam, Value
from cloudview.shader_source import Shader, ShaderType, _to_double


@dataclass
class WidgetSpec:
    """Description of an editor widget for one shader parameter."""

    kind: str
    name: str
    label: str
    value: Value
    minimum: float = 0
    maximum: float = 100
    decimals: int | None = None
    exp_scaling: bool = False
    speed: float = 1.0
    items: list[str] = field(default_factory=list)


def _decimals(magnitude: float) -> int:
    if not magnitude > 0:
        return 2
    digits = max(0.0, -math.log(magnitude) / math.log(10.0))
    return int(math.floor(digits + 0.5)) + 2


def describe_widget(param: ShaderParam, value: Value) -> WidgetSpec | None:
    """Describe the editor for ``param`` showing ``value``; None if unsupported."""
    kind = param.value_kind()
    label = param.ui_name() + ":"
    kv = param.kv_pairs
    if kind == FLOAT_KIND:
        exp_scaling = kv.get("scaling", "exponential").startswith("exp")
        speed = _to_double(kv.get("speed", "1"))
        if speed == 0:
            speed = 1.0
        lo = param.get_double("min", 0)
        hi = param.get_double("max", 100)
        if exp_scaling:
            # Exponential scaling cannot reach zero.
            if hi == 0:
                hi = 100
            if lo == 0:
                lo = 1e-8 if hi > 0 else -1e-8
            decimals = _decimals(lo)
        else:
            decimals = _decimals(max(abs(lo), abs(hi)))
        return WidgetSpec(
            "double_spin", param.name, label, value, lo, hi, decimals, exp_scaling, speed
        )
    if kind == INT_KIND:
        if "enum" in kv:
            return WidgetSpec(
                "combo", param.name, label, value, items=kv["enum"].split("|")
            )
        widget_kind = "slider" if "slider" in kv else "spin"
        return WidgetSpec(
            widget_kind,
            param.name,
            label,
            value,
            param.get_int("min", 0),
            param.get_int("max", 100),
        )
    return None


def _kind_of(value: Value) -> int:
    if isinstance(value, bool):
        raise TypeError(f"unsupported uniform value {value!r}")
    if isinstance(value, float):
        return FLOAT_KIND
    if isinstance(value, int):
        return INT_KIND
    if isinstance(value, tuple) and len(value) == 4:
        return COLOR_KIND
    raise TypeError(f"unsupported uniform value {value!r}")


class ShaderProgram:
    """Vertex and fragment shaders built from one source, with parameters.

    The source's ``//#`` annotated uniforms become parameters whose values
    persist across recompiles when the same name and type remain.
    """

    def __init__(self, vendor: str = ""):
        self.vendor = vendor
        self.vertex_shader: Shader | None = None
        self.fragment_shader: Shader | None = None
        self._params: dict[tuple[str, int], tuple[ShaderParam, Value]] = {}
        self._params_changed: list[Callable[[], None]] = []
        self._shader_changed: list[Callable[[], None]] = []
        self._values_changed: list[Callable[[], None]] = []

    def on_params_changed(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` when the set of parameters changes."""
        self._params_changed.append(callback)

    def on_shader_changed(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` when new shader source is installed."""
        self._shader_changed.append(callback)

    def on_uniform_values_changed(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` when a parameter value changes."""
        self._values_changed.append(callback)

    @staticmethod
    def _emit(callbacks: list[Callable[[], None]]) -> None:
        for callback in callbacks:
            callback()

    def set_shader(self, src: str) -> bool:
        """Install shader source containing both stages."""
        vertex = Shader(ShaderType.VERTEX)
        fragment = Shader(ShaderType.FRAGMENT)
        vertex.compile_source(src, self.vendor)
        fragment.compile_source(src, self.vendor)
        self.vertex_shader = vertex
        self.fragment_shader = fragment
        self._setup_parameters()
        self._emit(self._shader_changed)
        return True

    def set_shader_from_file(self, path) -> bool:
        """Read shader source from ``path`` and install it; False if unreadable."""
        try:
            data = Path(path).read_bytes()
        except OSError:
            return False
        return self.set_shader(data.decode("utf-8", errors="replace"))

    def _setup_parameters(self) -> None:
        param_list = list(self.vertex_shader.uniforms) if self.vertex_shader else []
        changed = len(param_list) != len(self._params)
        new_params: dict[tuple[str, int], tuple[ShaderParam, Value]] = {}
        for i, param in enumerate(param_list):
            param = replace(param, kv_pairs=dict(param.kv_pairs), ordering=i)
            key = param.sort_key()
            old = self._params.get(key)
            if old is None or not old[0] == param:
                changed = True
            # Keep the previous value for convenience.
            value = old[1] if old is not None else param.default_value
            if key not in new_params:
                new_params[key] = (param, value)
        if changed:
            self._params = new_params
            self._emit(self._params_changed)

    def shader_source(self) -> str:
        """Original source of the installed shader, or an empty string."""
        return self.vertex_shader.source_code if self.vertex_shader else ""

    def is_valid(self) -> bool:
        """True once a shader has been installed."""
        return self.vertex_shader is not None

    def set_uniform_value(self, name: str, value: Value) -> None:
        """Set the parameter ``name`` whose type matches ``value``."""
        key = (name, _kind_of(value))
        entry = self._params.get(key)
        if entry is None:
            raise KeyError(f"no shader parameter {name!r} of that type")
        self._params[key] = (entry[0], value)
        self._emit(self._values_changed)

    def get_uniform(self, name: str) -> Value | None:
        """Current value of the first parameter called ``name``, or None."""
        for key in sorted(self._params):
            if key[0] == name:
                return self._params[key][1]
        return None

    def uniforms(self) -> list[tuple[str, Value]]:
        """``(name, value)`` pairs to send to the shader, in key order."""
        return [(key[0], self._params[key][1]) for key in sorted(self._params)]

    def parameter_widgets(self) -> list[WidgetSpec]:
        """Editor descriptions for the parameters, in source order."""
        entries = sorted(self._params.values(), key=lambda entry: entry[0].ordering)
        specs = (describe_widget(param, value) for param, value in entries)
        return [spec for spec in specs if spec is not None]