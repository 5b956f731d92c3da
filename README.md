# cloudview

Building blocks for a 3D viewer of point clouds and triangle meshes:
descriptions of per-point data fields, geometric queries for picking the
point nearest to a view ray, parsing of tweakable shader parameters, and
triangle mesh handling.

Requires Python 3.10 or later and numpy.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `cloudview.typespec`: `TypeSpec`, with `ElementType` and `Semantics`,
  describes a per-point field such as `float[3]` or `uint16_t[3]`
  (`str()` gives that form). Named constructors include `vec3float32`,
  `float32`, `uint8`/`uint16`/`uint32` (fixed point) and
  `uint8_i`/`uint16_i`/`uint32_i` (plain integers). `gl_base_type` maps a
  spec to its OpenGL base type code and raises `ValueError` for sizes it
  has no code for.
- `cloudview.gltypes`: `gl_type_info` returns a `GlTypeInfo` (name, rows,
  cols, base type) for an OpenGL shader type code, or `None`.
  `ShaderAttribute` describes a shader input and `find_attr` looks one up
  by name. `gl_error_name` and `framebuffer_status_name` give readable
  names for GL error and framebuffer status codes.
- `cloudview.geometry`: `Box3` (empty by default, with `center`,
  `extend_by`, `contains`), `EllipticalDist` with `find_nearest` and
  `bound_nearest`, `make_bounding_cylinder` returning
  `(dmin, dmax, radius)`, `polygon_normal` by Newell's method, and
  `multi_partition`, which partitions a list in place and returns the end
  index of each class.
- `cloudview.shader_param`: `ShaderParam`, a uniform with a default value
  and `key=value` metadata, read with `ui_name`, `get_double` and
  `get_int`.
- `cloudview.shader_source`: `parse_uniforms` finds uniforms annotated
  with `//#` metadata; `insert_defines` places defines after a `#version`
  line; `Shader.compile_source` prepares source for a `ShaderType` stage;
  `EnableFlags` reads `// glEnable(X)` / `// glDisable(X)` lines.
- `cloudview.shader_program`: `ShaderProgram` installs shader source,
  keeps parameter values across reloads when the name and type stay the
  same, reports changes through `on_params_changed`,
  `on_shader_changed` and `on_uniform_values_changed`, and describes an
  editor for each parameter as a `WidgetSpec` (`parameter_widgets`,
  `describe_widget`).
- `cloudview.mesh_util`: `centroid`, `bounding_box`,
  `make_smooth_normals` and `make_edges` for flat vertex and index arrays.
- `cloudview.trimesh`: `TriMesh` holding vertices relative to an offset,
  with optional colours, normals and texture coordinates;
  `pick_vertex` returns a `PickResult`. `EdgeChainBuilder` turns edge
  chains read one index at a time into line segment pairs.

## Example

```python
from cloudview.geometry import Box3, EllipticalDist, polygon_normal

dist = EllipticalDist((0, 0, 0), (1, 0, 0), 0.1)
print(dist.bound_nearest(Box3((10, -1, -1), (20, 1, 1))))  # 1.0

print(polygon_normal([0, 0, 0, 1, 0, 0, 1, 1, 0], [0, 1, 2]))  # (0.0, 0.0, 1.0)
```

## What it does not do

The package draws nothing and opens no window: there is no viewer
application, no command to run, and no OpenGL calls. `ShaderProgram`
parses and stores shader source but does not compile it on a GPU.
`TriMesh` is built from arrays in memory; there is no reader for mesh
files. Matrix transform handling and operating-system helpers are not
included.