"""Point field types, picking geometry, shader parameter parsing and triangle mesh helpers."""

__version__ = "0.1.0"