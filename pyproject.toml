[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cloudview"
version = "0.1.0"
description = "Point field types, picking geometry, shader parameter parsing and triangle mesh helpers for a point cloud viewer"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["point cloud", "mesh", "shader", "picking", "visualization", "geometry"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cloudview"]

[tool.pytest.ini_options]
addopts = "-ra"
