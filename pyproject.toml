[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tiledcholesky"
version = "0.1.0"
description = "Tiled Cholesky factorization, run in sequence or as a dependency-driven task graph"
requires-python = ">=3.10"
keywords = ["cholesky", "linear-algebra", "task-graph", "tiled", "lapack"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tiledcholesky = "tiledcholesky.driver:main"

[tool.hatch.build.targets.wheel]
packages = ["tiledcholesky"]

[tool.pytest.ini_options]
addopts = "-ra"
