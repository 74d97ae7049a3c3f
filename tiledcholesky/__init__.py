"""Tiled Cholesky factorization with sequential and task-graph execution."""

__version__ = "0.1.0"

__all__ = ["blocks", "kernels", "verify", "taskgraph", "factorization", "driver"]