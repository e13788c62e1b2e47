"""Replica prewarm utilities exposed via the Lambda layer."""

__all__ = [
    "clients",
    "errors",
    "models",
    "pipeline",
    "utils",
]
