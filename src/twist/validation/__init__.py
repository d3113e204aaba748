"""Diagnostics for model output."""

from .diagnostics import RunDiagnostics, summarize_run

__all__ = [
    "RunDiagnostics",
    "summarize_run",
]
