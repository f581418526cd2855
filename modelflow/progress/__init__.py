"""Progress reporting for modelflow.

This module provides stage tracking and callback reporting while a workflow
is fit.
"""

from __future__ import annotations

from .reporter import (
    CallbackProgressReporter,
    FitStage,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    ProgressUpdate,
)

__all__ = [
    "FitStage",
    "ProgressUpdate",
    "ProgressCallback",
    "ProgressReporter",
    "CallbackProgressReporter",
    "NullProgressReporter",
]
