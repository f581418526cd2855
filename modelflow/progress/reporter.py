"""Progress reporting classes and types.

This module contains the progress reporting infrastructure used while a
workflow is fit: the FitStage enum, the ProgressUpdate dataclass, and
reporter implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class FitStage(Enum):
    """Stages of fitting a workflow."""

    PREPROCESSING = "preprocessing"
    MODEL_FITTING = "model_fitting"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class ProgressUpdate:
    """Progress update during fitting.

    Attributes:
        stage: Current fit stage.
        progress: Progress value from 0.0 to 1.0.
        message: Human-readable status message.
    """

    stage: FitStage
    progress: float  # 0.0 to 1.0
    message: str


# Type alias for progress callback
ProgressCallback = Callable[[ProgressUpdate], None]


class ProgressReporter(Protocol):
    """Protocol for progress reporting.

    Implement this protocol to receive progress updates during fitting.
    """

    def report(self, update: ProgressUpdate) -> None:
        """Report a progress update.

        Args:
            update: The progress update to report.
        """
        ...


class CallbackProgressReporter:
    """Progress reporter that forwards each update to a callback."""

    def __init__(self, progress_callback: ProgressCallback | None = None) -> None:
        """Initialize the callback progress reporter.

        Args:
            progress_callback: Function to call with progress updates.
        """
        self._progress_callback = progress_callback

    def report(self, update: ProgressUpdate) -> None:
        """Report progress update via callback."""
        if self._progress_callback is not None:
            self._progress_callback(update)


class NullProgressReporter:
    """No-op progress reporter.

    Use this when you don't need progress reporting.
    """

    def report(self, update: ProgressUpdate) -> None:
        """Do nothing."""
        pass
