"""Protocols shared across modelflow.

This module defines the WorkflowStage protocol implemented by the fit
stages, and the capability protocols the fit protocol expects from model
specifications.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import pandas as pd

if TYPE_CHECKING:
    from ..config import WorkflowConfig
    from ..models import EncodingInfo, ModelFit
    from .types import Workflow


class SupportsEncoding(Protocol):
    """A model specification that can report its encoding preference."""

    def required_encoding(self) -> EncodingInfo | None:
        """Return the encoding preference, or None if it is not known yet."""
        ...


class FittableSpec(SupportsEncoding, Protocol):
    """A model specification the fit protocol can train."""

    def fit(
        self,
        predictors: pd.DataFrame,
        outcomes: pd.DataFrame,
        config: WorkflowConfig | None = None,
    ) -> ModelFit:
        """Fit against encoded predictors and outcomes."""
        ...


class WorkflowStage(Protocol):
    """Protocol for fit stages.

    Each stage takes a Workflow, validates its own preconditions, performs
    its work, and returns a new Workflow. Stages never modify their input.
    """

    def execute(self, workflow: Workflow, data: pd.DataFrame | None = None) -> Workflow:
        """Execute the stage.

        Args:
            workflow: The current workflow.
            data: Training data, for stages that need it.

        Returns:
            The updated workflow.

        Raises:
            WorkflowError subclasses when preconditions are not met.
        """
        ...
