"""Core types and protocols for modelflow.

This module contains the workflow state types and the protocols used
throughout the library.
"""

from __future__ import annotations

from .protocols import FittableSpec, SupportsEncoding, WorkflowStage
from .types import (
    FormulaAction,
    ModelAction,
    PreprocessorAction,
    RecipeAction,
    Workflow,
)

__all__ = [
    # Types
    "Workflow",
    "FormulaAction",
    "RecipeAction",
    "PreprocessorAction",
    "ModelAction",
    # Protocols
    "SupportsEncoding",
    "FittableSpec",
    "WorkflowStage",
]
