"""Workflow state types.

A Workflow is an immutable value. Every operation that changes a workflow
returns a new instance built with ``dataclasses.replace``, so a template
workflow and the fitted workflows derived from it never share mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from ..config import WorkflowConfig

if TYPE_CHECKING:
    from ..models import ModelFit, ModelSpec
    from ..preprocessing import Formula, FormulaBlueprint, Mold, Recipe, RecipeBlueprint


@dataclass(frozen=True)
class FormulaAction:
    """Formula preprocessor attached to a workflow.

    Attributes:
        formula: The parsed formula.
        blueprint: Encoding options. Never changed by fitting; the blueprint
            resolved for the model is stored on the mold.
        blueprint_supplied: Whether the caller passed the blueprint explicitly.
    """

    formula: Formula
    blueprint: FormulaBlueprint
    blueprint_supplied: bool = False

    kind: ClassVar[str] = "formula"


@dataclass(frozen=True)
class RecipeAction:
    """Recipe preprocessor attached to a workflow."""

    recipe: Recipe
    blueprint: RecipeBlueprint
    blueprint_supplied: bool = False

    kind: ClassVar[str] = "recipe"


PreprocessorAction = FormulaAction | RecipeAction


@dataclass(frozen=True)
class ModelAction:
    """Model specification attached to a workflow."""

    spec: ModelSpec
    role: str = "model"


@dataclass(frozen=True)
class Workflow:
    """A preprocessor bound to a model, plus the artifacts of fitting them.

    Attributes:
        pre: Preprocessor action, if any.
        model: Model action, if any.
        mold: Preprocessing artifact, present after a successful ``fit_pre()``.
        fit: Model fit, present after a successful ``fit_model()``.
        config: Workflow configuration.
    """

    pre: PreprocessorAction | None = None
    model: ModelAction | None = None
    mold: Mold | None = None
    fit: ModelFit | None = None
    config: WorkflowConfig = field(default_factory=WorkflowConfig)

    def __post_init__(self) -> None:
        """Reject states the fit protocol cannot produce."""
        if self.mold is not None and self.pre is None:
            raise ValueError("A workflow with a mold must have a preprocessor")
        if self.fit is not None and (self.mold is None or self.model is None):
            raise ValueError("A workflow with a model fit must have a mold and a model")
