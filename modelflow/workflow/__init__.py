"""Workflow construction, fitting, and extraction.

This module provides the functions that build a workflow, the two-phase fit
protocol, and the extractors for its elements.
"""

from __future__ import annotations

from .fit import WorkflowFitter, fit, fit_model, fit_pre, predict
from .pull import (
    pull_workflow_fit,
    pull_workflow_mold,
    pull_workflow_prepped_recipe,
    pull_workflow_preprocessor,
    pull_workflow_spec,
)
from .resolver import resolve_blueprint
from .stages import DEFAULT_STAGES, ModelFitStage, PreprocessStage
from .state import (
    add_formula,
    add_model,
    add_preprocessor,
    add_recipe,
    remove_model,
    remove_preprocessor,
    update_formula,
    update_model,
    update_recipe,
    workflow,
)
from .validation import (
    has_artifact,
    has_fit,
    has_mold,
    has_model,
    has_preprocessor,
    has_preprocessor_formula,
    has_preprocessor_recipe,
    is_trained_workflow,
    validate_has_data,
    validate_has_fit,
    validate_has_model,
    validate_has_mold,
    validate_has_preprocessor,
    validate_is_workflow,
)

__all__ = [
    # Construction
    "workflow",
    "add_preprocessor",
    "add_formula",
    "add_recipe",
    "add_model",
    "remove_preprocessor",
    "remove_model",
    "update_formula",
    "update_recipe",
    "update_model",
    # Predicates
    "has_preprocessor_formula",
    "has_preprocessor_recipe",
    "has_preprocessor",
    "has_model",
    "has_mold",
    "has_artifact",
    "has_fit",
    "is_trained_workflow",
    # Validation
    "validate_is_workflow",
    "validate_has_preprocessor",
    "validate_has_model",
    "validate_has_data",
    "validate_has_mold",
    "validate_has_fit",
    # Fitting
    "resolve_blueprint",
    "PreprocessStage",
    "ModelFitStage",
    "DEFAULT_STAGES",
    "WorkflowFitter",
    "fit_pre",
    "fit_model",
    "fit",
    "predict",
    # Extractors
    "pull_workflow_preprocessor",
    "pull_workflow_spec",
    "pull_workflow_fit",
    "pull_workflow_mold",
    "pull_workflow_prepped_recipe",
]
