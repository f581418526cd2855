"""modelflow: preprocess-then-fit model workflows.

A workflow binds a preprocessor (a formula or a recipe) to a model
specification, fits both in order, and keeps every intermediate artifact
available for inspection.

Example usage:
    from modelflow import add_formula, add_model, fit, predict, rand_forest, workflow

    wf = workflow()
    wf = add_formula(wf, "Sepal.Length ~ .")
    wf = add_model(wf, rand_forest(mode="regression", engine="sklearn"))

    fitted = fit(wf, iris, on_progress=lambda u: print(f"{u.progress:.0%} - {u.message}"))
    predictions = predict(fitted, new_iris)

    # Save and load
    save_workflow(fitted, "workflow.pkl")
    fitted = load_workflow("workflow.pkl")
"""

from __future__ import annotations

# Configuration
from .config import DuplicatePolicy, Mode, WorkflowConfig, WorkflowConfigBuilder

# Types (from core module)
from .core import FormulaAction, ModelAction, RecipeAction, Workflow, WorkflowStage

# Errors
from .errors import (
    ArtifactNotFoundError,
    DuplicateActionError,
    DuplicateModelError,
    DuplicatePreprocessorError,
    EngineError,
    FormulaError,
    MissingArtifactError,
    MissingDataError,
    MissingModelError,
    MissingPreprocessorError,
    NotFittedError,
    NotPresentError,
    RecipeError,
    WorkflowError,
    WrongPreprocessorKindError,
)

# Saving and loading
from .inference import WorkflowArtifact, load_artifact, load_workflow, save_workflow

# Models
from .models import (
    EncodingInfo,
    ModelFit,
    ModelSpec,
    boost_tree,
    decision_tree,
    linear_reg,
    logistic_reg,
    nearest_neighbor,
    rand_forest,
    set_args,
    set_engine,
    set_mode,
)

# Preprocessing
from .preprocessing import (
    FormulaBlueprint,
    Mold,
    PreppedRecipe,
    Recipe,
    RecipeBlueprint,
    default_formula_blueprint,
    default_recipe_blueprint,
    recipe,
    step_dummy,
    step_log,
    step_normalize,
)

# Progress
from .progress import (
    CallbackProgressReporter,
    FitStage,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    ProgressUpdate,
)

# Workflows
from .workflow import (
    add_formula,
    add_model,
    add_preprocessor,
    add_recipe,
    fit,
    fit_model,
    fit_pre,
    has_artifact,
    has_fit,
    has_model,
    has_mold,
    has_preprocessor,
    has_preprocessor_formula,
    has_preprocessor_recipe,
    is_trained_workflow,
    predict,
    pull_workflow_fit,
    pull_workflow_mold,
    pull_workflow_prepped_recipe,
    pull_workflow_preprocessor,
    pull_workflow_spec,
    remove_model,
    remove_preprocessor,
    resolve_blueprint,
    update_formula,
    update_model,
    update_recipe,
    workflow,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Configuration
    "WorkflowConfig",
    "WorkflowConfigBuilder",
    "DuplicatePolicy",
    "Mode",
    # Types (from core)
    "Workflow",
    "FormulaAction",
    "RecipeAction",
    "ModelAction",
    "WorkflowStage",
    # Workflows
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
    "has_preprocessor_formula",
    "has_preprocessor_recipe",
    "has_preprocessor",
    "has_model",
    "has_mold",
    "has_artifact",
    "has_fit",
    "is_trained_workflow",
    "resolve_blueprint",
    "fit_pre",
    "fit_model",
    "fit",
    "predict",
    "pull_workflow_preprocessor",
    "pull_workflow_spec",
    "pull_workflow_fit",
    "pull_workflow_mold",
    "pull_workflow_prepped_recipe",
    # Preprocessing
    "FormulaBlueprint",
    "RecipeBlueprint",
    "default_formula_blueprint",
    "default_recipe_blueprint",
    "Recipe",
    "PreppedRecipe",
    "recipe",
    "step_log",
    "step_normalize",
    "step_dummy",
    "Mold",
    # Models
    "ModelSpec",
    "ModelFit",
    "EncodingInfo",
    "linear_reg",
    "logistic_reg",
    "decision_tree",
    "rand_forest",
    "boost_tree",
    "nearest_neighbor",
    "set_engine",
    "set_mode",
    "set_args",
    # Saving and loading
    "WorkflowArtifact",
    "save_workflow",
    "load_artifact",
    "load_workflow",
    # Progress
    "FitStage",
    "ProgressUpdate",
    "ProgressCallback",
    "ProgressReporter",
    "CallbackProgressReporter",
    "NullProgressReporter",
    # Errors
    "WorkflowError",
    "DuplicateActionError",
    "DuplicatePreprocessorError",
    "DuplicateModelError",
    "MissingPreprocessorError",
    "MissingModelError",
    "MissingDataError",
    "MissingArtifactError",
    "WrongPreprocessorKindError",
    "NotPresentError",
    "FormulaError",
    "RecipeError",
    "EngineError",
    "NotFittedError",
    "ArtifactNotFoundError",
]
