"""Building workflows.

Every function here returns a new Workflow and leaves its input untouched.
Changing the preprocessor invalidates the mold and the model fit; changing
the model invalidates only the model fit.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..config import DuplicatePolicy, WorkflowConfig
from ..core import FormulaAction, ModelAction, PreprocessorAction, RecipeAction, Workflow
from ..errors import DuplicateModelError, DuplicatePreprocessorError
from ..models import ModelSpec
from ..preprocessing import (
    Formula,
    FormulaBlueprint,
    Recipe,
    RecipeBlueprint,
    default_formula_blueprint,
    default_recipe_blueprint,
    parse_formula,
)
from .validation import validate_is_workflow

logger = logging.getLogger(__name__)


def workflow(config: WorkflowConfig | None = None) -> Workflow:
    """Create an empty workflow."""
    return Workflow(config=config or WorkflowConfig())


def add_preprocessor(
    x: Workflow,
    action: PreprocessorAction,
    overwrite: bool = False,
) -> Workflow:
    """Attach a preprocessor action.

    A preprocessor of a different kind is never replaced silently. One of the
    same kind is replaced unless the workflow's duplicate policy is ERROR.
    ``overwrite=True`` always replaces.

    Raises:
        DuplicatePreprocessorError: If a preprocessor already exists and may
            not be replaced.
    """
    validate_is_workflow(x)
    if not isinstance(action, FormulaAction | RecipeAction):
        raise TypeError(f"Expected a preprocessor action, got {type(action).__name__}")

    if x.pre is not None and not overwrite:
        if x.pre.kind != action.kind or x.config.duplicate_policy is DuplicatePolicy.ERROR:
            raise DuplicatePreprocessorError(action.kind, x.pre.kind)

    if x.pre is not None:
        logger.debug("Replacing %s preprocessor with %s", x.pre.kind, action.kind)
    return replace(x, pre=action, mold=None, fit=None)


def add_formula(
    x: Workflow,
    formula: str | Formula,
    blueprint: FormulaBlueprint | None = None,
    overwrite: bool = False,
) -> Workflow:
    """Attach a formula preprocessor.

    Args:
        x: The workflow.
        formula: Formula text such as ``"mpg ~ cyl"``.
        blueprint: Encoding options. When omitted, the default blueprint is
            used and may be adjusted to the model's encoding preference at
            fit time. A supplied blueprint is never adjusted.
        overwrite: Replace an existing preprocessor of any kind.

    Returns:
        The new workflow.

    Raises:
        FormulaError: If the formula cannot be parsed.
        DuplicatePreprocessorError: See ``add_preprocessor()``.
    """
    if blueprint is not None and not isinstance(blueprint, FormulaBlueprint):
        raise TypeError(f"blueprint must be a FormulaBlueprint, got {type(blueprint).__name__}")

    action = FormulaAction(
        formula=parse_formula(formula),
        blueprint=blueprint if blueprint is not None else default_formula_blueprint(),
        blueprint_supplied=blueprint is not None,
    )
    return add_preprocessor(x, action, overwrite=overwrite)


def add_recipe(
    x: Workflow,
    recipe: Recipe,
    blueprint: RecipeBlueprint | None = None,
    overwrite: bool = False,
) -> Workflow:
    """Attach a recipe preprocessor.

    Raises:
        DuplicatePreprocessorError: See ``add_preprocessor()``.
    """
    if not isinstance(recipe, Recipe):
        raise TypeError(f"recipe must be a Recipe, got {type(recipe).__name__}")
    if blueprint is not None and not isinstance(blueprint, RecipeBlueprint):
        raise TypeError(f"blueprint must be a RecipeBlueprint, got {type(blueprint).__name__}")

    action = RecipeAction(
        recipe=recipe,
        blueprint=blueprint if blueprint is not None else default_recipe_blueprint(),
        blueprint_supplied=blueprint is not None,
    )
    return add_preprocessor(x, action, overwrite=overwrite)


def add_model(
    x: Workflow,
    spec: ModelSpec,
    role: str = "model",
    overwrite: bool = False,
) -> Workflow:
    """Attach a model specification.

    The mold survives because it only depends on the preprocessor.

    Raises:
        DuplicateModelError: If a model exists, the duplicate policy is ERROR,
            and ``overwrite`` is not set.
    """
    validate_is_workflow(x)
    if not (hasattr(spec, "fit") and hasattr(spec, "required_encoding")):
        raise TypeError(f"Expected a model specification, got {type(spec).__name__}")

    if x.model is not None and not overwrite:
        if x.config.duplicate_policy is DuplicatePolicy.ERROR:
            raise DuplicateModelError()

    return replace(x, model=ModelAction(spec=spec, role=role), fit=None)


def remove_preprocessor(x: Workflow) -> Workflow:
    """Detach the preprocessor, dropping the mold and the model fit."""
    validate_is_workflow(x)
    if x.pre is None:
        logger.warning("The workflow has no preprocessor to remove")
    return replace(x, pre=None, mold=None, fit=None)


def remove_model(x: Workflow) -> Workflow:
    """Detach the model, dropping the model fit."""
    validate_is_workflow(x)
    if x.model is None:
        logger.warning("The workflow has no model to remove")
    return replace(x, model=None, fit=None)


def update_formula(
    x: Workflow,
    formula: str | Formula,
    blueprint: FormulaBlueprint | None = None,
) -> Workflow:
    """Replace the preprocessor with a formula."""
    return add_formula(x, formula, blueprint=blueprint, overwrite=True)


def update_recipe(
    x: Workflow,
    recipe: Recipe,
    blueprint: RecipeBlueprint | None = None,
) -> Workflow:
    """Replace the preprocessor with a recipe."""
    return add_recipe(x, recipe, blueprint=blueprint, overwrite=True)


def update_model(x: Workflow, spec: ModelSpec, role: str = "model") -> Workflow:
    """Replace the model specification."""
    return add_model(x, spec, role=role, overwrite=True)
