"""Extract elements of a workflow.

Each extractor raises if the element does not exist yet rather than
returning None.
"""

from __future__ import annotations

from ..core import FormulaAction, Workflow
from ..errors import NotPresentError, WrongPreprocessorKindError
from ..models import ModelFit, ModelSpec
from ..preprocessing import Formula, Mold, PreppedRecipe, Recipe
from .validation import has_preprocessor_recipe, validate_is_workflow

_FIT_HINT = "Have you called `fit()` yet?"


def pull_workflow_preprocessor(x: Workflow) -> Formula | Recipe:
    """Return the formula or recipe used for preprocessing."""
    validate_is_workflow(x)
    if x.pre is None:
        raise NotPresentError("preprocessor")
    if isinstance(x.pre, FormulaAction):
        return x.pre.formula
    return x.pre.recipe


def pull_workflow_spec(x: Workflow) -> ModelSpec:
    """Return the model specification as it was added, before fitting."""
    validate_is_workflow(x)
    if x.model is None:
        raise NotPresentError("model spec")
    return x.model.spec


def pull_workflow_fit(x: Workflow) -> ModelFit:
    validate_is_workflow(x)
    if x.fit is None:
        raise NotPresentError("model fit", _FIT_HINT)
    return x.fit


def pull_workflow_mold(x: Workflow) -> Mold:
    """Return the mold, with the predictors, outcomes, and fitted preprocessor."""
    validate_is_workflow(x)
    if x.mold is None:
        raise NotPresentError("mold", _FIT_HINT)
    return x.mold


def pull_workflow_prepped_recipe(x: Workflow) -> PreppedRecipe:
    """Return the trained recipe stored in the mold.

    Raises:
        WrongPreprocessorKindError: If the preprocessor is not a recipe.
        NotPresentError: If the workflow has not been fit.
    """
    validate_is_workflow(x)
    if not has_preprocessor_recipe(x):
        raise WrongPreprocessorKindError("recipe", x.pre.kind if x.pre is not None else None)

    mold = pull_workflow_mold(x)
    assert mold.prepped_recipe is not None
    return mold.prepped_recipe
