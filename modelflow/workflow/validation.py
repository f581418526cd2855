"""Stage predicates and precondition checks.

The ``has_*`` predicates are pure and never raise. The ``validate_*``
functions are consulted by every operation that mutates, fits, or extracts
from a workflow, and raise the typed error for the first unmet precondition.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from ..core import FormulaAction, RecipeAction, Workflow
from ..errors import (
    MissingArtifactError,
    MissingDataError,
    MissingModelError,
    MissingPreprocessorError,
    NotFittedError,
)


def has_preprocessor_formula(x: Workflow) -> bool:
    return isinstance(x.pre, FormulaAction)


def has_preprocessor_recipe(x: Workflow) -> bool:
    return isinstance(x.pre, RecipeAction)


def has_preprocessor(x: Workflow) -> bool:
    return x.pre is not None


def has_model(x: Workflow) -> bool:
    return x.model is not None


def has_mold(x: Workflow) -> bool:
    return x.mold is not None


# The mold is the preprocessing artifact
has_artifact = has_mold


def has_fit(x: Workflow) -> bool:
    return x.fit is not None


def is_trained_workflow(x: Workflow) -> bool:
    """Whether both fit phases have completed."""
    return has_mold(x) and has_fit(x)


def validate_is_workflow(x: Any) -> None:
    if not isinstance(x, Workflow):
        raise TypeError(f"Expected a Workflow, got {type(x).__name__}")


def validate_has_preprocessor(x: Workflow) -> None:
    if not has_preprocessor(x):
        raise MissingPreprocessorError()


def validate_has_model(x: Workflow) -> None:
    if not has_model(x):
        raise MissingModelError()


def validate_has_data(data: Any) -> None:
    """Check that a usable training dataset was passed.

    Raises:
        MissingDataError: If ``data`` is None or has no rows.
        TypeError: If ``data`` is not a DataFrame.
    """
    if data is None:
        raise MissingDataError()
    if not isinstance(data, pd.DataFrame):
        raise TypeError(f"`data` must be a pandas DataFrame, got {type(data).__name__}")
    if len(data) == 0:
        raise MissingDataError("`data` has no rows.")


def validate_has_mold(x: Workflow) -> None:
    if not has_mold(x):
        raise MissingArtifactError()


def validate_has_fit(x: Workflow) -> None:
    if not is_trained_workflow(x):
        raise NotFittedError()
