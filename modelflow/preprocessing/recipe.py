"""Recipe preprocessing.

A recipe assigns outcome and predictor roles from a formula and holds an
ordered list of steps. Each step is an unfitted scikit-learn transformer
applied to a selection of columns. Prepping a recipe clones and fits every
step against training data; baking applies the fitted steps to any data.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np
import pandas as pd
from sklearn.base import clone
from sklearn.preprocessing import FunctionTransformer, OneHotEncoder, StandardScaler

from ..errors import FormulaError, RecipeError
from .formula import Formula, is_categorical, parse_formula

logger = logging.getLogger(__name__)

# Column selectors, resolved against the data each step sees
ALL_PREDICTORS = "all_predictors()"
ALL_NUMERIC_PREDICTORS = "all_numeric_predictors()"
ALL_NOMINAL_PREDICTORS = "all_nominal_predictors()"
_SELECTORS = {ALL_PREDICTORS, ALL_NUMERIC_PREDICTORS, ALL_NOMINAL_PREDICTORS}


@dataclass(frozen=True)
class RecipeStep:
    """An unfitted preprocessing step.

    Attributes:
        name: Step name, used in error messages and summaries.
        transformer: Unfitted scikit-learn transformer. It is cloned at prep time.
        columns: Column names and/or selectors the step applies to.
    """

    name: str
    transformer: Any
    columns: tuple[str, ...] = (ALL_PREDICTORS,)

    def resolve(self, data: pd.DataFrame, outcomes: Sequence[str]) -> list[str]:
        """Resolve selectors into concrete column names."""
        predictors = [str(c) for c in data.columns if str(c) not in outcomes]
        resolved: list[str] = []
        for column in self.columns:
            if column == ALL_PREDICTORS:
                candidates = predictors
            elif column == ALL_NUMERIC_PREDICTORS:
                candidates = [c for c in predictors if not is_categorical(data[c])]
            elif column == ALL_NOMINAL_PREDICTORS:
                candidates = [c for c in predictors if is_categorical(data[c])]
            elif column in data.columns:
                candidates = [column]
            else:
                raise RecipeError(
                    self.name,
                    f"column '{column}' not found. Available columns: {list(data.columns)}",
                )
            resolved.extend(c for c in candidates if c not in resolved)
        return resolved


@dataclass(frozen=True)
class Recipe:
    """An untrained recipe.

    Attributes:
        formula: The formula that assigned roles.
        outcomes: Columns with the outcome role.
        predictors: Columns with the predictor role.
        steps: Steps applied in order.
    """

    formula: Formula
    outcomes: tuple[str, ...]
    predictors: tuple[str, ...]
    steps: tuple[RecipeStep, ...] = ()

    def add_step(
        self,
        name: str,
        transformer: Any,
        columns: Sequence[str] | None = None,
    ) -> Recipe:
        """Return a new recipe with a step appended.

        Args:
            name: Step name.
            transformer: Unfitted scikit-learn transformer.
            columns: Columns or selectors. Defaults to all predictors.

        Returns:
            A new Recipe; this one is unchanged.
        """
        if not hasattr(transformer, "fit") or not hasattr(transformer, "transform"):
            raise TypeError(f"Step '{name}' needs an object with fit() and transform()")
        step = RecipeStep(name=name, transformer=transformer, columns=tuple(columns or (ALL_PREDICTORS,)))
        return replace(self, steps=self.steps + (step,))


def recipe(formula: str | Formula, data: pd.DataFrame) -> Recipe:
    """Create a recipe whose roles come from a formula and template data.

    Only plain column names and ``.`` are allowed in the formula; column
    transformations belong in steps.

    Raises:
        FormulaError: If the formula uses functions or unknown columns.
    """
    parsed = parse_formula(formula)
    columns = [str(c) for c in data.columns]

    for term in (*parsed.terms, *parsed.removed):
        if term is not None and not term.is_simple:
            raise FormulaError(
                parsed.expression,
                f"term '{term.label}' is not a plain column; use a recipe step instead",
            )

    missing = [c for c in parsed.outcomes if c not in columns]
    if missing:
        raise FormulaError(parsed.expression, f"outcome column(s) {missing} not found")

    predictors: list[str] = []
    for term in parsed.terms:
        names = [c for c in columns if c not in parsed.outcomes] if term is None else [term.label]
        for name in names:
            if name not in columns:
                raise FormulaError(parsed.expression, f"predictor column '{name}' not found")
            if name not in predictors:
                predictors.append(name)
    removed = {t.label for t in parsed.removed}
    predictors = [p for p in predictors if p not in removed]

    return Recipe(formula=parsed, outcomes=parsed.outcomes, predictors=tuple(predictors))


def _log(values: Any, base: float = np.e) -> Any:
    return np.log(values) / np.log(base)


def step_log(rec: Recipe, *columns: str, base: float = np.e) -> Recipe:
    """Log-transform columns (default: all numeric predictors)."""
    transformer = FunctionTransformer(_log, kw_args={"base": base}, feature_names_out="one-to-one")
    return rec.add_step("log", transformer, columns or (ALL_NUMERIC_PREDICTORS,))


def step_normalize(rec: Recipe, *columns: str) -> Recipe:
    """Center and scale columns (default: all numeric predictors)."""
    return rec.add_step("normalize", StandardScaler(), columns or (ALL_NUMERIC_PREDICTORS,))


def step_dummy(rec: Recipe, *columns: str, one_hot: bool = False) -> Recipe:
    """Convert nominal columns to indicator columns (default: all nominal predictors).

    Columns are named ``<column>_<level>``. The first level is dropped unless
    ``one_hot`` is set.
    """
    transformer = OneHotEncoder(
        drop=None if one_hot else "first",
        handle_unknown="ignore",
        sparse_output=False,
    )
    return rec.add_step("dummy", transformer, columns or (ALL_NOMINAL_PREDICTORS,))


@dataclass(frozen=True)
class FittedStep:
    """A step whose transformer has been fit."""

    name: str
    transformer: Any
    columns: tuple[str, ...]
    output_columns: tuple[str, ...]


@dataclass(frozen=True, eq=False)
class PreppedRecipe:
    """A recipe whose steps have been trained on a dataset.

    Attributes:
        recipe: The untrained recipe this was prepped from.
        steps: Fitted steps in order.
        predictors: Predictor columns after all steps.
        levels: Levels of nominal predictors in the training data.
    """

    recipe: Recipe
    steps: tuple[FittedStep, ...]
    predictors: tuple[str, ...]
    levels: dict[str, list[Any]] = field(default_factory=dict)

    @property
    def outcomes(self) -> tuple[str, ...]:
        return self.recipe.outcomes

    def novel_levels(self, new_data: pd.DataFrame) -> dict[str, list[Any]]:
        """Levels in new data that were not seen at prep time, per column."""
        novel: dict[str, list[Any]] = {}
        for column, levels in self.levels.items():
            if column not in new_data.columns:
                continue
            known = set(levels)
            unseen = [v for v in new_data[column].dropna().unique().tolist() if v not in known]
            if unseen:
                novel[column] = unseen
        return novel

    def bake(self, new_data: pd.DataFrame, outcomes: bool = True) -> pd.DataFrame:
        """Apply the fitted steps to data.

        Args:
            new_data: Data holding the original predictor columns (and the
                outcome columns when ``outcomes`` is set).
            outcomes: Whether outcome columns are present and kept.

        Returns:
            Processed DataFrame with predictor columns, then outcome columns.

        Raises:
            RecipeError: If required columns are missing or a step fails.
        """
        required = list(self.recipe.predictors)
        if outcomes:
            required += list(self.recipe.outcomes)
        missing = [c for c in required if c not in new_data.columns]
        if missing:
            raise RecipeError("bake", f"column(s) {missing} not found in new data")

        current = new_data.loc[:, required].copy()
        for step in self.steps:
            if not outcomes and set(step.columns) <= set(self.recipe.outcomes):
                continue
            absent = [c for c in step.columns if c not in current.columns]
            if absent:
                raise RecipeError(step.name, f"column(s) {absent} are not available")
            try:
                output = step.transformer.transform(current.loc[:, list(step.columns)])
            except Exception as e:
                raise RecipeError(step.name, str(e)) from e
            current = _replace_columns(current, list(step.columns), output, list(step.output_columns))

        columns = list(self.predictors)
        if outcomes:
            columns += list(self.recipe.outcomes)
        return current.loc[:, columns]


def prep(rec: Recipe, training: pd.DataFrame) -> PreppedRecipe:
    """Train every step of a recipe on training data.

    Args:
        rec: The recipe to prep. It is not modified.
        training: Training DataFrame with predictor and outcome columns.

    Returns:
        The PreppedRecipe.

    Raises:
        RecipeError: If columns are missing or a step fails to fit.
    """
    required = list(rec.predictors) + list(rec.outcomes)
    missing = [c for c in required if c not in training.columns]
    if missing:
        raise RecipeError("prep", f"column(s) {missing} not found in training data")

    current = training.loc[:, required].copy()
    levels = {
        c: sorted(current[c].dropna().unique().tolist(), key=str)
        for c in rec.predictors
        if is_categorical(current[c])
    }

    fitted: list[FittedStep] = []
    for step in rec.steps:
        columns = step.resolve(current, rec.outcomes)
        if not columns:
            logger.debug("Recipe step '%s' selected no columns; skipping", step.name)
            continue
        transformer = clone(step.transformer)
        try:
            output = transformer.fit_transform(current.loc[:, columns])
            output_columns = _output_names(transformer, columns, output)
        except Exception as e:
            raise RecipeError(step.name, str(e)) from e
        current = _replace_columns(current, columns, output, output_columns)
        fitted.append(
            FittedStep(
                name=step.name,
                transformer=transformer,
                columns=tuple(columns),
                output_columns=tuple(output_columns),
            )
        )

    predictors = tuple(str(c) for c in current.columns if str(c) not in rec.outcomes)
    logger.debug("Prepped recipe with %d step(s); %d predictor(s)", len(fitted), len(predictors))
    return PreppedRecipe(recipe=rec, steps=tuple(fitted), predictors=predictors, levels=levels)


def _output_names(transformer: Any, columns: list[str], output: Any) -> list[str]:
    width = np.asarray(output).shape[1] if np.ndim(output) == 2 else 1
    if hasattr(transformer, "get_feature_names_out"):
        try:
            names = [str(n) for n in transformer.get_feature_names_out(columns)]
            if len(names) == width:
                return names
        except Exception:
            # Transformers without feature-name support fall back to positional names
            pass
    if width == len(columns):
        return list(columns)
    return [f"{columns[0]}_{i + 1}" for i in range(width)]


def _replace_columns(
    current: pd.DataFrame,
    columns: list[str],
    output: Any,
    output_columns: list[str],
) -> pd.DataFrame:
    values = output.toarray() if hasattr(output, "toarray") else np.asarray(output)
    if values.ndim == 1:
        values = values.reshape(-1, 1)
    frame = pd.DataFrame(values, columns=output_columns, index=current.index)

    if output_columns == columns:
        result = current.copy()
        for column in columns:
            result[column] = frame[column]
        return result

    remaining = current.drop(columns=columns)
    return pd.concat([remaining, frame], axis=1)
