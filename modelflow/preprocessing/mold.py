"""Molding: running a preprocessor against data to get model-ready tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..errors import RecipeError
from .blueprint import Blueprint, FormulaBlueprint, RecipeBlueprint
from .formula import INTERCEPT_COLUMN, Formula, FormulaProcessor
from .recipe import PreppedRecipe, Recipe, prep

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Mold:
    """The preprocessing artifact produced by a successful preprocessing phase.

    Attributes:
        predictors: Encoded predictors table.
        outcomes: Outcomes table.
        blueprint: The blueprint used to produce the tables.
        processor: Fitted state used to forge new data: a FormulaProcessor
            for formulas, a PreppedRecipe for recipes.
    """

    predictors: pd.DataFrame
    outcomes: pd.DataFrame
    blueprint: Blueprint
    processor: FormulaProcessor | PreppedRecipe

    @property
    def prepped_recipe(self) -> PreppedRecipe | None:
        """The trained recipe, or None for formula preprocessing."""
        if isinstance(self.processor, PreppedRecipe):
            return self.processor
        return None

    def forge(
        self,
        new_data: pd.DataFrame,
        outcomes: bool = False,
    ) -> tuple[pd.DataFrame, pd.DataFrame | None]:
        """Encode new data exactly like the training data.

        Args:
            new_data: New data with the original predictor columns.
            outcomes: Whether to also return the outcome columns.

        Returns:
            Tuple of (predictors, outcomes). outcomes is None if not requested.

        Raises:
            FormulaError: For formula preprocessing with missing columns or
                disallowed novel levels.
            RecipeError: For recipe preprocessing with missing columns, failing
                steps, or disallowed novel levels.
        """
        match self.processor:
            case FormulaProcessor() as processor:
                return processor.transform(new_data, outcomes=outcomes)
            case PreppedRecipe() as prepped:
                if not self.blueprint.allow_novel_levels:
                    novel = prepped.novel_levels(new_data)
                    if novel:
                        raise RecipeError("forge", f"novel levels in new data: {novel}")
                baked = prepped.bake(new_data, outcomes=outcomes)
                predictors = _add_intercept(baked.loc[:, list(prepped.predictors)], self.blueprint)
                outcome_frame = baked.loc[:, list(prepped.outcomes)] if outcomes else None
                return predictors, outcome_frame
            case _:
                raise TypeError(f"Unknown processor type: {type(self.processor).__name__}")


def mold_formula(formula: str | Formula, blueprint: FormulaBlueprint, data: pd.DataFrame) -> Mold:
    """Mold data with a formula."""
    processor = FormulaProcessor(formula, blueprint)
    predictors, outcomes = processor.fit_transform(data)
    return Mold(predictors=predictors, outcomes=outcomes, blueprint=blueprint, processor=processor)


def mold_recipe(rec: Recipe, blueprint: RecipeBlueprint, data: pd.DataFrame) -> Mold:
    """Mold data with a recipe, prepping it first."""
    prepped = prep(rec, data)
    baked = prepped.bake(data, outcomes=True)
    predictors = _add_intercept(baked.loc[:, list(prepped.predictors)], blueprint)
    outcomes = baked.loc[:, list(prepped.outcomes)]
    return Mold(predictors=predictors, outcomes=outcomes, blueprint=blueprint, processor=prepped)


def _add_intercept(predictors: pd.DataFrame, blueprint: Blueprint) -> pd.DataFrame:
    if not blueprint.intercept or INTERCEPT_COLUMN in predictors.columns:
        return predictors
    result = predictors.copy()
    result.insert(0, INTERCEPT_COLUMN, np.ones(len(result)))
    return result
