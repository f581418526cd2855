"""Blueprints describing how raw data is encoded into model-ready columns."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FormulaBlueprint:
    """Encoding options for formula preprocessing.

    Attributes:
        intercept: Whether to add an ``(Intercept)`` column of ones. When set,
            indicator expansion drops the first level of each categorical column.
        allow_novel_levels: Whether unseen categorical levels are tolerated when
            new data is forged. Novel levels encode as all-zero indicators.
        indicators: Whether categorical predictors are expanded into one
            indicator column per level. When False they stay single columns
            with pandas ``category`` dtype.
    """

    intercept: bool = False
    allow_novel_levels: bool = False
    indicators: bool = True


@dataclass(frozen=True)
class RecipeBlueprint:
    """Encoding options for recipe preprocessing.

    Recipes define their own encoding through their steps, so there is no
    ``indicators`` option here.

    Attributes:
        intercept: Whether to add an ``(Intercept)`` column of ones.
        allow_novel_levels: Whether unseen categorical levels are tolerated.
    """

    intercept: bool = False
    allow_novel_levels: bool = False


Blueprint = FormulaBlueprint | RecipeBlueprint


def default_formula_blueprint(
    intercept: bool = False,
    allow_novel_levels: bool = False,
    indicators: bool = True,
) -> FormulaBlueprint:
    """Create a formula blueprint."""
    return FormulaBlueprint(
        intercept=intercept,
        allow_novel_levels=allow_novel_levels,
        indicators=indicators,
    )


def default_recipe_blueprint(
    intercept: bool = False,
    allow_novel_levels: bool = False,
) -> RecipeBlueprint:
    """Create a recipe blueprint."""
    return RecipeBlueprint(
        intercept=intercept,
        allow_novel_levels=allow_novel_levels,
    )
