"""Data preprocessing for workflows.

This module provides the two preprocessor kinds (formulas and recipes), the
blueprints that control their encoding, and the Mold artifact they produce.
"""

from __future__ import annotations

from .blueprint import (
    Blueprint,
    FormulaBlueprint,
    RecipeBlueprint,
    default_formula_blueprint,
    default_recipe_blueprint,
)
from .formula import INTERCEPT_COLUMN, Formula, FormulaProcessor, parse_formula
from .mold import Mold, mold_formula, mold_recipe
from .recipe import (
    ALL_NOMINAL_PREDICTORS,
    ALL_NUMERIC_PREDICTORS,
    ALL_PREDICTORS,
    PreppedRecipe,
    Recipe,
    RecipeStep,
    prep,
    recipe,
    step_dummy,
    step_log,
    step_normalize,
)

__all__ = [
    # Blueprints
    "Blueprint",
    "FormulaBlueprint",
    "RecipeBlueprint",
    "default_formula_blueprint",
    "default_recipe_blueprint",
    # Formulas
    "Formula",
    "FormulaProcessor",
    "INTERCEPT_COLUMN",
    "parse_formula",
    # Recipes
    "Recipe",
    "RecipeStep",
    "PreppedRecipe",
    "recipe",
    "prep",
    "step_log",
    "step_normalize",
    "step_dummy",
    "ALL_PREDICTORS",
    "ALL_NUMERIC_PREDICTORS",
    "ALL_NOMINAL_PREDICTORS",
    # Molding
    "Mold",
    "mold_formula",
    "mold_recipe",
]
