"""Fit stages implementing the WorkflowStage protocol.

Each stage validates its own preconditions, does one phase of the fit, and
returns a new Workflow.
"""

from __future__ import annotations

import logging
from dataclasses import replace

import pandas as pd

from ..core import FittableSpec, FormulaAction, RecipeAction, Workflow
from ..preprocessing import mold_formula, mold_recipe
from ..progress import FitStage, NullProgressReporter, ProgressReporter, ProgressUpdate
from .resolver import resolve_blueprint
from .validation import (
    validate_has_data,
    validate_has_model,
    validate_has_mold,
    validate_has_preprocessor,
    validate_is_workflow,
)

logger = logging.getLogger(__name__)


class PreprocessStage:
    """Runs the preprocessor against the training data.

    Resolves the blueprint, molds the data, and stores the mold. The action
    keeps its own blueprint; the one actually used is recorded on the mold.

    Sets on workflow: mold
    """

    def __init__(self, reporter: ProgressReporter | None = None) -> None:
        self._reporter = reporter or NullProgressReporter()

    def execute(self, workflow: Workflow, data: pd.DataFrame | None = None) -> Workflow:
        """Execute preprocessing stage."""
        validate_is_workflow(workflow)
        validate_has_preprocessor(workflow)
        validate_has_data(data)
        assert workflow.pre is not None
        assert data is not None

        self._reporter.report(
            ProgressUpdate(
                stage=FitStage.PREPROCESSING,
                progress=0.1,
                message=f"Preprocessing data with a {workflow.pre.kind}...",
            )
        )

        action = workflow.pre
        spec = workflow.model.spec if workflow.model is not None else None
        blueprint = resolve_blueprint(action, spec)

        match action:
            case FormulaAction():
                mold = mold_formula(action.formula, blueprint, data)
            case RecipeAction():
                mold = mold_recipe(action.recipe, blueprint, data)
            case _:
                raise TypeError(f"Unknown preprocessor action: {type(action).__name__}")

        logger.info(
            "Preprocessed %d rows into %d predictor and %d outcome columns",
            len(mold.predictors),
            mold.predictors.shape[1],
            mold.outcomes.shape[1],
        )
        return replace(workflow, mold=mold)


class ModelFitStage:
    """Fits the model specification against the mold.

    Sets on workflow: fit
    """

    def __init__(self, reporter: ProgressReporter | None = None) -> None:
        self._reporter = reporter or NullProgressReporter()

    def execute(self, workflow: Workflow, data: pd.DataFrame | None = None) -> Workflow:
        """Execute model fitting stage. ``data`` is unused; the mold holds it."""
        validate_is_workflow(workflow)
        validate_has_model(workflow)
        validate_has_mold(workflow)
        assert workflow.model is not None
        assert workflow.mold is not None

        spec: FittableSpec = workflow.model.spec
        name = getattr(spec, "model_type", type(spec).__name__)
        self._reporter.report(
            ProgressUpdate(
                stage=FitStage.MODEL_FITTING,
                progress=0.5,
                message=f"Fitting {name}...",
            )
        )

        model_fit = spec.fit(workflow.mold.predictors, workflow.mold.outcomes, workflow.config)
        return replace(workflow, fit=model_fit)


DEFAULT_STAGES = [PreprocessStage, ModelFitStage]
