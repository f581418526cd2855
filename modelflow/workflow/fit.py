"""Fitting and predicting with workflows.

``fit()`` runs the two fit phases in order:
1. PreprocessStage - resolves the blueprint and molds the training data
2. ModelFitStage - fits the model specification against the mold

Usage:
    fitted = fit(wf, data, on_progress=lambda u: print(u.message))
    predictions = predict(fitted, new_data)
"""

from __future__ import annotations

import logging
import time

import pandas as pd

from ..core import Workflow
from ..progress import (
    CallbackProgressReporter,
    FitStage,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    ProgressUpdate,
)
from .stages import DEFAULT_STAGES, ModelFitStage, PreprocessStage
from .validation import (
    validate_has_data,
    validate_has_fit,
    validate_has_model,
    validate_has_preprocessor,
    validate_is_workflow,
)

logger = logging.getLogger(__name__)


class WorkflowFitter:
    """Runs the fit stages over a workflow and reports progress."""

    def __init__(self, progress_callback: ProgressCallback | None = None) -> None:
        self._reporter: ProgressReporter = (
            CallbackProgressReporter(progress_callback)
            if progress_callback
            else NullProgressReporter()
        )
        self._stages = [stage(self._reporter) for stage in DEFAULT_STAGES]

    def fit(self, workflow: Workflow, data: pd.DataFrame | None) -> Workflow:
        """Fit both phases.

        Every precondition of both phases is checked before any work starts,
        so a workflow that cannot be fit fails without preprocessing anything.

        Raises:
            MissingDataError: If ``data`` is None or empty.
            MissingPreprocessorError: If there is no formula or recipe.
            MissingModelError: If there is no model.
        """
        start_time = time.time()

        try:
            validate_is_workflow(workflow)
            validate_has_data(data)
            validate_has_preprocessor(workflow)
            validate_has_model(workflow)

            for stage in self._stages:
                workflow = stage.execute(workflow, data)

            elapsed = time.time() - start_time
            logger.info("Workflow fit in %.3fs", elapsed)
            self._report(FitStage.COMPLETE, 1.0, "Fit complete!")
            return workflow

        except Exception as e:
            self._report(FitStage.FAILED, 0.0, f"Fit failed: {e}")
            raise

    def _report(self, stage: FitStage, progress: float, message: str) -> None:
        """Report progress."""
        self._reporter.report(
            ProgressUpdate(
                stage=stage,
                progress=progress,
                message=message,
            )
        )


def fit_pre(x: Workflow, data: pd.DataFrame | None) -> Workflow:
    """Run only the preprocessing phase.

    The model, when present, is consulted for its encoding preference but is
    not fit. Any previous model fit is left in place.

    Raises:
        MissingPreprocessorError: If there is no formula or recipe.
        MissingDataError: If ``data`` is None or empty.
    """
    return PreprocessStage().execute(x, data)


def fit_model(x: Workflow) -> Workflow:
    """Run only the model fitting phase against an existing mold.

    Raises:
        MissingModelError: If there is no model.
        MissingArtifactError: If ``fit_pre()`` has not run.
    """
    return ModelFitStage().execute(x)


def fit(
    x: Workflow,
    data: pd.DataFrame | None = None,
    on_progress: ProgressCallback | None = None,
) -> Workflow:
    """Fit a workflow.

    Equivalent to ``fit_model(fit_pre(x, data))``.

    Args:
        x: The workflow, with a preprocessor and a model.
        data: Training data.
        on_progress: Optional callback receiving ProgressUpdate objects.

    Returns:
        A new, trained workflow. ``x`` is not modified.
    """
    return WorkflowFitter(on_progress).fit(x, data)


def predict(x: Workflow, new_data: pd.DataFrame, type: str | None = None) -> pd.DataFrame:
    """Predict on new data with a trained workflow.

    New data is forged through the stored mold, so it gets exactly the
    encoding the model was trained on.

    Args:
        x: A trained workflow.
        new_data: Data with the original predictor columns.
        type: ``None`` for ``.pred`` / ``.pred_class`` columns, or ``"prob"``
            for class probabilities.

    Returns:
        DataFrame of predictions indexed like ``new_data``.

    Raises:
        NotFittedError: If the workflow has not been fit.
    """
    validate_is_workflow(x)
    validate_has_fit(x)
    assert x.mold is not None
    assert x.fit is not None

    predictors, _ = x.mold.forge(new_data)
    if type is None:
        return x.fit.predict(predictors)
    if type == "prob":
        return x.fit.predict_proba(predictors)
    raise ValueError(f"Unknown prediction type: {type}")
