"""Model specifications and fitted models."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np
import pandas as pd

from ..config import Mode, WorkflowConfig
from ..errors import EngineError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodingInfo:
    """How an engine wants its predictors encoded.

    Attributes:
        indicators: Whether categorical predictors must be expanded into
            indicator columns. False means the engine consumes categorical
            columns directly.
    """

    indicators: bool


@dataclass(frozen=True)
class EngineInfo:
    """Registry entry describing how one engine fits one model type.

    Attributes:
        model_type: Model family the engine serves.
        engine: Engine name.
        estimators: Estimator class per supported mode.
        encoding: Encoding preference of the engine.
        arg_map: Main argument name to engine parameter name, or to a
            (parameter name, converter) pair.
        default_params: Parameters passed unless overridden.
        package: Import name of the library that provides the estimators.
    """

    model_type: str
    engine: str
    estimators: dict[Mode, Any]
    encoding: EncodingInfo
    arg_map: dict[str, Any] = field(default_factory=dict)
    default_params: dict[str, Any] = field(default_factory=dict)
    package: str = "sklearn"

    @property
    def modes(self) -> list[Mode]:
        return list(self.estimators)


@dataclass(frozen=True)
class ModelSpec:
    """An untrained, engine-tagged description of a model.

    Attributes:
        model_type: Model family, e.g. ``"linear_reg"`` or ``"rand_forest"``.
        mode: Regression, classification, or unknown (not yet set).
        engine: Backend that fits the model, or None if not yet set.
        args: Main arguments in engine-independent names (``trees``, ``min_n``, ...).
        engine_args: Extra keyword arguments passed to the engine as-is.
    """

    model_type: str
    mode: Mode = Mode.UNKNOWN
    engine: str | None = None
    args: dict[str, Any] = field(default_factory=dict)
    engine_args: dict[str, Any] = field(default_factory=dict)

    def required_encoding(self) -> EncodingInfo | None:
        """Encoding preference of this model/engine combination.

        Returns:
            The EncodingInfo, or None if the engine is not set or unknown.
        """
        from .registry import get_engine

        if self.engine is None:
            return None
        try:
            info = get_engine(self.model_type, self.engine)
        except EngineError:
            logger.warning(
                "No encoding information for %s engine '%s'", self.model_type, self.engine
            )
            return None
        return info.encoding

    def fit(
        self,
        predictors: pd.DataFrame,
        outcomes: pd.DataFrame,
        config: WorkflowConfig | None = None,
    ) -> ModelFit:
        """Fit the engine against encoded predictors and outcomes.

        Args:
            predictors: Encoded predictors table.
            outcomes: Outcomes table with one or more columns.
            config: Workflow configuration (seed, parallelism).

        Returns:
            The ModelFit.

        Raises:
            EngineError: If the mode is unset or the engine is unknown or missing.
        """
        from .registry import DEFAULT_ENGINES, create_estimator

        spec = self
        if spec.engine is None:
            engine = DEFAULT_ENGINES.get(spec.model_type)
            if engine is None:
                raise EngineError(f"No default engine for model type '{spec.model_type}'")
            logger.info("Engine set to '%s' for %s", engine, spec.model_type)
            spec = replace(spec, engine=engine)

        if spec.mode == Mode.UNKNOWN:
            raise EngineError(
                f"Please set the mode of the {spec.model_type} specification with `set_mode()`"
            )

        estimator = create_estimator(spec, config or WorkflowConfig())

        y: Any = outcomes.iloc[:, 0] if outcomes.shape[1] == 1 else outcomes
        start_time = time.time()
        estimator.fit(predictors, y)
        elapsed = time.time() - start_time

        logger.info(
            "Fit %s (%s engine) on %d rows x %d predictors in %.3fs",
            spec.model_type,
            spec.engine,
            len(predictors),
            predictors.shape[1],
            elapsed,
        )
        return ModelFit(
            spec=spec,
            fit=estimator,
            elapsed=elapsed,
            outcome_names=tuple(str(c) for c in outcomes.columns),
        )


@dataclass(frozen=True, eq=False)
class ModelFit:
    """A trained model.

    Attributes:
        spec: The specification that was fit, with the engine resolved.
        fit: The trained engine object.
        elapsed: Seconds spent fitting.
        outcome_names: Outcome columns the model was trained on.
    """

    spec: ModelSpec
    fit: Any
    elapsed: float
    outcome_names: tuple[str, ...] = ()

    def predict(self, predictors: pd.DataFrame) -> pd.DataFrame:
        """Predict from encoded predictors.

        Returns:
            DataFrame with ``.pred`` (regression) or ``.pred_class``
            (classification). Multi-outcome regression yields one
            ``.pred_<outcome>`` column per outcome.
        """
        values = np.asarray(self.fit.predict(predictors))

        if self.spec.mode == Mode.CLASSIFICATION:
            return pd.DataFrame({".pred_class": values}, index=predictors.index)

        if values.ndim == 2 and values.shape[1] > 1:
            return pd.DataFrame(
                {f".pred_{name}": values[:, i] for i, name in enumerate(self.outcome_names)},
                index=predictors.index,
            )
        return pd.DataFrame({".pred": values.ravel()}, index=predictors.index)

    def predict_proba(self, predictors: pd.DataFrame) -> pd.DataFrame:
        """Class probabilities, one ``.pred_<class>`` column per class."""
        if self.spec.mode != Mode.CLASSIFICATION:
            raise EngineError("Class probabilities are only available in classification mode")
        if not hasattr(self.fit, "predict_proba"):
            raise EngineError(f"Engine '{self.spec.engine}' does not provide probabilities")
        proba = np.asarray(self.fit.predict_proba(predictors))
        classes = [str(c) for c in self.fit.classes_]
        return pd.DataFrame(
            {f".pred_{c}": proba[:, i] for i, c in enumerate(classes)},
            index=predictors.index,
        )


def set_engine(spec: ModelSpec, engine: str, **engine_args: Any) -> ModelSpec:
    """Return a copy of the specification with a new engine."""
    from .registry import get_engine

    get_engine(spec.model_type, engine)
    return replace(spec, engine=engine, engine_args={**spec.engine_args, **engine_args})


def set_mode(spec: ModelSpec, mode: Mode | str) -> ModelSpec:
    """Return a copy of the specification with a new mode."""
    mode = Mode(mode)
    if mode == Mode.UNKNOWN:
        raise ValueError("mode must be 'regression' or 'classification'")
    return replace(spec, mode=mode)


def set_args(spec: ModelSpec, **args: Any) -> ModelSpec:
    """Return a copy of the specification with updated main arguments."""
    return replace(spec, args={**spec.args, **args})
