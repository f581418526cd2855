"""Engine registry for modelflow.

This module provides a unified interface for looking up engines and creating
configured estimator instances from model specifications.
"""

from __future__ import annotations

import inspect
from typing import Any

from ..config import WorkflowConfig
from ..errors import EngineError
from .boosting import BOOSTING_ENGINES, is_available
from .sklearn_models import SKLEARN_ENGINES
from .spec import EngineInfo, ModelSpec

# Combine all engine definitions
_ALL_ENGINES: dict[tuple[str, str], EngineInfo] = {
    (info.model_type, info.engine): info for info in [*SKLEARN_ENGINES, *BOOSTING_ENGINES]
}

# Engine used when a specification is fit without one
DEFAULT_ENGINES: dict[str, str] = {
    "linear_reg": "sklearn",
    "logistic_reg": "sklearn",
    "decision_tree": "sklearn",
    "rand_forest": "sklearn",
    "boost_tree": "sklearn",
    "nearest_neighbor": "sklearn",
}


def get_engine(model_type: str, engine: str) -> EngineInfo:
    """Look up an engine.

    Raises:
        EngineError: If the model type or engine is unknown.
    """
    info = _ALL_ENGINES.get((model_type, engine))
    if info is None:
        available = get_available_engines(model_type)
        if not available:
            raise EngineError(f"Unknown model type '{model_type}'")
        raise EngineError(
            f"Unknown engine '{engine}' for {model_type}. Available: {available}"
        )
    return info


def get_available_engines(model_type: str) -> list[str]:
    """Get the engine names registered for a model type."""
    return [engine for (mt, engine) in _ALL_ENGINES if mt == model_type]


def create_estimator(spec: ModelSpec, config: WorkflowConfig) -> Any:
    """Create an unfitted estimator for a specification.

    Main arguments are translated to engine parameter names, then engine
    arguments are applied on top. Seed and parallelism come from the config.

    Args:
        spec: Specification with engine and mode set.
        config: Workflow configuration.

    Returns:
        Configured estimator instance.

    Raises:
        EngineError: If the engine is unknown, does not support the mode, or
            its library is not installed.
    """
    if spec.engine is None:
        raise EngineError(f"No engine set for {spec.model_type}")

    info = get_engine(spec.model_type, spec.engine)

    if spec.mode not in info.estimators:
        supported = [m.value for m in info.modes]
        raise EngineError(
            f"Engine '{spec.engine}' for {spec.model_type} does not support "
            f"{spec.mode.value}. Supported: {supported}"
        )

    if not is_available(info.package):
        raise EngineError(
            f"The '{info.package}' package is required for the {spec.model_type} "
            f"'{spec.engine}' engine but is not installed"
        )

    model_class = info.estimators[spec.mode]

    params = info.default_params.copy()
    for name, value in spec.args.items():
        if value is None:
            continue
        if name not in info.arg_map:
            raise EngineError(
                f"Argument '{name}' is not supported by the {spec.model_type} "
                f"'{spec.engine}' engine"
            )
        target = info.arg_map[name]
        if isinstance(target, tuple):
            param, convert = target
            params[param] = convert(value)
        else:
            params[target] = value
    params.update(spec.engine_args)

    # Add common parameters
    accepted = _get_model_params(model_class)
    if "random_state" in accepted:
        params.setdefault("random_state", config.random_seed)
    if "n_jobs" in accepted:
        params.setdefault("n_jobs", config.n_jobs)
    if "seed" in accepted:
        params.setdefault("seed", config.random_seed)

    return model_class(**params)


def _get_model_params(model_class: type) -> set[str]:
    """Get parameter names accepted by a model class."""
    try:
        sig = inspect.signature(model_class.__init__)
        return set(sig.parameters.keys()) - {"self"}
    except (ValueError, TypeError):
        return set()