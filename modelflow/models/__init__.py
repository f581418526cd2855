"""Model specifications for modelflow.

This module provides the model constructors, the ModelSpec / ModelFit types,
and the engine registry that maps specifications onto estimators.
"""

from __future__ import annotations

from .constructors import (
    boost_tree,
    decision_tree,
    linear_reg,
    logistic_reg,
    nearest_neighbor,
    rand_forest,
)
from .registry import DEFAULT_ENGINES, create_estimator, get_available_engines, get_engine
from .spec import EncodingInfo, EngineInfo, ModelFit, ModelSpec, set_args, set_engine, set_mode

__all__ = [
    # Types
    "EncodingInfo",
    "EngineInfo",
    "ModelSpec",
    "ModelFit",
    # Constructors
    "linear_reg",
    "logistic_reg",
    "decision_tree",
    "rand_forest",
    "boost_tree",
    "nearest_neighbor",
    # Modifiers
    "set_engine",
    "set_mode",
    "set_args",
    # Registry
    "DEFAULT_ENGINES",
    "create_estimator",
    "get_engine",
    "get_available_engines",
]
