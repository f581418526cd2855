"""Scikit-learn engine definitions."""

from __future__ import annotations

from typing import Any

from sklearn.ensemble import (
    HistGradientBoostingClassifier,
    HistGradientBoostingRegressor,
    RandomForestClassifier,
    RandomForestRegressor,
)
from sklearn.linear_model import Lasso, LinearRegression, LogisticRegression, Ridge
from sklearn.neighbors import KNeighborsClassifier, KNeighborsRegressor
from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor

from ..config import Mode
from .spec import EncodingInfo, EngineInfo

# Engines that need numeric design matrices
_INDICATORS = EncodingInfo(indicators=True)
# Engines that consume pandas category columns directly
_NO_INDICATORS = EncodingInfo(indicators=False)


def _inverse(value: Any) -> float:
    """Convert a penalty into sklearn's inverse regularization strength."""
    return 1.0 / float(value)


SKLEARN_ENGINES: list[EngineInfo] = [
    EngineInfo(
        model_type="linear_reg",
        engine="sklearn",
        estimators={Mode.REGRESSION: LinearRegression},
        encoding=_INDICATORS,
    ),
    EngineInfo(
        model_type="linear_reg",
        engine="ridge",
        estimators={Mode.REGRESSION: Ridge},
        encoding=_INDICATORS,
        arg_map={"penalty": "alpha"},
        default_params={"alpha": 1.0},
    ),
    EngineInfo(
        model_type="linear_reg",
        engine="lasso",
        estimators={Mode.REGRESSION: Lasso},
        encoding=_INDICATORS,
        arg_map={"penalty": "alpha"},
        default_params={"alpha": 1.0, "max_iter": 2000},
    ),
    EngineInfo(
        model_type="logistic_reg",
        engine="sklearn",
        estimators={Mode.CLASSIFICATION: LogisticRegression},
        encoding=_INDICATORS,
        arg_map={"penalty": ("C", _inverse)},
        default_params={"C": 1.0, "solver": "lbfgs", "max_iter": 1000},
    ),
    EngineInfo(
        model_type="decision_tree",
        engine="sklearn",
        estimators={
            Mode.CLASSIFICATION: DecisionTreeClassifier,
            Mode.REGRESSION: DecisionTreeRegressor,
        },
        encoding=_INDICATORS,
        arg_map={"tree_depth": "max_depth", "min_n": "min_samples_split"},
    ),
    EngineInfo(
        model_type="rand_forest",
        engine="sklearn",
        estimators={
            Mode.CLASSIFICATION: RandomForestClassifier,
            Mode.REGRESSION: RandomForestRegressor,
        },
        encoding=_INDICATORS,
        arg_map={"mtry": "max_features", "trees": "n_estimators", "min_n": "min_samples_split"},
        default_params={"n_estimators": 500},
    ),
    EngineInfo(
        model_type="boost_tree",
        engine="sklearn",
        estimators={
            Mode.CLASSIFICATION: HistGradientBoostingClassifier,
            Mode.REGRESSION: HistGradientBoostingRegressor,
        },
        encoding=_NO_INDICATORS,
        arg_map={
            "trees": "max_iter",
            "tree_depth": "max_depth",
            "learn_rate": "learning_rate",
            "min_n": "min_samples_leaf",
        },
        default_params={"categorical_features": "from_dtype"},
    ),
    EngineInfo(
        model_type="nearest_neighbor",
        engine="sklearn",
        estimators={
            Mode.CLASSIFICATION: KNeighborsClassifier,
            Mode.REGRESSION: KNeighborsRegressor,
        },
        encoding=_INDICATORS,
        arg_map={"neighbors": "n_neighbors", "weight_func": "weights"},
        default_params={"n_neighbors": 5, "weights": "uniform"},
    ),
]
