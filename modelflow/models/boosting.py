"""XGBoost and LightGBM engine definitions."""

from __future__ import annotations

from ..config import Mode
from .spec import EncodingInfo, EngineInfo

# Lazy imports to handle optional dependencies
_xgboost_available = True
_lightgbm_available = True

try:
    import xgboost as xgb
except ImportError:
    _xgboost_available = False
    xgb = None  # type: ignore[assignment]

try:
    import lightgbm as lgb
except ImportError:
    _lightgbm_available = False
    lgb = None  # type: ignore[assignment]


def is_available(package: str) -> bool:
    """Whether an optional engine package is importable."""
    if package == "xgboost":
        return _xgboost_available
    if package == "lightgbm":
        return _lightgbm_available
    return True


# Engine entries are registered even when the library is missing so that
# encoding information stays queryable; fitting checks is_available().
BOOSTING_ENGINES: list[EngineInfo] = [
    EngineInfo(
        model_type="boost_tree",
        engine="xgboost",
        estimators={
            Mode.CLASSIFICATION: xgb.XGBClassifier if xgb is not None else None,
            Mode.REGRESSION: xgb.XGBRegressor if xgb is not None else None,
        },
        encoding=EncodingInfo(indicators=True),
        arg_map={
            "trees": "n_estimators",
            "tree_depth": "max_depth",
            "learn_rate": "learning_rate",
            "min_n": "min_child_weight",
            "mtry": "colsample_bynode",
        },
        default_params={"n_estimators": 15, "learning_rate": 0.3, "max_depth": 6, "verbosity": 0},
        package="xgboost",
    ),
    EngineInfo(
        model_type="boost_tree",
        engine="lightgbm",
        estimators={
            Mode.CLASSIFICATION: lgb.LGBMClassifier if lgb is not None else None,
            Mode.REGRESSION: lgb.LGBMRegressor if lgb is not None else None,
        },
        encoding=EncodingInfo(indicators=False),
        arg_map={
            "trees": "n_estimators",
            "tree_depth": "max_depth",
            "learn_rate": "learning_rate",
            "min_n": "min_child_samples",
        },
        default_params={"n_estimators": 100, "learning_rate": 0.1, "max_depth": -1, "verbose": -1},
        package="lightgbm",
    ),
    # LightGBM's random forest mode needs row bagging on every iteration
    EngineInfo(
        model_type="rand_forest",
        engine="lightgbm",
        estimators={
            Mode.CLASSIFICATION: lgb.LGBMClassifier if lgb is not None else None,
            Mode.REGRESSION: lgb.LGBMRegressor if lgb is not None else None,
        },
        encoding=EncodingInfo(indicators=False),
        arg_map={
            "trees": "n_estimators",
            "min_n": "min_child_samples",
            "mtry": "colsample_bytree",
        },
        default_params={
            "boosting_type": "rf",
            "n_estimators": 500,
            "subsample": 0.632,
            "subsample_freq": 1,
            "verbose": -1,
        },
        package="lightgbm",
    ),
]
