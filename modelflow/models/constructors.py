"""Constructors for model specifications.

Each constructor returns an untrained ModelSpec. Main arguments use
engine-independent names and are translated per engine at fit time.
"""

from __future__ import annotations

from ..config import Mode
from .spec import ModelSpec, set_engine


def _spec(
    model_type: str,
    mode: Mode | str,
    engine: str | None,
    **args: object,
) -> ModelSpec:
    spec = ModelSpec(model_type=model_type, mode=Mode(mode), args=dict(args))
    if engine is not None:
        spec = set_engine(spec, engine)
    return spec


def linear_reg(penalty: float | None = None, engine: str | None = None) -> ModelSpec:
    """Linear regression.

    Engines: ``sklearn`` (ordinary least squares), ``ridge`` and ``lasso``
    (``penalty`` is the regularization strength).
    """
    return _spec("linear_reg", Mode.REGRESSION, engine, penalty=penalty)


def logistic_reg(penalty: float | None = None, engine: str | None = None) -> ModelSpec:
    """Logistic regression. Engines: ``sklearn``."""
    return _spec("logistic_reg", Mode.CLASSIFICATION, engine, penalty=penalty)


def decision_tree(
    mode: Mode | str = Mode.UNKNOWN,
    tree_depth: int | None = None,
    min_n: int | None = None,
    engine: str | None = None,
) -> ModelSpec:
    """Decision tree. Engines: ``sklearn``."""
    return _spec("decision_tree", mode, engine, tree_depth=tree_depth, min_n=min_n)


def rand_forest(
    mode: Mode | str = Mode.UNKNOWN,
    mtry: int | float | None = None,
    trees: int | None = None,
    min_n: int | None = None,
    engine: str | None = None,
) -> ModelSpec:
    """Random forest.

    Engines: ``sklearn`` (needs indicator columns) and ``lightgbm`` (consumes
    categorical columns directly; ``mtry`` is a column fraction).
    """
    return _spec("rand_forest", mode, engine, mtry=mtry, trees=trees, min_n=min_n)


def boost_tree(
    mode: Mode | str = Mode.UNKNOWN,
    trees: int | None = None,
    tree_depth: int | None = None,
    learn_rate: float | None = None,
    min_n: int | None = None,
    engine: str | None = None,
) -> ModelSpec:
    """Gradient boosted trees.

    Engines: ``sklearn`` (histogram boosting, consumes categorical columns
    directly), ``xgboost`` (needs indicator columns), ``lightgbm`` (consumes
    categorical columns directly).
    """
    return _spec(
        "boost_tree",
        mode,
        engine,
        trees=trees,
        tree_depth=tree_depth,
        learn_rate=learn_rate,
        min_n=min_n,
    )


def nearest_neighbor(
    mode: Mode | str = Mode.UNKNOWN,
    neighbors: int | None = None,
    weight_func: str | None = None,
    engine: str | None = None,
) -> ModelSpec:
    """K-nearest neighbors. Engines: ``sklearn``."""
    return _spec("nearest_neighbor", mode, engine, neighbors=neighbors, weight_func=weight_func)
