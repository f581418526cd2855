"""Tests for model specifications, the engine registry, and model fits."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from sklearn.ensemble import HistGradientBoostingRegressor, RandomForestRegressor
from sklearn.linear_model import LinearRegression, LogisticRegression, Ridge

from modelflow import (
    EncodingInfo,
    EngineError,
    Mode,
    ModelSpec,
    WorkflowConfig,
    boost_tree,
    decision_tree,
    linear_reg,
    logistic_reg,
    nearest_neighbor,
    rand_forest,
    set_args,
    set_engine,
    set_mode,
)
from modelflow.models import DEFAULT_ENGINES, create_estimator, get_available_engines, get_engine


class TestConstructors:
    """Tests for the model constructors."""

    def test_linear_reg_is_regression(self):
        """linear_reg() always has regression mode."""
        spec = linear_reg()

        assert spec.model_type == "linear_reg"
        assert spec.mode == Mode.REGRESSION
        assert spec.engine is None

    def test_logistic_reg_is_classification(self):
        """logistic_reg() always has classification mode."""
        assert logistic_reg().mode == Mode.CLASSIFICATION

    def test_mode_defaults_to_unknown(self):
        """Tree models start with an unknown mode."""
        assert rand_forest().mode == Mode.UNKNOWN
        assert boost_tree().mode == Mode.UNKNOWN
        assert decision_tree().mode == Mode.UNKNOWN
        assert nearest_neighbor().mode == Mode.UNKNOWN

    def test_mode_from_string(self):
        """Mode can be given as a string."""
        assert rand_forest(mode="regression").mode == Mode.REGRESSION

    def test_main_args_recorded(self):
        """Main arguments are stored under engine-independent names."""
        spec = rand_forest(mode="regression", trees=50, min_n=3)
        assert spec.args == {"mtry": None, "trees": 50, "min_n": 3}

    def test_engine_is_validated(self):
        """An unknown engine is rejected at construction."""
        with pytest.raises(EngineError, match="Unknown engine"):
            linear_reg(engine="glmnet")


class TestModifiers:
    """Tests for set_engine(), set_mode() and set_args()."""

    def test_set_engine_returns_copy(self):
        """set_engine() leaves the original spec unchanged."""
        spec = rand_forest(mode="regression")
        with_engine = set_engine(spec, "sklearn", oob_score=True)

        assert spec.engine is None
        assert with_engine.engine == "sklearn"
        assert with_engine.engine_args == {"oob_score": True}

    def test_set_mode(self):
        """set_mode() accepts enum members and strings."""
        assert set_mode(rand_forest(), Mode.CLASSIFICATION).mode == Mode.CLASSIFICATION
        assert set_mode(rand_forest(), "regression").mode == Mode.REGRESSION

    def test_set_mode_rejects_unknown(self):
        """The mode cannot be set back to unknown."""
        with pytest.raises(ValueError, match="mode"):
            set_mode(rand_forest(), Mode.UNKNOWN)

    def test_set_args_merges(self):
        """set_args() updates main arguments."""
        spec = set_args(rand_forest(trees=10), trees=20, min_n=4)
        assert spec.args["trees"] == 20
        assert spec.args["min_n"] == 4


class TestRequiredEncoding:
    """Tests for ModelSpec.required_encoding()."""

    def test_no_engine_gives_none(self):
        """Without an engine there is no encoding info."""
        assert rand_forest(mode="regression").required_encoding() is None

    def test_indicator_engines(self):
        """Linear models need indicator columns."""
        assert linear_reg(engine="sklearn").required_encoding() == EncodingInfo(indicators=True)
        assert rand_forest(engine="sklearn").required_encoding() == EncodingInfo(indicators=True)

    def test_no_indicator_engines(self):
        """Engines that consume categorical columns report indicators=False."""
        assert boost_tree(engine="sklearn").required_encoding() == EncodingInfo(indicators=False)

    def test_optional_engine_info_without_library(self):
        """Encoding info of optional engines is available without the library."""
        spec = rand_forest(mode="regression", engine="lightgbm")
        assert spec.required_encoding() == EncodingInfo(indicators=False)

        spec = boost_tree(mode="regression", engine="xgboost")
        assert spec.required_encoding() == EncodingInfo(indicators=True)

    def test_unregistered_engine_gives_none(self):
        """A spec built by hand with an unregistered engine has no info."""
        spec = ModelSpec(model_type="rand_forest", mode=Mode.REGRESSION, engine="ranger")
        assert spec.required_encoding() is None


class TestRegistry:
    """Tests for engine lookup and estimator creation."""

    def test_get_engine(self):
        """Registered engines can be looked up."""
        info = get_engine("linear_reg", "ridge")

        assert info.model_type == "linear_reg"
        assert info.modes == [Mode.REGRESSION]

    def test_unknown_model_type(self):
        """Unknown model types raise EngineError."""
        with pytest.raises(EngineError, match="Unknown model type"):
            get_engine("svm_rbf", "sklearn")

    def test_available_engines(self):
        """All engines for a model type are listed."""
        assert set(get_available_engines("boost_tree")) == {"sklearn", "xgboost", "lightgbm"}
        assert set(get_available_engines("rand_forest")) == {"sklearn", "lightgbm"}

    def test_every_model_type_has_default_engine(self):
        """Each default engine is registered."""
        for model_type, engine in DEFAULT_ENGINES.items():
            assert get_engine(model_type, engine).engine == engine

    def test_create_estimator_maps_args(self):
        """Main arguments are translated to engine parameter names."""
        spec = rand_forest(mode="regression", trees=10, min_n=4, engine="sklearn")
        estimator = create_estimator(spec, WorkflowConfig(random_seed=7, n_jobs=2))

        assert isinstance(estimator, RandomForestRegressor)
        assert estimator.n_estimators == 10
        assert estimator.min_samples_split == 4
        assert estimator.random_state == 7
        assert estimator.n_jobs == 2

    def test_create_estimator_converts_penalty(self):
        """logistic_reg penalty becomes sklearn's inverse C."""
        estimator = create_estimator(logistic_reg(penalty=0.5, engine="sklearn"), WorkflowConfig())

        assert isinstance(estimator, LogisticRegression)
        assert estimator.C == pytest.approx(2.0)

    def test_create_estimator_engine_args_win(self):
        """Engine arguments override mapped defaults."""
        spec = set_engine(linear_reg(penalty=3.0), "ridge", alpha=0.1)
        estimator = create_estimator(spec, WorkflowConfig())

        assert isinstance(estimator, Ridge)
        assert estimator.alpha == 0.1

    def test_unsupported_argument(self):
        """Arguments the engine cannot use raise EngineError."""
        spec = linear_reg(penalty=1.0, engine="sklearn")
        with pytest.raises(EngineError, match="penalty"):
            create_estimator(spec, WorkflowConfig())

    def test_unsupported_mode(self):
        """Engines reject modes they do not support."""
        spec = set_mode(linear_reg(engine="sklearn"), Mode.CLASSIFICATION)
        with pytest.raises(EngineError, match="does not support"):
            create_estimator(spec, WorkflowConfig())

    def test_histogram_boosting_uses_dtypes(self):
        """The sklearn boost_tree engine reads categorical columns from dtypes."""
        estimator = create_estimator(boost_tree(mode="regression", engine="sklearn"), WorkflowConfig())

        assert isinstance(estimator, HistGradientBoostingRegressor)
        assert estimator.categorical_features == "from_dtype"


class TestModelSpecFit:
    """Tests for ModelSpec.fit() and ModelFit."""

    def test_fit_linear_regression(self, mtcars):
        """A linear fit recovers least squares coefficients."""
        predictors = mtcars[["cyl"]]
        outcomes = mtcars[["mpg"]]

        model_fit = linear_reg(engine="sklearn").fit(predictors, outcomes)
        slope, intercept = np.polyfit(mtcars["cyl"], mtcars["mpg"], 1)

        assert isinstance(model_fit.fit, LinearRegression)
        assert model_fit.fit.coef_[0] == pytest.approx(slope)
        assert model_fit.fit.intercept_ == pytest.approx(intercept)
        assert model_fit.outcome_names == ("mpg",)
        assert model_fit.elapsed >= 0.0

    def test_default_engine_is_applied(self, mtcars):
        """Fitting without an engine uses the default engine."""
        model_fit = linear_reg().fit(mtcars[["cyl"]], mtcars[["mpg"]])
        assert model_fit.spec.engine == DEFAULT_ENGINES["linear_reg"]

    def test_unknown_mode_raises(self, mtcars):
        """Fitting requires a known mode."""
        with pytest.raises(EngineError, match="set_mode"):
            rand_forest(engine="sklearn").fit(mtcars[["cyl"]], mtcars[["mpg"]])

    def test_regression_predictions(self, mtcars):
        """Regression predictions come back in a .pred column."""
        model_fit = linear_reg(engine="sklearn").fit(mtcars[["cyl"]], mtcars[["mpg"]])
        predictions = model_fit.predict(mtcars[["cyl"]].head(3))

        assert list(predictions.columns) == [".pred"]
        assert list(predictions.index) == [0, 1, 2]

    def test_multi_outcome_predictions(self, mtcars):
        """Multiple outcomes get one .pred_<outcome> column each."""
        model_fit = linear_reg(engine="sklearn").fit(mtcars[["cyl", "wt"]], mtcars[["mpg", "hp"]])
        predictions = model_fit.predict(mtcars[["cyl", "wt"]])

        assert list(predictions.columns) == [".pred_mpg", ".pred_hp"]

    def test_classification_predictions(self, iris):
        """Classification predictions come back in a .pred_class column."""
        predictors = iris[["Petal.Length", "Petal.Width"]]
        model_fit = logistic_reg(engine="sklearn").fit(predictors, iris[["Species"]])

        predictions = model_fit.predict(predictors)
        probabilities = model_fit.predict_proba(predictors)

        assert list(predictions.columns) == [".pred_class"]
        assert set(predictions[".pred_class"]) <= {"setosa", "versicolor", "virginica"}
        assert list(probabilities.columns) == [
            ".pred_setosa",
            ".pred_versicolor",
            ".pred_virginica",
        ]
        np.testing.assert_allclose(probabilities.sum(axis=1), 1.0)

    def test_predict_proba_requires_classification(self, mtcars):
        """Probabilities are only defined for classifiers."""
        model_fit = linear_reg(engine="sklearn").fit(mtcars[["cyl"]], mtcars[["mpg"]])
        with pytest.raises(EngineError, match="classification"):
            model_fit.predict_proba(mtcars[["cyl"]])

    def test_categorical_predictors_with_histogram_boosting(self, iris):
        """The sklearn boost_tree engine fits on pandas category columns."""
        predictors = pd.DataFrame(
            {
                "Petal.Length": iris["Petal.Length"],
                "Species": pd.Categorical(iris["Species"]),
            }
        )
        spec = boost_tree(mode="regression", trees=20, engine="sklearn")
        model_fit = spec.fit(predictors, iris[["Sepal.Length"]])

        assert len(model_fit.predict(predictors)) == len(iris)
