"""Tests for formula parsing and formula preprocessing."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from modelflow import FormulaBlueprint, FormulaError, default_formula_blueprint
from modelflow.preprocessing import INTERCEPT_COLUMN, Formula, FormulaProcessor, parse_formula


class TestParseFormula:
    """Tests for parse_formula()."""

    def test_simple_formula(self):
        """Outcome and predictor terms are split on '~' and '+'."""
        formula = parse_formula("mpg ~ cyl + disp")

        assert formula.outcomes == ("mpg",)
        assert [t.label for t in formula.terms] == ["cyl", "disp"]
        assert formula.removed == ()

    def test_function_term(self):
        """Function calls are parsed into the term's factor."""
        formula = parse_formula("mpg ~ log(disp)")
        factor = formula.terms[0].factors[0]

        assert factor.column == "disp"
        assert factor.function == "log"
        assert formula.terms[0].label == "log(disp)"

    def test_dot_and_removal(self):
        """'.' is kept as a placeholder and '-' terms are recorded as removed."""
        formula = parse_formula("mpg ~ . - wt")

        assert formula.terms == (None,)
        assert [t.label for t in formula.removed] == ["wt"]

    def test_interaction(self):
        """':' builds an interaction term."""
        formula = parse_formula("mpg ~ cyl:wt")

        assert len(formula.terms[0].factors) == 2
        assert formula.terms[0].label == "cyl:wt"

    def test_multiple_outcomes(self):
        """The left-hand side may name several outcomes."""
        formula = parse_formula("mpg + hp ~ cyl")
        assert formula.outcomes == ("mpg", "hp")

    def test_backtick_names(self):
        """Backticks quote names with spaces."""
        formula = parse_formula("`fuel economy` ~ `engine size`")

        assert formula.outcomes == ("fuel economy",)
        assert formula.terms[0].label == "engine size"

    def test_dotted_names(self):
        """Column names may contain dots."""
        formula = parse_formula("Sepal.Length ~ Sepal.Width")

        assert formula.outcomes == ("Sepal.Length",)
        assert formula.terms[0].label == "Sepal.Width"

    def test_parsed_formula_passthrough(self):
        """A Formula passed in is returned as-is."""
        formula = parse_formula("mpg ~ cyl")
        assert parse_formula(formula) is formula

    def test_str_is_expression(self):
        """str() gives back the original text."""
        assert str(parse_formula("mpg ~ cyl")) == "mpg ~ cyl"

    @pytest.mark.parametrize(
        "expression",
        [
            "mpg cyl",
            "mpg ~ cyl ~ disp",
            "~ cyl",
            "mpg ~",
            "mpg ~ 1 + cyl",
            "mpg ~ cyl + 0",
            "mpg ~ unknown_fn(cyl)",
            "mpg ~ log(cyl",
            "log(mpg) ~ cyl",
            "mpg ~ cyl + + disp",
        ],
    )
    def test_invalid_formulas(self, expression):
        """Malformed formulas raise FormulaError."""
        with pytest.raises(FormulaError):
            parse_formula(expression)

    def test_non_string_raises(self):
        """Non-string input raises FormulaError."""
        with pytest.raises(FormulaError, match="must be a string"):
            parse_formula(42)  # type: ignore[arg-type]

    def test_error_carries_formula(self):
        """FormulaError records the offending formula."""
        with pytest.raises(FormulaError) as exc_info:
            parse_formula("mpg ~ 1")
        assert exc_info.value.formula == "mpg ~ 1"


class TestFormulaProcessorNumeric:
    """Tests for FormulaProcessor on numeric predictors."""

    def test_fit_transform_shapes(self, mtcars):
        """Predictors and outcomes are split by the formula."""
        processor = FormulaProcessor("mpg ~ cyl + disp", default_formula_blueprint())
        predictors, outcomes = processor.fit_transform(mtcars)

        assert list(predictors.columns) == ["cyl", "disp"]
        assert list(outcomes.columns) == ["mpg"]
        assert len(predictors) == len(mtcars)

    def test_function_is_applied(self, mtcars):
        """Function terms are computed from their column."""
        processor = FormulaProcessor("mpg ~ log(disp)", default_formula_blueprint())
        predictors, _ = processor.fit_transform(mtcars)

        np.testing.assert_allclose(predictors["log(disp)"], np.log(mtcars["disp"]))

    def test_interaction_is_product(self, mtcars):
        """Numeric interactions multiply their factors."""
        processor = FormulaProcessor("mpg ~ cyl:wt", default_formula_blueprint())
        predictors, _ = processor.fit_transform(mtcars)

        np.testing.assert_allclose(predictors["cyl:wt"], mtcars["cyl"] * mtcars["wt"])

    def test_dot_expands_to_all_but_outcome(self, mtcars):
        """'.' expands to every non-outcome column."""
        processor = FormulaProcessor("mpg ~ .", default_formula_blueprint())
        predictors, _ = processor.fit_transform(mtcars)

        assert list(predictors.columns) == ["cyl", "disp", "hp", "wt"]

    def test_dot_with_removal(self, mtcars):
        """Removed terms are dropped after expansion."""
        processor = FormulaProcessor("mpg ~ . - hp - wt", default_formula_blueprint())
        predictors, _ = processor.fit_transform(mtcars)

        assert list(predictors.columns) == ["cyl", "disp"]

    def test_intercept_column(self, mtcars):
        """An intercept blueprint adds a leading column of ones."""
        processor = FormulaProcessor("mpg ~ cyl", FormulaBlueprint(intercept=True))
        predictors, _ = processor.fit_transform(mtcars)

        assert list(predictors.columns) == [INTERCEPT_COLUMN, "cyl"]
        assert (predictors[INTERCEPT_COLUMN] == 1.0).all()

    def test_missing_column_raises(self, mtcars):
        """Unknown columns raise FormulaError."""
        processor = FormulaProcessor("mpg ~ gear", default_formula_blueprint())
        with pytest.raises(FormulaError, match="not found"):
            processor.fit(mtcars)

    def test_nothing_left_raises(self, mtcars):
        """Removing every term raises FormulaError."""
        processor = FormulaProcessor("mpg ~ cyl - cyl", default_formula_blueprint())
        with pytest.raises(FormulaError, match="no predictors"):
            processor.fit(mtcars)

    def test_transform_before_fit_raises(self, mtcars):
        """Transform requires a fitted processor."""
        processor = FormulaProcessor("mpg ~ cyl", default_formula_blueprint())
        with pytest.raises(ValueError, match="must be fitted"):
            processor.transform(mtcars)

    def test_transform_without_outcomes(self, mtcars):
        """New data does not need the outcome column."""
        processor = FormulaProcessor("mpg ~ cyl", default_formula_blueprint())
        processor.fit(mtcars)

        predictors, outcomes = processor.transform(mtcars.drop(columns=["mpg"]), outcomes=False)

        assert outcomes is None
        assert list(predictors.columns) == ["cyl"]

    def test_properties_after_fit(self, mtcars):
        """Fitted state is exposed through properties."""
        processor = FormulaProcessor("mpg ~ cyl + log(disp)", default_formula_blueprint())
        assert processor.is_fitted is False

        processor.fit(mtcars)

        assert processor.is_fitted is True
        assert processor.outcome_names == ["mpg"]
        assert processor.term_labels == ["cyl", "log(disp)"]
        assert processor.predictor_names == ["cyl", "disp"]
        assert processor.column_names == ["cyl", "log(disp)"]


class TestFormulaProcessorCategorical:
    """Tests for FormulaProcessor on categorical predictors."""

    def test_indicator_columns(self, iris):
        """Indicators expand every level when there is no intercept."""
        processor = FormulaProcessor("Sepal.Length ~ Species", FormulaBlueprint(indicators=True))
        predictors, _ = processor.fit_transform(iris)

        assert list(predictors.columns) == [
            "Speciessetosa",
            "Speciesversicolor",
            "Speciesvirginica",
        ]
        assert (predictors.sum(axis=1) == 1.0).all()

    def test_intercept_drops_first_level(self, iris):
        """With an intercept the first level becomes the reference."""
        blueprint = FormulaBlueprint(intercept=True, indicators=True)
        processor = FormulaProcessor("Sepal.Length ~ Species", blueprint)
        predictors, _ = processor.fit_transform(iris)

        assert list(predictors.columns) == [
            INTERCEPT_COLUMN,
            "Speciesversicolor",
            "Speciesvirginica",
        ]

    def test_no_indicators_keeps_single_column(self, iris):
        """Without indicators the column stays a pandas categorical."""
        processor = FormulaProcessor("Sepal.Length ~ Species", FormulaBlueprint(indicators=False))
        predictors, _ = processor.fit_transform(iris)

        assert list(predictors.columns) == ["Species"]
        assert isinstance(predictors["Species"].dtype, pd.CategoricalDtype)
        assert list(predictors["Species"].cat.categories) == ["setosa", "versicolor", "virginica"]

    def test_bool_column_is_categorical(self, mtcars):
        """Boolean columns are expanded like other categorical columns."""
        data = mtcars.assign(am=mtcars["cyl"] > 4)
        processor = FormulaProcessor("mpg ~ am", FormulaBlueprint(indicators=True))
        predictors, _ = processor.fit_transform(data)

        assert list(predictors.columns) == ["amFalse", "amTrue"]
        assert processor.levels == {"am": [False, True]}
        np.testing.assert_allclose(predictors["amTrue"], (mtcars["cyl"] > 4).astype(float))

    def test_levels_recorded(self, iris):
        """Training levels are recorded per column."""
        processor = FormulaProcessor("Sepal.Length ~ Species", default_formula_blueprint())
        processor.fit(iris)

        assert processor.levels == {"Species": ["setosa", "versicolor", "virginica"]}

    def test_category_dtype_level_order(self, iris):
        """Categorical dtypes keep their own level order."""
        data = iris.copy()
        data["Species"] = pd.Categorical(
            data["Species"], categories=["virginica", "setosa", "versicolor"]
        )
        processor = FormulaProcessor("Sepal.Length ~ Species", default_formula_blueprint())
        predictors, _ = processor.fit_transform(data)

        assert list(predictors.columns) == [
            "Speciesvirginica",
            "Speciessetosa",
            "Speciesversicolor",
        ]

    def test_novel_level_raises(self, iris):
        """Unseen levels in new data raise by default."""
        processor = FormulaProcessor("Sepal.Length ~ Species", default_formula_blueprint())
        processor.fit(iris)

        new_data = iris.head(3).copy()
        new_data["Species"] = ["setosa", "versicolor", "pumila"]

        with pytest.raises(FormulaError, match="novel level"):
            processor.transform(new_data, outcomes=False)

    def test_novel_level_allowed(self, iris):
        """Allowed novel levels encode as all-zero indicators."""
        blueprint = FormulaBlueprint(allow_novel_levels=True)
        processor = FormulaProcessor("Sepal.Length ~ Species", blueprint)
        processor.fit(iris)

        new_data = iris.head(2).copy()
        new_data["Species"] = ["setosa", "pumila"]
        predictors, _ = processor.transform(new_data, outcomes=False)

        assert predictors.iloc[0].tolist() == [1.0, 0.0, 0.0]
        assert predictors.iloc[1].tolist() == [0.0, 0.0, 0.0]

    def test_function_on_categorical_raises(self, iris):
        """Functions cannot be applied to categorical columns."""
        processor = FormulaProcessor("Sepal.Length ~ log(Species)", default_formula_blueprint())
        with pytest.raises(FormulaError, match="categorical"):
            processor.fit(iris)

    def test_formula_object_accepted(self, iris):
        """The processor accepts a parsed Formula."""
        formula = parse_formula("Sepal.Length ~ Species")
        processor = FormulaProcessor(formula, default_formula_blueprint())

        assert isinstance(processor.formula, Formula)
        assert processor.formula is formula
