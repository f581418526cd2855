"""Formula preprocessing.

Parses R-style model formulas (``y ~ x1 + log(x2)``, ``y ~ .``) and encodes a
DataFrame into a predictors table and an outcomes table according to a
FormulaBlueprint.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
from scipy import sparse
from sklearn.preprocessing import OneHotEncoder

from ..errors import FormulaError
from .blueprint import FormulaBlueprint

logger = logging.getLogger(__name__)

INTERCEPT_COLUMN = "(Intercept)"

_FUNCTIONS: dict[str, Any] = {
    "log": np.log,
    "log2": np.log2,
    "log10": np.log10,
    "log1p": np.log1p,
    "exp": np.exp,
    "sqrt": np.sqrt,
    "abs": np.abs,
}

_NAME = r"`[^`]+`|[A-Za-z_.][A-Za-z0-9_.]*"
_FACTOR_RE = re.compile(rf"^(?:(?P<fn>[A-Za-z_][A-Za-z0-9_]*)\(\s*(?P<arg>{_NAME})\s*\)|(?P<name>{_NAME}))$")


@dataclass(frozen=True)
class TermFactor:
    """A single column reference, optionally wrapped in a function."""

    column: str
    function: str | None = None

    @property
    def label(self) -> str:
        if self.function is None:
            return self.column
        return f"{self.function}({self.column})"


@dataclass(frozen=True)
class Term:
    """A right-hand-side term: one factor, or an interaction of several."""

    factors: tuple[TermFactor, ...]

    @property
    def label(self) -> str:
        return ":".join(f.label for f in self.factors)

    @property
    def is_simple(self) -> bool:
        return len(self.factors) == 1 and self.factors[0].function is None


@dataclass(frozen=True)
class Formula:
    """A parsed model formula.

    Attributes:
        expression: The original formula text.
        outcomes: Outcome column names from the left-hand side.
        terms: Terms added on the right-hand side. ``None`` marks a ``.``.
        removed: Terms subtracted on the right-hand side.
    """

    expression: str
    outcomes: tuple[str, ...]
    terms: tuple[Term | None, ...]
    removed: tuple[Term, ...] = ()

    def __str__(self) -> str:
        return self.expression


def parse_formula(expression: str | Formula) -> Formula:
    """Parse a formula string.

    Args:
        expression: Formula text such as ``"mpg ~ cyl + log(disp)"``.

    Returns:
        The parsed Formula. A Formula passed in is returned unchanged.

    Raises:
        FormulaError: If the text is not a valid formula.
    """
    if isinstance(expression, Formula):
        return expression
    if not isinstance(expression, str):
        raise FormulaError(repr(expression), "formula must be a string")

    if expression.count("~") != 1:
        raise FormulaError(expression, "formula must contain exactly one '~'")

    lhs, rhs = (part.strip() for part in expression.split("~"))
    if not lhs:
        raise FormulaError(expression, "formula must name at least one outcome")
    if not rhs:
        raise FormulaError(expression, "formula must have a right-hand side")

    outcomes: list[str] = []
    for sign, text in _split_terms(expression, lhs):
        if sign != "+":
            raise FormulaError(expression, "outcomes cannot be subtracted")
        factor = _parse_factor(expression, text)
        if factor.function is not None:
            raise FormulaError(expression, f"outcome '{text}' must be a plain column name")
        outcomes.append(factor.column)

    terms: list[Term | None] = []
    removed: list[Term] = []
    for sign, text in _split_terms(expression, rhs):
        if text in {"0", "1"}:
            raise FormulaError(
                expression,
                "intercept terms are not allowed; use the blueprint's `intercept` option",
            )
        if text == ".":
            if sign == "-":
                raise FormulaError(expression, "'.' cannot be subtracted")
            terms.append(None)
            continue
        term = Term(tuple(_parse_factor(expression, part.strip()) for part in text.split(":")))
        if sign == "+":
            terms.append(term)
        else:
            removed.append(term)

    return Formula(
        expression=expression,
        outcomes=tuple(outcomes),
        terms=tuple(terms),
        removed=tuple(removed),
    )


def _split_terms(expression: str, side: str) -> list[tuple[str, str]]:
    """Split one side of a formula on top-level ``+`` and ``-``."""
    parts: list[tuple[str, str]] = []
    depth = 0
    quoted = False
    sign = "+"
    current: list[str] = []

    for char in side:
        if char == "`":
            quoted = not quoted
        elif not quoted and char == "(":
            depth += 1
        elif not quoted and char == ")":
            depth -= 1
            if depth < 0:
                raise FormulaError(expression, "unbalanced parentheses")
        elif not quoted and depth == 0 and char in "+-":
            text = "".join(current).strip()
            if text:
                parts.append((sign, text))
            elif parts or sign == "-":
                raise FormulaError(expression, "empty term")
            sign = char
            current = []
            continue
        current.append(char)

    if depth != 0 or quoted:
        raise FormulaError(expression, "unbalanced parentheses or backticks")

    text = "".join(current).strip()
    if not text:
        raise FormulaError(expression, "empty term")
    parts.append((sign, text))
    return parts


def _parse_factor(expression: str, text: str) -> TermFactor:
    match = _FACTOR_RE.match(text)
    if match is None:
        raise FormulaError(expression, f"cannot parse term '{text}'")

    if match.group("fn") is not None:
        function = match.group("fn")
        if function not in _FUNCTIONS:
            raise FormulaError(
                expression,
                f"unsupported function '{function}'. Available: {sorted(_FUNCTIONS)}",
            )
        return TermFactor(column=_unquote(match.group("arg")), function=function)

    name = match.group("name")
    if name == ".":
        raise FormulaError(expression, "'.' cannot be used inside a term")
    return TermFactor(column=_unquote(name))


def _unquote(name: str) -> str:
    if name.startswith("`") and name.endswith("`"):
        return name[1:-1]
    return name


def is_categorical(series: pd.Series) -> bool:
    """Whether a column is treated as categorical (object, category or bool)."""
    return pd.api.types.is_bool_dtype(series) or not pd.api.types.is_numeric_dtype(series)


def _levels(series: pd.Series) -> list[Any]:
    if isinstance(series.dtype, pd.CategoricalDtype):
        return list(series.cat.categories)
    return sorted(series.dropna().unique().tolist(), key=str)


class FormulaProcessor:
    """Fitted formula state used to mold training data and forge new data.

    The processor must be fit on training data before transforming. It keeps
    the resolved terms, the categorical levels seen at fit time, and the
    indicator encoders, so new data is encoded exactly like the training data.
    """

    def __init__(self, formula: str | Formula, blueprint: FormulaBlueprint) -> None:
        """Initialize processor.

        Args:
            formula: Formula text or parsed Formula.
            blueprint: Encoding options.
        """
        self.formula = parse_formula(formula)
        self.blueprint = blueprint
        self._terms: list[Term] = []
        self._levels: dict[str, list[Any]] = {}
        self._encoders: dict[str, OneHotEncoder] = {}
        self._column_names: list[str] = []
        self._is_fitted = False

    @property
    def is_fitted(self) -> bool:
        """Whether the processor has been fitted."""
        return self._is_fitted

    @property
    def outcome_names(self) -> list[str]:
        """Outcome column names."""
        return list(self.formula.outcomes)

    @property
    def term_labels(self) -> list[str]:
        """Labels of the resolved right-hand-side terms."""
        return [t.label for t in self._terms]

    @property
    def predictor_names(self) -> list[str]:
        """Original columns the predictors are computed from."""
        names: list[str] = []
        for term in self._terms:
            for factor in term.factors:
                if factor.column not in names:
                    names.append(factor.column)
        return names

    @property
    def column_names(self) -> list[str]:
        """Encoded predictor column names."""
        return self._column_names.copy()

    @property
    def levels(self) -> dict[str, list[Any]]:
        """Categorical levels per column seen at fit time."""
        return {k: v.copy() for k, v in self._levels.items()}

    def fit(self, data: pd.DataFrame) -> FormulaProcessor:
        """Resolve terms and learn categorical levels from training data.

        Args:
            data: Training DataFrame.

        Returns:
            Self for method chaining.

        Raises:
            FormulaError: If the formula references unknown columns or
                combines terms in an unsupported way.
        """
        self._check_columns(data, self.formula.outcomes, "outcome")
        self._terms = self._resolve_terms(data)
        self._check_columns(data, self.predictor_names, "predictor")

        self._levels = {}
        self._encoders = {}
        for term in self._terms:
            categorical = [f.column for f in term.factors if is_categorical(data[f.column])]
            if not categorical:
                continue
            if not term.is_simple:
                raise FormulaError(
                    self.formula.expression,
                    f"term '{term.label}' applies a function or interaction to "
                    f"categorical column(s) {categorical}",
                )
            column = term.factors[0].column
            self._levels[column] = _levels(data[column])
            if self.blueprint.indicators:
                self._encoders[column] = self._build_encoder(column)

        self._is_fitted = True
        self._column_names = list(self._encode(data).columns)
        logger.debug(
            "Resolved formula '%s' to terms %s (%d encoded columns)",
            self.formula.expression,
            self.term_labels,
            len(self._column_names),
        )
        return self

    def transform(
        self,
        data: pd.DataFrame,
        outcomes: bool = True,
    ) -> tuple[pd.DataFrame, pd.DataFrame | None]:
        """Encode predictors and optionally outcomes.

        Args:
            data: DataFrame holding the predictor (and outcome) columns.
            outcomes: Whether to also extract the outcome columns.

        Returns:
            Tuple of (predictors, outcomes). outcomes is None if not requested.

        Raises:
            ValueError: If the processor is not fitted.
            FormulaError: If columns are missing or novel levels are not allowed.
        """
        if not self._is_fitted:
            raise ValueError("FormulaProcessor must be fitted before transform")

        self._check_columns(data, self.predictor_names, "predictor")
        self._check_novel_levels(data)
        predictors = self._encode(data)

        outcome_frame: pd.DataFrame | None = None
        if outcomes:
            self._check_columns(data, self.formula.outcomes, "outcome")
            outcome_frame = data.loc[:, list(self.formula.outcomes)].copy()

        return predictors, outcome_frame

    def fit_transform(self, data: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
        """Fit and transform in one step."""
        self.fit(data)
        predictors, outcomes = self.transform(data, outcomes=True)
        assert outcomes is not None
        return predictors, outcomes

    def _resolve_terms(self, data: pd.DataFrame) -> list[Term]:
        resolved: list[Term] = []
        for term in self.formula.terms:
            if term is None:
                expanded = [
                    Term((TermFactor(str(c)),))
                    for c in data.columns
                    if str(c) not in self.formula.outcomes
                ]
            else:
                expanded = [term]
            for candidate in expanded:
                if candidate.label not in {t.label for t in resolved}:
                    resolved.append(candidate)

        removed = {t.label for t in self.formula.removed}
        resolved = [t for t in resolved if t.label not in removed]

        if not resolved:
            raise FormulaError(self.formula.expression, "no predictors remain after expansion")
        return resolved

    def _check_columns(self, data: pd.DataFrame, columns: Any, role: str) -> None:
        missing = [c for c in columns if c not in data.columns]
        if missing:
            raise FormulaError(
                self.formula.expression,
                f"{role} column(s) {missing} not found. Available columns: {list(data.columns)}",
            )

    def _check_novel_levels(self, data: pd.DataFrame) -> None:
        if self.blueprint.allow_novel_levels:
            return
        for column, levels in self._levels.items():
            known = set(levels)
            novel = [v for v in data[column].dropna().unique().tolist() if v not in known]
            if novel:
                raise FormulaError(
                    self.formula.expression,
                    f"novel level(s) {novel} in column '{column}'",
                )

    def _build_encoder(self, column: str) -> OneHotEncoder:
        levels = self._levels[column]
        encoder = OneHotEncoder(
            categories=[np.array(levels, dtype=object)],
            drop="first" if self.blueprint.intercept and len(levels) > 1 else None,
            handle_unknown="ignore",
            sparse_output=False,
        )
        encoder.fit(pd.DataFrame({column: pd.Series(levels, dtype=object)}))
        return encoder

    def _encode(self, data: pd.DataFrame) -> pd.DataFrame:
        columns: dict[str, Any] = {}
        if self.blueprint.intercept:
            columns[INTERCEPT_COLUMN] = np.ones(len(data))

        for term in self._terms:
            if term.label in self._levels:
                columns.update(self._encode_categorical(term.label, data[term.label]))
                continue

            values = np.ones(len(data))
            for factor in term.factors:
                column = np.asarray(data[factor.column], dtype=float)
                if factor.function is not None:
                    column = _FUNCTIONS[factor.function](column)
                values = values * column
            columns[term.label] = values

        return pd.DataFrame(columns, index=data.index)

    def _encode_categorical(self, column: str, series: pd.Series) -> dict[str, Any]:
        levels = self._levels[column]
        if column not in self._encoders:
            return {column: pd.Categorical(series, categories=levels)}

        encoder = self._encoders[column]
        result = encoder.transform(pd.DataFrame({column: series.astype(object)}))
        if sparse.issparse(result):
            matrix = result.toarray()  # type: ignore[union-attr]
        else:
            matrix = np.asarray(result)

        kept = list(levels)
        if encoder.drop_idx_ is not None and encoder.drop_idx_[0] is not None:
            del kept[int(encoder.drop_idx_[0])]
        return {f"{column}{level}": matrix[:, i] for i, level in enumerate(kept)}
