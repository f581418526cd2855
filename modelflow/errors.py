"""Exception hierarchy for modelflow."""

from __future__ import annotations


class WorkflowError(Exception):
    """Base exception for modelflow."""

    pass


class DuplicateActionError(WorkflowError):
    """An action was added to a workflow that already holds one."""

    def __init__(self, action: str, existing: str) -> None:
        self.action = action
        self.existing = existing
        super().__init__(
            f"Cannot add a {action} to a workflow that already has a {existing}. "
            "Pass `overwrite=True` to replace it."
        )


class DuplicatePreprocessorError(DuplicateActionError):
    """A preprocessor was added while another one is already present."""

    pass


class DuplicateModelError(DuplicateActionError):
    """A model was added while another one is already present."""

    def __init__(self) -> None:
        super().__init__("model", "model")


class MissingPreprocessorError(WorkflowError):
    """Fitting was attempted without a formula or recipe."""

    def __init__(self) -> None:
        super().__init__("The workflow must have a formula or recipe preprocessor.")


class MissingModelError(WorkflowError):
    """Fitting was attempted without a model specification."""

    def __init__(self) -> None:
        super().__init__("The workflow must have a model.")


class MissingDataError(WorkflowError):
    """No usable dataset was passed to the preprocessing phase."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        message = "`data` must be provided to fit a workflow."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class MissingArtifactError(WorkflowError):
    """Model fitting was attempted before preprocessing produced a mold."""

    def __init__(self) -> None:
        super().__init__(
            "The workflow does not have a mold. `fit_pre()` must succeed before `fit_model()`."
        )


class WrongPreprocessorKindError(WorkflowError):
    """A recipe-only operation was called on a formula workflow."""

    def __init__(self, expected: str, actual: str | None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"The workflow must have a {expected} preprocessor.")


class NotPresentError(WorkflowError):
    """An extractor was called before the element exists."""

    def __init__(self, element: str, hint: str | None = None) -> None:
        self.element = element
        self.hint = hint
        message = f"The workflow does not have a {element}."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class FormulaError(WorkflowError):
    """A formula could not be parsed or resolved against the data."""

    def __init__(self, formula: str, message: str) -> None:
        self.formula = formula
        self.message = message
        super().__init__(f"Invalid formula '{formula}': {message}")


class RecipeError(WorkflowError):
    """A recipe step failed while prepping or baking."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        self.message = message
        super().__init__(f"Recipe step '{step}' failed: {message}")


class EngineError(WorkflowError):
    """The model engine is unknown, unsupported, or not installed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Engine error: {message}")


class NotFittedError(WorkflowError):
    """Prediction was attempted on a workflow that has not been fit."""

    def __init__(self) -> None:
        super().__init__("The workflow has not been fit. Call `fit()` before `predict()`.")


class ArtifactNotFoundError(WorkflowError):
    """Saved workflow file not found."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Workflow file not found: {path}")
