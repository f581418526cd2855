"""Configuration dataclasses for modelflow."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Self


class Mode(Enum):
    """Kind of outcome a model predicts."""

    REGRESSION = "regression"
    CLASSIFICATION = "classification"
    UNKNOWN = "unknown"


class DuplicatePolicy(Enum):
    """What happens when an action of the same kind is added twice."""

    OVERWRITE = "overwrite"
    ERROR = "error"


@dataclass(frozen=True)
class WorkflowConfig:
    """Configuration carried by a workflow.

    Attributes:
        duplicate_policy: Whether re-adding a preprocessor of the same kind, or
            a second model, silently replaces the existing action or raises.
            A preprocessor of a different kind always requires ``overwrite=True``.
        random_seed: Seed passed to engines that accept ``random_state`` or ``seed``.
        n_jobs: Number of parallel jobs for engines that accept ``n_jobs``.
    """

    duplicate_policy: DuplicatePolicy = DuplicatePolicy.OVERWRITE
    random_seed: int = 42
    n_jobs: int = -1

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.duplicate_policy, DuplicatePolicy):
            raise ValueError("duplicate_policy must be a DuplicatePolicy")
        if self.random_seed < 0:
            raise ValueError("random_seed must be non-negative")
        if self.n_jobs == 0 or self.n_jobs < -1:
            raise ValueError("n_jobs must be -1 or a positive integer")

    @classmethod
    def builder(cls) -> WorkflowConfigBuilder:
        """Create a builder for WorkflowConfig."""
        return WorkflowConfigBuilder()


class WorkflowConfigBuilder:
    """Builder for WorkflowConfig with fluent interface."""

    def __init__(self) -> None:
        self._duplicate_policy: DuplicatePolicy = DuplicatePolicy.OVERWRITE
        self._random_seed: int = 42
        self._n_jobs: int = -1

    def duplicate_policy(self, value: DuplicatePolicy | str) -> Self:
        """Set the duplicate-action policy."""
        self._duplicate_policy = DuplicatePolicy(value)
        return self

    def random_seed(self, value: int) -> Self:
        """Set the random seed."""
        self._random_seed = value
        return self

    def n_jobs(self, value: int) -> Self:
        """Set the number of parallel jobs."""
        self._n_jobs = value
        return self

    def build(self) -> WorkflowConfig:
        """Build the WorkflowConfig."""
        return WorkflowConfig(
            duplicate_policy=self._duplicate_policy,
            random_seed=self._random_seed,
            n_jobs=self._n_jobs,
        )
