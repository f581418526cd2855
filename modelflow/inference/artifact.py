"""Workflow artifact serialization and deserialization."""

from __future__ import annotations

import logging
import pickle
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ..core import Workflow
from ..errors import ArtifactNotFoundError
from ..workflow import validate_has_fit, validate_is_workflow

logger = logging.getLogger(__name__)

# Current artifact version
ARTIFACT_VERSION = "1.0"


@dataclass
class WorkflowArtifact:
    """A trained workflow plus the metadata written alongside it.

    Attributes:
        version: Artifact format version.
        workflow: The trained workflow, mold and model fit included.
        saved_at: ISO timestamp of when the artifact was written.
    """

    version: str
    workflow: Workflow
    saved_at: str


def create_artifact(workflow: Workflow) -> WorkflowArtifact:
    """Wrap a trained workflow in a new artifact.

    Raises:
        NotFittedError: If the workflow has not been fit.
    """
    validate_is_workflow(workflow)
    validate_has_fit(workflow)
    return WorkflowArtifact(
        version=ARTIFACT_VERSION,
        workflow=workflow,
        saved_at=datetime.now().isoformat(),
    )


def save_workflow(workflow: Workflow, path: str | Path) -> Path:
    """Save a trained workflow to disk.

    Args:
        workflow: The trained workflow.
        path: Path to save the artifact (typically .pkl extension).

    Returns:
        The path written.

    Raises:
        NotFittedError: If the workflow has not been fit.
    """
    artifact = create_artifact(workflow)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "wb") as f:
        pickle.dump(artifact, f, protocol=pickle.HIGHEST_PROTOCOL)

    logger.info("Saved workflow to %s", path)
    return path


def load_artifact(path: str | Path) -> WorkflowArtifact:
    """Load a workflow artifact from disk.

    Raises:
        ArtifactNotFoundError: If the file does not exist.
        TypeError: If the file does not hold a WorkflowArtifact.
    """
    path = Path(path)

    if not path.exists():
        raise ArtifactNotFoundError(str(path))

    with open(path, "rb") as f:
        artifact = pickle.load(f)

    if not isinstance(artifact, WorkflowArtifact):
        raise TypeError(f"{path} does not contain a workflow artifact")
    if artifact.version != ARTIFACT_VERSION:
        logger.warning(
            "Artifact version %s differs from current version %s",
            artifact.version,
            ARTIFACT_VERSION,
        )
    return artifact


def load_workflow(path: str | Path) -> Workflow:
    """Load a trained workflow saved with ``save_workflow()``.

    Raises:
        ArtifactNotFoundError: If the file does not exist.
    """
    return load_artifact(path).workflow
