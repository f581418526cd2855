"""Inference module - saving and loading trained workflows."""

from .artifact import (
    ARTIFACT_VERSION,
    WorkflowArtifact,
    create_artifact,
    load_artifact,
    load_workflow,
    save_workflow,
)

__all__ = [
    "ARTIFACT_VERSION",
    "WorkflowArtifact",
    "create_artifact",
    "save_workflow",
    "load_artifact",
    "load_workflow",
]
