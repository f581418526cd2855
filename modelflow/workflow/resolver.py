"""Blueprint resolution.

A model engine can declare how it wants categorical predictors encoded. The
resolver reconciles that preference with the preprocessor's blueprint right
before the preprocessing phase runs.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..core import FormulaAction, PreprocessorAction, SupportsEncoding
from ..preprocessing import Blueprint

logger = logging.getLogger(__name__)


def resolve_blueprint(
    action: PreprocessorAction,
    spec: SupportsEncoding | None = None,
) -> Blueprint:
    """Return the blueprint to preprocess with.

    Only a formula preprocessor whose blueprint was not supplied by the
    caller is adjusted, and only when the model reports encoding info.
    Every other combination returns ``action.blueprint`` itself.

    Args:
        action: The workflow's preprocessor action.
        spec: The model specification, or None if no model is attached.

    Returns:
        The effective blueprint.
    """
    blueprint = action.blueprint

    if not isinstance(action, FormulaAction):
        return blueprint
    if action.blueprint_supplied:
        logger.debug("Keeping user supplied formula blueprint")
        return blueprint
    if spec is None:
        return blueprint

    info = spec.required_encoding()
    if info is None:
        logger.debug("No encoding info from the model, keeping the default blueprint")
        return blueprint

    logger.debug("Setting formula blueprint indicators=%s from model encoding", info.indicators)
    return replace(blueprint, indicators=info.indicators)
