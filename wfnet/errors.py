"""Exceptions raised by workflows, and the type used for places."""

from __future__ import annotations

from typing import TypeAlias

Place: TypeAlias = str
"""A place (state) in a workflow is identified by its name."""


class WorkflowError(Exception):
    """Base class for all workflow errors."""

    default_message = "workflow error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class TransitionNotAllowedError(WorkflowError):
    """The requested transition cannot be applied in the current marking."""

    default_message = "transition not allowed"


class InvalidPlaceError(WorkflowError, ValueError):
    """A place is not part of the workflow definition."""

    default_message = "invalid place"


class InvalidTransitionError(WorkflowError, ValueError):
    """A transition request is malformed or matches no transition."""

    default_message = "invalid transition"