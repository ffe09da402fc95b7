"""Workflow state kept in the ``website_workflows`` table of an SQLite database."""

from __future__ import annotations

import sqlite3
from typing import Sequence

from wfnet.errors import Place, WorkflowError


def _numeric_id(workflow_id: str) -> str:
    """The row id inside a workflow id such as ``website_approval_123``."""
    parts = workflow_id.split("_")
    if len(parts) < 3:
        raise ValueError(f"invalid workflow ID format: {workflow_id}")
    return parts[2]


class SQLiteStorage:
    """Stores the first marked place of a workflow in its table row."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def load_state(self, workflow_id: str) -> list[Place]:
        """The stored place of ``workflow_id``; LookupError if the row is missing."""
        row_id = _numeric_id(workflow_id)
        try:
            row = self._connection.execute(
                "SELECT state FROM website_workflows WHERE id = ?", (row_id,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise WorkflowError(f"failed to load state: {exc}") from exc
        if row is None:
            raise LookupError(f"workflow not found: {workflow_id}")
        return [row[0]]

    def save_state(self, workflow_id: str, places: Sequence[Place]) -> None:
        """Write the first of ``places`` as the row's state."""
        if not places:
            raise ValueError("no places to save")
        row_id = _numeric_id(workflow_id)
        try:
            with self._connection:
                self._connection.execute(
                    "UPDATE website_workflows SET state = ? WHERE id = ?",
                    (str(places[0]), row_id),
                )
        except sqlite3.Error as exc:
            raise WorkflowError(f"failed to save state: {exc}") from exc

    def delete_state(self, workflow_id: str) -> None:
        """Delete the row of ``workflow_id``."""
        row_id = _numeric_id(workflow_id)
        try:
            with self._connection:
                self._connection.execute(
                    "DELETE FROM website_workflows WHERE id = ?", (row_id,)
                )
        except sqlite3.Error as exc:
            raise WorkflowError(f"failed to delete state: {exc}") from exc