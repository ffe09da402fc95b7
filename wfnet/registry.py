"""A thread-safe collection of named workflow instances."""

from __future__ import annotations

import threading

from wfnet.workflow import Workflow


class Registry:
    """Holds workflows by name; safe to use from several threads."""

    def __init__(self) -> None:
        self._workflows: dict[str, Workflow] = {}
        self._lock = threading.RLock()

    def add_workflow(self, workflow: Workflow | None) -> None:
        """Register ``workflow`` under its name.

        Raises ValueError for None or when the name is already taken.
        """
        if workflow is None:
            raise ValueError("workflow cannot be None")
        with self._lock:
            name = workflow.name
            if name in self._workflows:
                raise ValueError(f"workflow with name {name} already exists")
            self._workflows[name] = workflow

    def get(self, name: str) -> Workflow:
        """The workflow called ``name``; KeyError if there is none."""
        with self._lock:
            try:
                return self._workflows[name]
            except KeyError:
                raise KeyError(f"workflow {name} not found") from None

    def remove_workflow(self, name: str) -> None:
        """Forget the workflow called ``name``; KeyError if there is none."""
        with self._lock:
            if name not in self._workflows:
                raise KeyError(f"workflow {name} not found")
            del self._workflows[name]

    def list_workflows(self) -> list[str]:
        """The names of all registered workflows."""
        with self._lock:
            return list(self._workflows)

    def has_workflow(self, name: str) -> bool:
        """Whether a workflow called ``name`` is registered."""
        with self._lock:
            return name in self._workflows

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._workflows

    def __len__(self) -> int:
        with self._lock:
            return len(self._workflows)