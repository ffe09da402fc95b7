"""Workflow instances kept in a registry and persisted through a storage."""

from __future__ import annotations

from contextlib import suppress
from typing import Protocol, Sequence, runtime_checkable

from wfnet.definition import Definition
from wfnet.errors import Place, WorkflowError
from wfnet.registry import Registry
from wfnet.workflow import Workflow


@runtime_checkable
class Storage(Protocol):
    """Persistence for workflow markings, keyed by workflow id."""

    def load_state(self, workflow_id: str) -> list[Place]:
        """Return the stored places of ``workflow_id``; raise if unknown."""
        ...

    def save_state(self, workflow_id: str, places: Sequence[Place]) -> None:
        """Store ``places`` as the state of ``workflow_id``."""
        ...

    def delete_state(self, workflow_id: str) -> None:
        """Remove the stored state of ``workflow_id``."""
        ...


class Manager:
    """Creates, loads, saves and deletes workflow instances."""

    def __init__(self, registry: Registry, storage: Storage) -> None:
        self._registry = registry
        self._storage = storage

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def storage(self) -> Storage:
        return self._storage

    def _registered(self, workflow_id: str) -> Workflow | None:
        try:
            return self._registry.get(workflow_id)
        except KeyError:
            return None

    def load_workflow(self, workflow_id: str, definition: Definition) -> Workflow:
        """Return the registered instance, or rebuild it from stored state."""
        workflow = self._registered(workflow_id)
        if workflow is not None:
            return workflow

        try:
            places = list(self._storage.load_state(workflow_id))
        except Exception as exc:
            raise WorkflowError(f"failed to load workflow state: {exc}") from exc
        if not places:
            raise WorkflowError("failed to create workflow: no stored places")

        try:
            workflow = Workflow(workflow_id, definition, places[0])
        except (WorkflowError, ValueError) as exc:
            raise WorkflowError(f"failed to create workflow: {exc}") from exc
        workflow.marking.places = places

        with suppress(ValueError):
            self._registry.add_workflow(workflow)
        return workflow

    def save_workflow(self, workflow_id: str, workflow: Workflow) -> None:
        """Persist the current places of ``workflow``."""
        self._storage.save_state(workflow_id, workflow.marking.places)

    def get_workflow(self, workflow_id: str, definition: Definition) -> Workflow:
        """The registered instance, loaded from storage when not yet registered."""
        workflow = self._registered(workflow_id)
        if workflow is not None:
            return workflow
        return self.load_workflow(workflow_id, definition)

    def create_workflow(
        self, workflow_id: str, definition: Definition, initial_place: Place
    ) -> Workflow:
        """Create a new instance, store its initial state and register it."""
        try:
            workflow = Workflow(workflow_id, definition, initial_place)
        except (WorkflowError, ValueError) as exc:
            raise WorkflowError(f"failed to create workflow: {exc}") from exc

        try:
            self._storage.save_state(workflow_id, [initial_place])
        except Exception as exc:
            raise WorkflowError(f"failed to save initial state: {exc}") from exc

        with suppress(ValueError):
            self._registry.add_workflow(workflow)
        return workflow

    def delete_workflow(self, workflow_id: str) -> None:
        """Forget the instance and remove its stored state."""
        with suppress(KeyError):
            self._registry.remove_workflow(workflow_id)
        self._storage.delete_state(workflow_id)