import pytest

from wfnet.definition import Definition
from wfnet.errors import WorkflowError
from wfnet.manager import Manager, Storage
from wfnet.registry import Registry


class MockStorage:
    def __init__(self):
        self.states = {}

    def load_state(self, workflow_id):
        if workflow_id in self.states:
            return self.states[workflow_id]
        raise LookupError("workflow not found")

    def save_state(self, workflow_id, places):
        self.states[workflow_id] = list(places)

    def delete_state(self, workflow_id):
        self.states.pop(workflow_id, None)


class FailingStorage(MockStorage):
    def save_state(self, workflow_id, places):
        raise OSError("disk full")


@pytest.fixture
def definition():
    return Definition(["draft", "review", "published"], [])


@pytest.fixture
def setup():
    registry = Registry()
    storage = MockStorage()
    return registry, storage, Manager(registry, storage)


def test_new_manager():
    registry = Registry()
    storage = MockStorage()
    manager = Manager(registry, storage)
    assert manager.registry is registry
    assert manager.storage is storage
    assert isinstance(storage, Storage)


def test_create_workflow(setup, definition):
    registry, storage, manager = setup
    workflow = manager.create_workflow("test_workflow", definition, "draft")
    assert workflow.name == "test_workflow"
    assert registry.get("test_workflow") is workflow
    assert storage.load_state("test_workflow") == ["draft"]


def test_create_workflow_invalid_place(setup, definition):
    registry, storage, manager = setup
    with pytest.raises(WorkflowError, match="failed to create workflow"):
        manager.create_workflow("test_workflow", definition, "missing")
    assert not registry.has_workflow("test_workflow")


def test_create_workflow_storage_failure(definition):
    registry = Registry()
    manager = Manager(registry, FailingStorage())
    with pytest.raises(WorkflowError, match="failed to save initial state"):
        manager.create_workflow("test_workflow", definition, "draft")
    assert not registry.has_workflow("test_workflow")


def test_get_workflow(setup, definition):
    registry, storage, manager = setup
    with pytest.raises(WorkflowError):
        manager.get_workflow("non_existent", definition)
    workflow = manager.create_workflow("test_workflow", definition, "draft")
    assert manager.get_workflow("test_workflow", definition) is workflow


def test_save_workflow(setup, definition):
    registry, storage, manager = setup
    workflow = manager.create_workflow("test_workflow", definition, "draft")
    workflow.marking.places = ["review"]
    manager.save_workflow("test_workflow", workflow)
    assert storage.load_state("test_workflow") == ["review"]


def test_delete_workflow(setup, definition):
    registry, storage, manager = setup
    manager.create_workflow("test_workflow", definition, "draft")
    manager.delete_workflow("test_workflow")
    with pytest.raises(KeyError):
        registry.get("test_workflow")
    with pytest.raises(LookupError):
        storage.load_state("test_workflow")


def test_delete_unregistered_workflow_clears_storage(setup):
    registry, storage, manager = setup
    storage.save_state("orphan", ["draft"])
    manager.delete_workflow("orphan")
    assert "orphan" not in storage.states


def test_load_workflow(setup, definition):
    registry, storage, manager = setup
    with pytest.raises(WorkflowError, match="failed to load workflow state"):
        manager.load_workflow("non_existent", definition)

    storage.save_state("test_workflow", ["draft"])
    workflow = manager.load_workflow("test_workflow", definition)
    assert workflow.name == "test_workflow"
    assert registry.get("test_workflow") is workflow
    assert workflow.marking.places == ["draft"]


def test_load_workflow_restores_all_places(setup, definition):
    registry, storage, manager = setup
    storage.save_state("multi", ["review", "published"])
    workflow = manager.load_workflow("multi", definition)
    assert workflow.current_places == ["review", "published"]
    assert workflow.initial_place == "review"


def test_load_workflow_prefers_registry(setup, definition):
    registry, storage, manager = setup
    workflow = manager.create_workflow("test_workflow", definition, "draft")
    storage.save_state("test_workflow", ["published"])
    assert manager.load_workflow("test_workflow", definition) is workflow


def test_load_workflow_with_unknown_stored_place(setup, definition):
    registry, storage, manager = setup
    storage.save_state("bad", ["nowhere"])
    with pytest.raises(WorkflowError, match="failed to create workflow"):
        manager.load_workflow("bad", definition)
    assert not registry.has_workflow("bad")


def test_load_workflow_with_no_stored_places(setup, definition):
    registry, storage, manager = setup
    storage.save_state("empty", [])
    with pytest.raises(WorkflowError):
        manager.load_workflow("empty", definition)