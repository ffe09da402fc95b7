# wfnet

`wfnet` models processes as workflows built from **places** and
**transitions**, in the style of a Petri net. A workflow can stand in several
places at once, so it handles forks (one place splitting into parallel
branches) and joins (several branches merging back) as well as plain
step-by-step flows.

It provides:

- validated definitions: every place a transition names must be declared;
- constraints and guard listeners that can stop a transition before it happens;
- listeners called before and after each transition;
- a per-workflow context for handing your own data to listeners;
- a thread-safe registry of workflow instances;
- a manager that persists workflow state through a pluggable storage, with an
  SQLite storage included;
- Mermaid `stateDiagram-v2` output with the current places highlighted.

It needs Python 3.10 or later and nothing outside the standard library.

## Installation

```
pip install wfnet
```

To run the test suite:

```
pip install "wfnet[test]"
pytest
```

## A first workflow

```python
from wfnet.definition import Definition
from wfnet.transition import Transition
from wfnet.workflow import Workflow

definition = Definition(
    ["start", "middle", "end"],
    [
        Transition("to-middle", ["start"], ["middle"]),
        Transition("to-end", ["middle"], ["end"]),
    ],
)

workflow = Workflow("simple-flow", definition, "start")

workflow.apply(["middle"])
workflow.apply(["end"])

print(workflow.current_places)   # ['end']
print(workflow.diagram())
```

A transition is chosen by the places it leads to: `apply(["middle"])` looks
for an enabled transition whose target places are exactly `["middle"]`, in
that order. `enabled_transitions()` lists the transitions whose source places
are all currently marked. Applying a transition removes its source places
from the marking and appends its target places.

A `Workflow` also exposes `name`, `definition`, `initial_place`, `marking`
(which may be replaced by another `Marking`, but not by `None`) and
`context`, a plain dict.

`Definition` raises `InvalidPlaceError` if a transition names an undeclared
place. It offers `all_places()`, `all_transitions()`, `transition(name)`
(the first transition of that name, or `None`) and `has_place(place)`.
`Transition` raises `ValueError` for an empty name, empty source or target
places, or a place repeated within its sources or targets; each transition
carries a free-form `metadata` dict.

## Checking before applying

`check(to)` raises if a move to `to` cannot be made now:

- `InvalidTransitionError` when no target places are given;
- `InvalidPlaceError` when a target place is not part of the definition;
- `TransitionNotAllowedError` when no enabled transition leads exactly
  there, or a guard listener marks the guard event as blocking.

`can(to)` runs the same checks and returns `False` instead of raising a
`WorkflowError`; any other exception raised by a constraint or guard listener
still propagates. `apply` performs `check` first, so it raises the same
errors.

All these errors derive from `WorkflowError` in `wfnet.errors`;
`InvalidPlaceError` and `InvalidTransitionError` are also `ValueError`s.

## Forks and joins

```python
definition = Definition(
    ["start", "branch1", "branch2", "end"],
    [
        Transition("fork", ["start"], ["branch1", "branch2"]),
        Transition("merge", ["branch1", "branch2"], ["end"]),
    ],
)
workflow = Workflow("parallel", definition, "start")
workflow.apply(["branch1", "branch2"])  # now in both branches
workflow.apply(["end"])                 # both branches join
```

In the diagram, a transition with several targets is drawn through a
`<name>_fork` state and one with several sources through a `<name>_join`
state.

## Constraints, guards and listeners

```python
from wfnet.errors import WorkflowError
from wfnet.event import EventType

def before(event):
    print("leaving", event.from_places, "for", event.to_places)

def guard(event):
    if event.get_context("user") is None:
        event.blocking = True

workflow.add_event_listener(EventType.BEFORE_TRANSITION, before)
workflow.add_guard_event_listener(guard)
workflow.context["user"] = "alice"
```

`EventType` has `BEFORE_TRANSITION`, `AFTER_TRANSITION` and `GUARD`;
`add_event_listener` also accepts their string values. Each listener receives
an `Event` with `type`, `transition`, `from_places`, `to_places`, `workflow`
and `context`, and `get_context(key, default=None)` to read the context.
Guard listeners receive a `GuardEvent`, whose `blocking` flag turns the check
into a `TransitionNotAllowedError`. An exception raised by any listener
propagates out of `check` or `apply`. `remove_event_listener(event_type,
listener)` removes the first registration of that same listener object.

Constraints belong to a single transition, added with
`Transition.add_constraint`. A constraint is any object with a
`validate(event)` method that raises to refuse the transition; they are run,
in order, on the guard event before the guard listeners.

## Markings

A `Marking` (in `wfnet.marking`) holds the places a workflow currently
occupies. Its `places` property returns a copy and can be assigned.
`has_place`, `add_place` (a no-op for a place already marked) and
`remove_place` (`ValueError` for an unmarked place) change it, and it
supports `in`, iteration and `len`. `to_json()` writes the places as a JSON
array; `marking_from_json(data)` reads one back, treating `null` as empty
and raising `ValueError` for anything other than an array of strings.

## Keeping many workflows

```python
from wfnet.manager import Manager
from wfnet.registry import Registry

class MemoryStorage:
    def __init__(self):
        self.states = {}

    def load_state(self, workflow_id):
        return self.states[workflow_id]

    def save_state(self, workflow_id, places):
        self.states[workflow_id] = list(places)

    def delete_state(self, workflow_id):
        self.states.pop(workflow_id, None)

registry = Registry()
manager = Manager(registry, MemoryStorage())

workflow = manager.create_workflow("doc_1", definition, "start")
workflow.apply(["branch1", "branch2"])
manager.save_workflow("doc_1", workflow)

same = manager.get_workflow("doc_1", definition)
manager.delete_workflow("doc_1")
```

The storage is any object with `load_state`, `save_state` and
`delete_state`, as described by the `Storage` protocol in `wfnet.manager`.
`get_workflow` and `load_workflow` return the registered instance if there
is one, otherwise rebuild it from the stored places (starting from the first
one) and register it; a failure to load or build raises `WorkflowError`.
`create_workflow` stores the initial place and registers the new instance.

`Registry` can also be used on its own: `add_workflow` (`ValueError` for
`None` or a name already taken), `get` and `remove_workflow` (`KeyError` for
an unknown name), `list_workflows`, `has_workflow`, `in` and `len`. It is
safe to share between threads.

### SQLite storage

`wfnet.storage.sqlite.SQLiteStorage` takes an open `sqlite3.Connection` and
keeps state in the `state` column of a `website_workflows` table keyed by
`id`. Workflow ids take the form `<prefix>_<kind>_<row id>`, for example
`website_approval_42`; the third underscore-separated part selects the row,
and an id with fewer parts raises `ValueError`.

```python
import sqlite3
from wfnet.storage.sqlite import SQLiteStorage

connection = sqlite3.connect("workflows.db")
connection.execute(
    "CREATE TABLE IF NOT EXISTS website_workflows (id INTEGER PRIMARY KEY, state TEXT NOT NULL)"
)
connection.execute("INSERT INTO website_workflows (id, state) VALUES (42, 'start')")
connection.commit()

storage = SQLiteStorage(connection)
storage.load_state("website_approval_42")   # ['start']
```

Only the first marked place is saved, and saving updates an existing row
only. `load_state` raises `LookupError` for a missing row; database errors
are raised as `WorkflowError`.

## Examples

Three runnable examples come with the package:

```
wfnet-simple-flow
wfnet-document-approval
wfnet-order-processing --success-rate 0.8 --seed 1
```

- `wfnet-simple-flow` walks the three-place flow above, printing each
  transition and the diagram.
- `wfnet-document-approval` runs a document through parallel technical and
  legal review, an automatic move to manager approval once both reviews are
  approved, director approval and archiving, then prints the diagram.
- `wfnet-order-processing` takes an order through payment with a simulated
  processor (succeeding with probability `--success-rate`, default 0.8, from
  a random generator seeded by `--seed`) and one retry, then inventory
  checks, shipping and delivery, printing the final status and diagram.

The same programs are available as `main()` in `wfnet.examples.simple_flow`,
`wfnet.examples.document_approval` and `wfnet.examples.order_processing`.

## What it does not do

- There is no web interface or HTTP API for managing workflows; the package
  is a library with three console examples.
- `SQLiteStorage` does not create its table or insert rows, and keeps no
  history of transitions; the application owns the schema.
- Nothing is persisted unless you call the manager's methods; a `Workflow`
  on its own lives only in memory.