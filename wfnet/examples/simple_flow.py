"""A three-place linear workflow: start -> middle -> end."""

from __future__ import annotations

from typing import Sequence

from wfnet.definition import Definition
from wfnet.event import Event, EventType
from wfnet.transition import Transition
from wfnet.workflow import Workflow


def build_workflow() -> Workflow:
    """A workflow named ``simple-flow`` standing in its ``start`` place."""
    definition = Definition(
        ["start", "middle", "end"],
        [
            Transition("to-middle", ["start"], ["middle"]),
            Transition("to-end", ["middle"], ["end"]),
        ],
    )
    return Workflow("simple-flow", definition, "start")


def _print_before(event: Event) -> None:
    print(f"Before transition: {event.transition.name}")


def _print_after(event: Event) -> None:
    print(f"After transition: {event.transition.name}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the workflow to its end, reporting each step and the diagram."""
    workflow = build_workflow()
    print(f"Initial place: {workflow.initial_place}")

    workflow.add_event_listener(EventType.BEFORE_TRANSITION, _print_before)
    workflow.add_event_listener(EventType.AFTER_TRANSITION, _print_after)

    workflow.apply(["middle"])
    workflow.apply(["end"])

    print("\nWorkflow Diagram:")
    print(workflow.diagram())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())