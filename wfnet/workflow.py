"""A workflow instance: a marking moved through a definition's transitions."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

from wfnet.definition import Definition
from wfnet.errors import (
    InvalidPlaceError,
    InvalidTransitionError,
    Place,
    TransitionNotAllowedError,
    WorkflowError,
)
from wfnet.event import Event, EventType, GuardEvent
from wfnet.marking import Marking
from wfnet.transition import Transition

Listener = Callable[[Any], None]


class Workflow:
    """A named workflow instance holding its marking, listeners and context."""

    def __init__(
        self, name: str, definition: Definition | None, initial_place: Place
    ) -> None:
        if not name:
            raise ValueError("workflow name cannot be empty")
        if definition is None:
            raise ValueError("workflow definition cannot be None")
        if not definition.has_place(initial_place):
            raise InvalidPlaceError(
                f"initial place {initial_place} is not defined in the workflow"
            )
        self._name = name
        self._definition = definition
        self._initial_place = initial_place
        self._marking = Marking([initial_place])
        self._listeners: dict[EventType, list[Listener]] = {}
        self.context: dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def definition(self) -> Definition:
        return self._definition

    @property
    def initial_place(self) -> Place:
        return self._initial_place

    @property
    def marking(self) -> Marking:
        return self._marking

    @marking.setter
    def marking(self, marking: Marking | None) -> None:
        if marking is None:
            raise ValueError("marking cannot be None")
        self._marking = marking

    @property
    def current_places(self) -> list[Place]:
        """A copy of the places currently marked."""
        return self._marking.places

    def add_event_listener(self, event_type: EventType | str, listener: Listener) -> None:
        """Register ``listener`` for events of ``event_type``."""
        self._listeners.setdefault(EventType(event_type), []).append(listener)

    def add_guard_event_listener(self, listener: Listener) -> None:
        """Register a listener called with a GuardEvent before each transition."""
        self.add_event_listener(EventType.GUARD, listener)

    def remove_event_listener(self, event_type: EventType | str, listener: Listener) -> None:
        """Remove the first registration of ``listener``; unknown ones are ignored."""
        listeners = self._listeners.get(EventType(event_type), [])
        for index, registered in enumerate(listeners):
            if registered is listener:
                del listeners[index]
                break

    def _listeners_for(self, event_type: EventType) -> list[Listener]:
        return list(self._listeners.get(event_type, ()))

    def _validate_places(self, places: Iterable[Place]) -> None:
        for place in places:
            if not self._definition.has_place(place):
                raise InvalidPlaceError()

    def _is_enabled(self, transition: Transition, current: Sequence[Place]) -> bool:
        return all(place in current for place in transition.from_places)

    def enabled_transitions(self) -> list[Transition]:
        """Transitions whose 'from' places are all currently marked."""
        current = self._marking.places
        return [t for t in self._definition.transitions if self._is_enabled(t, current)]

    def check(self, to: Iterable[Place]) -> None:
        """Raise unless a transition to exactly ``to`` may be applied now."""
        target = tuple(to)
        if not target:
            raise InvalidTransitionError()
        self._validate_places(target)

        for transition in self.enabled_transitions():
            if transition.to_places != target:
                continue
            event = GuardEvent(
                transition=transition,
                from_places=self._marking.places,
                to_places=target,
                workflow=self,
                context=self.context,
            )
            transition.validate(event)
            for listener in self._listeners_for(EventType.GUARD):
                listener(event)
                if event.blocking:
                    raise TransitionNotAllowedError()
            return
        raise TransitionNotAllowedError()

    def can(self, to: Iterable[Place]) -> bool:
        """Whether a transition to ``to`` is allowed; workflow errors mean no."""
        try:
            self.check(to)
        except WorkflowError:
            return False
        return True

    def apply(self, target_places: Iterable[Place]) -> None:
        """Move the marking to ``target_places``, firing before and after events."""
        target = tuple(target_places)
        self._validate_places(target)
        self.check(target)

        current = self._marking.places
        transition = next(
            (
                t
                for t in self._definition.transitions
                if self._is_enabled(t, current) and t.to_places == target
            ),
            None,
        )
        if transition is None:
            raise InvalidTransitionError()
        from_places = transition.from_places

        before = Event(
            EventType.BEFORE_TRANSITION, transition, from_places, target, self, self.context
        )
        for listener in self._listeners_for(EventType.BEFORE_TRANSITION):
            listener(before)

        remaining = [place for place in current if place not in from_places]
        self._marking.places = [*remaining, *target]

        after = Event(
            EventType.AFTER_TRANSITION, transition, from_places, target, self, self.context
        )
        for listener in self._listeners_for(EventType.AFTER_TRANSITION):
            listener(after)

    def diagram(self) -> str:
        """A Mermaid state diagram of the definition, highlighting current places."""
        lines = [
            "stateDiagram-v2\n",
            "    classDef currentPlace font-weight:bold,stroke-width:4px\n",
        ]
        lines.extend(f"    {place}\n" for place in self._definition.places)

        for transition in self._definition.transitions:
            name = transition.name
            sources = transition.from_places
            targets = transition.to_places
            if len(sources) > 1:
                join = f"{name}_join"
            if len(targets) > 1:
                fork = f"{name}_fork"
                lines.append(f"    state {fork} <<fork>>\n")
                if len(sources) > 1:
                    lines.append(f"    state {join} <<join>>\n")
                    lines.extend(f"    {src} --> {join} : {name}\n" for src in sources)
                    lines.append(f"    {join} --> {fork}\n")
                else:
                    lines.append(f"    {sources[0]} --> {fork} : {name}\n")
                lines.extend(f"    {fork} --> {dst}\n" for dst in targets)
            elif len(sources) > 1:
                lines.append(f"    state {join} <<join>>\n")
                lines.extend(f"    {src} --> {join} : {name}\n" for src in sources)
                lines.append(f"    {join} --> {targets[0]}\n")
            else:
                lines.append(f"    {sources[0]} --> {targets[0]} : {name}\n")

        current = self._marking.places
        if current:
            lines.append("\n    %% Current places\n")
            lines.extend(f"    class {place} currentPlace\n" for place in current)

        lines.append("\n    %% Initial place\n")
        lines.append(f"    [*] --> {self._initial_place}\n")
        return "".join(lines)

    def __repr__(self) -> str:
        return f"Workflow({self._name!r}, places={self._marking.places!r})"