"""Events fired by a workflow while it checks and applies transitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Mapping

from wfnet.errors import Place

if TYPE_CHECKING:
    from wfnet.transition import Transition
    from wfnet.workflow import Workflow


class EventType(str, Enum):
    """The kinds of event a workflow fires."""

    BEFORE_TRANSITION = "before_transition"
    AFTER_TRANSITION = "after_transition"
    GUARD = "guard"


@dataclass(eq=False)
class Event:
    """An event concerning one transition of a workflow."""

    type: EventType
    transition: Transition
    from_places: tuple[Place, ...]
    to_places: tuple[Place, ...]
    workflow: Workflow | None = field(default=None, repr=False)
    context: Mapping[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self.from_places = tuple(self.from_places)
        self.to_places = tuple(self.to_places)

    def get_context(self, key: str, default: Any = None) -> Any:
        """Return the context value for ``key``, or ``default`` if absent."""
        return self.context.get(key, default)


@dataclass(eq=False)
class GuardEvent(Event):
    """A guard event; a listener may set ``blocking`` to veto the transition."""

    type: EventType = field(default=EventType.GUARD, init=False)
    blocking: bool = False


EventListener = Callable[[Event], None]
GuardEventListener = Callable[[GuardEvent], None]