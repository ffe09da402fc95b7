"""Transitions between places, with metadata and validation constraints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Protocol, runtime_checkable

from wfnet.errors import Place

if TYPE_CHECKING:
    from wfnet.event import Event


@runtime_checkable
class Constraint(Protocol):
    """A rule checked before a transition; ``validate`` raises to reject it."""

    def validate(self, event: Event) -> None:
        ...


def _unique(places: Iterable[Place], kind: str) -> tuple[Place, ...]:
    seen: set[Place] = set()
    for place in places:
        if place in seen:
            raise ValueError(f"duplicate '{kind}' place: {place}")
        seen.add(place)
    return tuple(places)


class Transition:
    """A named move from one set of places to another."""

    def __init__(
        self, name: str, from_places: Iterable[Place], to_places: Iterable[Place]
    ) -> None:
        from_places = tuple(from_places)
        to_places = tuple(to_places)
        if not name:
            raise ValueError("transition name cannot be empty")
        if not from_places:
            raise ValueError("transition must have at least one 'from' place")
        if not to_places:
            raise ValueError("transition must have at least one 'to' place")
        self._name = name
        self._from = _unique(from_places, "from")
        self._to = _unique(to_places, "to")
        self.metadata: dict[str, Any] = {}
        self._constraints: list[Constraint] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def from_places(self) -> tuple[Place, ...]:
        return self._from

    @property
    def to_places(self) -> tuple[Place, ...]:
        return self._to

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return tuple(self._constraints)

    def add_constraint(self, constraint: Constraint) -> None:
        """Register a constraint checked whenever the transition is guarded."""
        self._constraints.append(constraint)

    def validate(self, event: Event) -> None:
        """Run every constraint in order; the first failure propagates."""
        for constraint in self._constraints:
            constraint.validate(event)

    def __repr__(self) -> str:
        return (
            f"Transition({self._name!r}, {list(self._from)!r}, {list(self._to)!r})"
        )