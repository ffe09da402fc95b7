"""The static description of a workflow: its places and transitions."""

from __future__ import annotations

from typing import Iterable

from wfnet.errors import InvalidPlaceError, Place
from wfnet.transition import Transition


class Definition:
    """Places and transitions; every transition may only use known places."""

    def __init__(
        self, places: Iterable[Place], transitions: Iterable[Transition] = ()
    ) -> None:
        self.places: list[Place] = list(places)
        self.transitions: list[Transition] = list(transitions)
        valid = set(self.places)
        for transition in self.transitions:
            for place in (*transition.from_places, *transition.to_places):
                if place not in valid:
                    raise InvalidPlaceError(
                        f"place '{place}' in transition '{transition.name}' "
                        "is not defined in workflow places"
                    )

    def all_places(self) -> list[Place]:
        """A copy of the places."""
        return list(self.places)

    def all_transitions(self) -> list[Transition]:
        """A copy of the transitions."""
        return list(self.transitions)

    def transition(self, name: str) -> Transition | None:
        """The first transition called ``name``, or None."""
        return next((t for t in self.transitions if t.name == name), None)

    def has_place(self, place: Place) -> bool:
        """Whether ``place`` is one of the definition's places."""
        return place in self.places