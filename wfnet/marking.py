"""The marking: the set of places a workflow currently occupies."""

from __future__ import annotations

import json
from typing import Iterable, Iterator

from wfnet.errors import Place


class Marking:
    """An ordered collection of distinct current places."""

    def __init__(self, places: Iterable[Place] | None = ()) -> None:
        self._places: list[Place] = list(places or ())

    @property
    def places(self) -> list[Place]:
        """A copy of the current places."""
        return list(self._places)

    @places.setter
    def places(self, places: Iterable[Place] | None) -> None:
        self._places = list(places or ())

    def has_place(self, place: Place) -> bool:
        """Whether ``place`` is marked."""
        return place in self._places

    def add_place(self, place: Place) -> None:
        """Mark ``place``; a place already marked is left as it is."""
        if place not in self._places:
            self._places.append(place)

    def remove_place(self, place: Place) -> None:
        """Unmark ``place``; raise ValueError if it is not marked."""
        try:
            self._places.remove(place)
        except ValueError:
            raise ValueError(f"place {place} not found") from None

    def to_json(self) -> str:
        """Serialise the places as a JSON array."""
        return json.dumps(self._places)

    def __contains__(self, place: object) -> bool:
        return place in self._places

    def __iter__(self) -> Iterator[Place]:
        return iter(list(self._places))

    def __len__(self) -> int:
        return len(self._places)

    def __repr__(self) -> str:
        return f"Marking({self._places!r})"


def marking_from_json(data: str | bytes) -> Marking:
    """Build a Marking from a JSON array of place names."""
    places = json.loads(data)
    if places is None:
        return Marking()
    if not isinstance(places, list) or not all(isinstance(p, str) for p in places):
        raise ValueError("marking JSON must be an array of strings")
    return Marking(places)