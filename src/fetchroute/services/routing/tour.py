"""Nearest-neighbor tour construction.

Starting at the given location, the tour repeatedly moves to the closest stop
not yet visited. This is a heuristic: it produces a reasonable visiting order
in O(n^2) distance evaluations but does not guarantee the shortest tour.
"""

from __future__ import annotations

from typing import Iterable

from ...models.domain import Coordinate
from ..geospatial import distance
from .models import Stop, Tour


def build_tour(start: Coordinate, stops: Iterable[Stop]) -> Tour:
    """Order ``stops`` greedily by proximity, beginning at ``start``.

    Args:
        start: Coordinate the tour departs from.
        stops: Stops to visit. The collection is copied and never modified.

    Returns:
        A ``Tour`` whose stops are a permutation of the input and whose total
        distance is the sum of the legs taken, starting with start -> first stop.
        The return leg is not counted.
    """
    unvisited = list(stops)
    route: list[Stop] = []
    total_distance = 0.0
    current = start

    while unvisited:
        nearest_index = 0
        shortest = distance(current, unvisited[0].coordinates)
        for index in range(1, len(unvisited)):
            candidate = distance(current, unvisited[index].coordinates)
            # strict comparison keeps the first-encountered stop on ties
            if candidate < shortest:
                shortest = candidate
                nearest_index = index

        nearest = unvisited.pop(nearest_index)
        route.append(nearest)
        total_distance += shortest
        current = nearest.coordinates

    return Tour(stops=tuple(route), total_distance_km=total_distance)
