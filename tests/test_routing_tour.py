import random
from datetime import datetime

import pytest

from fetchroute.models.domain import Coordinate
from fetchroute.services.geospatial import distance
from fetchroute.services.routing.models import Stop
from fetchroute.services.routing.tour import build_tour

START = Coordinate(37.7749, -122.4194)


def _stop(sid: str, lat: float, lon: float) -> Stop:
    return Stop(
        stop_id=sid,
        appointment_id=sid,
        client_id=f"client-{sid}",
        client_name=f"Client {sid}",
        pet_id=None,
        service_type="grooming",
        address=f"{sid} Main St",
        coordinates=Coordinate(lat, lon),
        scheduled_time=datetime(2024, 5, 1, 9, 0),
        duration=60,
    )


def test_empty_input_gives_empty_tour():
    tour = build_tour(START, [])
    assert tour.stops == ()
    assert tour.total_distance_km == 0


def test_single_stop_tour():
    stop = _stop("A", 37.78, -122.41)
    tour = build_tour(START, [stop])
    assert tour.stops == (stop,)
    assert tour.total_distance_km == pytest.approx(distance(START, stop.coordinates))


def test_visits_nearer_stop_first():
    near = _stop("A", 37.78, -122.41)
    far = _stop("B", 37.70, -122.45)
    tour = build_tour(START, [far, near])

    assert [s.stop_id for s in tour.stops] == ["A", "B"]
    expected = distance(START, near.coordinates) + distance(near.coordinates, far.coordinates)
    assert round(tour.total_distance_km, 3) == round(expected, 3)


def test_input_collection_is_not_modified():
    stops = [_stop("A", 37.70, -122.45), _stop("B", 37.78, -122.41)]
    snapshot = list(stops)
    build_tour(START, stops)
    assert stops == snapshot


def test_ties_keep_input_order():
    first = _stop("first", 37.78, -122.41)
    second = _stop("second", 37.78, -122.41)
    tour = build_tour(START, [first, second])
    assert [s.stop_id for s in tour.stops] == ["first", "second"]
    assert tour.total_distance_km == pytest.approx(distance(START, first.coordinates))


def test_random_tours_are_permutations_with_greedy_steps():
    rng = random.Random(42)
    for _ in range(10):
        stops = [
            _stop(f"S{i}", 37.6 + rng.random() * 0.3, -122.5 + rng.random() * 0.3)
            for i in range(rng.randint(2, 12))
        ]
        tour = build_tour(START, stops)

        ids = [s.stop_id for s in tour.stops]
        assert sorted(ids) == sorted(s.stop_id for s in stops)
        assert len(set(ids)) == len(stops)

        remaining = list(stops)
        current = START
        legs = 0.0
        for chosen in tour.stops:
            chosen_distance = distance(current, chosen.coordinates)
            assert chosen_distance <= min(distance(current, s.coordinates) for s in remaining)
            legs += chosen_distance
            remaining.remove(chosen)
            current = chosen.coordinates
        assert tour.total_distance_km == pytest.approx(legs)


def test_tour_is_deterministic():
    stops = [_stop("A", 37.70, -122.45), _stop("B", 37.78, -122.41), _stop("C", 37.75, -122.43)]
    assert build_tour(START, stops) == build_tour(START, stops)
