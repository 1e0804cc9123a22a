"""Tests for grouping geocoded events by location."""

from conftest import BERLIN, LONDON, PARIS, make_event

from gedcom_map.grouping import (
    busiest_location,
    first_location,
    group_by_location,
    location_key,
    parse_location_key,
)


class TestLocationKey:
    """Tests for the coordinate group key."""

    def test_six_decimal_places(self):
        assert location_key(48.8566, 2.3522) == "48.856600,2.352200"

    def test_negative_coordinates(self):
        assert location_key(-33.8688, -151.2093) == "-33.868800,-151.209300"

    def test_parse_round_trip(self):
        assert parse_location_key("48.856600,2.352200") == (48.8566, 2.3522)


class TestGroupByLocation:
    """Tests for group_by_location."""

    def test_equal_rounded_coordinates_share_group(self):
        events = [
            make_event(coords=(48.8566, 2.3522)),
            make_event(coords=(48.85660004, 2.35219996)),
        ]
        groups = group_by_location(events)
        assert list(groups) == ["48.856600,2.352200"]
        assert len(groups["48.856600,2.352200"]) == 2

    def test_different_coordinates_split(self):
        events = [
            make_event(coords=(48.856600, 2.3522)),
            make_event(coords=(48.856601, 2.3522)),
        ]
        assert len(group_by_location(events)) == 2

    def test_groups_keep_event_order(self):
        events = [
            make_event(name="first", coords=PARIS),
            make_event(name="london", coords=LONDON),
            make_event(name="second", coords=PARIS),
        ]
        groups = group_by_location(events)

        assert list(groups) == [location_key(*PARIS), location_key(*LONDON)]
        assert [e.name for e in groups[location_key(*PARIS)]] == ["first", "second"]

    def test_every_event_in_exactly_one_group(self):
        events = [make_event(coords=c) for c in (PARIS, LONDON, BERLIN, PARIS, LONDON)]
        groups = group_by_location(events)
        assert sum(len(g) for g in groups.values()) == len(events)


class TestCenterSelection:
    """Tests for choosing the map center."""

    def test_first_location(self):
        groups = group_by_location([make_event(coords=LONDON), make_event(coords=PARIS)])
        assert first_location(groups) == LONDON

    def test_first_location_empty(self):
        assert first_location({}) is None

    def test_busiest_location(self):
        events = [make_event(coords=c) for c in (LONDON, PARIS, PARIS, BERLIN)]
        assert busiest_location(group_by_location(events)) == PARIS

    def test_busiest_location_is_one_of_the_maxima_on_tie(self):
        events = [make_event(coords=c) for c in (LONDON, PARIS)]
        assert busiest_location(group_by_location(events)) in (LONDON, PARIS)

    def test_busiest_location_empty(self):
        assert busiest_location({}) == (0.0, 0.0)
