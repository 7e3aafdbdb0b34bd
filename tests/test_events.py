"""Tests for festival events and event files."""

import json

import numpy as np
import pytest
import yaml

from recital.core.exceptions import EventFileError, InvalidArgumentError
from recital.festival import Event, coerce_events, load_events
from recital.festival.events import check_budget


class TestEvent:
    """Test the Event value type."""

    def test_label(self):
        assert Event(40, 10, "Gala").label == "Gala"
        assert Event(40, 10).label == "40 min / $10"

    def test_immutable(self):
        event = Event(40, 10)
        with pytest.raises(AttributeError):
            event.cost = 5

    @pytest.mark.parametrize("minutes, cost", [(-1, 5), (5, -1), (1.5, 2), (True, 2)])
    def test_rejects_bad_fields(self, minutes, cost):
        with pytest.raises(InvalidArgumentError):
            Event(minutes, cost)

    def test_coerce_events(self):
        events = coerce_events([(40, 10), (30, 5, "Quartet"), Event(5, 1)])
        assert events == (Event(40, 10), Event(30, 5, "Quartet"), Event(5, 1))


class TestLoadEvents:
    """Test loading events from files."""

    def test_csv(self, tmp_path):
        path = tmp_path / "events.csv"
        path.write_text("name,minutes,cost\nGala,40,10\nQuartet,30,5\n")

        events = load_events(path)
        assert events == (Event(40, 10, "Gala"), Event(30, 5, "Quartet"))

    def test_csv_without_names(self, tmp_path):
        path = tmp_path / "events.csv"
        path.write_text("Minutes, Cost\n40,10\n")

        assert load_events(path) == (Event(40, 10),)

    def test_csv_missing_column(self, tmp_path):
        path = tmp_path / "events.csv"
        path.write_text("minutes\n40\n")

        with pytest.raises(EventFileError):
            load_events(path)

    def test_json(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(json.dumps([{"minutes": 40, "cost": 10, "name": "Gala"}]))

        assert load_events(path) == (Event(40, 10, "Gala"),)

    def test_yaml(self, tmp_path):
        path = tmp_path / "events.yaml"
        path.write_text(yaml.dump([{"minutes": 40, "cost": 10}, {"minutes": 30, "cost": 5}]))

        assert load_events(path) == (Event(40, 10), Event(30, 5))

    def test_negative_cost_in_file(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(json.dumps([{"minutes": 40, "cost": -10}]))

        with pytest.raises(EventFileError):
            load_events(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(json.dumps({"minutes": 40, "cost": 10}))

        with pytest.raises(EventFileError):
            load_events(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(EventFileError) as exc:
            load_events(tmp_path / "nope.csv")
        assert exc.value.code == "EVENT_FILE_ERROR"

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "events.txt"
        path.write_text("40 10")

        with pytest.raises(EventFileError):
            load_events(path)


class TestNumpyIntegers:
    """Events built from numpy arrays."""

    def test_numpy_fields_become_ints(self):
        event = Event(np.int64(40), np.int32(10))

        assert event == Event(40, 10)
        assert type(event.minutes) is int
        assert type(event.cost) is int

    def test_numpy_negative_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Event(np.int64(-1), 5)

    def test_numpy_budget(self):
        assert check_budget(np.int64(7)) == 7
        assert type(check_budget(np.int64(7))) is int
