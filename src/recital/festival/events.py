"""
Festival events and event-file loading.

An event is a (minutes, cost) pair with an optional display name.
Plain tuples are accepted anywhere events are and coerced here.
"""

from __future__ import annotations

import json
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

import pandas as pd
import yaml
from loguru import logger

from recital.core.exceptions import EventFileError, InvalidArgumentError


@dataclass(frozen=True)
class Event:
    """One festival event: how long it lasts and what a ticket costs."""

    minutes: int
    cost: int
    name: str | None = None

    def __post_init__(self):
        for field_name in ("minutes", "cost"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidArgumentError(
                    f"Event {field_name} must be an integer, got {value!r}",
                    field=field_name,
                )
            if value < 0:
                raise InvalidArgumentError(
                    f"Event {field_name} must be non-negative, got {value}",
                    field=field_name,
                )
            object.__setattr__(self, field_name, int(value))

    @property
    def label(self) -> str:
        return self.name or f"{self.minutes} min / ${self.cost}"

    def to_dict(self) -> dict:
        return {"name": self.name, "minutes": self.minutes, "cost": self.cost}


EventLike = Event | tuple[int, int] | tuple[int, int, str]


def coerce_events(events: Iterable[EventLike]) -> tuple[Event, ...]:
    """Turn a sequence of events or (minutes, cost[, name]) tuples into Events."""
    coerced = []
    for i, item in enumerate(events):
        if isinstance(item, Event):
            coerced.append(item)
            continue
        try:
            coerced.append(Event(*item))
        except TypeError as e:
            raise InvalidArgumentError(
                f"Event #{i} must be (minutes, cost[, name]), got {item!r}",
                field="events",
            ) from e
    return tuple(coerced)


def check_budget(budget: int) -> int:
    """Validate a budget argument and return it as a plain int."""
    if isinstance(budget, bool) or not isinstance(budget, numbers.Integral):
        raise InvalidArgumentError(f"Budget must be an integer, got {budget!r}", field="budget")
    if budget < 0:
        raise InvalidArgumentError(f"Budget must be non-negative, got {budget}", field="budget")
    return int(budget)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _from_records(records: Sequence[Any], path: Path) -> tuple[Event, ...]:
    if not isinstance(records, list):
        raise EventFileError(f"{path} must contain a list of events", path=str(path))

    events = []
    for i, rec in enumerate(records):
        if not isinstance(rec, dict) or "minutes" not in rec or "cost" not in rec:
            raise EventFileError(
                f"{path}: event #{i} needs 'minutes' and 'cost' fields", path=str(path)
            )
        name = rec.get("name")
        try:
            events.append(Event(
                minutes=int(rec["minutes"]),
                cost=int(rec["cost"]),
                name=None if name is None else str(name),
            ))
        except (TypeError, ValueError, InvalidArgumentError) as e:
            raise EventFileError(f"{path}: event #{i} is invalid ({e})", path=str(path)) from e
    return tuple(events)


def _load_csv(path: Path) -> tuple[Event, ...]:
    try:
        df = pd.read_csv(path)
    except pd.errors.EmptyDataError:
        return ()
    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = {"minutes", "cost"} - set(df.columns)
    if missing:
        raise EventFileError(f"{path}: missing columns {sorted(missing)}", path=str(path))

    df = df.astype(object).where(pd.notna(df), None)
    return _from_records(df.to_dict(orient="records"), path)


def load_events(path: Path | str) -> tuple[Event, ...]:
    """
    Load events from a CSV, JSON or YAML file.

    CSV files need ``minutes`` and ``cost`` columns (``name`` optional).
    JSON and YAML files hold a list of objects with the same fields.
    """
    path = Path(path)
    if not path.exists():
        raise EventFileError(f"Events file not found: {path}", path=str(path))

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            events = _load_csv(path)
        elif suffix == ".json":
            with open(path) as f:
                events = _from_records(json.load(f), path)
        elif suffix in (".yaml", ".yml"):
            with open(path) as f:
                events = _from_records(yaml.safe_load(f) or [], path)
        else:
            raise EventFileError(f"Unsupported events file type: {suffix}", path=str(path))
    except (json.JSONDecodeError, yaml.YAMLError, pd.errors.ParserError) as e:
        raise EventFileError(f"Could not parse {path}: {e}", path=str(path)) from e

    logger.info(f"Loaded {len(events)} events from {path}")
    return events
