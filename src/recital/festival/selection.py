"""
Budget-constrained event selection.

Finds the largest total number of minutes of festival events that
can be attended without spending more than a budget.  Three
interchangeable strategies compute the same value:

    exhaustive  O(2^n)        plain include/exclude recursion
    memoized    O(n*budget)   the same recursion cached on (index, money)
    tabulated   O(n*budget)   bottom-up table kept as two rolling rows
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

import numpy as np
from loguru import logger

from recital.config import FESTIVAL_STRATEGIES, FestivalConfig, get_config
from recital.core.exceptions import InvalidArgumentError
from recital.festival.events import Event, EventLike, check_budget, coerce_events


# Loses every max() comparison against a feasible total.
_INFEASIBLE = float("-inf")


@contextmanager
def _recursion_room(depth: int, headroom: int):
    """Make sure ``depth`` nested calls fit under the interpreter limit."""
    old = sys.getrecursionlimit()
    sys.setrecursionlimit(old + depth + headroom)
    try:
        yield
    finally:
        sys.setrecursionlimit(old)


# ---------------------------------------------------------------------------
# Exhaustive search
# ---------------------------------------------------------------------------

def _exhaustive(events: tuple[Event, ...], money: int, minutes: int, index: int) -> float:
    if money < 0:
        return _INFEASIBLE
    if index == len(events):
        return minutes

    event = events[index]
    return max(
        _exhaustive(events, money - event.cost, minutes + event.minutes, index + 1),
        _exhaustive(events, money, minutes, index + 1),
    )


def max_minutes_exhaustive(events: Iterable[EventLike], budget: int) -> int:
    """
    Best total minutes by trying every subset of events.

    Exponential in the number of events; kept as the correctness
    baseline for the other two strategies.
    """
    events = coerce_events(events)
    budget = check_budget(budget)

    cfg = get_config().festival
    if cfg.max_exhaustive_events is not None and len(events) > cfg.max_exhaustive_events:
        raise InvalidArgumentError(
            f"Exhaustive search is limited to {cfg.max_exhaustive_events} events, "
            f"got {len(events)}",
            field="events",
        )

    with _recursion_room(len(events), cfg.recursion_headroom):
        return int(_exhaustive(events, budget, 0, 0))


# ---------------------------------------------------------------------------
# Memoized search
# ---------------------------------------------------------------------------

MemoTable = list[list[int | None]]


def _memoized(events: tuple[Event, ...], money: int, index: int, memo: MemoTable) -> int:
    if index == len(events):
        return 0

    cached = memo[index][money]
    if cached is not None:
        return cached

    event = events[index]
    if event.cost > money:
        best = _memoized(events, money, index + 1, memo)
    else:
        best = max(
            event.minutes + _memoized(events, money - event.cost, index + 1, memo),
            _memoized(events, money, index + 1, memo),
        )

    memo[index][money] = best
    return best


def _build_memo(events: tuple[Event, ...], budget: int) -> tuple[int, MemoTable]:
    memo: MemoTable = [[None] * (budget + 1) for _ in events]
    cfg = get_config().festival
    with _recursion_room(len(events), cfg.recursion_headroom):
        best = _memoized(events, budget, 0, memo)
    return best, memo


def max_minutes_memoized(events: Iterable[EventLike], budget: int) -> int:
    """Best total minutes via top-down recursion over (index, money left)."""
    events = coerce_events(events)
    budget = check_budget(budget)

    best, _ = _build_memo(events, budget)
    return best


def _walk_memo(events: tuple[Event, ...], budget: int, memo: MemoTable) -> tuple[Event, ...]:
    """Recover one optimal selection from a filled memo table."""

    def value_at(index: int, money: int) -> int:
        if index == len(events):
            return 0
        return memo[index][money]

    chosen = []
    money = budget
    for index, event in enumerate(events):
        if event.cost <= money and (
            event.minutes + value_at(index + 1, money - event.cost) == value_at(index, money)
        ):
            chosen.append(event)
            money -= event.cost
    return tuple(chosen)


# ---------------------------------------------------------------------------
# Tabulated DP
# ---------------------------------------------------------------------------

def max_minutes_tabulated(events: Iterable[EventLike], budget: int) -> int:
    """
    Best total minutes via a bottom-up table.

    Row i holds, for every budget j in 0..budget, the best total from
    the first i events with at most j spent:

        f(0, j) = 0
        f(i, j) = max(f(i-1, j - cost_i) + minutes_i, f(i-1, j))   if cost_i <= j
        f(i, j) = f(i-1, j)                                         otherwise

    Only the previous and current rows are kept.
    """
    events = coerce_events(events)
    budget = check_budget(budget)

    return int(final_row(events, budget)[budget])


def _row_dtype(events: tuple[Event, ...]):
    # Totals past int64 fall back to Python ints so the rows cannot wrap.
    if sum(e.minutes for e in events) > np.iinfo(np.int64).max:
        return object
    return np.int64


def _tabulate(
    events: tuple[Event, ...],
    budget: int,
    track: bool = False,
) -> tuple[np.ndarray, np.ndarray | None]:
    """
    Fold the events into the rolling rows.

    With ``track``, also fill ``took[i, j]``: whether event i improves
    the best total at budget j.  That table is one byte per cell and is
    only needed to recover a selection.
    """
    previous = np.zeros(budget + 1, dtype=_row_dtype(events))
    took = np.zeros((len(events), budget + 1), dtype=bool) if track else None

    for i, event in enumerate(events):
        current = previous.copy()
        cost = event.cost
        if cost <= budget:
            with_event = previous[: budget + 1 - cost] + event.minutes
            better = with_event > previous[cost:]
            current[cost:] = np.where(better, with_event, previous[cost:])
            if took is not None:
                took[i, cost:] = better
        previous = current

    return previous, took


def final_row(events: tuple[Event, ...], budget: int) -> np.ndarray:
    """Last row of the table: best total minutes for every budget 0..budget."""
    row, _ = _tabulate(events, budget)
    return row


def _walk_table(events: tuple[Event, ...], budget: int, took: np.ndarray) -> tuple[Event, ...]:
    """Recover one optimal selection by walking ``took`` from the last event back."""
    chosen = []
    money = budget
    for i in range(len(events) - 1, -1, -1):
        if took[i, money]:
            chosen.append(events[i])
            money -= events[i].cost
    return tuple(reversed(chosen))


STRATEGIES: dict[str, Callable[[Iterable[EventLike], int], int]] = {
    "exhaustive": max_minutes_exhaustive,
    "memoized": max_minutes_memoized,
    "tabulated": max_minutes_tabulated,
}


# ---------------------------------------------------------------------------
# Optimizer facade
# ---------------------------------------------------------------------------

@dataclass
class SelectionResult:
    """
    Results from event selection.
    """

    strategy: str = ""
    budget: int = 0
    total_minutes: int = 0

    # One optimal selection and its cost
    selected: tuple[Event, ...] = field(default_factory=tuple)
    total_cost: int = 0

    n_events: int = 0

    @property
    def remaining_budget(self) -> int:
        return self.budget - self.total_cost

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy,
            "budget": self.budget,
            "total_minutes": self.total_minutes,
            "total_cost": self.total_cost,
            "remaining_budget": self.remaining_budget,
            "n_events": self.n_events,
            "selected": [e.to_dict() for e in self.selected],
        }

    def save(self, path: Path | str) -> None:
        """Save results to JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)


class SelectionOptimizer:
    """
    Pick the festival events that maximize total minutes within a budget.

    Example:
        >>> optimizer = SelectionOptimizer(
        ...     events=[(40, 10), (30, 5), (15, 3), (5, 1)],
        ...     budget=15,
        ... )
        >>> optimizer.optimize().total_minutes
        70
    """

    def __init__(
        self,
        events: Iterable[EventLike],
        budget: int,
        strategy: str | None = None,
        config: FestivalConfig | None = None,
    ):
        """
        Initialize optimizer.

        Args:
            events: Events or (minutes, cost[, name]) tuples
            budget: Money available, non-negative
            strategy: exhaustive, memoized or tabulated; defaults to config
            config: Festival settings; defaults to the global config
        """
        self.config = config or get_config().festival
        self.events = coerce_events(events)
        self.budget = check_budget(budget)
        self.strategy = strategy or self.config.default_strategy

        if self.strategy not in STRATEGIES:
            raise InvalidArgumentError(
                f"Unknown strategy '{self.strategy}', expected one of {list(FESTIVAL_STRATEGIES)}",
                field="strategy",
            )

    def solve(self) -> int:
        """Return the best total minutes using the configured strategy."""
        return STRATEGIES[self.strategy](self.events, self.budget)

    def optimize(self, with_selection: bool = True) -> SelectionResult:
        """
        Compute the best total minutes and, optionally, one selection
        that achieves it.

        The memoized strategy walks its own memo table.  The other two
        recover the selection from a tabulated pass with a boolean
        "took event i at budget j" table.

        Args:
            with_selection: Also recover the chosen events

        Returns:
            SelectionResult
        """
        logger.info(
            f"Selecting from {len(self.events)} events with budget {self.budget} "
            f"({self.strategy})"
        )

        selected: tuple[Event, ...] = ()
        if not with_selection:
            total = self.solve()
        elif self.strategy == "memoized":
            total, memo = _build_memo(self.events, self.budget)
            selected = _walk_memo(self.events, self.budget, memo)
        else:
            row, took = _tabulate(self.events, self.budget, track=True)
            total = self.solve() if self.strategy == "exhaustive" else int(row[self.budget])
            selected = _walk_table(self.events, self.budget, took)
            logger.debug(f"Selection table: {took.shape[0]} x {took.shape[1]}")

        result = SelectionResult(
            strategy=self.strategy,
            budget=self.budget,
            total_minutes=total,
            selected=selected,
            total_cost=sum(e.cost for e in selected),
            n_events=len(self.events),
        )

        logger.info(
            f"Selection complete. Total minutes: {total}, "
            f"events chosen: {len(selected)}, spent: {result.total_cost}"
        )
        return result


def plan_festival(
    events: Iterable[EventLike],
    budget: int,
    strategy: str | None = None,
) -> SelectionResult:
    """
    Convenience function for one-off event selection.

    Args:
        events: Events or (minutes, cost[, name]) tuples
        budget: Money available
        strategy: exhaustive, memoized or tabulated

    Returns:
        SelectionResult with the best total and one optimal selection
    """
    return SelectionOptimizer(events=events, budget=budget, strategy=strategy).optimize()
