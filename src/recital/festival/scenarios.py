"""
Scenario planning utilities for festival budgets.

Create and compare plans at different budget levels, and check
that every selection strategy agrees on a given input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd
from loguru import logger

from recital.festival.events import EventLike, check_budget, coerce_events
from recital.festival.selection import STRATEGIES, SelectionOptimizer, final_row


@dataclass
class BudgetScenario:
    """
    A festival plan at one budget level.
    """

    name: str
    budget: int
    total_minutes: int
    total_cost: int
    events: list[str]

    @property
    def minutes_per_dollar(self) -> float:
        return self.total_minutes / self.total_cost if self.total_cost > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "budget": self.budget,
            "total_minutes": self.total_minutes,
            "total_cost": self.total_cost,
            "minutes_per_dollar": self.minutes_per_dollar,
            "events": self.events,
        }


def create_budget_scenarios(
    events: Iterable[EventLike],
    budgets: list[int],
    strategy: str | None = None,
) -> list[BudgetScenario]:
    """
    Plan the festival at several budget levels.

    Args:
        events: Events or (minutes, cost[, name]) tuples
        budgets: Budget levels to plan for
        strategy: Selection strategy (defaults to config)

    Returns:
        List of BudgetScenario objects, in the order of ``budgets``
    """
    events = coerce_events(events)
    scenarios = []

    for budget in budgets:
        result = SelectionOptimizer(events=events, budget=budget, strategy=strategy).optimize()
        scenarios.append(BudgetScenario(
            name=f"Budget {budget}",
            budget=budget,
            total_minutes=result.total_minutes,
            total_cost=result.total_cost,
            events=[e.label for e in result.selected],
        ))

    return scenarios


def compare_scenarios(scenarios: list[BudgetScenario]) -> pd.DataFrame:
    """
    Create a comparison table of scenarios.

    The first scenario is the base for the ``minutes_vs_base`` column.
    """
    df = pd.DataFrame([
        {
            "scenario": s.name,
            "budget": s.budget,
            "total_minutes": s.total_minutes,
            "total_cost": s.total_cost,
            "minutes_per_dollar": s.minutes_per_dollar,
            "n_events": len(s.events),
        }
        for s in scenarios
    ])

    if len(df) > 0:
        df["minutes_vs_base"] = df["total_minutes"] - df["total_minutes"].iloc[0]

    return df


def compute_efficiency_frontier(
    events: Iterable[EventLike],
    max_budget: int,
) -> pd.DataFrame:
    """
    Best total minutes at every budget from 0 to ``max_budget``.

    One pass of the tabulated strategy yields the whole frontier.

    Returns:
        DataFrame with budget, best_minutes and marginal_minutes
    """
    events = coerce_events(events)
    max_budget = check_budget(max_budget)

    row = final_row(events, max_budget)
    df = pd.DataFrame({"budget": range(max_budget + 1), "best_minutes": row})
    df["marginal_minutes"] = df["best_minutes"].diff().fillna(df["best_minutes"]).astype("int64")
    return df


def compare_strategies(events: Iterable[EventLike], budget: int) -> pd.DataFrame:
    """
    Run every selection strategy on the same input.

    Returns:
        DataFrame with one row per strategy and an ``agrees`` column
    """
    events = coerce_events(events)
    records = [
        {"strategy": name, "total_minutes": solve(events, budget)}
        for name, solve in STRATEGIES.items()
    ]
    df = pd.DataFrame(records)
    df["agrees"] = df["total_minutes"] == df["total_minutes"].iloc[0]

    if not df["agrees"].all():
        logger.warning(f"Strategies disagree on budget {budget}: {records}")

    return df
