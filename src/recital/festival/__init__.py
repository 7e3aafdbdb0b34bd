"""
Festival planning layer for Recital.

Chooses which events to attend to maximize total minutes within
a budget, using exhaustive, memoized or tabulated search.
"""

from recital.festival.events import Event, coerce_events, load_events
from recital.festival.selection import (
    SelectionOptimizer,
    SelectionResult,
    max_minutes_exhaustive,
    max_minutes_memoized,
    max_minutes_tabulated,
    plan_festival,
)
from recital.festival.scenarios import (
    BudgetScenario,
    compare_scenarios,
    compare_strategies,
    compute_efficiency_frontier,
    create_budget_scenarios,
)

__all__ = [
    "Event",
    "coerce_events",
    "load_events",
    "SelectionOptimizer",
    "SelectionResult",
    "max_minutes_exhaustive",
    "max_minutes_memoized",
    "max_minutes_tabulated",
    "plan_festival",
    "BudgetScenario",
    "create_budget_scenarios",
    "compare_scenarios",
    "compare_strategies",
    "compute_efficiency_frontier",
]
