"""
Shortest modulation paths between musical keys.

The key graph is never built; neighbors are generated on demand from
the allowed relations.  Both searches return the fewest-keys path as
display names, or an empty list when the target cannot be reached.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterable

from loguru import logger

from recital.config import MODULATION_STRATEGIES, ModulationConfig, get_config
from recital.core.exceptions import InvalidArgumentError
from recital.modulation.keys import MusicalKey, Relation, check_relations, parse_key


def _render(path: Iterable[MusicalKey], target: MusicalKey) -> list[str]:
    names = [k.name for k in path]
    names[-1] = target.name
    return names


# ---------------------------------------------------------------------------
# Breadth-first search
# ---------------------------------------------------------------------------

def modulate_bfs(
    start_key: str,
    end_key: str,
    allowed_relations: Iterable[int] | None = None,
) -> list[str]:
    """
    Shortest path from ``start_key`` to ``end_key`` by breadth-first search.

    The queue holds whole candidate paths, so the first one that ends
    on the target is a shortest one.  A key never appears twice in a
    path.
    """
    start = parse_key(start_key)
    target = parse_key(end_key)
    allowed = check_relations(allowed_relations)

    paths: deque[tuple[MusicalKey, ...]] = deque([(start,)])
    explored = 0

    while paths:
        path = paths.popleft()
        explored += 1

        if path[-1] == target:
            logger.debug(f"BFS reached {target} after {explored} paths")
            return _render(path, target)

        for neighbor in path[-1].neighbors(allowed):
            if neighbor not in path:
                paths.append(path + (neighbor,))

    logger.warning(f"No modulation from {start} to {target} with relations {sorted(allowed)}")
    return []


# ---------------------------------------------------------------------------
# Iterative-deepening depth-first search
# ---------------------------------------------------------------------------

def _dfs(
    path: list[MusicalKey],
    target: MusicalKey,
    allowed: frozenset[Relation],
    depth: int,
) -> list[MusicalKey] | None:
    if depth < 0:
        return None
    if path[-1] == target:
        return list(path)

    for neighbor in path[-1].neighbors(allowed):
        if neighbor in path:
            continue
        path.append(neighbor)
        found = _dfs(path, target, allowed, depth - 1)
        if found is not None:
            return found
        path.pop()

    return None


def modulate_dfs(
    start_key: str,
    end_key: str,
    allowed_relations: Iterable[int] | None = None,
    max_depth: int | None = None,
) -> list[str]:
    """
    Shortest path by iterative-deepening depth-first search.

    Runs a depth-limited backtracking search with limits 0, 1, 2, ...
    up to ``max_depth`` (default from config, 24) and returns the
    first path found, which is therefore a shortest one.
    """
    start = parse_key(start_key)
    target = parse_key(end_key)
    allowed = check_relations(allowed_relations)

    if max_depth is None:
        max_depth = get_config().modulation.max_depth
    if max_depth < 0:
        raise InvalidArgumentError(f"max_depth must be non-negative, got {max_depth}", field="max_depth")

    for depth in range(max_depth + 1):
        found = _dfs([start], target, allowed, depth)
        if found is not None:
            logger.debug(f"DFS reached {target} at depth {depth}")
            return _render(found, target)

    logger.warning(
        f"No modulation from {start} to {target} within depth {max_depth} "
        f"with relations {sorted(allowed)}"
    )
    return []


SEARCHES: dict[str, Callable[..., list[str]]] = {
    "bfs": modulate_bfs,
    "dfs": modulate_dfs,
}


# ---------------------------------------------------------------------------
# Planner facade
# ---------------------------------------------------------------------------

@dataclass
class ModulationResult:
    """
    Outcome of one modulation search.
    """

    start_key: str
    end_key: str
    strategy: str
    relations: list[int] = field(default_factory=list)
    path: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def n_modulations(self) -> int:
        return max(len(self.path) - 1, 0)

    def to_dict(self) -> dict:
        return {
            "start_key": self.start_key,
            "end_key": self.end_key,
            "strategy": self.strategy,
            "relations": self.relations,
            "path": self.path,
            "found": self.found,
            "n_modulations": self.n_modulations,
        }


class ModulationPlanner:
    """
    Find modulation paths with a fixed relation set and strategy.

    Example:
        >>> planner = ModulationPlanner(allowed_relations={0, 1, 2, 3, 4, 5})
        >>> planner.find("C major", "Bb minor").path[-1]
        'Bb minor'
    """

    def __init__(
        self,
        allowed_relations: Iterable[int] | None = None,
        strategy: str | None = None,
        config: ModulationConfig | None = None,
    ):
        self.config = config or get_config().modulation
        if allowed_relations is None:
            allowed_relations = self.config.default_relations
        self.allowed = check_relations(allowed_relations)
        self.strategy = strategy or self.config.default_strategy

        if self.strategy not in SEARCHES:
            raise InvalidArgumentError(
                f"Unknown strategy '{self.strategy}', expected one of {list(MODULATION_STRATEGIES)}",
                field="strategy",
            )

    def find(self, start_key: str, end_key: str) -> ModulationResult:
        """Search for a path and wrap it in a ModulationResult."""
        logger.info(f"Searching modulation {start_key} -> {end_key} ({self.strategy})")

        if self.strategy == "dfs":
            path = modulate_dfs(start_key, end_key, self.allowed, max_depth=self.config.max_depth)
        else:
            path = modulate_bfs(start_key, end_key, self.allowed)

        return ModulationResult(
            start_key=start_key,
            end_key=end_key,
            strategy=self.strategy,
            relations=sorted(int(r) for r in self.allowed),
            path=path,
        )
