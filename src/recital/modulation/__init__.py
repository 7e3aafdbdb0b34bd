"""
Key modulation layer for Recital.

Generates related keys from music-theory relations and finds the
shortest chain of modulations between two keys.
"""

from recital.modulation.keys import (
    DISPLAY_SPELLINGS,
    ENHARMONICS,
    PITCH_CLASSES,
    Mode,
    MusicalKey,
    Relation,
    parse_key,
    related_keys,
    standardize,
)
from recital.modulation.search import (
    ModulationPlanner,
    ModulationResult,
    modulate_bfs,
    modulate_dfs,
)

__all__ = [
    "DISPLAY_SPELLINGS",
    "ENHARMONICS",
    "PITCH_CLASSES",
    "Mode",
    "MusicalKey",
    "Relation",
    "parse_key",
    "related_keys",
    "standardize",
    "ModulationPlanner",
    "ModulationResult",
    "modulate_bfs",
    "modulate_dfs",
]
