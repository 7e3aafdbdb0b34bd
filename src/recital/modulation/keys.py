"""
Musical keys and the relations between them.

A key is a tonic pitch class plus a mode.  Flat spellings are folded
onto the sharp names for arithmetic on the 12-tone circle, and a few
sharp keys are shown with their conventional flat names (Bb major
rather than A# major).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Iterable, Iterator

from recital.core.exceptions import InvalidArgumentError, InvalidKeyError


class Mode(str, Enum):
    MAJOR = "major"
    MINOR = "minor"


class Relation(IntEnum):
    """
    The six neighbors a piece may modulate to.

    Offsets are semitones from the tonic of a major key; for a minor
    key the offsets are negated and the target modes flipped.
    """

    RELATIVE = 0      # same tonic, other mode
    SUPERTONIC = 1    # ii of a major key, VII of a minor key
    MEDIANT = 2       # iii / VI
    SUBDOMINANT = 3   # IV / v
    DOMINANT = 4      # V / iv
    SUBMEDIANT = 5    # vi / III


PITCH_CLASSES: tuple[str, ...] = ("A", "A#", "B", "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#")

ENHARMONICS = MappingProxyType({
    "Bb": "A#",
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
})

DISPLAY_SPELLINGS = MappingProxyType({
    "A# major": "Bb major",
    "A# minor": "Bb minor",
    "D# major": "Eb major",
    "G# major": "Ab major",
    "C# major": "Db major",
})

# relation -> (semitone offset, resulting mode)
_MAJOR_NEIGHBORS = MappingProxyType({
    Relation.RELATIVE: (0, Mode.MINOR),
    Relation.SUPERTONIC: (2, Mode.MINOR),
    Relation.MEDIANT: (4, Mode.MINOR),
    Relation.SUBDOMINANT: (5, Mode.MAJOR),
    Relation.DOMINANT: (7, Mode.MAJOR),
    Relation.SUBMEDIANT: (9, Mode.MINOR),
})

_MINOR_NEIGHBORS = MappingProxyType({
    Relation.RELATIVE: (0, Mode.MAJOR),
    Relation.SUPERTONIC: (-2, Mode.MAJOR),
    Relation.MEDIANT: (-4, Mode.MAJOR),
    Relation.SUBDOMINANT: (-5, Mode.MINOR),
    Relation.DOMINANT: (-7, Mode.MINOR),
    Relation.SUBMEDIANT: (-9, Mode.MAJOR),
})

ALL_RELATIONS: frozenset[Relation] = frozenset(Relation)


@dataclass(frozen=True)
class MusicalKey:
    """A key with its tonic stored under the sharp spelling."""

    tonic: str
    mode: Mode

    @property
    def pitch_index(self) -> int:
        return PITCH_CLASSES.index(self.tonic)

    @property
    def name(self) -> str:
        """Conventional spelling, e.g. ``"Bb minor"``."""
        raw = f"{self.tonic} {self.mode.value}"
        return DISPLAY_SPELLINGS.get(raw, raw)

    def __str__(self) -> str:
        return self.name

    def transpose(self, semitones: int, mode: Mode) -> "MusicalKey":
        tonic = PITCH_CLASSES[(self.pitch_index + semitones) % len(PITCH_CLASSES)]
        return MusicalKey(tonic, mode)

    def neighbors(self, allowed: Iterable[Relation] = ALL_RELATIONS) -> Iterator["MusicalKey"]:
        """Yield the related keys for ``allowed``, in relation order."""
        table = _MAJOR_NEIGHBORS if self.mode is Mode.MAJOR else _MINOR_NEIGHBORS
        for relation in sorted(set(allowed)):
            offset, mode = table[relation]
            yield self.transpose(offset, mode)


def parse_key(text: str) -> MusicalKey:
    """
    Parse ``"<tonic> <major|minor>"`` into a MusicalKey.

    Flat tonics (Bb, Db, Eb, Gb, Ab) are accepted and stored as sharps.
    """
    if not isinstance(text, str):
        raise InvalidKeyError(repr(text), "expected a string")

    parts = text.split()
    if len(parts) != 2:
        raise InvalidKeyError(text, "expected '<tonic> <major|minor>'")

    tonic, mode = parts
    tonic = tonic[0].upper() + tonic[1:].lower()
    tonic = ENHARMONICS.get(tonic, tonic)
    if tonic not in PITCH_CLASSES:
        raise InvalidKeyError(text, f"unknown tonic '{parts[0]}'")

    try:
        return MusicalKey(tonic, Mode(mode.lower()))
    except ValueError:
        raise InvalidKeyError(text, f"unknown mode '{mode}'") from None


def check_relations(allowed: Iterable[int] | None) -> frozenset[Relation]:
    """Validate relation indices; ``None`` means every relation."""
    if allowed is None:
        return ALL_RELATIONS

    relations = set()
    for value in allowed:
        try:
            relations.add(Relation(value))
        except ValueError:
            raise InvalidArgumentError(
                f"Relation index must be in 0..5, got {value!r}", field="allowed_relations"
            ) from None
    return frozenset(relations)


def standardize(key: str) -> str:
    """Return the conventional spelling of ``key``."""
    return parse_key(key).name


def related_keys(key: str, allowed_relations: Iterable[int] | None = None) -> set[str]:
    """
    Keys a piece in ``key`` may modulate to.

    Example:
        >>> sorted(related_keys("F minor", {0, 3, 5}))
        ['Ab major', 'C minor', 'F major']
    """
    allowed = check_relations(allowed_relations)
    return {k.name for k in parse_key(key).neighbors(allowed)}
