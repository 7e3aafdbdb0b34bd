"""Tests for musical keys and related-key generation."""

import pytest

from recital.core.exceptions import InvalidArgumentError, InvalidKeyError
from recital.modulation import (
    Mode,
    MusicalKey,
    Relation,
    parse_key,
    related_keys,
    standardize,
)


ALL = {0, 1, 2, 3, 4, 5}


class TestParseKey:
    """Test key parsing and spelling."""

    def test_natural_key(self):
        key = parse_key("C major")
        assert key == MusicalKey("C", Mode.MAJOR)
        assert key.name == "C major"

    def test_flat_folds_onto_sharp(self):
        assert parse_key("Bb minor") == parse_key("A# minor")
        assert parse_key("Db major").tonic == "C#"

    @pytest.mark.parametrize("raw, shown", [
        ("A# major", "Bb major"),
        ("A# minor", "Bb minor"),
        ("D# major", "Eb major"),
        ("G# major", "Ab major"),
        ("C# major", "Db major"),
        # Only the listed combinations are respelled
        ("D# minor", "D# minor"),
        ("Gb major", "F# major"),
        ("Ab minor", "G# minor"),
    ])
    def test_display_spelling(self, raw, shown):
        assert standardize(raw) == shown

    def test_case_and_whitespace(self):
        assert parse_key("  bb   MINOR ") == MusicalKey("A#", Mode.MINOR)

    @pytest.mark.parametrize("text", ["", "C", "H major", "C dorian", "C major extra", "Cb major"])
    def test_rejects_malformed(self, text):
        with pytest.raises(InvalidKeyError) as exc:
            parse_key(text)
        assert exc.value.code == "INVALID_KEY"

    def test_rejects_non_string(self):
        with pytest.raises(InvalidKeyError):
            parse_key(None)


class TestRelatedKeys:
    """Test neighbor generation."""

    def test_natural_keys(self):
        assert related_keys("C major", ALL) == {
            "D minor", "E minor", "F major", "G major", "A minor", "C minor",
        }
        assert related_keys("C minor", ALL) == {
            "C major", "Bb major", "Ab major", "G minor", "F minor", "Eb major",
        }

    def test_keys_with_accidentals(self):
        assert related_keys("F# major", ALL) == {
            "F# minor", "G# minor", "Bb minor", "B major", "Db major", "D# minor",
        }
        assert related_keys("G# minor", ALL) == {
            "Ab major", "F# major", "E major", "D# minor", "C# minor", "B major",
        }

    def test_flat_input(self):
        assert related_keys("Ab minor", ALL) == related_keys("G# minor", ALL)

    def test_restricted_relations(self):
        assert related_keys("F minor", {0, 3, 5}) == {"Ab major", "F major", "C minor"}
        assert related_keys("C major", [Relation.DOMINANT]) == {"G major"}

    def test_empty_relations(self):
        assert related_keys("F minor", set()) == set()

    def test_none_means_all(self):
        assert related_keys("C major") == related_keys("C major", ALL)

    def test_rejects_bad_relation(self):
        with pytest.raises(InvalidArgumentError) as exc:
            related_keys("C major", {6})
        assert exc.value.field == "allowed_relations"

    def test_neighbors_in_relation_order(self):
        names = [k.name for k in parse_key("C major").neighbors()]
        assert names == ["C minor", "D minor", "E minor", "F major", "G major", "A minor"]
