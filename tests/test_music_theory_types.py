"""
Tests for core/music_theory/types.py — frozen dataclass invariants.

Validates:
    - Chord, ChordSource, VoicingSettings are immutable
    - Chord validation raises ValueError on bad notes
    - ChordSource coerces modifiers, builds from keys, exposes stored voicing
    - VoicingSettings.to_dict
"""

import pytest

from core.music_theory.types import (
    MODIFIERS,
    VOICING_STYLE_LABELS,
    VOICING_STYLES,
    Chord,
    ChordSource,
    ParsedChord,
    VoicingSettings,
)


def _chord(**overrides) -> Chord:
    fields = {
        "root": "C",
        "quality": "major",
        "modifiers": frozenset({"major"}),
        "intervals": (0, 4, 7),
        "notes": (60, 64, 67),
        "octave": 4,
    }
    fields.update(overrides)
    return Chord(**fields)


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class TestTags:
    def test_every_style_has_a_label(self):
        assert set(VOICING_STYLE_LABELS) == set(VOICING_STYLES)

    def test_close_is_first(self):
        assert VOICING_STYLES[0] == "close"

    def test_modifier_count(self):
        assert len(MODIFIERS) == 17
        assert {"dom7", "maj7", "sharp11"} <= MODIFIERS


# ---------------------------------------------------------------------------
# Chord
# ---------------------------------------------------------------------------


class TestChord:
    def test_creation(self):
        chord = _chord()
        assert chord.root_midi == 60

    def test_frozen(self):
        chord = _chord()
        with pytest.raises((TypeError, AttributeError)):
            chord.octave = 5  # type: ignore[misc]

    def test_empty_root_raises(self):
        with pytest.raises(ValueError, match="root"):
            _chord(root="")

    def test_empty_notes_raises(self):
        with pytest.raises(ValueError, match="notes"):
            _chord(notes=())

    def test_unsorted_notes_raise(self):
        with pytest.raises(ValueError, match="ascending"):
            _chord(notes=(64, 60, 67))

    def test_duplicate_notes_raise(self):
        with pytest.raises(ValueError, match="ascending"):
            _chord(notes=(60, 60, 67))


# ---------------------------------------------------------------------------
# ParsedChord
# ---------------------------------------------------------------------------


class TestParsedChord:
    def test_valid_with_root(self):
        assert ParsedChord(root="C").is_valid

    def test_invalid_without_root(self):
        assert not ParsedChord(root=None, modifiers=("minor",)).is_valid


# ---------------------------------------------------------------------------
# ChordSource
# ---------------------------------------------------------------------------


class TestChordSource:
    def test_defaults(self):
        source = ChordSource(root="C")
        assert source.modifiers == frozenset()
        assert source.octave == 4
        assert source.voicing_style == "close"

    def test_modifiers_coerced_to_frozenset(self):
        source = ChordSource(root="D", modifiers=["minor", "dom7"])
        assert source.modifiers == frozenset({"minor", "dom7"})

    def test_hashable(self):
        a = ChordSource(root="D", modifiers=["minor"])
        b = ChordSource(root="D", modifiers={"minor"})
        assert hash(a) == hash(b)
        assert a == b

    def test_from_keys(self):
        source = ChordSource.from_keys(["e", "u", "k"], octave=3, voicing_style="shell")
        assert source.root == "D"
        assert source.modifiers == frozenset({"minor", "dom7"})
        assert source.octave == 3
        assert source.voicing_style == "shell"

    def test_from_keys_without_root(self):
        assert ChordSource.from_keys(["u"]).root is None

    def test_stored_voicing(self):
        source = ChordSource(
            root="G",
            octave=3,
            inversion_index=2,
            spread_amount=1,
            dropped_notes=1,
            voicing_style="drop2",
        )
        assert source.stored_voicing == VoicingSettings(
            inversion_index=2,
            spread_amount=1,
            voicing_style="drop2",
            octave=3,
            dropped_notes=1,
        )


# ---------------------------------------------------------------------------
# VoicingSettings
# ---------------------------------------------------------------------------


class TestVoicingSettings:
    def test_dropped_notes_defaults_to_zero(self):
        assert VoicingSettings(0, 0, "close", 4).dropped_notes == 0

    def test_to_dict(self):
        settings = VoicingSettings(1, 2, "rootless-a", 3)
        assert settings.to_dict() == {
            "inversion_index": 1,
            "spread_amount": 2,
            "voicing_style": "rootless-a",
            "octave": 3,
            "dropped_notes": 0,
        }

    def test_frozen(self):
        settings = VoicingSettings(0, 0, "close", 4)
        with pytest.raises((TypeError, AttributeError)):
            settings.octave = 5  # type: ignore[misc]
