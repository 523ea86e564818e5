"""
core/music_theory/types.py — Frozen value objects for the chord theory engine.

All types are immutable frozen dataclasses — safe to hash, cache, and use as
dict keys. No I/O, no side effects, no external dependencies beyond stdlib.

Types:
    Chord           — a concrete chord built from root + modifiers at an octave
    ParsedChord     — structured result of parsing keyboard keys
    ChordSource     — one preset slot: chord identity + its stored voicing
    VoicingSettings — the voicing fields persisted per preset slot
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------

#: Chord quality / extension / alteration tokens understood by build_chord()
MODIFIERS: frozenset[str] = frozenset(
    {
        "major",
        "minor",
        "diminished",
        "augmented",
        "sus2",
        "sus4",
        "dom7",
        "maj7",
        "6",
        "9",
        "11",
        "13",
        "flat5",
        "flat9",
        "sharp9",
        "sharp11",
        "flat13",
    }
)

#: Voicing styles in cycling order. Spellings match the persisted preset data.
VOICING_STYLES: tuple[str, ...] = (
    "close",
    "drop2",
    "drop3",
    "drop24",
    "rootless-a",
    "rootless-b",
    "shell",
    "quartal",
    "upper-struct",
)

VOICING_STYLE_LABELS: dict[str, str] = {
    "close": "Close",
    "drop2": "Drop 2",
    "drop3": "Drop 3",
    "drop24": "Drop 2+4",
    "rootless-a": "Rootless A",
    "rootless-b": "Rootless B",
    "shell": "Shell",
    "quartal": "Quartal",
    "upper-struct": "Upper Structure",
}

DEFAULT_VOICING_STYLE: str = "close"


# ---------------------------------------------------------------------------
# Chord
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Chord:
    """A concrete chord: root + modifiers rendered at a specific octave.

    Attributes:
        root:       Root note name in canonical sharp form, e.g. "D", "F#"
        quality:    Triad quality, e.g. "major", "minor", "sus4"
        modifiers:  Modifier tokens the chord was built from
        intervals:  Sorted, unique semitone offsets from the root
        notes:      MIDI notes, strictly ascending (root first)
        octave:     Octave the root was placed in
    """

    root: str
    quality: str
    modifiers: frozenset[str]
    intervals: tuple[int, ...]
    notes: tuple[int, ...]
    octave: int

    def __post_init__(self) -> None:
        if not self.root:
            raise ValueError("Chord.root must not be empty")
        if not self.notes:
            raise ValueError("Chord.notes must not be empty")
        if any(b <= a for a, b in zip(self.notes, self.notes[1:])):
            raise ValueError(f"Chord.notes must be strictly ascending, got {self.notes}")

    @property
    def root_midi(self) -> int:
        """MIDI number of the root (lowest note of the close-position chord)."""
        return self.notes[0]


# ---------------------------------------------------------------------------
# ParsedChord
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParsedChord:
    """Keyboard keys parsed into chord identity.

    Attributes:
        root:              Root note name, or None when no root key is held
        modifiers:         Active modifier tokens in key order
        special_functions: Active special-function names (octave, panic, ...)
    """

    root: str | None
    modifiers: tuple[str, ...] = ()
    special_functions: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        """A chord needs at least a root."""
        return self.root is not None


# ---------------------------------------------------------------------------
# VoicingSettings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VoicingSettings:
    """Voicing fields stored per preset slot (and produced by the solver).

    Attributes:
        inversion_index: Inversion (0 = root position)
        spread_amount:   Octaves added to alternating voices (0–3)
        voicing_style:   One of VOICING_STYLES
        octave:          Octave the chord is built in
        dropped_notes:   Legacy progressive-drop count; always 0 when the
                         voicing comes from the style-based solver
    """

    inversion_index: int
    spread_amount: int
    voicing_style: str
    octave: int
    dropped_notes: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "inversion_index": self.inversion_index,
            "spread_amount": self.spread_amount,
            "voicing_style": self.voicing_style,
            "octave": self.octave,
            "dropped_notes": self.dropped_notes,
        }


# ---------------------------------------------------------------------------
# ChordSource — one preset slot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChordSource:
    """A stored chord as the preset layer hands it to the solver.

    The chord identity is an explicit root + modifier set. A missing or
    unknown root is allowed here; the solver treats it as unparseable.

    Attributes:
        root:            Root note name or None
        modifiers:       Modifier tokens (any iterable; stored as frozenset)
        octave:          Stored octave
        inversion_index: Stored inversion
        spread_amount:   Stored spread
        dropped_notes:   Stored legacy drop count
        voicing_style:   Stored voicing style
    """

    root: str | None
    modifiers: frozenset[str] = field(default_factory=frozenset)
    octave: int = 4
    inversion_index: int = 0
    spread_amount: int = 0
    dropped_notes: int = 0
    voicing_style: str = DEFAULT_VOICING_STYLE

    def __post_init__(self) -> None:
        # Accept lists/tuples for convenience; keep the field hashable
        if not isinstance(self.modifiers, frozenset):
            object.__setattr__(self, "modifiers", frozenset(self.modifiers))

    @classmethod
    def from_keys(cls, keys: Iterable[str], octave: int = 4, **voicing: Any) -> ChordSource:
        """Build a source from raw instrument keyboard keys.

        Args:
            keys:    Held keys, e.g. ["e", "u", "k"] for D minor 7
            octave:  Stored octave
            **voicing: Stored voicing fields (inversion_index, spread_amount,
                       dropped_notes, voicing_style)
        """
        from core.music_theory.keyboard import parse_chord_keys  # local import to avoid circularity

        parsed = parse_chord_keys(keys)
        return cls(root=parsed.root, modifiers=frozenset(parsed.modifiers), octave=octave, **voicing)

    @property
    def stored_voicing(self) -> VoicingSettings:
        """The stored voicing fields, unchanged."""
        return VoicingSettings(
            inversion_index=self.inversion_index,
            spread_amount=self.spread_amount,
            voicing_style=self.voicing_style,
            octave=self.octave,
            dropped_notes=self.dropped_notes,
        )
