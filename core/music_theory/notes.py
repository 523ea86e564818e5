"""
core/music_theory/notes.py — Note names, interval constants, MIDI conversion.

Pure module — no I/O, no side effects.

Conventions:
  - Pitch classes use sharp spellings: C=0, C#=1, ..., B=11
  - Flat spellings (Db, Eb, Gb, Ab, Bb) are accepted on input and
    normalized to sharps
  - Octave 4 anchor: C4 = MIDI 60 (MIDI = 12 * (octave + 1) + semitone)
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Chromatic pitch classes
# ---------------------------------------------------------------------------

NOTE_NAMES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)

# Reverse map: flat → sharp (for input normalization)
FLAT_TO_SHARP: dict[str, str] = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

NOTE_TO_SEMITONE: dict[str, int] = {
    **{name: i for i, name in enumerate(NOTE_NAMES)},
    **{flat: NOTE_NAMES.index(sharp) for flat, sharp in FLAT_TO_SHARP.items()},
}

MIDDLE_C: int = 60
MIDI_MIN: int = 0
MIDI_MAX: int = 127

# ---------------------------------------------------------------------------
# Intervals (semitones above the root)
# ---------------------------------------------------------------------------

UNISON: int = 0
MINOR_SECOND: int = 1
MAJOR_SECOND: int = 2
MINOR_THIRD: int = 3
MAJOR_THIRD: int = 4
PERFECT_FOURTH: int = 5
DIMINISHED_FIFTH: int = 6
PERFECT_FIFTH: int = 7
AUGMENTED_FIFTH: int = 8
MAJOR_SIXTH: int = 9
DIMINISHED_SEVENTH: int = 9
MINOR_SEVENTH: int = 10
MAJOR_SEVENTH: int = 11
OCTAVE: int = 12
MINOR_NINTH: int = 13
MAJOR_NINTH: int = 14
AUGMENTED_NINTH: int = 15
PERFECT_ELEVENTH: int = 17
AUGMENTED_ELEVENTH: int = 18
MINOR_THIRTEENTH: int = 20
MAJOR_THIRTEENTH: int = 21


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------


def normalize_note(name: str | None) -> str | None:
    """Return the canonical sharp spelling of a note name, or None.

    Args:
        name: Note name such as "C", "F#", "Bb" (case of the letter is
              normalized, so "bb" and "Bb" are equivalent)

    Returns:
        Canonical sharp name, e.g. "A#" for "Bb". None for empty or
        unknown names.

    Examples:
        >>> normalize_note("Eb")
        'D#'
        >>> normalize_note("H") is None
        True
    """
    if not name:
        return None
    cleaned = name.strip()
    if not cleaned:
        return None
    cleaned = cleaned[0].upper() + cleaned[1:]
    if cleaned in FLAT_TO_SHARP:
        return FLAT_TO_SHARP[cleaned]
    if cleaned in NOTE_NAMES:
        return cleaned
    return None


def note_to_midi(name: str, octave: int = 4) -> int:
    """Convert a note name and octave to a MIDI note number.

    The result is clamped to [0, 127].

    Raises:
        ValueError: If the note name is not a recognised pitch class.
    """
    canonical = normalize_note(name)
    if canonical is None:
        raise ValueError(f"Unknown note name {name!r}")
    midi = 12 * (octave + 1) + NOTE_TO_SEMITONE[canonical]
    return max(MIDI_MIN, min(MIDI_MAX, midi))


def midi_to_note(midi: int) -> str:
    """Convert a MIDI note number to a name with octave, e.g. 61 → 'C#4'."""
    octave = midi // 12 - 1
    return f"{NOTE_NAMES[midi % 12]}{octave}"


def pitch_class(midi: int) -> int:
    """Return the pitch class (0–11) of a MIDI note."""
    return midi % 12
