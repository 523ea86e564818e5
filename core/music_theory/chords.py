"""
core/music_theory/chords.py — Chord construction, inversion and naming.

build_chord() is the single place where a root + modifier set becomes
concrete MIDI notes. The result is deterministic: the same (root,
modifiers, octave) always yields the same Chord.

Modifier resolution order:
    1. Triad quality: minor > diminished > augmented > sus2 > sus4 > major
    2. flat5 lowers a perfect fifth to a diminished fifth
    3. Sevenths: dom7 (diminished seventh on a diminished triad), maj7
    4. 6 only when no seventh is present
    5. Extensions 9 / 11 / 13, then alterations b9 / #9 / #11 / b13
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from core.music_theory import notes as iv
from core.music_theory.notes import normalize_note, note_to_midi
from core.music_theory.types import Chord

# (modifier, interval) pairs added on top of the triad + sevenths
_EXTENSIONS: tuple[tuple[str, int], ...] = (
    ("9", iv.MAJOR_NINTH),
    ("11", iv.PERFECT_ELEVENTH),
    ("13", iv.MAJOR_THIRTEENTH),
    ("flat9", iv.MINOR_NINTH),
    ("sharp9", iv.AUGMENTED_NINTH),
    ("sharp11", iv.AUGMENTED_ELEVENTH),
    ("flat13", iv.MINOR_THIRTEENTH),
)

# quality → (third-ish interval, fifth interval); checked in this order
_TRIADS: tuple[tuple[str, int, int], ...] = (
    ("minor", iv.MINOR_THIRD, iv.PERFECT_FIFTH),
    ("diminished", iv.MINOR_THIRD, iv.DIMINISHED_FIFTH),
    ("augmented", iv.MAJOR_THIRD, iv.AUGMENTED_FIFTH),
    ("sus2", iv.MAJOR_SECOND, iv.PERFECT_FIFTH),
    ("sus4", iv.PERFECT_FOURTH, iv.PERFECT_FIFTH),
)


def _triad(modifiers: frozenset[str]) -> tuple[str, list[int]]:
    for quality, third, fifth in _TRIADS:
        if quality in modifiers:
            return quality, [iv.UNISON, third, fifth]
    return "major", [iv.UNISON, iv.MAJOR_THIRD, iv.PERFECT_FIFTH]


def build_chord(
    root: str | None,
    modifiers: Iterable[str] = (),
    *,
    octave: int = 4,
) -> Chord | None:
    """Build a chord from a root note and modifier tokens.

    Args:
        root:      Root note name ("C", "F#", "Bb"); None or unknown → None
        modifiers: Modifier tokens (see types.MODIFIERS); unknown tokens are
                   ignored
        octave:    Octave of the root (C4 = MIDI 60)

    Returns:
        Chord with sorted unique intervals and ascending notes, or None when
        the root cannot be parsed.

    Examples:
        >>> build_chord("D", {"minor", "dom7"}).notes
        (62, 65, 69, 72)
        >>> build_chord(None) is None
        True
    """
    canonical = normalize_note(root)
    if canonical is None:
        return None

    mods = frozenset(modifiers)
    quality, intervals = _triad(mods)

    if "flat5" in mods and iv.PERFECT_FIFTH in intervals:
        intervals[intervals.index(iv.PERFECT_FIFTH)] = iv.DIMINISHED_FIFTH

    if "dom7" in mods:
        intervals.append(iv.DIMINISHED_SEVENTH if quality == "diminished" else iv.MINOR_SEVENTH)
    if "maj7" in mods:
        intervals.append(iv.MAJOR_SEVENTH)
    if "6" in mods and "dom7" not in mods and "maj7" not in mods:
        intervals.append(iv.MAJOR_SIXTH)

    for token, interval in _EXTENSIONS:
        if token in mods:
            intervals.append(interval)

    unique = tuple(sorted(set(intervals)))
    root_midi = note_to_midi(canonical, octave)

    return Chord(
        root=canonical,
        quality=quality,
        modifiers=mods,
        intervals=unique,
        notes=tuple(root_midi + i for i in unique),
        octave=octave,
    )


def invert_notes(notes: Sequence[int], inversion_index: int = 0) -> tuple[int, ...]:
    """Invert a voicing by moving its lowest notes up an octave.

    Inversion 0 returns the notes unchanged. Larger indices wrap modulo
    the note count.

    Examples:
        >>> invert_notes((60, 64, 67), 1)
        (64, 67, 72)
        >>> invert_notes((60, 64, 67), 2)
        (67, 72, 76)
    """
    if not notes or inversion_index == 0:
        return tuple(notes)

    inverted = sorted(notes)
    for _ in range(inversion_index % len(notes)):
        inverted.append(inverted.pop(0) + iv.OCTAVE)
    return tuple(sorted(inverted))


def inversion_count(notes: Sequence[int] | None) -> int:
    """Number of distinct inversions of a voicing (its note count)."""
    return len(notes) if notes else 0


def chord_name(root: str | None, modifiers: Iterable[str] = ()) -> str:
    """Human-readable chord name, e.g. 'D min7', 'G7', 'C Maj7', 'C9 ♯11'.

    Returns an empty string when there is no root.
    """
    canonical = normalize_note(root)
    if canonical is None:
        return ""

    mods = frozenset(modifiers)
    dom7 = "dom7" in mods
    maj7 = "maj7" in mods
    name = canonical

    if "diminished" in mods:
        name += " dim" + ("7" if dom7 else "")
    elif "augmented" in mods:
        name += " aug" + ("7" if dom7 else " Maj7" if maj7 else "")
    elif "sus2" in mods:
        name += " sus2"
    elif "sus4" in mods:
        name += " sus4"
    elif "minor" in mods:
        if maj7:
            name += " min(Maj7)"
        elif dom7:
            name += " min7"
        elif "6" in mods:
            name += " min6"
        else:
            name += " min"
    elif maj7:
        name += " Maj7"
    elif dom7:
        name += "7"
    elif "6" in mods:
        name += "6"

    # Highest extension replaces a dominant 7, otherwise it is appended
    for extension in ("13", "11", "9"):
        if extension not in mods:
            continue
        if dom7 and "Maj" not in name:
            name = name.replace("7", extension, 1)
        elif not maj7 and not dom7:
            name += extension
        else:
            name += f" {extension}"
        break

    alterations = [
        symbol
        for token, symbol in (
            ("flat5", "♭5"),
            ("flat9", "♭9"),
            ("sharp9", "♯9"),
            ("sharp11", "♯11"),
            ("flat13", "♭13"),
        )
        if token in mods
    ]
    if alterations:
        name += " " + " ".join(alterations)

    return name.strip()
