"""
core/music_theory/voicing.py — Voicing-style transforms and register idioms.

Every transform is a pure function from notes (or a Chord) to a new,
ascending tuple of MIDI notes. Nothing here scores sequences — that is the
solver's job; this module only knows how a single chord can be laid out.

Styles:
    close         — the chord as built (root position, stacked)
    drop2 / drop3 — 2nd / 3rd note from the top dropped an octave
    drop24        — 2nd and 4th from the top dropped an octave
    rootless-a    — 3-5-7-9, third on the bottom (Bill Evans type A)
    rootless-b    — 7-9-3-5, seventh on the bottom (Bill Evans type B)
    shell         — root-3-7 (or root-3-6) for bebop comping
    quartal       — stacked perfect fourths (McCoy Tyner)
    upper-struct  — tritone + major triad a minor third above the root

Register:
    Each style has an idiomatic {min, max, ideal} range. register_penalty()
    charges 3 points per semitone outside [min, max] plus half a point per
    semitone the voicing's centre sits away from ideal.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from core.music_theory import notes as iv
from core.music_theory.types import DEFAULT_VOICING_STYLE, Chord

# ---------------------------------------------------------------------------
# Spread and legacy drop
# ---------------------------------------------------------------------------


def apply_spread(notes: Sequence[int], spread_amount: int) -> tuple[int, ...]:
    """Move every other voice (odd indices, low to high) up by octaves.

    Examples:
        >>> apply_spread((60, 64, 67, 72), 1)
        (60, 67, 76, 84)
        >>> apply_spread((60, 64, 67), 2)
        (60, 67, 88)
    """
    if spread_amount == 0 or len(notes) < 2:
        return tuple(notes)

    result = sorted(notes)
    for i in range(1, len(result), 2):
        result[i] += iv.OCTAVE * spread_amount
    return tuple(sorted(result))


def apply_progressive_drop(notes: Sequence[int], drop_count: int) -> tuple[int, ...]:
    """Legacy drop voicing: move the highest notes down an octave.

    At least one note always stays in place.

    Examples:
        >>> apply_progressive_drop((60, 64, 67, 72), 1)
        (60, 60, 64, 67)
    """
    if drop_count == 0 or not notes:
        return tuple(notes)

    result = sorted(notes)
    for i in range(min(drop_count, len(notes) - 1)):
        result[len(result) - 1 - i] -= iv.OCTAVE
    return tuple(sorted(result))


def _drop_from_top(notes: Sequence[int], *positions: int) -> tuple[int, ...]:
    """Drop the notes at the given 1-based positions from the top an octave.

    Voicings with fewer than four notes are returned unchanged.
    """
    if len(notes) < 4:
        return tuple(notes)
    result = sorted(notes)
    for position in positions:
        result[len(result) - position] -= iv.OCTAVE
    return tuple(sorted(result))


def apply_drop2(notes: Sequence[int]) -> tuple[int, ...]:
    return _drop_from_top(notes, 2)


def apply_drop3(notes: Sequence[int]) -> tuple[int, ...]:
    return _drop_from_top(notes, 3)


def apply_drop24(notes: Sequence[int]) -> tuple[int, ...]:
    return _drop_from_top(notes, 2, 4)


# ---------------------------------------------------------------------------
# Chord-tone lookup
# ---------------------------------------------------------------------------


def _find(chord: Chord, *intervals: int) -> int | None:
    """Return the first chord note matching any interval (tried in order, mod 12)."""
    root = chord.root_midi
    for interval in intervals:
        for note in chord.notes:
            if (note - root) % 12 == interval % 12:
                return note
    return None


def _third(chord: Chord) -> int | None:
    return _find(chord, iv.MAJOR_THIRD, iv.MINOR_THIRD)


def _fifth(chord: Chord) -> int | None:
    return _find(chord, iv.PERFECT_FIFTH, iv.DIMINISHED_FIFTH, iv.AUGMENTED_FIFTH)


def _seventh(chord: Chord) -> int | None:
    return _find(chord, iv.MAJOR_SEVENTH, iv.MINOR_SEVENTH, iv.DIMINISHED_SEVENTH)


def _ninth(chord: Chord) -> int | None:
    return _find(chord, iv.MAJOR_NINTH, iv.MINOR_NINTH, iv.AUGMENTED_NINTH)


def _anchor_lowest(voicing: list[int], anchor: int | None) -> tuple[int, ...]:
    """Sort, then drop `anchor` an octave if it is not already the lowest note."""
    voicing.sort()
    if anchor is not None and voicing[0] != anchor:
        index = voicing.index(anchor)
        if index > 0:
            voicing[index] -= iv.OCTAVE
    return tuple(sorted(voicing))


# ---------------------------------------------------------------------------
# Jazz voicing styles
# ---------------------------------------------------------------------------


def apply_rootless_a(chord: Chord) -> tuple[int, ...]:
    """Rootless type A (3-5-7-9) with the third on the bottom.

    A natural ninth is added when the chord has none. Chords that yield
    fewer than three of these tones are returned unchanged.
    """
    third, fifth, seventh, ninth = _third(chord), _fifth(chord), _seventh(chord), _ninth(chord)

    voicing = [n for n in (third, fifth, seventh) if n is not None]
    if ninth is not None:
        voicing.append(ninth)
    elif third is not None:
        voicing.append(chord.root_midi + iv.MAJOR_NINTH)

    if len(voicing) < 3:
        return chord.notes
    return _anchor_lowest(voicing, third)


def apply_rootless_b(chord: Chord) -> tuple[int, ...]:
    """Rootless type B (7-9-3-5) with the seventh on the bottom."""
    third, fifth, seventh, ninth = _third(chord), _fifth(chord), _seventh(chord), _ninth(chord)

    voicing = [] if seventh is None else [seventh]
    voicing.append(ninth if ninth is not None else chord.root_midi + iv.MAJOR_NINTH)
    voicing.extend(n for n in (third, fifth) if n is not None)

    if len(voicing) < 3:
        return chord.notes
    return _anchor_lowest(voicing, seventh)


def apply_shell(chord: Chord) -> tuple[int, ...]:
    """Shell voicing: root + third + seventh (sixth when there is no seventh)."""
    third, seventh = _third(chord), _seventh(chord)

    voicing = [chord.root_midi]
    if third is not None:
        voicing.append(third)
    if seventh is not None:
        voicing.append(seventh)
    else:
        sixth = _find(chord, iv.MAJOR_SIXTH)
        if sixth is not None:
            voicing.append(sixth)

    if len(voicing) < 2:
        return chord.notes
    return tuple(sorted(voicing))


def apply_quartal(chord: Chord) -> tuple[int, ...]:
    """Quartal voicing built from stacked perfect fourths.

    minor:    four fourths and a major third stacked from the minor third
    dom7:     three fourths stacked from the minor seventh
    other:    three fourths from the root, plus a major tenth on major chords
    """
    root = chord.root_midi
    if chord.quality == "minor":
        base = root + iv.MINOR_THIRD
        return tuple(sorted(base + step for step in (0, 5, 10, 15, 19)))

    if "dom7" in chord.modifiers:
        base = root + iv.MINOR_SEVENTH
        return tuple(sorted(base + step for step in (0, 5, 10, 15)))

    voicing = [root, root + 5, root + 10, root + 15]
    if chord.quality == "major":
        voicing.append(root + 19)
    return tuple(sorted(voicing))


def apply_upper_structure(chord: Chord) -> tuple[int, ...]:
    """Tritone (major 3rd + 7th) under a major triad a minor third above the root.

    For C7 this gives E, Bb + Eb-G-Bb (#9, b13, b7). Chords without a major
    third or a seventh are returned unchanged.
    """
    root = chord.root_midi
    third = _find(chord, iv.MAJOR_THIRD)
    seventh = _find(chord, iv.MINOR_SEVENTH, iv.MAJOR_SEVENTH)

    voicing = [n for n in (third, seventh) if n is not None]
    upper_root = root + iv.MINOR_THIRD
    voicing.extend((upper_root, upper_root + iv.MAJOR_THIRD, upper_root + iv.PERFECT_FIFTH))

    if len(voicing) < 4:
        return chord.notes
    return tuple(sorted(voicing))


def apply_voicing_style(chord: Chord, style: str) -> tuple[int, ...]:
    """Apply a named voicing style to a chord.

    Unknown styles fall back to close position.
    """
    if style == "rootless-a":
        return apply_rootless_a(chord)
    if style == "rootless-b":
        return apply_rootless_b(chord)
    if style == "shell":
        return apply_shell(chord)
    if style == "quartal":
        return apply_quartal(chord)
    if style == "drop2":
        return apply_drop2(chord.notes)
    if style == "drop3":
        return apply_drop3(chord.notes)
    if style == "drop24":
        return apply_drop24(chord.notes)
    if style == "upper-struct":
        return apply_upper_structure(chord)
    return chord.notes


def cycle_voicing_style(current: str, styles: Sequence[str]) -> str:
    """Next style in `styles` after `current` (wraps; unknown → first)."""
    index = styles.index(current) if current in styles else -1
    return styles[(index + 1) % len(styles)]


# ---------------------------------------------------------------------------
# Register constraints
# ---------------------------------------------------------------------------

#: MIDI register per style: C3 = 48, C4 = 60 (middle C), C5 = 72
REGISTER_CONSTRAINTS: dict[str, dict[str, int]] = {
    "rootless-a": {"min": 48, "max": 79, "ideal": 60},
    "rootless-b": {"min": 48, "max": 79, "ideal": 60},
    "shell": {"min": 36, "max": 72, "ideal": 54},
    "quartal": {"min": 48, "max": 79, "ideal": 60},
    "upper-struct": {"min": 52, "max": 84, "ideal": 64},
    "drop2": {"min": 40, "max": 84, "ideal": 58},
    "drop3": {"min": 36, "max": 84, "ideal": 54},
    "drop24": {"min": 36, "max": 84, "ideal": 54},
    "close": {"min": 36, "max": 96, "ideal": 60},
}

OUT_OF_RANGE_WEIGHT: int = 3  # points per semitone outside [min, max]
CENTER_WEIGHT: float = 0.5  # points per semitone the centre is off ideal


def register_penalty(notes: Sequence[int], style: str) -> float:
    """Score how far a voicing sits from its style's idiomatic register.

    Returns:
        0.0 for an ideally centred, in-range voicing (and for empty notes);
        larger is worse.
    """
    if not notes:
        return 0.0

    bounds = REGISTER_CONSTRAINTS.get(style, REGISTER_CONSTRAINTS[DEFAULT_VOICING_STYLE])
    lowest, highest = min(notes), max(notes)
    center = (lowest + highest) / 2

    penalty = 0.0
    if lowest < bounds["min"]:
        penalty += (bounds["min"] - lowest) * OUT_OF_RANGE_WEIGHT
    if highest > bounds["max"]:
        penalty += (highest - bounds["max"]) * OUT_OF_RANGE_WEIGHT
    penalty += abs(center - bounds["ideal"]) * CENTER_WEIGHT
    return penalty


def constrain_to_register(notes: Sequence[int], style: str) -> tuple[int, ...]:
    """Octave-shift a whole voicing into its style's register.

    Too low → up, too high → down, otherwise the nearest octave to the ideal
    centre if that still fits. Voicings wider than the register are returned
    unchanged.
    """
    if not notes:
        return tuple(notes)

    bounds = REGISTER_CONSTRAINTS.get(style, REGISTER_CONSTRAINTS[DEFAULT_VOICING_STYLE])
    low, high = bounds["min"], bounds["max"]
    lowest, highest = min(notes), max(notes)

    if highest - lowest > high - low:
        return tuple(notes)

    shift = 0
    if lowest < low:
        shift = math.ceil((low - lowest) / 12) * 12
    elif highest > high:
        shift = -math.ceil((highest - high) / 12) * 12
    else:
        center = (lowest + highest) / 2
        # Round half up, not to even
        ideal_shift = math.floor((bounds["ideal"] - center) / 12 + 0.5) * 12
        if lowest + ideal_shift >= low and highest + ideal_shift <= high:
            shift = ideal_shift

    return tuple(n + shift for n in notes)
