"""
core/music_theory/keyboard.py — Instrument keyboard → chord identity.

The left hand picks the root on a three-row chromatic layout, the right
hand stacks modifiers by finger, and a handful of keys trigger special
functions (octave shift, transpose, panic). parse_chord_keys() turns a set
of held keys into a ParsedChord; nothing downstream sees raw keys.
"""

from __future__ import annotations

from collections.abc import Iterable

from core.music_theory.types import ParsedChord

# Left hand: root note selection (chromatic, one octave)
LEFT_HAND_KEYS: dict[str, str] = {
    # Row 1 (QWER)
    "q": "C",
    "w": "C#",
    "e": "D",
    "r": "D#",
    # Row 2 (ASDF)
    "a": "E",
    "s": "F",
    "d": "F#",
    "f": "G",
    # Row 3 (ZXCV)
    "z": "G#",
    "x": "A",
    "c": "A#",
    "v": "B",
}

# Right hand: modifiers grouped by finger
RIGHT_HAND_MODIFIERS: dict[str, str] = {
    # Index: quality
    "j": "major",
    "u": "minor",
    "m": "diminished",
    "7": "augmented",
    # Middle: sevenths
    "k": "dom7",
    "i": "maj7",
    ",": "6",
    # Ring: extensions
    "l": "9",
    "o": "11",
    ".": "13",
    # Pinky: suspensions and flat 5
    ";": "sus2",
    "p": "sus4",
    "/": "flat5",
    # Alterations
    "[": "sharp9",
    "]": "flat9",
    "'": "sharp11",
    "\\": "flat13",
}

SPECIAL_KEYS: dict[str, str] = {
    "Shift": "inversion",
    "1": "octave-2",
    "2": "octave-1",
    "3": "octave0",
    "4": "octave+1",
    "5": "octave+2",
    "0": "octave-reset",
    "-": "transpose-down",
    "=": "transpose-up",
    "Tab": "chord-buffer",
    " ": "spread-voicing",
    "Escape": "panic",
}


def parse_chord_keys(keys: Iterable[str] | None) -> ParsedChord:
    """Parse held keyboard keys into a structured chord.

    The first root key in iteration order wins. Unknown keys are ignored.

    Args:
        keys: Held keys, e.g. {"e", "u", "k"}

    Returns:
        ParsedChord with root (or None), modifiers and special functions.

    Examples:
        >>> parse_chord_keys(["f", "j", "k"])
        ParsedChord(root='G', modifiers=('major', 'dom7'), special_functions=())
    """
    if not keys:
        return ParsedChord(root=None)

    root: str | None = None
    modifiers: list[str] = []
    special: list[str] = []
    for key in keys:
        if root is None and key in LEFT_HAND_KEYS:
            root = LEFT_HAND_KEYS[key]
        if key in RIGHT_HAND_MODIFIERS:
            modifiers.append(RIGHT_HAND_MODIFIERS[key])
        if key in SPECIAL_KEYS:
            special.append(SPECIAL_KEYS[key])

    return ParsedChord(root=root, modifiers=tuple(modifiers), special_functions=tuple(special))


def describe_parsed(parsed: ParsedChord) -> str:
    """Debug string, e.g. 'D [minor, dom7]'."""
    if parsed.root is None:
        return "No chord"
    parts = [parsed.root]
    if parsed.modifiers:
        parts.append(f"[{', '.join(parsed.modifiers)}]")
    if parsed.special_functions:
        parts.append("{" + ", ".join(parsed.special_functions) + "}")
    return " ".join(parts)
