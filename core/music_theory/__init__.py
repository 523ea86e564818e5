"""
core/music_theory/ — Pure chord theory engine.

Exports:
    Types:    Chord, ChordSource, ParsedChord, VoicingSettings,
              MODIFIERS, VOICING_STYLES
    Notes:    note_to_midi, midi_to_note, normalize_note
    Chords:   build_chord, invert_notes, chord_name
    Keyboard: parse_chord_keys
    Voicing:  apply_voicing_style, apply_spread, apply_progressive_drop,
              register_penalty, constrain_to_register, cycle_voicing_style
"""

from core.music_theory.chords import build_chord, chord_name, invert_notes
from core.music_theory.keyboard import parse_chord_keys
from core.music_theory.notes import midi_to_note, normalize_note, note_to_midi
from core.music_theory.types import (
    MODIFIERS,
    VOICING_STYLES,
    Chord,
    ChordSource,
    ParsedChord,
    VoicingSettings,
)
from core.music_theory.voicing import (
    apply_progressive_drop,
    apply_spread,
    apply_voicing_style,
    constrain_to_register,
    cycle_voicing_style,
    register_penalty,
)

__all__ = [
    # Types
    "Chord",
    "ChordSource",
    "ParsedChord",
    "VoicingSettings",
    "MODIFIERS",
    "VOICING_STYLES",
    # Notes
    "note_to_midi",
    "midi_to_note",
    "normalize_note",
    # Chords
    "build_chord",
    "invert_notes",
    "chord_name",
    # Keyboard
    "parse_chord_keys",
    # Voicing
    "apply_voicing_style",
    "apply_spread",
    "apply_progressive_drop",
    "register_penalty",
    "constrain_to_register",
    "cycle_voicing_style",
]
