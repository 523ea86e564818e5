"""
core/voicing_solver/preview.py — Rebuild the notes of a stored voicing.

get_voiced_chord_notes() applies the same pipeline the candidate generator
uses, so every solved voicing previews to exactly the notes it was scored
on:

    build_chord(octave) → style → [legacy drop] → spread → invert → sort
"""

from __future__ import annotations

from collections.abc import Sequence

from core.music_theory.chords import build_chord, invert_notes
from core.music_theory.types import ChordSource, VoicingSettings
from core.music_theory.voicing import apply_progressive_drop, apply_spread, apply_voicing_style


def get_voiced_chord_notes(source: ChordSource, settings: VoicingSettings) -> tuple[int, ...]:
    """MIDI notes of a chord under the given voicing settings.

    Args:
        source:   Chord identity (its stored voicing fields are ignored)
        settings: Voicing to apply

    Returns:
        Ascending MIDI notes, or () when the chord root cannot be parsed.
    """
    chord = build_chord(source.root, source.modifiers, octave=settings.octave)
    if chord is None:
        return ()

    notes = apply_voicing_style(chord, settings.voicing_style)
    if settings.dropped_notes > 0:
        notes = apply_progressive_drop(notes, settings.dropped_notes)
    if settings.spread_amount > 0:
        notes = apply_spread(notes, settings.spread_amount)
    notes = invert_notes(notes, settings.inversion_index)
    return tuple(sorted(notes))


def preview_sequence(
    sources: Sequence[ChordSource],
    settings: Sequence[VoicingSettings],
) -> list[tuple[int, ...]]:
    """get_voiced_chord_notes for each (source, settings) pair."""
    if len(sources) != len(settings):
        raise ValueError(
            f"sources and settings must have the same length, got {len(sources)} and {len(settings)}"
        )
    return [get_voiced_chord_notes(s, v) for s, v in zip(sources, settings)]
