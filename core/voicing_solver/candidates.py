"""
core/voicing_solver/candidates.py — Candidate voicings for one chord.

generate_candidates() enumerates every (octave shift, style, inversion,
spread) combination for a chord source and materialises its notes:

    for octave in stored-octave ± octave_range (clamped to -1..9):
        base  = build_chord(root, modifiers, octave)
        for style in allowed_styles:
            styled = apply_voicing_style(base, style)
            for inversion in 0 .. min(len(base), len(styled)) - 1:
                for spread in 0 .. MAX_SPREAD:
                    notes = sorted(invert(spread(styled)))

The emission order above is stable and matters: the solver breaks cost
ties by first index. A four-note chord with every style enabled yields a
little over 400 candidates — small enough for an exhaustive DP without
pruning.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from core.music_theory.chords import build_chord, invert_notes
from core.music_theory.types import VOICING_STYLES, Chord, ChordSource, VoicingSettings
from core.music_theory.voicing import apply_spread, apply_voicing_style
from core.voicing_solver.config import DEFAULT_OCTAVE_RANGE, MAX_SPREAD, clamp_octave


@dataclass(frozen=True)
class VoicingCandidate:
    """One concrete way to voice a chord, as scored by the solver.

    Attributes:
        inversion_index: Inversion applied after the spread
        spread_amount:   Spread applied to the styled notes (0–3)
        voicing_style:   Style the notes were derived with
        octave:          Octave the base chord was built in
        notes:           Resulting MIDI notes, ascending
    """

    inversion_index: int
    spread_amount: int
    voicing_style: str
    octave: int
    notes: tuple[int, ...]

    @property
    def span(self) -> int:
        """Semitones from the lowest to the highest note."""
        return self.notes[-1] - self.notes[0] if self.notes else 0

    def to_settings(self) -> VoicingSettings:
        """Voicing fields to persist for this candidate (style path → no legacy drop)."""
        return VoicingSettings(
            inversion_index=self.inversion_index,
            spread_amount=self.spread_amount,
            voicing_style=self.voicing_style,
            octave=self.octave,
            dropped_notes=0,
        )


def _candidates_at(chord: Chord, allowed_styles: Sequence[str]) -> list[VoicingCandidate]:
    candidates: list[VoicingCandidate] = []
    for style in allowed_styles:
        styled = apply_voicing_style(chord, style)
        for inversion in range(min(len(chord.notes), len(styled))):
            for spread in range(MAX_SPREAD + 1):
                notes = invert_notes(apply_spread(styled, spread), inversion)
                candidates.append(
                    VoicingCandidate(
                        inversion_index=inversion,
                        spread_amount=spread,
                        voicing_style=style,
                        octave=chord.octave,
                        notes=tuple(sorted(notes)),
                    )
                )
    return candidates


def generate_candidates(
    source: ChordSource,
    *,
    octave_range: int = DEFAULT_OCTAVE_RANGE,
    allowed_styles: Sequence[str] = VOICING_STYLES,
) -> tuple[tuple[VoicingCandidate, ...], Chord | None]:
    """Enumerate every candidate voicing of a chord source.

    Args:
        source:         Chord identity + stored octave
        octave_range:   Octave shifts tried on each side of the stored octave
        allowed_styles: Voicing styles to enumerate

    Returns:
        (candidates, base_chord). base_chord is the chord at the stored
        octave, used by the cost functions to locate chord roots.
        An unparseable root yields ((), None) — never raises.
    """
    base_chord = build_chord(source.root, source.modifiers, octave=clamp_octave(source.octave))
    if base_chord is None:
        return (), None

    candidates: list[VoicingCandidate] = []
    for shift in range(-octave_range, octave_range + 1):
        chord = build_chord(source.root, source.modifiers, octave=clamp_octave(source.octave + shift))
        if chord is None:
            continue
        candidates.extend(_candidates_at(chord, allowed_styles))

    return tuple(candidates), base_chord
