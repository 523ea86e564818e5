"""
Tests for core/voicing_solver/costs.py — standalone and transition costs.

Validates:
    - spread_adjustment: close / wide branches, bonuses, neutral preference
    - register_penalty: delegation + disabled switch
    - voice_distance: positional matching, unmatched voices, resolution
      bonus (seventh→third and third→seventh), clamping, empty input
    - transition_costs: matrix shape and equality with voice_distance
"""

import math

import numpy as np
import pytest

from core.music_theory.chords import build_chord
from core.music_theory.types import ChordSource
from core.voicing_solver.candidates import VoicingCandidate, generate_candidates
from core.voicing_solver.costs import (
    is_seventh,
    is_third,
    register_penalty,
    spread_adjustment,
    transition_costs,
    voice_distance,
)

DM7 = build_chord("D", {"minor", "dom7"})
G7 = build_chord("G", {"major", "dom7"})


def _cand(*notes: int) -> VoicingCandidate:
    return VoicingCandidate(0, 0, "close", 4, notes)


# ---------------------------------------------------------------------------
# spread_adjustment
# ---------------------------------------------------------------------------


class TestSpreadAdjustment:
    def test_neutral_preference(self):
        assert spread_adjustment(_cand(48, 60, 72, 84), 0.0) == 0.0

    def test_single_note(self):
        assert spread_adjustment(_cand(60), -1.0) == 0.0

    def test_close_bonus_for_compact_voicing(self):
        assert spread_adjustment(_cand(60, 64, 67, 71), -1.0) == pytest.approx(-12.0)

    def test_close_penalty_for_wide_voicing(self):
        # span 20: 5 over the limit → 5 * 30 * 0.15
        assert spread_adjustment(_cand(60, 80), -1.0) == pytest.approx(22.5)

    def test_weak_close_preference_has_no_bonus(self):
        assert spread_adjustment(_cand(60, 64, 67, 71), -0.5) == 0.0

    def test_wide_penalty_for_compact_voicing(self):
        # span 11: 9 short of 20
        assert spread_adjustment(_cand(60, 64, 67, 71), 1.0) == pytest.approx(40.5)

    def test_wide_bonus(self):
        assert spread_adjustment(_cand(48, 72), 1.0) == pytest.approx(-15.0)

    def test_wide_penalty_scales_with_preference(self):
        assert spread_adjustment(_cand(60, 70), 0.5) == pytest.approx(
            spread_adjustment(_cand(60, 70), 1.0) / 2
        )


# ---------------------------------------------------------------------------
# register_penalty
# ---------------------------------------------------------------------------


class TestRegisterPenalty:
    def test_uses_candidate_style(self):
        candidate = VoicingCandidate(0, 0, "close", 4, (60, 64, 67))
        assert register_penalty(candidate) == pytest.approx(1.75)

    def test_disabled(self):
        candidate = VoicingCandidate(0, 0, "rootless-a", 1, (24, 28, 31))
        assert register_penalty(candidate, enabled=False) == 0.0


# ---------------------------------------------------------------------------
# voice_distance
# ---------------------------------------------------------------------------


class TestIntervalTables:
    def test_seventh(self):
        assert is_seventh(72, 62)  # C over D
        assert is_seventh(71, 60)  # B over C
        assert not is_seventh(69, 62)

    def test_third(self):
        assert is_third(71, 67)  # B over G
        assert is_third(65, 62)  # F over D
        assert not is_third(67, 67)

    def test_any_octave(self):
        assert is_third(47, 67)
        assert is_seventh(48, 62)


class TestVoiceDistance:
    def test_sum_of_movement(self):
        assert voice_distance((60, 64, 67), (60, 65, 69), jazz_voice_leading=False) == 3.0

    def test_identical_voicings(self):
        assert voice_distance((60, 64, 67), (60, 64, 67)) == 0.0

    def test_unmatched_voice_penalty(self):
        assert voice_distance((60, 64, 67, 71), (60, 64, 67)) == 12.0

    def test_empty_is_infinite(self):
        assert math.isinf(voice_distance((), (60, 64, 67)))
        assert math.isinf(voice_distance((60,), None))

    def test_seventh_to_third_bonus(self):
        # C (7th of Dm7) → B (3rd of G7) is one semitone: 7 + 1 - 4
        assert voice_distance((60, 72), (67, 71), DM7, G7) == 4.0
        assert voice_distance((60, 72), (67, 71), DM7, G7, jazz_voice_leading=False) == 8.0

    def test_third_to_seventh_bonus(self):
        # B is the 3rd of G7 and the 7th of C#7
        c_sharp7 = build_chord("C#", {"dom7"})
        assert voice_distance((60, 71), (65, 71), G7, c_sharp7) == 1.0

    def test_no_bonus_for_large_leap(self):
        # C → B an octave below moves 13 semitones
        assert voice_distance((72,), (59,), DM7, G7) == 13.0

    def test_bonus_needs_both_chords(self):
        assert voice_distance((60, 72), (67, 71), DM7, None) == 8.0

    def test_never_negative(self):
        assert voice_distance((65, 72), (65, 71), DM7, G7) == 0.0


# ---------------------------------------------------------------------------
# transition_costs
# ---------------------------------------------------------------------------


class TestTransitionCosts:
    @pytest.fixture()
    def stages(self):
        styles = ("close", "shell", "rootless-a", "quartal")
        dm7, dm7_chord = generate_candidates(
            ChordSource(root="D", modifiers={"minor", "dom7"}),
            octave_range=0,
            allowed_styles=styles,
        )
        g7, g7_chord = generate_candidates(
            ChordSource(root="G", modifiers={"major", "dom7"}, octave=3),
            octave_range=0,
            allowed_styles=styles,
        )
        return dm7, dm7_chord, g7, g7_chord

    def test_shape(self, stages):
        dm7, dm7_chord, g7, g7_chord = stages
        matrix = transition_costs(dm7, g7, dm7_chord, g7_chord)
        assert matrix.shape == (len(dm7), len(g7))

    @pytest.mark.parametrize("jazz", [True, False])
    def test_matches_scalar_distance(self, stages, jazz):
        dm7, dm7_chord, g7, g7_chord = stages
        # mixed note counts: shell has 3 notes, quartal on Dm7 has 5
        assert len({len(c.notes) for c in dm7}) > 1

        matrix = transition_costs(dm7, g7, dm7_chord, g7_chord, jazz_voice_leading=jazz)
        expected = np.array(
            [
                [
                    voice_distance(a.notes, b.notes, dm7_chord, g7_chord, jazz_voice_leading=jazz)
                    for b in g7
                ]
                for a in dm7
            ]
        )
        np.testing.assert_array_equal(matrix, expected)

    def test_empty_stage(self, stages):
        dm7, dm7_chord, _, g7_chord = stages
        assert transition_costs(dm7, (), dm7_chord, g7_chord).shape == (len(dm7), 0)
