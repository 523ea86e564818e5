"""
Tests for core/voicing_solver/preview.py — note reconstruction.

Validates:
    - Style, legacy drop, spread and inversion applied in order
    - Unparseable roots yield an empty tuple
    - Every generated candidate previews to exactly its scored notes
    - preview_sequence pairs sources with settings
"""

import pytest

from core.music_theory.types import ChordSource, VoicingSettings
from core.voicing_solver.candidates import generate_candidates
from core.voicing_solver.preview import get_voiced_chord_notes, preview_sequence

DM7 = ChordSource(root="D", modifiers={"minor", "dom7"}, octave=4)


class TestGetVoicedChordNotes:
    def test_root_position(self):
        assert get_voiced_chord_notes(DM7, VoicingSettings(0, 0, "close", 4)) == (62, 65, 69, 72)

    def test_settings_octave_wins_over_stored(self):
        assert get_voiced_chord_notes(DM7, VoicingSettings(0, 0, "close", 3)) == (50, 53, 57, 60)

    def test_inversion(self):
        assert get_voiced_chord_notes(DM7, VoicingSettings(1, 0, "close", 4)) == (65, 69, 72, 74)

    def test_spread(self):
        assert get_voiced_chord_notes(DM7, VoicingSettings(0, 1, "close", 4)) == (62, 69, 77, 84)

    def test_legacy_drop(self):
        settings = VoicingSettings(0, 0, "close", 4, dropped_notes=1)
        assert get_voiced_chord_notes(DM7, settings) == (60, 62, 65, 69)

    def test_style(self):
        assert get_voiced_chord_notes(DM7, VoicingSettings(0, 0, "shell", 4)) == (62, 65, 72)

    def test_unparseable_root(self):
        source = ChordSource(root=None, modifiers={"minor"})
        assert get_voiced_chord_notes(source, VoicingSettings(0, 0, "close", 4)) == ()


class TestRoundTrip:
    @pytest.mark.parametrize(
        "source",
        [
            DM7,
            ChordSource(root="G", modifiers={"major", "dom7", "13"}, octave=3),
            ChordSource(root="F#", modifiers={"diminished"}, octave=5),
            ChordSource(root="C", modifiers={"sus4"}, octave=9),
        ],
    )
    def test_every_candidate_previews_to_its_notes(self, source):
        candidates, _ = generate_candidates(source)
        assert candidates
        for candidate in candidates:
            assert get_voiced_chord_notes(source, candidate.to_settings()) == candidate.notes


class TestPreviewSequence:
    def test_pairs(self):
        sources = [DM7, ChordSource(root="G", modifiers={"dom7"})]
        settings = [VoicingSettings(0, 0, "close", 4), VoicingSettings(1, 0, "close", 3)]
        assert preview_sequence(sources, settings) == [
            (62, 65, 69, 72),
            (59, 62, 65, 67),
        ]

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="same length"):
            preview_sequence([DM7], [])
