"""
Tests for core/music_theory/notes.py — note names and MIDI conversion.

Covers:
    - normalize_note: sharps, flats, letter case, unknown names
    - note_to_midi: octave anchor, clamping, errors
    - midi_to_note / pitch_class
"""

import pytest

from core.music_theory.notes import (
    MIDDLE_C,
    NOTE_NAMES,
    midi_to_note,
    normalize_note,
    note_to_midi,
    pitch_class,
)


class TestNormalizeNote:
    def test_sharp_names_unchanged(self):
        for name in NOTE_NAMES:
            assert normalize_note(name) == name

    def test_flats_become_sharps(self):
        assert normalize_note("Eb") == "D#"
        assert normalize_note("Bb") == "A#"
        assert normalize_note("Db") == "C#"

    def test_letter_case_normalized(self):
        assert normalize_note("bb") == "A#"
        assert normalize_note("c#") == "C#"

    def test_whitespace_stripped(self):
        assert normalize_note("  F ") == "F"

    @pytest.mark.parametrize("name", ["H", "", "   ", None, "C##"])
    def test_unknown_returns_none(self, name):
        assert normalize_note(name) is None


class TestNoteToMidi:
    def test_middle_c(self):
        assert note_to_midi("C", 4) == MIDDLE_C == 60

    def test_a440(self):
        assert note_to_midi("A", 4) == 69

    def test_flat_input(self):
        assert note_to_midi("Bb", 3) == 58

    def test_lowest_octave(self):
        assert note_to_midi("C", -1) == 0

    def test_clamped_to_midi_range(self):
        assert note_to_midi("G", 9) == 127
        assert note_to_midi("B", 9) == 127

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown note name"):
            note_to_midi("X", 4)


class TestMidiToNote:
    def test_sharp_name_with_octave(self):
        assert midi_to_note(61) == "C#4"

    def test_extremes(self):
        assert midi_to_note(0) == "C-1"
        assert midi_to_note(127) == "G9"

    def test_inverse_of_note_to_midi(self):
        for name in NOTE_NAMES:
            assert midi_to_note(note_to_midi(name, 3)) == f"{name}3"

    def test_pitch_class(self):
        assert pitch_class(60) == 0
        assert pitch_class(71) == 11
