"""
Shared fixtures for the test suite.

Centralizes the chord progressions and the API client so individual test
files don't need to rebuild them.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from core.music_theory.types import ChordSource

# ---------------------------------------------------------------------------
# Chord progressions
# ---------------------------------------------------------------------------


@pytest.fixture()
def ii_v_i() -> list[ChordSource]:
    """Dm7 → G7 → Cmaj7 at octave 4, entered as instrument keys."""
    return [
        ChordSource.from_keys(["e", "u", "k"], octave=4),
        ChordSource.from_keys(["f", "j", "k"], octave=4),
        ChordSource.from_keys(["q", "j", "i"], octave=4),
    ]


@pytest.fixture()
def blues_turnaround() -> list[ChordSource]:
    """C7 → A7 → Dm7 → G7 with mixed stored octaves."""
    return [
        ChordSource(root="C", modifiers={"dom7"}, octave=4),
        ChordSource(root="A", modifiers={"dom7"}, octave=3),
        ChordSource(root="D", modifiers={"minor", "dom7"}, octave=4),
        ChordSource(root="G", modifiers={"dom7"}, octave=3),
    ]


# ---------------------------------------------------------------------------
# FastAPI test client fixture
# ---------------------------------------------------------------------------


@pytest.fixture()
def api_client() -> TestClient:
    """FastAPI ``TestClient`` for the voicing service."""
    return TestClient(app)
