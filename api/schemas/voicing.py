"""
api/schemas/voicing.py — Pydantic request/response schemas for voicing endpoints.

Covers:
    /voicings/solve    — SolveRequest / SolveResponse
    /voicings/preview  — PreviewRequest / PreviewResponse
"""

from pydantic import BaseModel, Field, field_validator

from core.music_theory.notes import normalize_note
from core.music_theory.types import MODIFIERS, VOICING_STYLES
from core.voicing_solver.config import MAX_SPREAD, OCTAVE_MAX, OCTAVE_MIN

MAX_CHORDS: int = 10


def _check_style(v: str) -> str:
    if v not in VOICING_STYLES:
        raise ValueError(f"voicing_style must be one of: {', '.join(VOICING_STYLES)}")
    return v


# ---------------------------------------------------------------------------
# Shared sub-schemas
# ---------------------------------------------------------------------------


class VoicingIn(BaseModel):
    """Voicing fields of one preset slot."""

    inversion_index: int = Field(default=0, ge=0)
    spread_amount: int = Field(default=0, ge=0, le=MAX_SPREAD)
    voicing_style: str = Field(default="close")
    octave: int = Field(default=4, ge=OCTAVE_MIN, le=OCTAVE_MAX)
    dropped_notes: int = Field(default=0, ge=0)

    @field_validator("voicing_style")
    @classmethod
    def validate_style(cls, v: str) -> str:
        return _check_style(v)


class ChordIn(VoicingIn):
    """One stored chord: identity plus its stored voicing."""

    root: str = Field(..., description="Root note, e.g. 'D', 'F#' or 'Bb'.")
    modifiers: list[str] = Field(
        default_factory=list,
        description="Modifier tokens, e.g. ['minor', 'dom7'].",
    )

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: str) -> str:
        canonical = normalize_note(v)
        if canonical is None:
            raise ValueError(f"Unknown root note {v!r}")
        return canonical

    @field_validator("modifiers")
    @classmethod
    def validate_modifiers(cls, v: list[str]) -> list[str]:
        unknown = sorted(set(v) - MODIFIERS)
        if unknown:
            raise ValueError(
                f"Unknown modifiers {unknown}; valid: {', '.join(sorted(MODIFIERS))}"
            )
        return v


class SolveOptionsIn(BaseModel):
    """Solver options. Omitted fields use the solver defaults."""

    target_octave: int | None = Field(default=None, ge=OCTAVE_MIN, le=OCTAVE_MAX)
    allowed_styles: list[str] | None = Field(
        default=None,
        description="Styles the solver may choose from. Default: all.",
    )
    jazz_voice_leading: bool = True
    use_register_constraints: bool = True
    spread_preference: float = Field(
        default=0.0,
        ge=-1.0,
        le=1.0,
        description="-1 = close voicings, 0 = neutral, +1 = wide voicings.",
    )

    @field_validator("allowed_styles")
    @classmethod
    def validate_styles(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        if not v:
            raise ValueError("allowed_styles must not be empty")
        for style in v:
            _check_style(style)
        return v


class VoicedChordOut(BaseModel):
    """A chord under a concrete voicing."""

    chord_name: str
    notes: list[int]
    note_names: list[str]


class SolvedVoicingOut(VoicedChordOut):
    """Solved voicing for one slot, plus the notes it produces."""

    inversion_index: int
    spread_amount: int
    voicing_style: str
    octave: int
    dropped_notes: int


# ---------------------------------------------------------------------------
# /voicings/solve
# ---------------------------------------------------------------------------


class SolveRequest(BaseModel):
    """Request body for POST /voicings/solve."""

    chords: list[ChordIn] = Field(
        ...,
        min_length=2,
        max_length=MAX_CHORDS,
        description="Chords in playing order (2-10).",
    )
    options: SolveOptionsIn = Field(default_factory=SolveOptionsIn)


class SolveResponse(BaseModel):
    """Response body for POST /voicings/solve."""

    voicings: list[SolvedVoicingOut]
    outcome: str
    changed: bool
    total_cost: float


# ---------------------------------------------------------------------------
# /voicings/preview
# ---------------------------------------------------------------------------


class PreviewRequest(BaseModel):
    """Request body for POST /voicings/preview."""

    chord: ChordIn
    voicing: VoicingIn


class PreviewResponse(VoicedChordOut):
    """Response body for POST /voicings/preview."""
