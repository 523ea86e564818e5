"""
api/routes/voicings.py — Voice-leading endpoints for the preset layer.

Endpoints:
    POST /voicings/solve   — Optimal voicing for every chord of a progression
    POST /voicings/preview — Notes of one chord under a given voicing

Pure computation: no database, no external calls. The solver never raises
for well-formed chords; request validation happens in the schemas, and
rejected requests are counted by the app-level handler in api/main.py.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.schemas.voicing import (
    ChordIn,
    PreviewRequest,
    PreviewResponse,
    SolvedVoicingOut,
    SolveOptionsIn,
    SolveRequest,
    SolveResponse,
    VoicingIn,
)
from core.music_theory.chords import chord_name
from core.music_theory.notes import midi_to_note
from core.music_theory.types import ChordSource, VoicingSettings
from core.voicing_solver import SolverOptions, get_voiced_chord_notes, solve_voicing_sequence
from infrastructure.metrics import (
    LatencyTimer,
    record_candidate_counts,
    record_solve,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/voicings", tags=["voicings"])


def _to_source(chord: ChordIn) -> ChordSource:
    return ChordSource(
        root=chord.root,
        modifiers=frozenset(chord.modifiers),
        octave=chord.octave,
        inversion_index=chord.inversion_index,
        spread_amount=chord.spread_amount,
        dropped_notes=chord.dropped_notes,
        voicing_style=chord.voicing_style,
    )


def _to_settings(voicing: VoicingIn) -> VoicingSettings:
    return VoicingSettings(
        inversion_index=voicing.inversion_index,
        spread_amount=voicing.spread_amount,
        voicing_style=voicing.voicing_style,
        octave=voicing.octave,
        dropped_notes=voicing.dropped_notes,
    )


def _to_options(options: SolveOptionsIn) -> SolverOptions:
    """Build SolverOptions, keeping solver defaults for omitted fields."""
    kwargs = options.model_dump(exclude_none=True)
    if "allowed_styles" in kwargs:
        kwargs["allowed_styles"] = tuple(kwargs["allowed_styles"])
    return SolverOptions(**kwargs)


# ---------------------------------------------------------------------------
# POST /voicings/solve
# ---------------------------------------------------------------------------


@router.post("/solve", response_model=SolveResponse)
def solve(request: SolveRequest) -> SolveResponse:
    """Re-voice a chord progression for smooth voice leading.

    Args:
        request: SolveRequest with chords in playing order and solver options.

    Returns:
        SolveResponse with one voicing per chord (in input order), the notes
        each voicing produces, the solve outcome and whether anything changed.
    """
    options = _to_options(request.options)

    sources = [_to_source(c) for c in request.chords]

    with LatencyTimer() as timer:
        result = solve_voicing_sequence(sources, options)
    record_solve(outcome=result.outcome, latency_seconds=timer.elapsed)
    record_candidate_counts(result.candidate_counts)
    logger.info("Solved %d chords: outcome=%s", len(sources), result.outcome)

    voicings_out = []
    for source, settings in zip(sources, result.voicings):
        notes = get_voiced_chord_notes(source, settings)
        voicings_out.append(
            SolvedVoicingOut(
                **settings.to_dict(),
                chord_name=chord_name(source.root, source.modifiers),
                notes=list(notes),
                note_names=[midi_to_note(n) for n in notes],
            )
        )

    return SolveResponse(
        voicings=voicings_out,
        outcome=result.outcome,
        changed=result.changed(sources),
        total_cost=round(result.total_cost, 3),
    )


# ---------------------------------------------------------------------------
# POST /voicings/preview
# ---------------------------------------------------------------------------


@router.post("/preview", response_model=PreviewResponse)
def preview(request: PreviewRequest) -> PreviewResponse:
    """Notes of a chord under the given voicing.

    Args:
        request: PreviewRequest with the chord identity and voicing to apply.

    Returns:
        PreviewResponse with MIDI notes, note names and the chord name.
    """
    source = _to_source(request.chord)
    notes = get_voiced_chord_notes(source, _to_settings(request.voicing))
    return PreviewResponse(
        chord_name=chord_name(source.root, source.modifiers),
        notes=list(notes),
        note_names=[midi_to_note(n) for n in notes],
    )
