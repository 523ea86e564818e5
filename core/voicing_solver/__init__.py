"""
core/voicing_solver/ — Voice-leading optimiser for chord progressions.

Exports:
    Options:    SolverOptions, DEFAULT_OPTIONS, CLOSE_OPTIONS, WIDE_OPTIONS,
                NO_JAZZ_OPTIONS
    Candidates: VoicingCandidate, generate_candidates
    Costs:      register_penalty, spread_adjustment, voice_distance,
                transition_costs
    Solver:     solve_voicings, solve_voicing_sequence, SolveResult
    Preview:    get_voiced_chord_notes, preview_sequence
"""

from core.voicing_solver.candidates import VoicingCandidate, generate_candidates
from core.voicing_solver.config import (
    CLOSE_OPTIONS,
    DEFAULT_OPTIONS,
    NO_JAZZ_OPTIONS,
    WIDE_OPTIONS,
    SolverOptions,
)
from core.voicing_solver.costs import (
    register_penalty,
    spread_adjustment,
    transition_costs,
    voice_distance,
)
from core.voicing_solver.preview import get_voiced_chord_notes, preview_sequence
from core.voicing_solver.solver import SolveResult, solve_voicing_sequence, solve_voicings

__all__ = [
    # Options
    "SolverOptions",
    "DEFAULT_OPTIONS",
    "CLOSE_OPTIONS",
    "WIDE_OPTIONS",
    "NO_JAZZ_OPTIONS",
    # Candidates
    "VoicingCandidate",
    "generate_candidates",
    # Costs
    "register_penalty",
    "spread_adjustment",
    "voice_distance",
    "transition_costs",
    # Solver
    "solve_voicings",
    "solve_voicing_sequence",
    "SolveResult",
    # Preview
    "get_voiced_chord_notes",
    "preview_sequence",
]
