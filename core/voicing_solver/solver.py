"""
core/voicing_solver/solver.py — Sequence solver for chord voicings.

Picks one candidate voicing per chord so the whole progression minimises

    Σ register + spread    (every chord)
  + Σ voice_distance       (every neighbouring pair)

with dynamic programming over stages (chords) and states (candidates):

    cost[0][j] = register[0][j] + spread[0][j]
    cost[i][j] = min_k(cost[i-1][k] + distance(k → j)) + register[i][j] + spread[i][j]

Each stage keeps a numpy cost vector and a parent-index vector; the path is
recovered by backtracking from the cheapest final candidate. Ties always go
to the lowest index, so results are deterministic for a given candidate
order.

Degenerate inputs never raise:
    []                      → []
    one chord               → its stored voicing (target octave applied)
    any unparseable chord   → every stored voicing unchanged, warning logged
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from core.music_theory.types import ChordSource, VoicingSettings
from core.voicing_solver.candidates import VoicingCandidate, generate_candidates
from core.voicing_solver.config import DEFAULT_OPTIONS, SolverOptions
from core.voicing_solver.costs import register_penalty, spread_adjustment, transition_costs

logger = logging.getLogger(__name__)

OUTCOME_EMPTY = "empty"
OUTCOME_SINGLE = "single"
OUTCOME_PASSTHROUGH = "passthrough"
OUTCOME_OPTIMIZED = "optimized"


@dataclass(frozen=True)
class SolveResult:
    """Outcome of a solve.

    Attributes:
        voicings:   One VoicingSettings per input chord, in input order
        notes:      Notes of the chosen candidate per chord (empty tuples
                    when no DP ran)
        total_cost: Cost of the chosen path (0.0 when no DP ran)
        outcome:    "empty", "single", "passthrough" or "optimized"
        candidate_counts: Candidates generated per chord (empty when
                    generation did not run)
    """

    voicings: tuple[VoicingSettings, ...]
    notes: tuple[tuple[int, ...], ...]
    total_cost: float
    outcome: str
    candidate_counts: tuple[int, ...] = ()

    def changed(self, sources: Sequence[ChordSource]) -> bool:
        """True when any solved voicing differs from the chord's stored one."""
        return any(
            voicing != source.stored_voicing
            for voicing, source in zip(self.voicings, sources)
        )


def _stage_costs(candidates: Sequence[VoicingCandidate], options: SolverOptions) -> np.ndarray:
    """Register penalty + spread adjustment for every candidate of one chord."""
    return np.fromiter(
        (
            register_penalty(c, enabled=options.use_register_constraints)
            + spread_adjustment(c, options.spread_preference)
            for c in candidates
        ),
        dtype=float,
        count=len(candidates),
    )


def _passthrough(sources: Sequence[ChordSource], counts: Sequence[int]) -> SolveResult:
    return SolveResult(
        voicings=tuple(source.stored_voicing for source in sources),
        notes=tuple(() for _ in sources),
        total_cost=0.0,
        outcome=OUTCOME_PASSTHROUGH,
        candidate_counts=tuple(counts),
    )


def solve_voicing_sequence(
    sources: Sequence[ChordSource] | None,
    options: SolverOptions | None = None,
) -> SolveResult:
    """Solve the voicing of every chord in a progression.

    Args:
        sources: Chords in playing order
        options: Solver options (DEFAULT_OPTIONS when omitted)

    Returns:
        SolveResult with exactly one voicing per source.
    """
    options = options or DEFAULT_OPTIONS
    sources = list(sources or ())

    if not sources:
        return SolveResult(voicings=(), notes=(), total_cost=0.0, outcome=OUTCOME_EMPTY)

    if len(sources) == 1:
        stored = sources[0].stored_voicing
        if options.target_octave is not None:
            stored = dataclasses.replace(stored, octave=options.target_octave)
        return SolveResult(
            voicings=(stored,), notes=((),), total_cost=0.0, outcome=OUTCOME_SINGLE
        )

    rebased = sources
    if options.target_octave is not None:
        rebased = [dataclasses.replace(s, octave=options.target_octave) for s in sources]

    stages = [
        generate_candidates(
            source,
            octave_range=options.octave_range,
            allowed_styles=options.allowed_styles,
        )
        for source in rebased
    ]

    counts = [len(candidates) for candidates, _ in stages]
    empty_slots = [i for i, count in enumerate(counts) if count == 0]
    if empty_slots:
        logger.warning(
            "No candidate voicings for chord slot(s) %s, keeping stored voicings",
            empty_slots,
        )
        return _passthrough(sources, counts)

    candidates = [c for c, _ in stages]
    chords = [chord for _, chord in stages]

    # Forward pass
    cost = _stage_costs(candidates[0], options)
    parents: list[np.ndarray] = []
    for i in range(1, len(stages)):
        distances = transition_costs(
            candidates[i - 1],
            candidates[i],
            chords[i - 1],
            chords[i],
            jazz_voice_leading=options.jazz_voice_leading,
        )
        totals = cost[:, None] + distances  # (previous, current)
        best = np.argmin(totals, axis=0)
        cost = totals[best, np.arange(len(candidates[i]))] + _stage_costs(candidates[i], options)
        parents.append(best)

    # Backtrack
    index = int(np.argmin(cost))
    total_cost = float(cost[index])
    chosen: list[VoicingCandidate] = [candidates[-1][index]]
    for stage in range(len(stages) - 1, 0, -1):
        index = int(parents[stage - 1][index])
        chosen.append(candidates[stage - 1][index])
    chosen.reverse()

    logger.debug(
        "Solved %d chords: candidates=%s total_cost=%.2f",
        len(sources),
        counts,
        total_cost,
    )

    return SolveResult(
        voicings=tuple(c.to_settings() for c in chosen),
        notes=tuple(c.notes for c in chosen),
        total_cost=total_cost,
        outcome=OUTCOME_OPTIMIZED,
        candidate_counts=tuple(counts),
    )


def solve_voicings(
    sources: Sequence[ChordSource] | None,
    options: SolverOptions | None = None,
) -> list[VoicingSettings]:
    """Optimal voicing settings for each chord, in input order.

    Example:
        >>> sources = [ChordSource.from_keys("euk"), ChordSource.from_keys("fjk")]
        >>> [v.voicing_style for v in solve_voicings(sources)]  # doctest: +SKIP
        ['rootless-a', 'rootless-b']
    """
    return list(solve_voicing_sequence(sources, options).voicings)
