"""
core/voicing_solver/costs.py — Cost functions for the voicing solver.

Two kinds of cost:

    Standalone (one candidate):
        register_penalty   — how idiomatic the register is for the style
        spread_adjustment  — bias towards close or wide voicings (may be < 0)

    Transition (candidate → candidate):
        voice_distance     — semitones moved, voices matched bass-up by
                             position, minus a bonus for every voice that
                             resolves seventh → third (or third → seventh)

voice_distance rules:
    - Empty voicing on either side → inf (transition forbidden)
    - Sum |from[i] - to[i]| over the min(len) matched voices
    - +12 per unmatched voice
    - With jazz voice leading: -4 per matched voice moving ≤ 2 semitones
      between a seventh of one chord and a third of the other
    - Never below 0

transition_costs() computes the same values for every candidate pair of
two neighbouring stages at once with numpy.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from core.music_theory.types import Chord
from core.music_theory.voicing import register_penalty as style_register_penalty
from core.voicing_solver.candidates import VoicingCandidate

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SEVENTH_INTERVALS: frozenset[int] = frozenset({10, 11})  # minor / major seventh
THIRD_INTERVALS: frozenset[int] = frozenset({3, 4})  # minor / major third

RESOLUTION_BONUS: int = 4  # subtracted per seventh↔third resolution
RESOLUTION_MAX_STEP: int = 2  # semitones, half- or whole-step motion only
UNMATCHED_VOICE_PENALTY: int = 12  # one octave per voice with no partner

SPREAD_SCALE: int = 30
SPREAD_WEIGHT: float = 0.15
CLOSE_SPAN_LIMIT: int = 15  # close bias: penalise span beyond this
COMPACT_SPAN: int = 12  # close bias: bonus at or below this
WIDE_SPAN_TARGET: int = 20  # wide bias: penalise span short of this
WIDE_SPAN: int = 24  # wide bias: bonus at or above this
CLOSE_BONUS: int = 12
WIDE_BONUS: int = 15


# ---------------------------------------------------------------------------
# Standalone costs
# ---------------------------------------------------------------------------


def register_penalty(candidate: VoicingCandidate, *, enabled: bool = True) -> float:
    """Register penalty of a candidate for its own style (0.0 when disabled)."""
    if not enabled:
        return 0.0
    return style_register_penalty(candidate.notes, candidate.voicing_style)


def spread_adjustment(candidate: VoicingCandidate, preference: float) -> float:
    """Bias a voicing's cost by its span and the player's openness preference.

    Args:
        candidate:  Voicing to score (only its notes matter)
        preference: -1 (close) … 0 (neutral) … +1 (wide)

    Returns:
        Cost adjustment; negative values are bonuses.

    Examples:
        >>> spread_adjustment(VoicingCandidate(0, 0, "close", 4, (60, 64, 67, 71)), -1.0)
        -12.0
        >>> spread_adjustment(VoicingCandidate(0, 0, "close", 4, (60, 64, 67, 71)), 1.0)
        40.5
    """
    notes = candidate.notes
    if len(notes) < 2 or preference == 0:
        return 0.0

    span = max(notes) - min(notes)
    strength = abs(preference)

    if preference < 0:
        excess = max(0, span - CLOSE_SPAN_LIMIT)
        adjustment = excess * SPREAD_SCALE * strength * SPREAD_WEIGHT
        if span <= COMPACT_SPAN and strength > 0.5:
            adjustment -= CLOSE_BONUS * strength
        return float(adjustment)

    deficit = max(0, WIDE_SPAN_TARGET - span)
    adjustment = deficit * SPREAD_SCALE * preference * SPREAD_WEIGHT
    if span >= WIDE_SPAN and preference > 0.5:
        adjustment -= WIDE_BONUS * preference
    return float(adjustment)


# ---------------------------------------------------------------------------
# Transition costs
# ---------------------------------------------------------------------------


def is_seventh(note: int, root: int) -> bool:
    """True when `note` is a minor or major seventh above `root` (any octave)."""
    return (note - root) % 12 in SEVENTH_INTERVALS


def is_third(note: int, root: int) -> bool:
    """True when `note` is a minor or major third above `root` (any octave)."""
    return (note - root) % 12 in THIRD_INTERVALS


def voice_distance(
    from_notes: Sequence[int] | None,
    to_notes: Sequence[int] | None,
    from_chord: Chord | None = None,
    to_chord: Chord | None = None,
    jazz_voice_leading: bool = True,
) -> float:
    """Voice-leading distance from one voicing to the next.

    Args:
        from_notes:  Ascending notes of the earlier voicing
        to_notes:    Ascending notes of the later voicing
        from_chord:  Base chord of the earlier voicing (for its root)
        to_chord:    Base chord of the later voicing (for its root)
        jazz_voice_leading: Apply the seventh↔third resolution bonus

    Returns:
        Non-negative distance, or inf when either voicing is empty.

    Examples:
        >>> voice_distance((60, 64, 67), (60, 65, 69), jazz_voice_leading=False)
        3.0
    """
    if not from_notes or not to_notes:
        return math.inf

    shared = min(len(from_notes), len(to_notes))
    use_jazz = jazz_voice_leading and from_chord is not None and to_chord is not None

    total = 0
    bonus = 0
    for a, b in zip(from_notes[:shared], to_notes[:shared]):
        movement = abs(a - b)
        total += movement
        if use_jazz and movement <= RESOLUTION_MAX_STEP:
            from_root, to_root = from_chord.root_midi, to_chord.root_midi
            if (is_seventh(a, from_root) and is_third(b, to_root)) or (
                is_third(a, from_root) and is_seventh(b, to_root)
            ):
                bonus += RESOLUTION_BONUS

    total += UNMATCHED_VOICE_PENALTY * abs(len(from_notes) - len(to_notes))
    return float(max(0, total - bonus))


def _group_by_size(
    candidates: Sequence[VoicingCandidate],
) -> dict[int, tuple[np.ndarray, np.ndarray]]:
    """Group candidates by note count → (original indices, notes matrix)."""
    rows: dict[int, list[int]] = {}
    for index, candidate in enumerate(candidates):
        rows.setdefault(len(candidate.notes), []).append(index)
    return {
        size: (
            np.asarray(indices, dtype=np.intp),
            np.asarray([candidates[i].notes for i in indices], dtype=np.int64).reshape(
                len(indices), size
            ),
        )
        for size, indices in rows.items()
    }


def _interval_mask(notes: np.ndarray, root: int, intervals: frozenset[int]) -> np.ndarray:
    return np.isin((notes - root) % 12, sorted(intervals))


def transition_costs(
    from_candidates: Sequence[VoicingCandidate],
    to_candidates: Sequence[VoicingCandidate],
    from_chord: Chord | None,
    to_chord: Chord | None,
    *,
    jazz_voice_leading: bool = True,
) -> np.ndarray:
    """voice_distance for every (from, to) candidate pair.

    Candidates are grouped by note count so each group pair is one
    broadcast computation; results land at the candidates' original
    indices.

    Returns:
        float array of shape (len(from_candidates), len(to_candidates));
        entry [k, j] equals voice_distance(from[k].notes, to[j].notes, ...).
    """
    costs = np.full((len(from_candidates), len(to_candidates)), np.inf)
    use_jazz = jazz_voice_leading and from_chord is not None and to_chord is not None

    from_groups = _group_by_size(from_candidates)
    to_groups = _group_by_size(to_candidates)

    for from_size, (from_idx, from_notes) in from_groups.items():
        for to_size, (to_idx, to_notes) in to_groups.items():
            if from_size == 0 or to_size == 0:
                continue
            shared = min(from_size, to_size)
            a = from_notes[:, :shared]
            b = to_notes[:, :shared]

            movement = np.abs(a[:, None, :] - b[None, :, :])  # (from, to, voice)
            total = movement.sum(axis=2) + UNMATCHED_VOICE_PENALTY * abs(from_size - to_size)

            if use_jazz:
                from_seventh = _interval_mask(a, from_chord.root_midi, SEVENTH_INTERVALS)
                from_third = _interval_mask(a, from_chord.root_midi, THIRD_INTERVALS)
                to_seventh = _interval_mask(b, to_chord.root_midi, SEVENTH_INTERVALS)
                to_third = _interval_mask(b, to_chord.root_midi, THIRD_INTERVALS)
                resolves = (from_seventh[:, None, :] & to_third[None, :, :]) | (
                    from_third[:, None, :] & to_seventh[None, :, :]
                )
                resolves &= movement <= RESOLUTION_MAX_STEP
                total = total - RESOLUTION_BONUS * np.count_nonzero(resolves, axis=2)

            costs[np.ix_(from_idx, to_idx)] = np.maximum(total, 0)

    return costs
