"""
Configuration for the voicing solver.

SolverOptions is an immutable options object passed to solve_voicings().
Validation happens at construction time, so a solve never sees bad options.
"""

from dataclasses import dataclass

from core.music_theory.types import VOICING_STYLES

# Playable octave range of the instrument; shifted octaves are clamped into it
OCTAVE_MIN: int = -1
OCTAVE_MAX: int = 9

DEFAULT_OCTAVE_RANGE: int = 1
"""Octave shifts tried on each side of the stored octave (1 → three placements)."""

MAX_SPREAD: int = 3
"""Largest spread amount enumerated per candidate (0..3 octaves)."""


@dataclass(frozen=True)
class SolverOptions:
    """
    Options for a voicing solve.

    Attributes:
        target_octave: Octave every chord is re-based to before solving.
            None keeps each chord's stored octave.
        allowed_styles: Voicing styles the solver may pick from. Defaults to
            every style. Must not be empty.
        jazz_voice_leading: Reward seventh→third resolutions between
            neighbouring chords.
        use_register_constraints: Charge each candidate its style's
            register penalty.
        spread_preference: -1 strongly prefers close voicings, +1 strongly
            prefers wide ones, 0 is neutral (pure voice leading).
        octave_range: Octave shifts tried around the (target) octave.

    Example:
        >>> options = SolverOptions(target_octave=4, spread_preference=-0.5)
        >>> voicings = solve_voicings(sources, options)
    """

    target_octave: int | None = None
    allowed_styles: tuple[str, ...] = VOICING_STYLES
    jazz_voice_leading: bool = True
    use_register_constraints: bool = True
    spread_preference: float = 0.0
    octave_range: int = DEFAULT_OCTAVE_RANGE

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not isinstance(self.allowed_styles, tuple):
            object.__setattr__(self, "allowed_styles", tuple(self.allowed_styles))
        if not self.allowed_styles:
            raise ValueError("allowed_styles must not be empty")
        unknown = [s for s in self.allowed_styles if s not in VOICING_STYLES]
        if unknown:
            raise ValueError(
                f"Unknown allowed_styles {unknown!r}, valid options: {list(VOICING_STYLES)}"
            )
        if not -1.0 <= self.spread_preference <= 1.0:
            raise ValueError(
                f"spread_preference must be in [-1, 1], got {self.spread_preference}"
            )
        if self.octave_range < 0:
            raise ValueError(f"octave_range must be non-negative, got {self.octave_range}")


def clamp_octave(octave: int) -> int:
    """Clamp an octave into [OCTAVE_MIN, OCTAVE_MAX]."""
    return max(OCTAVE_MIN, min(OCTAVE_MAX, octave))


# Pre-defined option sets

DEFAULT_OPTIONS = SolverOptions()
"""All styles, jazz voice leading and register constraints on, neutral spread."""

CLOSE_OPTIONS = SolverOptions(spread_preference=-1.0)
"""Strong preference for compact voicings."""

WIDE_OPTIONS = SolverOptions(spread_preference=1.0)
"""Strong preference for open, spread voicings."""

NO_JAZZ_OPTIONS = SolverOptions(jazz_voice_leading=False, use_register_constraints=False)
"""Pure voice-movement minimisation with no idiom weighting."""
