"""Modifier Calculator: flat multipliers from phase, taper and cycle.

Experience level is accepted but not applied here. Only
position, side bias, phase and schedule shape the program volume;
``max_complexity`` stays at 3 and ``exercise_variety`` at 5 for every
athlete. The experience-based complexity ceiling lives in the selector.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from otl_engine.models import (
    CyclePhase,
    ExperienceLevel,
    TrainingCycle,
    TrainingPhase,
    WorkoutModifiers,
)
from otl_engine.periodization import taper_multiplier

MAX_COMPLEXITY = 3
DEFAULT_EXERCISE_VARIETY = 5


@dataclass(frozen=True)
class PhaseModifiers:
    volume_multiplier: float
    intensity_multiplier: float
    rest_multiplier: float
    session_length_multiplier: float


PHASE_MODIFIERS: dict[TrainingPhase, PhaseModifiers] = {
    TrainingPhase.OFF_SEASON: PhaseModifiers(
        volume_multiplier=1.2,
        intensity_multiplier=1.0,
        rest_multiplier=1.0,
        session_length_multiplier=1.2,
    ),
    TrainingPhase.IN_SEASON: PhaseModifiers(
        volume_multiplier=0.6,
        intensity_multiplier=0.85,
        rest_multiplier=1.2,
        session_length_multiplier=0.7,
    ),
    TrainingPhase.PRE_TOURNAMENT: PhaseModifiers(
        volume_multiplier=0.7,
        intensity_multiplier=1.1,
        rest_multiplier=0.8,
        session_length_multiplier=0.85,
    ),
}


@dataclass(frozen=True)
class CycleModifiers:
    tempo_focus: str  # eccentric-pause-concentric seconds
    primary_exercise_emphasis: str
    rep_range_adjustment: str
    rest_multiplier: float
    description: str


CYCLE_MODIFIERS: dict[CyclePhase, CycleModifiers] = {
    CyclePhase.ECCENTRIC: CycleModifiers(
        tempo_focus="4-0-1",
        primary_exercise_emphasis="Control the lowering phase",
        rep_range_adjustment="Lower reps (4-6) with heavier load",
        rest_multiplier=1.2,
        description=(
            "Focus on the eccentric (lowering) phase of primary movements. "
            "Build strength through controlled negative work. "
            "4-second lowering tempo on main lifts."
        ),
    ),
    CyclePhase.ISOMETRIC: CycleModifiers(
        tempo_focus="2-3-1",
        primary_exercise_emphasis="Hold and stabilize at key positions",
        rep_range_adjustment="Moderate reps (6-8) with pause at bottom",
        rest_multiplier=1.0,
        description=(
            "Focus on isometric holds at key positions. "
            "Build stability and strength at sticking points. "
            "3-second pause at bottom position on main lifts."
        ),
    ),
    CyclePhase.CONCENTRIC: CycleModifiers(
        tempo_focus="2-0-X",
        primary_exercise_emphasis="Explosive power on the lift",
        rep_range_adjustment="Varied reps (3-5) with maximal intent",
        rest_multiplier=1.3,
        description=(
            "Focus on explosive concentric power. "
            "Move the weight with maximum velocity and intent. "
            "Apply paintball-specific speed to primary movements."
        ),
    ),
}


def calculate_workout_modifiers(
    phase: TrainingPhase,
    experience_level: ExperienceLevel,
    days_until_tournament: int | None = None,
    training_cycle: TrainingCycle | None = None,
) -> WorkoutModifiers:
    """Combine the phase table, taper and training cycle into one record.

    ``experience_level`` is part of the signature for callers but has no
    effect on the result.
    """
    base = PHASE_MODIFIERS[phase]

    volume = base.volume_multiplier
    if phase is TrainingPhase.PRE_TOURNAMENT:
        volume *= taper_multiplier(days_until_tournament)

    rest = base.rest_multiplier
    cycle_phase = None
    tempo_focus = None
    emphasis = None
    if training_cycle is not None:
        cycle = CYCLE_MODIFIERS[training_cycle.current_phase]
        rest *= cycle.rest_multiplier
        cycle_phase = training_cycle.current_phase
        tempo_focus = cycle.tempo_focus
        emphasis = cycle.primary_exercise_emphasis

    return WorkoutModifiers(
        volume_multiplier=volume,
        intensity_multiplier=base.intensity_multiplier,
        rest_multiplier=rest,
        session_length_multiplier=base.session_length_multiplier,
        max_complexity=MAX_COMPLEXITY,
        exercise_variety=DEFAULT_EXERCISE_VARIETY,
        cycle_phase=cycle_phase,
        tempo_focus=tempo_focus,
        primary_exercise_emphasis=emphasis,
    )


def apply_sets_modifier(base_sets: int, modifiers: WorkoutModifiers) -> int:
    return max(1, round(base_sets * modifiers.volume_multiplier))


_RANGE_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")
_SINGLE_RE = re.compile(r"^\s*(\d+)\s*$")


def parse_reps(text: str) -> tuple[int, int] | int | None:
    """Parse "8-12" into (8, 12) and "10" into 10; anything else is None."""
    match = _RANGE_RE.match(text)
    if match:
        return int(match.group(1)), int(match.group(2))
    match = _SINGLE_RE.match(text)
    if match:
        return int(match.group(1))
    return None


def apply_reps_modifier(base_reps: str, modifiers: WorkoutModifiers) -> str:
    parsed = parse_reps(base_reps)
    scale = modifiers.volume_multiplier
    if isinstance(parsed, tuple):
        low, high = parsed
        return f"{max(1, round(low * scale))}-{max(1, round(high * scale))}"
    if isinstance(parsed, int):
        return str(max(1, round(parsed * scale)))
    # "AMRAP", "Max", "30 seconds", ...
    return base_reps


def apply_rest_modifier(base_rest_seconds: int, modifiers: WorkoutModifiers) -> int:
    return round(base_rest_seconds * modifiers.rest_multiplier)


def apply_intensity_modifier(
    base_weight: float | None, modifiers: WorkoutModifiers
) -> float | None:
    if base_weight is None:
        return None
    return round(base_weight * modifiers.intensity_multiplier)


def taper_description(days_until_tournament: int | None) -> str:
    if days_until_tournament is None:
        return ""
    if days_until_tournament <= 3:
        return "Active recovery mode - light movement only"
    if days_until_tournament <= 7:
        return "Heavy taper - maintaining sharpness while reducing fatigue"
    if days_until_tournament <= 14:
        return "Taper starting - reducing volume while keeping intensity"
    return "Full training mode"


_CYCLE_FOCUS_LABELS: dict[CyclePhase, str] = {
    CyclePhase.ECCENTRIC: "Eccentric focus",
    CyclePhase.ISOMETRIC: "Isometric focus",
    CyclePhase.CONCENTRIC: "Concentric focus",
}


def format_modifier_summary(modifiers: WorkoutModifiers) -> str:
    """One-line summary such as "20% increased volume, Eccentric focus"."""
    parts: list[str] = []

    volume = modifiers.volume_multiplier
    if volume < 1:
        parts.append(f"{round((1 - volume) * 100)}% reduced volume")
    elif volume > 1:
        parts.append(f"{round((volume - 1) * 100)}% increased volume")

    intensity = modifiers.intensity_multiplier
    if intensity > 1:
        parts.append(f"{round((intensity - 1) * 100)}% higher intensity")
    elif intensity < 1:
        parts.append(f"{round((1 - intensity) * 100)}% lower intensity")

    if modifiers.cycle_phase is not None:
        parts.append(_CYCLE_FOCUS_LABELS[modifiers.cycle_phase])

    if not parts:
        return "Standard training parameters"
    return ", ".join(parts)
