"""Rule tables for turning a template slot into a prescription.

Four modifier dimensions feed the final set/rep/tempo numbers:

1. Training cycle phase (eccentric -> isometric -> concentric)
2. Player position (front / mid / back)
3. Side bias (snake / dorito / both)
4. Tournament proximity

plus RPE-based load suggestions and the session time rail.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Literal

from otl_engine.models import (
    CombinedModifiers,
    CyclePhase,
    EnergySystem,
    MovementPattern,
    PlaneOfMotion,
    Position,
    SideBias,
    SlotCategory,
    SlotType,
    TournamentMode,
)
from otl_engine.modifiers import parse_reps

# --- Position and side bias emphasis ---


@dataclass(frozen=True)
class PositionBias:
    priority_patterns: tuple[MovementPattern, ...]
    priority_planes: tuple[PlaneOfMotion, ...]
    activation_focus: tuple[str, ...]
    conditioning_focus: tuple[EnergySystem, ...]
    description: str


POSITION_BIAS: dict[Position, PositionBias] = {
    Position.FRONT: PositionBias(
        priority_patterns=(MovementPattern.PLYOMETRIC, MovementPattern.LUNGE, MovementPattern.LOCOMOTION),
        priority_planes=(PlaneOfMotion.SAGITTAL, PlaneOfMotion.MULTI_PLANAR),
        activation_focus=("hip_mobility", "acceleration", "unilateral_strength"),
        conditioning_focus=(EnergySystem.PHOSPHAGEN, EnergySystem.GLYCOLYTIC),
        description="Acceleration, change of direction, unilateral strength, hip mobility",
    ),
    Position.MID: PositionBias(
        priority_patterns=(MovementPattern.LOCOMOTION, MovementPattern.PLYOMETRIC, MovementPattern.SQUAT),
        priority_planes=(PlaneOfMotion.FRONTAL, PlaneOfMotion.SAGITTAL, PlaneOfMotion.MULTI_PLANAR),
        activation_focus=("lateral_movement", "repeat_sprint", "work_capacity"),
        conditioning_focus=(EnergySystem.GLYCOLYTIC, EnergySystem.MIXED),
        description="Repeat sprint ability, lateral/linear transitions, work capacity",
    ),
    Position.BACK: PositionBias(
        priority_patterns=(
            MovementPattern.ROTATION,
            MovementPattern.ANTI_ROTATION,
            MovementPattern.ISOMETRIC,
            MovementPattern.PUSH,
        ),
        priority_planes=(PlaneOfMotion.TRANSVERSE, PlaneOfMotion.FRONTAL),
        activation_focus=("trunk_endurance", "upper_body_stamina", "rotational_control"),
        conditioning_focus=(EnergySystem.OXIDATIVE, EnergySystem.MIXED),
        description="Trunk endurance, upper-body stamina, rotational control",
    ),
}


@dataclass(frozen=True)
class SideBiasEmphasis:
    priority_patterns: tuple[MovementPattern, ...]
    mobility_focus: tuple[str, ...]
    strength_focus: tuple[str, ...]
    description: str


SIDE_BIAS_EMPHASIS: dict[SideBias, SideBiasEmphasis] = {
    SideBias.SNAKE: SideBiasEmphasis(
        priority_patterns=(MovementPattern.LUNGE, MovementPattern.SQUAT, MovementPattern.PLYOMETRIC),
        mobility_focus=("hip_internal_rotation", "adductors"),
        strength_focus=("low_position_strength", "ground_to_sprint"),
        description="Hip internal rotation, adductors, low-position strength, ground-to-sprint patterns",
    ),
    SideBias.DORITO: SideBiasEmphasis(
        priority_patterns=(MovementPattern.PLYOMETRIC, MovementPattern.PUSH, MovementPattern.LOCOMOTION),
        mobility_focus=("hip_external_rotation", "lateral_drive"),
        strength_focus=("vertical_force", "open_chain_power"),
        description="Hip external rotation, lateral drive, vertical force, open-chain power",
    ),
    SideBias.BOTH: SideBiasEmphasis(
        priority_patterns=(
            MovementPattern.LUNGE,
            MovementPattern.SQUAT,
            MovementPattern.PLYOMETRIC,
            MovementPattern.LOCOMOTION,
        ),
        mobility_focus=("hip_internal_rotation", "hip_external_rotation"),
        strength_focus=("low_position_strength", "lateral_drive"),
        description="Balanced exposure with alternating emphasis each session",
    ),
}

# --- Slot helpers ---


def _slot_text(category_slot: SlotCategory | str) -> str:
    if isinstance(category_slot, SlotCategory):
        return category_slot.value
    return category_slot.upper()


def slot_type(category_slot: SlotCategory | str) -> SlotType:
    """Coarse kind of a slot, used for tempo, rep bias and time estimates."""
    slot = _slot_text(category_slot)
    if "PRIMARY" in slot or "HEAVY" in slot:
        return SlotType.PRIMARY
    if "SECONDARY" in slot or "VERTICAL_PRESS" in slot or "HORIZONTAL_" in slot:
        return SlotType.SECONDARY
    if "ENERGY" in slot or "SPRINT" in slot or "CONDITIONING" in slot:
        return SlotType.CONDITIONING
    if "PREP" in slot or "ACTIVATION" in slot or "MOBILITY" in slot:
        return SlotType.ACTIVATION
    return SlotType.ACCESSORY


def is_bilateral_primary(category_slot: SlotCategory | str) -> bool:
    slot = _slot_text(category_slot)
    return any(
        key in slot
        for key in ("PRIMARY_SQUAT", "PRIMARY_HINGE", "HEAVY_HINGE", "PRIMARY_PRESS", "PRIMARY_PULL")
    )


def is_unilateral_slot(category_slot: SlotCategory | str) -> bool:
    slot = _slot_text(category_slot)
    return any(key in slot for key in ("LUNGE", "SINGLE_LEG", "SINGLE_ARM", "S/L", "S/A"))


def is_upper_body_slot(category_slot: SlotCategory | str) -> bool:
    slot = _slot_text(category_slot)
    return any(key in slot for key in ("PRESS", "PULL", "PUSH"))


def is_jump_slot(category_slot: SlotCategory | str) -> bool:
    slot = _slot_text(category_slot)
    return any(key in slot for key in ("PLYO", "JUMP", "VELOCITY"))


def is_core_slot(category_slot: SlotCategory | str) -> bool:
    slot = _slot_text(category_slot)
    return any(key in slot for key in ("CORE", "ISO_HOLD", "STABILIZATION"))


def is_lateral_slot(category_slot: SlotCategory | str) -> bool:
    return "LATERAL" in _slot_text(category_slot)


# --- Phase rules (ECC -> ISO -> CON) ---


@dataclass(frozen=True)
class PhaseRule:
    sets_multiplier: float
    reps_modifier: Literal["reduce", "moderate"]
    tempo: str  # eccentric-pause-concentric
    load_range: str
    rest_multiplier: float
    description: str


PHASE_RULES: dict[CyclePhase, PhaseRule] = {
    CyclePhase.ECCENTRIC: PhaseRule(
        sets_multiplier=1.0,
        reps_modifier="reduce",
        tempo="4-0-1",
        load_range="RPE 7-8",
        rest_multiplier=1.2,
        description="Control the lowering phase with 4-second eccentric",
    ),
    CyclePhase.ISOMETRIC: PhaseRule(
        sets_multiplier=1.0,
        reps_modifier="moderate",
        tempo="2-3-1",
        load_range="RPE 7.5-8.5",
        rest_multiplier=1.0,
        description="Hold and stabilize at key positions with 3-second pause",
    ),
    CyclePhase.CONCENTRIC: PhaseRule(
        sets_multiplier=0.9,
        reps_modifier="reduce",
        tempo="2-0-X",
        load_range="RPE 6-7",
        rest_multiplier=1.3,
        description="Explosive power on the lift with maximum velocity",
    ),
}


def apply_phase_to_reps(base_reps: str, phase: CyclePhase) -> str:
    """Cut reps by ~20% in "reduce" phases, never below 3 (4 on range tops)."""
    if PHASE_RULES[phase].reps_modifier != "reduce":
        return base_reps

    parsed = parse_reps(base_reps)
    if isinstance(parsed, tuple):
        low, high = parsed
        return f"{max(3, math.floor(low * 0.8))}-{max(4, math.floor(high * 0.8))}"
    if isinstance(parsed, int):
        return str(max(3, math.floor(parsed * 0.8)))
    return base_reps


# --- Position rules ---


@dataclass(frozen=True)
class PositionSetModifier:
    bilateral_primary: int
    unilateral_lower: int
    upper_body_push: int
    upper_body_pull: int
    rep_bias: Literal["lower", "balanced", "higher"]
    load_bias: Literal["lighter", "moderate", "heavier"]
    conditioning_density: Literal["lower", "standard", "higher"]
    notes: str


POSITION_SET_MODIFIERS: dict[Position, PositionSetModifier] = {
    Position.FRONT: PositionSetModifier(
        bilateral_primary=-1,
        unilateral_lower=1,
        upper_body_push=0,
        upper_body_pull=0,
        rep_bias="lower",
        load_bias="lighter",
        conditioning_density="lower",
        notes="Protect acceleration and CNS freshness. Never below 3 working sets on primary.",
    ),
    Position.MID: PositionSetModifier(
        bilateral_primary=0,
        unilateral_lower=0,
        upper_body_push=0,
        upper_body_pull=0,
        rep_bias="balanced",
        load_bias="moderate",
        conditioning_density="higher",
        notes="Balanced approach with emphasis on work capacity.",
    ),
    Position.BACK: PositionSetModifier(
        bilateral_primary=0,
        unilateral_lower=0,
        upper_body_push=1,
        upper_body_pull=1,
        rep_bias="higher",
        load_bias="moderate",
        conditioning_density="standard",
        notes="Keep full sets for strength. Add upper body volume.",
    ),
}

PRIMARY_SET_FLOOR = 3
DEFAULT_SET_FLOOR = 2


def apply_position_to_sets(base_sets: int, category_slot: SlotCategory | str, position: Position) -> int:
    modifier = POSITION_SET_MODIFIERS[position]
    adjustment = 0

    if is_bilateral_primary(category_slot):
        adjustment = modifier.bilateral_primary
    elif is_unilateral_slot(category_slot):
        adjustment = modifier.unilateral_lower
    elif is_upper_body_slot(category_slot):
        slot = _slot_text(category_slot)
        if "PRESS" in slot or "PUSH" in slot:
            adjustment = modifier.upper_body_push
        elif "PULL" in slot or "ROW" in slot:
            adjustment = modifier.upper_body_pull

    sets = base_sets + adjustment
    if is_bilateral_primary(category_slot):
        return max(PRIMARY_SET_FLOOR, sets)
    return max(DEFAULT_SET_FLOOR, sets)


def apply_position_to_reps(base_reps: str, position: Position) -> str:
    bias = POSITION_SET_MODIFIERS[position].rep_bias
    if bias == "balanced":
        return base_reps

    parsed = parse_reps(base_reps)
    if isinstance(parsed, tuple):
        low, high = parsed
        if bias == "lower":
            return f"{max(3, low - 1)}-{max(3, high - 1)}"
        return f"{low + 1}-{high + 2}"
    if isinstance(parsed, int):
        if bias == "lower":
            return str(max(3, parsed - 1))
        return str(parsed + 1)
    return base_reps


# --- Side bias rules ---


@dataclass(frozen=True)
class SideBiasSetModifier:
    lunge_lateral_core: int
    squat_bound_push: int
    isometric_duration: Literal["standard", "longer"]
    jump_volume_multiplier: float
    unilateral_lower_multiplier: float
    rep_bias: Literal["lower", "standard"]
    explosive_intent: Literal["standard", "higher"]
    notes: str


SIDE_BIAS_MODIFIERS: dict[SideBias, SideBiasSetModifier] = {
    SideBias.SNAKE: SideBiasSetModifier(
        lunge_lateral_core=1,
        squat_bound_push=0,
        isometric_duration="longer",
        jump_volume_multiplier=0.8,
        unilateral_lower_multiplier=1.0,
        rep_bias="standard",
        explosive_intent="standard",
        notes="Low-position strength, ground-to-sprint patterns, reduced jump volume.",
    ),
    SideBias.DORITO: SideBiasSetModifier(
        lunge_lateral_core=0,
        squat_bound_push=1,
        isometric_duration="standard",
        jump_volume_multiplier=1.0,
        unilateral_lower_multiplier=1.0,
        rep_bias="lower",
        explosive_intent="higher",
        notes="Vertical force, open-chain power, more explosive intent.",
    ),
    SideBias.BOTH: SideBiasSetModifier(
        lunge_lateral_core=0,
        squat_bound_push=0,
        isometric_duration="standard",
        jump_volume_multiplier=1.0,
        unilateral_lower_multiplier=0.85,
        rep_bias="standard",
        explosive_intent="standard",
        notes="Balanced approach, alternating emphasis. Reduce unilateral stress.",
    ),
}


def apply_side_bias_to_sets(base_sets: int, category_slot: SlotCategory | str, side_bias: SideBias) -> int:
    modifier = SIDE_BIAS_MODIFIERS[side_bias]
    slot = _slot_text(category_slot)
    adjustment = 0

    if side_bias is SideBias.SNAKE:
        if is_unilateral_slot(slot) or is_lateral_slot(slot) or is_core_slot(slot):
            adjustment = modifier.lunge_lateral_core
    elif side_bias is SideBias.DORITO:
        if any(key in slot for key in ("SQUAT", "PLYO", "PUSH", "BOUND")):
            adjustment = modifier.squat_bound_push
    elif is_unilateral_slot(slot):
        return max(DEFAULT_SET_FLOOR, round(base_sets * modifier.unilateral_lower_multiplier))

    return max(DEFAULT_SET_FLOOR, base_sets + adjustment)


def apply_side_bias_to_jump_volume(base_sets: int, side_bias: SideBias) -> int:
    modifier = SIDE_BIAS_MODIFIERS[side_bias]
    return max(DEFAULT_SET_FLOOR, round(base_sets * modifier.jump_volume_multiplier))


# --- Tournament proximity ---


@dataclass(frozen=True)
class TournamentRule:
    volume_multiplier: float
    max_sets_per_exercise: int
    keep_intensity: bool
    remove_new_exercises: bool
    remove_eccentrics: bool
    conditioning_mode: TournamentMode
    description: str


# Ordered by threshold; the first rule whose threshold is met applies.
TOURNAMENT_PROXIMITY_RULES: tuple[tuple[int, TournamentRule], ...] = (
    (
        14,
        TournamentRule(
            volume_multiplier=1.0,
            max_sets_per_exercise=99,
            keep_intensity=True,
            remove_new_exercises=False,
            remove_eccentrics=False,
            conditioning_mode=TournamentMode.NORMAL,
            description="Full training mode - no changes",
        ),
    ),
    (
        7,
        TournamentRule(
            volume_multiplier=0.75,
            max_sets_per_exercise=4,
            keep_intensity=True,
            remove_new_exercises=True,
            remove_eccentrics=False,
            conditioning_mode=TournamentMode.NORMAL,
            description="Taper starting - reduced volume, maintain intensity",
        ),
    ),
    (
        4,
        TournamentRule(
            volume_multiplier=0.5,
            max_sets_per_exercise=3,
            keep_intensity=True,
            remove_new_exercises=True,
            remove_eccentrics=True,
            conditioning_mode=TournamentMode.ALACTIC_ONLY,
            description="Heavy taper - minimal volume, alactic conditioning only",
        ),
    ),
    (
        0,
        TournamentRule(
            volume_multiplier=0.5,
            max_sets_per_exercise=3,
            keep_intensity=True,
            remove_new_exercises=True,
            remove_eccentrics=True,
            conditioning_mode=TournamentMode.REMOVED,
            description="Tournament week - conditioning removed, no eccentrics",
        ),
    ),
)


def tournament_rule(days_until: int | None) -> TournamentRule:
    if days_until is None:
        return TOURNAMENT_PROXIMITY_RULES[0][1]
    for threshold, rule in TOURNAMENT_PROXIMITY_RULES:
        if days_until >= threshold:
            return rule
    return TOURNAMENT_PROXIMITY_RULES[-1][1]


def apply_tournament_to_sets(base_sets: int, days_until: int | None) -> int:
    rule = tournament_rule(days_until)
    sets = round(base_sets * rule.volume_multiplier)
    return min(max(DEFAULT_SET_FLOOR, sets), rule.max_sets_per_exercise)


# --- Load suggestion (RPE based) ---


@dataclass(frozen=True)
class LoadSuggestion:
    rpe: str
    percent_range: str
    description: str

    def __str__(self) -> str:
        return f"{self.rpe} ({self.percent_range})"


LOAD_SUGGESTIONS: dict[CyclePhase, LoadSuggestion] = {
    CyclePhase.ECCENTRIC: LoadSuggestion("RPE 7-8", "65-80%", "Moderate load with controlled tempo"),
    CyclePhase.ISOMETRIC: LoadSuggestion("RPE 7.5-8.5", "70-85%", "Moderate-heavy load with pauses"),
    CyclePhase.CONCENTRIC: LoadSuggestion("RPE 6-7", "50-75%", "Lighter load with maximum speed"),
}


def load_suggestion(phase: CyclePhase) -> LoadSuggestion:
    return LOAD_SUGGESTIONS[phase]


@dataclass(frozen=True)
class WeightRecommendation:
    percentage: str
    description: str


_RM_RE = re.compile(r"(\d+)\s*rm")
_REP_RANGE_RE = re.compile(r"(\d+)\s*[-–]\s*(\d+)")


def weight_recommendation(rep_scheme: str) -> WeightRecommendation:
    """Suggested %1RM for a rep prescription ("5RM", "8-10", "6", "30 sec")."""
    scheme = rep_scheme.lower().strip()

    if "rm" in scheme or "max" in scheme:
        match = _RM_RE.search(scheme)
        if match:
            reps = int(match.group(1))
            if reps <= 3:
                return WeightRecommendation("90-95%", "Near-max effort")
            if reps <= 5:
                return WeightRecommendation("85-90%", "Heavy strength work")
            return WeightRecommendation("80-85%", "Strength-hypertrophy")
        return WeightRecommendation("85-95%", "Work to rep max")

    match = _REP_RANGE_RE.search(scheme)
    if match:
        average = (int(match.group(1)) + int(match.group(2))) / 2
        if average <= 5:
            return WeightRecommendation("80-87%", "Strength focus")
        if average <= 8:
            return WeightRecommendation("70-80%", "Strength-hypertrophy")
        if average <= 12:
            return WeightRecommendation("65-75%", "Hypertrophy focus")
        return WeightRecommendation("50-65%", "Muscular endurance")

    if scheme.isdigit():
        reps = int(scheme)
        if reps <= 3:
            return WeightRecommendation("87-93%", "Near-max strength")
        if reps <= 6:
            return WeightRecommendation("80-87%", "Strength focus")
        if reps <= 10:
            return WeightRecommendation("70-80%", "Strength-hypertrophy")
        return WeightRecommendation("60-70%", "Volume work")

    if "sec" in scheme:
        return WeightRecommendation("Bodyweight or light", "Time under tension")

    return WeightRecommendation("65-75%", "Moderate intensity")


# --- Combined application ---


def calculate_final_sets(base_sets: int, category_slot: SlotCategory | str, modifiers: CombinedModifiers) -> int:
    """Run the set count through phase, position, side bias and taper rules."""
    sets = round(base_sets * PHASE_RULES[modifiers.phase].sets_multiplier)
    sets = apply_position_to_sets(sets, category_slot, modifiers.position)
    if is_jump_slot(category_slot):
        sets = apply_side_bias_to_jump_volume(sets, modifiers.side_bias)
    else:
        sets = apply_side_bias_to_sets(sets, category_slot, modifiers.side_bias)
    # Tournament proximity last: it is the global override.
    return apply_tournament_to_sets(sets, modifiers.days_until_tournament)


def calculate_final_reps(base_reps: str, category_slot: SlotCategory | str, modifiers: CombinedModifiers) -> str:
    reps = apply_phase_to_reps(base_reps, modifiers.phase)
    if slot_type(category_slot) is SlotType.PRIMARY:
        reps = apply_position_to_reps(reps, modifiers.position)
    return reps


def tempo_prescription(
    category_slot: SlotCategory | str,
    phase: CyclePhase,
    days_until: int | None,
) -> str | None:
    """Tempo string for primary lifts, or None."""
    rule = tournament_rule(days_until)
    if rule.remove_eccentrics and phase is CyclePhase.ECCENTRIC:
        return None
    if slot_type(category_slot) is not SlotType.PRIMARY:
        return None
    return PHASE_RULES[phase].tempo
