"""Exercise scoring and selection for a slot, per player profile.

Candidates for a slot come from its catalog categories (tagged exercises)
plus any exercise whose ``selection_pools`` names the slot's pool. They are
filtered by the experience-derived complexity ceiling, scored against the
player's position and side bias, and sorted by descending score. The sort is
stable: ties keep candidate order (category-map order, catalog insertion
order, then pool matches).

This is the one place experience gates anything. The Modifier Calculator's
``max_complexity`` is always 3.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from otl_engine.catalog import ExerciseCatalog
from otl_engine.models import (
    Exercise,
    ExerciseCategory,
    ExerciseRecommendation,
    ExerciseTag,
    ExperienceLevel,
    PlayerProfile,
    Position,
    SideBias,
    SlotCategory,
    WorkoutExercise,
)
from otl_engine.modifiers import MAX_COMPLEXITY
from otl_engine.periodization import experience_level_from_years
from otl_engine.rules import POSITION_BIAS, SIDE_BIAS_EMPHASIS

logger = logging.getLogger(__name__)

# Flat score for candidates without a catalog tag
NEUTRAL_RELEVANCE = 3
DEFAULT_EXERCISE_SCORE = 5.0

# Affinity bonuses on top of position + side relevance
POSITION_PATTERN_BONUS = 2
SIDE_PATTERN_BONUS = 1
ENERGY_SYSTEM_BONUS = 1
PLANE_BONUS = 1

_C = ExerciseCategory

SLOT_CATEGORIES: dict[str, tuple[ExerciseCategory, ...]] = {
    "PRIMARY_SQUAT": (_C.SQUAT,),
    "PRIMARY_SQUAT_VELOCITY": (_C.SQUAT,),
    "ACCESSORY_SQUAT": (_C.SQUAT,),
    "PRIMARY_HINGE": (_C.HINGE,),
    "HEAVY_HINGE": (_C.HINGE,),
    "SINGLE_LEG_HINGE": (_C.HINGE,),
    "ACCESSORY_HINGE": (_C.HINGE,),
    "PRIMARY_LUNGE": (_C.LUNGE,),
    "LATERAL_LUNGE": (_C.LUNGE,),
    "LUNGE": (_C.LUNGE,),
    "PRIMARY_PRESS": (_C.PRESS,),
    "SECONDARY_PRESS": (_C.PRESS,),
    "VERTICAL_PRESS": (_C.PRESS,),
    "SINGLE_ARM_PRESS": (_C.PRESS,),
    "HORIZONTAL_PRESS": (_C.PRESS,),
    "ACCESSORY_PRESS": (_C.PRESS,),
    "ROTATIONAL_PRESS": (_C.PRESS,),
    "PRIMARY_PULL": (_C.PULL,),
    "HORIZONTAL_PULL": (_C.PULL,),
    "VERTICAL_PULL": (_C.PULL,),
    "SINGLE_ARM_VERTICAL_PULL": (_C.PULL,),
    "ACCESSORY_PULL": (_C.PULL,),
    "CORE_VARIATION": (_C.CORE,),
    "ISO_HOLD": (_C.CORE,),
    "STABILIZATION_CORE": (_C.CORE,),
    "WEIGHTED_CORE": (_C.CORE,),
    "LOADED_CARRY": (_C.CORE,),
    "ENERGY_SYSTEM": (_C.ENERGY_SYSTEM, _C.SPRINT),
    "SPRINT": (_C.SPRINT,),
    "CONDITIONING": (_C.SPRINT, _C.ENERGY_SYSTEM),
    "PLYOMETRIC": (_C.PREP,),
    "PLYO_JUMP": (_C.PREP,),
    "PLYO_PUSH": (_C.PREP,),
    "WALKING_RDL": (_C.PREP, _C.HINGE),
    "HIP_FLEXOR_PREP": (_C.PREP, _C.PREHAB),
    "PREP": (_C.PREP,),
    "SPEED_PREP": (_C.PREP,),
    "DYNAMIC_WARMUP": (_C.PREP,),
    "ACTIVATION": (_C.PREP,),
    "MOBILITY": (_C.PREP, _C.PREHAB),
}

# Pool names that differ from the lowercased slot
_POOL_OVERRIDES: dict[str, str] = {
    "LUNGE": "primary_lunge",
    "SINGLE_ARM_VERTICAL_PULL": "single_arm_pull",
}

# Strength slots never take TRX, prep or prehab exercises
STRENGTH_SLOTS: frozenset[str] = frozenset({
    "PRIMARY_SQUAT", "ACCESSORY_SQUAT",
    "PRIMARY_HINGE", "SINGLE_LEG_HINGE", "ACCESSORY_HINGE",
    "PRIMARY_LUNGE", "LATERAL_LUNGE", "LUNGE",
    "PRIMARY_PRESS", "SECONDARY_PRESS", "VERTICAL_PRESS", "SINGLE_ARM_PRESS",
    "HORIZONTAL_PRESS", "ACCESSORY_PRESS", "ROTATIONAL_PRESS",
    "PRIMARY_PULL", "HORIZONTAL_PULL", "VERTICAL_PULL",
    "SINGLE_ARM_VERTICAL_PULL", "ACCESSORY_PULL",
    "CORE_VARIATION", "ISO_HOLD", "STABILIZATION_CORE", "WEIGHTED_CORE",
})

_COMPLEXITY_CEILING: dict[ExperienceLevel, int] = {
    ExperienceLevel.BEGINNER: 1,
    ExperienceLevel.INTERMEDIATE: 2,
    ExperienceLevel.ADVANCED: 3,
}

_POSITION_LABELS: dict[Position, str] = {
    Position.FRONT: "Front Player",
    Position.MID: "Mid Player",
    Position.BACK: "Back Player",
}


def slot_key(category_slot: SlotCategory | str) -> str:
    if isinstance(category_slot, SlotCategory):
        return category_slot.value
    return category_slot.strip().upper()


def categories_for_slot(category_slot: SlotCategory | str) -> tuple[ExerciseCategory, ...]:
    """Catalog categories a slot draws from.

    Unknown slots that name a catalog category directly ("squat") map to it.
    """
    key = slot_key(category_slot)
    if key in SLOT_CATEGORIES:
        return SLOT_CATEGORIES[key]
    try:
        return (ExerciseCategory(key.lower()),)
    except ValueError:
        return ()


def pool_name_for_slot(category_slot: SlotCategory | str) -> str:
    key = slot_key(category_slot)
    return _POOL_OVERRIDES.get(key, key.lower())


def complexity_ceiling(experience_level: ExperienceLevel) -> int:
    return _COMPLEXITY_CEILING[experience_level]


def score_exercise_for_player(tag: ExerciseTag, position: Position, side_bias: SideBias) -> float:
    """Position relevance + side relevance, plus pattern/energy/plane affinity."""
    score = tag.position_relevance.for_position(position) + tag.side_bias_relevance.for_side(side_bias)

    position_bias = POSITION_BIAS[position]
    if tag.movement_pattern in position_bias.priority_patterns:
        score += POSITION_PATTERN_BONUS
    if tag.movement_pattern in SIDE_BIAS_EMPHASIS[side_bias].priority_patterns:
        score += SIDE_PATTERN_BONUS
    if tag.energy_system in position_bias.conditioning_focus:
        score += ENERGY_SYSTEM_BONUS
    if tag.plane_of_motion in position_bias.priority_planes:
        score += PLANE_BONUS
    return score


def recommendation_reasons(tag: ExerciseTag, profile: PlayerProfile) -> tuple[str, ...]:
    position = profile.primary_position
    side = profile.field_side_bias
    reasons: list[str] = []

    if tag.position_relevance.for_position(position) >= 4:
        reasons.append(f"High relevance for {_POSITION_LABELS[position]}s")
    if side is not SideBias.BOTH and tag.side_bias_relevance.for_side(side) >= 4:
        reasons.append(f"Great for {side.value} side play")

    position_bias = POSITION_BIAS[position]
    if tag.movement_pattern in position_bias.priority_patterns:
        reasons.append(f"Matches {position.value} movement needs")
    if tag.energy_system in position_bias.conditioning_focus:
        reasons.append("Trains your position's energy demands")

    return tuple(reasons) if reasons else ("Solid all-around exercise",)


def _excluded_from_strength(exercise: Exercise, key: str) -> bool:
    if key not in STRENGTH_SLOTS:
        return False
    if "TRX Straps" in exercise.equipment:
        return True
    return exercise.category in (ExerciseCategory.PREP, ExerciseCategory.PREHAB)


def candidates_for_slot(category_slot: SlotCategory | str, catalog: ExerciseCatalog) -> list[Exercise]:
    """Tagged category matches, then selection-pool matches, deduplicated.

    Falls back to every exercise in the slot's categories when neither source
    yields anything.
    """
    categories = categories_for_slot(category_slot)
    pool = pool_name_for_slot(category_slot)

    matches: list[Exercise] = []
    seen: set[str] = set()

    for category in categories:
        for exercise in catalog.exercises_by_category(category):
            if exercise.id not in seen and catalog.get_tag(exercise.id) is not None:
                matches.append(exercise)
                seen.add(exercise.id)

    for exercise in catalog.all_exercises():
        if pool in exercise.selection_pools and exercise.id not in seen:
            matches.append(exercise)
            seen.add(exercise.id)

    if not matches:
        for category in categories:
            matches.extend(catalog.exercises_by_category(category))
    return matches


def _ranked(
    category_slot: SlotCategory | str,
    profile: PlayerProfile,
    catalog: ExerciseCatalog,
    exclude_ids: Iterable[str],
    *,
    require_tag: bool,
) -> list[ExerciseRecommendation]:
    key = slot_key(category_slot)
    excluded = set(exclude_ids)
    ceiling = complexity_ceiling(experience_level_from_years(profile.years_experience))

    scored: list[ExerciseRecommendation] = []
    for exercise in candidates_for_slot(category_slot, catalog):
        if exercise.id in excluded or _excluded_from_strength(exercise, key):
            continue
        tag = catalog.get_tag(exercise.id)
        if tag is None:
            if require_tag:
                continue
            scored.append(ExerciseRecommendation(
                exercise_id=exercise.id,
                exercise=exercise,
                score=float(NEUTRAL_RELEVANCE),
                reasons=("Standard exercise",),
            ))
            continue
        if tag.complexity_level > ceiling:
            continue
        scored.append(ExerciseRecommendation(
            exercise_id=exercise.id,
            exercise=exercise,
            score=score_exercise_for_player(tag, profile.primary_position, profile.field_side_bias),
            reasons=recommendation_reasons(tag, profile),
        ))

    # sorted() is stable, so equal scores keep candidate order
    return sorted(scored, key=lambda rec: -rec.score)


def _default_recommendation(
    key: str, catalog: ExerciseCatalog, exclude_ids: Sequence[str], ceiling: int
) -> ExerciseRecommendation | None:
    default_id = catalog.default_exercise_id(key)
    if default_id is None or default_id in exclude_ids:
        return None
    exercise = catalog.get_exercise(default_id)
    if exercise is None:
        return None
    tag = catalog.get_tag(default_id)
    if tag is not None and tag.complexity_level > ceiling:
        return None
    return ExerciseRecommendation(
        exercise_id=exercise.id,
        exercise=exercise,
        score=DEFAULT_EXERCISE_SCORE,
        reasons=("Default exercise for this slot",),
    )


def select_exercise_for_slot(
    category_slot: SlotCategory | str,
    profile: PlayerProfile,
    catalog: ExerciseCatalog,
    exclude_ids: Sequence[str] = (),
) -> ExerciseRecommendation | None:
    """Best-scoring exercise for the slot, the slot default, or None.

    The default is subject to the same complexity ceiling as candidates.
    """
    ranked = _ranked(category_slot, profile, catalog, exclude_ids, require_tag=False)
    if ranked:
        return ranked[0]

    key = slot_key(category_slot)
    ceiling = complexity_ceiling(experience_level_from_years(profile.years_experience))
    fallback = _default_recommendation(key, catalog, exclude_ids, ceiling)
    if fallback is None:
        logger.debug("No exercise available for slot %s", key)
    else:
        logger.debug("Slot %s fell back to default exercise %s", key, fallback.exercise_id)
    return fallback


def alternatives_for_slot(
    category_slot: SlotCategory | str,
    profile: PlayerProfile,
    catalog: ExerciseCatalog,
    current_exercise_id: str | None = None,
    limit: int = 3,
) -> list[ExerciseRecommendation]:
    """Top tagged alternatives for the substitution UI, excluding the current pick."""
    exclude = (current_exercise_id,) if current_exercise_id else ()
    return _ranked(category_slot, profile, catalog, exclude, require_tag=True)[:limit]


def auto_select_exercises_for_day(
    exercises: Iterable[WorkoutExercise],
    profile: PlayerProfile,
    catalog: ExerciseCatalog,
) -> dict[str, str]:
    """Pick a distinct exercise for every category slot in the day."""
    selections: dict[str, str] = {}
    used: list[str] = []
    for workout_exercise in exercises:
        recommendation = select_exercise_for_slot(workout_exercise.category_slot, profile, catalog, used)
        if recommendation is not None:
            selections[workout_exercise.category_slot] = recommendation.exercise_id
            used.append(recommendation.exercise_id)
    return selections


def exercise_substitutions(
    exercise_id: str,
    profile: PlayerProfile,
    catalog: ExerciseCatalog,
    limit: int = 3,
) -> list[str]:
    """Similar exercises ranked by shared pattern/plane/energy and relevance.

    Uses the Modifier Calculator's fixed complexity ceiling, not the
    experience-derived one.
    """
    original = catalog.get_tag(exercise_id)
    if original is None:
        return []

    scored: list[tuple[str, float]] = []
    for exercise in catalog.all_exercises():
        if exercise.id == exercise_id:
            continue
        tag = catalog.get_tag(exercise.id)
        if tag is None or tag.complexity_level > MAX_COMPLEXITY:
            continue

        score = 0.0
        if tag.movement_pattern is original.movement_pattern:
            score += 5
        if tag.plane_of_motion is original.plane_of_motion:
            score += 3
        if tag.energy_system is original.energy_system:
            score += 2
        score += tag.position_relevance.for_position(profile.primary_position)
        score += tag.side_bias_relevance.for_side(profile.field_side_bias)
        scored.append((exercise.id, score))

    scored.sort(key=lambda item: -item[1])
    return [exercise_id for exercise_id, _ in scored[:limit]]
