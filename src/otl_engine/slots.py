"""Slot classification: map a template exercise to one SlotCategory.

``classify_slot`` is total. It walks a fixed priority list:

1. section keywords (activation/prep/warm/mobility, conditioning/energy/cardio)
2. catalog tag movement pattern, refined by substrings of the exercise text
3. section-name default, then ACCESSORY_SQUAT

The substring rules are heuristics over ``category_slot`` and
``exercise_id``; their order inside each pattern is significant.
"""

from __future__ import annotations

from otl_engine.models import (
    ExerciseTag,
    MovementPattern,
    SectionKind,
    SlotCategory,
    WorkoutExercise,
)

_ACTIVATION_KEYWORDS = ("activation", "prep", "warm", "mobility")
_CONDITIONING_KEYWORDS = ("conditioning", "energy", "cardio")


def section_kind(section_name: str) -> SectionKind:
    """Kind of a template section, by keyword in its name."""
    name = section_name.lower()
    if any(key in name for key in _ACTIVATION_KEYWORDS):
        return SectionKind.ACTIVATION
    if any(key in name for key in _CONDITIONING_KEYWORDS):
        return SectionKind.CONDITIONING
    if "core" in name:
        return SectionKind.CORE
    return SectionKind.STRENGTH


def exercise_text(exercise: WorkoutExercise) -> str:
    return f"{exercise.category_slot} {exercise.exercise_id}".lower()


def _has(text: str, *needles: str) -> bool:
    return any(needle in text for needle in needles)


def _classify_by_pattern(
    pattern: MovementPattern, name: str, section: str
) -> SlotCategory | None:
    if pattern is MovementPattern.HIP_HINGE:
        if _has(name, "deadlift", "rdl"):
            if _has(name, "single", "s/l"):
                return SlotCategory.SINGLE_LEG_HINGE
            return SlotCategory.PRIMARY_HINGE
        return SlotCategory.ACCESSORY_HINGE

    if pattern is MovementPattern.SQUAT:
        if _has(name, "jump", "velocity"):
            return SlotCategory.PRIMARY_SQUAT_VELOCITY
        if _has(name, "goblet", "front", "back"):
            return SlotCategory.PRIMARY_SQUAT
        return SlotCategory.ACCESSORY_SQUAT

    if pattern is MovementPattern.LUNGE:
        if _has(name, "lateral", "cossack"):
            return SlotCategory.LATERAL_LUNGE
        return SlotCategory.PRIMARY_LUNGE

    if pattern is MovementPattern.PUSH:
        if "overhead" in name or ("press" in name and "bench" not in name):
            return SlotCategory.VERTICAL_PRESS
        if _has(name, "bench", "push-up", "pushup", "push_up"):
            return SlotCategory.HORIZONTAL_PRESS
        if _has(name, "single", "s/a"):
            return SlotCategory.SINGLE_ARM_PRESS
        return SlotCategory.PRIMARY_PRESS

    if pattern is MovementPattern.PULL:
        if _has(name, "pull-up", "pullup", "pull_up", "pulldown", "chin"):
            return SlotCategory.VERTICAL_PULL
        if "row" in name:
            if _has(name, "single", "s/a"):
                return SlotCategory.SINGLE_ARM_VERTICAL_PULL
            return SlotCategory.HORIZONTAL_PULL
        return SlotCategory.PRIMARY_PULL

    if pattern in (MovementPattern.ROTATION, MovementPattern.ANTI_ROTATION):
        return SlotCategory.CORE_VARIATION

    if pattern is MovementPattern.ISOMETRIC:
        if "core" in section or _has(name, "plank", "hold"):
            return SlotCategory.ISO_HOLD
        return None

    if pattern is MovementPattern.PLYOMETRIC:
        return SlotCategory.PLYOMETRIC

    if pattern is MovementPattern.LOCOMOTION:
        if _has(name, "carry", "walk", "march"):
            return SlotCategory.LOADED_CARRY
        return SlotCategory.CONDITIONING

    return None


def classify_slot(
    section_name: str,
    exercise: WorkoutExercise,
    tag: ExerciseTag | None = None,
) -> SlotCategory:
    """Classify an exercise into exactly one SlotCategory. Never raises."""
    section = section_name.lower()
    name = exercise_text(exercise)

    kind = section_kind(section_name)
    if kind is SectionKind.ACTIVATION:
        if "mobility" in section or _has(name, "stretch", "mobility"):
            return SlotCategory.MOBILITY
        return SlotCategory.ACTIVATION
    if kind is SectionKind.CONDITIONING:
        if _has(name, "sprint", "run"):
            return SlotCategory.SPRINT
        return SlotCategory.CONDITIONING

    if tag is not None:
        by_pattern = _classify_by_pattern(tag.movement_pattern, name, section)
        if by_pattern is not None:
            return by_pattern

    if _has(section, "strength", "main"):
        return SlotCategory.PRIMARY_SQUAT
    if _has(section, "accessory", "auxiliary"):
        return SlotCategory.ACCESSORY_SQUAT
    if "core" in section:
        return SlotCategory.CORE_VARIATION
    return SlotCategory.ACCESSORY_SQUAT
