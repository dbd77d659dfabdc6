"""Exercise catalog lookup: read-only, injected into every engine call.

The engine only needs keyed reads: tag by exercise id, exercise by id,
exercises by category, and the configured default exercise per slot.
``ExerciseCatalog`` describes that surface; ``InMemoryCatalog`` is the
immutable implementation used by the CLI and tests.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Protocol

from otl_engine.models import Exercise, ExerciseCategory, ExerciseTag

logger = logging.getLogger(__name__)

# Fallback exercise per slot when no tagged candidate qualifies.
DEFAULT_EXERCISES: Mapping[str, str] = MappingProxyType({
    "PRIMARY_SQUAT": "goblet_squat",
    "ACCESSORY_SQUAT": "box_squat",
    "PRIMARY_SQUAT_VELOCITY": "squat_jump",
    "PRIMARY_HINGE": "trap_bar_deadlift",
    "SINGLE_LEG_HINGE": "single_leg_rdl",
    "ACCESSORY_HINGE": "kettlebell_swing",
    "PRIMARY_LUNGE": "reverse_lunge",
    "LATERAL_LUNGE": "lateral_lunge",
    "LUNGE": "reverse_lunge",
    "PRIMARY_PRESS": "db_bench_press",
    "SECONDARY_PRESS": "half_kneeling_landmine_press",
    "VERTICAL_PRESS": "half_kneeling_landmine_press",
    "HORIZONTAL_PRESS": "push_up",
    "SINGLE_ARM_PRESS": "single_arm_db_bench_press",
    "ACCESSORY_PRESS": "push_up",
    "PRIMARY_PULL": "chin_up",
    "HORIZONTAL_PULL": "chest_supported_row",
    "VERTICAL_PULL": "chin_up",
    "SINGLE_ARM_VERTICAL_PULL": "single_arm_db_row",
    "ACCESSORY_PULL": "band_pull_apart",
    "CORE_VARIATION": "pallof_press",
    "ISO_HOLD": "front_plank",
    "STABILIZATION_CORE": "dead_bug",
    "WEIGHTED_CORE": "suitcase_carry",
    "ENERGY_SYSTEM": "bike_intervals",
    "SPRINT": "flying_10s",
    "CONDITIONING": "bike_intervals",
    "PLYOMETRIC": "broad_jump",
    "LOADED_CARRY": "farmer_carry",
    "PREP": "worlds_greatest_stretch",
    "ACTIVATION": "glute_bridge",
    "MOBILITY": "ninety_ninety_hip_switch",
})


class ExerciseCatalog(Protocol):
    """Read-only catalog surface consumed by the selector and assembler."""

    def get_tag(self, exercise_id: str) -> ExerciseTag | None: ...

    def get_exercise(self, exercise_id: str) -> Exercise | None: ...

    def exercises_by_category(self, category: ExerciseCategory) -> tuple[Exercise, ...]: ...

    def all_exercises(self) -> tuple[Exercise, ...]: ...

    def default_exercise_id(self, category_slot: str) -> str | None: ...


class InMemoryCatalog:
    """Immutable catalog built once from exercises and tags.

    Iteration order is insertion order; the selector's tie-break relies on it.
    """

    def __init__(
        self,
        exercises: Iterable[Exercise],
        tags: Iterable[ExerciseTag] = (),
        defaults: Mapping[str, str] | None = None,
    ):
        by_id: dict[str, Exercise] = {}
        for exercise in exercises:
            if exercise.id in by_id:
                logger.warning("Duplicate exercise id in catalog: %s", exercise.id)
                continue
            by_id[exercise.id] = exercise

        by_category: dict[ExerciseCategory, list[Exercise]] = {}
        for exercise in by_id.values():
            by_category.setdefault(exercise.category, []).append(exercise)

        self._exercises = MappingProxyType(by_id)
        self._by_category = MappingProxyType(
            {category: tuple(items) for category, items in by_category.items()}
        )
        self._tags = MappingProxyType({tag.exercise_id: tag for tag in tags})
        self._defaults = MappingProxyType(dict(DEFAULT_EXERCISES if defaults is None else defaults))

    def __len__(self) -> int:
        return len(self._exercises)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._exercises

    def get_tag(self, exercise_id: str) -> ExerciseTag | None:
        return self._tags.get(exercise_id)

    def get_exercise(self, exercise_id: str) -> Exercise | None:
        return self._exercises.get(exercise_id)

    def exercises_by_category(self, category: ExerciseCategory) -> tuple[Exercise, ...]:
        return self._by_category.get(category, ())

    def all_exercises(self) -> tuple[Exercise, ...]:
        return tuple(self._exercises.values())

    def tagged_ids(self) -> frozenset[str]:
        return frozenset(self._tags)

    def default_exercise_id(self, category_slot: str) -> str | None:
        return self._defaults.get(category_slot)
