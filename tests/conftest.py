from __future__ import annotations

from datetime import date

import pytest

from otl_engine.catalog import InMemoryCatalog
from otl_engine.models import (
    EnergySystem,
    Exercise,
    ExerciseCategory,
    ExerciseSet,
    ExerciseTag,
    MovementPattern,
    PlaneOfMotion,
    PlayerProfile,
    Position,
    PositionRelevance,
    SideBias,
    SideBiasRelevance,
    TrainingPhase,
    WorkoutDay,
    WorkoutExercise,
    WorkoutSection,
)
from otl_engine.presets import build_sample_catalog

TODAY = date(2026, 10, 19)


def make_sets(count: int, reps: str = "8-10", rest_seconds: int | None = 90) -> tuple[ExerciseSet, ...]:
    return tuple(
        ExerciseSet(set_number=n, target_reps=reps, rest_seconds=rest_seconds)
        for n in range(1, count + 1)
    )


def make_exercise(
    exercise_id: str,
    category_slot: str = "PRIMARY_SQUAT",
    sets: int = 3,
    reps: str = "8-10",
    rest_seconds: int | None = 90,
) -> WorkoutExercise:
    return WorkoutExercise(
        exercise_id=exercise_id,
        exercise_slot="1A",
        category_slot=category_slot,
        sets=make_sets(sets, reps, rest_seconds),
    )


def make_tag(
    exercise_id: str,
    pattern: MovementPattern = MovementPattern.SQUAT,
    energy: EnergySystem = EnergySystem.MIXED,
    complexity: int = 1,
    position: tuple[int, int, int] = (3, 3, 3),
    side: tuple[int, int] = (3, 3),
    plane: PlaneOfMotion = PlaneOfMotion.SAGITTAL,
) -> ExerciseTag:
    front, mid, back = position
    snake, dorito = side
    return ExerciseTag(
        exercise_id=exercise_id,
        movement_pattern=pattern,
        plane_of_motion=plane,
        energy_system=energy,
        complexity_level=complexity,
        position_relevance=PositionRelevance(front=front, mid=mid, back=back),
        side_bias_relevance=SideBiasRelevance(snake=snake, dorito=dorito),
    )


def make_profile(**overrides) -> PlayerProfile:
    fields = {
        "primary_position": Position.FRONT,
        "field_side_bias": SideBias.SNAKE,
        "current_phase": TrainingPhase.OFF_SEASON,
        "years_experience": 4,
        "program_start_date": TODAY,
    }
    fields.update(overrides)
    return PlayerProfile(**fields)


@pytest.fixture
def catalog() -> InMemoryCatalog:
    return build_sample_catalog()


@pytest.fixture
def small_catalog() -> InMemoryCatalog:
    """Warm-up, squat and conditioning exercises only."""
    return InMemoryCatalog(
        exercises=[
            Exercise(id="worlds_greatest_stretch", name="World's Greatest Stretch", category=ExerciseCategory.PREP),
            Exercise(id="goblet_squat", name="Goblet Squat", category=ExerciseCategory.SQUAT),
            Exercise(id="flying_10s", name="Flying 10s", category=ExerciseCategory.SPRINT),
            Exercise(id="bike_intervals", name="Bike Intervals", category=ExerciseCategory.ENERGY_SYSTEM),
        ],
        tags=[
            make_tag(
                "worlds_greatest_stretch",
                pattern=MovementPattern.LUNGE,
                energy=EnergySystem.OXIDATIVE,
                position=(4, 3, 3),
                side=(4, 3),
            ),
            make_tag("goblet_squat", position=(4, 4, 3), side=(4, 3)),
            make_tag(
                "flying_10s",
                pattern=MovementPattern.LOCOMOTION,
                energy=EnergySystem.PHOSPHAGEN,
                complexity=2,
                position=(5, 4, 2),
                side=(4, 4),
            ),
            make_tag(
                "bike_intervals",
                pattern=MovementPattern.LOCOMOTION,
                energy=EnergySystem.GLYCOLYTIC,
                position=(3, 4, 4),
            ),
        ],
    )


@pytest.fixture
def simple_day() -> WorkoutDay:
    """One warm-up, one primary squat (3x8-10), one conditioning exercise."""
    return WorkoutDay(
        id="day-1",
        day_number=1,
        name="Day 1",
        sections=(
            WorkoutSection(
                name="Warm-Up",
                exercises=(make_exercise("worlds_greatest_stretch", "PREP", sets=2, reps="5", rest_seconds=None),),
            ),
            WorkoutSection(
                name="Strength",
                exercises=(make_exercise("goblet_squat", "PRIMARY_SQUAT", sets=3, reps="8-10"),),
            ),
            WorkoutSection(
                name="Conditioning",
                exercises=(make_exercise("bike_intervals", "CONDITIONING", sets=4, reps="30 seconds", rest_seconds=60),),
            ),
        ),
    )
