"""Built-in catalog, template days and player profiles for quick runs."""

from __future__ import annotations

from datetime import date

from otl_engine.catalog import InMemoryCatalog
from otl_engine.models import (
    Division,
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
    UpcomingTournament,
    WorkoutDay,
    WorkoutExercise,
    WorkoutSection,
)

_C = ExerciseCategory
_M = MovementPattern
_P = PlaneOfMotion
_E = EnergySystem

# (id, name, category, equipment, selection pools)
_EXERCISES: list[tuple[str, str, ExerciseCategory, tuple[str, ...], tuple[str, ...]]] = [
    # Prep / activation
    ("worlds_greatest_stretch", "World's Greatest Stretch", _C.PREP, (), ("prep", "mobility")),
    ("ninety_ninety_hip_switch", "90/90 Hip Switch", _C.PREP, (), ("mobility",)),
    ("glute_bridge", "Glute Bridge", _C.PREP, (), ("activation",)),
    ("hip_flexor_curl", "Hip Flexor Curl", _C.PREP, ("Mini Band",), ("hip_flexor_prep",)),
    ("box_jump", "S/L Plyo Box Jump", _C.PREP, ("Plyo Box",), ("plyo_jump", "plyometric")),
    ("broad_jump", "Broad Jump", _C.PREP, (), ("plyometric",)),
    ("lateral_bound", "Lateral Bound", _C.PREP, (), ("plyometric",)),
    ("a_skip", "A-Skip", _C.PREP, (), ("speed_prep",)),
    ("copenhagen_plank", "Copenhagen Plank", _C.PREHAB, ("Bench",), ("mobility",)),
    # Squat
    ("goblet_squat", "Goblet Squat", _C.SQUAT, ("Dumbbell",), ()),
    ("front_squat", "Barbell Front Squat", _C.SQUAT, ("Barbell",), ()),
    ("box_squat", "Box Squat", _C.SQUAT, ("Barbell", "Box"), ()),
    ("squat_jump", "Squat Jump", _C.SQUAT, (), ("primary_squat_velocity",)),
    # Hinge
    ("trap_bar_deadlift", "Trap Bar Deadlift", _C.HINGE, ("Trap Bar",), ()),
    ("single_leg_rdl", "Single Leg RDL", _C.HINGE, ("Dumbbell",), ("single_leg_hinge",)),
    ("kettlebell_swing", "Kettlebell Swing", _C.HINGE, ("Kettlebell",), ()),
    # Lunge
    ("reverse_lunge", "Reverse Lunge", _C.LUNGE, ("Dumbbell",), ()),
    ("lateral_lunge", "Lateral Lunge", _C.LUNGE, ("Dumbbell",), ()),
    ("rfe_split_squat", "Rear Foot Elevated Split Squat", _C.LUNGE, ("Dumbbell", "Bench"), ()),
    # Press
    ("db_bench_press", "DB Bench Press", _C.PRESS, ("Dumbbell", "Bench"), ()),
    ("half_kneeling_landmine_press", "Half Kneeling Landmine Press", _C.PRESS, ("Landmine",), ()),
    ("push_up", "Push-Up", _C.PRESS, (), ()),
    ("single_arm_db_bench_press", "S/A DB Bench Press", _C.PRESS, ("Dumbbell", "Bench"), ()),
    # Pull
    ("chin_up", "Chin-Up", _C.PULL, ("Pull-Up Bar",), ()),
    ("chest_supported_row", "Chest Supported Row", _C.PULL, ("Dumbbell", "Bench"), ()),
    ("single_arm_db_row", "S/A DB Row", _C.PULL, ("Dumbbell",), ("single_arm_pull",)),
    ("band_pull_apart", "Band Pull-Apart", _C.PULL, ("Band",), ()),
    ("trx_row", "TRX Row", _C.PULL, ("TRX Straps",), ()),
    # Core
    ("pallof_press", "Pallof Press", _C.CORE, ("Cable",), ()),
    ("front_plank", "Front Plank", _C.CORE, (), ()),
    ("dead_bug", "Dead Bug", _C.CORE, (), ()),
    ("suitcase_carry", "Suitcase Carry", _C.CORE, ("Kettlebell",), ()),
    ("farmer_carry", "Farmer Carry", _C.CORE, ("Dumbbell",), ("loaded_carry",)),
    # Sprint / energy systems
    ("flying_10s", "Flying 10s", _C.SPRINT, (), ()),
    ("shuttle_5_10_5", "5-10-5 Shuttle", _C.SPRINT, ("Cones",), ()),
    ("repeat_sprint_30s", "30s Repeat Sprints", _C.SPRINT, (), ()),
    ("bike_intervals", "Bike Intervals", _C.ENERGY_SYSTEM, ("Air Bike",), ()),
    ("tempo_runs", "Tempo Runs", _C.ENERGY_SYSTEM, (), ()),
    ("sled_push", "Sled Push", _C.ENERGY_SYSTEM, ("Sled",), ()),
]

# (id, pattern, plane, energy system, complexity, (front, mid, back), (snake, dorito))
_TAGS: list[tuple[str, MovementPattern, PlaneOfMotion, EnergySystem, int, tuple[int, int, int], tuple[int, int]]] = [
    ("worlds_greatest_stretch", _M.LUNGE, _P.MULTI_PLANAR, _E.OXIDATIVE, 1, (4, 3, 3), (4, 3)),
    ("ninety_ninety_hip_switch", _M.ROTATION, _P.TRANSVERSE, _E.OXIDATIVE, 1, (4, 3, 3), (4, 4)),
    ("glute_bridge", _M.HIP_HINGE, _P.SAGITTAL, _E.OXIDATIVE, 1, (3, 3, 4), (3, 3)),
    ("hip_flexor_curl", _M.ISOMETRIC, _P.SAGITTAL, _E.OXIDATIVE, 1, (4, 3, 2), (4, 3)),
    ("box_jump", _M.PLYOMETRIC, _P.SAGITTAL, _E.PHOSPHAGEN, 2, (5, 4, 2), (3, 5)),
    ("broad_jump", _M.PLYOMETRIC, _P.SAGITTAL, _E.PHOSPHAGEN, 1, (5, 4, 2), (3, 4)),
    ("lateral_bound", _M.PLYOMETRIC, _P.FRONTAL, _E.PHOSPHAGEN, 2, (4, 5, 2), (5, 3)),
    ("a_skip", _M.LOCOMOTION, _P.SAGITTAL, _E.PHOSPHAGEN, 1, (4, 4, 2), (3, 3)),
    ("copenhagen_plank", _M.ISOMETRIC, _P.FRONTAL, _E.OXIDATIVE, 2, (3, 3, 3), (5, 2)),
    ("goblet_squat", _M.SQUAT, _P.SAGITTAL, _E.MIXED, 1, (4, 4, 3), (4, 3)),
    ("front_squat", _M.SQUAT, _P.SAGITTAL, _E.MIXED, 3, (4, 4, 3), (4, 4)),
    ("box_squat", _M.SQUAT, _P.SAGITTAL, _E.MIXED, 1, (3, 3, 3), (3, 3)),
    ("squat_jump", _M.SQUAT, _P.SAGITTAL, _E.PHOSPHAGEN, 2, (5, 4, 2), (3, 5)),
    ("trap_bar_deadlift", _M.HIP_HINGE, _P.SAGITTAL, _E.MIXED, 2, (4, 3, 4), (3, 4)),
    ("single_leg_rdl", _M.HIP_HINGE, _P.SAGITTAL, _E.MIXED, 2, (4, 4, 3), (4, 3)),
    ("kettlebell_swing", _M.HIP_HINGE, _P.SAGITTAL, _E.GLYCOLYTIC, 2, (4, 4, 3), (3, 4)),
    ("reverse_lunge", _M.LUNGE, _P.SAGITTAL, _E.MIXED, 1, (5, 4, 3), (5, 3)),
    ("lateral_lunge", _M.LUNGE, _P.FRONTAL, _E.MIXED, 1, (4, 5, 3), (5, 3)),
    ("rfe_split_squat", _M.LUNGE, _P.SAGITTAL, _E.MIXED, 3, (5, 4, 3), (5, 3)),
    ("db_bench_press", _M.PUSH, _P.SAGITTAL, _E.MIXED, 1, (3, 3, 4), (3, 4)),
    ("half_kneeling_landmine_press", _M.PUSH, _P.MULTI_PLANAR, _E.MIXED, 2, (3, 3, 5), (3, 4)),
    ("push_up", _M.PUSH, _P.SAGITTAL, _E.MIXED, 1, (3, 3, 4), (3, 4)),
    ("single_arm_db_bench_press", _M.PUSH, _P.SAGITTAL, _E.MIXED, 2, (3, 3, 4), (3, 4)),
    ("chin_up", _M.PULL, _P.SAGITTAL, _E.MIXED, 2, (3, 3, 4), (3, 3)),
    ("chest_supported_row", _M.PULL, _P.SAGITTAL, _E.MIXED, 1, (3, 3, 4), (3, 3)),
    ("single_arm_db_row", _M.PULL, _P.SAGITTAL, _E.MIXED, 1, (3, 3, 4), (4, 3)),
    ("band_pull_apart", _M.PULL, _P.TRANSVERSE, _E.OXIDATIVE, 1, (3, 3, 4), (3, 3)),
    ("trx_row", _M.PULL, _P.SAGITTAL, _E.MIXED, 1, (5, 5, 5), (5, 5)),
    ("pallof_press", _M.ANTI_ROTATION, _P.TRANSVERSE, _E.OXIDATIVE, 1, (3, 4, 5), (4, 4)),
    ("front_plank", _M.ISOMETRIC, _P.SAGITTAL, _E.OXIDATIVE, 1, (3, 3, 5), (4, 3)),
    ("dead_bug", _M.ANTI_ROTATION, _P.SAGITTAL, _E.OXIDATIVE, 1, (3, 3, 4), (3, 3)),
    ("suitcase_carry", _M.LOCOMOTION, _P.FRONTAL, _E.OXIDATIVE, 2, (3, 4, 4), (4, 3)),
    ("farmer_carry", _M.LOCOMOTION, _P.SAGITTAL, _E.OXIDATIVE, 1, (3, 3, 4), (3, 3)),
    ("flying_10s", _M.LOCOMOTION, _P.SAGITTAL, _E.PHOSPHAGEN, 2, (5, 4, 2), (4, 4)),
    ("shuttle_5_10_5", _M.LOCOMOTION, _P.FRONTAL, _E.PHOSPHAGEN, 2, (5, 5, 2), (4, 4)),
    ("repeat_sprint_30s", _M.LOCOMOTION, _P.SAGITTAL, _E.GLYCOLYTIC, 2, (4, 5, 3), (4, 4)),
    ("bike_intervals", _M.LOCOMOTION, _P.SAGITTAL, _E.GLYCOLYTIC, 1, (3, 4, 4), (3, 3)),
    ("tempo_runs", _M.LOCOMOTION, _P.SAGITTAL, _E.OXIDATIVE, 1, (2, 3, 5), (3, 3)),
    ("sled_push", _M.LOCOMOTION, _P.SAGITTAL, _E.GLYCOLYTIC, 1, (4, 4, 3), (3, 4)),
]


def build_sample_catalog() -> InMemoryCatalog:
    return InMemoryCatalog(
        exercises=[
            Exercise(id=ex_id, name=name, category=category, equipment=equipment, selection_pools=pools)
            for ex_id, name, category, equipment, pools in _EXERCISES
        ],
        tags=[
            ExerciseTag(
                exercise_id=ex_id,
                movement_pattern=pattern,
                plane_of_motion=plane,
                energy_system=energy,
                complexity_level=complexity,
                position_relevance=PositionRelevance(front=front, mid=mid, back=back),
                side_bias_relevance=SideBiasRelevance(snake=snake, dorito=dorito),
            )
            for ex_id, pattern, plane, energy, complexity, (front, mid, back), (snake, dorito) in _TAGS
        ],
    )


SAMPLE_CATALOG = build_sample_catalog()


# --- Template days ---


def _sets(count: int, reps: str, rest_seconds: int | None = None) -> tuple[ExerciseSet, ...]:
    return tuple(
        ExerciseSet(set_number=n, target_reps=reps, rest_seconds=rest_seconds)
        for n in range(1, count + 1)
    )


def _slot(
    label: str,
    category_slot: str,
    sets: tuple[ExerciseSet, ...],
    exercise_id: str = "",
    **kwargs,
) -> WorkoutExercise:
    return WorkoutExercise(
        exercise_id=exercise_id,
        exercise_slot=label,
        category_slot=category_slot,
        sets=sets,
        **kwargs,
    )


# Three-day split, day 1: slots only, the selector fills exercise ids.
THREE_DAY_DAY1 = WorkoutDay(
    id="otl-3day-day1",
    day_number=1,
    name="Training Day 1",
    focus="Squat & Press Focus",
    sections=(
        WorkoutSection(
            name="ACTIVATION",
            exercises=(
                _slot("A1", "HIP_FLEXOR_PREP", _sets(3, "6-8"), superset_group="A", notes="Hip Flexor Curls"),
                _slot("A2", "PLYO_JUMP", _sets(3, "6-8"), superset_group="A", notes="S/L Plyo Box Jumps"),
            ),
        ),
        WorkoutSection(
            name="STRENGTH",
            exercises=(
                _slot("1A", "PRIMARY_SQUAT", _sets(5, "5", 120), notes="Heavy Squat"),
                _slot("2A", "PRIMARY_PRESS", _sets(4, "8-10", 90), notes="Heavy Press"),
                _slot("3A", "PRIMARY_LUNGE", _sets(3, "8-10", 60), superset_group="3", is_per_side=True),
                _slot("3B", "HORIZONTAL_PULL", _sets(3, "12-15", 60), superset_group="3"),
                _slot("4A", "SINGLE_LEG_HINGE", _sets(3, "10-12", 60), superset_group="4", is_per_side=True),
                _slot("4B", "VERTICAL_PRESS", _sets(3, "12-15", 60), superset_group="4"),
            ),
        ),
        WorkoutSection(
            name="CORE",
            exercises=(
                _slot("5A", "CORE_VARIATION", _sets(3, "10")),
                _slot("5B", "ISO_HOLD", _sets(3, "30 seconds")),
            ),
        ),
        WorkoutSection(
            name="CONDITIONING",
            exercises=(
                _slot("6A", "SPRINT", _sets(6, "1", 60)),
                _slot("6B", "ENERGY_SYSTEM", _sets(4, "30 seconds", 90)),
            ),
        ),
    ),
)

# Hand-picked day with concrete exercise ids.
LOWER_BODY_DAY = WorkoutDay(
    id="otl-lower-day",
    day_number=2,
    name="Lower Body Power",
    focus="Hinge & Single-Leg Focus",
    sections=(
        WorkoutSection(
            name="Warm-Up",
            exercises=(
                _slot("A1", "PREP", _sets(2, "5"), exercise_id="worlds_greatest_stretch", is_per_side=True),
                _slot("A2", "ACTIVATION", _sets(2, "10"), exercise_id="glute_bridge"),
                _slot("A3", "PLYOMETRIC", _sets(3, "5"), exercise_id="broad_jump"),
            ),
        ),
        WorkoutSection(
            name="Main Strength",
            exercises=(
                _slot("1A", "PRIMARY_HINGE", _sets(4, "5", 150), exercise_id="trap_bar_deadlift"),
                _slot("2A", "LATERAL_LUNGE", _sets(3, "8-10", 60), exercise_id="lateral_lunge", is_per_side=True),
                _slot("2B", "SINGLE_ARM_VERTICAL_PULL", _sets(3, "10-12", 60), exercise_id="single_arm_db_row"),
                _slot("3A", "ACCESSORY_HINGE", _sets(3, "15", 45), exercise_id="kettlebell_swing"),
            ),
        ),
        WorkoutSection(
            name="Core",
            exercises=(
                _slot("4A", "STABILIZATION_CORE", _sets(3, "8"), exercise_id="dead_bug", is_per_side=True),
                _slot("4B", "LOADED_CARRY", _sets(3, "40 yards"), exercise_id="farmer_carry"),
            ),
        ),
        WorkoutSection(
            name="Energy Systems",
            exercises=(
                _slot("5A", "SPRINT", _sets(5, "1", 60), exercise_id="shuttle_5_10_5"),
                _slot("5B", "CONDITIONING", _sets(4, "45 seconds", 75), exercise_id="bike_intervals"),
                _slot("5C", "CONDITIONING", _sets(3, "5 minutes", 120), exercise_id="tempo_runs"),
            ),
        ),
    ),
)

TEMPLATES: dict[str, WorkoutDay] = {
    "three-day-day1": THREE_DAY_DAY1,
    "lower-body": LOWER_BODY_DAY,
}


# --- Player profiles ---

FRONT_SNAKE = PlayerProfile(
    id="front-snake",
    primary_position=Position.FRONT,
    field_side_bias=SideBias.SNAKE,
    current_phase=TrainingPhase.OFF_SEASON,
    years_experience=4,
    current_division=Division.D3,
    program_start_date=date(2026, 1, 5),
    training_days_per_week=3,
)

MID_DORITO = PlayerProfile(
    id="mid-dorito",
    primary_position=Position.MID,
    field_side_bias=SideBias.DORITO,
    current_phase=TrainingPhase.IN_SEASON,
    years_experience=1,
    current_division=Division.RECREATIONAL,
    program_start_date=date(2026, 3, 2),
    training_days_per_week=2,
)

BACK_BOTH = PlayerProfile(
    id="back-both",
    primary_position=Position.BACK,
    field_side_bias=SideBias.BOTH,
    current_phase=TrainingPhase.PRE_TOURNAMENT,
    years_experience=9,
    current_division=Division.D1,
    upcoming_tournaments=(
        UpcomingTournament(id="nxl-vegas", name="NXL Las Vegas Open", event_date=date(2027, 3, 12), location="Las Vegas, NV"),
        UpcomingTournament(id="nxl-texas", name="NXL Texas Major", event_date=date(2027, 4, 23), location="Dallas, TX"),
    ),
    program_start_date=date(2026, 9, 7),
    training_days_per_week=4,
)

PRESETS: dict[str, PlayerProfile] = {
    "front-snake": FRONT_SNAKE,
    "mid-dorito": MID_DORITO,
    "back-both": BACK_BOTH,
}
