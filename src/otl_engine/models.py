"""Core data models for workout assembly.

Enumerations are ``str`` enums so they compare and serialize as their wire
values. Everything the engine receives or returns is a frozen dataclass;
assembly builds new objects instead of mutating its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class Position(str, Enum):
    BACK = "back"
    MID = "mid"
    FRONT = "front"


class SideBias(str, Enum):
    SNAKE = "snake"
    DORITO = "dorito"
    BOTH = "both"


class TrainingPhase(str, Enum):
    OFF_SEASON = "off_season"
    IN_SEASON = "in_season"
    PRE_TOURNAMENT = "pre_tournament"


class CyclePhase(str, Enum):
    """Phases of the 12-week primary-lift cycle, 4 weeks each."""

    ECCENTRIC = "eccentric"
    ISOMETRIC = "isometric"
    CONCENTRIC = "concentric"


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Division(str, Enum):
    RECREATIONAL = "recreational"
    D5 = "D5"
    D4 = "D4"
    D3 = "D3"
    D2 = "D2"
    D1 = "D1"
    PRO = "Pro"


class MovementPattern(str, Enum):
    HIP_HINGE = "hip_hinge"
    SQUAT = "squat"
    LUNGE = "lunge"
    PUSH = "push"
    PULL = "pull"
    ROTATION = "rotation"
    ANTI_ROTATION = "anti_rotation"
    LOCOMOTION = "locomotion"
    PLYOMETRIC = "plyometric"
    ISOMETRIC = "isometric"


class PlaneOfMotion(str, Enum):
    SAGITTAL = "sagittal"
    FRONTAL = "frontal"
    TRANSVERSE = "transverse"
    MULTI_PLANAR = "multi_planar"


class EnergySystem(str, Enum):
    PHOSPHAGEN = "phosphagen"  # 0-10s, max effort (shortest)
    GLYCOLYTIC = "glycolytic"  # 10-120s
    OXIDATIVE = "oxidative"  # 2+ min
    MIXED = "mixed"


class ExerciseCategory(str, Enum):
    PREP = "prep"
    HINGE = "hinge"
    SQUAT = "squat"
    LUNGE = "lunge"
    PRESS = "press"
    PULL = "pull"
    CORE = "core"
    SPRINT = "sprint"
    PREHAB = "prehab"
    ENERGY_SYSTEM = "energy_system"


class SlotCategory(str, Enum):
    """Structural role of an exercise within a training day."""

    PRIMARY_SQUAT = "PRIMARY_SQUAT"
    PRIMARY_SQUAT_VELOCITY = "PRIMARY_SQUAT_VELOCITY"
    ACCESSORY_SQUAT = "ACCESSORY_SQUAT"
    PRIMARY_HINGE = "PRIMARY_HINGE"
    HEAVY_HINGE = "HEAVY_HINGE"
    SINGLE_LEG_HINGE = "SINGLE_LEG_HINGE"
    ACCESSORY_HINGE = "ACCESSORY_HINGE"
    PRIMARY_LUNGE = "PRIMARY_LUNGE"
    LATERAL_LUNGE = "LATERAL_LUNGE"
    LUNGE = "LUNGE"
    PRIMARY_PRESS = "PRIMARY_PRESS"
    SECONDARY_PRESS = "SECONDARY_PRESS"
    VERTICAL_PRESS = "VERTICAL_PRESS"
    HORIZONTAL_PRESS = "HORIZONTAL_PRESS"
    SINGLE_ARM_PRESS = "SINGLE_ARM_PRESS"
    ACCESSORY_PRESS = "ACCESSORY_PRESS"
    PRIMARY_PULL = "PRIMARY_PULL"
    HORIZONTAL_PULL = "HORIZONTAL_PULL"
    VERTICAL_PULL = "VERTICAL_PULL"
    SINGLE_ARM_VERTICAL_PULL = "SINGLE_ARM_VERTICAL_PULL"
    ACCESSORY_PULL = "ACCESSORY_PULL"
    CORE_VARIATION = "CORE_VARIATION"
    ISO_HOLD = "ISO_HOLD"
    STABILIZATION_CORE = "STABILIZATION_CORE"
    WEIGHTED_CORE = "WEIGHTED_CORE"
    ENERGY_SYSTEM = "ENERGY_SYSTEM"
    SPRINT = "SPRINT"
    CONDITIONING = "CONDITIONING"
    PLYOMETRIC = "PLYOMETRIC"
    LOADED_CARRY = "LOADED_CARRY"
    PREP = "PREP"
    ACTIVATION = "ACTIVATION"
    MOBILITY = "MOBILITY"


class SlotType(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ACCESSORY = "accessory"
    CONDITIONING = "conditioning"
    ACTIVATION = "activation"


class TournamentMode(str, Enum):
    NORMAL = "normal"
    ALACTIC_ONLY = "alactic_only"
    REMOVED = "removed"


class SectionKind(str, Enum):
    ACTIVATION = "activation"
    CONDITIONING = "conditioning"
    CORE = "core"
    STRENGTH = "strength"


# --- Player profile ---


@dataclass(frozen=True)
class UpcomingTournament:
    id: str
    name: str
    event_date: date
    location: str | None = None


@dataclass(frozen=True)
class PlayerProfile:
    """Immutable athlete profile, owned by the profile store."""

    primary_position: Position
    field_side_bias: SideBias
    current_phase: TrainingPhase
    years_experience: float = 0
    current_division: Division = Division.RECREATIONAL
    next_tournament_date: date | None = None
    upcoming_tournaments: tuple[UpcomingTournament, ...] = ()
    program_start_date: date | None = None
    training_days_per_week: int = 3
    id: str | None = None


@dataclass(frozen=True)
class TrainingCycle:
    current_phase: CyclePhase
    week_in_phase: int  # 1-4
    cycle_number: int  # 1-based


# --- Templates ---


@dataclass(frozen=True)
class ExerciseSet:
    set_number: int
    target_reps: str  # "8-10", "4RM", "25 seconds", ...
    weight: float | None = None
    actual_reps: int | None = None
    rest_seconds: int | None = None
    completed: bool = False
    notes: str | None = None


@dataclass(frozen=True)
class WorkoutExercise:
    exercise_id: str
    exercise_slot: str  # display label, e.g. "1A"
    category_slot: str  # coarse grouping, e.g. "PRIMARY_SQUAT" or "squat"
    sets: tuple[ExerciseSet, ...] = ()
    superset_group: str | None = None
    notes: str | None = None
    is_per_side: bool = False


@dataclass(frozen=True)
class WorkoutSection:
    name: str
    exercises: tuple[WorkoutExercise, ...] = ()


@dataclass(frozen=True)
class WorkoutDay:
    id: str
    day_number: int
    name: str
    sections: tuple[WorkoutSection, ...] = ()
    focus: str | None = None


# --- Catalog ---


@dataclass(frozen=True)
class Exercise:
    id: str
    name: str
    category: ExerciseCategory
    description: str = ""
    video_url: str = ""
    equipment: tuple[str, ...] = ()
    selection_pools: tuple[str, ...] = ()


@dataclass(frozen=True)
class PositionRelevance:
    front: int = 3
    mid: int = 3
    back: int = 3

    def for_position(self, position: Position) -> int:
        return getattr(self, position.value)


@dataclass(frozen=True)
class SideBiasRelevance:
    snake: int = 3
    dorito: int = 3

    def for_side(self, side_bias: SideBias) -> float:
        if side_bias is SideBias.BOTH:
            return (self.snake + self.dorito) / 2
        return getattr(self, side_bias.value)


@dataclass(frozen=True)
class ExerciseTag:
    exercise_id: str
    movement_pattern: MovementPattern
    plane_of_motion: PlaneOfMotion
    energy_system: EnergySystem
    complexity_level: int = 1  # 1-3
    position_relevance: PositionRelevance = field(default_factory=PositionRelevance)
    side_bias_relevance: SideBiasRelevance = field(default_factory=SideBiasRelevance)


# --- Engine output ---


@dataclass(frozen=True)
class CombinedModifiers:
    phase: CyclePhase
    position: Position
    side_bias: SideBias
    days_until_tournament: int | None = None


@dataclass(frozen=True)
class WorkoutModifiers:
    volume_multiplier: float
    intensity_multiplier: float
    rest_multiplier: float
    session_length_multiplier: float
    max_complexity: int
    exercise_variety: int
    cycle_phase: CyclePhase | None = None
    tempo_focus: str | None = None
    primary_exercise_emphasis: str | None = None


@dataclass(frozen=True)
class PlayerContext:
    position: Position
    side_bias: SideBias
    phase: TrainingPhase
    experience_level: ExperienceLevel
    training_cycle: TrainingCycle | None = None


@dataclass(frozen=True)
class TrainingInfo:
    tempo: str | None
    load_suggestion: str
    phase_description: str
    estimated_minutes: int
    time_reduction_applied: str | None = None


@dataclass(frozen=True)
class AssembledWorkout:
    day: WorkoutDay
    modifiers: WorkoutModifiers
    player_context: PlayerContext
    training_info: TrainingInfo
    combined_modifiers: CombinedModifiers
    tournament_mode: TournamentMode = TournamentMode.NORMAL

    @property
    def sections(self) -> tuple[WorkoutSection, ...]:
        return self.day.sections

    def section(self, name: str) -> WorkoutSection | None:
        """Find a section by case-insensitive name."""
        wanted = name.lower()
        for section in self.day.sections:
            if section.name.lower() == wanted:
                return section
        return None


@dataclass(frozen=True)
class ExerciseRecommendation:
    exercise_id: str
    exercise: Exercise
    score: float
    reasons: tuple[str, ...] = ()
