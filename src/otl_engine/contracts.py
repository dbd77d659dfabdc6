"""Boundary validation for collaborator records.

Profiles, templates and catalogs arrive as plain dicts (usually decoded
JSON). These pydantic models validate them in camelCase or snake_case and
convert them into the engine's frozen dataclasses. Validation is the only
place that raises: ``pydantic.ValidationError`` on malformed payloads.
Dates are the exception: a blank or unparseable date reads as "no date".
"""

import logging
from datetime import date
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

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

logger = logging.getLogger(__name__)

_DATE = TypeAdapter(date)


def _lenient_date(value: Any, field: str) -> date | None:
    """Parse a calendar date, or None when it is blank or unparseable."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        return _DATE.validate_python(value)
    except ValidationError:
        logger.debug("Ignoring unparseable %s: %r", field, value)
        return None


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# --- Profile ---


class UpcomingTournamentPayload(_Payload):
    id: str
    name: str
    event_date: date | None = Field(default=None, alias="date")
    location: str | None = None

    @field_validator("event_date", mode="before")
    @classmethod
    def lenient_event_date(cls, v: Any) -> date | None:
        return _lenient_date(v, "tournament date")


class PlayerProfilePayload(_Payload):
    id: str | None = None
    primary_position: Position
    field_side_bias: SideBias
    current_phase: TrainingPhase
    years_experience: float = Field(default=0, ge=0)
    current_division: Division = Division.RECREATIONAL
    next_tournament_date: date | None = None
    upcoming_tournaments: list[UpcomingTournamentPayload] = Field(default_factory=list)
    program_start_date: date | None = None
    training_days_per_week: int = Field(default=3, ge=1, le=7)

    @field_validator("next_tournament_date", "program_start_date", mode="before")
    @classmethod
    def lenient_dates(cls, v: Any, info: ValidationInfo) -> date | None:
        return _lenient_date(v, info.field_name)

    def to_profile(self) -> PlayerProfile:
        dated = []
        for t in self.upcoming_tournaments:
            if t.event_date is None:
                logger.debug("Skipping tournament %s without a date", t.id)
                continue
            dated.append(t)
        return PlayerProfile(
            id=self.id,
            primary_position=self.primary_position,
            field_side_bias=self.field_side_bias,
            current_phase=self.current_phase,
            years_experience=self.years_experience,
            current_division=self.current_division,
            next_tournament_date=self.next_tournament_date,
            upcoming_tournaments=tuple(
                UpcomingTournament(
                    id=t.id, name=t.name, event_date=t.event_date, location=t.location
                )
                for t in dated
            ),
            program_start_date=self.program_start_date,
            training_days_per_week=self.training_days_per_week,
        )


# --- Template ---


class ExerciseSetPayload(_Payload):
    set_number: int = Field(ge=1)
    target_reps: str
    weight: float | None = None
    actual_reps: int | None = None
    rest_seconds: int | None = Field(default=None, ge=0)
    completed: bool = False
    notes: str | None = None

    @field_validator("target_reps", mode="before")
    @classmethod
    def reps_as_text(cls, v: Any) -> Any:
        # Templates often write bare numbers: 10 -> "10"
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class WorkoutExercisePayload(_Payload):
    exercise_id: str = ""
    exercise_slot: str = ""
    category_slot: str
    sets: list[ExerciseSetPayload] = Field(default_factory=list)
    superset_group: str | None = None
    notes: str | None = None
    is_per_side: bool = False


class WorkoutSectionPayload(_Payload):
    name: str
    exercises: list[WorkoutExercisePayload] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("section name must not be empty")
        return v


class WorkoutDayPayload(_Payload):
    id: str
    day_number: int = Field(ge=1)
    name: str
    focus: str | None = None
    sections: list[WorkoutSectionPayload] = Field(default_factory=list)

    def to_day(self) -> WorkoutDay:
        return WorkoutDay(
            id=self.id,
            day_number=self.day_number,
            name=self.name,
            focus=self.focus,
            sections=tuple(
                WorkoutSection(
                    name=section.name,
                    exercises=tuple(_to_exercise(ex) for ex in section.exercises),
                )
                for section in self.sections
            ),
        )


def _to_exercise(payload: WorkoutExercisePayload) -> WorkoutExercise:
    return WorkoutExercise(
        exercise_id=payload.exercise_id,
        exercise_slot=payload.exercise_slot,
        category_slot=payload.category_slot,
        sets=tuple(
            ExerciseSet(
                set_number=s.set_number,
                target_reps=s.target_reps,
                weight=s.weight,
                actual_reps=s.actual_reps,
                rest_seconds=s.rest_seconds,
                completed=s.completed,
                notes=s.notes,
            )
            for s in payload.sets
        ),
        superset_group=payload.superset_group,
        notes=payload.notes,
        is_per_side=payload.is_per_side,
    )


# --- Catalog ---


class ExercisePayload(_Payload):
    id: str
    name: str
    category: ExerciseCategory
    description: str = ""
    video_url: str = ""
    equipment: list[str] = Field(default_factory=list)
    selection_pools: list[str] = Field(default_factory=list)


class PositionRelevancePayload(_Payload):
    front: int = Field(default=3, ge=1, le=5)
    mid: int = Field(default=3, ge=1, le=5)
    back: int = Field(default=3, ge=1, le=5)


class SideBiasRelevancePayload(_Payload):
    snake: int = Field(default=3, ge=1, le=5)
    dorito: int = Field(default=3, ge=1, le=5)


class ExerciseTagPayload(_Payload):
    exercise_id: str
    movement_pattern: MovementPattern
    plane_of_motion: PlaneOfMotion
    energy_system: EnergySystem
    complexity_level: int = Field(default=1, ge=1, le=3)
    position_relevance: PositionRelevancePayload = Field(default_factory=PositionRelevancePayload)
    side_bias_relevance: SideBiasRelevancePayload = Field(default_factory=SideBiasRelevancePayload)

    def to_tag(self) -> ExerciseTag:
        return ExerciseTag(
            exercise_id=self.exercise_id,
            movement_pattern=self.movement_pattern,
            plane_of_motion=self.plane_of_motion,
            energy_system=self.energy_system,
            complexity_level=self.complexity_level,
            position_relevance=PositionRelevance(**self.position_relevance.model_dump()),
            side_bias_relevance=SideBiasRelevance(**self.side_bias_relevance.model_dump()),
        )


class CatalogPayload(_Payload):
    exercises: list[ExercisePayload]
    tags: list[ExerciseTagPayload] = Field(default_factory=list)
    defaults: dict[str, str] | None = None

    @model_validator(mode="after")
    def tags_reference_exercises(self) -> "CatalogPayload":
        known = {exercise.id for exercise in self.exercises}
        unknown = sorted(tag.exercise_id for tag in self.tags if tag.exercise_id not in known)
        if unknown:
            raise ValueError(f"tags reference unknown exercises: {', '.join(unknown)}")
        return self

    def to_catalog(self) -> InMemoryCatalog:
        return InMemoryCatalog(
            exercises=(
                Exercise(
                    id=e.id,
                    name=e.name,
                    category=e.category,
                    description=e.description,
                    video_url=e.video_url,
                    equipment=tuple(e.equipment),
                    selection_pools=tuple(e.selection_pools),
                )
                for e in self.exercises
            ),
            tags=(tag.to_tag() for tag in self.tags),
            defaults=self.defaults,
        )


def parse_player_profile(data: dict[str, Any]) -> PlayerProfile:
    """Validate a profile record. Raises pydantic.ValidationError on invalid input."""
    return PlayerProfilePayload.model_validate(data).to_profile()


def parse_workout_day(data: dict[str, Any]) -> WorkoutDay:
    """Validate a template day. Raises pydantic.ValidationError on invalid input."""
    return WorkoutDayPayload.model_validate(data).to_day()


def parse_catalog(data: dict[str, Any]) -> InMemoryCatalog:
    """Validate a catalog document. Raises pydantic.ValidationError on invalid input."""
    return CatalogPayload.model_validate(data).to_catalog()
