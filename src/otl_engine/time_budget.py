"""Session time rail: estimate minutes per day and trim when over budget.

Exercises are tallied by coarse kind while sections are processed. The
tally is a frozen value folded across sections with ``+``. Reductions never
touch activation or primary work: they trim trailing sets from accessory
exercises, then shorten conditioning sections.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

from otl_engine.catalog import ExerciseCatalog
from otl_engine.models import SectionKind, SlotType, WorkoutSection
from otl_engine.rules import slot_type
from otl_engine.slots import classify_slot, section_kind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionTimeLimits:
    minimum: int = 45
    maximum: int = 90
    target: int = 60


DEFAULT_LIMITS = SessionTimeLimits()

# Minutes per exercise, by kind
TIME_WEIGHTS: dict[str, int] = {
    "activation": 2,
    "primary": 8,
    "secondary": 6,
    "accessory": 4,
    "conditioning": 10,
    "core": 4,
}


@dataclass(frozen=True)
class KindTally:
    activation: int = 0
    primary: int = 0
    secondary: int = 0
    accessory: int = 0
    conditioning: int = 0
    core: int = 0

    def __add__(self, other: KindTally) -> KindTally:
        if not isinstance(other, KindTally):
            return NotImplemented
        return KindTally(
            activation=self.activation + other.activation,
            primary=self.primary + other.primary,
            secondary=self.secondary + other.secondary,
            accessory=self.accessory + other.accessory,
            conditioning=self.conditioning + other.conditioning,
            core=self.core + other.core,
        )

    @property
    def total(self) -> int:
        return (
            self.activation + self.primary + self.secondary
            + self.accessory + self.conditioning + self.core
        )


_SLOT_TYPE_FIELD: dict[SlotType, str] = {
    SlotType.PRIMARY: "primary",
    SlotType.SECONDARY: "secondary",
    SlotType.ACCESSORY: "accessory",
    SlotType.CONDITIONING: "conditioning",
    SlotType.ACTIVATION: "activation",
}


def tally_section(section: WorkoutSection, catalog: ExerciseCatalog) -> KindTally:
    """Count one section's exercises by kind.

    Activation, conditioning and core sections count as a block; strength
    sections count each exercise by the slot type it classifies into.
    """
    count = len(section.exercises)
    kind = section_kind(section.name)
    if kind is SectionKind.ACTIVATION:
        return KindTally(activation=count)
    if kind is SectionKind.CONDITIONING:
        return KindTally(conditioning=count)
    if kind is SectionKind.CORE:
        return KindTally(core=count)

    counts = dict.fromkeys(_SLOT_TYPE_FIELD.values(), 0)
    for exercise in section.exercises:
        slot = classify_slot(section.name, exercise, catalog.get_tag(exercise.exercise_id))
        counts[_SLOT_TYPE_FIELD[slot_type(slot)]] += 1
    return KindTally(**counts)


def estimate_session_minutes(tally: KindTally) -> int:
    return (
        tally.activation * TIME_WEIGHTS["activation"]
        + tally.primary * TIME_WEIGHTS["primary"]
        + tally.secondary * TIME_WEIGHTS["secondary"]
        + tally.accessory * TIME_WEIGHTS["accessory"]
        + tally.conditioning * TIME_WEIGHTS["conditioning"]
        + tally.core * TIME_WEIGHTS["core"]
    )


@dataclass(frozen=True)
class TimeReduction:
    reduce_accessory_sets: int
    reduce_conditioning_volume: float  # fraction of conditioning exercises to drop
    notes: str


def time_reduction(
    estimated_minutes: int, limits: SessionTimeLimits = DEFAULT_LIMITS
) -> TimeReduction | None:
    """Staged reduction for an estimate over the maximum, else None."""
    if estimated_minutes <= limits.maximum:
        return None

    excess = estimated_minutes - limits.maximum
    if excess <= 10:
        return TimeReduction(1, 0.0, "Reduced accessory sets by 1 to fit time")
    if excess <= 20:
        return TimeReduction(1, 0.5, "Reduced accessory sets and conditioning volume")
    return TimeReduction(2, 0.5, "Significantly reduced accessories and conditioning to fit time")


def apply_time_reduction(
    sections: tuple[WorkoutSection, ...],
    catalog: ExerciseCatalog,
    reduction: TimeReduction,
) -> tuple[tuple[WorkoutSection, ...], tuple[str, ...]]:
    """Apply a reduction to assembled sections.

    Returns the new sections and one note per stage that actually changed
    something. Accessory exercises keep at least 2 sets; conditioning
    sections keep at least one exercise.
    """
    notes: list[str] = []

    if reduction.reduce_accessory_sets > 0:
        trimmed_any = False
        reduced: list[WorkoutSection] = []
        for section in sections:
            if section_kind(section.name) is not SectionKind.STRENGTH:
                reduced.append(section)
                continue
            exercises = []
            for exercise in section.exercises:
                slot = classify_slot(section.name, exercise, catalog.get_tag(exercise.exercise_id))
                if slot_type(slot) is SlotType.ACCESSORY and len(exercise.sets) > 2:
                    keep = max(2, len(exercise.sets) - reduction.reduce_accessory_sets)
                    exercise = replace(exercise, sets=exercise.sets[:keep])
                    trimmed_any = True
                exercises.append(exercise)
            reduced.append(replace(section, exercises=tuple(exercises)))
        sections = tuple(reduced)
        if trimmed_any:
            notes.append(f"Trimmed {reduction.reduce_accessory_sets} set(s) from accessory exercises")

    if reduction.reduce_conditioning_volume > 0:
        shortened_any = False
        reduced = []
        for section in sections:
            if section_kind(section.name) is SectionKind.CONDITIONING and section.exercises:
                keep = max(
                    1,
                    math.ceil(len(section.exercises) * (1 - reduction.reduce_conditioning_volume)),
                )
                if keep < len(section.exercises):
                    section = replace(section, exercises=section.exercises[:keep])
                    shortened_any = True
            reduced.append(section)
        sections = tuple(reduced)
        if shortened_any:
            percent = round(reduction.reduce_conditioning_volume * 100)
            notes.append(f"Cut conditioning volume by {percent}%")

    logger.info(
        "Applied time reduction",
        extra={"otl_reduction": reduction.notes, "otl_stages": len(notes)},
    )
    return sections, tuple(notes)
