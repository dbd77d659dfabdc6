"""Workout Assembler: personalize a template day for one player.

Pipeline, in order:

0. fill template slots that carry no exercise id through the selector
1. derive experience band, training cycle, tournament distance, modifiers
2. resolve the tournament rule (normal / alactic_only / removed)
3. filter each section by its kind (activation relevance, conditioning
   energy systems and tournament mode)
4. rewrite sets, reps, rest and tempo on every surviving exercise
5. drop exercises above ``max_complexity``
6. estimate session minutes and trim when over the configured maximum
7. build the TrainingInfo block

Every step is pure; the catalog and ``today`` are passed in.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from otl_engine.catalog import ExerciseCatalog
from otl_engine.models import (
    AssembledWorkout,
    CombinedModifiers,
    CyclePhase,
    EnergySystem,
    ExerciseSet,
    PlayerContext,
    PlayerProfile,
    SectionKind,
    SideBias,
    TournamentMode,
    TrainingInfo,
    WorkoutDay,
    WorkoutExercise,
    WorkoutModifiers,
    WorkoutSection,
)
from otl_engine.modifiers import apply_rest_modifier, calculate_workout_modifiers
from otl_engine.periodization import (
    calculate_training_cycle,
    days_until_tournament,
    experience_level_from_years,
)
from otl_engine.rules import (
    PHASE_RULES,
    POSITION_BIAS,
    SIDE_BIAS_EMPHASIS,
    TournamentRule,
    calculate_final_reps,
    calculate_final_sets,
    load_suggestion,
    tempo_prescription,
    tournament_rule,
)
from otl_engine.selector import select_exercise_for_slot
from otl_engine.slots import classify_slot, section_kind
from otl_engine.time_budget import (
    DEFAULT_LIMITS,
    KindTally,
    SessionTimeLimits,
    apply_time_reduction,
    estimate_session_minutes,
    tally_section,
    time_reduction,
)

logger = logging.getLogger(__name__)

ACTIVATION_MIN_RELEVANCE = 6
ACTIVATION_FLOOR_KEEP = 3
DEFAULT_BASE_REPS = "8"


# --- Section filters ---


def _relevance(catalog: ExerciseCatalog, exercise: WorkoutExercise, profile: PlayerProfile) -> float | None:
    tag = catalog.get_tag(exercise.exercise_id)
    if tag is None:
        return None
    return (
        tag.position_relevance.for_position(profile.primary_position)
        + tag.side_bias_relevance.for_side(profile.field_side_bias)
    )


def filter_activation(
    exercises: tuple[WorkoutExercise, ...],
    profile: PlayerProfile,
    catalog: ExerciseCatalog,
) -> tuple[WorkoutExercise, ...]:
    """Keep untagged exercises and tagged ones with combined relevance >= 6.

    When fewer than two survive (or fewer than the section holds, for
    one-exercise sections), fall back to the first three originals.
    """
    kept = tuple(
        exercise for exercise in exercises
        if (score := _relevance(catalog, exercise, profile)) is None
        or score >= ACTIVATION_MIN_RELEVANCE
    )
    if len(kept) < min(2, len(exercises)):
        return exercises[:ACTIVATION_FLOOR_KEEP]
    return kept


def filter_conditioning(
    exercises: tuple[WorkoutExercise, ...],
    profile: PlayerProfile,
    catalog: ExerciseCatalog,
    rule: TournamentRule,
) -> tuple[WorkoutExercise, ...]:
    mode = rule.conditioning_mode
    if mode is TournamentMode.REMOVED:
        return ()

    if mode is TournamentMode.ALACTIC_ONLY:
        # Untagged work has no known energy system, so it cannot qualify
        return tuple(
            exercise for exercise in exercises
            if (tag := catalog.get_tag(exercise.exercise_id)) is not None
            and tag.energy_system is EnergySystem.PHOSPHAGEN
        )

    focus = POSITION_BIAS[profile.primary_position].conditioning_focus
    kept = tuple(
        exercise for exercise in exercises
        if (tag := catalog.get_tag(exercise.exercise_id)) is None
        or tag.energy_system in focus
    )
    return kept or exercises[:1]


# --- Per-exercise modification ---


def modify_exercise(
    exercise: WorkoutExercise,
    section_name: str,
    catalog: ExerciseCatalog,
    modifiers: WorkoutModifiers,
    combined: CombinedModifiers,
) -> WorkoutExercise:
    """Rewrite one exercise's sets for the player's modifiers.

    Weight is never touched. The tempo note goes on the first set only.
    """
    if not exercise.sets:
        return exercise

    slot = classify_slot(section_name, exercise, catalog.get_tag(exercise.exercise_id))
    target_sets = calculate_final_sets(len(exercise.sets), slot, combined)
    reps = calculate_final_reps(exercise.sets[0].target_reps or DEFAULT_BASE_REPS, slot, combined)
    tempo = tempo_prescription(slot, combined.phase, combined.days_until_tournament)

    sets = [
        replace(
            exercise_set,
            target_reps=reps,
            rest_seconds=(
                apply_rest_modifier(exercise_set.rest_seconds, modifiers)
                if exercise_set.rest_seconds is not None
                else None
            ),
            notes=f"Tempo: {tempo}" if tempo and index == 0 else exercise_set.notes,
        )
        for index, exercise_set in enumerate(exercise.sets)
    ]

    if target_sets < len(sets):
        sets = sets[:target_sets]
    else:
        last = sets[-1]
        while len(sets) < target_sets:
            sets.append(_duplicate_set(last, len(sets) + 1))

    return replace(exercise, sets=tuple(sets))


def _duplicate_set(source: ExerciseSet, set_number: int) -> ExerciseSet:
    return replace(source, set_number=set_number, completed=False, notes=None)


# --- Template slot filling ---


def fill_empty_slots(day: WorkoutDay, profile: PlayerProfile, catalog: ExerciseCatalog) -> WorkoutDay:
    """Resolve exercises with no id through the selector.

    Ids already present in the day are excluded so a day never repeats an
    exercise. Slots the selector cannot fill stay as they are.
    """
    used = [
        exercise.exercise_id
        for section in day.sections
        for exercise in section.exercises
        if exercise.exercise_id
    ]
    changed = False
    sections = []
    for section in day.sections:
        exercises = []
        for exercise in section.exercises:
            if not exercise.exercise_id:
                pick = select_exercise_for_slot(exercise.category_slot, profile, catalog, used)
                if pick is None:
                    logger.debug("Left empty slot %s in section %s", exercise.category_slot, section.name)
                else:
                    exercise = replace(exercise, exercise_id=pick.exercise_id)
                    used.append(pick.exercise_id)
                    changed = True
            exercises.append(exercise)
        sections.append(replace(section, exercises=tuple(exercises)))
    if not changed:
        return day
    return replace(day, sections=tuple(sections))


# --- Assembly ---


def assemble_workout_for_player(
    day: WorkoutDay,
    profile: PlayerProfile,
    catalog: ExerciseCatalog,
    *,
    today: date | None = None,
    limits: SessionTimeLimits = DEFAULT_LIMITS,
) -> AssembledWorkout:
    """Personalize a template day. Never raises on advisory data."""
    today = today or date.today()
    day = fill_empty_slots(day, profile, catalog)

    experience_level = experience_level_from_years(profile.years_experience)
    training_cycle = (
        calculate_training_cycle(profile.program_start_date, today)
        if profile.program_start_date is not None
        else None
    )
    cycle_phase = training_cycle.current_phase if training_cycle else CyclePhase.ECCENTRIC
    days_out = days_until_tournament(profile, today)

    combined = CombinedModifiers(
        phase=cycle_phase,
        position=profile.primary_position,
        side_bias=profile.field_side_bias,
        days_until_tournament=days_out,
    )
    rule = tournament_rule(days_out)
    modifiers = calculate_workout_modifiers(
        profile.current_phase, experience_level, days_out, training_cycle
    )

    tally = KindTally()
    sections: list[WorkoutSection] = []
    for section in day.sections:
        kind = section_kind(section.name)
        exercises = section.exercises
        if kind is SectionKind.ACTIVATION:
            exercises = filter_activation(exercises, profile, catalog)
        elif kind is SectionKind.CONDITIONING:
            exercises = filter_conditioning(exercises, profile, catalog, rule)

        modified = []
        for exercise in exercises:
            tag = catalog.get_tag(exercise.exercise_id)
            if tag is None:
                logger.debug("No catalog tag for %s", exercise.exercise_id)
            elif tag.complexity_level > modifiers.max_complexity:
                continue
            modified.append(modify_exercise(exercise, section.name, catalog, modifiers, combined))

        processed = replace(section, exercises=tuple(modified))
        tally = tally + tally_section(processed, catalog)
        sections.append(processed)

    estimated = estimate_session_minutes(tally)
    final_sections = tuple(sections)
    reduction_note = None
    reduction = time_reduction(estimated, limits)
    if reduction is not None:
        final_sections, stage_notes = apply_time_reduction(final_sections, catalog, reduction)
        reduction_note = "; ".join((reduction.notes, *stage_notes))

    phase_rule = PHASE_RULES[cycle_phase]
    training_info = TrainingInfo(
        tempo=phase_rule.tempo,
        load_suggestion=str(load_suggestion(cycle_phase)),
        phase_description=phase_rule.description,
        estimated_minutes=min(estimated, limits.maximum),
        time_reduction_applied=reduction_note,
    )

    logger.debug(
        "Assembled workout",
        extra={
            "otl_day_id": day.id,
            "otl_cycle_phase": cycle_phase.value,
            "otl_tournament_mode": rule.conditioning_mode.value,
            "otl_estimated_minutes": estimated,
        },
    )

    return AssembledWorkout(
        day=replace(day, sections=final_sections),
        modifiers=modifiers,
        player_context=PlayerContext(
            position=profile.primary_position,
            side_bias=profile.field_side_bias,
            phase=profile.current_phase,
            experience_level=experience_level,
            training_cycle=training_cycle,
        ),
        training_info=training_info,
        combined_modifiers=combined,
        tournament_mode=rule.conditioning_mode,
    )


# --- Display helpers ---

FOCUS_AREA_LABELS: dict[str, str] = {
    "plyometric": "Explosive Power",
    "lunge": "Single-Leg Strength",
    "locomotion": "Speed & Agility",
    "squat": "Lower Body Strength",
    "rotation": "Rotational Power",
    "anti_rotation": "Core Stability",
    "isometric": "Positional Endurance",
    "hip_hinge": "Hip Power",
    "push": "Upper Body Push",
    "pull": "Upper Body Pull",
}


def workout_focus_areas(profile: PlayerProfile) -> list[str]:
    """Headline focus areas for the player, e.g. ["Explosive Power", ...]."""
    focus = [pattern.value for pattern in POSITION_BIAS[profile.primary_position].priority_patterns[:2]]
    if profile.field_side_bias is not SideBias.BOTH:
        focus.extend(SIDE_BIAS_EMPHASIS[profile.field_side_bias].mobility_focus[:1])

    labels: list[str] = []
    for key in dict.fromkeys(focus):
        labels.append(FOCUS_AREA_LABELS.get(key, key.replace("_", " ").title()))
    return labels
