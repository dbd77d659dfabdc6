"""Training cycle, experience band and tournament-distance helpers.

The primary lifts run a repeating 12-week cycle: 4 weeks eccentric,
4 weeks isometric, 4 weeks concentric. The taper shrinks volume as the
next tournament approaches.
"""

from __future__ import annotations

from datetime import date

from otl_engine.models import (
    CyclePhase,
    ExperienceLevel,
    PlayerProfile,
    TrainingCycle,
    UpcomingTournament,
)

CYCLE_SEQUENCE: tuple[CyclePhase, ...] = (
    CyclePhase.ECCENTRIC,
    CyclePhase.ISOMETRIC,
    CyclePhase.CONCENTRIC,
)

WEEKS_PER_PHASE = 4
WEEKS_PER_CYCLE = WEEKS_PER_PHASE * len(CYCLE_SEQUENCE)

# Taper bands: (max days until tournament, volume multiplier)
TAPER_BANDS: tuple[tuple[int, float], ...] = (
    (3, 0.3),  # active recovery only
    (7, 0.5),  # heavy taper
    (14, 0.75),  # moderate taper
)


def calculate_training_cycle(program_start: date, today: date) -> TrainingCycle:
    """Locate ``today`` in the 12-week cycle anchored at ``program_start``.

    A start date in the future counts as day 0 of the first cycle.
    """
    days_since_start = max(0, (today - program_start).days)
    weeks_total = days_since_start // 7

    phase_index = (weeks_total // WEEKS_PER_PHASE) % len(CYCLE_SEQUENCE)
    return TrainingCycle(
        current_phase=CYCLE_SEQUENCE[phase_index],
        week_in_phase=(weeks_total % WEEKS_PER_PHASE) + 1,
        cycle_number=(weeks_total // WEEKS_PER_CYCLE) + 1,
    )


def next_cycle_phase(phase: CyclePhase) -> CyclePhase:
    index = CYCLE_SEQUENCE.index(phase)
    return CYCLE_SEQUENCE[(index + 1) % len(CYCLE_SEQUENCE)]


def experience_level_from_years(years: float) -> ExperienceLevel:
    """Map years of play to an experience band (≤2 beginner, ≤5 intermediate)."""
    if years <= 2:
        return ExperienceLevel.BEGINNER
    if years <= 5:
        return ExperienceLevel.INTERMEDIATE
    return ExperienceLevel.ADVANCED


def days_until(event_date: date | None, today: date) -> int | None:
    """Whole days from today to the event, or None when there is no event.

    A date already past counts as day 0: a multi-day event may still be
    running.
    """
    if event_date is None:
        return None
    return max(0, (event_date - today).days)


def next_tournament(
    tournaments: tuple[UpcomingTournament, ...] | list[UpcomingTournament],
    today: date,
) -> UpcomingTournament | None:
    """Closest tournament on or after today."""
    upcoming = [t for t in tournaments if t.event_date >= today]
    if not upcoming:
        return None
    return min(upcoming, key=lambda t: t.event_date)


def tournament_date_for(profile: PlayerProfile, today: date) -> date | None:
    """The event date that drives tapering for this profile.

    An explicit ``next_tournament_date`` wins; otherwise the nearest entry in
    ``upcoming_tournaments``.
    """
    if profile.next_tournament_date is not None:
        return profile.next_tournament_date
    upcoming = next_tournament(profile.upcoming_tournaments, today)
    return upcoming.event_date if upcoming else None


def days_until_tournament(profile: PlayerProfile, today: date) -> int | None:
    return days_until(tournament_date_for(profile, today), today)


def taper_multiplier(days_until_event: int | None) -> float:
    """Volume multiplier for the given distance to the next tournament."""
    if days_until_event is None:
        return 1.0
    for max_days, multiplier in TAPER_BANDS:
        if days_until_event <= max_days:
            return multiplier
    return 1.0
