"""Tests for session time estimation and reductions."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from otl_engine.models import WorkoutSection
from otl_engine.presets import SAMPLE_CATALOG
from otl_engine.time_budget import (
    KindTally,
    SessionTimeLimits,
    apply_time_reduction,
    estimate_session_minutes,
    tally_section,
    time_reduction,
)

from conftest import make_exercise


class TestKindTally:
    def test_addition_is_fieldwise(self):
        total = KindTally(activation=2, primary=1) + KindTally(primary=1, conditioning=3)
        assert total == KindTally(activation=2, primary=2, conditioning=3)
        assert total.total == 7

    def test_tally_is_immutable(self):
        tally = KindTally()
        with pytest.raises(AttributeError):
            tally.primary = 3

    def test_estimate_weights(self):
        tally = KindTally(activation=2, primary=1, secondary=1, accessory=2, conditioning=1, core=2)
        assert estimate_session_minutes(tally) == 2 * 2 + 8 + 6 + 2 * 4 + 10 + 2 * 4


class TestTallySection:
    def test_block_sections(self):
        warmup = WorkoutSection("Warm-Up", (make_exercise("glute_bridge"), make_exercise("broad_jump")))
        conditioning = WorkoutSection("Conditioning", (make_exercise("bike_intervals"),))
        core = WorkoutSection("Core", (make_exercise("dead_bug"),))
        assert tally_section(warmup, SAMPLE_CATALOG) == KindTally(activation=2)
        assert tally_section(conditioning, SAMPLE_CATALOG) == KindTally(conditioning=1)
        assert tally_section(core, SAMPLE_CATALOG) == KindTally(core=1)

    def test_strength_section_by_slot_type(self):
        section = WorkoutSection(
            "Strength",
            (
                make_exercise("goblet_squat", "PRIMARY_SQUAT"),
                make_exercise("db_bench_press", "PRIMARY_PRESS"),
                make_exercise("kettlebell_swing", "ACCESSORY_HINGE"),
            ),
        )
        assert tally_section(section, SAMPLE_CATALOG) == KindTally(primary=1, secondary=1, accessory=1)


class TestTimeReduction:
    def test_within_budget(self):
        assert time_reduction(90) is None

    @pytest.mark.parametrize(
        "minutes, accessory_sets, conditioning",
        [(91, 1, 0.0), (100, 1, 0.0), (101, 1, 0.5), (110, 1, 0.5), (111, 2, 0.5), (300, 2, 0.5)],
    )
    def test_bands(self, minutes, accessory_sets, conditioning):
        reduction = time_reduction(minutes)
        assert reduction.reduce_accessory_sets == accessory_sets
        assert reduction.reduce_conditioning_volume == conditioning

    def test_custom_limits(self):
        assert time_reduction(70, SessionTimeLimits(minimum=30, maximum=60, target=45)) is not None
        assert time_reduction(60, SessionTimeLimits(minimum=30, maximum=60, target=45)) is None


class TestApplyTimeReduction:
    def _sections(self):
        return (
            WorkoutSection("Activation", (make_exercise("glute_bridge", sets=4),)),
            WorkoutSection(
                "Strength",
                (
                    make_exercise("goblet_squat", "PRIMARY_SQUAT", sets=5),
                    make_exercise("kettlebell_swing", "ACCESSORY_HINGE", sets=4),
                    make_exercise("band_pull_apart", "ACCESSORY_PULL", sets=2),
                ),
            ),
            WorkoutSection(
                "Conditioning",
                (
                    make_exercise("flying_10s", "SPRINT"),
                    make_exercise("bike_intervals", "CONDITIONING"),
                    make_exercise("sled_push", "CONDITIONING"),
                ),
            ),
        )

    def test_trims_accessories_only(self):
        sections, notes = apply_time_reduction(self._sections(), SAMPLE_CATALOG, time_reduction(95))
        activation, strength, conditioning = sections
        assert len(activation.exercises[0].sets) == 4
        assert [len(ex.sets) for ex in strength.exercises] == [5, 3, 2]
        assert len(conditioning.exercises) == 3
        assert notes == ("Trimmed 1 set(s) from accessory exercises",)

    def test_halves_conditioning(self):
        sections, notes = apply_time_reduction(self._sections(), SAMPLE_CATALOG, time_reduction(130))
        strength, conditioning = sections[1], sections[2]
        assert [len(ex.sets) for ex in strength.exercises] == [5, 2, 2]
        assert [ex.exercise_id for ex in conditioning.exercises] == ["flying_10s", "bike_intervals"]
        assert notes == ("Trimmed 2 set(s) from accessory exercises", "Cut conditioning volume by 50%")

    def test_keeps_one_conditioning_exercise(self):
        sections = (WorkoutSection("Conditioning", (make_exercise("flying_10s", "SPRINT"),)),)
        reduced, notes = apply_time_reduction(sections, SAMPLE_CATALOG, time_reduction(130))
        assert len(reduced[0].exercises) == 1
        assert notes == ()

    @given(minutes=st.integers(min_value=91, max_value=1000))
    def test_reduction_never_empties_conditioning(self, minutes):
        reduced, _ = apply_time_reduction(self._sections(), SAMPLE_CATALOG, time_reduction(minutes))
        assert len(reduced[2].exercises) >= 1
