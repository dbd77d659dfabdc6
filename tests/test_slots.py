"""Tests for the slot classifier."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from otl_engine.models import (
    EnergySystem,
    ExerciseTag,
    MovementPattern,
    PlaneOfMotion,
    SectionKind,
    SlotCategory,
    WorkoutExercise,
)
from otl_engine.slots import classify_slot, section_kind

from conftest import make_exercise, make_tag


def _classify(section: str, exercise_id: str, pattern: MovementPattern | None = None, slot: str = "") -> SlotCategory:
    tag = make_tag(exercise_id, pattern=pattern) if pattern else None
    return classify_slot(section, make_exercise(exercise_id, slot), tag)


class TestSectionKind:
    @pytest.mark.parametrize(
        "name, kind",
        [
            ("ACTIVATION", SectionKind.ACTIVATION),
            ("Speed Prep", SectionKind.ACTIVATION),
            ("Warm-Up", SectionKind.ACTIVATION),
            ("Mobility", SectionKind.ACTIVATION),
            ("CONDITIONING", SectionKind.CONDITIONING),
            ("Energy Systems", SectionKind.CONDITIONING),
            ("Cardio Finisher", SectionKind.CONDITIONING),
            ("Core", SectionKind.CORE),
            ("STRENGTH", SectionKind.STRENGTH),
            ("Accessory Block", SectionKind.STRENGTH),
        ],
    )
    def test_keywords(self, name, kind):
        assert section_kind(name) is kind


class TestSectionKeywords:
    def test_activation(self):
        assert _classify("ACTIVATION", "glute_bridge", MovementPattern.HIP_HINGE) is SlotCategory.ACTIVATION

    def test_mobility_by_exercise_text(self):
        assert _classify("Warm-Up", "worlds_greatest_stretch") is SlotCategory.MOBILITY

    def test_mobility_by_section_name(self):
        assert _classify("Mobility Prep", "glute_bridge") is SlotCategory.MOBILITY

    def test_bare_mobility_section_beats_tag(self):
        assert _classify("Mobility", "worlds_greatest_stretch", MovementPattern.LUNGE, "PREP") is SlotCategory.MOBILITY
        assert _classify("Mobility", "goblet_squat", MovementPattern.SQUAT) is SlotCategory.MOBILITY

    def test_conditioning_sprint(self):
        assert _classify("CONDITIONING", "repeat_sprint_30s") is SlotCategory.SPRINT
        assert _classify("Energy Systems", "shuttle_run") is SlotCategory.SPRINT

    def test_conditioning_default(self):
        assert _classify("CONDITIONING", "bike_intervals") is SlotCategory.CONDITIONING

    def test_section_beats_tag(self):
        assert _classify("Warm-Up", "goblet_squat", MovementPattern.SQUAT) is SlotCategory.ACTIVATION


class TestPatternBranches:
    @pytest.mark.parametrize(
        "exercise_id, pattern, expected",
        [
            ("trap_bar_deadlift", MovementPattern.HIP_HINGE, SlotCategory.PRIMARY_HINGE),
            ("single_leg_rdl", MovementPattern.HIP_HINGE, SlotCategory.SINGLE_LEG_HINGE),
            ("kettlebell_swing", MovementPattern.HIP_HINGE, SlotCategory.ACCESSORY_HINGE),
            ("squat_jump", MovementPattern.SQUAT, SlotCategory.PRIMARY_SQUAT_VELOCITY),
            ("goblet_squat", MovementPattern.SQUAT, SlotCategory.PRIMARY_SQUAT),
            ("front_squat", MovementPattern.SQUAT, SlotCategory.PRIMARY_SQUAT),
            ("box_squat", MovementPattern.SQUAT, SlotCategory.ACCESSORY_SQUAT),
            ("lateral_lunge", MovementPattern.LUNGE, SlotCategory.LATERAL_LUNGE),
            ("cossack_squat", MovementPattern.LUNGE, SlotCategory.LATERAL_LUNGE),
            ("reverse_lunge", MovementPattern.LUNGE, SlotCategory.PRIMARY_LUNGE),
            ("overhead_press", MovementPattern.PUSH, SlotCategory.VERTICAL_PRESS),
            ("half_kneeling_landmine_press", MovementPattern.PUSH, SlotCategory.VERTICAL_PRESS),
            ("db_bench_press", MovementPattern.PUSH, SlotCategory.HORIZONTAL_PRESS),
            ("push_up", MovementPattern.PUSH, SlotCategory.HORIZONTAL_PRESS),
            ("single_arm_dip", MovementPattern.PUSH, SlotCategory.SINGLE_ARM_PRESS),
            ("dip", MovementPattern.PUSH, SlotCategory.PRIMARY_PRESS),
            ("chin_up", MovementPattern.PULL, SlotCategory.VERTICAL_PULL),
            ("lat_pulldown", MovementPattern.PULL, SlotCategory.VERTICAL_PULL),
            ("single_arm_db_row", MovementPattern.PULL, SlotCategory.SINGLE_ARM_VERTICAL_PULL),
            ("chest_supported_row", MovementPattern.PULL, SlotCategory.HORIZONTAL_PULL),
            ("band_pull_apart", MovementPattern.PULL, SlotCategory.PRIMARY_PULL),
            ("pallof_press", MovementPattern.ANTI_ROTATION, SlotCategory.CORE_VARIATION),
            ("med_ball_scoop_toss", MovementPattern.ROTATION, SlotCategory.CORE_VARIATION),
            ("front_plank", MovementPattern.ISOMETRIC, SlotCategory.ISO_HOLD),
            ("broad_jump", MovementPattern.PLYOMETRIC, SlotCategory.PLYOMETRIC),
            ("farmer_carry", MovementPattern.LOCOMOTION, SlotCategory.LOADED_CARRY),
            ("sled_push", MovementPattern.LOCOMOTION, SlotCategory.CONDITIONING),
        ],
    )
    def test_branches(self, exercise_id, pattern, expected):
        assert _classify("STRENGTH", exercise_id, pattern) is expected

    def test_category_slot_text_is_used(self):
        assert _classify("STRENGTH", "db_press", MovementPattern.PUSH, slot="Overhead") is SlotCategory.VERTICAL_PRESS

    def test_isometric_outside_core_falls_back(self):
        assert _classify("Accessory", "wall_sit", MovementPattern.ISOMETRIC) is SlotCategory.ACCESSORY_SQUAT


class TestSectionDefaults:
    @pytest.mark.parametrize(
        "section, expected",
        [
            ("STRENGTH", SlotCategory.PRIMARY_SQUAT),
            ("Main Lifts", SlotCategory.PRIMARY_SQUAT),
            ("Accessory", SlotCategory.ACCESSORY_SQUAT),
            ("Auxiliary Work", SlotCategory.ACCESSORY_SQUAT),
            ("Core", SlotCategory.CORE_VARIATION),
            ("Finisher", SlotCategory.ACCESSORY_SQUAT),
        ],
    )
    def test_untagged_defaults(self, section, expected):
        assert _classify(section, "mystery_movement") is expected


_tags = st.builds(
    ExerciseTag,
    exercise_id=st.text(max_size=20),
    movement_pattern=st.sampled_from(list(MovementPattern)),
    plane_of_motion=st.sampled_from(list(PlaneOfMotion)),
    energy_system=st.sampled_from(list(EnergySystem)),
    complexity_level=st.integers(min_value=1, max_value=3),
)


class TestTotality:
    @given(
        section=st.text(max_size=30),
        exercise_id=st.text(max_size=30),
        category_slot=st.text(max_size=30),
        tag=st.one_of(st.none(), _tags),
    )
    def test_every_input_maps_to_one_category(self, section, exercise_id, category_slot, tag):
        exercise = WorkoutExercise(exercise_id=exercise_id, exercise_slot="1A", category_slot=category_slot)
        assert isinstance(classify_slot(section, exercise, tag), SlotCategory)
