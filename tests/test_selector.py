"""Tests for exercise scoring, selection and substitution."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from otl_engine.catalog import InMemoryCatalog
from otl_engine.models import (
    EnergySystem,
    Exercise,
    ExerciseCategory,
    MovementPattern,
    PlaneOfMotion,
    Position,
    SideBias,
)
from otl_engine.presets import SAMPLE_CATALOG, THREE_DAY_DAY1
from otl_engine.selector import (
    SLOT_CATEGORIES,
    alternatives_for_slot,
    auto_select_exercises_for_day,
    categories_for_slot,
    complexity_ceiling,
    exercise_substitutions,
    pool_name_for_slot,
    recommendation_reasons,
    score_exercise_for_player,
    select_exercise_for_slot,
)
from otl_engine.periodization import experience_level_from_years

from conftest import make_profile, make_tag

ADVANCED = 9
INTERMEDIATE = 4
BEGINNER = 1


class TestScoring:
    def test_relevance_plus_affinity_bonuses(self):
        tag = make_tag(
            "reverse_lunge",
            pattern=MovementPattern.LUNGE,
            plane=PlaneOfMotion.FRONTAL,
            position=(5, 4, 3),
            side=(5, 3),
        )
        # 5 + 5, +2 front priority pattern, +1 snake priority pattern
        assert score_exercise_for_player(tag, Position.FRONT, SideBias.SNAKE) == 13

    def test_both_sides_average(self):
        tag = make_tag("x", pattern=MovementPattern.HIP_HINGE, plane=PlaneOfMotion.FRONTAL,
                       energy=EnergySystem.OXIDATIVE, position=(3, 3, 3), side=(5, 2))
        assert score_exercise_for_player(tag, Position.MID, SideBias.BOTH) == 3 + 3.5 + 1

    def test_energy_and_plane_bonus(self):
        tag = make_tag("x", pattern=MovementPattern.HIP_HINGE, plane=PlaneOfMotion.TRANSVERSE,
                       energy=EnergySystem.OXIDATIVE)
        # back: oxidative in conditioning focus, transverse in priority planes
        assert score_exercise_for_player(tag, Position.BACK, SideBias.SNAKE) == 3 + 3 + 1 + 1

    def test_reasons(self):
        profile = make_profile()
        tag = make_tag("broad_jump", pattern=MovementPattern.PLYOMETRIC, energy=EnergySystem.PHOSPHAGEN,
                       position=(5, 4, 2), side=(4, 4))
        assert recommendation_reasons(tag, profile) == (
            "High relevance for Front Players",
            "Great for snake side play",
            "Matches front movement needs",
            "Trains your position's energy demands",
        )

    def test_reasons_default(self):
        profile = make_profile(primary_position=Position.MID, field_side_bias=SideBias.BOTH)
        tag = make_tag("x", pattern=MovementPattern.HIP_HINGE, energy=EnergySystem.OXIDATIVE,
                       position=(5, 3, 5), side=(5, 5))
        assert recommendation_reasons(tag, profile) == ("Solid all-around exercise",)


class TestSlotMapping:
    def test_known_slot(self):
        assert categories_for_slot("CONDITIONING") == (ExerciseCategory.SPRINT, ExerciseCategory.ENERGY_SYSTEM)

    def test_raw_category_name(self):
        assert categories_for_slot("squat") == (ExerciseCategory.SQUAT,)

    def test_unknown_slot(self):
        assert categories_for_slot("NOT_A_SLOT") == ()

    def test_pool_names(self):
        assert pool_name_for_slot("PRIMARY_HINGE") == "primary_hinge"
        assert pool_name_for_slot("LUNGE") == "primary_lunge"
        assert pool_name_for_slot("SINGLE_ARM_VERTICAL_PULL") == "single_arm_pull"

    @pytest.mark.parametrize("years, ceiling", [(0, 1), (3, 2), (10, 3)])
    def test_complexity_ceiling(self, years, ceiling):
        assert complexity_ceiling(experience_level_from_years(years)) == ceiling


class TestSelectExercise:
    def test_best_score_wins(self):
        rec = select_exercise_for_slot("PRIMARY_SQUAT", make_profile(years_experience=ADVANCED), SAMPLE_CATALOG)
        assert rec.exercise_id == "squat_jump"
        assert rec.score == 11

    def test_beginner_ceiling(self):
        rec = select_exercise_for_slot("PRIMARY_SQUAT", make_profile(years_experience=BEGINNER), SAMPLE_CATALOG)
        assert rec.exercise_id == "goblet_squat"

    def test_exclusion_and_tie_keeps_catalog_order(self):
        profile = make_profile(years_experience=ADVANCED)
        rec = select_exercise_for_slot("PRIMARY_SQUAT", profile, SAMPLE_CATALOG, ["squat_jump"])
        # goblet_squat and front_squat both score 10; goblet_squat is listed first
        assert rec.exercise_id == "goblet_squat"

    def test_tie_break_is_insertion_order(self):
        catalog = InMemoryCatalog(
            exercises=[
                Exercise(id="b_squat", name="B", category=ExerciseCategory.SQUAT),
                Exercise(id="a_squat", name="A", category=ExerciseCategory.SQUAT),
            ],
            tags=[make_tag("a_squat"), make_tag("b_squat")],
        )
        rec = select_exercise_for_slot("ACCESSORY_SQUAT", make_profile(), catalog)
        assert rec.exercise_id == "b_squat"

    def test_strength_slots_skip_trx(self):
        profile = make_profile(primary_position=Position.BACK, years_experience=ADVANCED)
        rec = select_exercise_for_slot("HORIZONTAL_PULL", profile, SAMPLE_CATALOG)
        assert rec.exercise_id != "trx_row"
        alternatives = alternatives_for_slot("HORIZONTAL_PULL", profile, SAMPLE_CATALOG, limit=10)
        assert "trx_row" not in [a.exercise_id for a in alternatives]

    def test_selection_pool_candidates(self):
        catalog = InMemoryCatalog(
            exercises=[
                Exercise(
                    id="band_march",
                    name="Band March",
                    category=ExerciseCategory.CORE,
                    selection_pools=("hip_flexor_prep",),
                ),
            ],
        )
        rec = select_exercise_for_slot("HIP_FLEXOR_PREP", make_profile(), catalog)
        assert rec.exercise_id == "band_march"

    def test_untagged_candidates_score_neutral(self):
        catalog = InMemoryCatalog(
            exercises=[Exercise(id="sissy_squat", name="Sissy Squat", category=ExerciseCategory.SQUAT)],
        )
        rec = select_exercise_for_slot("ACCESSORY_SQUAT", make_profile(), catalog)
        assert rec.exercise_id == "sissy_squat"
        assert rec.score == 3
        assert rec.reasons == ("Standard exercise",)

    def test_weak_tagged_candidate_beats_earlier_untagged_one(self):
        catalog = InMemoryCatalog(
            exercises=[
                Exercise(id="band_march", name="Band March", category=ExerciseCategory.PREP),
                Exercise(id="hip_flexor_curl", name="Hip Flexor Curl", category=ExerciseCategory.PREP),
            ],
            # 2 + 2 with no affinity bonus for a front/snake player
            tags=[
                make_tag(
                    "hip_flexor_curl",
                    pattern=MovementPattern.ROTATION,
                    position=(2, 2, 2),
                    side=(2, 2),
                    plane=PlaneOfMotion.TRANSVERSE,
                )
            ],
        )
        rec = select_exercise_for_slot("HIP_FLEXOR_PREP", make_profile(), catalog)
        assert rec.exercise_id == "hip_flexor_curl"
        assert rec.score == 4

    def test_falls_back_to_default(self):
        catalog = InMemoryCatalog(
            exercises=[Exercise(id="farmer_carry", name="Farmer Carry", category=ExerciseCategory.CORE)],
            defaults={"SPRINT": "farmer_carry"},
        )
        rec = select_exercise_for_slot("SPRINT", make_profile(), catalog)
        assert rec.exercise_id == "farmer_carry"
        assert rec.reasons == ("Default exercise for this slot",)

    def test_default_respects_exclusion(self):
        catalog = InMemoryCatalog(
            exercises=[Exercise(id="farmer_carry", name="Farmer Carry", category=ExerciseCategory.CORE)],
            defaults={"SPRINT": "farmer_carry"},
        )
        assert select_exercise_for_slot("SPRINT", make_profile(), catalog, ["farmer_carry"]) is None

    def test_default_missing_from_catalog(self):
        catalog = InMemoryCatalog(exercises=[], defaults={"SPRINT": "flying_10s"})
        assert select_exercise_for_slot("SPRINT", make_profile(), catalog) is None

    def test_beginner_gets_none_when_everything_is_too_complex(self):
        # every sample hinge is complexity 2, including the configured default
        assert select_exercise_for_slot("PRIMARY_HINGE", make_profile(years_experience=BEGINNER), SAMPLE_CATALOG) is None

    @given(
        slot=st.sampled_from(sorted(SLOT_CATEGORIES)),
        years=st.integers(min_value=0, max_value=15),
        position=st.sampled_from(list(Position)),
        side_bias=st.sampled_from(list(SideBias)),
    )
    def test_never_exceeds_complexity_ceiling(self, slot, years, position, side_bias):
        profile = make_profile(primary_position=position, field_side_bias=side_bias, years_experience=years)
        rec = select_exercise_for_slot(slot, profile, SAMPLE_CATALOG)
        if rec is None:
            return
        tag = SAMPLE_CATALOG.get_tag(rec.exercise_id)
        if tag is not None:
            assert tag.complexity_level <= complexity_ceiling(experience_level_from_years(years))


class TestAlternatives:
    def test_excludes_current_and_limits(self):
        profile = make_profile(years_experience=ADVANCED)
        alternatives = alternatives_for_slot("PRIMARY_SQUAT", profile, SAMPLE_CATALOG, "squat_jump", limit=2)
        assert [a.exercise_id for a in alternatives] == ["goblet_squat", "front_squat"]

    def test_respects_ceiling(self):
        profile = make_profile(years_experience=BEGINNER)
        alternatives = alternatives_for_slot("PRIMARY_SQUAT", profile, SAMPLE_CATALOG, limit=10)
        assert [a.exercise_id for a in alternatives] == ["goblet_squat", "box_squat"]

    def test_auto_select_day_uses_distinct_exercises(self):
        exercises = [ex for section in THREE_DAY_DAY1.sections for ex in section.exercises]
        selections = auto_select_exercises_for_day(exercises, make_profile(years_experience=ADVANCED), SAMPLE_CATALOG)
        assert set(selections) <= {ex.category_slot for ex in exercises}
        assert len(set(selections.values())) == len(selections)
        assert selections["PRIMARY_SQUAT"] == "squat_jump"


class TestSubstitutions:
    def test_similar_exercises_first(self):
        subs = exercise_substitutions("goblet_squat", make_profile(), SAMPLE_CATALOG)
        assert subs == ["front_squat", "box_squat", "squat_jump"]

    def test_unknown_exercise(self):
        assert exercise_substitutions("nope", make_profile(), SAMPLE_CATALOG) == []
