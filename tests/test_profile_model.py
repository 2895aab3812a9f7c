import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.models.meal import MealRecord, MealType
from core.models.user import (
    ActivityLevel,
    DietaryPreference,
    FitnessGoal,
    Gender,
    UserProfile,
    WorkoutType,
)
from services.profile_store import decode_profile, encode_profile


def test_defaults():
    p = UserProfile()
    assert (p.weight, p.height, p.age) == (70.0, 175.0, 30)
    assert p.gender is Gender.male
    assert p.fitness_goal is FitnessGoal.maintain
    assert p.activity_level is ActivityLevel.moderate
    assert p.dietary_preference is DietaryPreference.normal
    assert p.recent_workouts == [WorkoutType.none]
    assert p.meal_records == []
    assert p.is_profile_setup is False


# ── recent workouts ─────────────────────────────────────────────────
def test_push_puts_newest_first():
    p = UserProfile()
    assert p.push_recent_workout(WorkoutType.cardio)
    assert p.push_recent_workout(WorkoutType.strength)
    assert p.recent_workouts == [WorkoutType.strength, WorkoutType.cardio, WorkoutType.none]
    assert p.latest_workout is WorkoutType.strength


def test_push_skips_duplicate_head():
    p = UserProfile(recent_workouts=[WorkoutType.yoga])
    assert p.push_recent_workout(WorkoutType.yoga) is False
    assert p.recent_workouts == [WorkoutType.yoga]


def test_push_allows_non_consecutive_repeat():
    p = UserProfile(recent_workouts=[WorkoutType.yoga])
    p.push_recent_workout(WorkoutType.hiit)
    p.push_recent_workout(WorkoutType.yoga)
    assert p.recent_workouts == [WorkoutType.yoga, WorkoutType.hiit, WorkoutType.yoga]


def test_push_caps_at_five():
    p = UserProfile()
    for w in [WorkoutType.cardio, WorkoutType.strength, WorkoutType.hiit,
              WorkoutType.yoga, WorkoutType.flexibility, WorkoutType.cardio]:
        p.push_recent_workout(w)
    assert p.recent_workouts == [
        WorkoutType.cardio, WorkoutType.flexibility, WorkoutType.yoga,
        WorkoutType.hiit, WorkoutType.strength,
    ]


def test_latest_workout_on_empty_history():
    assert UserProfile(recent_workouts=[]).latest_workout is WorkoutType.none


# ── meal records ────────────────────────────────────────────────────
def test_meal_records_sorted_newest_first():
    p = UserProfile()
    old = MealRecord(name="oats", calories=300, type=MealType.breakfast,
                     timestamp=datetime(2024, 5, 1, 8))
    new = MealRecord(name="salad", calories=450, type=MealType.lunch,
                     timestamp=datetime(2024, 5, 1, 12))
    p.add_meal_record(old)
    p.add_meal_record(new)
    assert p.meal_records == [old, new]
    assert p.sorted_meal_records() == [new, old]


def test_aware_timestamps_sort_with_naive_ones():
    p = UserProfile()
    noon_utc = datetime(2024, 5, 3, 12, tzinfo=timezone.utc)
    aware = MealRecord(name="shake", calories=200, type=MealType.snack, timestamp=noon_utc)
    now = MealRecord(name="toast", calories=250, type=MealType.breakfast)
    p.add_meal_record(aware)
    p.add_meal_record(now)

    assert aware.timestamp.tzinfo is None
    assert aware.timestamp == noon_utc.astimezone().replace(tzinfo=None)
    assert p.sorted_meal_records() == [now, aware]


def test_meal_record_is_frozen():
    m = MealRecord(name="oats", calories=300, type=MealType.breakfast)
    with pytest.raises(ValidationError):
        m.calories = 10
    assert MealRecord(name="a", calories=1, type=MealType.snack).id != m.id


# ── serialisation ───────────────────────────────────────────────────
def test_encoding_uses_camel_case_keys():
    p = UserProfile(
        activity_level=ActivityLevel.very_active,
        dietary_preference=DietaryPreference.gluten_free,
        is_profile_setup=True,
    )
    data = json.loads(encode_profile(p))
    assert data["activityLevel"] == "veryActive"
    assert data["dietaryPreference"] == "glutenFree"
    assert data["isProfileSetup"] is True
    assert data["recentWorkouts"] == ["none"]
    assert data["mealRecords"] == []


def test_round_trip_is_field_for_field_equal():
    p = UserProfile(weight=82.5, height=181, age=41, gender=Gender.female,
                    fitness_goal=FitnessGoal.lose,
                    recent_workouts=[WorkoutType.hiit, WorkoutType.none])
    p.add_meal_record(MealRecord(name="eggs", calories=220, protein=18, carbs=1,
                                 fat=15, type=MealType.breakfast,
                                 timestamp=datetime(2024, 5, 2, 7, 30)))
    again = decode_profile(encode_profile(p))
    assert again == p
    assert encode_profile(again) == encode_profile(p)


def test_missing_optional_lists_take_defaults():
    raw = json.dumps({
        "weight": 60, "height": 165, "age": 28, "gender": "female",
        "fitnessGoal": "gain", "activityLevel": "light",
        "dietaryPreference": "vegan", "isProfileSetup": True,
    })
    p = decode_profile(raw)
    assert p.recent_workouts == [WorkoutType.none]
    assert p.meal_records == []
    assert p.dietary_preference is DietaryPreference.vegan


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        json.dumps({"weight": -1}),
        json.dumps({"gender": "robot"}),
        json.dumps({"recentWorkouts": ["parkour"]}),
    ],
)
def test_corrupt_records_raise(raw):
    with pytest.raises(ValidationError):
        decode_profile(raw)


def test_assignment_is_validated():
    p = UserProfile()
    with pytest.raises(ValidationError):
        p.height = 0
