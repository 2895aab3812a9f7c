from datetime import date, datetime, timezone

import pytest

from core.dashboard import build_dashboard
from core.intake import (
    daily_totals,
    daily_totals_records,
    intake_for_day,
    records_frame,
    remaining_calories,
)
from core.models.health import HealthMetrics
from core.models.meal import MealRecord, MealType
from core.models.user import UserProfile
from core.recommendation import recommend

MEALS = [
    MealRecord(name="oats", calories=350, protein=12, carbs=60, fat=7,
               type=MealType.breakfast, timestamp=datetime(2024, 5, 1, 8)),
    MealRecord(name="chicken salad", calories=480, protein=40, carbs=20, fat=22,
               type=MealType.lunch, timestamp=datetime(2024, 5, 1, 13)),
    MealRecord(name="pasta", calories=700, protein=25, carbs=95, fat=20,
               type=MealType.dinner, timestamp=datetime(2024, 5, 2, 19)),
]


# ── intake ──────────────────────────────────────────────────────────
def test_records_frame_newest_first():
    df = records_frame(MEALS)
    assert list(df["name"]) == ["pasta", "chicken salad", "oats"]


def test_empty_log():
    assert records_frame([]).empty
    assert daily_totals([]).empty
    assert daily_totals_records([]) == []
    assert intake_for_day([], date(2024, 5, 1)) == {
        "calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0,
    }


def test_daily_totals_group_by_day():
    rows = daily_totals_records(MEALS)
    assert [r["date"] for r in rows] == [date(2024, 5, 2), date(2024, 5, 1)]
    assert rows[1] == {
        "date": date(2024, 5, 1), "meals": 2,
        "calories": 830.0, "protein": 52.0, "carbs": 80.0, "fat": 29.0,
    }
    assert type(rows[0]["meals"]) is int


def test_intake_for_day():
    assert intake_for_day(MEALS, date(2024, 5, 2))["calories"] == 700.0
    assert intake_for_day(MEALS, date(2024, 4, 30))["calories"] == 0.0


def test_mixed_naive_and_aware_timestamps():
    aware = MealRecord(name="shake", calories=200, type=MealType.snack,
                       timestamp=datetime(2024, 5, 3, 12, tzinfo=timezone.utc))
    assert len(records_frame([*MEALS, aware])) == 4


def test_remaining_never_negative():
    assert remaining_calories(2500, 2000) == 0.0
    assert remaining_calories(500, 2000) == 1500.0


# ── dashboard ───────────────────────────────────────────────────────
def test_dashboard_figures():
    profile = UserProfile(meal_records=MEALS[:2])
    rec = recommend(profile)
    metrics = HealthMetrics(is_authorized=True, resting_calories=1000,
                            active_calories=300, steps=6000)
    dash = build_dashboard(profile, metrics, rec, today=date(2024, 5, 1))

    assert dash.total_burned == 1300
    assert dash.progress == pytest.approx(1300 / rec.calorie_target)
    assert dash.consumed_calories == 830
    assert dash.remaining_calories == pytest.approx(rec.calorie_target - 830)
    assert dash.bmi == pytest.approx(70 / 1.75 ** 2)
    assert dash.bmi_category == "normal"
    assert dash.protein_grams == pytest.approx(rec.protein_grams)
    assert dash.health_authorized is True


def test_dashboard_progress_clamped():
    profile = UserProfile()
    rec = recommend(profile)
    metrics = HealthMetrics(is_authorized=True, resting_calories=5000, active_calories=1000)
    assert build_dashboard(profile, metrics, rec).progress == 1.0


def test_dashboard_without_health_data():
    profile = UserProfile()
    dash = build_dashboard(profile, HealthMetrics(), recommend(profile))
    assert dash.progress == 0.0
    assert dash.health_authorized is False
    assert "totalBurned" in dash.model_dump(by_alias=True)
