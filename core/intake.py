"""
Meal-log summaries.

The log is small (one user), but pandas keeps the per-day grouping the
same shape the history views expect: one row per date, newest first.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

import pandas as pd

from core.models.meal import MealRecord


TOTAL_COLUMNS = ["calories", "protein", "carbs", "fat"]


def _empty_totals() -> Dict[str, float]:
    return {k: 0.0 for k in TOTAL_COLUMNS}


def records_frame(records: List[MealRecord]) -> pd.DataFrame:
    """Meal log as a DataFrame sorted by timestamp, newest first."""
    if not records:
        return pd.DataFrame(columns=["id", "name", "type", "timestamp", *TOTAL_COLUMNS])

    df = pd.DataFrame(
        [
            {
                "id": str(r.id),
                "name": r.name,
                "type": r.type.value,
                "timestamp": r.timestamp,
                "calories": r.calories,
                "protein": r.protein,
                "carbs": r.carbs,
                "fat": r.fat,
            }
            for r in records
        ]
    )
    return df.sort_values("timestamp", ascending=False, ignore_index=True)


def daily_totals(records: List[MealRecord]) -> pd.DataFrame:
    df = records_frame(records)
    if df.empty:
        return pd.DataFrame(columns=["date", "meals", *TOTAL_COLUMNS])

    df["date"] = pd.to_datetime(df["timestamp"]).dt.date
    grouped = df.groupby("date")
    out = grouped[TOTAL_COLUMNS].sum()
    out["meals"] = grouped.size()
    out = out.reset_index().sort_values("date", ascending=False, ignore_index=True)
    return out[["date", "meals", *TOTAL_COLUMNS]]


def intake_for_day(records: List[MealRecord], day: date) -> Dict[str, float]:
    totals = daily_totals(records)
    row = totals[totals["date"] == day]
    if row.empty:
        return _empty_totals()
    first = row.iloc[0]
    return {k: float(first[k]) for k in TOTAL_COLUMNS}


def remaining_calories(consumed: float, target: float) -> float:
    return max(target - consumed, 0.0)


def daily_totals_records(records: List[MealRecord]) -> List[Dict[str, Any]]:
    """`daily_totals` as plain Python rows (no numpy scalars)."""
    return [
        {
            "date": row["date"],
            "meals": int(row["meals"]),
            **{k: float(row[k]) for k in TOTAL_COLUMNS},
        }
        for row in daily_totals(records).to_dict("records")
    ]
