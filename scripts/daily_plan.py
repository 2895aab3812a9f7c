"""
scripts/daily_plan.py
────────────────────────────────────────────────────────────────────────
Print today's advice and meal plan for the stored profile:

    python -m scripts.daily_plan             # stored profile only

Pull health data first (weight / height / latest workout are synced
into the profile and saved):

    python -m scripts.daily_plan --refresh
"""
from __future__ import annotations

import asyncio
from argparse import ArgumentParser

from dotenv import load_dotenv

from core.dashboard import build_dashboard
from services.advisor import AdvisorSnapshot, NutritionAdvisor
from services.db import init_models, sessionmaker
from services.health import HealthMetricsAdapter, SqlHealthSource
from services.profile_store import ProfileStore

load_dotenv()


def _render(snap: AdvisorSnapshot) -> str:
    rec = snap.recommendation
    lines = [
        f"{rec.title}",
        f"  target   {rec.calorie_target:7.0f} kcal",
        f"  protein  {rec.protein_percentage:5.0%}  {rec.protein_grams:6.0f} g",
        f"  carbs    {rec.carbs_percentage:5.0%}  {rec.carbs_grams:6.0f} g",
        f"  fat      {rec.fat_percentage:5.0%}  {rec.fat_grams:6.0f} g",
    ]
    if rec.special_note:
        lines.append(f"  note     {rec.special_note}")

    lines.append("")
    for meal in snap.meal_plan:
        lines.append(f"{meal.type.value:<10}{meal.calories:6.0f} kcal  {meal.description}")
        lines.extend(f"    · {item}" for item in meal.food_items)

    dash = build_dashboard(snap.profile, snap.metrics, rec)
    lines.append("")
    lines.append(
        f"burned {dash.total_burned:.0f} kcal ({dash.progress:.0%} of target) · "
        f"steps {dash.steps} · BMI {dash.bmi:.1f} ({dash.bmi_category})"
    )
    return "\n".join(lines)


async def _async_main() -> None:
    ap = ArgumentParser()
    ap.add_argument("--refresh", action="store_true", help="sync health data before planning")
    args = ap.parse_args()

    await init_models()
    sessions = await sessionmaker()
    advisor = NutritionAdvisor(
        ProfileStore(sessions),
        HealthMetricsAdapter(SqlHealthSource(sessions)),
    )
    snap = await (advisor.refresh() if args.refresh else advisor.current())

    if not snap.profile.is_profile_setup:
        print("· profile setup incomplete – showing advice for the default profile")
    print(_render(snap))


if __name__ == "__main__":  # pragma: no cover
    asyncio.run(_async_main())
