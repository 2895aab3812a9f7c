"""
Load health samples exported from a device into `health_samples`.

Usage
-----

    python -m scripts.import_health path/to/export.json

The file holds two lists (either may be omitted):

    {
      "quantities": [
        {"kind": "stepCount", "value": 4200,
         "start": "2024-05-01T08:00:00", "end": "2024-05-01T09:00:00"}
      ],
      "workouts": [
        {"activityType": "running", "start": "...", "end": "...",
         "durationSeconds": 1800, "energyKcal": 250}
      ]
    }
"""
from __future__ import annotations

import argparse
import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from core.models.health import WorkoutSample
from services.db import HealthSample, init_models, session_scope
from services.health import HealthKind

load_dotenv()


class QuantitySample(BaseModel):
    kind: HealthKind
    value: float = Field(..., ge=0)
    start: datetime
    end: datetime

    @field_validator("kind")
    @classmethod
    def _not_workout(cls, kind: HealthKind) -> HealthKind:
        if kind is HealthKind.workout:
            raise ValueError("workouts belong in the 'workouts' list")
        return kind


class HealthExport(BaseModel):
    quantities: List[QuantitySample] = []
    workouts: List[WorkoutSample] = []


def _rows(export: HealthExport) -> list[HealthSample]:
    rows = [
        HealthSample(kind=q.kind.value, value=q.value, start_at=q.start, end_at=q.end)
        for q in export.quantities
    ]
    rows += [
        HealthSample(
            kind=HealthKind.workout.value,
            value=w.duration_seconds,
            start_at=w.start,
            end_at=w.end,
            activity_type=w.activity_type,
            energy_kcal=w.energy_kcal,
        )
        for w in export.workouts
    ]
    return rows


async def _import(export: HealthExport) -> int:
    await init_models()
    rows = _rows(export)
    async with session_scope() as db:
        db.add_all(rows)
        await db.commit()
    return len(rows)


def _load_json(path: Path) -> HealthExport:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("export file must contain a JSON object")
    return HealthExport.model_validate(data)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("file", type=Path, help="JSON export with quantities / workouts")
    args = parser.parse_args()

    export = _load_json(args.file)
    count = asyncio.run(_import(export))
    print(f"✓ imported {count} health samples")


if __name__ == "__main__":
    main()
