from __future__ import annotations

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel

from core.nutrition_calc import (
    CARBS_KCAL_PER_G,
    FAT_KCAL_PER_G,
    PROTEIN_KCAL_PER_G,
    grams_from_calories,
)


class NutritionRecommendation(BaseModel):
    """Derived advice; rebuilt on demand and never persisted."""

    title: str
    calorie_target: float
    protein_percentage: float
    carbs_percentage: float
    fat_percentage: float
    special_note: str = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @computed_field(alias="proteinGrams")  # type: ignore[misc]
    @property
    def protein_grams(self) -> float:
        return grams_from_calories(
            self.calorie_target * self.protein_percentage, PROTEIN_KCAL_PER_G
        )

    @computed_field(alias="carbsGrams")  # type: ignore[misc]
    @property
    def carbs_grams(self) -> float:
        return grams_from_calories(
            self.calorie_target * self.carbs_percentage, CARBS_KCAL_PER_G
        )

    @computed_field(alias="fatGrams")  # type: ignore[misc]
    @property
    def fat_grams(self) -> float:
        return grams_from_calories(self.calorie_target * self.fat_percentage, FAT_KCAL_PER_G)
