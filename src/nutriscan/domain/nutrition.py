"""Nutrition record returned by the estimation service."""

import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

_FIRST_INTEGER = re.compile(r"\d+")

DEFAULT_SERVING_GRAMS = 100.0
CALORIE_BAR_SCALE_KCAL = 800.0


class NutritionRecord(BaseModel):
    """Structured nutrition estimate for a single food or meal."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    food_name: str = Field(alias="foodName")
    serving_size: str = Field(alias="servingSize")
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float = Field(ge=0)
    sugar: float = Field(ge=0)
    health_tip: str = Field(alias="healthTip")


@dataclass(frozen=True)
class MacroSlice:
    """One segment of the macro distribution chart."""

    name: str
    grams: float
    color: str


@dataclass(frozen=True)
class MacroBreakdown:
    """Protein, carbs and fat proportions for the chart."""

    slices: tuple[MacroSlice, ...]

    @property
    def total(self) -> float:
        return sum(item.grams for item in self.slices)

    @property
    def active(self) -> tuple[MacroSlice, ...]:
        """Slices with a positive amount, in chart order."""
        return tuple(item for item in self.slices if item.grams > 0)

    @property
    def center_label(self) -> str:
        return f"{round(self.total)}g"


def macro_breakdown(record: NutritionRecord) -> MacroBreakdown:
    """Return the macro slices shown in the distribution chart."""
    return MacroBreakdown(
        slices=(
            MacroSlice("Protein", record.protein, "#34d399"),
            MacroSlice("Carbs", record.carbs, "#60a5fa"),
            MacroSlice("Fat", record.fat, "#fbbf24"),
        )
    )


def serving_grams(serving_size: str) -> float:
    """Return the first integer in the serving text, or 100 when absent."""
    match = _FIRST_INTEGER.search(serving_size)
    if match is None:
        return DEFAULT_SERVING_GRAMS
    return float(match.group()) or DEFAULT_SERVING_GRAMS


def energy_density(record: NutritionRecord) -> float:
    """Calories per gram of the serving."""
    return record.calories / serving_grams(record.serving_size)


def calorie_bar_percent(record: NutritionRecord) -> float:
    """Width of the calorie bar, scaled against an 800 kcal meal."""
    return min(record.calories / CALORIE_BAR_SCALE_KCAL * 100, 100.0)
