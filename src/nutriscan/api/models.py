"""Request and response models for the JSON API."""

from typing import Literal

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Body of a JSON analysis request."""

    query: str = ""


class DisplayValues(BaseModel):
    """Derived dashboard figures for a record."""

    macro_total_g: float = Field(serialization_alias="macroTotalG")
    energy_density: float = Field(serialization_alias="energyDensity")
    calorie_bar_percent: float = Field(serialization_alias="calorieBarPercent")


class AnalyzeResponse(BaseModel):
    """View state returned by the JSON API."""

    status: Literal["idle", "loading", "success", "error"]
    record: dict[str, object] | None = None
    display: DisplayValues | None = None
    message: str | None = None
    configuration_error: bool | None = Field(
        default=None, serialization_alias="configurationError"
    )
