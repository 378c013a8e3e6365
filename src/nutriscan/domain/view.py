"""Dashboard view states."""

from dataclasses import dataclass
from enum import Enum

from nutriscan.domain.nutrition import NutritionRecord


class LoadingState(Enum):
    """Which region of the dashboard is visible."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Idle:
    status = LoadingState.IDLE


@dataclass(frozen=True)
class Loading:
    status = LoadingState.LOADING


@dataclass(frozen=True)
class Success:
    record: NutritionRecord
    status = LoadingState.SUCCESS


@dataclass(frozen=True)
class Error:
    message: str
    is_configuration_error: bool = False
    status = LoadingState.ERROR


ViewState = Idle | Loading | Success | Error
