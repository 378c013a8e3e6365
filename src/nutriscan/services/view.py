"""Dashboard state machine for a single search box."""

from dataclasses import dataclass, field
from typing import Protocol

from nutriscan.domain.nutrition import NutritionRecord
from nutriscan.domain.view import Error, Idle, Loading, Success, ViewState
from nutriscan.errors import AnalysisError

FALLBACK_ERROR_MESSAGE = "An unexpected error occurred."
CONFIGURATION_KEYWORD = "api key"


class Analyzer(Protocol):
    """Anything that turns a query into a nutrition record."""

    async def analyze(self, query: str) -> NutritionRecord:
        """Return a nutrition record for the query."""


def is_configuration_message(message: str) -> bool:
    """Return true when an error message points at the API key setup."""
    return CONFIGURATION_KEYWORD in message.lower()


def error_state(exc: AnalysisError) -> Error:
    """Build the error state shown for a failed analysis."""
    message = str(exc).strip() or FALLBACK_ERROR_MESSAGE
    return Error(
        message=message,
        is_configuration_error=is_configuration_message(message),
    )


@dataclass
class NutritionView:
    """Tracks the dashboard state across search submissions."""

    analyzer: Analyzer
    state: ViewState = field(default_factory=Idle)

    @property
    def is_loading(self) -> bool:
        return isinstance(self.state, Loading)

    async def submit(self, query: str) -> ViewState:
        """Run an analysis for the query and return the resulting state.

        Blank queries and submissions made while a request is pending leave
        the state untouched.
        """
        trimmed = query.strip()
        if not trimmed or self.is_loading:
            return self.state

        self.state = Loading()
        try:
            record = await self.analyzer.analyze(trimmed)
        except AnalysisError as exc:
            self.state = error_state(exc)
        else:
            self.state = Success(record=record)
        return self.state
