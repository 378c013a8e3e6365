"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from nutriscan.adapters.openai_estimation_client import OpenAIEstimationClient
from nutriscan.config import Settings
from nutriscan.services.analysis import AnalysisService, EstimationClient
from nutriscan.services.view import NutritionView


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: AnalysisService

    def new_view(self) -> NutritionView:
        """Create a dashboard view for a single visitor request."""
        return NutritionView(analyzer=self.analysis_service)


def build_container(
    settings: Settings | None = None,
    client_factory: Callable[[str], EstimationClient] | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    analysis_service = AnalysisService(
        client_factory=client_factory or OpenAIEstimationClient.create,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        api_key_env=resolved_settings.api_key_env,
    )
    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
    )
