"""Shared test fixtures."""

import asyncio
import json
from dataclasses import dataclass, field

import pytest

from nutriscan.config import Settings
from nutriscan.containers import AppContainer
from nutriscan.domain.nutrition import NutritionRecord
from nutriscan.services.analysis import AnalysisService, EstimationClient

APPLE_PAYLOAD: dict[str, object] = {
    "foodName": "Apple",
    "servingSize": "1 medium (182g)",
    "calories": 95,
    "protein": 0.5,
    "carbs": 25,
    "fat": 0.3,
    "fiber": 4.4,
    "sugar": 19,
    "healthTip": "Apples are rich in soluble fiber that supports heart health.",
}


@dataclass
class FakeEstimationClient(EstimationClient):
    """Fake estimation client returning fixed text or raising."""

    text: str | None = field(default_factory=lambda: json.dumps(APPLE_PAYLOAD))
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)
    schemas: list[dict[str, object]] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> str | None:
        self.prompts.append(prompt)
        self.schemas.append(schema)
        if self.error is not None:
            raise self.error
        return self.text


@dataclass
class RecordingClientFactory:
    """Client factory that hands out one fake and records the keys used."""

    client: FakeEstimationClient = field(default_factory=FakeEstimationClient)
    api_keys: list[str] = field(default_factory=list)

    def __call__(self, api_key: str) -> FakeEstimationClient:
        self.api_keys.append(api_key)
        return self.client


@dataclass
class BlockingAnalyzer:
    """Analyzer that waits for a release signal before answering."""

    record: NutritionRecord
    release: asyncio.Event = field(default_factory=asyncio.Event)
    queries: list[str] = field(default_factory=list)

    async def analyze(self, query: str) -> NutritionRecord:
        self.queries.append(query)
        await self.release.wait()
        return self.record


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_model="gpt-test",
        openai_reasoning_effort=None,
        environment="test",
    )


@pytest.fixture
def environ() -> dict[str, str]:
    return {"OPENAI_API_KEY": "sk-test"}


@pytest.fixture
def client_factory() -> RecordingClientFactory:
    return RecordingClientFactory()


@pytest.fixture
def estimation_client(client_factory: RecordingClientFactory) -> FakeEstimationClient:
    return client_factory.client


@pytest.fixture
def analysis_service(
    settings: Settings,
    environ: dict[str, str],
    client_factory: RecordingClientFactory,
) -> AnalysisService:
    return AnalysisService(
        client_factory=client_factory,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
        api_key_env=settings.api_key_env,
        environ=environ,
    )


@pytest.fixture
def apple_record() -> NutritionRecord:
    return NutritionRecord.model_validate(APPLE_PAYLOAD)


@pytest.fixture
def container(settings: Settings, analysis_service: AnalysisService) -> AppContainer:
    return AppContainer(settings=settings, analysis_service=analysis_service)
