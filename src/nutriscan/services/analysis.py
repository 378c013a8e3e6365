"""Food analysis via a schema-constrained LLM call."""

import json
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from nutriscan.config import resolve_api_key
from nutriscan.domain.nutrition import NutritionRecord
from nutriscan.errors import (
    AnalysisError,
    ConfigurationError,
    EmptyResponseError,
    MalformedResponseError,
    TransportError,
)

_logger = logging.getLogger(__name__)

NUTRITION_FIELDS = (
    "foodName",
    "servingSize",
    "calories",
    "protein",
    "carbs",
    "fat",
    "fiber",
    "sugar",
    "healthTip",
)

NUTRITION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foodName": {
            "type": "string",
            "description": "The standardized name of the food identified.",
        },
        "servingSize": {
            "type": "string",
            "description": (
                "The serving size used for calculation "
                "(e.g., '1 medium (182g)', '1 cup')."
            ),
        },
        "calories": {"type": "number", "description": "Total calories in kcal."},
        "protein": {"type": "number", "description": "Protein content in grams."},
        "carbs": {"type": "number", "description": "Total carbohydrates in grams."},
        "fat": {"type": "number", "description": "Total fat in grams."},
        "fiber": {"type": "number", "description": "Dietary fiber in grams."},
        "sugar": {"type": "number", "description": "Total sugars in grams."},
        "healthTip": {
            "type": "string",
            "description": (
                "A brief, 1-sentence interesting health fact or tip about this food."
            ),
        },
    },
    "required": list(NUTRITION_FIELDS),
    "additionalProperties": False,
}

_LEADING_FENCE = re.compile(r"^\s*```[\w-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*$")

_CREDENTIAL_SIGNATURES = (
    "api key",
    "api_key",
    "apikey",
    "invalid key",
    "incorrect key",
)
_AUTH_STATUS_CODES = {401, 403}


class EstimationClient(Protocol):
    """Interface for the hosted estimation model."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> str | None:
        """Return the raw text produced for the prompt."""


def build_prompt(query: str) -> str:
    """Embed the user query into the estimation instructions."""
    return (
        f'Analyze the nutritional content of: "{query}". \n'
        "If the user did not specify a quantity, assume a standard serving size "
        "(e.g., 1 medium apple, 100g chicken breast, 1 cup of rice).\n"
        "Provide a realistic estimate."
    )


def clean_response_text(text: str) -> str:
    """Strip code fence markers and surrounding whitespace."""
    cleaned = _LEADING_FENCE.sub("", text, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_record(raw_text: str) -> NutritionRecord:
    """Parse service output into a record, raising on any mismatch."""
    cleaned = clean_response_text(raw_text)
    try:
        payload = json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise MalformedResponseError(raw_text) from exc
    if not isinstance(payload, dict):
        raise MalformedResponseError(raw_text)
    try:
        return NutritionRecord.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(raw_text) from exc


def is_credential_rejection(exc: Exception) -> bool:
    """Return true when a client failure looks like a rejected API key."""
    status_code = getattr(exc, "status_code", None)
    if status_code in _AUTH_STATUS_CODES:
        return True
    message = str(exc).lower()
    if any(signature in message for signature in _CREDENTIAL_SIGNATURES):
        return True
    return status_code == 400 and "key" in message  # noqa: PLR2004


def classify_transport_error(exc: Exception) -> AnalysisError:
    """Map a client failure onto the analysis error taxonomy."""
    if is_credential_rejection(exc):
        return ConfigurationError(
            "The API key was rejected by the AI service. Check that the value "
            "has no extra spaces and is not wrapped in quotes."
        )
    detail = str(exc).strip() or type(exc).__name__
    return TransportError(f"The AI service request failed: {detail}")


@dataclass
class AnalysisService:
    """Orchestrates a single nutrition estimate for a free-text query."""

    client_factory: Callable[[str], EstimationClient]
    model: str
    reasoning_effort: str | None = None
    store: bool = False
    api_key_env: str = "OPENAI_API_KEY"
    environ: Mapping[str, str] | None = field(default=None, repr=False)

    async def analyze(self, query: str) -> NutritionRecord:
        """Estimate nutrition for the query or raise an AnalysisError."""
        try:
            api_key = resolve_api_key(self.api_key_env, self.environ)
        except ConfigurationError:
            _logger.warning("API key is not configured: env=%s", self.api_key_env)
            raise
        client = self.client_factory(api_key)
        try:
            raw_text = await client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema=NUTRITION_SCHEMA,
                prompt=build_prompt(query),
            )
        except Exception as exc:
            _logger.warning("Estimation request failed: %s", exc)
            raise classify_transport_error(exc) from exc

        if not raw_text:
            _logger.warning("Estimation service returned an empty response")
            raise EmptyResponseError
        try:
            record = parse_record(raw_text)
        except MalformedResponseError:
            _logger.warning("Malformed estimation response: %r", raw_text)
            raise
        _logger.info(
            "Analyzed query=%r food=%s calories=%s",
            query,
            record.food_name,
            record.calories,
        )
        return record
