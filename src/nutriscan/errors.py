"""Errors raised while analyzing a food query."""


class AnalysisError(Exception):
    """Base class for failures surfaced to the dashboard."""


class ConfigurationError(AnalysisError):
    """The API key is missing or was rejected by the estimation service."""


class EmptyResponseError(AnalysisError):
    """The estimation service returned no text."""

    def __init__(self, message: str = "No data returned from the AI model.") -> None:
        super().__init__(message)


class MalformedResponseError(AnalysisError):
    """The estimation service returned text that is not a valid record.

    The raw text is kept for logging only and is never part of the message.
    """

    def __init__(
        self,
        raw_text: str,
        message: str = "The AI model returned an unexpected response.",
    ) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class TransportError(AnalysisError):
    """The estimation service call failed for a non-credential reason."""
