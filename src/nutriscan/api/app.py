"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse

from nutriscan.api.models import AnalyzeRequest, AnalyzeResponse, DisplayValues
from nutriscan.api.rendering import render_page
from nutriscan.app_logging import configure_logging
from nutriscan.containers import AppContainer
from nutriscan.domain.nutrition import (
    calorie_bar_percent,
    energy_density,
    macro_breakdown,
)
from nutriscan.domain.view import Error, Idle, Success, ViewState


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="NutriScan AI")
    app.state.container = container
    model_label = container.settings.openai_model

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Render the empty dashboard."""
        return HTMLResponse(render_page(Idle(), model=model_label))

    @app.post("/", response_class=HTMLResponse)
    async def search(request: Request, query: str = Form("")) -> HTMLResponse:
        """Analyze the submitted query and render the resulting dashboard."""
        state_container: AppContainer = request.app.state.container
        view = state_container.new_view()
        state = await view.submit(query)
        logger.info("Dashboard search finished with status=%s", state.status.value)
        return HTMLResponse(render_page(state, query=query, model=model_label))

    @app.post(
        "/api/analyze",
        response_model=AnalyzeResponse,
        response_model_exclude_none=True,
    )
    async def analyze(payload: AnalyzeRequest, request: Request) -> AnalyzeResponse:
        """Analyze a query and return the view state as JSON."""
        state_container: AppContainer = request.app.state.container
        view = state_container.new_view()
        state = await view.submit(payload.query)
        return _state_response(state)

    return app


def _state_response(state: ViewState) -> AnalyzeResponse:
    """Serialize a view state for the JSON API."""
    if isinstance(state, Success):
        record = state.record
        return AnalyzeResponse(
            status=state.status.value,
            record=record.model_dump(by_alias=True),
            display=DisplayValues(
                macro_total_g=macro_breakdown(record).total,
                energy_density=round(energy_density(record), 1),
                calorie_bar_percent=calorie_bar_percent(record),
            ),
        )
    if isinstance(state, Error):
        return AnalyzeResponse(
            status=state.status.value,
            message=state.message,
            configuration_error=state.is_configuration_error,
        )
    return AnalyzeResponse(status=state.status.value)
