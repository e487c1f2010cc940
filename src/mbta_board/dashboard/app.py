"""MBTA Departure Board - FastAPI application serving the station boards."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..boards import build_boards, station_boards
from ..config.settings import Settings, settings as default_settings
from ..exceptions import ParseError
from ..ingestion.base import MbtaService
from ..ingestion.file_service import JsonFileService
from ..ingestion.v3_rest_service import V3RestService
from ..processing.extractor import ExtractionOptions
from ..utils.logging import get_logger

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
DELAYED_FIXTURE = "predictions-delayed.json"
ERROR_FIXTURE = "error-429.json"


def get_live_service(request: Request) -> Iterator[MbtaService]:
    """A live API service for the duration of one request."""
    with V3RestService.from_settings(request.app.state.settings) as service:
        yield service


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create the dashboard application."""
    app_settings = app_settings or default_settings
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    app = FastAPI(
        title="MBTA Commuter Rail Departure Board",
        description="Upcoming commuter rail departures at North and South Station",
        version="1.0.0",
    )
    app.state.settings = app_settings

    def fixture_service(filename: str) -> MbtaService:
        return JsonFileService(
            app_settings.fixtures_dir / filename,
            options=ExtractionOptions.from_settings(app_settings),
        )

    def render(request: Request, service: MbtaService) -> HTMLResponse:
        boards = build_boards(service, station_boards(app_settings))
        return templates.TemplateResponse(request, "index.html", {"boards": boards})

    @app.get("/", response_class=HTMLResponse)
    def departure_boards(request: Request, service: MbtaService = Depends(get_live_service)):
        """Live boards from the MBTA API."""
        return render(request, service)

    @app.get("/test", response_class=HTMLResponse)
    def test_boards(request: Request):
        """Boards built from canned predictions, for tweaking the page."""
        return render(request, fixture_service(DELAYED_FIXTURE))

    @app.get("/testerror", response_class=HTMLResponse)
    def test_error_boards(request: Request):
        """Boards built from a canned API error."""
        return render(request, fixture_service(ERROR_FIXTURE))

    @app.get("/api/departures/{stop_id}")
    def departures(stop_id: str, service: MbtaService = Depends(get_live_service)) -> Dict[str, Any]:
        """Departure rows for one stop as JSON."""
        result = service.fetch_departures(stop_id)
        if result.is_fatal:
            raise HTTPException(status_code=502, detail=str(result.error))
        return {
            "stop_id": stop_id,
            "fetched_at": result.fetched_at.isoformat(),
            "departures": [d.model_dump() for d in result.departures],
            "error": str(result.error) if isinstance(result.error, ParseError) else None,
        }

    @app.get("/api/health")
    def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "MBTA Departure Board",
            "environment": app_settings.environment,
        }

    logger.debug("Dashboard application created", fixtures_dir=str(app_settings.fixtures_dir))
    return app


app = create_app()
