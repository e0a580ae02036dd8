"""
FastAPI server for the Email Contact Extractor

Serves the browser UI (Jinja2 template) and a small JSON API
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool
from pydantic import BaseModel

from contact_extractor.api.middleware.audit_logger import audit_log_middleware
from contact_extractor.config.settings import Settings, get_settings
from contact_extractor.models.contact import Contact, DetailFormat, Theme
from contact_extractor.services.llm_service import (
    ExtractionClient,
    ExtractionError,
    GeminiExtractionClient,
)
from contact_extractor.services.preference_service import (
    FilePreferenceStore,
    PreferenceStore,
    parse_system_theme,
)
from contact_extractor.services.session_controller import (
    CopyTarget,
    SessionController,
    SessionRegistry,
)
from contact_extractor.utils.clipboard_writer import ClipboardWriter, default_rich_backend
from contact_extractor.utils.contact_formatter import (
    labeled_detail_format,
    recipient_format,
    simple_detail_format,
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"
SESSION_COOKIE = "session_id"
COLOR_SCHEME_HINT = "Sec-CH-Prefers-Color-Scheme"

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


# Request/Response Models
class ExtractRequest(BaseModel):
    """Stateless extraction request"""
    text: str
    format: DetailFormat = DetailFormat.SIMPLE


class ExtractResponse(BaseModel):
    """Contacts plus every rendered view"""
    contacts: List[Contact]
    recipients: str
    simple_details: str
    details: str
    details_html: str


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    timestamp: datetime
    version: str
    model: str
    sessions: int


def _get_session(request: Request) -> Tuple[str, SessionController]:
    system_theme = parse_system_theme(request.headers.get(COLOR_SCHEME_HINT))
    registry: SessionRegistry = request.app.state.sessions
    return registry.get_or_create(request.cookies.get(SESSION_COOKIE), system_theme)


def _with_session_cookie(response, session_id: str):
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def _redirect_home(session_id: str) -> RedirectResponse:
    return _with_session_cookie(RedirectResponse("/", status_code=303), session_id)


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[ExtractionClient] = None,
    preferences: Optional[PreferenceStore] = None,
    clipboard: Optional[ClipboardWriter] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        settings: Settings to use (default: environment)
        client: Extraction client (default: Gemini with the configured key)
        preferences: Theme preference store (default: JSON file)
        clipboard: Clipboard writer (default: system clipboard)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    client = client or GeminiExtractionClient(
        api_key=settings.google_api_key,
        model=settings.google_model,
        temperature=settings.llm_temperature,
    )
    preferences = preferences or FilePreferenceStore(settings.preferences_path)
    clipboard = clipboard or ClipboardWriter(rich_backend=default_rich_backend())

    app = FastAPI(
        title="Email Contact Extractor",
        description="Paste email headers or signatures to extract clean contact details",
        version=VERSION,
    )

    def new_session(system_theme: Optional[Theme]) -> SessionController:
        return SessionController(
            client=client,
            preferences=preferences,
            clipboard=clipboard,
            system_theme=system_theme,
            copy_ack_seconds=settings.copy_ack_seconds,
        )

    app.state.sessions = SessionRegistry(new_session, max_sessions=settings.max_sessions)

    # Request logging middleware
    app.middleware("http")(audit_log_middleware)

    @app.get("/", tags=["UI"])
    async def index(request: Request):
        """Render the extractor page for the current session"""
        session_id, controller = _get_session(request)
        response = templates.TemplateResponse(
            request,
            "index.html",
            {
                "state": controller.state,
                "views": controller.views,
                "can_extract": controller.can_extract,
                "formats": list(DetailFormat),
                "copy_targets": CopyTarget,
                "copy_label": controller.copy_label,
                "copy_remaining": controller.copy_remaining,
                "model": settings.google_model,
            },
        )
        response.headers["Accept-CH"] = COLOR_SCHEME_HINT
        return _with_session_cookie(response, session_id)

    @app.post("/extract", tags=["UI"])
    async def extract(request: Request, input_text: str = Form("")):
        """Extract contacts from the submitted text"""
        session_id, controller = _get_session(request)
        controller.set_input(input_text)
        await controller.extract()
        return _redirect_home(session_id)

    @app.post("/clear", tags=["UI"])
    async def clear(request: Request):
        session_id, controller = _get_session(request)
        controller.clear()
        return _redirect_home(session_id)

    @app.post("/theme", tags=["UI"])
    async def toggle_theme(request: Request):
        session_id, controller = _get_session(request)
        await run_in_threadpool(controller.toggle_theme)
        return _redirect_home(session_id)

    @app.post("/format", tags=["UI"])
    async def select_format(request: Request, format: DetailFormat = Form(...)):
        session_id, controller = _get_session(request)
        controller.select_format(format)
        return _redirect_home(session_id)

    @app.post("/copy/{target}", tags=["UI"])
    async def copy(request: Request, target: CopyTarget):
        """Copy the recipient list or the detail list to the clipboard"""
        session_id, controller = _get_session(request)
        await run_in_threadpool(controller.copy, target)
        return _redirect_home(session_id)

    @app.post("/api/extract", response_model=ExtractResponse, tags=["API"])
    async def api_extract(body: ExtractRequest):
        """
        Extract contacts without touching any session

        Raises:
            HTTPException: 422 for blank text, 502 if the extraction service fails
        """
        if not body.text.strip():
            raise HTTPException(status_code=422, detail="Text must not be blank")

        try:
            result = await client.extract(body.text)
        except ExtractionError as e:
            raise HTTPException(
                status_code=502,
                detail={"kind": e.kind, "message": e.message},
            )

        details = labeled_detail_format(result.contacts, body.format)
        return ExtractResponse(
            contacts=result.contacts,
            recipients=recipient_format(result.contacts),
            simple_details=simple_detail_format(result.contacts),
            details=details.plain,
            details_html=details.html,
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint"""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.utcnow(),
            version=VERSION,
            model=settings.google_model,
            sessions=len(request.app.state.sessions),
        )

    return app
