"""
SupportAudit API

Conversation policy auditor for customer-support chat transcripts.

Endpoints:
    GET  /health                          - Liveness probe
    GET  /version                         - Version and default schema identity
    GET  /schema/default                  - Active default schema
    POST /schema/validate                 - Validate schema text
    POST /audit                           - Audit a transcript
    POST /incidents                       - Triage summaries for transcripts
    POST /sessions                        - Open a review session
    GET  /sessions/{id}                   - Session state
    PUT  /sessions/{id}/schema            - Apply edited schema text
    POST /sessions/{id}/apply-suggestion  - Approve & send modified
    POST /sessions/{id}/request-human     - Stop & request human
    POST /sessions/{id}/allow-original    - Override & send original
    POST /sessions/{id}/reset             - Restore the transcript
    GET  /demo/conversations              - Seeded sample transcripts

Environment Variables:
    SA_LOG_LEVEL, SA_DOCS_ENABLED, SA_SCHEMA_PATH,
    SA_SCHEMA_STRICT_VERSION, SA_MAX_SESSIONS (see supportaudit.config)
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..canon import schema_hash
from ..config import Settings, get_settings
from ..exceptions import (
    NoOpenDecisionError,
    ResolutionError,
    SchemaParseError,
    SessionNotFoundError,
    SupportAuditError,
    TranscriptValidationError,
)
from ..logging_setup import configure_logging
from ..packs import SCHEMA_VERSION, load_configured_schema
from .routes import audit, demo, incidents, schema, sessions
from .schemas.responses import HealthResponse, VersionResponse
from .session_store import SessionStore

logger = logging.getLogger(__name__)


# =============================================================================
# Error Mapping
# =============================================================================

def status_for_error(error: SupportAuditError) -> int:
    """HTTP status for a SupportAuditError."""
    if isinstance(error, SessionNotFoundError):
        return 404
    if isinstance(error, (NoOpenDecisionError, ResolutionError)):
        return 409
    if isinstance(error, (SchemaParseError, TranscriptValidationError)):
        return 400
    return 500


async def support_audit_error_handler(request: Request, exc: SupportAuditError):
    status = status_for_error(exc)
    log = logger.error if status >= 500 else logger.warning
    log(
        "Request failed: %s",
        exc.message,
        extra={"session_id": exc.session_id, "action": exc.code},
    )
    return JSONResponse(status_code=status, content={"error": jsonable_encoder(exc.to_dict())})


# =============================================================================
# FastAPI App
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="SupportAudit API",
        description="""
**Conversation policy auditor for customer-support chat transcripts.**

SupportAudit evaluates the latest exchange of a chatbot conversation
against a declarative policy schema and recommends allow, stop or
interject, with a drafted compliant reply.

## Quick Start

1. `GET /demo/conversations` - See seeded transcripts
2. `POST /audit` - Audit a transcript
3. `POST /sessions` - Review and resolve a decision
        """,
        version=__version__,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
    )

    # CORS (restrict in production)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SupportAuditError, support_audit_error_handler)

    sessions.set_store(SessionStore(max_sessions=settings.max_sessions))

    app.include_router(schema.router)
    app.include_router(audit.router)
    app.include_router(incidents.router)
    app.include_router(sessions.router)
    app.include_router(demo.router)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Liveness probe."""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=__version__,
        )

    @app.get("/version", response_model=VersionResponse, tags=["Info"])
    async def version_info():
        """Version of the service and identity of the default schema."""
        default = load_configured_schema()
        return VersionResponse(
            version=__version__,
            schema_format_version=SCHEMA_VERSION,
            default_schema_name=default.name,
            default_schema_version=default.version,
            default_schema_hash=schema_hash(default),
        )

    logger.info("SupportAudit API ready", extra={"schema_version": SCHEMA_VERSION})
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
