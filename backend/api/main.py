"""FastAPI application — section properties calculator API."""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from sectioncalc import (
    DISPLAY_NAMES,
    EQUATIONS,
    PARAMETER_SCHEMAS,
    CalculatorSession,
    ShapeKind,
    compute,
    export_filename,
    parse_parameters,
)
from sectioncalc.verification import verify

from .schemas import (
    ComputeOutput,
    ComputeRequest,
    ParameterFieldOutput,
    ParametersUpdateRequest,
    SavedResultOutput,
    SectionResultOutput,
    SessionCreateRequest,
    SessionOutput,
    ShapeInfo,
    ShapeSelectRequest,
    VerificationOutput,
    VerifyRequest,
    formatted,
)
from .sessions import SessionNotFound, SessionRegistry

logging.basicConfig(
    level=os.getenv("SECTIONCALC_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Section Properties API", version="0.1.0")


# Vite and CRA dev servers
DEFAULT_CORS_ORIGINS: tuple[str, ...] = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
)


def cors_origins(raw: str | None) -> list[str]:
    """Allowed origins from a comma-separated ``CORS_ORIGINS`` value.

    The dev origins are always allowed, extras follow in the order given
    without duplicates, and any ``*`` entry opens the API to every origin.
    """
    extras = [origin.strip().rstrip("/") for origin in (raw or "").split(",")]
    if "*" in extras:
        return ["*"]

    allowed = list(DEFAULT_CORS_ORIGINS)
    for origin in extras:
        if origin and origin not in allowed:
            allowed.append(origin)
    return allowed


app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(os.getenv("CORS_ORIGINS")),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

sessions = SessionRegistry()


# ── Shapes ────────────────────────────────────────────────────


@app.get("/api/shapes", response_model=list[ShapeInfo])
def get_shapes() -> list[ShapeInfo]:
    """List supported shapes with their inputs and display equations."""
    return [
        ShapeInfo(
            shape=kind,
            name=DISPLAY_NAMES[kind],
            parameters=[
                ParameterFieldOutput(symbol=f.symbol, label=f.label, tooltip=f.tooltip)
                for f in PARAMETER_SCHEMAS[kind]
            ],
            equations=list(EQUATIONS[kind]),
        )
        for kind in ShapeKind
    ]


# ── Stateless compute ─────────────────────────────────────────


def _compute_output(shape: ShapeKind, raw: dict) -> ComputeOutput:
    result = compute(shape, raw)
    return ComputeOutput(
        shape=shape,
        parameters=parse_parameters(shape, raw),
        result=SectionResultOutput.from_result(result),
        formatted=formatted(result),
    )


@app.post("/api/compute", response_model=ComputeOutput)
def compute_section(data: ComputeRequest) -> ComputeOutput:
    """Compute properties; incomplete or invalid dimensions give zeros."""
    return _compute_output(data.shape, data.parameters)


@app.post("/api/verify", response_model=VerificationOutput)
def verify_section(data: VerifyRequest) -> VerificationOutput:
    """Compare the closed-form properties with a finite-element mesh."""
    if data.circle_segments < 8:
        raise HTTPException(status_code=422, detail="circle_segments must be at least 8")

    try:
        v = verify(data.shape, data.parameters, circle_segments=data.circle_segments)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Section verification failed: {e}"
        )

    return VerificationOutput(
        shape=v.shape,
        parameters=v.parameters,
        closed_form=SectionResultOutput.from_result(v.closed_form),
        mesh=SectionResultOutput.from_result(v.mesh),
        relative_differences=v.relative_differences(),
        element_count=v.element_count,
        warnings=v.warnings,
    )


# ── Sessions ──────────────────────────────────────────────────


def _get_session(session_id: str) -> CalculatorSession:
    try:
        return sessions.get(session_id)
    except SessionNotFound:
        raise HTTPException(
            status_code=404, detail=f"Session {session_id!r} not found"
        )


def _session_output(session_id: str, session: CalculatorSession) -> SessionOutput:
    return SessionOutput(
        session_id=session_id,
        shape=session.shape,
        parameters=session.entered,
        current=_compute_output(session.shape, session.entered),
        saved_count=len(session.store),
        can_export=bool(session.store),
    )


@app.post("/api/sessions", response_model=SessionOutput, status_code=201)
def create_session(data: SessionCreateRequest | None = None) -> SessionOutput:
    """Start a calculator session with an empty list of saved results."""
    data = data or SessionCreateRequest()
    session_id, session = sessions.create(data.shape)
    session.update_parameters(data.parameters)
    return _session_output(session_id, session)


@app.get("/api/sessions/{session_id}", response_model=SessionOutput)
def get_session(session_id: str) -> SessionOutput:
    return _session_output(session_id, _get_session(session_id))


@app.delete("/api/sessions/{session_id}", status_code=204)
def end_session(session_id: str) -> Response:
    try:
        sessions.remove(session_id)
    except SessionNotFound:
        raise HTTPException(
            status_code=404, detail=f"Session {session_id!r} not found"
        )
    return Response(status_code=204)


@app.put("/api/sessions/{session_id}/shape", response_model=SessionOutput)
def select_shape(session_id: str, data: ShapeSelectRequest) -> SessionOutput:
    session = _get_session(session_id)
    session.select_shape(data.shape)
    return _session_output(session_id, session)


@app.put("/api/sessions/{session_id}/parameters", response_model=SessionOutput)
def update_parameters(session_id: str, data: ParametersUpdateRequest) -> SessionOutput:
    """Merge entered dimension text into the session."""
    session = _get_session(session_id)
    session.update_parameters(data.parameters)
    return _session_output(session_id, session)


@app.post(
    "/api/sessions/{session_id}/results",
    response_model=SavedResultOutput,
    status_code=201,
)
def save_result(session_id: str) -> SavedResultOutput:
    """Save the current result; saved results are never edited or removed."""
    session = _get_session(session_id)
    return SavedResultOutput.from_saved(session.save())


@app.get(
    "/api/sessions/{session_id}/results",
    response_model=list[SavedResultOutput],
)
def list_results(session_id: str) -> list[SavedResultOutput]:
    session = _get_session(session_id)
    return [SavedResultOutput.from_saved(s) for s in session.store]


@app.get("/api/sessions/{session_id}/export")
def export_results(session_id: str) -> Response:
    """Download saved results as CSV; 204 when nothing has been saved."""
    session = _get_session(session_id)
    content = session.store.export_csv()
    if content is None:
        return Response(status_code=204)

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename()}"',
        },
    )


@app.get("/health")
def health() -> dict[str, str]:
    """Lightweight healthcheck for deployment platforms."""
    return {"status": "ok"}
