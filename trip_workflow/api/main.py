"""FastAPI editing surface over in-memory workflow editor sessions."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from trip_workflow.adapters.apply_sink import HttpApplySink, RecordingApplySink
from trip_workflow.api.schemas import (
    ActiveDayRequest,
    AddNodeRequest,
    AddPlaceRequest,
    ApplyResponse,
    ConnectRequest,
    CreateSessionRequest,
    HealthResponse,
    LoadTripRequest,
    MoveNodeRequest,
    OperationResponse,
    SessionResponse,
    TimelineResponse,
    UpdateNodeRequest,
)
from trip_workflow.application.editor import ApplyCallback, WorkflowEditor
from trip_workflow.config.settings import resolve_editor_settings
from trip_workflow.infrastructure.config import env_flag, get_env
from trip_workflow.infrastructure.session_store import get_session_store
from trip_workflow.shared.exceptions import ExternalServiceError

_api_logger = logging.getLogger("trip-workflow.api")

load_dotenv()

app = FastAPI(
    title="trip-workflow",
    version="1.0.0",
    docs_url="/docs" if env_flag("ENABLE_DOCS") else None,
    redoc_url=None,
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Cache-Control"] = "no-store"
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_env("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["*"],
)

store = get_session_store()
local_sink = RecordingApplySink()


@app.exception_handler(ExternalServiceError)
def _external_service_error(request: Request, exc: ExternalServiceError) -> JSONResponse:
    _api_logger.error("apply delivery failed for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc), "service": exc.service})


def get_apply_sink() -> ApplyCallback:
    settings = resolve_editor_settings()
    if settings.itinerary_service_url:
        return HttpApplySink(settings.itinerary_service_url, timeout=settings.itinerary_service_timeout)
    return local_sink


@contextmanager
def _locked_editor(session_id: str) -> Iterator[WorkflowEditor]:
    """Hold the session's lock for the whole request; sync routes run in a threadpool."""
    if store.get(session_id) is None:
        raise HTTPException(status_code=404, detail=f"session {session_id} not found")
    with store.session_lock(session_id):
        editor = store.get(session_id)
        if editor is None:
            raise HTTPException(status_code=404, detail=f"session {session_id} not found")
        yield editor


def _session(session_id: str, editor: WorkflowEditor) -> SessionResponse:
    return SessionResponse(
        session_id=session_id,
        status=editor.status.value,
        is_demo=editor.is_demo,
        active_day=editor.active_day_index,
        revision=editor.revision,
        can_undo=editor.can_undo,
        can_redo=editor.can_redo,
        days=editor.days,
    )


def _operation(session_id: str, editor: WorkflowEditor, applied: bool, node_id: str | None = None) -> OperationResponse:
    return OperationResponse(applied=applied, node_id=node_id, session=_session(session_id, editor))


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", sessions=store.active_count)


@app.post("/sessions", response_model=SessionResponse)
def create_session(req: CreateSessionRequest):
    session_id = req.session_id or uuid.uuid4().hex[:12]
    editor = WorkflowEditor(req.trip)
    with store.session_lock(session_id):
        store.save(session_id, editor)
        return _session(session_id, editor)


@app.get("/sessions/{session_id}", response_model=SessionResponse)
def get_session(session_id: str):
    with _locked_editor(session_id) as editor:
        return _session(session_id, editor)


@app.post("/sessions/{session_id}/trip", response_model=SessionResponse)
def load_trip(session_id: str, req: LoadTripRequest):
    """Upstream data changed: rebuild graphs, dropping unapplied edits and history."""
    with _locked_editor(session_id) as editor:
        editor.load(req.trip)
        return _session(session_id, editor)


@app.post("/sessions/{session_id}/active-day", response_model=OperationResponse)
def set_active_day(session_id: str, req: ActiveDayRequest):
    with _locked_editor(session_id) as editor:
        return _operation(session_id, editor, editor.set_active_day(req.day_index))


@app.post("/sessions/{session_id}/nodes", response_model=OperationResponse)
def add_node(session_id: str, req: AddNodeRequest):
    with _locked_editor(session_id) as editor:
        node_id = editor.add_node(req.type, req.position)
        return _operation(session_id, editor, node_id is not None, node_id)


@app.post("/sessions/{session_id}/places", response_model=OperationResponse)
def add_place(session_id: str, req: AddPlaceRequest):
    with _locked_editor(session_id) as editor:
        node_id = editor.add_place(req.place, req.position)
        return _operation(session_id, editor, node_id is not None, node_id)


@app.patch("/sessions/{session_id}/nodes/{node_id}", response_model=OperationResponse)
def update_node(session_id: str, node_id: str, req: UpdateNodeRequest):
    with _locked_editor(session_id) as editor:
        return _operation(session_id, editor, editor.update_node(node_id, req.fields), node_id)


@app.post("/sessions/{session_id}/nodes/{node_id}/move", response_model=OperationResponse)
def move_node(session_id: str, node_id: str, req: MoveNodeRequest):
    with _locked_editor(session_id) as editor:
        return _operation(session_id, editor, editor.move_node(node_id, req.position), node_id)


@app.delete("/sessions/{session_id}/nodes/{node_id}", response_model=OperationResponse)
def delete_node(session_id: str, node_id: str):
    with _locked_editor(session_id) as editor:
        return _operation(session_id, editor, editor.delete_node(node_id), node_id)


@app.post("/sessions/{session_id}/edges", response_model=OperationResponse)
def connect(session_id: str, req: ConnectRequest):
    with _locked_editor(session_id) as editor:
        return _operation(session_id, editor, editor.connect(req.source, req.target))


@app.delete("/sessions/{session_id}/edges/{source}/{target}", response_model=OperationResponse)
def disconnect(session_id: str, source: str, target: str):
    with _locked_editor(session_id) as editor:
        return _operation(session_id, editor, editor.disconnect(source, target))


@app.post("/sessions/{session_id}/layout", response_model=OperationResponse)
def layout(session_id: str, mode: str = "timeline"):
    with _locked_editor(session_id) as editor:
        applied = editor.reset_grid() if mode == "grid" else editor.auto_layout()
        return _operation(session_id, editor, applied)


@app.post("/sessions/{session_id}/undo", response_model=OperationResponse)
def undo(session_id: str):
    with _locked_editor(session_id) as editor:
        return _operation(session_id, editor, editor.undo())


@app.post("/sessions/{session_id}/redo", response_model=OperationResponse)
def redo(session_id: str):
    with _locked_editor(session_id) as editor:
        return _operation(session_id, editor, editor.redo())


@app.post("/sessions/{session_id}/reset", response_model=SessionResponse)
def reset(session_id: str):
    with _locked_editor(session_id) as editor:
        editor.reset()
        return _session(session_id, editor)


@app.get("/sessions/{session_id}/timeline", response_model=TimelineResponse)
def timeline(session_id: str, day_index: int | None = None):
    with _locked_editor(session_id) as editor:
        index = editor.active_day_index if day_index is None else day_index
        return TimelineResponse(day_index=index, rows=editor.timeline(index), totals=editor.totals(index))


@app.post("/sessions/{session_id}/apply", response_model=ApplyResponse)
def apply(session_id: str, sink: ApplyCallback = Depends(get_apply_sink)):
    with _locked_editor(session_id) as editor:
        outcome = editor.apply(sink)
    return ApplyResponse(
        delivered=outcome.delivered,
        is_demo=outcome.schedule.is_demo,
        itinerary=outcome.schedule.to_payload()["itinerary"],
        response=outcome.response,
    )


@app.delete("/sessions/{session_id}")
def close_session(session_id: str):
    with store.session_lock(session_id):
        store.delete(session_id)
    return {"closed": session_id}
