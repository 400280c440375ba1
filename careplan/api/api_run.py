from contextlib import asynccontextmanager
from threading import Lock
from typing import Dict, Optional
import logging

from fastapi import FastAPI, Request, Query, Header, Depends, Response
from fastapi.responses import JSONResponse

from careplan.api.routes import catalog
from careplan.domain.Catalog import DEFAULT_CATALOG
from careplan.domain.Errors import CarePlanError, NotFound
from careplan.domain.Plan import Plan
from careplan.domain.PlanStore import PlanStore
from careplan.events.web_observers import start as start_event_observers, get_events as get_web_events
from careplan.infra.Plan_Repository import PlanRepository
from careplan.infra.pdf_utils import generate_pdf_for_plan
from careplan.logic.reporting.summary import compute_plan_summary
from careplan.utilities.config import DEFAULT_USER_HANDLE
from careplan.utilities.validators import AssignInput, CareLevelInput, PlanSnapshotInput

# Logging
logger = logging.getLogger("careplan_app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()
    logger.info("Web observers for plan events started")
    yield


# Initialize FastAPI app
app = FastAPI(title="Care Plan Unit Budget API", lifespan=lifespan)

# Include routers
app.include_router(catalog.router)

# Persistence collaborator and per-user plan stores (process local)
repository = PlanRepository()
_stores: Dict[str, PlanStore] = {}
_stores_lock = Lock()


@app.exception_handler(CarePlanError)
async def _care_plan_error_handler(request: Request, exc: CarePlanError):
    status = 404 if isinstance(exc, NotFound) else 400
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})


# -------------------- Helpers --------------------
def user_handle(x_user_handle: Optional[str] = Header(default=None)) -> str:
    """Opaque user handle supplied by the identity layer."""
    return x_user_handle or DEFAULT_USER_HANDLE


def get_store(handle: str = Depends(user_handle)) -> PlanStore:
    """Return the user's PlanStore, restoring the saved plan the first time it is needed."""
    with _stores_lock:
        store = _stores.get(handle)
    if store is not None:
        return store

    # read outside the lock; the first store registered for a handle is kept
    store = PlanStore(DEFAULT_CATALOG, owner=handle)
    saved = repository.get_plan(handle)
    if saved is not None:
        store.load(saved)
    with _stores_lock:
        return _stores.setdefault(handle, store)


def reset_stores():
    """Forget all in-memory plans (saved plans stay in the repository)."""
    with _stores_lock:
        _stores.clear()


def _summary(store: PlanStore):
    return compute_plan_summary(store.snapshot(), store.catalog)


# -------------------- API: Plan --------------------
@app.get("/api/plan")
def api_get_plan(store: PlanStore = Depends(get_store)):
    return store.snapshot().to_dict()


@app.get("/api/plan/summary")
def api_plan_summary(store: PlanStore = Depends(get_store)):
    return _summary(store)


@app.post("/api/plan/assign")
def api_assign(payload: AssignInput, store: PlanStore = Depends(get_store)):
    assignment = store.assign(payload.slot, payload.definition_id)
    return {"assignment": assignment.to_dict(), "slot": payload.slot, "summary": _summary(store)}


@app.delete("/api/plan/{slot}/{instance_id}")
def api_remove(slot: str, instance_id: str, store: PlanStore = Depends(get_store)):
    store.remove(slot, instance_id)
    return {"removed": instance_id, "slot": slot, "summary": _summary(store)}


@app.put("/api/plan/care-level")
def api_set_care_level(payload: CareLevelInput, store: PlanStore = Depends(get_store)):
    store.set_care_level(payload.level)
    return _summary(store)


@app.put("/api/plan")
def api_import_plan(payload: PlanSnapshotInput, store: PlanStore = Depends(get_store)):
    """Replace the current plan with a client-supplied snapshot."""
    plan = Plan.from_dict(payload.model_dump(), store.catalog)
    dropped = store.load(plan)
    return {"dropped": [a.to_dict() for a in dropped], "plan": store.snapshot().to_dict()}


@app.post("/api/plan/save")
def api_save_plan(handle: str = Depends(user_handle), store: PlanStore = Depends(get_store)):
    repository.save_plan(handle, store.snapshot())
    return {"saved": True, "user": handle}


@app.post("/api/plan/load")
def api_load_plan(handle: str = Depends(user_handle), store: PlanStore = Depends(get_store)):
    saved = repository.get_plan(handle)
    if saved is None:
        return JSONResponse(status_code=404, content={"error": "No saved plan for this user"})
    dropped = store.load(saved)
    return {"dropped": [a.to_dict() for a in dropped], "plan": store.snapshot().to_dict()}


@app.get("/api/plan/export_pdf")
def api_export_pdf(store: PlanStore = Depends(get_store)):
    pdf_bytes = generate_pdf_for_plan(store.snapshot(), store.catalog)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="care_plan.pdf"'},
    )


@app.get("/api/alerts")
def api_alerts(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value"),
    handle: str = Depends(user_handle),
):
    """
    Return recent plan notices (over limit, ignored monthly duplicates) of the caller.

    Client polling strategy:
        1. First call without 'since' to load current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/alerts?since=<next_cursor>
    """
    return get_web_events(since, owner=handle)
