from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .service import CareerService


class TickRequest(BaseModel):
    delta: float = 1.0


class UpgradeSelection(BaseModel):
    upgrade_id: str


class DrillSelection(BaseModel):
    drill_id: str
    slot_index: int | None = None


class SlotSelection(BaseModel):
    slot_index: int


class AttributeSelection(BaseModel):
    attribute: str


class CareerSelection(BaseModel):
    name: str
    position: str


service = CareerService()
app = FastAPI(title="Gridiron Idle API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/state")
def state() -> dict[str, Any]:
    with service._lock:
        return service.snapshot()


@app.get("/api/upgrades")
def upgrades() -> list[dict[str, Any]]:
    with service._lock:
        return service.upgrade_catalog()


@app.get("/api/drills")
def drills() -> list[dict[str, Any]]:
    with service._lock:
        return service.drill_catalog()


@app.get("/api/notifications")
def notifications() -> dict[str, Any]:
    with service._lock:
        return {"notifications": service.drain_notifications()}


@app.post("/api/tick")
def tick(payload: TickRequest) -> dict[str, Any]:
    with service._lock:
        if payload.delta < 0:
            raise HTTPException(status_code=400, detail="delta must be non-negative")
        return service.tick(payload.delta)


@app.post("/api/resume")
def resume() -> dict[str, Any]:
    with service._lock:
        return service.resume()


@app.post("/api/upgrades/purchase")
def purchase_upgrade(payload: UpgradeSelection) -> dict[str, Any]:
    with service._lock:
        return service.purchase_upgrade(payload.upgrade_id)


@app.post("/api/drills/assign")
def assign_drill(payload: DrillSelection) -> dict[str, Any]:
    with service._lock:
        return service.assign_drill(payload.drill_id, payload.slot_index)


@app.post("/api/drills/remove")
def remove_drill(payload: SlotSelection) -> dict[str, Any]:
    with service._lock:
        return service.remove_drill(payload.slot_index)


@app.post("/api/drills/unlock")
def unlock_drill(payload: DrillSelection) -> dict[str, Any]:
    with service._lock:
        return service.unlock_drill(payload.drill_id)


@app.post("/api/attributes/upgrade")
def upgrade_attribute(payload: AttributeSelection) -> dict[str, Any]:
    with service._lock:
        return service.upgrade_attribute(payload.attribute)


@app.post("/api/season/advance")
def advance_season() -> dict[str, Any]:
    with service._lock:
        return service.advance_season()


@app.post("/api/retire")
def retire(payload: CareerSelection) -> dict[str, Any]:
    with service._lock:
        try:
            return service.retire(payload.name, payload.position)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/api/new-career")
def new_career(payload: CareerSelection) -> dict[str, Any]:
    with service._lock:
        try:
            return service.new_career(payload.name, payload.position)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
