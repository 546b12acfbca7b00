"""Grid state API routes and the live viewer socket."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List

from fastapi import APIRouter, BackgroundTasks, Depends, Request, WebSocket, WebSocketDisconnect

from slotgrid.grid import GridState

from .. import schemas
from ..auth import require_admin
from ..broadcast import BroadcastHub
from ..service import GridService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["grid"])


def get_service(request: Request) -> GridService:
    return request.app.state.grid_service


def get_hub(request: Request) -> BroadcastHub:
    return request.app.state.broadcast_hub


def _publish(state: GridState, hub: BroadcastHub, background_tasks: BackgroundTasks) -> dict[str, Any]:
    snapshot = state.snapshot()
    background_tasks.add_task(hub.publish, snapshot)
    return snapshot


@router.get("/state", response_model=schemas.GridSnapshot)
def read_state(service: GridService = Depends(get_service)):
    return service.current().snapshot()


@router.get("/slots", response_model=List[schemas.SlotRead])
def read_slots(service: GridService = Depends(get_service)):
    return service.current().slots()


@router.post("/generate", response_model=schemas.GridSnapshot)
def generate_grid(
    payload: schemas.GenerateRequest,
    background_tasks: BackgroundTasks,
    _admin: str = Depends(require_admin),
    service: GridService = Depends(get_service),
    hub: BroadcastHub = Depends(get_hub),
):
    state = service.generate(payload.rows, payload.cols)
    return _publish(state, hub, background_tasks)


@router.post("/reset", response_model=schemas.GridSnapshot)
def reset_grid(
    background_tasks: BackgroundTasks,
    _admin: str = Depends(require_admin),
    service: GridService = Depends(get_service),
    hub: BroadcastHub = Depends(get_hub),
):
    state = service.reset()
    return _publish(state, hub, background_tasks)


@router.post("/update", response_model=schemas.GridSnapshot)
def update_slot(
    payload: schemas.UpdateRequest,
    background_tasks: BackgroundTasks,
    _admin: str = Depends(require_admin),
    service: GridService = Depends(get_service),
    hub: BroadcastHub = Depends(get_hub),
):
    state = service.update(payload.box_num, payload.subtitle, payload.visibility)
    return _publish(state, hub, background_tasks)


@router.websocket("/ws")
async def viewer_socket(ws: WebSocket):
    """Read-only live feed.

    Viewers receive ``{"type": "state"}`` on connect and
    ``{"type": "stateUpdated"}`` after every committed mutation.  Clients may
    send ``ping`` or ``requestState`` messages.
    """

    hub: BroadcastHub = ws.app.state.broadcast_hub
    service: GridService = ws.app.state.grid_service

    await ws.accept()
    await hub.connect(ws)
    try:
        state = await asyncio.to_thread(service.current)
        await ws.send_json({"type": "state", "state": state.snapshot()})
        while True:
            message = await ws.receive_json()
            if not isinstance(message, dict):
                continue
            msg_type = message.get("type")
            if msg_type == "ping":
                await ws.send_json({"type": "pong"})
            elif msg_type == "requestState":
                state = await asyncio.to_thread(service.current)
                await ws.send_json({"type": "state", "state": state.snapshot()})
    except WebSocketDisconnect:
        pass
    except ValueError:
        logger.debug("Invalid JSON from viewer, closing socket")
        await ws.close(code=1003)
    finally:
        await hub.disconnect(ws)
