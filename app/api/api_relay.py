import logging

from fastapi import APIRouter, Depends, WebSocket

from app.schemas.sche_base import DataResponse
from app.schemas.sche_relay import RelayStateResponse
from app.services.ws_manager import RelayHub, get_relay_hub

logger = logging.getLogger(__name__)

router = APIRouter()


async def relay_endpoint(websocket: WebSocket, hub: RelayHub) -> None:
    await websocket.accept()
    connection = await hub.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            await hub.handle_message(connection, raw)
    except RuntimeError as e:
        logger.warning(f"Relay connection {connection.connection_id} closed: {e}")
    finally:
        await hub.disconnect(connection)


@router.websocket("/ws")
async def relay_websocket(websocket: WebSocket, hub: RelayHub = Depends(get_relay_hub)):
    """
    Device and dashboards share this socket.

    {"type": "sensor", "payload": {...}} is broadcast to everyone,
    {"type": "control", ...} to everyone but the sender.
    """
    await relay_endpoint(websocket, hub)


@router.get("/state", response_model=DataResponse[RelayStateResponse])
async def get_relay_state(hub: RelayHub = Depends(get_relay_hub)):
    stats = await hub.get_stats()
    return DataResponse().success_response(data=RelayStateResponse(**stats))
