"""
Telemetry Relay Hub.

Keeps the latest device state and relays messages between every connected
WebSocket participant. Device and dashboards are not distinguished:

    sensor  -> replace the shared state, broadcast to everyone (sender included)
    control -> forward verbatim to everyone except the sender
    other   -> ignored

Each connection owns a bounded outbound queue drained by its own writer task,
so a slow socket never delays the others. The hub lock is only held to swap
the state, snapshot connections and enqueue; no socket I/O happens under it.
"""

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from pydantic import ValidationError

from app.core.config import settings
from app.helpers.enums import RelayMessageType
from app.schemas.sche_relay import ControlMessage, SensorPayload, TelemetryMessage

logger = logging.getLogger(__name__)

RelayMessage = Union[TelemetryMessage, ControlMessage]


@dataclass(frozen=True)
class DeviceState:
    """Latest known telemetry. Replaced wholesale, never merged."""
    angle: float = 0.0
    repetition_count: int = 0
    running: bool = False
    device_status: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: SensorPayload) -> "DeviceState":
        return cls(
            angle=payload.angle,
            repetition_count=payload.rep,
            running=payload.running,
            device_status=payload.deviceStatus,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "angle": self.angle,
            "rep": self.repetition_count,
            "running": self.running,
        }
        if self.device_status is not None:
            payload["deviceStatus"] = self.device_status
        return payload

    def to_message(self) -> Dict[str, Any]:
        return {"type": RelayMessageType.SENSOR.value, "payload": self.to_payload()}


def parse_relay_message(data: Any) -> Optional[RelayMessage]:
    """
    Turn a decoded frame into a typed message.

    Returns:
        TelemetryMessage or ControlMessage, or None for an unknown type.

    Raises:
        ValidationError: known type with missing or invalid fields.
    """
    if not isinstance(data, dict):
        return None
    kind = data.get("type")
    if kind == RelayMessageType.SENSOR.value:
        return TelemetryMessage.model_validate(data)
    if kind == RelayMessageType.CONTROL.value:
        return ControlMessage.model_validate(data)
    return None


@dataclass(eq=False)
class RelayConnection:
    """
    One participant attached to the hub.

    Attributes:
        websocket: Anything with an async `send_json(data)`.
        queue_size: Capacity of the outbound queue.
        connection_id: Unique id, used in logs.
        connected_at: Connection timestamp.
        is_active: False once torn down.
        sent_count: Messages written to the socket.
        dropped_count: Messages discarded because the queue was full.
    """
    websocket: Any
    queue_size: int = 64
    connection_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    connected_at: float = field(default_factory=time.time)
    is_active: bool = True
    sent_count: int = 0
    dropped_count: int = 0

    def __post_init__(self):
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._writer: Optional[asyncio.Task] = None

    def enqueue(self, message: Dict[str, Any]) -> None:
        """Queue a message without blocking, dropping the oldest one on overflow."""
        if not self.is_active:
            return
        if self._queue.full():
            self._queue.get_nowait()
            self._queue.task_done()
            self.dropped_count += 1
            logger.warning(f"Relay queue full for connection {self.connection_id}, dropped oldest message")
        self._queue.put_nowait(message)

    def start(self, on_failure: Callable[["RelayConnection"], Awaitable[None]]) -> None:
        self._writer = asyncio.create_task(self._write_loop(on_failure))

    async def _write_loop(self, on_failure: Callable[["RelayConnection"], Awaitable[None]]) -> None:
        while True:
            message = await self._queue.get()
            try:
                await self.websocket.send_json(message)
                self.sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send to connection {self.connection_id}: {e}")
                self._queue.task_done()
                self._discard_pending()
                await on_failure(self)
                return
            self._queue.task_done()

    def _discard_pending(self) -> None:
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()

    async def drain(self) -> None:
        """Wait until everything queued so far has been written or discarded."""
        await self._queue.join()

    def stop(self) -> None:
        self.is_active = False
        self._discard_pending()
        if self._writer is not None and self._writer is not asyncio.current_task():
            self._writer.cancel()


class RelayHub:
    """
    Shared device state plus the set of connected participants.

    Usage:
        hub = RelayHub()

        # In WebSocket endpoint
        await websocket.accept()
        connection = await hub.connect(websocket)
        try:
            while True:
                await hub.handle_message(connection, await websocket.receive_text())
        except WebSocketDisconnect:
            pass
        finally:
            await hub.disconnect(connection)
    """

    def __init__(self, queue_size: int = 64):
        self._state = DeviceState()
        self._connections: Dict[str, RelayConnection] = {}
        self._queue_size = queue_size
        self._lock = asyncio.Lock()

        logger.info(f"RelayHub initialized: queue_size={queue_size}")

    @property
    def state(self) -> DeviceState:
        return self._state

    async def connect(self, websocket: Any) -> RelayConnection:
        """
        Register an already accepted WebSocket and send it the current state.

        Args:
            websocket: Accepted WebSocket (or any object with async send_json)

        Returns:
            RelayConnection: The registered connection
        """
        connection = RelayConnection(websocket=websocket, queue_size=self._queue_size)
        async with self._lock:
            self._connections[connection.connection_id] = connection
            connection.enqueue(self._state.to_message())
            total = len(self._connections)
        connection.start(self._on_send_failure)

        logger.info(f"Relay connected: connection_id={connection.connection_id}, total={total}")
        return connection

    async def disconnect(self, connection: RelayConnection) -> None:
        """Deregister a connection. Safe to call more than once."""
        async with self._lock:
            removed = self._connections.pop(connection.connection_id, None)
            total = len(self._connections)
        connection.stop()

        if removed is not None:
            logger.info(
                f"Relay disconnected: connection_id={connection.connection_id}, "
                f"sent={connection.sent_count}, dropped={connection.dropped_count}, total={total}"
            )

    async def handle_message(self, connection: RelayConnection, raw: Union[str, bytes]) -> None:
        """Decode one inbound frame and dispatch it. Bad frames are logged and dropped."""
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Dropped malformed frame from {connection.connection_id}: {e}")
            return

        try:
            message = parse_relay_message(data)
        except ValidationError as e:
            logger.warning(
                f"Dropped invalid {data.get('type')} message from {connection.connection_id}: "
                f"{e.error_count()} validation error(s)"
            )
            return

        if isinstance(message, TelemetryMessage):
            await self.publish_telemetry(message.payload)
        elif isinstance(message, ControlMessage):
            await self.forward_control(connection, data)
        else:
            logger.debug(f"Ignored message with unknown type from {connection.connection_id}")

    async def publish_telemetry(self, payload: SensorPayload) -> DeviceState:
        """Replace the shared state and queue it for every connection."""
        new_state = DeviceState.from_payload(payload)
        message = new_state.to_message()
        async with self._lock:
            self._state = new_state
            for connection in self._connections.values():
                connection.enqueue(message)
        return new_state

    async def forward_control(self, sender: RelayConnection, data: Dict[str, Any]) -> int:
        """
        Queue a control message for every connection except the sender.

        Returns:
            int: Number of connections the message was queued for
        """
        logger.info(f"Control from {sender.connection_id}: {data}")
        count = 0
        async with self._lock:
            for connection in self._connections.values():
                if connection is sender:
                    continue
                connection.enqueue(data)
                count += 1
        return count

    async def _on_send_failure(self, connection: RelayConnection) -> None:
        await self.disconnect(connection)
        try:
            await connection.websocket.close(code=1011)
        except Exception as e:
            logger.debug(f"Error closing failed connection {connection.connection_id}: {e}")

    def get_connection_count(self) -> int:
        """Lock-free read; only valid from the event loop that owns the hub."""
        return len(self._connections)

    async def get_stats(self) -> Dict[str, Any]:
        """Connection count and state, taken together under the hub lock."""
        async with self._lock:
            return {
                "connections": len(self._connections),
                "state": self._state.to_payload(),
            }

    async def close_all(self, timeout: float = 1.0) -> int:
        """
        Flush pending messages (bounded by `timeout`) and close every connection.

        Returns:
            int: Number of connections closed
        """
        async with self._lock:
            connections = list(self._connections.values())

        count = 0
        for connection in connections:
            try:
                await asyncio.wait_for(connection.drain(), timeout=timeout)
            except asyncio.TimeoutError:
                logger.warning(f"Timed out flushing connection {connection.connection_id}")
            try:
                await connection.websocket.close(code=1001)
                count += 1
            except Exception as e:
                logger.warning(f"Error closing WebSocket: {e}")
            finally:
                await self.disconnect(connection)

        logger.info(f"Closed {count} relay connections")
        return count


# ==================== GLOBAL INSTANCE ====================

relay_hub = RelayHub(queue_size=settings.RELAY_QUEUE_SIZE)


def get_relay_hub() -> RelayHub:
    return relay_hub
