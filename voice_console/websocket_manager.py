"""
WebSocket connection manager for console UIs.

Browsers showing the console connect to /ws and receive the full transcript
snapshot on connect and again after every change. The socket is push-only:
anything a UI sends is logged and ignored, since tool responses and session
settings go through the HTTP API.
"""

import json
import logging
from typing import List

from fastapi import WebSocket, WebSocketDisconnect

from voice_console.config.constants import EVENT_TYPE_TRANSCRIPT_SNAPSHOT, LOGGER_NAME
from voice_console.transcript.call_session import CallSession

logger = logging.getLogger(LOGGER_NAME)


class WebSocketManager:
    """Pushes transcript snapshots of a CallSession to every connected UI."""

    def __init__(self, call_session: CallSession):
        self.call_session = call_session
        self.connections: List[WebSocket] = []

    def snapshot_message(self) -> str:
        return json.dumps(
            {"type": EVENT_TYPE_TRANSCRIPT_SNAPSHOT, **self.call_session.snapshot()}
        )

    async def handle_websocket(self, websocket: WebSocket):
        """Handle a UI WebSocket connection throughout its lifecycle.

        Args:
            websocket (WebSocket): The FastAPI WebSocket connection object
        """
        await websocket.accept()
        self.connections.append(websocket)
        logger.info(f"Console UI connected ({len(self.connections)} connected)")

        try:
            await websocket.send_text(self.snapshot_message())
            while True:
                data = await websocket.receive_text()
                logger.debug(f"Ignoring message from console UI: {data[:100]}")
        except WebSocketDisconnect:
            logger.info("Console UI disconnected")
        except Exception as e:
            logger.error(f"Error in console UI connection: {e}", exc_info=True)
        finally:
            if websocket in self.connections:
                self.connections.remove(websocket)

    async def broadcast(self) -> None:
        """Send the current snapshot to all connected UIs, dropping dead sockets."""
        if not self.connections:
            return

        message = self.snapshot_message()
        for websocket in list(self.connections):
            try:
                await websocket.send_text(message)
            except Exception as e:
                logger.warning(f"Dropping console UI after failed send: {e}")
                if websocket in self.connections:
                    self.connections.remove(websocket)
