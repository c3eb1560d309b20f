"""
WebSocket client for the voice-call server's event stream.

The voice-call server relays the realtime events of the active phone call on its
/logs socket and accepts events to forward to the model on the same socket. This
module owns that connection: it decodes inbound frames and hands them to a
callback in arrival order, and it serializes outbound events. It knows nothing
about transcripts.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, Union
from urllib.parse import urlsplit, urlunsplit

import websockets
from websockets.exceptions import ConnectionClosed
from pydantic import BaseModel

from voice_console.config.constants import LOGGER_NAME, VOICE_CALL_LOGS_PATH

logger = logging.getLogger(LOGGER_NAME)

EventHandler = Callable[[Dict[str, Any]], Awaitable[None]]

_SCHEME_MAP = {"https": "wss", "http": "ws", "wss": "wss", "ws": "ws"}


def logs_url_from_public_url(public_url: str) -> str:
    """
    Build the event stream URL from the voice-call server's public URL.

    Args:
        public_url: e.g. https://example.ngrok-free.app

    Returns:
        The socket URL, e.g. wss://example.ngrok-free.app/logs
    """
    parts = urlsplit(public_url.strip())
    if parts.scheme not in _SCHEME_MAP or not parts.netloc:
        raise ValueError(f"Invalid voice call URL: {public_url}")
    path = parts.path.rstrip("/") + VOICE_CALL_LOGS_PATH
    return urlunsplit((_SCHEME_MAP[parts.scheme], parts.netloc, path, "", ""))


class VoiceCallClient:
    """
    Client for the voice-call server's realtime event socket.
    """

    def __init__(self, url: str):
        """
        Initialize the voice-call WebSocket client.

        Args:
            url: The WebSocket URL of the event stream
        """
        self.url = url
        self.websocket = None

    @property
    def is_connected(self) -> bool:
        return self.websocket is not None

    async def connect(self) -> bool:
        """
        Establish a connection to the voice-call event stream.

        Returns:
            True if connection was successful, False otherwise
        """
        try:
            self.websocket = await websockets.connect(self.url)
            logger.info(f"Connected to voice call WebSocket at {self.url}")
            return True
        except Exception as e:
            logger.error(f"Failed to connect to voice call server: {e}")
            self.websocket = None
            return False

    async def send_event(self, event: Union[BaseModel, Dict[str, Any]]) -> bool:
        """
        Send one event to the voice-call server.

        Args:
            event: A Pydantic event model or a plain dict

        Returns:
            True if the event was sent, False otherwise
        """
        if not self.websocket:
            logger.error("Cannot send event: Not connected")
            return False

        if isinstance(event, BaseModel):
            payload = event.model_dump_json()
        else:
            payload = json.dumps(event)

        try:
            await self.websocket.send(payload)
        except ConnectionClosed as e:
            logger.warning(f"Connection closed while sending event: {e}")
            self.websocket = None
            return False

        logger.debug(f"Sent event: {payload[:200]}")
        return True

    async def send_events(self, events: Iterable[Union[BaseModel, Dict[str, Any]]]) -> bool:
        """Send events in order, stopping at the first failure."""
        for event in events:
            if not await self.send_event(event):
                return False
        return True

    async def close(self) -> None:
        """
        Close the WebSocket connection.
        """
        if self.websocket:
            await self.websocket.close()
            logger.info("Closed voice call WebSocket connection")
            self.websocket = None

    async def listen(self, on_event: EventHandler) -> None:
        """
        Receive events until the connection closes.

        Frames are decoded and passed to the handler one at a time, in the order
        they arrive. Frames that are not valid JSON objects are skipped.

        Args:
            on_event: Coroutine function called with each decoded event
        """
        if not self.websocket:
            logger.error("Cannot listen: Not connected")
            return

        try:
            async for message_data in self.websocket:
                try:
                    event = json.loads(message_data)
                except (TypeError, ValueError):
                    logger.warning(f"Received invalid JSON: {str(message_data)[:100]}")
                    continue

                if not isinstance(event, dict):
                    logger.warning(f"Ignoring non-object event: {str(message_data)[:100]}")
                    continue

                logger.debug(f"Received voice call event: {event.get('type')}")
                await on_event(event)

        except ConnectionClosed:
            logger.info("Voice call WebSocket connection closed by server")
        finally:
            self.websocket = None
