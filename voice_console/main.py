"""
FastAPI server for the voice call console.

On startup the server connects to the voice-call server's realtime event socket
(VOICE_CALL_PUBLIC_URL) and folds every event into the call transcript. Console
UIs read the transcript over HTTP or receive it live on /ws, answer pending
function calls, and update the session instructions and voice.
"""

import asyncio
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Optional

import dotenv
from fastapi import FastAPI, HTTPException, WebSocket
from pydantic import BaseModel

from voice_console.config.logging_config import configure_logging
from voice_console.models.realtime_events import SessionConfig, SessionUpdateEvent
from voice_console.services.voice_call_client import (
    VoiceCallClient,
    logs_url_from_public_url,
)
from voice_console.transcript.call_session import CallSession
from voice_console.websocket_manager import WebSocketManager

# Load environment variables from .env file if it exists
env_path = Path(".") / ".env"
if env_path.exists():
    dotenv.load_dotenv(env_path)

# Configure logging
logger = configure_logging()

# Get configuration from environment variables
PORT = int(os.getenv("PORT", "8000"))
HOST = os.getenv("HOST", "0.0.0.0")

call_session = CallSession()
websocket_manager = WebSocketManager(call_session)
voice_call_client: Optional[VoiceCallClient] = None


class ToolResponseRequest(BaseModel):
    """Operator-entered response for a pending function call."""

    response: str


async def handle_voice_call_event(event: Dict[str, Any]) -> None:
    """Fold one voice-call event into the transcript and push the new snapshot."""
    previous = call_session.transcript
    previous_status = call_session.call_status
    call_session.apply_event(event)
    if call_session.transcript is not previous or call_session.call_status != previous_status:
        await websocket_manager.broadcast()


async def run_voice_call_client(public_url: str) -> None:
    """Connect to the voice-call server and consume its events until it closes."""
    global voice_call_client

    try:
        url = logs_url_from_public_url(public_url)
    except ValueError as e:
        logger.error(f"Cannot connect to voice call server: {e}")
        return

    client = VoiceCallClient(url)
    voice_call_client = client
    if not await client.connect():
        call_session.mark_disconnected()
        return

    call_session.mark_connected()
    await websocket_manager.broadcast()

    await client.listen(handle_voice_call_event)

    call_session.mark_disconnected()
    await websocket_manager.broadcast()


@asynccontextmanager
async def lifespan(app: FastAPI):
    listen_task = None
    public_url = os.getenv("VOICE_CALL_PUBLIC_URL")
    if public_url:
        listen_task = asyncio.create_task(run_voice_call_client(public_url))
    else:
        logger.warning("VOICE_CALL_PUBLIC_URL not set, not connecting to voice call server")

    yield

    if listen_task:
        listen_task.cancel()
        try:
            await listen_task
        except asyncio.CancelledError:
            logger.debug("Voice call listener cancelled")
    if voice_call_client:
        await voice_call_client.close()


# Create FastAPI application
app = FastAPI(
    title="Voice Call Console",
    description="Live transcript and function call console for AI phone calls",
    version="1.0.0",
    lifespan=lifespan,
)


def _connected_client() -> VoiceCallClient:
    if voice_call_client is None or not voice_call_client.is_connected:
        raise HTTPException(status_code=503, detail="Voice call server not connected")
    return voice_call_client


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint pushing transcript snapshots to console UIs."""
    await websocket_manager.handle_websocket(websocket)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring system status.

    Returns:
        dict: Status information including the voice call connection state.
    """
    return {
        "status": "healthy",
        "voice_call_url_configured": bool(os.getenv("VOICE_CALL_PUBLIC_URL")),
        "voice_call_connected": bool(voice_call_client and voice_call_client.is_connected),
        "call_status": call_session.call_status,
        "console_connections": len(websocket_manager.connections),
    }


@app.get("/")
async def root():
    """Root endpoint to display basic information about the API."""
    return {
        "name": "Voice Call Console",
        "description": "Live transcript and function call console for AI phone calls",
        "version": "1.0.0",
        "endpoints": {
            "/ws": "WebSocket pushing transcript snapshots",
            "/health": "Health check endpoint",
            "/api/transcript": "Current call transcript",
            "/api/function-calls": "Function calls and their responses",
            "/api/session": "Update session instructions and voice",
        },
    }


@app.get("/api/voice-call-url")
async def get_voice_call_url():
    return {"url": os.getenv("VOICE_CALL_PUBLIC_URL", "")}


@app.get("/api/transcript")
async def get_transcript():
    return call_session.snapshot()


@app.get("/api/function-calls")
async def get_function_calls():
    views = call_session.tool_responses.function_calls(call_session.transcript)
    return {
        "function_calls": [
            {
                **view.model_dump(),
                "draft": call_session.tool_responses.get_response(view.call_id or ""),
            }
            for view in views
        ]
    }


@app.put("/api/function-calls/{call_id}/response")
async def set_function_call_response(call_id: str, request: ToolResponseRequest):
    """Store the operator's draft response for a pending function call."""
    if not call_session.tool_responses.is_pending(call_session.transcript, call_id):
        raise HTTPException(
            status_code=409, detail=f"Function call is not awaiting a response: {call_id}"
        )
    call_session.tool_responses.set_response(call_id, request.response)
    return {"call_id": call_id, "response": request.response}


@app.post("/api/function-calls/{call_id}/submit")
async def submit_function_call_response(call_id: str):
    """Send the stored response for a pending function call and resume the model."""
    try:
        events = call_session.tool_responses.build_submission(
            call_session.transcript, call_id
        )
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    client = _connected_client()
    if not await client.send_events(events):
        raise HTTPException(status_code=503, detail="Failed to send function call response")

    call_session.tool_responses.discard(call_id)
    return {"call_id": call_id, "submitted": True}


@app.post("/api/session")
async def update_session(config: SessionConfig):
    """Send new session instructions and voice to the voice call server."""
    client = _connected_client()
    if not await client.send_event(SessionUpdateEvent(session=config)):
        raise HTTPException(status_code=503, detail="Failed to send session update")

    logger.info(f"Session updated with voice: {config.voice}")
    return {"updated": True, "session": config.model_dump()}


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
