"""
Pydantic models for the realtime events relayed by the voice-call server.

Inbound models describe the subset of the provider's realtime protocol that the
transcript reducer understands. They accept unknown fields, since the provider
sends far more than the console needs, but reject payloads whose required fields
are missing or have the wrong type. Outbound models are the events the console
sends back over the same socket.
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from voice_console.config.constants import (
    DEFAULT_INSTRUCTIONS,
    DEFAULT_VOICE,
    SUPPORTED_VOICES,
)
from voice_console.models.transcript import ContentFragment


class RealtimeItem(BaseModel):
    """Conversation item as it appears inside realtime events."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    type: str
    role: Optional[str] = None
    content: Optional[List[ContentFragment]] = None
    status: Optional[str] = None
    call_id: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None
    output: Optional[str] = None


# Inbound events
class RealtimeEvent(BaseModel):
    """Base model for all inbound realtime events."""
    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="Event type discriminator")
    event_id: Optional[str] = None


class SessionCreatedEvent(RealtimeEvent):
    type: Literal["session.created"]


class SpeechStartedEvent(RealtimeEvent):
    type: Literal["input_audio_buffer.speech_started"]
    item_id: str


class ItemCreatedEvent(RealtimeEvent):
    type: Literal["conversation.item.created"]
    item: RealtimeItem


class TranscriptionCompletedEvent(RealtimeEvent):
    type: Literal["conversation.item.input_audio_transcription.completed"]
    item_id: str
    transcript: str


class ContentPartAddedEvent(RealtimeEvent):
    type: Literal["response.content_part.added"]
    item_id: str
    output_index: StrictInt
    part: ContentFragment


class AudioTranscriptDeltaEvent(RealtimeEvent):
    type: Literal["response.audio_transcript.delta"]
    item_id: str
    output_index: StrictInt
    delta: Optional[str] = None


class OutputItemDoneEvent(RealtimeEvent):
    type: Literal["response.output_item.done"]
    item: RealtimeItem


# Outbound events
class FunctionCallOutputItem(BaseModel):
    """Item carrying the caller-supplied result of a function call."""

    type: Literal["function_call_output"] = "function_call_output"
    call_id: str
    output: str = Field(..., description="JSON-serialized response text")


class ConversationItemCreateEvent(BaseModel):
    type: Literal["conversation.item.create"] = "conversation.item.create"
    item: FunctionCallOutputItem


class ResponseCreateEvent(BaseModel):
    """Asks the model to continue generating after a tool response."""

    type: Literal["response.create"] = "response.create"


class SessionConfig(BaseModel):
    """Session settings editable from the console."""

    instructions: str = DEFAULT_INSTRUCTIONS
    voice: str = DEFAULT_VOICE

    @field_validator("voice")
    def validate_voice(cls, v):
        """Validate that the voice is one the provider offers."""
        if v not in SUPPORTED_VOICES:
            raise ValueError(f"Unsupported voice: {v}")
        return v


class SessionUpdateEvent(BaseModel):
    type: Literal["session.update"] = "session.update"
    session: SessionConfig


# Union type for all events the console sends
OutgoingEvent = Union[
    ConversationItemCreateEvent,
    ResponseCreateEvent,
    SessionUpdateEvent,
]
