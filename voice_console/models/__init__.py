"""
Models module for data structures used by the voice call console.

Key components:
- transcript: immutable ConversationItem and ContentFragment models, the
  ItemType/Role/Status enums, and small helpers for working with transcript
  tuples.
- realtime_events: Pydantic models for the inbound realtime events the reducer
  consumes and the outbound events the console sends back.

Usage examples:
```python
from voice_console.models.realtime_events import SpeechStartedEvent
from voice_console.models.transcript import ConversationItem, ItemType

event = SpeechStartedEvent(type="input_audio_buffer.speech_started", item_id="item_1")
item = ConversationItem(id=event.item_id, type=ItemType.MESSAGE)
```
"""

from voice_console.models.realtime_events import (
    AudioTranscriptDeltaEvent,
    ContentPartAddedEvent,
    ConversationItemCreateEvent,
    FunctionCallOutputItem,
    ItemCreatedEvent,
    OutgoingEvent,
    OutputItemDoneEvent,
    RealtimeEvent,
    RealtimeItem,
    ResponseCreateEvent,
    SessionConfig,
    SessionCreatedEvent,
    SessionUpdateEvent,
    SpeechStartedEvent,
    TranscriptionCompletedEvent,
)
from voice_console.models.transcript import (
    ContentFragment,
    ConversationItem,
    ItemType,
    Role,
    Status,
    Transcript,
)
