"""
Handlers module for realtime events relayed by the voice-call server.

Each handler takes a decoded event, the current transcript snapshot and a clock,
and returns the next transcript snapshot. Handlers validate their event with the
matching Pydantic model and let validation errors propagate; the reducer decides
what a failure means for the stream.

Key components:
- session_handlers: session.created clears the transcript.
- input_handlers: caller speech placeholders and final input transcriptions.
- item_handlers: completed messages and function call outputs.
- response_handlers: streamed assistant text and finished function calls.

Usage examples:
```python
from datetime import datetime
from voice_console.handlers.input_handlers import handle_speech_started

transcript = handle_speech_started(
    {"type": "input_audio_buffer.speech_started", "item_id": "item_1"},
    (),
    datetime.now,
)
```
"""

# Handlers module initialization
