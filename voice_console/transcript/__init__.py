"""
Transcript reconstruction for the voice call console.

Key components:
- reducer: the pure ``reduce(transcript, event)`` function that folds realtime
  events into an ordered transcript, plus ``replay`` for whole sequences.
- tool_responses: ToolResponseCache, which keeps operator-entered results for
  pending function calls and builds the events that submit them.
- call_session: CallSession, the single writer holding the latest snapshot and
  the call status.

Usage examples:
```python
from voice_console.transcript import reduce, replay

transcript = reduce((), {"type": "input_audio_buffer.speech_started", "item_id": "a"})
transcript = replay(events)
```
"""

from voice_console.transcript.call_session import CallSession
from voice_console.transcript.reducer import reduce, replay
from voice_console.transcript.tool_responses import FunctionCallView, ToolResponseCache

__all__ = ["CallSession", "FunctionCallView", "ToolResponseCache", "reduce", "replay"]
