"""
Services module for external connections of the voice call console.

Key components:
- voice_call_client: VoiceCallClient, the connection handle for the voice-call
  server's realtime event socket, and logs_url_from_public_url to derive its URL.

Usage examples:
```python
from voice_console.services.voice_call_client import (
    VoiceCallClient,
    logs_url_from_public_url,
)

client = VoiceCallClient(logs_url_from_public_url("https://calls.example.com"))
if await client.connect():
    await client.listen(handle_event)
```
"""

from voice_console.services.voice_call_client import (
    VoiceCallClient,
    logs_url_from_public_url,
)

__all__ = ["VoiceCallClient", "logs_url_from_public_url"]
