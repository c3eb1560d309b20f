"""
Configuration module for the voice call console.

Key components:
- constants: realtime event type names, call status values, session defaults
  and the logger name shared by every module.
- logging_config: console and rotating-file logging setup.

Usage examples:
```python
from voice_console.config.constants import EVENT_TYPE_SESSION_CREATED
from voice_console.config.logging_config import configure_logging

logger = configure_logging()
logger.info("Console started")
```
"""

# Config module initialization
