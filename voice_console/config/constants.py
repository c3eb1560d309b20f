"""
Constants and configuration values used throughout the application.

This module defines constants that are used across different parts of the application,
providing a centralized location for configuration values and making it easier to
maintain consistent naming throughout the codebase.
"""

# Logger name used throughout the application
LOGGER_NAME = "voice_console"

# Inbound realtime event types (voice-call server /logs socket)
EVENT_TYPE_SESSION_CREATED = "session.created"
EVENT_TYPE_SPEECH_STARTED = "input_audio_buffer.speech_started"
EVENT_TYPE_ITEM_CREATED = "conversation.item.created"
EVENT_TYPE_TRANSCRIPTION_COMPLETED = (
    "conversation.item.input_audio_transcription.completed"
)
EVENT_TYPE_CONTENT_PART_ADDED = "response.content_part.added"
EVENT_TYPE_AUDIO_TRANSCRIPT_DELTA = "response.audio_transcript.delta"
EVENT_TYPE_OUTPUT_ITEM_DONE = "response.output_item.done"

# Snapshot message pushed to connected UIs
EVENT_TYPE_TRANSCRIPT_SNAPSHOT = "transcript.snapshot"

# Placeholder shown while the caller is still speaking
SPEECH_PLACEHOLDER_TEXT = "..."
FUNCTION_CALL_RESPONSE_PREFIX = "Function call response: "

# Call status values
CALL_STATUS_DISCONNECTED = "disconnected"
CALL_STATUS_CONNECTED = "connected"
CALL_STATUS_ACTIVE = "active"

# Session configuration defaults
DEFAULT_INSTRUCTIONS = (
    "You are a helpful AI assistant on a phone call. "
    "Answer the caller's questions clearly and concisely."
)
DEFAULT_VOICE = "alloy"
SUPPORTED_VOICES = ["alloy", "echo", "fable", "onyx", "nova", "shimmer"]

# Path of the event stream on the voice-call server
VOICE_CALL_LOGS_PATH = "/logs"
