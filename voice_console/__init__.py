"""
Voice Call Console - live transcript and function calls for AI phone calls

This application watches a phone call handled by an AI realtime model. A
voice-call server relays the call's realtime events over a WebSocket; the console
rebuilds the conversation transcript from that stream, including function calls
the model makes mid-response, and lets an operator supply the results of those
calls.

Architecture Overview:
- VoiceCallClient holds the connection to the voice-call server's /logs socket
- A pure reducer folds each realtime event into an immutable transcript snapshot
- CallSession is the single writer of transcript state
- FastAPI exposes the transcript over HTTP and pushes snapshots to UIs on /ws

Key Components:
- config: Constants and logging setup
- handlers: One handler per realtime event type
- models: Transcript items and realtime event schemas
- services: The voice-call socket client
- transcript: Reducer, tool-response cache and call session state
- websocket_manager: Snapshot broadcaster for console UIs

Getting Started:
1. Set up environment variables:
   - VOICE_CALL_PUBLIC_URL: Public URL of the voice-call server
   - PORT: Port to run the server on (default 8000)
   - HOST: Host to bind the server to (default 0.0.0.0)
   - LOG_LEVEL: Logging level (default INFO)
   - LOG_DIR: Log file directory (default logs, empty to log to stdout only)

2. Start the server:
   ```bash
   python run.py
   ```
"""
