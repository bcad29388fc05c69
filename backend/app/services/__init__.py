"""Business Logic Services.

This package contains all service modules that implement the core
business logic of the two-persona chat backend.

Service Categories:
- Translation: provider race, candidate scoring, tone adjustment
- Voice: background transcription/translation of voice messages
- Analytics: provider selection counters
- Connection: WebSocket live-update fan-out
- Core: Repositories

External integrations:
- translation.providers: Ollama, Google Cloud Translation
- speech: Deepgram speech-to-text
"""
