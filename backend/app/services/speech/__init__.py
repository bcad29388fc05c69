"""
Speech Services Package

Exports the transcription adapter and its result type.
"""

from app.services.speech.models import TranscriptionResult
from app.services.speech.deepgram import DeepgramTranscriber

__all__ = [
    "TranscriptionResult",
    "DeepgramTranscriber",
]
