"""
Voice Processing Module

Background transcription + translation of voice messages.

Usage:
    from app.services.voice import VoiceProcessingPipeline, VoiceMessageParams
"""

from app.services.voice.pipeline import (
    VoiceProcessingPipeline,
    VoiceMessageParams,
    VoiceRun,
    VoiceState,
)

__all__ = [
    "VoiceProcessingPipeline",
    "VoiceMessageParams",
    "VoiceRun",
    "VoiceState",
]
