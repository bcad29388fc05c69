from dataclasses import dataclass


@dataclass(frozen=True)
class TranscriptionResult:
    """
    Transcript of a voice message.

    Attributes:
        text: Transcribed text
        confidence: Recognizer confidence in [0, 1]
        locale: Locale the audio was transcribed in
    """
    text: str
    confidence: float
    locale: str
