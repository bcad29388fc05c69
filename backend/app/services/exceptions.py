"""
Chat Service Exceptions

Custom exceptions for translation, transcription, and storage errors.
"""


class ChatServiceError(Exception):
    """Base exception for chat service errors"""
    pass


class ProviderError(ChatServiceError):
    """Raised when a single translation provider attempt fails"""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class NoCandidatesError(ChatServiceError):
    """Raised when no translation provider produced a candidate"""
    pass


class TranscriptionError(ChatServiceError):
    """Raised inside transcription adapters; never escapes them"""
    pass


class PersistenceError(ChatServiceError):
    """Raised when the message or analytics store fails"""
    pass


class AnalyticsRecordingError(ChatServiceError):
    """Raised when a provider selection cannot be recorded"""
    pass


class MessageNotFoundError(ChatServiceError):
    """Raised when a message id does not exist"""
    pass
