"""
Application-wide constants for configuration and tuning.

This file centralizes all magic numbers and configuration values
to enable easy tuning and maintain consistency across the backend.

Note: Environment-dependent settings (DB, API keys, provider URLs) belong in settings.py.
This file is for operational parameters that rarely change between environments.
"""

# ==============================================================================
# PERSONAS & LOCALES
# ==============================================================================

# The two fixed chat participants and their default locale
PERSONA_LOCALES: dict[str, str] = {
    "khadija": "fa",
    "brian": "en",
}

# Persian locale code (receives the endearment prefix on tone adjustment)
PERSIAN_LOCALE: str = "fa"

# English locale code
ENGLISH_LOCALE: str = "en"

# Human-readable language names used in LLM prompts
LANGUAGE_NAMES: dict[str, str] = {
    "fa": "Persian",
    "en": "English",
}

# ==============================================================================
# TRANSLATION CONTEXT
# ==============================================================================

# Max prior messages supplied as context (most recent first)
CONTEXT_MAX_LINES: int = 5

# ==============================================================================
# TONE ADJUSTMENT
# ==============================================================================

HEART_EMOJI: str = "❤️"

# Endearment prepended to Persian translations
PERSIAN_ENDEARMENT: str = "عزیزم"

# ==============================================================================
# CANDIDATE SCORING
# ==============================================================================

# Words that make a candidate sound affectionate, per target locale
AFFECTION_WORDS: dict[str, tuple[str, ...]] = {
    "fa": ("عزیزم", "جانم", "مهربانم"),
    "en": ("dear", "love", "sweetheart", "my heart"),
}

# Bonus for an endearment word in the candidate
AFFECTION_WORD_BONUS: float = 1.5

# Bonus for a heart emoji in the candidate
AFFECTION_HEART_BONUS: float = 1.0

# Penalty per character of length difference from the source text
LENGTH_DELTA_PENALTY_PER_CHAR: float = 0.01

# Penalty when the candidate equals the source text (case-insensitive)
IDENTITY_PENALTY: float = 5.0

# Bonus when the candidate shares a context line prefix
CONTEXT_AFFINITY_BONUS: float = 0.5

# Length of the context line prefix looked up in the candidate
CONTEXT_AFFINITY_PREFIX_CHARS: int = 6

# Penalty per second of provider latency
LATENCY_PENALTY_PER_SEC: float = 1.0

# Bonus for the empirically preferred provider on a direction
DIRECTIONAL_PROVIDER_BONUS: float = 0.5

# direction -> preferred provider
PREFERRED_PROVIDER_BY_DIRECTION: dict[str, str] = {
    "en-to-fa": "ollama",
}

# ==============================================================================
# PROVIDER TIMEOUTS
# ==============================================================================

# Ollama generate call timeout (seconds)
OLLAMA_TIMEOUT_SEC: float = 20.0

# Google Cloud Translation timeout (seconds)
GOOGLE_TRANSLATE_TIMEOUT_SEC: float = 5.0

# Deepgram transcription timeout (seconds)
DEEPGRAM_TIMEOUT_SEC: float = 25.0

# ==============================================================================
# SPEECH-TO-TEXT
# ==============================================================================

DEEPGRAM_ENDPOINT: str = "https://api.deepgram.com/v1/listen"

# Deepgram model per locale
DEEPGRAM_MODELS: dict[str, str] = {
    "fa": "nova-2",
    "en": "nova-2",
}

# Audio file extension -> MIME type sent to Deepgram
AUDIO_MIME_TYPES: dict[str, str] = {
    ".m4a": "audio/mp4",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
}

DEFAULT_AUDIO_MIME_TYPE: str = "audio/*"

# MIME type recorded on voice message attachments
VOICE_ATTACHMENT_MIME_TYPE: str = "audio/m4a"

# ==============================================================================
# DATABASE CONNECTION POOL
# ==============================================================================

# SQLAlchemy connection pool size
DB_POOL_SIZE: int = 10

# SQLAlchemy max overflow connections
DB_POOL_MAX_OVERFLOW: int = 20

# ==============================================================================
# API PAGINATION & LIMITS
# ==============================================================================

# Default message list page size
DEFAULT_MESSAGE_LIST_LIMIT: int = 50

# Maximum text message length
TEXT_MESSAGE_MAX_LENGTH: int = 4000

# Maximum reaction emoji length
REACTION_EMOJI_MAX_LENGTH: int = 8

# Upload limits
UPLOAD_MAX_FILE_BYTES: int = 25 * 1024 * 1024
UPLOAD_MAX_FILES: int = 6

# Upload read chunk size
UPLOAD_CHUNK_BYTES: int = 1024 * 1024

# ==============================================================================
# METRICS & MONITORING
# ==============================================================================

# Prometheus metrics server port
METRICS_SERVER_PORT: int = 8001
