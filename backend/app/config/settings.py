from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str | None = Field(None)
    DB_USER: str = Field("chat")
    DB_PASSWORD: str = Field("chat")
    DB_NAME: str = Field("chat_khanavadegi")
    DB_HOST: str = Field("postgres")
    DB_PORT: int = Field(5432)

    # App
    API_HOST: str = Field("0.0.0.0")
    API_PORT: int = Field(3021)
    DEBUG: bool = Field(False)
    LOG_LEVEL: str = Field("INFO")
    CLIENT_ORIGIN: str = Field("*")

    # File Storage Paths
    MEDIA_ROOT: str = Field("./storage/media")

    # Translation providers
    OLLAMA_URL: str | None = Field(None)
    OLLAMA_MODEL: str = Field("ollama2persian")
    GOOGLE_TRANSLATE_ENABLED: bool = Field(True)

    # Google Cloud
    GOOGLE_APPLICATION_CREDENTIALS: str | None = Field(None)
    GOOGLE_PROJECT_ID: str | None = Field(None)

    # Speech-to-text
    DEEPGRAM_API_KEY: str | None = Field(None)

    # Metrics
    METRICS_ENABLED: bool = Field(False)
    METRICS_PORT: int = Field(8001)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_file_encoding="utf-8"
    )

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL; DATABASE_URL wins over the DB_* parts."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


settings = Settings()
