"""Configuration management for the SEO Research Copilot."""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SourceSettings(BaseSettings):
    """Public research source endpoints and HTTP behaviour."""

    model_config = SettingsConfigDict(env_prefix="SOURCE_")

    user_agent: str = Field(
        default="ContentGenerator/1.0",
        description="Environment variable: SOURCE_USER_AGENT",
    )
    request_timeout: float = Field(
        default=15.0, gt=0, description="Environment variable: SOURCE_REQUEST_TIMEOUT"
    )
    duckduckgo_url: str = Field(
        default="https://api.duckduckgo.com/",
        description="Environment variable: SOURCE_DUCKDUCKGO_URL",
    )
    wikipedia_summary_url: str = Field(
        default="https://en.wikipedia.org/api/rest_v1/page/summary",
        description="Environment variable: SOURCE_WIKIPEDIA_SUMMARY_URL",
    )
    wikipedia_search_url: str = Field(
        default="https://en.wikipedia.org/w/api.php",
        description="Environment variable: SOURCE_WIKIPEDIA_SEARCH_URL",
    )
    reddit_search_url: str = Field(
        default="https://www.reddit.com/search.json",
        description="Environment variable: SOURCE_REDDIT_SEARCH_URL",
    )
    pubmed_search_url: str = Field(
        default="https://eutils.ncbi.nlm.nih.gov/entrez/eutils/esearch.fcgi",
        description="Environment variable: SOURCE_PUBMED_SEARCH_URL",
    )


class JinaSettings(BaseSettings):
    """Jina AI reader, search and grounding configuration."""

    model_config = SettingsConfigDict(env_prefix="JINA_")

    api_key: Optional[str] = Field(
        default=None, description="Environment variable: JINA_API_KEY"
    )
    reader_url: str = Field(
        default="https://r.jina.ai", description="Environment variable: JINA_READER_URL"
    )
    search_url: str = Field(
        default="https://s.jina.ai", description="Environment variable: JINA_SEARCH_URL"
    )
    grounding_url: str = Field(
        default="https://g.jina.ai",
        description="Environment variable: JINA_GROUNDING_URL",
    )
    max_seed_urls: int = Field(
        default=5, ge=1, le=20, description="Environment variable: JINA_MAX_SEED_URLS"
    )


class PerplexitySettings(BaseSettings):
    """Perplexity real-time research configuration."""

    model_config = SettingsConfigDict(env_prefix="PERPLEXITY_")

    api_key: Optional[str] = Field(
        default=None, description="Environment variable: PERPLEXITY_API_KEY"
    )
    url: str = Field(
        default="https://api.perplexity.ai/chat/completions",
        description="Environment variable: PERPLEXITY_URL",
    )
    model: str = Field(
        default="llama-3.1-sonar-large-128k-online",
        description="Environment variable: PERPLEXITY_MODEL",
    )
    temperature: float = Field(
        default=0.2, description="Environment variable: PERPLEXITY_TEMPERATURE"
    )
    max_tokens: int = Field(
        default=1500, description="Environment variable: PERPLEXITY_MAX_TOKENS"
    )


class ErrorHandlingSettings(BaseSettings):
    """Error handling configuration."""

    max_retry_attempts: int = Field(
        default=1, ge=1, le=5, description="Environment variable: MAX_RETRY_ATTEMPTS"
    )
    retry_backoff_factor: float = Field(
        default=1.0, ge=0.0, description="Environment variable: RETRY_BACKOFF_FACTOR"
    )


class MonitoringSettings(BaseSettings):
    """Logging configuration."""

    log_level: str = Field(
        default="INFO", description="Environment variable: LOG_LEVEL"
    )
    log_format: str = Field(
        default="console", description="Environment variable: LOG_FORMAT"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of {valid_formats}")
        return v.lower()


class Settings(BaseSettings):
    """Main application settings."""

    debug: bool = Field(
        default=False, description="Environment variable: DEBUG (forces DEBUG logging)"
    )

    sources: SourceSettings = Field(default_factory=SourceSettings)
    jina: JinaSettings = Field(default_factory=JinaSettings)
    perplexity: PerplexitySettings = Field(default_factory=PerplexitySettings)
    error_handling: ErrorHandlingSettings = Field(default_factory=ErrorHandlingSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance - initialized lazily
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get application settings."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global _settings
    _settings = Settings()
    return _settings
