"""Library settings and configuration management."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.options import TrieInsertionOptions

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "console")


class Settings(BaseSettings):
    """Settings with environment variable support."""

    # Default insertion options
    include_non_prefixed_matches: bool = Field(default=False)
    include_case_insensitive_matches: bool = Field(default=False)
    include_diacritics_insensitive_matches: bool = Field(default=False)

    # Index limits
    max_results: int = Field(default=10, gt=0)
    max_key_length: int = Field(default=256, gt=0)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    model_config = SettingsConfigDict(
        env_prefix="SUBSTRING_TRIE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        return value

    def insertion_options(self) -> TrieInsertionOptions:
        """Fold the boolean insertion flags into a single options value."""
        options = TrieInsertionOptions.NONE
        if self.include_non_prefixed_matches:
            options |= TrieInsertionOptions.INCLUDE_NON_PREFIXED_MATCHES
        if self.include_case_insensitive_matches:
            options |= TrieInsertionOptions.INCLUDE_CASE_INSENSITIVE_MATCHES
        if self.include_diacritics_insensitive_matches:
            options |= TrieInsertionOptions.INCLUDE_DIACRITICS_INSENSITIVE_MATCHES
        return options


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
