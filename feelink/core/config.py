"""
Unified settings

Type-safe settings built on pydantic-settings
- read from environment variables and .env
- validated on load
- defaults for local development
"""

from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Every settings class reads .env, not just the top-level one
ENV_FILE_CONFIG = dict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class HuggingFaceSettings(BaseSettings):
    """Remote emotion classifier settings"""

    model_config = SettingsConfigDict(env_prefix="HF_", populate_by_name=True, **ENV_FILE_CONFIG)

    enabled: bool = Field(default=False, alias="ENABLE_HF", description="Use the hosted emotion classifier")
    api_token: str = Field(default="", description="Hugging Face API token")
    model: str = Field(
        default="j-hartmann/emotion-english-distilroberta-base",
        description="Hosted model id",
    )
    base_url: str = Field(
        default="https://api-inference.huggingface.co/models",
        description="Inference API base URL",
    )
    timeout: float = Field(default=10.0, description="Request timeout (seconds)")
    retry_cooldown: float = Field(default=20.0, description="Wait before the cold-start retry (seconds)")
    monthly_limit: int = Field(default=500, description="Remote calls allowed per calendar month")

    @field_validator("monthly_limit")
    @classmethod
    def validate_monthly_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError("monthly_limit must not be negative")
        return v

    @property
    def is_configured(self) -> bool:
        """Both toggled on and holding a credential"""
        return bool(self.enabled and self.api_token)


class QuotaSettings(BaseSettings):
    """Quota counter store settings"""

    model_config = SettingsConfigDict(env_prefix="QUOTA_", **ENV_FILE_CONFIG)

    redis_url: str = Field(default="", description="Redis URL; empty keeps the counter in-process")
    key_prefix: str = Field(default="feelink:hf_quota", description="Counter key prefix")


class StorageSettings(BaseSettings):
    """Session and activity store settings"""

    model_config = SettingsConfigDict(env_prefix="", populate_by_name=True, **ENV_FILE_CONFIG)

    sessions_table: str = Field(default="FeelinkSessions", alias="SESSIONS_TABLE", description="Session table name")
    activities_table: str = Field(
        default="",
        alias="ACTIVITIES_TABLE",
        description="Activities JSON file; empty disables the store",
    )


class FeelinkSettings(BaseSettings):
    """Feelink settings"""

    model_config = SettingsConfigDict(populate_by_name=True, **ENV_FILE_CONFIG)

    data_dir: str = Field(default="data", alias="FEELINK_DATA_DIR", description="Data directory")
    log_level: str = Field(default="INFO", alias="FEELINK_LOG_LEVEL", description="Log level")

    # Advisory only: reported in responses, the decision logic ignores it
    enable_openai: bool = Field(default=False, alias="ENABLE_OPENAI", description="LLM fallback toggle")

    huggingface: HuggingFaceSettings = Field(default_factory=HuggingFaceSettings)
    quota: QuotaSettings = Field(default_factory=QuotaSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    api_host: str = Field(default="0.0.0.0", alias="API_HOST", description="API server host")
    api_port: int = Field(default=8000, alias="API_PORT", description="API server port")

    @classmethod
    def load(cls) -> "FeelinkSettings":
        """Load settings including the sub-settings"""
        return cls(
            huggingface=HuggingFaceSettings(),
            quota=QuotaSettings(),
            storage=StorageSettings(),
        )


@lru_cache()
def get_settings() -> FeelinkSettings:
    """
    Get the cached settings

    Example:
        settings = get_settings()
        print(settings.huggingface.monthly_limit)
    """
    return FeelinkSettings.load()


def reload_settings() -> FeelinkSettings:
    """Reload settings"""
    get_settings.cache_clear()
    return get_settings()
