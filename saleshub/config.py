"""
Configuration management with Pydantic Settings
Loads from .env file with validation and defaults
"""

from typing import Optional, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with validation"""

    # Supabase (auth + PostgREST)
    supabase_url: str = Field(default="http://localhost:54321", description="Supabase project URL")
    supabase_service_role_key: Optional[str] = Field(None, description="Supabase service role key")
    supabase_anon_key: Optional[str] = Field(None, description="Supabase anon key")
    supabase_timeout_seconds: float = Field(default=10.0, description="Supabase request timeout")
    sessions_table: str = Field(
        default="sales_assistant_sessions",
        description="Table for persisted sales assistant sessions"
    )

    # LLM providers
    google_ai_api_key: Optional[str] = Field(None, description="Google AI (Gemini) API Key")
    gemini_model: str = Field(default="gemini-2.5-flash", description="Gemini model")
    deepseek_api_key: Optional[str] = Field(None, description="DeepSeek API Key")
    deepseek_model: str = Field(default="deepseek-chat", description="DeepSeek model")
    llm_timeout_seconds: float = Field(default=30.0, description="LLM request timeout")
    llm_max_retries: int = Field(default=1, description="Retries on transport errors")

    # Environment
    environment: str = Field(default="development", description="Environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        if v not in ["development", "production", "testing"]:
            raise ValueError("Environment must be development, production, or testing")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("Invalid log level")
        return v

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    model_config = {
        "extra": "ignore",  # Ignore extra fields from .env
        "env_file": ".env",
        "case_sensitive": False
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings"""
    return settings
