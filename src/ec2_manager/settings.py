# src/ec2_manager/settings.py
from typing import Optional
from functools import lru_cache

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single source of truth for all ec2-manager settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from ec2_manager.settings import get_settings
        settings = get_settings()
        interval = settings.poll_interval_seconds
    """

    # Application Settings
    app_name: str = Field(
        default="ec2-manager",
        description="Application name"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default="aws-prod",
        description="Deployment mode: local-dev, aws-mock, or aws-prod"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # State polling
    poll_interval_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Seconds between instance state queries while waiting"
    )

    max_wait_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Ceiling for a single wait on an instance state transition"
    )

    deadline_margin_seconds: float = Field(
        default=5.0,
        ge=0,
        description="Time reserved before the Lambda deadline to report a cancellation"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('deployment_mode', mode='before')
    @classmethod
    def normalize_deployment_mode(cls, v):
        """Normalize deployment mode values for backwards compatibility."""
        if v:
            mode_mapping = {
                "local-mock": "local-dev",
                "cloud": "aws-prod",
            }
            return mode_mapping.get(v, v)
        return v

    @field_validator('deployment_mode')
    @classmethod
    def validate_deployment_mode(cls, v):
        """Validate deployment mode is one of the allowed values."""
        valid_modes = ["local-dev", "aws-mock", "aws-prod"]
        if v not in valid_modes:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {valid_modes}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and validate the logging level name."""
        level = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if level not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return level

    @field_validator('aws_endpoint_url', mode='after')
    @classmethod
    def set_endpoint_url_based_on_mode(cls, v, info: ValidationInfo):
        """Auto-set endpoint URL based on deployment mode if not explicitly provided."""
        if v is None and info.data.get('deployment_mode') in ["local-dev", "aws-mock"]:
            return "http://localhost:5000"
        return v

    @field_validator('aws_access_key_id', 'aws_secret_access_key', mode='after')
    @classmethod
    def set_mock_credentials_for_local_modes(cls, v, info: ValidationInfo):
        """Auto-set mock credentials for local modes if not provided."""
        if v is None and info.data.get('deployment_mode') in ["local-dev", "aws-mock"]:
            return "mock"
        return v

    @property
    def uses_local_endpoint(self) -> bool:
        return self.deployment_mode in ["local-dev", "aws-mock"]

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=(".env", ".env.local-dev", ".env.aws-mock", ".env.aws-prod"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        validate_default=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
