"""Options for a focus crop, with defaults loaded using pydantic-settings."""

from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from focuspoint.geometry import FocusPoint

SIZE_PLACEHOLDER = "[size]"


class Settings(BaseSettings):
    """Default crop options loaded from FOCUSPOINT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FOCUSPOINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Focus, in percent of the image size
    focus_x: float = Field(default=50.0, allow_inf_nan=False)
    focus_y: float = Field(default=50.0, allow_inf_nan=False)

    # Resampling
    quality: int = Field(default=3, ge=0, le=3)
    alpha: bool = False
    unsharp_amount: float = Field(default=0.0, ge=0, le=500)
    unsharp_threshold: float = Field(default=0.0, ge=0, le=100)

    # Encoding
    jpeg_quality: int = Field(default=100, ge=1, le=100)
    progressive: bool = True

    # Output naming
    prefix: str = ""
    suffix: str = f"-{SIZE_PLACEHOLDER}-focused"

    quiet: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class FocusOptions(BaseModel):
    """Immutable options for one focus crop request.

    Focus coordinates must be finite but are not range-checked here; they are
    clamped to [0, 100] when used. Every other bounded field is validated on
    construction.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    focus_x: float = Field(default=50.0, allow_inf_nan=False)
    focus_y: float = Field(default=50.0, allow_inf_nan=False)
    quality: int = Field(default=3, ge=0, le=3)
    alpha: bool = False
    unsharp_amount: float = Field(default=0.0, ge=0, le=500)
    unsharp_threshold: float = Field(default=0.0, ge=0, le=100)
    jpeg_quality: int = Field(default=100, ge=1, le=100)
    progressive: bool = True
    prefix: str = ""
    suffix: str = f"-{SIZE_PLACEHOLDER}-focused"
    quiet: bool = False

    @property
    def focus(self) -> FocusPoint:
        """Focus point built from focus_x and focus_y."""
        return FocusPoint(self.focus_x, self.focus_y)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: Any) -> "FocusOptions":
        """Build options from settings, replacing any field given a non-None override.

        Args:
            settings: Settings to start from (default: cached environment settings)
            **overrides: Field values that take precedence over settings

        Returns:
            FocusOptions instance
        """
        settings = settings or get_settings()
        values = settings.model_dump(include=set(cls.model_fields))
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
