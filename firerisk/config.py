"""
Configuration Management for the Fire Risk Demonstrator

Environment-based configuration using Pydantic Settings.
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from .env file
    )

    # Application
    app_name: str = "Fire Risk Neural Demonstrator"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level for firerisk loggers")

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"
    cors_origins: List[str] = ["*"]

    # History
    history_capacity: int = Field(default=20, ge=1, description="Maximum risk history entries kept")

    # Network diagram canvas
    diagram_width: float = Field(default=500.0, gt=0)
    diagram_height: float = Field(default=400.0, gt=0)
    diagram_margin: float = Field(default=20.0, ge=0)
    edge_thickness_scale: float = Field(default=2.0, ge=0, description="Stroke width per unit of |weight|")

    @model_validator(mode="after")
    def check_diagram_margin(self) -> "Settings":
        """Margins must leave a drawable area inside the canvas."""
        if 2 * self.diagram_margin > min(self.diagram_width, self.diagram_height):
            raise ValueError(
                f"diagram_margin {self.diagram_margin} leaves no drawable area in a "
                f"{self.diagram_width}x{self.diagram_height} canvas"
            )
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
