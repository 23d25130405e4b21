"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BridgeSettings(BaseSettings):
    """Virtual-tabletop bridge (query collaborator) configuration."""

    server_path: str | None = Field(
        default=None,
        description="Path to the bridge MCP server entry point (e.g. dist/index.js). "
                    "Required for the get/list/serve commands.",
    )
    command: str = Field(
        default="node", description="Executable used to launch the bridge server"
    )
    args: list[str] = Field(
        default_factory=list,
        description="Extra arguments passed after server_path. "
                    "Set via BRIDGE_ARGS='[\"--port\", \"31415\"]'",
    )
    namespace: str = Field(
        default="foundry-mcp-bridge",
        description="Prefix the bridge registers its queries under, "
                    "e.g. 'foundry-mcp-bridge.getCharacterInfo'.",
    )

    model_config = SettingsConfigDict(env_prefix="BRIDGE_")


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    bridge: BridgeSettings = Field(default_factory=BridgeSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Loaded settings instance
    """
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
