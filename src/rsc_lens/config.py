"""Configuration management for RSC Lens.

Loads environment variables and provides centralized config access.
Only the CLI reads configuration; the analyzer itself has none.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

__version__ = "0.1.0"

DEFAULT_EXCLUDED_DIRS = "node_modules,.git,.next,dist,build,out,coverage"


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self, env_path: Path | None = None):
        """Initialize config by loading .env file.

        Args:
            env_path: Explicit .env file. Defaults to ./.env in the working directory.
        """
        load_dotenv(env_path or Path.cwd() / ".env")

    @property
    def marker_label(self) -> str:
        """Text rendered after each client component usage.

        Returns:
            Label string, "Client Component" by default
        """
        return os.getenv("RSC_LENS_LABEL", "Client Component")

    @property
    def marker_color(self) -> str:
        """Rich color for the marker label.

        Returns:
            Rich color name or hex string
        """
        return os.getenv("RSC_LENS_COLOR", "grey62")

    @property
    def excluded_dirs(self) -> set[str]:
        """Directory names skipped by the scan command.

        Returns:
            Set of directory names
        """
        raw = os.getenv("RSC_LENS_EXCLUDE", DEFAULT_EXCLUDED_DIRS)
        return {part.strip() for part in raw.split(",") if part.strip()}


# Singleton instance
_config = None


def get_config() -> Config:
    """Get or create singleton Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the cached Config so the next get_config() re-reads the environment."""
    global _config
    _config = None
