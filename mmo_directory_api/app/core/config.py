"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all; override them via
environment variables in a real deployment.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "MMO Admin Directory API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Location of the JSON collection holding every Admin/KDV record.  A
    # relative path is resolved against the project root by
    # ``get_data_path``.
    data_file: str = os.getenv("DATA_FILE", "data/users.json")

    # Comma‑separated list of origins allowed to call the API from a
    # browser.  The default lets the frontend dev server connect.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "5083"))

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_data_path() -> Path:
    """Compute the path to the JSON collection file.

    If ``settings.data_file`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root (the directory
    containing the ``mmo_directory_api`` package).
    """
    data_file = Path(settings.data_file)
    if data_file.is_absolute():
        return data_file
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return (base_dir / data_file).resolve()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
