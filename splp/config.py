"""
Validator configuration management
"""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validator settings"""

    model_config = SettingsConfigDict(env_prefix="SPLP_", env_file=".env")

    # Paths
    project_root: Path = Path(__file__).parent.parent
    log_dir: Path = project_root / "logs"

    # Logging
    log_to_file: bool = False

    # Session bookkeeping
    history_size: int = 256  # transition records kept per session

    # Grammar compatibility switches (strict by default)
    allow_empty_version: bool = False  # accept "VERSION " with no digits
    legacy_data_alphabet: bool = False  # also accept ':' and ';' in data tokens
    lenient_version_direction: bool = False  # skip B->A check for VERSION replies


settings = Settings()
