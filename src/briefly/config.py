from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError


def _project_root() -> Path:
    """
    Resolve project root assuming this file lives in: <root>/src/briefly/config.py
    """
    return Path(__file__).resolve().parents[2]


class Settings(BaseModel):
    # --- Required ---
    openai_api_key: str = Field(..., min_length=10, description="OpenAI API key")

    # --- Optional / defaults ---
    openai_model: str = Field(default="gpt-4o-mini")
    variant: Literal["recipe", "narrative"] = "recipe"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    data_dir: Path = Field(default_factory=lambda: _project_root() / "data")
    debug_dir: Optional[Path] = None

    fetch_timeout_s: float = Field(default=20.0, gt=0)
    max_focus_chars: int = Field(default=24000, gt=0)
    min_text_chars: int = Field(default=50, ge=0)

    @property
    def records_file(self) -> Path:
        return self.data_dir / "records.jsonl"


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Loads environment variables (optionally from .env) and validates Settings.

    Called once at startup; clients built from the result are passed down
    explicitly instead of re-reading the environment per call.
    """
    if env_file is None:
        env_file = _project_root() / ".env"

    # Environment variables override .env
    if env_file.exists():
        load_dotenv(env_file, override=False)

    data = {
        "openai_api_key": os.getenv("OPENAI_API_KEY", ""),
        "openai_model": os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        "variant": os.getenv("BRIEFLY_VARIANT", "recipe"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "data_dir": os.getenv("DATA_DIR", str(_project_root() / "data")),
        "debug_dir": os.getenv("DEBUG_DIR") or None,
        "fetch_timeout_s": os.getenv("FETCH_TIMEOUT_S", "20"),
        "max_focus_chars": os.getenv("MAX_FOCUS_CHARS", "24000"),
        "min_text_chars": os.getenv("MIN_TEXT_CHARS", "50"),
    }

    try:
        settings = Settings(**data)
    except ValidationError as e:
        raise RuntimeError(
            "Invalid configuration. Ensure required environment variables are set.\n"
            "Required: OPENAI_API_KEY\n"
            f"Details:\n{e}"
        ) from e

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    return settings
