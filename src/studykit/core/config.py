"""Configuration system for StudyKit.

Layered config loading (lowest to highest priority):
1. config/default.toml (shipped with package)
2. ~/.config/studykit/config.toml (user-level)
3. ./studykit.toml (project-level)
4. Environment variables (STUDYKIT_GEMINI__MODEL, GEMINI_API_KEY, etc.)
5. CLI flags
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_DEFAULT_CONFIG = _PACKAGE_ROOT / "config" / "default.toml"
_USER_CONFIG = Path.home() / ".config" / "studykit" / "config.toml"
_PROJECT_CONFIG = Path("studykit.toml")


class GeminiConfig(BaseModel):
    model: str = "gemini-3-flash-preview"
    tts_model: str = "gemini-2.5-flash-preview-tts"
    max_output_tokens: int = 8192
    inline_size_limit: int = 20 * 1024 * 1024  # bytes; larger files are uploaded
    poll_interval: float = 5.0  # seconds between file state checks
    poll_max_attempts: int = 120


class StudyConfig(BaseModel):
    source_language: str = "auto"  # "auto" or a language code
    target_language: str = "vi"
    generate_notes: bool = True
    generate_flashcards: bool = True


class DubConfig(BaseModel):
    voice: str = "Kore"
    trailing_margin: float = 2.0  # seconds of silence after the last line
    concurrency: int = Field(default=1, ge=1)


class SpeechConfig(BaseModel):
    rate: int = 170  # words per minute
    volume: float = 1.0


class StudyKitConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STUDYKIT_",
        env_nested_delimiter="__",
    )

    # Read from GEMINI_API_KEY / API_KEY as well as config files and CLI flags
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("api_key", "gemini_api_key"),
    )
    gemini: GeminiConfig = GeminiConfig()
    study: StudyConfig = StudyConfig()
    dub: DubConfig = DubConfig()
    speech: SpeechConfig = SpeechConfig()
    workspace_dir: Path = Path("./studykit_workspace")


def _load_toml(path: Path) -> dict:
    """Load a TOML file if it exists, return empty dict otherwise."""
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(**cli_overrides: object) -> StudyKitConfig:
    """Load configuration from all layers and merge.

    A missing API key is not an error here; it is reported when an AI
    call is attempted.

    Args:
        **cli_overrides: Direct overrides from CLI flags. Keys can be
            dot-separated (e.g. study.target_language="fr").
    """
    # Layer 1-3: TOML files
    config_data: dict = {}
    for path in (_DEFAULT_CONFIG, _USER_CONFIG, _PROJECT_CONFIG):
        layer = _load_toml(path)
        config_data = _deep_merge(config_data, layer)

    # Flatten 'general' section into top-level
    if "general" in config_data:
        general = config_data.pop("general")
        config_data = _deep_merge(config_data, general)

    # Apply CLI overrides (dot-separated keys)
    for key, value in cli_overrides.items():
        if value is None:
            continue
        parts = key.split(".")
        target = config_data
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value

    # Layer 4: env vars are handled by Pydantic BaseSettings
    return StudyKitConfig(**config_data)
