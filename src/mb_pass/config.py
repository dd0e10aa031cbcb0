"""Centralized application configuration."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from mb_pass.crypto import DEFAULT_N, MIN_N

DEFAULT_DATA_DIR = Path.home() / ".local" / "mb-pass"


class Config(BaseModel):
    """Application-wide configuration."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(description="Base directory for all application data")
    no_confirm: bool = Field(default=False, description="Skip the recipient confirmation before writing an entry")
    editor: str | None = Field(default=None, description="Editor command for multi-line input (falls back to $VISUAL/$EDITOR)")
    scrypt_n: int = Field(default=DEFAULT_N, ge=MIN_N, description="scrypt cost used when creating or re-keying the store")
    debug: bool = Field(default=False, description="Log at DEBUG level (includes insert mode selection)")

    @field_validator("scrypt_n")
    @classmethod
    def _power_of_two(cls, value: int) -> int:
        if value & (value - 1):
            raise ValueError("scrypt_n must be a power of two")
        return value

    @computed_field(description="Encrypted store file")
    @property
    def store_path(self) -> Path:
        """Encrypted store file."""
        return self.data_dir / "store.json"

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.data_dir / "config.toml"

    @computed_field(description="Log file")
    @property
    def log_path(self) -> Path:
        """Log file."""
        return self.data_dir / "pass.log"

    @staticmethod
    def build(data_dir: Path | None = None) -> "Config":
        """Build a Config from defaults and optional config.toml."""
        resolved_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        config_path = resolved_dir / "config.toml"

        kwargs: dict[str, Any] = {"data_dir": resolved_dir}
        if config_path.is_file():
            with config_path.open("rb") as f:
                toml_data = tomllib.load(f)
            if isinstance(toml_data.get("no_confirm"), bool):
                kwargs["no_confirm"] = toml_data["no_confirm"]
            if isinstance(toml_data.get("editor"), str) and toml_data["editor"]:
                kwargs["editor"] = toml_data["editor"]
            if isinstance(toml_data.get("scrypt_n"), int):
                kwargs["scrypt_n"] = toml_data["scrypt_n"]
            if isinstance(toml_data.get("debug"), bool):
                kwargs["debug"] = toml_data["debug"]

        return Config(**kwargs)
