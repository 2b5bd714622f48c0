import codecs
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .history import HISTORY_PATH

CONFIG_PATH = Path.home() / ".qr_base45.json"
OUTPUT_FORMATS = ["text", "hex"]

ENV_MAPPING: Dict[str, str] = {
    "encoding": "QR_BASE45_ENCODING",
    "history": "QR_BASE45_HISTORY",
    "history_path": "QR_BASE45_HISTORY_PATH",
    "output": "QR_BASE45_OUTPUT",
}

_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    """Raised when the settings file or an override is invalid."""


@dataclass
class Settings:
    encoding: str = "utf-8"
    history: bool = True
    history_path: str = ""
    output: str = "text"

    def to_dict(self) -> Dict[str, object]:
        return {
            "encoding": self.encoding,
            "history": self.history,
            "history_path": self.history_path,
            "output": self.output,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Settings":
        defaults = cls()
        return cls(
            encoding=str(data.get("encoding") or defaults.encoding),
            history=_parse_bool(data.get("history", defaults.history)),
            history_path=str(data.get("history_path") or ""),
            output=str(data.get("output") or defaults.output),
        )

    def resolved_history_path(self) -> Path:
        return Path(self.history_path).expanduser() if self.history_path else HISTORY_PATH


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in _FALSE_VALUES


def validate(settings: Settings) -> Settings:
    if settings.output not in OUTPUT_FORMATS:
        raise ConfigError(f"Unsupported output format: {settings.output}")
    try:
        codecs.lookup(settings.encoding)
    except LookupError as exc:
        raise ConfigError(f"Unknown text encoding: {settings.encoding}") from exc
    return settings


def _merge_env(settings: Settings) -> Settings:
    for field_name, env_var in ENV_MAPPING.items():
        env_val = os.getenv(env_var, "")
        if not env_val:
            continue
        if field_name == "history":
            settings.history = _parse_bool(env_val)
        else:
            setattr(settings, field_name, env_val)
    return settings


def read_settings_file(path: Path = CONFIG_PATH) -> Settings:
    """Settings as stored on disk, without environment overrides."""
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Malformed settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Malformed settings file {path}: expected an object")
    return Settings.from_dict(data)


def load_settings(path: Path = CONFIG_PATH, strict: bool = True) -> Settings:
    """
    Stored settings with environment overrides applied.

    `strict=False` skips value validation so `config` can inspect and repair
    a file holding bad values.
    """
    settings = _merge_env(read_settings_file(path))
    return validate(settings) if strict else settings


def save_settings(settings: Settings, path: Path = CONFIG_PATH) -> None:
    validate(settings)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")


def update_setting(settings: Settings, key: str, value: str) -> Settings:
    """Apply a `config set KEY VALUE` style update and validate the result."""
    if key not in ENV_MAPPING:
        raise ConfigError(f"Unknown setting: {key}")
    if key == "history":
        settings.history = _parse_bool(value)
    else:
        setattr(settings, key, value)
    return validate(settings)


def config_path(override: Optional[str] = None) -> Path:
    if override:
        return Path(override).expanduser()
    env_path = os.getenv("QR_BASE45_CONFIG", "")
    return Path(env_path).expanduser() if env_path else CONFIG_PATH
