from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

SETTINGS_ENV_VAR = "SAVELOG_SETTINGS"
DEFAULT_SETTINGS_PATH = Path.home() / ".savelog" / "settings.json"

DEFAULT_DOCUMENT_SUFFIX = ".skp"
DEFAULT_CHANGELOG_SUFFIX = "_changelog.txt"
DEFAULT_USER_ENV_VARS = ("USERNAME", "USER")
DEFAULT_MENU_NAME = "Plugins"
DEFAULT_MENU_LABEL = "View Project Change Log"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

MIN_DIALOG_SIZE = 200
MAX_DIALOG_SIZE = 4000


@dataclass
class Settings:
    document_suffix: str = DEFAULT_DOCUMENT_SUFFIX
    changelog_suffix: str = DEFAULT_CHANGELOG_SUFFIX
    user_env_vars: list[str] = field(default_factory=lambda: list(DEFAULT_USER_ENV_VARS))
    menu_name: str = DEFAULT_MENU_NAME
    menu_label: str = DEFAULT_MENU_LABEL
    prompt_width: int = 400
    prompt_height: int = 350
    viewer_width: int = 600
    viewer_height: int = 500
    log_level: str = "INFO"


def settings_path(path: str | os.PathLike | None = None) -> Path:
    if path:
        return Path(path)
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_SETTINGS_PATH


def load_settings(path: str | os.PathLike | None = None) -> Settings:
    target = settings_path(path)
    data = {}
    if target.exists():
        try:
            data = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            data = {}
    return _normalize_settings(data)


def save_settings(settings: Settings, path: str | os.PathLike | None = None) -> Path:
    target = settings_path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(asdict(settings), indent=2, ensure_ascii=True), encoding="utf-8")
    return target


def _normalize_settings(data: object) -> Settings:
    settings = Settings()
    if not isinstance(data, dict):
        return settings

    for key in ("document_suffix", "changelog_suffix", "menu_name", "menu_label"):
        value = data.get(key)
        if isinstance(value, str) and value:
            setattr(settings, key, value)

    env_vars = data.get("user_env_vars")
    if isinstance(env_vars, list):
        names = [v.strip() for v in env_vars if isinstance(v, str) and v.strip()]
        if names:
            settings.user_env_vars = names

    defaults = Settings()
    for key in ("prompt_width", "prompt_height", "viewer_width", "viewer_height"):
        setattr(
            settings,
            key,
            _clamp_int(data.get(key), getattr(defaults, key), MIN_DIALOG_SIZE, MAX_DIALOG_SIZE),
        )

    level = str(data.get("log_level") or "").upper()
    if level in LOG_LEVELS:
        settings.log_level = level

    return settings


def _clamp_int(value: object, default: int, min_value: int, max_value: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        num = int(value)
    except (TypeError, ValueError):
        return default
    return max(min_value, min(max_value, num))
