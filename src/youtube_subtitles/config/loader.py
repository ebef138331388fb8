"""
Unified configuration loader with priority resolution.

Root directory (YT_SUBS_ROOT):
- macOS/Linux: ~/.youtube-subtitles
- Windows: %APPDATA%\\youtube-subtitles
- Override: YT_SUBS_ROOT environment variable

Priority for every setting (highest to lowest):
1. Environment variables (YT_SUBS_*, plus PORT, HOST, COOKIES_URL, PHONE_NUMBER)
2. .env file (nearest one walking up from cwd; same variable names)
3. Project config (.youtube-subtitles/config.yaml)
4. User config ({root_dir}/config.yaml)
5. Defaults (config/defaults.py)

Example config.yaml::

    timeout_ms: 45000
    languages: ["en", "hi"]
    strict_language: false
    cookies:
      enabled: true
      source: "https://example.com/cookies.txt"
    server:
      host: "127.0.0.1"
      port: 3000
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import dotenv_values, find_dotenv

from youtube_subtitles.config.defaults import (
    DEFAULT_HOST,
    DEFAULT_LANGUAGES,
    DEFAULT_PORT,
    DOWNLOAD_TIMEOUT_MS,
)

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


class ConfigSource(Enum):
    """Source of the configuration value."""

    ENV = "env"
    DOTENV = "dotenv"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True)
class SubtitlesConfig:
    """Resolved youtube_subtitles configuration."""

    root_dir: Path
    timeout_ms: int = DOWNLOAD_TIMEOUT_MS
    languages: tuple[str, ...] = tuple(DEFAULT_LANGUAGES)
    strict_language: bool = False
    use_cookies: bool = False
    cookies_source: str | None = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    phone_number: str | None = None
    sources: dict[str, ConfigSource] = field(default_factory=dict, compare=False)

    def source_of(self, key: str) -> ConfigSource:
        """Return where a setting came from."""
        return self.sources.get(key, ConfigSource.DEFAULT)


def _load_yaml_config(config_path: Path) -> dict[str, Any] | None:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Parsed config dict, or None if file doesn't exist or fails to parse.
    """
    if not config_path.exists():
        return None

    try:
        import yaml

        with open(config_path) as f:
            config = yaml.safe_load(f)
            if config is None:
                return {}
            if not isinstance(config, dict):
                logger.warning(f"Config file {config_path} is not a valid YAML dict")
                return None
            return config
    except Exception as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return None


def _find_project_config() -> Path | None:
    """Find project-level config by walking up from cwd.

    Returns:
        Path to .youtube-subtitles/config.yaml if found, None otherwise.
    """
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        config_path = parent / ".youtube-subtitles" / "config.yaml"
        if config_path.exists():
            return config_path
    return None


def _get_root_dir() -> Path:
    """Get the youtube_subtitles root directory.

    Returns:
        Path to the root directory (may not exist yet).
    """
    env_root = os.environ.get("YT_SUBS_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "youtube-subtitles"
        return Path.home() / "AppData" / "Roaming" / "youtube-subtitles"
    return Path.home() / ".youtube-subtitles"


def _get_user_config_path() -> Path:
    """Get the user-level config path ({root_dir}/config.yaml)."""
    return _get_root_dir() / "config.yaml"


def _parse_bool(value: Any) -> bool | None:
    """Interpret env/YAML booleans. Returns None for unrecognised values."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    return None


def _parse_int(value: Any) -> int | None:
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


def _parse_languages(value: Any) -> tuple[str, ...] | None:
    """Accept a YAML list or a comma separated string."""
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        return None
    langs = tuple(dict.fromkeys(i.strip() for i in items if i and i.strip()))
    return langs or None


def _flatten_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Map the nested YAML layout onto flat setting names."""
    flat: dict[str, Any] = {}
    for key in ("timeout_ms", "languages", "strict_language", "phone_number"):
        if key in config:
            flat[key] = config[key]

    cookies = config.get("cookies")
    if isinstance(cookies, dict):
        if "enabled" in cookies:
            flat["use_cookies"] = cookies["enabled"]
        if cookies.get("source"):
            flat["cookies_source"] = cookies["source"]

    server = config.get("server")
    if isinstance(server, dict):
        if "host" in server:
            flat["host"] = server["host"]
        if "port" in server:
            flat["port"] = server["port"]
    return flat


def _load_dotenv() -> dict[str, str]:
    """Read the nearest .env file without touching os.environ.

    Returns:
        Variables defined in the file, or an empty dict if there is none.
    """
    env_path = find_dotenv(usecwd=True)
    if not env_path:
        return {}
    logger.debug(f"Reading environment defaults from {env_path}")
    return {k: v for k, v in dotenv_values(env_path).items() if v is not None}


def _env_settings(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect settings present in an environment mapping."""
    flat: dict[str, Any] = {}
    if env.get("YT_SUBS_TIMEOUT_MS"):
        flat["timeout_ms"] = env["YT_SUBS_TIMEOUT_MS"]
    if env.get("YT_SUBS_LANGUAGES"):
        flat["languages"] = env["YT_SUBS_LANGUAGES"]
    if "YT_SUBS_STRICT_LANGUAGE" in env:
        flat["strict_language"] = env["YT_SUBS_STRICT_LANGUAGE"]
    if "YT_SUBS_USE_COOKIES" in env:
        flat["use_cookies"] = env["YT_SUBS_USE_COOKIES"]
    cookies_url = env.get("YT_SUBS_COOKIES_URL") or env.get("COOKIES_URL")
    if cookies_url:
        flat["cookies_source"] = cookies_url
    if env.get("HOST"):
        flat["host"] = env["HOST"]
    if env.get("PORT"):
        flat["port"] = env["PORT"]
    if env.get("PHONE_NUMBER"):
        flat["phone_number"] = env["PHONE_NUMBER"]
    return flat


_PARSERS = {
    "timeout_ms": _parse_int,
    "port": _parse_int,
    "languages": _parse_languages,
    "strict_language": _parse_bool,
    "use_cookies": _parse_bool,
    "cookies_source": lambda v: str(v).strip() or None,
    "host": lambda v: str(v).strip() or None,
    "phone_number": lambda v: str(v),
}


def _resolve_config() -> SubtitlesConfig:
    """Resolve configuration from all sources in priority order.

    Returns:
        Resolved SubtitlesConfig with per-setting sources.
    """
    root_dir = _get_root_dir()

    layers: list[tuple[ConfigSource, dict[str, Any]]] = []

    user_config = _load_yaml_config(_get_user_config_path())
    if user_config:
        layers.append((ConfigSource.USER, _flatten_yaml(user_config)))

    project_config_path = _find_project_config()
    if project_config_path:
        project_config = _load_yaml_config(project_config_path)
        if project_config:
            layers.append((ConfigSource.PROJECT, _flatten_yaml(project_config)))

    dotenv = _load_dotenv()
    if dotenv:
        layers.append((ConfigSource.DOTENV, _env_settings(dotenv)))

    layers.append((ConfigSource.ENV, _env_settings(os.environ)))

    values: dict[str, Any] = {}
    sources: dict[str, ConfigSource] = {}
    # Later layers win
    for source, settings in layers:
        for key, raw in settings.items():
            parsed = _PARSERS[key](raw)
            if parsed is None:
                logger.warning(f"Ignoring invalid {key}={raw!r} from {source.value}")
                continue
            values[key] = parsed
            sources[key] = source

    # A configured cookie source enables cookies unless explicitly disabled
    if "cookies_source" in values and "use_cookies" not in values:
        values["use_cookies"] = True

    config = SubtitlesConfig(root_dir=root_dir, sources=sources, **values)
    logger.debug(f"Resolved config: {config}")
    return config


@lru_cache(maxsize=1)
def get_config() -> SubtitlesConfig:
    """Get resolved youtube_subtitles configuration.

    Results are cached - configuration is resolved once per process.
    To force re-resolution (e.g., after env change), use clear_config_cache().
    """
    return _resolve_config()


def clear_config_cache() -> None:
    """Clear the cached configuration.

    Call this if environment variables or config files have changed
    and you need to re-resolve the configuration.
    """
    get_config.cache_clear()
