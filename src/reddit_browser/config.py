"""Configuration persistence: load and save user preferences."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from reddit_browser.models import (
    CONFIG_APP_NAME,
    DEFAULT_FETCH_WINDOW,
    DEFAULT_POPULATE_THRESHOLD,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_SUBREDDIT,
    DEFAULT_TIME_FILTER,
    DEFAULT_USER_AGENT,
    FETCH_WINDOW_LIMIT,
    MAX_REFRESH_INTERVAL_SECONDS,
    MIN_REFRESH_INTERVAL_SECONDS,
    TIME_FILTERS,
    UserConfig,
)
from reddit_browser.parsing import normalize_subreddit

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Persistence
# ============================================================================
#
# Validation contract: _dict_to_config() guarantees valid output for any input:
#
#   Field                     Rule                              Handler
#   ────────────────────────  ────────────────────────────────  ─────────────────────────
#   subreddit                 [A-Za-z0-9_]{2,21}                _coerce_subreddit
#   time_filter               in TIME_FILTERS                   _dict_to_config
#   fetch_window              1 ≤ x ≤ 100                       _coerce_fetch_window
#   populate_threshold        1 ≤ x ≤ fetch_window              _coerce_populate_threshold
#   refresh_interval_seconds  0.25 ≤ x ≤ 3600                   _coerce_refresh_interval
#   scalar fields             type-checked via _safe_get()      _dict_to_config
#
CONFIG_FILENAME = "config.json"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/reddit-browser/config.json
    - macOS: ~/Library/Application Support/reddit-browser/config.json
    - Windows: %APPDATA%/reddit-browser/config.json
    """
    config_dir = Path(user_config_dir(CONFIG_APP_NAME))
    return config_dir / CONFIG_FILENAME


def _config_to_dict(config: UserConfig) -> dict[str, Any]:
    """Serialize UserConfig to a JSON-compatible dictionary."""
    return {
        "version": config.version,
        "subreddit": config.subreddit,
        "time_filter": config.time_filter,
        "fetch_window": _coerce_fetch_window(config.fetch_window),
        "populate_threshold": config.populate_threshold,
        "refresh_interval_seconds": _coerce_refresh_interval(config.refresh_interval_seconds),
        "request_timeout_seconds": config.request_timeout_seconds,
        "user_agent": config.user_agent,
    }


def _safe_get(data: dict, key: str, default: Any, expected_type: type | tuple[type, ...]) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if isinstance(value, bool) and expected_type is not bool:
        return default
    if not isinstance(value, expected_type):
        return default
    return value


def _coerce_subreddit(value: Any) -> str:
    if not isinstance(value, str):
        return DEFAULT_SUBREDDIT
    try:
        return normalize_subreddit(value)
    except ValueError:
        logger.warning("Ignoring invalid subreddit in config: %r", value)
        return DEFAULT_SUBREDDIT


def _coerce_fetch_window(value: Any) -> int:
    """Validate and clamp the number of posts requested per fetch."""
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_FETCH_WINDOW
    return max(1, min(value, FETCH_WINDOW_LIMIT))


def _coerce_populate_threshold(value: Any, fetch_window: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        value = DEFAULT_POPULATE_THRESHOLD
    return max(1, min(value, fetch_window))


def _coerce_refresh_interval(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return DEFAULT_REFRESH_INTERVAL_SECONDS
    return max(MIN_REFRESH_INTERVAL_SECONDS, min(float(value), MAX_REFRESH_INTERVAL_SECONDS))


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Build a UserConfig from parsed JSON, replacing invalid fields with defaults."""
    time_filter = _safe_get(data, "time_filter", DEFAULT_TIME_FILTER, str)
    if time_filter not in TIME_FILTERS:
        time_filter = DEFAULT_TIME_FILTER

    fetch_window = _coerce_fetch_window(data.get("fetch_window", DEFAULT_FETCH_WINDOW))

    timeout = _safe_get(data, "request_timeout_seconds", DEFAULT_REQUEST_TIMEOUT_SECONDS, int)
    if timeout <= 0:
        timeout = DEFAULT_REQUEST_TIMEOUT_SECONDS

    user_agent = _safe_get(data, "user_agent", DEFAULT_USER_AGENT, str).strip()

    return UserConfig(
        subreddit=_coerce_subreddit(data.get("subreddit", DEFAULT_SUBREDDIT)),
        time_filter=time_filter,
        fetch_window=fetch_window,
        populate_threshold=_coerce_populate_threshold(
            data.get("populate_threshold", DEFAULT_POPULATE_THRESHOLD), fetch_window
        ),
        refresh_interval_seconds=_coerce_refresh_interval(
            data.get("refresh_interval_seconds", DEFAULT_REFRESH_INTERVAL_SECONDS)
        ),
        request_timeout_seconds=timeout,
        user_agent=user_agent or DEFAULT_USER_AGENT,
        version=_safe_get(data, "version", 1, int),
    )


def load_config() -> UserConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted.
    Logs specific errors to help diagnose config issues.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        return UserConfig()
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()

    if not isinstance(data, dict):
        logger.warning("Config file has invalid structure, using defaults")
        return UserConfig()
    return _dict_to_config(data)


def save_config(config: UserConfig) -> bool:
    """Save configuration to disk atomically.

    Uses write-to-tempfile + os.replace() to prevent partial writes
    on crash/interrupt from corrupting the config file.

    Creates the config directory if it doesn't exist.
    Returns True on success, False on failure.
    """
    config_path = get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = _config_to_dict(config)
        json_str = json.dumps(data, indent=2, ensure_ascii=False)
        fd, tmp_path = tempfile.mkstemp(dir=config_path.parent, suffix=".tmp", prefix=".config-")
        closed = False
        try:
            os.write(fd, json_str.encode("utf-8"))
            os.close(fd)
            closed = True
            os.replace(tmp_path, config_path)
        except BaseException:
            if not closed:
                os.close(fd)
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        return True
    except OSError as e:
        logger.error("Failed to save config: %s", e)
        return False


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "get_config_path",
    "load_config",
    "save_config",
]
