"""Configuration and profile management for capcli."""

import os
import pathlib
import sys
from typing import Any, Dict, Optional

import yaml

DEFAULT_PROFILE = "default"
DEFAULT_API_URL = "https://api.smartthings.com/v1"


def _resolve_dir(env_var: str, xdg_var: str, subdir: str) -> pathlib.Path:
    """Resolve XDG-compliant directory paths."""
    if env := os.environ.get(env_var):
        return pathlib.Path(env).expanduser()
    if xdg := os.environ.get(xdg_var):
        return pathlib.Path(xdg).expanduser() / subdir
    return pathlib.Path.home() / ".config" / subdir


def config_file() -> pathlib.Path:
    """Location of the user configuration file."""
    return _resolve_dir("CAPCLI_CONFIG_HOME", "XDG_CONFIG_HOME", "capcli") / "config.yaml"


# Global config cache
_USER_CONFIG: Dict[str, Any] = {}


def load_user_config(path: Optional[pathlib.Path] = None) -> Dict[str, Any]:
    """Load user configuration from disk."""
    path = path or config_file()
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as exc:
        print(f"Warning: Failed to parse {path}: {exc}", file=sys.stderr)
        return {}
    except OSError as exc:
        print(f"Warning: Could not load config {path}: {exc}", file=sys.stderr)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        print(f"Warning: Ignoring {path}: expected a mapping of profiles", file=sys.stderr)
        return {}
    return data


def get_user_config() -> Dict[str, Any]:
    """Get the cached user configuration."""
    global _USER_CONFIG
    if not _USER_CONFIG:
        _USER_CONFIG = load_user_config()
    return _USER_CONFIG


def reset_user_config() -> None:
    """Drop the cached configuration (for testing)."""
    global _USER_CONFIG
    _USER_CONFIG = {}


def get_profile_config(profile: Optional[str] = None) -> Dict[str, Any]:
    """Get the settings for a named profile, or the default profile."""
    profile_config = get_user_config().get(profile or DEFAULT_PROFILE) or {}
    if not isinstance(profile_config, dict):
        print(f"Warning: Profile {profile or DEFAULT_PROFILE} is not a mapping", file=sys.stderr)
        return {}
    return profile_config


def get_api_url(profile_config: Dict[str, Any]) -> str:
    """Base URL of the platform API."""
    return os.environ.get("CAPCLI_API_URL") or profile_config.get("apiUrl") or DEFAULT_API_URL


def get_token(profile_config: Dict[str, Any]) -> Optional[str]:
    """Bearer token used to authenticate API calls."""
    return os.environ.get("CAPCLI_TOKEN") or profile_config.get("token")
