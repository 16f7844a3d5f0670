# systemd_bot/config.py
# Configuration is read once from a JSON file; the token may come from .env

import json
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_CONFIG_FILE      = "config.json"
DEFAULT_MONITOR_INTERVAL = 3
DEFAULT_SERVICE_TIMEOUT  = 30
CALLBACK_DATA_LIMIT      = 64


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Config:
    api_token:             str
    available_ids:         tuple = ()
    controllable_services: tuple = ()
    monitor_interval:      int = DEFAULT_MONITOR_INTERVAL
    is_verbose:            bool = False
    help_url:              Optional[str] = None
    use_sudo:              bool = False
    service_timeout:       int = DEFAULT_SERVICE_TIMEOUT


def _str_list(raw: dict, key: str) -> tuple:
    val = raw.get(key, [])
    if not isinstance(val, list) or not all(isinstance(v, str) for v in val):
        raise ConfigError(f"'{key}' must be a list of strings")
    result = []
    for v in val:
        v = v.strip()
        if v and v not in result:
            result.append(v)
    return tuple(result)


def _int(raw: dict, key: str, default: int) -> int:
    val = raw.get(key, default)
    if isinstance(val, bool) or not isinstance(val, int):
        raise ConfigError(f"'{key}' must be an integer")
    return val if val > 0 else default


def _bool(raw: dict, key: str) -> bool:
    val = raw.get(key, False)
    if not isinstance(val, bool):
        raise ConfigError(f"'{key}' must be true or false")
    return val


def _token(raw: dict) -> str:
    env = os.getenv("BOT_TOKEN", "").strip()
    if env.startswith("PUT_"):
        env = ""
    val = env or raw.get("api_token", "")
    if not isinstance(val, str) or not val.strip() or val.startswith("PUT_"):
        raise ConfigError(
            "'api_token' is not configured "
            "(set it in the config file or BOT_TOKEN in .env)")
    return val.strip()


def load_config(path: Optional[str] = None) -> Config:
    load_dotenv(find_dotenv(usecwd=True))
    path = path or os.getenv("SYSTEMD_BOT_CONFIG", "").strip() or DEFAULT_CONFIG_FILE
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed config file {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    help_url = raw.get("help_url")
    if help_url is not None and not isinstance(help_url, str):
        raise ConfigError("'help_url' must be a string")

    services = _str_list(raw, "controllable_services")
    for s in services:
        # inline buttons carry "/servicestart <name>" in 64 bytes of callback data
        if len(f"/servicestart {s}".encode()) > CALLBACK_DATA_LIMIT:
            raise ConfigError(f"Service name too long for a button: {s}")

    return Config(
        api_token=_token(raw),
        available_ids=_str_list(raw, "available_ids"),
        controllable_services=services,
        monitor_interval=_int(raw, "monitor_interval", DEFAULT_MONITOR_INTERVAL),
        is_verbose=_bool(raw, "is_verbose"),
        help_url=help_url or None,
        use_sudo=_bool(raw, "use_sudo"),
        service_timeout=_int(raw, "service_timeout", DEFAULT_SERVICE_TIMEOUT),
    )
