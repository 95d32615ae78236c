"""Configuration registry and type system.

Every configurable setting is declared here with its key, type, default,
description, and whether it contains a secret.  The registry is the single
source of truth for what settings exist.  Settings are read from an INI file;
the environment is never consulted.
"""

import configparser
import logging
from dataclasses import dataclass
from enum import Enum

from postmark_mail.errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_HOST = "api.postmarkapp.com"


class ConfigType(Enum):
    STRING = "string"
    INT = "int"
    BOOL = "bool"


@dataclass(frozen=True, slots=True)
class ConfigEntry:
    key: str
    type: ConfigType
    default: str | int | bool
    description: str
    secret: bool = False


# ---------------------------------------------------------------------------
# Registry -- every known setting
# ---------------------------------------------------------------------------

REGISTRY: list[ConfigEntry] = [
    ConfigEntry(
        "postmark.api_key", ConfigType.STRING, "", "Server token sent with every request", secret=True
    ),
    ConfigEntry("postmark.secure", ConfigType.BOOL, True, "Use https instead of http"),
    ConfigEntry("postmark.host", ConfigType.STRING, DEFAULT_HOST, "API host (and optional port)"),
    ConfigEntry("postmark.timeout", ConfigType.INT, 30, "HTTP timeout in seconds"),
]

# Fast lookup by key
_REGISTRY_MAP: dict[str, ConfigEntry] = {e.key: e for e in REGISTRY}


def resolve_entry(key: str) -> ConfigEntry | None:
    """Look up a registry entry by key."""
    return _REGISTRY_MAP.get(key)


# ---------------------------------------------------------------------------
# Value parsing / serialization
# ---------------------------------------------------------------------------

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off", "")


def parse_value(entry: ConfigEntry, raw: str) -> str | int | bool:
    """Parse a raw string value according to the entry's type."""
    match entry.type:
        case ConfigType.STRING:
            return raw
        case ConfigType.INT:
            try:
                return int(raw)
            except ValueError as exc:
                raise ConfigError(f"{entry.key}: expected an integer, got {raw!r}") from exc
        case ConfigType.BOOL:
            lowered = raw.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ConfigError(f"{entry.key}: expected a boolean, got {raw!r}")


def serialize_value(entry: ConfigEntry, value: str | int | bool) -> str:
    """Serialize a typed value back to its INI form."""
    match entry.type:
        case ConfigType.BOOL:
            return "true" if value else "false"
        case _:
            return str(value)


# ---------------------------------------------------------------------------
# INI section/key -> registry key mapping
# ---------------------------------------------------------------------------

INI_MAP: dict[tuple[str, str], str] = {
    ("postmark", "API_KEY"): "postmark.api_key",
    ("postmark", "SECURE"): "postmark.secure",
    ("postmark", "HOST"): "postmark.host",
    ("postmark", "TIMEOUT"): "postmark.timeout",
}


def load_config(ini_file: str) -> dict[str, str | int | bool]:
    """Read settings from an INI file, falling back to registry defaults.

    Returns a dict keyed by registry key.  Raises ConfigError if the file
    cannot be read, a value does not parse, or no API key is set.
    """
    # Tokens may contain '%', so values are taken literally
    cfg = configparser.ConfigParser(interpolation=None)
    try:
        found = cfg.read(ini_file)
    except configparser.Error as exc:
        raise ConfigError(f"Malformed config file {ini_file}: {exc}") from exc
    if not found:
        raise ConfigError(f"Cannot read config file: {ini_file}")

    values: dict[str, str | int | bool] = {e.key: e.default for e in REGISTRY}

    for section in cfg.sections():
        for ini_key, raw in cfg.items(section):
            registry_key = INI_MAP.get((section, ini_key.upper()))
            if registry_key is None:
                log.warning("Ignoring unknown setting [%s] %s in %s", section, ini_key, ini_file)
                continue
            entry = _REGISTRY_MAP[registry_key]
            values[registry_key] = parse_value(entry, raw)

    if not values["postmark.api_key"]:
        raise ConfigError(f"postmark.api_key is not set in {ini_file}")

    log.debug(
        "Loaded config from %s: %s",
        ini_file,
        ", ".join(
            f"{e.key}={'********' if e.secret else serialize_value(e, values[e.key])}"
            for e in REGISTRY
        ),
    )
    return values
