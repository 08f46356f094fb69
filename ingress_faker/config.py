"""Configuration loading from environment variables with sensible defaults."""

import os
import math
import logging
from dataclasses import dataclass, field

import yaml

from ingress_faker.weighted import check_total

logger = logging.getLogger(__name__)

VALID_MODES = ("weighted", "fixed")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
METHOD_NAMES = ("GET", "POST", "PUT", "PATCH", "DELETE")
DEFAULT_METHOD_PERCENTS = {"GET": 60, "POST": 15, "PUT": 10, "PATCH": 5, "DELETE": 5}

# Allow-list variables and the Config field each one feeds.
ALLOW_LISTS = {
    "IP_ADDRESSES": "ip_addresses",
    "HTTP_METHODS": "http_methods",
    "PATHS": "paths",
    "STATUS_CODES": "status_codes",
    "HOSTS": "hosts",
}


class ConfigError(ValueError):
    """Raised when the generator cannot start with the supplied settings."""


def _parse_list(val: str | None) -> tuple:
    if not val:
        return ()
    return tuple(p.strip() for p in val.strip().split(",") if p.strip())


def _parse_int_list(val: str | None) -> tuple:
    result = []
    for part in _parse_list(val):
        try:
            result.append(int(part))
        except ValueError:
            logger.warning("Ignoring non-integer status code %r", part)
    return tuple(result)


def _parse_percent(name: str, val) -> float:
    try:
        pct = float(val)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {val!r}") from None
    if not math.isfinite(pct):
        raise ConfigError(f"{name} must be a finite number, got {val!r}")
    if pct < 0 or pct > 100:
        clamped = min(max(pct, 0.0), 100.0)
        logger.warning("%s=%s is outside 0-100, clamping to %s", name, val, clamped)
        return clamped
    return pct


def _parse_int(name: str, val) -> int:
    if isinstance(val, float) and not val.is_integer():
        raise ConfigError(f"{name} must be an integer, got {val!r}")
    try:
        return int(val)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {val!r}") from None


def normalize_path_bounds(path_min: int, path_max: int) -> tuple[int, int]:
    """Swap inverted bounds and floor both at one segment."""
    if path_min > path_max:
        path_min, path_max = path_max, path_min
    return max(path_min, 1), max(path_max, 1)


def check_method_percents(method_percents: dict) -> None:
    try:
        check_total(method_percents)
    except ValueError as e:
        raise ConfigError(f"HTTP method {e}") from None


@dataclass(frozen=True)
class Config:
    rate: float = 1.0
    mode: str = "weighted"
    status_ok_percent: float = 85.0
    ipv4_percent: float = 80.0
    method_percents: dict = field(default_factory=lambda: dict(DEFAULT_METHOD_PERCENTS))
    path_min: int = 1
    path_max: int = 4
    ip_addresses: tuple = ()
    http_methods: tuple = ()
    paths: tuple = ()
    status_codes: tuple = ()
    hosts: tuple = ()
    log_level: str = "INFO"

    def __post_init__(self):
        if not (math.isfinite(self.rate) and self.rate > 0):
            raise ConfigError(
                f"RATE must be a finite number greater than zero, got {self.rate:g}"
            )
        for attr in ("status_ok_percent", "ipv4_percent"):
            if not math.isfinite(getattr(self, attr)):
                raise ConfigError(f"{attr.upper()} must be a finite number")
        if self.mode not in VALID_MODES:
            raise ConfigError(
                f"GENERATOR_MODE must be one of {', '.join(VALID_MODES)}, got {self.mode!r}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
        check_method_percents(self.method_percents)
        lo, hi = normalize_path_bounds(self.path_min, self.path_max)
        object.__setattr__(self, "path_min", lo)
        object.__setattr__(self, "path_max", hi)
        if self.mode == "fixed":
            for env_name, attr in ALLOW_LISTS.items():
                if not getattr(self, attr):
                    raise ConfigError(
                        f"{env_name} environment variable must be set with at least "
                        f"one value when GENERATOR_MODE=fixed"
                    )

    @property
    def interval(self) -> float:
        """Seconds between two ticks."""
        return 1.0 / self.rate


def load_yaml_defaults(path: str | None) -> dict:
    """Return the ``generator`` section of the YAML file at *path*.

    Keys use the environment variable names (case-insensitive), e.g.
    ``rate`` or ``get_percent``.
    """
    if not path:
        return {}
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise ConfigError(f"CONFIG_PATH {path!r} does not exist") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from None
    section = data.get("generator", {}) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise ConfigError(f"{path} must contain a 'generator' mapping")
    return {str(k).upper(): v for k, v in section.items()}


def load_config(environ=None) -> Config:
    """Load configuration from environment variables, falling back to defaults.

    Raises ConfigError on any setting the generator cannot run with.
    """
    env = os.environ if environ is None else environ
    defaults = load_yaml_defaults(env.get("CONFIG_PATH"))

    def get(name, default):
        val = env.get(name)
        if val is None or val == "":
            val = defaults.get(name, default)
        return val

    def get_list(name):
        val = get(name, "")
        if val is None:
            return ""
        if isinstance(val, (list, tuple)):
            val = ",".join(str(v) for v in val)
        return str(val)

    try:
        rate = float(get("RATE", Config.rate))
    except (TypeError, ValueError):
        raise ConfigError(f"RATE must be a number, got {get('RATE', None)!r}") from None

    method_percents = {
        m: _parse_percent(f"{m}_PERCENT", get(f"{m}_PERCENT", DEFAULT_METHOD_PERCENTS[m]))
        for m in METHOD_NAMES
    }

    return Config(
        rate=rate,
        mode=str(get("GENERATOR_MODE", Config.mode)).strip().lower(),
        status_ok_percent=_parse_percent(
            "STATUS_OK_PERCENT", get("STATUS_OK_PERCENT", Config.status_ok_percent)
        ),
        ipv4_percent=_parse_percent("IPV4_PERCENT", get("IPV4_PERCENT", Config.ipv4_percent)),
        method_percents=method_percents,
        path_min=_parse_int("PATH_MIN", get("PATH_MIN", Config.path_min)),
        path_max=_parse_int("PATH_MAX", get("PATH_MAX", Config.path_max)),
        ip_addresses=_parse_list(get_list("IP_ADDRESSES")),
        http_methods=tuple(m.upper() for m in _parse_list(get_list("HTTP_METHODS"))),
        paths=_parse_list(get_list("PATHS")),
        status_codes=_parse_int_list(get_list("STATUS_CODES")),
        hosts=_parse_list(get_list("HOSTS")),
        log_level=str(get("LOG_LEVEL", Config.log_level)).strip().upper(),
    )
