import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from lib.utils.validation import ensure

from .yaml_loader import load_yaml


DEFAULT_CONFIG_PATH = "config/api.yaml"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_HELLO_MESSAGE = "Hello from CI/CD project! Automation is awesome!"
TEST_ENV = "test"

# Level names understood by both stdlib logging and uvicorn, plus aliases.
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


@dataclass
class ApiConfig:
    """Typed view over ``api.yaml`` merged with the process environment.

    The raw mapping is kept alongside the resolved values so callers can read
    keys that have no dedicated attribute.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    env: str = "development"
    hello_message: str = DEFAULT_HELLO_MESSAGE
    raw: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.log_level = _parse_log_level(self.log_level)

    @property
    def is_test(self) -> bool:
        """``True`` when the server must not bind a socket."""
        return self.env.strip().lower() == TEST_ENV


def _parse_log_level(value: Any) -> str:
    level = str(value).strip().upper()
    level = LOG_LEVEL_ALIASES.get(level, level)
    ensure(level in LOG_LEVELS, f"Invalid log level: {value!r}")
    return level


def _parse_port(value: Any) -> int:
    try:
        port = int(str(value).strip())
    except ValueError:
        raise ValueError(f"Invalid port: {value!r}") from None
    ensure(0 <= port <= 65535, f"Port out of range: {port}")
    return port


def load_api_config(
    path: str = DEFAULT_CONFIG_PATH,
    environ: Optional[Mapping[str, str]] = None,
) -> ApiConfig:
    """Load ``api.yaml`` and apply environment overrides.

    Parameters
    ----------
    path:
        File system path to the YAML configuration file.  A missing file is
        not an error; the built-in defaults are used instead.
    environ:
        Mapping consulted for ``PORT``, ``APP_ENV`` and ``LOG_LEVEL``.
        Defaults to :data:`os.environ`.
    """

    env = os.environ if environ is None else environ
    raw = load_yaml(path) if Path(path).exists() else {}
    server = raw.get("server", {}) or {}
    logging_cfg = raw.get("logging", {}) or {}
    api = raw.get("api", {}) or {}

    port = env.get("PORT") or server.get("port", DEFAULT_PORT)
    return ApiConfig(
        host=str(server.get("host", DEFAULT_HOST)),
        port=_parse_port(port),
        log_level=str(env.get("LOG_LEVEL") or logging_cfg.get("level", "INFO")),
        env=str(env.get("APP_ENV") or server.get("env", "development")),
        hello_message=str(api.get("hello_message", DEFAULT_HELLO_MESSAGE)),
        raw=raw,
    )
