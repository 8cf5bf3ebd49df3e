"""Server settings read from a TOML file, with defaults for anything missing."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)

DEFAULT_SERVER_ADDRESS = "localhost"
DEFAULT_PORT = "8787"
DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 400
DEFAULT_PATHS = ("./jerry-smith/config.toml", "./config.toml")

_U16_LIMIT = 1 << 16


@dataclass(frozen=True)
class ServerConfig:
    """Where the server listens and the size of the window it draws in."""

    server_address: str = DEFAULT_SERVER_ADDRESS
    port: str = DEFAULT_PORT
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT


def _table(document: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = document.get(key)
    if value is not None and not isinstance(value, dict):
        raise ValueError(f"{key} must be a table")
    return value


def _optional(table: dict[str, Any] | None, key: str, valid: Callable[[Any], bool]) -> Any:
    if table is None or key not in table:
        return None
    value = table[key]
    if not valid(value):
        raise ValueError(f"invalid value for {key}")
    return value


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_u16(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < _U16_LIMIT


def parse_server_config(content: str) -> ServerConfig:
    """Build a configuration from TOML text; unreadable text yields all defaults."""
    try:
        document = tomllib.loads(content)
        server = _table(document, "server")
        display = _table(document, "display")
        server_address = _optional(server, "server_address", _is_str)
        port = _optional(server, "port", _is_str)
        width = _optional(display, "width", _is_u16)
        height = _optional(display, "height", _is_u16)
    except (tomllib.TOMLDecodeError, ValueError):
        server = display = None
        server_address = port = width = height = None

    if server is None:
        logger.warning("Missing table server, default value will be used.")
    else:
        if server_address is None:
            logger.warning("Missing field server address in table server.")
        if port is None:
            logger.warning("Missing field port in table server.")

    if display is None:
        logger.warning("Missing table display, default value will be used.")
    else:
        if width is None:
            logger.warning("Missing field width in table display.")
        if height is None:
            logger.warning("Missing field height in table display.")

    return ServerConfig(
        server_address=DEFAULT_SERVER_ADDRESS if server_address is None else server_address,
        port=DEFAULT_PORT if port is None else port,
        width=DEFAULT_WIDTH if width is None else width,
        height=DEFAULT_HEIGHT if height is None else height,
    )


def load_server_config(paths: Iterable[str | Path] = DEFAULT_PATHS) -> ServerConfig:
    """Read the first readable file among paths; with none, use the defaults."""
    content = ""
    for path in paths:
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        break
    logger.debug("Value of file %s", content)
    return parse_server_config(content)