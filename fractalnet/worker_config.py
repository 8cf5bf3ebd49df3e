"""Worker settings read from a TOML file, with defaults for anything missing."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)

DEFAULT_SERVER_ADDRESS = "localhost"
DEFAULT_PORT = "8787"
DEFAULT_WORKER_NAME = "Group 7"
DEFAULT_MAX_WORK = 100
DEFAULT_PATHS = ("./mr-meeseeks/config.toml", "./config.toml")

_U32_LIMIT = 1 << 32


@dataclass(frozen=True)
class WorkerConfig:
    """Where to find the server and how the worker presents itself."""

    server_address: str = DEFAULT_SERVER_ADDRESS
    port: str = DEFAULT_PORT
    worker_name: str = DEFAULT_WORKER_NAME
    max_work: int = DEFAULT_MAX_WORK


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


def _is_u32(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < _U32_LIMIT


def parse_worker_config(content: str) -> WorkerConfig:
    """Build a configuration from TOML text; unreadable text yields all defaults."""
    try:
        document = tomllib.loads(content)
        server = _table(document, "server")
        worker = _table(document, "worker")
        server_address = _optional(server, "server_address", _is_str)
        port = _optional(server, "port", _is_str)
        worker_name = _optional(worker, "worker_name", _is_str)
        max_work = _optional(worker, "max_work", _is_u32)
    except (tomllib.TOMLDecodeError, ValueError):
        server = worker = None
        server_address = port = worker_name = max_work = None

    if server is None:
        logger.warning("Missing table server, default value will be used.")
    else:
        if server_address is None:
            logger.warning("Missing field server address in table server.")
        if port is None:
            logger.warning("Missing field port in table server.")

    if worker is None:
        logger.warning("Missing table worker, default value will be used.")
    else:
        if worker_name is None:
            logger.warning("Missing field worker name in table worker.")
        if max_work is None:
            logger.warning("Missing field max work in table worker.")

    return WorkerConfig(
        server_address=DEFAULT_SERVER_ADDRESS if server_address is None else server_address,
        port=DEFAULT_PORT if port is None else port,
        worker_name=DEFAULT_WORKER_NAME if worker_name is None else worker_name,
        max_work=DEFAULT_MAX_WORK if max_work is None else max_work,
    )


def load_worker_config(paths: Iterable[str | Path] = DEFAULT_PATHS) -> WorkerConfig:
    """Read the first readable file among paths; with none, use the defaults."""
    content = ""
    for path in paths:
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        break
    logger.debug("File values %s", content)
    return parse_worker_config(content)