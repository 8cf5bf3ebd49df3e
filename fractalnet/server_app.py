"""Server command: hand out fractal work and show the results in a window."""

from __future__ import annotations

import argparse
import logging
import queue
import socket
import threading

from .display import DisplayFractal
from .server import PixelSink, Server
from .server_config import DEFAULT_PATHS, load_server_config

logger = logging.getLogger(__name__)


def serve_forever(listener: socket.socket, server: Server, sink: PixelSink) -> None:
    """Handle connections one after another until the listener is closed."""
    while True:
        try:
            conn, _ = listener.accept()
        except OSError as exc:
            if listener.fileno() == -1:
                return
            logger.warning("Something went wrong with a stream! %s", exc)
            continue
        with conn:
            try:
                server.handle_client(conn, sink)
            except OSError as exc:
                logger.warning("Data received from the client has a problem! %s", exc)


def main(argv: list[str] | None = None) -> int:
    """Start the server and its window; return the exit status."""
    parser = argparse.ArgumentParser(description="Distribute fractal work and display it.")
    parser.add_argument(
        "--config",
        action="append",
        dest="configs",
        metavar="PATH",
        help="configuration file to try, in order (may be repeated)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG)
    config = load_server_config(args.configs or DEFAULT_PATHS)

    results: queue.Queue = queue.Queue()
    display = DisplayFractal(config.width, config.height)
    server = Server(config.server_address, config.port, config.width, config.height)

    try:
        listener = server.start_server()
    except OSError as exc:
        logger.error("Server failed to start ... %s", exc)
        return 1

    threading.Thread(
        target=serve_forever, args=(listener, server, results.put), daemon=True
    ).start()
    try:
        display.start(results)
    finally:
        listener.close()
    return 0