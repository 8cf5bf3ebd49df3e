"""Worker command: fetch fractal fragments from a server, compute and return them."""

from __future__ import annotations

import argparse
import logging

from . import engine
from .client import Client
from .worker_config import DEFAULT_PATHS, load_worker_config

logger = logging.getLogger(__name__)

_BANNER = r"""##########################################################
#  __  __      __  __                          _         #
# |  \/  |_ __|  \/  | ___  ___  ___  ___  ___| | _____  #
# | |\/| | '__| |\/| |/ _ \/ _ \/ __|/ _ \/ _ \ |/ / __| #
# | |  | | |_ | |  | |  __/  __/\__ \  __/  __/   <\__ \ #
# |_|  |_|_(_)|_|  |_|\___|\___||___/\___|\___|_|\_\___/ #
##########################################################"""


def start_message() -> None:
    """Print the start-up banner."""
    print(_BANNER)


def main(argv: list[str] | None = None) -> int:
    """Run the worker loop until the server goes away; return the exit status."""
    parser = argparse.ArgumentParser(description="Compute fractal fragments for a server.")
    parser.add_argument(
        "--config",
        action="append",
        dest="configs",
        metavar="PATH",
        help="configuration file to try, in order (may be repeated)",
    )
    args = parser.parse_args(argv)

    start_message()
    logging.basicConfig(level=logging.DEBUG)

    config = load_worker_config(args.configs or DEFAULT_PATHS)
    client = Client(config.server_address, config.port)

    try:
        task, data = client.ask_for_work(config.worker_name, config.max_work)
    except OSError as exc:
        logger.warning("There was a problem connecting to the server ... %s", exc)
        return 1

    while True:
        result, pixels = engine.run(task)
        try:
            task, data = client.send_work_done(result, data + pixels)
        except OSError:
            try:
                task, data = client.ask_for_work(config.worker_name, config.max_work)
            except OSError:
                logger.error("The server must be switched off")
                return 0