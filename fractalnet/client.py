"""Worker-side connection to the server: asking for work and returning results."""

from __future__ import annotations

import logging
import socket

from .network import Network, NetworkError
from .protocols import FragmentRequest, FragmentResult, FragmentTask

logger = logging.getLogger(__name__)


class Client:
    """Talks to one server, opening a fresh connection for every exchange."""

    def __init__(self, server_address: str, port: str) -> None:
        self.network = Network(server_address, port)

    def ask_for_work(self, worker_name: str, maximal_work_load: int) -> tuple[FragmentTask, bytes]:
        """Send a work request; return the task the server hands out and its data."""
        request = FragmentRequest(worker_name=worker_name, maximal_work_load=maximal_work_load)
        with self._connect() as stream:
            Network.send_message(stream, request)
            task, data = self._receive_task(stream)
            Network.close_connection(stream)
        return task, data

    def send_work_done(self, fragment_result: FragmentResult, data: bytes) -> tuple[FragmentTask, bytes]:
        """Send a computed result with its data; return the next task and its data."""
        with self._connect() as stream:
            sent = Network.send_message(stream, fragment_result, data)
            logger.debug("Sent message: %s", sent)
            task, new_data = self._receive_task(stream)
            Network.close_connection(stream)
        return task, new_data

    @staticmethod
    def _receive_task(stream: socket.socket) -> tuple[FragmentTask, bytes]:
        fragment, data = Network.read_message(stream)
        if not isinstance(fragment, FragmentTask):
            raise NetworkError(
                f"Not the right response type returned {type(fragment).__name__}"
            )
        return fragment, data

    def _connect(self) -> socket.socket:
        try:
            port = int(self.network.port)
        except ValueError:
            raise NetworkError(f"invalid port {self.network.port!r}") from None
        return socket.create_connection((self.network.server_address, port))