"""Server side of the protocol: handing out tasks and collecting results."""

from __future__ import annotations

import logging
import secrets
import socket
import struct
from typing import Callable

from .complex import Complex
from .desc import PixelIntensity, Point, Range, Resolution, U8Data
from .fractals import JuliaDescriptor
from .network import Network, NetworkError
from .protocols import FragmentRequest, FragmentResult, FragmentTask

logger = logging.getLogger(__name__)

TASK_ID_SIZE = 16
_PIXEL = struct.Struct(">ff")

PixelSink = Callable[[list[PixelIntensity]], None]


def make_task_id() -> bytes:
    """Return a fresh random task identifier."""
    return secrets.token_bytes(TASK_ID_SIZE)


def decode_pixel_intensities(data: bytes) -> list[PixelIntensity]:
    """Decode big-endian (zn, count) f32 pairs; a trailing partial pair is ignored."""
    usable = len(data) - len(data) % _PIXEL.size
    return [PixelIntensity(zn, count) for zn, count in _PIXEL.iter_unpack(bytes(data[:usable]))]


def _default_task() -> FragmentTask:
    return FragmentTask(
        id=U8Data(offset=0, count=TASK_ID_SIZE),
        fractal=JuliaDescriptor(c=Complex(0.285, 0.013), divergence_threshold_square=4.0),
        max_iteration=64,
        resolution=Resolution(nx=400, ny=400),
        range=Range(min=Point(-1.2, -1.0), max=Point(1.2, 1.2)),
    )


class Server:
    """Listens for workers, gives them work and forwards their pixels."""

    def __init__(self, server_address: str, port: str, width: int, height: int) -> None:
        self.network = Network(server_address, port)
        self.width = width
        self.height = height

    def start_server(self) -> socket.socket:
        """Bind and return a listening socket on the configured address."""
        try:
            port = int(self.network.port)
        except ValueError:
            raise NetworkError(f"invalid port {self.network.port!r}") from None
        try:
            return socket.create_server((self.network.server_address, port))
        except OverflowError as exc:
            raise NetworkError(f"invalid port {self.network.port!r}") from exc

    def send_work(self, stream: socket.socket, fragment_request: FragmentRequest) -> None:
        """Answer a work request with a task and a fresh task identifier."""
        logger.debug("Work requested by %s", fragment_request.worker_name)
        task_id = make_task_id()
        logger.info("New task id: %s", task_id.hex())
        Network.send_message(stream, _default_task(), task_id)

    def get_work_done(
        self, fragment_result: FragmentResult, data: bytes, sink: PixelSink
    ) -> None:
        """Decode the pixels that follow the task id and pass them to sink."""
        logger.info("Fragment: %r", fragment_result)
        logger.debug("Data received: %r", data)
        sink(decode_pixel_intensities(data[TASK_ID_SIZE:]))

    def handle_client(self, stream: socket.socket, sink: PixelSink) -> None:
        """Read one message from a worker and act on it."""
        logger.info("Incoming connection %r", stream)
        fragment, data = Network.read_message(stream)
        if isinstance(fragment, FragmentRequest):
            logger.debug("Work request received")
            try:
                self.send_work(stream, fragment)
            except OSError as exc:
                logger.warning("Could not send work: %s", exc)
        elif isinstance(fragment, FragmentResult):
            logger.debug("Work done")
            self.get_work_done(fragment, data, sink)
        else:
            raise NetworkError("The worker sent a task")