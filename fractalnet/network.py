"""Length-prefixed framing of JSON fragments plus binary data over a stream."""

from __future__ import annotations

import logging
import socket
import struct
from dataclasses import dataclass

from .protocols import DecodeError, Fragment, from_json, to_json

logger = logging.getLogger(__name__)

_U32 = struct.Struct(">I")
_U32_MAX = 0xFFFFFFFF
_CHUNK = 65536


class NetworkError(OSError):
    """Raised when a message cannot be sent or received."""


def _read_exact(stream: socket.socket, size: int, what: str) -> bytes:
    buffer = bytearray()
    while len(buffer) < size:
        chunk = stream.recv(min(size - len(buffer), _CHUNK))
        if not chunk:
            raise NetworkError(f"connection closed while reading {what}")
        buffer += chunk
    return bytes(buffer)


@dataclass(frozen=True)
class Network:
    """Address of a peer as host and port strings."""

    server_address: str
    port: str

    def full_address(self) -> str:
        """Return "host:port"."""
        return f"{self.server_address}:{self.port}"

    @staticmethod
    def send_message(stream: socket.socket, fragment: Fragment, data: bytes = b"") -> str:
        """Send a fragment and its binary data; return the JSON text sent."""
        json_message = to_json(fragment)
        encoded = json_message.encode("utf-8")
        total = len(encoded) + len(data)
        if total > _U32_MAX:
            raise NetworkError("message is too large to frame")
        stream.sendall(_U32.pack(total) + _U32.pack(len(encoded)) + encoded + bytes(data))
        return json_message

    @staticmethod
    def read_message(stream: socket.socket) -> tuple[Fragment, bytes]:
        """Receive one framed message and return its fragment and binary data."""
        try:
            (total_size,) = _U32.unpack(_read_exact(stream, 4, "the total message size"))
        except NetworkError:
            logger.warning("Could not receive the total message size")
            raise
        logger.debug("Start getting something")
        (json_size,) = _U32.unpack(_read_exact(stream, 4, "the JSON message size"))
        if total_size < json_size:
            raise NetworkError("JSON message size is bigger than total message size")

        text = _read_exact(stream, json_size, "the JSON message").decode("utf-8", errors="replace")
        logger.debug("Message received: %s", text)
        try:
            fragment = from_json(text)
        except DecodeError as exc:
            raise NetworkError("Message received cannot be deserialized") from exc

        try:
            data = _read_exact(stream, total_size - json_size, "the binary data")
        except NetworkError as exc:
            logger.error("Failed to read binary data: %s", exc)
            raise
        return fragment, data

    @staticmethod
    def close_connection(stream: socket.socket) -> None:
        """Shut the connection down in both directions and close it."""
        try:
            stream.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        stream.close()