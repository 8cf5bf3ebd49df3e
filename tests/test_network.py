import socket
import struct

import pytest

from fractalnet.complex import Complex
from fractalnet.desc import Point, Range, Resolution, U8Data
from fractalnet.fractals import JuliaDescriptor
from fractalnet.network import Network, NetworkError
from fractalnet.protocols import FragmentRequest, FragmentTask, to_json


@pytest.fixture
def pair():
    left, right = socket.socketpair()
    left.settimeout(5)
    right.settimeout(5)
    yield left, right
    left.close()
    right.close()


def test_network_new_and_full_address():
    network = Network("127.0.0.1", "8080")
    assert network.full_address() == "127.0.0.1:8080"


def test_send_message_wire_format(pair):
    left, right = pair
    request = FragmentRequest(worker_name="test_worker", maximal_work_load=100)
    sent = Network.send_message(left, request, b"\x01\x02")
    encoded = to_json(request).encode()
    assert sent == to_json(request)
    expected = struct.pack(">II", len(encoded) + 2, len(encoded)) + encoded + b"\x01\x02"
    received = b""
    while len(received) < len(expected):
        received += right.recv(4096)
    assert received == expected


def test_round_trip_with_data(pair):
    left, right = pair
    task = FragmentTask(
        id=U8Data(offset=0, count=16),
        fractal=JuliaDescriptor(c=Complex(0.285, 0.013), divergence_threshold_square=4.0),
        max_iteration=64,
        resolution=Resolution(nx=400, ny=400),
        range=Range(min=Point(-1.2, -1.0), max=Point(1.2, 1.2)),
    )
    payload = bytes(range(16))
    Network.send_message(left, task, payload)
    assert Network.read_message(right) == (task, payload)


def test_round_trip_without_data(pair):
    left, right = pair
    request = FragmentRequest(worker_name="w", maximal_work_load=5)
    Network.send_message(left, request)
    assert Network.read_message(right) == (request, b"")


def test_json_size_bigger_than_total(pair):
    left, right = pair
    left.sendall(struct.pack(">II", 2, 5) + b"hello")
    with pytest.raises(NetworkError):
        Network.read_message(right)


def test_undecodable_json(pair):
    left, right = pair
    body = b"{not json}"
    left.sendall(struct.pack(">II", len(body), len(body)) + body)
    with pytest.raises(NetworkError, match="deserialized"):
        Network.read_message(right)


def test_truncated_header(pair):
    left, right = pair
    left.sendall(b"\x00\x00")
    left.shutdown(socket.SHUT_WR)
    with pytest.raises(NetworkError):
        Network.read_message(right)


def test_truncated_data(pair):
    left, right = pair
    body = to_json(FragmentRequest(worker_name="w", maximal_work_load=1)).encode()
    left.sendall(struct.pack(">II", len(body) + 10, len(body)) + body + b"abc")
    left.shutdown(socket.SHUT_WR)
    with pytest.raises(NetworkError):
        Network.read_message(right)


def test_close_connection_signals_end_of_stream(pair):
    left, right = pair
    Network.close_connection(left)
    assert right.recv(1) == b""
    assert left.fileno() == -1