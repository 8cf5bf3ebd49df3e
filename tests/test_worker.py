import socket
import threading

from fractalnet.desc import PixelData, Point, Range, Resolution, U8Data
from fractalnet.fractals import Mandelbrot
from fractalnet.network import Network
from fractalnet.protocols import FragmentRequest, FragmentResult, FragmentTask
from fractalnet.worker import main, start_message


def _task() -> FragmentTask:
    return FragmentTask(
        id=U8Data(0, 16),
        fractal=Mandelbrot(),
        max_iteration=4,
        resolution=Resolution(2, 2),
        range=Range(Point(-2.0, -1.0), Point(1.0, 1.0)),
    )


def _serve(replies):
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen()
    port = listener.getsockname()[1]
    received = []

    def loop():
        try:
            for reply in replies:
                conn, _ = listener.accept()
                received.append(Network.read_message(conn))
                if reply is None:
                    listener.close()
                else:
                    Network.send_message(conn, *reply)
                conn.close()
        finally:
            listener.close()

    thread = threading.Thread(target=loop, daemon=True)
    thread.start()
    return port, thread, received


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _write_config(tmp_path, port):
    path = tmp_path / "worker.toml"
    path.write_text(
        '[server]\nserver_address = "127.0.0.1"\n'
        f'port = "{port}"\n'
        '[worker]\nworker_name = "tester"\nmax_work = 7\n',
        encoding="utf-8",
    )
    return path


def test_start_message_prints_banner(capsys):
    start_message()
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 7
    assert lines[0] == "#" * 58
    assert lines[-1] == lines[0]


def test_main_fails_when_server_unreachable(tmp_path, capsys):
    path = _write_config(tmp_path, _free_port())
    assert main(["--config", str(path)]) == 1


def test_main_computes_task_and_sends_result(tmp_path, capsys):
    task = _task()
    task_data = bytes(range(16))
    port, thread, received = _serve([(task, task_data), None])
    path = _write_config(tmp_path, port)

    status = main(["--config", str(path)])
    thread.join(timeout=5)

    assert status == 0
    assert received[0] == (FragmentRequest("tester", 7), b"")
    result, data = received[1]
    assert result == FragmentResult(task.id, task.resolution, task.range, PixelData(16, 4))
    assert data[:16] == task_data
    assert data[16:] == task.fractal.make_image(task)
    assert len(data) == 16 + 4 * 8