import socket
import sys
import threading
import time

import pytest

from battlecity import server
from battlecity.base import GameObject, Vector2
from battlecity.enums import ObjectType
from battlecity.serializer import OBJECT_SIZE, bytes_to_object, object_to_bytes


@pytest.fixture(autouse=True)
def log_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "server")])
    return tmp_path


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _connect(port):
    deadline = time.monotonic() + 5
    while True:
        try:
            return socket.create_connection(("127.0.0.1", port), timeout=10)
        except OSError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.01)


def _connect_in_background(port, count):
    sockets = []

    def run():
        for _ in range(count):
            sockets.append(_connect(port))

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return thread, sockets


def _recv_exact(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        assert chunk
        data += chunk
    return data


def _read_frame(sock):
    records = []
    while True:
        record = _recv_exact(sock, OBJECT_SIZE)
        records.append(record)
        if bytes_to_object(record).type == ObjectType.NETWORK_TERMINATOR:
            return records


def _run_main(args):
    result = {}

    def run():
        result["code"] = server.main(args)

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return thread, result


def _brick(x, y):
    return GameObject(ObjectType.BRICK, Vector2(x, y), Vector2(8, 8))


def test_first_encode_sends_everything():
    encoder = server.FrameEncoder()
    a, b = _brick(8, 16), _brick(24, 16)
    assert encoder.encode([a, b]) == [object_to_bytes(a), object_to_bytes(b)]


def test_unchanged_objects_are_skipped():
    encoder = server.FrameEncoder()
    a, b = _brick(8, 16), _brick(24, 16)
    encoder.encode([a, b])
    assert encoder.encode([a, b]) == []


def test_changed_object_is_sent_again():
    encoder = server.FrameEncoder()
    a, b = _brick(8, 16), _brick(24, 16)
    encoder.encode([a, b])
    a.position = Vector2(9, 16)
    assert encoder.encode([a, b]) == [object_to_bytes(a)]


def test_destroyed_object_is_forgotten():
    encoder = server.FrameEncoder()
    a = _brick(8, 16)
    encoder.encode([a])
    a.destroyed = True
    assert encoder.encode([a]) == [object_to_bytes(a)]
    assert encoder.encode([a]) == [object_to_bytes(a)]


def test_terminator_record():
    record = server.terminator_bytes()
    assert len(record) == OBJECT_SIZE
    obj = bytes_to_object(record)
    assert obj.type == ObjectType.NETWORK_TERMINATOR
    assert obj.position == Vector2(0, 0)
    assert obj.destroyed is False


def test_new_stage_record():
    obj = bytes_to_object(server.new_stage_bytes())
    assert obj.type == ObjectType.NEW_STAGE
    assert obj.state == 0


def test_main_reports_missing_stage(log_dir):
    port = _free_port()
    thread, sockets = _connect_in_background(port, 2)
    code = server.main(["--port", str(port), "--resources", str(log_dir / "none")])
    thread.join(10)
    for sock in sockets:
        sock.close()
    assert code == 0
    text = (log_dir / "latest.log").read_text(encoding="utf-8")
    assert "[ERROR] Failed to load data for stage 0" in text
    assert text.rstrip().endswith("Terminated. Goodbye!")


def test_main_serves_frames_until_clients_leave(log_dir):
    stages = log_dir / "resources" / "stages"
    stages.mkdir(parents=True)
    (stages / "stage0.layout").write_text("b1\n", encoding="utf-8")
    (stages / "stage0.tanks").write_text("0\n", encoding="utf-8")

    port = _free_port()
    thread, result = _run_main(
        ["--port", str(port), "--resources", str(log_dir / "resources")]
    )
    first = _connect(port)
    second = _connect(port)

    frame_one = _read_frame(first)
    frame_two = _read_frame(second)
    assert frame_one == frame_two
    types = [bytes_to_object(record).type for record in frame_one]
    assert ObjectType.BRICK in types
    assert ObjectType.SPAWNER in types
    assert types.count(ObjectType.NETWORK_TERMINATOR) == 1

    first.sendall(b"\x00")
    second.sendall(b"\x00")
    first.close()
    second.close()
    thread.join(10)

    assert result["code"] == 0
    text = (log_dir / "latest.log").read_text(encoding="utf-8")
    assert "[INFO] Game started, stage 0" in text
    assert "Something critical went wrong :(" in text