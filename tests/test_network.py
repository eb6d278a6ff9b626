import socket
import sys
import threading
import time

import pytest

from battlecity.network import ClientNetwork, NetworkError, ServerNetwork, hex_dump


@pytest.fixture(autouse=True)
def _log_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "prog")])


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _connect(port):
    deadline = time.monotonic() + 5
    while True:
        try:
            return socket.create_connection(("127.0.0.1", port), timeout=5)
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


@pytest.fixture
def listener():
    sock = socket.create_server(("127.0.0.1", 0))
    yield sock
    sock.close()


@pytest.fixture
def connected(listener):
    port = listener.getsockname()[1]
    client = ClientNetwork("127.0.0.1", port)
    conn, _ = listener.accept()
    yield client, conn
    client.close()
    conn.close()


def test_hex_dump_format():
    assert hex_dump(b"\x01\xab") == "01 AB "
    assert hex_dump(b"") == ""


def test_client_send_reaches_server(connected):
    client, conn = connected
    client.send(b"\x01\xab")
    assert _recv_exact(conn, 2) == b"\x01\xab"


def test_client_receive_collects_pieces(connected):
    client, conn = connected

    def later():
        conn.sendall(b"abc")
        time.sleep(0.05)
        conn.sendall(b"defg")

    thread = threading.Thread(target=later)
    thread.start()
    assert client.receive(7) == b"abcdefg"
    thread.join()


def test_client_receive_reports_disconnect(connected):
    client, conn = connected
    conn.close()
    with pytest.raises(NetworkError, match="Server disconnected"):
        client.receive(7)


def test_client_connect_failure():
    port = _free_port()
    with pytest.raises(NetworkError, match="Failed to connect to 127.0.0.1"):
        ClientNetwork("127.0.0.1", port)


def test_client_send_after_close_describes_data(listener):
    client = ClientNetwork("127.0.0.1", listener.getsockname()[1])
    client.close()
    with pytest.raises(NetworkError) as info:
        client.send(b"\x01\xab")
    assert "Size: 2" in str(info.value)
    assert "Data: 01 AB " in str(info.value)


def test_client_context_manager_closes(listener):
    with ClientNetwork("127.0.0.1", listener.getsockname()[1]) as client:
        pass
    with pytest.raises(NetworkError):
        client.send(b"\x00")


def test_server_send_reaches_all_clients():
    port = _free_port()
    thread, sockets = _connect_in_background(port, 2)
    server = ServerNetwork(port, 2)
    thread.join(5)
    first, second = sockets
    try:
        server.send(b"\x05\x06\x07")
        assert _recv_exact(first, 3) == b"\x05\x06\x07"
        assert _recv_exact(second, 3) == b"\x05\x06\x07"
    finally:
        server.close()
        first.close()
        second.close()


def test_server_receive_keeps_connection_order():
    port = _free_port()
    thread, sockets = _connect_in_background(port, 2)
    server = ServerNetwork(port, 2)
    thread.join(5)
    first, second = sockets
    try:
        first.sendall(b"\x01")
        second.sendall(b"\x02")
        assert server.receive(1) == [b"\x01", b"\x02"]
    finally:
        server.close()
        first.close()
        second.close()


def test_server_reports_client_disconnect():
    port = _free_port()
    thread, sockets = _connect_in_background(port, 2)
    server = ServerNetwork(port, 2)
    thread.join(5)
    first, second = sockets
    try:
        first.sendall(b"\x01")
        second.close()
        with pytest.raises(NetworkError, match="Client 1 disconnected"):
            server.receive(1)
    finally:
        server.close()
        first.close()


def test_server_listen_failure():
    blocker = socket.create_server(("", 0))
    try:
        port = blocker.getsockname()[1]
        with pytest.raises(NetworkError, match="Failed to listen"):
            ServerNetwork(port)
    finally:
        blocker.close()


def test_server_context_manager_closes():
    port = _free_port()
    thread, sockets = _connect_in_background(port, 1)
    with ServerNetwork(port, 1) as server:
        thread.join(5)
    for sock in sockets:
        sock.close()
    with pytest.raises(NetworkError):
        server.send(b"\x00")