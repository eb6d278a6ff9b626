"""TCP connections between the game server and its clients."""

import socket

from . import logs

DEFAULT_PORT = 61000


class NetworkError(RuntimeError):
    """A connection could not be made or broke down."""


def hex_dump(data: bytes) -> str:
    """Render bytes as upper-case hex pairs, each followed by a space."""
    return "".join(f"{byte:02X} " for byte in data)


def _send_error(data: bytes) -> NetworkError:
    return NetworkError(
        f"Failed to send data\nSize: {len(data)}\nData: {hex_dump(data)}"
    )


def _receive_exact(sock: socket.socket, size: int, failed: str, disconnected: str) -> bytes:
    buffer = bytearray()
    while len(buffer) < size:
        try:
            chunk = sock.recv(size - len(buffer))
        except OSError as exc:
            raise NetworkError(failed) from exc
        if not chunk:
            raise NetworkError(disconnected)
        buffer += chunk
    return bytes(buffer)


def _no_delay(sock: socket.socket) -> None:
    try:
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
    except OSError:
        pass


class ClientNetwork:
    """A client's connection to the game server."""

    def __init__(self, address: str, port: int = DEFAULT_PORT):
        try:
            self._socket = socket.create_connection((address, port))
        except OSError as exc:
            raise NetworkError(
                f"Failed to connect to {address}:{port} (is the server running?)"
            ) from exc
        _no_delay(self._socket)
        self._closed = False
        logs.info(f"Connected to {address}:{port}")

    def send(self, data: bytes) -> None:
        """Send all of ``data``; raises NetworkError on failure."""
        data = bytes(data)
        try:
            self._socket.sendall(data)
        except OSError as exc:
            raise _send_error(data) from exc

    def receive(self, size: int) -> bytes:
        """Block until exactly ``size`` bytes have arrived."""
        return _receive_exact(
            self._socket, size, "Failed to get data from server", "Server disconnected"
        )

    def close(self) -> None:
        """Disconnect from the server."""
        if self._closed:
            return
        self._closed = True
        self._socket.close()
        logs.info("Client disconnected")

    def __enter__(self) -> "ClientNetwork":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class ServerNetwork:
    """A listening server that waits for its players and talks to all of them."""

    def __init__(self, port: int = DEFAULT_PORT, clients: int = 2):
        try:
            self._listener = socket.create_server(("", port))
        except OSError as exc:
            raise NetworkError(f"Failed to listen on port {port}") from exc
        self._sockets: list = []
        self._closed = False
        try:
            for number in range(1, clients + 1):
                try:
                    conn, address = self._listener.accept()
                except OSError as exc:
                    raise NetworkError(
                        f"Failed to accept connection from player {number}"
                    ) from exc
                _no_delay(conn)
                self._sockets.append(conn)
                logs.info(f"Player {number} connected from {address[0]}:{address[1]}")
        except BaseException:
            self._release()
            raise

    def _release(self) -> None:
        self._closed = True
        self._listener.close()
        for sock in self._sockets:
            sock.close()

    def send(self, data: bytes) -> None:
        """Send ``data`` to every client; raises NetworkError on failure."""
        data = bytes(data)
        for sock in self._sockets:
            try:
                sock.sendall(data)
            except OSError as exc:
                raise _send_error(data) from exc

    def receive(self, size: int) -> list:
        """Read exactly ``size`` bytes from each client, in connection order."""
        return [
            _receive_exact(
                sock,
                size,
                f"Failed to get data from client {index}",
                f"Client {index} disconnected",
            )
            for index, sock in enumerate(self._sockets)
        ]

    def close(self) -> None:
        """Stop listening and drop all clients."""
        if self._closed:
            return
        self._release()
        logs.info("Server closed")

    def __enter__(self) -> "ServerNetwork":
        return self

    def __exit__(self, *args) -> None:
        self.close()