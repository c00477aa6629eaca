"""Local (Unix domain socket) client and server with the same protocol as TCP."""

from __future__ import annotations

import errno
import os
import socket
import tempfile
from typing import Optional

from rkit.tcp import (
    DEFAULT_TIMEOUT,
    ConnectError,
    LogCallback,
    ReadCallback,
    _exchange,
    _SingleClientServer,
)

ACKNOWLEDGEMENT = b"RERE"


def _quiet(_message: str) -> None:
    """Discard a log message."""


def socket_path(name: str) -> str:
    """Map a server name to a socket path; bare names live in the temp dir."""
    if os.path.isabs(name) or os.sep in name:
        return name
    return os.path.join(tempfile.gettempdir(), name)


class LocalClient:
    """Sends one request per connection to a named local server."""

    def __init__(self, on_log: Optional[LogCallback] = None) -> None:
        self._on_log = on_log or _quiet

    def request(self, name: str, payload: bytes, timeout: float = DEFAULT_TIMEOUT) -> bytes:
        """Send payload and return everything received until the line goes quiet."""
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(timeout)
        try:
            sock.connect(socket_path(name))
        except OSError as exc:
            sock.close()
            self._on_log("Not connected!")
            raise ConnectError(f"cannot connect to {name}") from exc
        with sock:
            self._on_log(f"Connected {name} : ")
            return _exchange(sock, payload, timeout, self._on_log)


class LocalServer(_SingleClientServer):
    """Listens on a named local socket; every read is acknowledged."""

    def __init__(
        self,
        on_read: Optional[ReadCallback] = None,
        on_log: Optional[LogCallback] = None,
    ) -> None:
        super().__init__(on_read, on_log)
        self._path: Optional[str] = None

    @property
    def path(self) -> Optional[str]:
        """The socket path, or None before start."""
        return self._path

    def start(self, name: str) -> None:
        """Listen on name, replacing a stale socket file left at its path."""
        path = socket_path(name)
        listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            try:
                listener.bind(path)
            except OSError as exc:
                if exc.errno != errno.EADDRINUSE:
                    raise
                os.unlink(path)
                listener.bind(path)
            listener.listen()
        except OSError:
            listener.close()
            raise
        self._serve(listener)
        self._path = path
        self._on_log("start local server ok")

    def _handle(self, conn: socket.socket, data: bytes) -> None:
        self._on_read(data)
        self._send(conn, ACKNOWLEDGEMENT)

    def reply(self, data: bytes) -> None:
        """Send data to the currently connected client."""
        super().reply(data)

    def stop(self) -> None:
        """Stop listening, drop the client and remove the socket file."""
        super().stop()
        if self._path is not None:
            try:
                os.unlink(self._path)
            except FileNotFoundError:
                pass
            self._path = None

    def __enter__(self) -> "LocalServer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()