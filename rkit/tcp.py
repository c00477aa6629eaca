"""Request/response TCP client and a single-connection TCP server."""

from __future__ import annotations

import logging
import socket
import threading
from typing import Callable, Optional, Union

DEFAULT_TIMEOUT = 0.3
_POLL_INTERVAL = 0.1
_CHUNK = 65536

_LOGGER = logging.getLogger(__name__)

LogCallback = Callable[[str], None]
ReadCallback = Callable[[bytes], None]


class ConnectError(ConnectionError):
    """Raised when the remote end cannot be reached."""


class EmptyReplyError(ConnectionError):
    """Raised when the reply is not longer than the request that was sent."""

    def __init__(self, reply: bytes) -> None:
        super().__init__(f"reply too short ({len(reply)} bytes)")
        self.reply = reply


def _default_log(message: str) -> None:
    _LOGGER.debug(message)


def _text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _exchange(sock: socket.socket, payload: bytes, timeout: float, log: LogCallback) -> bytes:
    """Send payload, then collect data until the peer is silent for timeout."""
    sock.settimeout(timeout)
    sock.sendall(payload)
    log("socket written ok")
    chunks = []
    while True:
        try:
            chunk = sock.recv(_CHUNK)
        except socket.timeout:
            break
        if not chunk:
            break
        chunks.append(chunk)
    reply = b"".join(chunks)
    log("Reading : " + _text(reply))
    return reply


def _abort(conn: socket.socket) -> None:
    try:
        conn.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass
    conn.close()


class _SingleClientServer:
    """Accepts connections in the background, keeping only the newest one."""

    def __init__(
        self,
        on_read: Optional[ReadCallback] = None,
        on_log: Optional[LogCallback] = None,
    ) -> None:
        self._on_read = on_read
        self._on_log = on_log or _default_log
        self._listener: Optional[socket.socket] = None
        self._client: Optional[socket.socket] = None
        self._lock = threading.Lock()
        self._stopping = threading.Event()
        self._threads: list[threading.Thread] = []

    def _serve(self, listener: socket.socket) -> None:
        self.stop()
        self._stopping.clear()
        listener.settimeout(_POLL_INTERVAL)
        self._listener = listener
        self._spawn(self._accept_loop, listener)

    def _spawn(self, target, *args) -> None:
        thread = threading.Thread(target=target, args=args, daemon=True)
        self._threads.append(thread)
        thread.start()

    def _accept_loop(self, listener: socket.socket) -> None:
        while not self._stopping.is_set():
            try:
                conn, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            self._on_log("get client link")
            with self._lock:
                previous, self._client = self._client, conn
            if previous is not None:
                _abort(previous)
            self._spawn(self._read_loop, conn)

    def _read_loop(self, conn: socket.socket) -> None:
        conn.settimeout(_POLL_INTERVAL)
        while not self._stopping.is_set():
            try:
                data = conn.recv(_CHUNK)
            except socket.timeout:
                continue
            except OSError:
                break
            if not data:
                break
            self._on_log("read client : " + _text(data))
            self._handle(conn, data)

    def _handle(self, conn: socket.socket, data: bytes) -> None:
        if self._on_read is not None:
            self._on_read(data)

    def _send(self, conn: socket.socket, data: bytes) -> None:
        conn.sendall(data)
        self._on_log("return client : " + _text(data))

    def reply(self, data: bytes) -> None:
        """Send data to the currently connected client."""
        with self._lock:
            conn = self._client
        if conn is None:
            raise ConnectionError("no client connected")
        self._send(conn, data)

    def stop(self) -> None:
        """Close the listener and the current client and wait for the workers."""
        self._stopping.set()
        if self._listener is not None:
            self._listener.close()
            self._listener = None
        with self._lock:
            conn, self._client = self._client, None
        if conn is not None:
            _abort(conn)
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join(timeout=1.0)
        self._threads.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


class TcpClient:
    """Sends one request per connection and gathers the reply."""

    def __init__(self, on_log: Optional[LogCallback] = None) -> None:
        self._on_log = on_log or _default_log

    def request(
        self,
        host: str,
        port: Union[int, str],
        payload: bytes,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> bytes:
        """Send payload and return everything received until the line goes quiet.

        Raises ConnectError if the host cannot be reached and EmptyReplyError
        if the reply is not longer than the payload.
        """
        try:
            sock = socket.create_connection((host, int(port)), timeout=timeout)
        except OSError as exc:
            self._on_log("Not connected!")
            raise ConnectError(f"cannot connect to {host}:{port}") from exc
        with sock:
            self._on_log(f"Connected {host} : {port}")
            reply = _exchange(sock, payload, timeout, self._on_log)
        if len(reply) - len(payload) < 1:
            raise EmptyReplyError(reply)
        return reply


class TcpServer(_SingleClientServer):
    """Listens on a TCP port and serves one client at a time."""

    def __init__(
        self,
        on_read: Optional[ReadCallback] = None,
        on_log: Optional[LogCallback] = None,
    ) -> None:
        super().__init__(on_read, on_log)
        self._port: Optional[int] = None

    @property
    def port(self) -> Optional[int]:
        """The bound port, or None before start."""
        return self._port

    def start(self, port: Union[int, str]) -> None:
        """Listen on all interfaces at port; port 0 picks a free one."""
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            listener.bind(("", int(port)))
            listener.listen()
        except OSError:
            listener.close()
            raise
        self._serve(listener)
        self._port = listener.getsockname()[1]
        self._on_log("TCP server created")

    def reply(self, data: bytes) -> None:
        """Send data to the currently connected client."""
        super().reply(data)

    def stop(self) -> None:
        """Stop listening and drop the current client."""
        super().stop()

    def __enter__(self) -> "TcpServer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()