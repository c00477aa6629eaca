import socket
import threading

import pytest

from rkit.tcp import ConnectError, EmptyReplyError, TcpClient, TcpServer


def _free_port():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def test_round_trip_returns_server_reply():
    received = []
    holder = {}

    def on_read(data):
        received.append(data)
        holder["server"].reply(b"echo:" + data)

    with TcpServer(on_read=on_read) as server:
        holder["server"] = server
        server.start(0)
        reply = TcpClient().request("127.0.0.1", server.port, b"ping", timeout=0.5)
    assert reply == b"echo:ping"
    assert received == [b"ping"]


def test_port_may_be_given_as_string():
    holder = {}

    def on_read(data):
        holder["server"].reply(data + data)

    with TcpServer(on_read=on_read) as server:
        holder["server"] = server
        server.start("0")
        reply = TcpClient().request("127.0.0.1", str(server.port), b"ab", timeout=0.5)
    assert reply == b"abab"


def test_silent_server_gives_empty_reply_error():
    got = threading.Event()
    with TcpServer(on_read=lambda data: got.set()) as server:
        server.start(0)
        with pytest.raises(EmptyReplyError) as info:
            TcpClient().request("127.0.0.1", server.port, b"hello", timeout=0.3)
        assert got.wait(1.0)
    assert info.value.reply == b""


def test_reply_not_longer_than_request_is_an_error():
    holder = {}

    def on_read(data):
        holder["server"].reply(data[:2])

    with TcpServer(on_read=on_read) as server:
        holder["server"] = server
        server.start(0)
        with pytest.raises(EmptyReplyError) as info:
            TcpClient().request("127.0.0.1", server.port, b"hello", timeout=0.4)
    assert info.value.reply == b"he"


def test_unreachable_host_raises_connect_error_and_logs():
    logs = []
    with pytest.raises(ConnectError):
        TcpClient(on_log=logs.append).request("127.0.0.1", _free_port(), b"x", timeout=0.5)
    assert logs == ["Not connected!"]


def test_client_logs_progress():
    logs = []
    holder = {}

    def on_read(data):
        holder["server"].reply(b"ok:" + data)

    with TcpServer(on_read=on_read) as server:
        holder["server"] = server
        server.start(0)
        TcpClient(on_log=logs.append).request("127.0.0.1", server.port, b"q", timeout=0.4)
        port = server.port
    assert logs[0] == f"Connected 127.0.0.1 : {port}"
    assert "socket written ok" in logs
    assert logs[-1] == "Reading : ok:q"


def test_server_logs_reads():
    logs = []
    got = threading.Event()
    with TcpServer(on_read=lambda data: got.set(), on_log=logs.append) as server:
        server.start(0)
        with pytest.raises(EmptyReplyError):
            TcpClient().request("127.0.0.1", server.port, b"ping", timeout=0.3)
        assert got.wait(1.0)
    assert "get client link" in logs
    assert "read client : ping" in logs


def test_reply_without_client_raises():
    with TcpServer() as server:
        server.start(0)
        with pytest.raises(ConnectionError):
            server.reply(b"data")


def test_sequential_clients_are_served():
    holder = {}

    def on_read(data):
        holder["server"].reply(b">" + data)

    with TcpServer(on_read=on_read) as server:
        holder["server"] = server
        server.start(0)
        client = TcpClient()
        first = client.request("127.0.0.1", server.port, b"one", timeout=0.4)
        second = client.request("127.0.0.1", server.port, b"two", timeout=0.4)
    assert (first, second) == (b">one", b">two")


def test_stopped_server_refuses_connections():
    server = TcpServer()
    server.start(0)
    port = server.port
    server.stop()
    with pytest.raises(ConnectError):
        TcpClient().request("127.0.0.1", port, b"x", timeout=0.3)