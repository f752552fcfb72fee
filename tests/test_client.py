import builtins
import socket
import threading

import pytest

from dirbrowse.client import DirectoryClient, connect, main
from dirbrowse.protocol import ProtocolError, receive_choice, send_list


def recv_exact(sock, count):
    data = b""
    while len(data) < count:
        chunk = sock.recv(count - len(data))
        if not chunk:
            break
        data += chunk
    return data


@pytest.fixture
def pair():
    ours, peer = socket.socketpair()
    ours.settimeout(5)
    peer.settimeout(5)
    yield ours, peer
    ours.close()
    peer.close()


def run(target, *args):
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


def test_connect_reaches_listener():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        port = listener.getsockname()[1]
        with connect("127.0.0.1", port) as sock:
            assert sock.getpeername() == ("127.0.0.1", port)
            conn, _ = listener.accept()
            with conn:
                sock.sendall(b"hi")
                assert conn.recv(2) == b"hi"


def test_connect_refused_raises():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
    with pytest.raises(OSError):
        connect("127.0.0.1", port)


def test_authenticate_sends_fixed_size_login(pair):
    ours, peer = pair
    client = DirectoryClient(ours)
    assert client.authenticate("hello") is True
    message = recv_exact(peer, 113)
    assert len(message) == 113
    assert message.startswith(b"handshakeddd hello")
    assert message.rstrip(b"\x00") == b"handshakeddd hello"


def test_authenticate_truncates_long_text(pair):
    ours, peer = pair
    assert DirectoryClient(ours).authenticate("x" * 300) is True
    message = recv_exact(peer, 113)
    assert message[-1:] == b"\x00"
    assert message.startswith(b"handshakeddd xxx")


def test_authenticate_leave_closes(pair):
    ours, peer = pair
    client = DirectoryClient(ours)
    assert client.authenticate("LEAVE") is False
    assert ours.fileno() == -1
    assert b"LEAVE" in recv_exact(peer, 113)


def test_receive_listing(pair):
    ours, peer = pair
    entries = ["[DIR]alpha", "[FILE]notes.txt"]
    thread = run(send_list, peer, entries)
    client = DirectoryClient(ours)
    assert client.receive_listing() == entries
    assert client.entries == entries
    thread.join(5)


def test_pick_sends_number(pair):
    ours, peer = pair
    errors = []

    def pick():
        try:
            DirectoryClient(ours).pick(7)
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    thread = run(pick)
    assert receive_choice(peer) == 7
    thread.join(5)
    assert errors == []


def test_pick_rejected_raises(pair):
    ours, peer = pair

    def refuse():
        peer.recv(20)
        peer.sendall(b"\x00")

    thread = run(refuse)
    with pytest.raises(ProtocolError):
        DirectoryClient(ours).pick(1)
    thread.join(5)


def test_pick_out_of_range(pair):
    ours, _ = pair
    with pytest.raises(ValueError):
        DirectoryClient(ours).pick(300)


def test_main_session(monkeypatch, capsys):
    seen = []
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        port = listener.getsockname()[1]

        def fake_server():
            conn, _ = listener.accept()
            with conn:
                conn.settimeout(5)
                seen.append(recv_exact(conn, 113))
                send_list(conn, ["[DIR]alpha", "[FILE]notes.txt"])
                seen.append(receive_choice(conn))
                send_list(conn, ["[FILE]inner.txt"])

        thread = run(fake_server)
        lines = iter(["hello", " 1 "])

        def fake_input(*_):
            try:
                return next(lines)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr(builtins, "input", fake_input)
        assert main(["--host", "127.0.0.1", "--port", str(port)]) == 0
        thread.join(5)

    assert seen[0].startswith(b"handshakeddd hello")
    assert seen[1] == 1
    out = capsys.readouterr().out
    assert "[DIR]alpha" in out
    assert "[FILE]inner.txt" in out
    assert "dir picked successfully" in out


def test_main_connection_refused_returns_error():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
    assert main(["--host", "127.0.0.1", "--port", str(port)]) == 1