"""Wire protocol for exchanging directory listings and choices over a socket.

Every step is acknowledged by the receiver with a single byte: 1 for
success, 0 for failure.
"""

from __future__ import annotations

import socket

HANDSHAKE = b"handshakeddd"
ACK = b"\x01"
NAK = b"\x00"
_CHOICE_BUFFER = 20
_DRAIN_CHUNK = 255


class ProtocolError(Exception):
    """Raised when the peer breaks the protocol or the connection ends early."""


def has_handshake(data: bytes) -> bool:
    """Return whether ``data`` carries the handshake marker."""
    return HANDSHAKE in data


def check_password(data: bytes, password: str | bytes) -> bool:
    """Return whether ``data`` carries the handshake and the password."""
    if isinstance(password, str):
        password = password.encode()
    return has_handshake(data) and password in data


def drain(sock: socket.socket) -> int:
    """Discard whatever is already waiting on ``sock``; return the bytes dropped."""
    timeout = sock.gettimeout()
    sock.setblocking(False)
    dropped = 0
    try:
        while True:
            try:
                chunk = sock.recv(_DRAIN_CHUNK)
            except (BlockingIOError, InterruptedError):
                break
            if not chunk:
                break
            dropped += len(chunk)
    finally:
        sock.settimeout(timeout)
    return dropped


def _recv_exact(sock: socket.socket, count: int) -> bytes:
    parts = bytearray()
    while len(parts) < count:
        chunk = sock.recv(count - len(parts))
        if not chunk:
            break
        parts.extend(chunk)
    return bytes(parts)


def _reply(sock: socket.socket, ok: bool) -> None:
    try:
        sock.sendall(ACK if ok else NAK)
    except OSError:
        pass


def _expect_ack(sock: socket.socket, step: str) -> None:
    reply = _recv_exact(sock, 1)
    if reply != ACK:
        raise ProtocolError(f"peer did not confirm {step}")


def send_list(sock: socket.socket, entries: list[str]) -> None:
    """Send a listing, waiting for the peer to confirm each step."""
    encoded = [entry.encode() for entry in entries]
    if len(encoded) > 255:
        raise ValueError("a listing holds at most 255 entries")
    for word in encoded:
        if len(word) > 255:
            raise ValueError(f"entry too long: {word!r}")

    sock.sendall(bytes([len(encoded)]))
    _expect_ack(sock, "list size")
    for index, word in enumerate(encoded):
        sock.sendall(bytes([len(word)]))
        _expect_ack(sock, f"size of entry {index}")
        sock.sendall(word)
        _expect_ack(sock, f"entry {index}")


def receive_list(sock: socket.socket) -> list[str]:
    """Receive a listing sent by :func:`send_list`, confirming each step."""
    header = _recv_exact(sock, 1)
    if len(header) != 1:
        _reply(sock, False)
        raise ProtocolError("missing list size")
    _reply(sock, True)

    entries = []
    for index in range(header[0]):
        size = _recv_exact(sock, 1)
        if len(size) != 1:
            _reply(sock, False)
            raise ProtocolError(f"missing size of entry {index}")
        _reply(sock, True)
        word = _recv_exact(sock, size[0])
        if len(word) != size[0]:
            _reply(sock, False)
            raise ProtocolError(f"entry {index} cut short")
        _reply(sock, True)
        entries.append(word.decode(errors="replace"))
    return entries


def send_choice(sock: socket.socket, number: int) -> None:
    """Send the handshake followed by the chosen entry number."""
    if not 0 <= number <= 255:
        raise ValueError("choice must fit in one byte")
    sock.sendall(HANDSHAKE + b"\x00")
    if _recv_exact(sock, 1) in (b"", NAK):
        raise ProtocolError("handshake not confirmed")
    sock.sendall(bytes([number]))
    if _recv_exact(sock, 1) in (b"", NAK):
        raise ProtocolError("choice not confirmed")


def receive_choice(sock: socket.socket) -> int:
    """Receive a handshake and a chosen entry number sent by :func:`send_choice`."""
    data = sock.recv(_CHOICE_BUFFER)
    if not data:
        _reply(sock, False)
        raise ProtocolError("connection closed before handshake")
    _reply(sock, True)
    if not has_handshake(data):
        raise ProtocolError("missing handshake")
    picked = _recv_exact(sock, 1)
    if not picked:
        _reply(sock, False)
        raise ProtocolError("connection closed before choice")
    _reply(sock, True)
    return picked[0]