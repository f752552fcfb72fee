"""Interactive client for browsing a remote directory tree."""

from __future__ import annotations

import argparse
import re
import socket
import sys

from .protocol import HANDSHAKE, ProtocolError, receive_list, send_choice

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8001
LOGIN_SIZE = 113
LEAVE = b"LEAVE"

_NUMBER = re.compile(r"\s*([+-]?\d+)")


def connect(host: str, port: int | str) -> socket.socket:
    """Open an IPv4 TCP connection to ``host`` and ``port``."""
    infos = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_STREAM)
    last_error: OSError | None = None
    for family, kind, proto, _, address in infos:
        try:
            sock = socket.socket(family, kind, proto)
        except OSError as exc:
            last_error = exc
            continue
        try:
            sock.connect(address)
        except OSError as exc:
            sock.close()
            last_error = exc
            continue
        return sock
    raise last_error or OSError(f"cannot connect to {host}:{port}")


def _parse_choice(text: str) -> int:
    match = _NUMBER.match(text)
    return (int(match.group(1)) if match else 0) & 0xFF


class DirectoryClient:
    """One connection to a directory server."""

    def __init__(self, sock: socket.socket) -> None:
        self.sock = sock
        self.entries: list[str] = []

    def __enter__(self) -> DirectoryClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def authenticate(self, text: str) -> bool:
        """Send the login line; return False and close if it asks to leave."""
        message = (HANDSHAKE + b" " + text.encode())[: LOGIN_SIZE - 1]
        message = message.ljust(LOGIN_SIZE, b"\x00")
        self.sock.sendall(message)
        if LEAVE in message:
            self.close()
            return False
        return True

    def receive_listing(self) -> list[str]:
        """Receive the server's current listing."""
        self.entries = receive_list(self.sock)
        return self.entries

    def pick(self, number: int) -> None:
        """Ask the server to open the entry numbered ``number``."""
        send_choice(self.sock, number)

    def close(self) -> None:
        """Close the connection."""
        self.sock.close()


def _show(entries: list[str]) -> None:
    for entry in entries:
        print(entry)


def main(argv: list[str] | None = None) -> int:
    """Run the interactive client."""
    parser = argparse.ArgumentParser(description="Browse a remote directory tree.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    try:
        sock = connect(args.host, args.port)
    except OSError as exc:
        print(f"connect: {exc}", file=sys.stderr)
        return 1

    with DirectoryClient(sock) as client:
        print("client started and is connected to the server")
        print("enter something:")
        try:
            line = input()
        except EOFError:
            return 0
        if not client.authenticate(line):
            return 0

        print("client is ready to receive list")
        try:
            _show(client.receive_listing())
        except ProtocolError as exc:
            print(f"server refused: {exc}", file=sys.stderr)
            return 1

        while True:
            try:
                text = input()
            except EOFError:
                return 0
            try:
                client.pick(_parse_choice(text))
            except (ProtocolError, OSError):
                print("failed to pick dir")
            else:
                print("dir picked successfully")
            try:
                _show(client.receive_listing())
            except (ProtocolError, OSError) as exc:
                print(f"connection lost: {exc}", file=sys.stderr)
                return 1