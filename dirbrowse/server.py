"""Directory browsing server: authenticates a client and lets it walk a tree."""

from __future__ import annotations

import argparse
import logging
import os
import socket
from pathlib import Path

from .listing import DirectoryBrowser
from .protocol import (
    ProtocolError,
    check_password,
    drain,
    receive_choice,
    send_list,
)

DEFAULT_PORT = 8001
PASSWORD = "password"
BACKLOG = 10
_LOGIN_BUFFER = 255

log = logging.getLogger(__name__)


def create_server_socket(host: str | None, port: int | str) -> socket.socket:
    """Bind an IPv4 TCP socket to ``host`` and ``port``; ``None`` binds all addresses."""
    infos = socket.getaddrinfo(
        host, port, socket.AF_INET, socket.SOCK_STREAM, 0, socket.AI_PASSIVE
    )
    last_error: OSError | None = None
    for family, kind, proto, _, address in infos:
        try:
            sock = socket.socket(family, kind, proto)
        except OSError as exc:
            last_error = exc
            continue
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(address)
        except OSError as exc:
            sock.close()
            last_error = exc
            continue
        return sock
    raise last_error or OSError(f"cannot bind to {host}:{port}")


class DirectoryServer:
    """Serves directory listings below ``root`` to password-holding clients."""

    def __init__(
        self,
        root: str | os.PathLike[str],
        password: str = PASSWORD,
        host: str | None = None,
        port: int = DEFAULT_PORT,
    ) -> None:
        self.root = Path(root)
        self.password = password
        self.host = host
        self.port = port

    def _authenticate(self, conn: socket.socket) -> bool:
        data = conn.recv(_LOGIN_BUFFER)
        drain(conn)
        if check_password(data, self.password):
            log.info("password accepted")
            return True
        return False

    def handle_client(self, conn: socket.socket) -> None:
        """Run one client session until it disconnects or breaks the protocol."""
        with conn:
            log.info("client connected")
            try:
                if not self._authenticate(conn):
                    log.info("client rejected")
                    return
                browser = DirectoryBrowser(self.root)
                send_list(conn, browser.entries)
                log.info("list sent")
                while True:
                    choice = receive_choice(conn)
                    drain(conn)
                    log.info("client picked %d", choice)
                    try:
                        browser.descend(choice)
                    except (IndexError, OSError) as exc:
                        log.info("cannot open entry %d: %s", choice, exc)
                    else:
                        log.info("now in %s", browser.path)
                    send_list(conn, browser.entries)
            except (ProtocolError, OSError, ValueError) as exc:
                log.info("session ended: %s", exc)
            finally:
                log.info("client terminated")

    def serve_forever(self) -> None:
        """Accept clients one after another, forever."""
        with create_server_socket(self.host, self.port) as listener:
            listener.listen(BACKLOG)
            while True:
                log.info("server is listening..")
                try:
                    conn, _ = listener.accept()
                except OSError as exc:
                    log.warning("accept: %s", exc)
                    continue
                self.handle_client(conn)


def main(argv: list[str] | None = None) -> int:
    """Start the directory server."""
    parser = argparse.ArgumentParser(description="Serve directory listings over TCP.")
    parser.add_argument("--root", default=str(Path.home()), help="directory to serve")
    parser.add_argument("--host", default=None, help="address to bind (default: all)")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--password", default=PASSWORD)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        overview = DirectoryBrowser(args.root)
    except OSError as exc:
        log.error("cannot read %s: %s", args.root, exc)
        return 1
    print(overview.format(), end="")

    server = DirectoryServer(args.root, args.password, args.host, args.port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        log.error("server failed: %s", exc)
        return 1
    return 0