"""Browse a remote directory tree over a small TCP protocol: listings, wire format, server and client."""

__version__ = "0.1.0"

__all__ = ["listing", "protocol", "server", "client"]