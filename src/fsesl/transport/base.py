"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`fsesl.protocol` so the framing logic does not care
whether the bytes come from a TCP socket or an in-memory buffer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Transport(ABC):
    """Minimal contract for a line-oriented byte stream."""

    @abstractmethod
    def readline(self) -> bytes:
        """Return the next line with its line terminator removed.

        Raises :class:`fsesl.errors.ConnectionClosedError` if the stream
        ends before any byte of the line arrives.
        """

    @abstractmethod
    def read_exact(self, length: int) -> bytes:
        """Return up to *length* bytes; fewer only if the stream ended."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write all of *data* to the stream."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False


def strip_eol(line: bytes) -> bytes:
    """Remove a trailing LF or CRLF; the server is not consistent about which
    it sends.
    """

    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line
