""" TCP implementation of the :class:`fsesl.transport.base.Transport`
    contract. A :class:`Connection` wraps a connected socket with a buffered
    reader; the read methods are blocking, with no timeout.
"""

import logging
import socket

from ..errors import ConnectionClosedError, ConnectTimeoutError, ShortReadError, TransportError
from .base import Transport, strip_eol


logger = logging.getLogger(__name__)


class Connection(Transport):
    """ A line-oriented wrapper around an already connected *sock*. Use
        :func:`dial` to establish a new TCP connection.
    """

    def __init__(self, sock):

        self.socket = sock
        self.reader = sock.makefile('rb')
        self._open = True


    def __repr__(self):
        return 'tcp.Connection: ' + repr(self.socket)


    @property
    def is_open(self):
        return self._open


    def readline(self):

        try:
            line = self.reader.readline()
        except OSError as e:
            raise TransportError('read failed: ' + str(e)) from e

        if line == b'':
            raise ConnectionClosedError('connection closed by remote end')

        if not line.endswith(b'\n'):
            raise TransportError('connection closed mid-line')

        return strip_eol(line)


    def read_exact(self, length):

        chunks = list()
        received = 0

        while received < length:
            try:
                chunk = self.reader.read(length - received)
            except OSError as e:
                error = "read failed after %d of %d bytes: %s" % (received, length, e)
                raise ShortReadError(error, received) from e

            if not chunk:
                # End of stream. The caller decides whether a short read is
                # an error.
                break

            chunks.append(chunk)
            received += len(chunk)

        return b''.join(chunks)


    def write(self, data):

        try:
            self.socket.sendall(data)
        except OSError as e:
            raise TransportError('write failed: ' + str(e)) from e


    def close(self):

        if self._open == False:
            return

        self._open = False

        try:
            self.reader.close()
        finally:
            self.socket.close()


# end of class Connection



def dial(host, port, timeout):
    """ Open a TCP connection to *host* and *port*, waiting no longer than
        *timeout* seconds for the connection to be established. The timeout
        is cleared once connected; subsequent reads block indefinitely.
    """

    logger.debug("connecting to %s:%d", host, port)

    try:
        sock = socket.create_connection((host, port), timeout)
    except socket.timeout as e:
        raise ConnectTimeoutError("no connection to %s:%d in %.2f sec" % (host, port, timeout)) from e
    except OSError as e:
        raise TransportError("cannot connect to %s:%d: %s" % (host, port, e)) from e

    sock.settimeout(None)
    return Connection(sock)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
