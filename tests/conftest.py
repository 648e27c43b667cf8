import io
import socket

import fsesl
import pytest


WELCOME = b'Content-Type: auth/request\n\n'
ACCEPTED = b'Content-Type: command/reply\nReply-Text: +OK accepted\n\n'
OK = b'Content-Type: command/reply\nReply-Text: +OK\n\n'


class Wire:
    """ Both ends of a connected socket pair: the client end wrapped in a
        :class:`fsesl.transport.Connection`, and a raw socket playing the
        part of the server. Server output has to be fed in before the client
        reads it, since the tests run in a single thread.
    """

    def __init__(self):
        client, server = socket.socketpair()
        self.connection = fsesl.transport.Connection(client)
        self.server = server


    def feed(self, *chunks):
        for chunk in chunks:
            self.server.sendall(chunk)


    def sent(self):
        """ Return everything the client has written since the last call.
        """

        chunks = list()
        self.server.setblocking(False)

        try:
            while True:
                chunk = self.server.recv(65536)
                if not chunk:
                    break
                chunks.append(chunk)
        except BlockingIOError:
            pass
        finally:
            self.server.setblocking(True)

        return b''.join(chunks)


    def hangup(self):
        self.server.shutdown(socket.SHUT_WR)


    def close(self):
        self.connection.close()
        self.server.close()


class BufferTransport(fsesl.transport.Transport):
    """ An in-memory transport that replays *data*. """

    def __init__(self, data):
        self.buffer = io.BytesIO(data)
        self.written = bytearray()
        self.closed = False


    @property
    def is_open(self):
        return not self.closed


    def readline(self):
        line = self.buffer.readline()

        if line == b'':
            raise fsesl.ConnectionClosedError('end of buffer')
        if not line.endswith(b'\n'):
            raise fsesl.TransportError('buffer ends mid-line')

        return fsesl.transport.base.strip_eol(line)


    def read_exact(self, length):
        return self.buffer.read(length)


    def write(self, data):
        self.written.extend(data)


    def close(self):
        self.closed = True


    def remaining(self):
        return self.buffer.read()


def plain_event(event=None, **fields):
    """ Return the wire form of a text/event-plain message built from the
        *event* dictionary and any keyword arguments; keyword arguments use
        underscores where the header names have hyphens.
    """

    if event is None:
        event = dict()
    else:
        event = dict(event)

    for key,value in fields.items():
        event[key.replace('_', '-')] = value

    body = fsesl.protocol.codec.encode_event(event)
    header = 'Content-Length: %d\nContent-Type: text/event-plain\n\n' % (len(body))
    return header.encode() + body


def json_event(raw):
    header = 'Content-Length: %d\nContent-Type: text/event-json\n\n' % (len(raw))
    return header.encode() + raw


def api_response(raw):
    header = 'Content-Type: api/response\nContent-Length: %d\n\n' % (len(raw))
    return header.encode() + raw


def reply(text):
    return ('Content-Type: command/reply\nReply-Text: %s\n\n' % (text)).encode()


@pytest.fixture
def clean_environment(monkeypatch):
    for name in ('FSESL_HOST', 'FSESL_PORT', 'FSESL_PASSWORD', 'FSESL_TIMEOUT'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def wire():
    pair = Wire()
    yield pair
    pair.close()


@pytest.fixture
def session(wire, clean_environment):
    """ A session that has completed the authentication handshake over
        *wire*, with the handshake traffic already drained.
    """

    instance = fsesl.Session()
    wire.feed(WELCOME, ACCEPTED)
    instance.connect(wire.connection)
    wire.sent()

    yield instance
    instance.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
