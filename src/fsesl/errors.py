""" Exceptions raised by fsesl. Everything derives from :class:`ESLError`;
    the transport and protocol families are split so that callers can tell
    an I/O failure apart from a connection that has fallen out of step with
    the wire protocol. Either way the connection should be discarded.
"""


class ESLError(Exception):
    """ Base class for all fsesl errors. """


# Transport errors.

class TransportError(ESLError):
    """ The underlying connection failed to read or write. """


class ConnectionClosedError(TransportError):
    """ The remote end closed the connection at a message boundary. """


class ConnectTimeoutError(TransportError):
    """ The connection could not be established in the allotted time. """


class ShortReadError(TransportError):
    """ A read failed part way through a fixed-length body. *received* is
        the number of bytes that arrived before the failure.
    """

    def __init__(self, message, received=0):
        TransportError.__init__(self, message)
        self.received = received


# Protocol errors.

class ProtocolError(ESLError):
    """ The bytes on the wire did not follow the event socket framing. Once
        one of these is raised the connection is no longer synchronized
        with the server.
    """


class MalformedHeaderError(ProtocolError):
    """ A header block could not be read or parsed. """


class MalformedLengthError(ProtocolError):
    """ A Content-Length header is not a non-negative integer. """


class DecodeError(ProtocolError):
    """ An event body could not be decoded. Whatever was decoded before the
        failure is available as the *event* attribute, which may be None.
    """

    def __init__(self, message, event=None):
        ProtocolError.__init__(self, message)
        self.event = event


class TruncatedBodyError(ProtocolError):
    """ The connection ended before Content-Length bytes were received. """

    def __init__(self, expected, received):
        message = "expected %d body bytes, received %d" % (expected, received)
        ProtocolError.__init__(self, message)
        self.expected = expected
        self.received = received


class UnexpectedMessageError(ProtocolError):
    """ A message matched none of the known framings. The *headers* that
        were read are retained for inspection.
    """

    def __init__(self, message, headers=None):
        ProtocolError.__init__(self, message)
        if headers is None:
            headers = dict()
        self.headers = headers


# Command errors.

class AuthenticationError(ESLError):
    """ The server did not accept the password. """


class CommandError(ESLError):
    """ The server rejected a command, or replied with something other than
        the expected reply. *reply_text* is the Reply-Text header, if any.
    """

    def __init__(self, message, reply_text=None):
        ESLError.__init__(self, message)
        self.reply_text = reply_text


class StateError(ESLError):
    """ An operation was attempted in a session state that does not allow it,
        such as issuing a command before :func:`Session.connect`.
    """


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
