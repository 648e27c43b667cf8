""" Event socket message framing. Every message starts with a block of
    'Key: Value' header lines ending in a blank line; what follows depends
    entirely on the advertised headers:

    text/event-plain
        Another block of 'Key: Value' lines with percent-encoded values,
        ending in a blank line. The outer Content-Length must be present and
        numeric, but the blank line marks the end of the block. If the event
        carries its own Content-Length, that many bytes of event body follow
        the block.

    text/event-json
        Exactly Content-Length bytes containing a JSON object.

    api/response
        Exactly Content-Length bytes, returned verbatim.

    command/reply
        No body. Only the +OK and +OK accepted replies are valid here.

    Any misstep here leaves the connection out of step with the server for
    the rest of its life, so each branch decides how many bytes to consume
    before consuming any of them.
"""

import logging

from ..errors import (
    ConnectionClosedError,
    DecodeError,
    MalformedHeaderError,
    MalformedLengthError,
    ShortReadError,
    TransportError,
    TruncatedBodyError,
    UnexpectedMessageError,
)
from . import codec
from . import fields
from .message import Kind, Message


logger = logging.getLogger(__name__)


def read_headers(connection):
    """ Read one header block from *connection* and return it as a
        dictionary keyed by canonical header name. A clean end of stream
        before the block begins raises
        :class:`fsesl.errors.ConnectionClosedError`; any other failure raises
        :class:`fsesl.errors.MalformedHeaderError`.
    """

    lines = list()

    while True:
        try:
            line = connection.readline()
        except ConnectionClosedError as e:
            if len(lines) == 0:
                raise
            raise MalformedHeaderError('connection closed inside a header block') from e
        except TransportError as e:
            raise MalformedHeaderError('header read failed: ' + str(e)) from e

        if line == b'':
            break

        lines.append(codec.to_text(line))

    return codec.parse_headers(lines)


def read_frame(connection):
    """ Read and decode the next complete message from *connection*,
        returning a :class:`fsesl.protocol.message.Message`. Errors are
        raised as subclasses of :class:`fsesl.errors.ProtocolError`, or
        :class:`fsesl.errors.ConnectionClosedError` if the server hung up
        between messages.
    """

    headers = read_headers(connection)

    content_type = headers.get(fields.CONTENT_TYPE)
    length = headers.get(fields.CONTENT_LENGTH)

    # An empty Content-Length is treated the same as a missing one.

    if content_type == fields.EVENT_PLAIN and length:
        return _read_event_plain(connection, headers, length)

    if content_type == fields.EVENT_JSON and length:
        return _read_event_json(connection, headers, length)

    if content_type == fields.API_RESPONSE and length:
        raw = _read_body(connection, length)
        body = dict()
        body[fields.BODY] = codec.to_text(raw)
        return Message(Kind.API_RESPONSE, body, headers, raw)

    if content_type == fields.COMMAND_REPLY:
        reply_text = headers.get(fields.REPLY_TEXT)
        if reply_text == fields.OK or reply_text == fields.OK_ACCEPTED:
            body = dict()
            body[fields.BODY] = 'OK'
            return Message(Kind.COMMAND_REPLY, body, headers)

        error = "unexpected command reply: %r" % (reply_text,)
        raise UnexpectedMessageError(error, headers)

    error = "unexpected message: Content-Type %r, Content-Length %r" % (content_type, length)
    raise UnexpectedMessageError(error, headers)


def _read_body(connection, length):
    """ Read exactly the number of bytes advertised by the Content-Length
        header value *length*.
    """

    try:
        length = codec.parse_length(length)
    except ValueError as e:
        raise MalformedLengthError(str(e))

    try:
        raw = connection.read_exact(length)
    except ShortReadError as e:
        raise TruncatedBodyError(length, e.received) from e
    except TransportError as e:
        raise TruncatedBodyError(length, 0) from e

    if len(raw) < length:
        raise TruncatedBodyError(length, len(raw))

    return raw


def _read_event_plain(connection, headers, length):

    # The outer Content-Length is checked for validity only; the body is
    # bounded by its blank line, not by the advertised length.

    try:
        codec.parse_length(length)
    except ValueError as e:
        raise DecodeError(str(e))

    event = dict()
    message = Message(Kind.EVENT, event, headers)

    while True:
        try:
            line = connection.readline()
        except TransportError as e:
            raise DecodeError('connection ended inside an event: ' + str(e), message) from e

        if line == b'':
            break

        try:
            key, value = codec.decode_event_line(codec.to_text(line))
        except ValueError as e:
            raise DecodeError(str(e), message)

        event[key] = value

    # Events such as BACKGROUND_JOB carry a body of their own, described by
    # a Content-Length inside the event.

    inner = event.get(fields.CONTENT_LENGTH)

    if inner:
        try:
            raw = _read_body(connection, inner)
        except MalformedLengthError as e:
            raise DecodeError(str(e), message)

        event[fields.EVENT_BODY] = codec.to_text(raw)

    return message


def _read_event_json(connection, headers, length):

    raw = _read_body(connection, length)
    event = codec.decode_event_json(raw)
    return Message(Kind.EVENT, event, headers)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
