""" Encoding rules for the pieces of an event socket message: header lines,
    percent-encoded event values, and JSON event bodies. Nothing here does
    any I/O; see :mod:`fsesl.protocol.framing` for that.
"""

import re
import urllib.parse

from .. import json
from ..errors import DecodeError, MalformedHeaderError


# All text on the wire is treated as UTF-8. Anything that does not decode
# cleanly is carried through as surrogate escapes, so that the original
# bytes can always be recovered with the same encoding and error handler.

encoding = 'utf-8'
errors = 'surrogateescape'

_bad_escape = re.compile(r'%(?![0-9A-Fa-f]{2})')


def to_text(raw):
    return raw.decode(encoding, errors)


def to_bytes(text):
    return text.encode(encoding, errors)


def canonical_key(key):
    """ Return the canonical form of a header *key*: the first letter and
        any letter following a hyphen are upper case, all other letters are
        lower case. 'content-LENGTH' becomes 'Content-Length'. Keys with
        embedded whitespace are returned unchanged.
    """

    if ' ' in key or '\t' in key:
        return key

    parts = key.split('-')
    parts = [part[:1].upper() + part[1:].lower() for part in parts]
    return '-'.join(parts)


def parse_headers(lines):
    """ Parse a sequence of header *lines* (str, line terminators removed,
        blank terminator excluded) into a dictionary keyed by canonical
        header name. A line beginning with whitespace continues the value
        of the previous header. If a header appears more than once the
        first value is kept.
    """

    headers = dict()
    started = False
    current = None

    for line in lines:
        if line[:1] in (' ', '\t'):
            if started == False:
                raise MalformedHeaderError('continuation before first header: ' + repr(line))

            # A continuation of a discarded duplicate is discarded with it.

            if current is not None:
                headers[current] = headers[current] + ' ' + line.strip(' \t')
            continue

        try:
            key, value = line.split(':', 1)
        except ValueError:
            raise MalformedHeaderError('malformed header line: ' + repr(line))

        key = key.strip(' \t')
        if key == '':
            raise MalformedHeaderError('empty header name: ' + repr(line))

        key = canonical_key(key)
        value = value.strip(' \t')
        started = True

        if key in headers:
            current = None
        else:
            headers[key] = value
            current = key

    return headers


def parse_length(value):
    """ Interpret a Content-Length header *value*. Raises ValueError unless
        it is a plain non-negative decimal integer.
    """

    if value is None:
        raise ValueError('no Content-Length')

    value = value.strip()

    if value == '' or not value.isdigit() or not value.isascii():
        raise ValueError('invalid Content-Length: ' + repr(value))

    return int(value)


def unescape(value):
    """ Percent-decode *value* using URL query rules: '+' is a space, and
        every '%' must begin a two-digit hexadecimal escape. Raises
        ValueError for a malformed escape.
    """

    match = _bad_escape.search(value)
    if match is not None:
        bad = value[match.start():match.start() + 3]
        raise ValueError("invalid percent escape %r at offset %d" % (bad, match.start()))

    return urllib.parse.unquote_plus(value, encoding=encoding, errors=errors)


def escape(value):
    """ The inverse of :func:`unescape`. """

    return urllib.parse.quote_plus(value, safe='', encoding=encoding, errors=errors)


def decode_event_line(line):
    """ Split one event body *line* into a (key, value) tuple. The key is
        everything before the first ': ', the value is everything after it,
        percent-decoded. Raises ValueError if the line cannot be split or
        the value cannot be decoded.
    """

    key, separator, value = line.partition(': ')

    if separator == '':
        raise ValueError('no ": " separator in event line: ' + repr(line))

    value = unescape(value)
    return key, value


def encode_event(event):
    """ Encode the mapping *event* as a plain event body: one 'Key: Value'
        line per field with the value percent-encoded, followed by the blank
        terminating line. Keys containing ': ' or a line break cannot be
        decoded again and are rejected with :class:`DecodeError`.
    """

    lines = list()

    for key,value in event.items():
        if ': ' in key or '\n' in key or '\r' in key:
            raise DecodeError('key cannot be represented in an event body: ' + repr(key))

        line = key + ': ' + escape(value) + '\n'
        lines.append(line)

    lines.append('\n')
    return to_bytes(''.join(lines))


def decode_event_json(raw):
    """ Decode a JSON event body into a dictionary of strings. Values that
        are not already strings are re-encoded as JSON text.
    """

    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, ValueError) as e:
        raise DecodeError('invalid JSON event body: ' + str(e))

    if not isinstance(decoded, dict):
        raise DecodeError('JSON event body is not an object')

    event = dict()
    for key,value in decoded.items():
        if isinstance(value, str):
            event[key] = value
        else:
            event[key] = to_text(json.dumps(value))

    return event


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
