""" A class representation of a decoded event socket message. A
    :class:`Message` behaves like a read-only dictionary of string fields;
    it also remembers which kind of message it is and the envelope headers
    it was framed from.
"""

import enum

from .. import json
from . import fields


class Kind(enum.Enum):
    """ The three kinds of message the framer can produce. """

    EVENT = 'event'
    COMMAND_REPLY = 'command/reply'
    API_RESPONSE = 'api/response'


class Message:
    """ The :class:`Message` provides a very thin encapsulation of what it
        means to be a message in an event socket context.

        For an event, the fields are the decoded key/value pairs from the
        event body. For a command reply or an API response there is a single
        field, 'body', holding either 'OK' or the API response text.

        :ivar kind: A :class:`Kind` member.
        :ivar headers: The envelope headers, keyed by canonical header name.
        :ivar raw: The exact body bytes of an API response, otherwise None.
    """

    def __init__(self, kind, fields=None, headers=None, raw=None):

        if not isinstance(kind, Kind):
            raise ValueError('invalid message kind: ' + repr(kind))

        if fields is None:
            fields = dict()
        if headers is None:
            headers = dict()

        self.kind = kind
        self.fields = fields
        self.headers = headers
        self.raw = raw


    def __contains__(self, key):
        return key in self.fields


    def __eq__(self, other):
        if isinstance(other, Message):
            return self.kind == other.kind and self.fields == other.fields
        if isinstance(other, dict):
            return self.fields == other
        return NotImplemented


    def __getitem__(self, key):
        return self.fields[key]


    def __iter__(self):
        return iter(self.fields)


    def __len__(self):
        return len(self.fields)


    def __repr__(self):
        return "message.Message(%s, %r)" % (self.kind.name, self.fields)


    def get(self, key, default=None):
        return self.fields.get(key, default)


    def keys(self):
        return self.fields.keys()


    def values(self):
        return self.fields.values()


    def items(self):
        return self.fields.items()


    @property
    def body(self):
        """ The 'body' field, or None if this message does not have one.
        """

        return self.fields.get(fields.BODY)


    @property
    def name(self):
        """ The Event-Name of an event, or None.
        """

        return self.fields.get(fields.EVENT_NAME)


    @property
    def is_event(self):
        return self.kind is Kind.EVENT


    def header(self, key, default=None):
        """ Return the envelope header *key*, which is expected to be in
            canonical form (Content-Type, not content-type).
        """

        return self.headers.get(key, default)


    def to_json(self):
        """ Return the fields of this message encoded as JSON bytes. API
            response bodies that are not valid UTF-8 cannot be represented
            and will raise an exception.
        """

        return json.dumps(self.fields)


# end of class Message


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
