""" Python client for the FreeSWITCH event socket. A :class:`Session`
    authenticates to the server, issues commands, and delivers asynchronous
    events; see :mod:`fsesl.protocol` for the message framing underneath.
"""

# Utility components.

from . import json
from . import errors
from . import config

# Submodules used by multiple other components.

from . import transport
from . import protocol

# Primary public-facing interfaces.

from . import session
from .session import Session, SessionState, ReadState
from .protocol.message import Kind, Message
from .errors import (
    ESLError,
    TransportError,
    ConnectionClosedError,
    ConnectTimeoutError,
    ShortReadError,
    ProtocolError,
    MalformedHeaderError,
    MalformedLengthError,
    DecodeError,
    TruncatedBodyError,
    UnexpectedMessageError,
    AuthenticationError,
    CommandError,
    StateError,
)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
