""" The event socket protocol: message model, field vocabulary, encoding
    rules and framing. Nothing in this subpackage depends on how bytes
    reach it; :func:`framing.read_frame` accepts any
    :class:`fsesl.transport.Transport`.
"""

from . import codec
from . import fields
from . import framing
from . import message

from .message import Kind, Message
from .framing import read_frame


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
