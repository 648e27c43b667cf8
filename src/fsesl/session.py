""" Classes and methods implemented here implement the client side of the
    event socket: authentication, command/reply exchanges, and delivery of
    asynchronous events.

    The protocol is strictly half-duplex from the client's point of view.
    A command is written, and the next reply on the connection is the reply
    to that command; events pushed by the server in the meantime are held
    in a local queue and handed out, in arrival order, by later calls to
    :func:`Session.read_event`.
"""

import collections
import enum
import logging

from . import config
from . import transport
from .errors import (
    AuthenticationError,
    CommandError,
    ProtocolError,
    StateError,
    UnexpectedMessageError,
)
from .protocol import codec
from .protocol import fields
from .protocol import framing
from .protocol.message import Kind


logger = logging.getLogger(__name__)


class SessionState(enum.Enum):

    UNCONNECTED = 'unconnected'
    CONNECTING = 'connecting'
    AUTHENTICATED = 'authenticated'
    CLOSED = 'closed'


class ReadState(enum.Enum):
    """ What the caller of :func:`Session.read_message` is waiting for. An
        IDLE reader wants the next event; a reader AWAITING_REPLY wants the
        reply to the command it just sent, and any event encountered first
        is queued for later.
    """

    IDLE = 'idle'
    AWAITING_REPLY = 'awaiting reply'


class Session:
    """ A single authenticated connection to an event socket. The connection
        parameters default to :class:`fsesl.config.Settings`, including any
        environment overrides; explicit arguments take precedence. Nothing
        happens on the wire until :func:`connect` is called.

        A :class:`Session` is not thread-safe. Every method blocks until its
        reply has been read, and only one method may be active at a time.

        :ivar state: A :class:`SessionState` member.
        :ivar queue: Events received while waiting for a command reply.
    """

    def __init__(self, host=None, port=None, password=None, timeout=None, settings=None):

        if settings is None:
            settings = config.Settings.from_environment(host=host, port=port, password=password, timeout=timeout)

        self.settings = settings
        self.connection = None
        self.state = SessionState.UNCONNECTED
        self.queue = collections.deque()


    def __enter__(self):
        return self


    def __exit__(self, *exc):
        self.close()


    def __repr__(self):
        return "session.Session(%s:%d, %s)" % (self.settings.host, self.settings.port, self.state.value)


    def connect(self, connection=None):
        """ Establish and authenticate the connection. If *connection* is
            provided it is used as-is, otherwise a new TCP connection is made
            using the session settings. Raises
            :class:`fsesl.errors.AuthenticationError` if the server does not
            accept the password, in which case the connection is closed and
            the session is left unconnected.
        """

        if self.state is SessionState.AUTHENTICATED:
            raise StateError('session is already connected')

        self.state = SessionState.CONNECTING
        settings = self.settings

        try:
            if connection is None:
                connection = transport.dial(settings.host, settings.port, settings.timeout)

            self.connection = connection

            # The server opens with an auth/request header block. Only the
            # reply to 'auth' decides success.

            welcome = framing.read_headers(connection)

            if welcome.get(fields.CONTENT_TYPE) != fields.AUTH_REQUEST:
                logger.warning("unexpected welcome from %s:%d: %r", settings.host, settings.port, welcome)

            self._authenticate(settings.password)

        except Exception:
            self._abandon()
            raise

        self.state = SessionState.AUTHENTICATED
        logger.info("authenticated to %s:%d", settings.host, settings.port)


    def _authenticate(self, password):

        self._send(('auth ' + password,), redacted='auth ********')

        try:
            reply = self._reply()
        except CommandError as e:
            logger.warning("authentication rejected: %s", e.reply_text)
            raise AuthenticationError('authentication rejected: ' + repr(e.reply_text)) from e

        reply_text = reply.header(fields.REPLY_TEXT)

        if reply.kind is not Kind.COMMAND_REPLY or reply_text != fields.OK_ACCEPTED:
            logger.warning("authentication failed: %r", reply_text)
            raise AuthenticationError('authentication failed: ' + repr(reply_text))


    def _abandon(self):
        """ Drop the connection after a failed :func:`connect`. """

        connection = self.connection
        self.connection = None
        self.queue.clear()
        self.state = SessionState.UNCONNECTED

        if connection is not None:
            connection.close()


    def close(self):
        """ Close the connection. Queued events are discarded. Closing an
            unconnected or already closed session does nothing.
        """

        if self.connection is not None:
            self.connection.close()
            self.connection = None

        self.queue.clear()

        if self.state is not SessionState.UNCONNECTED:
            self.state = SessionState.CLOSED


    def add_filter(self, spec):
        """ Restrict the events delivered on this connection to those whose
            header matches *spec*, for example 'Unique-ID <uuid>'. Filters
            are inclusive: once any filter is in place, only matching events
            are received. Multiple filters may be added.
        """

        self._command('filter ' + spec)


    def remove_filter(self, spec):
        """ Remove a filter previously added with :func:`add_filter`. """

        self._command('filter delete ' + spec)


    def subscribe_event(self, classes='ALL', format='plain'):
        """ Enable delivery of the named event *classes*, either a single
            space-separated string or a sequence of names; 'ALL' enables
            every event. The *format* is 'plain' or 'json'.
        """

        if format not in fields.FORMATS:
            raise ValueError('unsupported event format: ' + repr(format))

        classes = _join(classes)
        self._command('event ' + format + ' ' + classes)


    def unsubscribe_event(self, classes='ALL'):
        """ Disable delivery of the named event *classes*. """

        classes = _join(classes)
        self._command('nixevent ' + classes)


    def api(self, command):
        """ Run an API *command* and return its output as a string. The
            command blocks on the server until it completes. The exact bytes
            of the response are recoverable with
            ``body.encode('utf-8', 'surrogateescape')``.
        """

        self._require_authenticated()
        self._send(('api ' + command,))
        reply = self._reply()

        if reply.kind is not Kind.API_RESPONSE:
            raise CommandError("expected an api/response for %r, received %s" % (command, reply.kind.value))

        return reply.body


    def execute(self, app, arg=None, uuid='', lock=False):
        """ Execute the dialplan application *app*, with the optional
            argument *arg*, on the channel identified by *uuid*. If *lock*
            is True the server runs queued applications one at a time.
            Returns once the server has accepted the request, not when the
            application finishes; completion is signalled by events.
        """

        self._require_authenticated()

        if uuid:
            lines = ['sendmsg ' + uuid]
        else:
            lines = ['sendmsg']

        lines.append('call-command: execute')
        lines.append('execute-app-name: ' + app)

        if arg:
            lines.append('execute-app-arg: ' + arg)

        if lock:
            lines.append('event-lock: true')

        self._send(lines)
        reply = self._reply()
        self._check_ok(reply, 'execute ' + app)


    def read_event(self):
        """ Return the next event, blocking until one is available. Events
            queued while waiting for earlier command replies are returned
            first, in the order they arrived, without touching the network.
        """

        self._require_authenticated()
        return self.read_message(ReadState.IDLE)


    def read_message(self, state):
        """ Return the next message appropriate for the reader *state*, a
            :class:`ReadState` member. See :func:`read_event` for IDLE; a
            reader AWAITING_REPLY gets the next command reply or API
            response, and any events read along the way are queued. Framing
            errors are raised immediately and leave the connection unusable.
        """

        if not isinstance(state, ReadState):
            raise ValueError('invalid read state: ' + repr(state))

        if state is ReadState.IDLE and len(self.queue) > 0:
            return self.queue.popleft()

        if self.connection is None:
            raise StateError('session is not connected')

        while True:
            try:
                message = framing.read_frame(self.connection)
            except UnexpectedMessageError as e:
                # A rejected command reply has no body; _reply turns it into
                # a CommandError and the connection stays in step.

                if e.headers.get(fields.CONTENT_TYPE) != fields.COMMAND_REPLY:
                    logger.warning("framing error, connection is no longer usable: %s", e)
                raise
            except ProtocolError as e:
                logger.warning("framing error, connection is no longer usable: %s", e)
                raise

            if message.kind is not Kind.EVENT:
                return message

            if state is ReadState.IDLE:
                return message

            self.queue.append(message)
            logger.debug("queued event %s while awaiting reply (%d queued)", message.name, len(self.queue))


    def _check_ok(self, reply, description):

        reply_text = reply.header(fields.REPLY_TEXT)

        if reply.kind is not Kind.COMMAND_REPLY or reply_text != fields.OK:
            raise CommandError("%s: unexpected reply %r" % (description, reply_text), reply_text)


    def _command(self, command):
        """ Send a single-line *command* and require a +OK reply. """

        self._require_authenticated()
        self._send((command,))
        reply = self._reply()
        self._check_ok(reply, command)


    def _reply(self):
        """ Read the reply to the command just sent. A command/reply that
            is not a success marker is raised as a
            :class:`fsesl.errors.CommandError`; it has no body, so the
            connection remains usable.
        """

        try:
            return self.read_message(ReadState.AWAITING_REPLY)
        except UnexpectedMessageError as e:
            if e.headers.get(fields.CONTENT_TYPE) != fields.COMMAND_REPLY:
                raise

            reply_text = e.headers.get(fields.REPLY_TEXT)
            raise CommandError('command rejected: ' + repr(reply_text), reply_text) from e


    def _require_authenticated(self):

        if self.state is not SessionState.AUTHENTICATED:
            raise StateError('session is ' + self.state.value + ', not authenticated')


    def _send(self, lines, redacted=None):
        """ Write a command block: each of the *lines* terminated by CRLF,
            followed by the empty line that ends the block. *redacted*, if
            given, is logged in place of the first line.
        """

        for line in lines:
            if '\n' in line or '\r' in line:
                raise ValueError('line breaks are not allowed in a command: ' + repr(line))

        if redacted is None:
            redacted = lines[0]

        logger.debug("send: %s", redacted)

        data = ''.join(line + '\r\n' for line in lines) + '\r\n'
        self.connection.write(codec.to_bytes(data))


# end of class Session



def _join(classes):

    if isinstance(classes, str):
        return classes

    return ' '.join(classes)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
