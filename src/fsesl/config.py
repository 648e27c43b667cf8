""" Connection defaults for an event socket session. The defaults match a
    stock FreeSWITCH installation listening on the loopback interface; any
    of them can be overridden via environment variables:

        FSESL_HOST, FSESL_PORT, FSESL_PASSWORD, FSESL_TIMEOUT

    There is no configuration file. Explicit arguments to
    :class:`fsesl.Session` take precedence over both.
"""

import os


default_host = '127.0.0.1'
default_port = 8021
default_password = 'ClueCon'
default_timeout = 5.0


class Settings:
    """ A plain container for the parameters needed to establish and
        authenticate a connection. The *timeout* only applies to the
        initial connection attempt; reads block indefinitely.
    """

    def __init__(self, host=None, port=None, password=None, timeout=None):

        if host is None:
            host = default_host
        if port is None:
            port = default_port
        if password is None:
            password = default_password
        if timeout is None:
            timeout = default_timeout

        port = int(port)
        timeout = float(timeout)

        if port < 1 or port > 65535:
            raise ValueError('invalid port number: ' + str(port))

        if timeout <= 0:
            raise ValueError('connect timeout must be positive: ' + str(timeout))

        self.host = host
        self.port = port
        self.password = password
        self.timeout = timeout


    def __repr__(self):
        # The password is deliberately left out.
        return "config.Settings(host=%r, port=%d, timeout=%.1f)" % (self.host, self.port, self.timeout)


    @classmethod
    def from_environment(cls, environ=None, **overrides):
        """ Build a :class:`Settings` instance from the FSESL_* environment
            variables, falling back to the module defaults. Any keyword
            *overrides* that are not None win over the environment.
        """

        if environ is None:
            environ = os.environ

        values = dict()
        values['host'] = environ.get('FSESL_HOST')
        values['port'] = environ.get('FSESL_PORT')
        values['password'] = environ.get('FSESL_PASSWORD')
        values['timeout'] = environ.get('FSESL_TIMEOUT')

        for key,value in overrides.items():
            if key not in values:
                raise TypeError('unexpected setting: ' + repr(key))
            if value is not None:
                values[key] = value

        return cls(**values)


# end of class Settings


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
