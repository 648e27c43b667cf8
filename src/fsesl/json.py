''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads` and :func:`json.dumps`. Both
    backends return bytes from :func:`dumps`.
'''

# msgspec is preferred when present; orjson is the declared dependency and
# is always available as the fallback.

msgspec = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    JSONDecodeError = msgspec.DecodeError
else:
    import orjson
    dumps = orjson.dumps
    loads = orjson.loads
    JSONDecodeError = orjson.JSONDecodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
