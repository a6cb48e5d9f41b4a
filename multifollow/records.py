"""
Record decoding, raw bytes in and display text out
"""
import json
from collections import namedtuple

from .util import coerce_str as _str

LogRecord = namedtuple('LogRecord', ['log', 'stream', 'time'])


class DecodeError(ValueError):
    """record could not be turned into display text"""


def parse_log_record(raw):
    """
    Parse one docker json-file log line, example -
    {"log":"hello\\n","stream":"stdout","time":"2019-01-01T00:00:00Z"}
    Only 'log' is required, 'stream' and 'time' default to ''.
    """
    try:
        obj = json.loads(_str(raw))
    except ValueError as e:
        raise DecodeError('JSON Parse Error: %s' % e) from e
    if not isinstance(obj, dict):
        raise DecodeError('JSON Parse Error: expected object, got %s'
                          % type(obj).__name__)
    if 'log' not in obj:
        raise DecodeError('JSON Parse Error: missing field "log"')

    fields = {}
    for name in LogRecord._fields:
        value = obj.get(name, '')
        if not isinstance(value, str):
            raise DecodeError('JSON Parse Error: field "%s" must be a string, '
                              'got %s' % (name, type(value).__name__))
        fields[name] = value
    return LogRecord(**fields)


def decode_raw(raw):
    return _str(raw)


def decode_json(raw):
    return parse_log_record(raw).log.rstrip('\n')


decoders = dict(
    raw=decode_raw,
    json=decode_json,
    docker=decode_json,
)


def decode_record(raw, mode='raw'):
    """
    Turn raw record bytes into display text for mode.
    :raises DecodeError: record is malformed for mode
    :raises ValueError: unknown mode
    """
    try:
        decoder = decoders[mode]
    except KeyError:
        raise ValueError('Unknown decode mode %r' % (mode,)) from None
    return decoder(raw)
