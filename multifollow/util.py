"""
Common utility methods
"""

import os
import logging
import unicodedata

log = logging.getLogger()

LABEL_WIDTH = 17
ellipsis = '...'


def expand_path(path):
    """expand environment variables and tilda in path"""
    if '$' in path:
        path = os.path.expandvars(path)
    if '~' in path:
        path = os.path.expanduser(path)
    return path


def coerce_str(data, errors='replace'):
    """coerce data to str type"""
    if not isinstance(data, str) and hasattr(data, 'decode'):
        data = data.decode('utf-8', errors)
    return data


def display_width(text):
    """terminal columns text occupies, wide east asian characters take two"""
    return sum(2 if unicodedata.east_asian_width(c) in ('W', 'F') else 1
               for c in text)


def pad(text, width):
    """left align text in width terminal columns"""
    return text + ' ' * max(0, width - display_width(text))


def partition(text, max_width):
    """
    Split text into successive slices no wider than max_width.

    Width is counted in code points, so multi-byte characters are never cut
    in half. Text which already fits (including '') comes back as a single
    slice.
    :param text: str
    :param max_width: int >= 1
    :return: list of str
    """
    if max_width < 1:
        raise ValueError('max_width must be >= 1, got %r' % (max_width,))
    if len(text) <= max_width:
        return [text]
    return [text[i:i + max_width] for i in range(0, len(text), max_width)]


def trim_label(label, max_width=LABEL_WIDTH):
    """keep the tail of label, which is usually the file name"""
    if len(label) > max_width:
        return ellipsis + label[len(label) - (max_width - len(ellipsis)):]
    return label


def build_repr(clz, *attributes):
    """generate __repr__ method for builder classes"""

    def method(self):
        init = ', '.join('%s=%r' % (a, getattr(self, a)) for a in attributes)
        return '%s(%s)' % (clz, init)

    return method


class Closable:
    def __init__(self):
        self._closed = False

    @property
    def is_closed(self):
        return self._closed

    def close(self):
        log.debug('Closing %r', self)
        self._closed = True
