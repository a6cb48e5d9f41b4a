"""
Terminal output: width discovery and the shared, serialized output stream
"""
import os
import sys
import logging
import threading

from .colorize import Plain, colorize
from .util import LABEL_WIDTH, pad, trim_label, coerce_str as _str

log = logging.getLogger()

# '|' + label + '|' + ' ' plus one spare column so rows never hit the margin
separator_width = 4


class TerminalSizeError(OSError):
    """terminal width can't be determined, or leaves no room for content"""


def terminal_width(override=None, environ=None, streams=None):
    """
    Current terminal column count.
    Order: override, $COLUMNS, then the first of stdout/stderr/stdin which
    is a terminal.
    :raises TerminalSizeError:
    """
    if override is not None:
        return override

    environ = os.environ if environ is None else environ
    try:
        columns = int(environ.get('COLUMNS', ''))
    except ValueError:
        pass
    else:
        if columns > 0:
            return columns

    errors = []
    for stream in streams or (sys.__stdout__, sys.__stderr__, sys.__stdin__):
        try:
            return os.get_terminal_size(stream.fileno()).columns
        except (AttributeError, ValueError, OSError) as e:
            errors.append(e)
    raise TerminalSizeError('Unable to determine terminal width: %s'
                            % (errors[-1] if errors else 'no terminal'))


def content_width(columns, label_width=LABEL_WIDTH):
    """columns left for text once the |label| prefix is accounted for"""
    width = columns - (label_width + separator_width)
    if width < 1:
        raise TerminalSizeError('Terminal too narrow: %d columns, need at '
                                'least %d' % (columns, label_width +
                                              separator_width + 1))
    return width


class Multiplexer:
    """
    Serializes rows from many followers onto one output stream.

    Every row of one line is written while holding a single lock, so rows
    from different lines never interleave. The lock is never held while
    waiting on a source.
    """

    def __init__(self, stdout=None, use_color=None, label_width=LABEL_WIDTH):
        self.stdout = stdout or sys.stdout
        if use_color is None:
            isatty = getattr(self.stdout, 'isatty', None)
            use_color = bool(isatty and isatty())
        self.use_color = use_color
        self.label_width = label_width
        self._lock = threading.Lock()

    def format_row(self, label, fragment):
        label = trim_label(label, self.label_width)
        return '|%s| %s' % (pad(label, self.label_width), _str(fragment))

    def write(self, label, color, fragments):
        """Write all fragments of one line as one contiguous block"""
        if not self.use_color:
            color = Plain
        rows = [colorize(self.format_row(label, f), color) + '\n'
                for f in fragments]
        with self._lock:
            for row in rows:
                self.stdout.write(row)
            self.stdout.flush()

    def report(self, msg, *args):
        """Emit one diagnostic line without breaking a block in progress"""
        with self._lock:
            self.stdout.flush()
            log.error(msg, *args)
