"""
Main follow engine.
"""

import abc
import asyncio
import logging
import os
import stat
import sys
from collections import namedtuple

from .records import DecodeError, decode_record
from .util import Closable, build_repr, partition
from .watch import PollWaiter

log = logging.getLogger()

# bytes back from the end of a file where following starts
seek_offset = 512
stdin_name = '/dev/stdin'
# longest line read from a pipe
pipe_limit = 2 ** 24

Record = namedtuple('Record', ['data', 'fresh', 'aligned'])


class LineSource(Closable):
    """Produces raw newline delimited records from one input"""

    name = None

    @abc.abstractmethod
    def open(self):
        pass

    @abc.abstractmethod
    async def readline(self):
        """next Record, or None once the source is exhausted"""


class FileSource(LineSource):
    """
    Follow a file by name, like `tail -F`.

    Starts seek_offset bytes before the end. Truncation restarts at the top
    of the same file, a new file under the same name (rotation) is reopened
    from the top. The first record after any of these is marked fresh.
    """

    def __init__(self, path, waiter=None, offset=seek_offset):
        super().__init__()
        self.name = path
        self.waiter = waiter or PollWaiter(path)
        self.offset = offset
        self._fh = None
        self._stat = None
        self._buffer = b''
        self._fresh = False
        self._aligned = True

    def open(self):
        """open and seek near the end, raises OSError if it can't"""
        fh = open(self.name, 'rb')
        try:
            st = os.fstat(fh.fileno())
            position = max(0, st.st_size - self.offset)
            aligned = True
            if position:
                fh.seek(position - 1)
                aligned = fh.read(1) == b'\n'
            fh.seek(position)
        except OSError:
            fh.close()
            raise
        log.debug('open(%r) at %d of %d', self.name, position, st.st_size)
        self._reset(fh, st, aligned)
        self.waiter.start()

    def _reset(self, fh, st, aligned=True):
        if self._fh is not None and self._fh is not fh:
            self._fh.close()
        self._fh = fh
        self._stat = st
        self._buffer = b''
        self._fresh = True
        self._aligned = aligned

    def _check_moved(self):
        """
        Called at end of file, returns True when reading should restart
        because the file was truncated or replaced.
        """
        try:
            st = os.stat(self.name)
        except FileNotFoundError:
            # rotated away, wait for the new file to show up
            return False
        if (st.st_ino, st.st_dev) != (self._stat.st_ino, self._stat.st_dev):
            log.info('%s has been replaced, reopening', self.name)
            try:
                fh = open(self.name, 'rb')
            except FileNotFoundError:
                # gone again before it could be opened, retry next poll
                return False
            self._reset(fh, os.fstat(fh.fileno()))
            return True
        if st.st_size < self._fh.tell():
            log.info('%s has been truncated, reading from the top',
                     self.name)
            self._fh.seek(0)
            self._reset(self._fh, st)
            return True
        return False

    async def readline(self):
        while not self.is_closed:
            chunk = self._fh.readline()
            if chunk:
                self._buffer += chunk
                if chunk.endswith(b'\n'):
                    record = Record(self._buffer[:-1], self._fresh,
                                    self._aligned)
                    self._buffer = b''
                    self._fresh = False
                    self._aligned = True
                    return record
                # partial line, the rest hasn't been written yet
                continue
            if self._check_moved():
                continue
            await self.waiter.wait()
        return None

    def close(self):
        super().close()
        self.waiter.close()
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    __repr__ = build_repr('FileSource', 'name', 'offset')


def _is_pipe(stream):
    """True for pipes, sockets and terminals, which may block on read"""
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (AttributeError, OSError, ValueError):
        return False
    return not stat.S_ISREG(mode)


class PipeSource(LineSource):
    """
    Read a pipe (stdin) from wherever it currently is, until EOF.

    Pipes are read through an asyncio stream reader so nothing blocks in a
    thread. Regular files (stdin redirected from a file) never block and
    are read directly.
    """

    def __init__(self, stream=None, name=stdin_name, loop=None):
        super().__init__()
        self.name = name
        self.stream = stream
        self._loop = loop
        self._reader = None
        self._transport = None

    def open(self):
        if self.stream is None:
            self.stream = sys.stdin.buffer
        self._loop = self._loop or asyncio.get_event_loop()

    async def _connect(self):
        self._reader = asyncio.StreamReader(limit=pipe_limit)
        protocol = asyncio.StreamReaderProtocol(self._reader)
        self._transport, _ = await self._loop.connect_read_pipe(
            lambda: protocol, self.stream)
        log.debug('connected %r to %r', self.stream, self._transport)

    async def readline(self):
        if self.is_closed:
            return None
        if self._reader is None and _is_pipe(self.stream):
            await self._connect()
        if self._reader is not None:
            chunk = await self._reader.readline()
        else:
            chunk = self.stream.readline()
        if not chunk:
            return None
        if chunk.endswith(b'\n'):
            chunk = chunk[:-1]
        return Record(chunk, False, True)

    def close(self):
        super().close()
        if self._transport is not None:
            # wakes a pending readline with EOF
            self._transport.close()
            self._transport = None

    __repr__ = build_repr('PipeSource', 'name')


def open_source(name, waiter_factory=PollWaiter, interval=None,
                offset=seek_offset):
    """LineSource for a command line source identifier, '' or '-' is stdin"""
    if not name or name == '-':
        return PipeSource()
    if interval is None:
        waiter = waiter_factory(name)
    else:
        waiter = waiter_factory(name, interval)
    return FileSource(name, waiter, offset)


def skip_always(record):
    return True


def skip_unaligned(record):
    return not record.aligned


partial_policies = dict(
    always=skip_always,
    boundary=skip_unaligned,
)


class Follower(Closable):
    """
    Follows one source and writes its decoded lines to the multiplexer.

    Failures are reported through the multiplexer and only ever end this
    follower.
    """

    def __init__(self, source, color, output, width,
                 mode='raw', partial='always'):
        super().__init__()
        self.source = source
        self.color = color
        self.output = output
        self.width = width
        self.mode = mode
        self.skip_partial = partial_policies[partial]

    @property
    def label(self):
        return self.source.name

    async def run(self):
        try:
            self.source.open()
        except OSError as e:
            self.output.report('Error reading file %s: %s', self.label, e)
            return

        try:
            while not self.is_closed:
                record = await self.source.readline()
                if record is None:
                    log.debug('end of %s', self.label)
                    break
                if record.fresh and self.skip_partial(record):
                    # seek/reopen may land mid line
                    log.debug('skip first record of %s: %r',
                              self.label, record.data)
                    continue
                self.emit(record.data)
        except Exception as e:
            self.output.report('Error following %s: %s', self.label, e)
        finally:
            self.source.close()

    def emit(self, data):
        """decode, wrap and write one record, False if it was skipped"""
        try:
            text = decode_record(data, self.mode)
        except DecodeError as e:
            self.output.report('Error parsing line: %s', e)
            return False
        self.output.write(self.label, self.color, partition(text, self.width))
        return True

    def close(self):
        super().close()
        self.source.close()

    __repr__ = build_repr('Follower', 'label', 'mode')
