"""
Waiting for a followed file to grow.

PollWaiter simply sleeps, which works on every filesystem. NotifyWaiter
wakes up on watchdog events for the file (inotify, kqueue, ...) and falls
back to the poll interval when no event arrives, so missed events on
network filesystems only cost latency.
"""
import abc
import asyncio
import logging
import os

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .util import Closable, build_repr

log = logging.getLogger()

default_interval = 0.25


class Waiter(Closable):
    def __init__(self, path, interval=default_interval):
        super().__init__()
        if interval <= 0:
            raise ValueError('interval must be > 0, got %r' % (interval,))
        self.path = path
        self.interval = interval

    def start(self):
        pass

    @abc.abstractmethod
    async def wait(self):
        """suspend until the file may have changed"""


class PollWaiter(Waiter):
    """sleep for a fixed interval"""

    async def wait(self):
        await asyncio.sleep(self.interval)

    __repr__ = build_repr('PollWaiter', 'path', 'interval')


class _PathHandler(FileSystemEventHandler):
    def __init__(self, path, callback):
        super().__init__()
        self.path = path
        self.callback = callback

    def on_any_event(self, event):
        paths = [event.src_path, getattr(event, 'dest_path', '')]
        if any(p and os.path.abspath(os.fsdecode(p)) == self.path
               for p in paths):
            self.callback()


class NotifyWaiter(Waiter):
    """wake on filesystem events for path, at most interval apart"""

    def __init__(self, path, interval=default_interval, loop=None):
        super().__init__(os.path.abspath(path), interval)
        self._loop = loop
        self._event = None
        self._observer = None

    def start(self):
        self._loop = self._loop or asyncio.get_event_loop()
        self._event = asyncio.Event()
        handler = _PathHandler(self.path, self._notify)
        self._observer = Observer()
        # watch the directory so re-created files are seen too
        self._observer.schedule(handler, os.path.dirname(self.path),
                                recursive=False)
        self._observer.daemon = True
        self._observer.start()
        log.debug('watching %s', self.path)

    def _notify(self):
        # called from the observer thread
        if not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._event.set)

    async def wait(self):
        if self._event is None:
            self.start()
        try:
            await asyncio.wait_for(self._event.wait(), self.interval)
        except asyncio.TimeoutError:
            pass
        self._event.clear()

    def close(self):
        super().close()
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    __repr__ = build_repr('NotifyWaiter', 'path', 'interval')


waiters = dict(
    poll=PollWaiter,
    notify=NotifyWaiter,
)
