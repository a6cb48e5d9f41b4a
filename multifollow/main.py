import asyncio
import logging
import sys

log = logging.getLogger()


def setup_logging(is_debug):
    """
    Configure logging based on --debug in sys.argv
    :param is_debug:
    """
    root = logging.getLogger()
    [root.removeHandler(h) for h in root.handlers[:]]
    [root.removeFilter(f) for f in root.filters[:]]
    logging.basicConfig(
        format='[%(threadName)s][%(levelname)s] %(module)s:%(funcName)s:%('
               'lineno)s %(message)s',
        level=logging.DEBUG if is_debug else logging.INFO,
        stream=sys.stderr,
    )


def exception_handler(loop, ctx):
    """
    context is a dict object containing the following keys (new keys may be
            introduced in future Python versions):
    'message': Error message;
    'exception' (optional): Exception object;
    'future'    (optional): asyncio.Future instance;
    'task'      (optional): asyncio.Task instance;
    """
    log.error('Unhandled exception: ' + ctx['message'])


def new_event_loop():
    loop = asyncio.new_event_loop()
    loop.set_exception_handler(exception_handler)
    return loop


def build_followers(options, output, width):
    """one Follower per configured source, colored by position"""
    from .colorize import pick_color
    from .engine import Follower, open_source
    from .watch import waiters

    waiter_factory = waiters[options.watch]
    followers = []
    for idx, name in enumerate(options.files):
        source = open_source(name, waiter_factory, options.interval)
        followers.append(Follower(
            source=source,
            color=pick_color(idx),
            output=output,
            width=width,
            mode=options.mode,
            partial=options.partial,
        ))
    return followers


async def async_main(options, output, width):
    """
    Run every follower until all of them finish.
    Follower failures are reported by the followers and never stop the
    others.
    """
    followers = build_followers(options, output, width)
    tasks = [asyncio.ensure_future(f.run()) for f in followers]
    finished = 0

    def done(_):
        nonlocal finished
        finished += 1
        log.debug('%d of %d followers finished', finished, len(tasks))

    for task in tasks:
        task.add_done_callback(done)

    try:
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for follower, result in zip(followers, results):
            if isinstance(result, Exception):
                log.error('%r failed: %s', follower, result)
    finally:
        for follower in followers:
            follower.close()
        log.debug('close async loop')
    return finished


def main(argv=None):
    setup_logging('--debug' in (sys.argv if argv is None else argv))

    from .config import argv_parse, use_color
    from .terminal import (
        Multiplexer, TerminalSizeError, content_width, terminal_width,
    )
    options = argv_parse(argv)
    setup_logging(options.debug)

    try:
        width = content_width(terminal_width(options.width))
    except TerminalSizeError as e:
        log.critical('%s', e)
        return 1

    output = Multiplexer(use_color=use_color(options))
    loop = new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        loop.run_until_complete(async_main(options, output, width))
    except KeyboardInterrupt:
        pass
    finally:
        asyncio.set_event_loop(None)
        loop.close()
    return 0


def run():
    sys.exit(main())
