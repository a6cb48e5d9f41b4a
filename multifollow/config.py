"""
sys.argv processing and runtime configuration
"""

import argparse
import logging

from .engine import partial_policies
from .util import expand_path
from .watch import default_interval, waiters

log = logging.getLogger()


def positive_float(value):
    result = float(value)
    if result <= 0:
        raise argparse.ArgumentTypeError('must be > 0, got %s' % value)
    return result


def positive_int(value):
    result = int(value)
    if result <= 0:
        raise argparse.ArgumentTypeError('must be > 0, got %s' % value)
    return result


class PathAction(argparse.Action):
    """Expand file paths, '-' stays stdin"""

    def __call__(self, p, namespace, values, option_string=None):
        setattr(namespace, self.dest,
                [v if v == '-' else expand_path(v) for v in values])


def build_parser():
    # import the parent package high level description and version
    from . import __doc__ as desc
    from . import __version__ as version

    parser = argparse.ArgumentParser(description=desc)
    parser.add_argument(
        '--version', action='version', version='%(prog)s ' + version
    )
    parser.add_argument(
        '--debug', default=False, dest='debug', action='store_true',
        help='enable debug',
    )
    parser.add_argument(
        '-d', '--docker', '--json', default='raw', dest='mode',
        action='store_const', const='json',
        help='parse records as docker JSON log lines',
    )
    parser.add_argument(
        '--watch', default='poll', choices=sorted(waiters),
        help='how to wait for files to grow, default %(default)s',
    )
    parser.add_argument(
        '--interval', metavar='SECONDS', default=default_interval,
        type=positive_float,
        help='poll interval, default %(default)s',
    )
    parser.add_argument(
        '--partial', default='always', choices=sorted(partial_policies),
        help='drop the first record after seeking or reopening a file '
             'always, or only when it does not start on a line boundary, '
             'default %(default)s',
    )
    parser.add_argument(
        '--width', metavar='COLUMNS', default=None, type=positive_int,
        help='terminal width, default is the current terminal',
    )
    parser.add_argument(
        '--color', default='auto', choices=['auto', 'always', 'never'],
        help='colorize output, default %(default)s',
    )
    parser.add_argument(
        'files', metavar='FILE', nargs='*', default=[], action=PathAction,
        help='files to follow, stdin when none are given',
    )
    return parser


def argv_parse(argv=None):
    """parse argv (default sys.argv), exits on invalid options"""
    options = build_parser().parse_args(argv)
    if not options.files:
        options.files = ['']
    log.debug('final options %r', options)
    return options


def use_color(options):
    """True/False to force colors, None to decide from the output stream"""
    return {'always': True, 'never': False}.get(options.color)
