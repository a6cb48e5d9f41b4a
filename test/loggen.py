#!/usr/bin/env python3
"""
Generates a pseudo log for testing, plain or docker json-file format
"""

import json
import time
import random
import logging
import argparse

from datetime import datetime, timezone

log = logging.getLogger()

fallback_words = [
    'alpha', 'bravo', 'charlie', 'delta', 'echo', 'foxtrot', 'golf',
    'hotel', 'india', 'juliett', 'kilo', 'lima', 'mike', 'november',
]


def get_words(words_dict_fn='/usr/share/dict/words'):
    try:
        with open(words_dict_fn) as fh:
            return fh.read().splitlines() or fallback_words
    except IOError:
        return fallback_words


def docker_record(line, stream='stdout', now=None):
    """one docker json-file log line, without the trailing newline"""
    now = now or datetime.now(timezone.utc)
    return json.dumps({
        'log': line + '\n',
        'stream': stream,
        'time': now.isoformat(),
    })


def make_line(dictionary, use_dt=False, words=5):
    line = ' '.join(random.choice(dictionary) for _ in range(words))
    if use_dt:
        line = datetime.now().strftime('%b %d %H:%M:%S') + ' ' + line
    return line


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument(
        '-d', '--dt', '--datetime', default=False, action='store_true'
    )
    parser.add_argument(
        '--docker', default=False, action='store_true',
    )
    parser.add_argument(
        '-s', '--sleep', default=.3, type=float,
    )
    parser.add_argument(
        '--words-file', default='/usr/share/dict/words', type=str,
    )
    parser.add_argument(
        '--output-file', default=None, type=str,
    )
    options = parser.parse_args()

    dictionary = get_words(options.words_file)
    fh = None
    try:
        if options.output_file:
            fh = open(options.output_file, 'a')
        while True:
            time.sleep(options.sleep)
            line = make_line(dictionary, options.dt)
            if options.docker:
                line = docker_record(line)
            if fh:
                fh.write(line)
                fh.write('\n')
                fh.flush()
            else:
                print(line, flush=True)
    except IOError:
        pass
    finally:
        if fh:
            try:
                fh.close()
            except IOError:
                pass  # ignore close errors


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        pass
