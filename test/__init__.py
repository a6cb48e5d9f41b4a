"""
multifollow test module run by pytest or by python -m test
"""

import sys
from os.path import abspath, join

try:
    import multifollow
except ImportError:
    src_dir = abspath(join(__file__, '..', '..'))
    sys.path.append(src_dir)
    import multifollow

from multifollow.main import setup_logging

setup_logging('--debug' in sys.argv)
