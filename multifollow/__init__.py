#!/usr/bin/env python3 -u
"""
Follow several growing log files (or stdin) and interleave them on one
colorized terminal stream.
"""
# NOTES
# http://www.termsys.demon.co.uk/vtansi.htm
# https://docs.docker.com/config/containers/logging/json-file/

__version__ = '0.1.0'
__application__ = 'py-multifollow'
