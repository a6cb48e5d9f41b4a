import os
import sys
from setuptools import setup

try:
    src_dir = os.path.realpath(os.path.join(__file__, '..'))
    sys.path.append(src_dir)
    import multifollow

    version = multifollow.__version__
    description = multifollow.__doc__.strip()
except ImportError:
    multifollow = None
    version = '0.0.0'
    description = 'Follow several growing log files (or stdin) and ' \
                  'interleave them on one colorized terminal stream.'

test_requires = [
    'pytest >= 3.9',
]

setup(
    name='py-multifollow',
    description=description,
    version=version,
    license='GPL 3.0',
    platforms='any',
    python_requires='>=3.7',
    packages=[
        'multifollow',
    ],
    entry_points={
        'console_scripts': [
            'py-multifollow = multifollow.main:run',
        ]
    },
    install_requires=[
        'watchdog >= 2.0',
    ],
    extras_require={
        'test': test_requires
    },
    setup_requires=[],
)
