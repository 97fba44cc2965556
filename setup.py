#!/usr/bin/env python

"""Set up the IRBIS64 Python Driver package.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

This package can be installed using pip as follows:

    pip install pyirbis

To install with the test tools:

    pip install 'pyirbis[test]'

The driver itself needs nothing beyond the standard library.
"""

import os
import re

from setuptools import setup

with open(os.path.join(os.path.dirname(__file__), 'pyirbis', '__init__.py')) as v:
    m = re.search(r"^ *__version__ *= *'(.*?)'", v.read(), re.M)
    if m is None:
        raise RuntimeError("Cannot detect version in pyirbis/__init__.py")
    VERSION = m.group(1)

readme = os.path.join(os.path.dirname(__file__), 'README.rst')

setup(
    name='pyirbis',
    version=VERSION,
    author='The pyirbis Authors',
    description='asyncio client for the IRBIS64 library automation server',
    keywords='irbis irbis64 library catalog marc',
    packages=['pyirbis'],
    license='BSD License',
    long_description=open(readme).read(),
    python_requires='>=3.7',
    install_requires=[],
    extras_require=dict(test=['pytest', 'pytest-asyncio']),
    classifiers=[
        'Development Status :: 4 - Beta',
        'Framework :: AsyncIO',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Database :: Front-Ends',
    ],
)
