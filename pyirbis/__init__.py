"""An asyncio client for the IRBIS64 library automation server.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__version__ = '1.0.0'

from .connection import *  # pylint: disable=wildcard-import
from .exception import *   # pylint: disable=wildcard-import, redefined-builtin
from .record import *      # pylint: disable=wildcard-import
from .search import *      # pylint: disable=wildcard-import
from .session import SessionException

from . import codec     # noqa: F401
from . import protocol  # noqa: F401
from . import util      # noqa: F401
