"""Classes containing the exceptions for reporting errors.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

from typing import Optional  # pylint: disable=unused-import

from . import protocol

__all__ = ['Warning', 'Error', 'InterfaceError', 'DatabaseError',
           'DataError', 'OperationalError', 'IntegrityError', 'InternalError',
           'ProgrammingError', 'NotSupportedError', 'EndOfStream',
           'irbis_error_handler']


class Warning(Exception):  # pylint: disable=redefined-builtin
    def __init__(self, value):
        self.__value = value

    def __str__(self):
        return repr(self.__value)


class Error(Exception):
    def __init__(self, value):
        self.__value = value

    def __str__(self):
        return repr(self.__value)


class InterfaceError(Error):
    def __init__(self, value):
        Error.__init__(self, value)


class DatabaseError(Error):
    """An error reported by (or on the way to) the server.

    When the error came from a server return code, ``code`` holds the
    negative code and ``description`` its text from the error table.
    Transport failures have a ``code`` of None.
    """

    code = None         # type: Optional[int]
    description = None  # type: Optional[str]

    def __init__(self, value, code=None):
        # type: (str, Optional[int]) -> None
        Error.__init__(self, value)
        if code is not None:
            self.code = code
            self.description = protocol.describe_error(code)


class DataError(DatabaseError):
    def __init__(self, value, code=None):
        DatabaseError.__init__(self, value, code)


class OperationalError(DatabaseError):
    def __init__(self, value, code=None):
        DatabaseError.__init__(self, value, code)


class IntegrityError(DatabaseError):
    def __init__(self, value, code=None):
        DatabaseError.__init__(self, value, code)


class InternalError(DatabaseError):
    def __init__(self, value, code=None):
        DatabaseError.__init__(self, value, code)


class ProgrammingError(DatabaseError):
    def __init__(self, value, code=None):
        DatabaseError.__init__(self, value, code)


class NotSupportedError(DatabaseError):
    def __init__(self, value, code=None):
        DatabaseError.__init__(self, value, code)


class EndOfStream(Exception):
    def __init__(self, value):
        self.__value = value

    def __str__(self):
        return repr(self.__value)


def irbis_error_handler(error_code):
    """
    :type error_code int
    """
    msg = '%d: %s' % (error_code, protocol.describe_error(error_code))
    if error_code in protocol.DATA_ERRORS:
        raise DataError(msg, error_code)
    elif error_code in protocol.OPERATIONAL_ERRORS:
        raise OperationalError(msg, error_code)
    elif error_code in protocol.INTEGRITY_ERRORS:
        raise IntegrityError(msg, error_code)
    elif error_code in protocol.INTERNAL_ERRORS:
        raise InternalError(msg, error_code)
    elif error_code in protocol.PROGRAMMING_ERRORS:
        raise ProgrammingError(msg, error_code)
    else:
        raise DatabaseError(msg, error_code)
