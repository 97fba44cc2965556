"""
(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import pytest

import pyirbis
from pyirbis import protocol
from pyirbis.exception import irbis_error_handler
from pyirbis.session import SessionException


class TestIrbisException(object):
    """Test the error table and the exception mapping."""

    def test_describe_error(self):
        assert protocol.describe_error(0) == 'No error'
        assert protocol.describe_error(1000) == 'No error'
        assert protocol.describe_error(-4444) == 'Wrong password'
        assert protocol.describe_error(-3337) == 'Client is already registered'
        assert protocol.describe_error(-12345) == 'Unknown error'

    @pytest.mark.parametrize('code, cls', [
        (-140, pyirbis.DataError),
        (-600, pyirbis.DataError),
        (-300, pyirbis.OperationalError),
        (-602, pyirbis.OperationalError),
        (-6666, pyirbis.OperationalError),
        (-3337, pyirbis.IntegrityError),
        (-8888, pyirbis.InternalError),
        (-4444, pyirbis.ProgrammingError),
        (-2222, pyirbis.ProgrammingError),
        (-12345, pyirbis.DatabaseError),
    ])
    def test_error_handler(self, code, cls):
        with pytest.raises(cls) as info:
            irbis_error_handler(code)
        assert type(info.value) is cls
        assert info.value.code == code
        assert info.value.description == protocol.describe_error(code)
        assert str(code) in str(info.value)

    def test_hierarchy(self):
        assert issubclass(pyirbis.DataError, pyirbis.DatabaseError)
        assert issubclass(pyirbis.DatabaseError, pyirbis.Error)
        assert issubclass(pyirbis.InterfaceError, pyirbis.Error)
        assert issubclass(SessionException, pyirbis.OperationalError)
        assert pyirbis.Connection.DataError is pyirbis.DataError

    def test_transport_error_has_no_code(self):
        err = SessionException("connection refused")
        assert err.code is None
        assert err.description is None
