"""
(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import pytest

from typing import Iterator, List  # pylint: disable=unused-import

import pyirbis
import pyirbis.connection

from . import FakeSession, answer

CLIENT_IDS = [123456, 234567, 345678, 456789, 567890]

USER = 'librarian'
PASSWORD = 'secret'


@pytest.fixture
def client_ids(monkeypatch):
    # type: (pytest.MonkeyPatch) -> List[int]
    """Make new_client_id() hand out CLIENT_IDS in order.

    Returns the list of ids handed out so far.
    """
    handed = []  # type: List[int]
    ids = iter(CLIENT_IDS)

    def fake():
        # type: () -> int
        handed.append(next(ids))
        return handed[-1]

    monkeypatch.setattr(pyirbis.connection, 'new_client_id', fake)
    return handed


@pytest.fixture
def session(client_ids):
    # type: (List[int]) -> FakeSession
    """A FakeSession primed with a successful registration."""
    return FakeSession(answer('A', '0', '2'))


@pytest.fixture
def conn(session):
    # type: (FakeSession) -> pyirbis.Connection
    """A Connection over the fake session; not yet connected."""
    return pyirbis.Connection(user=USER, password=PASSWORD, session=session)
