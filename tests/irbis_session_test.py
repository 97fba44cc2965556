"""
(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import asyncio
import socket

import pytest

import pyirbis
from pyirbis.session import DEFAULT_TIMEOUT, Session, SessionException

from . import answer, split_packet


class Server(object):
    """A local server that reads one request per connection and replies.

    The reply is produced by HANDLER, given the request bytes.  A handler
    returning None keeps the connection open until release() is called.
    """

    def __init__(self, handler):
        self.handler = handler
        self.requests = []
        self.received = asyncio.Event()
        self.released = asyncio.Event()
        self.server = None
        self.port = 0

    async def start(self):
        self.server = await asyncio.start_server(self._serve, '127.0.0.1', 0)
        self.port = self.server.sockets[0].getsockname()[1]
        return self

    async def _serve(self, reader, writer):
        try:
            data = await reader.read()
            self.requests.append(data)
            self.received.set()
            reply = self.handler(data)
            if reply is None:
                await self.released.wait()
                return
            # split the reply to make the client reassemble it
            half = len(reply) // 2
            writer.write(reply[:half])
            await writer.drain()
            writer.write(reply[half:])
            await writer.drain()
        finally:
            writer.close()

    def release(self):
        self.released.set()

    async def stop(self):
        self.release()
        self.server.close()
        await self.server.wait_closed()


def free_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind(('127.0.0.1', 0))
        return sock.getsockname()[1]
    finally:
        sock.close()


class StubReader(object):

    def __init__(self, data):
        self.data = data

    async def read(self):
        return self.data


class StubWriter(object):
    """A stream writer that records what happened to it."""

    def __init__(self, close_error=None):
        self.close_error = close_error
        self.written = b''
        self.eof = False
        self.closed = False
        self.waited = False

    def write(self, data):
        self.written += data

    async def drain(self):
        pass

    def can_write_eof(self):
        return True

    def write_eof(self):
        self.eof = True

    def close(self):
        self.closed = True

    async def wait_closed(self):
        assert self.closed
        self.waited = True
        if self.close_error is not None:
            raise self.close_error


class TestIrbisSession(object):
    """Test the network transport against a local server."""

    def test_parse_addr(self):
        session = Session('192.168.1.1')
        assert (session.address, session.port) == ('192.168.1.1', 6666)
        session = Session('192.168.1.1:7000')
        assert (session.address, session.port) == ('192.168.1.1', 7000)
        session = Session('[2001:db8::10]:7000')
        assert (session.address, session.port) == ('2001:db8::10', 7000)
        session = Session('2001:db8::10')
        assert (session.address, session.port) == ('2001:db8::10', 6666)
        session = Session('irbis.example.org:7000', port=7001)
        assert (session.address, session.port) == ('irbis.example.org', 7001)

    def test_parse_addr_bad(self):
        with pytest.raises(pyirbis.InterfaceError):
            Session('irbis:port')
        with pytest.raises(pyirbis.InterfaceError):
            Session('a:b:c')

    def test_timeouts(self):
        session = Session('localhost', timeout=5)
        assert session.connect_timeout == 5
        assert session.read_timeout == 5
        session = Session('localhost', timeout=5, read_timeout=1)
        assert session.connect_timeout == 5
        assert session.read_timeout == 1
        session = Session('localhost')
        assert session.connect_timeout == DEFAULT_TIMEOUT == 30.0
        assert session.read_timeout == DEFAULT_TIMEOUT
        session = Session('localhost', timeout=None)
        assert session.connect_timeout is None
        assert session.read_timeout is None

    @pytest.mark.asyncio
    async def test_exchange(self):
        server = await Server(lambda data: b'reply:' + data).start()
        try:
            session = Session('127.0.0.1', port=server.port, timeout=5)
            assert await session.exchange(b'hello') == b'reply:hello'
            assert await session.exchange(b'again') == b'reply:again'
            assert server.requests == [b'hello', b'again']
            assert not session.busy
        finally:
            await server.stop()

    @pytest.mark.asyncio
    async def test_refused(self):
        session = Session('127.0.0.1', port=free_port(), timeout=5)
        with pytest.raises(SessionException) as info:
            await session.exchange(b'hello')
        assert info.value.code is None
        assert not session.busy

    @pytest.mark.asyncio
    async def test_read_timeout(self):
        server = await Server(lambda data: None).start()
        try:
            session = Session('127.0.0.1', port=server.port, read_timeout=0.2)
            with pytest.raises(SessionException):
                await session.exchange(b'hello')
            assert not session.busy
        finally:
            await server.stop()

    @pytest.mark.asyncio
    async def test_busy_and_close(self):
        server = await Server(lambda data: None).start()
        try:
            session = Session('127.0.0.1', port=server.port, timeout=5)
            task = asyncio.ensure_future(session.exchange(b'hello'))
            await asyncio.wait_for(server.received.wait(), 5)
            assert session.busy

            with pytest.raises(pyirbis.InterfaceError):
                await session.exchange(b'other')

            session.close()
            with pytest.raises(SessionException):
                await asyncio.wait_for(task, 5)
            assert not session.busy
        finally:
            await server.stop()

    @pytest.mark.asyncio
    @pytest.mark.parametrize('error', [None, ConnectionResetError(104, 'reset')])
    async def test_exchange_waits_for_close(self, monkeypatch, error):
        writer = StubWriter(error)

        async def open_connection(host, port, family=None):
            return StubReader(b'answer'), writer

        monkeypatch.setattr(asyncio, 'open_connection', open_connection)
        session = Session('127.0.0.1', port=7000)
        assert await session.exchange(b'hello') == b'answer'
        assert writer.written == b'hello'
        assert writer.eof
        assert writer.closed
        assert writer.waited
        assert not session.busy

    def test_close_idle(self):
        session = Session('127.0.0.1')
        session.close()
        assert not session.busy

    @pytest.mark.asyncio
    async def test_connection_over_network(self, client_ids):
        def handler(data):
            header, params = split_packet(data)
            if header[0] == 'A':
                return answer('A', '0', '5', client_id=int(header[3]))
            if header[0] == 'O':
                assert params == [b'IBIS']
                return answer('O', '321', query_id=int(header[4]))
            return answer(header[0])

        server = await Server(handler).start()
        try:
            async with pyirbis.Connection('127.0.0.1:%d' % (server.port),
                                          user='librarian', password='secret',
                                          timeout=5) as conn:
                assert conn.interval == 5
                assert await conn.get_max_mfn() == 321
                assert conn.query_id == 2
            assert not conn.connected
            assert [split_packet(r)[0][0] for r in server.requests] == ['A', 'O', 'B']
        finally:
            await server.stop()
