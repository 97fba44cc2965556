"""Carry requests to an IRBIS64 server and bring back the answers.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ["SessionException", "Session"]

# This module abstracts the network transport used by a connection.  The
# server handles exactly one request per TCP connection: the client opens a
# socket, writes the whole packet, and the server writes its answer and
# closes.  So there is no length header to honour on the way back; the end
# of the stream is the end of the answer.

import asyncio
import logging
import socket
from ipaddress import ip_address
from urllib.parse import urlparse

from typing import Optional, Tuple  # pylint: disable=unused-import

from .exception import OperationalError, InterfaceError
from .protocol import IRBIS_PORT

_log = logging.getLogger("pyirbis.session")

# Seconds to wait for the connect and for the answer unless told otherwise.
DEFAULT_TIMEOUT = 30.0


class SessionException(OperationalError):  # pylint: disable=too-many-ancestors
    """Raised for problems encountered with the network session.

    Refused or reset connections, timeouts, aborted exchanges and answers
    too short to be understood all end up here.  It has no server code.
    """

    pass


class Session(object):
    """The transport to one IRBIS64 server.

    A Session holds only the address and the timeouts; every call to
    exchange() opens and closes its own socket.
    """

    __port = IRBIS_PORT  # type: int
    __family = socket.AF_INET

    __writer = None      # type: Optional[asyncio.StreamWriter]
    __busy = False
    __aborted = False

    def __init__(self, host,              # type: str
                 port=None,               # type: Optional[int]
                 timeout=DEFAULT_TIMEOUT,  # type: Optional[float]
                 connect_timeout=None,    # type: Optional[float]
                 read_timeout=None,       # type: Optional[float]
                 ip_version=None          # type: Optional[str]
                 ):
        # type: (...) -> None
        self.__address, _port, ver = self._parse_addr(host, ip_version)
        if port is not None:
            self.__port = port
        elif _port is not None:
            self.__port = _port

        if ver == 6:
            self.__family = socket.AF_INET6

        # set connect and read timeout to `timeout` if either is not specified
        if connect_timeout is None:
            connect_timeout = timeout
        if read_timeout is None:
            read_timeout = timeout

        self.__connect_timeout = connect_timeout
        self.__read_timeout = read_timeout

    @staticmethod
    def _to_ipaddr(addr):
        # type: (str) -> Tuple[str, int]
        ipaddr = ip_address(addr)
        return (str(ipaddr), ipaddr.version)

    def _parse_addr(self, addr, ipver):
        # type: (str, Optional[str]) -> Tuple[str, Optional[int], int]
        port = None
        try:
            # v4/v6 addr w/o port e.g. 192.168.1.1, 2001:3200:3200::10
            ip, ver = self._to_ipaddr(addr)
        except ValueError:
            # v4/v6 addr w/port e.g. 192.168.1.1:6666, [2001::10]:6666
            parsed = urlparse('//{}'.format(addr))
            if parsed.hostname is None:
                raise InterfaceError("Invalid Host/IP Address format: %s" % (addr))
            try:
                ip, ver = self._to_ipaddr(parsed.hostname)
                port = parsed.port
            except ValueError:
                parts = addr.split(":")
                if len(parts) == 1:
                    # hostname w/o port e.g. irbis
                    ip = addr
                elif len(parts) == 2:
                    # hostname with port e.g. irbis:6666
                    ip = parts[0]
                    try:
                        port = int(parts[1])
                    except ValueError:
                        raise InterfaceError("Invalid Host/IP Address Format %s" % addr)
                else:
                    # failed
                    raise InterfaceError("Invalid Host/IP Address Format %s" % addr)

                # select v6/v4 for hostname based on user option
                ver = 4
                if ipver == 'v6':
                    ver = 6

        return ip, port, ver

    @property
    def address(self):
        # type: () -> str
        """Return the address of the server."""
        return self.__address

    @property
    def port(self):
        # type: () -> int
        """Return the port of the server."""
        return self.__port

    @property
    def connect_timeout(self):
        # type: () -> Optional[float]
        return self.__connect_timeout

    @property
    def read_timeout(self):
        # type: () -> Optional[float]
        return self.__read_timeout

    @property
    def busy(self):
        # type: () -> bool
        """Return True while an exchange is in flight."""
        return self.__busy

    async def exchange(self, message):
        # type: (bytes) -> bytes
        """Send one packet and return everything the server sent back.

        Opens a new connection, writes the packet, half-closes the write
        side and reads until the server closes.  The socket is always closed
        before returning.

        :raises InterfaceError: If another exchange is already in flight.
        :raises SessionException: On network failure, timeout or close().
        """
        if self.__busy:
            raise InterfaceError("Another exchange is in progress on this session")
        self.__busy = True
        self.__aborted = False
        try:
            return await self.__exchange(bytes(message))
        finally:
            self.__busy = False
            self.__writer = None

    async def __exchange(self, message):
        # type: (bytes) -> bytes
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(self.__address, self.__port,
                                        family=self.__family),
                self.__connect_timeout)
        except asyncio.TimeoutError:
            raise SessionException("Timed out connecting to %s:%d"
                                   % (self.__address, self.__port))
        except OSError as e:
            raise SessionException("Failed to connect to %s:%d: %s"
                                   % (self.__address, self.__port, str(e)))

        self.__writer = writer
        try:
            if self.__aborted:
                raise SessionException("Session closed while connecting")

            _log.debug("sending %d bytes to %s:%d",
                       len(message), self.__address, self.__port)
            try:
                writer.write(message)
                await writer.drain()
                if writer.can_write_eof():
                    writer.write_eof()
                data = await asyncio.wait_for(reader.read(), self.__read_timeout)
            except asyncio.TimeoutError:
                raise SessionException("Timed out waiting for an answer from %s:%d"
                                       % (self.__address, self.__port))
            except OSError as e:
                if self.__aborted:
                    raise SessionException("Session closed during exchange")
                raise SessionException(
                    "Session closed while receiving: network error %s: %s" %
                    (str(e.errno), e.strerror if e.strerror else str(e.args)))

            # An aborted transport reports a plain EOF to the reader.
            if self.__aborted:
                raise SessionException("Session closed during exchange")

            _log.debug("received %d bytes from %s:%d",
                       len(data), self.__address, self.__port)
            return data
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                # The peer may already have reset the connection
                pass

    def close(self):
        # type: () -> None
        """Abort the exchange in flight, if any.

        The aborted exchange raises SessionException.  Closing an idle
        session does nothing; it may still be used afterwards.
        """
        if not self.__busy:
            return
        self.__aborted = True
        writer = self.__writer
        if writer is not None:
            writer.transport.abort()
