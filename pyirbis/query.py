"""A module for housing the ClientQuery class.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
ClientQuery -- Builder for one request packet.
"""

__all__ = ['ClientQuery']

from typing import Any, List, Tuple  # pylint: disable=unused-import

from . import codec
from . import protocol


class ClientQuery(object):
    """Builder for one request packet sent to the server.

    The packet is kept as a list of (encoding, text) chunks and only turned
    into bytes by encode(), so each piece of text keeps track of the wire
    encoding it has to use.

    Public Functions:
    add -- Appends an integer as ANSI text.
    addAnsi -- Appends text in the ANSI code page.
    addUtf -- Appends text in UTF-8.
    newLine -- Appends a line break.
    encode -- Returns the framed packet bytes.
    """

    def __init__(self, connection, command):
        # type: (Any, str) -> None
        """Start a packet for the given command.

        :param connection: Anything with workstation, client_id, query_id,
                           password and username attributes.
        :param command: Command code, e.g. 'O'.
        """
        self.__command = command
        self.__chunks = []  # type: List[Tuple[str, str]]

        self.addAnsi(command).newLine()
        self.addAnsi(connection.workstation).newLine()
        self.addAnsi(command).newLine()
        self.add(connection.client_id).newLine()
        self.add(connection.query_id).newLine()
        self.addAnsi(connection.password).newLine()
        self.addAnsi(connection.username).newLine()
        for _ in range(protocol.REQUEST_RESERVED_LINES):
            self.newLine()

    @property
    def command(self):
        # type: () -> str
        """Return the command code of this packet."""
        return self.__command

    @property
    def chunks(self):
        # type: () -> List[Tuple[str, str]]
        """Return a copy of the (encoding, text) chunks added so far."""
        return list(self.__chunks)

    def add(self, value):
        # type: (int) -> ClientQuery
        """Append an integer value to the packet.

        :type value: int
        """
        return self.addAnsi(str(int(value)))

    def addAnsi(self, value):
        # type: (str) -> ClientQuery
        """Append text encoded with the ANSI code page.

        :type value: str
        """
        self.__chunks.append((codec.ANSI, value))
        return self

    def addUtf(self, value):
        # type: (str) -> ClientQuery
        """Append text encoded as UTF-8.

        :type value: str
        """
        self.__chunks.append((codec.UTF, value))
        return self

    def newLine(self):
        # type: () -> ClientQuery
        """Append a line break."""
        return self.addAnsi('\n')

    def body(self):
        # type: () -> bytes
        """Return the packet body without the length prefix."""
        return b''.join(codec.encode(text, encoding)
                        for encoding, text in self.__chunks)

    def encode(self):
        # type: () -> bytes
        """Return the full packet: body length, a newline, then the body."""
        data = self.body()
        return str(len(data)).encode('ascii') + b'\n' + data

    def __repr__(self):
        return '<ClientQuery %s: %d chunks>' % (self.__command,
                                                len(self.__chunks))
