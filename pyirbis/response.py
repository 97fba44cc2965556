"""A module for housing the ServerResponse class.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
ServerResponse -- Reader over the bytes of one server answer.
"""

__all__ = ['ServerResponse']

from typing import Collection, List, Optional  # pylint: disable=unused-import

from .exception import DataError, EndOfStream, irbis_error_handler

from . import codec
from . import protocol
from . import util

_CR = 0x0D
_LF = 0x0A


class ServerResponse(object):
    """Reader over the full payload returned by one exchange.

    The fixed preamble is consumed at construction time; everything after
    it is read with the cursor based functions below.

    Public Functions:
    getLine -- Read the next raw line.
    readAnsi -- Read the next line as ANSI text.
    readUtf -- Read the next line as UTF-8 text.
    readInteger -- Read the next line as an integer.
    getReturnCode -- Read (once) and return the return code.
    checkReturnCode -- Raise if the return code is a failure.
    readRemaining -- Return the unread bytes.
    readRemainingAnsiText -- Return the unread bytes as ANSI text.
    readRemainingUtfText -- Return the unread bytes as UTF-8 text.
    readRemainingAnsiLines -- Return the unread ANSI text as lines.
    readRemainingUtfLines -- Return the unread UTF-8 text as lines.
    """

    command = ''          # type: str
    client_id = 0         # type: int
    query_id = 0          # type: int
    answer_size = 0       # type: int
    server_version = ''   # type: str

    __returnCode = None   # type: Optional[int]

    def __init__(self, data):
        # type: (bytes) -> None
        """Wrap the bytes of an answer and read its preamble.

        :raises EndOfStream: If the data is too short to hold the preamble.
        """
        self.__input = bytes(data)
        self.__inpos = 0

        self.command = self.readAnsi()
        self.client_id = self.readInteger()
        self.query_id = self.readInteger()
        self.answer_size = self.readInteger()
        self.server_version = self.readAnsi()
        for _ in range(protocol.RESPONSE_RESERVED_LINES):
            self.getLine()

    @property
    def position(self):
        # type: () -> int
        """Return the current cursor offset."""
        return self.__inpos

    @property
    def eof(self):
        # type: () -> bool
        """Return True if everything has been read."""
        return not self._hasBytes()

    def _hasBytes(self, length=1):
        # type: (int) -> bool
        return self.__inpos + length <= len(self.__input)

    def getLine(self):
        # type: () -> bytes
        """Read the bytes up to the next CR (optionally followed by LF).

        At the end of the data the rest of the buffer is returned.

        :raises EndOfStream: If there is nothing left to read.
        """
        if not self._hasBytes():
            raise EndOfStream('end of stream reached (need a line)')

        data = self.__input
        start = self.__inpos
        end = data.find(b'\r', start)
        if end < 0:
            self.__inpos = len(data)
            return data[start:]

        self.__inpos = end + 1
        if self._hasBytes() and data[self.__inpos] == _LF:
            self.__inpos += 1
        return data[start:end]

    def readAnsi(self):
        # type: () -> str
        """Read the next line as ANSI text."""
        return codec.ansi_decode(self.getLine())

    def readUtf(self):
        # type: () -> str
        """Read the next line as UTF-8 text."""
        return codec.utf_decode(self.getLine())

    def readInteger(self):
        # type: () -> int
        """Read the next line as a decimal integer.

        A blank line reads as 0.

        :raises DataError: If the line is not a number.
        """
        line = self.readAnsi().strip()
        if not line:
            return 0
        try:
            return int(line)
        except ValueError:
            raise DataError('Not an integer: %r' % (line))

    @property
    def return_code(self):
        # type: () -> Optional[int]
        """Return the return code if it was read, else None."""
        return self.__returnCode

    def getReturnCode(self):
        # type: () -> int
        """Read the return code.

        The code is the first line after the preamble.  It is read only once:
        later calls return the stored value without moving the cursor.
        """
        if self.__returnCode is None:
            self.__returnCode = self.readInteger()
        return self.__returnCode

    def checkReturnCode(self, codes=None):
        # type: (Optional[Collection[int]]) -> int
        """Check the return code and raise if it reports a failure.

        :param codes: Negative codes that are acceptable for this operation.
        :returns: The return code.
        :raises DatabaseError: If the code is negative and not in codes.
        """
        code = self.getReturnCode()
        if code < 0 and (codes is None or code not in codes):
            irbis_error_handler(code)
        return code

    def readRemaining(self):
        # type: () -> bytes
        """Return every byte from the cursor to the end."""
        try:
            return self.__input[self.__inpos:]
        finally:
            self.__inpos = len(self.__input)

    def readRemainingAnsiText(self):
        # type: () -> str
        return codec.ansi_decode(self.readRemaining())

    def readRemainingUtfText(self):
        # type: () -> str
        return codec.utf_decode(self.readRemaining())

    def readRemainingAnsiLines(self):
        # type: () -> List[str]
        return util.split_lines(self.readRemainingAnsiText())

    def readRemainingUtfLines(self):
        # type: () -> List[str]
        return util.split_lines(self.readRemainingUtfText())

    def __repr__(self):
        return '<ServerResponse %s: client %d, query %d, %d bytes>' % (
            self.command, self.client_id, self.query_id, len(self.__input))
