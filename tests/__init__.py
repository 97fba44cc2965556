"""
(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import logging

from typing import Callable, List, Tuple, Union  # pylint: disable=unused-import

from pyirbis import codec
from pyirbis.session import SessionException

_log = logging.getLogger("pyirbistest")

SERVER_VERSION = '64.2008.1'

Answer = Union[bytes, Exception, Callable[[bytes], bytes]]


def answer(command, *lines, client_id=123456, query_id=1, answer_size=0,
           server_version=SERVER_VERSION, encoding=codec.UTF):
    """Build the bytes of a server answer.

    The preamble is followed by each of LINES terminated by CR LF.  A str
    line is encoded with ENCODING, a bytes line is used as is.
    """
    head = [command, str(client_id), str(query_id), str(answer_size),
            server_version] + [''] * 5
    data = b''.join(codec.ansi_encode(line) + b'\r\n' for line in head)
    for line in lines:
        if not isinstance(line, bytes):
            line = codec.encode(line, encoding)
        data += line + b'\r\n'
    return data


def split_packet(packet):
    # type: (bytes) -> Tuple[List[str], List[bytes]]
    """Split a request packet into its ten header lines and its parameters.

    Checks the length prefix on the way.
    """
    length, _, body = packet.partition(b'\n')
    assert int(length) == len(body), "bad length prefix in %r" % (packet)
    lines = body.split(b'\n')
    header = [codec.ansi_decode(line) for line in lines[:10]]
    return header, lines[10:]


class FakeSession(object):
    """A transport that records packets and plays back canned answers.

    Each answer is either the bytes to return, an exception to raise, or a
    callable that gets the packet and returns the bytes.
    """

    address = '127.0.0.1'
    port = 6666

    def __init__(self, *answers):
        # type: (Answer) -> None
        self.answers = list(answers)  # type: List[Answer]
        self.packets = []  # type: List[bytes]

    def push(self, *answers):
        # type: (Answer) -> None
        self.answers.extend(answers)

    async def exchange(self, message):
        # type: (bytes) -> bytes
        self.packets.append(bytes(message))
        if not self.answers:
            raise SessionException("FakeSession has no answer left")
        reply = self.answers.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(message)
        return reply

    def close(self):
        # type: () -> None
        pass

    @property
    def commands(self):
        # type: () -> List[str]
        return [split_packet(packet)[0][0] for packet in self.packets]

    def request(self, index=-1):
        # type: (int) -> Tuple[List[str], List[bytes]]
        return split_packet(self.packets[index])
