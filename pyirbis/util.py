"""Text utilities for the IRBIS64 Python driver

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ["remove_comments", "prepare_format", "irbis_to_dos",
           "irbis_to_lines", "split_lines"]

# This module contains a collection of static routines for massaging the
# text that travels to and from the server.  Formats have to be sent as a
# single line with no comments, and multi-line values come back with the
# server's own two-byte line delimiter instead of a newline.  For instance:
#
#   prepare_format("v200^a, /* title\n' : 'v200^e")
#       -> "v200^a, ' : 'v200^e"
#
#   irbis_to_lines('first\x1f\x1esecond')
#       -> ['first', 'second']

import re

from typing import List  # pylint: disable=unused-import

from .protocol import IRBIS_DELIMITER

# Characters that open a literal in the formatting language: a comment
# marker inside a literal is part of the literal.
_QUOTES = ("'", '"', '|')

_LINE_BREAK = re.compile(r'\r?\n')


def remove_comments(text):
    # type: (str) -> str
    """Strip /* comments from a format.

    A comment runs from '/*' up to (but not including) the end of the line.
    Comment markers inside '...', "..." or |...| literals are left alone.
    """
    if not text or '/*' not in text:
        return text

    result = []  # type: List[str]
    state = ''
    index = 0
    length = len(text)

    while index < length:
        c = text[index]
        if state:
            if c == state:
                state = ''
            result.append(c)
        elif c == '/' and text.startswith('*', index + 1):
            while index < length and text[index] not in '\r\n':
                index += 1
            if index < length:
                result.append(text[index])
        else:
            if c in _QUOTES:
                state = c
            result.append(c)
        index += 1

    return ''.join(result)


def prepare_format(text):
    # type: (str) -> str
    """Prepare a dynamic format for sending to the server.

    The server wants the whole format on one line, so comments are removed
    and then every control character (line breaks, tabs) is dropped.
    """
    text = remove_comments(text)
    if not text:
        return text
    return ''.join(c for c in text if c >= ' ')


def irbis_to_dos(text):
    # type: (str) -> str
    """Replace the server's line delimiters with plain newlines."""
    return text.replace(IRBIS_DELIMITER, '\n')


def irbis_to_lines(text):
    # type: (str) -> List[str]
    """Split text on the server's line delimiter."""
    return text.split(IRBIS_DELIMITER)


def split_lines(text):
    # type: (str) -> List[str]
    """Split text on CR LF or LF.

    Unlike str.splitlines() this leaves the field separators 0x1E and 0x1F
    alone, and a trailing line break does not produce an empty last line.
    """
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == '':
        lines.pop()
    return lines
