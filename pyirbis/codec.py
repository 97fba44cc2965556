"""Character encodings used on the wire.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

# The server mixes two encodings inside a single packet.  Most protocol
# lines (command codes, database names, numbers, formats) travel in the
# single-byte Windows-1251 code page which we call ANSI here, while record
# bodies and search expressions travel as UTF-8.
#
# We can't use Python's stock 'cp1251' codec for the ANSI side: it leaves
# byte 0x98 undefined, so decoding is not total.  The server treats 0x98 as
# the C1 control U+0098, so we build our own charmap from the table below.
# Encoding never fails: anything the table can't represent becomes '?'.

import codecs

__all__ = ['ANSI', 'UTF', 'ansi_decode', 'ansi_encode',
           'utf_decode', 'utf_encode', 'encode', 'decode']

ANSI = 'ansi'
UTF = 'utf'

# Code point for every byte value 0x00 - 0xFF.
_TO_UNICODE = tuple(range(0x80)) + (
    0x0402, 0x0403, 0x201A, 0x0453, 0x201E, 0x2026, 0x2020, 0x2021,
    0x20AC, 0x2030, 0x0409, 0x2039, 0x040A, 0x040C, 0x040B, 0x040F,
    0x0452, 0x2018, 0x2019, 0x201C, 0x201D, 0x2022, 0x2013, 0x2014,
    0x0098, 0x2122, 0x0459, 0x203A, 0x045A, 0x045C, 0x045B, 0x045F,
    0x00A0, 0x040E, 0x045E, 0x0408, 0x00A4, 0x0490, 0x00A6, 0x00A7,
    0x0401, 0x00A9, 0x0404, 0x00AB, 0x00AC, 0x00AD, 0x00AE, 0x0407,
    0x00B0, 0x00B1, 0x0406, 0x0456, 0x0491, 0x00B5, 0x00B6, 0x00B7,
    0x0451, 0x2116, 0x0454, 0x00BB, 0x0458, 0x0405, 0x0455, 0x0457,
) + tuple(range(0x0410, 0x0450))

assert len(_TO_UNICODE) == 256

DECODING_TABLE = ''.join(chr(c) for c in _TO_UNICODE)

ENCODING_TABLE = codecs.charmap_build(DECODING_TABLE)


def ansi_decode(data):
    # type: (bytes) -> str
    """Convert ANSI bytes to a str: one character per byte."""
    return codecs.charmap_decode(bytes(data), 'strict', DECODING_TABLE)[0]


def ansi_encode(text):
    # type: (str) -> bytes
    """Convert a str to ANSI bytes: one byte per character.

    Characters outside the code page become '?'.
    """
    return codecs.charmap_encode(text, 'replace', ENCODING_TABLE)[0]


def utf_decode(data):
    # type: (bytes) -> str
    """Convert UTF-8 bytes to a str.

    Invalid sequences become U+FFFD; legacy records may carry stray bytes.
    """
    return bytes(data).decode('utf-8', 'replace')


def utf_encode(text):
    # type: (str) -> bytes
    """Convert a str to UTF-8 bytes."""
    return text.encode('utf-8')


_ENCODERS = {ANSI: ansi_encode, UTF: utf_encode}
_DECODERS = {ANSI: ansi_decode, UTF: utf_decode}


def encode(text, encoding):
    # type: (str, str) -> bytes
    """Encode text with the named wire encoding (ANSI or UTF)."""
    return _ENCODERS[encoding](text)


def decode(data, encoding):
    # type: (bytes, str) -> str
    """Decode bytes with the named wire encoding (ANSI or UTF)."""
    return _DECODERS[encoding](data)
