"""IRBIS64 Python driver bibliographic records.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['SubField', 'RecordField', 'MarcRecord']

# On the wire a record is a list of lines:
#
#   MFN#STATUS
#   0#VERSION
#   TAG#VALUE
#   ...
#
# where VALUE is a plain value optionally followed by ^<code><text> pieces:
#
#   200#^aTitle^eSubtitle
#   910#Inventory^b12345

from typing import Iterable, List, Optional  # pylint: disable=unused-import

from .exception import DataError
from . import protocol

SUBFIELD_MARKER = '^'
TAG_SEPARATOR = '#'


def _parse_int(text, what):
    # type: (str, str) -> int
    text = text.strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise DataError('Invalid %s: %r' % (what, text))


class SubField(object):
    """A sub-field: a one character code and a text value."""

    def __init__(self, code, value=''):
        # type: (str, str) -> None
        self.code = code
        self.value = value

    def encode(self):
        # type: () -> str
        return SUBFIELD_MARKER + self.code + self.value

    def __eq__(self, other):
        if not isinstance(other, SubField):
            return NotImplemented
        return self.code == other.code and self.value == other.value

    __hash__ = None  # type: ignore

    def __str__(self):
        return self.encode()

    def __repr__(self):
        return 'SubField(%r, %r)' % (self.code, self.value)


class RecordField(object):
    """A field of a record: a tag, a plain value and sub-fields."""

    def __init__(self, tag, value=''):
        # type: (int, str) -> None
        """Create a field.

        :param tag: Numeric tag of the field.
        :param value: Text before the first sub-field.
        """
        self.tag = tag
        self.value = value
        self.subfields = []  # type: List[SubField]

    def add(self, code, value=''):
        # type: (str, str) -> RecordField
        """Append a sub-field and return the field for chaining."""
        self.subfields.append(SubField(code, value))
        return self

    def first(self, code):
        # type: (str) -> Optional[SubField]
        """Return the first sub-field with this code (case-insensitive)."""
        code = code.lower()
        for subfield in self.subfields:
            if subfield.code.lower() == code:
                return subfield
        return None

    def text(self):
        # type: () -> str
        """Return VALUE as it appears on the wire."""
        return self.value + ''.join(sf.encode() for sf in self.subfields)

    def encode(self):
        # type: () -> str
        return '%d%s%s' % (self.tag, TAG_SEPARATOR, self.text())

    @classmethod
    def parse(cls, line):
        # type: (str) -> RecordField
        """Build a field from a TAG#VALUE line.

        :raises DataError: If the line has no tag.
        """
        tag, sep, body = line.partition(TAG_SEPARATOR)
        if not sep:
            raise DataError('Field has no tag: %r' % (line))
        field = cls(_parse_int(tag, 'tag'))
        parts = body.split(SUBFIELD_MARKER)
        field.value = parts[0]
        for part in parts[1:]:
            if part:
                field.add(part[0], part[1:])
        return field

    def __eq__(self, other):
        if not isinstance(other, RecordField):
            return NotImplemented
        return (self.tag == other.tag and self.value == other.value
                and self.subfields == other.subfields)

    __hash__ = None  # type: ignore

    def __str__(self):
        return self.encode()

    def __repr__(self):
        return 'RecordField(%r)' % (self.encode())


class MarcRecord(object):
    """A bibliographic record.

    A new record has an MFN of 0 and no database; the server assigns both
    when the record is first written.

    Public Functions:
    add -- Append a field.
    fm -- Value of the first field (or sub-field) with a tag.
    fma -- Values of every field (or sub-field) with a tag.
    is_deleted -- True if the record is deleted.
    encode -- Render the record as wire text.
    decode -- Fill the record from wire lines.
    """

    def __init__(self, database=''):
        # type: (str) -> None
        self.database = database
        self.mfn = 0
        self.status = 0
        self.version = 0
        self.fields = []  # type: List[RecordField]

    def add(self, tag, value=''):
        # type: (int, str) -> RecordField
        """Append a field and return it, so sub-fields can be chained."""
        field = RecordField(tag, value)
        self.fields.append(field)
        return field

    def fm(self, tag, code=None):
        # type: (int, Optional[str]) -> Optional[str]
        """Return the value of the first field with the tag.

        With a code, return the value of the first such sub-field of that
        field instead.  Returns None when there is nothing to return.
        """
        for field in self.fields:
            if field.tag == tag:
                if code is None:
                    return field.value
                subfield = field.first(code)
                return subfield.value if subfield is not None else None
        return None

    def fma(self, tag, code=None):
        # type: (int, Optional[str]) -> List[str]
        """Return the non-empty values of every field with the tag."""
        result = []
        for field in self.fields:
            if field.tag != tag:
                continue
            if code is None:
                value = field.value
            else:
                subfield = field.first(code)
                value = subfield.value if subfield is not None else ''
            if value:
                result.append(value)
        return result

    def is_deleted(self):
        # type: () -> bool
        """True if the record is deleted, logically or physically."""
        return (self.status & protocol.DELETED_MASK) != 0

    @property
    def deleted(self):
        # type: () -> bool
        return self.is_deleted()

    def to_lines(self):
        # type: () -> List[str]
        lines = ['%d%s%d' % (self.mfn, TAG_SEPARATOR, self.status),
                 '0%s%d' % (TAG_SEPARATOR, self.version)]
        lines.extend(field.encode() for field in self.fields)
        return lines

    def encode(self, delimiter=protocol.IRBIS_DELIMITER):
        # type: (str) -> str
        """Render the record as text, lines joined by the delimiter."""
        return delimiter.join(self.to_lines())

    def decode(self, lines):
        # type: (Iterable[str]) -> MarcRecord
        """Replace the contents of the record with the given lines.

        The first line is the MFN#STATUS header, optionally followed by a
        0#VERSION line.  Blank lines are ignored.

        :raises DataError: If a line cannot be parsed.
        """
        self.mfn = 0
        self.status = 0
        self.version = 0
        self.fields = []
        header = True
        for line in lines:
            if not line:
                continue
            if header:
                mfn, _, status = line.partition(TAG_SEPARATOR)
                self.mfn = _parse_int(mfn, 'MFN')
                self.status = _parse_int(status, 'status')
                header = False
                continue
            if line.startswith('0' + TAG_SEPARATOR) and not self.fields:
                self.version = _parse_int(line[2:], 'version')
                continue
            self.fields.append(RecordField.parse(line))
        return self

    @classmethod
    def parse(cls, lines, database=''):
        # type: (Iterable[str], str) -> MarcRecord
        """Build a new record from wire lines."""
        return cls(database).decode(lines)

    def __eq__(self, other):
        if not isinstance(other, MarcRecord):
            return NotImplemented
        return (self.database == other.database and self.mfn == other.mfn
                and self.status == other.status
                and self.version == other.version
                and self.fields == other.fields)

    __hash__ = None  # type: ignore

    def __str__(self):
        return self.encode('\n')

    def __repr__(self):
        return '<MarcRecord %s#%d: %d fields>' % (self.database, self.mfn,
                                                  len(self.fields))
