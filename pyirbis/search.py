"""IRBIS64 Python driver search results and dictionary terms.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['SearchParameters', 'FoundLine', 'TermInfo', 'TermPosting']

from typing import Iterable, List, Optional  # pylint: disable=unused-import

from .exception import DataError


def _to_int(text):
    # type: (str) -> int
    try:
        return int(text)
    except ValueError:
        raise DataError('Not an integer: %r' % (text))


class SearchParameters(object):
    """Parameters of a search request."""

    def __init__(self, expression='',      # type: str
                 database=None,            # type: Optional[str]
                 first_record=1,           # type: int
                 number_of_records=0,      # type: int
                 format=None,              # type: Optional[str]
                 min_mfn=0,                # type: int
                 max_mfn=0,                # type: int
                 sequential=''             # type: str
                 ):
        # type: (...) -> None
        """Create search parameters.

        :param expression: Expression searched in the dictionary.
        :param database: Database to search, None for the connection's own.
        :param first_record: Index of the first record to return (from 1).
        :param number_of_records: How many records to return, 0 for all.
        :param format: Format applied to each found record, if any.
        :param min_mfn: Lowest MFN for sequential search.
        :param max_mfn: Highest MFN for sequential search.
        :param sequential: Expression for sequential search.
        """
        self.expression = expression
        self.database = database
        self.first_record = first_record
        self.number_of_records = number_of_records
        self.format = format
        self.min_mfn = min_mfn
        self.max_mfn = max_mfn
        self.sequential = sequential


class FoundLine(object):
    """One line of a search answer: an MFN and its formatted description."""

    def __init__(self, mfn, description=None):
        # type: (int, Optional[str]) -> None
        self.mfn = mfn
        self.description = description

    @classmethod
    def parse(cls, lines):
        # type: (Iterable[str]) -> List[FoundLine]
        """Parse 'MFN' or 'MFN#DESCRIPTION' lines, skipping blank ones."""
        result = []
        for line in lines:
            if not line:
                continue
            mfn, sep, description = line.partition('#')
            result.append(cls(_to_int(mfn), description if sep else None))
        return result

    @staticmethod
    def to_mfn(found):
        # type: (Iterable[FoundLine]) -> List[int]
        return [item.mfn for item in found]

    @staticmethod
    def to_description(found):
        # type: (Iterable[FoundLine]) -> List[str]
        return [item.description or '' for item in found]

    def __repr__(self):
        return 'FoundLine(%d, %r)' % (self.mfn, self.description)


class TermInfo(object):
    """A dictionary term with the number of postings it has."""

    def __init__(self, count=0, text=''):
        # type: (int, str) -> None
        self.count = count
        self.text = text

    @classmethod
    def parse(cls, lines):
        # type: (Iterable[str]) -> List[TermInfo]
        """Parse 'COUNT#TEXT' lines, skipping blank ones."""
        result = []
        for line in lines:
            if not line:
                continue
            count, _, text = line.partition('#')
            result.append(cls(_to_int(count), text))
        return result

    def __eq__(self, other):
        if not isinstance(other, TermInfo):
            return NotImplemented
        return self.count == other.count and self.text == other.text

    __hash__ = None  # type: ignore

    def __repr__(self):
        return 'TermInfo(%d, %r)' % (self.count, self.text)


class TermPosting(object):
    """One occurrence of a term: where it is and, optionally, formatted text."""

    def __init__(self, mfn=0, tag=0, occurrence=0, count=0, text=''):
        # type: (int, int, int, int, str) -> None
        self.mfn = mfn
        self.tag = tag
        self.occurrence = occurrence
        self.count = count
        self.text = text

    @classmethod
    def parse(cls, lines):
        # type: (Iterable[str]) -> List[TermPosting]
        """Parse 'MFN#TAG#OCC#COUNT[#TEXT]' lines.

        Parsing stops at the first line with fewer than four parts.
        """
        result = []
        for line in lines:
            parts = line.split('#', 4)
            if len(parts) < 4:
                break
            result.append(cls(_to_int(parts[0]), _to_int(parts[1]),
                              _to_int(parts[2]), _to_int(parts[3]),
                              parts[4] if len(parts) > 4 else ''))
        return result

    def __repr__(self):
        return 'TermPosting(%d, %d, %d, %d, %r)' % (
            self.mfn, self.tag, self.occurrence, self.count, self.text)
