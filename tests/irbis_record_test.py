"""
(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import pytest

import pyirbis
from pyirbis import protocol
from pyirbis.record import MarcRecord, RecordField, SubField
from pyirbis.search import FoundLine, TermInfo, TermPosting


def sample_record():
    record = MarcRecord()
    record.mfn = 12
    record.status = protocol.LAST_VERSION
    record.version = 3
    record.add(700).add('a', 'Smith').add('g', 'J. R.')
    record.add(200).add('a', 'Title').add('e', 'subtitle')
    record.add(910, 'plain').add('b', '12345')
    record.add(910).add('b', '67890')
    record.add(5, '20240101')
    return record


class TestIrbisRecord(object):
    """Test the record model and its wire format."""

    def test_encode(self):
        assert sample_record().to_lines() == [
            '12#32',
            '0#3',
            '700#^aSmith^gJ. R.',
            '200#^aTitle^esubtitle',
            '910#plain^b12345',
            '910#^b67890',
            '5#20240101',
        ]
        assert sample_record().encode().split('\x1f\x1e')[0] == '12#32'
        assert str(sample_record()).split('\n')[1] == '0#3'

    def test_decode(self):
        record = MarcRecord.parse(['7#1', '0#2', '', '200#plain^aA^bB', '300#note'],
                                  'IBIS')
        assert record.database == 'IBIS'
        assert record.mfn == 7
        assert record.status == 1
        assert record.version == 2
        assert record.is_deleted()
        assert [f.tag for f in record.fields] == [200, 300]
        assert record.fields[0].value == 'plain'
        assert record.fields[0].subfields == [SubField('a', 'A'), SubField('b', 'B')]
        assert record.fields[1].subfields == []

    def test_decode_without_version(self):
        record = MarcRecord.parse(['7#0', '200#^aA'])
        assert record.version == 0
        assert len(record.fields) == 1

    def test_decode_replaces_fields(self):
        record = sample_record()
        record.decode(['12#0', '100#x'])
        assert record.fields == [RecordField(100, 'x')]

        record = MarcRecord.parse(['12#64', '0#3', '100#x'])
        record.decode(['12#0', '100#y'])
        assert (record.mfn, record.status, record.version) == (12, 0, 0)
        assert record.fields == [RecordField(100, 'y')]

        record.decode([])
        assert (record.mfn, record.status, record.version) == (0, 0, 0)
        assert record.fields == []

    @pytest.mark.parametrize('record', [
        sample_record(),
        MarcRecord(),
        MarcRecord.parse(['1#0', '0#1', '10#only plain']),
        MarcRecord.parse(['99#64', '0#5', '1#^a', '2#^aX^a^bY', '3#v ! @ $ % & * ( )']),
    ])
    def test_round_trip(self, record):
        assert MarcRecord.parse(record.to_lines()) == record
        assert MarcRecord.parse(record.encode().split('\x1f\x1e')) == record

    def test_bad_lines(self):
        with pytest.raises(pyirbis.DataError):
            MarcRecord.parse(['1#0', 'no tag here'])
        with pytest.raises(pyirbis.DataError):
            MarcRecord.parse(['1#0', 'abc#value'])
        with pytest.raises(pyirbis.DataError):
            MarcRecord.parse(['x#0'])

    def test_fm_fma(self):
        record = sample_record()
        assert record.fm(200, 'a') == 'Title'
        assert record.fm(200, 'E') == 'subtitle'
        assert record.fm(910) == 'plain'
        assert record.fm(910, 'b') == '12345'
        assert record.fm(200, 'z') is None
        assert record.fm(999) is None
        assert record.fma(910, 'b') == ['12345', '67890']
        assert record.fma(910) == ['plain']
        assert record.fma(999) == []

    def test_deleted(self):
        record = MarcRecord()
        assert not record.is_deleted()
        record.status = protocol.LOCKED_RECORD | protocol.LAST_VERSION
        assert not record.deleted
        record.status |= protocol.PHYSICALLY_DELETED
        assert record.deleted

    def test_equality(self):
        assert sample_record() == sample_record()
        other = sample_record()
        other.fields[0].subfields[0].value = 'Jones'
        assert sample_record() != other
        assert RecordField(1, 'a') != SubField('a', '1')

    def test_field_text(self):
        field = RecordField.parse('200#x^aA^bB')
        assert field.text() == 'x^aA^bB'
        assert field.first('B').value == 'B'
        assert field.first('c') is None
        assert str(field) == '200#x^aA^bB'


class TestIrbisSearch(object):
    """Test parsing of search and dictionary answers."""

    def test_found_lines(self):
        found = FoundLine.parse(['1', '5#Title', '', '9#a#b'])
        assert FoundLine.to_mfn(found) == [1, 5, 9]
        assert [item.description for item in found] == [None, 'Title', 'a#b']
        assert FoundLine.to_description(found) == ['', 'Title', 'a#b']

    def test_found_lines_bad(self):
        with pytest.raises(pyirbis.DataError):
            FoundLine.parse(['abc#x'])

    def test_terms(self):
        terms = TermInfo.parse(['3#K=PYTHON', '', '1#K=PY#THON'])
        assert terms == [TermInfo(3, 'K=PYTHON'), TermInfo(1, 'K=PY#THON')]

    def test_postings(self):
        postings = TermPosting.parse(['5#200#1#1', '7#610#2#3#Text#more', 'end'])
        assert len(postings) == 2
        assert (postings[0].mfn, postings[0].tag, postings[0].occurrence,
                postings[0].count, postings[0].text) == (5, 200, 1, 1, '')
        assert postings[1].text == 'Text#more'
