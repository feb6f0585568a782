import struct

import pytest

from dbcstruct import fields
from dbcstruct.core import Layout
from dbcstruct.exceptions import SizeMismatchException, TruncatedInputException
from dbcstruct.fields import StringOffset
from dbcstruct.header import Header
from dbcstruct.rows import SchemaRowDecoder, StaticRowDecoder
from dbcstruct.schema import Schema


class Record(Layout):
    f1 = fields.Int32Field()
    f2 = fields.StringOffsetField()


def test_static_decoder():
    decoder = StaticRowDecoder(Record)

    row = decoder.decode_row(struct.pack('<iI', -5, 3))

    assert decoder.row_size == 8
    assert decoder.field_names == ['f1', 'f2']
    assert list(row) == ['f1', 'f2']
    assert row == {'f1': -5, 'f2': 3}
    assert isinstance(row['f2'], StringOffset)
    assert not isinstance(row['f1'], StringOffset)


def test_schema_decoder():
    schema = Schema.from_entries('Dummy', [
        ('id', 'uint'),
        ('ratio', 'float'),
        ('big', 'double'),
        ('neg', 'int'),
        ('name', 'string_offset'),
    ])
    decoder = SchemaRowDecoder(schema)

    row = decoder.decode_row(struct.pack('<IfdiI', 7, 0.5, 2.25, -1, 9))

    assert decoder.row_size == 24
    assert list(row) == ['id', 'ratio', 'big', 'neg', 'name']
    assert row == {'id': 7, 'ratio': 0.5, 'big': 2.25, 'neg': -1, 'name': 9}
    assert isinstance(row['name'], StringOffset)
    assert not isinstance(row['id'], StringOffset)


def test_decoders_agree():
    """The same bytes decoded with the two strategies give the same row."""
    schema = Schema.from_entries('Record', [('f1', 'int'), ('f2', 'string')])
    raw = struct.pack('<iI', 42, 17)

    assert StaticRowDecoder(Record).decode_row(raw) == SchemaRowDecoder(schema).decode_row(raw)


def test_decode_rows():
    raw = b''.join(struct.pack('<iI', _, _ * 10) for _ in range(5))

    rows = StaticRowDecoder(Record).decode_rows(raw, 5)

    assert len(rows) == 5
    assert [_['f1'] for _ in rows] == [0, 1, 2, 3, 4]
    assert [_['f2'] for _ in rows] == [0, 10, 20, 30, 40]
    assert all(len(_) == 2 for _ in rows)


def test_check_row_size():
    decoder = StaticRowDecoder(Record)

    decoder.check_row_size(Header(record_size=8))

    with pytest.raises(SizeMismatchException) as excinfo:
        decoder.check_row_size(Header(record_size=12), source='Record.dbc')

    assert excinfo.value.source == 'Record.dbc'
    assert excinfo.value.expected == 12
    assert excinfo.value.actual == 8
    assert 'Record.dbc' in str(excinfo.value)


def test_check_row_size_schema():
    schema = Schema.from_entries('Wide', [('a', 'double'), ('b', 'uint')])

    with pytest.raises(SizeMismatchException):
        SchemaRowDecoder(schema).check_row_size(Header(record_size=8))


def test_row_offsets_with_arrays():
    class Reagents(Layout):
        id = fields.UInt32Field()
        names = fields.ArrayField(fields.StringOffsetField(), 2)
        counts = fields.ArrayField(fields.UInt32Field(), 2)

    row = StaticRowDecoder(Reagents).decode_row(struct.pack('<5I', 1, 0, 4, 8, 9))

    assert row['names'] == (0, 4)
    assert list(row.offsets()) == [('names', 0), ('names', 4)]


def test_schema_decoder_two_fields():
    schema = Schema.from_entries('Record', [('f1', 'int'), ('f2', 'string_offset')])

    row = SchemaRowDecoder(schema).decode_row(struct.pack('<iI', 1, 3))

    assert row == {'f1': 1, 'f2': 3}
    assert isinstance(row['f2'], StringOffset)


def test_schema_decoder_uses_typed_fields():
    schema = Schema.from_entries('Record', [('f1', 'int'), ('f2', 'double'), ('f3', 'string')])

    decoder = SchemaRowDecoder(schema)

    assert decoder.field_names == ['f1', 'f2', 'f3']
    assert [type(field) for _, field in decoder.fields] == [
        fields.Int32Field,
        fields.Float64Field,
        fields.StringOffsetField,
    ]


def test_schema_decoder_wrong_size():
    schema = Schema.from_entries('Record', [('f1', 'int'), ('f2', 'string_offset')])

    with pytest.raises(ValueError):
        SchemaRowDecoder(schema).decode_row(b'\x01\x00\x00\x00')


def test_decode_rows_truncated():
    raw = struct.pack('<iI', 1, 0) + b'\x02\x00'

    with pytest.raises(TruncatedInputException) as excinfo:
        StaticRowDecoder(Record).decode_rows(raw, 2, source='Record.dbc', offset=16)

    assert excinfo.value.source == 'Record.dbc'
    assert excinfo.value.offset == 16
    assert excinfo.value.expected == 16
    assert excinfo.value.actual == 10
