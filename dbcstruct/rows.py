"""
Decoding of the records of a DBC file.

Two strategies share the same interface: StaticRowDecoder uses a Layout
declared in python (every field at a fixed offset), SchemaRowDecoder uses a
Schema resolved at runtime and reads the fields one after the other.
"""
import logging
from typing import Type

from bitstring import ConstBitStream

from .core import Layout, Row
from .exceptions import SizeMismatchException, TruncatedInputException
from .fields import field_for_type
from .schema import Schema


class RowDecoder(object):
    """Base class to subclass from"""

    def __init__(self):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")

    def _get_row_size(self) -> int:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_row_size() not implemented")

    row_size = property(
        fget=lambda self: self._get_row_size(),
    )

    @property
    def field_names(self):
        raise NotImplementedError()

    def check_row_size(self, header, source='<bytes>'):
        '''The size found in the header must be the one of the records we know how to decode,
        otherwise the file is from a different version of the format.'''
        if header.record_size != self.row_size:
            raise SizeMismatchException(source, header.record_size, self.row_size)

    def decode_row(self, raw: bytes) -> Row:
        raise NotImplementedError('you need to implement this in the subclass')

    def decode_rows(self, raw: bytes, count: int, source='<bytes>', offset=0):
        '''Decode count consecutive records, raw must contain all of them.

        source and offset only locate raw in the file for the error messages.'''
        size = self.row_size
        if len(raw) < size * count:
            raise TruncatedInputException(source, offset, size * count, len(raw))

        rows = [None] * count
        for index in range(count):
            rows[index] = self.decode_row(raw[index * size:(index + 1) * size])

        return rows


class StaticRowDecoder(RowDecoder):

    def __init__(self, layout: Type[Layout]):
        super().__init__()
        self.layout = layout

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.layout.__name__})>'

    def _get_row_size(self):
        return self.layout.get_size()

    @property
    def field_names(self):
        return self.layout.get_ordered_fields_name()

    def decode_row(self, raw):
        return Row(self.layout.unpack_values(raw))


class SchemaRowDecoder(RowDecoder):
    """Read each field of the schema in sequence, the width of each
    field is given by its type."""

    def __init__(self, schema: Schema):
        super().__init__()
        self.schema = schema
        self.fields = [(_.name, field_for_type(_.type)) for _ in schema]

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.schema.name})>'

    def _get_row_size(self):
        return self.schema.size

    @property
    def field_names(self):
        return [name for name, _ in self.fields]

    def decode_row(self, raw):
        if len(raw) != self.row_size:
            raise ValueError(f'schema {self.schema.name} needs {self.row_size} bytes, got {len(raw)}')

        stream = ConstBitStream(bytes=raw)

        return Row((name, field.read(stream)) for name, field in self.fields)
