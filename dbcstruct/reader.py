"""
Reading of a DBC file in phases

    header -> records -> string block

each phase opens the file, seeks to the cursor left by the previous one, reads
its slice and closes the file: the cursor is the only state carried between
the calls. The phases can be skipped but never repeated nor reversed.
"""
import logging
import os
from typing import List, Optional, Type

from .core import Layout, Row
from .enum import Compliant, ReaderPhase
from .exceptions import PhaseException, SizeMismatchException
from .fields import StringOffset
from .header import Header, decode_header
from .rows import RowDecoder, SchemaRowDecoder, StaticRowDecoder
from .schema import SchemaProvider
from .streams import Stream
from .strings import StringTable, build_string_table


class Table(object):
    """The records of a DBC file, in file order."""

    def __init__(self):
        self.rows: List[Row] = []

    def __repr__(self):
        return f'<{self.__class__.__name__}({len(self)} rows)>'

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __getitem__(self, index):
        return self.rows[index]


class TableReader(object):

    def __init__(self, source, schema_provider: Optional[SchemaProvider] = None,
                 header_layout=Header, compliant=Compliant.MAGIC | Compliant.TERMINATOR):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.source = source
        self.name = os.fspath(source) if isinstance(source, (str, os.PathLike)) else '<bytes>'
        self.schema_provider = schema_provider
        self.header_layout = header_layout
        self.compliant = compliant

        self.cursor = 0
        self.phase = ReaderPhase.UNOPENED
        self.header = None
        self._strings: Optional[StringTable] = None

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name}, phase={self.phase.name}, cursor={self.cursor})>'

    def _check_phase(self, requested: ReaderPhase):
        if requested <= self.phase:
            raise PhaseException(self.phase, requested)

        if requested > ReaderPhase.HEADER_READ and self.header is None:
            raise PhaseException(self.phase, requested, f'the header must be read before moving to {requested.name}')

    def _read(self, offset: int, size: int) -> bytes:
        with Stream(self.source) as stream:
            stream.seek(offset)
            data = stream.read_exactly(size)

        self.logger.debug('read %d bytes at offset %d' % (size, offset))

        return data

    def _enter(self, phase: ReaderPhase):
        self.logger.debug('phase %s -> %s' % (self.phase.name, phase.name))
        self.phase = phase

    def read_header(self) -> Header:
        '''Reads the header, saving it to the instance and returning it'''
        self._check_phase(ReaderPhase.HEADER_READ)

        data = self._read(self.cursor, self.header_layout.get_size())
        self.header = decode_header(data, layout=self.header_layout, source=self.name, compliant=self.compliant)
        self.cursor += len(data)

        self._enter(ReaderPhase.HEADER_READ)

        return self.header

    def get_decoder(self, layout: Optional[Type[Layout]] = None, schema: Optional[str] = None) -> RowDecoder:
        if (layout is None) == (schema is None):
            raise ValueError('indicate exactly one between layout and schema')

        if layout is not None:
            return StaticRowDecoder(layout)

        if self.schema_provider is None:
            raise ValueError(f'no schema provider to resolve schema {schema!r}')

        return SchemaRowDecoder(self.schema_provider.resolve(schema))

    def read_records(self, table: Table, record_size: int, layout: Optional[Type[Layout]] = None,
                     schema: Optional[str] = None) -> None:
        '''Reads all the records of the file into table.rows, each one a mapping
        from the name of the field to its value.

        Nothing is read if the sizes of header, caller and decoder don't agree, and
        table is untouched if the reading fails.'''
        self._check_phase(ReaderPhase.RECORDS_READ)

        decoder = self.get_decoder(layout=layout, schema=schema)

        self.logger.debug('reading %d records of %d bytes with %r: %s' % (
            self.header.record_count, self.header.record_size, decoder, ', '.join(decoder.field_names)))

        if self.header.record_size != record_size:
            raise SizeMismatchException(self.name, self.header.record_size, record_size)
        decoder.check_row_size(self.header, source=self.name)

        data = self._read(self.cursor, self.header.record_count * self.header.record_size)
        table.rows = decoder.decode_rows(data, self.header.record_count, source=self.name, offset=self.cursor)
        self.cursor += len(data)

        self._enter(ReaderPhase.RECORDS_READ)

    def read_string_block(self) -> None:
        '''Reads the string block and builds the table used by lookup_string()'''
        self._check_phase(ReaderPhase.STRINGS_READ)

        offset = self.cursor
        if self.phase < ReaderPhase.RECORDS_READ:
            self.logger.debug('skipping the records block')
            offset += self.header.record_count * self.header.record_size

        data = self._read(offset, self.header.string_block_size)
        self._strings = build_string_table(data, compliant=self.compliant)
        self.cursor = offset + len(data)

        self._enter(ReaderPhase.STRINGS_READ)

    def get_string_table(self) -> StringTable:
        if self._strings is None:
            raise PhaseException(self.phase, ReaderPhase.STRINGS_READ, 'the string table is not loaded')

        return self._strings

    def lookup_string(self, offset: int) -> str:
        return self.get_string_table().lookup(offset)

    def release_string_table(self) -> None:
        self._strings = None

    def resolve_strings(self, row: Row) -> dict:
        '''Return a copy of the row with the string offsets replaced by the strings.

        All the offsets are looked up before building the copy, a dangling one
        fails the whole row.'''
        strings = {offset: self.lookup_string(offset) for _, offset in row.offsets()}

        def _text(value):
            return strings[value] if isinstance(value, StringOffset) else value

        result = {}
        for name, value in row.items():
            result[name] = tuple(_text(_) for _ in value) if isinstance(value, tuple) else _text(value)

        return result
