"""
# dbcstruct: DBC tables for humans.

A DBC file is a fixed-layout binary table made of three consecutive parts

 1. header: four little-endian u32 with the dimensions of what follows
    (record count, field count, record size, string block size)

 2. records: record count records of record size bytes each, every field
    being a 32 bit integer/float, a 64 bit float or an offset into the
    string block

 3. string block: NUL terminated UTF-8 strings packed together, referenced
    by the byte offset they begin at

A record can be decoded with a Layout declared in python, like

    class SpellIcon(Layout):
        id = fields.UInt32Field()
        texture = fields.StringOffsetField()

or with a Schema resolved by name at runtime from a SchemaProvider.

TableReader reads the three parts one after the other

    reader = TableReader('SpellIcon.dbc')
    header = reader.read_header()
    table = Table()
    reader.read_records(table, SpellIcon.get_size(), layout=SpellIcon)
    reader.read_string_block()
    reader.lookup_string(table[0]['texture'])

"""
from .core import Layout, Row
from .enum import Compliant, FieldType, ReaderPhase
from .exceptions import (
    DBCException,
    DanglingStringOffsetException,
    MagicException,
    MalformedTextException,
    PhaseException,
    SchemaNotFoundException,
    SizeMismatchException,
    TruncatedInputException,
    UnknownFieldTypeException,
)
from .fields import StringOffset
from .header import Header, WDBCHeader, decode_header
from .reader import Table, TableReader
from .rows import SchemaRowDecoder, StaticRowDecoder
from .schema import DictSchemaProvider, DirectorySchemaProvider, Schema, SchemaProvider
from .strings import StringTable, build_string_table
