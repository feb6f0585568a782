'''
Schemas describe a record at runtime: an ordered list of (field name, field type)
with the widths implied by the types.

Schemas are obtained by name from a SchemaProvider; an unknown name is
signalled with SchemaNotFoundException, never with an empty schema.
'''
import logging
import os
from abc import ABC, abstractmethod
from typing import Iterable, NamedTuple, Tuple, Union

from .enum import FieldType
from .exceptions import SchemaNotFoundException, UnknownFieldTypeException


logger = logging.getLogger(__name__)


# names accepted in binding files and in schemas built from strings
FIELD_TYPE_ALIASES = {
    'int':           FieldType.INT32,
    'int32':         FieldType.INT32,
    'uint':          FieldType.UINT32,
    'uint32':        FieldType.UINT32,
    'float':         FieldType.FLOAT32,
    'float32':       FieldType.FLOAT32,
    'double':        FieldType.FLOAT64,
    'float64':       FieldType.FLOAT64,
    'string':        FieldType.STRING_OFFSET,
    'string_offset': FieldType.STRING_OFFSET,
}


class SchemaField(NamedTuple):
    name: str
    type: FieldType


class Schema(object):
    """Ordered list of typed fields, with the name it was resolved from."""

    def __init__(self, name: str, fields: Iterable[SchemaField]):
        self.name = name
        self.fields: Tuple[SchemaField, ...] = tuple(fields)

        names = [_.name for _ in self.fields]
        duplicates = sorted({_ for _ in names if names.count(_) > 1})
        if duplicates:
            raise ValueError(f'schema {name!r} has duplicated fields: {", ".join(duplicates)}')

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name!r}, {len(self)} fields, {self.size} bytes)>'

    def __len__(self):
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)

    @property
    def size(self) -> int:
        return sum(_.type.size for _ in self.fields)

    @classmethod
    def from_entries(cls, name: str, entries: Iterable[Tuple[str, Union[str, FieldType]]]) -> "Schema":
        '''Build a schema from couples (field name, type), the type can be a FieldType
        or one of its names/aliases.'''
        fields = []
        for field_name, field_type in entries:
            fields.append(SchemaField(field_name, resolve_field_type(name, field_name, field_type)))

        return cls(name, fields)


def resolve_field_type(schema_name: str, field_name: str, field_type: Union[str, FieldType]) -> FieldType:
    if isinstance(field_type, FieldType):
        return field_type

    key = str(field_type).strip().lower()

    if key in FIELD_TYPE_ALIASES:
        return FIELD_TYPE_ALIASES[key]

    try:
        return FieldType[key.upper()]
    except KeyError:
        raise UnknownFieldTypeException(schema_name, field_name, field_type) from None


class SchemaProvider(ABC):
    """Interface of the registries that resolve a schema name into a Schema."""

    @abstractmethod
    def resolve(self, name: str) -> Schema:
        '''Return the schema with the given name or raise SchemaNotFoundException.'''


class DictSchemaProvider(SchemaProvider):
    """Schemas kept in memory, as a dictionary name -> list of (field name, type)."""

    def __init__(self, schemas=None):
        self._schemas = dict(schemas or {})

    def add(self, name, entries):
        self._schemas[name] = list(entries)

    def resolve(self, name):
        if name not in self._schemas:
            raise SchemaNotFoundException(name)

        return Schema.from_entries(name, self._schemas[name])


class DirectorySchemaProvider(SchemaProvider):
    """Schemas read from the binding files in a directory, one file per schema
    named <name>.txt with one field per line

        # comments and empty lines are ignored
        id      uint
        name    string_offset
        speed   float
    """
    extension = '.txt'

    def __init__(self, path):
        self.path = os.fspath(path)
        self._cache = {}

    def get_path(self, name: str) -> str:
        return os.path.join(self.path, f'{name}{self.extension}')

    def resolve(self, name):
        if name in self._cache:
            return self._cache[name]

        path = self.get_path(name)

        if not os.path.isfile(path):
            raise SchemaNotFoundException(name)

        logger.debug('loading schema \'%s\' from %s' % (name, path))

        with open(path, 'r', encoding='utf-8') as f:
            entries = list(parse_binding(f, source=path))

        self._cache[name] = Schema.from_entries(name, entries)

        return self._cache[name]


def parse_binding(lines: Iterable[str], source='<binding>'):
    '''It yields the couples (field name, type name) found in the lines of a binding file.'''
    for lineno, line in enumerate(lines, start=1):
        line = line.split('#', 1)[0].strip()
        if not line:
            continue

        components = line.split()
        if len(components) != 2:
            raise ValueError(f'{source}:{lineno}: expected \'<field name> <type>\', found {line!r}')

        yield components[0], components[1]
