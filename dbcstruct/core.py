"""
Core module for the abstraction of a record layout.

"""
from collections.abc import Mapping
from typing import Dict, Iterator, List, Tuple

from .fields import Field, StringOffset
from .meta import MetaLayout


class Row(Mapping):
    """Read-only mapping from the name of a field to its decoded value.

    The iteration order is the order of the layout (or schema) the row
    was decoded with."""

    def __init__(self, items=()):
        self._values = dict(items)

    def __getitem__(self, key):
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return '<%s(%s)>' % (
            self.__class__.__name__,
            ', '.join('%s=%r' % (name, value) for name, value in self._values.items()))

    def offsets(self) -> Iterator[Tuple[str, StringOffset]]:
        '''It yields the couples (name, offset) for the string references of the row.'''
        for name, value in self._values.items():
            if isinstance(value, StringOffset):
                yield name, value
            elif isinstance(value, tuple):
                for element in value:
                    if isinstance(element, StringOffset):
                        yield name, element


class Layout(metaclass=MetaLayout):
    """
    Fixed layout of a record: define it subclassing and declaring the fields
    in the order they appear in the binary data

        class SpellIcon(Layout):
            id = fields.UInt32Field()
            texture = fields.StringOffsetField()

    The offset of each field and the size of the whole layout are computed
    when the class is created. An instance holds the decoded values, reachable
    as attributes with the name of the fields.
    """

    def __init__(self, **values):
        unknown = set(values) - set(self._meta.fields)
        if unknown:
            raise AttributeError(f'{self.__class__.__name__} has no field named {", ".join(sorted(unknown))}')

        for name, field in self.get_fields():
            self.__dict__[name] = values.get(name, field.default)

    @classmethod
    def get_ordered_fields_name(cls) -> List[str]:
        return cls._meta.fields

    @classmethod
    def get_fields(cls) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, field) for each field.'''
        return [(_, getattr(cls, _)) for _ in cls.get_ordered_fields_name()]

    @classmethod
    def get_size(cls) -> int:
        '''the size MUST not be set but MUST be derived from the fields'''
        return cls._meta.size

    @classmethod
    def layout(cls) -> Dict[str, Tuple[int, int]]:
        return {name: (field.offset, field.size) for name, field in cls.get_fields()}

    @classmethod
    def unpack_values(cls, raw: bytes) -> List[Tuple[str, object]]:
        '''Decode each field at its offset, raw must be exactly get_size() bytes.'''
        if len(raw) != cls.get_size():
            raise ValueError(f'{cls.__name__} needs {cls.get_size()} bytes, got {len(raw)}')

        return [(name, field.unpack(field.slice(raw))) for name, field in cls.get_fields()]

    @classmethod
    def unpack(cls, raw: bytes) -> "Layout":
        return cls(**dict(cls.unpack_values(raw)))

    def pack(self) -> bytes:
        return b''.join(field.pack(getattr(self, name)) for name, field in self.get_fields())

    def as_row(self) -> Row:
        return Row((name, getattr(self, name)) for name in self.get_ordered_fields_name())

    def __repr__(self):
        msg = []
        for field_name in self.get_ordered_fields_name():
            msg.append('%s=%r' % (field_name, getattr(self, field_name)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __eq__(self, other):
        if not isinstance(other, Layout):
            return NotImplemented

        return self.__class__ is other.__class__ and self.as_row() == other.as_row()
