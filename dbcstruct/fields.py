"""
A Field is "fundamental" datatype from the format point of view: something with a fixed
width that is directly packable/unpackable from a slice of a record.
"""
import struct

from .enum import Endianess, FieldType
from .meta import FieldBase


class StringOffset(int):
    '''Value of a STRING_OFFSET column: a byte offset into the string block.

    It's an int, but being its own type it's possible to tell it apart from
    the plain integers of a row and resolve it on demand.'''

    def __repr__(self):
        return f'{self.__class__.__name__}({int(self)})'


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, default=None, endianess=Endianess.LITTLE_ENDIAN):
        super().__init__()
        self.name = name
        self.default = default
        self.offset = None
        self.endianess = endianess

    def __repr__(self):
        return f'<{self.__class__.__name__}(name={self.name!r}, offset={self.offset!r}, size={self.size})>'

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def slice(self, raw: bytes) -> bytes:
        '''Return the bytes of this field out of the bytes of the whole record.'''
        offset = self.offset or 0
        return raw[offset:offset + self.size]

    def unpack(self, raw: bytes):
        raise NotImplementedError('you need to implement this in the subclass')

    def pack(self, value) -> bytes:
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    a single primitive to/from bytes.
    """
    field_type = None

    def __init__(self, field_type=None, default=0, **kw):
        if field_type is not None:
            self.field_type = field_type

        if self.field_type is None:
            raise ValueError(f'{self.__class__.__name__} needs a field type')

        super().__init__(default=default, **kw)

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.field_type.value)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def get_bitstring_format(self):
        fmt = self.field_type.bitstring_format
        return fmt if self.endianess == Endianess.LITTLE_ENDIAN else fmt.replace('le:', 'be:')

    def wrap(self, value):
        '''Hook to give the decoded primitive its python type.'''
        return value

    def unpack(self, raw):
        return self.wrap(struct.unpack(self.get_format(), raw)[0])

    def read(self, stream):
        '''Decode the field from the current position of a bitstring stream.'''
        return self.wrap(stream.read(self.get_bitstring_format()))

    def pack(self, value):
        return struct.pack(self.get_format(), value)


class Int32Field(StructField):
    field_type = FieldType.INT32


class UInt32Field(StructField):
    field_type = FieldType.UINT32


class Float32Field(StructField):
    field_type = FieldType.FLOAT32

    def __init__(self, default=0.0, **kw):
        super().__init__(default=default, **kw)


class Float64Field(StructField):
    field_type = FieldType.FLOAT64

    def __init__(self, default=0.0, **kw):
        super().__init__(default=default, **kw)


class StringOffsetField(StructField):
    field_type = FieldType.STRING_OFFSET

    def wrap(self, value):
        return StringOffset(value)


def field_for_type(field_type: FieldType, **kw) -> StructField:
    return _TYPE_TO_FIELD[field_type](**kw)


_TYPE_TO_FIELD = {
    FieldType.INT32: Int32Field,
    FieldType.UINT32: UInt32Field,
    FieldType.FLOAT32: Float32Field,
    FieldType.FLOAT64: Float64Field,
    FieldType.STRING_OFFSET: StringOffsetField,
}


class BytesField(Field):
    """Represent a contiguous chunk of bytes of fixed length."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"BytesField must have 'n' or 'default' indicated!")

        self.length = n or len(kw['default'])

        kw.setdefault('default', b'\x00' * self.length)

        super().__init__(**kw)

    def __len__(self):
        return self.length

    def _get_size(self):
        return self.length

    def unpack(self, raw):
        return bytes(raw)

    def pack(self, value):
        if len(value) != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        return bytes(value)


class ArrayField(Field):
    '''Un/Pack a fixed number of consecutive elements of the same field.

    The value is a tuple, it's the way the records keep per-slot columns
    (like the reagents of a spell) in a single field.
    '''

    def __init__(self, element: StructField, n: int, **kw):
        if not isinstance(n, int) or n <= 0:
            raise ValueError('n is \'%s\' must be a positive integer' % n)

        self.element = element
        self.n = n

        kw.setdefault('default', (element.default,) * n)

        super().__init__(**kw)

    def __len__(self):
        return self.n

    def _get_size(self):
        return self.element.size * self.n

    def unpack(self, raw):
        size = self.element.size
        return tuple(self.element.unpack(raw[_:_ + size]) for _ in range(0, size * self.n, size))

    def pack(self, value):
        if len(value) != self.n:
            raise ValueError(f'{self.__class__.__name__} needs exactly {self.n} elements, got {len(value)}')

        return b''.join(self.element.pack(_) for _ in value)
