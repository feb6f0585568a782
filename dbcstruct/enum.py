from enum import Enum, Flag, IntEnum, auto


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE       = 0
    MAGIC      = 1 << 0
    TERMINATOR = 1 << 1


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldType(Enum):
    '''Primitive types a DBC column can have.

    The value is the struct format character, the width is derived from it.'''
    INT32         = 'i'
    UINT32        = 'I'
    FLOAT32       = 'f'
    FLOAT64       = 'd'
    STRING_OFFSET = 'L'

    @property
    def size(self) -> int:
        return 8 if self is FieldType.FLOAT64 else 4

    @property
    def bitstring_format(self) -> str:
        return _BITSTRING_FORMATS[self]


_BITSTRING_FORMATS = {
    FieldType.INT32:         'intle:32',
    FieldType.UINT32:        'uintle:32',
    FieldType.FLOAT32:       'floatle:32',
    FieldType.FLOAT64:       'floatle:64',
    FieldType.STRING_OFFSET: 'uintle:32',
}


class ReaderPhase(IntEnum):
    '''Phases of a read session, in the order they consume the file'''
    UNOPENED     = 0
    HEADER_READ  = auto()
    RECORDS_READ = auto()
    STRINGS_READ = auto()
