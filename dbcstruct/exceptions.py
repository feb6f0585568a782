class DBCException(Exception):
    '''Base class to extend in order to throw exception in dbcstruct.

    Every subclass keeps the context of the failure as attributes so that
    the caller can diagnose the problem without reading the file again.
    '''
    pass


class TruncatedInputException(DBCException):
    '''Fewer bytes available than the current phase requires.'''

    def __init__(self, source, offset, expected, actual):
        self.source = source
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'{source}: expected {expected} bytes at offset {offset}, got only {actual}')


class SizeMismatchException(DBCException):
    '''The declared record size doesn't match the one found in the header:
    the file and the layout disagree on the format version.'''

    def __init__(self, source, expected, actual):
        self.source = source
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'the DBC [{source}] is not supported: header record size is [{expected}], got [{actual}]')


class SchemaNotFoundException(DBCException):

    def __init__(self, name):
        self.name = name
        super().__init__(f'schema not found: {name!r}')


class UnknownFieldTypeException(DBCException):

    def __init__(self, schema, field, field_type):
        self.schema = schema
        self.field = field
        self.field_type = field_type
        super().__init__(
            f'unknown field type {field_type!r} for column {field!r} in schema {schema!r}')


class DanglingStringOffsetException(DBCException):

    def __init__(self, offset):
        self.offset = offset
        super().__init__(f'no string at offset {offset} of the string block')


class MalformedTextException(DBCException):

    def __init__(self, offset, reason):
        self.offset = offset
        self.reason = reason
        super().__init__(f'malformed string at offset {offset} of the string block: {reason}')


class MagicException(DBCException):

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f'magic mismatch: expected {expected!r}, got {actual!r}')


class PhaseException(DBCException):
    '''A phase was requested out of order: phases only move forward.'''

    def __init__(self, current, requested, message=None):
        self.current = current
        self.requested = requested
        super().__init__(message or f'cannot move to phase {requested.name} from {current.name}')
