"""
The string block is a packed run of NUL terminated UTF-8 strings; the records
reference a string by the byte offset where it begins, relative to the start
of the block.
"""
import logging
from collections.abc import Mapping

from .enum import Compliant
from .exceptions import DanglingStringOffsetException, MalformedTextException


logger = logging.getLogger(__name__)


class StringTable(Mapping):
    """Read-only mapping offset -> string built from a string block."""

    def __init__(self, strings=None):
        self._strings = dict(strings or {})

    def __getitem__(self, offset):
        return self._strings[offset]

    def __iter__(self):
        return iter(self._strings)

    def __len__(self):
        return len(self._strings)

    def __repr__(self):
        return f'<{self.__class__.__name__}({len(self)} strings)>'

    def lookup(self, offset: int) -> str:
        try:
            return self._strings[offset]
        except KeyError:
            raise DanglingStringOffsetException(offset) from None


def iter_strings(data: bytes, compliant=Compliant.TERMINATOR):
    '''It yields the couples (offset, string) of the block.

    The scan is done on the raw bytes so the offsets are byte positions
    even when the strings contain multi-byte characters.'''
    offset = 0
    while (end := data.find(b'\x00', offset)) != -1:
        try:
            text = data[offset:end].decode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedTextException(offset, e.reason) from e

        yield offset, text

        offset = end + 1

    if offset < len(data):
        logger.warning('%d bytes at offset %d of the string block are not terminated' % (len(data) - offset, offset))
        if compliant & Compliant.TERMINATOR:
            raise MalformedTextException(offset, 'missing NUL terminator')


def build_string_table(data: bytes, compliant=Compliant.TERMINATOR) -> StringTable:
    table = StringTable(iter_strings(data, compliant=compliant))
    logger.debug('built string table with %d strings from %d bytes' % (len(table), len(data)))

    return table
