'''
Header of a DBC file: four little-endian unsigned integers giving the
dimensions of what follows

    record_count      number of records
    field_count       number of fields of each record
    record_size       size in bytes of each record
    string_block_size size in bytes of the string block at the end of the file

Some producers prepend a four bytes magic, use WDBCHeader for them.
'''
import logging

from . import fields
from .core import Layout
from .enum import Compliant
from .exceptions import MagicException, TruncatedInputException


logger = logging.getLogger(__name__)


class Header(Layout):
    record_count      = fields.UInt32Field()
    field_count       = fields.UInt32Field()
    record_size       = fields.UInt32Field()
    string_block_size = fields.UInt32Field()


class WDBCHeader(Layout):
    '''The header with the magic in front: the magic is checked here and
    ignored by everything else.'''
    magic             = fields.BytesField(default=b'WDBC')
    record_count      = fields.UInt32Field()
    field_count       = fields.UInt32Field()
    record_size       = fields.UInt32Field()
    string_block_size = fields.UInt32Field()

    def validate(self):
        return self.magic == self.__class__.magic.default


def decode_header(data: bytes, layout=Header, source='<bytes>', compliant=Compliant.MAGIC) -> Header:
    '''Decode the header from the first bytes of data.

    Only layout.get_size() bytes are used, the caller advances its
    cursor by that amount.'''
    size = layout.get_size()
    if len(data) < size:
        raise TruncatedInputException(source, 0, size, len(data))

    header = layout.unpack(data[:size])

    if hasattr(header, 'validate') and not header.validate():
        logger.warning('magic for \'%s\' failed: %r' % (source, header.magic))
        if compliant & Compliant.MAGIC:
            raise MagicException(layout.magic.default, header.magic)

    logger.debug('decoded %r from %s' % (header, source))

    return header
