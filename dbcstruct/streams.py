import io
import logging
import os

from .exceptions import TruncatedInputException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file object to
    uniform its properties: mainly we need a read that fails loudly
    when the data is shorter than expected.

    It's meant to be used as a context manager so that the underlying
    file is released on every exit path.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self.obj = obj
        self.name = obj if isinstance(obj, str) else '<bytes>'

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of source to use' % obj.__class__.__name__)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.obj.close()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name})>'

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def seek(self, offset: int):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset)

        return self

    def read_exactly(self, size: int) -> bytes:
        '''Read size bytes or raise TruncatedInputException.'''
        offset = self.obj.tell()
        data = self.obj.read(size)

        if len(data) != size:
            raise TruncatedInputException(self.name, offset, size, len(data))

        return data
