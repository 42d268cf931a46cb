import io
import logging

from .exceptions import TruncatedRead


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file object to
    uniform its properties: mainly we need a read that fails loudly
    when the data is not enough.'''
    def __init__(self, obj, flags='rb'):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.flags = flags
        self.obj = obj
        self._owned = False

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self._type.__name__)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        # a file object passed from outside is not ours to close
        if self._owned:
            self.obj.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, self.flags)
        self._owned = True

    def init_PosixPath(self):
        self.obj = str(self.obj)
        self.init_str()

    init_WindowsPath = init_PosixPath

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes

    def init_Stream(self):
        self.obj = self.obj.obj

    def init_file(self):
        '''Anything else must behave like a binary file'''
        for method in ('read', 'seek', 'tell'):
            if not hasattr(self.obj, method):
                raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset)

    def read_exact(self, n):
        '''Read exactly n bytes or fail with TruncatedRead.'''
        data = self.obj.read(n)
        if len(data) != n:
            raise TruncatedRead('expected %d bytes at offset %d, got %d' % (
                n, self.obj.tell() - len(data), len(data)))

        return data

    def read_all(self):
        '''Returns all the data from the actual position to the end.'''
        return self.obj.read()

    def remaining(self):
        '''How many bytes are left from the actual position.'''
        position = self.obj.tell()
        end = self.obj.seek(0, io.SEEK_END)
        self.obj.seek(position)

        return end - position

    def write(self, data):
        return self.obj.write(data)
