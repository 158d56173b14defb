import io
import logging


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file object to
    uniform its properties: mainly we need to read ahead without
    consuming and to know how many bytes are left.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj
        self.history = []

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to stream' % self._type.__name__)

        init_method()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes

    def close(self):
        self.obj.close()

    def seek(self, offset, whence=io.SEEK_SET):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset, whence)

        return self

    def tell(self):
        return self.obj.tell()

    def read(self, size=-1):
        return self.obj.read(size)

    def peek(self, size):
        '''Read at most "size" bytes without moving the position.'''
        self.save()
        try:
            return self.obj.read(size)
        finally:
            self.restore()

    def remaining(self):
        '''How many bytes there are from the actual position to the end.'''
        self.save()
        try:
            end = self.obj.seek(0, io.SEEK_END)
        finally:
            self.restore()

        return end - self.obj.tell()

    def at_end(self):
        return self.remaining() == 0

    def save(self):
        self.history.append(self.obj.tell())

    def restore(self):
        old_seek = self.history.pop()
        self.obj.seek(old_seek)
