import logging
import struct

from ..common import crc
from ..exceptions import (
    ChunkTypeException,
    DataNotUTF8Exception,
    InvalidChunkTypeException,
    InvalidCRCException,
    LengthTooLargeException,
    NotEnoughBytesException,
    RemainingBytesException,
)
from ..streams import Stream
from .chunk_type import ChunkType


logger = logging.getLogger(__name__)

# big endian, as every integer in the format
LENGTH_FORMAT = '>I'
CRC_FORMAT = '>I'

LENGTH_SIZE = struct.calcsize(LENGTH_FORMAT)
CRC_SIZE = struct.calcsize(CRC_FORMAT)
# length + type + crc, i.e. a chunk without data
MIN_CHUNK_SIZE = LENGTH_SIZE + ChunkType.SIZE + CRC_SIZE
MAX_LENGTH = (1 << 31) - 1


class PNGChunk(object):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    Instances are immutable: the length and the crc are derived from type and data
    when the chunk is built.
    '''

    def __init__(self, chunk_type: ChunkType, data: bytes):
        data = bytes(data)

        if len(data) > MAX_LENGTH:
            raise LengthTooLargeException(len(data), MAX_LENGTH)

        self._type = chunk_type
        self._data = data
        self._crc = crc.checksum(chunk_type.raw + data)

    @classmethod
    def _from_fields(cls, chunk_type: ChunkType, data: bytes, crc_value: int) -> "PNGChunk":
        '''Build a chunk whose crc has been already verified against type and data.'''
        chunk = cls.__new__(cls)
        chunk._type = chunk_type
        chunk._data = data
        chunk._crc = crc_value

        return chunk

    @classmethod
    def from_text(cls, chunk_type: str, text: str) -> "PNGChunk":
        '''Build a chunk from the textual type and a message, the errors of the
        type parsing are propagated as they are.'''
        chunk_type = ChunkType.parse(chunk_type)

        try:
            data = text.encode('utf-8')
        except UnicodeEncodeError as e:
            raise DataNotUTF8Exception(f'message for chunk {chunk_type} is not encodable as UTF-8: {e}') from e

        return cls(chunk_type, data)

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def type(self) -> ChunkType:
        return self._type

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def crc(self) -> int:
        return self._crc

    @property
    def size(self) -> int:
        return MIN_CHUNK_SIZE + self.length

    def is_critical(self) -> bool:
        return self._type.is_critical()

    def text(self) -> str:
        try:
            return self._data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DataNotUTF8Exception(f'data of chunk {self._type} is not valid UTF-8: {e}') from e

    def __eq__(self, other):
        if not isinstance(other, PNGChunk):
            return NotImplemented

        return (self.length, self._type, self._data, self._crc) == \
            (other.length, other._type, other._data, other._crc)

    def __hash__(self):
        return hash((self._type, self._data))

    def __repr__(self):
        return '<%s(length=%d,type=%s,crc=0x%08x)>' % (
            self.__class__.__name__,
            self.length,
            self._type,
            self._crc,
        )

    def __str__(self):
        msg = ''
        for field_name in ('length', 'type', 'data', 'crc'):
            msg += '%s: %r\n' % (field_name, getattr(self, field_name))
        return msg

    def pack(self) -> bytes:
        '''Encode the chunk into its binary representation, that is always
        12 bytes longer than its data.'''
        return b''.join([
            struct.pack(LENGTH_FORMAT, self.length),
            self._type.raw,
            self._data,
            struct.pack(CRC_FORMAT, self._crc),
        ])

    @property
    def raw(self) -> bytes:
        return self.pack()

    @classmethod
    def slice_next(cls, stream: Stream) -> bytes:
        '''Return the bytes of the chunk starting at the actual position of the stream
        without decoding them and without consuming the stream.

        Only the length field is read, so it's possible to walk a stream
        containing more chunks one at the time.'''
        available = stream.remaining()

        if available < MIN_CHUNK_SIZE:
            raise NotEnoughBytesException(available, MIN_CHUNK_SIZE)

        length, = struct.unpack(LENGTH_FORMAT, stream.peek(LENGTH_SIZE))
        required = MIN_CHUNK_SIZE + length

        if required > available:
            raise LengthTooLargeException(required, available)

        logger.debug('slicing chunk of %d bytes at offset %d', required, stream.tell())

        return stream.peek(required)

    @classmethod
    def unpack(cls, raw: bytes) -> "PNGChunk":
        '''Decode a chunk from bytes that must contain exactly one chunk,
        validating the CRC.'''
        raw = bytes(raw)
        available = len(raw)

        if available < MIN_CHUNK_SIZE:
            raise NotEnoughBytesException(available, MIN_CHUNK_SIZE)

        length, = struct.unpack_from(LENGTH_FORMAT, raw)

        if length > MAX_LENGTH:
            raise LengthTooLargeException(length, MAX_LENGTH)

        required = MIN_CHUNK_SIZE + length

        if required > available:
            raise LengthTooLargeException(required, available)

        if required < available:
            raise RemainingBytesException(available - required)

        # the CRC covers type and data so it's checked before interpreting them
        protected = raw[LENGTH_SIZE:required - CRC_SIZE]
        stored, = struct.unpack_from(CRC_FORMAT, raw, required - CRC_SIZE)
        computed = crc.checksum(protected)

        if computed != stored:
            raise InvalidCRCException(stored, computed, chain=['crc'])

        try:
            chunk_type = ChunkType.from_raw_bytes(protected[:ChunkType.SIZE])
        except ChunkTypeException as e:
            raise InvalidChunkTypeException(e, chain=e.chain + ['type']) from e

        chunk = cls._from_fields(chunk_type, protected[ChunkType.SIZE:], stored)

        logger.debug('unpacked %r', chunk)

        return chunk
