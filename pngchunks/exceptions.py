class PNGChunksException(Exception):
    '''Base class to extend in order to throw exception in pngchunks.

    It takes as keyword argument the chain of the layers that
    caused the exception (the innermost first).
    '''

    def __init__(self, *args, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(*args)


class ChunkTypeException(PNGChunksException):
    pass


class InvalidLengthException(ChunkTypeException):

    def __init__(self, length, **kwargs):
        self.length = length
        super().__init__(f'chunk type must be exactly 4 bytes long, got {length}', **kwargs)


class InvalidCharacterException(ChunkTypeException):

    def __init__(self, index, byte, **kwargs):
        self.index = index
        self.byte = byte
        super().__init__(
            f'invalid byte 0x{byte:02x} at index {index}: '
            'must be an ASCII letter (65 <= v <= 90 or 97 <= v <= 122)', **kwargs)


class ChunkException(PNGChunksException):
    pass


class LengthTooLargeException(ChunkException):

    def __init__(self, required, available, **kwargs):
        self.required = required
        self.available = available
        super().__init__(f'length {required} exceeds the available {available}', **kwargs)


class NotEnoughBytesException(ChunkException):

    def __init__(self, available, minimum, **kwargs):
        self.available = available
        self.minimum = minimum
        super().__init__(f'{available} bytes available, a chunk needs at least {minimum}', **kwargs)


class RemainingBytesException(ChunkException):

    def __init__(self, count, **kwargs):
        self.count = count
        super().__init__(f'{count} bytes remaining after the chunk, length is likely incorrect', **kwargs)


class InvalidCRCException(ChunkException):

    def __init__(self, stored, computed, **kwargs):
        self.stored = stored
        self.computed = computed
        super().__init__(f'stored CRC 0x{stored:08x} does not match computed CRC 0x{computed:08x}', **kwargs)


class DataNotUTF8Exception(ChunkException):
    pass


class InvalidChunkTypeException(ChunkException):
    '''Wraps a ChunkTypeException raised while decoding a chunk.'''

    def __init__(self, error, **kwargs):
        self.error = error
        super().__init__(f'invalid chunk type: {error}', **kwargs)


class PNGException(PNGChunksException):
    pass


class MagicException(PNGException):

    def __init__(self, found, **kwargs):
        self.found = found
        super().__init__(f'signature mismatch, found {found!r}', **kwargs)


class TruncatedStreamException(PNGException):

    def __init__(self, offset, **kwargs):
        self.offset = offset
        super().__init__(f'stream truncated at offset 0x{offset:x}', **kwargs)


class ChunkNotFoundException(PNGException):

    def __init__(self, chunk_type, **kwargs):
        self.chunk_type = chunk_type
        super().__init__(f'no chunk with type {chunk_type!r}', **kwargs)


class ChunkUnpackException(PNGException):
    '''Wraps a ChunkException raised for the chunk at a given position of the stream.'''

    def __init__(self, index, offset, error, **kwargs):
        self.index = index
        self.offset = offset
        self.error = error
        super().__init__(f'chunk #{index} at offset 0x{offset:x}: {error}', **kwargs)
