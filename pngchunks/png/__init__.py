'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html> and
is available a full test-suite with a lot of PNG images covering all
the possible cases at <http://www.schaik.com/pngsuite/>.

A PNG file is a fixed 8-byte signature followed by a sequence of chunks; here
we don't care about the meaning of the chunks (nor their order), we only want
to be able to read them, add new ones and remove existing ones leaving all the
others untouched.
'''
import logging
from collections.abc import Sequence
from typing import Iterable, List, Optional

from ..enum import ParsePhase
from ..exceptions import (
    ChunkException,
    ChunkNotFoundException,
    ChunkUnpackException,
    LengthTooLargeException,
    MagicException,
    NotEnoughBytesException,
    TruncatedStreamException,
)
from ..streams import Stream
from .chunk import PNGChunk
from .chunk_type import ChunkType


logger = logging.getLogger(__name__)

SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'


class ChunkList(Sequence):
    '''Read-only view over the chunks of a PNGFile, it reflects the
    modifications done via append_chunk() and remove_chunk().'''

    def __init__(self, chunks: List[PNGChunk]):
        self._chunks = chunks

    def __getitem__(self, item):
        return self._chunks[item]

    def __len__(self):
        return len(self._chunks)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._chunks!r})>'


class PNGFile(object):
    header = SIGNATURE

    def __init__(self, chunks: Optional[Iterable[PNGChunk]] = None):
        self._chunks: List[PNGChunk] = list(chunks) if chunks is not None else []

    @classmethod
    def unpack(cls, data) -> "PNGFile":
        '''Parse the whole stream: the signature is checked and then each chunk
        is sliced and decoded in turn. Nothing is returned if any of the chunk
        fails.

        A stream passed by the caller is left open, any other stream is
        built and closed here.'''
        if isinstance(data, Stream):
            return cls._unpack_stream(data)

        with Stream(data) as stream:
            return cls._unpack_stream(stream)

    @classmethod
    def _unpack_stream(cls, stream: Stream) -> "PNGFile":
        chunks = []

        phase = ParsePhase.AWAITING_SIGNATURE
        logger.debug('phase %s', phase)

        try:
            magic = stream.read(len(SIGNATURE))
            if magic != SIGNATURE:
                raise MagicException(magic)

            phase = ParsePhase.READING_RECORDS
            logger.debug('phase %s', phase)

            while not stream.at_end():
                offset = stream.tell()
                index = len(chunks)

                try:
                    raw = PNGChunk.slice_next(stream)
                except (NotEnoughBytesException, LengthTooLargeException) as e:
                    raise TruncatedStreamException(offset, chain=[f'chunks[{index}]']) from e

                try:
                    chunk = PNGChunk.unpack(raw)
                except ChunkException as e:
                    raise ChunkUnpackException(
                        index, offset, e, chain=e.chain + [f'chunks[{index}]']) from e

                logger.debug('chunk #%d %s at offset 0x%x', index, chunk.type, offset)
                chunks.append(chunk)
                stream.seek(offset + len(raw))
        except Exception:
            phase = ParsePhase.FAILED
            logger.debug('phase %s', phase)
            raise

        phase = ParsePhase.COMPLETE
        logger.debug('phase %s with %d chunks', phase, len(chunks))

        return cls(chunks)

    @classmethod
    def from_path(cls, path) -> "PNGFile":
        with Stream(str(path)) as stream:
            return cls.unpack(stream)

    def write(self, path) -> None:
        logger.debug('writing %d chunks to \'%s\'', len(self._chunks), path)
        with open(path, 'wb') as f:
            f.write(self.pack())

    def pack(self) -> bytes:
        return b''.join([SIGNATURE] + [chunk.pack() for chunk in self._chunks])

    @property
    def raw(self) -> bytes:
        return self.pack()

    @property
    def chunks(self) -> ChunkList:
        return ChunkList(self._chunks)

    def __len__(self):
        return len(self._chunks)

    def __iter__(self):
        return iter(self._chunks)

    def __eq__(self, other):
        if not isinstance(other, PNGFile):
            return NotImplemented

        return self._chunks == other._chunks

    def __repr__(self):
        return '<%s(%s)>' % (
            self.__class__.__name__,
            ','.join(str(chunk.type) for chunk in self._chunks),
        )

    def chunk_by_type(self, chunk_type: str) -> Optional[PNGChunk]:
        for chunk in self._chunks:
            if str(chunk.type) == chunk_type:
                return chunk

        return None

    def chunks_by_type(self, chunk_type: str) -> List[PNGChunk]:
        return [chunk for chunk in self._chunks if str(chunk.type) == chunk_type]

    def append_chunk(self, chunk: PNGChunk) -> None:
        logger.debug('appending %r', chunk)
        self._chunks.append(chunk)

    def remove_chunk(self, chunk_type: str) -> PNGChunk:
        '''Remove the first chunk with the given type and return it.'''
        for index, chunk in enumerate(self._chunks):
            if str(chunk.type) == chunk_type:
                logger.debug('removing chunk #%d %r', index, chunk)
                return self._chunks.pop(index)

        raise ChunkNotFoundException(chunk_type)


def parse(data) -> PNGFile:
    return PNGFile.unpack(data)


__all__ = [
    'SIGNATURE',
    'ChunkList',
    'ChunkType',
    'PNGChunk',
    'PNGFile',
    'parse',
]
