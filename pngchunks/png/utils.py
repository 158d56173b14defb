import logging
from typing import Iterable, Iterator, Tuple

from ..exceptions import DataNotUTF8Exception
from .chunk import PNGChunk


logger = logging.getLogger(__name__)


def iter_text_chunks(chunks: Iterable[PNGChunk]) -> Iterator[Tuple[int, PNGChunk, str]]:
    '''Yield the chunks whose data is non-empty UTF-8 text, this is a cheap
    way of finding messages hidden into a file.'''
    for index, chunk in enumerate(chunks):
        try:
            text = chunk.text()
        except DataNotUTF8Exception:
            logger.debug(f'chunk #{index} {chunk.type} is not text')
            continue

        if text:
            yield index, chunk, text


def describe_chunk(chunk: PNGChunk) -> str:
    chunk_type = chunk.type

    return '%s length=%d crc=0x%08x %s %s %s' % (
        chunk_type,
        chunk.length,
        chunk.crc,
        'critical' if chunk_type.is_critical() else 'ancillary',
        'public' if chunk_type.is_public() else 'private',
        'safe-to-copy' if chunk_type.is_safe_to_copy() else 'unsafe-to-copy',
    )
