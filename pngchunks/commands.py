'''
Implementation of the operations exposed by scripts/pngsecret.py: each one loads
a PNG file, does its thing with the chunks and, if it's the case, writes the file back.
'''
import io
import logging

from PIL import Image, UnidentifiedImageError

from .png import PNGFile, PNGChunk
from .png.utils import iter_text_chunks, describe_chunk
from .exceptions import ChunkNotFoundException


logger = logging.getLogger(__name__)


def _write(png, file_path, output_file=None):
    path = output_file or file_path
    print(f'Writing out file to {path}')
    png.write(path)


def execute_encode(file_path, chunk_type, message, output_file=None):
    png = PNGFile.from_path(file_path)

    png.append_chunk(PNGChunk.from_text(chunk_type, message))

    _write(png, file_path, output_file)


def execute_decode(file_path, chunk_type):
    png = PNGFile.from_path(file_path)

    chunk = png.chunk_by_type(chunk_type)

    if chunk is None:
        raise ChunkNotFoundException(chunk_type)

    print(chunk.text())


def execute_remove(file_path, chunk_type, output_file=None):
    png = PNGFile.from_path(file_path)

    png.remove_chunk(chunk_type)

    _write(png, file_path, output_file)


def execute_identify_text(file_path):
    png = PNGFile.from_path(file_path)

    for index, chunk, text in iter_text_chunks(png.chunks):
        print(f'{index} - {chunk.type} - {text}')


def execute_print(file_path):
    png = PNGFile.from_path(file_path)
    raw = png.pack()

    print(f'{file_path}: {len(raw)} bytes, {len(png)} chunks')

    try:
        # open() only identifies the image, the pixels are not decoded
        with Image.open(io.BytesIO(raw)) as image:
            print(f'image: {image.format} {image.width}x{image.height} {image.mode}')
    except UnidentifiedImageError as e:
        logger.warning(f'the image cannot be identified: {e}')

    for idx, chunk in enumerate(png.chunks):
        print(f'[{idx:02d}] {describe_chunk(chunk)}')
