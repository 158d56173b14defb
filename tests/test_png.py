import pytest

from pngchunks import parse
from pngchunks.exceptions import (
    ChunkNotFoundException,
    ChunkUnpackException,
    InvalidCRCException,
    MagicException,
    PNGException,
    TruncatedStreamException,
)
from pngchunks.png import SIGNATURE, PNGFile, PNGChunk, ChunkList
from pngchunks.png.chunk_type import ChunkType
from pngchunks.streams import Stream


def testing_chunks():
    return [
        PNGChunk.from_text('FrSt', 'I am the first chunk'),
        PNGChunk.from_text('miDl', 'I am another chunk'),
        PNGChunk.from_text('LASt', 'I am the last chunk'),
    ]


@pytest.fixture
def testing_png():
    return PNGFile(testing_chunks())


def test_header():
    """Check header is right"""
    assert PNGFile.header == b'\x89PNG\x0d\x0a\x1a\x0a'
    assert SIGNATURE == PNGFile.header


def test_png_file(red_png):
    """Check unpacking a PNG file produced by Pillow is fine"""
    png = parse(red_png)

    assert str(png.chunks[0].type) == 'IHDR'
    assert str(png.chunks[-1].type) == 'IEND'
    assert png.chunk_by_type('IDAT') is not None

    assert png.chunks[0].is_critical()
    assert png.pack() == red_png


def test_png_from_chunks(testing_png):
    assert len(testing_png) == 3
    assert len(testing_png.chunks) == 3
    assert [str(_.type) for _ in testing_png] == ['FrSt', 'miDl', 'LASt']


def test_png_round_trip(testing_png):
    raw = testing_png.pack()

    assert raw.startswith(SIGNATURE)
    assert len(raw) == 8 + sum(_.size for _ in testing_chunks())

    png = PNGFile.unpack(raw)

    assert png == testing_png
    assert png.pack() == raw
    assert parse(png.raw) == png


def test_png_only_signature():
    png = parse(SIGNATURE)

    assert len(png) == 0
    assert png.pack() == SIGNATURE


def test_png_invalid_signature(testing_png):
    raw = bytearray(testing_png.pack())
    raw[1] = ord('Q')

    with pytest.raises(MagicException):
        parse(bytes(raw))

    with pytest.raises(MagicException):
        parse(b'\x89PNG')

    with pytest.raises(PNGException):
        parse(b'')


def test_png_truncated(testing_png):
    raw = testing_png.pack()

    # missing the last byte of the crc
    with pytest.raises(TruncatedStreamException) as e:
        parse(raw[:-1])

    assert e.value.offset == len(raw) - testing_png.chunks[-1].size
    assert e.value.chain == ['chunks[2]']

    # a few bytes after the last chunk
    with pytest.raises(TruncatedStreamException):
        parse(raw + b'\x00\x00')


def test_png_invalid_chunk(testing_png):
    raw = bytearray(testing_png.pack())
    # corrupt the data of the second chunk
    offset = len(SIGNATURE) + testing_png.chunks[0].size
    raw[offset + 8] ^= 0x01

    with pytest.raises(ChunkUnpackException) as e:
        parse(bytes(raw))

    assert e.value.index == 1
    assert e.value.offset == offset
    assert isinstance(e.value.error, InvalidCRCException)
    assert e.value.__cause__ is e.value.error
    assert e.value.chain == ['crc', 'chunks[1]']


def test_png_chunk_by_type(testing_png):
    chunk = testing_png.chunk_by_type('miDl')

    assert chunk.type == ChunkType.parse('miDl')
    assert chunk.text() == 'I am another chunk'

    assert testing_png.chunk_by_type('MIDL') is None
    assert testing_png.chunk_by_type('nope') is None


def test_png_append_chunk(testing_png):
    testing_png.append_chunk(PNGChunk.from_text('TeSt', 'Message'))

    chunk = testing_png.chunk_by_type('TeSt')

    assert chunk.text() == 'Message'
    assert len(testing_png) == 4
    assert testing_png.chunks[-1] is chunk


def test_png_remove_chunk(testing_png):
    removed = testing_png.remove_chunk('miDl')

    assert removed.text() == 'I am another chunk'
    assert testing_png.chunk_by_type('miDl') is None
    assert [str(_.type) for _ in testing_png] == ['FrSt', 'LASt']


def test_png_remove_chunk_not_found(testing_png):
    with pytest.raises(ChunkNotFoundException) as e:
        testing_png.remove_chunk('nope')

    assert e.value.chunk_type == 'nope'
    assert len(testing_png) == 3


def test_png_lookup_after_mutation(testing_png):
    hello = PNGChunk.from_text('teSt', 'hello')
    world = PNGChunk.from_text('teSt', 'world')

    testing_png.append_chunk(hello)
    assert testing_png.chunk_by_type('teSt') is hello

    testing_png.append_chunk(world)
    assert testing_png.chunks_by_type('teSt') == [hello, world]

    n_chunks = len(testing_png)
    testing_png.remove_chunk('teSt')

    assert testing_png.chunk_by_type('teSt') is world
    assert len(testing_png) == n_chunks - 1


def test_png_chunks_is_a_live_read_only_view(testing_png):
    chunks = testing_png.chunks

    assert isinstance(chunks, ChunkList)

    testing_png.append_chunk(PNGChunk.from_text('teSt', 'hello'))
    assert len(chunks) == 4

    testing_png.remove_chunk('FrSt')
    assert str(chunks[0].type) == 'miDl'

    with pytest.raises(TypeError):
        chunks[0] = PNGChunk.from_text('teSt', 'nope')

    assert not hasattr(chunks, 'append')


def test_png_append_to_real_file(red_png):
    png = parse(red_png)
    png.append_chunk(PNGChunk.from_text('ruSt', 'secret'))

    raw = png.pack()

    assert raw.startswith(red_png)
    assert parse(raw).chunk_by_type('ruSt').text() == 'secret'


def test_png_from_path_and_write(red_png_path, tmp_path):
    png = PNGFile.from_path(red_png_path)
    png.append_chunk(PNGChunk.from_text('ruSt', 'secret'))

    output = tmp_path / 'output.png'
    png.write(output)

    assert PNGFile.from_path(output) == png
    assert PNGFile.from_path(str(output)).chunk_by_type('ruSt').text() == 'secret'


@pytest.fixture
def closed_streams(monkeypatch):
    closed = []
    close = Stream.close

    def recording_close(self):
        closed.append(self)
        close(self)

    monkeypatch.setattr(Stream, 'close', recording_close)

    return closed


def test_png_unpack_path_closes_file(red_png_path, closed_streams):
    png = parse(str(red_png_path))

    assert str(png.chunks[0].type) == 'IHDR'
    assert len(closed_streams) == 1
    assert closed_streams[0].obj.closed


def test_png_unpack_path_closes_file_on_error(tmp_path, closed_streams):
    path = tmp_path / 'truncated.png'
    path.write_bytes(SIGNATURE + b'\x00')

    with pytest.raises(TruncatedStreamException):
        parse(str(path))

    assert len(closed_streams) == 1
    assert closed_streams[0].obj.closed


def test_png_unpack_leaves_caller_stream_open(testing_png, closed_streams):
    stream = Stream(testing_png.pack())

    assert PNGFile.unpack(stream) == testing_png
    assert closed_streams == []
    assert stream.at_end()
