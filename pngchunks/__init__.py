"""
# PNG chunks for humans.

A PNG file is a signature followed by a sequence of typed chunks, each one
protected by a CRC-32: this package allows to read them, to add new ones
(for example to hide a message into an image) and to remove them, leaving
the rest of the file byte-for-byte untouched.

Two basic main operations are defined for the file format and its sub components:

 1. unpack(): reading the binary data and build a high-level representation of that.
    The chunks are walked one at the time: first the span of the next chunk
    is sliced from the stream (reading only its length), then the slice is
    decoded and its CRC verified.

 2. pack(): encode the high-level representation into binary data.

The parsing of a file can be in one of the following phases

 1. AWAITING_SIGNATURE
 2. READING_RECORDS
 3. COMPLETE
 4. FAILED

and it's all-or-nothing: if any chunk is invalid an exception is raised and
no partial file is returned.
"""
from .png import (
    SIGNATURE,
    ChunkList,
    ChunkType,
    PNGChunk,
    PNGFile,
    parse,
)
