'''
# Chunk type

A chunk type is a 4-byte code where each byte is restricted to the uppercase and
lowercase ASCII letters (A-Z and a-z, or 65-90 and 97-122 decimal). The case of
each letter is significant: bit 5 (value 32) of each byte encodes a property
of the chunk.

 1. ancillary bit (first byte): 0 (uppercase) = critical, 1 (lowercase) = ancillary
 2. private bit (second byte): 0 (uppercase) = public, 1 (lowercase) = private
 3. reserved bit (third byte)
 4. safe-to-copy bit (fourth byte): 0 (uppercase) = unsafe to copy, 1 (lowercase) = safe to copy

See <http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions>.
'''
from ..enum import ChunkProperty
from ..exceptions import (
    InvalidLengthException,
    InvalidCharacterException,
)


PROPERTY_BIT = 1 << 5


def is_letter(value: int) -> bool:
    return 65 <= value <= 90 or 97 <= value <= 122


def is_bit_zero(value: int, mask: int = PROPERTY_BIT) -> bool:
    return value & mask == 0


class ChunkType(object):
    '''Immutable 4-letter code; the properties are derived from the bytes
    every time they are asked.'''
    SIZE = 4

    __slots__ = ('_raw',)

    def __init__(self, raw: bytes):
        raw = bytes(raw)

        if len(raw) != self.SIZE:
            raise InvalidLengthException(len(raw))

        for index, value in enumerate(raw):
            if not is_letter(value):
                raise InvalidCharacterException(index, value)

        self._raw = raw

    @classmethod
    def parse(cls, text: str) -> "ChunkType":
        # undecodable bytes coming from sys.argv are escaped as surrogates,
        # here they become bytes again and fail the letter check
        try:
            raw = text.encode('utf-8', 'surrogateescape')
        except UnicodeEncodeError as e:
            raise InvalidCharacterException(e.start, ord(text[e.start])) from e

        return cls(raw)

    @classmethod
    def from_raw_bytes(cls, raw: bytes) -> "ChunkType":
        return cls(raw)

    @property
    def raw(self) -> bytes:
        return self._raw

    def __bytes__(self):
        return self._raw

    def __str__(self):
        return self._raw.decode('ascii')

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self)

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._raw == other._raw

    def __hash__(self):
        return hash(self._raw)

    def is_critical(self) -> bool:
        return is_bit_zero(self._raw[0])

    def is_public(self) -> bool:
        return is_bit_zero(self._raw[1])

    def is_reserved_bit_valid(self) -> bool:
        # NOTE: true for a lowercase third letter
        return not is_bit_zero(self._raw[2])

    def is_safe_to_copy(self) -> bool:
        return not is_bit_zero(self._raw[3])

    def properties(self) -> ChunkProperty:
        result = ChunkProperty.NONE
        for flag, predicate in (
            (ChunkProperty.CRITICAL, self.is_critical),
            (ChunkProperty.PUBLIC, self.is_public),
            (ChunkProperty.RESERVED_BIT, self.is_reserved_bit_valid),
            (ChunkProperty.SAFE_TO_COPY, self.is_safe_to_copy),
        ):
            if predicate():
                result |= flag

        return result
