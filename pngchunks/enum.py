from enum import Enum, Flag, auto


class ParsePhase(Enum):
    '''Enum to state the actual phase of the parsing of a PNG stream'''
    AWAITING_SIGNATURE = 0
    READING_RECORDS    = auto()
    COMPLETE           = auto()
    FAILED             = auto()


class ChunkProperty(Flag):
    '''The properties encoded in the case of each letter of a chunk type'''
    NONE         = 0
    CRITICAL     = 1 << 0
    PUBLIC       = 1 << 1
    RESERVED_BIT = 1 << 2
    SAFE_TO_COPY = 1 << 3
