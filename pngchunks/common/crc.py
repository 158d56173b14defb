'''
We are implementing the CRC calculation used to protect each chunk.
'''
from typing import List


POLYNOMIAL = 0xedb88320


def make_crc_table() -> List[int]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            if c & 1:
                c = POLYNOMIAL ^ (c >> 1)
            else:
                c = c >> 1
        table.append(c)

    return table


CRC_TABLE = make_crc_table()


def checksum(data: bytes) -> int:
    """standard CRC methods with pre and post conditioning, as defined by ISO 3309 [ISO-3309]
    or ITU-T V.42 [ITU-V42]. The CRC polynomial employed is

      x^32+x^26+x^23+x^22+x^16+x^12+x^11+x^10+x^8+x^7+x^5+x^4+x^2+x+1

    The 32-bit CRC register is initialized to all 1's, and then the data from each byte is processed
    from the least significant bit (1) to the most significant bit (128). After all the data bytes are processed,
    the CRC register is inverted (its ones complement is taken). This value is transmitted (stored in the file)
    MSB first.

    See <https://www.w3.org/TR/PNG-Structure.html#CRC-algorithm>.
    """
    c = 0xffffffff
    for byte in data:
        c = CRC_TABLE[(c ^ byte) & 0xff] ^ (c >> 8)

    return c ^ 0xffffffff
