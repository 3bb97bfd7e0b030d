'''
32-bit word helpers.

bytes_to_words / words_to_bytes are the only two functions that know MD5 is
little-endian; everything else works on plain ints.
'''

from typing import Iterable

from md5engine.constants import WORD_MASK


def bytes_to_words(buf: bytes | bytearray | memoryview) -> tuple[int, ...]:
    '''
    Split a byte buffer into unsigned 32-bit little-endian words.

    Parameters:
    -----------
    buf : bytes | bytearray | memoryview
        Buffer whose length is a multiple of 4.

    Returns:
    --------
    tuple[int, ...]
        One int per 4-byte group, in buffer order.
    '''
    if len(buf) % 4 != 0:
        raise ValueError(f'buffer length must be a multiple of 4, got {len(buf)}')
    return tuple(int.from_bytes(buf[i : i + 4], byteorder = 'little') for i in range(0, len(buf), 4))


def words_to_bytes(words: Iterable[int]) -> bytes:
    '''
    Concatenate 32-bit words as 4 little-endian bytes each.
    '''
    out = bytearray()
    for w in words:
        if not 0 <= w <= WORD_MASK:
            raise ValueError(f'word out of 32-bit range: {w:#x}')
        out += w.to_bytes(length = 4, byteorder = 'little')
    return bytes(out)


def left_rotate(x: int, n: int) -> int:
    '''
    Rotate the 32-bit integer `x` left by `n` bits; bits falling off the
    left end wrap around to the right.

    >>> hex(left_rotate(0x80000001, 1))
    '0x3'
    '''
    x &= WORD_MASK
    n &= 31
    return ((x << n) | (x >> (32 - n))) & WORD_MASK


def bit_not(x: int) -> int:
    # ~x is infinite precision in Python, emulate 32 bits
    return WORD_MASK - (x & WORD_MASK)
