'''
Fixed MD5 tables (RFC 1321).

Pure data: per-step rotation amounts, per-step additive constants,
the initial hash state and the block / digest sizes.
'''

import numpy as np


# standard MD5 block and digest sizes (in bytes)
BLOCK_SIZE = 64         # 512 bits
DIGEST_SIZE = 16        # 128 bits
LENGTH_FIELD_SIZE = 8   # 64-bit message length, in bits
WORD_MASK = 0xffffffff

# initial 128-bit state (A, B, C, D)
IV = (0x67452301, 0xefcdab89, 0x98badcfe, 0x10325476)


# left-rotation amounts for each of the 64 steps
# each group of 16 corresponds to one round
SHIFTS = (
    7, 12, 17, 22, 7, 12, 17, 22, 7, 12, 17, 22, 7, 12, 17, 22,
    5,  9, 14, 20, 5,  9, 14, 20, 5,  9, 14, 20, 5,  9, 14, 20,
    4, 11, 16, 23, 4, 11, 16, 23, 4, 11, 16, 23, 4, 11, 16, 23,
    6, 10, 15, 21, 6, 10, 15, 21, 6, 10, 15, 21, 6, 10, 15, 21,
)


# additive constant for each step, floor(2^32 * |sin(i + 1)|)
SINES = (
    0xd76aa478, 0xe8c7b756, 0x242070db, 0xc1bdceee, 0xf57c0faf, 0x4787c62a, 0xa8304613, 0xfd469501,
    0x698098d8, 0x8b44f7af, 0xffff5bb1, 0x895cd7be, 0x6b901122, 0xfd987193, 0xa679438e, 0x49b40821,
    0xf61e2562, 0xc040b340, 0x265e5a51, 0xe9b6c7aa, 0xd62f105d, 0x02441453, 0xd8a1e681, 0xe7d3fbc8,
    0x21e1cde6, 0xc33707d6, 0xf4d50d87, 0x455a14ed, 0xa9e3e905, 0xfcefa3f8, 0x676f02d9, 0x8d2a4c8a,
    0xfffa3942, 0x8771f681, 0x6d9d6122, 0xfde5380c, 0xa4beea44, 0x4bdecfa9, 0xf6bb4b60, 0xbebfbc70,
    0x289b7ec6, 0xeaa127fa, 0xd4ef3085, 0x04881d05, 0xd9d4d039, 0xe6db99e5, 0x1fa27cf8, 0xc4ac5665,
    0xf4292244, 0x432aff97, 0xab9423a7, 0xfc93a039, 0x655b59c3, 0x8f0ccc92, 0xffeff47d, 0x85845dd1,
    0x6fa87e4f, 0xfe2ce6e0, 0xa3014314, 0x4e0811a1, 0xf7537e82, 0xbd3af235, 0x2ad7d2bb, 0xeb86d391,
)


def derive_sines() -> list[int]:
    '''
    Recompute the additive constants from the sine function.

    Returns:
    --------
    list[int]
        64 values, floor(2^32 * |sin(i + 1)|) for i in 0..63.
    '''
    sines = np.abs(np.sin(np.arange(64) + 1))          # absolute sine values for integers 1..64
    return [int(x) for x in np.floor(2 ** 32 * sines)]  # scale each value (0-1) to the 32-bit range
