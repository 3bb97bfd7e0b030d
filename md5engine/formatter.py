'''
Hex rendering and parsing of 16-byte digests.
'''

import string

from md5engine.constants import DIGEST_SIZE


_HEX_CHARS = set(string.hexdigits)


def to_hex(digest: bytes) -> str:
    '''
    Render a digest as 32 lowercase hexadecimal characters, two per byte, in byte order.

    >>> to_hex(bytes(range(16)))
    '000102030405060708090a0b0c0d0e0f'
    '''
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f'digest must be {DIGEST_SIZE} bytes, got {len(digest)}')
    return bytes(digest).hex()


def from_hex(text: str) -> bytes:
    '''
    Parse a hex digest (e.g. a target supplied by a caller) back into 16 bytes.

    Parameters:
    -----------
    text : str
        32 hexadecimal characters, either case. Surrounding whitespace is ignored.

    Returns:
    --------
    bytes
        The 16-byte digest.
    '''
    s = text.strip()
    if len(s) != 2 * DIGEST_SIZE or not all(ch in _HEX_CHARS for ch in s):
        raise ValueError(f'expected {2 * DIGEST_SIZE} hex characters, got {text!r}')
    return bytes.fromhex(s)
