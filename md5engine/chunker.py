'''
Padding and chunking of a message into 512-bit blocks.

    message → [content | 0x80 | 0x00 ... | 64-bit bit length (LE)] → 64-byte blocks

The padded stream always ends exactly on a block boundary. When the tail of
the message leaves fewer than 9 free bytes (1 terminator + 8 length bytes) in
its last 64-byte window, an extra all-padding block carries the length field.
'''

from typing import Iterator

from md5engine.constants import BLOCK_SIZE, LENGTH_FIELD_SIZE
from md5engine.words import bytes_to_words, words_to_bytes


def block_count(message_length: int) -> int:
    '''
    Number of 64-byte blocks the padded form of a `message_length`-byte message occupies.

    >>> [block_count(n) for n in (0, 55, 56, 64, 119, 120)]
    [1, 1, 2, 2, 2, 3]
    '''
    return (message_length + LENGTH_FIELD_SIZE) // BLOCK_SIZE + 1


def encode_length(message_length: int) -> bytes:
    '''
    Encode the bit length of a message as the 8-byte little-endian length field.

    Parameters:
    -----------
    message_length : int
        Message length in bytes. Must be below 2^61 so that the bit length fits 64 bits.

    Returns:
    --------
    bytes
        All 8 bytes of the bit length, least significant first.

    Raises:
    -------
    OverflowError
        When the bit length does not fit in 64 bits. MD5 is undefined there and
        the value is never truncated.
    '''
    return (message_length * 8).to_bytes(length = LENGTH_FIELD_SIZE, byteorder = 'little')


def final_blocks(tail: bytes, message_length: int) -> Iterator[tuple[int, ...]]:
    '''
    Pad the trailing partial block of a message and yield the last one or two blocks.

    Parameters:
    -----------
    tail : bytes
        The last message_length % 64 bytes of the message.

    message_length : int
        Length of the whole message in bytes, written into the length field.
    '''
    assert len(tail) == message_length % BLOCK_SIZE

    # append 1 bit (0x80); the remainder is zeros up to the length field
    buffer = bytearray(tail) + b'\x80'

    # if not enough room in this block for the length field, flush now
    if len(buffer) + LENGTH_FIELD_SIZE > BLOCK_SIZE:
        buffer += bytes(BLOCK_SIZE - len(buffer))
        yield bytes_to_words(buffer)
        buffer = bytearray()

    buffer += bytes(BLOCK_SIZE - LENGTH_FIELD_SIZE - len(buffer))
    buffer += encode_length(message_length)
    yield bytes_to_words(buffer)


class BlockChunker:
    '''
    Lazy, finite and restartable sequence of MD5 blocks for one message.

    Every call to iter() starts a fresh pass over the message; nothing is
    shared between passes, so one chunker can be consumed any number of times.

    Parameters:
    -----------
    message : bytes | bytearray | memoryview
        Input bytes. A snapshot is taken, later changes to a mutable buffer
        do not affect the blocks.

    Attributes:
    -----------
    message : bytes
        The immutable snapshot of the input.
    '''

    def __init__(self, message: bytes | bytearray | memoryview):
        self.message = message if isinstance(message, bytes) else bytes(memoryview(message))


    def __len__(self) -> int:
        return block_count(len(self.message))


    def __iter__(self) -> Iterator[tuple[int, ...]]:
        message_length = len(self.message)
        full = message_length - message_length % BLOCK_SIZE

        for start in range(0, full, BLOCK_SIZE):
            yield bytes_to_words(self.message[start : start + BLOCK_SIZE])

        yield from final_blocks(self.message[full:], message_length)


    def padded(self) -> bytes:
        '''
        Returns the full padded stream, a positive multiple of 64 bytes whose
        first len(message) bytes are the message itself.
        '''
        return b''.join(words_to_bytes(block) for block in self)


    def __repr__(self) -> str:
        return f'BlockChunker(length={len(self.message)}, blocks={len(self)})'
