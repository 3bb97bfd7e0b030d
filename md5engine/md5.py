'''
MD5 digest accumulator.

CONCEPTUAL FLOW
    Input → padding → chunking (64 B) → compression → final digest

Blocks are absorbed strictly in order: each compression consumes the state
left by the previous block, and its output is added back into that state
(mod 2^32). All state lives in one MD5State per computation, so concurrent
callers never share anything.
'''

from typing import BinaryIO, Iterable, Sequence

from md5engine.chunker import BlockChunker, final_blocks
from md5engine.compress import compress
from md5engine.constants import BLOCK_SIZE, DIGEST_SIZE, IV, WORD_MASK
from md5engine.formatter import to_hex
from md5engine.words import bytes_to_words, words_to_bytes


class MD5State:
    '''
    Running hash state for a single digest computation.

    Attributes:
    -----------
    state : tuple[int, int, int, int]
        The four 32-bit words (A, B, C, D).

    n_blocks : int
        Number of blocks absorbed so far.
    '''

    def __init__(self):
        self.state = IV
        self.n_blocks = 0


    def absorb(self, block: Sequence[int]) -> None:
        '''
        Compress one block and chain the result into the state.
        '''
        mixed = compress(block, self.state)

        # update state by adding back into it (mod 2^32)
        self.state = tuple((s + m) & WORD_MASK for s, m in zip(self.state, mixed))
        self.n_blocks += 1


    def digest(self) -> bytes:
        '''
        Returns the final digest (A, B, C, D) as a 16-byte little-endian byte string.
        '''
        out = words_to_bytes(self.state)
        assert len(out) == DIGEST_SIZE
        return out


    def hex_digest(self) -> str:
        return to_hex(self.digest())


def md5_blocks(blocks: Iterable[Sequence[int]]) -> bytes:
    '''
    Digest of an already padded and chunked block stream.

    Parameters:
    -----------
    blocks : Iterable[Sequence[int]]
        16-word blocks in message order, e.g. a BlockChunker.

    Returns:
    --------
    bytes
        16-byte MD5 digest.
    '''
    state = MD5State()
    for block in blocks:
        state.absorb(block)
    return state.digest()


def md5(s: bytes | bytearray | memoryview) -> bytes:
    '''
    Compute the MD5 digest of a bytes-like object.

    The input must be shorter than 2^61 bytes; longer input raises
    OverflowError when the length field is written.

    Example:
    --------
    >>> md5(b'abc').hex()
    '900150983cd24fb0d6963f7d28e17f72'
    '''
    return md5_blocks(BlockChunker(s))


def md5_hex(s: bytes | bytearray | memoryview) -> str:
    return to_hex(md5(s))


def md5_file(file: BinaryIO, read_size: int = BLOCK_SIZE * 1024) -> bytes:
    '''
    Convenience function to hash an open binary file stream.

    The stream is consumed in reads of `read_size` bytes and every complete
    64-byte block is absorbed as soon as it is available, so memory use stays
    bounded by one read plus one partial block.
    '''
    if read_size < 1:
        raise ValueError(f'read_size must be positive, got {read_size}')

    state = MD5State()
    length = 0
    pending = b''

    while data := file.read(read_size):
        pending += data
        full = len(pending) - len(pending) % BLOCK_SIZE
        for start in range(0, full, BLOCK_SIZE):
            state.absorb(bytes_to_words(pending[start : start + BLOCK_SIZE]))
        length += full
        pending = pending[full:]

    for block in final_blocks(pending, length + len(pending)):
        state.absorb(block)
    return state.digest()


if __name__ == '__main__':
    import hashlib

    text = b'is mayonnaise an instrument'

    text_hashlib = hashlib.md5(text).hexdigest()
    text_scratch = md5_hex(text)

    print('text: ', text)
    print(f'hashlib: {text_hashlib}')
    print(f'scratch: {text_scratch}')
    print(text_hashlib == text_scratch)
