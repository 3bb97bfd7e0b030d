import pytest

from md5engine.chunker import BlockChunker, block_count, encode_length, final_blocks
from md5engine.words import words_to_bytes


@pytest.mark.parametrize('n, blocks', [
    (0, 1), (1, 1), (55, 1), (56, 2), (57, 2), (63, 2), (64, 2), (65, 2), (119, 2), (120, 3), (128, 3),
])
def test_block_count(n, blocks):
    assert block_count(n) == blocks
    assert len(list(BlockChunker(b'x' * n))) == blocks


@pytest.mark.parametrize('n', [0, 1, 3, 55, 56, 57, 63, 64, 65, 119, 120, 200])
def test_padded_layout(n):
    message = bytes(i % 251 for i in range(n))
    padded = BlockChunker(message).padded()

    assert len(padded) > 0
    assert len(padded) % 64 == 0
    assert padded[:n] == message
    assert padded[n] == 0x80
    assert padded[-8:] == (8 * n).to_bytes(8, 'little')
    assert set(padded[n + 1 : -8]) <= {0}


def test_empty_message_is_one_block():
    (block,) = list(BlockChunker(b''))
    raw = words_to_bytes(block)
    assert raw[0] == 0x80
    assert raw[1:] == bytes(63)


def test_extra_block_is_pure_padding():
    # 57 bytes leave only 7 free bytes, the length field moves to its own block
    first, second = list(BlockChunker(b'a' * 57))
    assert words_to_bytes(first) == b'a' * 57 + b'\x80' + bytes(6)
    assert words_to_bytes(second) == bytes(56) + (57 * 8).to_bytes(8, 'little')


def test_block_boundary_message_terminator_opens_next_block():
    first, second = list(BlockChunker(b'b' * 64))
    assert words_to_bytes(first) == b'b' * 64
    assert words_to_bytes(second)[0] == 0x80


def test_chunker_is_restartable():
    chunker = BlockChunker(b'restart me' * 20)
    assert list(chunker) == list(chunker)


def test_chunker_snapshots_mutable_input():
    buf = bytearray(b'abc')
    chunker = BlockChunker(buf)
    buf[0] = ord('z')
    assert chunker.padded()[:3] == b'abc'


def test_blocks_are_sixteen_words():
    for block in BlockChunker(b'q' * 300):
        assert len(block) == 16
        assert all(0 <= w < 2 ** 32 for w in block)


def test_length_field_is_bit_count():
    assert encode_length(3) == b'\x18' + bytes(7)


def test_length_field_writes_all_eight_bytes():
    # bit length 2^58 only shows up in the most significant byte
    assert encode_length(2 ** 55) == bytes(7) + b'\x04'
    assert encode_length(2 ** 61 - 1)[7] == 0xff


def test_length_beyond_64_bits_is_not_truncated():
    with pytest.raises(OverflowError):
        encode_length(2 ** 61)


def test_chunker_len_does_not_consume():
    chunker = BlockChunker(b'x' * 100)
    assert len(chunker) == 2
    assert len(list(chunker)) == 2


@pytest.mark.parametrize('n', [0, 54, 55, 56, 63])
def test_final_blocks_pad_tail_with_total_length(n):
    tail = b't' * n
    blocks = list(final_blocks(tail, 128 + n))
    assert len(blocks) == (1 if n <= 55 else 2)
    raw = b''.join(words_to_bytes(b) for b in blocks)
    assert raw[:n + 1] == tail + b'\x80'
    assert raw[-8:] == encode_length(128 + n)
