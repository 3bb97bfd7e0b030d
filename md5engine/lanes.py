'''
Vectorized MD5 over many independent messages at once.

Every message is one lane. Lanes are grouped by block count so that each
group advances through its blocks in lockstep, with the 64 steps applied to
whole uint32 arrays. uint32 array arithmetic wraps mod 2^32, matching the
scalar engine bit for bit.

This mirrors how a device kernel hashes a batch of candidates, one lane per
thread, and is checked against md5() by the conformance suite.
'''

from collections import defaultdict
from typing import Sequence

import numpy as np

from md5engine.chunker import BlockChunker
from md5engine.compress import msg_idx_for_step
from md5engine.constants import BLOCK_SIZE, DIGEST_SIZE, IV, SHIFTS, SINES


_SINES = np.array(SINES, dtype = np.uint32)
_SHIFTS = np.array(SHIFTS, dtype = np.uint32)


def _rotl(x: np.ndarray, n: np.uint32) -> np.ndarray:
    return (x << n) | (x >> (np.uint32(32) - n))


def _compress_lanes(
    words: np.ndarray,
    a: np.ndarray,
    b: np.ndarray,
    c: np.ndarray,
    d: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    '''
    64 mixing steps for one block position across all lanes.

    words has shape [lanes, 16]; a, b, c, d have shape [lanes].
    '''
    for i in range(64):
        if i < 16:
            f = (b & c) | (~b & d)
        elif i < 32:
            f = (d & b) | (~d & c)
        elif i < 48:
            f = b ^ c ^ d
        else:
            f = c ^ (b | ~d)

        temp = f + a + _SINES[i] + words[:, msg_idx_for_step[i]]
        a, b, c, d = d, b + _rotl(temp, _SHIFTS[i]), b, c

    return a, b, c, d


def md5_lanes(messages: Sequence[bytes]) -> np.ndarray:
    '''
    Hash a batch of messages, one lane per message.

    Parameters:
    -----------
    messages : Sequence[bytes]
        Independent inputs of any length.

    Returns:
    --------
    np.ndarray
        uint8 array of shape [N, 16]; row i is the digest of messages[i].
    '''
    out = np.zeros((len(messages), DIGEST_SIZE), dtype = np.uint8)

    # lanes sharing a block count can run in lockstep
    groups = defaultdict(list)
    chunkers = [BlockChunker(m) for m in messages]
    for i, chunker in enumerate(chunkers):
        groups[len(chunker)].append(i)

    for n_blocks, idx in groups.items():
        padded = b''.join(chunkers[i].padded() for i in idx)
        assert len(padded) == len(idx) * n_blocks * BLOCK_SIZE

        # [lanes, blocks, 16] little-endian words
        words = np.frombuffer(padded, dtype = '<u4').reshape(len(idx), n_blocks, 16).astype(np.uint32)

        state = [np.full(len(idx), v, dtype = np.uint32) for v in IV]
        for blk in range(n_blocks):
            mixed = _compress_lanes(words[:, blk, :], *state)
            state = [s + m for s, m in zip(state, mixed)]

        digests = np.stack(state, axis = 1).astype('<u4').view(np.uint8).reshape(len(idx), DIGEST_SIZE)
        out[idx] = digests

    return out


def md5_lanes_hex(messages: Sequence[bytes]) -> list[str]:
    return [row.tobytes().hex() for row in md5_lanes(messages)]
