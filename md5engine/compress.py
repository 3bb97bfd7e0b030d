'''
MD5 compression round.

Each of the 64 steps mixes one message word into the state with a nonlinear
Boolean function, an additive constant and a left rotation. The four state
registers (A, B, C, D) rotate each step.
'''

from typing import Sequence

from md5engine.constants import SHIFTS, SINES, WORD_MASK
from md5engine.words import bit_not, left_rotate


'''
---------------------------------------------------------------------
Logical "mixing" functions F, G, H, I
   Each takes three 32-bit inputs and returns one 32-bit output.
---------------------------------------------------------------------
'''
def F(b: int, c: int, d: int) -> int:
    # selects bits from c where b = 1, otherwise from d
    return (b & c) | (bit_not(b) & d)

def G(b: int, c: int, d: int) -> int:
    # selects bits from b where d = 1, otherwise from c
    return (d & b) | (bit_not(d) & c)

def H(b: int, c: int, d: int) -> int:
    return b ^ c ^ d

def I(b: int, c: int, d: int) -> int:
    return c ^ (b | bit_not(d))


# map each of the 64 steps to one of the four mixing functions
mixer_for_step = (
    [F for _ in range(16)] +
    [G for _ in range(16)] +
    [H for _ in range(16)] +
    [I for _ in range(16)]
)

# message-word order, indexed by absolute step number
msg_idx_for_step = (
    [i for i in range(0, 16)] +
    [(5 * i + 1) % 16 for i in range(16, 32)] +
    [(3 * i + 5) % 16 for i in range(32, 48)] +
    [(7 * i) % 16 for i in range(48, 64)]
)


def compress(block: Sequence[int], state: Sequence[int]) -> tuple[int, int, int, int]:
    '''
    Run the 64 mixing steps of one 512-bit block over a state.

    Parameters:
    -----------
    block : Sequence[int]
        16 unsigned 32-bit message words.

    state : Sequence[int]
        Input state (A, B, C, D).

    Returns:
    --------
    tuple[int, int, int, int]
        Post-mixing state. Adding it back into the input state (chaining) is
        left to the caller.
    '''
    if len(block) != 16:
        raise ValueError(f'block must hold 16 words, got {len(block)}')
    if len(state) != 4:
        raise ValueError(f'state must hold 4 words, got {len(state)}')

    a, b, c, d = state

    for i in range(64):
        f = mixer_for_step[i](b, c, d)
        temp = (f + a + SINES[i] + block[msg_idx_for_step[i]]) & WORD_MASK
        a, b, c, d = d, (b + left_rotate(temp, SHIFTS[i])) & WORD_MASK, b, c

    return a, b, c, d
