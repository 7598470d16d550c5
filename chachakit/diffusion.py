"""ChaCha block function: quarter-round network and feed-forward."""

import struct
from typing import List, Sequence

from .types import DEFAULT_ROUNDS, STATE_WORDS, WORD_MASK

_BLOCK_STRUCT = struct.Struct("<16I")

# Column then diagonal quarter-round slots of one double round
_COLUMNS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
_DIAGONALS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))


def rotl32(x: int, n: int) -> int:
    """Rotate a 32-bit word left by n bits."""
    return ((x << n) & WORD_MASK) | (x >> (32 - n))


def quarter_round(x: List[int], a: int, b: int, c: int, d: int) -> None:
    """Apply one quarter-round in place to words a, b, c, d of x."""
    x[a] = (x[a] + x[b]) & WORD_MASK
    x[d] = rotl32(x[d] ^ x[a], 16)
    x[c] = (x[c] + x[d]) & WORD_MASK
    x[b] = rotl32(x[b] ^ x[c], 12)
    x[a] = (x[a] + x[b]) & WORD_MASK
    x[d] = rotl32(x[d] ^ x[a], 8)
    x[c] = (x[c] + x[d]) & WORD_MASK
    x[b] = rotl32(x[b] ^ x[c], 7)


def double_round(x: List[int]) -> None:
    for slots in _COLUMNS:
        quarter_round(x, *slots)
    for slots in _DIAGONALS:
        quarter_round(x, *slots)


def chacha_core(state: Sequence[int], rounds: int = DEFAULT_ROUNDS) -> List[int]:
    """
    Run the diffusion function over a 16-word state.

    Args:
        state: Input words (constants, key, counter, nonce)
        rounds: Even number of rounds

    Returns:
        The 16 output words, feed-forward applied
    """
    if len(state) != STATE_WORDS:
        raise ValueError(f"State must be {STATE_WORDS} words, got {len(state)}")

    x = list(state)
    for _ in range(rounds // 2):
        double_round(x)

    return [(x[i] + state[i]) & WORD_MASK for i in range(STATE_WORDS)]


def serialize_block(words: Sequence[int]) -> bytes:
    """Serialize 16 words little-endian into a 64-byte block."""
    return _BLOCK_STRUCT.pack(*words)


def keystream_block(state: Sequence[int], rounds: int = DEFAULT_ROUNDS) -> bytes:
    """Produce the 64-byte keystream block for a state."""
    return serialize_block(chacha_core(state, rounds))
