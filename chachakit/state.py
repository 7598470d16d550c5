"""Initial state construction for the ChaCha variants.

The 16-word state is assembled from two parts that change at different
times: the key schedule (constants, key words, rounds), fixed by
``setup_key``, and the nonce words, replaced on every resynchronize. The
block counter is running state and lives with the engine; it is only
merged in by ``ChaChaState.words``.
"""

import struct
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .error import InvalidIVLength, InvalidKeyLength, InvalidRounds, InvalidSeek
from .types import DEFAULT_ROUNDS, SIGMA, TAU, WORD_MASK, Variant, valid_rounds


def _words(data: bytes) -> Tuple[int, ...]:
    return struct.unpack(f"<{len(data) // 4}I", data)


def _as_bytes(data: bytes, what: str) -> bytes:
    """Copy bytes-like key material, raises TypeError for anything else."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes-like, got {type(data).__name__}")
    return bytes(data)


@dataclass(frozen=True)
class KeySchedule:
    """Words 0..11 of the state plus the round count."""

    variant: Variant
    rounds: int
    key_length: int
    head: Tuple[int, ...]  # constants || key words


@dataclass(frozen=True)
class ChaChaState:
    """Keyed and nonced configuration; everything but the counter."""

    schedule: KeySchedule
    nonce: Tuple[int, ...]

    @classmethod
    def initial(cls, schedule: KeySchedule) -> "ChaChaState":
        """State right after key setup, nonce words zeroed."""
        return cls(schedule=schedule, nonce=(0,) * schedule.variant.nonce_words)

    def with_nonce(self, nonce: Tuple[int, ...]) -> "ChaChaState":
        return replace(self, nonce=nonce)

    @property
    def variant(self) -> Variant:
        return self.schedule.variant

    @property
    def rounds(self) -> int:
        return self.schedule.rounds

    def nonce_bytes(self) -> bytes:
        return struct.pack(f"<{len(self.nonce)}I", *self.nonce)

    def words(self, counter: int) -> List[int]:
        """Full 16-word state for block ``counter``."""
        return list(self.schedule.head) + counter_words(self.variant, counter) + list(self.nonce)


def check_rounds(variant: Variant, rounds: Optional[int]) -> int:
    """Resolve the round count for a variant, raises InvalidRounds."""
    if variant.fixed_rounds is not None:
        return variant.fixed_rounds
    if rounds is None:
        return DEFAULT_ROUNDS
    if not valid_rounds(rounds):
        raise InvalidRounds(f"Rounds must be even and within [8, 20], got {rounds!r}")
    return rounds


def setup_key(variant: Variant, key: bytes, rounds: Optional[int] = None) -> KeySchedule:
    """
    Build the key schedule for a variant.

    Args:
        variant: State layout
        key: 16 or 32 bytes (Original) or exactly 32 bytes (IETF)
        rounds: Round count; ignored by variants with fixed rounds

    Returns:
        The key schedule

    Raises:
        InvalidKeyLength: If the key length is not accepted by the variant
        InvalidRounds: If rounds is odd or outside [8, 20]
    """
    key = _as_bytes(key, "key")
    if not variant.valid_key_length(len(key)):
        raise InvalidKeyLength(
            f"{variant.algorithm} key must be {' or '.join(map(str, variant.key_lengths))} "
            f"bytes, got {len(key)}"
        )
    rounds = check_rounds(variant, rounds)

    if len(key) == 32:
        head = _words(SIGMA) + _words(key)
    else:
        # 128-bit keys fill both key rows
        head = _words(TAU) + _words(key) * 2

    return KeySchedule(variant=variant, rounds=rounds, key_length=len(key), head=head)


def setup_iv(variant: Variant, iv: bytes, initial_block: int = 0) -> Tuple[Tuple[int, ...], int]:
    """
    Parse a nonce and validate the initial block counter.

    Returns:
        Tuple of (nonce_words, initial_block)

    Raises:
        InvalidIVLength: If the nonce length does not match the variant
        InvalidSeek: If initial_block does not fit the counter
    """
    iv = _as_bytes(iv, "nonce")
    if len(iv) != variant.iv_length:
        raise InvalidIVLength(
            f"{variant.algorithm} nonce must be {variant.iv_length} bytes, got {len(iv)}"
        )
    check_block(variant, initial_block)
    return _words(iv), initial_block


def check_block(variant: Variant, block: int) -> int:
    """Raises InvalidSeek unless block fits the variant's counter."""
    if not isinstance(block, int) or isinstance(block, bool) or not 0 <= block <= variant.max_block:
        raise InvalidSeek(
            f"Block index must be within [0, {variant.max_block}] for "
            f"{variant.algorithm}, got {block!r}"
        )
    return block


def counter_words(variant: Variant, counter: int) -> List[int]:
    """Split a block counter into little-endian state words."""
    return [(counter >> (32 * i)) & WORD_MASK for i in range(variant.counter_words)]
