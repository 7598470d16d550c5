"""Constants and variant configuration for the ChaCha family."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


# Keystream block size in bytes
BLOCK_SIZE: int = 64

# State size in 32-bit words
STATE_WORDS: int = 16

WORD_MASK: int = 0xFFFFFFFF

# Round limits (Bernstein: ChaCha8, ChaCha12, ChaCha20)
DEFAULT_ROUNDS: int = 20
MIN_ROUNDS: int = 8
MAX_ROUNDS: int = 20

# State constants for 256-bit and 128-bit keys
SIGMA: bytes = b"expand 32-byte k"
TAU: bytes = b"expand 16-byte k"


class KeystreamOperation(Enum):
    """How keystream is combined with the caller's input."""

    ENCRYPT_XOR = "encrypt"
    DECRYPT_XOR = "decrypt"
    GENERATE_ONLY = "generate"

    @property
    def uses_input(self) -> bool:
        return self is not KeystreamOperation.GENERATE_ONLY


def valid_rounds(rounds: int) -> bool:
    return (
        isinstance(rounds, int)
        and MIN_ROUNDS <= rounds <= MAX_ROUNDS
        and rounds % 2 == 0
    )


@dataclass(frozen=True)
class Variant:
    """State layout of one ChaCha variant.

    Words 12..15 hold the counter followed by the nonce; ``counter_words``
    decides where the split falls.
    """

    name: str
    algorithm: str
    key_lengths: Tuple[int, ...]
    iv_length: int
    counter_words: int
    fixed_rounds: Optional[int] = None  # None = caller chooses

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate the layout, raises ValueError if inconsistent."""
        if self.counter_words not in (1, 2):
            raise ValueError("counter_words must be 1 or 2")
        if self.iv_length != 4 * self.nonce_words:
            raise ValueError("iv_length must fill the words after the counter")
        if not self.key_lengths or any(n not in (16, 32) for n in self.key_lengths):
            raise ValueError("key_lengths must be drawn from (16, 32)")
        if self.fixed_rounds is not None and not valid_rounds(self.fixed_rounds):
            raise ValueError("fixed_rounds must be even and within [8, 20]")

    @property
    def nonce_words(self) -> int:
        return 4 - self.counter_words

    @property
    def counter_bits(self) -> int:
        return 32 * self.counter_words

    @property
    def max_block(self) -> int:
        """Largest block index the counter can hold."""
        return (1 << self.counter_bits) - 1

    @property
    def min_key_length(self) -> int:
        return min(self.key_lengths)

    @property
    def max_key_length(self) -> int:
        return max(self.key_lengths)

    @property
    def default_key_length(self) -> int:
        return self.max_key_length

    def valid_key_length(self, length: int) -> bool:
        return length in self.key_lengths


# Bernstein's layout: 64-bit block counter, 64-bit nonce
ORIGINAL = Variant(
    name="original",
    algorithm="ChaCha",
    key_lengths=(16, 32),
    iv_length=8,
    counter_words=2,
)

# RFC 8439 layout: 32-bit block counter, 96-bit nonce
IETF = Variant(
    name="ietf",
    algorithm="ChaChaTLS",
    key_lengths=(32,),
    iv_length=12,
    counter_words=1,
    fixed_rounds=20,
)

VARIANTS = {v.name: v for v in (ORIGINAL, IETF)}


def get_variant(variant: Union[str, Variant]) -> Variant:
    """Resolve a variant given by name or instance."""
    if isinstance(variant, Variant):
        return variant
    try:
        return VARIANTS[variant.lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown ChaCha variant: {variant!r}") from None


def algorithm_name(variant: Variant, rounds: int) -> str:
    """
    Name of the cipher as configured.

    Bernstein's variant is named after its round count (ChaCha8, ChaCha12,
    ChaCha20); the IETF variant has a single name.
    """
    if variant.fixed_rounds is not None:
        return variant.algorithm
    return f"{variant.algorithm}{rounds}"
