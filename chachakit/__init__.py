"""
chachakit: ChaCha keystream engine

Pure Python ChaCha stream ciphers with bit-exact output for both state
layouts in use:

- Original (Bernstein): 16 or 32 byte key, 64-bit nonce, 64-bit block
  counter, 8 to 20 rounds (ChaCha8, ChaCha12, ChaCha20)
- IETF (RFC 8439): 32 byte key, 96-bit nonce, 32-bit block counter,
  20 rounds

Features:
- Partial-block buffering across calls
- Random access by block index or byte offset
- Explicit failure instead of counter wraparound
"""

from .types import (
    BLOCK_SIZE,
    STATE_WORDS,
    DEFAULT_ROUNDS,
    MIN_ROUNDS,
    MAX_ROUNDS,
    SIGMA,
    TAU,
    ORIGINAL,
    IETF,
    VARIANTS,
    KeystreamOperation,
    Variant,
    algorithm_name,
    get_variant,
)
from .diffusion import chacha_core, keystream_block, quarter_round, rotl32, serialize_block
from .state import ChaChaState, KeySchedule, setup_iv, setup_key
from .cipher import ChaCha, KeystreamBuffer, chacha_block, new
from .error import (
    ChaChaError,
    CounterOverflow,
    InvalidIVLength,
    InvalidKeyLength,
    InvalidRounds,
    InvalidSeek,
    KeyNotSet,
)

__version__ = "0.1.0"
__all__ = [
    # Constants
    "BLOCK_SIZE",
    "STATE_WORDS",
    "DEFAULT_ROUNDS",
    "MIN_ROUNDS",
    "MAX_ROUNDS",
    "SIGMA",
    "TAU",
    # Variants
    "ORIGINAL",
    "IETF",
    "VARIANTS",
    "KeystreamOperation",
    "Variant",
    "algorithm_name",
    "get_variant",
    # Diffusion
    "chacha_core",
    "keystream_block",
    "quarter_round",
    "rotl32",
    "serialize_block",
    # State
    "ChaChaState",
    "KeySchedule",
    "setup_iv",
    "setup_key",
    # Cipher
    "ChaCha",
    "KeystreamBuffer",
    "chacha_block",
    "new",
    # Errors
    "ChaChaError",
    "CounterOverflow",
    "InvalidIVLength",
    "InvalidKeyLength",
    "InvalidRounds",
    "InvalidSeek",
    "KeyNotSet",
]
