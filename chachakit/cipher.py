"""Keystream engine for the ChaCha stream ciphers."""

import logging
from typing import Optional, Union

from Crypto.Util.strxor import strxor

from .diffusion import keystream_block
from .error import CounterOverflow, KeyNotSet
from .state import ChaChaState, check_block, setup_iv, setup_key
from .types import (
    BLOCK_SIZE,
    DEFAULT_ROUNDS,
    ORIGINAL,
    KeystreamOperation,
    Variant,
    algorithm_name,
    get_variant,
)

logger = logging.getLogger("chachakit.cipher")


def _check_length(length: int) -> None:
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f"length must be an integer, got {type(length).__name__}")
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")


class KeystreamBuffer:
    """Unconsumed tail of the last keystream block."""

    def __init__(self) -> None:
        self._block = b""
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._block) - self._position

    def fill(self, block: bytes) -> None:
        self._block = block
        self._position = 0

    def take(self, n: int) -> bytes:
        """Consume up to n buffered bytes."""
        end = min(self._position + n, len(self._block))
        chunk = self._block[self._position:end]
        self._position = end
        return chunk

    def clear(self) -> None:
        self._block = b""
        self._position = 0


class ChaCha:
    """
    ChaCha stream cipher over one of the supported state layouts.

    The instance owns its key/nonce configuration, the running block
    counter and the keystream buffer. It is not thread-safe; callers
    sharing an instance must serialize access themselves.
    """

    def __init__(self, variant: Union[str, Variant] = ORIGINAL):
        self._variant = get_variant(variant)

        # Configuration: replaced by set_key / resynchronize only
        self._state: Optional[ChaChaState] = None

        # Running state: index of the next block to generate
        self._counter: int = 0
        self._buffer = KeystreamBuffer()

    def __repr__(self) -> str:
        return f"<{self.algorithm_name} counter={self._counter} buffered={self._buffer.remaining}>"

    # =========================================================================
    # Key and nonce setup
    # =========================================================================

    def set_key(self, key: bytes, rounds: Optional[int] = None) -> None:
        """
        Key the cipher. Nonce and counter are zeroed.

        Args:
            key: Key bytes
            rounds: Round count (Original only, default 20)

        Raises:
            InvalidKeyLength: If the key length is not accepted
            InvalidRounds: If rounds is odd or outside [8, 20]
        """
        schedule = setup_key(self._variant, key, rounds)

        self._state = ChaChaState.initial(schedule)
        self._counter = 0
        self._buffer.clear()
        logger.debug(
            "%s keyed: %d-byte key, %d rounds",
            self.algorithm_name, schedule.key_length, schedule.rounds,
        )

    def resynchronize(self, iv: bytes, initial_block: int = 0) -> None:
        """
        Start a new message under the current key.

        Args:
            iv: Nonce, 8 bytes (Original) or 12 bytes (IETF)
            initial_block: Block counter to start from

        Raises:
            InvalidIVLength: If the nonce length does not match the variant
            InvalidSeek: If initial_block does not fit the counter
        """
        state = self._require_state()
        nonce, block = setup_iv(self._variant, iv, initial_block)

        self._state = state.with_nonce(nonce)
        self._counter = block
        self._buffer.clear()
        logger.debug("%s resynchronized at block %d", self.algorithm_name, block)

    # =========================================================================
    # Keystream combination
    # =========================================================================

    def combine(
        self,
        operation: KeystreamOperation,
        output: Union[bytearray, memoryview],
        data: Optional[bytes] = None,
        length: Optional[int] = None,
    ) -> None:
        """
        Combine keystream with input, writing into output.

        Args:
            operation: XOR with data, or emit raw keystream
            output: Writable buffer of at least length bytes
            data: Input bytes (ignored for GENERATE_ONLY)
            length: Number of bytes to process, default len(output)

        Raises:
            KeyNotSet: If no key has been set
            TypeError: If output is read-only or length is not an integer
            CounterOverflow: If the request runs past the last block
        """
        state = self._require_state()
        out = memoryview(output)
        if out.readonly:
            raise TypeError(f"output must be writable, got read-only {type(output).__name__}")
        if length is None:
            length = len(out)
        _check_length(length)
        if len(out) < length:
            raise ValueError(f"output holds {len(out)} bytes, {length} requested")
        if operation.uses_input:
            if data is None:
                raise ValueError(f"{operation.name} requires input data")
            src = memoryview(data)
            if len(src) < length:
                raise ValueError(f"input holds {len(src)} bytes, {length} requested")

        self._reserve(length)

        offset = 0
        while offset < length:
            if not self._buffer.remaining:
                self._refill(state)
            chunk = self._buffer.take(length - offset)
            end = offset + len(chunk)
            if operation.uses_input:
                out[offset:end] = strxor(chunk, bytes(src[offset:end]))
            else:
                out[offset:end] = chunk
            offset = end

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt plaintext, continuing the keystream."""
        out = bytearray(len(plaintext))
        self.combine(KeystreamOperation.ENCRYPT_XOR, out, plaintext)
        return bytes(out)

    def decrypt(self, ciphertext: bytes) -> bytes:
        """Decrypt ciphertext, continuing the keystream."""
        out = bytearray(len(ciphertext))
        self.combine(KeystreamOperation.DECRYPT_XOR, out, ciphertext)
        return bytes(out)

    def keystream(self, length: int) -> bytes:
        """Return the next length bytes of raw keystream."""
        _check_length(length)
        out = bytearray(length)
        self.combine(KeystreamOperation.GENERATE_ONLY, out)
        return bytes(out)

    def discard(self, length: int) -> None:
        """Skip length bytes of keystream without generating whole blocks."""
        state = self._require_state()
        _check_length(length)
        self._reserve(length)

        length -= len(self._buffer.take(length))
        if not length:
            return
        blocks, tail = divmod(length, BLOCK_SIZE)
        self._counter += blocks
        if tail:
            self._refill(state)
            self._buffer.take(tail)

    def _reserve(self, length: int) -> None:
        """Raise CounterOverflow unless length bytes of keystream remain."""
        needed = length - self._buffer.remaining
        if needed <= 0:
            return
        blocks = -(-needed // BLOCK_SIZE)
        last = self._counter + blocks - 1
        if last > self._variant.max_block:
            logger.warning(
                "%s block counter exhausted: block %d requested, last is %d",
                self.algorithm_name, last, self._variant.max_block,
            )
            raise CounterOverflow(
                f"{self._variant.counter_bits}-bit block counter exhausted; "
                f"resynchronize with a new nonce"
            )

    def _refill(self, state: ChaChaState) -> None:
        self._buffer.fill(keystream_block(state.words(self._counter), state.rounds))
        self._counter += 1

    # =========================================================================
    # Random access
    # =========================================================================

    def seek_to_block(self, block: int) -> None:
        """
        Position the keystream at the start of a block.

        Raises:
            InvalidSeek: If block does not fit the variant's counter
        """
        self._require_state()
        check_block(self._variant, block)

        self._counter = block
        self._buffer.clear()
        logger.debug("%s seek to block %d", self.algorithm_name, block)

    def seek(self, position: int) -> None:
        """Position the keystream at a byte offset."""
        if not isinstance(position, int) or position < 0:
            raise ValueError(f"position must be a non-negative integer, got {position!r}")
        block, offset = divmod(position, BLOCK_SIZE)
        self.seek_to_block(block)
        if offset:
            self.discard(offset)

    def tell(self) -> int:
        """Byte offset of the next keystream byte."""
        return self._counter * BLOCK_SIZE - self._buffer.remaining

    def _require_state(self) -> ChaChaState:
        if self._state is None:
            raise KeyNotSet(f"{self.algorithm_name} key not set")
        return self._state

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def variant(self) -> Variant:
        return self._variant

    @property
    def rounds(self) -> int:
        if self._state is None:
            return self._variant.fixed_rounds or DEFAULT_ROUNDS
        return self._state.rounds

    @property
    def counter(self) -> int:
        """Index of the next block to be generated."""
        return self._counter

    @property
    def nonce(self) -> bytes:
        return self._require_state().nonce_bytes()

    @property
    def algorithm_name(self) -> str:
        return algorithm_name(self._variant, self.rounds)

    @property
    def static_algorithm_name(self) -> str:
        return self._variant.algorithm

    @property
    def algorithm_provider(self) -> str:
        return "Python"

    @property
    def is_random_access(self) -> bool:
        return True

    @property
    def optimal_block_size(self) -> int:
        return BLOCK_SIZE

    @property
    def min_key_length(self) -> int:
        return self._variant.min_key_length

    @property
    def max_key_length(self) -> int:
        return self._variant.max_key_length

    @property
    def default_key_length(self) -> int:
        return self._variant.default_key_length

    @property
    def iv_length(self) -> int:
        return self._variant.iv_length

    def valid_key_length(self, length: int) -> bool:
        return self._variant.valid_key_length(length)


def new(
    key: bytes,
    nonce: Optional[bytes] = None,
    rounds: Optional[int] = None,
    initial_block: int = 0,
    variant: Union[str, Variant] = ORIGINAL,
) -> ChaCha:
    """
    Create a keyed cipher in one call.

    Without a nonce the state keeps the all-zero nonce from key setup.
    """
    cipher = ChaCha(variant)
    cipher.set_key(key, rounds)
    if nonce is not None:
        cipher.resynchronize(nonce, initial_block)
    elif initial_block:
        cipher.seek_to_block(initial_block)
    return cipher


def chacha_block(
    key: bytes,
    counter: int,
    nonce: bytes,
    rounds: Optional[int] = None,
    variant: Union[str, Variant] = ORIGINAL,
) -> bytes:
    """Compute the single 64-byte keystream block at index counter."""
    variant = get_variant(variant)
    schedule = setup_key(variant, key, rounds)
    nonce_words, counter = setup_iv(variant, nonce, counter)
    state = ChaChaState(schedule=schedule, nonce=nonce_words)
    return keystream_block(state.words(counter), schedule.rounds)
