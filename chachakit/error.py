"""chachakit error types."""


class ChaChaError(Exception):
    """Base exception for ChaCha keystream errors."""
    pass


class InvalidKeyLength(ChaChaError, ValueError):
    """Key length not accepted by the variant."""
    pass


class InvalidIVLength(ChaChaError, ValueError):
    """Nonce length not accepted by the variant."""
    pass


class InvalidRounds(ChaChaError, ValueError):
    """Round count is odd or outside [8, 20]."""
    pass


class InvalidSeek(ChaChaError, ValueError):
    """Block index does not fit the variant's counter."""
    pass


class CounterOverflow(ChaChaError, OverflowError):
    """Block counter exhausted for the current nonce."""
    pass


class KeyNotSet(ChaChaError):
    """Operation requires a key."""
    pass
