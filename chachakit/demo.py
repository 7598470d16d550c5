"""chachakit demo - keystream generation, encryption and random access."""

import logging

from Crypto.Random import get_random_bytes

from .cipher import ChaCha, chacha_block, new
from .types import IETF, ORIGINAL


def main():
    """Run the chachakit demo."""
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    print("=== chachakit ChaCha Demo (Python) ===\n")

    # RFC 8439 A.1 test vector #1
    print("RFC 8439 block, zero key, zero nonce, counter 0:")
    block = chacha_block(bytes(32), 0, bytes(12), variant=IETF)
    print(f"  {block.hex()}")

    key = get_random_bytes(32)
    nonce = get_random_bytes(12)
    plaintext = b"Ladies and Gentlemen of the class of '99"

    print("\nEncrypting with ChaChaTLS...")
    sender = new(key, nonce, initial_block=1, variant=IETF)
    ciphertext = sender.encrypt(plaintext)
    print(f"  ciphertext: {ciphertext.hex()}")

    receiver = new(key, nonce, initial_block=1, variant=IETF)
    assert receiver.decrypt(ciphertext) == plaintext, "Decryption should recover plaintext!"
    print("✓ Decryption recovers plaintext")

    # Random access: block 1000 without generating blocks 0..999
    print("\nSeeking to block 1000 with ChaCha12...")
    cipher = ChaCha(ORIGINAL)
    cipher.set_key(key[:16], rounds=12)
    cipher.resynchronize(nonce[:8])
    cipher.seek_to_block(1000)
    print(f"  {cipher.algorithm_name} block 1000: {cipher.keystream(16).hex()}...")
    print(f"  position after read: {cipher.tell()}")

    print("\n=== Demo complete ===")


if __name__ == "__main__":
    main()
