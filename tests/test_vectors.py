"""Published test vectors for both ChaCha layouts."""

import pytest
from Crypto.Cipher import ChaCha20

from chachakit import IETF, ORIGINAL, ChaCha, chacha_block, new


RFC8439_KEY = bytes(range(32))

# RFC 8439 A.1, test vector #1 (also draft-agl-tls-chacha20poly1305 section 7)
ZERO_BLOCK = bytes.fromhex(
    "76b8e0ada0f13d90405d6ae55386bd28bdd219b8a08ded1aa836efcc8b770dc7"
    "da41597c5157488d7724e03fb8d84a376a43b8f41518a11cc387b669b2ee6586"
)

SUNSCREEN = (
    b"Ladies and Gentlemen of the class of '99: If I could offer you only one "
    b"tip for the future, sunscreen would be it."
)


def test_ietf_zero_key_zero_nonce():
    """First block for an all-zero key and nonce at counter 0."""
    cipher = new(bytes(32), bytes(12), variant=IETF)
    assert cipher.keystream(64) == ZERO_BLOCK


def test_ietf_block_function():
    """RFC 8439 section 2.3.2 block function test vector."""
    nonce = bytes.fromhex("000000090000004a00000000")
    expected = bytes.fromhex(
        "10f1e7e4d13b5915500fdd1fa32071c4"
        "c7d1f4c733c068030422aa9ac3d46c4e"
        "d2826446079faa0914c2d705d98b02a2"
        "b5129cd1de164eb9cbd083e8a2503c4e"
    )
    assert chacha_block(RFC8439_KEY, 1, nonce, variant=IETF) == expected


def test_ietf_encryption():
    """RFC 8439 section 2.4.2 encryption test vector."""
    nonce = bytes.fromhex("000000000000004a00000000")
    expected = bytes.fromhex(
        "6e2e359a2568f98041ba0728dd0d6981"
        "e97e7aec1d4360c20a27afccfd9fae0b"
        "f91b65c5524733ab8f593dabcd62b357"
        "1639d624e65152ab8f530c359f0861d8"
        "07ca0dbf500d6a6156a38e088a22b65e"
        "52bc514d16ccf806818ce91ab7793736"
        "5af90bbf74a35be6b40b8eedf2785e42"
        "874d"
    )
    cipher = new(RFC8439_KEY, nonce, initial_block=1, variant=IETF)
    assert cipher.encrypt(SUNSCREEN) == expected

    cipher.resynchronize(nonce, initial_block=1)
    assert cipher.decrypt(expected) == SUNSCREEN


def test_original_zero_key_zero_nonce():
    """Both layouts agree when counter and nonce are all zero."""
    cipher = new(bytes(32), bytes(8))
    assert cipher.keystream(64) == ZERO_BLOCK


def test_original_key_and_nonce_bits():
    """draft-agl-tls-chacha20poly1305 section 7 vectors."""
    key = bytes(31) + b"\x01"
    assert chacha_block(key, 0, bytes(8)) == bytes.fromhex(
        "4540f05a9f1fb296d7736e7b208e3c96eb4fe1834688d2604f450952ed432d41"
        "bbe2a0b6ea7566d2a5d1e7e20d42af2c53d792b1c43fea817e9ad275ae546963"
    )

    r = chacha_block(bytes(32), 0, bytes(7) + b"\x01")
    assert r[:60] == bytes.fromhex(
        "de9cba7bf3d69ef5e786dc63973f653a0b49e015adbff7134fcb7df137821031"
        "e85a050278a7084527214f73efc7fa5b5277062eb7a0433e445f41e3"
    )

    assert chacha_block(bytes(32), 0, b"\x01" + bytes(7)) == bytes.fromhex(
        "ef3fdfd6c61578fbf5cf35bd3dd33b8009631634d21e42ac33960bd138e50d32"
        "111e4caf237ee53ca8ad6426194a88545ddc497a0b466e7d6bbdb0041b2f586b"
    )


def test_original_multi_block_keystream():
    """Four consecutive blocks with the counter carried in words 12-13."""
    cipher = new(RFC8439_KEY, bytes.fromhex("0001020304050607"))
    assert cipher.keystream(256) == bytes.fromhex(
        "f798a189f195e66982105ffb640bb7757f579da31602fc93ec01ac56f85ac3c1"
        "34a4547b733b46413042c9440049176905d3be59ea1c53f15916155c2be8241a"
        "38008b9a26bc35941e2444177c8ade6689de95264986d95889fb60e84629c9bd"
        "9a5acb1cc118be563eb9b3a4a472f82e09a7e778492b562ef7130e88dfe031c7"
        "9db9d4f7c7a899151b9a475032b63fc385245fe054e3dd5a97a5f576fe064025"
        "d3ce042c566ab2c507b138db853e3d6959660996546cc9c4a6eafdc777c040d7"
        "0eaf46f76dad3979e5c5360c3317166a1c894c94a371876a94df7628fe4eaaf2"
        "ccb27d5aaae0ad7ad0f9d4b6ad3b54098746d4524d38407a6deb3ab78fab78c9"
    )


@pytest.mark.parametrize("variant,nonce", [
    (ORIGINAL, bytes.fromhex("0badc0ffee123456")),
    (IETF, bytes.fromhex("000000090000004a00000017")),
])
@pytest.mark.parametrize("position", [0, 1, 63, 64, 200, 64 * 1000 + 7])
def test_matches_pycryptodome(variant, nonce, position):
    """Cross-check 256-bit key / 20 round keystream at byte offsets."""
    key = bytes(range(100, 132))
    reference = ChaCha20.new(key=key, nonce=nonce)
    reference.seek(position)

    cipher = ChaCha(variant)
    cipher.set_key(key)
    cipher.resynchronize(nonce)
    cipher.seek(position)

    assert cipher.keystream(300) == reference.encrypt(bytes(300))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
