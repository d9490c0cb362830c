"""Textbook RSA on top of BigInteger: key pairs, encryption, decryption and a byte codec.

No padding scheme is applied, so this is the raw RSAEP/RSADP primitive. The byte codec folds a byte string into a
number by treating every byte as one digit of a fixed radix (256 by default), most significant byte first.

Typical usage example:

    pair = generate_key_pair(512)
    m = string_to_number("Hi there!")
    c = encrypt(m, pair.public_key)
    assert number_to_string(decrypt(c, pair.private_key)) == b"Hi there!"
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
from typing import NamedTuple
import warnings

from bigrsa import primes
from bigrsa.bignum import BigInteger
from bigrsa.bignum import ONE
from bigrsa.errors import CiphertextTooLarge
from bigrsa.errors import InvalidArgument
from bigrsa.errors import KeyGenerationFailure
from bigrsa.errors import MessageTooLarge

logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_EXPONENT: int = 65537
MIN_KEY_BITS: int = 16


class PublicKey(NamedTuple):
    """RSA public key.

    Attributes:
        n: The modulus, shared with the private key.
        e: The public exponent.
    """
    n: BigInteger
    e: BigInteger

    def encrypt(self, message: BigInteger | int) -> BigInteger:
        return encrypt(message, self)


class PrivateKey(NamedTuple):
    """RSA private key.

    Attributes:
        n: The modulus, shared with the public key.
        d: The private exponent.
    """
    n: BigInteger
    d: BigInteger

    def decrypt(self, ciphertext: BigInteger | int) -> BigInteger:
        return decrypt(ciphertext, self)


class KeyPair(NamedTuple):
    public_key: PublicKey
    private_key: PrivateKey

    @classmethod
    def generate(cls, bits: int, pub_exp: int = DEFAULT_PUBLIC_EXPONENT) -> "KeyPair":
        return generate_key_pair(bits, pub_exp)


def generate_key_pair(bits: int,
                      pub_exp: int = DEFAULT_PUBLIC_EXPONENT,
                      max_attempts: int | None = None,
                      extra_rounds: int = 0) -> KeyPair:
    """Generates an RSA key pair.

    Draws two distinct primes of `bits / 2` bits each, then derives the modulus, the totient `(p-1)(q-1)` and the
    private exponent as the inverse of `pub_exp` modulo the totient. The primes are discarded afterward.

    Args:
        bits: Size of the modulus in bits. Must be even and at least `MIN_KEY_BITS`.
        pub_exp: The public exponent. Defaults (and recommended) to 65537. Must be odd and > 1.
        max_attempts: Candidate budget per prime, passed to prime generation. Defaults to None (unbounded).
        extra_rounds: Extra Miller-Rabin witnesses per candidate, passed to prime generation.

    Returns:
        The key pair, with the same modulus value in both halves.

    Raises:
        InvalidArgument: If `bits` or `pub_exp` does not meet requirements.
        KeyGenerationFailure: If a prime came out short or `pub_exp` shares a factor with the totient.
    """
    if bits < MIN_KEY_BITS or bits % 2 != 0:
        raise InvalidArgument(f"Key size must be an even number of at least {MIN_KEY_BITS} bits.")
    if pub_exp < 3 or pub_exp % 2 == 0:
        raise InvalidArgument("Public exponent must be odd and greater than 1.")
    half = bits // 2
    e = BigInteger(pub_exp)
    p = primes.generate_prime_with_bit_length(half, max_attempts, extra_rounds)
    q = primes.generate_prime_with_bit_length(half, max_attempts, extra_rounds)
    while p == q:  # (Un)Likely story.
        q = primes.generate_prime_with_bit_length(half, max_attempts, extra_rounds)
    if p.bit_length() != half or q.bit_length() != half:
        raise KeyGenerationFailure("Generated primes do not have the required bit length.")
    n = p * q
    totient = (p - ONE) * (q - ONE)
    if primes.gcd(e, totient) != ONE:
        raise KeyGenerationFailure("Public exponent not coprime with totient.")
    d = primes.mod_inverse(e, totient)
    logger.debug("Generated %d-bit key pair.", n.bit_length())
    return KeyPair(PublicKey(n, e), PrivateKey(n, d))


def encrypt(message: BigInteger | int, public_key: PublicKey) -> BigInteger:
    """Raw RSA encryption, `message**e mod n`.

    Raises:
        InvalidArgument: If the message is negative.
        MessageTooLarge: If the message is not below the modulus.
    """
    message = BigInteger(message)
    if message.is_negative:
        raise InvalidArgument("Message representative must be non-negative.")
    if message >= public_key.n:
        raise MessageTooLarge("Message too large for key size.")
    return message.modular_exponentiation(public_key.e, public_key.n)


def decrypt(ciphertext: BigInteger | int, private_key: PrivateKey) -> BigInteger:
    """Raw RSA decryption, `ciphertext**d mod n`.

    Raises:
        InvalidArgument: If the ciphertext is negative.
        CiphertextTooLarge: If the ciphertext is not below the modulus.
    """
    ciphertext = BigInteger(ciphertext)
    if ciphertext.is_negative:
        raise InvalidArgument("Ciphertext representative must be non-negative.")
    if ciphertext >= private_key.n:
        raise CiphertextTooLarge("Ciphertext too large for key size.")
    return ciphertext.modular_exponentiation(private_key.d, private_key.n)


def string_to_number(message: bytes | str, radix: int = 256) -> BigInteger:
    """Converts a byte string to a number, one digit per byte.

    With the default radix this is the big-endian base-256 reading of the bytes. With `radix=1000` every byte
    becomes a three-digit decimal group, so `"fortnite"` reads as `102111114116110105116101`.

    Args:
        message: The bytes to convert. Text is UTF-8 encoded first.
        radix: Digit radix. Every byte must be below it. Defaults to 256.

    Returns:
        The representative number.
    """
    if isinstance(message, str):
        message = message.encode("utf-8")
    return BigInteger.from_digits(message, radix)


def number_to_string(number: BigInteger | int, radix: int = 256) -> bytes:
    """Inverse of `string_to_number()`.

    Leading zero bytes do not survive the round trip, and zero gives an empty string.

    Raises:
        InvalidArgument: If the number is negative or a digit does not fit a byte.
    """
    digits = BigInteger(number).to_digits(radix)
    if any(digit > 0xFF for digit in digits):
        raise InvalidArgument("Number does not encode a byte string in this radix.")
    return bytes(digits)


def encrypt_bytes(message: bytes | str, public_key: PublicKey, radix: int = 256) -> BigInteger:
    """Encode and encrypt a byte string in one go. Unpadded, so unsafe outside of teaching."""
    warnings.warn("Textbook RSA is unpadded and insecure! Please use with care.", RuntimeWarning)
    return encrypt(string_to_number(message, radix), public_key)


def decrypt_bytes(ciphertext: BigInteger | int, private_key: PrivateKey, radix: int = 256) -> bytes:
    """Decrypt and decode what `encrypt_bytes()` produced."""
    return number_to_string(decrypt(ciphertext, private_key), radix)
