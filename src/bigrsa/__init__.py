"""RSA from first principles, on a home-grown arbitrary-precision integer.

Provides an immutable `BigInteger` with exact multi-precision arithmetic, Miller-Rabin primality testing and
random prime generation on top of it, and textbook (unpadded) RSA key generation, encryption and decryption with a
byte-string codec. Academic in spirit, no padding and no constant-time guarantees.

Typical usage example:

    pair = generate_key_pair(512)
    c = encrypt(string_to_number("Hi there!"), pair.public_key)
    r = number_to_string(decrypt(c, pair.private_key))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from bigrsa.bignum import BigInteger
from bigrsa.errors import BigRSAError
from bigrsa.errors import CiphertextTooLarge
from bigrsa.errors import DivisionByZero
from bigrsa.errors import GenerationBudgetExceeded
from bigrsa.errors import InvalidArgument
from bigrsa.errors import KeyGenerationFailure
from bigrsa.errors import MessageTooLarge
from bigrsa.errors import Overflow
from bigrsa.errors import RandomSourceFailure
from bigrsa.primes import generate_prime
from bigrsa.primes import generate_prime_with_bit_length
from bigrsa.primes import generate_rsa_safe_prime
from bigrsa.primes import is_prime
from bigrsa.primes import is_rsa_safe
from bigrsa.rsa import decrypt
from bigrsa.rsa import encrypt
from bigrsa.rsa import generate_key_pair
from bigrsa.rsa import KeyPair
from bigrsa.rsa import number_to_string
from bigrsa.rsa import PrivateKey
from bigrsa.rsa import PublicKey
from bigrsa.rsa import string_to_number

__version__ = "0.1.0"
__all__ = [
    "BigInteger",
    "KeyPair",
    "PublicKey",
    "PrivateKey",
    "generate_key_pair",
    "encrypt",
    "decrypt",
    "string_to_number",
    "number_to_string",
    "is_prime",
    "is_rsa_safe",
    "generate_prime",
    "generate_prime_with_bit_length",
    "generate_rsa_safe_prime",
    "BigRSAError",
    "InvalidArgument",
    "DivisionByZero",
    "Overflow",
    "MessageTooLarge",
    "CiphertextTooLarge",
    "KeyGenerationFailure",
    "RandomSourceFailure",
    "GenerationBudgetExceeded",
]
