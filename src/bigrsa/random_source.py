"""Cryptographically secure randomness for prime generation.

Thin layer over the operating system CSPRNG exposed by `secrets`. Provides raw bytes plus unbiased uniform draws
from an inclusive range, both for machine integers and for `BigInteger` values. Stateless, so safe to call from
several threads at once.

Typical usage example:

    salt = get_bytes(16)
    die = get_range(1, 6)
    candidate = get_big_range(BigInteger(2) ** 511, BigInteger(2) ** 512 - 1)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets

from bigrsa.bignum import BigInteger
from bigrsa.bignum import ONE
from bigrsa.errors import InvalidArgument
from bigrsa.errors import RandomSourceFailure

_BYTE = BigInteger(256)


def get_bytes(size: int) -> bytes:
    """Read `size` random bytes from the operating system.

    Args:
        size: Number of bytes requested. Must be >= 0.

    Returns:
        The random bytes.

    Raises:
        InvalidArgument: If `size` is negative.
        RandomSourceFailure: If the operating system cannot satisfy the request.
    """
    if size < 0:
        raise InvalidArgument("size must be >= 0")
    try:
        return secrets.token_bytes(size)
    except OSError as exc:
        raise RandomSourceFailure("Failed to generate random bytes.") from exc


def get_range(low: int, high: int) -> int:
    """Uniform machine integer in `[low, high]`."""
    if low > high:
        raise InvalidArgument("low must be <= high")
    span = high - low + 1
    size = (span.bit_length() + 7) // 8
    limit = (256**size // span) * span
    while True:
        draw = int.from_bytes(get_bytes(size), "big")
        if draw < limit:
            return low + draw % span


def get_big_range(low: BigInteger, high: BigInteger) -> BigInteger:
    """Uniform BigInteger in `[low, high]`.

    Draws just enough bytes to cover the width of the range, folds them into a value and rejects draws at or above
    the largest multiple of the width the bytes can express. Accepted draws are reduced modulo the width, which keeps
    the result free of modulo bias while rejecting less than half of all draws.

    Args:
        low: Lower bound, inclusive.
        high: Upper bound, inclusive.

    Returns:
        A uniformly distributed value in `[low, high]`.

    Raises:
        InvalidArgument: If `low > high`.
    """
    low, high = BigInteger(low), BigInteger(high)
    if low > high:
        raise InvalidArgument("low must be <= high")
    span = high - low + ONE
    size = 0
    capacity = ONE
    while capacity < span:
        capacity = capacity * _BYTE
        size += 1
    limit = capacity - capacity % span
    while True:
        draw = BigInteger.from_digits(get_bytes(size), 256)
        if draw < limit:
            return low + draw % span
