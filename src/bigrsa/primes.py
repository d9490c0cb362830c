"""Number theory on BigInteger: primality testing and random prime generation.

Primality uses Miller-Rabin over the fixed witness set {2, 3, 5, 7, 11, 13}, optionally hardened with extra random
witnesses. Prime generation is rejection sampling over a uniform draw from an interval, with a cheap trial division
by cached small primes ahead of the expensive test. Also home to the Euclidean helpers that key generation needs.

Typical usage example:

    is_prime(BigInteger(561))
    p = generate_prime_with_bit_length(256)
    d = mod_inverse(BigInteger(65537), totient)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from bigrsa import random_source
from bigrsa.bignum import BigInteger
from bigrsa.bignum import ONE
from bigrsa.bignum import TWO
from bigrsa.bignum import ZERO
from bigrsa.errors import GenerationBudgetExceeded
from bigrsa.errors import InvalidArgument

logger = logging.getLogger(__name__)

WITNESSES: tuple[int, ...] = (2, 3, 5, 7, 11, 13)
MIN_SAFE_PRIME_BITS: int = 512
TRIAL_DIVISION_BOUND: int = 2000

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0
_WITNESS_VALUES = tuple(BigInteger(a) for a in WITNESSES)


def _sieve(n: int) -> list[int]:
    """Sieve of Eratosthenes over odd numbers only, primes up to and including `n`."""
    if n < 2:
        return []
    odd_count = (n - 1) // 2
    marks = bytearray([1]) * odd_count
    i = 0
    while (2 * i + 3)**2 <= n:
        if marks[i]:
            step = 2 * i + 3
            start = (step * step - 3) // 2
            marks[start::step] = bytes(len(range(start, odd_count, step)))
        i += 1
    return [2] + [2 * i + 3 for i, mark in enumerate(marks) if mark]


def get_pre_primes(n: int = TRIAL_DIVISION_BOUND, change: bool = False) -> list[int]:
    """Get the small primes up to `n`, sieving only when the cache cannot answer.

    Args:
        n: Upper bound of the primes needed. Must be >= 0.
        change: Force a fresh sieve even when the cache already covers `n`. Defaults to False.

    Returns:
        Ascending list of primes, covering at least `n` unless `change` is set.

    Raises:
        InvalidArgument: If `n` is negative.
    """
    if n < 0:
        raise InvalidArgument("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(candidate: BigInteger, bound: int = TRIAL_DIVISION_BOUND) -> bool:
    """False if a small prime divides `candidate` (other than `candidate` itself), True otherwise."""
    if candidate < 2:
        return False
    for prime in get_pre_primes(bound):
        if candidate < prime * prime:
            return True
        if (candidate % prime).is_zero:
            return False
    return True


def _passes_witness(n: BigInteger, a: BigInteger, d: BigInteger, r: int) -> bool:
    n_minus_one = n - ONE
    x = a.modular_exponentiation(d, n)
    if x == ONE or x == n_minus_one:
        return True
    for _ in range(r - 1):
        x = x.modular_exponentiation(TWO, n)
        if x == n_minus_one:
            return True
    return False


def is_prime(n: BigInteger | int, extra_rounds: int = 0) -> bool:
    """Miller-Rabin primality test.

    Writes `n - 1 = d * 2**r` and tries every fixed witness below `n - 1`; the first witness that proves `n`
    composite ends the test. The fixed set is exact well past 64 bits but is no proof for arbitrary sizes, hence
    `extra_rounds`.

    Args:
        n: The number to test.
        extra_rounds: Additional witnesses drawn uniformly from `[2, n - 2]`. Defaults to 0.
            See `rounds_for_size()` for a size-based suggestion.

    Returns:
        True if `n` is probably prime, False if it is certainly composite.
    """
    n = BigInteger(n)
    if n <= ONE:
        return False
    if n <= 3:
        return True
    d = n - ONE
    r = 0
    while d.is_even:
        d = d // TWO
        r += 1
    n_minus_one = n - ONE
    for a in _WITNESS_VALUES:
        if a >= n_minus_one:
            continue
        if not _passes_witness(n, a, d, r):
            return False
    for _ in range(extra_rounds):
        a = random_source.get_big_range(TWO, n - TWO)
        if not _passes_witness(n, a, d, r):
            return False
    return True


def rounds_for_size(n: BigInteger | int) -> int:
    """Suggested number of extra Miller-Rabin rounds for `n`, after FIPS 186-5 Appendix C.1."""
    bits = BigInteger(n).bit_length()
    if bits <= 64:
        return 0
    if bits <= 512:
        return 40
    if bits <= 1024:
        return 56
    if bits <= 1536:
        return 64
    if bits <= 2048:
        return 70
    return 74


def generate_prime(low: BigInteger | int,
                   high: BigInteger | int,
                   max_attempts: int | None = None,
                   extra_rounds: int = 0) -> BigInteger:
    """Draw a random prime from the inclusive interval `[low, high]`.

    Candidates are drawn uniformly until one passes trial division and `is_prime()`.

    Args:
        low: Lower bound, inclusive. Must be >= 2.
        high: Upper bound, inclusive. Must be >= `low`.
        max_attempts: Give up after this many candidates. Defaults to None, which retries forever.
        extra_rounds: Passed to `is_prime()`.

    Returns:
        A probable prime in `[low, high]`.

    Raises:
        InvalidArgument: If the interval is empty or starts below 2.
        GenerationBudgetExceeded: If `max_attempts` candidates were all composite.
    """
    low, high = BigInteger(low), BigInteger(high)
    if low > high or low < TWO:
        raise InvalidArgument("Invalid range for prime generation.")
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        candidate = random_source.get_big_range(low, high)
        if _trial_division(candidate) and is_prime(candidate, extra_rounds):
            logger.debug("Found prime after %d candidates.", attempts)
            return candidate
    raise GenerationBudgetExceeded(attempts)


def generate_prime_with_bit_length(bits: int, max_attempts: int | None = None, extra_rounds: int = 0) -> BigInteger:
    """Random prime with exactly `bits` bits, drawn from `[2**(bits-1), 2**bits - 1]`.

    Raises:
        InvalidArgument: If `bits` < 2.
    """
    if bits < 2:
        raise InvalidArgument("Bit length must be at least 2.")
    low = TWO.power(bits - 1)
    high = TWO.power(bits) - ONE
    return generate_prime(low, high, max_attempts, extra_rounds)


def is_rsa_safe(p: BigInteger | int) -> bool:
    """True if both `p` and `(p - 1) / 2` are prime."""
    p = BigInteger(p)
    return is_prime(p) and is_prime((p - ONE) // TWO)


def generate_rsa_safe_prime(bits: int, max_attempts: int | None = None) -> BigInteger:
    """Generate a safe prime `p = 2q + 1` of exactly `bits` bits.

    Args:
        bits: Target bit length. Must be at least `MIN_SAFE_PRIME_BITS`.
        max_attempts: Give up after this many Sophie Germain candidates `q`. Defaults to None (forever).

    Returns:
        A prime `p` such that `(p - 1) / 2` is prime too.

    Raises:
        InvalidArgument: If `bits` is below the security floor.
        GenerationBudgetExceeded: If the attempt budget ran out.
    """
    if bits < MIN_SAFE_PRIME_BITS:
        raise InvalidArgument(f"Safe primes need at least {MIN_SAFE_PRIME_BITS} bits.")
    low = TWO.power(bits - 1)
    high = TWO.power(bits) - ONE
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        q = generate_prime_with_bit_length(bits - 1)
        p = q * TWO + ONE
        if low <= p <= high and _trial_division(p) and is_prime(p):
            logger.debug("Found %d-bit safe prime after %d attempts.", bits, attempts)
            return p
    raise GenerationBudgetExceeded(attempts, "safe prime")


def extended_gcd(a: BigInteger | int, b: BigInteger | int) -> tuple[BigInteger, BigInteger, BigInteger]:
    """Iterative Extended Euclidean Algorithm.

    Such that `a*s + b*t == g == gcd(a, b)`.

    Args:
        a: The first integer.
        b: The second integer.

    Returns:
        Tuple of (g, s, t).
    """
    r0, r1 = BigInteger(a), BigInteger(b)
    s0, s1, t0, t1 = ONE, ZERO, ZERO, ONE
    while not r1.is_zero:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    if r0.is_negative:
        r0, s0, t0 = -r0, -s0, -t0
    return r0, s0, t0


def gcd(a: BigInteger | int, b: BigInteger | int) -> BigInteger:
    return extended_gcd(a, b)[0]


def mod_inverse(a: BigInteger | int, m: BigInteger | int) -> BigInteger:
    """The `d` in `[0, m)` with `a*d == 1 (mod m)`.

    Raises:
        InvalidArgument: If `m` is not positive or `a` is not invertible modulo `m`.
    """
    m = BigInteger(m)
    if m <= ZERO:
        raise InvalidArgument("Modulus must be positive.")
    g, s, _ = extended_gcd(a, m)
    if g != ONE:
        raise InvalidArgument("No modular inverse exists.")
    return s % m
