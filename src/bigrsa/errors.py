"""Exception hierarchy for bigrsa.

Every error derives from `BigRSAError` as well as the closest builtin exception, so callers that already catch
`ValueError` and friends keep working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class BigRSAError(Exception):
    """Base class of all bigrsa errors."""


class InvalidArgument(BigRSAError, ValueError):
    """Malformed numeral, bad interval bounds, zero modulus or undersized bit length."""


class DivisionByZero(BigRSAError, ZeroDivisionError):
    """Division or modulo by zero."""


class Overflow(BigRSAError, OverflowError):
    """Value does not fit the requested fixed-width integer."""


class MessageTooLarge(BigRSAError, ValueError):
    """Message representative is not below the modulus."""


class CiphertextTooLarge(BigRSAError, ValueError):
    """Ciphertext representative is not below the modulus."""


class KeyGenerationFailure(BigRSAError, RuntimeError):
    """Generated primes or exponents do not form a valid key."""


class RandomSourceFailure(BigRSAError, RuntimeError):
    """The operating system could not provide random bytes."""


class GenerationBudgetExceeded(BigRSAError, RuntimeError):
    """A rejection-sampling loop ran out of attempts.

    Attributes:
        attempts: Number of candidates drawn before giving up.
        retryable: Always True, a fresh call may well succeed.
    """
    retryable = True

    def __init__(self, attempts: int, what: str = "prime") -> None:
        super().__init__(f"No suitable {what} found after {attempts} attempts.")
        self.attempts = attempts
