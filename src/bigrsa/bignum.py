"""Arbitrary-precision signed integers, built from first principles.

A `BigInteger` is a sign flag plus a magnitude stored as little-endian limbs in radix 10**9, so every limb holds
nine decimal digits and conversion to and from decimal text is linear. Instances are immutable: every operation
returns a new value and zero is never negative.

Division follows the floor convention of Python's own `int` (the remainder takes the sign of the divisor), and a
single internal routine backs `//`, `%`, `divmod` and the reductions inside modular exponentiation.

Typical usage example:

    a = BigInteger("123456789012345678901234567890")
    b = BigInteger(-42)
    q, r = divmod(a, b)
    c = pow(a, BigInteger(65537), BigInteger("1000000007"))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from typing import Iterable, Union

from bigrsa.errors import DivisionByZero
from bigrsa.errors import InvalidArgument
from bigrsa.errors import Overflow

DIGITS_PER_LIMB = 9
RADIX = 10**DIGITS_PER_LIMB

Limbs = tuple[int, ...]


def _normalize(limbs: list[int]) -> Limbs:
    """Strip most-significant zero limbs, keeping a lone zero limb for zero."""
    end = len(limbs)
    while end > 1 and limbs[end - 1] == 0:
        end -= 1
    if end == 0:
        return (0,)
    return tuple(limbs[:end])


def _cmp_mag(a: Limbs, b: Limbs) -> int:
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            return -1 if x < y else 1
    return 0


def _add_mag(a: Limbs, b: Limbs) -> Limbs:
    if len(a) < len(b):
        a, b = b, a
    out = []
    carry = 0
    for i, limb in enumerate(a):
        total = limb + carry + (b[i] if i < len(b) else 0)
        if total >= RADIX:
            out.append(total - RADIX)
            carry = 1
        else:
            out.append(total)
            carry = 0
    if carry:
        out.append(carry)
    return _normalize(out)


def _sub_mag(a: Limbs, b: Limbs) -> Limbs:
    """Subtract magnitude `b` from magnitude `a`. Requires `a >= b`."""
    out = []
    borrow = 0
    for i, limb in enumerate(a):
        diff = limb - borrow - (b[i] if i < len(b) else 0)
        if diff < 0:
            diff += RADIX
            borrow = 1
        else:
            borrow = 0
        out.append(diff)
    return _normalize(out)


def _mul_small(a: Limbs, k: int) -> Limbs:
    """Multiply magnitude `a` by a single limb `k` (0 <= k < RADIX)."""
    if k == 0:
        return (0,)
    out = []
    carry = 0
    for limb in a:
        carry, low = divmod(limb * k + carry, RADIX)
        out.append(low)
    if carry:
        out.append(carry)
    return _normalize(out)


def _mul_mag(a: Limbs, b: Limbs) -> Limbs:
    """Grade-school multiplication, O(len(a) * len(b)) limb products."""
    if len(b) == 1:
        return _mul_small(a, b[0])
    if len(a) == 1:
        return _mul_small(b, a[0])
    out = [0] * (len(a) + len(b))
    for j, bj in enumerate(b):
        if not bj:
            continue
        carry = 0
        for i, ai in enumerate(a):
            carry, out[i + j] = divmod(out[i + j] + ai * bj + carry, RADIX)
        k = j + len(a)
        while carry:
            carry, out[k] = divmod(out[k] + carry, RADIX)
            k += 1
    return _normalize(out)


def _divmod_small(a: Limbs, k: int) -> tuple[Limbs, int]:
    """Short division of magnitude `a` by a single non-zero limb `k`."""
    quotient = [0] * len(a)
    rem = 0
    for i in range(len(a) - 1, -1, -1):
        quotient[i], rem = divmod(rem * RADIX + a[i], k)
    return _normalize(quotient), rem


def _divmod_mag(a: Limbs, b: Limbs) -> tuple[Limbs, Limbs]:
    """Long division of magnitudes, one limb of the dividend at a time.

    At each step the running remainder is shifted up one limb and the next dividend limb is brought down. The
    quotient limb is estimated from the two leading limbs of the divisor, which never underestimates and overshoots
    by at most two, and the estimate is then walked down by subtracting the divisor until the product fits under
    the remainder.

    Args:
        a: Dividend magnitude.
        b: Divisor magnitude, non-zero.

    Returns:
        Tuple of (quotient, remainder) magnitudes.
    """
    if _cmp_mag(a, b) < 0:
        return (0,), a
    if len(b) == 1:
        quotient, rem = _divmod_small(a, b[0])
        return quotient, (rem,)
    n = len(b)
    head = b[-1] * RADIX + b[-2]
    quotient = [0] * len(a)
    rem: Limbs = (0,)
    for i in range(len(a) - 1, -1, -1):
        rem = _normalize([a[i], *rem])
        if _cmp_mag(rem, b) < 0:
            continue
        # rem < b * RADIX here, so at most n + 1 limbs take part in the estimate.
        rem_head = 0
        for limb in reversed(rem[n - 2:]):
            rem_head = rem_head * RADIX + limb
        qhat = min(rem_head // head, RADIX - 1)
        product = _mul_small(b, qhat)
        while _cmp_mag(product, rem) > 0:
            qhat -= 1
            product = _sub_mag(product, b)
        rem = _sub_mag(rem, product)
        quotient[i] = qhat
    return _normalize(quotient), rem


def _parse_decimal(text: str) -> tuple[bool, Limbs]:
    negative = text.startswith("-")
    body = text[1:] if negative else text
    if not body or any(not "0" <= ch <= "9" for ch in body):
        raise InvalidArgument(f"Invalid decimal numeral: {text!r}")
    limbs = []
    for end in range(len(body), 0, -DIGITS_PER_LIMB):
        limb = 0
        for ch in body[max(0, end - DIGITS_PER_LIMB):end]:
            limb = limb * 10 + (ord(ch) - ord("0"))
        limbs.append(limb)
    return negative, _normalize(limbs)


def _split_int(value: int) -> tuple[bool, Limbs]:
    negative = value < 0
    value = -value if negative else value
    limbs = []
    while value:
        value, limb = divmod(value, RADIX)
        limbs.append(limb)
    return negative, _normalize(limbs)


class BigInteger:
    """Immutable arbitrary-precision signed integer.

    Supports the usual arithmetic and comparison operators, mixing freely with plain `int` operands. `//` and `%`
    use floor semantics, exactly like `int`. Three-argument `pow()` performs modular exponentiation.

    Attributes:
        limbs: Little-endian magnitude limbs in radix `RADIX`.
        is_negative: Whether the value is below zero.
    """
    __slots__ = ("_negative", "_limbs")

    def __init__(self, value: Union[str, int, "BigInteger"] = 0) -> None:
        """Build a BigInteger from a decimal numeral, a Python int or another BigInteger.

        Args:
            value: Optional leading `-` followed by one or more ASCII digits, or an integer.

        Raises:
            InvalidArgument: If the numeral is malformed or the type is not supported.
        """
        if isinstance(value, BigInteger):
            negative, limbs = value._negative, value._limbs
        elif isinstance(value, str):
            negative, limbs = _parse_decimal(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            negative, limbs = _split_int(value)
        else:
            raise InvalidArgument(f"Cannot build a BigInteger from {type(value).__name__}")
        self._negative = negative and limbs != (0,)
        self._limbs = limbs

    @classmethod
    def _make(cls, negative: bool, limbs: Limbs) -> "BigInteger":
        """Wrap already-normalized limbs without re-validating them."""
        obj = cls.__new__(cls)
        obj._negative = negative and limbs != (0,)
        obj._limbs = limbs
        return obj

    @classmethod
    def parse(cls, text: str) -> "BigInteger":
        """Parse a decimal numeral. Same as `BigInteger(text)` but refuses non-strings."""
        if not isinstance(text, str):
            raise InvalidArgument("Expected a decimal numeral string.")
        return cls(text)

    @classmethod
    def from_int(cls, value: int) -> "BigInteger":
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidArgument("Expected an integer.")
        return cls(value)

    @classmethod
    def from_digits(cls, digits: Iterable[int], radix: int) -> "BigInteger":
        """Fold a big-endian digit sequence of any radix into a value.

        Args:
            digits: Digits, most significant first. Each must be in `[0, radix)`.
            radix: The radix of the digit sequence. Must be >= 2.

        Returns:
            The non-negative value the digits represent. An empty sequence gives zero.

        Raises:
            InvalidArgument: On a bad radix or an out-of-range digit.
        """
        if radix < 2:
            raise InvalidArgument("Radix must be at least 2.")
        base = cls(radix)._limbs
        mag: Limbs = (0,)
        for digit in digits:
            if not 0 <= digit < radix:
                raise InvalidArgument(f"Digit {digit} out of range for radix {radix}.")
            mag = _add_mag(_mul_mag(mag, base), _split_int(digit)[1])
        return cls._make(False, mag)

    def to_digits(self, radix: int) -> list[int]:
        """Split a non-negative value into big-endian digits of `radix`.

        Zero yields an empty list, mirroring `from_digits`.
        """
        if radix < 2:
            raise InvalidArgument("Radix must be at least 2.")
        if self._negative:
            raise InvalidArgument("Only non-negative values can be split into digits.")
        base = BigInteger(radix)
        digits = []
        rest = self
        while not rest.is_zero:
            rest, digit = rest._divmod(base)
            digits.append(int(digit))
        digits.reverse()
        return digits

    def bit_length(self) -> int:
        """Number of bits in the magnitude, zero for zero."""
        digits = abs(self).to_digits(256)
        if not digits:
            return 0
        return (len(digits) - 1) * 8 + digits[0].bit_length()

    @property
    def limbs(self) -> Limbs:
        return self._limbs

    @property
    def is_negative(self) -> bool:
        return self._negative

    @property
    def is_zero(self) -> bool:
        return self._limbs == (0,)

    @property
    def is_even(self) -> bool:
        # RADIX is even, so the lowest limb decides parity.
        return self._limbs[0] % 2 == 0

    @property
    def is_odd(self) -> bool:
        return not self.is_even

    def compare(self, other: Union["BigInteger", int]) -> int:
        """Three-way comparison.

        Differing signs decide first, then the limb count (inverted for negatives), then the limbs from the most
        significant end (again inverted for negatives).

        Returns:
            -1, 0 or 1 as `self` is below, equal to or above `other`.
        """
        other = _coerce_arg(other)
        if self._negative != other._negative:
            return -1 if self._negative else 1
        order = _cmp_mag(self._limbs, other._limbs)
        return -order if self._negative else order

    def add(self, other: Union["BigInteger", int]) -> "BigInteger":
        other = _coerce_arg(other)
        if self._negative == other._negative:
            return BigInteger._make(self._negative, _add_mag(self._limbs, other._limbs))
        order = _cmp_mag(self._limbs, other._limbs)
        if order == 0:
            return ZERO
        if order > 0:
            return BigInteger._make(self._negative, _sub_mag(self._limbs, other._limbs))
        return BigInteger._make(other._negative, _sub_mag(other._limbs, self._limbs))

    def subtract(self, other: Union["BigInteger", int]) -> "BigInteger":
        return self.add(-_coerce_arg(other))

    def multiply(self, other: Union["BigInteger", int]) -> "BigInteger":
        other = _coerce_arg(other)
        return BigInteger._make(self._negative != other._negative, _mul_mag(self._limbs, other._limbs))

    def _divmod(self, other: "BigInteger") -> tuple["BigInteger", "BigInteger"]:
        """The one division routine: floor quotient, remainder with the divisor's sign."""
        if other.is_zero:
            raise DivisionByZero("Division by zero.")
        q_mag, r_mag = _divmod_mag(self._limbs, other._limbs)
        quotient = BigInteger._make(self._negative != other._negative, q_mag)
        remainder = BigInteger._make(self._negative, r_mag)
        if not remainder.is_zero and self._negative != other._negative:
            quotient = quotient.subtract(ONE)
            remainder = remainder.add(other)
        return quotient, remainder

    def divide(self, other: Union["BigInteger", int]) -> "BigInteger":
        """Floor division. Raises `DivisionByZero` for a zero divisor."""
        return self._divmod(_coerce_arg(other))[0]

    def modulo(self, other: Union["BigInteger", int]) -> "BigInteger":
        """Floor remainder, taking the sign of the divisor. Raises `DivisionByZero` for a zero divisor."""
        return self._divmod(_coerce_arg(other))[1]

    def power(self, exponent: int) -> "BigInteger":
        """Raise to a non-negative machine-integer power by square-and-multiply."""
        if isinstance(exponent, BigInteger):
            exponent = int(exponent)
        if exponent < 0:
            raise InvalidArgument("Exponent must be non-negative.")
        result = ONE
        base = self
        while exponent:
            if exponent & 1:
                result = result.multiply(base)
            exponent >>= 1
            if exponent:
                base = base.multiply(base)
        return result

    def modular_exponentiation(self, exponent: Union["BigInteger", int],
                               modulus: Union["BigInteger", int]) -> "BigInteger":
        """Compute `self**exponent mod modulus` by binary square-and-multiply.

        Args:
            exponent: Non-negative exponent.
            modulus: Positive modulus.

        Returns:
            The residue in `[0, modulus)`. A zero exponent gives `1 % modulus`.

        Raises:
            InvalidArgument: If the modulus is not positive or the exponent is negative.
        """
        exponent = _coerce_arg(exponent)
        modulus = _coerce_arg(modulus)
        if modulus.is_zero or modulus._negative:
            raise InvalidArgument("Modulus must be positive.")
        if exponent._negative:
            raise InvalidArgument("Exponent must be non-negative.")
        base = self.modulo(modulus)
        result = ONE.modulo(modulus)
        while not exponent.is_zero:
            if exponent.is_odd:
                result = result.multiply(base).modulo(modulus)
            exponent = exponent.divide(TWO)
            if not exponent.is_zero:
                base = base.multiply(base).modulo(modulus)
        return result

    def append_digit(self, digit: int) -> "BigInteger":
        """Shift the magnitude up one limb and place `digit` in the lowest limb."""
        if not 0 <= digit < RADIX:
            raise InvalidArgument(f"Limb must be in [0, {RADIX}).")
        return BigInteger._make(self._negative, _normalize([digit, *self._limbs]))

    def shift_left(self, places: int = 1) -> "BigInteger":
        """Multiply by `RADIX**places`."""
        if places < 0:
            raise InvalidArgument("Shift must be non-negative.")
        if self.is_zero or places == 0:
            return self
        return BigInteger._make(self._negative, (0,) * places + self._limbs)

    def to_string(self) -> str:
        parts = [str(self._limbs[-1])]
        parts.extend(f"{limb:0{DIGITS_PER_LIMB}d}" for limb in reversed(self._limbs[:-1]))
        return ("-" if self._negative else "") + "".join(parts)

    def to_bounded_int(self, bits: int = 64, signed: bool = True) -> int:
        """Convert to a machine integer of a fixed width.

        Args:
            bits: Width of the target integer type. Defaults to 64.
            signed: Whether the target type is two's complement signed. Defaults to True.

        Returns:
            The value as an `int` guaranteed to fit the target type.

        Raises:
            Overflow: If the value is outside the target type's range.
        """
        if bits < 1:
            raise InvalidArgument("Width must be at least one bit.")
        low, high = (-(1 << (bits - 1)), (1 << (bits - 1)) - 1) if signed else (0, (1 << bits) - 1)
        # Each limb needs at least 29 bits, so anything this long cannot fit.
        if len(self._limbs) > bits // 29 + 2:
            raise Overflow(f"Value does not fit in {bits} bits.")
        value = int(self)
        if not low <= value <= high:
            raise Overflow(f"Value does not fit in {bits} bits.")
        return value

    def __int__(self) -> int:
        value = 0
        for limb in reversed(self._limbs):
            value = value * RADIX + limb
        return -value if self._negative else value

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigInteger('{self.to_string()}')"

    def __hash__(self) -> int:
        return hash(int(self))

    def __bool__(self) -> bool:
        return not self.is_zero

    def __eq__(self, other: object) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._negative == other._negative and self._limbs == other._limbs

    def __lt__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) >= 0

    def __neg__(self) -> "BigInteger":
        return BigInteger._make(not self._negative, self._limbs)

    def __pos__(self) -> "BigInteger":
        return self

    def __abs__(self) -> "BigInteger":
        return BigInteger._make(False, self._limbs) if self._negative else self

    def __add__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __floordiv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._divmod(other)[0]

    def __rfloordiv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other._divmod(self)[0]

    def __mod__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._divmod(other)[1]

    def __rmod__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other._divmod(self)[1]

    def __divmod__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._divmod(other)

    def __rdivmod__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other._divmod(self)

    def __pow__(self, exponent, modulus=None):
        if modulus is None:
            if isinstance(exponent, BigInteger) or (isinstance(exponent, int) and not isinstance(exponent, bool)):
                return self.power(exponent)
            return NotImplemented
        return self.modular_exponentiation(exponent, modulus)


def _coerce(value: object):
    if isinstance(value, BigInteger):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInteger(value)
    return NotImplemented


def _coerce_arg(value: object) -> BigInteger:
    coerced = _coerce(value)
    if coerced is NotImplemented:
        raise InvalidArgument(f"Expected a BigInteger or int, got {type(value).__name__}.")
    return coerced


ZERO = BigInteger(0)
ONE = BigInteger(1)
TWO = BigInteger(2)
