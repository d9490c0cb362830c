# pylint: disable=protected-access,missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import itertools
import random

import pytest

from bigrsa import bignum
from bigrsa.bignum import BigInteger
from bigrsa.errors import DivisionByZero
from bigrsa.errors import InvalidArgument
from bigrsa.errors import Overflow

RADIX = bignum.RADIX
_rng = random.Random(17092025)

edge_values = [
    0, 1, -1, 2, 9, 10, -10,
    RADIX - 1, RADIX, RADIX + 1, -RADIX,
    RADIX**2 - 1, RADIX**2, -(RADIX**2) + 1,
    2**63 - 1, -(2**63), 2**64,
    10**30 + 7, -(10**45) - 123456789,
]
random_values = [_rng.randrange(-(10**60), 10**60) for _ in range(8)] + [_rng.getrandbits(200) for _ in range(4)]
sample_values = edge_values + random_values
sample_pairs = list(itertools.combinations(sample_values[::2], 2)) + [(v, v) for v in sample_values[:6]]
nonzero_divisors = [v for v in sample_values if v != 0]
division_pairs = [(a, b) for a in sample_values[::3] for b in nonzero_divisors[::3]]


def id_generator(param):
    if isinstance(param, int) and abs(param) > 1000000:
        return f"LargeInt-{param.bit_length()}bits{'-neg' if param < 0 else ''}"
    return str(param)


@pytest.mark.parametrize("text,expected", [
    ("0", "0"),
    ("-0", "0"),
    ("000123", "123"),
    ("-000", "0"),
    ("-0000042", "-42"),
    ("1000000000", "1000000000"),
    ("999999999", "999999999"),
    ("1234567890123456789012345678901234567890", "1234567890123456789012345678901234567890"),
    ("-987654321000000000000000001", "-987654321000000000000000001"),
])
def test_parse_normalizes(text, expected):
    assert BigInteger(text).to_string() == expected
    assert str(BigInteger.parse(text)) == expected


@pytest.mark.parametrize("text", ["", "-", "+5", "12a", " 1", "1 ", "--1", "1.5", "١٢", "0x10", "1_000"])
def test_parse_rejects(text):
    with pytest.raises(InvalidArgument):
        BigInteger(text)


@pytest.mark.parametrize("value", [True, 1.0, None, b"12", [1]])
def test_construct_rejects_types(value):
    with pytest.raises(InvalidArgument):
        BigInteger(value)


def test_parse_requires_string():
    with pytest.raises(InvalidArgument):
        BigInteger.parse(12)


@pytest.mark.parametrize("value", sample_values, ids=id_generator)
def test_from_int_matches_decimal(value):
    assert BigInteger.from_int(value) == BigInteger(str(value))
    assert int(BigInteger(value)) == value
    assert str(BigInteger(value)) == str(value)


def test_zero_is_canonical():
    zero = BigInteger("-0")
    assert zero.limbs == (0,)
    assert not zero.is_negative
    assert not (-BigInteger(0)).is_negative
    assert BigInteger(5) - BigInteger(5) == bignum.ZERO
    assert not (BigInteger(-5) + BigInteger(5)).is_negative


def test_repr():
    assert repr(BigInteger(-12)) == "BigInteger('-12')"


def test_concrete_arithmetic():
    assert BigInteger("123") + BigInteger("456") == BigInteger("579")
    assert BigInteger("579") - BigInteger("456") == BigInteger("123")
    assert BigInteger("123") * BigInteger("456") == BigInteger("56088")
    assert str(BigInteger("123").add(BigInteger("456"))) == "579"
    assert str(BigInteger("579").subtract(BigInteger("456"))) == "123"
    assert str(BigInteger("123").multiply(BigInteger("456"))) == "56088"


def test_carry_across_limbs():
    assert BigInteger("999999999999999999") + 1 == BigInteger("1000000000000000000")
    assert BigInteger("1000000000000000000") - 1 == BigInteger("999999999999999999")
    assert BigInteger(RADIX - 1) * BigInteger(RADIX - 1) == (RADIX - 1)**2


@pytest.mark.parametrize("a,b", sample_pairs, ids=id_generator)
def test_add_sub_mul_match_int(a, b):
    x, y = BigInteger(a), BigInteger(b)
    assert int(x + y) == a + b
    assert int(x - y) == a - b
    assert int(y - x) == b - a
    assert int(x * y) == a * b


@pytest.mark.parametrize("a,b", division_pairs, ids=id_generator)
def test_divmod_matches_int(a, b):
    q, r = divmod(BigInteger(a), BigInteger(b))
    assert (int(q), int(r)) == divmod(a, b)
    assert int(BigInteger(a) // b) == a // b
    assert int(BigInteger(a) % b) == a % b


@pytest.mark.parametrize("a,b", division_pairs, ids=id_generator)
def test_division_law(a, b):
    x, y = BigInteger(a), BigInteger(b)
    assert x.divide(y) * y + x.modulo(y) == x


@pytest.mark.parametrize("a,b", [
    (10**40, 10**20 + 1),
    (RADIX**3 - 1, RADIX + 1),
    (RADIX**4, RADIX**2 - 1),
    (2**521 - 1, 2**127 - 1),
    (10**50 + 12345, 999999999999999999),
    (RADIX**5 + RADIX**4 - 1, RADIX**2 + RADIX - 1),
])
def test_long_division_estimate_corrections(a, b):
    q, r = divmod(BigInteger(a), BigInteger(b))
    assert (int(q), int(r)) == divmod(a, b)


def test_remainder_takes_divisor_sign():
    assert BigInteger(-7) // 2 == -4
    assert BigInteger(-7) % 2 == 1
    assert BigInteger(7) // -2 == -4
    assert BigInteger(7) % -2 == -1
    assert BigInteger(-7) % -2 == -1


@pytest.mark.parametrize("a", [0, 1, -1, 10**40, -(10**40)], ids=id_generator)
def test_division_by_zero(a):
    with pytest.raises(DivisionByZero):
        BigInteger(a).divide(bignum.ZERO)
    with pytest.raises(DivisionByZero):
        BigInteger(a).modulo(0)
    with pytest.raises(ZeroDivisionError):
        divmod(BigInteger(a), BigInteger("-0"))


def test_reflected_operators():
    assert 5 + BigInteger(3) == 8
    assert 5 - BigInteger(3) == 2
    assert 5 * BigInteger(3) == 15
    assert 17 // BigInteger(5) == 3
    assert 17 % BigInteger(5) == 2
    assert divmod(17, BigInteger(5)) == (3, 2)


def test_unsupported_operand():
    with pytest.raises(TypeError):
        _ = BigInteger(1) + 1.5
    with pytest.raises(TypeError):
        _ = BigInteger(1) < "2"
    assert BigInteger(1) != "1"


@pytest.mark.parametrize("value", sample_values, ids=id_generator)
def test_additive_identity_and_inverse(value):
    x = BigInteger(value)
    assert x + bignum.ZERO == x
    assert bignum.ZERO + x == x
    assert (x + (-x)).is_zero
    assert not (x + (-x)).is_negative


@pytest.mark.parametrize("a,b,c", list(itertools.combinations(sample_values[::3], 3)), ids=id_generator)
def test_ring_laws(a, b, c):
    x, y, z = BigInteger(a), BigInteger(b), BigInteger(c)
    assert x + y == y + x
    assert x * y == y * x
    assert (x + y) + z == x + (y + z)
    assert (x * y) * z == x * (y * z)
    assert x * (y + z) == x * y + x * z


def test_ordering_matches_int():
    values = sample_values + [-v for v in sample_values]
    big = sorted(BigInteger(v) for v in values)
    assert [int(v) for v in big] == sorted(values)


@pytest.mark.parametrize("a,b", sample_pairs, ids=id_generator)
def test_compare(a, b):
    x, y = BigInteger(a), BigInteger(b)
    assert x.compare(y) == (a > b) - (a < b)
    assert (x < y) == (a < b)
    assert (x <= y) == (a <= b)
    assert (x > y) == (a > b)
    assert (x >= y) == (a >= b)
    assert (x == y) == (a == b)


def test_compare_mixed_sign_lengths():
    assert BigInteger(-(10**20)) < BigInteger(-5)
    assert BigInteger(-5) < BigInteger(3)
    assert BigInteger(10**20) > BigInteger(5)
    assert BigInteger(-123456789123) < BigInteger(-123456789122)


def test_hash_consistent_with_int():
    assert hash(BigInteger(10**30)) == hash(10**30)
    assert {BigInteger(5): "five"}[5] == "five"
    assert len({BigInteger("7"), BigInteger(7), BigInteger("007")}) == 1


def test_abs_and_negate():
    assert abs(BigInteger(-42)) == 42
    assert abs(BigInteger(42)) == 42
    assert -BigInteger(42) == -42
    assert -BigInteger(-42) == 42
    assert +BigInteger(-3) == -3


def test_operands_untouched():
    a, b = BigInteger("123456789123456789"), BigInteger("-987654321")
    before = (a.limbs, a.is_negative, b.limbs, b.is_negative)
    _ = [a + b, a - b, a * b, a // b, a % b, -a, abs(b), pow(a, 3, 1000), a.append_digit(5), a.shift_left(2)]
    assert (a.limbs, a.is_negative, b.limbs, b.is_negative) == before


def test_parity_and_bool():
    assert BigInteger(10**18).is_even
    assert BigInteger(10**18 + 1).is_odd
    assert BigInteger(-3).is_odd
    assert not BigInteger(0)
    assert BigInteger(-1)


@pytest.mark.parametrize("base,exponent,modulus", [
    (4, 13, 497),
    (2, 10, 1000),
    (-7, 5, 13),
    (10**30 + 3, 65537, 2**127 - 1),
    (123456789, 10**20 + 1, 10**18 + 9),
    (0, 5, 7),
    (5, 1, 7),
], ids=id_generator)
def test_modular_exponentiation_matches_pow(base, exponent, modulus):
    result = BigInteger(base).modular_exponentiation(exponent, modulus)
    assert int(result) == pow(base, exponent, modulus)
    assert pow(BigInteger(base), BigInteger(exponent), BigInteger(modulus)) == result


@pytest.mark.parametrize("base", [0, 1, 2, -3, 10**40], ids=id_generator)
@pytest.mark.parametrize("modulus", [2, 7, 10**20 + 39])
def test_modular_exponentiation_zero_exponent(base, modulus):
    assert BigInteger(base).modular_exponentiation(0, modulus) == bignum.ONE


def test_modular_exponentiation_unit_modulus():
    assert BigInteger(5).modular_exponentiation(0, 1) == 0
    assert BigInteger(5).modular_exponentiation(3, 1) == 0


@pytest.mark.parametrize("exponent,modulus", [(3, 0), (3, -7), (-1, 7)])
def test_modular_exponentiation_validates(exponent, modulus):
    with pytest.raises(InvalidArgument):
        BigInteger(5).modular_exponentiation(exponent, modulus)


@pytest.mark.parametrize("base,exponent", [(2, 0), (2, 1), (2, 100), (-3, 7), (10**9, 5), (0, 0)])
def test_power(base, exponent):
    assert int(BigInteger(base).power(exponent)) == base**exponent
    assert int(BigInteger(base)**exponent) == base**exponent


def test_power_rejects_negative():
    with pytest.raises(InvalidArgument):
        BigInteger(2).power(-1)


def test_digit_shift_helpers():
    assert BigInteger("123").append_digit(4) == 123 * RADIX + 4
    assert BigInteger(0).append_digit(7) == 7
    assert BigInteger(-5).append_digit(1) == -(5 * RADIX + 1)
    assert BigInteger("123").shift_left() == 123 * RADIX
    assert BigInteger("123").shift_left(3) == 123 * RADIX**3
    assert BigInteger(0).shift_left(4).limbs == (0,)
    with pytest.raises(InvalidArgument):
        BigInteger(1).append_digit(RADIX)
    with pytest.raises(InvalidArgument):
        BigInteger(1).shift_left(-1)


@pytest.mark.parametrize("value,bits,signed", [
    (0, 64, True),
    (2**63 - 1, 64, True),
    (-(2**63), 64, True),
    (255, 8, False),
    (-128, 8, True),
    (2**64 - 1, 64, False),
])
def test_to_bounded_int(value, bits, signed):
    assert BigInteger(value).to_bounded_int(bits, signed) == value


@pytest.mark.parametrize("value,bits,signed", [
    (2**63, 64, True),
    (-(2**63) - 1, 64, True),
    (256, 8, False),
    (-1, 8, False),
    (10**100, 64, True),
    (-(10**100), 32, True),
])
def test_to_bounded_int_overflow(value, bits, signed):
    with pytest.raises(Overflow):
        BigInteger(value).to_bounded_int(bits, signed)
    with pytest.raises(OverflowError):
        BigInteger(value).to_bounded_int(bits, signed)


def test_digit_folding():
    assert BigInteger.from_digits([1, 0], 256) == 256
    assert BigInteger.from_digits(b"\x01\x00\x01", 256) == 65537
    assert BigInteger.from_digits([], 10) == 0
    assert BigInteger.from_digits([1, 2, 3], 10) == 123
    assert BigInteger(65537).to_digits(256) == [1, 0, 1]
    assert BigInteger(0).to_digits(256) == []
    assert BigInteger(10**30).to_digits(RADIX * 10) == [1, 0, 0, 0]
    assert BigInteger(3 * 10**20 + 5).to_digits(RADIX * 10) == [3, 0, 5]


@pytest.mark.parametrize("digits,radix", [([2], 2), ([256], 256), ([-1], 10), ([1], 1)])
def test_from_digits_validates(digits, radix):
    with pytest.raises(InvalidArgument):
        BigInteger.from_digits(digits, radix)


def test_to_digits_validates():
    with pytest.raises(InvalidArgument):
        BigInteger(-5).to_digits(10)
    with pytest.raises(InvalidArgument):
        BigInteger(5).to_digits(1)


@pytest.mark.parametrize("value", [0, 1, 255, 256, -256, 2**64 - 1, 2**64, 10**40], ids=id_generator)
def test_bit_length(value):
    assert BigInteger(value).bit_length() == value.bit_length()
