# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets

import pytest

from bigrsa import random_source
from bigrsa.bignum import BigInteger
from bigrsa.errors import InvalidArgument
from bigrsa.errors import RandomSourceFailure


@pytest.mark.parametrize("size", [0, 1, 16, 257])
def test_get_bytes_length(size):
    assert len(random_source.get_bytes(size)) == size


def test_get_bytes_rejects_negative():
    with pytest.raises(InvalidArgument):
        random_source.get_bytes(-1)


def test_get_bytes_failure(mocker):
    mocker.patch("secrets.token_bytes", side_effect=OSError("no entropy"))
    with pytest.raises(RandomSourceFailure):
        random_source.get_bytes(8)
    secrets.token_bytes.assert_called_once_with(8)


@pytest.mark.parametrize("low,high", [(0, 0), (1, 6), (10, 50), (-5, 5), (0, 2**70)])
def test_get_range_bounds(low, high):
    for _ in range(50):
        assert low <= random_source.get_range(low, high) <= high


def test_get_range_validates():
    with pytest.raises(InvalidArgument):
        random_source.get_range(5, 4)


@pytest.mark.parametrize("low,high", [(0, 0), (2, 3), (10, 50), (-(10**20), 10**20), (2**127, 2**128 - 1)])
def test_get_big_range_bounds(low, high):
    lo, hi = BigInteger(low), BigInteger(high)
    for _ in range(50):
        draw = random_source.get_big_range(lo, hi)
        assert isinstance(draw, BigInteger)
        assert lo <= draw <= hi


def test_get_big_range_covers_small_range():
    seen = {int(random_source.get_big_range(BigInteger(1), BigInteger(4))) for _ in range(400)}
    assert seen == {1, 2, 3, 4}


def test_get_big_range_rejects_biased_draws(mocker):
    # Width 200 fits one byte, draws of 200 and above would bias the low values.
    mocker.patch("bigrsa.random_source.get_bytes", side_effect=[b"\xff", b"\xc8", b"\x05"])
    assert random_source.get_big_range(BigInteger(100), BigInteger(299)) == 105
    assert random_source.get_bytes.call_count == 3


def test_get_big_range_validates():
    with pytest.raises(InvalidArgument):
        random_source.get_big_range(BigInteger(5), BigInteger(4))


def test_get_big_range_propagates_failure(mocker):
    mocker.patch("secrets.token_bytes", side_effect=OSError)
    with pytest.raises(RandomSourceFailure):
        random_source.get_big_range(BigInteger(0), BigInteger(10**30))
