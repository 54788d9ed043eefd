import dataclasses
import enum
from pathlib import PurePosixPath

import pytest

from vgrender.hashing import hash_combine, hash_value


class _Colour(enum.Enum):
    RED = 7
    GREEN = 9


@dataclasses.dataclass
class _Pair:
    left: int
    right: str


def test_combine_zero_seed_zero_value():
    assert hash_combine(0, 0) == 0x9E3779B9


def test_combine_without_values_returns_seed():
    assert hash_combine(12345) == 12345


def test_combine_zero_seed_single_int():
    assert hash_combine(0, 1) == 0x9E3779BA


def test_combine_order_matters():
    assert hash_combine(0, 1, 2) != hash_combine(0, 2, 1)


def test_combine_variadic_equals_chained():
    assert hash_combine(0, 3, 4, 5) == hash_combine(hash_combine(hash_combine(0, 3), 4), 5)


def test_combine_stays_64_bit():
    seed = 0
    for i in range(200):
        seed = hash_combine(seed, i, "x" * i)
        assert 0 <= seed < 2 ** 64


def test_hash_int_identity():
    assert hash_value(42) == 42
    assert hash_value(True) == 1


def test_hash_negative_int_wraps():
    assert hash_value(-1) == 2 ** 64 - 1


def test_hash_enum_uses_value():
    assert hash_value(_Colour.GREEN) == hash_value(9)


def test_hash_strings_stable_and_distinct():
    assert hash_value("abc") == hash_value("abc")
    assert hash_value("abc") != hash_value("abd")


def test_hash_float_zero_signs_agree():
    assert hash_value(0.0) == hash_value(-0.0)
    assert hash_value(1.5) != hash_value(2.5)


def test_hash_path_matches_posix_string():
    assert hash_value(PurePosixPath("shaders/ui")) == hash_value("shaders/ui")


def test_hash_dataclass_equal_instances():
    assert hash_value(_Pair(1, "x")) == hash_value(_Pair(1, "x"))
    assert hash_value(_Pair(1, "x")) != hash_value(_Pair(2, "x"))


def test_hash_sequence_matches_combine():
    assert hash_value((1, 2, 3)) == hash_combine(0, 1, 2, 3)
    assert hash_value([1, 2, 3]) == hash_value((1, 2, 3))


def test_hash_unsupported_type():
    with pytest.raises(TypeError):
        hash_value(object())