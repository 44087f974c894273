"""
Unit tests for request number parsing.
"""

import time
import pytest

from billing.utils.number_utils import INTEGER_MAX, to_db_id, to_positive_int


class TestToDbId:

    @pytest.mark.parametrize('raw, expected', [
        (1, 1),
        ('42', 42),
        (' 7 ', 7),
        (INTEGER_MAX, INTEGER_MAX),
        (INTEGER_MAX + 1, None),
        (99999999999, None),
        (0, None),
        (-3, None),
        ('abc', None),
        ('1e3', None),
        (None, None),
        (True, None),
    ])
    def test_parse(self, raw, expected):
        assert to_db_id(raw) == expected


class TestToPositiveInt:

    @pytest.mark.parametrize('raw, expected', [
        (2, 2),
        ('3', 3),
        (2.7, 2),
        ('1e2', 100),
        (INTEGER_MAX, INTEGER_MAX),
        (INTEGER_MAX + 1, None),
        ('1e30', None),
        ('1e2000000', None),
        ('1e-2000000', None),
        (0, None),
        (-1, None),
        ('Infinity', None),
        ('abc', None),
    ])
    def test_parse(self, raw, expected):
        assert to_positive_int(raw) == expected

    def test_huge_exponent_is_rejected_quickly(self):
        started = time.perf_counter()
        assert to_positive_int('1e2000000') is None
        assert to_positive_int('9e999999999') is None
        assert time.perf_counter() - started < 1
