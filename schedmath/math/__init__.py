"""Mathematical primitives for scheduler arithmetic.

This package provides:
- Fixed: 17.14 fixed-point values over a signed 32-bit integer
- int32 helpers: two's complement narrowing and truncating division
"""

from schedmath.math.errors import FixedPointError, FixedPointZeroDivision, Int32Overflow
from schedmath.math.fixed_point import (
    F,
    Fixed,
    add_fp,
    add_mixed,
    div_fp,
    div_mixed,
    fp_to_int,
    fp_to_int_round,
    int_to_fp,
    mult_fp,
    mult_mixed,
    sub_fp,
    sub_mixed,
)
from schedmath.math.int32 import INT32_MAX, INT32_MIN, div_trunc, wrap_int32

__all__ = [
    "F",
    "Fixed",
    "FixedPointError",
    "FixedPointZeroDivision",
    "Int32Overflow",
    "INT32_MAX",
    "INT32_MIN",
    "add_fp",
    "add_mixed",
    "div_fp",
    "div_mixed",
    "div_trunc",
    "fp_to_int",
    "fp_to_int_round",
    "int_to_fp",
    "mult_fp",
    "mult_mixed",
    "sub_fp",
    "sub_mixed",
    "wrap_int32",
]
