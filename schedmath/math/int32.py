"""Native signed 32-bit integer semantics.

Python integers are unbounded and `//` floors toward negative infinity. The
fixed-point primitives need the opposite on both counts: results narrowed to
a signed machine word, and division that truncates toward zero. This module
provides those two building blocks.
"""

from __future__ import annotations

from schedmath import config
from schedmath.math.errors import FixedPointZeroDivision, Int32Overflow

__all__ = [
    "INT32_MIN",
    "INT32_MAX",
    "INT64_MIN",
    "INT64_MAX",
    "wrap_int32",
    "wrap_int64",
    "div_trunc",
]

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def _wrap(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) & ((1 << bits) - 1)) - half


def wrap_int32(value: int) -> int:
    """Narrow a Python int to a signed 32-bit value (two's complement).

    Args:
        value: Any Python integer

    Returns:
        value reduced modulo 2^32 into [INT32_MIN, INT32_MAX]

    Raises:
        Int32Overflow: If checked mode is enabled and value is out of range

    Examples:
        wrap_int32(2**31) = -2**31
        wrap_int32(-2**31 - 1) = 2**31 - 1
    """
    if INT32_MIN <= value <= INT32_MAX:
        return value

    if config.CONFIG.checked:
        raise Int32Overflow(f"Value {value} outside int32 range")

    return _wrap(value, 32)


def wrap_int64(value: int) -> int:
    """Narrow a Python int to a signed 64-bit value.

    Products of two int32 values always fit, so for the fixed-point
    primitives this is the identity. It is kept so the widened intermediates
    behave like int64_t for any input.
    """
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return _wrap(value, 64)


def div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero (C semantics).

    Python's // operator rounds toward negative infinity, but C truncates
    toward zero. This matters whenever exactly one operand is negative.

    Args:
        a: Dividend (can be positive or negative)
        b: Divisor (must be non-zero)

    Returns:
        a / b truncated toward zero

    Raises:
        FixedPointZeroDivision: If b is zero

    Examples:
        Python: -7 // 2 = -4 (rounds toward -inf)
        C: -7 / 2 = -3 (truncates toward zero)
    """
    if b == 0:
        raise FixedPointZeroDivision(f"Division by zero: {a} / 0")

    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))
