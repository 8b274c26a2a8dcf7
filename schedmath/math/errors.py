"""Fixed-point arithmetic error classes."""


class FixedPointError(ArithmeticError):
    """Base error for fixed-point operations."""

    pass


class Int32Overflow(FixedPointError, OverflowError):
    """Value does not fit in a signed 32-bit integer (checked mode only)."""

    pass


class FixedPointZeroDivision(FixedPointError, ZeroDivisionError):
    """Division by zero in div_fp, div_mixed or div_trunc."""

    pass
