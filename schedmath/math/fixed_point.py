"""17.14 fixed-point arithmetic over a signed 32-bit integer.

This module implements the fixed-point real arithmetic used by the 4.4BSD
scheduler formulas (load average, recent CPU, priority decay) in
environments without floating point. The layout is:

  - 1 sign bit, 17 integer bits, 14 fractional bits
  - F = 1 << 14 = 16384 (scaling factor)

A real number r is stored as the integer r * F. Every result is narrowed to
a signed 32-bit value, so out-of-range results wrap exactly as native
integer arithmetic does. Multiplication and division of two fixed-point
values go through a widened 64-bit intermediate before narrowing.

Reference:
https://web.stanford.edu/class/cs140/projects/pintos/pintos_7.html#SEC135
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import ClassVar

from schedmath.math.errors import FixedPointError, FixedPointZeroDivision, Int32Overflow
from schedmath.math.int32 import div_trunc, wrap_int32, wrap_int64

__all__ = [
    # Classes
    "Fixed",
    # Errors
    "FixedPointError",
    "FixedPointZeroDivision",
    "Int32Overflow",
    # Functions
    "int_to_fp",
    "fp_to_int",
    "fp_to_int_round",
    "add_fp",
    "add_mixed",
    "sub_fp",
    "sub_mixed",
    "mult_fp",
    "mult_mixed",
    "div_fp",
    "div_mixed",
    # Constants
    "F",
    "FRACTION_BITS",
]

FRACTION_BITS = 14
F = 1 << FRACTION_BITS  # 16384


# =============================================================================
# Fixed class (nominal type for 17.14 values)
# =============================================================================


class Fixed:
    """17.14 fixed-point number stored as a signed 32-bit int.

    Fixed deliberately does not subclass int: a plain integer can only become
    a fixed-point value through int_to_fp() or an explicit raw constructor.
    Example: 1.5 is stored as 24576 (1.5 * 16384)
    """

    ONE_RAW: ClassVar[int] = F

    __slots__ = ("_raw",)
    _raw: int

    def __init__(self, raw: int) -> None:
        """Create Fixed from a raw scaled value (narrowed to 32 bits)."""
        self._raw = wrap_int32(_require_int(raw, "raw"))

    @property
    def raw(self) -> int:
        """The underlying 32-bit encoding (real value * F)."""
        return self._raw

    @classmethod
    def from_raw(cls, raw: int) -> Fixed:
        """Create from a raw encoding (already scaled by F)."""
        return cls(raw)

    @classmethod
    def from_int(cls, n: int) -> Fixed:
        """Create from integer (will be scaled by F)."""
        return int_to_fp(n)

    @classmethod
    def from_decimal(cls, d: Decimal) -> Fixed:
        """Create from decimal, rounding to the nearest encoding.

        Uses ROUND_HALF_UP, which rounds ties away from zero, matching
        fp_to_int_round().
        """
        scaled = (Decimal(d) * F).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return cls(int(scaled))

    def to_decimal(self) -> Decimal:
        """Convert to Decimal for display (exact)."""
        return Decimal(self._raw) / Decimal(F)

    # --- Operators (delegate to the named primitives) ---

    def __add__(self, other: Fixed) -> Fixed:
        if not isinstance(other, Fixed):
            raise TypeError(
                f"Fixed + {type(other).__name__} is not allowed; use add_mixed() for integers"
            )
        return add_fp(self, other)

    def __sub__(self, other: Fixed) -> Fixed:
        if not isinstance(other, Fixed):
            raise TypeError(
                f"Fixed - {type(other).__name__} is not allowed; use sub_mixed() for integers"
            )
        return sub_fp(self, other)

    def __mul__(self, other: Fixed | int) -> Fixed:
        """Multiply by a Fixed (mult_fp) or a plain int (mult_mixed)."""
        if isinstance(other, Fixed):
            return mult_fp(self, other)
        if not _is_plain_int(other):
            return NotImplemented
        return mult_mixed(self, other)

    def __rmul__(self, other: int) -> Fixed:
        if not _is_plain_int(other):
            return NotImplemented
        return mult_mixed(self, other)

    def __truediv__(self, other: Fixed | int) -> Fixed:
        """Divide by a Fixed (div_fp) or a plain int (div_mixed)."""
        if isinstance(other, Fixed):
            return div_fp(self, other)
        if not _is_plain_int(other):
            return NotImplemented
        return div_mixed(self, other)

    def __neg__(self) -> Fixed:
        return Fixed(-self._raw)

    # --- Comparison (only against other Fixed values) ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._raw == other._raw

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._raw < other._raw

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._raw <= other._raw

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._raw > other._raw

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self._raw >= other._raw

    def __hash__(self) -> int:
        return hash(("Fixed", self._raw))

    def __repr__(self) -> str:
        return f"Fixed({self._raw})"

    def __str__(self) -> str:
        return str(self.to_decimal())


def _require_fixed(x: object, name: str) -> Fixed:
    if not isinstance(x, Fixed):
        raise TypeError(
            f"{name} must be Fixed, got {type(x).__name__}; convert integers with int_to_fp()"
        )
    return x


def _is_plain_int(n: object) -> bool:
    # bool is an int subclass but never a meaningful operand here
    return isinstance(n, int) and not isinstance(n, bool)


def _require_int(n: object, name: str) -> int:
    if not _is_plain_int(n):
        raise TypeError(f"{name} must be int, got {type(n).__name__}")
    return n  # type: ignore[return-value]


# =============================================================================
# Conversions
# =============================================================================


def int_to_fp(n: int) -> Fixed:
    """Convert integer n to fixed point: n * F."""
    n = _require_int(n, "n")
    return Fixed(wrap_int32(n * F))


def fp_to_int(x: Fixed) -> int:
    """Convert fixed point to integer, rounding toward zero."""
    x = _require_fixed(x, "x")
    return div_trunc(x.raw, F)


def fp_to_int_round(x: Fixed) -> int:
    """Convert fixed point to integer, rounding to nearest.

    Ties round away from zero: 3.5 -> 4, -3.5 -> -4. Adding (or subtracting)
    F/2 before a truncating division gives that behaviour. Python's floor
    division would round -3.4 to -4, so div_trunc is required here.
    """
    x = _require_fixed(x, "x")
    if x.raw >= 0:
        return div_trunc(wrap_int32(x.raw + F // 2), F)
    return div_trunc(wrap_int32(x.raw - F // 2), F)


# =============================================================================
# Addition and subtraction (same scale, plain integer arithmetic)
# =============================================================================


def add_fp(x: Fixed, y: Fixed) -> Fixed:
    """Add two fixed-point values: x + y."""
    x, y = _require_fixed(x, "x"), _require_fixed(y, "y")
    return Fixed(wrap_int32(x.raw + y.raw))


def add_mixed(x: Fixed, n: int) -> Fixed:
    """Add integer n to fixed-point x: x + n * F."""
    x, n = _require_fixed(x, "x"), _require_int(n, "n")
    return Fixed(wrap_int32(x.raw + wrap_int32(n * F)))


def sub_fp(x: Fixed, y: Fixed) -> Fixed:
    """Subtract y from x: x - y."""
    x, y = _require_fixed(x, "x"), _require_fixed(y, "y")
    return Fixed(wrap_int32(x.raw - y.raw))


def sub_mixed(x: Fixed, n: int) -> Fixed:
    """Subtract integer n from fixed-point x: x - n * F."""
    x, n = _require_fixed(x, "x"), _require_int(n, "n")
    return Fixed(wrap_int32(x.raw - wrap_int32(n * F)))


# =============================================================================
# Multiplication and division
# =============================================================================


def mult_fp(x: Fixed, y: Fixed) -> Fixed:
    """Multiply two fixed-point values: (x * y) / F.

    The product of two scaled values carries a factor of F^2 and can exceed
    32 bits for ordinary inputs (100.0 * 100.0 already does), so it is formed
    in a 64-bit intermediate and only the rescaled quotient is narrowed.
    """
    x, y = _require_fixed(x, "x"), _require_fixed(y, "y")
    product = wrap_int64(x.raw * y.raw)
    return Fixed(wrap_int32(div_trunc(product, F)))


def mult_mixed(x: Fixed, n: int) -> Fixed:
    """Multiply fixed-point x by integer n: x * n (no rescaling)."""
    x, n = _require_fixed(x, "x"), _require_int(n, "n")
    return Fixed(wrap_int32(x.raw * n))


def div_fp(x: Fixed, y: Fixed) -> Fixed:
    """Divide two fixed-point values: (x * F) / y.

    x is widened to 64 bits before scaling by F, then divided with
    truncation toward zero and narrowed back to 32 bits.

    Raises:
        FixedPointZeroDivision: If y is zero
    """
    x, y = _require_fixed(x, "x"), _require_fixed(y, "y")
    if y.raw == 0:
        raise FixedPointZeroDivision(f"Fixed-point division by zero: {x!r} / {y!r}")
    scaled = wrap_int64(x.raw * F)
    return Fixed(wrap_int32(div_trunc(scaled, y.raw)))


def div_mixed(x: Fixed, n: int) -> Fixed:
    """Divide fixed-point x by integer n: x / n (truncating).

    Raises:
        FixedPointZeroDivision: If n is zero
    """
    x, n = _require_fixed(x, "x"), _require_int(n, "n")
    if n == 0:
        raise FixedPointZeroDivision(f"Fixed-point division by zero: {x!r} / 0")
    return Fixed(wrap_int32(div_trunc(x.raw, n)))
