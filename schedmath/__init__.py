"""schedmath - 17.14 fixed-point arithmetic for scheduler math."""

from schedmath.math import F, Fixed, fp_to_int, fp_to_int_round, int_to_fp

__version__ = "0.1.0"
__all__ = ["F", "Fixed", "fp_to_int", "fp_to_int_round", "int_to_fp", "__version__"]
