"""Three-significant-figure formatting shared by displays and CSV export."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .shapes import parse_dimension

ZERO_TEXT = "0.000"
SIGNIFICANT_FIGURES = 3


def _to_precision(value: float, digits: int) -> str:
    """Render like JavaScript's ``Number.prototype.toPrecision``.

    Fixed notation while the decimal exponent is in [-6, digits), exponent
    notation (``7.85e+3``) outside it. Rounds half away from zero on the
    exact binary value.
    """
    exact = Decimal(value)
    exponent = exact.adjusted()
    rounded = exact.quantize(Decimal(1).scaleb(exponent - digits + 1), rounding=ROUND_HALF_UP)
    if rounded.adjusted() != exponent:
        # 999.6 -> 1.00e+3: rounding carried into a new leading digit
        exponent = rounded.adjusted()
        rounded = exact.quantize(Decimal(1).scaleb(exponent - digits + 1), rounding=ROUND_HALF_UP)

    if -6 <= exponent < digits:
        return format(rounded, "f")

    sign, coefficient, _ = rounded.as_tuple()
    mantissa = "".join(str(d) for d in coefficient[:digits]).ljust(digits, "0")
    if digits > 1:
        mantissa = f"{mantissa[0]}.{mantissa[1:]}"
    return f"{'-' if sign else ''}{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"


def format_value(value: Any) -> str:
    """Format a property value to 3 significant figures.

    Zero, non-finite and unreadable values render as ``"0.000"``. Numeric
    strings are accepted, so re-formatting a formatted value is a no-op.
    """
    number = parse_dimension(value)
    if number == 0 or not math.isfinite(number):
        return ZERO_TEXT
    return _to_precision(number, SIGNIFICANT_FIGURES)
