"""Precision fixing and display rendering for calculator numbers."""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from keycalc.config import DEFAULT_PRECISION

# Plain notation is used for magnitudes inside [1e-6, 1e21)
_MIN_PLAIN_EXPONENT = -6
_MAX_PLAIN_EXPONENT = 21


def fix_precision(value: float, digits: int = DEFAULT_PRECISION) -> float:
    """
    Round a value to a fixed number of significant digits.

    Removes floating-point representation noise, so ``0.1 + 0.2``
    becomes ``0.3``.

    Properties:
        - Idempotent: fix_precision(fix_precision(x)) == fix_precision(x)
        - NaN and infinities pass through unchanged

    Args:
        value: The number to round
        digits: Significant digit budget (default 12)

    Returns:
        The rounded number
    """
    if math.isnan(value) or math.isinf(value):
        return value
    # Ties round away from zero
    return float(Context(prec=digits, rounding=ROUND_HALF_UP).create_decimal(value))


def format_number(value: float) -> str:
    """
    Render a number as display text.

    Integral values drop the fractional part, ``-0`` renders as ``0``,
    and non-finite values render as ``NaN``, ``Infinity`` or ``-Infinity``.

    Examples:
        >>> format_number(5.0)
        '5'
        >>> format_number(0.5)
        '0.5'
        >>> format_number(float("inf"))
        'Infinity'
        >>> format_number(1e21)
        '1e+21'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 10**_MAX_PLAIN_EXPONENT:
        return str(int(value))

    text = repr(float(value))
    if "e" not in text:
        return text

    mantissa, exponent = text.split("e")
    power = int(exponent)
    if _MIN_PLAIN_EXPONENT <= power < _MAX_PLAIN_EXPONENT:
        return format(Decimal(text), "f")
    return f"{mantissa}e{power:+d}"


def parse_number(text: str) -> float:
    """
    Parse operand text leniently.

    Blank text counts as zero and anything unparsable (a lone ``-`` or
    ``.``) becomes NaN instead of raising.
    """
    stripped = text.strip()
    if not stripped:
        return 0.0
    try:
        return float(stripped)
    except ValueError:
        return math.nan
