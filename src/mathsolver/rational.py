# -----------------------------------------------------------------------------
# Number display helpers
# Purpose:
#   Format floats for term strings (no trailing ".0", no scientific notation)
#   and render a best-effort small-denominator fraction for human-readable
#   traces. Display only: solver arithmetic never goes through these strings.
# -----------------------------------------------------------------------------

from __future__ import annotations
import math
from fractions import Fraction
from typing import Union

Number = Union[int, float, Fraction]

# Fractions whose numerator or denominator need more digits than this fall
# back to the 2-decimal string.
MAX_FRACTION_DIGITS = 2


def format_number(value: Number) -> str:
    """
    Plain numeric text usable inside a term string.
      2.0  -> "2"
      -0.0 -> "0"
      0.25 -> "0.25"
      1e-05 -> "0.00001"
    """
    value = float(value)
    if math.isinf(value):
        return "+inf" if value > 0 else "-inf"
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        # term grammar has no exponent notation; expand it
        text = format(value, ".20f").rstrip("0").rstrip(".")
    return text


def exact(value: Number) -> Fraction:
    """Exact rational view of a number, reading floats by their decimal text."""
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int):
        return Fraction(value)
    return Fraction(format_number(value))


def _two_decimals(value: float) -> str:
    text = f"{value:.2f}".replace(".00", "")
    return "0" if text in ("-0", "0") else text


def rational_display(value: Number | None, latex: bool = False) -> str:
    """
    Render `value` as n/d when a compact fraction exists, else with 2 decimals.

    The value is rounded to 2 decimal places, scaled by 10^k (k = number of
    decimals kept) and reduced by the GCD. Both numerator and denominator must
    fit in MAX_FRACTION_DIGITS digits for the fraction form to be used.
    """
    if value is None:
        return "1"
    value = float(value)
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        if latex:
            return "+\\infty" if value > 0 else "-\\infty"
        return "+∞" if value > 0 else "-∞"

    two_dec = _two_decimals(value)
    digits = f"{abs(value):.2f}".rstrip("0").rstrip(".")
    if digits in ("", "0"):
        return two_dec
    decimals = len(digits.split(".")[1]) if "." in digits else 0
    denominator = 10 ** decimals
    numerator = int(digits.replace(".", ""))
    divisor = math.gcd(numerator, denominator) or 1
    numerator //= divisor
    denominator //= divisor

    if denominator == 1:
        return two_dec
    if len(str(numerator)) > MAX_FRACTION_DIGITS or len(str(denominator)) > MAX_FRACTION_DIGITS:
        return two_dec

    sign = "-" if value < 0 else ""
    if latex:
        return f"{sign}\\frac{{{numerator}}}{{{denominator}}}"
    return f"{sign}{numerator}/{denominator}"
