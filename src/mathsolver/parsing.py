# -----------------------------------------------------------------------------
# Expression splitting for the equation grammar
#   <member> "=" <member>, members are concatenations of signed terms:
#   [sign][digits[.digits]][letter[^digits[.digits]]]
# -----------------------------------------------------------------------------

from __future__ import annotations
import re
from typing import Iterable, List, Tuple

# Raised for any malformed equation/term string; never coerced to a default.
class ParseError(ValueError): pass

# Raised when a well-formed function has no meaning for the requested
# operation (zero leading coefficient, fractional exponent in an algebraic
# routine, x^-1 antiderivative, ...).
class DomainError(ValueError): pass

_WHITESPACE = re.compile(r"\s+")


def strip_spaces(text: str) -> str:
    return _WHITESPACE.sub("", text or "")


def split_expression(expression: str, delimiters: Iterable[str] = ("+", "-")) -> List[str]:
    """
    Split an expression into chunks at each delimiter character.

    A delimiter is a split point unless it is the very first character of the
    expression, so a leading unary sign stays attached to the first chunk.
    The delimiter itself starts the next chunk:
        "2x^2+3x-5"  -> ["2x^2", "+3x", "-5"]
        "-x+1"       -> ["-x", "+1"]
    """
    delims = set(delimiters)
    chunks: List[str] = []
    current = ""
    for i, ch in enumerate(expression):
        if ch in delims and i != 0:
            chunks.append(current)
            current = ch
        else:
            current += ch
    if current:
        chunks.append(current)
    return chunks


def split_members(text: str) -> Tuple[str, str]:
    """Split an equation on its single '=' into two non-empty raw members."""
    cleaned = strip_spaces(text)
    if not cleaned:
        raise ParseError("Empty equation.")
    count = cleaned.count("=")
    if count == 0:
        raise ParseError(f"Missing '=' in equation: {text!r}")
    if count > 1:
        raise ParseError(f"Equation has more than one '=': {text!r}")
    left, right = cleaned.split("=")
    if not left or not right:
        raise ParseError(f"Empty member in equation: {text!r}")
    return left, right
