# -----------------------------------------------------------------------------
# Term: coefficient + optional literal part (e.g. -3x^2, +5, x)
# -----------------------------------------------------------------------------

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

from .literal import LiteralPart
from .parsing import ParseError
from .rational import format_number, rational_display

_COEFFICIENT = re.compile(r"^[+-]?(\d+(\.\d+)?|\.\d+)?$")


@dataclass(frozen=True)
class Term:
    coefficient: float
    literal: Optional[LiteralPart] = None

    @staticmethod
    def parse(chunk: str) -> "Term":
        """
        Interpret one signed chunk of an expression ("+3x^2", "-x", "5").
        Characters go to the coefficient until the first letter is seen; the
        rest is the literal part. A bare sign (or nothing) before a letter
        means a coefficient of +1 / -1.
        """
        if not chunk:
            raise ParseError("Empty term.")
        coefficient_text = ""
        literal_text = ""
        taking_coefficient = True
        for ch in chunk:
            if ch.isalpha():
                taking_coefficient = False
            if taking_coefficient:
                coefficient_text += ch
            else:
                literal_text += ch

        literal = LiteralPart.parse(literal_text)
        if coefficient_text in ("", "+"):
            coefficient = 1.0
        elif coefficient_text == "-":
            coefficient = -1.0
        else:
            if not _COEFFICIENT.match(coefficient_text):
                raise ParseError(f"Invalid coefficient in term: {chunk!r}")
            coefficient = float(coefficient_text)

        if literal is None and coefficient_text in ("", "+", "-"):
            raise ParseError(f"Dangling sign without a value: {chunk!r}")
        return Term(coefficient=coefficient, literal=literal)

    @property
    def exponent(self) -> float:
        return self.literal.exponent if self.literal else 0

    @property
    def is_constant(self) -> bool:
        return self.literal is None or self.literal.exponent == 0

    @property
    def key(self) -> str:
        return self.literal.key if self.literal else ""

    def negated(self) -> "Term":
        return Term(coefficient=-self.coefficient, literal=self.literal)

    def scaled(self, factor: float) -> "Term":
        return Term(coefficient=self.coefficient * factor, literal=self.literal)

    def format(self, as_fraction: bool = False) -> str:
        # Always signed; the member strips the leading '+' of its first term.
        if self.literal is not None and self.coefficient in (1, -1):
            sign = "+" if self.coefficient == 1 else "-"
            return f"{sign}{self.literal.format()}"
        number = rational_display(self.coefficient) if as_fraction else format_number(self.coefficient)
        if not number.startswith("-"):
            number = f"+{number}"
        if self.literal is not None:
            number += self.literal.format()
        return number

    def __str__(self) -> str:
        return self.format()
