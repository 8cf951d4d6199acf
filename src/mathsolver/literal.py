# -----------------------------------------------------------------------------
# Literal part of a term: one letter raised to an exponent (x, x^3, y', ...).
# A term with no literal part is a constant; that case is represented by None
# on the Term, never by a LiteralPart instance.
# -----------------------------------------------------------------------------

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

from .parsing import ParseError
from .rational import format_number

# One letter, optionally followed by prime marks (derivative labels like y'').
_LETTER = re.compile(r"^[A-Za-z]'*$")
# Exponent grammar: digits[.digits], no sign, no exponent notation.
_EXPONENT = re.compile(r"^\d+(\.\d+)?$")


@dataclass(frozen=True)
class LiteralPart:
    letter: str
    exponent: float = 1

    @staticmethod
    def parse(token: Optional[str]) -> Optional["LiteralPart"]:
        """
        Interpret a literal token such as "x", "x^3" or "t^0.5".
        None or "" means there is no literal part (constant term).
        Stray '.' / ',' left over from the coefficient tokenization are
        removed from the letter side.
        """
        if token is None or token == "":
            return None
        pieces = token.split("^")
        if len(pieces) > 2:
            raise ParseError(f"Too many '^' in literal part: {token!r}")
        letter = pieces[0].replace(",", "").replace(".", "")
        if not _LETTER.match(letter):
            raise ParseError(f"Invalid literal part: {token!r}")
        exponent = 1.0
        if len(pieces) == 2:
            if not _EXPONENT.match(pieces[1]):
                raise ParseError(f"Invalid exponent in literal part: {token!r}")
            exponent = float(pieces[1])
        return LiteralPart(letter=letter, exponent=exponent)

    @property
    def key(self) -> str:
        # Canonical like-term key; exponent 0 collapses into the constant group.
        if self.exponent == 0:
            return ""
        return f"{self.letter}^{format_number(self.exponent)}"

    def with_exponent(self, exponent: float) -> "LiteralPart":
        return LiteralPart(letter=self.letter, exponent=exponent)

    def format(self) -> str:
        if self.exponent == 0 or self.exponent == 1:
            return self.letter
        return f"{self.letter}^{format_number(self.exponent)}"

    def __str__(self) -> str:
        return self.format()
