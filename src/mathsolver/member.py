# -----------------------------------------------------------------------------
# Member: one side of an equation, an ordered list of Terms.
# Insertion order is kept for display; algebra re-establishes order through
# normalize() (descending exponent) and complete() (dense exponents).
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .literal import LiteralPart
from .parsing import DomainError, split_expression
from .rational import format_number
from .term import Term

DEFAULT_LETTER = "x"


class Member:
    def __init__(self, terms: Iterable[Term] = ()):
        self.terms: List[Term] = list(terms)

    @staticmethod
    def parse(expression: str) -> "Member":
        return Member(Term.parse(chunk) for chunk in split_expression(expression))

    # ---------------- container protocol ----------------

    def __iter__(self) -> Iterator[Term]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __getitem__(self, idx: int) -> Term:
        return self.terms[idx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Member):
            return NotImplemented
        return self.terms == other.terms

    def __repr__(self) -> str:
        return f"Member({self.format()!r})"

    def __str__(self) -> str:
        return self.format()

    def copy(self) -> "Member":
        return Member(self.terms)

    def append(self, term: Term) -> None:
        self.terms.append(term)

    # ---------------- queries ----------------

    @property
    def degree(self) -> float:
        return max((t.exponent for t in self.terms if t.literal is not None), default=0)

    @property
    def constant_term(self) -> float:
        term = next((t for t in self.terms if t.literal is None), None)
        return term.coefficient if term else 0

    @property
    def letter(self) -> str:
        # First literal letter that is not a y-label; defaults to x.
        for t in self.terms:
            if t.literal is not None and not t.literal.letter.startswith("y"):
                return t.literal.letter
        return DEFAULT_LETTER

    def get_by_exponent(self, exponent: float) -> Optional[Term]:
        return next((t for t in self.terms if t.literal is not None and t.literal.exponent == exponent), None)

    @property
    def leading_coefficient(self) -> float:
        return self.terms[0].coefficient if self.terms else 0

    # ---------------- transformations ----------------

    def normalize(self) -> None:
        # list.sort is stable: equal exponents keep their relative order
        self.terms.sort(key=lambda t: t.exponent, reverse=True)

    def complete(self, degree: Optional[float] = None, letter: Optional[str] = None) -> None:
        """
        Insert zero-coefficient placeholders so every exponent from `degree`
        down to 1 is present, plus a zero constant if none exists.
        """
        degree = self.degree if degree is None else degree
        letter = letter or self.letter
        present = {t.exponent for t in self.terms if t.literal is not None}
        for exp in range(int(degree), 0, -1):
            if exp not in present:
                self.terms.append(Term(0.0, LiteralPart(letter, float(exp))))
        if not any(t.literal is None for t in self.terms):
            self.terms.append(Term(0.0, None))
        self.normalize()

    def simplify(self) -> None:
        """
        Collect like terms: one term per distinct literal key (first-seen
        order), coefficient = sum of the group; groups summing to 0 vanish.
        """
        sums: Dict[str, float] = {}
        literals: Dict[str, Optional[LiteralPart]] = {}
        for t in self.terms:
            key = t.key
            if key not in sums:
                sums[key] = 0.0
                literals[key] = t.literal if key else None
            sums[key] += t.coefficient
        self.terms = [Term(total, literals[key]) for key, total in sums.items() if total != 0]

    def negated(self) -> "Member":
        return Member(t.negated() for t in self.terms)

    def coefficients(self, degree: Optional[int] = None) -> List[float]:
        """Dense coefficient list, highest exponent first (constant last)."""
        for t in self.terms:
            if t.exponent < 0 or float(t.exponent) != int(t.exponent):
                raise DomainError(f"Exponent {format_number(t.exponent)} is not a non-negative integer.")
        degree = int(self.degree) if degree is None else degree
        dense = [0.0] * (degree + 1)
        for t in self.terms:
            if int(t.exponent) > degree:
                raise DomainError(f"Term {t.format().lstrip('+')} exceeds degree {degree}.")
            dense[degree - int(t.exponent)] += t.coefficient
        return dense

    def canonical(self) -> Tuple[Tuple[str, float], ...]:
        """Structural identity: simplified (key, coefficient) pairs sorted by key."""
        merged = self.copy()
        merged.simplify()
        return tuple(sorted((t.key, t.coefficient) for t in merged.terms))

    def format(self, as_fraction: bool = False) -> str:
        text = "".join(t.format(as_fraction) for t in self.terms)
        if text.startswith("+"):
            text = text[1:]
        return text or "0"

    @staticmethod
    def from_coefficients(coefficients: List[float], letter: str = DEFAULT_LETTER) -> "Member":
        """Dense coefficients (highest first) to a member, skipping zeros."""
        degree = len(coefficients) - 1
        terms = []
        for i, c in enumerate(coefficients):
            if c == 0:
                continue
            exp = degree - i
            literal = LiteralPart(letter, float(exp)) if exp > 0 else None
            terms.append(Term(float(c), literal))
        return Member(terms)
