# -----------------------------------------------------------------------------
# Function: an equation between two Members (y=2x^2+3x-5, x^2-1=0, ...)
# Purpose:
#   Structural representation used by every solver stage. Mutating helpers
#   (normalize, complete, simplify, to_explicit, to_implicit) work in place;
#   calculus helpers (derive, primitive) return new Functions.
# -----------------------------------------------------------------------------

from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import List, Optional

from .literal import LiteralPart
from .member import DEFAULT_LETTER, Member
from .parsing import DomainError, split_members
from .rational import format_number
from .term import Term

# y, y', y'' ... : the dependent-variable label of an explicit function
_Y_LABEL = re.compile(r"^y'*$")


def _is_y(term: Term) -> bool:
    return term.literal is not None and bool(_Y_LABEL.match(term.literal.letter)) and term.literal.exponent == 1


@dataclass
class Slope:
    # Angular coefficient of a straight line, with its angle classification.
    value: float
    radians: float
    degrees: float
    is_acute: bool
    is_right: bool
    is_obtuse: bool


@dataclass
class PrimitiveResult:
    function: "Function"
    steps: List[str]


class Function:
    def __init__(self, left: Member, right: Member):
        self.left = left
        self.right = right

    @staticmethod
    def parse(text: str) -> "Function":
        left, right = split_members(text)
        return Function(Member.parse(left), Member.parse(right))

    @property
    def members(self) -> List[Member]:
        return [self.left, self.right]

    def copy(self) -> "Function":
        return Function(self.left.copy(), self.right.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Function):
            return NotImplemented
        return self.left == other.left and self.right == other.right

    def __repr__(self) -> str:
        return f"Function({self.format()!r})"

    def __str__(self) -> str:
        return self.format()

    def format(self, as_fraction: bool = False) -> str:
        return f"{self.left.format(as_fraction)}={self.right.format(as_fraction)}"

    # ---------------- queries ----------------

    @property
    def degree(self) -> float:
        return max(self.left.degree, self.right.degree)

    @property
    def is_explicit(self) -> bool:
        return len(self.left) == 1 and _is_y(self.left[0]) and self.left[0].coefficient == 1

    @property
    def is_implicit(self) -> bool:
        return not self.is_explicit

    @property
    def constant_term(self) -> float:
        return (self.right if self.is_explicit else self.left).constant_term

    def get_by_exponent(self, exponent: float, member: int = 1) -> Optional[Term]:
        members = self.members
        if member < 0 or member >= len(members):
            member = 0
        return members[member].get_by_exponent(exponent)

    @property
    def variable(self) -> str:
        return self.polynomial().letter

    def _has_y(self) -> bool:
        return any(_is_y(t) for m in self.members for t in m)

    def polynomial(self) -> Member:
        """
        The expression that equals zero: the right member of an explicit
        function, otherwise left - right with like terms collected.
        """
        if self.is_explicit:
            return self.right.copy()
        if self._has_y():
            explicit = self.copy()
            explicit.to_explicit()
            return explicit.right
        merged = Member(self.left.terms + self.right.negated().terms)
        merged.simplify()
        merged.normalize()
        return merged

    def evaluate(self, x: float) -> float:
        # Imported lazily: the evaluator pulls in SymPy.
        from .evaluator import evaluate
        poly = self.polynomial()
        return evaluate(poly.format(), x, poly.letter)

    # ---------------- in-place transformations ----------------

    def normalize(self) -> None:
        for m in self.members:
            m.normalize()

    def complete(self) -> None:
        degree = self.degree
        letter = self.variable
        for m in self.members:
            m.complete(degree, letter)

    def simplify(self) -> None:
        for m in self.members:
            m.simplify()

    def to_explicit(self) -> None:
        """
        Keep only y on the left: every other left term moves to the right with
        its sign flipped, and a y coefficient k != 1 divides the right member.
        """
        if self.is_explicit:
            return
        ys = [t for t in self.left if _is_y(t)]
        if not ys:
            raise DomainError(f"No y term to isolate in {self.format()}.")
        k = sum(t.coefficient for t in ys)
        if k == 0:
            raise DomainError(f"The y terms cancel out in {self.format()}.")
        moved = [t.negated() for t in self.left if not _is_y(t)]
        terms = [t for t in self.right.terms + moved]
        if len(terms) > 1:
            # the placeholder "0" of an implicit right member carries no information
            terms = [t for t in terms if not (t.literal is None and t.coefficient == 0)] or terms[:1]
        if k != 1:
            terms = [t.scaled(1 / k) for t in terms]
        self.left = Member([Term(1.0, LiteralPart(ys[0].literal.letter))])
        self.right = Member(terms)
        self.normalize()

    def to_implicit(self) -> None:
        if self.is_implicit:
            return
        self.left = Member(self.left.terms + self.right.negated().terms)
        self.right = Member([Term(0.0)])
        self.normalize()

    # ---------------- calculus ----------------

    def derive(self, order: int = 1) -> "Function":
        """
        Term-wise derivative of the explicit form, `order` times.
        y=2x^2+3x  ->  y'=4x+3
        """
        if order < 1:
            raise DomainError(f"Derivative order must be >= 1, got {order}.")
        terms = self.polynomial().terms
        for _ in range(order):
            derived: List[Term] = []
            for t in terms:
                if t.is_constant:
                    continue
                n = t.literal.exponent
                coefficient = t.coefficient * n
                if coefficient == 0:
                    continue
                literal = t.literal.with_exponent(n - 1) if n - 1 > 0 else None
                derived.append(Term(coefficient, literal))
            terms = derived
        label = self._label() + "'" * order
        return Function(Member([Term(1.0, LiteralPart(label))]), Member(terms))

    def _label(self) -> str:
        return self.left[0].literal.letter if self.is_explicit else "y"

    def primitive(self) -> PrimitiveResult:
        poly = self.polynomial()
        letter = poly.letter
        steps: List[str] = []
        terms: List[Term] = []
        for t in poly:
            if t.coefficient == 0:
                continue
            n = t.exponent
            if n + 1 == 0:
                raise DomainError(f"The antiderivative of {t.format().lstrip('+')} is a logarithm.")
            base = t.literal.letter if t.literal is not None else letter
            integrated = Term(t.coefficient / (n + 1), LiteralPart(base, float(n + 1)))
            terms.append(integrated)
            steps.append(f"∫{t.format().lstrip('+')} d{letter} = {integrated.format(as_fraction=True).lstrip('+')}")
        primitive = Function(Member([Term(1.0, LiteralPart("y"))]), Member(terms))
        steps.append(f"F({letter}) = {primitive.right.format(as_fraction=True)}")
        return PrimitiveResult(function=primitive, steps=steps)

    @property
    def slope(self) -> Optional[Slope]:
        """Angular coefficient; only meaningful for first-degree functions with a y."""
        if self.degree != 1:
            return None
        f = self.copy()
        try:
            f.to_explicit()
        except DomainError:
            return None
        term = next((t for t in f.right if t.literal is not None and t.exponent == 1), None)
        value = term.coefficient if term else 0.0
        radians = math.atan(value)
        return Slope(
            value=value,
            radians=radians,
            degrees=math.degrees(radians),
            is_acute=value > 0,
            is_right=value == 0,
            is_obtuse=value < 0,
        )


def linear_factor(root: float, letter: str = DEFAULT_LETTER) -> str:
    """Divisor string for a root r: x-r, x+|r|, or bare x for r = 0."""
    if root == 0:
        return letter
    if root > 0:
        return f"{letter}-{format_number(root)}"
    return f"{letter}+{format_number(-root)}"
