import math
import pytest

from mathsolver.literal import LiteralPart
from mathsolver.member import Member
from mathsolver.parsing import DomainError, ParseError, split_expression, split_members
from mathsolver.rational import format_number, rational_display
from mathsolver.term import Term


@pytest.mark.parametrize("value, text", [
    (2.0, "2"),
    (-0.0, "0"),
    (0.25, "0.25"),
    (-3.5, "-3.5"),
    (1e-05, "0.00001"),
])
def test_format_number(value, text):
    assert format_number(value) == text

@pytest.mark.parametrize("value, text", [
    (0.5, "1/2"),
    (-0.75, "-3/4"),
    (2, "2"),
    (0.333, "0.33"),
    (None, "1"),
    (math.inf, "+∞"),
    (-math.inf, "-∞"),
])
def test_rational_display(value, text):
    assert rational_display(value) == text

def test_rational_display_latex():
    assert rational_display(1.5, latex=True) == "\\frac{3}{2}"
    assert rational_display(-math.inf, latex=True) == "-\\infty"

def test_literal_part_parse():
    assert LiteralPart.parse("x^3") == LiteralPart("x", 3.0)
    assert LiteralPart.parse("t") == LiteralPart("t", 1.0)
    assert LiteralPart.parse("") is None
    assert LiteralPart.parse(None) is None
    assert LiteralPart.parse("y''") == LiteralPart("y''", 1.0)

@pytest.mark.parametrize("token", ["x^2^3", "x^a", "1x", "xy", "x^inf", "x^nan", "x^1_0", "x^1e3", "x^", "x^-1"])
def test_literal_part_rejects_malformed(token):
    with pytest.raises(ParseError):
        LiteralPart.parse(token)

def test_literal_part_format():
    assert LiteralPart("x", 0).format() == "x"
    assert LiteralPart("x", 1).format() == "x"
    assert LiteralPart("x", 2.5).format() == "x^2.5"

@pytest.mark.parametrize("chunk, term", [
    ("-3x^2", Term(-3.0, LiteralPart("x", 2.0))),
    ("+x", Term(1.0, LiteralPart("x", 1.0))),
    ("-x", Term(-1.0, LiteralPart("x", 1.0))),
    ("x^4", Term(1.0, LiteralPart("x", 4.0))),
    ("5", Term(5.0, None)),
    ("-0.5x", Term(-0.5, LiteralPart("x", 1.0))),
])
def test_term_parse(chunk, term):
    assert Term.parse(chunk) == term

@pytest.mark.parametrize("chunk", ["", "-", "+", "2..5x", "3a$", "1_0x", "1_0", "2.x", "x^inf", "+-3x"])
def test_term_parse_rejects_malformed(chunk):
    with pytest.raises(ParseError):
        Term.parse(chunk)

def test_term_format():
    assert Term(-1.0, LiteralPart("x", 2.0)).format() == "-x^2"
    assert Term(3.0).format() == "+3"
    assert Term(-3.0).format() == "-3"
    assert Term(0.5, LiteralPart("x")).format(as_fraction=True) == "+1/2x"

def test_split_expression_keeps_leading_sign():
    assert split_expression("2x^2+3x-5") == ["2x^2", "+3x", "-5"]
    assert split_expression("-x+1") == ["-x", "+1"]

def test_split_members_strips_whitespace():
    assert split_members("  y = 2x + 1 ") == ("y", "2x+1")

@pytest.mark.parametrize("text", ["", "x+1", "x=1=2", "=3", "x^2+="])
def test_split_members_rejects_malformed(text):
    with pytest.raises(ParseError):
        split_members(text)

def test_member_normalize_is_descending():
    m = Member.parse("3+x^2-x")
    m.normalize()
    assert m.format() == "x^2-x+3"

def test_member_simplify_collects_like_terms():
    m = Member.parse("2x+3x-1+1+x^2")
    m.simplify()
    assert m.format() == "5x+x^2"

def test_member_simplify_drops_cancelled_groups():
    m = Member.parse("x-x")
    m.simplify()
    assert len(m) == 0
    assert m.format() == "0"

def test_member_complete_adds_placeholders():
    m = Member.parse("x^3+1")
    m.complete(3)
    assert [t.exponent for t in m] == [3, 2, 1, 0]
    assert m.format() == "x^3+0x^2+0x+1"

def test_member_coefficients_dense():
    assert Member.parse("x^3-2x+1").coefficients() == [1.0, 0.0, -2.0, 1.0]
    with pytest.raises(DomainError):
        Member.parse("x^2.5").coefficients()

def test_member_canonical_ignores_order():
    assert Member.parse("x^2+1").canonical() == Member.parse("1+x^2").canonical()
    assert Member.parse("x+x").canonical() == Member.parse("2x").canonical()

def test_member_from_coefficients_skips_zeros():
    assert Member.from_coefficients([1.0, 0.0, -1.0]).format() == "x^2-1"
    assert Member.from_coefficients([-1.0, 2.0]).format() == "-x+2"
