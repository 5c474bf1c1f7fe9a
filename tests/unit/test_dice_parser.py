"""
Unit tests for dice expression parsing.

Tests cover:
- Dice terms with every modifier
- Arithmetic tails and whitespace
- Validation errors and their fragments
"""

import pytest

from dicebox import (
    ArithmeticTerm,
    DiceError,
    DiceParser,
    DiceTerm,
    DivisionByZero,
    EmptyExpression,
    InvalidDiceCount,
    InvalidExplodeFaces,
    InvalidExpression,
    InvalidFaceCount,
    InvalidModifierCount,
    InvalidRerollThreshold,
    KeepDrop,
    ModifierExceedsCount,
    Operator,
    RerollMode,
    parse,
)


# =============================================================================
# Valid Notation
# =============================================================================


class TestParseDiceTerm:
    """Tests for single dice terms."""

    @pytest.mark.parametrize(
        "notation,count,faces",
        [
            ("d20", 1, 20),
            ("1d20", 1, 20),
            ("3d6", 3, 6),
            ("10d8", 10, 8),
            ("1d1", 1, 1),
            ("d100", 1, 100),
        ],
    )
    def test_count_and_faces(self, notation: str, count: int, faces: int) -> None:
        """Test count defaults to 1 and faces are read."""
        term = parse(notation).first
        assert isinstance(term, DiceTerm)
        assert term.count == count
        assert term.faces == faces
        assert term.keep_drop is KeepDrop.NONE
        assert term.explode is False
        assert term.reroll is RerollMode.NONE

    @pytest.mark.parametrize(
        "notation,keep_drop,modifier_count",
        [
            ("4d6kh1", KeepDrop.KEEP_HIGH, 1),
            ("4d6kl2", KeepDrop.KEEP_LOW, 2),
            ("4d6dh3", KeepDrop.DROP_HIGH, 3),
            ("4d6dl1", KeepDrop.DROP_LOW, 1),
            ("4d6kh", KeepDrop.KEEP_HIGH, 1),
            ("2d20dl", KeepDrop.DROP_LOW, 1),
        ],
    )
    def test_keep_drop(
        self, notation: str, keep_drop: KeepDrop, modifier_count: int
    ) -> None:
        """Test keep/drop modifiers and their default count."""
        term = parse(notation).first
        assert term.keep_drop is keep_drop
        assert term.modifier_count == modifier_count

    def test_explode(self) -> None:
        """Test the explode marker."""
        term = parse("d20!").first
        assert term.explode is True
        assert term.faces == 20

    @pytest.mark.parametrize(
        "notation,mode,threshold",
        [
            ("d10r", RerollMode.ONCE, 1),
            ("d10r2", RerollMode.ONCE, 2),
            ("d10rr", RerollMode.RECURSIVE, 1),
            ("d10rr2", RerollMode.RECURSIVE, 2),
            ("2d10r9", RerollMode.ONCE, 9),
        ],
    )
    def test_reroll(self, notation: str, mode: RerollMode, threshold: int) -> None:
        """Test reroll kinds and thresholds."""
        term = parse(notation).first
        assert term.reroll is mode
        assert term.reroll_threshold == threshold

    def test_all_modifiers_in_surface_order(self) -> None:
        """Test keep/drop, explode and reroll together."""
        term = parse("6d6kh3!rr2").first
        assert term == DiceTerm(
            count=6,
            faces=6,
            keep_drop=KeepDrop.KEEP_HIGH,
            modifier_count=3,
            explode=True,
            reroll=RerollMode.RECURSIVE,
            reroll_threshold=2,
        )
        assert term.source == "6d6kh3!rr2"

    def test_case_insensitive(self) -> None:
        """Test that notation is case insensitive."""
        assert parse("D6").first == parse("d6").first
        assert parse("4D6KH1").first == parse("4d6kh1").first
        assert parse("D10RR2").first.reroll is RerollMode.RECURSIVE

    def test_whitespace_stripped(self) -> None:
        """Test that surrounding whitespace is stripped."""
        assert parse("  2d6  ").first == DiceTerm(count=2, faces=6)
        assert parse("\t1d20\n").first == DiceTerm(count=1, faces=20)

    def test_integer_first_term(self) -> None:
        """Test a bare integer as the first term."""
        expr = parse("5")
        assert expr.first == 5
        assert expr.tail == ()


class TestParseArithmetic:
    """Tests for operator tails."""

    def test_dice_then_literal(self) -> None:
        """Test 3d6+2 parses as dice term 3d6 then +2."""
        expr = parse("3d6+2")
        assert expr.first == DiceTerm(count=3, faces=6)
        assert expr.tail == (ArithmeticTerm(Operator.ADD, 2),)

    def test_all_operators(self) -> None:
        """Test every operator in order."""
        expr = parse("d20+1-2*3/4")
        assert [t.operator for t in expr.tail] == [
            Operator.ADD,
            Operator.SUBTRACT,
            Operator.MULTIPLY,
            Operator.DIVIDE,
        ]
        assert [t.operand for t in expr.tail] == [1, 2, 3, 4]

    def test_dice_operands(self) -> None:
        """Test dice terms after operators keep their modifiers."""
        expr = parse("3d6+2d4kh1-1")
        assert expr.tail[0].operand == DiceTerm(
            count=2, faces=4, keep_drop=KeepDrop.KEEP_HIGH, modifier_count=1
        )
        assert expr.tail[1] == ArithmeticTerm(Operator.SUBTRACT, 1)

    def test_reroll_with_tail(self) -> None:
        """Test reroll threshold digits do not swallow the operator."""
        expr = parse("2d10r2+3")
        assert expr.first.reroll is RerollMode.ONCE
        assert expr.first.reroll_threshold == 2
        assert expr.tail[0].operand == 3

    def test_whitespace_around_operators(self) -> None:
        """Test spaces between terms are allowed."""
        assert parse("3d6 + 2") == parse("3d6+2")
        assert parse("d20 * 2 - 1d4") == parse("d20*2-1d4")

    def test_dice_terms_in_order(self) -> None:
        """Test dice_terms lists dice terms only, in order."""
        expr = parse("2d6+3+1d8")
        assert [t.faces for t in expr.dice_terms] == [6, 8]

    def test_expression_is_immutable(self) -> None:
        """Test parsed expressions cannot be modified."""
        expr = parse("3d6+2")
        with pytest.raises(AttributeError):
            expr.first = 4
        with pytest.raises(AttributeError):
            expr.first.count = 10


# =============================================================================
# Invalid Notation
# =============================================================================


class TestParseErrors:
    """Tests for invalid expressions."""

    @pytest.mark.parametrize("notation", ["", "   ", "\t\n"])
    def test_empty(self, notation: str) -> None:
        """Test that blank input raises EmptyExpression."""
        with pytest.raises(EmptyExpression, match="cannot be empty"):
            parse(notation)

    def test_none(self) -> None:
        """Test that None is treated as empty."""
        with pytest.raises(EmptyExpression):
            parse(None)

    @pytest.mark.parametrize(
        "notation",
        ["xyz", "roll", "d", "2d", "dd6", "2dd6", "d6d6", "+3", "-1d6", "3d6+", "3d6++2", "2d6 kh1", "3d6x"],
    )
    def test_invalid_expression(self, notation: str) -> None:
        """Test text that matches no production."""
        with pytest.raises(InvalidExpression):
            parse(notation)

    def test_invalid_expression_fragment(self) -> None:
        """Test the error carries the unconsumed text."""
        with pytest.raises(InvalidExpression) as excinfo:
            parse("3d6+2abc")
        assert excinfo.value.fragment == "abc"
        assert excinfo.value.expression == "3d6+2abc"

    def test_zero_dice(self) -> None:
        """Test that zero dice raises InvalidDiceCount."""
        with pytest.raises(InvalidDiceCount, match="at least 1 die") as excinfo:
            parse("0d6")
        assert excinfo.value.fragment == "0d6"

    def test_zero_faces(self) -> None:
        """Test that zero faces raises InvalidFaceCount."""
        with pytest.raises(InvalidFaceCount):
            parse("2d0")

    def test_one_face_allowed(self) -> None:
        """Test that a one-faced die is valid without explode."""
        assert parse("3d1").first.faces == 1

    def test_explode_one_face(self) -> None:
        """Test that exploding a one-faced die is rejected."""
        with pytest.raises(InvalidExplodeFaces):
            parse("d1!")
        # Still reported as a face count problem
        with pytest.raises(InvalidFaceCount):
            parse("3d1!")

    def test_zero_modifier(self) -> None:
        """Test that keeping zero dice raises InvalidModifierCount."""
        with pytest.raises(InvalidModifierCount):
            parse("4d6kh0")

    def test_modifier_exceeds_count(self) -> None:
        """Test that keeping more dice than rolled is rejected."""
        with pytest.raises(ModifierExceedsCount, match="5 of 4"):
            parse("4d6dl5")

    def test_modifier_equal_to_count(self) -> None:
        """Test that keeping every die is allowed."""
        assert parse("4d6kh4").first.modifier_count == 4

    @pytest.mark.parametrize("notation", ["d10r10", "d10r11", "d10r0", "d10rr10", "d1r", "d1rr"])
    def test_reroll_threshold(self, notation: str) -> None:
        """Test thresholds outside 1..faces-1."""
        with pytest.raises(InvalidRerollThreshold):
            parse(notation)

    def test_errors_in_tail_terms(self) -> None:
        """Test dice terms after operators are validated too."""
        with pytest.raises(InvalidDiceCount):
            parse("d20+0d6")
        with pytest.raises(InvalidRerollThreshold):
            parse("d20+d6r6")

    def test_divide_by_zero_literal(self) -> None:
        """Test that dividing by a literal zero is rejected."""
        with pytest.raises(DivisionByZero):
            parse("d20/0")

    def test_divide_by_fully_dropped_dice(self) -> None:
        """Test that a divisor dropping every die is rejected."""
        with pytest.raises(DivisionByZero):
            parse("10/2d6dl2")
        # Keeping a die always leaves something to divide by
        assert parse("10/2d6kh2").tail[0].operand.count == 2

    def test_all_errors_are_value_errors(self) -> None:
        """Test the hierarchy stays catchable as ValueError."""
        for notation in ["", "xyz", "0d6", "d0", "4d6kh0", "4d6kh5", "d10r10", "d1!", "1/0"]:
            with pytest.raises(DiceError):
                parse(notation)
            with pytest.raises(ValueError):
                parse(notation)


class TestDiceParserInstance:
    """Tests for reusing a DiceParser."""

    def test_reuse(self) -> None:
        """Test one parser handles several expressions."""
        parser = DiceParser()
        assert parser.parse("3d6").first.count == 3
        assert parser.parse("d20+1").tail[0].operand == 1

    def test_reuse_after_error(self) -> None:
        """Test a failed parse does not affect the next one."""
        parser = DiceParser()
        with pytest.raises(InvalidExpression):
            parser.parse("3d6+")
        assert parser.parse("2d8").first.faces == 8
