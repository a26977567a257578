from __future__ import annotations

import itertools
import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
if PROJECT_ROOT not in sys.path:
	sys.path.insert(0, PROJECT_ROOT)

from expr_parser import (
	EmptyInput,
	EvalError,
	MAX_NESTING_DEPTH,
	MalformedExpression,
	NestingTooDeep,
	UnbalancedParentheses,
	convert_complements,
	evaluate,
)


def test_literals() -> None:
	assert evaluate("1") is True
	assert evaluate("0") is False
	assert evaluate("1·(0+1)") is True
	assert evaluate("0+0") is False


def test_literal_expressions_ignore_assignment() -> None:
	for expr in ["1·(0+1)", "!0·1", "(0+0)+!1", "!(1·0)"]:
		expected = evaluate(expr)
		for values in itertools.product([False, True], repeat=2):
			assert evaluate(expr, dict(zip("AB", values))) is expected


def test_unknown_variables_default_to_true() -> None:
	assert evaluate("A") is True
	assert evaluate("A·B·z") is True
	assert evaluate("A·B", {"A": True}) is True
	assert evaluate("A·B", {"B": False}) is False


def test_variables_are_case_sensitive() -> None:
	assert evaluate("A·!a", {"A": True, "a": False}) is True
	assert evaluate("A·!a", {"A": True}) is False


def test_and_binds_tighter_than_or() -> None:
	# 1 + (0·0), not (1+0)·0
	assert evaluate("1+0·0") is True
	assert evaluate("(1+0)·0") is False
	assert evaluate("A+B·C", {"A": False, "B": True, "C": False}) is False


def test_not_binds_to_following_factor() -> None:
	assert evaluate("!0·0") is False
	assert evaluate("!(0·0)") is True
	assert evaluate("!!!A", {"A": True}) is False


def test_whitespace_is_insignificant() -> None:
	assert evaluate("  A ·\t! B +\n0 ", {"B": True}) is evaluate("A·!B+0", {"B": True})
	assert evaluate(" ! ( 0 ) ") is True


def test_double_negation() -> None:
	assert evaluate("!!A", {}) is True
	assert evaluate("!!A", {}) == evaluate("A", {})
	assert evaluate("!!A", {"A": False}) is False


def test_contradiction_and_excluded_middle() -> None:
	for a in (False, True):
		assert evaluate("A·!A", {"A": a}) is False
		assert evaluate("A+!A", {"A": a}) is True
	assert evaluate("A·!A", {}) is False
	assert evaluate("A+!A", {}) is True


def test_de_morgan() -> None:
	for a, b in itertools.product([False, True], repeat=2):
		assignment = {"A": a, "B": b}
		assert evaluate("!(A·B)", assignment) == evaluate("!A+!B", assignment)
		assert evaluate("!(A+B)", assignment) == evaluate("!A·!B", assignment)


def test_right_operand_is_always_consumed() -> None:
	# Left side decides the result but the right side must still be parsed.
	assert evaluate("1+(A·B)", {"A": False}) is True
	assert evaluate("0·(A+B)", {}) is False
	with pytest.raises(MalformedExpression):
		evaluate("1+(A·?)")


def test_long_negation_chain() -> None:
	assert evaluate("!" * 5000 + "A") is True
	assert evaluate("!" * 5001 + "A") is False


def test_empty_input() -> None:
	for text in ["", "   ", "\n\t"]:
		with pytest.raises(EmptyInput):
			evaluate(text)


def test_unclosed_parenthesis_reports_position() -> None:
	with pytest.raises(UnbalancedParentheses) as info:
		evaluate("(A·B")
	assert info.value.position == 4
	assert info.value.opened_at == 0


def test_unclosed_parenthesis_carries_partial_result() -> None:
	with pytest.raises(UnbalancedParentheses) as info:
		evaluate("(A·B", {"B": False})
	assert info.value.partial is False

	with pytest.raises(UnbalancedParentheses) as info:
		evaluate("!(0 + (1")
	assert info.value.partial is False
	assert info.value.opened_at == 6
	assert info.value.position == 8


def test_missing_operator_inside_group_is_malformed() -> None:
	with pytest.raises(MalformedExpression) as info:
		evaluate("(A B)")
	assert info.value.position == 3

	with pytest.raises(MalformedExpression) as info:
		evaluate("(A?)")
	assert info.value.position == 2


def test_stray_closing_parenthesis() -> None:
	with pytest.raises(UnbalancedParentheses) as info:
		evaluate("A·B)")
	assert info.value.position == 3
	assert info.value.opened_at is None
	assert info.value.partial is None


def test_unrecognised_character_is_rejected() -> None:
	with pytest.raises(MalformedExpression) as info:
		evaluate("A & B")
	assert info.value.position == 2


def test_digits_other_than_literals_are_rejected() -> None:
	with pytest.raises(MalformedExpression) as info:
		evaluate("A·2")
	assert info.value.position == 2


def test_missing_operands() -> None:
	cases = {"A+": 2, "!": 1, "()": 1, "·A": 0, "A+·B": 2}
	for text, position in cases.items():
		with pytest.raises(MalformedExpression) as info:
			evaluate(text)
		assert info.value.position == position, text


def test_adjacent_operands_are_rejected() -> None:
	with pytest.raises(MalformedExpression) as info:
		evaluate("A B")
	assert info.value.position == 2


def test_deep_nesting_is_evaluated() -> None:
	assert evaluate("(" * 500 + "A" + ")" * 500) is True
	assert evaluate("(" * 500 + "A" + ")" * 500, {"A": False}) is False
	assert evaluate("!(" * MAX_NESTING_DEPTH + "0" + ")" * MAX_NESTING_DEPTH) is False


def test_nesting_beyond_limit_is_reported() -> None:
	depth = MAX_NESTING_DEPTH + 1
	with pytest.raises(NestingTooDeep) as info:
		evaluate("(" * depth + "A" + ")" * depth)
	assert info.value.limit == MAX_NESTING_DEPTH
	assert info.value.position == MAX_NESTING_DEPTH

	with pytest.raises(NestingTooDeep):
		evaluate("(" * 100000 + "A" + ")" * 100000)


def test_recursion_limit_is_restored() -> None:
	limit = sys.getrecursionlimit()
	evaluate("(" * 500 + "A" + ")" * 500)
	assert sys.getrecursionlimit() == limit


def test_errors_share_a_base_class() -> None:
	for text in ["", "(A", "A?"]:
		try:
			evaluate(text)
			raised = False
		except EvalError:
			raised = True
		assert raised is True


def test_convert_complements() -> None:
	assert convert_complements("A'·B") == "!A·B"
	assert convert_complements("A\u0305+B'") == "!A+!B"
	assert convert_complements("A·B") == "A·B"
	assert evaluate(convert_complements("A'"), {"A": False}) is True
