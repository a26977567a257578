from __future__ import annotations

import re
import sys
from typing import Mapping, Optional, Tuple

OR = "+"
AND = "·"
NOT = "!"

MAX_NESTING_DEPTH = 1000
# Python frames used per level of parentheses (expression, term, factor, primary).
_FRAMES_PER_LEVEL = 4

Assignment = Mapping[str, bool]

_COMPLEMENT_RE = re.compile(r"([A-Za-z])(?:'|\u0305)")


class EvalError(ValueError):
	"""Base class for every error raised while evaluating an expression."""


class MalformedExpression(EvalError):
	def __init__(self, position: int, reason: str = "unexpected character"):
		self.position = position
		self.reason = reason
		super().__init__(f"Malformed expression: {reason} at position {position}.")


class UnbalancedParentheses(EvalError):
	"""A stray ')' or a '(' left open at the end of the expression.

	For an unclosed '(' the rest of the expression is still evaluated as
	if the missing ')' stood at the end, and that value is kept in
	``partial`` so a caller may use it instead of aborting. A stray ')'
	has no such value and ``partial`` is None.
	"""

	def __init__(
		self,
		position: int,
		opened_at: Optional[int] = None,
		partial: Optional[bool] = None,
	):
		self.position = position
		self.opened_at = opened_at
		self.partial = partial
		if opened_at is None:
			message = f"Unbalanced parentheses: unexpected ')' at position {position}."
		else:
			message = (
				f"Unbalanced parentheses: '(' at position {opened_at} "
				f"is not closed (expected ')' at position {position})."
			)
		super().__init__(message)


class TooManyVariables(EvalError):
	def __init__(self, limit: int, found: int):
		self.limit = limit
		self.found = found
		super().__init__(
			f"Too many variables: found {found}, the limit is {limit}."
		)


class NestingTooDeep(EvalError):
	def __init__(self, position: int, limit: int):
		self.position = position
		self.limit = limit
		super().__init__(
			f"Parentheses nested deeper than {limit} levels at position {position}."
		)


class EmptyInput(EvalError):
	def __init__(self) -> None:
		super().__init__("Empty expression.")


def is_variable(ch: str) -> bool:
	return len(ch) == 1 and ch.isascii() and ch.isalpha()


class Evaluator:
	"""Recursive-descent evaluator over one expression and one assignment.

	Values are computed while descending; no syntax tree is built. The
	cursor only ever moves forward and every branch either consumes a
	character or raises, so evaluation terminates on all inputs.
	"""

	def __init__(self, text: str, assignment: Optional[Assignment] = None):
		self.text = text
		self.assignment = assignment if assignment is not None else {}
		self.pos = 0
		self.depth = 0
		# (position, opened_at) of the first '(' found unclosed at end of input.
		self.unclosed: Optional[Tuple[int, int]] = None

	@property
	def current(self) -> str:
		if self.pos < len(self.text):
			return self.text[self.pos]
		return ""

	def skip_whitespace(self) -> None:
		while self.current and self.current.isspace():
			self.pos += 1

	def accept(self, ch: str) -> bool:
		self.skip_whitespace()
		if self.current == ch:
			self.pos += 1
			return True
		return False

	def evaluate(self) -> bool:
		if not self.text.strip():
			raise EmptyInput()
		value = self._parse_with_headroom()
		self.skip_whitespace()
		if self.current == ")":
			raise UnbalancedParentheses(self.pos)
		if self.current:
			raise MalformedExpression(self.pos)
		if self.unclosed is not None:
			position, opened_at = self.unclosed
			raise UnbalancedParentheses(position, opened_at, partial=value)
		return value

	def _parse_with_headroom(self) -> bool:
		levels = min(self.text.count("("), MAX_NESTING_DEPTH)
		if levels * _FRAMES_PER_LEVEL < 200:
			return self.parse_expression()
		# Deep grouping needs more frames than the default recursion limit;
		# MAX_NESTING_DEPTH bounds how much is added.
		limit = sys.getrecursionlimit()
		sys.setrecursionlimit(limit + levels * _FRAMES_PER_LEVEL + 50)
		try:
			return self.parse_expression()
		finally:
			sys.setrecursionlimit(limit)

	def parse_expression(self) -> bool:
		value = self.parse_term()
		while self.accept(OR):
			# Always parse the right operand so the cursor moves past it.
			right = self.parse_term()
			value = value or right
		return value

	def parse_term(self) -> bool:
		value = self.parse_factor()
		while self.accept(AND):
			right = self.parse_factor()
			value = value and right
		return value

	def parse_factor(self) -> bool:
		negations = 0
		while self.accept(NOT):
			negations += 1
		value = self.parse_primary()
		if negations % 2:
			return not value
		return value

	def parse_primary(self) -> bool:
		self.skip_whitespace()
		ch = self.current
		if ch == "(":
			opened_at = self.pos
			self.depth += 1
			if self.depth > MAX_NESTING_DEPTH:
				raise NestingTooDeep(self.pos, MAX_NESTING_DEPTH)
			self.pos += 1
			value = self.parse_expression()
			self.depth -= 1
			if self.accept(")"):
				return value
			if self.current:
				raise MalformedExpression(
					self.pos, f"expected ')' or an operator, found '{self.current}'"
				)
			# Treated as closed at end of input; evaluate() reports it.
			if self.unclosed is None:
				self.unclosed = (self.pos, opened_at)
			return value
		if ch == "0" or ch == "1":
			self.pos += 1
			return ch == "1"
		if is_variable(ch):
			self.pos += 1
			return bool(self.assignment.get(ch, True))
		if not ch:
			raise MalformedExpression(self.pos, "unexpected end of expression")
		if ch in (OR, AND, ")"):
			raise MalformedExpression(self.pos, f"missing operand before '{ch}'")
		raise MalformedExpression(self.pos, f"unexpected character '{ch}'")


def evaluate(text: str, assignment: Optional[Assignment] = None) -> bool:
	"""Evaluate ``text`` under ``assignment``.

	Identifiers missing from ``assignment`` (or every identifier, when no
	assignment is given) evaluate to ``True``.
	"""
	return Evaluator(text, assignment).evaluate()


def convert_complements(text: str) -> str:
	"""Rewrite postfix complements ``A'`` and ``A̅`` as ``!A``."""
	return _COMPLEMENT_RE.sub(lambda m: NOT + m.group(1), text)


__all__ = [
	"OR",
	"AND",
	"NOT",
	"MAX_NESTING_DEPTH",
	"Assignment",
	"EvalError",
	"MalformedExpression",
	"UnbalancedParentheses",
	"TooManyVariables",
	"NestingTooDeep",
	"EmptyInput",
	"is_variable",
	"Evaluator",
	"evaluate",
	"convert_complements",
]
