from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from expr_parser import EmptyInput, TooManyVariables, evaluate, is_variable

logger = logging.getLogger(__name__)

DEFAULT_MAX_VARIABLES = 16
RESULT_COLUMN = "Result"


@dataclass(frozen=True)
class TruthTableRow:
	values: Tuple[bool, ...]
	result: bool

	def assignment(self, variables: Sequence[str]) -> Dict[str, bool]:
		return dict(zip(variables, self.values))


@dataclass(frozen=True)
class TruthTable:
	expression: str
	variables: Tuple[str, ...]
	rows: Tuple[TruthTableRow, ...]

	def true_rows(self) -> List[TruthTableRow]:
		return [row for row in self.rows if row.result]

	def classify(self) -> str:
		hits = len(self.true_rows())
		if hits == len(self.rows):
			return "tautology"
		if hits == 0:
			return "contradiction"
		return "contingent"

	def to_frame(self) -> pd.DataFrame:
		"""One column per variable in discovery order, then ``Result``; 0/1 values."""
		columns = list(self.variables) + [RESULT_COLUMN]
		data = [
			[int(v) for v in row.values] + [int(row.result)]
			for row in self.rows
		]
		return pd.DataFrame(data, columns=columns)


def discover_variables(text: str) -> Tuple[str, ...]:
	return tuple(dict.fromkeys(ch for ch in text if is_variable(ch)))


def assignment_for(index: int, variables: Sequence[str]) -> Dict[str, bool]:
	# The first discovered variable takes the most significant bit.
	n = len(variables)
	return {
		var: bool((index >> (n - j - 1)) & 1)
		for j, var in enumerate(variables)
	}


def build_truth_table(
	text: str,
	max_variables: Optional[int] = DEFAULT_MAX_VARIABLES,
) -> TruthTable:
	if not text.strip():
		raise EmptyInput()
	# Malformed input fails here, before any enumeration.
	evaluate(text)

	variables = discover_variables(text)
	if max_variables is not None and len(variables) > max_variables:
		raise TooManyVariables(limit=max_variables, found=len(variables))

	total_rows = 1 << len(variables)
	logger.debug(
		"Building truth table for %r: %d variables, %d rows",
		text,
		len(variables),
		total_rows,
	)
	rows: List[TruthTableRow] = []
	for i in range(total_rows):
		assignment = assignment_for(i, variables)
		rows.append(
			TruthTableRow(
				values=tuple(assignment[v] for v in variables),
				result=evaluate(text, assignment),
			)
		)
	return TruthTable(expression=text, variables=variables, rows=tuple(rows))


__all__ = [
	"DEFAULT_MAX_VARIABLES",
	"RESULT_COLUMN",
	"TruthTableRow",
	"TruthTable",
	"discover_variables",
	"assignment_for",
	"build_truth_table",
]
