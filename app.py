from __future__ import annotations

from typing import Dict

import streamlit as st

from expr_parser import AND, NOT, OR, EvalError, convert_complements, evaluate
from logic_core import DEFAULT_MAX_VARIABLES, RESULT_COLUMN, build_truth_table, discover_variables


DEFAULT_EXPRESSION = f"A {AND} (B {OR} {NOT}C)"
MODES = ["Single Evaluation", "Truth Table"]


def initial_state() -> None:
	params = st.query_params
	if "formula_text" not in st.session_state:
		st.session_state.formula_text = params.get("expr", DEFAULT_EXPRESSION)
	if "mode" not in st.session_state:
		st.session_state.mode = MODES[1] if params.get("mode") == "tt" else MODES[0]


def render_operator_builder() -> None:
	builder_cols = st.columns([1, 1, 1, 1, 1, 2])
	buttons = [OR, AND, NOT, "(", ")"]
	for col, label in zip(builder_cols, buttons):
		if col.button(label):
			append = {
				OR: f" {OR} ",
				AND: f" {AND} ",
				NOT: NOT,
				"(": "(",
				")": ")",
			}[label]
			st.session_state.formula_text += append
	if builder_cols[-1].button("A' → !A"):
		st.session_state.formula_text = convert_complements(st.session_state.formula_text)
	if st.button("Clear Expression"):
		st.session_state.formula_text = ""


def render_single_evaluation(expression: str) -> None:
	variables = discover_variables(expression)
	assignment: Dict[str, bool] = {}
	if variables:
		st.write("Assignment (unchecked variables are false):")
		cols = st.columns(min(len(variables), 8))
		for i, var in enumerate(variables):
			assignment[var] = cols[i % len(cols)].checkbox(var, value=True, key=f"var_{var}")
	value = evaluate(expression, assignment)
	st.metric("Expression evaluates to", str(int(value)))


def render_truth_table(expression: str, max_variables: int) -> None:
	table = build_truth_table(expression, max_variables=max_variables)
	df = table.to_frame()
	st.caption(f"Rows: {len(df)} (2^{len(table.variables)})")
	st.dataframe(df, hide_index=True)
	st.write("True rows")
	st.dataframe(df[df[RESULT_COLUMN] == 1], hide_index=True)
	st.info(f"The expression is a {table.classify()}.")


def main() -> None:
	st.set_page_config(page_title="Boolean Expression Solver", layout="wide")
	st.title("Boolean Expression Solver")
	initial_state()

	st.sidebar.header("Configuration")
	max_variables = st.sidebar.number_input(
		"Maximum variables for a truth table",
		min_value=1,
		max_value=24,
		value=DEFAULT_MAX_VARIABLES,
	)
	st.sidebar.info(
		f"Use '{OR}' for OR, '{AND}' for AND and '{NOT}' for NOT. "
		"Single letters are variables; unassigned variables are true."
	)

	render_operator_builder()
	expression = st.text_input("Expression", st.session_state.formula_text, key="expression_input")
	st.session_state.formula_text = expression

	mode = st.radio("Mode", MODES, index=MODES.index(st.session_state.mode), horizontal=True)
	st.session_state.mode = mode

	try:
		if mode == MODES[1]:
			render_truth_table(expression, int(max_variables))
		else:
			render_single_evaluation(expression)
	except EvalError as exc:
		st.error(str(exc))


if __name__ == "__main__":
	main()
