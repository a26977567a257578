from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from expr_parser import AND, NOT, OR, EvalError, convert_complements, evaluate
from logic_core import DEFAULT_MAX_VARIABLES, build_truth_table

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="boolean-solver",
		description="Evaluate a Boolean expression or print its truth table.",
		epilog=f"Operators: '{OR}' for OR, '{AND}' for AND, '{NOT}' for NOT.",
	)
	parser.add_argument(
		"expression",
		nargs="?",
		help="Expression to solve (read from stdin when omitted)",
	)
	parser.add_argument(
		"-t", "--truth-table",
		action="store_true",
		help="Print the truth table instead of a single evaluation",
	)
	parser.add_argument(
		"--max-variables",
		type=int,
		default=DEFAULT_MAX_VARIABLES,
		help="Largest number of distinct variables for a truth table (0 for no limit)",
	)
	parser.add_argument(
		"-v", "--verbose",
		action="store_true",
		help="Enable debug logging",
	)
	return parser


def read_expression(stream: TextIO, out: TextIO) -> Optional[str]:
	out.write("Boolean Expression Solver\n")
	out.write("-------------------------\n")
	out.write(
		f"Enter a Boolean expression (use '{OR}' for OR, '{AND}' for AND, '{NOT}' for NOT):\n"
	)
	line = stream.readline()
	if not line:
		return None
	return line.rstrip("\r\n")


def run(
	argv: Optional[List[str]] = None,
	stdin: Optional[TextIO] = None,
	stdout: Optional[TextIO] = None,
	stderr: Optional[TextIO] = None,
) -> int:
	stdin = stdin or sys.stdin
	stdout = stdout or sys.stdout
	stderr = stderr or sys.stderr
	parser = build_arg_parser()
	args = parser.parse_args(argv)
	if args.max_variables < 0:
		parser.error("--max-variables must not be negative")
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)

	expression = args.expression
	if expression is None:
		expression = read_expression(stdin, stdout)
		if expression is None:
			stderr.write("Error reading expression.\n")
			return 1
	expression = convert_complements(expression)
	max_variables = args.max_variables or None

	try:
		if args.truth_table:
			table = build_truth_table(expression, max_variables=max_variables)
			stdout.write("\nTruth Table:\n")
			stdout.write(table.to_frame().to_string(index=False) + "\n")
		else:
			result = evaluate(expression)
			stdout.write(f"\nEvaluation Result: {int(result)}\n")
	except EvalError as exc:
		logger.info("Rejected expression %r: %s", expression, exc)
		stderr.write(f"Error: {exc}\n")
		return 1
	return 0


def main() -> int:
	return run()


if __name__ == "__main__":
	sys.exit(main())
