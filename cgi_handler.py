from __future__ import annotations

import html
import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote_plus

from expr_parser import EvalError, convert_complements, evaluate
from logic_core import build_truth_table

logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/html"
TITLE = "Boolean Expression Solver Result"
TRUTH_TABLE_MODE = "tt"


@dataclass
class Response:
	ok: bool
	body: str


def get_query_param(query: str, name: str) -> Optional[str]:
	"""Return the raw value of the first ``name=value`` pair, or None."""
	for pair in query.split("&"):
		key, sep, value = pair.partition("=")
		if sep and key == name:
			return value
	return None


def url_decode(value: str) -> str:
	# errors="strict" surfaces invalid UTF-8 as UnicodeDecodeError.
	return unquote_plus(value, encoding="utf-8", errors="strict")


def _page(*sections: str) -> str:
	return (
		f"<html><head><title>{TITLE}</title></head><body>"
		"<h1>Boolean Expression Solver</h1>"
		+ "".join(sections)
		+ "</body></html>"
	)


def _error(message: str) -> Response:
	logger.warning("Request failed: %s", message)
	return Response(ok=False, body=_page(f"<h2>Error: {html.escape(message)}</h2>"))


def handle_request(query_string: Optional[str]) -> Response:
	if not query_string:
		return _error("No query string provided.")

	raw_expr = get_query_param(query_string, "expr")
	if raw_expr is None:
		return _error("No expression provided.")
	try:
		expression = convert_complements(url_decode(raw_expr))
	except UnicodeDecodeError:
		return _error("Failed to decode expression.")

	mode = get_query_param(query_string, "mode")
	if mode is not None:
		try:
			mode = url_decode(mode)
		except UnicodeDecodeError:
			return _error("Failed to decode mode.")
	echoed = f"<p>{html.escape(expression)}</p>"
	try:
		if mode == TRUTH_TABLE_MODE:
			table = build_truth_table(expression)
			return Response(
				ok=True,
				body=_page(
					"<h2>Truth Table for Expression:</h2>",
					echoed,
					table.to_frame().to_html(index=False, border=1),
				),
			)
		result = evaluate(expression)
	except EvalError as exc:
		return _error(str(exc))
	return Response(
		ok=True,
		body=_page(
			"<h2>Evaluation Result for Expression:</h2>",
			echoed,
			f"<p>Result: {int(result)}</p>",
		),
	)


def render_cgi(response: Response) -> str:
	return f"Content-Type: {CONTENT_TYPE}\n\n{response.body}"


def main() -> int:
	response = handle_request(os.environ.get("QUERY_STRING"))
	sys.stdout.write(render_cgi(response))
	return 0 if response.ok else 1


if __name__ == "__main__":
	sys.exit(main())
