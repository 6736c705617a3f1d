"""Minification helpers for HTML, JavaScript and CSS sources."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import csscompressor
import esprima
import htmlmin
import rjsmin
import tinycss2
from bs4 import BeautifulSoup, Comment
from esprima.error_handler import Error as EsprimaError
from htmlmin.parser import HTMLMinError

logger = logging.getLogger("site_prebuild")

JS_SCRIPT_TYPES = {
    "",
    "module",
    "text/javascript",
    "application/javascript",
    "application/ecmascript",
    "text/ecmascript",
}


class CSSSyntaxError(ValueError):
    """Raised when a stylesheet cannot be parsed."""

    def __init__(self, line: int, column: int, message: str) -> None:
        super().__init__(f"line {line}, column {column}: {message}")
        self.line = line
        self.column = column


class JSSyntaxError(ValueError):
    """Raised when a script parses neither as a classic script nor as a module."""


def check_js(code: str) -> None:
    """Raise :class:`JSSyntaxError` if ``code`` is not valid JavaScript."""
    try:
        esprima.parseScript(code)
        return
    except EsprimaError as script_error:
        first_error = script_error
    try:
        esprima.parseModule(code)
    except EsprimaError:
        raise JSSyntaxError(str(first_error)) from first_error


def minify_js(code: str) -> str:
    """Validate then strip comments and redundant whitespace from JavaScript."""
    check_js(code)
    return rjsmin.jsmin(code, keep_bang_comments=False)


def _first_parse_error(nodes: Optional[Iterable]) -> Optional[tinycss2.ast.ParseError]:
    for node in nodes or ():
        if node.type == "error":
            return node
        for attr in ("prelude", "content", "arguments"):
            found = _first_parse_error(getattr(node, attr, None))
            if found is not None:
                return found
    return None


def check_css(code: str) -> None:
    """Raise :class:`CSSSyntaxError` if the stylesheet has structural errors."""
    rules = tinycss2.parse_stylesheet(code, skip_comments=True, skip_whitespace=True)
    error = _first_parse_error(rules)
    if error is not None:
        raise CSSSyntaxError(error.source_line, error.source_column, error.message)


def minify_css(code: str) -> str:
    """Validate then minify a stylesheet."""
    check_css(code)
    return csscompressor.compress(code)


def _is_javascript(script) -> bool:
    script_type = (script.get("type") or "").strip().lower()
    return script_type in JS_SCRIPT_TYPES


def _minify_inline_blocks(soup: BeautifulSoup) -> None:
    for style in soup.find_all("style"):
        if style.string and style.string.strip():
            style.string = csscompressor.compress(str(style.string))
    for script in soup.find_all("script"):
        if script.get("src") or not _is_javascript(script):
            continue
        if script.string and script.string.strip():
            script.string = rjsmin.jsmin(str(script.string))


def minify_html(markup: str) -> str:
    """Collapse whitespace, drop comments and minify inline CSS/JS.

    Markup is normalized through BeautifulSoup first, so malformed input never
    raises; if htmlmin still rejects the normalized document the normalized
    markup is returned as is. The parser lowercases tag and attribute names,
    including camelCase SVG names such as ``viewBox``.
    """
    soup = BeautifulSoup(markup, "html.parser")
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    _minify_inline_blocks(soup)
    normalized = str(soup)

    try:
        return htmlmin.minify(
            normalized,
            remove_comments=True,
            remove_empty_space=False,
            remove_optional_attribute_quotes=False,
            convert_charrefs=False,
        )
    except HTMLMinError as exc:
        logger.warning("htmlmin rejected markup, keeping normalized output: %s", exc)
        return normalized
