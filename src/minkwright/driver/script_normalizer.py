"""
Turn author-supplied page scripts into zero-argument callables.

Playwright's ``evaluate`` accepts either an expression or a function. Mink
style scripts arrive in any shape: a bare expression, a ``return``
statement, an immediately-invoked function, or a function value that has
not been called yet. ``normalize_script`` wraps each of them into an arrow
function so the caller gets the script's value (``EVALUATE``) or only its
side effects (``EXECUTE``).

Classification is a prioritized set of pattern checks. Text that merely
looks like one of the shapes is not rejected here; a malformed script fails
when the page runs it.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional


class ScriptMode(str, Enum):
    EVALUATE = "evaluate"
    EXECUTE = "execute"


class ScriptShape(str, Enum):
    RETURN = "return"
    IIFE = "iife"
    FUNCTION = "function"
    ARROW = "arrow"
    EXPRESSION = "expression"


_TRAILING_TERMINATORS_RE = re.compile(r"[\s;]+$")
_RETURN_RE = re.compile(r"^return(?:\s|$)")
_ANONYMOUS_FUNCTION_RE = re.compile(r"^(?:async\s+)?function\s*\*?\s*\(")
_TRAILING_CALL_RE = re.compile(r"\}\s*\([^()]*\)$")
_ARROW_RE = re.compile(r"^(?:async\s*)?(?:\([^()]*\)|[A-Za-z_$][\w$]*)\s*=>")
_QUOTES = ("'", '"', "`")


def _strip_terminators(script: str) -> str:
    return _TRAILING_TERMINATORS_RE.sub("", str(script or "").strip())


def _matching_paren(text: str, start: int) -> Optional[int]:
    """Index of the ``)`` closing the ``(`` at ``start``, skipping string literals."""
    depth = 0
    quote: Optional[str] = None
    index = start
    while index < len(text):
        char = text[index]
        if quote is not None:
            if char == "\\":
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return None


def _is_parenthesized_call(text: str) -> bool:
    if not text.startswith("("):
        return False
    head_end = _matching_paren(text, 0)
    if head_end is None:
        return False
    rest = text[head_end + 1:].lstrip()
    if not rest.startswith("("):
        return False
    call_end = _matching_paren(rest, 0)
    return call_end == len(rest) - 1


def _is_iife(text: str) -> bool:
    if _is_parenthesized_call(text):
        return True
    # ``function () {...}()`` without the outer parentheses.
    return bool(_ANONYMOUS_FUNCTION_RE.match(text) and _TRAILING_CALL_RE.search(text))


def _is_anonymous_function(text: str) -> bool:
    return bool(_ANONYMOUS_FUNCTION_RE.match(text)) and not _TRAILING_CALL_RE.search(text)


def _is_arrow_function(text: str) -> bool:
    return bool(_ARROW_RE.match(text))


def _unwrap_parens(text: str) -> Optional[str]:
    """Inner text when one pair of parentheses encloses all of ``text``."""
    if not text.startswith("(") or _matching_paren(text, 0) != len(text) - 1:
        return None
    return _strip_terminators(text[1:-1])


def classify_script(script: str) -> ScriptShape:
    text = _strip_terminators(script)
    if _RETURN_RE.match(text):
        return ScriptShape.RETURN
    if _is_iife(text):
        return ScriptShape.IIFE
    if _is_anonymous_function(text):
        return ScriptShape.FUNCTION
    if _is_arrow_function(text):
        return ScriptShape.ARROW
    inner = _unwrap_parens(text)
    if inner is not None:
        shape = classify_script(inner)
        if shape in (ScriptShape.IIFE, ScriptShape.FUNCTION, ScriptShape.ARROW):
            return shape
    return ScriptShape.EXPRESSION


def normalize_script(script: str, mode: ScriptMode = ScriptMode.EVALUATE) -> str:
    """
    Wrap ``script`` into an arrow function suitable for ``page.evaluate``.

    The script text always sits on its own line so a trailing ``//`` comment
    cannot swallow the closing delimiters.
    """
    text = _strip_terminators(script)
    returns = ScriptMode(mode) is ScriptMode.EVALUATE
    shape = classify_script(text)

    if shape is ScriptShape.RETURN:
        if returns:
            return f"() => {{\n{text}\n}}"
        return f"() => {{\n(() => {{\n{text}\n}})();\n}}"
    if shape is ScriptShape.IIFE:
        return f"() => (\n{text}\n)" if returns else f"() => {{\n(\n{text}\n);\n}}"
    if shape in (ScriptShape.FUNCTION, ScriptShape.ARROW):
        return f"() => ((\n{text}\n)())" if returns else f"() => {{\n(\n{text}\n)();\n}}"
    return f"() => (\n{text}\n)" if returns else f"() => {{\n{text}\n}}"


def wait_condition_expression(condition: str) -> str:
    """Predicate used by condition waits; blank conditions never hold."""
    text = _strip_terminators(condition)
    if _RETURN_RE.match(text):
        text = _strip_terminators(text[len("return"):])
    if not text:
        return "() => false"
    return f"() => !!(\n{text}\n)"
