# pyzke/jsutil.py
"""
Helpers for writing Python values out as JavaScript source.

The generated class definitions and instantiation snippets embed Python
data as JS object literals. Most values go through ``json.dumps``; values
wrapped in :class:`JsLiteral` (function bodies, ``this``, ``null``) are
written verbatim so they stay executable.
"""

import json
import re
from typing import Any

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_NAME_PARTS = re.compile(r"[^A-Za-z0-9]+")
# string literals (group 1) are matched first so comment markers inside them survive
_STRING_OR_COMMENT = re.compile(
    r"""("(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)"""
    r"""|//[^\n]*|/\*.*?\*/""",
    re.DOTALL,
)
_BLANK_LINE = re.compile(r"^\s*\n", re.MULTILINE)


class JsLiteral(str):
    """A string emitted as raw JavaScript instead of a quoted string."""

    def __repr__(self):
        return f"JsLiteral({str.__repr__(self)})"


THIS = JsLiteral("this")
NULL = JsLiteral("null")


def to_js_literal(value: Any) -> str:
    """
    Serialize a value as a JavaScript expression.

    Dict keys that are valid identifiers are written bare, other keys are
    quoted. Insertion order is preserved so the output is deterministic.
    """
    if isinstance(value, JsLiteral):
        return str(value)
    if isinstance(value, dict):
        items = [f"{_js_key(k)}: {to_js_literal(v)}" for k, v in value.items()]
        return "{" + ", ".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_js_literal(v) for v in value) + "]"
    if hasattr(value, "to_dict"):
        return to_js_literal(value.to_dict())
    return json.dumps(value)


def _js_key(key: Any) -> str:
    key = str(key)
    return key if _IDENTIFIER.match(key) else json.dumps(key)


def js_name(name: str) -> str:
    """
    Turn an instance name into a JS variable name: ``foo_bar`` -> ``fooBar``.
    Characters that cannot appear in an identifier act as word breaks.
    """
    parts = [p for p in _NAME_PARTS.split(str(name)) if p]
    if not parts:
        raise ValueError(f"Cannot derive a JS name from {name!r}")
    head, rest = parts[0], parts[1:]
    result = head[0].lower() + head[1:] + "".join(p[0].upper() + p[1:] for p in rest)
    if result[0].isdigit():
        result = "_" + result
    return result


def container_id(name: str) -> str:
    """DOM id of the element a standalone widget renders into."""
    return "-".join(str(name).split("_"))


def strip_js_comments(code: str) -> str:
    """
    Remove ``//`` and ``/* */`` comments and the blank lines they leave.
    Quoted and template strings are copied through untouched.
    """
    code = _STRING_OR_COMMENT.sub(lambda m: m.group(1) or "", code)
    return _BLANK_LINE.sub("", code)
