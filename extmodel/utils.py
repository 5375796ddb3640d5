# File: extmodel/utils.py
"""
extmodel - Utility Functions & Helpers
=======================================
Naming transformations, JavaScript literal writing, file output and a
small timing helper used across the generation pipeline.

- Naming functions are ``lru_cache``-decorated; association names are
  derived from the same handful of class names over and over.
- ``to_js`` walks an ordered tree of plain Python values and returns
  JavaScript object-literal text.  Dict insertion order is emission order.
- ``write_file`` writes atomically (temp file + rename).
"""

from __future__ import annotations

import functools
import json
import logging
import math
import os
import re
import shutil
import tempfile
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from extmodel.exceptions import ConfigurationError

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("extmodel.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns
# ---------------------------------------------------------------------------

_NON_ALPHANUM_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9]")
_SPLIT_WORDS_RE: re.Pattern[str] = re.compile(
    r"[A-Z]?[a-z]+|[A-Z]+(?=[A-Z][a-z]|\d|\b)|[A-Z]|\d+"
)
_JS_IDENTIFIER_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_FUNCTION_EXPR_RE: re.Pattern[str] = re.compile(r"^function(\s+[A-Za-z_$][\w$]*)?\s*\(")

# Line terminators are not allowed inside a regex literal
_REGEX_LINE_ESCAPES: Dict[str, str] = {
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def _extract_words(name: str) -> Tuple[str, ...]:
    """
    Extract individual lowercase words from any casing style.

    Returns a tuple (hashable for the LRU cache).
    """
    cleaned: str = _NON_ALPHANUM_RE.sub(" ", name)
    words: List[str] = _SPLIT_WORDS_RE.findall(cleaned)
    return tuple(w.lower() for w in words if w)


@functools.lru_cache(maxsize=None)
def to_camel_case(name: str) -> str:
    """
    Convert any string to camelCase.

    Examples:
        >>> to_camel_case("OrderItem")
        'orderItem'
        >>> to_camel_case("user_profile")
        'userProfile'
    """
    if not name:
        return ""
    words: Tuple[str, ...] = _extract_words(name)
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


@functools.lru_cache(maxsize=None)
def to_plural(name: str) -> str:
    """
    Naive English pluralisation, enough for association names.

    Only the last word is inflected; the casing of the rest is kept.
    """
    if not name:
        return ""

    lower: str = name.lower()

    irregulars: Dict[str, str] = {
        "person": "people",
        "child": "children",
        "man": "men",
        "woman": "women",
        "datum": "data",
        "index": "indices",
        "status": "statuses",
        "address": "addresses",
    }
    for singular, plural in irregulars.items():
        if lower == singular:
            return plural if name[0].islower() else plural.capitalize()
        if name.endswith(singular.capitalize()):
            return name[: len(name) - len(singular)] + plural.capitalize()

    if lower.endswith("s") and not lower.endswith("ss"):
        return name
    if lower.endswith(("sh", "ch", "x", "z", "ss")):
        return name + "es"
    if lower.endswith("y") and len(name) > 1 and lower[-2] not in "aeiou":
        return name[:-1] + "ies"
    return name + "s"


@functools.lru_cache(maxsize=None)
def short_class_name(class_name: str) -> str:
    """Last segment of a dotted class name: ``MyApp.model.Order`` → ``Order``."""
    return class_name.rsplit(".", 1)[-1]


# ---------------------------------------------------------------------------
# JavaScript literal writing
# ---------------------------------------------------------------------------


class JsCode:
    """
    Verbatim JavaScript inserted into the output unchanged: function
    references, ``undefined``, regex literals, function expressions.
    """

    __slots__ = ("code",)

    def __init__(self, code: str) -> None:
        self.code: str = code

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsCode) and other.code == self.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __repr__(self) -> str:
        return f"JsCode({self.code!r})"

    def __str__(self) -> str:
        return self.code


JS_UNDEFINED: JsCode = JsCode("undefined")


def js_string(value: str) -> str:
    """Double-quoted JavaScript string literal (ASCII-escaped)."""
    return json.dumps(value)


def js_scalar(value: Any) -> str:
    """
    Render a scalar literal.

    Booleans become bare ``true``/``false``, numbers stay unquoted,
    strings are double-quoted.

    Raises:
        ConfigurationError: For non-finite floats or unsupported types.
    """
    if value is None:
        return "null"
    if isinstance(value, JsCode):
        return value.code
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ConfigurationError(f"Cannot render non-finite number {value!r}.")
        return repr(value)
    if isinstance(value, str):
        return js_string(value)
    raise ConfigurationError(
        f"Cannot render value of type {type(value).__name__} as a literal."
    )


def js_regex(source: str) -> JsCode:
    """
    Regex literal from a pattern source.

    The source is scanned one character at a time: a backslash escapes
    the next character, bare ``/`` are escaped, and line terminators are
    written as escape sequences.

    Raises:
        ConfigurationError: If the source ends in a lone backslash.
    """
    out: List[str] = []
    escaped: bool = False
    for ch in source:
        if ch in _REGEX_LINE_ESCAPES:
            seq: str = _REGEX_LINE_ESCAPES[ch]
            # after a backslash only the letter part is needed
            out.append(seq[1:] if escaped else seq)
            escaped = False
        elif escaped:
            out.append(ch)
            escaped = False
        elif ch == "\\":
            out.append(ch)
            escaped = True
        elif ch == "/":
            out.append("\\/")
        else:
            out.append(ch)
    if escaped:
        raise ConfigurationError(
            "Regular expression ends in an unpaired backslash.", {"matcher": source}
        )
    return JsCode("/" + ("".join(out) or "(?:)") + "/")


def js_function(params: str, body: str) -> JsCode:
    """
    Function expression around *body*.

    A body that is already a complete ``function`` expression is used
    verbatim.
    """
    stripped: str = body.strip()
    if _FUNCTION_EXPR_RE.match(stripped):
        return JsCode(stripped)
    return JsCode(f"function({params}) {{ {stripped} }}")


def _js_key(key: str) -> str:
    return key if _JS_IDENTIFIER_RE.match(key) else js_string(key)


def to_js(value: Any, indent_size: Optional[int] = None, level: int = 0) -> str:
    """
    Serialise an ordered tree of dicts, lists and scalars to JavaScript.

    Args:
        value: Root of the tree.
        indent_size: None for compact output, otherwise spaces per level.
        level: Current nesting depth (internal).
    """
    pretty: bool = indent_size is not None
    if isinstance(value, dict):
        if not value:
            return "{}"
        parts: List[str] = []
        for k, v in value.items():
            sep: str = ": " if pretty else ":"
            parts.append(f"{_js_key(k)}{sep}{to_js(v, indent_size, level + 1)}")
        return _wrap("{", "}", parts, indent_size, level)
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items: List[str] = [to_js(v, indent_size, level + 1) for v in value]
        return _wrap("[", "]", items, indent_size, level)
    return js_scalar(value)


def _wrap(
    open_ch: str, close_ch: str, parts: List[str], indent_size: Optional[int], level: int
) -> str:
    if indent_size is None:
        return open_ch + ",".join(parts) + close_ch
    inner: str = " " * (indent_size * (level + 1))
    outer: str = " " * (indent_size * level)
    body: str = (",\n").join(inner + p for p in parts)
    return f"{open_ch}\n{body}\n{outer}{close_ch}"


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def write_file(path: Path, content: str, atomic: bool = True) -> int:
    """
    Write *content* to *path*.

    When *atomic* is True, writes to a temporary file first then renames,
    so readers never observe a half-written script.

    Returns the number of bytes written.
    """
    ensure_directory(path.parent)

    encoded: bytes = content.encode("utf-8")

    if atomic:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(encoded)
            shutil.move(tmp_path, str(path))
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    else:
        path.write_bytes(encoded)

    logger.debug("Wrote %d bytes to %s", len(encoded), path)
    return len(encoded)


def count_lines(content: str) -> int:
    """Count the number of lines in a string."""
    if not content:
        return 0
    return content.count("\n") + (1 if not content.endswith("\n") else 0)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Context-manager timer for profiling pipeline steps.

    Usage:
        with Timer("render") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "to_camel_case",
    "to_plural",
    "short_class_name",
    "JsCode",
    "JS_UNDEFINED",
    "js_string",
    "js_scalar",
    "js_regex",
    "js_function",
    "to_js",
    "ensure_directory",
    "write_file",
    "count_lines",
    "Timer",
]

logger.debug("extmodel.utils loaded - %d public symbols.", len(__all__))
