"""Textual shape heuristics used in place of real type resolution.

Every predicate here looks only at source text (or a node type string), never
at resolved types.  Swapping any of them for a semantic check leaves the
output schema untouched.
"""

from __future__ import annotations

import math
import re

from . import constants
from .node_kinds import MEMBER_ACCESS_TYPES, POINTER_DECLARATOR_TYPE

_INT_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX](?P<hex>[0-9a-fA-F]*)|(?P<dec>\d+))")

_ENCLOSERS: dict[str, str] = {"(": ")", "{": "}"}


def parse_int_lenient(text: str) -> int | float:
    """Parse the leading integer of *text* the way JavaScript ``parseInt`` does.

    Leading whitespace, an optional sign and the digits are consumed; anything
    after them is ignored.  Text with no leading integer yields ``math.nan``.

    Args:
        text: Initializer source text, e.g. ``"42"`` or ``"-7abc"``.

    Returns:
        The parsed integer, or ``math.nan`` when *text* has no integer prefix.
    """
    match = _INT_PREFIX.match(text)
    if match is None:
        return math.nan
    sign = -1 if match.group(1) == "-" else 1
    if match.group("hex") is not None:
        digits = match.group("hex")
        return sign * int(digits, 16) if digits else math.nan
    return sign * int(match.group("dec"))


def parse_int_list(initializer: str) -> list[int | float]:
    """Parse a brace initializer such as ``{1, 2, 3}`` into integers.

    The outer delimiters are dropped and the interior split on commas; each
    entry goes through ``parse_int_lenient``.  Nested braces are not
    flattened, so ``{{1,2},{3}}`` yields NaN wherever an entry starts with
    a brace.
    """
    interior = initializer[1:-1]
    return [parse_int_lenient(part.strip()) for part in interior.split(",")]


def is_pointer_declarator(declarator_text: str, parent_type: str | None) -> bool:
    return constants.POINTER_MARKER in declarator_text or (
        parent_type == POINTER_DECLARATOR_TYPE
    )


def is_brace_initializer(value: str | None) -> bool:
    return value is not None and value.startswith(constants.BRACE_OPEN)


def is_call_initializer(value: str | None) -> bool:
    """Call-style initialization, e.g. ``vector<int> dp(n + 1, -1)``."""
    return value is not None and constants.PAREN_OPEN in value


def is_member_write(left_type: str | None, left_text: str) -> bool:
    """True when an assignment target writes through ``a->b`` or ``a.b``."""
    return left_type in MEMBER_ACCESS_TYPES or constants.ARROW_OPERATOR in left_text


def argument_text(text: str | None) -> str | None:
    """Strip the enclosing ``(...)`` or ``{...}`` from an argument list."""
    if text is None:
        return None
    stripped = text.strip()
    if len(stripped) >= 2 and _ENCLOSERS.get(stripped[0]) == stripped[-1]:
        return stripped[1:-1].strip()
    return stripped
