"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

DEFAULT_LANGUAGE = "cpp"

VOID_RETURN = "void"
UNKNOWN_CALLEE = "unknown"

POINTER_MARKER = "*"
ARROW_OPERATOR = "->"
BRACE_OPEN = "{"
PAREN_OPEN = "("

POINTER_ASSIGNMENT_TAG = "pointer-assignment"
ALLOCATE_NODE_TAG = "allocate-node"

DEFAULT_JSON_INDENT = 2
