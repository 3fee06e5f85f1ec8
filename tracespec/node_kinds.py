"""Closed set of tree-sitter C++ node kinds the analyzer classifies."""

from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    INIT_DECLARATOR = "init_declarator"
    ASSIGNMENT = "assignment_expression"
    FUNCTION_DEFINITION = "function_definition"
    FOR_STATEMENT = "for_statement"
    IF_STATEMENT = "if_statement"
    CALL = "call_expression"
    RETURN = "return_statement"
    STRUCT_SPECIFIER = "struct_specifier"
    CLASS_SPECIFIER = "class_specifier"
    NEW = "new_expression"
    # Everything else: visit children, classify nothing
    OTHER = "*"

    @classmethod
    def of(cls, node_type: str | None) -> NodeKind:
        """Map a raw tree-sitter node type onto a ``NodeKind``.

        Unknown or missing types map to ``NodeKind.OTHER``.
        """
        return _BY_TYPE.get(node_type or "", cls.OTHER)


_BY_TYPE: dict[str, NodeKind] = {
    kind.value: kind for kind in NodeKind if kind is not NodeKind.OTHER
}

# Node types that denote a member access on the left of an assignment
MEMBER_ACCESS_TYPES: frozenset[str] = frozenset(
    {"field_expression", "member_expression"}
)

POINTER_DECLARATOR_TYPE = "pointer_declarator"
FUNCTION_DECLARATOR_TYPE = "function_declarator"
FIELD_DECLARATION_TYPE = "field_declaration"

# Nodes whose full text is the declared name
NAME_LEAF_TYPES: frozenset[str] = frozenset(
    {"identifier", "field_identifier", "operator_name", "destructor_name"}
)

# Scoped names (Foo::bar, f<int>): the declared name sits in the "name" field
SCOPED_NAME_TYPES: frozenset[str] = frozenset(
    {"qualified_identifier", "template_function", "template_method"}
)
