"""TraceAnalyzer — tree-sitter C++ AST -> Trace Specification."""

from __future__ import annotations

import logging
from typing import Any, Callable

from . import constants, heuristics
from .analyzer_types import AnalyzerConfig
from .node_kinds import (
    FIELD_DECLARATION_TYPE,
    FUNCTION_DECLARATOR_TYPE,
    NAME_LEAF_TYPES,
    SCOPED_NAME_TYPES,
    NodeKind,
)
from .trace_types import (
    Allocation,
    AllocateStep,
    AssignStep,
    CallStackFrame,
    CallStep,
    ConditionCheckStep,
    DataStructure,
    DeclareStep,
    ForLoopFlow,
    FunctionCallFlow,
    FunctionDefinitionFlow,
    IfFlow,
    LoopStartStep,
    PointerAssignment,
    PointerAssignStep,
    Return,
    ReturnStep,
    StructField,
    StructureKind,
    TraceSpecification,
    Variable,
    VariableKind,
    VariableUpdate,
)

logger = logging.getLogger(__name__)


class TraceLimitExceeded(Exception):
    """Raised when an analysis visits more nodes than ``max_nodes`` allows."""


class TraceAnalyzer:
    """Classifies a C++ tree-sitter AST into a flat, line-tagged trace.

    One pre-order walk over the tree.  Each node is mapped onto a
    ``NodeKind`` and handed to the matching classifier, which appends to the
    ``TraceSpecification`` and returns the enclosing-function name its
    children should see.  ``NodeKind.OTHER`` classifies nothing; children are
    visited for every node regardless of the outcome.

    A missing field or child on a matched node is never an error: the
    corresponding output field is left ``None`` and the walk continues.
    """

    def __init__(self, config: AnalyzerConfig = AnalyzerConfig()):
        self._config = config
        self._source: bytes = b""
        self._spec = TraceSpecification()
        self._nodes_visited: int = 0
        self._DISPATCH: dict[NodeKind, Callable[[Any, str | None], str | None]] = {
            NodeKind.INIT_DECLARATOR: self._classify_init_declarator,
            NodeKind.ASSIGNMENT: self._classify_assignment,
            NodeKind.FUNCTION_DEFINITION: self._classify_function_definition,
            NodeKind.FOR_STATEMENT: self._classify_for,
            NodeKind.IF_STATEMENT: self._classify_if,
            NodeKind.CALL: self._classify_call,
            NodeKind.RETURN: self._classify_return,
            NodeKind.STRUCT_SPECIFIER: self._classify_structure,
            NodeKind.CLASS_SPECIFIER: self._classify_structure,
            NodeKind.NEW: self._classify_new,
            NodeKind.OTHER: self._classify_nothing,
        }

    @property
    def nodes_visited(self) -> int:
        return self._nodes_visited

    # ── helpers ──────────────────────────────────────────────────

    def _node_text(self, node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def _text_or_none(self, node) -> str | None:
        return self._node_text(node) if node is not None else None

    def _line(self, node) -> int:
        return node.start_point[0] + 1

    def _declared_name(self, node) -> str:
        """Extract the bare function name (``Foo::bar`` -> ``bar``)."""
        if node.type in NAME_LEAF_TYPES:
            return self._node_text(node)
        if node.type in SCOPED_NAME_TYPES:
            name_node = node.child_by_field_name("name")
            return (
                self._declared_name(name_node)
                if name_node is not None
                else self._node_text(node)
            )
        inner = node.child_by_field_name("declarator")
        if inner is not None:
            return self._declared_name(inner)
        # reference_declarator and friends carry no "declarator" field
        id_node = next(
            (
                c
                for c in node.named_children
                if c.type in NAME_LEAF_TYPES or c.type in SCOPED_NAME_TYPES
            ),
            None,
        )
        if id_node is not None:
            return self._declared_name(id_node)
        return self._node_text(node)

    def _find_function_declarator(self, node):
        """Recursively find function_declarator inside pointer/reference declarators."""
        if node.type == FUNCTION_DECLARATOR_TYPE:
            return node
        return next(
            (
                found
                for child in node.named_children
                if (found := self._find_function_declarator(child)) is not None
            ),
            None,
        )

    def _function_name(self, declarator) -> str:
        func_decl = self._find_function_declarator(declarator)
        name_node = (
            func_decl.child_by_field_name("declarator") if func_decl is not None else None
        )
        return self._declared_name(name_node if name_node is not None else declarator)

    def _member_operands(self, left) -> tuple[str | None, str | None]:
        """Object and field text of a member access (``curr->next`` -> curr, next)."""
        named = left.named_children
        obj_node = left.child_by_field_name("argument")
        field_node = left.child_by_field_name("field")
        if obj_node is None and named:
            obj_node = named[0]
        if field_node is None and len(named) > 1:
            field_node = named[1]
        return self._text_or_none(obj_node), self._text_or_none(field_node)

    # ── entry point ──────────────────────────────────────────────

    def analyze(self, tree, source: bytes) -> TraceSpecification:
        self._source = source
        self._spec = TraceSpecification()
        self._nodes_visited = 0
        self._walk(tree.root_node)
        logger.debug(
            "Visited %d nodes, emitted %d steps",
            self._nodes_visited,
            len(self._spec.steps),
        )
        return self._spec

    # ── traversal ────────────────────────────────────────────────

    def _walk(self, root) -> None:
        """Pre-order walk pairing each pending node with its enclosing function."""
        pending: list[tuple[Any, str | None]] = [(root, None)]
        while pending:
            node, enclosing = pending.pop()
            self._count_visit()
            handler = self._DISPATCH[NodeKind.of(node.type)]
            inner = handler(node, enclosing)
            pending.extend((child, inner) for child in reversed(node.named_children))

    def _count_visit(self) -> None:
        self._nodes_visited += 1
        limit = self._config.max_nodes
        if limit is not None and self._nodes_visited > limit:
            raise TraceLimitExceeded(
                f"Syntax tree exceeds the configured limit of {limit} nodes"
            )

    # ── classifiers ──────────────────────────────────────────────

    def _classify_nothing(self, node, enclosing: str | None) -> str | None:
        return enclosing

    def _classify_init_declarator(self, node, enclosing: str | None) -> str | None:
        decl_node = node.child_by_field_name("declarator")
        if decl_node is None:
            return enclosing
        value_node = node.child_by_field_name("value")
        line = self._line(node)
        name = self._node_text(decl_node)
        value = self._text_or_none(value_node)
        parent = node.parent

        if heuristics.is_pointer_declarator(
            name, parent.type if parent is not None else None
        ):
            variable = Variable(
                name=name, line=line, kind=VariableKind.POINTER, value=value
            )
        elif heuristics.is_brace_initializer(value):
            variable = Variable(
                name=name,
                line=line,
                kind=VariableKind.ARRAY,
                values=heuristics.parse_int_list(value),
            )
        elif heuristics.is_call_initializer(value):
            variable = Variable(name=name, line=line, kind=VariableKind.ARRAY, value=value)
        else:
            variable = Variable(
                name=name,
                line=line,
                kind=VariableKind.INT,
                value=heuristics.parse_int_lenient(value) if value is not None else None,
            )

        self._spec.variables.append(variable)
        self._spec.steps.append(DeclareStep(line=line, var=name, value=value))
        return enclosing

    def _classify_assignment(self, node, enclosing: str | None) -> str | None:
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if left is None or right is None:
            return enclosing
        line = self._line(node)
        left_text = self._node_text(left)
        right_text = self._node_text(right)

        if heuristics.is_member_write(left.type, left_text):
            from_expr, field = self._member_operands(left)
            self._spec.pointer_assignments.append(
                PointerAssignment(
                    from_expr=from_expr,
                    field=field,
                    value=right_text,
                    line=line,
                    full_left=left_text,
                )
            )
            self._spec.steps.append(
                PointerAssignStep(line=line, target=left_text, value=right_text)
            )
        else:
            self._spec.variable_updates.append(
                VariableUpdate(name=left_text, value=right_text, line=line)
            )
            self._spec.steps.append(AssignStep(line=line, var=left_text, value=right_text))
        return enclosing

    def _classify_function_definition(self, node, enclosing: str | None) -> str | None:
        declarator = node.child_by_field_name("declarator")
        if declarator is None:
            return None
        name = self._function_name(declarator)
        self._spec.flow.append(
            FunctionDefinitionFlow(
                name=name,
                declarator=self._node_text(declarator),
                body=self._text_or_none(node.child_by_field_name("body")),
                line=self._line(node),
            )
        )
        return name

    def _classify_for(self, node, enclosing: str | None) -> str | None:
        line = self._line(node)
        condition = self._text_or_none(node.child_by_field_name("condition"))
        self._spec.flow.append(
            ForLoopFlow(
                initializer=self._text_or_none(node.child_by_field_name("initializer")),
                condition=condition,
                update=self._text_or_none(node.child_by_field_name("update")),
                body=self._text_or_none(node.child_by_field_name("body")),
                line=line,
            )
        )
        self._spec.steps.append(LoopStartStep(line=line, condition=condition))
        return enclosing

    def _classify_if(self, node, enclosing: str | None) -> str | None:
        line = self._line(node)
        condition = self._text_or_none(node.child_by_field_name("condition"))
        self._spec.flow.append(
            IfFlow(
                condition=condition,
                consequence=self._text_or_none(node.child_by_field_name("consequence")),
                line=line,
            )
        )
        self._spec.steps.append(ConditionCheckStep(line=line, condition=condition))
        return enclosing

    def _classify_call(self, node, enclosing: str | None) -> str | None:
        """Record a call; a callee named like the enclosing function is recursion.

        Only direct self-recursion by name is detected.  Mutual recursion
        goes unnoticed, and an unrelated callee that shares the enclosing
        function's name is reported as recursive.
        """
        line = self._line(node)
        fn_node = node.child(0)
        name = self._node_text(fn_node) if fn_node is not None else constants.UNKNOWN_CALLEE
        args = self._text_or_none(node.child_by_field_name("arguments"))

        self._spec.flow.append(FunctionCallFlow(name=name, arguments=args, line=line))
        self._spec.steps.append(CallStep(line=line, function=name, args=args or ""))
        if name == enclosing:
            logger.debug("Self-recursive call to %s at line %d", name, line)
            self._spec.call_stack.append(
                CallStackFrame(function=name, args=args, line=line)
            )
        return enclosing

    def _classify_return(self, node, enclosing: str | None) -> str | None:
        line = self._line(node)
        named = node.named_children
        value = self._node_text(named[0]) if named else constants.VOID_RETURN
        self._spec.steps.append(ReturnStep(line=line, value=value))
        self._spec.returns.append(Return(line=line, value=value))
        return enclosing

    def _classify_structure(self, node, enclosing: str | None) -> str | None:
        body_node = node.child_by_field_name("body")
        fields: list[StructField] = []
        if body_node is not None:
            for child in body_node.named_children:
                if child.type != FIELD_DECLARATION_TYPE:
                    continue
                declarator = self._text_or_none(child.child_by_field_name("declarator"))
                fields.append(
                    StructField(
                        type=self._text_or_none(child.child_by_field_name("type")),
                        name=declarator,
                        is_pointer=declarator is not None
                        and constants.POINTER_MARKER in declarator,
                    )
                )

        self._spec.data_structures.append(
            DataStructure(
                kind=(
                    StructureKind.STRUCT
                    if NodeKind.of(node.type) is NodeKind.STRUCT_SPECIFIER
                    else StructureKind.CLASS
                ),
                name=self._text_or_none(node.child_by_field_name("name")),
                fields=fields,
                line=self._line(node),
            )
        )
        return enclosing

    def _classify_new(self, node, enclosing: str | None) -> str | None:
        line = self._line(node)
        type_name = self._text_or_none(node.child_by_field_name("type"))
        args = heuristics.argument_text(
            self._text_or_none(node.child_by_field_name("arguments"))
        )
        self._spec.allocations.append(Allocation(type_name=type_name, args=args, line=line))
        self._spec.steps.append(AllocateStep(line=line, type=type_name, args=args))
        return enclosing
