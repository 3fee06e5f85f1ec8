"""Null-safety of TraceAnalyzer on trees with missing fields and children.

Uses hand-built nodes implementing the subset of the tree-sitter node
interface the analyzer reads, so each matched node kind can be exercised
without the field a real parse would always supply.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tracespec.analyzer import TraceAnalyzer


@dataclass
class FakeNode:
    type: str
    start_byte: int = 0
    end_byte: int = 0
    row: int = 0
    children: list["FakeNode"] = field(default_factory=list)
    fields: dict[str, "FakeNode"] = field(default_factory=dict)
    parent: "FakeNode | None" = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        for child in self.children:
            child.parent = self

    @property
    def start_point(self) -> tuple[int, int]:
        return (self.row, 0)

    @property
    def named_children(self) -> list["FakeNode"]:
        return self.children

    def child(self, index: int) -> "FakeNode | None":
        return self.children[index] if index < len(self.children) else None

    def child_by_field_name(self, name: str) -> "FakeNode | None":
        return self.fields.get(name)


@dataclass
class FakeTree:
    root_node: FakeNode


def _analyze(*nodes: FakeNode, source: bytes = b""):
    root = FakeNode("translation_unit", children=list(nodes))
    return TraceAnalyzer().analyze(FakeTree(root), source)


class TestMissingFields:
    def test_bare_for_statement(self):
        spec = _analyze(FakeNode("for_statement", row=2))
        assert spec.flow[0].type == "for-loop"
        assert spec.flow[0].condition is None
        assert spec.flow[0].body is None
        assert spec.steps[0].line == 3
        assert spec.steps[0].condition is None

    def test_bare_if_statement(self):
        spec = _analyze(FakeNode("if_statement"))
        assert spec.flow[0].condition is None
        assert spec.flow[0].consequence is None
        assert spec.steps[0].action == "condition-check"

    def test_call_without_children(self):
        spec = _analyze(FakeNode("call_expression", row=4))
        assert spec.flow[0].name == "unknown"
        assert spec.flow[0].arguments is None
        assert spec.steps[0].function == "unknown"
        assert spec.steps[0].args == ""
        assert spec.call_stack == []

    def test_return_without_expression(self):
        spec = _analyze(FakeNode("return_statement"))
        assert spec.returns[0].value == "void"

    def test_init_declarator_without_declarator_is_skipped(self):
        spec = _analyze(FakeNode("init_declarator"))
        assert spec.variables == []
        assert spec.steps == []

    def test_init_declarator_without_value(self):
        source = b"x"
        decl = FakeNode("identifier", 0, 1)
        spec = _analyze(
            FakeNode("init_declarator", 0, 1, children=[decl], fields={"declarator": decl}),
            source=source,
        )
        var = spec.variables[0]
        assert var.name == "x"
        assert var.kind == "int"
        assert var.value is None
        assert spec.steps[0].value is None

    def test_assignment_missing_right_side(self):
        source = b"x"
        left = FakeNode("identifier", 0, 1)
        spec = _analyze(
            FakeNode("assignment_expression", children=[left], fields={"left": left}),
            source=source,
        )
        assert spec.variable_updates == []
        assert spec.pointer_assignments == []

    def test_anonymous_struct_without_body(self):
        spec = _analyze(FakeNode("struct_specifier"))
        ds = spec.data_structures[0]
        assert ds.name is None
        assert ds.fields == []

    def test_new_without_type(self):
        spec = _analyze(FakeNode("new_expression"))
        assert spec.allocations[0].type_name is None
        assert spec.allocations[0].args is None
        assert spec.steps[0].action == "allocate"


class TestTraversalContinues:
    def test_children_of_degraded_nodes_are_visited(self):
        source = b"y"
        inner = FakeNode("identifier", 0, 1)
        nested_decl = FakeNode(
            "init_declarator", 0, 1, children=[inner], fields={"declarator": inner}
        )
        degraded_if = FakeNode("if_statement", children=[nested_decl])
        spec = _analyze(degraded_if, source=source)
        assert [s.action for s in spec.steps] == ["condition-check", "declare"]
        assert spec.variables[0].name == "y"

    def test_function_without_declarator_clears_context(self):
        source = b"f"
        callee = FakeNode("identifier", 0, 1)
        call = FakeNode("call_expression", 0, 1, children=[callee])
        spec = _analyze(FakeNode("function_definition", children=[call]), source=source)
        assert spec.flow[0].type == "function-call"
        assert spec.call_stack == []


class TestPointerParent:
    def test_declarator_under_pointer_declarator_is_pointer(self):
        source = b"p0"
        decl = FakeNode("identifier", 0, 1)
        value = FakeNode("number_literal", 1, 2)
        init = FakeNode(
            "init_declarator",
            0,
            2,
            children=[decl, value],
            fields={"declarator": decl, "value": value},
        )
        pointer = FakeNode("pointer_declarator", 0, 2, children=[init])
        spec = _analyze(pointer, source=source)
        var = spec.variables[0]
        assert var.name == "p"
        assert var.kind == "pointer"
        assert var.value == "0"
