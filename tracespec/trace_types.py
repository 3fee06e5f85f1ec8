"""Trace Specification data model — the visualizer's input document.

Attribute names are snake_case; serialization (``by_alias``) reproduces the
camelCase keys the visualizer front end consumes.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from . import constants


class _Entry(BaseModel):
    """Base for trace entries: immutable once appended."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=True)


class VariableKind(str, Enum):
    INT = "int"
    POINTER = "pointer"
    ARRAY = "array"


class StructureKind(str, Enum):
    STRUCT = "struct"
    CLASS = "class"


class Variable(_Entry):
    name: str
    line: int
    kind: VariableKind = Field(alias="type")
    value: int | float | str | None = None
    values: list[int | float] | None = None


class VariableUpdate(_Entry):
    name: str
    value: str
    line: int


class PointerAssignment(_Entry):
    from_expr: str | None = Field(default=None, alias="from")
    field: str | None = None
    value: str
    line: int
    tag: Literal["pointer-assignment"] = Field(
        default=constants.POINTER_ASSIGNMENT_TAG, alias="type"
    )
    full_left: str = Field(alias="fullLeft")


# ── flow nodes ───────────────────────────────────────────────────


class FunctionDefinitionFlow(_Entry):
    type: Literal["function-definition"] = "function-definition"
    name: str
    declarator: str
    body: str | None = None
    line: int


class ForLoopFlow(_Entry):
    type: Literal["for-loop"] = "for-loop"
    initializer: str | None = None
    condition: str | None = None
    update: str | None = None
    body: str | None = None
    line: int


class IfFlow(_Entry):
    type: Literal["if"] = "if"
    condition: str | None = None
    consequence: str | None = None
    line: int


class FunctionCallFlow(_Entry):
    type: Literal["function-call"] = "function-call"
    name: str
    arguments: str | None = None
    line: int


FlowNode = Annotated[
    Union[FunctionDefinitionFlow, ForLoopFlow, IfFlow, FunctionCallFlow],
    Field(discriminator="type"),
]


# ── steps ────────────────────────────────────────────────────────


class DeclareStep(_Entry):
    line: int
    action: Literal["declare"] = "declare"
    var: str
    value: str | None = None


class AssignStep(_Entry):
    line: int
    action: Literal["assign"] = "assign"
    var: str
    value: str


class PointerAssignStep(_Entry):
    line: int
    action: Literal["pointer-assign"] = "pointer-assign"
    target: str
    value: str


class LoopStartStep(_Entry):
    line: int
    action: Literal["loop-start"] = "loop-start"
    condition: str | None = None


class ConditionCheckStep(_Entry):
    line: int
    action: Literal["condition-check"] = "condition-check"
    condition: str | None = None


class CallStep(_Entry):
    line: int
    action: Literal["call"] = "call"
    function: str
    args: str = ""


class ReturnStep(_Entry):
    line: int
    action: Literal["return"] = "return"
    value: str


class AllocateStep(_Entry):
    line: int
    action: Literal["allocate"] = "allocate"
    type: str | None = None
    args: str | None = None


Step = Annotated[
    Union[
        DeclareStep,
        AssignStep,
        PointerAssignStep,
        LoopStartStep,
        ConditionCheckStep,
        CallStep,
        ReturnStep,
        AllocateStep,
    ],
    Field(discriminator="action"),
]


# ── remaining entries ────────────────────────────────────────────


class CallStackFrame(_Entry):
    function: str
    args: str | None = None
    line: int


class Return(_Entry):
    line: int
    value: str


class StructField(_Entry):
    type: str | None = None
    name: str | None = None
    is_pointer: bool = Field(default=False, alias="isPointer")


class DataStructure(_Entry):
    kind: StructureKind = Field(alias="type")
    name: str | None = None
    fields: list[StructField] = []
    line: int


class Allocation(_Entry):
    type_name: str | None = Field(default=None, alias="typeName")
    args: str | None = None
    line: int
    action: Literal["allocate-node"] = constants.ALLOCATE_NODE_TAG


class TraceSpecification(BaseModel):
    """The document one analysis builds: append-only ordered entry lists."""

    model_config = ConfigDict(populate_by_name=True)

    variables: list[Variable] = []
    flow: list[FlowNode] = []
    steps: list[Step] = []
    variable_updates: list[VariableUpdate] = Field(
        default_factory=list, alias="variableUpdates"
    )
    call_stack: list[CallStackFrame] = Field(default_factory=list, alias="callStack")
    returns: list[Return] = []
    data_structures: list[DataStructure] = Field(
        default_factory=list, alias="dataStructures"
    )
    pointer_assignments: list[PointerAssignment] = Field(
        default_factory=list, alias="pointerAssignments"
    )
    allocations: list[Allocation] = []

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in type(self).model_fields)

    def to_dict(self) -> dict[str, Any]:
        """Plain record with the front end's camelCase keys (NaN kept as float)."""
        return self.model_dump(by_alias=True)

    def to_json(self, indent: int | None = constants.DEFAULT_JSON_INDENT) -> str:
        """JSON text; NaN integer values serialize as ``null``."""
        return self.model_dump_json(by_alias=True, indent=indent)
