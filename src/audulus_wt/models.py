from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Field names follow the host document schema (camelCase on the wire).
_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Geometry & exposure
# ---------------------------------------------------------------------------


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class Exposure(BaseModel):
    """Binds a node's port to a name and position on the enclosing patch boundary."""

    name: str
    position: Position = Field(default_factory=Position)


class PortBinding(BaseModel):
    """A port forwarded by a subpatch node to its inner exposed node."""

    model_config = _CONFIG

    name: str
    node: str  # inner node ID
    kind: Literal["input", "output", "label"]
    position: Position = Field(default_factory=Position)


class ControlPoint(BaseModel):
    x: float
    y: float


# ---------------------------------------------------------------------------
# Node types (discriminated union on "type")
# ---------------------------------------------------------------------------


class _PatchNode(BaseModel):
    model_config = _CONFIG

    id: str = ""
    position: Position = Field(default_factory=Position)
    exposure: Exposure | None = None

    @property
    def input_arity(self) -> int:
        return 0

    @property
    def output_arity(self) -> int:
        return 1


class TextNode(_PatchNode):
    type: Literal["Text"] = "Text"
    text: str = ""

    @property
    def output_arity(self) -> int:
        return 0


class InputNode(_PatchNode):
    type: Literal["Input"] = "Input"
    name: str = ""


class OutputNode(_PatchNode):
    type: Literal["Output"] = "Output"
    name: str = ""

    @property
    def input_arity(self) -> int:
        return 1

    @property
    def output_arity(self) -> int:
        return 0


BlockName = Literal["Phasor", "OctaveToHz"]

# (inputs, outputs) per built-in block; Phasor takes hz and sync
BLOCK_PORTS: dict[str, tuple[int, int]] = {
    "Phasor": (2, 1),
    "OctaveToHz": (1, 1),
}


class BlockNode(_PatchNode):
    type: BlockName

    @property
    def input_arity(self) -> int:
        return BLOCK_PORTS[self.type][0]

    @property
    def output_arity(self) -> int:
        return BLOCK_PORTS[self.type][1]


class ExprNode(_PatchNode):
    type: Literal["Expr"] = "Expr"
    expr: str
    variables: list[str] = []

    @property
    def input_arity(self) -> int:
        return len(self.variables)


class MuxNode(_PatchNode):
    """Selects among ``input_count`` signals; input 0 is the selector."""

    type: Literal["XMux"] = "XMux"
    input_count: int = Field(ge=1)

    @property
    def input_arity(self) -> int:
        return self.input_count + 1


class SplineNode(_PatchNode):
    """Lookup node: maps an input in [0, 1] through a curve of control points."""

    type: Literal["Spline"] = "Spline"
    control_points: list[ControlPoint] = []

    @property
    def input_arity(self) -> int:
        return 1


class SubpatchNode(_PatchNode):
    type: Literal["Patch"] = "Patch"
    sub_patch: Patch
    ports: list[PortBinding] = []

    @property
    def input_arity(self) -> int:
        return sum(1 for p in self.ports if p.kind == "input")

    @property
    def output_arity(self) -> int:
        return sum(1 for p in self.ports if p.kind == "output")


# Discriminated union of all node types
Node = Annotated[
    Union[
        TextNode,
        InputNode,
        OutputNode,
        BlockNode,
        ExprNode,
        MuxNode,
        SplineNode,
        SubpatchNode,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Wires, patches, documents
# ---------------------------------------------------------------------------


class Wire(BaseModel):
    model_config = _CONFIG

    source: str = Field(alias="from")
    output: int = Field(ge=0)
    target: str = Field(alias="to")
    input: int = Field(ge=0)


class Patch(BaseModel):
    model_config = _CONFIG

    id: str
    pan: Position = Field(default_factory=Position)
    zoom: float = 1.0
    nodes: list[Node] = []
    wires: list[Wire] = []


class Document(BaseModel):
    version: int = 1
    title: str = ""
    patch: Patch


SubpatchNode.model_rebuild()
