"""Primitives for assembling patch documents.

Every operation takes the patch or node it acts on explicitly; nothing here
keeps state between calls. No semantic checks are made (port arity, wire
endpoints, cycles); the host application owns those.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Iterable

from audulus_wt.models import (
    BlockName,
    BlockNode,
    Document,
    Exposure,
    ExprNode,
    InputNode,
    MuxNode,
    Node,
    OutputNode,
    Patch,
    PortBinding,
    Position,
    SubpatchNode,
    TextNode,
    Wire,
)

_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "audulus-wt")

# Names in formulas that are not free variables
_EXPR_CONSTANTS = frozenset({"pi", "e"})
_IDENT_RE = re.compile(r"\b([A-Za-z_][A-Za-z0-9_]*)\b(\s*\()?")


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def new_document(title: str = "", patch_id: str | None = None) -> Document:
    """Return an empty document; the patch ID is derived from *title* unless given."""
    if patch_id is None:
        patch_id = str(uuid.uuid5(_NAMESPACE, title))
    return Document(title=title, patch=Patch(id=patch_id))


def _derived_id(patch_id: str, suffix: str) -> str:
    return str(uuid.uuid5(_NAMESPACE, f"{patch_id}/{suffix}"))


# ---------------------------------------------------------------------------
# Node construction
# ---------------------------------------------------------------------------


def text_node(text: str) -> TextNode:
    return TextNode(text=text)


def input_node(name: str = "") -> InputNode:
    return InputNode(name=name)


def output_node(name: str = "") -> OutputNode:
    return OutputNode(name=name)


def block_node(name: BlockName) -> BlockNode:
    return BlockNode(type=name)


def expr_variables(expr: str) -> list[str]:
    """Return the free variable names of *expr* in order of first appearance.

    Identifiers followed by ``(`` are function calls and are skipped, as are
    the named constants the host defines.
    """
    names: list[str] = []
    for match in _IDENT_RE.finditer(expr):
        name, call = match.group(1), match.group(2)
        if call or name in _EXPR_CONSTANTS or name in names:
            continue
        names.append(name)
    return names


def expr_node(expr: str, variables: list[str] | None = None) -> ExprNode:
    """Build an expression node; the formula is stored verbatim, never evaluated."""
    if variables is None:
        variables = expr_variables(expr)
    return ExprNode(expr=expr, variables=variables)


def mux_node(input_count: int) -> MuxNode:
    return MuxNode(input_count=input_count)


# ---------------------------------------------------------------------------
# Graph editing
# ---------------------------------------------------------------------------


def add_node(patch: Patch, node: Node) -> Node:
    """Append *node* to *patch*, assigning a deterministic ID if it has none.

    A node whose ID is already taken in *patch* (the same built document
    nested twice, say) gets a fresh one.
    """
    if not node.id or any(other.id == node.id for other in patch.nodes):
        node.id = _derived_id(patch.id, str(len(patch.nodes)))
    patch.nodes.append(node)
    return node


def add_nodes(patch: Patch, nodes: Iterable[Node]) -> None:
    for node in nodes:
        add_node(patch, node)


def connect(patch: Patch, source: Node, output: int, target: Node, input: int) -> Wire:
    """Wire output port *output* of *source* to input port *input* of *target*."""
    wire = Wire(source=source.id, output=output, target=target.id, input=input)
    patch.wires.append(wire)
    return wire


def move_node(node: Node, x: float, y: float) -> None:
    node.position = Position(x=x, y=y)


def expose_node(node: Node, name: str, x: float, y: float) -> None:
    """Expose *node* at the patch boundary under *name* at (x, y)."""
    node.exposure = Exposure(name=name, position=Position(x=x, y=y))


def exposed_port_names(patch: Patch) -> list[str]:
    return [node.exposure.name for node in patch.nodes if node.exposure is not None]


# ---------------------------------------------------------------------------
# Nesting
# ---------------------------------------------------------------------------


def _port_kind(node: Node) -> str:
    if isinstance(node, InputNode):
        return "input"
    if isinstance(node, OutputNode):
        return "output"
    return "label"


def forwarded_ports(patch: Patch) -> list[PortBinding]:
    """Return a port binding for every exposed node of *patch*, in node order."""
    ports: list[PortBinding] = []
    for node in patch.nodes:
        if node.exposure is None:
            continue
        ports.append(
            PortBinding(
                name=node.exposure.name,
                node=node.id,
                kind=_port_kind(node),
                position=node.exposure.position,
            )
        )
    return ports


def make_subpatch(patch: Patch, title: str = "") -> Document:
    """Wrap *patch* in a new document holding a single subpatch node.

    The subpatch node forwards every port exposed inside *patch*, so the
    wrapped patch can itself be nested inside a larger document.
    """
    doc = new_document(title, patch_id=_derived_id(patch.id, "subpatch"))
    node = SubpatchNode(sub_patch=patch, ports=forwarded_ports(patch))
    add_node(doc.patch, node)
    return doc
