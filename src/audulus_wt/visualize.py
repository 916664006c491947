"""Graphviz DOT visualization for patch documents."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from audulus_wt.models import (
    BlockNode,
    Document,
    ExprNode,
    InputNode,
    MuxNode,
    Node,
    OutputNode,
    Patch,
    SplineNode,
    SubpatchNode,
    TextNode,
)


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _node_attrs(node: Node) -> tuple[str, str, str]:
    """Return (shape, fillcolor, label) for a patch node."""
    if isinstance(node, TextNode):
        return "note", "#e9ecef", _escape(node.text)
    if isinstance(node, InputNode):
        return "box", "#d4edda", f"input\\n{_escape(node.name)}"
    if isinstance(node, OutputNode):
        return "box", "#f8d7da", f"output\\n{_escape(node.name)}"
    if isinstance(node, BlockNode):
        return "box", "#e2d5f1", node.type
    if isinstance(node, ExprNode):
        return "box", "#fff3cd", _escape(node.expr)
    if isinstance(node, MuxNode):
        return "trapezium", "#fde0c8", f"xmux[{node.input_count}]"
    if isinstance(node, SplineNode):
        return "box3d", "#cce5ff", f"spline[{len(node.control_points)}]"
    if isinstance(node, SubpatchNode):
        return "box3d", "#ffffff", "patch"
    raise TypeError(f"unknown node type: {type(node).__name__}")


def _write_patch(patch: Patch, lines: list[str], indent: str) -> None:
    w = lines.append
    for node in patch.nodes:
        if isinstance(node, SubpatchNode):
            w(f'{indent}subgraph "cluster_{node.id}" {{')
            w(f'{indent}    label="patch";')
            w(f'{indent}    style=dashed;')
            _write_patch(node.sub_patch, lines, indent + "    ")
            w(f"{indent}}}")
            continue
        shape, color, label = _node_attrs(node)
        if node.exposure is not None:
            label += f"\\n[{_escape(node.exposure.name)}]"
        w(f'{indent}"{node.id}" [shape={shape} style=filled fillcolor="{color}" label="{label}"];')

    for wire in patch.wires:
        w(f'{indent}"{wire.source}" -> "{wire.target}" [label="{wire.output}:{wire.input}"];')


def patch_to_dot(doc: Document) -> str:
    """Convert a patch document to a Graphviz DOT string."""
    lines: list[str] = []
    w = lines.append

    w(f'digraph "{_escape(doc.title)}" {{')
    w("    rankdir=LR;")
    w('    node [fontname="Helvetica" fontsize=10];')
    w('    edge [fontname="Helvetica" fontsize=8];')
    w("")
    _write_patch(doc.patch, lines, "    ")
    w("}")
    return "\n".join(lines) + "\n"


def patch_to_dot_file(doc: Document, path: str | Path) -> Path:
    """Write a DOT file for the document to *path*.

    If the ``dot`` binary is on PATH, also renders a PDF next to it.
    """
    dot_path = Path(path)
    dot_path.parent.mkdir(parents=True, exist_ok=True)
    dot_path.write_text(patch_to_dot(doc))

    dot_bin = shutil.which("dot")
    if dot_bin is not None:
        pdf_path = dot_path.with_suffix(".pdf")
        subprocess.run(
            [dot_bin, "-Tpdf", str(dot_path), "-o", str(pdf_path)],
            check=True,
        )

    return dot_path
