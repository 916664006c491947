"""Hand-built patch: a phasor-driven sine nested as a subpatch."""

from audulus_wt import (
    add_node,
    block_node,
    connect,
    document_to_json,
    expose_node,
    expr_node,
    input_node,
    make_subpatch,
    move_node,
    new_document,
    output_node,
)

doc = new_document("sine")
patch = doc.patch

hz = input_node("hz")
expose_node(hz, "hz", 0, 0)
add_node(patch, hz)

phasor = block_node("Phasor")
move_node(phasor, 200, 0)
add_node(patch, phasor)
connect(patch, hz, 0, phasor, 0)

sine = expr_node("sin(x)")
move_node(sine, 400, 0)
add_node(patch, sine)
connect(patch, phasor, 0, sine, 0)

out = output_node("out")
move_node(out, 600, 0)
expose_node(out, "out", 50, 0)
add_node(patch, out)
connect(patch, sine, 0, out, 0)

if __name__ == "__main__":
    print(document_to_json(make_subpatch(patch, "sine"), indent=2))
