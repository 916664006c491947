"""Band-limited sawtooth wavetable: 8 octave bands from 55 Hz."""

import numpy as np

from audulus_wt import (
    bandlimit,
    build_wavetable_document,
    harmonic_count,
    patch_to_dot_file,
    write_document,
)

samples = np.linspace(-1.0, 1.0, 2048, endpoint=False)

if __name__ == "__main__":
    for i, band in enumerate(bandlimit(samples)):
        print(f"band {i}: {harmonic_count(band)} harmonics")
    doc = build_wavetable_document(samples, "Basic", "Sawtooth")
    path = write_document(doc, "build/sawtooth.audulus")
    print(f"\nGenerated: {path}")
    dot_path = patch_to_dot_file(doc, "build/sawtooth.dot")
    print(f"DOT: {dot_path}")
