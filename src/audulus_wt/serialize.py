"""JSON encoding and output of patch documents."""

from __future__ import annotations

from pathlib import Path

from pydantic_core import PydanticSerializationError

from audulus_wt.errors import PatchSerializationError
from audulus_wt.models import Document

DOCUMENT_EXTENSION = ".audulus"


def document_to_json(doc: Document, indent: int | None = None) -> str:
    """Encode *doc* with the host's field names."""
    try:
        return doc.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
    except PydanticSerializationError as e:
        raise PatchSerializationError(f"cannot encode document '{doc.title}': {e}") from e


def document_path(input_path: str | Path, output_dir: str | Path = ".") -> Path:
    """Return output_dir/<input base name>.audulus."""
    return Path(output_dir) / (Path(input_path).stem + DOCUMENT_EXTENSION)


def write_document(doc: Document, path: str | Path) -> Path:
    """Encode *doc* and write it to *path*.

    The document is fully encoded before the file is opened, so a failed
    encode leaves nothing on disk.
    """
    text = document_to_json(doc)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text)
    return out
