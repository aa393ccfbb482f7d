"""Load entity documents from JSON files.

Documents are parsed exactly once here; everything downstream works with
immutable ``Document`` values.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from FungiLens.core.models import Document
from FungiLens.utils.log import log


def load_documents(path: str | Path, *, id_field: str = "slug") -> list[Document]:
    """Load documents from a JSON file or a directory of JSON files.

    A file may hold one object or a list of objects. Files in a directory are
    read in name order.

    Args:
        path: File or directory path.
        id_field: Top-level key used as the document id. Falls back to the file
            stem (single object) or ``<stem>-<index>`` (list entries).

    Returns:
        Documents in load order.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If a file holds something other than objects, or two
            documents share an id.
    """
    root = Path(path)
    if not root.exists():
        raise FileNotFoundError(f"Document path not found: {root}")

    files = sorted(root.glob("*.json")) if root.is_dir() else [root]
    documents: list[Document] = []
    for file_path in files:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
        documents.extend(parse_documents(payload, id_field=id_field, stem=file_path.stem))

    _check_unique_ids(documents)
    log.info("Loaded %d documents from %s", len(documents), root)
    return documents


def parse_documents(payload: Any, *, id_field: str = "slug", stem: str = "document") -> list[Document]:
    """Convert decoded JSON into documents.

    Raises:
        ValueError: If payload is not an object or a list of objects.
    """
    if isinstance(payload, Mapping):
        return [_to_document(payload, id_field=id_field, fallback_id=stem)]
    if isinstance(payload, list):
        documents = []
        for idx, item in enumerate(payload):
            if not isinstance(item, Mapping):
                raise ValueError(f"{stem}[{idx}] must be an object")
            documents.append(_to_document(item, id_field=id_field, fallback_id=f"{stem}-{idx}"))
        return documents
    raise ValueError(f"{stem} must contain an object or a list of objects")


def _to_document(data: Mapping[str, Any], *, id_field: str, fallback_id: str) -> Document:
    raw_id = data.get(id_field)
    doc_id = str(raw_id).strip() if raw_id is not None and str(raw_id).strip() else fallback_id
    return Document(id=doc_id, data=data)


def _check_unique_ids(documents: Iterable[Document]) -> None:
    seen: set[str] = set()
    for document in documents:
        if document.id in seen:
            raise ValueError(f"Duplicate document id: {document.id}")
        seen.add(document.id)
