"""
Core data models for the DocPipe pipeline.

This module defines the Document, the immutable data packet that flows
between modules in a pipeline.
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from .metadata import Metadata


def _new_source() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Document:
    """
    An immutable piece of content together with its metadata snapshot.

    Documents are never changed in place. Every derivation returns a new
    Document that keeps the `source` lineage token of the one it came from,
    so two documents with the same `source` are the same logical document
    at different stages of a pipeline.

    Attributes:
        content (str): The text content of the document.
        metadata (Metadata): The layered metadata store of the document.
        source (str): An opaque lineage token, for example a file path.
    """

    content: str = ""
    metadata: Metadata = field(default_factory=Metadata)
    source: str = field(default_factory=_new_source)

    def __post_init__(self):
        if not isinstance(self.metadata, Metadata):
            object.__setattr__(self, "metadata", Metadata(self.metadata))

    def __hash__(self):
        # Equal documents share content and source; metadata may hold
        # unhashable values.
        return hash((self.content, self.source))

    def get(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)

    def with_content(self, content: str) -> "Document":
        return derive_document(self, content=content)

    def with_metadata(self, metadata: Mapping) -> "Document":
        return derive_document(self, metadata=metadata)

    def clone(
        self,
        content: Optional[str] = None,
        items: Optional[Mapping] = None,
        source: Optional[str] = None,
    ) -> "Document":
        """
        Derives a document with new content and/or extra metadata entries.

        Args:
            content (str, optional): Replacement content.
            items (Mapping, optional): Entries layered over the current
                metadata; they win on key collision.
            source (str, optional): A new lineage token. Omit it to keep the
                current one.
        """
        return derive_document(self, content=content, items=items, source=source)


def derive_document(
    base: Document,
    content: Optional[str] = None,
    metadata: Optional[Mapping] = None,
    items: Optional[Mapping] = None,
    source: Optional[str] = None,
) -> Document:
    """
    Returns a new Document based on `base` with the given overrides applied.

    `metadata` replaces the metadata store outright, while `items` is layered
    on top of whichever store results. `base` itself is left untouched.
    """
    new_metadata = base.metadata if metadata is None else metadata
    if not isinstance(new_metadata, Metadata):
        new_metadata = Metadata(new_metadata)
    if items:
        new_metadata = new_metadata.with_items(items)
    return replace(
        base,
        content=base.content if content is None else content,
        metadata=new_metadata,
        source=base.source if source is None else source,
    )
