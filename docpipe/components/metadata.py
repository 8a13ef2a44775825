"""
Metadata modules for the DocPipe pipeline.

`Meta` attaches fixed or computed values to documents and `Yaml` parses
document content into metadata. Both are commonly used as the nested chain
of a FrontMatter module.
"""

import logging
from typing import Any, Mapping, Optional

import yaml

from ..core.data_models import Document
from ..core.exceptions import ConfigurationError, DocumentProcessingError
from ..core.module import DocumentModule

logger = logging.getLogger(__name__)


class Meta(DocumentModule):
    """
    Layers key/value pairs onto each document's metadata.

    A callable value is called as `value(document, context)` for every
    document and its result is stored instead.
    """

    def __init__(
        self,
        key: Optional[str] = None,
        value: Any = None,
        items: Optional[Mapping[str, Any]] = None,
        max_workers: int = 1,
    ):
        super().__init__(max_workers=max_workers)
        entries = dict(items or {})
        if key is not None:
            entries[key] = value
        if not entries:
            raise ConfigurationError(
                "Meta requires a 'key' or at least one entry in 'items'.",
                module=self.name,
            )
        self.items = entries

    def process(self, document: Document, context) -> Document:
        values = {
            key: value(document, context) if callable(value) else value
            for key, value in self.items.items()
        }
        return document.clone(items=values)


class Yaml(DocumentModule):
    """
    Parses document content as YAML and merges the result into metadata.

    Args:
        key (str, optional): Store the whole parsed value under this key
            instead of merging a mapping into the metadata.
    """

    def __init__(self, key: Optional[str] = None, max_workers: int = 1):
        super().__init__(max_workers=max_workers)
        self.key = key

    def process(self, document: Document, context) -> Document:
        if not document.content.strip():
            logger.debug(f"Document '{document.source}' has no YAML content.")
            return document

        try:
            data = yaml.safe_load(document.content)
        except yaml.YAMLError as e:
            raise DocumentProcessingError(f"Invalid YAML: {e}", document) from e

        if self.key is not None:
            return document.clone(items={self.key: data})
        if data is None:
            return document
        if not isinstance(data, dict):
            raise DocumentProcessingError(
                f"Expected a YAML mapping, got {type(data).__name__}.", document
            )
        logger.debug(
            f"Parsed {len(data)} metadata keys from document '{document.source}'."
        )
        return document.clone(items={str(k): v for k, v in data.items()})
