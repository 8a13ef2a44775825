"""
Module base classes for the DocPipe pipeline.

A module is a single transformation stage: it receives the current ordered
document collection and the execution context and returns a new ordered
collection. `DocumentModule` covers the common per-document case and
`CompositeModule` is the base for modules that own a nested module chain.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
import logging
from typing import Iterable, List, Sequence

from .data_models import Document
from .exceptions import ConfigurationError, DocumentProcessingError

logger = logging.getLogger(__name__)


def as_documents(result) -> List[Document]:
    """Normalizes a module result (None, a Document or an iterable) to a list."""
    if result is None:
        return []
    if isinstance(result, Document):
        return [result]
    documents = list(result)
    for document in documents:
        if not isinstance(document, Document):
            raise TypeError(
                f"Modules must produce Document objects, got {type(document).__name__}."
            )
    return documents


class BaseModule(ABC):
    """Abstract base class for all pipeline modules."""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def execute(self, documents: Sequence[Document], context) -> List[Document]:
        """
        Transforms an ordered collection of documents.

        Args:
            documents (Sequence[Document]): The input documents. They must
                not be modified.
            context (ExecutionContext): The context of the current run.

        Returns:
            List[Document]: The output documents, in input order.
        """
        pass


class DocumentModule(BaseModule):
    """
    A module that transforms each input document independently.

    Subclasses implement `process`. When `max_workers` is greater than one
    the documents are processed on a thread pool; output order always
    follows input order.
    """

    def __init__(self, max_workers: int = 1):
        if max_workers < 1:
            raise ConfigurationError(
                f"max_workers must be at least 1, got {max_workers}.",
                module=self.name,
            )
        self.max_workers = max_workers

    @abstractmethod
    def process(self, document: Document, context):
        """Returns None, a single Document or an iterable of Documents."""
        pass

    def _process_safely(self, document: Document, context) -> List[Document]:
        try:
            return as_documents(self.process(document, context))
        except DocumentProcessingError as e:
            if context.propagate_document_errors:
                raise
            logger.warning(
                f"{self.name} could not process document '{document.source}': {e}. "
                "Passing it through unchanged."
            )
            return [document]

    def execute(self, documents: Sequence[Document], context) -> List[Document]:
        documents = list(documents)
        if self.max_workers > 1 and len(documents) > 1:
            logger.debug(
                f"{self.name} processing {len(documents)} documents with "
                f"{self.max_workers} workers."
            )
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(
                    executor.map(
                        lambda doc: self._process_safely(doc, context), documents
                    )
                )
        else:
            results = [self._process_safely(doc, context) for doc in documents]
        return [output for batch in results for output in batch]


class CompositeModule(BaseModule):
    """Base class for modules that own a nested, ordered module chain."""

    def __init__(self, modules: Iterable[BaseModule]):
        modules = tuple(modules)
        for child in modules:
            if not isinstance(child, BaseModule):
                raise ConfigurationError(
                    f"Nested chain entries must be modules, got {type(child).__name__}.",
                    module=self.name,
                )
        self.modules = modules
