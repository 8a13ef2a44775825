"""
Content transformation modules for the DocPipe pipeline.
"""

import logging
import re
from typing import Callable

from ..core.data_models import Document
from ..core.exceptions import ConfigurationError
from ..core.module import DocumentModule

logger = logging.getLogger(__name__)


class Execute(DocumentModule):
    """
    Runs an arbitrary function for each document.

    The function is called as `func(document, context)` and may return None
    (drop the document), a Document or an iterable of Documents.
    """

    def __init__(self, func: Callable, max_workers: int = 1):
        super().__init__(max_workers=max_workers)
        if not callable(func):
            raise ConfigurationError(
                f"Execute requires a callable, got {type(func).__name__}.",
                module=self.name,
            )
        self.func = func

    def process(self, document: Document, context):
        return self.func(document, context)


class Replace(DocumentModule):
    """Replaces occurrences of `search` in the content, optionally as a regex."""

    def __init__(
        self, search: str, replacement: str = "", regex: bool = False, max_workers: int = 1
    ):
        super().__init__(max_workers=max_workers)
        if not search:
            raise ConfigurationError("Replace requires a non-empty 'search'.", module=self.name)
        self.search = search
        self.replacement = replacement
        self.regex = regex
        if regex:
            try:
                self._pattern = re.compile(search)
            except re.error as e:
                raise ConfigurationError(
                    f"Invalid regular expression {search!r}: {e}", module=self.name
                ) from e

    def process(self, document: Document, context) -> Document:
        if self.regex:
            content = self._pattern.sub(self.replacement, document.content)
        else:
            content = document.content.replace(self.search, self.replacement)
        if content == document.content:
            return document
        return document.with_content(content)


class Append(DocumentModule):
    """Appends fixed text to the content."""

    def __init__(self, text: str, max_workers: int = 1):
        super().__init__(max_workers=max_workers)
        self.text = text

    def process(self, document: Document, context) -> Document:
        return document.with_content(document.content + self.text)


class Prepend(DocumentModule):
    """Prepends fixed text to the content."""

    def __init__(self, text: str, max_workers: int = 1):
        super().__init__(max_workers=max_workers)
        self.text = text

    def process(self, document: Document, context) -> Document:
        return document.with_content(self.text + document.content)
