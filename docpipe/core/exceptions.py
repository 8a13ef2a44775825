"""
Exception types raised by the DocPipe pipeline core.

Configuration errors are fatal and abort the owning pipeline run. Document
processing errors are scoped to a single document and are normally turned
into a pass-through by the module that catches them.
"""

from typing import Optional


class DocPipeError(Exception):
    """Base class for all DocPipe errors."""


class ConfigurationError(DocPipeError, ValueError):
    """Raised when a module, pipeline or config file is structurally invalid."""

    def __init__(
        self,
        message: str,
        module: Optional[str] = None,
        pipeline: Optional[str] = None,
    ):
        self.message = message
        self.module = module
        self.pipeline = pipeline
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = []
        if self.pipeline:
            location.append(f"pipeline '{self.pipeline}'")
        if self.module:
            location.append(f"module '{self.module}'")
        if not location:
            return self.message
        return f"{self.message} (in {', '.join(location)})"


class DocumentProcessingError(DocPipeError):
    """Raised by a module that cannot process one specific document."""

    def __init__(self, message: str, document=None):
        self.document = document
        super().__init__(message)
