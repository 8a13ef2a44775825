"""
File input and output modules for the DocPipe pipeline.

ReadFiles turns files on disk into documents and WriteFiles writes document
content back out. Both resolve a missing path from the run settings.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from ..core.data_models import Document
from ..core.exceptions import ConfigurationError
from ..core.module import BaseModule, DocumentModule

logger = logging.getLogger(__name__)


def _resolve_path(path: Optional[str], context, setting: str, module: str) -> Path:
    resolved = path or context.get_setting(setting)
    if not resolved:
        raise ConfigurationError(
            f"No path given and no '{setting}' setting configured.", module=module
        )
    return Path(resolved)


class ReadFiles(BaseModule):
    """
    Loads documents from the local filesystem.

    Input documents are passed through and one document per matching file
    is appended after them, in sorted path order.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        glob_pattern: str = "**/*",
        encoding: str = "utf-8",
    ):
        self.path = path
        self.glob_pattern = glob_pattern
        self.encoding = encoding
        logger.debug(
            f"Initialized ReadFiles with path='{path}' and glob='{glob_pattern}'"
        )

    def execute(self, documents: Sequence[Document], context) -> List[Document]:
        root = _resolve_path(self.path, context, "input_path", self.name)
        outputs = list(documents)
        logger.info(f"Scanning for files in '{root}' with pattern '{self.glob_pattern}'.")
        if not root.is_dir():
            logger.error(f"Input path '{root}' is not a valid directory.")
            return outputs

        files = sorted(f for f in root.glob(self.glob_pattern) if f.is_file())
        loaded = 0
        for file_path in files:
            try:
                content = file_path.read_text(encoding=self.encoding)
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Error reading file '{file_path}': {e}", exc_info=True)
                continue
            metadata = context.global_metadata.with_items(
                source_path=str(file_path),
                relative_path=file_path.relative_to(root).as_posix(),
                file_name=file_path.name,
                file_stem=file_path.stem,
            )
            outputs.append(
                Document(content=content, metadata=metadata, source=str(file_path))
            )
            loaded += 1
        logger.info(f"Loaded {loaded} of {len(files)} files from '{root}'.")
        return outputs


class WriteFiles(DocumentModule):
    """
    Writes each document's content below an output directory.

    The destination is the document's `relative_path` metadata, with the
    suffix replaced by `extension` when one is given.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        extension: Optional[str] = None,
        encoding: str = "utf-8",
        max_workers: int = 1,
    ):
        super().__init__(max_workers=max_workers)
        if extension is not None and not extension.startswith("."):
            extension = f".{extension}"
        self.path = path
        self.extension = extension
        self.encoding = encoding

    def process(self, document: Document, context) -> Document:
        relative_path = document.get("relative_path")
        if not relative_path:
            logger.warning(
                f"Document '{document.source}' has no 'relative_path'. Skipping write."
            )
            return document

        root = _resolve_path(self.path, context, "output_path", self.name)
        destination = root / relative_path
        if self.extension is not None:
            destination = destination.with_suffix(self.extension)
        if not destination.resolve().is_relative_to(root.resolve()):
            logger.warning(
                f"Destination '{destination}' of document '{document.source}' "
                f"is outside '{root}'. Skipping write."
            )
            return document

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(document.content, encoding=self.encoding)
        except OSError as e:
            logger.error(f"Error writing file '{destination}': {e}", exc_info=True)
            return document

        logger.debug(f"Wrote document '{document.source}' to '{destination}'.")
        return document.clone(items={"destination_path": str(destination)})
