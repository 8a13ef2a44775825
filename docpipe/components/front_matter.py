"""
Front matter extraction for the DocPipe pipeline.

The FrontMatter module looks for a delimiter line in each document, runs its
nested module chain over the text above that line and attaches the
resulting metadata to the text below it.
"""

from dataclasses import dataclass
import logging
from typing import List, Optional, Sequence, Tuple

from ..core.data_models import Document, derive_document
from ..core.exceptions import ConfigurationError, DocumentProcessingError
from ..core.module import BaseModule, CompositeModule

logger = logging.getLogger(__name__)


def _split_lines(content: str) -> List[str]:
    """Splits on newlines, keeping each line's terminator."""
    parts = content.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _line_body(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


@dataclass(frozen=True)
class ExactDelimiter:
    """Matches a line that is exactly equal to `text`."""

    text: str

    def matches(self, line: str) -> bool:
        return _line_body(line) == self.text


@dataclass(frozen=True)
class RepeatedCharDelimiter:
    """
    Matches a line made only of one or more `char` characters.

    Trailing whitespace is ignored, leading whitespace never matches.
    """

    char: str = "-"

    def matches(self, line: str) -> bool:
        body = _line_body(line)
        if not body or body[0].isspace():
            return False
        stripped = body.rstrip()
        return stripped == self.char * len(stripped)


class FrontMatter(CompositeModule):
    """
    Splits documents at a delimiter line and processes the leading block.

    For every document with a delimiter line, the text before the line is
    run through the nested chain as a transient document. Each document the
    chain returns yields one output with the text after the line as content
    and the returned document's metadata. Documents without a delimiter are
    passed through and the chain is not run for them.

    Args:
        *modules (BaseModule): The nested chain run over the front matter.
        delimiter (str, optional): An exact delimiter line.
        delimiter_char (str, optional): A character that forms a delimiter
            line when repeated. Defaults to '-' when no delimiter is given.
        ignore_delimiter_on_first_line (bool): Skip a delimiter on the very
            first line, for blocks that open with a delimiter as well.
    """

    def __init__(
        self,
        *modules: BaseModule,
        delimiter: Optional[str] = None,
        delimiter_char: Optional[str] = None,
        ignore_delimiter_on_first_line: bool = False,
    ):
        super().__init__(modules)
        if not self.modules:
            raise ConfigurationError(
                "FrontMatter requires at least one nested module.", module=self.name
            )
        self.delimiter = self._build_delimiter(delimiter, delimiter_char)
        self.ignore_delimiter_on_first_line = ignore_delimiter_on_first_line
        logger.debug(f"Initialized FrontMatter with {self.delimiter}")

    def _build_delimiter(self, delimiter, delimiter_char):
        if delimiter is not None and delimiter_char is not None:
            raise ConfigurationError(
                "Specify either 'delimiter' or 'delimiter_char', not both.",
                module=self.name,
            )
        if delimiter is not None:
            if not isinstance(delimiter, str) or not delimiter or "\n" in delimiter:
                raise ConfigurationError(
                    f"Invalid delimiter {delimiter!r}: must be a non-empty single line.",
                    module=self.name,
                )
            return ExactDelimiter(delimiter)
        if delimiter_char is None:
            return RepeatedCharDelimiter()
        if (
            not isinstance(delimiter_char, str)
            or len(delimiter_char) != 1
            or delimiter_char.isspace()
        ):
            raise ConfigurationError(
                f"Invalid delimiter_char {delimiter_char!r}: must be one non-whitespace character.",
                module=self.name,
            )
        return RepeatedCharDelimiter(delimiter_char)

    def split(self, content: str) -> Optional[Tuple[str, str]]:
        """Returns (front matter, remaining content), or None without a match."""
        lines = _split_lines(content)
        start = 1 if self.ignore_delimiter_on_first_line else 0
        for index in range(start, len(lines)):
            if self.delimiter.matches(lines[index]):
                return "".join(lines[:index]), "".join(lines[index + 1 :])
        return None

    def _extract(self, document: Document, context) -> List[Document]:
        parts = self.split(document.content)
        if parts is None:
            return [document]
        front_matter, remaining = parts
        try:
            results = context.execute_modules(
                self.modules,
                [document.with_content(front_matter)],
                propagate_document_errors=True,
            )
        except DocumentProcessingError as e:
            logger.warning(
                f"Front matter of document '{document.source}' could not be processed: {e}"
            )
            return [document]
        return [
            derive_document(document, content=remaining, metadata=result.metadata)
            for result in results
        ]

    def execute(self, documents: Sequence[Document], context) -> List[Document]:
        outputs = []
        for document in documents:
            outputs.extend(self._extract(document, context))
        return outputs
