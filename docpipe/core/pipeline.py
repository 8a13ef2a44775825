"""
Sequential pipeline execution for DocPipe.

A Pipeline is an ordered, immutable chain of modules. The output of each
module becomes the input of the next one; no module starts before the
previous one has finished the whole batch.
"""

import logging
from typing import Iterable, List, Sequence, TYPE_CHECKING

from .data_models import Document
from .exceptions import ConfigurationError
from .module import BaseModule

if TYPE_CHECKING:
    from .context import ExecutionContext

logger = logging.getLogger(__name__)


class Pipeline:
    """
    An ordered chain of modules executed one after another.

    Args:
        name (str): The pipeline name, used in logs and error messages.
        modules (Iterable[BaseModule]): The module chain.
    """

    def __init__(self, name: str, modules: Iterable[BaseModule]):
        self.name = name
        modules = tuple(modules)
        for index, module in enumerate(modules):
            if not isinstance(module, BaseModule):
                raise ConfigurationError(
                    f"Entry {index} is not a module ({type(module).__name__}).",
                    pipeline=name,
                )
        self.modules = modules

    def __repr__(self):
        names = ", ".join(module.name for module in self.modules)
        return f"Pipeline(name={self.name!r}, modules=[{names}])"

    def execute(
        self, documents: Sequence[Document], context: "ExecutionContext"
    ) -> List[Document]:
        """Runs every module in order and returns the final collection."""
        documents = list(documents)
        logger.debug(
            f"Pipeline '{self.name}' starting with {len(documents)} documents."
        )
        for index, module in enumerate(self.modules, start=1):
            logger.debug(
                f"[{self.name}] Module {index}/{len(self.modules)}: {module.name} "
                f"({len(documents)} documents in)"
            )
            try:
                documents = list(module.execute(documents, context))
            except ConfigurationError as e:
                if e.pipeline is not None:
                    raise
                raise ConfigurationError(
                    e.message, module=e.module or module.name, pipeline=self.name
                ) from e
            logger.debug(
                f"[{self.name}] {module.name} produced {len(documents)} documents."
            )
        return documents
