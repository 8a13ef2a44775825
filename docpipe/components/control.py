"""
Composite modules that control how a nested module chain is applied.
"""

import logging
from typing import List, Sequence

from ..core.data_models import Document
from ..core.module import BaseModule, CompositeModule

logger = logging.getLogger(__name__)


class Concat(CompositeModule):
    """Outputs the inputs followed by the nested chain's results over them."""

    def __init__(self, *modules: BaseModule):
        super().__init__(modules)

    def execute(self, documents: Sequence[Document], context) -> List[Document]:
        documents = list(documents)
        results = context.execute_modules(self.modules, documents)
        logger.debug(f"Concat adding {len(results)} documents to {len(documents)}.")
        return documents + results


class Branch(CompositeModule):
    """Runs the nested chain over the inputs and outputs the inputs unchanged."""

    def __init__(self, *modules: BaseModule):
        super().__init__(modules)

    def execute(self, documents: Sequence[Document], context) -> List[Document]:
        documents = list(documents)
        context.execute_modules(self.modules, documents)
        return documents
