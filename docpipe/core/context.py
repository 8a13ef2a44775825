"""
Execution context passed to every module call.

The context is created once per pipeline run and is read-only for modules.
Besides run-wide settings it exposes `execute_modules`, which composite
modules use to run their nested chains as independent sub-runs.
"""

from dataclasses import dataclass, field, replace
import logging
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Sequence, Tuple, Union

from .data_models import Document
from .metadata import Metadata
from .module import BaseModule
from .pipeline import Pipeline

logger = logging.getLogger(__name__)


def _read_only(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ExecutionContext:
    """
    Run-wide state shared read-only by all modules of a pipeline run.

    Attributes:
        settings (Mapping): Run-wide configuration values.
        global_metadata (Metadata): The root store new documents layer over.
        pipeline_name (str): The name of the pipeline being executed.
        depth (int): 0 for a top-level run, incremented for each nested run.
        outputs (Mapping): Outputs of pipelines that already completed in
            this run, keyed by pipeline name.
        propagate_document_errors (bool): When set, per-document modules
            re-raise DocumentProcessingError instead of passing the document
            through, leaving the decision to the module that started the run.
    """

    settings: Mapping[str, Any] = field(default_factory=dict)
    global_metadata: Metadata = field(default_factory=Metadata)
    pipeline_name: str = "default"
    depth: int = 0
    outputs: Mapping[str, Tuple[Document, ...]] = field(default_factory=dict)
    propagate_document_errors: bool = False

    def __post_init__(self):
        object.__setattr__(self, "settings", _read_only(self.settings))
        object.__setattr__(
            self,
            "outputs",
            _read_only({name: tuple(docs) for name, docs in self.outputs.items()}),
        )
        if not isinstance(self.global_metadata, Metadata):
            object.__setattr__(self, "global_metadata", Metadata(self.global_metadata))

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def execute_modules(
        self,
        modules: Union[BaseModule, Iterable[BaseModule]],
        documents: Sequence[Document],
        propagate_document_errors: bool = False,
    ) -> List[Document]:
        """
        Runs a module or module chain over `documents` as a nested sub-run.

        The nested run gets its own context; nothing but the documents passed
        in is shared with the caller. With `propagate_document_errors` set, a
        DocumentProcessingError inside the chain reaches the caller instead
        of being turned into a pass-through.
        """
        if isinstance(modules, BaseModule):
            modules = [modules]
        nested = replace(
            self,
            depth=self.depth + 1,
            propagate_document_errors=propagate_document_errors,
        )
        chain = Pipeline(f"{self.pipeline_name}/nested", modules)
        logger.debug(
            f"Nested run at depth {nested.depth} with {len(chain.modules)} modules."
        )
        return chain.execute(documents, nested)
