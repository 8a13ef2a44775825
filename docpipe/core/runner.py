"""
Core pipeline orchestration module.

This module defines `run_pipeline`, which reads a YAML configuration, builds
the configured pipelines and executes them one after another.
"""

import logging
from typing import Dict, List

from ..utils.config import load_config
from .context import ExecutionContext
from .data_models import Document
from .factory import build_pipelines
from .metadata import Metadata

logger = logging.getLogger(__name__)


def run_pipelines(config: dict) -> Dict[str, List[Document]]:
    """
    Runs every pipeline of a validated configuration in declaration order.

    Each pipeline starts from an empty document collection and can see the
    outputs of the pipelines that ran before it through its context.

    Returns:
        Dict[str, List[Document]]: The output documents of each pipeline.
    """
    pipelines = build_pipelines(config)
    settings = config.get("settings") or {}
    global_metadata = Metadata(config.get("metadata") or {})

    outputs = {}
    for pipeline in pipelines:
        logger.info(f"Executing pipeline '{pipeline.name}'...")
        context = ExecutionContext(
            settings=settings,
            global_metadata=global_metadata,
            pipeline_name=pipeline.name,
            outputs=outputs,
        )
        outputs[pipeline.name] = pipeline.execute([], context)
        logger.info(
            f"Pipeline '{pipeline.name}' produced {len(outputs[pipeline.name])} documents."
        )
    return outputs


def run_pipeline(config_path: str) -> Dict[str, List[Document]]:
    """
    Runs all pipelines described by a configuration file.
    """
    logger.info(f"DocPipe run starting with config: {config_path}")

    try:
        config = load_config(config_path)
        outputs = run_pipelines(config)
    except Exception as e:
        logger.error(f"Pipeline run failed: {e}", exc_info=True)
        raise

    logger.info("DocPipe run completed successfully.")
    return outputs
